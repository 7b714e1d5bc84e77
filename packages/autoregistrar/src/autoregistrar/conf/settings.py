"""Mapping-like configuration inspired by Celery settings handling."""


import importlib
import os
from collections import ChainMap
from typing import Any, Iterator, Mapping, MutableMapping

from .defaults import DEFAULTS

ENV_PREFIX = "AUTOREGISTRAR"
CONFIG_MODULE_ENVVAR = f"{ENV_PREFIX}_CONFIG_MODULE"


class Settings(MutableMapping[str, Any]):
    """Layered settings with defaults and optional overlays."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        self._storage = ChainMap({}, *(dict(layer) for layer in layers), dict(DEFAULTS))

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._storage[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._storage.maps[0][key] = value

    def __delitem__(self, key: str) -> None:
        del self._storage.maps[0][key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    # Helpers ----------------------------------------------------------
    def update_from_object(self, obj: str, *, namespace: str | None = None) -> None:
        module = importlib.import_module(obj)
        self.update_from_mapping(vars(module), namespace=namespace)

    def update_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR, *, namespace: str | None = None) -> None:
        module_name = os.environ.get(envvar)
        if not module_name:
            return
        self.update_from_object(module_name, namespace=namespace)

    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        self._storage.maps[0].update(_filter_by_namespace(mapping, namespace))

    def update_from_environ(self, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None) -> None:
        """Overlay ``<PREFIX>_<KEY>`` environment variables for known keys.

        Boolean defaults are parsed with :func:`env_truthy`; other values are
        taken as strings.
        """
        env = os.environ if environ is None else environ
        for key, default in DEFAULTS.items():
            raw = env.get(f"{prefix}_{key}")
            if raw is None:
                continue
            self[key] = env_truthy(raw) if isinstance(default, bool) else raw

    def as_dict(self) -> dict[str, Any]:
        return dict(self._storage)


def env_truthy(value: str | None) -> bool:
    """Return True if the string looks truthy ("1", "true", "yes", "on", case-insensitive)."""
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _filter_by_namespace(mapping: Mapping[str, Any], namespace: str | None) -> dict[str, Any]:
    if namespace is None:
        return {k: v for k, v in mapping.items() if k.isupper()}

    prefix = f"{namespace}_"
    output: dict[str, Any] = {}
    for key, value in mapping.items():
        if not key.startswith(prefix):
            continue
        short_key = key[len(prefix) :]
        output[short_key] = value
    return output
