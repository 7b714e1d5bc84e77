# autoregistrar/engine.py
"""
Registrar scan engine.

``ScanEngine.run`` is a single synchronous pass over one registrar class:

1. preconditions (namespace set, class carries a registrar marker, class has a
   canonical instance), each with its own error
2. members in declaration order, filtered by the detection rules
3. local name, value, key, provider, hooks for each candidate
4. one completion hook after the last member

The scan stops at the first error. Registrations made before the failing
member are not rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .detection import DetectionMode, matches_kind, passes_mode
from .exceptions import (
    MissingRegistrarMarkerError,
    MissingValueError,
    NamespaceUnsetError,
    ProviderRegistrationError,
)
from .hooks import RegistrarHooks
from .keys import RegistryKey, validate_namespace
from .metadata import MetadataFacility, ReflectionMetadata
from .naming import local_name_for
from .providers import RegistryProvider
from .singletons import SingletonRegistry, default_singletons
from .tracing import scan_span

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Keys registered by one completed scan, in registration order."""

    registrar: type
    namespace: str
    keys: tuple[RegistryKey, ...] = field(default_factory=tuple)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(k.as_str for k in self.keys)

    def __len__(self) -> int:
        return len(self.keys)


class ScanEngine:
    """Runs registrar scans against injected metadata, singletons and hooks."""

    def __init__(
        self,
        *,
        metadata: MetadataFacility | None = None,
        singletons: SingletonRegistry | None = None,
        hooks: RegistrarHooks | None = None,
        tracing: bool = True,
    ) -> None:
        self.metadata: MetadataFacility = ReflectionMetadata() if metadata is None else metadata
        self.singletons: SingletonRegistry = default_singletons if singletons is None else singletons
        self.hooks: RegistrarHooks = RegistrarHooks() if hooks is None else hooks
        self.tracing = tracing

    # ---------------- preconditions ----------------
    def _check(self, registrar: Any, namespace: str | None) -> tuple[type, Any]:
        if not namespace:
            raise NamespaceUnsetError(registrar)
        validate_namespace(namespace)
        marker = self.metadata.get_marker(registrar)
        if marker is None:
            raise MissingRegistrarMarkerError(registrar)
        instance = self.singletons.resolve(registrar)
        return marker.content, instance

    # ---------------- scan ----------------
    def run(
        self,
        registrar: type,
        *,
        mode: DetectionMode = DetectionMode.DEFAULT,
        namespace: str | None,
        provider: RegistryProvider,
    ) -> ScanReport:
        """Scan ``registrar`` and register every candidate member through ``provider``.

        :raises RegistrarError: On the first failing precondition or member.
        """
        content, instance = self._check(registrar, namespace)

        span_attrs = {
            "autoregistrar.registrar": f"{registrar.__module__}.{registrar.__qualname__}",
            "autoregistrar.namespace": namespace,
            "autoregistrar.content": content.__qualname__,
            "autoregistrar.provider": type(provider).__name__,
            **{f"autoregistrar.mode.{k}": v for k, v in mode.as_attributes().items()},
        }
        with scan_span(
            f"autoregistrar.scan ({registrar.__qualname__})",
            attributes=span_attrs,
            enabled=self.tracing,
        ) as span:
            keys = self._scan(registrar, instance, content, mode, namespace, provider)
            span.set_attribute("autoregistrar.registered", len(keys))
            self.hooks.fire_registrar_completed(
                registrar, mode=mode, namespace=namespace, provider=provider
            )

        logger.info(
            "[REGISTRAR] %s completed: %d registered under `%s`",
            registrar.__qualname__, len(keys), namespace,
        )
        return ScanReport(registrar=registrar, namespace=namespace, keys=tuple(keys))

    def _scan(
        self,
        registrar: type,
        instance: Any,
        content: type,
        mode: DetectionMode,
        namespace: str,
        provider: RegistryProvider,
    ) -> list[RegistryKey]:
        keys: list[RegistryKey] = []
        for member in self.metadata.describe(registrar):
            if not passes_mode(member, mode):
                continue
            # read only after the flag rules so excluded getters never run
            value = member.read(instance)
            if not matches_kind(member, value, content):
                logger.debug("skip %s: not a %s", member.name, content.__qualname__)
                continue

            local_name = local_name_for(member, registrar=registrar)
            if value is None:
                raise MissingValueError(registrar, member.name)

            key = RegistryKey(namespace, local_name)
            self._dispatch(registrar, provider, key, value)
            keys.append(key)

            self.hooks.fire_member_registered(
                registrar, mode=mode, namespace=namespace, provider=provider, member=member
            )
            logger.info("[REGISTRAR] ✅ registered `%s`", key.as_str)
        return keys

    def _dispatch(self, registrar: type, provider: RegistryProvider, key: RegistryKey, value: Any) -> None:
        try:
            provider.register(key, value)
        except ProviderRegistrationError:
            raise
        except Exception as err:
            raise ProviderRegistrationError(
                f"{type(provider).__name__} failed to register {key.as_str} "
                f"from {registrar.__qualname__}: {err}",
                key=key,
                provider=provider,
            ) from err
        self.hooks.fire_provider_used(registrar, provider=provider, key=key, value=value)


__all__ = ["ScanEngine", "ScanReport"]
