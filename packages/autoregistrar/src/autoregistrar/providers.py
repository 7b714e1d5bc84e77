# autoregistrar/providers.py
"""
Registration providers.

A :class:`RegistryProvider` wraps one way of storing content under a
:class:`~autoregistrar.keys.RegistryKey`. Not every destination is a registry
object: plain mappings and arbitrary callbacks work too.

Providers are untyped: the engine has already checked every value against the
registrar's content kind, so providers trust that check and store values
as-is.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Protocol, runtime_checkable

from .exceptions import ImmutableStoreError
from .keys import RegistryKey

logger = logging.getLogger(__name__)

RegisterCallback = Callable[[RegistryKey, Any], None]


@runtime_checkable
class SupportsRegister(Protocol):
    """Anything accepting ``register(key, value)``, e.g. :class:`~autoregistrar.registry.ContentRegistry`."""

    def register(self, key: Any, value: Any) -> None: ...


class RegistryProvider(ABC):
    """Accepts ``(key, value)`` pairs on behalf of some destination store."""

    @abstractmethod
    def register(self, key: RegistryKey, value: Any) -> None:
        """Register ``value`` under ``key``."""
        ...

    # ---------------- factories ----------------
    @staticmethod
    def for_map(mapping: MutableMapping[RegistryKey, Any] | None = None) -> MapRegistryProvider:
        """Provider backed by a mutable mapping (a new dict when omitted)."""
        return MapRegistryProvider(mapping)

    @staticmethod
    def for_registry(registry: Any) -> StandardRegistryProvider:
        """Provider backed by an external registry.

        :raises ImmutableStoreError: If the registry is frozen or can't register.
        """
        return StandardRegistryProvider(registry)

    @staticmethod
    def create(callback: RegisterCallback) -> CallbackRegistryProvider:
        """Provider backed by ``callback(key, value)``."""
        return CallbackRegistryProvider(callback)

    @classmethod
    def coerce(cls, destination: Any) -> RegistryProvider:
        """Pick a provider for a provider, mutable mapping, registry or callable."""
        if isinstance(destination, RegistryProvider):
            return destination
        if isinstance(destination, Mapping):
            return cls.for_map(destination)  # read-only mappings raise here
        if isinstance(destination, SupportsRegister):
            return cls.for_registry(destination)
        if callable(destination):
            return cls.create(destination)
        raise TypeError(f"Unsupported registration destination: {destination!r}")


class MapRegistryProvider(RegistryProvider):
    """Inserts into a mapping; the last write under a key wins."""

    def __init__(self, mapping: MutableMapping[RegistryKey, Any] | None = None) -> None:
        if mapping is not None and not isinstance(mapping, MutableMapping):
            raise ImmutableStoreError(
                f"Tried to obtain registry provider for an immutable mapping ({type(mapping).__name__})!"
            )
        self.mapping: MutableMapping[RegistryKey, Any] = {} if mapping is None else mapping

    def register(self, key: RegistryKey, value: Any) -> None:
        if key in self.mapping and self.mapping[key] is not value:
            logger.debug("overwriting %s in map-backed provider", key.as_str)
        self.mapping[key] = value


class StandardRegistryProvider(RegistryProvider):
    """Forwards to an external registry's ``register(key, value)``."""

    def __init__(self, registry: SupportsRegister) -> None:
        if not isinstance(registry, SupportsRegister) or getattr(registry, "frozen", False):
            raise ImmutableStoreError(
                f"Tried to obtain registry provider for an immutable registry ({registry!r})!"
            )
        self.registry = registry

    def register(self, key: RegistryKey, value: Any) -> None:
        self.registry.register(key, value)


class CallbackRegistryProvider(RegistryProvider):
    """Forwards to a caller-supplied function."""

    def __init__(self, callback: RegisterCallback) -> None:
        if not callable(callback):
            raise TypeError(f"callback must be callable (got {callback!r})")
        self.callback = callback

    def register(self, key: RegistryKey, value: Any) -> None:
        self.callback(key, value)


__all__ = [
    "RegistryProvider",
    "MapRegistryProvider",
    "StandardRegistryProvider",
    "CallbackRegistryProvider",
    "SupportsRegister",
    "RegisterCallback",
]
