"""Canonical registrar instances.

A registrar class is scanned through exactly one process-wide instance. The
``@registrar`` decorator binds ``cls()`` here by default; registrars whose
constructor needs arguments are bound explicitly with :meth:`SingletonRegistry.bind`.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Iterator

from .exceptions import NotScannableSingletonError

logger = logging.getLogger(__name__)


class SingletonRegistry:
    """Maps registrar classes to their one canonical instance."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._instances: dict[type, Any] = {}

    def bind(self, cls: type, instance: Any) -> Any:
        """Bind ``instance`` as the canonical instance of ``cls``.

        Re-binding the same object is a no-op; binding a second, different
        instance raises ``ValueError``.
        """
        if not isinstance(cls, type):
            raise TypeError(f"bind expects a class (got {cls!r})")
        if type(instance) is not cls:
            raise TypeError(
                f"{cls.__qualname__} can only be bound to a direct instance "
                f"(got {type(instance).__qualname__})"
            )
        with self._lock:
            existing = self._instances.get(cls)
            if existing is not None and existing is not instance:
                raise ValueError(f"{cls.__qualname__} already has a canonical instance")
            self._instances[cls] = instance
        logger.debug("bound canonical instance for %s", cls.__qualname__)
        return instance

    def resolve(self, cls: Any) -> Any:
        """Return the canonical instance of ``cls``.

        :raises NotScannableSingletonError: If ``cls`` isn't a class or has no
            bound instance.
        """
        if not isinstance(cls, type):
            raise NotScannableSingletonError(cls, "not a class")
        with self._lock:
            try:
                return self._instances[cls]
            except KeyError:
                raise NotScannableSingletonError(cls, "no canonical instance bound") from None

    def __contains__(self, cls: object) -> bool:
        with self._lock:
            return cls in self._instances

    def __iter__(self) -> Iterator[type]:  # pragma: no cover - convenience
        with self._lock:
            return iter(tuple(self._instances))

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)


default_singletons = SingletonRegistry()
"""Process-wide registry used by ``@registrar`` and engines built without one."""

__all__ = ["SingletonRegistry", "default_singletons"]
