# autoregistrar/registry/base.py


import logging
from threading import RLock
from typing import Callable, Generic, TypeVar, Any, overload, Literal

from asgiref.sync import sync_to_async

from .exceptions import RegistryDuplicateError, RegistryCollisionError, RegistryFrozenError, RegistryLookupError
from ..keys import RegistryKey

logger = logging.getLogger(__name__)

K = TypeVar("K")
T = TypeVar("T")


class BaseRegistry(Generic[K, T]):
    """Framework-agnostic registry keyed by a key-like K storing values of T."""

    def __init__(self, *, coerce_key: Callable[[Any], K]) -> None:
        self._coerce = coerce_key
        self._lock = RLock()
        self._store: dict[K, T] = {}
        self._frozen = False

    def _register(self, key: Any, value: T) -> None:
        """Internal: register a value into the store."""
        k = self._coerce(key)

        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")
            if k in self._store:
                if self._store[k] is value:
                    raise RegistryDuplicateError(f"Already registered: {k}")
                raise RegistryCollisionError(
                    f"Key already registered to different instance: {k}"
                )
            self._store[k] = value

    # --- registration ---

    def register(self, key: Any, value: T, *, strict: bool = False) -> None:
        """
        Registers a value under ``key``, handling duplicates based on the strict mode.

        Registering the same object under the same key again is a duplicate:
        it raises ``RegistryDuplicateError`` when ``strict`` is enabled and is
        ignored (with a debug message) otherwise. A *different* object under an
        existing key always raises ``RegistryCollisionError``.

        :param key: Key-like value, coerced by the registry.
        :param value: The value to store.
        :param strict: Whether duplicate registration should raise.
        :return: None
        """
        try:
            self._register(key, value)
        except RegistryDuplicateError:
            if strict:
                raise
            logger.debug("Duplicate registration ignored: %s", key)

    # --- retrieval ---

    def get(self, key: Any) -> T:
        """
        Retrieve the value registered under ``key``.

        :raises RegistryLookupError: If nothing is registered under the key.
        """
        k = self._coerce(key)
        with self._lock:
            try:
                return self._store[k]
            except KeyError as err:
                raise RegistryLookupError(f"Nothing registered under {key!r}") from err

    async def aget(self, key: Any) -> T:
        """Async wrapper around `get`."""
        return await sync_to_async(self.get)(key)

    def try_get(self, key: Any) -> T | None:
        """Like `get`, returning None when the key is not registered."""
        try:
            return self.get(key)
        except RegistryLookupError:
            return None

    async def atry_get(self, key: Any) -> T | None:
        try:
            return await self.aget(key)
        except RegistryLookupError:
            return None

    # --- counting ---

    def count(self) -> int:
        """Counts the number of registered values in the store."""
        with self._lock:
            return len(self._store)

    async def acount(self) -> int:
        return await sync_to_async(self.count)()

    # --- enumerate all entries ---

    def items(self) -> tuple[tuple[K, T], ...]:
        with self._lock:
            return tuple(self._store.items())

    def values(self) -> tuple[T, ...]:
        with self._lock:
            return tuple(self._store.values())

    @overload
    def keys(self) -> tuple[K, ...]: ...
    @overload
    def keys(self, *, as_csv: Literal[True]) -> str: ...
    @overload
    def keys(self, *, as_csv: Literal[False]) -> tuple[K, ...]: ...

    def keys(self, *, as_csv: bool = False):
        """
        Return all registered keys.

        When `as_csv` is True, returns a comma-separated string of the keys for
        logging/debugging purposes.
        """
        with self._lock:
            keys_tuple: tuple[K, ...] = tuple(self._store.keys())

        if as_csv:
            def to_str(k: K) -> str:
                ident = getattr(k, "as_str", None)
                return ident if isinstance(ident, str) else str(k)

            return ",".join(to_str(k) for k in keys_tuple)

        return keys_tuple

    async def akeys(self) -> tuple[K, ...]:
        return await sync_to_async(self.keys)()

    # --- filtering ---

    def filter(self, pred: Callable[[T], bool]) -> tuple[T, ...]:
        """Return all registered values matching predicate `pred`."""
        with self._lock:
            return tuple(v for v in self._store.values() if pred(v))

    # --- mutation / control ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def clear(self) -> None:
        """Clear the registry if not frozen."""
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")
            self._store.clear()

    def freeze(self) -> None:
        """Mark the registry as frozen (no further mutations)."""
        with self._lock:
            self._frozen = True

    def __contains__(self, key: Any) -> bool:
        k = self._coerce(key)
        with self._lock:
            return k in self._store

    def __len__(self) -> int:
        return self.count()


class ContentRegistry(BaseRegistry[RegistryKey, T]):
    """Registry specialized for ``namespace:path`` keyed content."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(coerce_key=RegistryKey.get)
        self.name = name

    def __repr__(self) -> str:  # pragma: no cover
        return f"ContentRegistry({self.name or ''}, {self.count()} entries)"
