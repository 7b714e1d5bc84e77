# autoregistrar/keys.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .exceptions import RegistryKeyError

__all__ = [
    "RegistryKey",
    "RegistryKeyLike",
    "validate_namespace",
    "SEPARATOR",
]

SEPARATOR = ":"

# Union type callers can use for “key-like” inputs
RegistryKeyLike = Union["RegistryKey", tuple[str, str], str]


def _validate_part(value: str, field: str) -> str:
    """
    Validate one key part (namespace or path).

    Rules:
    - must be a string
    - cannot be empty
    - the namespace cannot contain the separator (the path may, it is split once)
    """
    if not isinstance(value, str):
        raise RegistryKeyError(f"{field} must be a string (got {type(value)!r})")
    if not value:
        raise RegistryKeyError(f"{field} cannot be empty")
    if field == "namespace" and SEPARATOR in value:
        raise RegistryKeyError(f"namespace cannot contain {SEPARATOR!r}: {value!r}")
    return value


def validate_namespace(value: str) -> str:
    """Check ``value`` is usable as the namespace part of a key."""
    return _validate_part(value, "namespace")


@dataclass(frozen=True, slots=True)
class RegistryKey:
    """
    Immutable registration key. Canonical form is ``namespace:path``.

    Keys are case-normalized by contract: the engine only ever builds them from
    lowercased identifiers or validated explicit names, so no folding is
    applied here.
    """

    namespace: str
    path: str

    def __post_init__(self) -> None:
        _validate_part(self.namespace, "namespace")
        _validate_part(self.path, "path")

    # ------------------- Canonical forms -------------------
    @property
    def as_tuple(self) -> tuple[str, str]:
        return self.namespace, self.path

    @property
    def as_str(self) -> str:
        """Return canonical form: 'namespace:path'."""
        return f"{self.namespace}{SEPARATOR}{self.path}"

    def __str__(self) -> str:  # pragma: no cover
        return self.as_str

    def __repr__(self) -> str:  # pragma: no cover
        return f"RegistryKey({self.as_str})"

    # ------------------- Constructors -------------------
    @classmethod
    def parse(cls, value: str) -> RegistryKey:
        """Parse a ``namespace:path`` string.

        :raises RegistryKeyError: If the separator is missing or a part is empty.
        """
        if not isinstance(value, str):
            raise RegistryKeyError(f"Cannot parse registry key from {type(value)!r}")
        namespace, sep, path = value.strip().partition(SEPARATOR)
        if not sep:
            raise RegistryKeyError(
                f"Invalid registry key {value!r}: expected 'namespace{SEPARATOR}path'."
            )
        return cls(namespace, path)

    @classmethod
    def get(cls, value: RegistryKeyLike) -> RegistryKey:
        """Coerce any key-like value into a :class:`RegistryKey`."""
        if isinstance(value, RegistryKey):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, tuple) and len(value) == 2:
            return cls(*value)
        raise RegistryKeyError(f"Cannot coerce {value!r} into a registry key")
