# autoregistrar/exceptions.py
"""Registrar exceptions.

Every failure raised while running a registrar is fatal to that scan. Each
error keeps the context needed to fix it (registrar class, member name or the
offending literal) as attributes, so callers don't need separate logging.
"""

from typing import Any


def _type_name(obj: Any) -> str:
    return getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)


class RegistrarError(RuntimeError):
    """Base for all autoregistrar exceptions."""


# ----------------------------------------------------------------------------
# Scan preconditions
# ----------------------------------------------------------------------------
class NamespaceUnsetError(RegistrarError):
    """A scan was attempted before a namespace was configured."""

    def __init__(self, registrar: Any = None) -> None:
        self.registrar = registrar
        target = f" (while running {_type_name(registrar)})" if registrar is not None else ""
        super().__init__(f"Namespace hasn't been specified{target}!")


class MissingRegistrarMarkerError(RegistrarError):
    """Target class isn't decorated with ``@registrar``."""

    def __init__(self, registrar: Any) -> None:
        self.registrar = registrar
        super().__init__(f"{_type_name(registrar)} isn't decorated with @registrar!")


class NotScannableSingletonError(RegistrarError):
    """Target has no single canonical instance to read member values from."""

    def __init__(self, registrar: Any, reason: str | None = None) -> None:
        self.registrar = registrar
        self.reason = reason
        msg = f"{_type_name(registrar)} isn't a scannable singleton!"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


# ----------------------------------------------------------------------------
# Member errors
# ----------------------------------------------------------------------------
class InvalidLocalNameError(RegistrarError):
    """An explicit registration name contains uppercase characters."""

    def __init__(self, name: str, *, registrar: Any = None, member: str | None = None) -> None:
        self.name = name
        self.registrar = registrar
        self.member = member
        super().__init__(
            f"{name} is an invalid registration name, since it contains uppercase characters!"
        )


class MissingValueError(RegistrarError):
    """A candidate member holds no value at scan time."""

    def __init__(self, registrar: Any, member: str) -> None:
        self.registrar = registrar
        self.member = member
        super().__init__(f"{_type_name(registrar)}.{member}'s value is None!")


class RegistryKeyError(RegistrarError, ValueError):
    """A registry key is malformed (empty part, bad separator)."""


# ----------------------------------------------------------------------------
# Provider errors
# ----------------------------------------------------------------------------
class ProviderRegistrationError(RegistrarError):
    """The destination store rejected a (key, value) pair."""

    def __init__(self, message: str, *, key: Any = None, provider: Any = None) -> None:
        self.key = key
        self.provider = provider
        super().__init__(message)


class ImmutableStoreError(ProviderRegistrationError):
    """A provider was requested for a store that can't be mutated."""


__all__ = [
    "RegistrarError",
    "NamespaceUnsetError",
    "MissingRegistrarMarkerError",
    "NotScannableSingletonError",
    "InvalidLocalNameError",
    "MissingValueError",
    "RegistryKeyError",
    "ProviderRegistrationError",
    "ImmutableStoreError",
]
