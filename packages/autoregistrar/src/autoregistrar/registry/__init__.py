"""Key-addressable content registries that registrars can populate."""

from .base import BaseRegistry, ContentRegistry
from .exceptions import (
    RegistryCollisionError,
    RegistryDuplicateError,
    RegistryError,
    RegistryFrozenError,
    RegistryLookupError,
)

__all__ = [
    "BaseRegistry",
    "ContentRegistry",
    "RegistryError",
    "RegistryDuplicateError",
    "RegistryCollisionError",
    "RegistryLookupError",
    "RegistryFrozenError",
]
