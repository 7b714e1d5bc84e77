# autoregistrar/metadata/protocols.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, runtime_checkable

from ..markers import RegistrarMarker, RegistryObject


class Visibility(enum.Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


@dataclass(frozen=True, slots=True)
class MemberDescriptor:
    """One declared member of a registrar class.

    ``name`` is the identifier as written in the class body; ``attr`` is the
    attribute actually looked up on the instance (they differ for name-mangled
    private members).
    """

    name: str
    visibility: Visibility
    markers: tuple[Any, ...] = ()
    declared_type: Any = None
    attr: str | None = None

    @property
    def marker(self) -> RegistryObject | None:
        """Return the first :class:`RegistryObject` marker, if any."""
        for m in self.markers:
            if isinstance(m, RegistryObject):
                return m
        return None

    def read(self, instance: Any) -> Any:
        """Read this member's value from ``instance``; ``None`` when unset."""
        return getattr(instance, self.attr or self.name, None)


@runtime_checkable
class MetadataFacility(Protocol):
    """Structural metadata about registrar classes."""

    def describe(self, cls: type) -> Sequence[MemberDescriptor]:
        """Return declared members of ``cls`` in declaration order."""
        ...

    def has_marker(self, cls: Any) -> bool:
        ...

    def get_marker(self, cls: Any) -> RegistrarMarker | None:
        ...


__all__ = ["Visibility", "MemberDescriptor", "MetadataFacility"]
