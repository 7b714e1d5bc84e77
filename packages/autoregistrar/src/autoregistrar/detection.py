# autoregistrar/detection.py
"""Detection rules deciding which registrar members get registered."""

from __future__ import annotations

import logging
import types
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin

from .metadata import MemberDescriptor, Visibility

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DetectionMode:
    """
    A selection of rules for detecting members within a registrar.

    - ``public_only``: only public members (no leading underscore) are scanned.
    - ``annotated_only``: implicit detection is disabled, members need a
      ``RegistryObject`` marker.
    - ``named_only``: members need a ``RegistryObject`` marker carrying an
      explicit name; derived names are not allowed.
    """

    public_only: bool = False
    annotated_only: bool = False
    named_only: bool = False

    DEFAULT: ClassVar[DetectionMode]

    def as_attributes(self) -> dict[str, bool]:
        return {
            "public_only": self.public_only,
            "annotated_only": self.annotated_only,
            "named_only": self.named_only,
        }


DetectionMode.DEFAULT = DetectionMode(public_only=True)


def _declared_kinds(declared: Any) -> tuple[type, ...]:
    """Flatten a declared annotation into the concrete classes it admits."""
    if declared is None:
        return ()
    if isinstance(declared, type):
        return (declared,)
    origin = get_origin(declared)
    if origin is Annotated:
        return _declared_kinds(get_args(declared)[0])
    if origin is Union or origin is types.UnionType:
        kinds: list[type] = []
        for arm in get_args(declared):
            if arm is type(None):
                continue
            kinds.extend(_declared_kinds(arm))
        return tuple(kinds)
    if isinstance(origin, type):
        return (origin,)
    return ()


def matches_kind(member: MemberDescriptor, value: Any, content: type) -> bool:
    """Whether ``value`` (or the member's declared type, when unset) is ``content``."""
    if value is not None:
        return isinstance(value, content)
    return any(issubclass(k, content) for k in _declared_kinds(member.declared_type))


def passes_mode(member: MemberDescriptor, mode: DetectionMode) -> bool:
    """Apply the flag-driven rules (visibility, marker, explicit name) in order."""
    if mode.public_only and member.visibility is not Visibility.PUBLIC:
        logger.debug("skip %s: not public", member.name)
        return False

    marker = member.marker
    if mode.annotated_only and marker is None:
        logger.debug("skip %s: no RegistryObject marker", member.name)
        return False

    if mode.named_only:
        if marker is None:
            logger.debug("skip %s: no RegistryObject marker", member.name)
            return False
        if marker.is_derived:
            logger.debug("skip %s: marker has no explicit name", member.name)
            return False

    return True


def is_candidate(member: MemberDescriptor, value: Any, content: type, mode: DetectionMode) -> bool:
    """Apply all detection rules; the content-kind check always runs last."""
    if not passes_mode(member, mode):
        return False
    if not matches_kind(member, value, content):
        logger.debug("skip %s: not a %s", member.name, content.__qualname__)
        return False
    return True


__all__ = ["DetectionMode", "is_candidate", "matches_kind", "passes_mode"]
