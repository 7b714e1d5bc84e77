"""Local-name derivation for registered members."""

from typing import Any

from .exceptions import InvalidLocalNameError
from .metadata import MemberDescriptor


def has_uppercase(value: str) -> bool:
    return any(ch.isupper() for ch in value)


def local_name_for(member: MemberDescriptor, *, registrar: Any = None) -> str:
    """Return the un-namespaced registration name for ``member``.

    Derived names are the member identifier lowercased. Explicit names are used
    verbatim and must already be lowercase.

    :raises InvalidLocalNameError: If an explicit name contains uppercase characters.
    """
    marker = member.marker
    if marker is None or marker.is_derived:
        return member.name.lower()

    if has_uppercase(marker.name):
        raise InvalidLocalNameError(marker.name, registrar=registrar, member=member.name)
    return marker.name


__all__ = ["has_uppercase", "local_name_for"]
