"""Structural metadata about registrar classes.

The scan engine only talks to :class:`MetadataFacility`; the default
:class:`ReflectionMetadata` reads class namespaces and annotations.
"""

from .protocols import MemberDescriptor, MetadataFacility, Visibility
from .reflection import (
    ReflectionMetadata,
    declaration_order,
    resolve_annotations,
    split_annotation,
    visibility_of,
)

__all__ = [
    "MemberDescriptor",
    "MetadataFacility",
    "ReflectionMetadata",
    "Visibility",
    "declaration_order",
    "resolve_annotations",
    "split_annotation",
    "visibility_of",
]
