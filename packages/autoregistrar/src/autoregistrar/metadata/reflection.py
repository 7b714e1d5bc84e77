# autoregistrar/metadata/reflection.py
"""
Reflection-backed metadata facility.

Members are read from the class's *own* namespace (``vars(cls)``) and its own
annotations, never from base classes:

- dunder names, functions, static/class methods and unannotated nested
  classes are not members
- annotation-only members (``blue: Widget`` with no value) are members; their
  value is read from the canonical instance and may be unset
- member markers come from ``typing.Annotated`` metadata, ``ClassVar`` wrappers
  are unwrapped
- string annotations are evaluated one at a time; one that can't be evaluated
  (e.g. a ``TYPE_CHECKING``-only import) stays a string and carries no marker
"""

import inspect
import logging
import sys
from typing import Annotated, Any, ClassVar, Sequence, get_args, get_origin

from ..markers import RegistrarMarker, marker_of
from .protocols import MemberDescriptor, Visibility

logger = logging.getLogger(__name__)


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _mangle_prefix(cls: type) -> str:
    return f"_{cls.__name__.lstrip('_')}__"


def _demangle(cls: type, attr: str) -> str:
    prefix = _mangle_prefix(cls)
    if attr.startswith(prefix) and len(attr) > len(prefix):
        return "__" + attr[len(prefix):]
    return attr


def visibility_of(name: str) -> Visibility:
    """Python naming convention: ``__x`` is private, ``_x`` protected."""
    if name.startswith("__") and not name.endswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def _is_member_value(raw: Any) -> bool:
    if isinstance(raw, (staticmethod, classmethod)):
        return False
    return not inspect.isroutine(raw)


def split_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split an annotation into ``(declared_type, markers)``."""
    if annotation is None:
        return None, ()
    if get_origin(annotation) is ClassVar:
        args = get_args(annotation)
        annotation = args[0] if args else None
    if get_origin(annotation) is Annotated:
        args = get_args(annotation)
        return args[0], tuple(annotation.__metadata__)
    return annotation, ()


def resolve_annotations(cls: type) -> dict[str, Any]:
    """Return the class's own annotations, evaluating string annotations individually."""
    raw = inspect.get_annotations(cls)
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(cls))

    resolved: dict[str, Any] = {}
    for attr, annotation in raw.items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns, localns)
            except (NameError, AttributeError, SyntaxError, TypeError) as exc:
                logger.debug(
                    "unresolved annotation %s.%s (%r): %s", cls.__qualname__, attr, annotation, exc
                )
        resolved[attr] = annotation
    return resolved


def declaration_order(annotated: Sequence[str], assigned: Sequence[str]) -> list[str]:
    """Merge annotation order and namespace order into one declaration order.

    Both inputs are subsequences of the class body's statement order; names
    present in both anchor the merge so annotation-only members land where
    they were declared.
    """
    assigned_set = set(assigned)
    ann_index = {name: i for i, name in enumerate(annotated)}
    out: list[str] = []
    seen: set[str] = set()
    cursor = 0

    def _emit(name: str) -> None:
        if name not in seen:
            seen.add(name)
            out.append(name)

    for name in assigned:
        idx = ann_index.get(name)
        if idx is not None and idx >= cursor:
            for pending in annotated[cursor:idx]:
                if pending not in assigned_set:
                    _emit(pending)
            cursor = idx + 1
        _emit(name)

    for pending in annotated[cursor:]:
        if pending not in assigned_set:
            _emit(pending)
    return out


class ReflectionMetadata:
    """:class:`~autoregistrar.metadata.MetadataFacility` built on ``vars()`` and annotations."""

    def has_marker(self, cls: Any) -> bool:
        return marker_of(cls) is not None

    def get_marker(self, cls: Any) -> RegistrarMarker | None:
        return marker_of(cls)

    def describe(self, cls: type) -> list[MemberDescriptor]:
        annotations = resolve_annotations(cls)
        namespace = vars(cls)

        members: list[MemberDescriptor] = []
        for attr in declaration_order(list(annotations), list(namespace)):
            if _is_dunder(attr):
                continue
            if attr in namespace:
                raw = namespace[attr]
                if not _is_member_value(raw):
                    continue
                if isinstance(raw, type) and attr not in annotations:
                    continue

            declared, markers = split_annotation(annotations.get(attr))
            name = _demangle(cls, attr)
            members.append(
                MemberDescriptor(
                    name=name,
                    visibility=visibility_of(name),
                    markers=markers,
                    declared_type=declared,
                    attr=attr,
                )
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "described %s: %s", cls.__qualname__, ",".join(m.name for m in members)
            )
        return members


__all__ = [
    "ReflectionMetadata",
    "declaration_order",
    "resolve_annotations",
    "split_annotation",
    "visibility_of",
]
