# autoregistrar/markers.py


"""
Type-level and member-level markers.

Usage
-----
    @registrar(Widget)
    class Widgets:
        red_widget = Widget("red")
        blue_one: Annotated[Widget, RegistryObject("blue_widget")] = Widget("blue")

Key behaviors
-------------
- ``@registrar(content)`` stamps a :class:`RegistrarMarker` on the class itself
  (markers are not inherited by subclasses) and, unless ``singleton=False``,
  binds ``cls()`` as the canonical instance the engine reads values from.
- :class:`RegistryObject` is attached through ``typing.Annotated`` metadata on a
  member's class annotation. A marker without a name means "derive the name
  from the member identifier"; its presence alone still matters under the
  annotated-only and named-only detection modes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Type, TypeVar, Callable

from .singletons import SingletonRegistry, default_singletons

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Type[Any])

MARKER_ATTR = "__registrar_marker__"


@dataclass(frozen=True, slots=True)
class RegistrarMarker:
    """Marks a class as a registrar for exactly one kind of content."""

    content: type

    def __post_init__(self) -> None:
        if not isinstance(self.content, type):
            raise TypeError(f"registrar content must be a class (got {self.content!r})")


@dataclass(frozen=True, slots=True)
class RegistryObject:
    """Marks a registrar member, optionally with an explicit registration name.

    ``name=None`` derives the name from the member identifier.
    """

    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.name is None:
            return
        if not isinstance(self.name, str):
            raise TypeError(f"RegistryObject name must be a string (got {type(self.name)!r})")
        if not self.name:
            raise ValueError("RegistryObject name cannot be empty; omit it to derive the name")

    @property
    def is_derived(self) -> bool:
        return self.name is None


def marker_of(cls: Any) -> RegistrarMarker | None:
    """Return the class's own :class:`RegistrarMarker`, ignoring inherited ones."""
    if not isinstance(cls, type):
        return None
    marker = vars(cls).get(MARKER_ATTR)
    return marker if isinstance(marker, RegistrarMarker) else None


class RegistrarDecorator:
    """Class-based ``@registrar(content)`` decorator.

    Subclasses may override:
      • ``get_singletons(self) -> SingletonRegistry``
      • ``bind_instance(self, cls) -> None``
    """

    log_category = "registrar"

    def __init__(self, *, singletons: SingletonRegistry | None = None) -> None:
        self.singletons: SingletonRegistry = default_singletons if singletons is None else singletons

    def __call__(self, content: type, *, singleton: bool = True) -> Callable[[T], T]:
        marker = RegistrarMarker(content)

        def _apply(cls: T) -> T:
            if not isinstance(cls, type):
                raise TypeError(f"@registrar can only decorate classes (got {cls!r})")
            if marker_of(cls) is not None:
                raise TypeError(f"{cls.__qualname__} already carries a registrar marker")

            # 1) Stamp the marker on the class itself
            setattr(cls, MARKER_ATTR, marker)

            # 2) Bind the canonical instance
            if singleton:
                self.bind_instance(cls)

            label = str(self.log_category).upper()
            logger.debug(
                "[%s] marked `%s.%s` for %s",
                label, cls.__module__, cls.__qualname__, content.__qualname__,
            )
            return cls

        return _apply

    # ---------------- hooks / extension points ----------------
    def get_singletons(self) -> SingletonRegistry:
        return self.singletons

    def bind_instance(self, cls: type) -> None:
        self.get_singletons().bind(cls, cls())


registrar = RegistrarDecorator()

__all__ = [
    "MARKER_ATTR",
    "RegistrarMarker",
    "RegistryObject",
    "RegistrarDecorator",
    "marker_of",
    "registrar",
]
