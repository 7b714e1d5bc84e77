from typing import Annotated, ClassVar

import pytest

from autoregistrar.markers import RegistrarDecorator, RegistrarMarker, RegistryObject, marker_of
from autoregistrar.metadata import ReflectionMetadata, Visibility, declaration_order, split_annotation
from autoregistrar.singletons import SingletonRegistry

from conftest import Widget


@pytest.fixture
def metadata():
    return ReflectionMetadata()


def test_describe_keeps_declaration_order_with_annotation_only_members(metadata):
    class Registrar:
        first = Widget("1")
        second: Widget
        third: Annotated[Widget, RegistryObject()] = Widget("3")
        fourth = Widget("4")
        fifth: Widget

    names = [m.name for m in metadata.describe(Registrar)]
    assert names == ["first", "second", "third", "fourth", "fifth"]


def test_describe_skips_routines_dunders_and_nested_classes(metadata):
    class Registrar:
        value = Widget("v")

        class Nested:
            pass

        def method(self):
            pass

        @classmethod
        def cm(cls):
            pass

        @staticmethod
        def sm():
            pass

        @property
        def computed(self):
            return Widget("computed")

    names = [m.name for m in metadata.describe(Registrar)]
    assert names == ["value", "computed"]


def test_describe_reports_visibility_and_demangles(metadata):
    class Registrar:
        public = Widget("a")
        _protected = Widget("b")
        __private = Widget("c")

    members = {m.name: m for m in metadata.describe(Registrar)}
    assert members["public"].visibility is Visibility.PUBLIC
    assert members["_protected"].visibility is Visibility.PROTECTED
    assert members["__private"].visibility is Visibility.PRIVATE
    assert members["__private"].attr == "_Registrar__private"

    instance = Registrar()
    assert members["__private"].read(instance).color == "c"


def test_describe_reads_markers_and_declared_type(metadata):
    class Registrar:
        named: Annotated[Widget, "doc", RegistryObject("named_one")] = Widget("n")
        shared: ClassVar[Annotated[Widget, RegistryObject()]] = Widget("s")
        plain: Widget = Widget("p")

    members = {m.name: m for m in metadata.describe(Registrar)}
    assert members["named"].marker == RegistryObject("named_one")
    assert members["named"].declared_type is Widget
    assert members["shared"].marker == RegistryObject()
    assert members["shared"].declared_type is Widget
    assert members["plain"].marker is None
    assert members["plain"].declared_type is Widget


def test_describe_ignores_inherited_members(metadata):
    class Base:
        inherited = Widget("base")

    class Child(Base):
        own = Widget("own")

    assert [m.name for m in metadata.describe(Child)] == ["own"]


def test_read_returns_none_for_unset_member(metadata):
    class Registrar:
        unset: Widget

    (member,) = metadata.describe(Registrar)
    assert member.read(Registrar()) is None


def test_describe_evaluates_string_annotations_one_at_a_time(metadata):
    class Registrar:
        red: "Widget" = Widget("red")
        price: "Decimal" = None
        blue: "Annotated[Widget, RegistryObject('blue_widget')]" = Widget("blue")

    red, price, blue = metadata.describe(Registrar)

    assert red.declared_type is Widget
    assert price.declared_type == "Decimal"
    assert price.marker is None
    assert blue.declared_type is Widget
    assert blue.marker == RegistryObject("blue_widget")


def test_marker_lookup_is_not_inherited(metadata):
    mark = RegistrarDecorator(singletons=SingletonRegistry())

    @mark(Widget)
    class Base:
        pass

    class Child(Base):
        pass

    assert metadata.get_marker(Base) == RegistrarMarker(Widget)
    assert metadata.has_marker(Base)
    assert not metadata.has_marker(Child)
    assert marker_of("not a class") is None


def test_split_annotation_plain_and_none():
    assert split_annotation(None) == (None, ())
    assert split_annotation(int) == (int, ())


@pytest.mark.parametrize(
    "annotated, assigned, expected",
    [
        ([], ["a", "b"], ["a", "b"]),
        (["a", "b"], [], ["a", "b"]),
        (["x", "b"], ["a", "b", "c"], ["a", "x", "b", "c"]),
        (["b", "y"], ["a", "b", "c"], ["a", "b", "c", "y"]),
    ],
)
def test_declaration_order_merge(annotated, assigned, expected):
    assert declaration_order(annotated, assigned) == expected
