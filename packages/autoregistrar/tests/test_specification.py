from typing import Annotated

import pytest

from autoregistrar.detection import DetectionMode
from autoregistrar.exceptions import ImmutableStoreError, NamespaceUnsetError
from autoregistrar.keys import RegistryKey
from autoregistrar.markers import RegistryObject
from autoregistrar.registry import ContentRegistry
from autoregistrar.specification import RegistrarSpecification, registrars

from conftest import Gadget, Widget


@pytest.fixture
def widgets(mark):
    @mark(Widget)
    class Widgets:
        redWidget = Widget("red")
        blueOne: Annotated[Widget, RegistryObject("blue_widget")] = Widget("blue")

    return Widgets


@pytest.fixture
def gadgets(mark):
    @mark(Gadget)
    class Gadgets:
        spinner = Gadget()

    return Gadgets


def test_block_runs_registrars_against_each_destination(engine, widgets, gadgets):
    widget_registry = ContentRegistry("widgets")
    gadget_map = {}

    with registrars(namespace="mymod", engine=engine) as spec:
        spec.registrar(widgets, widget_registry)
        spec.registrar(gadgets, gadget_map)

    assert widget_registry.keys(as_csv=True) == "mymod:redwidget,mymod:blue_widget"
    assert gadget_map == {RegistryKey("mymod", "spinner"): gadgets.spinner}
    assert [len(r) for r in spec.reports] == [2, 1]


def test_block_with_callback_destination(engine, widgets):
    seen = []
    spec = registrars(namespace="mymod", engine=engine)
    spec.registrar(widgets, lambda key, value: seen.append(key.as_str))
    assert seen == ["mymod:redwidget", "mymod:blue_widget"]


def test_block_without_namespace_fails_on_first_scan(engine, widgets):
    with pytest.raises(NamespaceUnsetError):
        with registrars(engine=engine) as spec:
            spec.registrar(widgets, {})


def test_mode_change_applies_to_later_scans(engine, widgets):
    first, second = {}, {}
    spec = registrars(namespace="mymod", engine=engine)
    spec.registrar(widgets, first)
    spec.detection_mode = DetectionMode(named_only=True)
    spec.registrar(widgets, second)

    assert len(first) == 2
    assert list(second) == [RegistryKey("mymod", "blue_widget")]


def test_frozen_registry_destination_fails_fast(engine, widgets):
    registry = ContentRegistry()
    registry.freeze()
    spec = registrars(namespace="mymod", engine=engine)

    with pytest.raises(ImmutableStoreError):
        spec.registrar(widgets, registry)
    assert spec.reports == []


def test_from_settings_mapping(engine, widgets):
    spec = RegistrarSpecification.from_settings(
        {"NAMESPACE": "conf", "NAMED_ONLY": True}, engine=engine
    )
    assert spec.namespace == "conf"
    assert spec.detection_mode.named_only

    store = {}
    spec.registrar(widgets, store)
    assert list(store) == [RegistryKey("conf", "blue_widget")]


def test_from_settings_reads_environment(monkeypatch):
    monkeypatch.delenv("AUTOREGISTRAR_CONFIG_MODULE", raising=False)
    monkeypatch.setenv("AUTOREGISTRAR_NAMESPACE", "envmod")
    monkeypatch.setenv("AUTOREGISTRAR_TRACING_ENABLED", "false")

    spec = RegistrarSpecification.from_settings()

    assert spec.namespace == "envmod"
    assert spec.detection_mode == DetectionMode.DEFAULT
    assert spec.engine.tracing is False


def test_hooks_are_reachable_from_block(engine):
    spec = registrars(namespace="mymod", engine=engine)
    assert spec.hooks is engine.hooks
