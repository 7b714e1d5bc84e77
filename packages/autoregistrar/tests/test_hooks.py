from typing import Annotated

import pytest

from autoregistrar.detection import DetectionMode
from autoregistrar.exceptions import InvalidLocalNameError
from autoregistrar.hooks import RegistrarHooks
from autoregistrar.markers import RegistryObject
from autoregistrar.providers import MapRegistryProvider

from conftest import Widget


@pytest.fixture
def widgets(mark):
    @mark(Widget)
    class Widgets:
        red = Widget("red")
        blue: Annotated[Widget, RegistryObject("blue_widget")] = Widget("blue")

    return Widgets


def test_events_fire_in_declaration_order_then_completion(engine, hooks, widgets):
    events = []

    @hooks.on_provider_used
    def on_used(sender, provider, key, value, **kwargs):
        events.append(("used", key.as_str))

    @hooks.on_member_registered
    def on_member(sender, mode, namespace, provider, member, **kwargs):
        events.append(("member", member.name))

    @hooks.on_registrar_completed
    def on_done(sender, mode, namespace, provider, **kwargs):
        events.append(("done", sender.__name__))

    engine.run(widgets, namespace="mymod", provider=MapRegistryProvider())

    assert events == [
        ("used", "mymod:red"),
        ("member", "red"),
        ("used", "mymod:blue_widget"),
        ("member", "blue"),
        ("done", "Widgets"),
    ]


def test_member_event_payload(engine, hooks, widgets):
    payloads = []
    hooks.on_member_registered(lambda **kwargs: payloads.append(kwargs))
    provider = MapRegistryProvider()
    mode = DetectionMode(public_only=True)

    engine.run(widgets, mode=mode, namespace="mymod", provider=provider)

    first = payloads[0]
    assert first["sender"] is widgets
    assert first["mode"] == mode
    assert first["namespace"] == "mymod"
    assert first["provider"] is provider
    assert first["member"].name == "red"


def test_listeners_run_in_subscription_order(engine, hooks, widgets):
    calls = []
    hooks.on_registrar_completed(lambda **kw: calls.append("a"))
    hooks.on_registrar_completed(lambda **kw: calls.append("b"))
    hooks.on_registrar_completed(lambda **kw: calls.append("c"))

    engine.run(widgets, namespace="mymod", provider=MapRegistryProvider())

    assert calls == ["a", "b", "c"]


def test_raising_listener_stops_later_listeners_and_aborts_scan(engine, hooks, widgets):
    calls = []

    def boom(**kwargs):
        raise RuntimeError("audit failed")

    hooks.on_member_registered(boom)
    hooks.on_member_registered(lambda **kw: calls.append("late"))
    completed = []
    hooks.on_registrar_completed(lambda **kw: completed.append(True))

    provider = MapRegistryProvider()
    with pytest.raises(RuntimeError, match="audit failed"):
        engine.run(widgets, namespace="mymod", provider=provider)

    assert calls == []
    assert completed == []
    # the first member was stored before its hook fired
    assert [k.as_str for k in provider.mapping] == ["mymod:red"]


def test_sender_filter_limits_events(engine, hooks, widgets, mark):
    @mark(Widget)
    class Others:
        green = Widget("green")

    seen = []
    hooks.on_registrar_completed(lambda sender, **kw: seen.append(sender), sender=Others)

    engine.run(widgets, namespace="mymod", provider=MapRegistryProvider())
    engine.run(Others, namespace="mymod", provider=MapRegistryProvider())

    assert seen == [Others]


def test_hooks_are_scoped_per_instance():
    first, second = RegistrarHooks(), RegistrarHooks()
    first.on_member_registered(lambda **kw: None)

    assert first.has_listeners()
    assert not second.has_listeners()


def test_failed_scan_fires_no_completion(engine, hooks, mark):
    @mark(Widget)
    class Broken:
        bad: Annotated[Widget, RegistryObject("Bad")] = Widget("bad")

    completed = []
    hooks.on_registrar_completed(lambda **kw: completed.append(True))

    with pytest.raises(InvalidLocalNameError):
        engine.run(Broken, namespace="mymod", provider=MapRegistryProvider())
    assert completed == []
