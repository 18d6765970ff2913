from __future__ import annotations

import pytest

from remote_ui.objects import Application, ClassFactoryTable, default_class_table
from remote_ui.objects.widgets import Label
from remote_ui.protocol import ProtocolError, ProtocolErrorKind
from remote_ui.session import ObjectRegistry


@pytest.fixture
def app() -> Application:
    return Application()


@pytest.fixture
def registry(app) -> ObjectRegistry:
    return ObjectRegistry({1: app}, default_class_table())


def _kind(excinfo) -> ProtocolErrorKind:
    return excinfo.value.kind


def test_create_and_lookup(registry):
    handle = registry.create("Label", 1000)
    assert isinstance(handle.proxy, Label)
    assert handle.class_name == "Label"
    assert registry.lookup(1000) is handle.proxy
    assert 1000 in registry
    assert len(registry) == 1


def test_lookup_singleton(registry, app):
    assert registry.lookup(1) is app
    assert 1 in registry


def test_duplicate_id_rejected(registry):
    registry.create("Label", 1000)
    with pytest.raises(ProtocolError) as excinfo:
        registry.create("Button", 1000)
    assert _kind(excinfo) is ProtocolErrorKind.DUPLICATE_OBJECT_ID
    assert isinstance(registry.lookup(1000), Label)


def test_reserved_id_rejected(registry):
    with pytest.raises(ProtocolError) as excinfo:
        registry.create("Label", 3)
    assert _kind(excinfo) is ProtocolErrorKind.RESERVED_ID_FOR_CREATE


def test_unknown_class_checked_first(registry):
    with pytest.raises(ProtocolError) as excinfo:
        registry.create("EvilClass", 3)
    assert _kind(excinfo) is ProtocolErrorKind.UNKNOWN_CLASS


@pytest.mark.parametrize("object_id", [0, 5, 999, 1000, 99999])
def test_lookup_unknown_id(registry, object_id):
    with pytest.raises(ProtocolError) as excinfo:
        registry.lookup(object_id)
    assert _kind(excinfo) is ProtocolErrorKind.UNKNOWN_OBJECT_ID
    assert str(object_id) in excinfo.value.message


def test_singleton_ids_must_be_reserved():
    with pytest.raises(ValueError):
        ObjectRegistry({1000: Application()}, default_class_table())


def test_factory_failure_reported_as_runtime_failure():
    def broken():
        raise RuntimeError("boom")

    table = ClassFactoryTable({"Broken": broken}).freeze()
    registry = ObjectRegistry({}, table)
    with pytest.raises(ProtocolError) as excinfo:
        registry.create("Broken", 1000)
    assert _kind(excinfo) is ProtocolErrorKind.OBJECT_RUNTIME_FAILURE
    assert 1000 not in registry


def test_property_listener_and_clear(app):
    changes = []
    registry = ObjectRegistry(
        {1: app},
        default_class_table(),
        on_property_changed=lambda oid, proxy, name: changes.append((oid, name)),
    )
    label = registry.create("Label", 1000).proxy
    label.set_property("text", "hello")
    assert changes == [(1000, "text")]

    registry.clear()
    label.set_property("text", "bye")
    assert changes == [(1000, "text")]
    assert len(registry) == 0
