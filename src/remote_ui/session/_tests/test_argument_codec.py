from __future__ import annotations

import pytest

from remote_ui.objects import Application, default_class_table
from remote_ui.protocol import ProtocolError, ProtocolErrorKind
from remote_ui.session import ArgumentCodec, ObjectRegistry


@pytest.fixture
def app() -> Application:
    return Application()


@pytest.fixture
def codec(app) -> ArgumentCodec:
    registry = ObjectRegistry({1: app}, default_class_table())
    registry.create("Label", 1000)
    return ArgumentCodec(registry)


def test_primitives_pass_through(codec):
    args = ["text", 3, 2.5, True, None]
    assert codec.decode_arguments(args) == args


def test_object_reference_resolves(codec, app):
    [decoded] = codec.decode_arguments([{"id": 1}])
    assert decoded is app


def test_nested_lists_decode_recursively(codec, app):
    decoded = codec.decode_arguments([[1, {"id": 1}, [{"id": 1000}]]])
    assert decoded[0][0] == 1
    assert decoded[0][1] is app
    assert decoded[0][2][0].class_name == "Label"


def test_unknown_reference(codec):
    with pytest.raises(ProtocolError) as excinfo:
        codec.decode_arguments([{"id": 99999}])
    assert excinfo.value.kind is ProtocolErrorKind.UNRESOLVABLE_ARGUMENT_REFERENCE


@pytest.mark.parametrize("args", [{"id": 1}, "text", None, 5])
def test_non_list_arguments_rejected(codec, args):
    with pytest.raises(ProtocolError) as excinfo:
        codec.decode_arguments(args)
    assert excinfo.value.kind is ProtocolErrorKind.MALFORMED_ARGUMENTS


@pytest.mark.parametrize("arg", [{"name": "x"}, {"id": "1"}, {"id": True}])
def test_bad_object_arguments_rejected(codec, arg):
    with pytest.raises(ProtocolError) as excinfo:
        codec.decode_arguments([arg])
    assert excinfo.value.kind is ProtocolErrorKind.MALFORMED_ARGUMENTS
