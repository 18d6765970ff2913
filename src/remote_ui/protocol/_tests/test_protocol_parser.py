from __future__ import annotations

import json

import pytest

from remote_ui.protocol import (
    CreateMessage,
    KeepaliveMessage,
    MessageParser,
    ProtocolError,
    ProtocolErrorKind,
    SetMessage,
    encode_json,
    iter_messages,
    message_type,
)


@pytest.fixture
def parser() -> MessageParser:
    return MessageParser()


def test_message_type_is_case_insensitive():
    assert message_type({"type": "CREATE"}) == "create"
    assert message_type({"kind": "create"}) is None
    assert message_type(["create"]) is None


def test_iter_messages_flattens_batches_in_order():
    a, b, c = {"type": "a"}, {"type": "b"}, {"type": "c"}
    assert iter_messages(a) == [a]
    assert iter_messages([a, [b, c]]) == [a, b, c]
    assert iter_messages([]) == []


def test_parse_returns_typed_message(parser):
    msg = parser.parse({"type": "create", "class": "Label", "id": 1000})
    assert isinstance(msg, CreateMessage)
    assert isinstance(parser.parse({"type": "Keepalive"}), KeepaliveMessage)


def test_parse_rejects_unknown_type(parser):
    with pytest.raises(ProtocolError) as excinfo:
        parser.parse({"type": "signal"})
    assert excinfo.value.kind is ProtocolErrorKind.UNRECOGNIZED_MESSAGE_TYPE


def test_parse_rejects_non_mapping(parser):
    with pytest.raises(ProtocolError) as excinfo:
        parser.parse("create")
    assert excinfo.value.kind is ProtocolErrorKind.MALFORMED_MESSAGE


def test_decode_json_accepts_object_and_array(parser):
    assert parser.decode_json('{"type": "keepalive"}') == {"type": "keepalive"}
    assert parser.decode_json(b'[{"type": "keepalive"}]') == [{"type": "keepalive"}]


@pytest.mark.parametrize("raw", ["{not json", '"text"', "42", b"\xff\xfe"])
def test_decode_json_rejects_bad_frames(parser, raw):
    with pytest.raises(ProtocolError) as excinfo:
        parser.decode_json(raw)
    assert excinfo.value.kind is ProtocolErrorKind.MALFORMED_MESSAGE


def test_encode_json_is_compact():
    text = encode_json(SetMessage(id=1000, name="text", value="hi"))
    assert " " not in text
    assert json.loads(text) == {"type": "set", "id": 1000, "name": "text", "value": "hi"}
    assert encode_json({"type": "keepalive"}) == '{"type":"keepalive"}'
