"""Envelope codec: encode/decode and the inner chat payload."""

import json

import pytest

from chatwire.errors import MalformedEnvelope, MalformedPayload
from chatwire.models.envelope import Envelope, MessageType
from chatwire.models.message import ChatMessage, is_media
from chatwire.transport.envelope import (
    decode,
    decode_chat_message,
    encode,
    encode_chat_message,
    parse_frame,
)


class TestEncode:
    def test_register_wire_shape(self):
        assert json.loads(encode(Envelope.register("alice"))) == {"messageType": "register", "data": "alice"}

    def test_users_wire_shape(self):
        wire = json.loads(encode(Envelope.users(["alice", "bob"])))
        assert wire == {"messageType": "users", "dataArray": ["alice", "bob"]}

    def test_message_wire_shape(self):
        assert json.loads(encode(Envelope.message("hi"))) == {"messageType": "message", "data": "hi"}

    def test_chat_message_uses_from_key(self):
        wire = json.loads(encode_chat_message(ChatMessage(sender="bob", message="hi")))
        assert wire == {"from": "bob", "message": "hi"}


class TestDecode:
    @pytest.mark.parametrize("envelope", [
        Envelope.register("alice"),
        Envelope.register(""),
        Envelope.users([]),
        Envelope.users(["alice", "alice", "bob"]),
        Envelope.message('{"from":"bob","message":"hi"}'),
        Envelope(message_type="typing", data="bob"),
        Envelope(message_type="users"),
    ])
    def test_round_trip(self, envelope):
        assert decode(encode(envelope)) == envelope

    def test_users(self):
        envelope = decode('{"messageType":"users","dataArray":["alice","bob"]}')
        assert envelope.kind is MessageType.USERS
        assert envelope.names == ["alice", "bob"]

    def test_absent_fields_read_as_empty(self):
        envelope = decode('{"messageType":"users"}')
        assert envelope.names == []
        assert decode('{"messageType":"register"}').text == ""

    def test_unknown_fields_are_ignored(self):
        envelope = decode('{"messageType":"register","data":"alice","extra":1}')
        assert envelope == Envelope.register("alice")

    def test_unknown_kind_is_decodable(self):
        envelope = decode('{"messageType":"typing","data":"bob"}')
        assert envelope.kind is None
        assert envelope.message_type == "typing"

    @pytest.mark.parametrize("text", [
        "not json",
        "",
        "[1, 2]",
        '"users"',
        "{}",
        '{"messageType": 3}',
        '{"messageType":"users","dataArray":"alice"}',
        '{"messageType":"users","dataArray":[1, 2]}',
        '{"messageType":"message","data":{"from":"bob"}}',
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedEnvelope) as exc_info:
            decode(text)
        assert exc_info.value.code == "malformed_envelope"

    def test_parse_frame_returns_result(self):
        good = parse_frame('{"messageType":"register","data":"alice"}')
        assert good.ok
        assert good.envelope == Envelope.register("alice")

        bad = parse_frame("{nope")
        assert not bad.ok
        assert bad.envelope is None
        assert isinstance(bad.error, MalformedEnvelope)


class TestChatPayload:
    def test_decode(self):
        assert decode_chat_message('{"from":"bob","message":"hi"}') == ChatMessage(sender="bob", message="hi")

    @pytest.mark.parametrize("data", [None, "hi", '{"from":"bob"}', '{"message":"hi"}', '{"from":1,"message":"hi"}'])
    def test_malformed(self, data):
        with pytest.raises(MalformedPayload) as exc_info:
            decode_chat_message(data)
        assert exc_info.value.code == "malformed_payload"

    @pytest.mark.parametrize("text,expected", [
        ("look.gif", True),
        (".gif", True),
        ("https://example.com/cat.gif", True),
        ("look.GIF", False),
        ("look.gif ", False),
        ("gif", False),
        ("hi", False),
        ("", False),
    ])
    def test_media_classification(self, text, expected):
        assert is_media(text) is expected
        assert ChatMessage(sender="bob", message=text).is_media is expected
