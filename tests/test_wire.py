import json

import pytest

from msgr import (
    Envelope,
    EnvelopeBuilder,
    MalformedMessage,
    MsgPackCodec,
    MsgType,
    pack_envelope,
    unpack_envelope,
)
from msgr.builder import OMITTED


def test_pack_is_a_json_string():

    payload = pack_envelope(Envelope("abc", "PING", {"n": 1}))
    assert isinstance(payload, str)

    decoded = json.loads(payload)
    assert decoded == {"id": "abc", "type": "PING", "data": {"n": 1}}


def test_sentinels_travel_as_namespaced_strings():

    payload = pack_envelope(Envelope("abc", MsgType.UNKNOWN, MsgType.CONNECT))
    decoded = json.loads(payload)
    assert decoded["type"] == "@@MSGR/UNKNOWN"
    assert decoded["data"] == "@@MSGR/CONNECT"

    env = unpack_envelope(payload)
    assert env.type is MsgType.UNKNOWN
    assert env.data is MsgType.CONNECT
    assert env.is_handshake


def test_only_untyped_connect_is_a_handshake():

    # The CONNECT marker must arrive as data, not as the type
    assert not Envelope("a", MsgType.CONNECT, "connect").is_handshake
    assert not Envelope("a", "PING", MsgType.CONNECT).is_handshake


def test_missing_data_is_none():

    env = unpack_envelope('{"id": "abc", "type": "PING"}')
    assert env.data is None


def test_accepts_bytes():

    env = unpack_envelope(b'{"id": "abc", "type": "PING", "data": 2}')
    assert env == Envelope("abc", "PING", 2)


@pytest.mark.parametrize("payload", [
    "blergh",
    "",
    "null",
    '"a string"',
    "[1, 2, 3]",
    '{"type": "PING"}',
    '{"id": "", "type": "PING"}',
    '{"id": 7, "type": "PING"}',
    '{"id": "abc"}',
    '{"id": "abc", "type": ""}',
    '{"id": "abc", "type": null}',
])
def test_malformed(payload):

    with pytest.raises(MalformedMessage):
        unpack_envelope(payload)


def test_msgpack_codec():

    codec = MsgPackCodec()
    payload = pack_envelope(Envelope("abc", MsgType.RESPONSE, b"\x00\x01"), codec)
    assert isinstance(payload, bytes)

    env = unpack_envelope(payload, codec)
    assert env.type is MsgType.RESPONSE
    assert env.data == b"\x00\x01"

    with pytest.raises(MalformedMessage):
        unpack_envelope(b"\xc1", codec)


# Argument normalization of Channel.send()

def test_builder_typed():

    env = EnvelopeBuilder(lambda: "fixed").args("PING", "hello").build()
    assert env == Envelope("fixed", "PING", "hello")


def test_builder_untyped():

    env = EnvelopeBuilder(lambda: "fixed").args("hello").build()
    assert env == Envelope("fixed", MsgType.UNKNOWN, "hello")

    env = EnvelopeBuilder(lambda: "fixed").args("hello", OMITTED).build()
    assert env.type is MsgType.UNKNOWN


def test_builder_explicit_none_keeps_type():

    env = EnvelopeBuilder(lambda: "fixed").args("PING", None).build()
    assert env == Envelope("fixed", "PING", None)


def test_builder_response_keeps_type():

    env = EnvelopeBuilder().args(MsgType.RESPONSE).id("req-1").build()
    assert env.type is MsgType.RESPONSE
    assert env.id == "req-1"

    env = EnvelopeBuilder().args(MsgType.RESPONSE, "pong").id("req-1").build()
    assert env == Envelope("req-1", MsgType.RESPONSE, "pong")


def test_builder_generates_ids():

    ids = {EnvelopeBuilder().args("x").build().id for _ in range(100)}
    assert len(ids) == 100
    assert all(isinstance(i, str) and i for i in ids)


def test_builder_response_helper():

    env = EnvelopeBuilder().response("req-9", {"ok": True}).build()
    assert env == Envelope("req-9", MsgType.RESPONSE, {"ok": True})


@pytest.mark.parametrize("bad_type", [5, None, "", ("a",)])
def test_builder_rejects_non_string_type(bad_type):

    with pytest.raises(ValueError):
        EnvelopeBuilder().typed(bad_type, "x").build()
