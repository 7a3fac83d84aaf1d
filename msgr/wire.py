from __future__ import annotations
from typing import Any

from .codecs import Codec, JSONCodec, Payload
from .errors import MalformedMessage
from .message import Envelope, MsgType

_DEFAULT_CODEC = JSONCodec()

def pack_envelope(env: Envelope, codec: Codec = _DEFAULT_CODEC) -> Payload:
    return codec.dumps(env.to_dict())

def unpack_envelope(payload: Payload, codec: Codec = _DEFAULT_CODEC) -> Envelope:
    """Decode one inbound payload.

    Raises MalformedMessage when the payload does not decode to a mapping
    with a non-empty string 'id' and 'type'. Nothing beyond that structure
    is validated; 'data' is passed through as-is.
    """
    try:
        obj = codec.loads(payload)
    except Exception as ex:
        raise MalformedMessage(f"msgr: malformed message ({ex})") from ex

    if not isinstance(obj, dict):
        raise MalformedMessage(f"msgr: malformed message, expected a mapping, got {type(obj).__name__}")

    msg_id = obj.get("id")
    msg_type = obj.get("type")
    if not _non_empty_str(msg_id):
        raise MalformedMessage("msgr: malformed message, missing 'id'")
    if not _non_empty_str(msg_type):
        raise MalformedMessage("msgr: malformed message, missing 'type'")

    return Envelope(id=msg_id, type=_sentinel(msg_type), data=_sentinel(obj.get("data")))

def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""

_SENTINELS = frozenset(t.value for t in MsgType)

def _sentinel(value: Any) -> Any:
    # Map reserved wire strings back onto MsgType members
    if isinstance(value, str) and value in _SENTINELS:
        return MsgType(value)
    return value
