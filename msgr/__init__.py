"""
Public API:
- client, worker, connect: build the two ends of a channel
- Channel: handshake, per-type dispatch, request/response correlation
- MsgType (alias types): reserved CONNECT / UNKNOWN / RESPONSE types
- Envelope: wire-level record (id, type, data)
- Transport: abstract class transports must implement
- MessageChannel, MessagePort, WorkerScope: in-process transport
- Codecs, JSONCodec, MsgPackCodec: wire codecs
- pack_envelope, unpack_envelope: envelope <-> payload
"""

# Core runtime
from .channel import Channel
from .factory import client, connect, worker

# Wire types
from .message import (
    Envelope,
    MsgType,
    OpenState,
    Role,
)
from .deferred import Deferred, Response
from .builder import EnvelopeBuilder, new_id
from .config import ChannelOptions

# Transport contract
from .transport import Transport
from .transports.memory import MessageChannel, MessagePort, WorkerScope

# Codecs & framing helpers
from .codecs import Codec, Codecs, JSONCodec, MsgPackCodec
from .wire import pack_envelope, unpack_envelope

from .errors import (
    CodecError,
    DuplicateResponseHandler,
    InvalidHandlerRegistration,
    MalformedMessage,
    MsgrError,
)

types = MsgType

__all__ = [
    "Channel",
    "client",
    "connect",
    "worker",
    "Envelope",
    "MsgType",
    "types",
    "OpenState",
    "Role",
    "Deferred",
    "Response",
    "EnvelopeBuilder",
    "new_id",
    "ChannelOptions",
    "Transport",
    "MessageChannel",
    "MessagePort",
    "WorkerScope",
    "Codec",
    "Codecs",
    "JSONCodec",
    "MsgPackCodec",
    "pack_envelope",
    "unpack_envelope",
    "CodecError",
    "DuplicateResponseHandler",
    "InvalidHandlerRegistration",
    "MalformedMessage",
    "MsgrError",
]

__version__ = "0.1.0"
