from __future__ import annotations
import uuid
from typing import Any, Callable, Dict, Optional

from .message import Envelope, MsgType

IdFactory = Callable[[], str]

# Marks an argument the caller did not pass; None is a legitimate payload.
OMITTED: Any = object()

class EnvelopeBuilder:
    """
    Builder that always produces a valid Envelope. It owns the argument
    normalization of Channel.send():
     - send(type, data)   -> typed message
     - send(data)         -> UNKNOWN message carrying 'data'
     - send(RESPONSE, ...) keeps the RESPONSE type even without data
    """
    def __init__(self, id_factory: Optional[IdFactory] = None):
        self._new_id = id_factory or new_id
        self._env: Dict[str, Any] = {
            "id":   None,
            "type": MsgType.UNKNOWN,
            "data": None,
        }

    def typed(self, type: str, data: Any):
        self._env["type"] = type
        self._env["data"] = data
        return self

    def unknown(self, data: Any):
        self._env["type"] = MsgType.UNKNOWN
        self._env["data"] = data
        return self

    def response(self, id: str, data: Any):
        self._env["type"] = MsgType.RESPONSE
        self._env["id"]   = id
        self._env["data"] = data
        return self

    def args(self, type_or_data: Any, data: Any = OMITTED):
        """Apply send()-style positional arguments."""
        if data is OMITTED:
            if isinstance(type_or_data, str) and type_or_data == MsgType.RESPONSE:
                return self.typed(MsgType.RESPONSE, type_or_data)
            return self.unknown(type_or_data)
        return self.typed(type_or_data, data)

    def id(self, id: Optional[str]):
        if id:
            self._env["id"] = id
        return self

    def build(self) -> Envelope:
        if not self._env["id"]:
            self._env["id"] = self._new_id()
        msg_type = self._env["type"]
        if not isinstance(msg_type, str) or msg_type == "":
            raise ValueError(f"Envelope requires a non-empty string 'type', got {msg_type!r}")
        return Envelope(**self._env)

def new_id() -> str:
    return uuid.uuid4().hex
