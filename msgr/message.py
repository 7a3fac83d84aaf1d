from __future__ import annotations
from dataclasses import dataclass
from typing import Any
from enum import Enum, StrEnum

# Reserved protocol-control types. Values are namespaced so they cannot
# clash with ordinary handler keys such as "PING".
class MsgType(StrEnum):
    CONNECT  = "@@MSGR/CONNECT"
    UNKNOWN  = "@@MSGR/UNKNOWN"
    RESPONSE = "@@MSGR/RESPONSE"

class Role(StrEnum):
    CLIENT = "client"
    WORKER = "worker"

class OpenState(Enum):
    PENDING = "pending"
    OPEN    = "open"

@dataclass(frozen=True)
class Envelope:
    """
    Envelope fields, 'data' is anything the codec can serialize
    """
    id: str      # message id. A RESPONSE reuses the id of the message it answers
    type: str    # handler key or a MsgType sentinel
    data: Any = None

    @property
    def is_handshake(self) -> bool:
        # The client sends CONNECT as untyped data, so the sentinel shows up
        # in 'data' rather than in 'type'.
        return self.type == MsgType.UNKNOWN and self.data == MsgType.CONNECT

    def to_dict(self) -> dict:
        return {"id": self.id, "type": str(self.type), "data": self.data}
