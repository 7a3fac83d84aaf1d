from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from .codecs import Payload

# Inbound delivery: the payload plus any handles transferred with it
ReceiveCallback = Callable[[Payload, List["Transport"]], None]

class Transport(ABC):
    """
    One end of a postMessage-style link. The channel only ever sends
    payloads through it and owns its single inbound callback slot.
    """

    @abstractmethod
    def send(self, payload: Payload, transfer: Sequence["Transport"] = ()) -> None:
        """Hand one serialized envelope to the platform, optionally moving handles."""
        raise NotImplementedError

    @abstractmethod
    def on_receive(self, cb: ReceiveCallback) -> None:
        """Install the inbound callback, replacing any previous one."""
        raise NotImplementedError
