from __future__ import annotations
import asyncio
import logging
from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

from ..codecs import Payload
from ..errors import MalformedMessage
from ..transport import ReceiveCallback, Transport

logger = logging.getLogger(__name__)

class _Endpoint(Transport):
    """In-process endpoint.

    Delivery is always asynchronous: each sent payload is queued in the
    receiver's inbox and handed to its callback from the event loop, one
    payload per loop callback. Payloads that arrive before a callback is
    installed stay buffered, in order, until on_receive() is called.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, name: str = ""):
        self._loop = loop or asyncio.get_running_loop()
        self.name = name or f"{type(self).__name__}-{id(self):x}"
        self._cb: Optional[ReceiveCallback] = None
        self._inbox: Deque[Tuple[Payload, List[Transport]]] = deque()
        self.closed = False

    def on_receive(self, cb: ReceiveCallback) -> None:
        self._cb = cb
        # Buffered payloads had their delivery attempts skipped; reschedule
        for _ in range(len(self._inbox)):
            self._loop.call_soon(self._deliver_next)

    def close(self) -> None:
        self.closed = True
        self._cb = None
        self._inbox.clear()

    def _enqueue(self, payload: Payload, ports: List[Transport]) -> None:
        if self.closed:
            logger.debug("%s: closed, dropping inbound payload", self.name)
            return
        self._inbox.append((payload, ports))
        self._loop.call_soon(self._deliver_next)

    def _deliver_next(self) -> None:
        if self._cb is None or not self._inbox:
            return
        payload, ports = self._inbox.popleft()
        try:
            self._cb(payload, ports)
        except MalformedMessage as ex:
            # Bridge policy: drop the bad message, keep delivering the rest
            logger.warning("%s: dropping message: %s", self.name, ex)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class MessagePort(_Endpoint):
    """One end of a MessageChannel; sends arrive at the entangled port."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, name: str = ""):
        super().__init__(loop, name)
        self._peer: Optional[MessagePort] = None

    def send(self, payload: Payload, transfer: Sequence[Transport] = ()) -> None:
        if self.closed or self._peer is None:
            logger.debug("%s: not entangled, dropping outbound payload", self.name)
            return
        self._peer._enqueue(payload, list(transfer))


class MessageChannel:
    """A pair of entangled ports, as created by the client during the handshake."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        loop = loop or asyncio.get_running_loop()
        tag = f"{id(self):x}"
        self.port1 = MessagePort(loop, name=f"port1-{tag}")
        self.port2 = MessagePort(loop, name=f"port2-{tag}")
        self.port1._peer = self.port2
        self.port2._peer = self.port1


class WorkerScope(_Endpoint):
    """
    The worker's global messaging endpoint. Clients hold it as their target;
    whatever is sent to it lands on the callback the worker installed.
    """

    def send(self, payload: Payload, transfer: Sequence[Transport] = ()) -> None:
        self._enqueue(payload, list(transfer))
