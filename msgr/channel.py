from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .builder import EnvelopeBuilder, OMITTED
from .codecs import Payload
from .config import ChannelOptions
from .deferred import Deferred, Response
from .errors import InvalidHandlerRegistration, MalformedMessage
from .message import Envelope, MsgType, OpenState, Role
from .transport import Transport
from .transports.memory import MessageChannel
from .wire import pack_envelope, unpack_envelope

logger = logging.getLogger(__name__)

Responder = Callable[..., Response]
Handler = Callable[[Any, Responder], None]


class Channel:

    # Notes:
    # - Exactly two ends. A client is open from construction; a worker opens
    #   when the client's CONNECT handshake hands it a port to reply on
    # - send() never transmits inline. Every transmit is chained on the open
    #   signal, so queued sends flush in issue order
    # - Inbound dispatch takes exactly one path: handler named by the data,
    #   handler named by the type, pending response, or the fallback handlers
    # Transport-agnostic; the Transport just moves payloads and ports

    def __init__(self, role: Role, handlers: Optional[Mapping[str, Handler]] = None,
                 target: Optional[Transport] = None, *,
                 scope: Optional[Transport] = None,
                 channel_factory: Optional[Callable[[], Any]] = None,
                 options: Optional[ChannelOptions] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.role = Role(role)
        self.options = options or ChannelOptions.from_env()
        self.codec = self.options.codec
        self._loop = loop or asyncio.get_running_loop()

        # Handlers
        self.handlers: Dict[str, Handler] = dict(handlers or {})
        for key, handler in self.handlers.items():
            if not callable(handler):
                raise InvalidHandlerRegistration(
                    f"msgr: handler for {key!r} is not callable")
        self.fallback_handlers: List[Handler] = []

        # Waiters, keyed by envelope id
        self.pending_responses: Dict[str, Response] = {}

        # Open state
        self.state = OpenState.PENDING
        self._open = Deferred(self._loop)
        self.recipient: Optional[Transport] = None
        self.port: Optional[Transport] = None

        if self.role is Role.CLIENT:
            if target is None:
                raise ValueError("msgr: a client needs a target to connect to")
            self.recipient = target
            self._set_open()

            factory = channel_factory or (lambda: MessageChannel(self._loop))
            pair = factory()
            self.port = pair.port1
            self.port.on_receive(self._handle_message)

            # The worker replies over port2 once it has it
            handshake = EnvelopeBuilder(self.options.id_factory).args(MsgType.CONNECT).build()
            self._post(handshake, transfer=[pair.port2])
        else:
            if scope is None:
                raise ValueError("msgr: a worker needs a scope to listen on")
            self.port = scope
            scope.on_receive(self._handle_message)

    @property
    def is_open(self) -> bool:
        return self.state is OpenState.OPEN

    def ready(self, callback: Callable[[], None]) -> None:
        """Call ``callback()`` once the channel is open (scheduled, never inline)."""
        self._open.then(lambda _: callback())

    async def wait_ready(self) -> None:
        await self._open

    def receive(self, handler: Handler) -> None:
        """Register a handler for messages no other path claims."""
        if not callable(handler):
            raise InvalidHandlerRegistration("msgr: expecting handler to be a function")
        self.fallback_handlers.append(handler)

    def send(self, type: Any, data: Any = OMITTED, _id: Optional[str] = None) -> Response:
        """
        Send a message and return its Response.

          send("PING", "hello")  -> typed message
          send("hello")          -> untyped message, handled by the peer's
                                    handler named "hello" or its fallbacks
        _id overrides the generated id.
        """
        env = (EnvelopeBuilder(self.options.id_factory)
               .args(type, data)
               .id(_id)
               .build())
        return self._post(env)

    def _post(self, env: Envelope, transfer: Sequence[Transport] = ()) -> Response:
        response = Response(env.id, self._loop)
        self.pending_responses[env.id] = response
        payload = pack_envelope(env, self.codec)
        self._open.then(lambda _: self._transmit(env, payload, transfer))
        return response

    def _transmit(self, env: Envelope, payload: Payload, transfer: Sequence[Transport]) -> None:
        logger.debug("%s: send %s id=%s", self.role, env.type, env.id)
        self.recipient.send(payload, transfer)

    def _handle_message(self, payload: Payload, ports: Sequence[Transport] = ()) -> None:
        env = unpack_envelope(payload, self.codec)
        msg_id = env.id

        def responder(data: Any = None) -> Response:
            answer = EnvelopeBuilder(self.options.id_factory).response(msg_id, data).build()
            return self._post(answer)

        if self.role is Role.WORKER and env.is_handshake:
            self._accept_handshake(ports)

        logger.debug("%s: recv %s id=%s", self.role, env.type, msg_id)
        data = env.data

        if env.type == MsgType.UNKNOWN and isinstance(data, str) and data in self.handlers:
            # Known type sent without a payload
            self.handlers[data](None, responder)
        elif env.type in self.handlers:
            self.handlers[env.type](data, responder)
        elif msg_id in self.pending_responses:
            self.pending_responses.pop(msg_id)._resolve(data)
        else:
            for handler in list(self.fallback_handlers):
                handler(data, responder)

    def _accept_handshake(self, ports: Sequence[Transport]) -> None:
        if not ports:
            if self.state is OpenState.PENDING:
                raise MalformedMessage("msgr: CONNECT handshake carried no port")
            # Already open: keep the current recipient
            logger.debug("%s: repeated CONNECT without a port", self.role)
            return
        self.recipient = ports[0]
        if self._set_open():
            logger.info("%s: channel open", self.role)
        else:
            logger.debug("%s: repeated CONNECT, recipient replaced", self.role)

    def _set_open(self) -> bool:
        """PENDING -> OPEN. Returns False when already open."""
        if not self._open.resolve():
            return False
        self.state = OpenState.OPEN
        return True

    def __repr__(self) -> str:
        return f"<Channel {self.role} {self.state.value}>"
