from __future__ import annotations
import asyncio
from typing import Any, Callable, Mapping, Optional, Union

from .builder import IdFactory
from .channel import Channel, Handler
from .codecs import Codec
from .config import ChannelOptions
from .message import Role
from .transport import Transport

def connect(handlers: Optional[Mapping[str, Handler]] = None,
            target: Optional[Transport] = None,
            *,
            scope: Optional[Transport] = None,
            codec: Optional[Union[str, Codec]] = None,
            id_factory: Optional[IdFactory] = None,
            channel_factory: Optional[Callable[[], Any]] = None,
            loop: Optional[asyncio.AbstractEventLoop] = None) -> Channel:
    """
    One-liner factory:
      connect({"PING": on_ping}, target=worker_scope)   # client
      connect({"PING": on_ping}, scope=worker_scope)    # worker

    - handlers: type -> handler(data, responder)
    - target: the worker endpoint to talk to; its presence makes this a client
    - scope: the endpoint a worker listens on
    - codec: "json" | "msgpack" | Codec instance (default from MSGR_CODEC)
    - id_factory: callable returning fresh message ids
    - channel_factory: builds the client's port pair (default MessageChannel)
    """
    overrides = {}
    if codec is not None:
        overrides["codec"] = codec
    if id_factory is not None:
        overrides["id_factory"] = id_factory
    options = ChannelOptions.from_env(**overrides)

    role = Role.CLIENT if target is not None else Role.WORKER
    return Channel(role, handlers, target,
                   scope=scope,
                   channel_factory=channel_factory,
                   options=options,
                   loop=loop)

def client(target: Transport,
           handlers: Optional[Mapping[str, Handler]] = None,
           channel_factory: Optional[Callable[[], Any]] = None,
           **kwargs) -> Channel:
    """Initialise a client that talks to the worker behind ``target``."""
    if target is None:
        raise ValueError("msgr: a client needs a target to connect to")
    return connect(handlers, target, channel_factory=channel_factory, **kwargs)

def worker(handlers: Optional[Mapping[str, Handler]] = None,
           scope: Optional[Transport] = None,
           **kwargs) -> Channel:
    """Initialise a worker that waits on ``scope`` for a client's handshake."""
    if scope is None:
        raise ValueError("msgr: a worker needs a scope to listen on")
    return connect(handlers, None, scope=scope, **kwargs)
