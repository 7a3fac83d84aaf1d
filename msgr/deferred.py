"""Future primitives used by the channel.

Both classes wrap an :class:`asyncio.Future`, so every continuation runs
from the event loop's ready queue in the order it was attached. The channel
relies on that ordering to flush queued sends in issue order.
"""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Callable, Generator, Optional

from .errors import DuplicateResponseHandler


class Deferred:
    """One-shot signal with an idempotent ``resolve()``."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._future: asyncio.Future = loop.create_future()

    @property
    def resolved(self) -> bool:
        return self._future.done()

    def resolve(self, value: Any = None) -> bool:
        """Settle the signal. Returns False if it was already settled."""
        if self._future.done():
            return False
        self._future.set_result(value)
        return True

    def then(self, callback: Callable[[Any], None]) -> None:
        """Run ``callback(value)`` once resolved, never inline."""
        self._future.add_done_callback(functools.partial(_forward, callback))

    def __await__(self) -> Generator[Any, None, Any]:
        return asyncio.shield(self._future).__await__()


class Response:
    """The pending answer to one ``Channel.send()``.

    Await it, or attach a single continuation with :meth:`then`.
    """

    def __init__(self, msg_id: str, loop: asyncio.AbstractEventLoop):
        self.id = msg_id
        self._future: asyncio.Future = loop.create_future()
        self._subscribed = False

    def then(self, callback: Callable[[Any], None]) -> None:
        if self._subscribed:
            raise DuplicateResponseHandler(
                "msgr: you can register only one response handler")
        self._subscribed = True
        self._future.add_done_callback(functools.partial(_forward, callback))

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> Any:
        return self._future.result()

    def _resolve(self, data: Any) -> bool:
        if self._future.done():
            return False
        self._future.set_result(data)
        return True

    def __await__(self) -> Generator[Any, None, Any]:
        return asyncio.shield(self._future).__await__()

    def __repr__(self) -> str:
        state = "resolved" if self.done() else "pending"
        return f"<Response id={self.id!r} {state}>"


def _forward(callback: Callable[[Any], None], future: asyncio.Future) -> None:
    if future.cancelled():
        return
    callback(future.result())
