"""Transport bindings. Only the in-process binding ships with msgr."""

from .memory import MessageChannel, MessagePort, WorkerScope

__all__ = ["MessageChannel", "MessagePort", "WorkerScope"]
