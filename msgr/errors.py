"""Exceptions raised by the msgr channel layer."""


class MsgrError(Exception):
    """Base class for all msgr errors."""


class MalformedMessage(MsgrError):
    """An inbound payload could not be decoded into an envelope, or the
    envelope lacks a non-empty ``id`` or ``type``.

    Only the offending message is abandoned; channel state is untouched.
    """


class InvalidHandlerRegistration(MsgrError, TypeError):
    """A handler that is not callable was registered."""


class DuplicateResponseHandler(MsgrError):
    """A second ``then()`` continuation was attached to the same response."""


class CodecError(MsgrError, ValueError):
    """The requested wire codec is not registered."""
