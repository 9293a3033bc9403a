from __future__ import annotations


class SessionError(Exception):
    """Rejected client request. ``message`` is sent back to the sender as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidPayloadError(SessionError):
    pass


class InvalidJoinError(SessionError):
    pass


class InvalidVideoUrlError(SessionError):
    pass


class MessageTooLongError(SessionError):
    pass
