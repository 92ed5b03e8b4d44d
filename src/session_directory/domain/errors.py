"""Errors raised by session directory operations."""


class SessionDirectoryError(Exception):
    """Base class for expected, caller-facing failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SessionNotFoundError(SessionDirectoryError):
    """The session id is unknown or malformed."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AccessDeniedError(SessionDirectoryError):
    """A presented code did not grant the requested operation."""


class SessionValidationError(SessionDirectoryError):
    """The request was well-formed but violates a session rule."""
