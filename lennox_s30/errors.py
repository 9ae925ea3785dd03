"""Client error types for Lennox S30 cloud interactions."""

from __future__ import annotations


class S30ClientError(Exception):
    """Base error for Lennox S30 client failures."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class S30AuthFailed(S30ClientError):
    """Certificate exchange failed after exhausting retries."""


class S30LoginFailed(S30ClientError):
    """Credential login was rejected or returned a malformed response."""


class S30Unauthorized(S30ClientError):
    """Bearer token is missing or was rejected by the cloud."""


class S30CommsError(S30ClientError):
    """Communication with the cloud failed."""


class S30Timeout(S30CommsError):
    """Timeout while communicating with the cloud."""


class S30ConnectionError(S30CommsError):
    """Network connection to the cloud failed."""


class S30ResponseError(S30CommsError):
    """Unexpected HTTP response from the cloud."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message, status=status)


class S30BadParameters(S30ClientError):
    """A command was called with malformed input."""
