# SPDX-License-Identifier: MIT

from typing import Optional


class LifeTrackError(Exception):
    """Base class for errors surfaced to callers of the core."""

    pass


class ParseError(LifeTrackError, ValueError):
    """Raised when a date or month string is malformed."""

    pass


class NotAuthenticated(LifeTrackError):
    """Raised when a storage operation is attempted without an active session."""

    def __init__(self, message: str = "Not signed in") -> None:
        super().__init__(message)


class NotFound(LifeTrackError):
    """Raised when an update targets an entry or track type that does not exist."""

    def __init__(self, kind: str, id: str) -> None:
        super().__init__(f"{kind} not found: {id}")
        self.kind = kind
        self.id = id


class RemoteError(LifeTrackError):
    """Raised on backend rejection, network failure or timeout.

    The message carries the backend's own text so it can be displayed.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
