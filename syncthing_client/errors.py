"""Error types for the Syncthing client."""

from typing import Optional


class SyncthingError(Exception):
    """Base exception for Syncthing client errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def is_retryable(self) -> bool:
        return False


class ConnectionError(SyncthingError):
    """Raised when the request could not be completed (DNS, connect, I/O)."""

    def __init__(self, message: str):
        super().__init__(f"Connection error: {message}")

    def is_retryable(self) -> bool:
        return True


class HttpError(SyncthingError):
    """Raised when the daemon answers with a status outside 200-299."""

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        message = f"HTTP {status}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message)

    def is_retryable(self) -> bool:
        return self.status >= 500


class DecodeError(SyncthingError):
    """Raised when a response or event payload does not have the expected shape.

    A decode failure of a whole response is retryable: the next request may
    get a well-formed answer. A failure tied to one event (``event_id`` set or
    ``retryable=False``) is not, since the stream moves past that event.
    """

    def __init__(
        self,
        message: str,
        event_id: Optional[int] = None,
        *,
        retryable: Optional[bool] = None,
    ):
        self.reason = message
        self.event_id = event_id
        self.retryable = event_id is None if retryable is None else retryable
        if event_id is not None:
            message = f"event {event_id}: {message}"
        super().__init__(f"Decode error: {message}")

    def is_retryable(self) -> bool:
        return self.retryable


class UriError(SyncthingError):
    """Raised for a malformed base URL or path."""

    def __init__(self, message: str):
        super().__init__(f"Invalid URI: {message}")


class RetryLimitExceeded(SyncthingError):
    """Raised by an event stream that gave up after too many failed fetches."""

    def __init__(self, attempts: int, last_error: SyncthingError):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Event fetch failed {attempts} times in a row, last error: {last_error}"
        )
