"""Custom exceptions for the Tronscan API, the activity sources and notifications."""

from __future__ import annotations


class TronMonitorError(Exception):
    """Base exception for wallet-monitor errors."""

    pass


class MissingRequiredConfigError(TronMonitorError):
    """Raised when a required configuration value is missing."""

    pass


class TronscanAPIError(TronMonitorError):
    """Raised when a Tronscan API request fails."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RequestTimeoutError(TronscanAPIError):
    """Raised when no response arrives within the configured timeout."""

    pass


class ResponseParseError(TronscanAPIError):
    """Raised when a response body is not the expected JSON shape."""

    pass


class RateLimitError(TronscanAPIError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class StreamConnectionError(TronMonitorError):
    """Raised when the push feed connection closes or fails."""

    pass


class StatePersistenceError(TronMonitorError):
    """Raised when progress state cannot be read or written."""

    pass


class NotificationError(TronMonitorError):
    """Raised when a notification channel fails to deliver a message."""

    pass


class NotificationThrottledError(NotificationError):
    """Raised when the channel rejects a message with a retry-after hint."""

    def __init__(self, retry_after: float, message: str = "Notification throttled") -> None:
        super().__init__(f"{message} (retry after {retry_after}s)")
        self.retry_after = retry_after
