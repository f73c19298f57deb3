"""Exceptions subpackage."""

from tron_wallet_monitor.exceptions.exceptions import (
    MissingRequiredConfigError,
    NotificationError,
    NotificationThrottledError,
    RateLimitError,
    RequestTimeoutError,
    ResponseParseError,
    StatePersistenceError,
    StreamConnectionError,
    TronMonitorError,
    TronscanAPIError,
)
from tron_wallet_monitor.exceptions.queue_exceptions import (
    QueueError,
    QueueFull,
    QueueShutdown,
)

__all__ = [
    "MissingRequiredConfigError",
    "NotificationError",
    "NotificationThrottledError",
    "RateLimitError",
    "RequestTimeoutError",
    "ResponseParseError",
    "StatePersistenceError",
    "StreamConnectionError",
    "TronMonitorError",
    "TronscanAPIError",
    "QueueError",
    "QueueFull",
    "QueueShutdown",
]
