"""Notification subsystem."""

from tron_wallet_monitor.notifications.dispatcher import NotificationDispatcher
from tron_wallet_monitor.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from tron_wallet_monitor.notifications.stylers import EventNotificationStyler
from tron_wallet_monitor.notifications.types import (
    NotificationMessage,
    NotificationStyler,
)

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "EventNotificationStyler",
    "NotificationDispatcher",
    "NotificationMessage",
    "NotificationStyler",
    "TelegramNotifier",
]
