"""Notification strategies."""

from tron_wallet_monitor.notifications.strategies.base import (
    BaseNotificationStrategy,
)
from tron_wallet_monitor.notifications.strategies.console import ConsoleNotifier
from tron_wallet_monitor.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]
