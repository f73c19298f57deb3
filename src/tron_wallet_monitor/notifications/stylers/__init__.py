"""Notification stylers."""

from tron_wallet_monitor.notifications.stylers.notification_styler import (
    EventNotificationStyler,
    format_display_amount,
)

__all__ = ["EventNotificationStyler", "format_display_amount"]
