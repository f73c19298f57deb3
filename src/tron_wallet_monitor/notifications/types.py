"""Notification message types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class NotificationMessage:
    """One notification job: a rendered-on-delivery message for the active channel.

    Known event types: transaction_detected (payload["transfer"] is a
    TransferEvent), balance_report (payload["report"] is a BalanceReport),
    system_started, system_stopped and test_message.
    """

    event_type: str
    message: str
    title: str | None = None
    payload: dict[str, Any] | None = None


class NotificationStyler(Protocol):
    """Render a message into a formatted string for delivery."""

    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        """Return a formatted message for the given message.

        Args:
            message: Notification message to render.
            parse_html: If True (default), output includes Telegram HTML. If False, plain text.
        """
        ...
