# -*- coding: utf-8 -*-
"""Console notifier (print-based)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tron_wallet_monitor.notifications.types import NotificationMessage
from tron_wallet_monitor.notifications.strategies.base import BaseNotificationStrategy
from tron_wallet_monitor.config import Settings

if TYPE_CHECKING:  # pragma: no cover
    from tron_wallet_monitor.notifications.types import NotificationStyler


class ConsoleNotifier(BaseNotificationStrategy):
    """Print notifications to stdout as plain text. Used when Telegram is disabled."""

    name = "console"

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler"
    ) -> None:
        super().__init__(settings)
        self._running = False
        self._styler = styler

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self.is_running or not self.settings.console.enabled:
            return
        print(self._styler.render(message, parse_html=False), flush=True)
