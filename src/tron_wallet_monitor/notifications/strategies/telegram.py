# -*- coding: utf-8 -*-
"""Telegram notification strategy (async)."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from telegram import Bot, LinkPreviewOptions
from telegram.constants import ParseMode
from telegram.error import RetryAfter, TelegramError
from telegram.request import HTTPXRequest

from tron_wallet_monitor.exceptions import MissingRequiredConfigError, NotificationError, NotificationThrottledError
from tron_wallet_monitor.notifications.types import NotificationMessage
from tron_wallet_monitor.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:
    from tron_wallet_monitor.config.config import Settings
    from tron_wallet_monitor.notifications.types import NotificationStyler


def retry_after_seconds(exc: RetryAfter) -> float:
    """RetryAfter.retry_after is an int or a timedelta depending on the library version."""
    value: Any = exc.retry_after
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


class TelegramNotifier(BaseNotificationStrategy):
    """Send HTML messages to one chat using python-telegram-bot.

    Token and chat are read once from the (frozen) settings at construction.
    A fresh Bot is built and closed around every send, so no connection state
    outlives a message. RetryAfter is surfaced as
    NotificationThrottledError and every other Telegram failure as
    NotificationError; the dispatcher decides what to do with them.
    """

    name = "telegram"

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        bot_factory: Optional[Callable[[], Bot]] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._styler: "NotificationStyler" = styler

        cfg = self.settings.telegram
        if not cfg.api_key or not cfg.chat_id:
            raise MissingRequiredConfigError("TelegramNotifier requires telegram.api_key and telegram.chat_id.")

        self.token: str = str(cfg.api_key)
        self.chat_id: str = str(cfg.chat_id)
        self._bot_factory = bot_factory or self._build_bot
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            self._logger.warning("telegram_already_running")
            return
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    def _build_bot(self) -> Bot:
        cfg = self.settings.telegram
        request = HTTPXRequest(
            connect_timeout=cfg.connect_timeout,
            read_timeout=cfg.read_timeout,
            write_timeout=cfg.write_timeout,
            pool_timeout=cfg.pool_timeout,
        )
        return Bot(token=self.token, request=request)

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._running:
            raise NotificationError("TelegramNotifier is not running")

        text = self._styler.render(message, parse_html=True)
        try:
            async with self._bot_factory() as bot:
                await bot.send_message(
                    chat_id=self.chat_id,
                    text=text,
                    parse_mode=ParseMode.HTML,
                    link_preview_options=LinkPreviewOptions(is_disabled=True),
                )
        except RetryAfter as exc:
            retry_seconds = retry_after_seconds(exc)
            self._logger.warning(
                "telegram_rate_limit_retry_after",
                notification_event_type=message.event_type,
                retry_seconds=retry_seconds,
            )
            raise NotificationThrottledError(retry_seconds) from exc
        except TelegramError as exc:
            raise NotificationError(f"Telegram send failed: {exc}") from exc
        self._logger.debug("telegram_message_sent", notification_event_type=message.event_type)
