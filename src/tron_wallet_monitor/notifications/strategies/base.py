# -*- coding: utf-8 -*-
"""Base notification strategy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from tron_wallet_monitor.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from tron_wallet_monitor.config.config import Settings


class BaseNotificationStrategy(ABC):
    """A single delivery channel. Delivery policy (pacing, retries) lives in the dispatcher."""

    name: str = "base"

    def __init__(self, settings: "Settings"):
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        pass

    @abstractmethod
    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def send_notification(
        self,
        message: NotificationMessage,
    ) -> None:
        """
        Deliver one message.

        Raises:
            NotificationThrottledError: The channel asked to retry later.
            NotificationError: Any other delivery failure.
        """
        pass
