# -*- coding: utf-8 -*-
"""Tronscan push feed client (websocket, JSON messages)."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from typing import Any, Optional, cast

import aiohttp
import structlog

from tron_wallet_monitor.clients.tronscan.schema import StreamTransferSchema
from tron_wallet_monitor.config import Settings
from tron_wallet_monitor.exceptions import StreamConnectionError


def extract_transfers(message: dict[str, Any]) -> list[StreamTransferSchema]:
    """Return the transfer records of a feed message (latest_transaction_info.data)."""
    info = message.get("latest_transaction_info")
    if not isinstance(info, dict):
        return []
    data = cast(dict[str, Any], info).get("data")
    if not isinstance(data, list):
        return []
    return [cast(StreamTransferSchema, x) for x in cast(list[Any], data) if isinstance(x, dict)]


class PushFeedClient:
    """Opens the push feed and yields decoded JSON objects until the connection ends.

    Each connection gets its own session: the shared REST session carries a total
    request timeout that must not apply to a long-lived socket.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        heartbeat: float = 20.0,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._heartbeat = heartbeat
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def stream(self, on_open: Callable[[], None]) -> AsyncIterator[dict[str, Any]]:
        """Connect and yield messages. on_open runs once the handshake succeeds.

        Non-JSON frames are logged and skipped.

        Raises:
            StreamConnectionError: When the connection fails, errors or closes.
        """
        url = self._settings.monitoring.stream_url
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=self._settings.api.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.ws_connect(url, heartbeat=self._heartbeat) as ws:
                    on_open()
                    async for msg in ws:
                        if msg.type == aiohttp.WSMsgType.TEXT:
                            try:
                                payload = json.loads(msg.data)
                            except ValueError:
                                self._logger.debug("push_feed_non_json_frame")
                                continue
                            if isinstance(payload, dict):
                                yield cast(dict[str, Any], payload)
                        elif msg.type == aiohttp.WSMsgType.ERROR:
                            raise StreamConnectionError(f"Push feed error: {ws.exception()}")
                    close_code = ws.close_code
        except aiohttp.ClientError as e:
            raise StreamConnectionError(f"Push feed connection failed: {e}") from e
        raise StreamConnectionError(f"Push feed closed (code={close_code})")
