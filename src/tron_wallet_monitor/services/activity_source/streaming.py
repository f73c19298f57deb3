# -*- coding: utf-8 -*-
"""Streaming activity source: listens to the Tronscan push feed and filters by watched wallets."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Optional

import structlog

from tron_wallet_monitor.clients.tronscan.push_feed import extract_transfers
from tron_wallet_monitor.events.monitor_events import SourceConnectedEvent, SourceDisconnectedEvent, SourceKind
from tron_wallet_monitor.exceptions import StatePersistenceError, StreamConnectionError
from tron_wallet_monitor.models.progress import SeenHashCache
from tron_wallet_monitor.models.wallet import Wallet
from tron_wallet_monitor.services.activity_source.base import BaseActivitySource
from tron_wallet_monitor.services.enrichment import classify_direction
from tron_wallet_monitor.utils.dedupe import transfer_hash

if TYPE_CHECKING:
    from tron_wallet_monitor.clients.tronscan import PushFeedClient
    from tron_wallet_monitor.config import Settings
    from tron_wallet_monitor.persistence.repositories.interfaces import ISeenHashRepository
    from tron_wallet_monitor.services.credentials import ApiKeyAllocator


class StreamingActivitySource(BaseActivitySource):
    """Tracks wallets from the network-wide push feed.

    Every transfer hash is checked against a bounded seen cache before any
    matching, so a hash is delivered at most once. On disconnect the source
    emits error and disconnected, then reconnects after reconnect_seconds
    until stopped.
    """

    kind: SourceKind = "streaming"

    def __init__(
        self,
        settings: "Settings",
        event_bus: Any,
        key_allocator: "ApiKeyAllocator",
        feed: "PushFeedClient",
        seen_repository: "ISeenHashRepository",
        *,
        wallets: Iterable[Wallet] = (),
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            settings,
            event_bus,
            key_allocator,
            wallets=wallets,
            get_logger=get_logger,
            logger_name=logger_name,
        )
        self._feed = feed
        self._seen_repo = seen_repository
        self._seen = SeenHashCache(max_size=settings.monitoring.seen_cache_size)
        self._dirty = False
        self._opened_once = False

    @property
    def seen(self) -> SeenHashCache:
        return self._seen

    def _connected_on_start(self) -> bool:
        return False

    async def _load_state(self) -> None:
        try:
            stored = await self._seen_repo.load()
        except StatePersistenceError as e:
            self._logger.error("streaming_seen_load_failed", error_message=str(e))
            return
        for tx_hash in stored:
            self._seen.add(tx_hash)

    async def _flush_state(self) -> None:
        if not self._dirty:
            return
        try:
            await self._seen_repo.save(self._seen.to_list())
        except StatePersistenceError as e:
            self._logger.error("streaming_seen_save_failed", error_message=str(e))
            return
        self._dirty = False

    async def _halt(self) -> None:
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _on_feed_open(self) -> None:
        self._connected = True
        self._logger.info("streaming_feed_connected", streaming_reconnect=self._opened_once)
        if self._opened_once:
            self._emit(SourceConnectedEvent(source=self.kind))
        self._opened_once = True

    async def _run(self, stop: asyncio.Event) -> None:
        reconnect_seconds = self._settings.monitoring.reconnect_seconds
        while not stop.is_set():
            try:
                async for message in self._feed.stream(self._on_feed_open):
                    self.handle_message(message)
                error: BaseException = StreamConnectionError("Push feed ended")
            except StreamConnectionError as e:
                error = e
            except Exception as e:
                self._logger.exception("streaming_loop_failed", error_type=type(e).__name__)
                error = e

            self._connected = False
            if stop.is_set():
                break
            self._logger.warning(
                "streaming_feed_disconnected",
                error_message=str(error),
                streaming_reconnect_seconds=reconnect_seconds,
            )
            self._emit_error(error)
            self._emit(SourceDisconnectedEvent(source=self.kind, reason=str(error)))
            await self._flush_state()
            if await self._sleep_unless_stopped(reconnect_seconds, stop):
                break
        self._logger.debug("streaming_loop_exited")

    def handle_message(self, message: dict[str, Any]) -> int:
        """Filter one feed message and publish the matching transfers. Returns how many were published."""
        registry = self._registry
        emit_unmatched = self._settings.monitoring.emit_unmatched
        published = 0
        for t in extract_transfers(message):
            record = dict(t)
            tx_hash = transfer_hash(record)
            if tx_hash is None or not self._seen.add(tx_hash):
                continue
            self._dirty = True
            direction, matched = classify_direction(record, registry)
            if not matched:
                if not emit_unmatched:
                    continue
                self._logger.warning("streaming_transfer_unmatched", transfer_hash=tx_hash)
            if self._emit_transfer(record, registry, direction, matched):
                published += 1
        return published
