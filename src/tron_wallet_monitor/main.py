# -*- coding: utf-8 -*-
"""
Entry point for the wallet monitor.

Orchestrates: logging, settings, container, pipeline start, shutdown (SIGINT or CancelledError).
Transfers flow: activity source -> event bus -> MonitorPipeline -> NotificationDispatcher -> channel.

Run with: python -m tron_wallet_monitor.main

Notebook usage:
    from tron_wallet_monitor.main import run
    await run()  # Interrupt kernel to stop; system will shut down on CancelledError.
"""
from __future__ import annotations

import asyncio
import signal
import structlog
from typing import Any

from tron_wallet_monitor.DI import Container
from tron_wallet_monitor.config import Settings, get_settings
from tron_wallet_monitor.exceptions import MissingRequiredConfigError
from tron_wallet_monitor.logging.config import configure_logging


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


def _validate_settings(settings: Settings, logger: Any) -> None:
    tg = settings.telegram
    if tg.enabled and not (tg.api_key and tg.chat_id):
        logger.error(
            "main_missing_telegram_config",
            message="TELEGRAM__API_KEY and TELEGRAM__CHAT_ID are required when TELEGRAM__ENABLED is set",
        )
        raise MissingRequiredConfigError("TELEGRAM__API_KEY / TELEGRAM__CHAT_ID")
    if not settings.api.api_keys:
        logger.warning("main_no_api_keys", message="API__API_KEYS is empty; requests go unauthenticated")


async def _do_shutdown(container: Container, logger: Any) -> None:
    """Clean shutdown. Safe to call on normal shutdown or CancelledError."""
    await container.pipeline().stop()
    await container.http_client().aclose()
    logger.info("main_shutdown_complete")


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    _validate_settings(settings, logger)

    container = Container()
    pipeline = container.pipeline()
    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)

    await pipeline.start()
    status = pipeline.status()
    logger.info(
        "main_monitor_started",
        monitor_mode=settings.monitoring.mode,
        source_wallets_count=status.wallet_count,
        source_keys_count=status.credential_count,
        report_enabled=settings.report.enabled,
    )
    if status.wallet_count == 0:
        logger.warning("main_no_wallets", wallet_store_path=settings.wallets.store_path)

    try:
        await shutdown_event.wait()
    except asyncio.CancelledError:
        await _do_shutdown(container, logger)
        raise
    await _do_shutdown(container, logger)


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
