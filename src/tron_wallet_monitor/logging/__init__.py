"""Logging setup (structlog + Logfire)."""

from tron_wallet_monitor.logging.config import configure_logging

__all__ = ["configure_logging"]
