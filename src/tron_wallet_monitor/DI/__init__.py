"""Dependency injection."""

from tron_wallet_monitor.DI.container import Container

__all__ = ["Container"]
