"""Persistence layer (repositories)."""

from tron_wallet_monitor.persistence.repositories import (
    ISeenHashRepository,
    IWalletRepository,
    IWatermarkRepository,
    InMemorySeenHashRepository,
    InMemoryWalletRepository,
    InMemoryWatermarkRepository,
    JsonSeenHashRepository,
    JsonWalletRepository,
    JsonWatermarkRepository,
)

__all__ = [
    "ISeenHashRepository",
    "IWalletRepository",
    "IWatermarkRepository",
    "InMemorySeenHashRepository",
    "InMemoryWalletRepository",
    "InMemoryWatermarkRepository",
    "JsonSeenHashRepository",
    "JsonWalletRepository",
    "JsonWatermarkRepository",
]
