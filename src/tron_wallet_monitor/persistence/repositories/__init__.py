# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, json_file)."""

from tron_wallet_monitor.persistence.repositories.interfaces import (
    ISeenHashRepository,
    IWalletRepository,
    IWatermarkRepository,
)
from tron_wallet_monitor.persistence.repositories.in_memory import (
    InMemorySeenHashRepository,
    InMemoryWalletRepository,
    InMemoryWatermarkRepository,
)
from tron_wallet_monitor.persistence.repositories.json_file import (
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
