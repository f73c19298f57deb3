# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/ and json_file/."""

from tron_wallet_monitor.persistence.repositories.interfaces.progress_repository import (
    ISeenHashRepository,
    IWatermarkRepository,
)
from tron_wallet_monitor.persistence.repositories.interfaces.wallet_repository import (
    IWalletRepository,
)

__all__ = [
    "ISeenHashRepository",
    "IWalletRepository",
    "IWatermarkRepository",
]
