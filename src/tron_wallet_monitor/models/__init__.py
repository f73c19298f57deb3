# -*- coding: utf-8 -*-
"""Domain models."""

from tron_wallet_monitor.models.balance import BalanceReport, BalanceSnapshot
from tron_wallet_monitor.models.progress import SeenHashCache, Watermark
from tron_wallet_monitor.models.transfer import Direction, Party, TokenInfo, TransferEvent
from tron_wallet_monitor.models.wallet import Wallet, WalletRegistry

__all__ = [
    "BalanceReport",
    "BalanceSnapshot",
    "Direction",
    "Party",
    "SeenHashCache",
    "TokenInfo",
    "TransferEvent",
    "Wallet",
    "WalletRegistry",
    "Watermark",
]
