# -*- coding: utf-8 -*-
"""Utility modules."""

from tron_wallet_monitor.utils.dedupe import transfer_hash, transfer_timestamp
from tron_wallet_monitor.utils.validation import (
    is_tron_address,
    mask_address,
    normalize_address,
)

__all__ = [
    "is_tron_address",
    "mask_address",
    "normalize_address",
    "transfer_hash",
    "transfer_timestamp",
]
