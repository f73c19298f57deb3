"""Identity helpers for raw transfer records."""

from __future__ import annotations

from typing import Any


def transfer_hash(record: dict[str, Any]) -> str | None:
    """Return the transaction hash of a raw transfer record.

    Polling records carry ``transaction_id``; streamed records carry ``hash``.
    Empty strings count as missing.
    """
    for field in ("transaction_id", "hash", "transactionHash"):
        value = record.get(field)
        if isinstance(value, str) and value:
            return value
    return None


def transfer_timestamp(record: dict[str, Any]) -> int:
    """Return the server timestamp (epoch ms) of a raw record, 0 when absent or malformed."""
    value = record.get("block_ts")
    if value is None:
        value = record.get("timestamp")
    try:
        return int(value) if value is not None else 0
    except (TypeError, ValueError):
        return 0
