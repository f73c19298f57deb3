"""Validation helpers for TRON addresses."""

from __future__ import annotations

from typing import Any

_BASE58_ALPHABET = frozenset("123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz")


def is_tron_address(addr: Any) -> bool:
    """Return True if addr looks like a base58 TRON address (T + 33 chars)."""
    if not isinstance(addr, str):
        return False
    s = addr.strip()
    if len(s) != 34 or not s.startswith("T"):
        return False
    return all(ch in _BASE58_ALPHABET for ch in s)


def normalize_address(addr: str | None) -> str:
    """Return the case-insensitive identity key of an address."""
    return (addr or "").strip().lower()


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging (e.g. TXyz12...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"
