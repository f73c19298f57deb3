"""Progress state owned by the activity sources.

Watermark: per-wallet newest delivered timestamp (polling).
SeenHashCache: bounded set of delivered transfer hashes (streaming).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from tron_wallet_monitor.utils.validation import normalize_address


class Watermark:
    """Lowercased address -> epoch-ms of the newest delivered transfer. Never decreases."""

    def __init__(self, values: Mapping[str, int] | None = None) -> None:
        self._values: dict[str, int] = {}
        for address, ts in (values or {}).items():
            self.advance(address, ts)

    def get(self, address: str) -> int:
        return self._values.get(normalize_address(address), 0)

    def advance(self, address: str, timestamp: int) -> bool:
        """Move the cursor forward to timestamp. Returns True if it moved."""
        key = normalize_address(address)
        try:
            ts = int(timestamp)
        except (TypeError, ValueError):
            return False
        current = self._values.get(key)
        if current is not None and ts <= current:
            return False
        self._values[key] = ts
        return True

    def to_dict(self) -> dict[str, int]:
        return dict(self._values)

    def __len__(self) -> int:
        return len(self._values)


class SeenHashCache:
    """Insertion-ordered set of hashes with a hard cap.

    When an insert pushes the size over max_size, the oldest half of the cap
    is dropped in one batch.
    """

    def __init__(self, max_size: int = 1000, hashes: Iterable[str] = ()) -> None:
        if max_size < 2:
            raise ValueError("max_size must be >= 2")
        self._max_size = max_size
        self._evict_count = max_size // 2
        self._hashes: dict[str, None] = {}
        for h in hashes:
            self.add(h)

    @property
    def max_size(self) -> int:
        return self._max_size

    def __contains__(self, tx_hash: object) -> bool:
        return tx_hash in self._hashes

    def __len__(self) -> int:
        return len(self._hashes)

    def add(self, tx_hash: str) -> bool:
        """Insert tx_hash. Returns False if it was already present."""
        if tx_hash in self._hashes:
            return False
        self._hashes[tx_hash] = None
        if len(self._hashes) > self._max_size:
            for old in list(self._hashes)[: self._evict_count]:
                del self._hashes[old]
        return True

    def to_list(self) -> list[str]:
        """Hashes oldest first."""
        return list(self._hashes)
