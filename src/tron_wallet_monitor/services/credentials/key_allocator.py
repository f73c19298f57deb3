"""Round-robin API key rotation."""

from __future__ import annotations

from collections.abc import Iterable


class ApiKeyAllocator:
    """Hands out API keys in strict rotation.

    The key set is an immutable tuple replaced only by update(). There is no
    per-key health tracking: a failing key keeps its turn.
    """

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._keys: tuple[str, ...] = tuple(k for k in keys if k)
        self._cursor = 0

    def next(self) -> str:
        """Return the key at the cursor and advance. "" when no keys are configured."""
        if not self._keys:
            return ""
        key = self._keys[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._keys)
        return key

    def update(self, keys: Iterable[str]) -> None:
        """Replace the key set and restart the rotation from the first key."""
        self._keys = tuple(k for k in keys if k)
        self._cursor = 0

    def count(self) -> int:
        return len(self._keys)

    def has_any(self) -> bool:
        return bool(self._keys)
