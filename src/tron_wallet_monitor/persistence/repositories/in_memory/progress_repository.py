# -*- coding: utf-8 -*-
"""In-memory progress repositories (tests and ephemeral runs)."""

from __future__ import annotations

from tron_wallet_monitor.persistence.repositories.interfaces.progress_repository import (
    ISeenHashRepository,
    IWatermarkRepository,
)


class InMemoryWatermarkRepository(IWatermarkRepository):
    """Keeps the last saved watermark map; counts saves for write-amplification checks."""

    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self._store: dict[str, int] = dict(initial or {})
        self.save_count = 0

    async def load(self) -> dict[str, int]:
        return dict(self._store)

    async def save(self, watermarks: dict[str, int]) -> None:
        self._store = dict(watermarks)
        self.save_count += 1


class InMemorySeenHashRepository(ISeenHashRepository):
    def __init__(self, initial: list[str] | None = None) -> None:
        self._store: list[str] = list(initial or [])
        self.save_count = 0

    async def load(self) -> list[str]:
        return list(self._store)

    async def save(self, hashes: list[str]) -> None:
        self._store = list(hashes)
        self.save_count += 1
