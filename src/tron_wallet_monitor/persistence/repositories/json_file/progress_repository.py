# -*- coding: utf-8 -*-
"""JSON-file progress repositories (wallet-timestamps.json, seen-hashes.json)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

import structlog

from tron_wallet_monitor.persistence.repositories.interfaces.progress_repository import (
    ISeenHashRepository,
    IWatermarkRepository,
)
from tron_wallet_monitor.persistence.repositories.json_file._json_io import read_json, write_json

WATERMARK_FILE_NAME = "wallet-timestamps.json"
SEEN_HASHES_FILE_NAME = "seen-hashes.json"


class JsonWatermarkRepository(IWatermarkRepository):
    """Watermark map stored as a JSON object, rewritten wholesale on each save."""

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @classmethod
    def in_dir(cls, state_dir: str | Path) -> JsonWatermarkRepository:
        return cls(Path(state_dir) / WATERMARK_FILE_NAME)

    async def load(self) -> dict[str, int]:
        data = await read_json(self._path)
        if data is None:
            return {}
        if not isinstance(data, dict):
            self._logger.warning(
                "watermark_file_unexpected_shape",
                state_path=str(self._path),
                state_type=type(data).__name__,
            )
            return {}
        result: dict[str, int] = {}
        for address, ts in cast(dict[str, Any], data).items():
            try:
                result[str(address).lower()] = int(ts)
            except (TypeError, ValueError):
                continue
        self._logger.info("watermark_loaded", state_wallets_count=len(result))
        return result

    async def save(self, watermarks: dict[str, int]) -> None:
        await write_json(self._path, watermarks)
        self._logger.debug("watermark_saved", state_wallets_count=len(watermarks))


class JsonSeenHashRepository(ISeenHashRepository):
    """Seen-hash list stored as a JSON array, oldest first."""

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @classmethod
    def in_dir(cls, state_dir: str | Path) -> JsonSeenHashRepository:
        return cls(Path(state_dir) / SEEN_HASHES_FILE_NAME)

    async def load(self) -> list[str]:
        data = await read_json(self._path)
        if not isinstance(data, list):
            return []
        return [h for h in cast(list[Any], data) if isinstance(h, str) and h]

    async def save(self, hashes: list[str]) -> None:
        await write_json(self._path, hashes)
        self._logger.debug("seen_hashes_saved", state_hashes_count=len(hashes))
