# -*- coding: utf-8 -*-
"""JSON-file wallet registry store: {"wallets": [{"address": ..., "name": ...}, ...]}."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any, cast

import structlog

from tron_wallet_monitor.exceptions import StatePersistenceError
from tron_wallet_monitor.models.wallet import Wallet
from tron_wallet_monitor.persistence.repositories.interfaces.wallet_repository import (
    IWalletRepository,
)
from tron_wallet_monitor.persistence.repositories.json_file._json_io import read_json, write_json
from tron_wallet_monitor.utils.validation import mask_address, normalize_address


class JsonWalletRepository(IWalletRepository):
    """Wallet list kept in one JSON file. The file is created empty on first use."""

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def list_wallets(self) -> list[Wallet]:
        try:
            data = await read_json(self._path)
        except StatePersistenceError as e:
            self._logger.error(
                "wallet_store_read_failed",
                state_path=str(self._path),
                error_message=str(e),
            )
            return []
        if data is None:
            await self._write([])
            return []
        raw = cast(dict[str, Any], data).get("wallets") if isinstance(data, dict) else None
        wallets: list[Wallet] = []
        for item in cast(list[Any], raw or []):
            if not isinstance(item, dict):
                continue
            try:
                wallets.append(Wallet.from_dict(cast(dict[str, Any], item)))
            except ValueError:
                self._logger.warning("wallet_store_invalid_entry", state_path=str(self._path))
        return wallets

    async def add_wallet(self, wallet: Wallet) -> bool:
        wallets = await self.list_wallets()
        if any(w.key == wallet.key for w in wallets):
            return False
        wallets.append(wallet)
        await self._write(wallets)
        self._logger.info("wallet_added", wallet_masked=mask_address(wallet.address))
        return True

    async def remove_wallet(self, address: str) -> bool:
        key = normalize_address(address)
        wallets = await self.list_wallets()
        kept = [w for w in wallets if w.key != key]
        if len(kept) == len(wallets):
            return False
        await self._write(kept)
        self._logger.info("wallet_removed", wallet_masked=mask_address(address))
        return True

    async def update_wallet(self, address: str, *, name: str | None) -> bool:
        key = normalize_address(address)
        wallets = await self.list_wallets()
        for i, w in enumerate(wallets):
            if w.key == key:
                wallets[i] = replace(w, name=name)
                await self._write(wallets)
                return True
        return False

    async def _write(self, wallets: list[Wallet]) -> None:
        await write_json(self._path, {"wallets": [w.to_dict() for w in wallets]})
