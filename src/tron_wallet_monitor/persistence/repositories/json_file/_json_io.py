# -*- coding: utf-8 -*-
"""Whole-file JSON read/write helpers shared by the file repositories."""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from tron_wallet_monitor.exceptions import StatePersistenceError


def _read(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def _write_atomic(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


async def read_json(path: Path) -> Any | None:
    """Return the decoded file, or None if it does not exist.

    Raises:
        StatePersistenceError: If the file exists but cannot be read or decoded.
    """
    if not path.exists():
        return None
    try:
        return await asyncio.to_thread(_read, path)
    except (OSError, ValueError) as e:
        raise StatePersistenceError(f"Cannot read {path}: {e}") from e


async def write_json(path: Path, data: Any) -> None:
    """Replace path with data via a temp file in the same directory.

    Raises:
        StatePersistenceError: If the write fails.
    """
    try:
        await asyncio.to_thread(_write_atomic, path, data)
    except (OSError, TypeError, ValueError) as e:
        raise StatePersistenceError(f"Cannot write {path}: {e}") from e
