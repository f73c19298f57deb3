# -*- coding: utf-8 -*-
"""Unit tests for TronscanClient requests and push-feed message parsing."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from tron_wallet_monitor.clients.tronscan import TronscanClient, extract_transfers
from tron_wallet_monitor.exceptions import ResponseParseError


def _settings() -> Any:
    return SimpleNamespace(
        api=SimpleNamespace(tronscan_host="https://apilist.tronscanapi.com/", api_key_header="TRON-PRO-API-KEY")
    )


async def test_transfers_request_uses_filter_endpoint_and_key_header() -> None:
    http = SimpleNamespace(get=AsyncMock(return_value={"token_transfers": [{"transaction_id": "a"}, "junk"]}))
    client = TronscanClient(http, _settings())  # type: ignore[arg-type]

    transfers = await client.get_trc20_transfers("TAddr", api_key="key-1", limit=20)

    assert transfers == [{"transaction_id": "a"}]
    call = http.get.await_args
    assert call.args[0] == "https://apilist.tronscanapi.com/api/filter/trc20/transfers"
    assert call.kwargs["params"]["relatedAddress"] == "TAddr"
    assert call.kwargs["params"]["sort"] == "-timestamp"
    assert call.kwargs["params"]["limit"] == 20
    assert call.kwargs["headers"] == {"TRON-PRO-API-KEY": "key-1"}


async def test_transfers_without_list_raise_parse_error() -> None:
    http = SimpleNamespace(get=AsyncMock(return_value={"message": "rate limited"}))
    client = TronscanClient(http, _settings())  # type: ignore[arg-type]

    with pytest.raises(ResponseParseError):
        await client.get_trc20_transfers("TAddr", api_key="")


async def test_asset_overview_request() -> None:
    http = SimpleNamespace(get=AsyncMock(return_value={"totalAssetInUsd": 12.5}))
    client = TronscanClient(http, _settings())  # type: ignore[arg-type]

    overview = await client.get_asset_overview("TAddr", api_key="key-2")

    assert overview["totalAssetInUsd"] == 12.5
    call = http.get.await_args
    assert call.args[0] == "https://apilist.tronscanapi.com/api/account/token_asset_overview"
    assert call.kwargs["params"] == {"address": "TAddr"}


def test_extract_transfers_reads_latest_transaction_info() -> None:
    message = {"latest_transaction_info": {"data": [{"hash": "h1"}, 3, {"hash": "h2"}]}}
    assert [t["hash"] for t in extract_transfers(message)] == ["h1", "h2"]
    assert extract_transfers({"latest_block": {}}) == []
    assert extract_transfers({"latest_transaction_info": {"data": "x"}}) == []
