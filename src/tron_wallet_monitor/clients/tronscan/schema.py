"""TypedDict schemas for Tronscan API responses (only the fields we read)."""

from __future__ import annotations

from typing import TypedDict


class TokenInfoSchema(TypedDict, total=False):
    """Nested token metadata. The filter API uses token*-prefixed keys, the feed plain ones."""

    tokenName: str
    tokenAbbr: str
    tokenDecimal: int
    tokenLogo: str
    tokenType: str
    name: str
    abbr: str
    decimal: int
    logo: str
    type: str


class Trc20TransferSchema(TypedDict, total=False):
    """Item of GET /api/filter/trc20/transfers -> token_transfers."""

    transaction_id: str
    from_address: str
    to_address: str
    quant: str
    block_ts: int
    block: int
    confirmed: bool
    tokenInfo: TokenInfoSchema


class StreamTransferSchema(TypedDict, total=False):
    """Item of a push feed message -> latest_transaction_info.data."""

    hash: str
    ownerAddress: str
    toAddress: str
    toAddressList: list[str]
    amount: str
    timestamp: int
    block: int
    contractType: int
    tokenInfo: TokenInfoSchema


class AssetOverviewSchema(TypedDict, total=False):
    """GET /api/account/token_asset_overview."""

    totalAssetInTrx: float
    totalAssetInUsd: float
    totalTokenCount: int
