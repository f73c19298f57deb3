"""Turn raw Tronscan transfer records into TransferEvent.

Everything here is pure: the same record and registry always give the same
event. Two record shapes are accepted:

- filter API (polling): transaction_id, from_address, to_address, quant,
  block_ts, block, tokenInfo{tokenName, tokenAbbr, tokenDecimal, ...}
- push feed (streaming): hash, ownerAddress, toAddress, toAddressList,
  amount, timestamp, block, tokenInfo{name, abbr, decimal, ...}
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, cast

from tron_wallet_monitor.models.transfer import Direction, Party, TokenInfo, TransferEvent
from tron_wallet_monitor.models.wallet import Wallet, WalletRegistry
from tron_wallet_monitor.utils.dedupe import transfer_hash, transfer_timestamp
from tron_wallet_monitor.utils.validation import normalize_address


def format_amount(raw_quantity: Any, decimals: int | None) -> str:
    """Scale an integer token quantity by 10**decimals.

    >>> format_amount("1500000", 6)
    '1.500000'
    >>> format_amount(42, 0)
    '42'
    >>> format_amount("1500000", None)
    '0'
    """
    if decimals is None or raw_quantity is None or raw_quantity == "":
        return "0"
    try:
        quantity = Decimal(str(raw_quantity))
        places = int(decimals)
    except (InvalidOperation, TypeError, ValueError):
        return "0"
    if places < 0 or not quantity.is_finite():
        return "0"
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(quantity.as_tuple().digits) + places + 2)
        scaled = abs(quantity).scaleb(-places)
        return f"{scaled.quantize(Decimal(1).scaleb(-places)):f}"


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return None


def token_info_from(record: Mapping[str, Any]) -> TokenInfo:
    """Read token metadata from either record shape."""
    raw = record.get("tokenInfo")
    info = cast(dict[str, Any], raw) if isinstance(raw, dict) else {}
    decimals_raw = _first(info, "tokenDecimal", "decimal", "decimals")
    try:
        decimals = int(decimals_raw) if decimals_raw is not None else None
    except (TypeError, ValueError):
        decimals = None
    return TokenInfo(
        name=str(_first(info, "tokenName", "name") or ""),
        abbreviation=str(_first(info, "tokenAbbr", "abbr") or ""),
        decimals=decimals,
        logo_ref=_first(info, "tokenLogo", "logo"),
        kind=_first(info, "tokenType", "type"),
    )


def sender_of(record: Mapping[str, Any]) -> str:
    return str(_first(record, "from_address", "ownerAddress") or "")


def recipients_of(record: Mapping[str, Any]) -> list[str]:
    """Primary recipient first, then any toAddressList entries, without duplicates."""
    found: list[str] = []
    primary = _first(record, "to_address", "toAddress")
    if primary:
        found.append(str(primary))
    extra = record.get("toAddressList")
    if isinstance(extra, list):
        for addr in cast(list[Any], extra):
            if addr and str(addr) not in found:
                found.append(str(addr))
    return found


def classify_direction(
    record: Mapping[str, Any],
    registry: WalletRegistry,
    *,
    focus: Wallet | None = None,
) -> tuple[Direction | None, tuple[Wallet, ...]]:
    """Return the direction of record and the watched wallets it touches.

    Both sides watched -> INTERNAL. Otherwise, with a focus wallet (polling),
    IN when the focus wallet is the recipient and OUT when it is not. Without
    a focus (streaming), OUT when only the sender is watched and IN when only
    a recipient is. None when nothing matches.
    """
    sender = registry.find(sender_of(record))
    receivers = [w for w in (registry.find(a) for a in recipients_of(record)) if w is not None]

    matched: list[Wallet] = []
    for w in ([sender] if sender else []) + receivers:
        if w not in matched:
            matched.append(w)

    if sender is not None and receivers:
        return Direction.INTERNAL, tuple(matched)
    if focus is not None:
        recipient_keys = {normalize_address(a) for a in recipients_of(record)}
        direction = Direction.IN if focus.key in recipient_keys else Direction.OUT
        if focus not in matched:
            matched.append(focus)
        return direction, tuple(matched)
    if sender is not None:
        return Direction.OUT, tuple(matched)
    if receivers:
        return Direction.IN, tuple(matched)
    return None, ()


def enrich_transfer(
    record: Mapping[str, Any],
    registry: WalletRegistry,
    *,
    direction: Direction | None,
    matched_wallets: tuple[Wallet, ...] = (),
) -> TransferEvent:
    """Build the TransferEvent for record; direction comes from the source's classification.

    Raises:
        ValueError: If the record has no transaction hash.
    """
    tx_hash = transfer_hash(dict(record))
    if tx_hash is None:
        raise ValueError("transfer record has no transaction hash")
    token = token_info_from(record)
    sender = sender_of(record)
    recipients = recipients_of(record)
    recipient = recipients[0] if recipients else ""
    block_raw = record.get("block")
    try:
        block = int(block_raw) if block_raw is not None else None
    except (TypeError, ValueError):
        block = None
    return TransferEvent(
        hash=tx_hash,
        from_party=Party(address=sender, name=registry.name_of(sender)),
        to_party=Party(address=recipient, name=registry.name_of(recipient)),
        amount=format_amount(_first(record, "quant", "amount"), token.decimals),
        token=token,
        direction=direction,
        timestamp=transfer_timestamp(dict(record)),
        block=block,
        matched_wallets=matched_wallets,
        raw=dict(record),
    )
