"""Transfer enrichment."""

from tron_wallet_monitor.services.enrichment.enricher import (
    classify_direction,
    enrich_transfer,
    format_amount,
    recipients_of,
    sender_of,
    token_info_from,
)

__all__ = [
    "classify_direction",
    "enrich_transfer",
    "format_amount",
    "recipients_of",
    "sender_of",
    "token_info_from",
]
