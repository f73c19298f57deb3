"""Events published by the activity sources.

Subscribers (presentation surface, MonitorPipeline) register with
``bus.on(EventType, handler)`` or ``source.subscribe(EventType, handler)``.
"""

from __future__ import annotations

from typing import Literal

from bubus import BaseEvent  # type: ignore[import-untyped]

from tron_wallet_monitor.models.transfer import TransferEvent

SourceKind = Literal["polling", "streaming"]


class SourceConnectedEvent(BaseEvent[None]):
    """The source started, or the streaming feed (re)connected."""

    source: SourceKind


class SourceDisconnectedEvent(BaseEvent[None]):
    """The source stopped, or the streaming feed dropped."""

    source: SourceKind
    reason: str | None = None


class SourceErrorEvent(BaseEvent[None]):
    """Advisory error report; the source keeps running."""

    source: SourceKind
    detail: str
    error_type: str | None = None


class TransactionDetectedEvent(BaseEvent[None]):
    """A new enriched transfer, delivered oldest first per wallet."""

    source: SourceKind
    transfer: TransferEvent
