# -*- coding: utf-8 -*-
"""Event bus and event types."""

from tron_wallet_monitor.events.bus import get_event_bus, set_event_bus
from tron_wallet_monitor.events.monitor_events import (
    SourceConnectedEvent,
    SourceDisconnectedEvent,
    SourceErrorEvent,
    TransactionDetectedEvent,
)

__all__ = [
    "get_event_bus",
    "set_event_bus",
    "SourceConnectedEvent",
    "SourceDisconnectedEvent",
    "SourceErrorEvent",
    "TransactionDetectedEvent",
]
