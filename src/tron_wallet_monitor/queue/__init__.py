# -*- coding: utf-8 -*-
"""Outbound job queue."""

from tron_wallet_monitor.queue.base import IJobQueue
from tron_wallet_monitor.queue.in_memory_queue import InMemoryJobQueue
from tron_wallet_monitor.queue.messages import QueuedJob

__all__ = [
    "IJobQueue",
    "InMemoryJobQueue",
    "QueuedJob",
]
