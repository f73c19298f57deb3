"""Exceptions raised by the notification job queue."""

from __future__ import annotations


class QueueError(Exception):
    """Base exception for job queue operations."""


class QueueFull(QueueError):
    """Raised by a non-blocking put when the job queue is at capacity."""


class QueueShutdown(QueueError):
    """Raised once the job queue has been shut down and drained."""
