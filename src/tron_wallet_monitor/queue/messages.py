"""Queued job envelope."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field

_sequence = itertools.count(1)


@dataclass(frozen=True, slots=True)
class QueuedJob[T]:
    """One unit of outbound work: the formatted payload and the channel it is for."""

    payload: T
    destination: str
    seq: int = field(default_factory=lambda: next(_sequence))
    enqueued_at: float = field(default_factory=time.monotonic)

    def waited(self, now: float | None = None) -> float:
        """Seconds since the job was queued."""
        return (time.monotonic() if now is None else now) - self.enqueued_at
