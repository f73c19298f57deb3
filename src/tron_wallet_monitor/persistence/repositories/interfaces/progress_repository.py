"""Abstract interfaces for activity-source progress state (watermarks, seen hashes)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IWatermarkRepository(ABC):
    """Stores the per-wallet watermark map (lowercased address -> epoch ms)."""

    @abstractmethod
    async def load(self) -> dict[str, int]:
        """Return the last saved map, or an empty one if nothing was saved."""
        ...

    @abstractmethod
    async def save(self, watermarks: dict[str, int]) -> None:
        """Replace the stored map wholesale.

        Raises:
            StatePersistenceError: If the state cannot be written.
        """
        ...


class ISeenHashRepository(ABC):
    """Stores the bounded seen-hash list of the streaming source, oldest first."""

    @abstractmethod
    async def load(self) -> list[str]:
        ...

    @abstractmethod
    async def save(self, hashes: list[str]) -> None:
        """Replace the stored list wholesale.

        Raises:
            StatePersistenceError: If the state cannot be written.
        """
        ...
