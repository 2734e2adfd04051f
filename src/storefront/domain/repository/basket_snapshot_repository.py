"""Abstract repository for the basket's session snapshot."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BasketSnapshotRepository(ABC):

    @abstractmethod
    def load(self) -> dict[str, Any] | None:
        """Return the last saved snapshot, or None if there is none."""

    @abstractmethod
    def save(self, snapshot: dict[str, Any]) -> None:
        """Persist a snapshot, replacing the previous one."""

    @abstractmethod
    def clear(self) -> None:
        """Forget any saved snapshot."""
