"""JSON-file-backed implementation of BasketSnapshotRepository."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from storefront.domain.repository.basket_snapshot_repository import (
    BasketSnapshotRepository,
)

logger = logging.getLogger(__name__)


class JsonBasketSnapshotRepository(BasketSnapshotRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- BasketSnapshotRepository interface -----------------------------------

    def load(self) -> dict[str, Any] | None:
        if not self._file_path.exists():
            return None
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable basket snapshot %s: %s", self._file_path, exc)
            return None
        if not isinstance(raw, dict):
            logger.warning("Ignoring basket snapshot %s: not a JSON object", self._file_path)
            return None
        return raw

    def save(self, snapshot: dict[str, Any]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(
            json.dumps(snapshot, indent=2) + "\n", encoding="utf-8"
        )

    def clear(self) -> None:
        self._file_path.unlink(missing_ok=True)
