"""
Compression history.

A small JSON-file store of recent compressions, newest first and capped at
a fixed number of entries. Used by the web app and the CLI; the engine
itself never reads or writes it.
"""

import json
import logging
import time
import uuid
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

MAX_HISTORY_ITEMS = 10
PREVIEW_LENGTH = 100


@dataclass
class HistoryItem:
    """One stored compression."""
    id: str
    name: str
    geojson: str
    original_size: int
    compressed_size: int
    compression_ratio: float
    timestamp: int
    preview: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


class HistoryStore:
    """
    Bounded history persisted as a JSON list in a single file.

    Args:
        path: File holding the history
        max_items: Entries kept; older ones are dropped on insert
    """

    def __init__(self, path: Union[str, Path], max_items: int = MAX_HISTORY_ITEMS):
        self.path = Path(path)
        self.max_items = max_items

    def list(self) -> List[HistoryItem]:
        """All entries, newest first."""
        items = self._load()
        return sorted(items, key=lambda item: item.timestamp, reverse=True)

    def get(self, item_id: str) -> Optional[HistoryItem]:
        for item in self._load():
            if item.id == item_id:
                return item
        return None

    def add(
        self,
        name: str,
        geojson: str,
        original_size: int,
        compressed_size: int,
        compression_ratio: float,
    ) -> HistoryItem:
        """Store a new entry at the front, evicting the oldest beyond the cap."""
        item = HistoryItem(
            id=str(uuid.uuid4()),
            name=name,
            geojson=geojson,
            original_size=original_size,
            compressed_size=compressed_size,
            compression_ratio=compression_ratio,
            timestamp=int(time.time() * 1000),
            preview=geojson[:PREVIEW_LENGTH] + "...",
        )

        items = [item] + self.list()
        self._save(items[:self.max_items])
        logger.debug("Added history item %s (%s)", item.id, name)
        return item

    def remove(self, item_id: str) -> bool:
        """Remove an entry. Returns False if no entry had that id."""
        items = self.list()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        self._save(remaining)
        return True

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def _load(self) -> List[HistoryItem]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
            return [HistoryItem(**entry) for entry in raw]
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load history from {self.path}: {e}")
            return []

    def _save(self, items: List[HistoryItem]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump([item.to_dict() for item in items], f)
        tmp_path.replace(self.path)
