"""Durable holding area for entries created while disconnected."""

import logging
from pathlib import Path

from .json_store import JsonDocument

logger = logging.getLogger(__name__)


class OfflineQueue:
    """Entries awaiting sync, kept in their own file.

    The queue is independent of the main entry collection so it survives a
    reload even if the collection snapshot is lost or replaced.
    """

    def __init__(self, file_path: Path):
        self.document = JsonDocument(file_path)

    @property
    def file_path(self) -> Path:
        return self.document.file_path

    def load(self) -> list[dict]:
        return self.document.read()

    def __len__(self) -> int:
        return len(self.load())

    def append(self, entry: dict) -> bool:
        """Queue one entry. Returns False when it could not be persisted."""
        try:
            self.document.update(lambda entries: entries.append(dict(entry)))
        except OSError as exc:
            logger.error("[Queue] Failed to persist offline entry: %s", exc)
            return False
        logger.info(
            "[Queue] Queued offline entry id=%s team=%s match=%s",
            entry.get("id"),
            entry.get("teamNumber"),
            entry.get("matchNumber"),
        )
        return True

    def clear(self) -> None:
        """Remove the queue file entirely."""
        self.file_path.unlink(missing_ok=True)
        logger.info("[Queue] Cleared offline queue: %s", self.file_path)
