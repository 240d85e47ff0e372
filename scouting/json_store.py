"""Whole-document JSON persistence helpers."""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


def _atomic_write_text(file_path: Path, content: str) -> None:
    """Write text atomically using temporary sibling file."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=file_path.parent,
        delete=False,
        prefix=f".{file_path.name}.",
        suffix=".tmp",
    ) as handle:
        handle.write(content)
        handle.flush()
        os.fsync(handle.fileno())
        temp_path = Path(handle.name)
    temp_path.replace(file_path)


class JsonDocument:
    """A JSON list persisted as one file and rewritten as a whole.

    Every read-modify-write goes through ``update`` so concurrent request
    handlers in the same process never interleave their snapshots.
    """

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        self._lock = threading.RLock()

    def ensure_exists(self) -> None:
        """Create an empty document if the file is missing."""
        with self._lock:
            if not self.file_path.exists():
                _atomic_write_text(self.file_path, "[]")
                logger.info("[Store] Initialized empty document: %s", self.file_path)

    def read(self) -> list:
        """Return the stored list, or an empty list when unreadable."""
        with self._lock:
            if not self.file_path.exists():
                return []
            try:
                data = json.loads(self.file_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                logger.error("[Store] Error reading from %s: %s", self.file_path, exc)
                return []
            if not isinstance(data, list):
                logger.warning(
                    "[Store] Document %s was not a JSON array; ignoring", self.file_path
                )
                return []
            return data

    def write(self, data: list) -> None:
        """Replace the stored document."""
        with self._lock:
            _atomic_write_text(self.file_path, json.dumps(data, indent=2, default=str))
            logger.debug("[Store] Wrote %s records to %s", len(data), self.file_path)

    def update(self, mutate):
        """Apply ``mutate`` to the current list under the lock and persist it.

        ``mutate`` receives the list and may change it in place; its return
        value is passed back to the caller.
        """
        with self._lock:
            data = self.read()
            result = mutate(data)
            self.write(data)
            return result
