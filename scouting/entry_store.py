"""Client-side view of scouting entries for the active session."""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Callable

from .api_client import ApiError, OfflineError, ScoutingApiClient
from .json_store import JsonDocument
from .offline_queue import OfflineQueue

logger = logging.getLogger(__name__)


def team_key_for(entry: dict) -> str:
    """Return the ``frc<number>`` key of an entry's team."""
    key = entry.get("teamKey")
    if key:
        return str(key)
    number = str(entry.get("teamNumber") or "").strip()
    return f"frc{number}" if number else ""


class EntryStore:
    """In-memory entry collection snapshotted to local storage.

    Args:
        api: Client used for network writes
        entries_path: File holding the full entry collection
        queue: Offline queue that receives entries submitted while offline
        is_online: Probe for connectivity; a failed write while this reports
            False is treated as offline even if the error was not a
            connection failure
    """

    def __init__(
        self,
        api: ScoutingApiClient,
        entries_path: Path,
        queue: OfflineQueue,
        is_online: Callable[[], bool] | None = None,
    ):
        self.api = api
        self.queue = queue
        self.is_online = is_online or (lambda: True)
        self.document = JsonDocument(entries_path)
        self.entries: list[dict] = []
        self.error: str | None = None
        self.loading = False
        self._load()

    def _load(self) -> None:
        self.entries = self.document.read()
        logger.debug("[Store] Loaded %s entries", len(self.entries))

    def _persist(self) -> None:
        try:
            self.document.write(self.entries)
        except OSError as exc:
            self.error = "Failed to save scouting data to storage"
            logger.error("[Store] Error saving scouting data: %s", exc)

    def replace_entries(self, entries: list[dict]) -> None:
        """Swap in a new collection and snapshot it to storage."""
        self.entries = entries
        self._persist()

    def clear_error(self) -> None:
        self.error = None

    def submit_scouting_entry(self, entry: dict) -> dict:
        """Send an entry to the server, queueing it locally when offline.

        Returns:
            The server's stored record, or the local unsynced copy when offline

        Raises:
            ApiError: For server errors; nothing is appended in that case
        """
        self.loading = True
        try:
            created = self.api.create_entry(entry)
        except ApiError as exc:
            if isinstance(exc, OfflineError) or not self.is_online():
                return self._store_offline(entry)
            self.error = "Failed to submit scouting entry."
            logger.error("[Store] Error submitting scouting entry: %s", exc)
            raise
        finally:
            self.loading = False

        self.replace_entries(self.entries + [created])
        logger.info(
            "[Store] Entry submitted id=%s team=%s match=%s",
            created.get("id"),
            created.get("teamNumber"),
            created.get("matchNumber"),
        )
        return created

    def _store_offline(self, entry: dict) -> dict:
        local = dict(entry)
        local["timestamp"] = local.get("timestamp") or datetime.datetime.now(
            datetime.timezone.utc
        ).isoformat()
        local["synced"] = False
        self.queue.append(local)
        self.replace_entries(self.entries + [local])
        logger.info("[Store] Offline; stored entry id=%s locally", local.get("id"))
        return local

    def fetch_scouting_data(self, season_id: str, team_number: str | None = None):
        """Replace the collection with the server's entries for a season."""
        if not season_id:
            return []
        self.loading = True
        try:
            entries = self.api.list_entries(season_id, team_number)
        except ApiError as exc:
            self.error = "Failed to fetch scouting data."
            logger.error("[Store] Error fetching scouting data: %s", exc)
            return []
        finally:
            self.loading = False
        self.replace_entries(list(entries))
        return entries

    def add_entry(self, entry: dict) -> dict:
        self.error = None
        new_entry = dict(entry)
        if not new_entry.get("id"):
            new_entry["id"] = str(int(datetime.datetime.now().timestamp() * 1000))
        self.replace_entries(self.entries + [new_entry])
        return new_entry

    def get_entry(self, entry_id: str) -> dict | None:
        return next((e for e in self.entries if e.get("id") == entry_id), None)

    def get_entries_by_team(self, team_key: str) -> list[dict]:
        return [e for e in self.entries if team_key_for(e) == team_key]

    def get_entries_by_event(self, event_key: str) -> list[dict]:
        return [e for e in self.entries if e.get("eventKey") == event_key]

    def delete_entry(self, entry_id: str) -> None:
        self.error = None
        self.replace_entries([e for e in self.entries if e.get("id") != entry_id])

    def clear_all_entries(self) -> None:
        self.error = None
        self.replace_entries([])
