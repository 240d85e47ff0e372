"""Server-side persistence of scouting entries."""

from __future__ import annotations

import datetime
import logging
import uuid
from pathlib import Path

from .constants import DATA_POINTS_PER_ENTRY
from .json_store import JsonDocument

logger = logging.getLogger(__name__)


def _parse_timestamp(value) -> datetime.datetime | None:
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def _stamp_entry(entry: dict) -> dict:
    """Apply server defaults to an incoming entry."""
    stored = dict(entry)
    stored["id"] = entry.get("id") or str(uuid.uuid4())
    stored["timestamp"] = (
        entry.get("timestamp")
        or datetime.datetime.now(datetime.timezone.utc).isoformat()
    )
    stored["synced"] = True
    return stored


class ScoutingEntryRepository:
    """Append-only entry collection stored as one JSON document.

    Writes never de-duplicate: the same logical entry delivered twice is
    stored twice.
    """

    def __init__(self, file_path: Path):
        self.document = JsonDocument(file_path)
        self.document.ensure_exists()

    def all(self) -> list[dict]:
        return self.document.read()

    def create(self, entry: dict) -> dict:
        stored = _stamp_entry(entry)
        self.document.update(lambda entries: entries.append(stored))
        logger.info(
            "[Entries] Created id=%s season=%s team=%s match=%s",
            stored["id"],
            stored.get("seasonId"),
            stored.get("teamNumber"),
            stored.get("matchNumber"),
        )
        return stored

    def bulk_create(self, entries: list[dict]) -> list[dict]:
        created = [_stamp_entry(entry) for entry in entries]
        self.document.update(lambda existing: existing.extend(created))
        logger.info("[Entries] Bulk created %s entries", len(created))
        return created

    def find_by_season_id(self, season_id: str) -> list[dict]:
        return [e for e in self.all() if str(e.get("seasonId")) == str(season_id)]

    def find_by_team(self, season_id: str, team_number) -> list[dict]:
        return [
            e
            for e in self.find_by_season_id(season_id)
            if str(e.get("teamNumber")) == str(team_number)
        ]

    def find_by_match(self, season_id: str, match_number) -> list[dict]:
        return [
            e
            for e in self.find_by_season_id(season_id)
            if str(e.get("matchNumber")) == str(match_number)
        ]

    def delete_by_season_id(self, season_id: str) -> int:
        """Remove every entry of a season. Returns the number removed."""

        def _remove(entries: list) -> int:
            kept = [e for e in entries if str(e.get("seasonId")) != str(season_id)]
            removed = len(entries) - len(kept)
            entries[:] = kept
            return removed

        removed = self.document.update(_remove)
        logger.info("[Entries] Deleted %s entries for season=%s", removed, season_id)
        return removed

    def get_stats(self) -> dict:
        entries = self.all()
        teams = {str(e.get("teamNumber")) for e in entries}
        timestamps = [
            ts for ts in (_parse_timestamp(e.get("timestamp")) for e in entries) if ts
        ]
        last_updated = max(timestamps).isoformat() if timestamps else None
        return {
            "totalMatches": len(entries),
            "totalTeams": len(teams),
            "dataPoints": len(entries) * DATA_POINTS_PER_ENTRY,
            "lastUpdated": last_updated,
        }
