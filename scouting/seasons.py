"""Season persistence: teams, matches, and the active scouting config."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from .config_schema import parse_scouting_config
from .json_store import JsonDocument

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """A requested record does not exist."""

    status_code = 404


def _merge_by_number(existing: list[dict], incoming: list[dict]) -> list[dict]:
    """Replace records sharing a ``number`` in place, append the rest."""
    merged: dict[str, dict] = {}
    for record in existing:
        merged[str(record.get("number"))] = record
    for record in incoming:
        merged[str(record.get("number"))] = record
    return list(merged.values())


class SeasonRepository:
    """Seasons stored as one JSON document.

    At most one season has ``isCurrent`` set; marking one current clears the
    flag on every other season within the same locked update.
    """

    def __init__(self, file_path: Path):
        self.document = JsonDocument(file_path)
        self.document.ensure_exists()

    def _update_season(self, season_id: str, mutate):
        """Run ``mutate(seasons, index)`` for one season under the lock."""

        def _apply(seasons: list):
            index = next(
                (i for i, s in enumerate(seasons) if s.get("id") == season_id), None
            )
            if index is None:
                raise NotFoundError("Season not found")
            return mutate(seasons, index)

        return self.document.update(_apply)

    def create(self, data: dict) -> dict:
        """Store a new season.

        Raises:
            ValueError: If ``scoutingConfig`` breaks a schema invariant
        """
        season_id = str(uuid.uuid4())
        raw_config = data.get("scoutingConfig")
        season = {
            "id": season_id,
            "name": data.get("name"),
            "year": data.get("year"),
            "isCurrent": bool(data.get("isCurrent", False)),
            "startDate": data.get("startDate"),
            "endDate": data.get("endDate"),
            "gameName": data.get("gameName"),
            "teams": data.get("teams") or [],
            "matches": data.get("matches") or [],
            "scoutingConfig": (
                parse_scouting_config(raw_config, season_id=season_id)
                if raw_config is not None
                else None
            ),
        }

        def _append(seasons: list) -> None:
            if season["isCurrent"]:
                for other in seasons:
                    other["isCurrent"] = False
            seasons.append(season)

        self.document.update(_append)
        logger.info(
            "[Seasons] Created season id=%s name=%s", season["id"], season["name"]
        )
        return season

    def find_all(self) -> list[dict]:
        return self.document.read()

    def find_by_id(self, season_id: str) -> dict | None:
        return next((s for s in self.find_all() if s.get("id") == season_id), None)

    def find_current(self) -> dict | None:
        return next((s for s in self.find_all() if s.get("isCurrent")), None)

    def update_by_id(self, season_id: str, changes: dict) -> dict:
        changes = {k: v for k, v in changes.items() if k != "id"}
        if changes.get("scoutingConfig") is not None:
            changes["scoutingConfig"] = parse_scouting_config(
                changes["scoutingConfig"], season_id=season_id
            )

        def _apply(seasons: list, index: int) -> dict:
            if changes.get("isCurrent"):
                for i, other in enumerate(seasons):
                    if i != index:
                        other["isCurrent"] = False
            seasons[index] = {**seasons[index], **changes}
            return seasons[index]

        season = self._update_season(season_id, _apply)
        logger.info("[Seasons] Updated season id=%s keys=%s", season_id, list(changes))
        return season

    def delete_by_id(self, season_id: str) -> None:
        self._update_season(season_id, lambda seasons, index: seasons.pop(index))
        logger.info("[Seasons] Deleted season id=%s", season_id)

    def update_scouting_config(self, season_id: str, raw_config: dict) -> dict:
        """Validate and store a season's scouting config.

        Raises:
            ValueError: If the config breaks a schema invariant
            NotFoundError: If the season does not exist
        """
        config = parse_scouting_config(raw_config, season_id=season_id)

        def _apply(seasons: list, index: int) -> dict:
            seasons[index]["scoutingConfig"] = config
            return seasons[index]

        season = self._update_season(season_id, _apply)
        logger.info(
            "[Seasons] Saved scouting config season=%s categories=%s",
            season_id,
            len(config["categories"]),
        )
        return season

    def get_scouting_config(self, season_id: str) -> dict | None:
        season = self.find_by_id(season_id)
        if season is None:
            raise NotFoundError("Season not found")
        return season.get("scoutingConfig")

    def add_teams(self, season_id: str, teams: list[dict]) -> list[dict]:
        def _apply(seasons: list, index: int) -> list:
            merged = _merge_by_number(seasons[index].get("teams") or [], teams)
            seasons[index]["teams"] = merged
            return merged

        merged = self._update_season(season_id, _apply)
        logger.info("[Seasons] Merged %s teams into season=%s", len(teams), season_id)
        return merged

    def add_matches(self, season_id: str, matches: list[dict]) -> list[dict]:
        def _apply(seasons: list, index: int) -> list:
            merged = _merge_by_number(seasons[index].get("matches") or [], matches)
            seasons[index]["matches"] = merged
            return merged

        merged = self._update_season(season_id, _apply)
        logger.info(
            "[Seasons] Merged %s matches into season=%s", len(matches), season_id
        )
        return merged
