"""CSV and JSON conversion for scouting exports and imports."""

from __future__ import annotations

import csv
import io
import json
import logging

from .constants import EXPORT_BASE_COLUMNS, EXPORT_EXCLUDED_KEYS

logger = logging.getLogger(__name__)

IMPORT_FORMATS = ("csv", "json")


def get_export_columns(entries: list[dict]) -> list[str]:
    """Return CSV columns: base columns, then every other key in first-seen order."""
    columns = list(EXPORT_BASE_COLUMNS)
    seen = set(columns)
    for entry in entries:
        for key in entry:
            if key in EXPORT_EXCLUDED_KEYS or key in seen:
                continue
            seen.add(key)
            columns.append(key)
    return columns


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def entries_to_csv(entries: list[dict]) -> str:
    """Render entries as CSV text.

    Values containing commas, quotes, or newlines are quoted with inner
    quotes doubled.
    """
    columns = get_export_columns(entries)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(columns)
    for entry in entries:
        writer.writerow([_cell(entry.get(column)) for column in columns])
    return buffer.getvalue()


def decode_upload(raw: bytes) -> str:
    return raw.decode("utf-8-sig")


def parse_csv_rows(text: str) -> list[dict]:
    reader = csv.DictReader(io.StringIO(text))
    return [dict(row) for row in reader]


def parse_json_array(text: str) -> list:
    """Parse uploaded JSON that must be an array.

    Raises:
        ValueError: If the text is not valid JSON or not an array
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("JSON data must be an array")
    return data


def load_upload_rows(raw: bytes, fmt: str) -> list:
    """Decode an uploaded file into a list of row dicts.

    Raises:
        ValueError: For unknown formats or malformed content
    """
    if fmt not in IMPORT_FORMATS:
        raise ValueError('Invalid format. Use "csv" or "json".')
    text = decode_upload(raw)
    if fmt == "json":
        return parse_json_array(text)
    return parse_csv_rows(text)


def prepare_entry_import(rows: list, season_id: str) -> tuple[list[dict], int]:
    """Keep rows with a team and match number, forcing season and synced.

    Returns:
        Tuple of (accepted entries, skipped count)
    """
    entries: list[dict] = []
    skipped = 0
    for row in rows:
        if not isinstance(row, dict) or not row.get("teamNumber") or not row.get(
            "matchNumber"
        ):
            skipped += 1
            continue
        entries.append({**row, "seasonId": season_id, "synced": True})
    logger.debug("[Import] Entries accepted=%s skipped=%s", len(entries), skipped)
    return entries, skipped


def prepare_team_import(rows: list) -> tuple[list[dict], int]:
    teams: list[dict] = []
    skipped = 0
    for row in rows:
        if not isinstance(row, dict) or not row.get("number") or not row.get("name"):
            skipped += 1
            continue
        teams.append(
            {
                "number": str(row["number"]),
                "name": row["name"],
                "location": row.get("location") or "",
                "website": row.get("website") or "",
                "rookieYear": row.get("rookieYear") or None,
            }
        )
    return teams, skipped


def _parse_score(value):
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def prepare_match_import(rows: list, fmt: str) -> tuple[list[dict], int]:
    """Normalize match rows.

    CSV rows carry alliances as ``red1..red3`` and ``blue1..blue3`` columns;
    JSON rows carry ``redAlliance``/``blueAlliance`` lists.
    """
    matches: list[dict] = []
    skipped = 0
    for row in rows:
        if not isinstance(row, dict) or not row.get("number"):
            skipped += 1
            continue

        if fmt == "csv":
            red = [row[f"red{i}"] for i in range(1, 4) if row.get(f"red{i}")]
            blue = [row[f"blue{i}"] for i in range(1, 4) if row.get(f"blue{i}")]
            red_score = _parse_score(row.get("redScore"))
            blue_score = _parse_score(row.get("blueScore"))
        else:
            red = row["redAlliance"] if isinstance(row.get("redAlliance"), list) else []
            blue = (
                row["blueAlliance"] if isinstance(row.get("blueAlliance"), list) else []
            )
            red_score = row.get("redScore")
            blue_score = row.get("blueScore")

        matches.append(
            {
                "number": str(row["number"]),
                "time": row.get("time") or None,
                "redAlliance": red,
                "blueAlliance": blue,
                "redScore": red_score,
                "blueScore": blue_score,
            }
        )
    return matches, skipped
