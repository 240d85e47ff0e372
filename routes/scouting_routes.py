"""Scouting entry route registrations."""

from __future__ import annotations

import json

from flask import Flask, Response, jsonify, request

from scouting.constants import ALLIANCES
from scouting.csv_operations import entries_to_csv, prepare_entry_import
from scouting.entries import ScoutingEntryRepository
from scouting.export_safety import sanitize_filename
from scouting.seasons import SeasonRepository

from .uploads import read_upload_rows


def _is_missing(value) -> bool:
    """Return True when a submitted value should be treated as missing."""
    if value is None:
        return True
    return str(value).strip() == ""


def _entry_errors(entry: dict) -> list[dict]:
    errors = []
    if _is_missing(entry.get("teamNumber")):
        errors.append({"param": "teamNumber", "msg": "Team number is required"})
    if _is_missing(entry.get("matchNumber")):
        errors.append({"param": "matchNumber", "msg": "Match number is required"})
    if entry.get("alliance") not in ALLIANCES:
        errors.append({"param": "alliance", "msg": "Alliance is required"})
    if _is_missing(entry.get("seasonId")):
        errors.append({"param": "seasonId", "msg": "Season ID is required"})
    return errors


def register_scouting_routes(
    app: Flask, entries: ScoutingEntryRepository, seasons: SeasonRepository
) -> None:
    """Register scouting entry routes."""

    @app.route("/api/scouting", methods=["POST"])
    def create_entry():
        """Create a single scouting entry."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"errors": [{"msg": "Entry object is required"}]}), 400

        errors = _entry_errors(data)
        if errors:
            app.logger.warning(
                "[Submit] Rejected entry: %s", ", ".join(e["param"] for e in errors)
            )
            return jsonify({"errors": errors}), 400

        return jsonify(entries.create(data))

    @app.route("/api/scouting/bulk", methods=["POST"])
    def bulk_create_entries():
        """Create multiple scouting entries (for sync)."""
        data = request.get_json(silent=True) or {}
        batch = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(batch, list):
            return jsonify({"message": "Entries array is required"}), 400

        created = entries.bulk_create([e for e in batch if isinstance(e, dict)])
        app.logger.info("[Sync] Bulk request stored %s entries", len(created))
        return jsonify({"message": f"{len(created)} entries saved", "entries": created})

    @app.route("/api/scouting", methods=["GET"])
    def list_entries():
        """Get scouting entries by season and optional team."""
        season_id = request.args.get("seasonId")
        team_number = request.args.get("teamNumber")
        if not season_id:
            return jsonify({"message": "Season ID is required"}), 400

        if team_number:
            return jsonify(entries.find_by_team(season_id, team_number))
        return jsonify(entries.find_by_season_id(season_id))

    @app.route("/api/scouting/<season_id>", methods=["DELETE"])
    def delete_season_entries(season_id):
        """Delete all scouting entries for a season."""
        entries.delete_by_season_id(season_id)
        return jsonify(
            {"message": "All scouting entries for the season have been deleted"}
        )

    @app.route("/api/scouting/stats", methods=["GET"])
    def entry_stats():
        return jsonify(entries.get_stats())

    @app.route("/api/scouting/export/<season_id>", methods=["GET"])
    def export_entries(season_id):
        """Export a season's entries as a CSV or JSON attachment."""
        fmt = (request.args.get("format") or "csv").strip().lower()

        season_entries = entries.find_by_season_id(season_id)
        if not season_entries:
            return jsonify({"message": "No scouting data found for this season"}), 404

        season = seasons.find_by_id(season_id)
        if season is None:
            return jsonify({"message": "Season not found"}), 404

        filename = f"scouting-data-{sanitize_filename(str(season.get('name') or ''))}"
        if fmt == "json":
            body = json.dumps(season_entries, indent=2)
            mimetype = "application/json"
        elif fmt == "csv":
            body = entries_to_csv(season_entries)
            mimetype = "text/csv"
        else:
            return (
                jsonify({"message": 'Invalid export format. Use "csv" or "json".'}),
                400,
            )

        app.logger.info(
            "[Export] season=%s format=%s entries=%s",
            season_id,
            fmt,
            len(season_entries),
        )
        return Response(
            body,
            mimetype=mimetype,
            headers={
                "Content-Disposition": f"attachment; filename={filename}.{fmt}"
            },
        )

    @app.route("/api/scouting/import", methods=["POST"])
    def import_entries():
        """Import scouting entries from an uploaded CSV or JSON file."""
        season_id = (request.form.get("seasonId") or "").strip()
        if not season_id:
            return jsonify({"message": "Season ID is required"}), 400
        if seasons.find_by_id(season_id) is None:
            return jsonify({"message": "Season not found"}), 404

        rows, error_response = read_upload_rows("scouting entries")
        if error_response is not None:
            return error_response

        accepted, skipped = prepare_entry_import(rows, season_id)
        if accepted:
            entries.bulk_create(accepted)

        app.logger.info(
            "[Import] season=%s imported=%s skipped=%s",
            season_id,
            len(accepted),
            skipped,
        )
        return jsonify(
            {
                "message": (
                    f"Import complete. {len(accepted)} entries imported, "
                    f"{skipped} skipped."
                ),
                "imported": len(accepted),
                "skipped": skipped,
            }
        )
