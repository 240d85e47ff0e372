"""Season, scouting config, team, and match route registrations."""

from __future__ import annotations

from flask import Flask, jsonify, request

from scouting.csv_operations import prepare_match_import, prepare_team_import
from scouting.seasons import SeasonRepository

from .uploads import read_upload_rows

REQUIRED_SEASON_FIELDS = ("name", "year", "startDate", "endDate", "gameName")


def register_season_routes(app: Flask, seasons: SeasonRepository) -> None:
    """Register season CRUD and season-scoped data routes."""

    @app.route("/api/seasons", methods=["GET"])
    def list_seasons():
        return jsonify(seasons.find_all())

    @app.route("/api/seasons/current", methods=["GET"])
    def current_season():
        season = seasons.find_current()
        if season is None:
            return jsonify({"message": "No current season set"}), 404
        return jsonify(season)

    @app.route("/api/seasons/<season_id>", methods=["GET"])
    def get_season(season_id):
        season = seasons.find_by_id(season_id)
        if season is None:
            return jsonify({"message": "Season not found"}), 404
        return jsonify(season)

    @app.route("/api/seasons", methods=["POST"])
    def create_season():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"message": "Season object is required"}), 400

        missing = [name for name in REQUIRED_SEASON_FIELDS if not data.get(name)]
        if missing:
            errors = [{"param": name, "msg": f"{name} is required"} for name in missing]
            return jsonify({"errors": errors}), 400

        try:
            season = seasons.create(data)
        except ValueError as exc:
            app.logger.warning("[Config] Rejected new season config: %s", exc)
            return jsonify({"message": str(exc)}), 400
        return jsonify(season)

    @app.route("/api/seasons/<season_id>", methods=["PUT"])
    def update_season(season_id):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"message": "Season object is required"}), 400
        try:
            season = seasons.update_by_id(season_id, data)
        except ValueError as exc:
            app.logger.warning(
                "[Config] Rejected scouting config for season=%s: %s", season_id, exc
            )
            return jsonify({"message": str(exc)}), 400
        return jsonify(season)

    @app.route("/api/seasons/<season_id>", methods=["DELETE"])
    def delete_season(season_id):
        seasons.delete_by_id(season_id)
        return jsonify({"message": "Season deleted"})

    @app.route("/api/seasons/<season_id>/config", methods=["GET"])
    def get_scouting_config(season_id):
        """Get the scouting config for a season."""
        config = seasons.get_scouting_config(season_id)
        if not config:
            return (
                jsonify({"message": "No scouting configuration found for this season"}),
                404,
            )
        return jsonify(config)

    @app.route("/api/seasons/<season_id>/config", methods=["PUT"])
    def update_scouting_config(season_id):
        """Replace the scouting config for a season."""
        data = request.get_json(silent=True)
        if not data:
            return jsonify({"message": "No config data provided"}), 400

        try:
            season = seasons.update_scouting_config(season_id, data)
        except ValueError as exc:
            app.logger.warning(
                "[Config] Rejected scouting config for season=%s: %s", season_id, exc
            )
            return jsonify({"message": str(exc)}), 400
        return jsonify(season)

    @app.route("/api/seasons/<season_id>/teams", methods=["GET"])
    def list_teams(season_id):
        season = seasons.find_by_id(season_id)
        if season is None:
            return jsonify({"message": "Season not found"}), 404
        return jsonify(season.get("teams") or [])

    @app.route("/api/seasons/<season_id>/matches", methods=["GET"])
    def list_matches(season_id):
        season = seasons.find_by_id(season_id)
        if season is None:
            return jsonify({"message": "Season not found"}), 404
        return jsonify(season.get("matches") or [])

    @app.route("/api/seasons/<season_id>/teams/import", methods=["POST"])
    def import_teams(season_id):
        """Import teams from CSV or JSON, replacing teams with the same number."""
        if seasons.find_by_id(season_id) is None:
            return jsonify({"message": "Season not found"}), 404

        rows, error_response = read_upload_rows("teams")
        if error_response is not None:
            return error_response

        teams, skipped = prepare_team_import(rows)
        if teams:
            seasons.add_teams(season_id, teams)

        app.logger.info(
            "[Import] season=%s teams imported=%s skipped=%s",
            season_id,
            len(teams),
            skipped,
        )
        return jsonify(
            {
                "message": (
                    f"Import complete. {len(teams)} teams imported, "
                    f"{skipped} skipped."
                ),
                "imported": len(teams),
                "skipped": skipped,
            }
        )

    @app.route("/api/seasons/<season_id>/matches/import", methods=["POST"])
    def import_matches(season_id):
        """Import matches from CSV or JSON, replacing matches with the same number."""
        if seasons.find_by_id(season_id) is None:
            return jsonify({"message": "Season not found"}), 404

        rows, error_response = read_upload_rows("matches")
        if error_response is not None:
            return error_response

        fmt = (request.form.get("format") or "csv").strip().lower()
        matches, skipped = prepare_match_import(rows, fmt)
        if matches:
            seasons.add_matches(season_id, matches)

        app.logger.info(
            "[Import] season=%s matches imported=%s skipped=%s",
            season_id,
            len(matches),
            skipped,
        )
        return jsonify(
            {
                "message": (
                    f"Import complete. {len(matches)} matches imported, "
                    f"{skipped} skipped."
                ),
                "imported": len(matches),
                "skipped": skipped,
            }
        )
