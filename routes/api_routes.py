"""API metadata and readiness endpoints."""

from __future__ import annotations

from flask import Flask, jsonify

from scouting.version_check import CURRENT_VERSION


def register_api_routes(app: Flask) -> None:
    """Register version and readiness endpoints."""

    @app.route("/api/version", methods=["GET"])
    def api_version():
        """Return the running app version."""
        return jsonify({"current_version": CURRENT_VERSION})

    @app.route("/healthz", methods=["GET"])
    def healthz():
        """Readiness endpoint for runtime checks."""
        return jsonify({"status": "ok", "version": CURRENT_VERSION}), 200
