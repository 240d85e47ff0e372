"""Error handler registrations."""

from __future__ import annotations

from flask import Flask, jsonify, request

from scouting.seasons import NotFoundError


def register_error_handlers(app: Flask) -> None:
    """Register JSON HTTP error handlers."""

    @app.errorhandler(NotFoundError)
    def handle_missing_record(error):
        app.logger.warning("[HTTP 404] path=%s error=%s", request.path, error)
        return jsonify({"message": str(error)}), error.status_code

    @app.errorhandler(400)
    def handle_bad_request(error):
        app.logger.warning("[HTTP 400] path=%s error=%s", request.path, error)
        return jsonify({"message": "The request could not be processed."}), 400

    @app.errorhandler(404)
    def handle_not_found(error):
        app.logger.warning("[HTTP 404] path=%s error=%s", request.path, error)
        return jsonify({"message": "Not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        app.logger.warning("[HTTP 405] path=%s error=%s", request.path, error)
        return jsonify({"message": "Method not allowed"}), 405

    @app.errorhandler(413)
    def handle_too_large(error):
        app.logger.warning("[HTTP 413] path=%s error=%s", request.path, error)
        return (
            jsonify(
                {"message": "Uploaded file is too large. Please select a smaller file."}
            ),
            413,
        )

    @app.errorhandler(500)
    def handle_server_error(error):
        app.logger.exception("[HTTP 500] path=%s error=%s", request.path, error)
        return jsonify({"message": "Server error"}), 500
