"""Shared handling for CSV/JSON file uploads."""

from __future__ import annotations

import json

from flask import jsonify, request

from scouting.csv_operations import IMPORT_FORMATS, load_upload_rows


def read_upload_rows(kind: str):
    """Read the ``file`` upload of the current request.

    Args:
        kind: Plural noun used in error messages, e.g. "teams"

    Returns:
        Tuple of (rows, error_response); exactly one is None
    """
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        return None, (jsonify({"message": "No file uploaded"}), 400)

    fmt = (request.form.get("format") or "csv").strip().lower()
    if fmt not in IMPORT_FORMATS:
        return None, (
            jsonify({"message": 'Invalid format. Use "csv" or "json".'}),
            400,
        )

    try:
        rows = load_upload_rows(upload.read(), fmt)
    except json.JSONDecodeError:
        return None, (jsonify({"message": "Invalid JSON format"}), 400)
    except UnicodeDecodeError:
        return None, (jsonify({"message": "File could not be read as UTF-8"}), 400)
    except ValueError:
        return None, (
            jsonify({"message": f"JSON data must be an array of {kind}"}),
            400,
        )
    return rows, None
