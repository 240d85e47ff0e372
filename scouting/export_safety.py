"""Safety helpers for export filenames."""

import re


def sanitize_filename(value: str) -> str:
    """Sanitize a string for safe filenames."""
    text = (value or "").strip().replace(" ", "_")
    text = re.sub(r"[^A-Za-z0-9._-]", "", text)
    return text or "file"
