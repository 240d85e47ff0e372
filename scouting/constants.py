"""Constants and file paths used throughout the application."""

import os
from pathlib import Path

# Base directories
BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = Path(os.environ.get("SCOUTING_CONFIG") or CONFIG_DIR / "config.yaml")
DEFAULT_DATA_DIR = Path(os.environ.get("SCOUTING_DATA_DIR") or BASE_DIR / "data")

# Server-side documents (relative to the server data dir)
SEASONS_FILENAME = "seasons.json"
SCOUTING_ENTRIES_FILENAME = "scouting_entries.json"

# Client-side documents (relative to the client data dir)
CLIENT_ENTRIES_FILENAME = "scoutingEntries.json"
OFFLINE_QUEUE_FILENAME = "offlineEntries.json"

LOG_DIRNAME = "logs"
LOG_FILENAME = "scouting.log"

# Closed set of field types a scouting config may declare
FIELD_TYPES = ("text", "longtext", "number", "boolean", "enum", "radio", "rating")
OPTION_FIELD_TYPES = ("enum", "radio")

ALLIANCES = ("red", "blue")
DEFAULT_ALLIANCE = "red"

# Columns that always lead a CSV export
EXPORT_BASE_COLUMNS = [
    "teamNumber",
    "matchNumber",
    "alliance",
    "scoutName",
    "timestamp",
]
# Internal keys never written to a CSV export
EXPORT_EXCLUDED_KEYS = {"id", "seasonId", "synced"}

# Approximate observations recorded per entry, used for the stats figure
DATA_POINTS_PER_ENTRY = 10

# Delay before the form returns to its first step after a submit
FORM_RESET_DELAY_SECONDS = 2.0

REQUEST_TIMEOUT_SECONDS = 10
MAX_UPLOAD_MB = 10
