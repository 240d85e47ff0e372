"""Scouting form engine, offline-first entry store, and server repositories."""

from .api_client import ApiError, OfflineError, ScoutingApiClient
from .client import ScoutingClient
from .config import load_settings
from .config_schema import (
    build_initial_entry,
    coerce_field_value,
    iter_fields,
    parse_scouting_config,
    validate_scouting_config,
    validate_step,
)
from .entries import ScoutingEntryRepository
from .entry_store import EntryStore, team_key_for
from .form_engine import FormEngine
from .offline_queue import OfflineQueue
from .seasons import NotFoundError, SeasonRepository
from .sync import SyncCoordinator, SyncError
from .version_check import CURRENT_VERSION

__all__ = [
    # Config
    "load_settings",
    # Schema
    "build_initial_entry",
    "coerce_field_value",
    "iter_fields",
    "parse_scouting_config",
    "validate_scouting_config",
    "validate_step",
    # Client
    "ApiError",
    "OfflineError",
    "ScoutingApiClient",
    "ScoutingClient",
    "EntryStore",
    "team_key_for",
    "FormEngine",
    "OfflineQueue",
    "SyncCoordinator",
    "SyncError",
    # Server
    "ScoutingEntryRepository",
    "NotFoundError",
    "SeasonRepository",
    # Version
    "CURRENT_VERSION",
]
