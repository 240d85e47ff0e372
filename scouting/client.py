"""Wiring of the client-side services."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import requests

from .api_client import ApiError, ScoutingApiClient
from .constants import (
    CLIENT_ENTRIES_FILENAME,
    OFFLINE_QUEUE_FILENAME,
    REQUEST_TIMEOUT_SECONDS,
)
from .entry_store import EntryStore
from .form_engine import FormEngine
from .offline_queue import OfflineQueue
from .sync import SyncCoordinator

logger = logging.getLogger(__name__)


class ScoutingClient:
    """Client services built from the ``client`` settings section.

    The API client, entry store, offline queue, and sync coordinator are
    created once and passed explicitly to each form.
    """

    def __init__(
        self,
        client_cfg: dict,
        session: requests.Session | None = None,
        is_online: Callable[[], bool] | None = None,
        token: str | None = None,
    ):
        data_dir = Path(client_cfg["data_dir"])
        self.api = ScoutingApiClient(
            client_cfg["base_url"],
            session=session,
            timeout=client_cfg.get("timeout") or REQUEST_TIMEOUT_SECONDS,
            token=token,
        )
        self.queue = OfflineQueue(data_dir / OFFLINE_QUEUE_FILENAME)
        self.store = EntryStore(
            self.api, data_dir / CLIENT_ENTRIES_FILENAME, self.queue, is_online
        )
        self.sync = SyncCoordinator(self.api, self.store, self.queue)
        self.season: dict | None = None
        self.config: dict | None = None

    def load_current_season(self) -> dict | None:
        """Fetch the current season and its scouting config.

        Returns:
            The scouting config, or None when the season has none yet
        """
        try:
            self.season = self.api.get_current_season()
        except ApiError as exc:
            self.store.error = "Failed to fetch current season."
            logger.error("[Client] Error fetching current season: %s", exc)
            return None

        try:
            self.config = self.api.get_scouting_config(self.season["id"])
        except ApiError as exc:
            if exc.status_code != 404:
                self.store.error = "Failed to fetch scouting config."
            logger.warning("[Client] No scouting config loaded: %s", exc)
            self.config = None
        return self.config

    def new_form(self, scout_name: str = "", enforce_required: bool = False, **kwargs):
        """Start a form for the loaded season's config."""
        if self.config is None:
            raise ValueError("No scouting configuration available")
        context = {
            "scout_name": scout_name,
            "season_id": (self.season or {}).get("id") or "",
        }
        return FormEngine(
            self.config,
            self.store,
            context=context,
            enforce_required=enforce_required,
            **kwargs,
        )
