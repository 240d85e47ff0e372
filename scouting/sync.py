"""Reconcile the offline queue with the server."""

from __future__ import annotations

import logging

from .api_client import ApiError, ScoutingApiClient
from .entry_store import EntryStore
from .offline_queue import OfflineQueue

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """A sync attempt failed; the offline queue was left untouched."""


class SyncCoordinator:
    """Push queued entries as one bulk request and merge the results.

    Delivery is at-least-once: the queue is cleared only after the whole
    batch was accepted, so a failed attempt can simply be retried.
    """

    def __init__(self, api: ScoutingApiClient, store: EntryStore, queue: OfflineQueue):
        self.api = api
        self.store = store
        self.queue = queue

    def pending_count(self) -> int:
        return len(self.queue)

    def sync_offline_entries(self) -> dict | None:
        """Send every queued entry to the server.

        Returns:
            The bulk response ``{message, entries}``, or None when the queue
            is empty

        Raises:
            SyncError: If the bulk request failed
        """
        queued = self.queue.load()
        if not queued:
            logger.debug("[Sync] Offline queue empty; nothing to sync")
            return None

        logger.info("[Sync] Syncing %s offline entries", len(queued))
        self.store.loading = True
        try:
            result = self.api.bulk_create_entries(queued)
        except ApiError as exc:
            message = "Failed to sync offline entries."
            self.store.error = message
            logger.error("[Sync] Error syncing offline entries: %s", exc)
            raise SyncError(f"{message} {exc}") from exc
        finally:
            self.store.loading = False

        self.queue.clear()

        synced_entries = list(result.get("entries") or [])
        kept = [e for e in self.store.entries if e.get("synced") is not False]
        self.store.replace_entries(kept + synced_entries)

        logger.info(
            "[Sync] Synced %s entries; store now holds %s",
            len(synced_entries),
            len(self.store.entries),
        )
        return result
