"""Multi-step scouting form controller."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from .api_client import ApiError
from .config_schema import (
    build_initial_entry,
    coerce_field_value,
    find_field,
    now_iso,
    validate_step,
)
from .constants import DEFAULT_ALLIANCE, FORM_RESET_DELAY_SECONDS
from .entry_store import EntryStore

logger = logging.getLogger(__name__)

STEP = "step"
SUBMITTING = "submitting"
SUBMITTED = "submitted"
FAILED = "failed"


class FormEngine:
    """Drive one scout through the match-info step and one step per category.

    Step 0 is match info; step ``i`` (1..N) shows ``categories[i - 1]``.
    After a successful submit the engine sits in ``submitted`` until the
    reset delay elapses, then starts over with a fresh draft.
    """

    def __init__(
        self,
        config: dict,
        store: EntryStore,
        context: dict | None = None,
        clock: Callable[[], float] = time.monotonic,
        enforce_required: bool = False,
    ):
        self.config = config
        self.store = store
        self.context = context or {}
        self.clock = clock
        self.enforce_required = enforce_required

        self.draft = build_initial_entry(config, self.context)
        self.step = 0
        self.errors: dict[str, str] = {}
        self.error: str | None = None
        self.last_submitted: dict | None = None
        self._status = STEP
        self._reset_at: float | None = None

    @property
    def last_step(self) -> int:
        return len(self.config.get("categories") or [])

    @property
    def status(self) -> str:
        self._apply_reset_timer()
        return self._status

    @property
    def loading(self) -> bool:
        return self._status == SUBMITTING

    def current_category(self) -> dict | None:
        """Return the category shown on the current step, or None for step 0."""
        if self.step == 0:
            return None
        return self.config["categories"][self.step - 1]

    def _apply_reset_timer(self) -> None:
        if self._status != SUBMITTED or self._reset_at is None:
            return
        if self.clock() < self._reset_at:
            return
        self.draft.update(
            {
                "id": str(uuid.uuid4()),
                "timestamp": now_iso(),
                "teamNumber": "",
                "matchNumber": "",
                "alliance": DEFAULT_ALLIANCE,
            }
        )
        self.step = 0
        self._status = STEP
        self._reset_at = None
        logger.debug("[Form] Reset to first step with draft id=%s", self.draft["id"])

    def _validate(self) -> bool:
        valid, self.errors = validate_step(
            self.step, self.draft, self.config, self.enforce_required
        )
        return valid

    def set_value(self, field_id: str, raw) -> None:
        """Store user input for a field, coerced by its declared type."""
        field = find_field(self.config, field_id)
        self.draft[field_id] = coerce_field_value(field, raw) if field else raw
        self.errors.pop(field_id, None)

    def adjust_number(self, field_id: str, delta: int) -> int:
        """Increment a counter field, never going below zero."""
        try:
            current = int(self.draft.get(field_id) or 0)
        except (TypeError, ValueError):
            current = 0
        self.draft[field_id] = max(0, current + delta)
        return self.draft[field_id]

    def next(self) -> bool:
        """Advance one step if the current step validates."""
        if self.status != STEP:
            return False
        if not self._validate():
            return False
        self.step = min(self.step + 1, self.last_step)
        return True

    def prev(self) -> None:
        if self.status != STEP:
            return
        self.step = max(self.step - 1, 0)

    def submit(self) -> bool:
        """Hand the draft to the entry store.

        Returns:
            True when the entry was accepted (online or queued offline)
        """
        if self.status != STEP or self.step != self.last_step:
            return False
        if not self._validate():
            return False

        self._status = SUBMITTING
        self.error = None
        try:
            self.last_submitted = self.store.submit_scouting_entry(dict(self.draft))
        except ApiError as exc:
            self._status = FAILED
            self.error = str(exc)
            logger.warning("[Form] Submit failed: %s", exc)
            return False

        self._status = SUBMITTED
        self._reset_at = self.clock() + FORM_RESET_DELAY_SECONDS
        logger.info(
            "[Form] Submitted entry id=%s team=%s match=%s",
            self.draft.get("id"),
            self.draft.get("teamNumber"),
            self.draft.get("matchNumber"),
        )
        return True

    def recover(self) -> None:
        """Return from a failed submit to the last step, keeping the draft."""
        if self._status == FAILED:
            self._status = STEP
            self.step = self.last_step
