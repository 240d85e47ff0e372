"""Tests for the multi-step form controller."""

from conftest import AUTO_CONFIG

from scouting.api_client import ApiError
from scouting.config_schema import parse_scouting_config
from scouting.form_engine import FAILED, STEP, SUBMITTED, FormEngine

CONFIG = parse_scouting_config(
    {
        "categories": [
            AUTO_CONFIG["categories"][0],
            {
                "id": "teleop",
                "title": "Teleop",
                "fields": [
                    {"id": "speaker", "type": "number", "label": "Speaker"},
                    {"id": "defense", "type": "boolean", "label": "Defense"},
                ],
            },
        ]
    }
)


class RecordingStore:
    def __init__(self, error=None):
        self.error = error
        self.submitted = []

    def submit_scouting_entry(self, entry):
        if self.error:
            raise self.error
        self.submitted.append(entry)
        return {**entry, "synced": True}


def _fill_match_info(engine):
    engine.set_value("teamNumber", "611")
    engine.set_value("matchNumber", "12")


def test_next_refused_until_match_info_present(clock):
    engine = FormEngine(CONFIG, RecordingStore(), clock=clock)
    assert engine.next() is False
    assert engine.step == 0
    assert set(engine.errors) == {"teamNumber", "matchNumber"}

    _fill_match_info(engine)
    assert engine.next() is True
    assert engine.step == 1
    assert engine.current_category()["id"] == "auto"


def test_set_value_clears_field_error(clock):
    engine = FormEngine(CONFIG, RecordingStore(), clock=clock)
    engine.next()
    engine.set_value("teamNumber", "611")
    assert "teamNumber" not in engine.errors
    assert "matchNumber" in engine.errors


def test_prev_clamps_at_zero_and_next_clamps_at_last(clock):
    engine = FormEngine(CONFIG, RecordingStore(), clock=clock)
    engine.prev()
    assert engine.step == 0
    _fill_match_info(engine)
    for _ in range(5):
        engine.next()
    assert engine.step == engine.last_step == 2


def test_values_coerced_by_field_type(clock):
    engine = FormEngine(CONFIG, RecordingStore(), clock=clock)
    engine.set_value("speaker", "7")
    engine.set_value("defense", "true")
    assert engine.draft["speaker"] == 7
    assert engine.draft["defense"] is True
    assert engine.adjust_number("speaker", -10) == 0
    assert engine.adjust_number("speaker", 2) == 2


def test_submit_only_from_last_step(clock):
    store = RecordingStore()
    engine = FormEngine(CONFIG, store, clock=clock)
    _fill_match_info(engine)
    assert engine.submit() is False
    assert store.submitted == []


def test_submit_then_reset_after_delay(clock):
    store = RecordingStore()
    engine = FormEngine(CONFIG, store, context={"scout_name": "Ada"}, clock=clock)
    _fill_match_info(engine)
    engine.set_value("alliance", "blue")
    engine.next()
    engine.set_value("autoNotes", 3)
    engine.next()
    first_id = engine.draft["id"]

    assert engine.submit() is True
    assert engine.status == SUBMITTED
    assert store.submitted[0]["autoNotes"] == 3
    assert store.submitted[0]["scoutName"] == "Ada"

    # A second submit while the first is shown as submitted is ignored
    assert engine.submit() is False
    assert len(store.submitted) == 1

    clock.advance(1.9)
    assert engine.status == SUBMITTED
    clock.advance(0.2)
    assert engine.status == STEP
    assert engine.step == 0
    assert engine.draft["id"] != first_id
    assert engine.draft["teamNumber"] == ""
    assert engine.draft["matchNumber"] == ""
    assert engine.draft["alliance"] == "red"
    assert engine.draft["scoutName"] == "Ada"


def test_failed_submit_recovers_to_last_step(clock):
    store = RecordingStore(error=ApiError("Server error", 500))
    engine = FormEngine(CONFIG, store, clock=clock)
    _fill_match_info(engine)
    engine.next()
    engine.next()

    assert engine.submit() is False
    assert engine.status == FAILED
    assert engine.error == "Server error"
    assert engine.next() is False

    engine.recover()
    assert engine.status == STEP
    assert engine.step == engine.last_step
    assert engine.draft["teamNumber"] == "611"


def test_enforce_required_blocks_next(clock):
    config = parse_scouting_config(
        {
            "categories": [
                {
                    "fields": [
                        {"id": "notes", "type": "text", "label": "Notes", "required": True}
                    ]
                },
            ]
        }
    )
    lenient = FormEngine(config, RecordingStore(), clock=clock)
    strict = FormEngine(config, RecordingStore(), clock=clock, enforce_required=True)
    for engine in (lenient, strict):
        _fill_match_info(engine)
        engine.next()

    assert lenient.submit() is True
    assert strict.submit() is False
    assert strict.errors == {"notes": "Notes is required"}
