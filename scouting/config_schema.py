"""Scouting config schema: field types, defaults, and validation rules."""

from __future__ import annotations

import datetime
import logging
import uuid
from typing import Any, Callable, NamedTuple

from .constants import DEFAULT_ALLIANCE, FIELD_TYPES, OPTION_FIELD_TYPES

logger = logging.getLogger(__name__)

TRUTHY_VALUES = {"true", "1", "yes", "y", "on"}


class FieldType(NamedTuple):
    """Default and coercion strategy for one field type."""

    default: Callable[[dict], Any]
    coerce: Callable[[dict, Any], Any]


def _first_option_value(field: dict) -> Any:
    options = field.get("options") or []
    if options and isinstance(options[0], dict):
        return options[0].get("value", "")
    return ""


def _coerce_text(field: dict, raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def _coerce_number(field: dict, raw: Any) -> Any:
    """Convert raw input to int or float; keep the original if not numeric."""
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw if raw is not None else "").strip()
    if text == "":
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return raw


def _coerce_boolean(field: dict, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw or "").strip().lower() in TRUTHY_VALUES


def _coerce_choice(field: dict, raw: Any) -> str:
    return "" if raw is None else str(raw)


def _coerce_rating(field: dict, raw: Any) -> Any:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw
    text = str(raw if raw is not None else "").strip()
    try:
        return int(text)
    except ValueError:
        return text


FIELD_TYPE_HANDLERS: dict[str, FieldType] = {
    "text": FieldType(lambda field: "", _coerce_text),
    "longtext": FieldType(lambda field: "", _coerce_text),
    "number": FieldType(lambda field: 0, _coerce_number),
    "boolean": FieldType(lambda field: False, _coerce_boolean),
    "enum": FieldType(_first_option_value, _coerce_choice),
    "radio": FieldType(_first_option_value, _coerce_choice),
    "rating": FieldType(lambda field: "", _coerce_rating),
}


def get_field_type(field: dict) -> FieldType:
    """Return the strategy for a field, falling back to plain text."""
    return FIELD_TYPE_HANDLERS.get(field.get("type"), FIELD_TYPE_HANDLERS["text"])


def field_default(field: dict) -> Any:
    return get_field_type(field).default(field)


def coerce_field_value(field: dict, raw: Any) -> Any:
    """Convert raw user input to the value stored for ``field``."""
    return get_field_type(field).coerce(field, raw)


def iter_fields(config: dict | None):
    """Yield every field dict across every category, in form order."""
    for category in (config or {}).get("categories") or []:
        if not isinstance(category, dict):
            continue
        for field in category.get("fields") or []:
            if isinstance(field, dict) and field.get("id"):
                yield field


def find_field(config: dict | None, field_id: str) -> dict | None:
    return next((f for f in iter_fields(config) if f["id"] == field_id), None)


def get_config_problems(config: Any) -> list[str]:
    """Return a list of human-readable problems with a scouting config."""
    if not isinstance(config, dict):
        return ["Scouting config must be an object"]

    problems: list[str] = []
    categories = config.get("categories")
    if not isinstance(categories, list) or not categories:
        problems.append("Scouting config must have at least one category")
        return problems

    seen_ids: set[str] = set()
    for index, category in enumerate(categories):
        if not isinstance(category, dict):
            problems.append(f"Category {index + 1} must be an object")
            continue
        title = category.get("title") or category.get("id") or f"#{index + 1}"
        fields = category.get("fields") or []
        if not isinstance(fields, list):
            problems.append(f"Category {title} fields must be a list")
            continue

        for field in fields:
            if not isinstance(field, dict) or not field.get("id"):
                problems.append(f"Category {title} has a field without an id")
                continue
            field_id = str(field["id"])
            if field_id in seen_ids:
                problems.append(f"Duplicate field id: {field_id}")
            seen_ids.add(field_id)

            ftype = field.get("type")
            if ftype not in FIELD_TYPES:
                problems.append(f"Field {field_id} has unknown type: {ftype}")
                continue

            if ftype in OPTION_FIELD_TYPES:
                values = [
                    opt.get("value")
                    for opt in field.get("options") or []
                    if isinstance(opt, dict)
                ]
                if len(values) != len(set(map(str, values))):
                    problems.append(f"Field {field_id} has duplicate option values")

    return problems


def validate_scouting_config(config: Any) -> None:
    """Ensure a scouting config can drive a form.

    Raises:
        ValueError: If the config breaks any schema invariant
    """
    problems = get_config_problems(config)
    if problems:
        raise ValueError("; ".join(problems))


def parse_scouting_config(raw: dict, season_id: str | None = None) -> dict:
    """Normalize an admin-authored config, filling optional keys.

    The config is validated first; category and field order is preserved.
    """
    validate_scouting_config(raw)

    categories = []
    for category in raw["categories"]:
        fields = []
        for field in category.get("fields") or []:
            normalized = {
                "id": str(field["id"]),
                "type": field["type"],
                "label": field.get("label") or str(field["id"]),
                "placeholder": field.get("placeholder") or "",
                "required": bool(field.get("required", False)),
            }
            if field["type"] in OPTION_FIELD_TYPES:
                normalized["options"] = [
                    {
                        "value": opt.get("value"),
                        "label": opt.get("label") or str(opt.get("value")),
                    }
                    for opt in field.get("options") or []
                    if isinstance(opt, dict)
                ]
            fields.append(normalized)
        categories.append(
            {
                "id": str(category.get("id") or len(categories) + 1),
                "title": category.get("title") or "",
                "description": category.get("description") or "",
                "fields": fields,
            }
        )

    return {
        "id": str(raw.get("id") or uuid.uuid4()),
        "seasonId": season_id if season_id is not None else raw.get("seasonId"),
        "name": raw.get("name") or "",
        "version": raw.get("version") or 1,
        "categories": categories,
    }


def now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def build_initial_entry(config: dict | None, context: dict | None = None) -> dict:
    """Build a fresh entry draft for ``config``.

    Args:
        config: Scouting config dict
        context: Optional ``scout_name`` and ``season_id`` for identity fields

    Returns:
        Draft dict with identity fields plus one defaulted key per field
    """
    context = context or {}
    draft = {
        "id": str(uuid.uuid4()),
        "scoutName": context.get("scout_name") or "",
        "timestamp": now_iso(),
        "seasonId": context.get("season_id") or "",
        "synced": False,
        "teamNumber": "",
        "matchNumber": "",
        "alliance": DEFAULT_ALLIANCE,
    }
    for field in iter_fields(config):
        draft[field["id"]] = field_default(field)
    return draft


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def validate_step(
    step_index: int,
    draft: dict,
    config: dict | None,
    enforce_required: bool = False,
) -> tuple[bool, dict[str, str]]:
    """Validate one form step.

    Step 0 is the fixed match-info step. Steps 1..N map to
    ``config["categories"][step_index - 1]`` and only check ``required``
    fields when ``enforce_required`` is set.

    Returns:
        Tuple of (valid, errors keyed by field id)
    """
    errors: dict[str, str] = {}

    if step_index == 0:
        if _is_blank(draft.get("teamNumber")):
            errors["teamNumber"] = "Team number is required"
        if _is_blank(draft.get("matchNumber")):
            errors["matchNumber"] = "Match number is required"
    elif enforce_required:
        categories = (config or {}).get("categories") or []
        if 0 < step_index <= len(categories):
            for field in categories[step_index - 1].get("fields") or []:
                if field.get("required") and _is_blank(draft.get(field.get("id"))):
                    label = field.get("label") or field.get("id")
                    errors[field["id"]] = f"{label} is required"

    if errors:
        logger.debug("[Form] Step %s invalid: %s", step_index, ", ".join(errors))
    return not errors, errors
