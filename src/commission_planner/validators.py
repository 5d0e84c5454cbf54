"""Validation logic for catalog and request entries."""

from typing import Any

from .constants import ANY_DAY_NAME
from .models import PriorityType
from .utils import normalize_day_name, parse_time


def validate_time(value: Any, field_name: str = "time") -> tuple[bool, str | None]:
    """Validate a time of day.

    Args:
        value: Time value (expected "HH:MM")
        field_name: Name of the field for error message

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or value == "":
        return False, f"{field_name} is empty"

    try:
        parse_time(value)
    except (ValueError, TypeError):
        return False, f"Invalid {field_name}: '{value}'. Expected HH:MM"

    return True, None


def validate_day(value: Any, allow_any: bool = False) -> tuple[bool, str | None]:
    """Validate a day name.

    Args:
        value: Day name
        allow_any: Whether "any" is accepted

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not value:
        return False, "Day is empty"

    day = normalize_day_name(str(value))
    if day is None:
        return False, f"Invalid day: '{value}'"

    if day == ANY_DAY_NAME and not allow_any:
        return False, "Day 'any' is only valid for freeday priorities"

    return True, None


def validate_timeblock(data: Any) -> tuple[bool, str | None]:
    """Validate a timeblock entry (day, start, end, building)."""
    if not isinstance(data, dict):
        return False, f"Timeblock must be an object, got {type(data).__name__}"

    valid, error = validate_day(data.get("day"))
    if not valid:
        return False, error

    for field_name in ("start", "end"):
        valid, error = validate_time(data.get(field_name), field_name)
        if not valid:
            return False, error

    if parse_time(data["start"]) >= parse_time(data["end"]):
        return False, f"Start {data['start']} is not before end {data['end']}"

    return True, None


def validate_subject(data: Any) -> tuple[bool, str | None]:
    """Validate a catalog subject entry, including its commissions."""
    if not isinstance(data, dict):
        return False, f"Subject must be an object, got {type(data).__name__}"

    code = str(data.get("code", "")).strip()
    if not code:
        return False, "Subject code is empty"

    commissions = data.get("commissions", [])
    if not isinstance(commissions, list):
        return False, f"Subject '{code}': commissions must be a list"

    for position, commission in enumerate(commissions, start=1):
        if not isinstance(commission, dict):
            return False, f"Subject '{code}': commission #{position} must be an object"
        if not str(commission.get("label", "")).strip():
            return False, f"Subject '{code}': commission #{position} has no label"

        professors = commission.get("professors", commission.get("teachers"))
        if professors is not None and not isinstance(professors, list):
            return False, f"Subject '{code}': professors must be a list"

        schedule = commission.get("schedule", [])
        if not isinstance(schedule, list):
            return False, f"Subject '{code}', commission '{commission['label']}': schedule must be a list"

        for block in schedule:
            valid, error = validate_timeblock(block)
            if not valid:
                return False, f"Subject '{code}', commission '{commission['label']}': {error}"

    return True, None


def validate_selection(data: Any) -> tuple[bool, str | None]:
    """Validate a subject selection (a code string or {code, weight})."""
    if isinstance(data, str):
        return (True, None) if data.strip() else (False, "Selection code is empty")

    if not isinstance(data, dict):
        return False, f"Selection must be a code or an object, got {type(data).__name__}"

    if not str(data.get("code", "")).strip():
        return False, "Selection code is empty"

    weight = data.get("weight", 1.0)
    try:
        float(weight)
    except (ValueError, TypeError):
        return False, f"Invalid weight for '{data['code']}': '{weight}'"

    return True, None


def validate_priority(data: Any) -> tuple[bool, str | None]:
    """Validate the outer shape of a priority entry.

    Type-specific payload checks happen when the priority is built.
    """
    if not isinstance(data, dict):
        return False, f"Priority must be an object, got {type(data).__name__}"

    kind = str(data.get("type", "")).strip().lower()
    if not kind:
        return False, "Priority type is empty"

    supported = [k.value for k in PriorityType]
    if kind not in supported:
        return False, f"Unknown priority type: '{kind}'. Expected: {', '.join(supported)}"

    weight = data.get("weight", 1.0)
    try:
        float(weight)
    except (ValueError, TypeError):
        return False, f"Invalid priority weight: '{weight}'"

    exclusive = data.get("exclusive", False)
    if not isinstance(exclusive, bool):
        return False, f"Priority 'exclusive' must be true or false, got '{exclusive}'"

    if kind == PriorityType.BUSYTIME.value:
        blocks = data.get("value", [])
        if not isinstance(blocks, list):
            return False, "Busytime value must be a list of timeblocks"
        for block in blocks:
            valid, error = validate_timeblock(block)
            if not valid:
                return False, f"Busytime: {error}"

    return True, None
