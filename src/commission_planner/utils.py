"""Utility functions for the commission planner."""

import unicodedata
from datetime import datetime, time

from .constants import ANY_DAY_NAME, DAY_ALIASES, DAY_NAMES, TIME_FORMAT


def parse_time(value: str | time) -> time:
    """Parse a time of day from an "HH:MM" string.

    Args:
        value: Time string like "09:00" or an existing time object

    Returns:
        Parsed time (seconds and microseconds dropped)

    Raises:
        ValueError: If the string is not in HH:MM format
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    text = str(value).strip()
    # Catalog exports sometimes use "9.30" or "0930"
    if "." in text:
        text = text.replace(".", ":")
    elif ":" not in text and len(text) == 4 and text.isdigit():
        text = f"{text[:2]}:{text[2:]}"

    return datetime.strptime(text, TIME_FORMAT).time()


def format_time(value: time) -> str:
    """Format a time of day as "HH:MM"."""
    return value.strftime(TIME_FORMAT)


def minutes_of_day(value: time) -> int:
    """Get minutes elapsed since midnight for a time of day."""
    return value.hour * 60 + value.minute


def normalize_day_name(name: str) -> str | None:
    """Normalize a day name to its canonical lowercase English form.

    Accepts English names, three-letter abbreviations, Spanish names
    (with or without accents) and "any".

    Args:
        name: Raw day name

    Returns:
        Canonical day name ("monday" ... "saturday", or "any"),
        or None if the name is not recognized
    """
    if not name:
        return None

    cleaned = str(name).strip().lower()
    if cleaned in DAY_NAMES or cleaned == ANY_DAY_NAME:
        return cleaned

    if cleaned in DAY_ALIASES:
        return DAY_ALIASES[cleaned]

    # Strip accents ("miércoles" -> "miercoles")
    stripped = "".join(
        c for c in unicodedata.normalize("NFKD", cleaned) if not unicodedata.combining(c)
    )
    return DAY_ALIASES.get(stripped)


def safe_float(value, default: float = 0.0) -> float:
    """Safely convert a value to float."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default
