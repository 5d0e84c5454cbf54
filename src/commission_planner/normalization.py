"""Name normalization utilities for professor and building names."""

import re

# Academic title prefixes to remove from professor names
PROFESSOR_PREFIX_PATTERNS = [
    # Spanish titles
    r"^ing\.\s*",  # ing. (ingeniero/a)
    r"^lic\.\s*",  # lic. (licenciado/a)
    r"^dra?\.\s*",  # dr. / dra. (doctor/a)
    r"^prof\.\s*",  # prof. (profesor/a)
    r"^mg\.\s*",  # mg. (magister)
    # English titles
    r"^dr\s+",  # Dr (doctor, no period)
    r"^professor\s+",  # professor (full)
]


def normalize_professor_name(name: str) -> str:
    """Normalize professor name by removing title prefixes and extra whitespace.

    Names like "Ing. Pérez, Juan" and "ing.Pérez,  Juan" both become
    "Pérez, Juan", so PROFESSOR priorities match regardless of how the
    catalog spelled the title.

    Args:
        name: Raw professor name with potential prefixes

    Returns:
        Cleaned professor name
    """
    if not name:
        return ""

    cleaned = str(name).strip()

    for prefix_pattern in PROFESSOR_PREFIX_PATTERNS:
        cleaned = re.sub(prefix_pattern, "", cleaned, flags=re.IGNORECASE)

    # Collapse multiple spaces to a single space
    cleaned = " ".join(cleaned.split())

    return cleaned.strip()


def normalize_building_name(name: str) -> str:
    """Normalize a building name (collapse whitespace, keep case)."""
    if not name:
        return ""
    return " ".join(str(name).split())
