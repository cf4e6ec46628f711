"""Known healthcare merchant keywords used to spot the store line of a receipt."""

from typing import List

# Lowercase substrings; a receipt header line containing any of these is taken as the store name
MEDICAL_STORE_KEYWORDS: List[str] = [
    "cvs",
    "walgreens",
    "rite aid",
    "walmart pharmacy",
    "target pharmacy",
    "costco pharmacy",
    "kroger pharmacy",
    "safeway pharmacy",
    "publix pharmacy",
    "dental",
    "dentist",
    "orthodontics",
    "vision",
    "optometry",
    "lenscrafters",
    "pearle vision",
    "america's best",
    "kaiser",
    "clinic",
    "medical center",
    "hospital",
    "urgent care",
    "family practice",
]

# Shorter generic terms for a yes/no "is this a medical merchant" check
MEDICAL_TERMS: List[str] = ["cvs", "walgreens", "pharmacy", "dental", "vision", "medical", "clinic", "hospital"]


def find_medical_store_keyword(line: str) -> str | None:
    """Return the first merchant keyword contained in a line, if any.

    Args:
        line: A line of receipt text, any casing

    Returns:
        The matching keyword or None
    """
    lower_line = line.lower()
    for keyword in MEDICAL_STORE_KEYWORDS:
        if keyword in lower_line:
            return keyword
    return None


def is_medical_store(store_name: str | None) -> bool:
    """Check whether a store name looks like a healthcare merchant."""
    if not store_name:
        return False
    name = store_name.lower()
    return any(term in name for term in MEDICAL_TERMS)
