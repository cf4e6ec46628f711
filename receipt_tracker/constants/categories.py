"""Centralized medical category constants for the receipt tracker.

This module holds the fixed category catalogue shown to users, and the ordered
keyword rules used to suggest a category from OCR text.
"""

from typing import List, TypedDict


class CategoryData(TypedDict):
    """Type definition for category data."""

    value: str
    label: str
    description: str
    hsa_eligible: bool | str


class CategoryKeywordRule(TypedDict):
    """Keyword group for one category suggestion."""

    category: str
    store_keywords: List[str]
    content_keywords: List[str]


DEFAULT_CATEGORY = "Other"

HSA_ELIGIBILITY_NOTE = "HSA/FSA eligibility may vary. Consult your plan administrator for specific rules."

# Fixed set of categories a receipt can be filed under
MEDICAL_CATEGORIES: List[CategoryData] = [
    {
        "value": "Pharmacy",
        "label": "Pharmacy",
        "description": "Prescription medications, over-the-counter drugs",
        "hsa_eligible": True,
    },
    {
        "value": "Dental",
        "label": "Dental",
        "description": "Dental care, cleanings, procedures",
        "hsa_eligible": True,
    },
    {
        "value": "Vision",
        "label": "Vision",
        "description": "Eye exams, glasses, contacts, vision care",
        "hsa_eligible": True,
    },
    {
        "value": "Medical Device",
        "label": "Medical Device",
        "description": "Medical equipment, supplies, devices",
        "hsa_eligible": True,
    },
    {
        "value": "Doctor Visit",
        "label": "Doctor Visit",
        "description": "Medical consultations, checkups, specialist visits",
        "hsa_eligible": True,
    },
    {
        "value": DEFAULT_CATEGORY,
        "label": "Other Medical",
        "description": "Other qualifying medical expenses",
        "hsa_eligible": "varies",
    },
]

# Evaluated in order; the first rule whose store or content keywords match wins
CATEGORY_KEYWORD_RULES: List[CategoryKeywordRule] = [
    {
        "category": "Pharmacy",
        "store_keywords": ["cvs", "walgreens", "pharmacy"],
        "content_keywords": ["prescription", "rx", "medication"],
    },
    {
        "category": "Dental",
        "store_keywords": ["dental", "dentist", "orthodontic"],
        "content_keywords": ["cleaning", "filling", "crown"],
    },
    {
        "category": "Vision",
        "store_keywords": ["vision", "optical", "lenscrafters", "eyecare"],
        "content_keywords": ["contacts", "glasses", "lens"],
    },
    {
        "category": "Medical Device",
        "store_keywords": [],
        "content_keywords": ["device", "equipment", "supply", "monitor", "meter"],
    },
    {
        "category": "Doctor Visit",
        "store_keywords": ["clinic", "medical", "doctor", "physician"],
        "content_keywords": ["consultation", "visit", "exam"],
    },
]


def get_medical_categories() -> List[CategoryData]:
    """Get the category catalogue.

    Returns:
        List of category data dictionaries, in display order
    """
    return [category.copy() for category in MEDICAL_CATEGORIES]


def get_category_names() -> List[str]:
    """Get just the values of the medical categories.

    Returns:
        List of category values
    """
    return [category["value"] for category in MEDICAL_CATEGORIES]


def get_category_by_value(value: str) -> CategoryData | None:
    """Get a specific category by its value.

    Args:
        value: The category value to find, e.g. "Dental"

    Returns:
        Category data dictionary or None if not found
    """
    for category in MEDICAL_CATEGORIES:
        if category["value"] == value:
            return category.copy()
    return None


def is_valid_category(value: str | None) -> bool:
    """Check whether a value is one of the fixed medical categories."""
    return value is not None and get_category_by_value(value) is not None
