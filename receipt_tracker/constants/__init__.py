"""Constants package for the receipt tracker."""

from .categories import (
    CATEGORY_KEYWORD_RULES,
    DEFAULT_CATEGORY,
    HSA_ELIGIBILITY_NOTE,
    MEDICAL_CATEGORIES,
    get_category_by_value,
    get_category_names,
    get_medical_categories,
    is_valid_category,
)
from .merchants import (
    MEDICAL_STORE_KEYWORDS,
    MEDICAL_TERMS,
    find_medical_store_keyword,
    is_medical_store,
)

__all__ = [
    "CATEGORY_KEYWORD_RULES",
    "DEFAULT_CATEGORY",
    "HSA_ELIGIBILITY_NOTE",
    "MEDICAL_CATEGORIES",
    "get_category_by_value",
    "get_category_names",
    "get_medical_categories",
    "is_valid_category",
    "MEDICAL_STORE_KEYWORDS",
    "MEDICAL_TERMS",
    "find_medical_store_keyword",
    "is_medical_store",
]
