"""Tests for category and merchant constants."""

import pytest

from receipt_tracker.constants import (
    CATEGORY_KEYWORD_RULES,
    DEFAULT_CATEGORY,
    MEDICAL_STORE_KEYWORDS,
    find_medical_store_keyword,
    get_category_by_value,
    get_category_names,
    get_medical_categories,
    is_medical_store,
    is_valid_category,
)


class TestCategories:
    def test_fixed_category_set(self) -> None:
        assert get_category_names() == ["Pharmacy", "Dental", "Vision", "Medical Device", "Doctor Visit", "Other"]

    def test_keyword_rules_cover_every_category_but_default(self) -> None:
        rule_categories = [rule["category"] for rule in CATEGORY_KEYWORD_RULES]

        assert rule_categories == [name for name in get_category_names() if name != DEFAULT_CATEGORY]

    def test_keywords_are_lowercase(self) -> None:
        for rule in CATEGORY_KEYWORD_RULES:
            for keyword in rule["store_keywords"] + rule["content_keywords"]:
                assert keyword == keyword.lower()
        for keyword in MEDICAL_STORE_KEYWORDS:
            assert keyword == keyword.lower()

    def test_get_category_by_value(self) -> None:
        category = get_category_by_value("Other")

        assert category is not None
        assert category["label"] == "Other Medical"
        assert category["hsa_eligible"] == "varies"
        assert get_category_by_value("Groceries") is None

    def test_returned_categories_are_copies(self) -> None:
        categories = get_medical_categories()
        categories[0]["label"] = "Changed"

        assert get_medical_categories()[0]["label"] == "Pharmacy"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("Dental", True), ("Doctor Visit", True), ("dental", False), ("", False), (None, False)],
    )
    def test_is_valid_category(self, value, expected) -> None:
        assert is_valid_category(value) is expected


class TestMerchants:
    def test_find_medical_store_keyword(self) -> None:
        assert find_medical_store_keyword("RITE AID #5521") == "rite aid"
        assert find_medical_store_keyword("Downtown Urgent Care") == "urgent care"
        assert find_medical_store_keyword("Hardware Depot") is None

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("Cvs Pharmacy", True), ("Valley Medical Group", True), ("Hardware Depot", False), ("", False), (None, False)],
    )
    def test_is_medical_store(self, name, expected) -> None:
        assert is_medical_store(name) is expected
