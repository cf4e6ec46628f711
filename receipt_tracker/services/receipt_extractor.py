"""Receipt text extractor for turning raw OCR text into a structured receipt.

This module provides the single ReceiptTextExtractor used by both the API routes and
the CLI. It has no dependencies on Flask or on the OCR client, so it can be reused
anywhere a block of receipt text is already in hand.

Every field is extracted independently from the same text: a field that cannot be
determined falls back to its empty default without affecting the others.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
import logging
import re
from typing import Any

from receipt_tracker.constants.categories import (
    CATEGORY_KEYWORD_RULES,
    DEFAULT_CATEGORY,
    CategoryKeywordRule,
    is_valid_category,
)
from receipt_tracker.constants.merchants import find_medical_store_keyword

logger = logging.getLogger(__name__)

TWO_DIGIT_YEAR_PIVOT = 50
MAX_AMOUNT = Decimal("10000")
MAX_LINE_ITEMS = 10

STORE_KEYWORD_SCAN_LINES = 5
STORE_FALLBACK_SCAN_LINES = 3
STORE_NAME_MAX_WORDS = 3

# Labeled totals, highest priority first
LABELED_AMOUNT_PATTERNS = [
    re.compile(r"total[:\s]*\$?([0-9]+\.?[0-9]*)", re.IGNORECASE),
    re.compile(r"amount[:\s]*\$?([0-9]+\.?[0-9]*)", re.IGNORECASE),
    re.compile(r"balance[:\s]*\$?([0-9]+\.?[0-9]*)", re.IGNORECASE),
]
DOLLAR_CENTS_PATTERN = re.compile(r"\$([0-9]+\.[0-9]{2})")
DOLLAR_PATTERN = re.compile(r"\$([0-9]+\.?[0-9]*)")

# Small-big-big first, then big-small-small
DATE_PATTERNS = [
    re.compile(r"(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})"),
    re.compile(r"(\d{2,4})[/-](\d{1,2})[/-](\d{1,2})"),
]
# Field-order interpretations of a match's three groups, tried in this order
DATE_FIELD_ORDERS = [
    ("month", "day", "year"),
    ("year", "month", "day"),
    ("day", "month", "year"),
]

# Trailing price of a "description  price" line
LINE_ITEM_PRICE_PATTERN = re.compile(r"\s\$?([0-9]+(?:\.[0-9]*)?)$")

AMOUNT_LINE_PATTERNS = [
    re.compile(r"\$[0-9]+\.?[0-9]*"),
    re.compile(r"total|amount|balance", re.IGNORECASE),
]
DATE_LINE_PATTERN = re.compile(r"\d{1,2}[/-]\d{1,2}[/-]\d{2,4}")
STORE_NAME_STRIP_PATTERN = re.compile(r"[^\w\s&'-]")


@dataclass(frozen=True)
class LineItem:
    """A single purchased good or service and its price."""

    description: str
    price: Decimal


@dataclass(frozen=True)
class ExtractedReceipt:
    """Best-guess structured data extracted from receipt text."""

    store_name: str = ""
    amount: Decimal | None = None
    receipt_date: date | None = None
    category: str = DEFAULT_CATEGORY
    line_items: tuple[LineItem, ...] = ()
    raw_text: str = ""

    @property
    def fields_to_verify(self) -> list[str]:
        """Fields the user should check by hand before saving."""
        fields: list[str] = []
        if not self.store_name:
            fields.append("store_name")
        if self.amount is None or self.amount <= 0:
            fields.append("amount")
        if self.receipt_date is None:
            fields.append("receipt_date")
        if self.category == DEFAULT_CATEGORY:
            fields.append("category")
        return fields

    @property
    def confidence(self) -> str:
        """Overall confidence level: high, medium or low."""
        unverified = len(self.fields_to_verify)
        if unverified == 0:
            return "high"
        if unverified == 1:
            return "medium"
        return "low"

    @property
    def review_required(self) -> bool:
        return self.confidence == "low"

    @property
    def confidence_scores(self) -> dict[str, float]:
        """Per-field confidence scores (0.0-1.0)."""
        scores: dict[str, float] = {}

        scores["store_name"] = 0.85 if self.store_name else 0.0
        scores["amount"] = 0.9 if self.amount else 0.0
        scores["receipt_date"] = 0.8 if self.receipt_date else 0.0
        scores["category"] = 0.75 if self.category != DEFAULT_CATEGORY else 0.0
        scores["line_items"] = min(0.7, len(self.line_items) * 0.1) if self.line_items else 0.0

        return scores


class ReceiptTextExtractor:
    """Heuristic extractor mapping raw OCR text to an ExtractedReceipt.

    Instances hold only read-only settings, so one extractor can be shared
    between request threads.
    """

    def __init__(
        self,
        two_digit_year_pivot: int = TWO_DIGIT_YEAR_PIVOT,
        max_amount: Decimal | int | str = MAX_AMOUNT,
        max_line_items: int = MAX_LINE_ITEMS,
        category_rules: list[CategoryKeywordRule] | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            two_digit_year_pivot: Two-digit years above this map to 19xx, others to 20xx
            max_amount: Exclusive upper bound for a plausible receipt amount
            max_line_items: Maximum number of line items kept
            category_rules: Ordered keyword rules for category suggestion
            clock: Callable returning today's date, used for the date window

        Raises:
            ValueError: If a keyword rule names a category outside the fixed set
        """
        self.two_digit_year_pivot = two_digit_year_pivot
        self.max_amount = Decimal(str(max_amount))
        self.max_line_items = max_line_items
        self.category_rules = category_rules if category_rules is not None else CATEGORY_KEYWORD_RULES
        unknown = [rule["category"] for rule in self.category_rules if not is_valid_category(rule["category"])]
        if unknown:
            raise ValueError(f"Unknown categories in keyword rules: {unknown}")
        self.clock = clock or date.today

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any], clock: Callable[[], date] | None = None
    ) -> "ReceiptTextExtractor":
        """Build an extractor from application configuration values.

        Args:
            config: Mapping with optional RECEIPT_* keys (e.g. a Flask app.config)
            clock: Optional override for today's date

        Returns:
            Configured ReceiptTextExtractor
        """
        return cls(
            two_digit_year_pivot=int(config.get("RECEIPT_TWO_DIGIT_YEAR_PIVOT", TWO_DIGIT_YEAR_PIVOT)),
            max_amount=config.get("RECEIPT_MAX_AMOUNT", MAX_AMOUNT),
            max_line_items=int(config.get("RECEIPT_MAX_LINE_ITEMS", MAX_LINE_ITEMS)),
            clock=clock,
        )

    def parse(self, text: str) -> ExtractedReceipt:
        """Parse raw OCR text into structured receipt fields.

        Args:
            text: Raw text extracted from OCR

        Returns:
            ExtractedReceipt with best-guess fields; empty input yields all defaults
        """
        if not text or not text.strip():
            logger.debug("No text to parse - returning empty ExtractedReceipt")
            return ExtractedReceipt(raw_text=text or "")

        lowered = text.lower()

        store_name = self._extract_store_name(text)
        receipt = ExtractedReceipt(
            store_name=store_name,
            amount=self._extract_amount(lowered),
            receipt_date=self._extract_date(lowered),
            category=self._suggest_category(store_name, lowered),
            line_items=self._extract_line_items(text),
            raw_text=text,
        )

        logger.debug(
            f"Extracted receipt: store={receipt.store_name!r} amount={receipt.amount} "
            f"date={receipt.receipt_date} category={receipt.category} items={len(receipt.line_items)} "
            f"verify={receipt.fields_to_verify}"
        )
        return receipt

    def _split_lines(self, text: str) -> list[str]:
        return [line.strip() for line in text.split("\n") if line.strip()]

    def _extract_store_name(self, text: str) -> str:
        """Pick the store line from the receipt header.

        Known healthcare merchants in the first few lines win; otherwise the first
        short header line that is neither an amount nor a date is used.
        """
        lines = self._split_lines(text)

        for line in lines[:STORE_KEYWORD_SCAN_LINES]:
            keyword = find_medical_store_keyword(line)
            if keyword:
                logger.debug(f"Store line '{line}' matched merchant keyword '{keyword}'")
                return self._clean_store_name(line)

        for line in lines[:STORE_FALLBACK_SCAN_LINES]:
            if len(line) > 3 and not self._is_amount_line(line) and not self._is_date_line(line):
                logger.debug(f"Using header line '{line}' as store name")
                return self._clean_store_name(line)

        return ""

    def _clean_store_name(self, name: str) -> str:
        """Strip punctuation, capitalize each word and keep the first three words."""
        words = STORE_NAME_STRIP_PATTERN.sub(" ", name).split()
        return " ".join(word.capitalize() for word in words[:STORE_NAME_MAX_WORDS])

    def _is_amount_line(self, line: str) -> bool:
        return any(pattern.search(line) for pattern in AMOUNT_LINE_PATTERNS)

    def _is_date_line(self, line: str) -> bool:
        return DATE_LINE_PATTERN.search(line) is not None

    def _to_amount(self, raw: str) -> Decimal | None:
        """Convert a matched number to a Decimal within (0, max_amount)."""
        try:
            value = Decimal(raw)
        except InvalidOperation:
            return None
        if not value.is_finite() or not Decimal(0) < value < self.max_amount:
            return None
        return value

    def _extract_amount(self, text: str) -> Decimal | None:
        """Extract the total paid.

        Args:
            text: Lowercased receipt text

        Returns:
            Amount or None
        """
        for pattern in LABELED_AMOUNT_PATTERNS:
            match = pattern.search(text)
            if match:
                amount = self._to_amount(match.group(1))
                if amount is not None:
                    logger.debug(f"Amount {amount} from labeled pattern '{pattern.pattern}'")
                    return amount

        # A lone $X.XX token is taken as is; several are left to the largest-value fallback
        cents_tokens = DOLLAR_CENTS_PATTERN.findall(text)
        if len(cents_tokens) == 1:
            amount = self._to_amount(cents_tokens[0])
            if amount is not None:
                return amount

        candidates = [
            amount for amount in (self._to_amount(token) for token in DOLLAR_PATTERN.findall(text)) if amount is not None
        ]
        if candidates:
            return max(candidates)

        return None

    def _expand_year(self, year: str) -> int:
        value = int(year)
        if len(year) == 2:
            return 1900 + value if value > self.two_digit_year_pivot else 2000 + value
        return value

    def _build_date(self, year: str, month: str, day: str) -> date | None:
        try:
            return date(self._expand_year(year), int(month), int(day))
        except ValueError:
            return None

    def _one_year_before(self, today: date) -> date:
        try:
            return today.replace(year=today.year - 1)
        except ValueError:
            # Feb 29 has no counterpart in the previous year
            return today.replace(year=today.year - 1, day=28)

    def _extract_date(self, text: str) -> date | None:
        """Extract the receipt date.

        Every match is tried as month/day/year, year/month/day and day/month/year in
        that order; the first calendar-valid date in the last year is returned.

        Args:
            text: Lowercased receipt text

        Returns:
            Receipt date or None
        """
        today = self.clock()
        earliest = self._one_year_before(today)

        for pattern in DATE_PATTERNS:
            for match in pattern.finditer(text):
                for field_order in DATE_FIELD_ORDERS:
                    parts = dict(zip(field_order, match.groups()))
                    candidate = self._build_date(parts["year"], parts["month"], parts["day"])
                    if candidate is not None and earliest <= candidate <= today:
                        logger.debug(f"Date {candidate.isoformat()} from '{match.group()}' as {field_order}")
                        return candidate

        return None

    def _extract_line_items(self, text: str) -> tuple[LineItem, ...]:
        """Extract "description  price" lines in order of appearance."""
        items: list[LineItem] = []

        for line in self._split_lines(text):
            match = LINE_ITEM_PRICE_PATTERN.search(line)
            if not match:
                continue

            description = line[: match.start()].rstrip()
            try:
                price = Decimal(match.group(1))
            except InvalidOperation:
                continue

            if len(description) > 2 and price > 0:
                items.append(LineItem(description=description, price=price))
                if len(items) >= self.max_line_items:
                    break

        return tuple(items)

    def _suggest_category(self, store_name: str, text: str) -> str:
        store = store_name.lower()
        content = text.lower()

        for rule in self.category_rules:
            if any(keyword in store for keyword in rule["store_keywords"]) or any(
                keyword in content for keyword in rule["content_keywords"]
            ):
                return rule["category"]

        return DEFAULT_CATEGORY
