# Methodology: Clean Architecture – domain layer for USD→EUR rates
# Domain layer: entities and pure parsing rules (no I/O)
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union
import re

# -------------------------- Constants --------------------------
EPOCH = date(2000, 1, 1)
FROM_CURRENCY = "USD"
TO_CURRENCY = "EUR"

# Header/metadata lines are told apart from data by content, not position
DATA_ROW_REGEX = re.compile(r"\d{4}-\d{2}-\d{2}")
FEED_DATE_REGEX = re.compile(r"(\d{4})-(\d{2})-(\d{2})(?:$|[T\s])")


class _Invalid:
    """Marker returned by the field parsers when a feed field is unusable."""

    _instance: Optional["_Invalid"] = None

    def __new__(cls) -> "_Invalid":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INVALID"

    def __bool__(self) -> bool:
        return False


INVALID = _Invalid()


# -------------------------- Entities --------------------------
@dataclass(frozen=True)
class ExchangeRate:
    date: date
    value: Decimal
    from_currency: str = FROM_CURRENCY
    to_currency: str = TO_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValueError(f"Exchange rate value must be a Decimal, got {type(self.value).__name__}")
        if not self.value.is_finite() or self.value <= 0:
            raise ValueError(f"Exchange rate value must be positive, got {self.value}")


class RowStatus(Enum):
    VALID = "valid"
    INVALID_DATE = "invalid_date"
    INVALID_VALUE = "invalid_value"


@dataclass(frozen=True)
class FeedRow:
    status: RowStatus
    rate: Optional[ExchangeRate] = None

    @property
    def is_valid(self) -> bool:
        return self.status is RowStatus.VALID


# -------------------------- Pure domain functions --------------------------

def is_data_row(first_field: object) -> bool:
    if not isinstance(first_field, str):
        return False
    return DATA_ROW_REGEX.match(first_field.strip()) is not None


def parse_feed_date(field: object) -> Union[date, _Invalid]:
    """Return the calendar date at the start of ``field`` or INVALID.

    Accepts ``YYYY-MM-DD`` optionally followed by a time part; the day must exist.
    """
    if not isinstance(field, str):
        return INVALID
    m = FEED_DATE_REGEX.match(field.strip())
    if not m:
        return INVALID
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return INVALID


def parse_rate_value(field: object) -> Union[Decimal, _Invalid]:
    # Feeds mark unavailable rates with placeholders such as "-"
    if not isinstance(field, str):
        return INVALID
    s = field.strip()
    # Decimal() would accept digit grouping such as "1_0503"
    if not s or "_" in s:
        return INVALID
    try:
        value = Decimal(s)
    except InvalidOperation:
        return INVALID
    if not value.is_finite() or value <= 0:
        return INVALID
    return value


def classify_row(date_field: object, value_field: object) -> FeedRow:
    parsed_date = parse_feed_date(date_field)
    if parsed_date is INVALID:
        return FeedRow(RowStatus.INVALID_DATE)
    parsed_value = parse_rate_value(value_field)
    if parsed_value is INVALID:
        return FeedRow(RowStatus.INVALID_VALUE)
    return FeedRow(RowStatus.VALID, ExchangeRate(date=parsed_date, value=parsed_value))
