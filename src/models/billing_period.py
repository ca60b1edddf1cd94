"""Billing period value object and the status vocabularies used by the ledger."""

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

# Month names are part of the receipt key format, independent of LOCALE
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_MONTH_LOOKUP = {name.lower(): index for index, name in enumerate(MONTH_NAMES)}
_NAMED_KEY = re.compile(r"^\s*([A-Za-z]+)\s+(\d{4})\s*$")
_NUMERIC_KEY = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


class PaymentStatus(str, Enum):
    """Status of a single month in the rent ledger."""

    MISSING = "Missing"
    """Nothing was paid for the month"""

    PARTIAL = "Partial"
    """Something, but less than the base rent, was paid"""

    PAID = "Paid"
    """Exactly the base rent was paid"""

    PAID_OVER = "Paid (Over)"
    """More than the base rent was paid; the excess becomes credit"""


class AggregateStatus(str, Enum):
    """Status of a quarterly or annual group of ledger months."""

    PAID = "Paid"
    ARREARS = "Arrears"


class RosterStatus(str, Enum):
    """Status shown next to a tenant in the roster."""

    UP_TO_DATE = "Up to Date"
    HAS_ARREARS = "Has Arrears"


class Granularity(str, Enum):
    """Reporting granularity for ledger aggregation."""

    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    ANNUAL = "Annual"


@dataclass(frozen=True, order=True)
class BillingPeriod:
    """One calendar month of rent.

    Attributes:
        year: Calendar year
        month_index: Zero-based month (0 = January, 11 = December)
    """

    year: int
    month_index: int

    def __post_init__(self) -> None:
        if not 0 <= self.month_index <= 11:
            raise ValueError(f"month_index must be within 0..11, got {self.month_index}")

    @classmethod
    def from_date(cls, value: date | datetime) -> "BillingPeriod":
        """Billing period containing the given date."""
        return cls(year=value.year, month_index=value.month - 1)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "BillingPeriod":
        year, month_index = divmod(ordinal, 12)
        return cls(year=year, month_index=month_index)

    @classmethod
    def parse(cls, key: str) -> "BillingPeriod":
        """Parse a billing period key.

        Accepts the receipt key format ("March 2024", case-insensitive) and
        the numeric due-date format ("2024-03").

        Raises:
            ValueError: If key matches neither format
        """
        if not isinstance(key, str):
            raise ValueError(f"Billing period key must be a string, got {type(key).__name__}")

        named = _NAMED_KEY.match(key)
        if named:
            month_index = _MONTH_LOOKUP.get(named.group(1).lower())
            if month_index is not None:
                return cls(year=int(named.group(2)), month_index=month_index)

        numeric = _NUMERIC_KEY.match(key)
        if numeric and 1 <= int(numeric.group(2)) <= 12:
            return cls(year=int(numeric.group(1)), month_index=int(numeric.group(2)) - 1)

        raise ValueError(f"Cannot parse billing period key '{key}' (expected 'March 2024' or '2024-03')")

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month_index]

    @property
    def key(self) -> str:
        """Receipt key for this period, e.g. "March 2024"."""
        return f"{self.month_name} {self.year}"

    @property
    def quarter(self) -> int:
        """Quarter of the year, 1 through 4."""
        return self.month_index // 3 + 1

    @property
    def ordinal(self) -> int:
        return self.year * 12 + self.month_index

    def next(self) -> "BillingPeriod":
        return BillingPeriod.from_ordinal(self.ordinal + 1)

    def __str__(self) -> str:
        return self.key


def months_between(start: BillingPeriod, end: BillingPeriod) -> int:
    """Number of whole months from start to end (negative if end precedes start)."""
    return end.ordinal - start.ordinal


__all__ = [
    "MONTH_NAMES",
    "BillingPeriod",
    "PaymentStatus",
    "AggregateStatus",
    "RosterStatus",
    "Granularity",
    "months_between",
]
