"""Tenant record as supplied by the roster."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Tenant:
    """Tenant occupying a rented unit.

    Attributes:
        id: Unique tenant identifier
        rent_amount: Monthly rent (zero for a complimentary unit, never negative)
        lease_begin_date: Lease start; date, datetime, ISO string or None (lease begins now)
        name: Display name
        unit: Unit label (e.g., "A4")
        block: Property block code (e.g., "OLD", "NEW", "NYERI")
        phone: Contact phone, printed on reports
    """

    id: int
    rent_amount: Decimal
    lease_begin_date: date | datetime | str | None = None
    name: str = ""
    unit: str = ""
    block: str | None = None
    phone: str | None = None

    def __post_init__(self) -> None:
        # Normalize to Decimal so ledger arithmetic never mixes float and Decimal
        if not isinstance(self.rent_amount, Decimal):
            object.__setattr__(self, "rent_amount", Decimal(str(self.rent_amount)))

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, unit={self.unit!r}, rent_amount={self.rent_amount})>"


__all__ = ["Tenant"]
