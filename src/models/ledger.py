"""Derived ledger entities. Recomputed on every query, never persisted."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from src.models.billing_period import BillingPeriod, PaymentStatus


@dataclass(frozen=True)
class LedgerEntry:
    """One month of the rent ledger.

    Attributes:
        period: Billing period this entry covers
        base_rent: Tenant's rent at computation time (not historized)
        paid: Sum of all receipts for the period
        arrears: Shortfall for this period alone
        credit: Overpayment for this period alone
        status: Payment status of the period
        running_net_balance: Cumulative arrears minus cumulative credit, floored at 0
    """

    period: BillingPeriod
    base_rent: Decimal
    paid: Decimal
    arrears: Decimal
    credit: Decimal
    status: PaymentStatus
    running_net_balance: Decimal

    @property
    def label(self) -> str:
        return self.period.key


@dataclass(frozen=True)
class LedgerSummary:
    """Totals over a whole ledger."""

    total_arrears: Decimal
    total_credit: Decimal

    @property
    def net_balance(self) -> Decimal:
        return max(self.total_arrears - self.total_credit, Decimal(0))


@dataclass(frozen=True)
class Ledger:
    """Full reconciliation result for one tenant."""

    tenant_id: int
    as_of: date
    entries: tuple[LedgerEntry, ...]
    summary: LedgerSummary


@dataclass(frozen=True)
class PeriodSummary:
    """Ledger figures for a reporting period (month, quarter or year).

    status holds a PaymentStatus value for monthly rows and an
    AggregateStatus value for quarterly and annual rows.
    """

    label: str
    year: int
    base_rent: Decimal
    paid: Decimal
    arrears: Decimal
    credit: Decimal
    net_balance: Decimal
    status: str


@dataclass(frozen=True)
class TenantSummary:
    """Roster row for one tenant."""

    tenant_id: int
    tenant_name: str
    unit: str
    total_paid: Decimal
    net_balance: Decimal
    latest_paid_date: datetime | date | None
    status: str


__all__ = [
    "LedgerEntry",
    "LedgerSummary",
    "Ledger",
    "PeriodSummary",
    "TenantSummary",
]
