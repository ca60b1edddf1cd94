"""Domain model exports.

Tenant and Receipt come from external collaborators (roster and payments
store); everything in src.models.ledger is derived on demand.
"""

from src.models.billing_period import (
    MONTH_NAMES,
    AggregateStatus,
    BillingPeriod,
    Granularity,
    PaymentStatus,
    RosterStatus,
    months_between,
)
from src.models.ledger import Ledger, LedgerEntry, LedgerSummary, PeriodSummary, TenantSummary
from src.models.receipt import Receipt
from src.models.tenant import Tenant

__all__ = [
    "MONTH_NAMES",
    "AggregateStatus",
    "BillingPeriod",
    "Granularity",
    "PaymentStatus",
    "RosterStatus",
    "months_between",
    "Ledger",
    "LedgerEntry",
    "LedgerSummary",
    "PeriodSummary",
    "TenantSummary",
    "Receipt",
    "Tenant",
]
