"""Rent ledger builder.

Reconstructs a tenant's month-by-month rent ledger from the lease start
month through the as-of month (inclusive) and carries arrears and credit
forward across months and years.

Per-month classification (base rent R, amount paid P):
- P == 0      -> Missing,     arrears = R
- 0 < P < R   -> Partial,     arrears = R - P
- P == R      -> Paid
- P > R       -> Paid (Over), credit = P - R

Running balance after month n:
    max(sum(arrears[0..n]) - sum(credit[0..n]), 0)

Arrears and credit are accumulated separately and only netted on read, so
a later overpayment never rewrites the status recorded for an earlier month.

The clock is never read here: every entry point takes an explicit as_of date.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from itertools import accumulate, islice
from typing import Iterable, NamedTuple

from src.models import BillingPeriod, Ledger, LedgerEntry, LedgerSummary, PaymentStatus, Receipt, Tenant
from src.services.errors import ReceiptTenantMismatchError

logger = logging.getLogger(__name__)

ZERO = Decimal(0)

# Accepted lease begin formats, tried in order before ISO datetime parsing
LEASE_DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y")


class PeriodAssessment(NamedTuple):
    """Outcome of comparing one month's payments with its rent."""

    status: PaymentStatus
    arrears: Decimal
    credit: Decimal


class CarryForward(NamedTuple):
    """Arrears and credit accumulated up to and including a month."""

    arrears: Decimal = ZERO
    credit: Decimal = ZERO

    @property
    def net_balance(self) -> Decimal:
        return max(self.arrears - self.credit, ZERO)

    def advance(self, assessment: PeriodAssessment) -> "CarryForward":
        return CarryForward(self.arrears + assessment.arrears, self.credit + assessment.credit)


def _parse_date_string(value: str) -> date:
    value = value.strip()
    for fmt in LEASE_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    # Full ISO timestamps, e.g. "2024-01-01T00:00:00+03:00"
    return datetime.fromisoformat(value).date()


def resolve_lease_start(lease_begin_date: date | datetime | str | None, *, as_of: date) -> BillingPeriod:
    """Determine the first billing period of a lease.

    Missing or unparseable dates mean the lease begins in the as-of month.
    A lease starting after as_of is clamped to the as-of month so the ledger
    always holds at least one period.

    Args:
        lease_begin_date: Lease start as recorded on the tenant
        as_of: Reference date of the computation

    Returns:
        Billing period the ledger starts at
    """
    current = BillingPeriod.from_date(as_of)

    if lease_begin_date is None or lease_begin_date == "":
        return current

    if isinstance(lease_begin_date, date):
        begin = lease_begin_date
    elif isinstance(lease_begin_date, str):
        try:
            begin = _parse_date_string(lease_begin_date)
        except ValueError:
            logger.warning(
                "Unparseable lease begin date %r, treating lease as starting %s",
                lease_begin_date,
                current,
            )
            return current
    else:
        logger.warning(
            "Unsupported lease begin date type %s, treating lease as starting %s",
            type(lease_begin_date).__name__,
            current,
        )
        return current

    start = BillingPeriod.from_date(begin)
    if start > current:
        logger.warning("Lease begins %s, after as-of month %s; starting at %s", start, current, current)
        return current
    return start


def enumerate_billing_periods(start: BillingPeriod, end: BillingPeriod) -> list[BillingPeriod]:
    """Contiguous billing periods from start to end inclusive (at least one)."""
    periods = [start]
    while periods[-1] < end:
        periods.append(periods[-1].next())
    return periods


def merge_receipts(receipts: Iterable[Receipt]) -> dict[BillingPeriod, Decimal]:
    """Sum receipt amounts per billing period.

    Receipts sharing a period add up. Receipts with an unparseable period
    key cannot be placed in the ledger and are skipped with a warning.
    """
    paid_by_period: dict[BillingPeriod, Decimal] = {}
    for receipt in receipts:
        try:
            period = BillingPeriod.parse(receipt.billing_period_key)
        except ValueError:
            logger.warning(
                "Skipping receipt with unknown billing period %r for tenant %s",
                receipt.billing_period_key,
                receipt.tenant_id,
            )
            continue
        paid_by_period[period] = paid_by_period.get(period, ZERO) + receipt.amount_paid
    return paid_by_period


def check_receipts_belong(tenant: Tenant, receipts: Iterable[Receipt]) -> None:
    """Ensure every receipt belongs to the tenant.

    Raises:
        ReceiptTenantMismatchError: On the first receipt of another tenant
    """
    for receipt in receipts:
        if receipt.tenant_id != tenant.id:
            raise ReceiptTenantMismatchError(tenant.id, receipt.tenant_id)


def classify_payment(base_rent: Decimal, paid: Decimal) -> PeriodAssessment:
    """Classify one month's payment against its base rent."""
    if paid == 0:
        return PeriodAssessment(PaymentStatus.MISSING, base_rent, ZERO)
    if paid < base_rent:
        return PeriodAssessment(PaymentStatus.PARTIAL, base_rent - paid, ZERO)
    if paid == base_rent:
        return PeriodAssessment(PaymentStatus.PAID, ZERO, ZERO)
    return PeriodAssessment(PaymentStatus.PAID_OVER, ZERO, paid - base_rent)


def build_ledger(tenant: Tenant, receipts: Iterable[Receipt], *, as_of: date) -> list[LedgerEntry]:
    """Build the month-by-month rent ledger for a tenant.

    Args:
        tenant: Tenant whose ledger is built
        receipts: The tenant's receipts (must all carry tenant.id)
        as_of: Reference date; its month is the last ledger month

    Returns:
        Chronological ledger entries, one per billing period, never empty

    Raises:
        ReceiptTenantMismatchError: If a receipt belongs to another tenant
    """
    receipts = tuple(receipts)
    check_receipts_belong(tenant, receipts)

    start = resolve_lease_start(tenant.lease_begin_date, as_of=as_of)
    periods = enumerate_billing_periods(start, BillingPeriod.from_date(as_of))
    paid_by_period = merge_receipts(receipts)
    base_rent = tenant.rent_amount

    paid = [paid_by_period.get(period, ZERO) for period in periods]
    assessments = [classify_payment(base_rent, amount) for amount in paid]
    # Left scan: one CarryForward snapshot per month, initial state dropped
    carries = islice(accumulate(assessments, CarryForward.advance, initial=CarryForward()), 1, None)

    entries = [
        LedgerEntry(
            period=period,
            base_rent=base_rent,
            paid=amount,
            arrears=assessment.arrears,
            credit=assessment.credit,
            status=assessment.status,
            running_net_balance=carry.net_balance,
        )
        for period, amount, assessment, carry in zip(periods, paid, assessments, carries)
    ]

    outside = set(paid_by_period) - set(periods)
    if outside:
        logger.debug(
            "Ignoring receipts for %d period(s) outside %s..%s for tenant %s",
            len(outside),
            periods[0],
            periods[-1],
            tenant.id,
        )

    logger.debug(
        "ledger.build: tenant_id=%s periods=%d receipts=%d net_balance=%s",
        tenant.id,
        len(entries),
        len(receipts),
        entries[-1].running_net_balance,
    )
    return entries


def summarize_ledger(entries: Iterable[LedgerEntry]) -> LedgerSummary:
    """Total arrears and credit over a ledger."""
    entries = list(entries)
    return LedgerSummary(
        total_arrears=sum((entry.arrears for entry in entries), ZERO),
        total_credit=sum((entry.credit for entry in entries), ZERO),
    )


def reconcile(tenant: Tenant, receipts: Iterable[Receipt], *, as_of: date) -> Ledger:
    """Build the ledger and its summary in one call."""
    entries = build_ledger(tenant, receipts, as_of=as_of)
    return Ledger(
        tenant_id=tenant.id,
        as_of=as_of,
        entries=tuple(entries),
        summary=summarize_ledger(entries),
    )


__all__ = [
    "CarryForward",
    "PeriodAssessment",
    "resolve_lease_start",
    "enumerate_billing_periods",
    "merge_receipts",
    "check_receipts_belong",
    "classify_payment",
    "build_ledger",
    "summarize_ledger",
    "reconcile",
]
