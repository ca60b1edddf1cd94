"""Portfolio-wide dashboard figures across all tenants."""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from src.models import PaymentStatus, Receipt, Tenant
from src.services.ledger_service import build_ledger
from src.services.summary_service import paid_sort_key, partition_receipts

logger = logging.getLogger(__name__)

ZERO = Decimal(0)

OVERDUE_STATUSES = frozenset({PaymentStatus.MISSING, PaymentStatus.PARTIAL})


@dataclass(frozen=True)
class DashboardStats:
    """Headline figures for the dashboard.

    Attributes:
        total_revenue: Sum of every receipt
        active_tenants: Number of tenants on the roster
        pending_balance: Sum of the tenants' ledger net balances
        overdue_periods: Ledger months still Missing or Partial, over all tenants
        revenue_by_period: Billing period key -> amount received, first-seen order
        revenue_by_block: Property block -> amount received
        recent_receipts: Most recent receipts by paid date, newest first
    """

    total_revenue: Decimal
    active_tenants: int
    pending_balance: Decimal
    overdue_periods: int
    revenue_by_period: dict[str, Decimal] = field(default_factory=dict)
    revenue_by_block: dict[str, Decimal] = field(default_factory=dict)
    recent_receipts: list[Receipt] = field(default_factory=list)


def revenue_by_period(receipts: Iterable[Receipt]) -> dict[str, Decimal]:
    """Amount received per billing period key, in order of first appearance."""
    totals: dict[str, Decimal] = {}
    for receipt in receipts:
        totals[receipt.billing_period_key] = (
            totals.get(receipt.billing_period_key, ZERO) + receipt.amount_paid
        )
    return totals


def revenue_by_block(tenants: Iterable[Tenant], receipts: Iterable[Receipt]) -> dict[str, Decimal]:
    """Amount received per property block.

    Receipts of unknown tenants, or of tenants without a block, are not counted.
    """
    blocks = {tenant.id: tenant.block for tenant in tenants}
    totals: dict[str, Decimal] = {}
    for receipt in receipts:
        block = blocks.get(receipt.tenant_id)
        if block:
            totals[block] = totals.get(block, ZERO) + receipt.amount_paid
    return totals


def recent_receipts(receipts: Iterable[Receipt], limit: int = 5) -> list[Receipt]:
    """Newest receipts by paid date; undated receipts are left out."""
    dated = [receipt for receipt in receipts if receipt.paid_at is not None]
    dated.sort(key=paid_sort_key, reverse=True)
    return dated[:limit]


def build_dashboard(
    tenants: Iterable[Tenant],
    receipts: Iterable[Receipt],
    *,
    as_of: date,
    recent_limit: int = 5,
) -> DashboardStats:
    """Compute dashboard figures for the whole portfolio.

    Pending balance and overdue months come from each tenant's ledger, so
    they honour lease start months and carried credit.

    Args:
        tenants: Roster tenants
        receipts: All receipts
        as_of: Reference date for the ledgers
        recent_limit: Number of recent receipts to include

    Returns:
        DashboardStats
    """
    tenants = list(tenants)
    receipts = list(receipts)
    by_tenant = partition_receipts(tenants, receipts)

    pending = ZERO
    overdue = 0
    for tenant in tenants:
        entries = build_ledger(tenant, by_tenant[tenant.id], as_of=as_of)
        pending += entries[-1].running_net_balance
        overdue += sum(1 for entry in entries if entry.status in OVERDUE_STATUSES)

    stats = DashboardStats(
        total_revenue=sum((receipt.amount_paid for receipt in receipts), ZERO),
        active_tenants=len(tenants),
        pending_balance=pending,
        overdue_periods=overdue,
        revenue_by_period=revenue_by_period(receipts),
        revenue_by_block=revenue_by_block(tenants, receipts),
        recent_receipts=recent_receipts(receipts, recent_limit),
    )
    logger.info(
        "Dashboard computed: tenants=%d receipts=%d pending=%s overdue=%d",
        stats.active_tenants,
        len(receipts),
        stats.pending_balance,
        stats.overdue_periods,
    )
    return stats


__all__ = [
    "DashboardStats",
    "revenue_by_period",
    "revenue_by_block",
    "recent_receipts",
    "build_dashboard",
]
