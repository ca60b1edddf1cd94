"""Tenant summary projection for roster views."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from src.models import Receipt, RosterStatus, Tenant, TenantSummary
from src.services.ledger_service import build_ledger, summarize_ledger

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


def paid_sort_key(receipt: Receipt) -> datetime:
    """Sort key ordering receipts by paid date (dated receipts only)."""
    value = receipt.paid_at
    # Plain dates sort as midnight so they compare with timestamps
    if isinstance(value, datetime):
        return value.astimezone().replace(tzinfo=None) if value.tzinfo else value
    return datetime(value.year, value.month, value.day)


def latest_paid_date(receipts: Iterable[Receipt]) -> datetime | date | None:
    """Paid date of the most recent receipt.

    Receipts are sorted explicitly by paid date (stable, so equal dates keep
    input order and the later one wins). Receipts without a paid date are
    ignored.

    Returns:
        Latest paid_at value, or None if no receipt carries one
    """
    dated = [receipt for receipt in receipts if receipt.paid_at is not None]
    if not dated:
        return None
    return sorted(dated, key=paid_sort_key)[-1].paid_at


def project_summary(tenant: Tenant, receipts: Iterable[Receipt], *, as_of: date) -> TenantSummary:
    """Reduce a tenant's ledger to a single roster row.

    Args:
        tenant: Tenant to summarize
        receipts: The tenant's receipts
        as_of: Reference date for the ledger

    Returns:
        TenantSummary with total paid, net balance, latest paid date and status

    Raises:
        ReceiptTenantMismatchError: If a receipt belongs to another tenant
    """
    receipts = tuple(receipts)
    net_balance = summarize_ledger(build_ledger(tenant, receipts, as_of=as_of)).net_balance

    return TenantSummary(
        tenant_id=tenant.id,
        tenant_name=tenant.name,
        unit=tenant.unit,
        total_paid=sum((receipt.amount_paid for receipt in receipts), ZERO),
        net_balance=net_balance,
        latest_paid_date=latest_paid_date(receipts),
        status=(RosterStatus.UP_TO_DATE if net_balance == 0 else RosterStatus.HAS_ARREARS).value,
    )


def partition_receipts(
    tenants: Iterable[Tenant], receipts: Iterable[Receipt]
) -> dict[int, list[Receipt]]:
    """Split receipts per tenant, keeping input order within each tenant.

    Receipts of tenants that are not in the roster are dropped with a warning.
    """
    by_tenant: dict[int, list[Receipt]] = {tenant.id: [] for tenant in tenants}
    orphaned = 0
    for receipt in receipts:
        bucket = by_tenant.get(receipt.tenant_id)
        if bucket is None:
            orphaned += 1
            continue
        bucket.append(receipt)
    if orphaned:
        logger.warning("Dropped %d receipt(s) referencing tenants outside the roster", orphaned)
    return by_tenant


def project_roster(
    tenants: Iterable[Tenant],
    receipts: Iterable[Receipt],
    *,
    as_of: date,
    block: str | None = None,
) -> list[TenantSummary]:
    """Summaries for every tenant of the roster, optionally for one property block.

    Args:
        tenants: Roster tenants
        receipts: Receipts of any roster tenant, in insertion order
        as_of: Reference date for the ledgers
        block: Restrict to tenants of this block code (None for all)

    Returns:
        One TenantSummary per selected tenant, in roster order
    """
    tenants = list(tenants)
    by_tenant = partition_receipts(tenants, receipts)
    selected = [tenant for tenant in tenants if block is None or tenant.block == block]
    return [project_summary(tenant, by_tenant[tenant.id], as_of=as_of) for tenant in selected]


__all__ = [
    "paid_sort_key",
    "latest_paid_date",
    "project_summary",
    "partition_receipts",
    "project_roster",
]
