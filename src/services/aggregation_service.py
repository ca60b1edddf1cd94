"""Regroup a monthly ledger into monthly, quarterly or annual report rows.

Quarterly and annual rows are plain re-aggregations of the monthly
per-period figures (paid, arrears, credit are summed, never re-derived from
running balances), so summing a year's quarterly arrears gives back the sum
of its twelve monthly arrears.

Grouped rows use a coarser status than monthly rows: "Paid" when the
group's arrears do not exceed its credit, "Arrears" otherwise. There is no
over-paid group status.
"""

import logging
from decimal import Decimal
from typing import Callable, Hashable, Iterable

from src.models import AggregateStatus, Granularity, LedgerEntry, PeriodSummary

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


def _monthly_row(entry: LedgerEntry) -> PeriodSummary:
    return PeriodSummary(
        label=entry.label,
        year=entry.period.year,
        base_rent=entry.base_rent,
        paid=entry.paid,
        arrears=entry.arrears,
        credit=entry.credit,
        net_balance=entry.running_net_balance,
        status=entry.status.value,
    )


def _quarter_key(entry: LedgerEntry) -> tuple[int, int]:
    return entry.period.year, entry.period.quarter


def _quarter_label(key: tuple[int, int]) -> str:
    year, quarter = key
    return f"Q{quarter} {year}"


def _year_key(entry: LedgerEntry) -> int:
    return entry.period.year


def _group(
    entries: Iterable[LedgerEntry],
    key_func: Callable[[LedgerEntry], Hashable],
    label_func: Callable[[Hashable], str],
) -> list[PeriodSummary]:
    # dicts keep insertion order, so groups come out in first-appearance order
    groups: dict[Hashable, list[LedgerEntry]] = {}
    for entry in entries:
        groups.setdefault(key_func(entry), []).append(entry)

    rows = []
    for key, members in groups.items():
        arrears = sum((entry.arrears for entry in members), ZERO)
        credit = sum((entry.credit for entry in members), ZERO)
        rows.append(
            PeriodSummary(
                label=label_func(key),
                year=members[0].period.year,
                base_rent=sum((entry.base_rent for entry in members), ZERO),
                paid=sum((entry.paid for entry in members), ZERO),
                arrears=arrears,
                credit=credit,
                net_balance=max(arrears - credit, ZERO),
                status=(
                    AggregateStatus.PAID.value if arrears - credit <= 0 else AggregateStatus.ARREARS.value
                ),
            )
        )
    return rows


def aggregate(entries: Iterable[LedgerEntry], granularity: Granularity | str) -> list[PeriodSummary]:
    """Summarize ledger entries at the requested granularity.

    Args:
        entries: Chronological ledger entries (as returned by build_ledger)
        granularity: Granularity member or its value ("Monthly", "Quarterly", "Annual")

    Returns:
        Report rows in chronological order

    Raises:
        ValueError: If granularity is not recognized
    """
    granularity = Granularity(granularity)

    if granularity is Granularity.MONTHLY:
        rows = [_monthly_row(entry) for entry in entries]
    elif granularity is Granularity.QUARTERLY:
        rows = _group(entries, _quarter_key, _quarter_label)
    else:
        rows = _group(entries, _year_key, str)

    logger.debug("ledger.aggregate: granularity=%s rows=%d", granularity.value, len(rows))
    return rows


__all__ = ["aggregate"]
