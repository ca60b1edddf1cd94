"""Tenant payment report export.

Produces the fixed-column tabular report (Period, Base Rent, Paid, Arrears,
Credit, Net Balance, Status) for a tenant at a chosen granularity, with
ledger totals underneath, and renders it as CSV.
"""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from src.models import Granularity, LedgerSummary, PeriodSummary, Receipt, Tenant
from src.services.aggregation_service import aggregate
from src.services.ledger_service import reconcile
from src.services.locale_service import format_amount, format_paid_date
from src.services.summary_service import latest_paid_date

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ("Period", "Base Rent", "Paid", "Arrears", "Credit", "Net Balance", "Status")


@dataclass(frozen=True)
class LedgerReport:
    """Report for one tenant at one granularity."""

    tenant: Tenant
    granularity: Granularity
    as_of: date
    rows: tuple[PeriodSummary, ...]
    summary: LedgerSummary
    total_paid: Decimal
    latest_paid_date: datetime | date | None = None

    @property
    def title(self) -> str:
        return f"Tenant Payment Report - {self.granularity.value}"


def build_report(
    tenant: Tenant,
    receipts: Iterable[Receipt],
    *,
    as_of: date,
    granularity: Granularity | str = Granularity.MONTHLY,
) -> LedgerReport:
    """Build a tenant report.

    Args:
        tenant: Tenant the report is for
        receipts: The tenant's receipts
        as_of: Reference date for the ledger
        granularity: Monthly, Quarterly or Annual

    Returns:
        LedgerReport with one row per reporting period and ledger totals
    """
    granularity = Granularity(granularity)
    receipts = tuple(receipts)
    ledger = reconcile(tenant, receipts, as_of=as_of)
    rows = aggregate(ledger.entries, granularity)

    logger.info(
        "Built %s report for tenant %s: rows=%d net_balance=%s",
        granularity.value,
        tenant.id,
        len(rows),
        ledger.summary.net_balance,
    )
    return LedgerReport(
        tenant=tenant,
        granularity=granularity,
        as_of=as_of,
        rows=tuple(rows),
        summary=ledger.summary,
        total_paid=sum((receipt.amount_paid for receipt in receipts), Decimal(0)),
        latest_paid_date=latest_paid_date(receipts),
    )


def render_csv(report: LedgerReport, formatted: bool = False) -> str:
    """Render a report as CSV text.

    Args:
        report: Report to render
        formatted: Format money with the locale currency instead of plain numbers

    Returns:
        CSV with a header row, one row per period, a blank line, totals
        and the last payment date
    """

    def money(value: Decimal) -> str:
        return format_amount(value) if formatted else format(value, "f")

    def paid_date(value: datetime | date | None) -> str:
        if formatted or value is None:
            return format_paid_date(value)
        if isinstance(value, datetime):
            value = value.date()
        return value.isoformat()

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(REPORT_COLUMNS)
    for row in report.rows:
        writer.writerow(
            [
                row.label,
                money(row.base_rent),
                money(row.paid),
                money(row.arrears),
                money(row.credit),
                money(row.net_balance),
                row.status,
            ]
        )
    writer.writerow([])
    writer.writerow(["TOTAL PAID", money(report.total_paid)])
    writer.writerow(["TOTAL ARREARS", money(report.summary.total_arrears)])
    writer.writerow(["TOTAL CREDIT", money(report.summary.total_credit)])
    writer.writerow(["NET BALANCE", money(report.summary.net_balance)])
    writer.writerow(["LAST PAYMENT", paid_date(report.latest_paid_date)])
    return buffer.getvalue()


def report_filename(report: LedgerReport) -> str:
    """Download name, e.g. 'JaneWanjiku_Quarterly_Report.csv'."""
    name = "".join((report.tenant.name or f"Tenant{report.tenant.id}").split())
    return f"{name}_{report.granularity.value}_Report.csv"


__all__ = ["REPORT_COLUMNS", "LedgerReport", "build_report", "render_csv", "report_filename"]
