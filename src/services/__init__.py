"""Rent ledger services: pure computations over tenants and receipts."""

from src.services.aggregation_service import aggregate
from src.services.errors import LedgerError, ReceiptTenantMismatchError
from src.services.ledger_service import build_ledger, reconcile, summarize_ledger
from src.services.portfolio_service import DashboardStats, build_dashboard
from src.services.report_service import LedgerReport, build_report, render_csv
from src.services.summary_service import project_roster, project_summary

__all__ = [
    "aggregate",
    "LedgerError",
    "ReceiptTenantMismatchError",
    "build_ledger",
    "reconcile",
    "summarize_ledger",
    "DashboardStats",
    "build_dashboard",
    "LedgerReport",
    "build_report",
    "render_csv",
    "project_roster",
    "project_summary",
]
