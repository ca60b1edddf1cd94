"""Ledger API endpoints.

The service holds no tenant or receipt store: each request carries the
tenant(s) and receipts to reconcile, fetched by the caller from its own
storage. as_of defaults to today's date when the request omits it.
"""

import logging
import time
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from src.api.errors import ReceiptTenantMismatchAppError, raise_app_error
from src.models import Granularity, Receipt, Tenant
from src.services.aggregation_service import aggregate
from src.services.config import get_settings
from src.services.errors import ReceiptTenantMismatchError
from src.services.ledger_service import reconcile
from src.services.portfolio_service import build_dashboard
from src.services.report_service import build_report, render_csv, report_filename
from src.services.summary_service import project_roster, project_summary

logger = logging.getLogger(__name__)


def _log_debug(endpoint: str, start_time: float, **kwargs: Any) -> None:
    """Log API request with timing at DEBUG level.

    Args:
        endpoint: Endpoint name (e.g., 'entries', 'roster')
        start_time: Request start time from time.time()
        **kwargs: Additional fields to log (tenant_id, count, granularity, etc.)
    """
    duration_ms = int((time.time() - start_time) * 1000)
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.debug(
        "ledger_api.%s: %sduration_ms=%d",
        endpoint,
        f"{extra} " if extra else "",
        duration_ms,
    )


router = APIRouter(prefix="/api/ledger", tags=["ledger"])


# Request schemas
class TenantPayload(BaseModel):
    """Tenant as stored by the roster."""

    id: int
    rent_amount: Decimal = Field(..., ge=0, description="Monthly rent, zero for complimentary units")
    # Kept as text: an unparseable date means the lease starts in the as-of month
    lease_begin_date: str | None = Field(None, description="Lease start date, e.g. 2024-01-01")
    name: str = ""
    unit: str = ""
    block: str | None = None
    phone: str | None = None

    def to_tenant(self) -> Tenant:
        return Tenant(
            id=self.id,
            rent_amount=self.rent_amount,
            lease_begin_date=self.lease_begin_date,
            name=self.name,
            unit=self.unit,
            block=self.block,
            phone=self.phone,
        )


class ReceiptPayload(BaseModel):
    """Recorded payment."""

    tenant_id: int
    billing_period_key: str = Field(..., description="Billing month, e.g. 'March 2024'")
    amount_paid: Decimal = Field(..., ge=0)
    paid_at: datetime | None = None
    method: str | None = None

    def to_receipt(self) -> Receipt:
        return Receipt(
            tenant_id=self.tenant_id,
            billing_period_key=self.billing_period_key,
            amount_paid=self.amount_paid,
            paid_at=self.paid_at,
            method=self.method,
        )


class LedgerRequest(BaseModel):
    """Single-tenant request body."""

    tenant: TenantPayload
    receipts: list[ReceiptPayload] = Field(default_factory=list)
    as_of: date | None = None


class RosterRequest(BaseModel):
    """Multi-tenant request body."""

    tenants: list[TenantPayload]
    receipts: list[ReceiptPayload] = Field(default_factory=list)
    as_of: date | None = None
    block: str | None = Field(None, description="Restrict to one property block")


# Response schemas
class LedgerEntryResponse(BaseModel):
    """One ledger month."""

    period: str
    year: int
    month: str
    base_rent: Decimal
    paid: Decimal
    arrears: Decimal
    credit: Decimal
    running_net_balance: Decimal
    status: str


class LedgerSummaryResponse(BaseModel):
    total_arrears: Decimal
    total_credit: Decimal
    net_balance: Decimal


class LedgerResponse(BaseModel):
    """Response schema for /entries."""

    tenant_id: int
    as_of: date
    entries: list[LedgerEntryResponse]
    summary: LedgerSummaryResponse


class PeriodSummaryResponse(BaseModel):
    label: str
    year: int
    base_rent: Decimal
    paid: Decimal
    arrears: Decimal
    credit: Decimal
    net_balance: Decimal
    status: str

    model_config = ConfigDict(from_attributes=True)


class ReportResponse(BaseModel):
    """Response schema for /report."""

    tenant_id: int
    granularity: Granularity
    as_of: date
    rows: list[PeriodSummaryResponse]
    summary: LedgerSummaryResponse


class TenantSummaryResponse(BaseModel):
    tenant_id: int
    tenant_name: str
    unit: str
    total_paid: Decimal
    net_balance: Decimal
    latest_paid_date: datetime | date | None = None
    status: str

    model_config = ConfigDict(from_attributes=True)


class ReceiptResponse(BaseModel):
    tenant_id: int
    billing_period_key: str
    amount_paid: Decimal
    paid_at: datetime | date | None = None
    method: str | None = None

    model_config = ConfigDict(from_attributes=True)


class DashboardResponse(BaseModel):
    """Response schema for /dashboard."""

    total_revenue: Decimal
    active_tenants: int
    pending_balance: Decimal
    overdue_periods: int
    revenue_by_period: dict[str, Decimal]
    revenue_by_block: dict[str, Decimal]
    recent_receipts: list[ReceiptResponse]

    model_config = ConfigDict(from_attributes=True)


def _resolve_as_of(as_of: date | None) -> date:
    return as_of or date.today()


def _summary_response(summary) -> LedgerSummaryResponse:
    return LedgerSummaryResponse(
        total_arrears=summary.total_arrears,
        total_credit=summary.total_credit,
        net_balance=summary.net_balance,
    )


def _mismatch(e: ReceiptTenantMismatchError) -> None:
    logger.warning("Rejected ledger request: %s", e)
    raise_app_error(ReceiptTenantMismatchAppError(str(e)))


@router.post("/entries", response_model=LedgerResponse)
async def ledger_entries(request: LedgerRequest) -> LedgerResponse:
    """Month-by-month ledger with totals for one tenant."""
    start_time = time.time()
    try:
        ledger = reconcile(
            request.tenant.to_tenant(),
            [receipt.to_receipt() for receipt in request.receipts],
            as_of=_resolve_as_of(request.as_of),
        )
    except ReceiptTenantMismatchError as e:
        _mismatch(e)

    response = LedgerResponse(
        tenant_id=ledger.tenant_id,
        as_of=ledger.as_of,
        entries=[
            LedgerEntryResponse(
                period=entry.label,
                year=entry.period.year,
                month=entry.period.month_name,
                base_rent=entry.base_rent,
                paid=entry.paid,
                arrears=entry.arrears,
                credit=entry.credit,
                running_net_balance=entry.running_net_balance,
                status=entry.status.value,
            )
            for entry in ledger.entries
        ],
        summary=_summary_response(ledger.summary),
    )
    _log_debug("entries", start_time, tenant_id=ledger.tenant_id, count=len(response.entries))
    return response


@router.post("/report", response_model=ReportResponse)
async def ledger_report(
    request: LedgerRequest,
    granularity: Granularity = Query(Granularity.MONTHLY, description="Monthly, Quarterly or Annual"),
) -> ReportResponse:
    """Ledger regrouped by month, quarter or year."""
    start_time = time.time()
    as_of = _resolve_as_of(request.as_of)
    try:
        ledger = reconcile(
            request.tenant.to_tenant(),
            [receipt.to_receipt() for receipt in request.receipts],
            as_of=as_of,
        )
    except ReceiptTenantMismatchError as e:
        _mismatch(e)

    rows = aggregate(ledger.entries, granularity)
    _log_debug("report", start_time, tenant_id=ledger.tenant_id, granularity=granularity.value, count=len(rows))
    return ReportResponse(
        tenant_id=ledger.tenant_id,
        granularity=granularity,
        as_of=as_of,
        rows=[PeriodSummaryResponse.model_validate(row) for row in rows],
        summary=_summary_response(ledger.summary),
    )


@router.post("/report.csv")
async def ledger_report_csv(
    request: LedgerRequest,
    granularity: Granularity = Query(Granularity.MONTHLY),
    formatted: bool = Query(False, description="Format money with the locale currency"),
) -> Response:
    """Report as a CSV download."""
    start_time = time.time()
    try:
        report = build_report(
            request.tenant.to_tenant(),
            [receipt.to_receipt() for receipt in request.receipts],
            as_of=_resolve_as_of(request.as_of),
            granularity=granularity,
        )
    except ReceiptTenantMismatchError as e:
        _mismatch(e)

    content = render_csv(report, formatted=formatted)
    _log_debug("report_csv", start_time, tenant_id=report.tenant.id, granularity=granularity.value)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(report)}"'},
    )


@router.post("/summary", response_model=TenantSummaryResponse)
async def tenant_summary(request: LedgerRequest) -> TenantSummaryResponse:
    """Roster row for one tenant."""
    start_time = time.time()
    try:
        summary = project_summary(
            request.tenant.to_tenant(),
            [receipt.to_receipt() for receipt in request.receipts],
            as_of=_resolve_as_of(request.as_of),
        )
    except ReceiptTenantMismatchError as e:
        _mismatch(e)

    _log_debug("summary", start_time, tenant_id=summary.tenant_id)
    return TenantSummaryResponse.model_validate(summary)


@router.post("/roster", response_model=list[TenantSummaryResponse])
async def roster(request: RosterRequest) -> list[TenantSummaryResponse]:
    """Roster rows for all tenants, or those of one block."""
    start_time = time.time()
    summaries = project_roster(
        [tenant.to_tenant() for tenant in request.tenants],
        [receipt.to_receipt() for receipt in request.receipts],
        as_of=_resolve_as_of(request.as_of),
        block=request.block,
    )
    _log_debug("roster", start_time, block=request.block, count=len(summaries))
    return [TenantSummaryResponse.model_validate(summary) for summary in summaries]


@router.post("/dashboard", response_model=DashboardResponse)
async def dashboard(request: RosterRequest) -> DashboardResponse:
    """Portfolio dashboard figures."""
    start_time = time.time()
    tenants = [tenant.to_tenant() for tenant in request.tenants]
    if request.block is not None:
        tenants = [tenant for tenant in tenants if tenant.block == request.block]
    known = {tenant.id for tenant in tenants}
    stats = build_dashboard(
        tenants,
        [receipt.to_receipt() for receipt in request.receipts if receipt.tenant_id in known],
        as_of=_resolve_as_of(request.as_of),
        recent_limit=get_settings().recent_receipts_limit,
    )
    _log_debug("dashboard", start_time, tenants=stats.active_tenants)
    return DashboardResponse.model_validate(stats)


__all__ = ["router"]
