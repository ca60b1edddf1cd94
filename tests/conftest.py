"""Pytest configuration and shared fixtures."""

import os
from datetime import date, datetime
from decimal import Decimal

# Pin locale and log file BEFORE any imports from src read settings
os.environ["LOCALE"] = "en_KE"
os.environ.setdefault("LOG_FILE", "logs/test_server.log")

import pytest  # noqa: E402

from src.models import Receipt, Tenant  # noqa: E402
from src.services.config import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings from the environment for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def as_of() -> date:
    """Fixed reference date: mid-March 2024."""
    return date(2024, 3, 15)


@pytest.fixture
def make_tenant():
    """Factory for tenants with sensible defaults."""

    def _make(
        tenant_id: int = 1,
        rent: str = "15000",
        lease_begin: object = "2024-01-01",
        name: str = "Jane Wanjiku",
        unit: str = "A1",
        block: str | None = "OLD",
    ) -> Tenant:
        return Tenant(
            id=tenant_id,
            rent_amount=Decimal(rent),
            lease_begin_date=lease_begin,
            name=name,
            unit=unit,
            block=block,
        )

    return _make


@pytest.fixture
def make_receipt():
    """Factory for receipts."""

    def _make(
        period: str,
        amount: str,
        tenant_id: int = 1,
        paid_at: datetime | date | None = None,
        method: str | None = "M-PESA via Paybill",
    ) -> Receipt:
        return Receipt(
            tenant_id=tenant_id,
            billing_period_key=period,
            amount_paid=Decimal(amount),
            paid_at=paid_at,
            method=method,
        )

    return _make
