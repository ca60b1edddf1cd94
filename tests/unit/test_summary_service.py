"""Unit tests for tenant summary projection."""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from src.models import RosterStatus
from src.services.errors import ReceiptTenantMismatchError
from src.services.summary_service import (
    latest_paid_date,
    partition_receipts,
    project_roster,
    project_summary,
)


class TestProjectSummary:
    """Single-tenant roster rows."""

    def test_tenant_with_arrears(self, make_tenant, make_receipt, as_of):
        tenant = make_tenant(rent="15000", lease_begin="2024-01-01")
        receipts = [
            make_receipt("January 2024", "15000", paid_at=datetime(2024, 1, 3, 10, 0)),
            make_receipt("February 2024", "7500", paid_at=datetime(2024, 2, 6, 12, 30)),
        ]

        summary = project_summary(tenant, receipts, as_of=as_of)

        assert summary.tenant_id == tenant.id
        assert summary.tenant_name == "Jane Wanjiku"
        assert summary.unit == "A1"
        assert summary.total_paid == Decimal("22500")
        assert summary.net_balance == Decimal("22500")
        assert summary.latest_paid_date == datetime(2024, 2, 6, 12, 30)
        assert summary.status == RosterStatus.HAS_ARREARS.value

    def test_tenant_up_to_date(self, make_tenant, make_receipt, as_of):
        tenant = make_tenant(rent="10000", lease_begin="2024-02-01")
        receipts = [
            make_receipt("February 2024", "10000"),
            make_receipt("March 2024", "10000"),
        ]

        summary = project_summary(tenant, receipts, as_of=as_of)

        assert summary.net_balance == Decimal("0")
        assert summary.status == "Up to Date"

    def test_total_paid_counts_receipts_outside_ledger(self, make_tenant, make_receipt, as_of):
        tenant = make_tenant(rent="10000", lease_begin="2024-03-01")
        receipts = [
            make_receipt("March 2024", "10000"),
            make_receipt("April 2024", "10000"),  # paid ahead
        ]

        summary = project_summary(tenant, receipts, as_of=as_of)

        assert summary.total_paid == Decimal("20000")
        assert summary.net_balance == Decimal("0")

    def test_no_receipts(self, make_tenant, as_of):
        summary = project_summary(make_tenant(rent="15000"), [], as_of=as_of)

        assert summary.total_paid == Decimal("0")
        assert summary.latest_paid_date is None
        assert summary.net_balance == Decimal("45000")

    def test_mismatched_receipt_raises(self, make_tenant, make_receipt, as_of):
        with pytest.raises(ReceiptTenantMismatchError):
            project_summary(make_tenant(tenant_id=1), [make_receipt("March 2024", "1", tenant_id=9)], as_of=as_of)


class TestLatestPaidDate:
    """Latest paid date comes from an explicit sort, not input order."""

    def test_unsorted_input(self, make_receipt):
        receipts = [
            make_receipt("March 2024", "1", paid_at=datetime(2024, 3, 2)),
            make_receipt("January 2024", "1", paid_at=datetime(2024, 1, 2)),
        ]

        assert latest_paid_date(receipts) == datetime(2024, 3, 2)

    def test_tie_keeps_later_receipt(self, make_receipt):
        first = make_receipt("February 2024", "1", paid_at=datetime(2024, 3, 2, 9, 0))
        second = make_receipt("March 2024", "1", paid_at=datetime(2024, 3, 2, 9, 0))

        assert latest_paid_date([first, second]) is second.paid_at
        assert latest_paid_date([second, first]) is first.paid_at

    def test_ignores_undated_receipts(self, make_receipt):
        receipts = [
            make_receipt("January 2024", "1", paid_at=date(2024, 1, 5)),
            make_receipt("February 2024", "1", paid_at=None),
        ]

        assert latest_paid_date(receipts) == date(2024, 1, 5)

    def test_mixed_dates_and_datetimes(self, make_receipt):
        receipts = [
            make_receipt("January 2024", "1", paid_at=datetime(2024, 1, 5, 18, 0)),
            make_receipt("January 2024", "1", paid_at=date(2024, 1, 6)),
        ]

        assert latest_paid_date(receipts) == date(2024, 1, 6)

    def test_timezone_aware_values(self, make_receipt):
        receipts = [
            make_receipt("January 2024", "1", paid_at=datetime(2024, 1, 9, tzinfo=timezone.utc)),
            make_receipt("January 2024", "1", paid_at=datetime(2024, 1, 2, tzinfo=timezone.utc)),
        ]

        assert latest_paid_date(receipts) == datetime(2024, 1, 9, tzinfo=timezone.utc)

    def test_none_when_nothing_dated(self, make_receipt):
        assert latest_paid_date([make_receipt("January 2024", "1")]) is None
        assert latest_paid_date([]) is None


class TestRoster:
    """Roster projection over several tenants."""

    @pytest.fixture
    def tenants(self, make_tenant):
        return [
            make_tenant(tenant_id=1, name="Jane Wanjiku", unit="A1", block="OLD"),
            make_tenant(tenant_id=2, name="Peter Otieno", unit="B3", block="NEW"),
            make_tenant(tenant_id=3, name="Mary Njeri", unit="A2", block="OLD"),
        ]

    def test_one_row_per_tenant_in_roster_order(self, tenants, make_receipt, as_of):
        receipts = [
            make_receipt("January 2024", "15000", tenant_id=2),
            make_receipt("January 2024", "15000", tenant_id=1),
        ]

        rows = project_roster(tenants, receipts, as_of=as_of)

        assert [row.tenant_id for row in rows] == [1, 2, 3]
        assert rows[0].total_paid == Decimal("15000")
        assert rows[2].total_paid == Decimal("0")

    def test_block_filter(self, tenants, make_receipt, as_of, caplog):
        receipts = [make_receipt("January 2024", "15000", tenant_id=2)]

        with caplog.at_level(logging.WARNING):
            rows = project_roster(tenants, receipts, as_of=as_of, block="OLD")

        assert [row.tenant_id for row in rows] == [1, 3]
        # Receipts of tenants in other blocks are not orphans
        assert "outside the roster" not in caplog.text

    def test_unknown_tenant_receipts_dropped(self, tenants, make_receipt, caplog):
        with caplog.at_level(logging.WARNING):
            by_tenant = partition_receipts(tenants, [make_receipt("January 2024", "1", tenant_id=42)])

        assert all(receipts == [] for receipts in by_tenant.values())
        assert "Dropped 1 receipt(s)" in caplog.text
