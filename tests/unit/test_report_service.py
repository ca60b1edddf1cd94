"""Unit tests for report export."""

import csv
import io
from datetime import date, datetime
from decimal import Decimal

import pytest

from src.models import Granularity
from src.services.locale_service import format_paid_date
from src.services.report_service import REPORT_COLUMNS, build_report, render_csv, report_filename


@pytest.fixture
def report(make_tenant, make_receipt, as_of):
    tenant = make_tenant(rent="15000", lease_begin="2024-01-01", name="Jane  Wanjiku")
    receipts = [
        make_receipt("January 2024", "15000"),
        make_receipt("February 2024", "7500"),
    ]
    return build_report(tenant, receipts, as_of=as_of, granularity=Granularity.MONTHLY)


class TestBuildReport:
    """Report rows and totals."""

    def test_rows_and_totals(self, report):
        assert [row.label for row in report.rows] == ["January 2024", "February 2024", "March 2024"]
        assert report.total_paid == Decimal("22500")
        assert report.summary.total_arrears == Decimal("22500")
        assert report.summary.net_balance == Decimal("22500")
        assert report.title == "Tenant Payment Report - Monthly"

    def test_quarterly_report(self, make_tenant, make_receipt, as_of):
        report = build_report(
            make_tenant(rent="15000"),
            [make_receipt("January 2024", "15000")],
            as_of=as_of,
            granularity="Quarterly",
        )

        assert report.granularity is Granularity.QUARTERLY
        assert len(report.rows) == 1
        assert report.rows[0].label == "Q1 2024"
        assert report.rows[0].arrears == Decimal("30000")
        assert report.rows[0].status == "Arrears"


class TestRenderCsv:
    """CSV rendering."""

    def test_header_and_rows(self, report):
        lines = list(csv.reader(io.StringIO(render_csv(report))))

        assert tuple(lines[0]) == REPORT_COLUMNS
        assert lines[1] == ["January 2024", "15000", "15000", "0", "0", "0", "Paid"]
        assert lines[2] == ["February 2024", "15000", "7500", "7500", "0", "7500", "Partial"]
        assert lines[3] == ["March 2024", "15000", "0", "15000", "0", "22500", "Missing"]

    def test_totals_block(self, report):
        lines = list(csv.reader(io.StringIO(render_csv(report))))

        assert lines[4] == []
        assert lines[5:] == [
            ["TOTAL PAID", "22500"],
            ["TOTAL ARREARS", "22500"],
            ["TOTAL CREDIT", "0"],
            ["NET BALANCE", "22500"],
            ["LAST PAYMENT", "N/A"],
        ]

    def test_formatted_amounts(self, report):
        lines = list(csv.reader(io.StringIO(render_csv(report, formatted=True))))

        assert lines[-2][0] == "NET BALANCE"
        assert "22,500.00" in lines[-2][1]

    def test_filename(self, report):
        assert report_filename(report) == "JaneWanjiku_Monthly_Report.csv"

    def test_amounts_written_in_fixed_point(self, make_tenant, as_of):
        tenant = make_tenant(rent="1E+4", lease_begin="2024-03-01")
        report = build_report(tenant, [], as_of=as_of)

        lines = list(csv.reader(io.StringIO(render_csv(report))))

        assert lines[1] == ["March 2024", "10000", "0", "10000", "0", "10000", "Missing"]
        assert ["TOTAL ARREARS", "10000"] in lines

    def test_last_payment_date(self, make_tenant, make_receipt, as_of):
        receipts = [
            make_receipt("January 2024", "15000", paid_at=datetime(2024, 1, 5, 10, 0)),
            make_receipt("February 2024", "15000", paid_at=date(2024, 2, 6)),
        ]
        report = build_report(make_tenant(), receipts, as_of=as_of)

        plain = list(csv.reader(io.StringIO(render_csv(report))))
        formatted = list(csv.reader(io.StringIO(render_csv(report, formatted=True))))

        assert report.latest_paid_date == date(2024, 2, 6)
        assert plain[-1] == ["LAST PAYMENT", "2024-02-06"]
        assert formatted[-1] == ["LAST PAYMENT", format_paid_date(date(2024, 2, 6))]
