"""Per-project rollup, billing status, GST dashboard and trend views."""

from datetime import date
from decimal import Decimal

import pytest

from sitebook.ledger.records import (
    AdvanceEntry,
    Bill,
    ClientPayment,
    KharchiEntry,
    MessEntry,
    Project,
    PurchaseEntry,
    WorkerPaymentRecord,
)
from sitebook.ledger.rollup import (
    ALL_PROJECTS,
    gst_summary,
    lookup_name,
    monthly_totals,
    portfolio_overview,
    project_balances,
    rollup,
)
from sitebook.ledger.tax import apply_tax


def taxed(**fields):
    return apply_tax(Bill(**fields))


@pytest.fixture
def projects():
    return [
        Project(id="p1", name="Sunset Heights", budget=1000000, spent=400000, status="In Progress"),
        Project(id="p2", name="Office Reno", budget=50000, status="Completed"),
        Project(id="p3", name="", budget=0),
    ]


@pytest.fixture
def bills():
    return [
        taxed(id="b1", project_id="p1", amount=50000, gst_rate=18, billing_month="2024-01"),
        taxed(id="b2", project_id="p1", amount=10000, gst_rate=12, billing_month="2024-02"),
        taxed(id="b3", project_id="p2", amount=20000, gst_rate=18, billing_month="2024-01"),
    ]


def run_rollup(scope, bills=(), payments=(), purchases=(), kharchi=(), advances=(),
               salaries=(), mess=()):
    return rollup(scope, list(bills), list(payments), list(purchases), list(kharchi),
                  list(advances), list(salaries), list(mess))


class TestRollup:

    def test_outstanding_scenario(self):
        result = run_rollup(
            "p1",
            bills=[taxed(project_id="p1", amount=50000, gst_rate=18)],
            payments=[ClientPayment(project_id="p1", amount=40000, date=date(2024, 1, 5))],
        )
        assert result.total_billed == Decimal("59000.00")
        assert result.total_received == Decimal("40000.00")
        assert result.balance == Decimal("19000.00")
        assert result.status == "Outstanding"

    def test_empty_project_is_all_zero(self):
        result = run_rollup("nothing-here")
        assert result.total_billed == 0
        assert result.total_received == 0
        assert result.balance == 0
        assert result.net_profit == 0
        assert result.status == "Paid"

    def test_overpaid_project_is_paid(self):
        result = run_rollup(
            "p1",
            bills=[taxed(project_id="p1", amount=100, gst_rate=0)],
            payments=[ClientPayment(project_id="p1", amount=150, date=date(2024, 1, 5))],
        )
        assert result.balance == Decimal("-50.00")
        assert result.status == "Paid"

    def test_scope_filters_other_projects(self, bills):
        assert run_rollup("p2", bills=bills).total_billed == Decimal("23600.00")
        assert run_rollup(ALL_PROJECTS, bills=bills).total_billed == Decimal("93800.00")

    def test_profit_and_loss(self):
        result = run_rollup(
            "p1",
            bills=[taxed(project_id="p1", amount=10000, gst_rate=18)],
            payments=[ClientPayment(project_id="p1", amount=11800, date=date(2024, 1, 5))],
            purchases=[PurchaseEntry(project_id="p1", quantity=10, rate=100, total_amount=1000)],
            kharchi=[KharchiEntry(worker_id="w1", project_id="p1", date=date(2024, 1, 7), amount=500)],
            advances=[AdvanceEntry(worker_id="w1", project_id="p1", amount=300, date=date(2024, 1, 9))],
            salaries=[WorkerPaymentRecord(worker_id="w1", project_id="p1", month="2024-01",
                                          net_payable=-200)],
            mess=[MessEntry(project_id="p1", week_start_date=date(2024, 1, 7), amount_paid=400)],
        )
        assert result.gst_liability == Decimal("1800.00")
        assert result.net_revenue == Decimal("10000.00")
        assert result.material_expense == Decimal("1000.00")
        # A negative saved net payable reduces the labor cost
        assert result.labor_expense == Decimal("1000.00")
        assert result.operational_expense == Decimal("2000.00")
        assert result.net_profit == Decimal("8000.00")

    def test_bill_without_grand_total_counts_base_amount(self):
        bill = Bill(project_id="p1", amount=700, gst_rate=18)
        assert run_rollup("p1", bills=[bill]).total_billed == Decimal("700.00")


def test_project_balances(projects, bills):
    payments = [ClientPayment(project_id="p1", amount=71400, date=date(2024, 3, 1))]
    rows = {row.project_id: row for row in project_balances(projects, bills, payments)}

    assert rows["p1"].balance == Decimal("-1200.00")
    assert rows["p1"].status == "Paid"
    assert rows["p2"].balance == Decimal("23600.00")
    assert rows["p2"].status == "Outstanding"
    assert rows["p3"].name == "Unknown"
    assert rows["p3"].total_billed == 0


class TestGstSummary:

    def test_month_filter(self, projects, bills):
        summary = gst_summary(projects, bills, ALL_PROJECTS, "2024-01")
        assert [b.id for b in summary.bills] == ["b1", "b3"]
        assert summary.total_base == Decimal("70000.00")
        assert summary.total_gst == Decimal("12600.00")
        assert summary.total_grand == Decimal("82600.00")

    def test_sites_without_bills_are_omitted(self, projects, bills):
        summary = gst_summary(projects, bills, "p1")
        assert [s.project_id for s in summary.sites] == ["p1"]
        assert summary.sites[0].bill_count == 2
        assert summary.month is None

    def test_blank_month_means_all(self, projects, bills):
        assert len(gst_summary(projects, bills, ALL_PROJECTS, "").bills) == 3


def test_monthly_totals_order(bills):
    undated = taxed(project_id="p1", amount=999, gst_rate=0)
    ascending = monthly_totals(bills + [undated])
    assert [(m.month, m.amount) for m in ascending] == [
        ("2024-01", Decimal("82600.00")),
        ("2024-02", Decimal("11200.00")),
    ]
    descending = monthly_totals(bills, "p1", descending=True)
    assert [m.month for m in descending] == ["2024-02", "2024-01"]


def test_portfolio_overview(projects):
    overview = portfolio_overview(projects)
    assert overview.project_count == 3
    assert overview.active_projects == 1
    assert overview.completed_projects == 1
    assert overview.total_budget == Decimal("1050000.00")
    assert overview.total_spent == Decimal("400000.00")


def test_lookup_name_placeholder(projects):
    assert lookup_name(projects, "p1") == "Sunset Heights"
    assert lookup_name(projects, "missing") == "Unknown"
    assert lookup_name(projects, None) == "Unknown"
