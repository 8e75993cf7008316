"""
Per-project financial rollup.

Every figure here is a single pass over in-memory collections and degrades
to zero on empty input. A scope is either one project id or
``ALL_PROJECTS``, which combines every project.

Profit and loss treats client receipts as GST-inclusive: the GST billed in
scope is taken off receipts before operational expenses are netted, and it
is charged on the full billed amount whether or not it has been collected.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from sitebook.ledger.money import Money, SignedMoney, total
from sitebook.ledger.records import (
    AdvanceEntry,
    Bill,
    ClientPayment,
    KharchiEntry,
    LedgerModel,
    MessEntry,
    Project,
    ProjectStatus,
    PurchaseEntry,
    WorkerPaymentRecord,
)
from sitebook.ledger.tax import billed_total

ALL_PROJECTS = "ALL"
UNKNOWN = "Unknown"

STATUS_OUTSTANDING = "Outstanding"
STATUS_PAID = "Paid"


def in_scope(project_id: str, scope: str) -> bool:
    return scope == ALL_PROJECTS or project_id == scope


def scoped(records: Iterable, scope: str) -> list:
    return [r for r in records if in_scope(r.project_id, scope)]


def lookup_name(records: Iterable, record_id: Optional[str], default: str = UNKNOWN) -> str:
    """Display name of the record with ``record_id``, or a placeholder."""
    for record in records:
        if record.id == record_id:
            return record.name or default
    return default


def balance_status(balance: Decimal) -> str:
    return STATUS_OUTSTANDING if balance > 0 else STATUS_PAID


# ---------------------------------------------------------------------------
# Scalar aggregates
# ---------------------------------------------------------------------------

def total_billed(bills: Iterable[Bill], scope: str = ALL_PROJECTS) -> Decimal:
    return total(billed_total(b) for b in scoped(bills, scope))


def total_received(payments: Iterable[ClientPayment], scope: str = ALL_PROJECTS) -> Decimal:
    return total(p.amount for p in scoped(payments, scope))


def gst_liability(bills: Iterable[Bill], scope: str = ALL_PROJECTS,
                  billing_month: Optional[str] = None) -> Decimal:
    return total(
        b.gst_amount for b in scoped(bills, scope)
        if not billing_month or b.billing_month == billing_month
    )


def material_expense(purchases: Iterable[PurchaseEntry], scope: str = ALL_PROJECTS) -> Decimal:
    return total(p.total_amount for p in scoped(purchases, scope))


class FinancialSummary(LedgerModel):
    scope: str
    total_billed: Money
    total_received: Money
    balance: SignedMoney
    status: str
    gst_liability: Money
    net_revenue: SignedMoney
    material_expense: Money
    kharchi_expense: Money
    advance_expense: Money
    salary_expense: SignedMoney
    mess_expense: Money
    labor_expense: SignedMoney
    operational_expense: SignedMoney
    net_profit: SignedMoney


def rollup(
    scope: str,
    bills: Sequence[Bill],
    client_payments: Sequence[ClientPayment],
    purchases: Sequence[PurchaseEntry],
    kharchi: Sequence[KharchiEntry],
    advances: Sequence[AdvanceEntry],
    worker_payments: Sequence[WorkerPaymentRecord],
    mess_entries: Sequence[MessEntry],
) -> FinancialSummary:
    billed = total_billed(bills, scope)
    received = total_received(client_payments, scope)
    gst = gst_liability(bills, scope)
    materials = material_expense(purchases, scope)

    kharchi_paid = total(k.amount for k in scoped(kharchi, scope))
    advances_paid = total(a.amount for a in scoped(advances, scope))
    # Saved net payables can be negative when deductions exceed earnings
    salaries = total(w.net_payable for w in scoped(worker_payments, scope))
    mess_paid = total(m.amount_paid for m in scoped(mess_entries, scope))
    labor = kharchi_paid + advances_paid + salaries + mess_paid

    operational = materials + labor
    net_revenue = received - gst
    balance = billed - received

    return FinancialSummary(
        scope=scope,
        total_billed=billed,
        total_received=received,
        balance=balance,
        status=balance_status(balance),
        gst_liability=gst,
        net_revenue=net_revenue,
        material_expense=materials,
        kharchi_expense=kharchi_paid,
        advance_expense=advances_paid,
        salary_expense=salaries,
        mess_expense=mess_paid,
        labor_expense=labor,
        operational_expense=operational,
        net_profit=net_revenue - operational,
    )


# ---------------------------------------------------------------------------
# Billing status per project
# ---------------------------------------------------------------------------

class ProjectBalance(LedgerModel):
    project_id: str
    name: str
    total_billed: Money
    total_received: Money
    balance: SignedMoney
    status: str


def project_balances(projects: Sequence[Project], bills: Sequence[Bill],
                     client_payments: Sequence[ClientPayment]) -> List[ProjectBalance]:
    rows = []
    for project in projects:
        billed = total_billed(bills, project.id)
        received = total_received(client_payments, project.id)
        balance = billed - received
        rows.append(ProjectBalance(
            project_id=project.id,
            name=project.name or UNKNOWN,
            total_billed=billed,
            total_received=received,
            balance=balance,
            status=balance_status(balance),
        ))
    return rows


# ---------------------------------------------------------------------------
# GST dashboard
# ---------------------------------------------------------------------------

class GstSiteSummary(LedgerModel):
    project_id: str
    name: str
    bill_count: int
    base: Money
    gst: Money
    total: Money


class GstSummary(LedgerModel):
    scope: str
    month: Optional[str] = None
    total_base: Money
    total_gst: Money
    total_grand: Money
    sites: List[GstSiteSummary]
    bills: List[Bill]


def filter_bills(bills: Iterable[Bill], scope: str = ALL_PROJECTS,
                 month: Optional[str] = None) -> List[Bill]:
    return [
        b for b in scoped(bills, scope)
        if not month or b.billing_month == month
    ]


def gst_summary(projects: Sequence[Project], bills: Sequence[Bill],
                scope: str = ALL_PROJECTS, month: Optional[str] = None) -> GstSummary:
    selected = filter_bills(bills, scope, month)
    sites = []
    for project in projects:
        project_bills = [b for b in selected if b.project_id == project.id]
        if not project_bills:
            continue
        sites.append(GstSiteSummary(
            project_id=project.id,
            name=project.name or UNKNOWN,
            bill_count=len(project_bills),
            base=total(b.amount for b in project_bills),
            gst=total(b.gst_amount for b in project_bills),
            total=total(billed_total(b) for b in project_bills),
        ))
    return GstSummary(
        scope=scope,
        month=month or None,
        total_base=total(b.amount for b in selected),
        total_gst=total(b.gst_amount for b in selected),
        total_grand=total(billed_total(b) for b in selected),
        sites=sites,
        bills=selected,
    )


# ---------------------------------------------------------------------------
# Monthly billing trend
# ---------------------------------------------------------------------------

class MonthlyTotal(LedgerModel):
    month: str
    amount: Money


def monthly_totals(bills: Iterable[Bill], scope: str = ALL_PROJECTS,
                   descending: bool = False) -> List[MonthlyTotal]:
    """Grand totals grouped by billing month.

    Ascending order feeds the chart; ``descending=True`` gives the
    latest-first table.
    """
    by_month = defaultdict(list)
    for bill in scoped(bills, scope):
        if bill.billing_month:
            by_month[bill.billing_month].append(billed_total(bill))
    return [
        MonthlyTotal(month=month, amount=total(amounts))
        for month, amounts in sorted(by_month.items(), reverse=descending)
    ]


# ---------------------------------------------------------------------------
# Portfolio dashboard
# ---------------------------------------------------------------------------

class PortfolioOverview(LedgerModel):
    project_count: int
    active_projects: int
    completed_projects: int
    total_budget: Money
    total_spent: Money


def portfolio_overview(projects: Sequence[Project]) -> PortfolioOverview:
    return PortfolioOverview(
        project_count=len(projects),
        active_projects=sum(1 for p in projects if p.status == ProjectStatus.IN_PROGRESS),
        completed_projects=sum(1 for p in projects if p.status == ProjectStatus.COMPLETED),
        total_budget=total(p.budget for p in projects),
        total_spent=total(p.spent for p in projects),
    )
