from typing import Any, Optional
from fastapi import APIRouter, Depends, Query

from sitebook.ledger.deductions import compute_net_payable
from sitebook.ledger.mess import compute_mess_week
from sitebook.ledger.money import total
from sitebook.ledger.records import LedgerModel, Month, MONTH_PATTERN
from sitebook.ledger.rollup import (
    ALL_PROJECTS,
    gst_summary,
    monthly_totals,
    portfolio_overview,
    project_balances,
    rollup,
    scoped,
)
from sitebook.ledger.tax import compute_tax
from sitebook.routers import deps
from sitebook.services.store import LedgerStore

router = APIRouter(
    prefix="/finance",
    tags=["finance"],
    dependencies=[Depends(deps.get_current_user)]
)

def scope_param(project: str = ALL_PROJECTS) -> str:
    # "All", "all" and "ALL" all mean every project
    if not project or project.upper() == ALL_PROJECTS:
        return ALL_PROJECTS
    return project

class TaxRequest(LedgerModel):
    amount: Any = 0
    gst_rate: Any = 0

class MessWeekRequest(LedgerModel):
    worker_count: Any = 0
    rate: Any = 0
    amount_paid: Any = 0
    other_expenses: Any = 0

class NetPayableRequest(LedgerModel):
    worker_id: str
    month: Month
    work_amount: Any = 0
    mess_deduction: Any = 0

@router.post("/tax")
async def calculate_tax(request: TaxRequest):
    return compute_tax(request.amount, request.gst_rate)

@router.post("/mess-week")
async def calculate_mess_week(request: MessWeekRequest):
    return compute_mess_week(request.worker_count, request.rate,
                             request.amount_paid, request.other_expenses)

@router.post("/net-payable")
async def calculate_net_payable(
    request: NetPayableRequest,
    store: LedgerStore = Depends(deps.get_store)
):
    state = store.load()
    return compute_net_payable(request.worker_id, request.month, request.work_amount,
                               request.mess_deduction, state.kharchi, state.advances)

@router.get("/summary")
async def financial_summary(
    scope: str = Depends(scope_param),
    store: LedgerStore = Depends(deps.get_store)
):
    state = store.load()
    return rollup(scope, state.bills, state.client_payments, state.purchases,
                  state.kharchi, state.advances, state.worker_payments, state.mess_entries)

@router.get("/balances")
async def billing_balances(store: LedgerStore = Depends(deps.get_store)):
    state = store.load()
    return project_balances(state.projects, state.bills, state.client_payments)

@router.get("/gst")
async def gst_dashboard(
    scope: str = Depends(scope_param),
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    store: LedgerStore = Depends(deps.get_store)
):
    state = store.load()
    return gst_summary(state.projects, state.bills, scope, month)

@router.get("/trend")
async def billing_trend(
    scope: str = Depends(scope_param),
    store: LedgerStore = Depends(deps.get_store)
):
    bills = store.load().bills
    return {
        "chart": monthly_totals(bills, scope),
        "table": monthly_totals(bills, scope, descending=True),
    }

@router.get("/advances")
async def advance_totals(
    scope: str = Depends(scope_param),
    store: LedgerStore = Depends(deps.get_store)
):
    advances = scoped(store.load().advances, scope)
    return {"scope": scope, "count": len(advances), "total": total(a.amount for a in advances)}

@router.get("/overview")
async def dashboard_overview(store: LedgerStore = Depends(deps.get_store)):
    return portfolio_overview(store.load().projects)
