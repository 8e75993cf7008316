from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from sitebook.db.models.user import User
from sitebook.ledger.deductions import payments_for
from sitebook.ledger.kharchi import kharchi_sheet
from sitebook.ledger.money import total
from sitebook.ledger.records import MONTH_PATTERN
from sitebook.ledger.rollup import (
    ALL_PROJECTS,
    gst_summary,
    lookup_name,
    project_balances,
    scoped,
)
from sitebook.routers import deps
from sitebook.routers.finance import scope_param
from sitebook.services.store import LedgerStore
from sitebook.core.templates import templates

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
    dependencies=[Depends(deps.get_current_user)]
)

@router.get("/billing")
async def billing_report(
    request: Request,
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_current_user)
):
    state = store.load()
    return templates.TemplateResponse(request, "reports/billing.html", {
        "user": user,
        "rows": project_balances(state.projects, state.bills, state.client_payments),
    })

@router.get("/gst")
async def gst_report(
    request: Request,
    scope: str = Depends(scope_param),
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_current_user)
):
    state = store.load()
    site_name = "All Sites" if scope == ALL_PROJECTS else lookup_name(state.projects, scope)
    return templates.TemplateResponse(request, "reports/gst.html", {
        "user": user,
        "site_name": site_name,
        "summary": gst_summary(state.projects, state.bills, scope, month),
    })

@router.get("/mess")
async def mess_report(
    request: Request,
    scope: str = Depends(scope_param),
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_current_user)
):
    state = store.load()
    entries = sorted(scoped(state.mess_entries, scope), key=lambda m: m.week_start_date, reverse=True)
    return templates.TemplateResponse(request, "reports/mess.html", {
        "user": user,
        "entries": entries,
        "projects": state.projects,
        "lookup_name": lookup_name,
        "total_paid": total(m.amount_paid for m in entries),
        "total_balance": total(m.balance for m in entries),
    })

@router.get("/kharchi")
async def kharchi_report(
    request: Request,
    project: str,
    month: str = Query(..., pattern=MONTH_PATTERN),
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_current_user)
):
    state = store.load()
    return templates.TemplateResponse(request, "reports/kharchi.html", {
        "user": user,
        "site_name": lookup_name(state.projects, project),
        "sheet": kharchi_sheet(project, month, state.workers, state.kharchi),
    })

@router.get("/worker-payments")
async def worker_payments_report(
    request: Request,
    project: str,
    month: str = Query(..., pattern=MONTH_PATTERN),
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_current_user)
):
    state = store.load()
    records = payments_for(state.worker_payments, project, month)
    return templates.TemplateResponse(request, "reports/worker_payments.html", {
        "user": user,
        "site_name": lookup_name(state.projects, project),
        "month": month,
        "records": records,
        "workers": state.workers,
        "lookup_name": lookup_name,
        "total_net": total(r.net_payable for r in records),
    })
