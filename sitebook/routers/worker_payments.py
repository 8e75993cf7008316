from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Query

from sitebook.db.models.user import User
from sitebook.ledger.deductions import build_payment_sheet, payments_for
from sitebook.ledger.money import total
from sitebook.ledger.records import LedgerModel, Month, MONTH_PATTERN
from sitebook.ledger.rollup import lookup_name
from sitebook.ledger.state import WORKER_PAYMENTS
from sitebook.routers import deps
from sitebook.services.store import LedgerStore
from sitebook.utils.activity import log_activity

router = APIRouter(
    prefix="/worker-payments",
    tags=["worker-payments"],
    dependencies=[Depends(deps.get_current_user)]
)

class PaymentSheetRequest(LedgerModel):
    project_id: str
    month: Month
    work_amounts: Dict[str, Any] = {}
    mess_deductions: Dict[str, Any] = {}

def sheet_for(store: LedgerStore, request: PaymentSheetRequest):
    state = store.load()
    records = build_payment_sheet(
        request.project_id,
        request.month,
        state.workers,
        request.work_amounts,
        request.mess_deductions,
        state.kharchi,
        state.advances,
    )
    return state, records

def sheet_response(state, records):
    return {
        "records": [
            dict(r.to_json(), workerName=lookup_name(state.workers, r.worker_id))
            for r in records
        ],
        "totalNetPayable": total(r.net_payable for r in records),
    }

@router.get("/")
async def list_worker_payments(
    project: Optional[str] = None,
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    store: LedgerStore = Depends(deps.get_store)
):
    state = store.load()
    return sheet_response(state, payments_for(state.worker_payments, project, month))

@router.post("/preview")
async def preview_worker_payments(
    request: PaymentSheetRequest,
    store: LedgerStore = Depends(deps.get_store)
):
    state, records = sheet_for(store, request)
    return sheet_response(state, records)

@router.post("/save")
async def save_worker_payments(
    request: PaymentSheetRequest,
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_writer)
):
    state, records = sheet_for(store, request)
    state = state.save_worker_payments(records)
    store.save(state, [WORKER_PAYMENTS])

    log_activity(store.db, user, "SAVE", WORKER_PAYMENTS, None,
                 f"{len(records)} records for project {request.project_id}, {request.month}")
    response = sheet_response(state, records)
    response["message"] = f"Saved {len(records)} payment records for {request.month}"
    return response
