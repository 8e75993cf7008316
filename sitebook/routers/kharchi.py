from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from sitebook.db.models.user import User
from sitebook.ledger.deductions import in_month
from sitebook.ledger.kharchi import kharchi_sheet, site_totals
from sitebook.ledger.money import total
from sitebook.ledger.records import LedgerModel, MONTH_PATTERN
from sitebook.ledger.state import KHARCHI
from sitebook.routers import deps
from sitebook.services.store import LedgerStore
from sitebook.utils.activity import log_activity

router = APIRouter(
    prefix="/kharchi",
    tags=["kharchi"],
    dependencies=[Depends(deps.get_current_user)]
)

class KharchiMergeRequest(LedgerModel):
    project_id: Optional[str] = None
    entries: List[Dict[str, Any]]

@router.get("/")
async def list_kharchi(
    project: Optional[str] = None,
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN),
    store: LedgerStore = Depends(deps.get_store)
):
    entries = store.load().kharchi
    if project:
        entries = [e for e in entries if e.project_id == project]
    if month:
        entries = [e for e in entries if in_month(e.date, month)]
    return [e.to_json() for e in entries]

@router.get("/sheet")
async def kharchi_month_sheet(
    project: str,
    month: str = Query(..., pattern=MONTH_PATTERN),
    store: LedgerStore = Depends(deps.get_store)
):
    state = store.load()
    sheet = kharchi_sheet(project, month, state.workers, state.kharchi)
    sites = site_totals(state.projects, state.kharchi, month)
    return {
        "sheet": sheet,
        "sites": sites,
        "allSitesTotal": total(s.total for s in sites),
    }

@router.post("/merge")
async def merge_kharchi_entries(
    request: KharchiMergeRequest,
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_writer)
):
    entries = []
    for raw in request.entries:
        entry = dict(raw)
        if request.project_id:
            entry.setdefault("projectId", request.project_id)
        if "id" not in entry and entry.get("workerId") and entry.get("date"):
            entry["id"] = f"{entry['workerId']}-{entry['date']}"
        entries.append(entry)

    state = store.load().merge_kharchi(entries)
    store.save(state, [KHARCHI])

    log_activity(store.db, user, "MERGE", KHARCHI, None, f"{len(entries)} entries")
    return {"status": "success", "message": "Kharchi records updated!", "count": len(state.kharchi)}
