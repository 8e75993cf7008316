from typing import Optional
from fastapi import APIRouter, Depends, Path

from sitebook.db.models.user import User
from sitebook.ledger.execution import pour_columns, set_pour
from sitebook.ledger.records import LedgerModel, OptionalDate, OptionalInt
from sitebook.ledger.state import EXECUTION, RecordNotFound
from sitebook.routers import deps
from sitebook.services.store import LedgerStore
from sitebook.utils.activity import log_activity

router = APIRouter(
    prefix="/execution",
    tags=["execution"],
    dependencies=[Depends(deps.get_current_user)]
)

class PourUpdate(LedgerModel):
    date: OptionalDate = None
    cycle: OptionalInt = None

@router.get("/")
async def execution_schedule(
    project: Optional[str] = None,
    store: LedgerStore = Depends(deps.get_store)
):
    levels = store.load().execution_data
    if project:
        levels = [level for level in levels if level.project_id == project]
    return {
        "pourColumns": pour_columns(levels),
        "levels": [level.to_json() for level in levels],
    }

@router.put("/{level_id}/pours/{index}")
async def update_pour(
    level_id: str,
    update: PourUpdate,
    index: int = Path(..., ge=0),
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_writer)
):
    state = store.load()
    level = state.find(EXECUTION, level_id)
    if level is None:
        raise RecordNotFound(EXECUTION, level_id)

    fields = update.model_dump(exclude_unset=True)
    state = state.edit(EXECUTION, set_pour(level, index, **fields))
    store.save(state, [EXECUTION])

    log_activity(store.db, user, "UPDATE", EXECUTION, level_id, f"Pour {index + 1}")
    return state.find(EXECUTION, level_id).to_json()
