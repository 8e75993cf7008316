from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, status

from sitebook.db.models.user import User
from sitebook.ledger.state import check_collection, EDITABLE_COLLECTIONS, RecordNotFound
from sitebook.routers import deps
from sitebook.services.store import LedgerStore
from sitebook.utils.activity import log_activity

router = APIRouter(
    prefix="/ledger",
    tags=["ledger"],
    dependencies=[Depends(deps.get_current_user)]
)

@router.get("/{collection}")
async def list_records(
    collection: str,
    project: Optional[str] = None,
    store: LedgerStore = Depends(deps.get_store)
):
    records = store.load().collection(collection)
    if project:
        records = [r for r in records if getattr(r, "project_id", None) == project]
    return [r.to_json() for r in records]

@router.get("/{collection}/{record_id}")
async def get_record(
    collection: str,
    record_id: str,
    store: LedgerStore = Depends(deps.get_store)
):
    state = store.load()
    record = state.find(collection, record_id)
    if record is None:
        raise RecordNotFound(collection, record_id)
    return record.to_json()

@router.post("/{collection}", status_code=status.HTTP_201_CREATED)
async def create_record(
    collection: str,
    payload: Dict[str, Any] = Body(...),
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_writer)
):
    check_collection(collection, EDITABLE_COLLECTIONS)
    state = store.load().add(collection, payload)
    record = state.collection(collection)[-1]
    store.save(state, [collection])

    log_activity(store.db, user, "CREATE", collection, record.id)
    return record.to_json()

@router.put("/{collection}/{record_id}")
async def update_record(
    collection: str,
    record_id: str,
    payload: Dict[str, Any] = Body(...),
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_writer)
):
    check_collection(collection, EDITABLE_COLLECTIONS)
    payload["id"] = record_id
    state = store.load().edit(collection, payload)
    store.save(state, [collection])

    log_activity(store.db, user, "UPDATE", collection, record_id)
    return state.find(collection, record_id).to_json()

@router.delete("/{collection}/{record_id}")
async def delete_record(
    collection: str,
    record_id: str,
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_writer)
):
    state = store.load().delete(collection, record_id)
    store.save(state, [collection])

    log_activity(store.db, user, "DELETE", collection, record_id)
    return {"status": "success", "message": "Deleted"}
