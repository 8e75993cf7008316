from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse

from sitebook.db.models.user import User
from sitebook.ledger.state import COLLECTION_KEYS
from sitebook.routers import deps
from sitebook.services.backup import InvalidBackup, backup_filename, export_backup, import_backup
from sitebook.services.store import LedgerStore
from sitebook.utils.activity import log_activity

router = APIRouter(
    prefix="/backup",
    tags=["backup"],
    dependencies=[Depends(deps.get_current_user)]
)

@router.get("/export")
async def export_ledger(
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_current_user)
):
    filename = backup_filename()
    log_activity(store.db, user, "EXPORT", "backup", None, filename)
    return JSONResponse(
        export_backup(store.load()),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@router.post("/import")
async def import_ledger(
    file: UploadFile = File(...),
    store: LedgerStore = Depends(deps.get_store),
    user: User = Depends(deps.get_admin)
):
    payload = await file.read()
    try:
        state = import_backup(store.load(), payload)
    except InvalidBackup as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    store.save(state, COLLECTION_KEYS)
    log_activity(store.db, user, "IMPORT", "backup", None, file.filename)
    return {"status": "success", "message": "Data restored successfully!"}
