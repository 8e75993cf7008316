from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from sitebook.core.config import settings
from sitebook.core.logging_config import configure_logging
from sitebook.core.templates import templates
from sitebook.db.base import Base
from sitebook.db.models.user import User
from sitebook.db.session import engine
from sitebook.ledger.rollup import ALL_PROJECTS, portfolio_overview, rollup
from sitebook.ledger.state import LedgerError
from sitebook.routers import (
    ai,
    auth,
    backup,
    deps,
    execution,
    finance,
    kharchi,
    records,
    reports,
    worker_payments,
)
from sitebook.services.store import LedgerStore

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=settings.PROJECT_NAME)

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    # Unknown collections and missing records are both "not found"
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors(include_url=False, include_context=False))},
    )

@app.get("/")
async def read_root(request: Request, error: str = None):
    return templates.TemplateResponse(request, "index.html", {"error": error})

@app.get("/dashboard")
async def dashboard(
    request: Request,
    user: User = Depends(deps.get_current_user),
    store: LedgerStore = Depends(deps.get_store)
):
    state = store.load()
    summary = rollup(ALL_PROJECTS, state.bills, state.client_payments, state.purchases,
                     state.kharchi, state.advances, state.worker_payments, state.mess_entries)
    return templates.TemplateResponse(request, "dashboard.html", {
        "user": user,
        "overview": portfolio_overview(state.projects),
        "summary": summary,
    })

app.include_router(auth.router)
app.include_router(records.router)
app.include_router(kharchi.router)
app.include_router(worker_payments.router)
app.include_router(finance.router)
app.include_router(execution.router)
app.include_router(backup.router)
app.include_router(ai.router)
app.include_router(reports.router)

# Create tables on startup
@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
