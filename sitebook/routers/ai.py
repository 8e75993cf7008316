from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from sitebook.ledger.records import ChatMessage, LedgerModel
from sitebook.routers import deps
from sitebook.services.ai import AIServiceError, CHAT_ERROR_REPLY, ESTIMATE_ERROR, GeminiClient

router = APIRouter(
    prefix="/ai",
    tags=["ai"],
    dependencies=[Depends(deps.get_current_user)]
)

class EstimateRequest(LedgerModel):
    description: str = ""

class ChatRequest(LedgerModel):
    history: List[ChatMessage] = []
    message: str

def get_client() -> GeminiClient:
    return GeminiClient()

@router.post("/estimate")
def generate_estimate(request: EstimateRequest, client: GeminiClient = Depends(get_client)):
    if not request.description.strip():
        return []
    try:
        items = client.estimate(request.description)
    except AIServiceError:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=ESTIMATE_ERROR)
    return [item.to_json() for item in items]

@router.post("/chat")
def site_chat(request: ChatRequest, client: GeminiClient = Depends(get_client)):
    try:
        return {"reply": client.chat(request.history, request.message), "error": False}
    except AIServiceError:
        return {"reply": CHAT_ERROR_REPLY, "error": True}
