"""
Generative AI helpers: construction cost estimator and site assistant chat.

Both call the Gemini ``generateContent`` REST endpoint once per request.
There are no retries; failures surface as :class:`AIServiceError`.
"""

import json
from typing import List, Optional, Sequence

import requests

from sitebook.core.config import settings
from sitebook.core.logging_config import get_logger
from sitebook.ledger.records import ChatMessage, EstimateItem

logger = get_logger("services.ai")

NO_KEY_REPLY = "I can't connect right now. Please check your API Key configuration."
EMPTY_REPLY = "Sorry, I didn't catch that. Radio interference. Can you repeat?"
CHAT_ERROR_REPLY = "System error. Check your connection."
ESTIMATE_ERROR = "Failed to generate estimate. Please try again with a more detailed description."

ESTIMATOR_INSTRUCTION = (
    "You are an expert construction estimator. Provide detailed, itemized lists of materials "
    "and labor required for construction projects. Be precise with units and conservative "
    "with pricing in Indian Rupees."
)

SUPERINTENDENT_INSTRUCTION = (
    "You are a seasoned Construction Site Superintendent with 30 years of experience in India. "
    "You are knowledgeable about IS codes, safety regulations, project scheduling, concrete, "
    "framing, electrical, and plumbing basics. You are tough but helpful, prioritizing safety "
    "and quality above all else. Keep answers concise and actionable."
)

ESTIMATE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "items": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "description": {"type": "STRING", "description": "Name of the material or labor task"},
                    "quantity": {"type": "NUMBER", "description": "Estimated quantity needed"},
                    "unit": {"type": "STRING", "description": "Unit of measurement (e.g., hours, sqft, pcs)"},
                    "unitPrice": {"type": "NUMBER", "description": "Estimated price per unit in Indian Rupees (INR)"},
                    "total": {"type": "NUMBER", "description": "Total cost for this item (quantity * unitPrice)"},
                },
                "required": ["description", "quantity", "unit", "unitPrice", "total"],
            },
        },
        "currency": {"type": "STRING"},
    },
    "required": ["items"],
}


class AIServiceError(Exception):
    pass


class GeminiClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_API_URL).rstrip("/")
        self.timeout = settings.AI_REQUEST_TIMEOUT if timeout is None else timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def generate(self, body: dict) -> str:
        """POST one generateContent request and return the reply text."""
        url = f"{self.base_url}/{self.model}:generateContent"
        try:
            response = requests.post(
                url,
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise AIServiceError(str(e)) from e

        candidates = payload.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    def estimate(self, description: str) -> List[EstimateItem]:
        """Itemized cost estimate for a free-text project description."""
        if not self.configured:
            logger.warning("Estimate requested but GEMINI_API_KEY is not set")
            return []
        body = {
            "contents": [{
                "role": "user",
                "parts": [{"text": (
                    f'Generate a detailed construction cost estimate for the following project: "{description}". \n'
                    "      Break it down into materials and labor. Be realistic with current market prices in India (INR)."
                )}],
            }],
            "systemInstruction": {"parts": [{"text": ESTIMATOR_INSTRUCTION}]},
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": ESTIMATE_SCHEMA,
            },
        }
        try:
            text = self.generate(body)
            if not text:
                return []
            data = json.loads(text)
            return [EstimateItem.model_validate(item) for item in data.get("items") or []]
        except AIServiceError:
            logger.exception("Error generating estimate")
            raise
        except (ValueError, AttributeError) as e:
            logger.exception("Error generating estimate")
            raise AIServiceError(str(e)) from e

    def chat(self, history: Sequence[ChatMessage], message: str) -> str:
        """Reply from the site superintendent persona.

        ``history`` is the conversation so far, oldest first.
        """
        if not self.configured:
            logger.warning("Chat requested but GEMINI_API_KEY is not set")
            return NO_KEY_REPLY
        contents = [{"role": m.role, "parts": [{"text": m.text}]} for m in history]
        contents.append({"role": "user", "parts": [{"text": message}]})
        body = {
            "contents": contents,
            "systemInstruction": {"parts": [{"text": SUPERINTENDENT_INSTRUCTION}]},
        }
        try:
            reply = self.generate(body)
        except AIServiceError:
            logger.exception("Error in chat")
            raise
        return reply or EMPTY_REPLY
