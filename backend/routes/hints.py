"""Chat hint endpoint: suggests which adventure file fits a message."""

import logging

from fastapi import APIRouter, Request
from pydantic import TypeAdapter, ValidationError

from pocket_ranger.resolver import InvalidInput

from .models import ChatTurn, cors_json, cors_preflight

logger = logging.getLogger(__name__)

router = APIRouter()

_history_adapter = TypeAdapter(list[ChatTurn])


@router.post("/chat-hint")
async def chat_hint(request: Request):
    """Return {response, shouldSearch, recommendedFile, extractedInfo, source}."""
    hints = request.app.state.hints
    try:
        payload = await request.json()
        if not isinstance(payload, dict):
            raise InvalidInput("Request body must be a JSON object")
        try:
            history = _history_adapter.validate_python(payload.get("conversationHistory", []))
        except ValidationError as e:
            raise InvalidInput(f"Malformed conversationHistory: {e}") from e
        hint = await hints.suggest(
            payload.get("message"), [turn.model_dump() for turn in history]
        )
    except InvalidInput as e:
        logger.info("Rejected hint request: %s", e)
        return cors_json({"error": "Invalid message provided"}, 400)
    except Exception:
        logger.exception("Hint request failed")
        return cors_json({"error": "Failed to process message"}, 500)
    return cors_json(hint.to_json_dict())


@router.options("/chat-hint")
async def chat_hint_preflight():
    """CORS preflight."""
    return cors_preflight()
