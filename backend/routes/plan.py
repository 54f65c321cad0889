"""Adventure planning endpoint: free text in, one itinerary out."""

import logging

from fastapi import APIRouter, Request

from pocket_ranger.resolver import InvalidInput, resolve

from .models import cors_json, cors_preflight

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/plan")
async def plan(request: Request):
    """Resolve {userInput, recommendedFile?} to an adventure record."""
    corpus = request.app.state.corpus
    try:
        payload = await request.json()
        if not isinstance(payload, dict):
            raise InvalidInput("Request body must be a JSON object")
        record = resolve(corpus, payload.get("userInput"), payload.get("recommendedFile"))
    except InvalidInput as e:
        logger.info("Rejected plan request: %s", e)
        return cors_json({"error": "Invalid input provided"}, 400)
    except Exception:
        logger.exception("Plan request failed")
        return cors_json({"error": "Internal server error"}, 500)
    return cors_json(record.to_json_dict())


@router.options("/plan")
async def plan_preflight():
    """CORS preflight."""
    return cors_preflight()
