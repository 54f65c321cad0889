"""Request models and response helpers for API endpoints.

The plan and chat-hint endpoints parse their bodies by hand instead of
declaring a pydantic body: a wrong-typed field must produce the fixed 400
message, not FastAPI's 422 validation payload.
"""

from typing import Any, Literal

from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class ChatTurn(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


def cors_json(body: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


def cors_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)
