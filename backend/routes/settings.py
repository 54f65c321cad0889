"""Health check and settings endpoints."""

from fastapi import APIRouter, Request

from backend import storage

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Health check."""
    return {"status": "ok", "adventures": len(request.app.state.corpus)}


@router.get("/settings")
async def get_settings(request: Request):
    """Effective planner settings, API key masked."""
    return storage.public_config(request.app.state.config)
