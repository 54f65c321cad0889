"""FastAPI API endpoints under /api.

Endpoint groups: plan (resolver), chat-hint (hint provider), adventures
(corpus browsing + debug self-check), settings (health, effective config).
The loaded corpus, config and hint provider live on app.state; handlers read
them from the request instead of module globals.
"""

from fastapi import APIRouter

from .adventures import router as adventures_router
from .hints import router as hints_router
from .plan import router as plan_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(plan_router)
router.include_router(hints_router)
router.include_router(adventures_router)
