from __future__ import annotations

from fastapi import APIRouter

from bowlscore.api.routes.games import router as games_router
from bowlscore.api.routes.health import router as health_router

# Top-level API router
router = APIRouter()

router.include_router(health_router)
router.include_router(games_router)
