from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from bowlscore.api.routes.games import live_game_count
from bowlscore.core.config.settings import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """
    Liveness plus the scoring defaults a client needs before creating a game.
    """

    status: str
    environment: str
    default_total_frames: int
    live_games: int


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        environment=settings.env,
        default_total_frames=settings.total_frames,
        live_games=live_game_count(),
    )
