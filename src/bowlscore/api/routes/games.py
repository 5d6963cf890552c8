from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from bowlscore.core.game.registry import GameRecord, GameRegistry
from bowlscore.core.game.spec import GameSpec
from bowlscore.scoring.frame import FrameKind, ScoreFrame

router = APIRouter(tags=["games"])

# Process-local registry (single process, no persistence)
_registry = GameRegistry()


# =========================
# Schemas
# =========================

class FrameResponse(BaseModel):
    frame_number: int
    kind: FrameKind
    rolls: list[int]
    cumulative_score: int | None = None
    error: str | None = None


class CreateGameRequest(BaseModel):
    spec: GameSpec | None = Field(default=None, description="Optional GameSpec override")


class CreateGameResponse(BaseModel):
    game_id: str
    total_frames: int


class RollRequest(BaseModel):
    # Deliberately unbounded: range errors are reported by the scorer, not by validation
    pins: int


class RollResponse(BaseModel):
    game_id: str
    accepted: bool
    error: str | None = None
    frames: list[FrameResponse]


class GameDetailsResponse(BaseModel):
    game_id: str
    total_frames: int
    created_at_utc: datetime
    rolls: list[int]
    frames: list[FrameResponse]
    score: int
    completed: bool
    rejected_rolls: int
    tags: dict[str, str]


class GamesListResponse(BaseModel):
    games: list[GameDetailsResponse]


class DeleteGameResponse(BaseModel):
    game_id: str
    deleted: bool


# =========================
# Helpers
# =========================

def _frames_out(frames: tuple[ScoreFrame, ...]) -> list[FrameResponse]:
    return [FrameResponse.model_validate(f.to_dict()) for f in frames]


def _details(rec: GameRecord) -> GameDetailsResponse:
    game = rec.game
    return GameDetailsResponse(
        game_id=rec.game_id,
        total_frames=rec.spec.total_frames,
        created_at_utc=rec.created_at_utc,
        rolls=list(game.rolls),
        frames=_frames_out(game.frames),
        score=game.score,
        completed=game.is_complete,
        rejected_rolls=game.state.rejected,
        tags=rec.spec.tags,
    )


def live_game_count() -> int:
    return len(_registry.list())


def _require(game_id: str) -> GameRecord:
    rec = _registry.get(game_id=game_id)
    if rec is None:
        raise HTTPException(status_code=404, detail="game not found")
    return rec


# =========================
# Routes
# =========================

@router.post("/games", response_model=CreateGameResponse)
def create_game(payload: CreateGameRequest | None = None) -> CreateGameResponse:
    spec = payload.spec if payload is not None else None
    rec = _registry.create(spec)
    return CreateGameResponse(game_id=rec.game_id, total_frames=rec.spec.total_frames)


@router.get("/games", response_model=GamesListResponse)
def list_games() -> GamesListResponse:
    return GamesListResponse(games=[_details(rec) for rec in _registry.list()])


@router.get("/games/{game_id}", response_model=GameDetailsResponse)
def get_game(game_id: str) -> GameDetailsResponse:
    return _details(_require(game_id))


@router.post("/games/{game_id}/rolls", response_model=RollResponse)
def knock_down_pins(game_id: str, payload: RollRequest) -> RollResponse:
    rec = _require(game_id)

    # A rejected roll is a normal outcome, not an HTTP error
    outcome = rec.game.knock_down_pins(payload.pins)
    return RollResponse(
        game_id=game_id,
        accepted=outcome.accepted,
        error=outcome.error,
        frames=_frames_out(outcome.frames),
    )


@router.delete("/games/{game_id}", response_model=DeleteGameResponse)
def delete_game(game_id: str) -> DeleteGameResponse:
    if not _registry.remove(game_id=game_id):
        raise HTTPException(status_code=404, detail="game not found")
    return DeleteGameResponse(game_id=game_id, deleted=True)
