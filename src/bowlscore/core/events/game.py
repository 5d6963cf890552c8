from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from bowlscore.core.events.base import Event
from bowlscore.scoring.frame import ScoreFrame


@dataclass(frozen=True, slots=True)
class GameStarted(Event):
    """
    Emitted once when a game controller is created.
    """

    event_type: ClassVar[str] = "game.started"

    game_id: str
    total_frames: int


@dataclass(frozen=True, slots=True)
class RollCommitted(Event):
    """
    A roll passed the dry run and is now part of the committed log.

    `frames` is the full scoreboard after the commit (renderer input).
    """

    event_type: ClassVar[str] = "game.roll_committed"

    game_id: str
    pins: int
    roll_index: int
    frames: tuple[ScoreFrame, ...]


@dataclass(frozen=True, slots=True)
class RollRejected(Event):
    """
    A roll failed the dry run. The committed log did not change.
    """

    event_type: ClassVar[str] = "game.roll_rejected"

    game_id: str
    pins: int
    frame_number: int
    error: str


@dataclass(frozen=True, slots=True)
class GameCompleted(Event):
    """
    Emitted by the commit that resolves the final frame.
    """

    event_type: ClassVar[str] = "game.completed"

    game_id: str
    final_score: int
