from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import structlog

from bowlscore.core.events.base import Event
from bowlscore.core.events.bus import EventHandler
from bowlscore.core.events.game import GameCompleted, RollCommitted, RollRejected
from bowlscore.scoring.frame import ScoreFrame

log = structlog.get_logger()


@dataclass(slots=True)
class ScoreboardSink:
    """
    Renderer collaborator: keeps the latest committed scoreboard and emits it
    as structured per-frame records.
    """

    latest: tuple[ScoreFrame, ...] = ()
    updates: int = 0
    final_score: int | None = None

    def subscriptions(self) -> Sequence[tuple[str, EventHandler]]:
        return (
            (RollCommitted.event_type, self.on_roll_committed),
            (GameCompleted.event_type, self.on_game_completed),
        )

    def on_roll_committed(self, e: Event) -> None:
        assert isinstance(e, RollCommitted)
        self.latest = e.frames
        self.updates += 1
        log.info(
            "scoreboard.updated",
            game_id=e.game_id,
            sequence=e.sequence,
            frames=[f.to_dict() for f in e.frames],
        )

    def on_game_completed(self, e: Event) -> None:
        assert isinstance(e, GameCompleted)
        self.final_score = e.final_score


@dataclass(slots=True)
class RejectionReporter:
    """
    Logger collaborator: one human-readable message per rejected roll.
    """

    messages: list[str] = field(default_factory=list)

    def subscriptions(self) -> Sequence[tuple[str, EventHandler]]:
        return ((RollRejected.event_type, self.on_roll_rejected),)

    def on_roll_rejected(self, e: Event) -> None:
        assert isinstance(e, RollRejected)
        self.messages.append(e.error)
        log.warning(
            "game.roll_rejected",
            game_id=e.game_id,
            pins=e.pins,
            frame_number=e.frame_number,
            error=e.error,
        )
