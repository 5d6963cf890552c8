from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock

import structlog

from bowlscore.core.events.bus import EventBus
from bowlscore.core.game.components import RejectionReporter, ScoreboardSink
from bowlscore.core.game.controller import Game
from bowlscore.core.game.spec import GameSpec

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class GameRecord:
    """
    A live game plus the collaborators wired to it.

    In-memory only; nothing survives a process restart.
    """

    game_id: str
    spec: GameSpec
    created_at_utc: datetime
    game: Game
    scoreboard: ScoreboardSink
    reporter: RejectionReporter


class GameRegistry:
    """
    Thread-safe map of game_id -> GameRecord.

    The lock only guards the map; each Game serialises its own writers.
    All games share one bus, and their collaborators are wired scoped to
    their own game_id.
    """

    def __init__(self, *, bus: EventBus | None = None) -> None:
        self._lock = Lock()
        self._bus = bus if bus is not None else EventBus()
        self._games: dict[str, GameRecord] = {}

    def create(self, spec: GameSpec | None = None) -> GameRecord:
        spec = spec if spec is not None else GameSpec()

        created_at = datetime.now(timezone.utc)
        # timestamp + entropy, unique even within the same second
        game_id = f"g_{created_at.strftime('%Y%m%dT%H%M%SZ')}_{secrets.token_hex(4)}"

        scoreboard = ScoreboardSink()
        reporter = RejectionReporter()
        game = Game(
            game_id=game_id,
            bus=self._bus,
            total_frames=spec.total_frames,
            components=[scoreboard, reporter],
        )

        rec = GameRecord(
            game_id=game_id,
            spec=spec,
            created_at_utc=created_at,
            game=game,
            scoreboard=scoreboard,
            reporter=reporter,
        )
        with self._lock:
            self._games[game_id] = rec

        log.info("registry.game_created", game_id=game_id, spec_hash=spec.config_hash())
        return rec

    @property
    def bus(self) -> EventBus:
        return self._bus

    def get(self, *, game_id: str) -> GameRecord | None:
        with self._lock:
            return self._games.get(game_id)

    def list(self) -> list[GameRecord]:
        with self._lock:
            items = list(self._games.values())
        items.sort(key=lambda r: r.created_at_utc, reverse=True)
        return items

    def remove(self, *, game_id: str) -> bool:
        with self._lock:
            removed = self._games.pop(game_id, None) is not None
        if removed:
            self._bus.unsubscribe_game(game_id)
            log.info("registry.game_removed", game_id=game_id)
        return removed
