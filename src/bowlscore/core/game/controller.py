from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Iterable

import structlog

from bowlscore.core.events.base import Event
from bowlscore.core.events.bus import EventBus
from bowlscore.core.events.game import GameCompleted, GameStarted, RollCommitted, RollRejected
from bowlscore.core.game.rolllog import RollLog
from bowlscore.core.game.router import ComponentRouter, GameComponent, RouterWiring
from bowlscore.core.game.state import GameState
from bowlscore.core.logging.setup import bound_context
from bowlscore.scoring.calculator import (
    ScoreCalculator,
    StandardScoreCalculator,
    final_score,
    first_error,
    is_game_complete,
)
from bowlscore.scoring.frame import ScoreFrame

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class RollOutcome:
    accepted: bool
    error: str | None
    frames: tuple[ScoreFrame, ...]


class Game:
    """
    Single-player game controller.

    Every roll goes through a dry run: the calculator scores the committed
    log plus the candidate roll, and the roll is committed only when no
    frame comes back with an error. A rejected roll leaves the log and the
    cached scoreboard exactly as they were.

    One writer at a time: the dry run and the commit happen under a per-game
    lock, so concurrent callers (e.g. HTTP worker threads) are serialised and
    each one dry-runs against the log the previous one left behind.

    Renderers and loggers are bus components; the controller only publishes
    RollCommitted / RollRejected / GameCompleted. A failing collaborator is
    logged and does not undo or hide the outcome of the roll.
    """

    def __init__(
        self,
        *,
        game_id: str,
        bus: EventBus | None = None,
        calculator: ScoreCalculator | None = None,
        total_frames: int | None = None,
        components: Iterable[GameComponent] | None = None,
    ) -> None:
        if calculator is None:
            calculator = StandardScoreCalculator(total_frames=total_frames if total_frames is not None else 10)
        elif total_frames is not None and total_frames != calculator.total_frames:
            raise ValueError(
                f"total_frames={total_frames} does not match calculator.total_frames={calculator.total_frames}"
            )

        self._bus = bus if bus is not None else EventBus()
        self._calculator = calculator
        self._state = GameState(game_id=game_id, total_frames=calculator.total_frames)
        self._log = RollLog()
        self._lock = Lock()

        # last good scoreboard, rebuilt only on commit
        self._frames: tuple[ScoreFrame, ...] = tuple(self._calculator.calculate(()))

        self._wiring: RouterWiring | None = None
        if components is not None:
            self._wiring = ComponentRouter(bus=self._bus).register(components, game_id=game_id)

        self._publish(
            GameStarted.create(
                game_id=game_id,
                total_frames=self._state.total_frames,
                sequence=self._state.next_sequence(),
            )
        )
        log.info("game.started", game_id=game_id, total_frames=self._state.total_frames)

    @property
    def game_id(self) -> str:
        return self._state.game_id

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def wiring(self) -> RouterWiring | None:
        return self._wiring

    @property
    def rolls(self) -> tuple[int, ...]:
        return self._log.snapshot()

    @property
    def frames(self) -> tuple[ScoreFrame, ...]:
        return self._frames

    @property
    def is_complete(self) -> bool:
        return is_game_complete(self._frames)

    @property
    def score(self) -> int:
        return final_score(self._frames)

    def knock_down_pins(self, pins: int) -> RollOutcome:
        """
        Dry-run `pins` against the full game, then commit or reject.

        Never raises for bad input; the outcome is reported on the bus and
        returned to the caller.
        """
        with self._lock, bound_context(game_id=self.game_id):
            candidate = self._log.with_roll(pins)
            frames = tuple(self._calculator.calculate(candidate))

            failed = first_error(frames)
            if failed is not None:
                self._state.rejected += 1
                self._publish(
                    RollRejected.create(
                        game_id=self.game_id,
                        pins=pins,
                        frame_number=failed.frame_number,
                        error=failed.error,
                        sequence=self._state.next_sequence(),
                    )
                )
                return RollOutcome(accepted=False, error=failed.error, frames=self._frames)

            was_complete = self.is_complete
            roll_index = self._log.append(pins)
            self._frames = frames
            log.debug("game.roll_committed", pins=pins, roll_index=roll_index)

            self._publish(
                RollCommitted.create(
                    game_id=self.game_id,
                    pins=pins,
                    roll_index=roll_index,
                    frames=frames,
                    sequence=self._state.next_sequence(),
                )
            )

            if self.is_complete and not was_complete:
                log.info("game.completed", final_score=self.score)
                self._publish(
                    GameCompleted.create(
                        game_id=self.game_id,
                        final_score=self.score,
                        sequence=self._state.next_sequence(),
                    )
                )

            return RollOutcome(accepted=True, error=None, frames=frames)

    # ---------------- Internals ----------------

    def _publish(self, event: Event) -> None:
        """
        Deliver to collaborators. By the time we publish, the game state is
        already decided; a collaborator failure is logged, not re-raised.
        """
        try:
            self._bus.publish(event)
        except Exception:
            log.exception("game.collaborator_failed", game_id=self.game_id, event_type=event.event_type)
