from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class GameState:
    """
    Per-game bookkeeping outside the roll log itself.

    - sequence: monotonic counter stamped on every published event
    - rejected: number of rolls refused by the dry run
    """

    game_id: str
    total_frames: int
    sequence: int = 0
    rejected: int = 0

    def next_sequence(self) -> int:
        self.sequence += 1
        return self.sequence
