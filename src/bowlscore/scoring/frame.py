from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

FrameKind = Literal["normal", "final"]

MAX_PINS = 10


@dataclass(frozen=True, slots=True)
class ScoreFrame:
    """
    One scoring unit handed from the calculator to its consumers.

    Plain data, no scoring logic:
      - cumulative_score is None while the frame is pending (its value depends
        on rolls that have not been thrown yet) and on an error frame
      - error is set on at most one frame, and that frame is always the last one
      - kind is explicit so consumers never infer "final" from roll counts
    """

    frame_number: int
    kind: FrameKind = "normal"
    rolls: tuple[int, ...] = ()
    cumulative_score: int | None = None
    error: str | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def is_pending(self) -> bool:
        return self.error is None and self.cumulative_score is None

    @property
    def is_strike(self) -> bool:
        return bool(self.rolls) and self.rolls[0] == MAX_PINS

    @property
    def is_spare(self) -> bool:
        return (
            len(self.rolls) >= 2
            and self.rolls[0] < MAX_PINS
            and self.rolls[0] + self.rolls[1] == MAX_PINS
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "frame_number": self.frame_number,
            "kind": self.kind,
            "rolls": list(self.rolls),
            "cumulative_score": self.cumulative_score,
            "error": self.error,
        }

    def __str__(self) -> str:
        rolls = ",".join(str(r) for r in self.rolls)
        score = "null" if self.cumulative_score is None else str(self.cumulative_score)
        status = "valid" if self.error is None else f"error({self.error})"
        return f"F{self.frame_number:02d} [{self.kind}] rolls=[{rolls}] score={score} ({status})"
