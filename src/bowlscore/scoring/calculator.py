from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from bowlscore.scoring.frame import MAX_PINS, ScoreFrame

NORMAL_FRAME_TRIES = 2
FINAL_FRAME_TRIES = 3


class ScoreCalculator(Protocol):
    """
    Rule set interface.

    Implementations must be pure: same rolls in, same frames out, no raising.
    Every failure is reported as a ScoreFrame with `error` set.
    """

    @property
    def total_frames(self) -> int:
        ...

    def calculate(self, rolls: Sequence[int]) -> list[ScoreFrame]:
        ...


class StandardScoreCalculator:
    """
    Standard ten-pin rules over a configurable number of frames.

    Single left-to-right pass with explicit local state:
      - cursor: index of the next unconsumed roll
      - running: cumulative total so far, None once any earlier frame is pending
      - pins: standing pins inside the frame being built

    Scoring stops at the first error (fail-fast) and at the first frame that
    runs out of rolls before it is complete.
    """

    def __init__(self, *, total_frames: int = 10) -> None:
        if total_frames < 1:
            raise ValueError("total_frames must be >= 1")
        self._total_frames = total_frames

    @property
    def total_frames(self) -> int:
        return self._total_frames

    def calculate(self, rolls: Sequence[int]) -> list[ScoreFrame]:
        rolls = tuple(rolls)

        range_error = self._validate_range(rolls)
        if range_error is not None:
            return [range_error]

        frames: list[ScoreFrame] = []
        cursor = 0
        running: int | None = 0

        for frame_number in range(1, self._total_frames):
            frame, cursor, running, stop = self._normal_frame(frame_number, rolls, cursor, running)
            frames.append(frame)
            if stop:
                return frames

        frame, cursor = self._final_frame(self._total_frames, rolls, cursor, running)
        frames.append(frame)
        if frame.has_error:
            return frames

        if cursor < len(rolls):
            frames.append(
                ScoreFrame(
                    frame_number=self._total_frames + 1,
                    kind="final",
                    error="extra rolls detected beyond the final frame",
                )
            )

        return frames

    # ---------------- Phases ----------------

    @staticmethod
    def _validate_range(rolls: tuple[int, ...]) -> ScoreFrame | None:
        for index, roll in enumerate(rolls):
            if roll < 0 or roll > MAX_PINS:
                return ScoreFrame(
                    frame_number=1,
                    error=f"invalid input detected at index {index}: {roll} (pins must be 0..{MAX_PINS})",
                )
        return None

    @staticmethod
    def _normal_frame(
        frame_number: int,
        rolls: tuple[int, ...],
        cursor: int,
        running: int | None,
    ) -> tuple[ScoreFrame, int, int | None, bool]:
        """
        Build one normal frame.

        Returns (frame, new_cursor, new_running, stop).
        """
        pins = MAX_PINS
        taken: list[int] = []

        while len(taken) < NORMAL_FRAME_TRIES:
            if cursor >= len(rolls):
                # Waiting on the rest of this frame
                return ScoreFrame(frame_number=frame_number, rolls=tuple(taken)), cursor, None, True

            roll = rolls[cursor]
            cursor += 1
            taken.append(roll)

            if roll > pins:
                frame = ScoreFrame(
                    frame_number=frame_number,
                    rolls=tuple(taken),
                    error=f"frame {frame_number} roll is {roll} (remain {pins})",
                )
                return frame, cursor, None, True

            pins -= roll
            if pins == 0:
                break

        if pins > 0:
            bonus_needed = 0
        elif len(taken) == 1:
            bonus_needed = 2  # strike
        else:
            bonus_needed = 1  # spare

        bonus = rolls[cursor:cursor + bonus_needed]
        if running is None or len(bonus) < bonus_needed:
            return ScoreFrame(frame_number=frame_number, rolls=tuple(taken)), cursor, None, False

        running += sum(taken) + sum(bonus)
        frame = ScoreFrame(frame_number=frame_number, rolls=tuple(taken), cumulative_score=running)
        return frame, cursor, running, False

    @staticmethod
    def _final_frame(
        frame_number: int,
        rolls: tuple[int, ...],
        cursor: int,
        running: int | None,
    ) -> tuple[ScoreFrame, int]:
        """
        Build the final frame: pins are reset whenever they are cleared,
        which is what earns the third throw. Scored as a flat sum.
        """
        pins = MAX_PINS
        taken: list[int] = []

        for attempt in range(FINAL_FRAME_TRIES):
            if cursor >= len(rolls):
                break

            roll = rolls[cursor]
            cursor += 1
            taken.append(roll)

            if roll > pins:
                frame = ScoreFrame(
                    frame_number=frame_number,
                    kind="final",
                    rolls=tuple(taken),
                    error=f"frame {frame_number} roll {attempt + 1} is {roll} (remain {pins})",
                )
                return frame, cursor

            pins -= roll
            if pins == 0:
                pins = MAX_PINS
            elif attempt == 1 and taken[0] != MAX_PINS:
                # open after two throws, no strike to earn a third
                break

        if running is None or not is_final_frame_finished(taken):
            return ScoreFrame(frame_number=frame_number, kind="final", rolls=tuple(taken)), cursor

        running += sum(taken)
        frame = ScoreFrame(
            frame_number=frame_number,
            kind="final",
            rolls=tuple(taken),
            cumulative_score=running,
        )
        return frame, cursor


def is_final_frame_finished(rolls: Sequence[int]) -> bool:
    if len(rolls) == FINAL_FRAME_TRIES:
        return True
    if len(rolls) == 2:
        return rolls[0] + rolls[1] < MAX_PINS
    return False


# ---------------- Frame list helpers ----------------

def first_error(frames: Iterable[ScoreFrame]) -> ScoreFrame | None:
    for frame in frames:
        if frame.has_error:
            return frame
    return None


def final_score(frames: Sequence[ScoreFrame]) -> int:
    """
    Last resolved cumulative score, 0 when nothing is resolved yet.
    """
    for frame in reversed(frames):
        if frame.cumulative_score is not None:
            return frame.cumulative_score
    return 0


def is_game_complete(frames: Sequence[ScoreFrame]) -> bool:
    if not frames:
        return False
    last = frames[-1]
    return last.kind == "final" and last.cumulative_score is not None
