from __future__ import annotations

from typing import Iterator


class RollLog:
    """
    Append-only record of committed rolls.

    Readers only ever get tuples, so nothing downstream can mutate the log.
    Candidates for a dry run are built with `with_roll` and never touch it.
    """

    def __init__(self) -> None:
        self._rolls: list[int] = []

    def __len__(self) -> int:
        return len(self._rolls)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._rolls))

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._rolls)

    def with_roll(self, pins: int) -> tuple[int, ...]:
        return (*self._rolls, pins)

    def append(self, pins: int) -> int:
        """
        Commit a roll and return its index in the log.
        """
        self._rolls.append(pins)
        return len(self._rolls) - 1
