from __future__ import annotations

import pytest

from bowlscore.scoring.calculator import (
    StandardScoreCalculator,
    final_score,
    first_error,
    is_final_frame_finished,
    is_game_complete,
)
from bowlscore.scoring.frame import ScoreFrame


def _parse(rolls: str) -> list[int]:
    if not rolls.strip():
        return []
    return [int(s.strip()) for s in rolls.split(",")]


def _calc(rolls: list[int], total_frames: int = 10) -> list[ScoreFrame]:
    return StandardScoreCalculator(total_frames=total_frames).calculate(rolls)


@pytest.mark.parametrize(
    ("rolls", "expected"),
    [
        ("0,0, 0,0, 0,0, 0,0, 0,0, 0,0, 0,0, 0,0, 0,0, 0,0", 0),
        ("10, 10, 10, 10, 10, 10, 10, 10, 10, 10, 10, 10", 300),
        ("5,5, 3,0, 0,0, 0,0, 0,0, 0,0, 0,0, 0,0, 0,0, 0,0", 16),
        ("9,0, 9,0, 9,0, 9,0, 9,0, 9,0, 9,0, 9,0, 9,0, 9,0", 90),
        ("5,5, 5,5, 5,5, 5,5, 5,5, 5,5, 5,5, 5,5, 5,5, 5,5, 5", 150),
        ("10, 10, 10, 10, 10, 10, 10, 10, 10, 2, 2, 2", 250),  # overrun still keeps the resolved total
        ("10, 10, 10, 10, 10, 10, 10, 10, 10, 2, 2", 250),
        ("10, 10, 10, 10, 10, 10, 10, 10, 10, 5, 5, 10", 275),
        ("10, 10, 10, 10, 10, 10, 10, 10, 10, 10, 2, 2", 276),
        ("10, 10, 10, 10, 10, 10", 120),
        ("10, 10, 10, 10, 10, 10, 2, 3, 10, 10, 10, 5, 5", 237),
        ("10, 10, 10", 30),
        ("", 0),
    ],
)
def test_last_resolved_score(rolls: str, expected: int) -> None:
    assert final_score(_calc(_parse(rolls))) == expected


@pytest.mark.parametrize(
    "rolls",
    [
        "11",
        "5, 6",
        "-5",
        "10, 10, 10, 10, 10, 10, 10, 10, 10, 2, 2, 2, 2",
        "10, 10, 10, 10, 10, 10, 10, 10, 10, 5, 10, 10",
        "3, 4, 12",
        "10, 10, 10, 10, 10, 10, 10, 10, 10, 10, 3, 8",
    ],
)
def test_error_frame_is_last_and_unscored(rolls: str) -> None:
    frames = _calc(_parse(rolls))

    errors = [f for f in frames if f.has_error]
    assert len(errors) == 1
    assert frames[-1] is errors[0]
    assert frames[-1].cumulative_score is None
    assert frames[-1].error


def test_empty_input_is_a_single_pending_frame() -> None:
    frames = _calc([])
    assert frames == [ScoreFrame(frame_number=1)]
    assert frames[0].is_pending


def test_empty_input_single_frame_game_is_pending_final() -> None:
    assert _calc([], total_frames=1) == [ScoreFrame(frame_number=1, kind="final")]


@pytest.mark.parametrize("bad", [11, -5])
def test_out_of_range_first_roll(bad: int) -> None:
    frames = _calc([bad])
    assert len(frames) == 1
    assert frames[0].frame_number == 1
    assert "index 0" in frames[0].error
    assert frames[0].rolls == ()


def test_out_of_range_later_roll_aborts_everything() -> None:
    frames = _calc([3, 4, 12])
    assert len(frames) == 1
    assert frames[0].frame_number == 1
    assert "index 2: 12" in frames[0].error


def test_single_strike_is_pending() -> None:
    frames = _calc([10])
    assert frames[0].rolls == (10,)
    assert frames[0].cumulative_score is None
    assert frames[0].is_strike
    # next frame is waiting for its first roll
    assert frames[1] == ScoreFrame(frame_number=2)
    assert len(frames) == 2


def test_strikes_stay_pending_until_two_bonus_rolls() -> None:
    frames = _calc([10, 10])
    assert [f.rolls for f in frames] == [(10,), (10,), ()]
    assert all(f.cumulative_score is None for f in frames)

    frames = _calc([10, 10, 10])
    assert frames[0].cumulative_score == 30
    assert frames[1].cumulative_score is None


def test_spare_waits_for_one_bonus_roll() -> None:
    frames = _calc([5, 5])
    assert frames[0].rolls == (5, 5)
    assert frames[0].is_spare
    assert frames[0].cumulative_score is None
    assert len(frames) == 2

    frames = _calc([5, 5, 3])
    assert frames[0].cumulative_score == 13
    assert frames[1].rolls == (3,)
    assert frames[1].is_pending


def test_open_frame_scores_immediately() -> None:
    frames = _calc([3, 4])
    assert frames[0].cumulative_score == 7
    assert frames[1] == ScoreFrame(frame_number=2)


def test_normal_frame_impossible_throw() -> None:
    frames = _calc([5, 6])
    assert frames == [
        ScoreFrame(frame_number=1, rolls=(5, 6), error="frame 1 roll is 6 (remain 5)"),
    ]


def test_impossible_throw_after_scored_frames_stops_there() -> None:
    frames = _calc([3, 4, 5, 6, 1, 1])
    assert len(frames) == 2
    assert frames[0].cumulative_score == 7
    assert frames[1].error == "frame 2 roll is 6 (remain 5)"


def test_final_frame_strike_open_bonus() -> None:
    frames = _calc([0] * 18 + [10, 5, 3])
    final = frames[-1]
    assert len(frames) == 10
    assert final.kind == "final"
    assert final.rolls == (10, 5, 3)
    assert final.cumulative_score == 18
    assert is_game_complete(frames)


def test_final_frame_strike_then_open_waits_for_third_throw() -> None:
    frames = _calc([0] * 18 + [10, 3])
    assert frames[-1].rolls == (10, 3)
    assert frames[-1].cumulative_score is None
    assert not is_game_complete(frames)


def test_final_frame_spare_waits_for_bonus() -> None:
    frames = _calc([0] * 18 + [3, 7])
    assert frames[-1].cumulative_score is None

    frames = _calc([0] * 18 + [3, 7, 5])
    assert frames[-1].cumulative_score == 15


def test_final_frame_open_finishes_after_two() -> None:
    frames = _calc([0] * 18 + [3, 4])
    assert frames[-1].rolls == (3, 4)
    assert frames[-1].cumulative_score == 7
    assert is_game_complete(frames)


def test_final_frame_impossible_throw_is_fail_fast() -> None:
    frames = _calc([10] * 9 + [5, 10, 10])
    assert len(frames) == 10
    assert frames[-1].kind == "final"
    assert frames[-1].rolls == (5, 10)
    assert frames[-1].error == "frame 10 roll 2 is 10 (remain 5)"


def test_final_frame_third_throw_checked_against_standing_pins() -> None:
    frames = _calc([0] * 18 + [10, 3, 8])
    assert frames[-1].error == "frame 10 roll 3 is 8 (remain 7)"


def test_bonus_reaches_into_final_frame() -> None:
    frames = _calc([0] * 16 + [10, 10, 10, 10])
    assert frames[8].cumulative_score == 30
    assert frames[9].cumulative_score == 60


def test_extra_rolls_after_final_frame() -> None:
    frames = _calc([0] * 21)
    assert len(frames) == 11
    assert frames[9].cumulative_score == 0
    assert frames[10].frame_number == 11
    assert frames[10].error == "extra rolls detected beyond the final frame"
    assert not is_game_complete(frames)


def test_configurable_frame_count() -> None:
    frames = _calc([10] * 5, total_frames=3)
    assert [f.kind for f in frames] == ["normal", "normal", "final"]
    assert [f.cumulative_score for f in frames] == [30, 60, 90]


def test_single_frame_game_is_only_the_final_frame() -> None:
    frames = _calc([10, 10, 10], total_frames=1)
    assert frames == [ScoreFrame(frame_number=1, kind="final", rolls=(10, 10, 10), cumulative_score=30)]


def test_non_positive_frame_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        StandardScoreCalculator(total_frames=0)


@pytest.mark.parametrize(
    "rolls",
    [
        [10, 7, 3, 9, 0, 10, 0, 8, 8, 2, 0, 6, 10, 10, 10, 8, 1],
        [1, 4, 4, 5, 6, 4, 5, 5, 10, 0, 1, 7, 3, 6, 4, 10, 2, 8, 6],
        [10, 10, 5],
    ],
)
def test_cumulative_scores_never_decrease(rolls: list[int]) -> None:
    scores = [f.cumulative_score for f in _calc(rolls) if f.cumulative_score is not None]
    assert scores == sorted(scores)


def test_known_game_total() -> None:
    frames = _calc([1, 4, 4, 5, 6, 4, 5, 5, 10, 0, 1, 7, 3, 6, 4, 10, 2, 8, 6])
    assert [f.cumulative_score for f in frames] == [5, 14, 29, 49, 60, 61, 77, 97, 117, 133]


def test_calculate_does_not_touch_input() -> None:
    rolls = [10, 5, 5, 3]
    calc = StandardScoreCalculator()
    first = calc.calculate(rolls)
    second = calc.calculate(rolls)

    assert rolls == [10, 5, 5, 3]
    assert first == second


def test_is_final_frame_finished() -> None:
    assert not is_final_frame_finished([])
    assert not is_final_frame_finished([10])
    assert not is_final_frame_finished([10, 0])
    assert not is_final_frame_finished([4, 6])
    assert is_final_frame_finished([4, 5])
    assert is_final_frame_finished([10, 10, 10])


def test_first_error() -> None:
    assert first_error(_calc([3, 4])) is None
    assert first_error(_calc([5, 6])).frame_number == 1
