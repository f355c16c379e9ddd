from dataclasses import replace

import pytest

from speakable_time.boundary import TimeBoundary
from speakable_time.filters import (
    Chain,
    FunctionFilter,
    Relative,
    Round,
    TopRounds,
    chain,
)
from speakable_time.state import ApproximateState, decompose
from speakable_time.util import DAY, HOUR, MINUTE, MONTH, YEAR

Y, M, D, H = TimeBoundary.YEAR, TimeBoundary.MONTH, TimeBoundary.DAY, TimeBoundary.HOUR


def reported(state: ApproximateState) -> list[tuple[TimeBoundary, int]]:
    return [(c.boundary, c.quantity) for c in state.non_zero]


def test_round_truncates_finer_units() -> None:
    state = Round(D)(decompose(-(2 * DAY + 13 * HOUR)))

    assert reported(state) == [(D, 2)]
    assert state.is_past is True
    assert state.pinned == {D}


def test_round_folds_coarser_units_into_the_boundary() -> None:
    state = Round(D)(decompose(400 * DAY))

    assert reported(state) == [(D, 400)]


def test_chained_rounds_report_each_pinned_unit() -> None:
    state = (Round(Y) >> Round(D))(decompose(45 * YEAR + 4 * DAY))

    assert reported(state) == [(Y, 45), (D, 4)]


def test_chained_rounds_fold_skipped_units() -> None:
    # months between the year and day boundaries fold into days
    state = (Round(Y) >> Round(D))(decompose(2 * YEAR + 3 * MONTH + DAY))

    assert reported(state) == [(Y, 2), (D, 92)]


def test_round_is_idempotent() -> None:
    state = decompose(45 * YEAR + 4 * DAY + 7 * HOUR)
    for f in (Round(D), Round(M), Round(D, half_up=True)):
        assert f(f(state)) == f(state)


def test_round_half_up() -> None:
    assert reported(Round(D, half_up=True)(decompose(2 * DAY + 13 * HOUR))) == [(D, 3)]
    assert reported(Round(D, half_up=True)(decompose(2 * DAY + 11 * HOUR))) == [(D, 2)]
    assert reported(Round(D, half_up=True)(decompose(2 * DAY + 12 * HOUR))) == [(D, 3)]


def test_round_half_up_carries_into_coarser_pinned_unit() -> None:
    state = (Round(H) >> Round(D, half_up=True))(decompose(DAY + 23 * HOUR + 40 * MINUTE))

    assert reported(state) == [(D, 2)]
    assert state.get(H).quantity == 0


def test_round_limit_skips_when_exceeded() -> None:
    within = (Round(M, limit=2) >> Round(D))(decompose(87 * DAY))
    assert reported(within) == [(M, 2), (D, 26)]

    state = decompose(100 * DAY)
    assert Round(M, limit=2)(state) == state


def test_round_on_zero_reports_nothing() -> None:
    state = Round(Y)(decompose(0))

    assert state.non_zero == ()
    assert state.is_past is True


def test_top_rounds_keeps_coarsest_non_zero_components() -> None:
    assert reported(TopRounds(2)(decompose(45 * YEAR + 4 * DAY))) == [(Y, 45), (D, 4)]
    assert reported(TopRounds(1)(decompose(2 * DAY + 1))) == [(D, 2)]
    assert reported(TopRounds(2)(decompose(2 * DAY + 1))) == [
        (D, 2),
        (TimeBoundary.SECOND, 1),
    ]


def test_top_rounds_four_units() -> None:
    state = TopRounds(4)(decompose(-16712 * DAY))

    assert reported(state) == [(Y, 45), (M, 9), (D, 1), (H, 18)]


@pytest.mark.parametrize("seconds", [0, 1, 61, 3 * HOUR + 5, 10 * YEAR + 3 * MONTH + 2 * MINUTE])
@pytest.mark.parametrize("count", [1, 2, 3, 4])
def test_top_rounds_never_exceeds_count(seconds: int, count: int) -> None:
    state = decompose(seconds)
    top = TopRounds(count)(state)

    assert len(top.non_zero) <= count
    assert top.non_zero == state.non_zero[:count]


def test_top_rounds_non_positive_count_is_identity() -> None:
    state = decompose(3 * DAY + 4)
    assert TopRounds(0)(state) == state
    assert TopRounds(-1)(state) == state


def test_top_rounds_ceiling() -> None:
    state = decompose(HOUR + 3 * MINUTE)

    assert reported(TopRounds(3, ceiling=H)(state)) == [(H, 1), (TimeBoundary.MINUTE, 3)]
    assert reported(TopRounds(3, ceiling=TimeBoundary.SECOND)(state)) == [
        (TimeBoundary.SECOND, 3780)
    ]
    assert reported(TopRounds(1, ceiling=D)(decompose(3 * YEAR))) == [(D, 1095)]


def test_relative_only_sets_the_flag() -> None:
    state = decompose(-5 * DAY)
    result = Relative()(state)

    assert result.relative is True
    assert result.components == state.components
    assert result.is_past is True
    assert state.relative is False


def test_chain_flattens_and_applies_left_to_right() -> None:
    composed = Round(Y) >> (Round(D) >> Relative())

    assert isinstance(composed, Chain)
    assert len(composed.filters) == 3
    assert repr(composed) == "Round(YEAR) >> Round(DAY) >> Relative()"

    state = composed(decompose(45 * YEAR + 4 * DAY))
    assert reported(state) == [(Y, 45), (D, 4)]
    assert state.relative is True


def test_plain_functions_become_filters() -> None:
    def drop_seconds(state: ApproximateState) -> ApproximateState:
        kept = tuple(c for c in state if c.boundary != TimeBoundary.SECOND)
        return replace(state, components=kept)

    composed = chain(TopRounds(2), drop_seconds)
    assert isinstance(composed.filters[1], FunctionFilter)
    assert reported(composed(decompose(2 * DAY + 1))) == [(D, 2)]

    right = drop_seconds >> Relative()
    assert isinstance(right, Chain)
    assert repr(right) == "FunctionFilter(drop_seconds) >> Relative()"


def test_chain_rejects_non_callables() -> None:
    with pytest.raises(TypeError, match="Hint"):
        chain(Round(D), "day")


def test_empty_chain_is_identity() -> None:
    state = decompose(42)
    assert chain()(state) == state


def test_round_half_up_feeds_later_filters() -> None:
    state = Round(D, half_up=True)(decompose(DAY + 23 * HOUR + 40 * MINUTE))

    assert state.seconds == 2 * DAY
    assert state.remainder == 0
    assert reported(Round(Y)(state)) == [(D, 2)]
    assert reported(TopRounds(1, ceiling=H)(state)) == [(H, 48)]
