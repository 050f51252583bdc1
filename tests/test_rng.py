import pytest

from mazegen.dungeon import InternalInvariantViolation, RandomSource, RngExhausted
from tests.dungeon_test_utils import ExplodingSource, OutOfRangeSource, ScriptedSource


def test_randint_is_inclusive():
    rng = RandomSource(seed=1)
    seen = {rng.randint(1, 3) for _ in range(300)}
    assert seen == {1, 2, 3}


def test_empty_range_is_a_bug():
    with pytest.raises(InternalInvariantViolation):
        RandomSource(seed=1).randint(5, 4)


def test_source_failure_surfaces_as_rng_exhausted():
    with pytest.raises(RngExhausted) as exc:
        RandomSource(ExplodingSource()).randint(0, 10)
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_out_of_range_value_rejected():
    with pytest.raises(RngExhausted):
        RandomSource(OutOfRangeSource()).randint(0, 10)


def test_choice_on_empty_sequence():
    with pytest.raises(InternalInvariantViolation):
        RandomSource(seed=1).choice([])


def test_weighted_choice_walks_cumulative_weights():
    src = ScriptedSource([1, 2, 3, 4, 6])
    rng = RandomSource(src)
    picks = [rng.weighted_choice(["a", "b", "c"], [1, 2, 3]) for _ in range(5)]
    assert picks == ["a", "b", "b", "c", "c"]
    assert src.calls == [(1, 6)] * 5


def test_odd_and_even_rejection_sampling():
    src = ScriptedSource([4, 5, 3, 2])
    rng = RandomSource(src)
    assert rng.odd_in(3, 7) == 5
    assert rng.even_in(0, 10) == 2
    assert len(src.calls) == 4
