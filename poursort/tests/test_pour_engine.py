"""
Tests for the pour engine.

Tests:
- Amount computation
- Legality rules
- Atomicity on failure
- Conservation and capacity over random layouts
"""

import random

import pytest

from ..engine_core.state import Bottle, LiquidType
from ..engine_core.errors import InvalidPour
from ..engine_core.pour import Pour
from ..engine_core.pour_engine import PourEngine, pour, apply_pour
from ..engine_core.evaluator import GameStatus, evaluate
from .conftest import R, B, G, make_level


def random_level(rng: random.Random, bottles: int = 5, capacity: int = 4):
    colors = [R, B, G]
    layout = []
    for _ in range(bottles):
        size = rng.randint(0, capacity)
        layout.append([rng.choice(colors) for _ in range(size)])
    return make_level(*layout, capacity=capacity)


class TestPourScenarios:
    """Worked examples."""

    def test_full_bottle_into_empty(self, red_and_empty, engine):
        """All four reds move and the level is won."""
        level = red_and_empty
        result = engine.pour(level[0], level[1])

        assert result.amount_moved == 4
        assert result.poured_color is R
        assert level[0].is_empty
        assert level[1].units == (R, R, R, R)
        assert evaluate(level) == GameStatus.WON

    def test_run_limited_by_free_space(self, engine):
        a = Bottle(4, [R, B, B, B])
        b = Bottle(4, [B])

        result = engine.pour(a, b)

        assert result.amount_moved == 3
        assert a.units == (R,)
        assert b.units == (B, B, B, B)
        assert result.target_completed

    def test_free_space_limits_amount(self, engine):
        a = Bottle(4, [B, B, B])
        b = Bottle(4, [R, B, B])

        result = engine.pour(a, b)

        assert result.amount_moved == 1
        assert a.units == (B, B)
        assert b.units == (R, B, B, B)
        assert not result.target_completed

    def test_only_top_run_moves(self, engine):
        a = Bottle(4, [B, R, R])
        b = Bottle(4)

        result = engine.pour(a, b)

        assert result.amount_moved == 2
        assert a.units == (B,)
        assert b.units == (R, R)

    def test_result_snapshots(self, engine):
        a = Bottle(4, [G, R])
        b = Bottle(4, [R])

        result = engine.pour(a, b)

        assert result.source_before == (G, R)
        assert result.target_before == (R,)
        assert result.source_after == (G,)
        assert result.target_after == (R, R)


class TestLegality:
    """Each rule rejects with its own reason and leaves bottles untouched."""

    def test_color_mismatch(self, engine):
        a = Bottle(4, [R])
        b = Bottle(4, [B])

        with pytest.raises(InvalidPour) as exc:
            engine.pour(a, b)

        assert exc.value.reason == InvalidPour.COLOR_MISMATCH
        assert a.units == (R,)
        assert b.units == (B,)

    def test_same_bottle(self, engine):
        a = Bottle(4, [R])
        with pytest.raises(InvalidPour) as exc:
            engine.pour(a, a)
        assert exc.value.reason == InvalidPour.SAME_BOTTLE

    def test_equal_contents_are_still_different_bottles(self, engine):
        a = Bottle(4, [R])
        b = Bottle(4, [R])
        result = engine.pour(a, b)
        assert result.amount_moved == 1

    def test_source_empty(self, engine):
        with pytest.raises(InvalidPour) as exc:
            engine.pour(Bottle(4), Bottle(4))
        assert exc.value.reason == InvalidPour.SOURCE_EMPTY

    def test_target_full(self, engine):
        a = Bottle(4, [R])
        b = Bottle(4, [R, R, R, R])
        with pytest.raises(InvalidPour) as exc:
            engine.pour(a, b)
        assert exc.value.reason == InvalidPour.TARGET_FULL
        assert a.units == (R,)

    def test_unknown_index(self, red_and_empty, engine):
        with pytest.raises(InvalidPour) as exc:
            engine.apply(red_and_empty, Pour(0, 5))
        assert exc.value.reason == InvalidPour.NO_SUCH_BOTTLE

    def test_negative_index(self, red_and_empty, engine):
        with pytest.raises(InvalidPour):
            engine.apply(red_and_empty, Pour(-1, 0))


class TestApplyOnLevel:
    """Tests for index-based pours."""

    def test_apply_records_indices(self, red_and_empty):
        result = apply_pour(red_and_empty, Pour(0, 1))
        assert result.source_index == 0
        assert result.target_index == 1
        assert "4 red units" in result.describe()

    def test_module_pour_function(self):
        a = Bottle(4, [G])
        b = Bottle(4)
        assert pour(a, b).amount_moved == 1

    def test_pour_reversed(self):
        assert Pour(1, 3).reversed() == Pour(3, 1)


class TestRandomizedProperties:
    """Rule checks over many seeded random layouts."""

    def test_legality_matches_predicate(self, engine):
        rng = random.Random(99)
        for _ in range(200):
            level = random_level(rng)
            for i in range(len(level)):
                for j in range(len(level)):
                    trial = level.copy()
                    a, b = trial[i], trial[j]
                    expected = (
                        i != j
                        and not a.is_empty
                        and not b.is_full
                        and (b.is_empty or a.top_unit is b.top_unit)
                    )
                    try:
                        engine.pour(a, b)
                        succeeded = True
                    except InvalidPour:
                        succeeded = False
                    assert succeeded == expected, (level.snapshot(), i, j)

    def test_conservation_and_capacity(self, engine):
        rng = random.Random(7)
        for _ in range(100):
            level = random_level(rng, bottles=6)
            total = level.total_units
            for _ in range(30):
                i = rng.randrange(len(level))
                j = rng.randrange(len(level))
                before = level.snapshot()
                try:
                    engine.apply(level, Pour(i, j))
                except InvalidPour:
                    assert level.snapshot() == before
                assert level.total_units == total
                assert all(len(b) <= b.capacity for b in level)
