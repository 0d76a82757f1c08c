"""
Tests for difficulty profiles and level generation.

Tests:
- Profile lookup and validation
- Solvability: undoing the shuffle log restores the sorted seed
- Shuffle rules (anti-undo, step budget)
- Perfect-bottle breaking
"""

import logging
import random

import pytest

from ..config import GeneratorSettings
from ..engine_core.state import LiquidType
from ..generation import (
    DifficultyProfile,
    EASY,
    MEDIUM,
    HARD,
    INSANE,
    LevelGenerator,
    ShuffleMove,
    generate_level,
    profile_for_level,
    shuffle_steps_for_level,
)
from .conftest import R, B, G, make_level


def unwind(level):
    """Replay the shuffle log backwards with each move reversed."""
    level = level.copy()
    for move in reversed(level.shuffle_log):
        unit = level[move.target_index].pop()
        assert unit is move.unit
        level[move.source_index].push(unit)
    return level


def sorted_seed(profile, capacity=4, color_count=6):
    colors = LiquidType.colors()[:color_count]
    layout = [
        tuple([colors[i % len(colors)]] * capacity)
        for i in range(profile.filled_bottles)
    ]
    layout += [()] * profile.empty_bottles
    return tuple(layout)


class TestProfiles:
    """Tests for the difficulty table."""

    @pytest.mark.parametrize("level_index,expected", [
        (1, EASY),
        (5, EASY),
        (6, MEDIUM),
        (15, MEDIUM),
        (16, HARD),
        (30, HARD),
        (31, INSANE),
        (500, INSANE),
    ])
    def test_threshold_lookup(self, level_index, expected):
        assert profile_for_level(level_index) == expected

    def test_shuffle_steps_scale_with_level(self):
        assert shuffle_steps_for_level(EASY, 3) == 16
        assert shuffle_steps_for_level(INSANE, 40) == 160
        assert shuffle_steps_for_level(EASY, 3, steps_per_level=0) == 10

    def test_filled_bottles(self):
        assert EASY.filled_bottles == 3
        assert INSANE.filled_bottles == 11

    def test_too_few_bottles(self):
        with pytest.raises(ValueError):
            DifficultyProfile(name="x", total_bottles=1, empty_bottles=0, shuffle_steps=1)

    def test_empty_must_be_fewer_than_total(self):
        with pytest.raises(ValueError):
            DifficultyProfile(name="x", total_bottles=3, empty_bottles=3, shuffle_steps=1)

    def test_negative_values(self):
        with pytest.raises(ValueError):
            DifficultyProfile(name="x", total_bottles=3, empty_bottles=-1, shuffle_steps=1)
        with pytest.raises(ValueError):
            DifficultyProfile(name="x", total_bottles=3, empty_bottles=1, shuffle_steps=-1)


class TestGeneration:
    """Tests for generated levels."""

    @pytest.mark.parametrize("profile", [EASY, MEDIUM, HARD, INSANE])
    def test_shape_and_conservation(self, generator, profile):
        level = generator.generate(profile, 3, random.Random(5))

        assert len(level) == profile.total_bottles
        assert level.total_units == profile.filled_bottles * 4
        assert all(len(b) <= b.capacity for b in level)
        assert level.profile == profile
        assert level.level_index == 3

    @pytest.mark.parametrize("profile", [EASY, MEDIUM, HARD, INSANE])
    def test_unwinding_restores_seed(self, generator, profile):
        for seed in range(20):
            level = generator.generate(profile, seed + 1, random.Random(seed))
            assert unwind(level).snapshot() == sorted_seed(profile)

    def test_seed_cycles_colors(self):
        settings = GeneratorSettings(capacity=3, color_count=2)
        generator = LevelGenerator(settings=settings)
        level = generator.generate(MEDIUM, 1, random.Random(0))

        assert unwind(level).snapshot() == sorted_seed(MEDIUM, capacity=3, color_count=2)
        assert level.total_units == 15

    def test_same_seed_same_level(self, generator):
        a = generator.generate(HARD, 20, random.Random(42))
        b = generator.generate(HARD, 20, random.Random(42))
        assert a.snapshot() == b.snapshot()
        assert a.shuffle_log == b.shuffle_log

    def test_step_budget(self, generator):
        profile = MEDIUM
        level = generator.generate(profile, 10, random.Random(3))
        shuffle_moves = [m for m in level.shuffle_log if not m.breaking]
        assert len(shuffle_moves) <= shuffle_steps_for_level(profile, 10)

    def test_no_immediate_undo(self, generator):
        for seed in range(20):
            level = generator.generate(HARD, 20, random.Random(seed))
            shuffle_moves = [m for m in level.shuffle_log if not m.breaking]
            for previous, move in zip(shuffle_moves, shuffle_moves[1:]):
                assert move.target_index != previous.source_index

    @pytest.mark.parametrize("profile", [EASY, MEDIUM])
    def test_no_completed_bottles_left(self, generator, profile):
        """With one bottle per color, breaking always finds a safe target."""
        for seed in range(50):
            level = generator.generate(profile, 1, random.Random(seed))
            assert not any(b.is_completed for b in level), level.snapshot()

    def test_under_shuffled_level_is_accepted(self, caplog):
        settings = GeneratorSettings(steps_per_level=0)
        generator = LevelGenerator(settings=settings)
        tiny = DifficultyProfile(name="Tiny", total_bottles=2, empty_bottles=1, shuffle_steps=5)

        with caplog.at_level(logging.WARNING):
            level = generator.generate(tiny, 1, random.Random(0))

        # Units only ever flow 0 -> 1: sending one back to 0 is an undo
        shuffle_moves = [m for m in level.shuffle_log if not m.breaking]
        assert len(shuffle_moves) <= 4
        assert all(m.source_index == 0 for m in shuffle_moves)
        assert level.total_units == 4
        assert "under-shuffled" in caplog.text

    def test_generate_level_helper(self, settings):
        level = generate_level(7, random.Random(1), settings=settings)
        assert level.profile == MEDIUM
        assert level.level_index == 7


class TestBreakPerfectBottles:
    """Tests for the pass that breaks full uniform bottles."""

    def test_moves_top_unit_to_first_bottle_with_room(self, generator):
        level = make_level([R, R, R, R], [B, B, B], [G])
        generator._break_perfect_bottles(level)

        assert level.snapshot() == ((R, R, R), (B, B, B, R), (G,))
        assert level.shuffle_log == [ShuffleMove(0, 1, R, breaking=True)]

    def test_skips_target_it_would_complete(self, generator):
        level = make_level([R, R, R, R], [R, R, R], [])
        generator._break_perfect_bottles(level)

        assert level.snapshot() == ((R, R, R), (R, R, R), (R,))

    def test_no_room_anywhere(self, generator):
        level = make_level([R, R, R, R], [B, B, B, B])
        generator._break_perfect_bottles(level)

        assert level.snapshot() == ((R, R, R, R), (B, B, B, B))
        assert level.shuffle_log == []

    def test_mixed_full_bottle_untouched(self, generator):
        level = make_level([R, B, R, B], [])
        generator._break_perfect_bottles(level)
        assert level.snapshot() == ((R, B, R, B), ())
