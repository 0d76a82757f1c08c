"""
Level Generator - Builds solvable levels by reverse shuffling.

This module handles:
- Seeding fully sorted bottles (one color per filled bottle)
- Scrambling them with random single-unit moves
- Breaking any bottle the scramble left full and uniform

Every unit move is logged on the level, so replaying the log backwards
restores the sorted seed. That is what makes every level solvable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from ..config import GeneratorSettings, get_settings
from ..engine_core.state import Bottle, Level, LiquidType
from .profiles import (
    DEFAULT_PROFILES,
    DifficultyProfile,
    profile_for_level,
    shuffle_steps_for_level,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShuffleMove:
    """One raw unit move made during generation (not a player pour)."""
    source_index: int
    target_index: int
    unit: LiquidType
    breaking: bool = False  # made by the perfect-bottle pass


@dataclass
class LevelGenerator:
    """
    Generates levels from a difficulty profile.

    The random source is injectable; a seeded random.Random reproduces
    the same level every time.
    """
    settings: GeneratorSettings = field(default_factory=get_settings)
    profiles: list[tuple[int | None, DifficultyProfile]] = field(
        default_factory=lambda: list(DEFAULT_PROFILES)
    )

    def profile_for(self, level_index: int) -> DifficultyProfile:
        return profile_for_level(level_index, self.profiles)

    def generate(
        self,
        profile: DifficultyProfile,
        level_index: int,
        rng: random.Random | None = None,
    ) -> Level:
        """
        Generate a level for the given profile and level index.

        Args:
            profile: Bottle counts and base shuffle depth
            level_index: 1-based level number, deepens the shuffle
            rng: Random source (a fresh unseeded one if not provided)

        Returns:
            Shuffled Level with its shuffle log
        """
        rng = rng or random.Random()
        capacity = self.settings.capacity
        steps = shuffle_steps_for_level(profile, level_index, self.settings.steps_per_level)

        level = Level(
            bottles=self._seed_bottles(profile, capacity),
            capacity=capacity,
            level_index=level_index,
            profile=profile,
        )

        accepted, attempts = self._shuffle(level, steps, rng)
        self._break_perfect_bottles(level)

        if accepted < steps:
            logger.warning(
                "Level %d under-shuffled: %d of %d steps in %d attempts",
                level_index, accepted, steps, attempts,
            )
        logger.info(
            "Level %d (%s) generated with %d shuffle steps",
            level_index, profile.name, accepted,
        )
        return level

    def generate_for_level(self, level_index: int, rng: random.Random | None = None) -> Level:
        """Look up the profile for level_index and generate."""
        return self.generate(self.profile_for(level_index), level_index, rng)

    def _colors(self) -> list[LiquidType]:
        return LiquidType.colors()[: self.settings.color_count]

    def _seed_bottles(self, profile: DifficultyProfile, capacity: int) -> list[Bottle]:
        colors = self._colors()
        bottles = []
        for i in range(profile.filled_bottles):
            color = colors[i % len(colors)]
            bottles.append(Bottle(capacity, [color] * capacity))
        for _ in range(profile.empty_bottles):
            bottles.append(Bottle(capacity))
        return bottles

    def _shuffle(self, level: Level, steps: int, rng: random.Random) -> tuple[int, int]:
        """
        Make up to `steps` random unit moves.

        Rejected draws still use up the attempt budget, which is
        steps * attempt_factor. Returns (accepted, attempts).
        """
        max_attempts = steps * self.settings.attempt_factor
        count = len(level)
        accepted = 0
        attempts = 0
        last_source = -1

        while accepted < steps and attempts < max_attempts:
            attempts += 1
            source = rng.randrange(count)
            target = rng.randrange(count)

            if source == target:
                continue
            if level[source].is_empty:
                continue
            if level[target].is_full:
                continue
            # Don't send a unit straight back where the last one came from
            if target == last_source:
                continue

            unit = level[source].pop()
            level[target].push(unit)
            level.shuffle_log.append(ShuffleMove(source, target, unit))

            last_source = source
            accepted += 1

        return accepted, attempts

    def _break_perfect_bottles(self, level: Level) -> None:
        """
        Single forward pass: move the top unit out of every full uniform bottle.

        The receiving bottle is the first other bottle with room that the
        unit would not complete, else the first other bottle with room.
        Bottles are not re-scanned after the pass.
        """
        for i, bottle in enumerate(level):
            if not (bottle.is_full and bottle.is_uniform()):
                continue
            target_index = self._break_target(level, i)
            if target_index is None:
                continue
            unit = bottle.pop()
            level[target_index].push(unit)
            level.shuffle_log.append(ShuffleMove(i, target_index, unit, breaking=True))
            logger.debug("Broke perfect bottle %d into bottle %d", i, target_index)

    def _break_target(self, level: Level, index: int) -> int | None:
        unit = level[index].top_unit
        fallback = None
        for j, other in enumerate(level):
            if j == index or other.is_full:
                continue
            if fallback is None:
                fallback = j
            would_complete = other.free_space == 1 and all(u is unit for u in other.units)
            if not would_complete:
                return j
        return fallback


def generate_level(
    level_index: int,
    rng: random.Random | None = None,
    settings: GeneratorSettings | None = None,
) -> Level:
    """Convenience function to generate the level for a level index."""
    generator = LevelGenerator(settings=settings or get_settings())
    return generator.generate_for_level(level_index, rng)
