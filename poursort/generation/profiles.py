"""
Difficulty Profiles - Level size and shuffle depth by level index.

Profiles are looked up by ascending thresholds on the level index;
the shuffle depth grows by a fixed number of steps per level on top
of the profile's base.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class DifficultyProfile:
    """Configuration record consumed by the level generator."""
    name: str
    total_bottles: int
    empty_bottles: int
    shuffle_steps: int

    def __post_init__(self):
        if self.total_bottles < 2:
            raise ValueError("total_bottles must be >= 2")
        if self.empty_bottles < 0:
            raise ValueError("empty_bottles must be >= 0")
        if self.empty_bottles >= self.total_bottles:
            raise ValueError("empty_bottles must be < total_bottles")
        if self.shuffle_steps < 0:
            raise ValueError("shuffle_steps must be >= 0")

    @property
    def filled_bottles(self) -> int:
        return self.total_bottles - self.empty_bottles


EASY = DifficultyProfile(name="Easy", total_bottles=5, empty_bottles=2, shuffle_steps=10)
MEDIUM = DifficultyProfile(name="Medium", total_bottles=7, empty_bottles=2, shuffle_steps=25)
HARD = DifficultyProfile(name="Hard", total_bottles=9, empty_bottles=2, shuffle_steps=50)
INSANE = DifficultyProfile(name="Insane", total_bottles=12, empty_bottles=1, shuffle_steps=80)

# (highest level index, profile); the last entry catches everything above
DEFAULT_PROFILES: list[tuple[int | None, DifficultyProfile]] = [
    (5, EASY),
    (15, MEDIUM),
    (30, HARD),
    (None, INSANE),
]


def profile_for_level(
    level_index: int,
    table: list[tuple[int | None, DifficultyProfile]] | None = None,
) -> DifficultyProfile:
    """Pick the first profile whose threshold covers level_index."""
    table = table or DEFAULT_PROFILES
    for threshold, profile in table:
        if threshold is None or level_index <= threshold:
            return profile
    return table[-1][1]


def shuffle_steps_for_level(
    profile: DifficultyProfile,
    level_index: int,
    steps_per_level: int = 2,
) -> int:
    """Base steps plus steps_per_level for every level index."""
    return profile.shuffle_steps + steps_per_level * level_index
