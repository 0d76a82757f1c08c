"""
Generation - Difficulty profiles and the reverse-shuffle level generator.
"""

from .profiles import (
    DifficultyProfile,
    DEFAULT_PROFILES,
    EASY,
    MEDIUM,
    HARD,
    INSANE,
    profile_for_level,
    shuffle_steps_for_level,
)
from .generator import LevelGenerator, ShuffleMove, generate_level

__all__ = [
    "DifficultyProfile",
    "DEFAULT_PROFILES",
    "EASY",
    "MEDIUM",
    "HARD",
    "INSANE",
    "profile_for_level",
    "shuffle_steps_for_level",
    "LevelGenerator",
    "ShuffleMove",
    "generate_level",
]
