"""
Move Generator - Enumerates candidate pours for a level.

The move generator is used by:
1. The evaluator, to detect a stuck level
2. Sessions, to offer a hint
3. Tests, to cross-check the engine's legality rules

A candidate pour starts from a bottle that is neither empty nor completed
and ends in a bottle that has room and either is empty or shows the same
top color.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator

from .pour import Pour
from .state import Bottle, Level


def can_pour(source: Bottle, target: Bottle) -> bool:
    """Candidate check for two distinct bottles."""
    if target.is_full:
        return False
    if target.is_empty:
        return True
    return source.top_unit is target.top_unit


@dataclass
class MoveGenerator:
    """Generates candidate pours for the current level."""

    def iter_moves(self, level: Level) -> Iterator[Pour]:
        for i, source in enumerate(level):
            if source.is_empty or source.is_completed:
                continue
            for j, target in enumerate(level):
                if i == j:
                    continue
                if can_pour(source, target):
                    yield Pour(source_index=i, target_index=j)

    def generate(self, level: Level) -> list[Pour]:
        """All candidate pours, ordered by source then target index."""
        return list(self.iter_moves(level))

    def has_any_move(self, level: Level) -> bool:
        return next(self.iter_moves(level), None) is not None


def legal_pours(level: Level) -> list[Pour]:
    """Convenience function to list candidate pours."""
    return MoveGenerator().generate(level)
