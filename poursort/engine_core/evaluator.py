"""
Game State Evaluator - Classifies a level as won, stuck or playable.

Won is checked before Stuck: a level where every bottle is empty or
completed is Won even if no pour is left.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .move_generator import MoveGenerator
from .state import Level


class GameStatus(Enum):
    """Outcome of evaluating a level."""
    WON = "won"
    STUCK = "stuck"
    PLAYABLE = "playable"


@dataclass
class GameStateEvaluator:
    """Evaluates a level. Never mutates it."""
    move_generator: MoveGenerator = field(default_factory=MoveGenerator)

    def is_won(self, level: Level) -> bool:
        for bottle in level:
            if bottle.is_empty:
                continue
            if not bottle.is_completed:
                return False
        return True

    def is_stuck(self, level: Level) -> bool:
        return not self.move_generator.has_any_move(level)

    def evaluate(self, level: Level) -> GameStatus:
        if self.is_won(level):
            return GameStatus.WON
        if self.is_stuck(level):
            return GameStatus.STUCK
        return GameStatus.PLAYABLE


def evaluate(level: Level) -> GameStatus:
    """Convenience function to classify a level."""
    return GameStateEvaluator().evaluate(level)
