"""
Engine Core - Bottle state, pour rules and level evaluation.

The engine is the runtime that:
1. Holds bottles and levels
2. Validates and executes pours
3. Enumerates candidate pours
4. Classifies a level as won, stuck or playable
"""

from .state import LiquidType, Bottle, Level
from .errors import PourSortError, InvalidPour, BottleError, EmptyBottlePop, FullBottlePush
from .pour import Pour, PourResult
from .pour_engine import PourEngine, pour, apply_pour
from .move_generator import MoveGenerator, can_pour, legal_pours
from .evaluator import GameStatus, GameStateEvaluator, evaluate

__all__ = [
    "LiquidType",
    "Bottle",
    "Level",
    "PourSortError",
    "InvalidPour",
    "BottleError",
    "EmptyBottlePop",
    "FullBottlePush",
    "Pour",
    "PourResult",
    "PourEngine",
    "pour",
    "apply_pour",
    "MoveGenerator",
    "can_pour",
    "legal_pours",
    "GameStatus",
    "GameStateEvaluator",
    "evaluate",
]
