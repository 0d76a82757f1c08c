"""
Pytest fixtures for PourSort tests.
"""

import random

import pytest

from ..config import GeneratorSettings
from ..engine_core.state import Bottle, Level, LiquidType
from ..engine_core.pour_engine import PourEngine
from ..engine_core.evaluator import GameStateEvaluator
from ..generation import LevelGenerator
from ..session import SessionManager, InMemoryProgressStore

R = LiquidType.RED
B = LiquidType.BLUE
G = LiquidType.GREEN
Y = LiquidType.YELLOW


def make_level(*layout, capacity=4, **kwargs) -> Level:
    """Build a level from bottom-to-top unit lists."""
    return Level.from_units([list(units) for units in layout], capacity=capacity, **kwargs)


@pytest.fixture
def settings() -> GeneratorSettings:
    """Default settings, independent of the environment."""
    return GeneratorSettings(
        capacity=4,
        color_count=6,
        attempt_factor=10,
        steps_per_level=2,
        log_level="WARNING",
    )


@pytest.fixture
def generator(settings) -> LevelGenerator:
    return LevelGenerator(settings=settings)


@pytest.fixture
def engine() -> PourEngine:
    return PourEngine()


@pytest.fixture
def evaluator() -> GameStateEvaluator:
    return GameStateEvaluator()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def manager(settings) -> SessionManager:
    return SessionManager(settings=settings)


@pytest.fixture
def red_and_empty() -> Level:
    """A = [R,R,R,R], B = empty."""
    return make_level([R, R, R, R], [])


@pytest.fixture
def almost_solved() -> Level:
    """One pour away from won: [R,R,R] + [R], plus a full blue bottle."""
    return make_level([R, R, R], [R], [B, B, B, B])


@pytest.fixture
def stuck_level() -> Level:
    """Every bottle full and mixed - no pour is possible."""
    return make_level([R, B, R, B], [B, R, B, R], capacity=4)


@pytest.fixture
def progress() -> InMemoryProgressStore:
    return InMemoryProgressStore(1)


@pytest.fixture
def bottle() -> Bottle:
    return Bottle(4, [R, B, B])
