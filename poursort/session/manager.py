"""
Session Manager - Creates and manages puzzle sessions.

LIFECYCLE:
1. Host creates a session (optionally seeded, with a progress store)
2. start() loads the level index and generates the level
3. During play:
   - Pours go through the session's engine, one at a time
   - The evaluator classifies the level after every pour
4. Won -> next_level() bumps and saves the index, then regenerates
5. Won or stuck -> restart() regenerates the same level index

One session per running puzzle; nothing is shared between sessions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import time
import uuid

from ..config import GeneratorSettings, get_settings
from ..engine_core.evaluator import GameStateEvaluator, GameStatus
from ..engine_core.move_generator import MoveGenerator
from ..engine_core.pour import Pour, PourResult
from ..engine_core.pour_engine import PourEngine
from ..engine_core.state import Level
from ..generation.generator import LevelGenerator
from .progress import InMemoryProgressStore, ProgressStore

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a puzzle session."""
    CREATED = "created"  # Session created, no level yet
    ACTIVE = "active"  # Level in progress
    WON = "won"
    STUCK = "stuck"
    ENDED = "ended"  # Host closed the session


_STATUS_TO_STATE = {
    GameStatus.WON: SessionState.WON,
    GameStatus.STUCK: SessionState.STUCK,
    GameStatus.PLAYABLE: SessionState.ACTIVE,
}


@dataclass
class PuzzleSession:
    """
    A single running puzzle.

    Contains:
    - The current Level (authoritative state)
    - The engine, evaluator and generator working on it
    - The random source and progress store
    """
    session_id: str
    created_at: float
    generator: LevelGenerator
    progress: ProgressStore
    rng: random.Random

    engine: PourEngine = field(default_factory=PourEngine)
    evaluator: GameStateEvaluator = field(default_factory=GameStateEvaluator)
    move_generator: MoveGenerator = field(default_factory=MoveGenerator)

    state: SessionState = SessionState.CREATED
    level: Level | None = None
    status: GameStatus | None = None
    pour_count: int = 0
    history: list[PourResult] = field(default_factory=list)

    @property
    def level_index(self) -> int:
        if self.level is not None:
            return self.level.level_index
        return self.progress.load_level()

    def is_active(self) -> bool:
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    def start(self) -> Level:
        """Generate the level the progress store points at."""
        return self._load(self.progress.load_level())

    def restart(self) -> Level:
        """Replace the level with a fresh layout for the same index."""
        return self._load(self.level_index)

    def next_level(self) -> Level:
        """Advance the saved level index and generate it."""
        level_index = self.level_index + 1
        self.progress.save_level(level_index)
        return self._load(level_index)

    def pour(self, source_index: int, target_index: int) -> PourResult:
        """
        Pour between two bottles of the current level, then re-evaluate.

        Raises InvalidPour if the pour is illegal; the level is untouched.
        """
        level = self._require_level()
        result = self.engine.apply(level, Pour(source_index, target_index))
        self.pour_count += 1
        self.history.append(result)
        self.evaluate()
        return result

    def evaluate(self) -> GameStatus:
        level = self._require_level()
        self.status = self.evaluator.evaluate(level)
        self.state = _STATUS_TO_STATE[self.status]
        return self.status

    def hint(self) -> Pour | None:
        """First candidate pour, if any. Not a solver."""
        level = self._require_level()
        return next(self.move_generator.iter_moves(level), None)

    def _load(self, level_index: int) -> Level:
        self.level = self.generator.generate_for_level(level_index, self.rng)
        self.pour_count = 0
        self.history = []
        self.evaluate()
        logger.info("Session %s loaded level %d", self.session_id, level_index)
        return self.level

    def _require_level(self) -> Level:
        if self.level is None:
            raise RuntimeError("Session has no level - call start() first")
        return self.level


class SessionManager:
    """
    Manages puzzle sessions.

    Responsibilities:
    - Create sessions with their own generator, random source and store
    - Track active sessions
    - Drop ended sessions
    """

    def __init__(self, settings: GeneratorSettings | None = None):
        self.settings = settings or get_settings()
        self._sessions: dict[str, PuzzleSession] = {}

    def create_session(
        self,
        seed: int | None = None,
        progress: ProgressStore | None = None,
        rng: random.Random | None = None,
        start: bool = True,
    ) -> PuzzleSession:
        """
        Create a new puzzle session.

        Args:
            seed: Seed for the session's random source
            progress: Where the level index is read and saved
            rng: Explicit random source (overrides seed)
            start: Generate the first level right away

        Returns:
            New PuzzleSession
        """
        session = PuzzleSession(
            session_id=str(uuid.uuid4()),
            created_at=time.time(),
            generator=LevelGenerator(settings=self.settings),
            progress=progress or InMemoryProgressStore(),
            rng=rng or random.Random(seed),
        )
        self._sessions[session.session_id] = session
        if start:
            session.start()
        return session

    def get_session(self, session_id: str) -> PuzzleSession | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str):
        """Remove a session and drop its level."""
        session = self._sessions.pop(session_id, None)
        if session:
            session.state = SessionState.ENDED
            session.level = None
            session.history.clear()

    def list_active_sessions(self) -> list[str]:
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def list_sessions(self) -> list[str]:
        return list(self._sessions)
