"""
Session Module - Runs one puzzle at a time.

A session represents one player's run through the levels:
- Created by the host application
- Holds the current Level and the components that act on it
- Generates a fresh Level on restart or next level
- Dropped when the host closes it

The only thing that outlives a session is the level index,
kept by a ProgressStore the host provides.
"""

from .manager import SessionManager, PuzzleSession, SessionState
from .game_loop import GameLoop, LoopState, TurnResult
from .progress import ProgressStore, InMemoryProgressStore

__all__ = [
    "SessionManager",
    "PuzzleSession",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "ProgressStore",
    "InMemoryProgressStore",
]
