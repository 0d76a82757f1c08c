"""
API Module - Plain-data surface for front-ends.

Components:
- schemas: Pydantic snapshots and responses
- service: PuzzleService, routes calls to sessions

Usage:
    from poursort.api import PuzzleService

    service = PuzzleService()
    session = service.create_session(seed=1)
    level = service.get_level(session.session_id)
"""

from .schemas import (
    StatusValue,
    ErrorCode,
    ProfileInfo,
    BottleSnapshot,
    LevelSnapshot,
    PourEvent,
    HintInfo,
    SessionResponse,
    TurnResponse,
    ErrorResponse,
)
from .service import PuzzleService

__all__ = [
    "StatusValue",
    "ErrorCode",
    "ProfileInfo",
    "BottleSnapshot",
    "LevelSnapshot",
    "PourEvent",
    "HintInfo",
    "SessionResponse",
    "TurnResponse",
    "ErrorResponse",
    "PuzzleService",
]
