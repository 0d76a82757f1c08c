"""
Puzzle Service - Plain-data layer between front-ends and the engine.

The service:
1. Creates and tracks sessions
2. Routes clicks and pours to each session's game loop
3. Formats everything as pydantic models

This layer is framework-agnostic: a game client, a web handler or the
CLI can all sit on top of it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

from ..engine_core.errors import InvalidPour
from ..engine_core.evaluator import GameStatus
from ..session import SessionManager, PuzzleSession, GameLoop, TurnResult, ProgressStore
from .schemas import (
    ErrorCode,
    ErrorResponse,
    HintInfo,
    LevelSnapshot,
    PourEvent,
    SessionResponse,
    StatusValue,
    TurnResponse,
)


def _status_value(status: GameStatus | None) -> StatusValue | None:
    return StatusValue(status.value) if status else None


@dataclass
class PuzzleService:
    """
    Main service for front-ends.

    Usage:
        service = PuzzleService()
        session = service.create_session(seed=7)
        turn = service.click(session.session_id, 0)
        turn = service.click(session.session_id, 3)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_session(
        self,
        seed: int | None = None,
        progress: ProgressStore | None = None,
    ) -> SessionResponse:
        session = self.session_manager.create_session(seed=seed, progress=progress)
        self._game_loops[session.session_id] = GameLoop(session)
        return self._session_response(session)

    def get_session(self, session_id: str) -> Union[SessionResponse, ErrorResponse]:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_response(session)

    def get_level(self, session_id: str) -> Union[LevelSnapshot, ErrorResponse]:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        if session.level is None:
            return ErrorResponse(error_code=ErrorCode.NO_LEVEL, message="No level generated")
        return LevelSnapshot.from_level(session.level, _status_value(session.status))

    def click(self, session_id: str, index: int | None) -> Union[TurnResponse, ErrorResponse]:
        loop = self._game_loops.get(session_id)
        if not loop:
            return self._not_found(session_id)
        return self._turn_response(session_id, loop.click(index))

    def pour(
        self,
        session_id: str,
        source_index: int,
        target_index: int,
    ) -> Union[TurnResponse, ErrorResponse]:
        """Pour directly, without going through selection."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        try:
            result = session.pour(source_index, target_index)
        except InvalidPour as e:
            return ErrorResponse(
                error_code=ErrorCode.INVALID_POUR,
                message=str(e),
                details={"reason": e.reason},
            )
        loop = self._game_loops[session_id]
        loop.reset()
        return TurnResponse(
            session_id=session_id,
            loop_state=loop.state.value,
            pour=PourEvent.from_result(result),
            status=_status_value(session.status),
            messages=[result.describe()],
        )

    def hint(self, session_id: str) -> Union[HintInfo, ErrorResponse, None]:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        move = session.hint()
        if move is None:
            return None
        return HintInfo(source_index=move.source_index, target_index=move.target_index)

    def restart(self, session_id: str) -> Union[SessionResponse, ErrorResponse]:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.restart()
        self._game_loops[session_id].reset()
        return self._session_response(session)

    def next_level(self, session_id: str) -> Union[SessionResponse, ErrorResponse]:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.next_level()
        self._game_loops[session_id].reset()
        return self._session_response(session)

    def end_session(self, session_id: str) -> bool:
        if not self.session_manager.get_session(session_id):
            return False
        self.session_manager.end_session(session_id)
        self._game_loops.pop(session_id, None)
        return True

    def _session_response(self, session: PuzzleSession) -> SessionResponse:
        level = None
        if session.level is not None:
            level = LevelSnapshot.from_level(session.level, _status_value(session.status))
        return SessionResponse(
            session_id=session.session_id,
            state=session.state.value,
            level=level,
            pour_count=session.pour_count,
            created_at=session.created_at,
        )

    def _turn_response(self, session_id: str, turn: TurnResult) -> TurnResponse:
        return TurnResponse(
            session_id=session_id,
            loop_state=turn.loop_state.value,
            selected=turn.selected,
            pour=PourEvent.from_result(turn.pour) if turn.pour else None,
            status=_status_value(turn.status),
            rejected_reason=turn.rejected_reason,
            messages=turn.messages,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error_code=ErrorCode.SESSION_NOT_FOUND,
            message=f"Session {session_id} not found",
        )
