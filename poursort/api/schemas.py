"""
Pydantic Schemas - Plain-data views handed to presentation layers.

Renderers, sound and UI code only ever see these models; they never get a
live Bottle. Every model serializes with model_dump() / model_dump_json().

Error Codes:
- INVALID_POUR: The requested pour breaks a rule (expected during play)
- SESSION_NOT_FOUND: Session does not exist or has ended
- NO_LEVEL: Session has not generated a level yet
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..engine_core.pour import PourResult
from ..engine_core.state import Bottle, Level


# =============================================================================
# Enums
# =============================================================================

class StatusValue(str, Enum):
    """Evaluation outcome."""
    WON = "won"
    STUCK = "stuck"
    PLAYABLE = "playable"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_POUR = "INVALID_POUR"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    NO_LEVEL = "NO_LEVEL"


# =============================================================================
# Shared Models
# =============================================================================

class ProfileInfo(BaseModel):
    """Difficulty profile, so callers can size and lay out bottles."""
    name: str
    total_bottles: int
    empty_bottles: int
    shuffle_steps: int

    model_config = {"from_attributes": True, "frozen": True}


class BottleSnapshot(BaseModel):
    """One bottle's contents, bottom-to-top."""
    index: int
    capacity: int
    units: list[str] = Field(default_factory=list, description="Colors bottom-to-top")
    top_unit: Optional[str] = None
    free_space: int
    top_run_length: int = 0
    is_empty: bool
    is_full: bool
    is_completed: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_bottle(cls, index: int, bottle: Bottle) -> BottleSnapshot:
        return cls(
            index=index,
            capacity=bottle.capacity,
            units=[u.value for u in bottle.units],
            top_unit=None if bottle.is_empty else bottle.top_unit.value,
            free_space=bottle.free_space,
            top_run_length=bottle.top_run_length(),
            is_empty=bottle.is_empty,
            is_full=bottle.is_full,
            is_completed=bottle.is_completed,
        )


class LevelSnapshot(BaseModel):
    """The whole level as seen by a renderer."""
    level_index: int
    capacity: int
    profile: Optional[ProfileInfo] = None
    bottles: list[BottleSnapshot] = Field(default_factory=list)
    status: Optional[StatusValue] = None

    model_config = {"frozen": True}

    @classmethod
    def from_level(cls, level: Level, status: Optional[StatusValue] = None) -> LevelSnapshot:
        return cls(
            level_index=level.level_index,
            capacity=level.capacity,
            profile=ProfileInfo.model_validate(level.profile) if level.profile else None,
            bottles=[BottleSnapshot.from_bottle(i, b) for i, b in enumerate(level)],
            status=status,
        )


class PourEvent(BaseModel):
    """What a pour did, for animating it."""
    source_index: Optional[int] = None
    target_index: Optional[int] = None
    amount_moved: int
    poured_color: str
    source_before: list[str] = Field(default_factory=list)
    target_before: list[str] = Field(default_factory=list)
    source_after: list[str] = Field(default_factory=list)
    target_after: list[str] = Field(default_factory=list)
    target_completed: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_result(cls, result: PourResult) -> PourEvent:
        return cls(
            source_index=result.source_index,
            target_index=result.target_index,
            amount_moved=result.amount_moved,
            poured_color=result.poured_color.value,
            source_before=[u.value for u in result.source_before],
            target_before=[u.value for u in result.target_before],
            source_after=[u.value for u in result.source_after],
            target_after=[u.value for u in result.target_after],
            target_completed=result.target_completed,
        )


class HintInfo(BaseModel):
    """A candidate pour."""
    source_index: int
    target_index: int


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    """Session summary."""
    session_id: str
    state: str
    level: Optional[LevelSnapshot] = None
    pour_count: int = 0
    created_at: float
    api_version: str = "v1"


class TurnResponse(BaseModel):
    """Result of a click or a direct pour."""
    session_id: str
    loop_state: str
    selected: Optional[int] = None
    pour: Optional[PourEvent] = None
    status: Optional[StatusValue] = None
    rejected_reason: Optional[str] = None
    messages: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response."""
    error_code: ErrorCode
    message: str
    details: Optional[dict[str, str]] = None
