"""
Game Loop - Turns bottle clicks into pours.

The loop:
1. Player clicks a bottle with liquid that is not completed -> selected
2. Player clicks the same bottle -> deselected
3. Player clicks another bottle -> pour attempt
   - Illegal pour -> deselect, nothing else happens
   - Legal pour -> level is re-evaluated
4. Won or stuck -> clicks are ignored until restart / next level

Clicking on nothing (None) deselects.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import TYPE_CHECKING

from ..engine_core.errors import InvalidPour
from ..engine_core.evaluator import GameStatus

if TYPE_CHECKING:
    from ..engine_core.pour import PourResult
    from .manager import PuzzleSession

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_SELECTION = "waiting_selection"
    BOTTLE_SELECTED = "bottle_selected"
    WON = "won"
    STUCK = "stuck"


@dataclass
class TurnResult:
    """
    Result of processing one click.

    Presentation layers use it to lift/drop bottles and start animations.
    """
    loop_state: LoopState
    selected: int | None = None

    # Set when a pour happened
    pour: PourResult | None = None
    status: GameStatus | None = None

    # Set when a pour was rejected
    rejected_reason: str | None = None

    messages: list[str] = field(default_factory=list)

    @property
    def poured(self) -> bool:
        return self.pour is not None


class GameLoop:
    """
    Click-driven loop over one session.

    Usage:
        loop = GameLoop(session)
        result = loop.click(2)   # select bottle 2
        result = loop.click(4)   # pour 2 -> 4
        if result.loop_state == LoopState.WON:
            session.next_level()
            loop.reset()
    """

    def __init__(self, session: PuzzleSession):
        self.session = session
        self.selected: int | None = None
        self.state = LoopState.WAITING_SELECTION
        self._sync_with_status()

    def reset(self):
        """Call after restart() / next_level()."""
        self.selected = None
        self.state = LoopState.WAITING_SELECTION
        self._sync_with_status()

    def click(self, index: int | None) -> TurnResult:
        if self.state in {LoopState.WON, LoopState.STUCK}:
            return self._result(messages=["Level is over"])

        level = self.session.level
        if index is None or level is None or not 0 <= index < len(level):
            return self._deselect()

        if self.selected is None:
            bottle = level[index]
            if bottle.is_empty or bottle.is_completed:
                return self._result()
            self.selected = index
            self.state = LoopState.BOTTLE_SELECTED
            return self._result()

        if self.selected == index:
            return self._deselect()

        return self._pour(self.selected, index)

    def _pour(self, source: int, target: int) -> TurnResult:
        try:
            result = self.session.pour(source, target)
        except InvalidPour as e:
            logger.debug("Invalid move %d -> %d: %s", source, target, e)
            turn = self._deselect()
            turn.rejected_reason = e.reason
            turn.messages.append(str(e))
            return turn

        self.selected = None
        status = self.session.status
        self._sync_with_status()
        if status == GameStatus.WON:
            logger.info("Level %d won", self.session.level_index)
        elif status == GameStatus.STUCK:
            logger.info("Level %d stuck - no moves left", self.session.level_index)

        return self._result(pour=result, status=status, messages=[result.describe()])

    def _deselect(self) -> TurnResult:
        self.selected = None
        self.state = LoopState.WAITING_SELECTION
        return self._result()

    def _sync_with_status(self):
        status = self.session.status
        if status == GameStatus.WON:
            self.state = LoopState.WON
        elif status == GameStatus.STUCK:
            self.state = LoopState.STUCK
        elif self.selected is None:
            self.state = LoopState.WAITING_SELECTION

    def _result(self, **kwargs) -> TurnResult:
        return TurnResult(loop_state=self.state, selected=self.selected, **kwargs)
