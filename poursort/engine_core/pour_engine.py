"""
Pour Engine - Validates and executes pours.

The engine is the single point of state mutation during play.
All pours must go through PourEngine.pour() / apply().

Design principles:
- Validates before applying
- Computes the amount itself: min(top run, free space)
- Atomic: either every unit moves or none do
- Raises InvalidPour for illegal requests
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .errors import InvalidPour
from .pour import Pour, PourResult
from .state import Bottle, Level

logger = logging.getLogger(__name__)


@dataclass
class PourEngine:
    """
    Applies pours to bottles.

    Stateless - all state lives in the bottles.
    """

    def validate(self, source: Bottle, target: Bottle) -> int:
        """
        Check the legality rules and return the amount that would move.

        Raises InvalidPour if any rule fails.
        """
        if source is target:
            raise InvalidPour(InvalidPour.SAME_BOTTLE, "Cannot pour a bottle into itself")
        if source.is_empty:
            raise InvalidPour(InvalidPour.SOURCE_EMPTY, "Source bottle is empty")
        if target.is_full:
            raise InvalidPour(InvalidPour.TARGET_FULL, "Target bottle is full")
        if not target.is_empty and source.top_unit is not target.top_unit:
            raise InvalidPour(
                InvalidPour.COLOR_MISMATCH,
                f"Cannot pour {source.top_unit.value} onto {target.top_unit.value}",
            )

        amount = min(source.top_run_length(), target.free_space)
        if amount <= 0:
            raise InvalidPour(InvalidPour.NOTHING_TO_MOVE, "Nothing to pour")
        return amount

    def pour(self, source: Bottle, target: Bottle) -> PourResult:
        """
        Pour the top run of source into target.

        Mutates both bottles in place and returns what happened.
        """
        amount = self.validate(source, target)
        return self._transfer(source, target, amount)

    def apply(self, level: Level, pour: Pour) -> PourResult:
        """Resolve bottle indices on a level and pour."""
        source = self._resolve(level, pour.source_index)
        target = self._resolve(level, pour.target_index)
        try:
            amount = self.validate(source, target)
        except InvalidPour as e:
            logger.debug("Rejected pour %s: %s", pour, e.reason)
            raise
        return self._transfer(
            source, target, amount,
            source_index=pour.source_index,
            target_index=pour.target_index,
        )

    def _resolve(self, level: Level, index: int) -> Bottle:
        if not 0 <= index < len(level):
            raise InvalidPour(InvalidPour.NO_SUCH_BOTTLE, f"No bottle at index {index}")
        return level[index]

    def _transfer(
        self,
        source: Bottle,
        target: Bottle,
        amount: int,
        source_index: int | None = None,
        target_index: int | None = None,
    ) -> PourResult:
        color = source.top_unit
        source_before = source.snapshot()
        target_before = target.snapshot()

        # validate() guarantees amount <= run length and free space
        for _ in range(amount):
            target.push(source.pop())

        return PourResult(
            amount_moved=amount,
            poured_color=color,
            source_index=source_index,
            target_index=target_index,
            source_before=source_before,
            target_before=target_before,
            source_after=source.snapshot(),
            target_after=target.snapshot(),
            target_completed=target.is_completed,
        )


def pour(source: Bottle, target: Bottle) -> PourResult:
    """Convenience function to pour between two bottles."""
    return PourEngine().pour(source, target)


def apply_pour(level: Level, pour: Pour) -> PourResult:
    """Convenience function to apply a pour to a level."""
    return PourEngine().apply(level, pour)
