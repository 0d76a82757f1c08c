"""
Pour System - Pour requests and results.

A Pour names two bottles by index. The amount is never part of the
request: the engine computes it and reports it in PourResult, so
presentation layers read amount_moved instead of guessing.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import LiquidType


@dataclass(frozen=True)
class Pour:
    """A request to pour from one bottle into another."""
    source_index: int
    target_index: int

    def reversed(self) -> Pour:
        return Pour(source_index=self.target_index, target_index=self.source_index)

    def __str__(self) -> str:
        return f"{self.source_index} -> {self.target_index}"


@dataclass(frozen=True)
class PourResult:
    """
    Result of an executed pour.

    Contains:
    - How many units moved and their color
    - Before/after unit snapshots of both bottles (for animation)
    - Whether the target ended up completed
    """
    amount_moved: int
    poured_color: LiquidType

    source_index: int | None = None
    target_index: int | None = None

    source_before: tuple[LiquidType, ...] = ()
    target_before: tuple[LiquidType, ...] = ()
    source_after: tuple[LiquidType, ...] = ()
    target_after: tuple[LiquidType, ...] = ()

    target_completed: bool = False

    def describe(self) -> str:
        """Human-readable change line."""
        route = ""
        if self.source_index is not None and self.target_index is not None:
            route = f" from bottle {self.source_index} into bottle {self.target_index}"
        unit_word = "unit" if self.amount_moved == 1 else "units"
        return f"Poured {self.amount_moved} {self.poured_color.value} {unit_word}{route}"
