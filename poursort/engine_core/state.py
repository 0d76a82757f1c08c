"""
Puzzle State - Bottles and the level that holds them.

Design principles:
- Bottles are bounded LIFO stacks; push/pop only at the top
- 0 <= len(units) <= capacity holds after every call
- The sentinel LiquidType.NONE is never stored in a bottle
- A Level is replaced wholesale on restart / next level, never reused
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from .errors import EmptyBottlePop, FullBottlePush

if TYPE_CHECKING:
    from ..generation.profiles import DifficultyProfile
    from ..generation.generator import ShuffleMove


class LiquidType(Enum):
    """Liquid colors. NONE is the 'no liquid' sentinel."""
    NONE = "none"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"

    @classmethod
    def colors(cls) -> list[LiquidType]:
        """All real colors, in declaration order."""
        return [t for t in cls if t is not cls.NONE]


class Bottle:
    """
    A bottle of liquid units, stored bottom-to-top.

    Identity matters: two bottles with the same contents are still
    different bottles, so equality is not overridden.
    """

    def __init__(self, capacity: int, units: list[LiquidType] | None = None):
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        units = list(units or [])
        if len(units) > capacity:
            raise ValueError(f"{len(units)} units do not fit in capacity {capacity}")
        if any(u is LiquidType.NONE for u in units):
            raise ValueError("LiquidType.NONE cannot be stored in a bottle")
        self._capacity = capacity
        self._units = units

    def __repr__(self) -> str:
        names = ",".join(u.value for u in self._units)
        return f"Bottle({self._capacity}, [{names}])"

    def __len__(self) -> int:
        return len(self._units)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def units(self) -> tuple[LiquidType, ...]:
        """Units bottom-to-top (read-only view)."""
        return tuple(self._units)

    @property
    def is_empty(self) -> bool:
        return len(self._units) == 0

    @property
    def is_full(self) -> bool:
        return len(self._units) >= self._capacity

    @property
    def top_unit(self) -> LiquidType:
        """Top unit, or LiquidType.NONE when empty."""
        return self._units[-1] if self._units else LiquidType.NONE

    @property
    def free_space(self) -> int:
        return self._capacity - len(self._units)

    def top_run_length(self) -> int:
        """Count equal units from the top down; 0 when empty."""
        if not self._units:
            return 0
        top = self._units[-1]
        count = 0
        for unit in reversed(self._units):
            if unit is not top:
                break
            count += 1
        return count

    def is_uniform(self) -> bool:
        """Non-empty and every unit is the same color."""
        if not self._units:
            return False
        first = self._units[0]
        return all(u is first for u in self._units)

    @property
    def is_completed(self) -> bool:
        """Full and uniform."""
        return self.is_full and self.is_uniform()

    def push(self, unit: LiquidType) -> None:
        if unit is LiquidType.NONE:
            raise ValueError("LiquidType.NONE cannot be stored in a bottle")
        if self.is_full:
            raise FullBottlePush(self._capacity)
        self._units.append(unit)

    def pop(self) -> LiquidType:
        if not self._units:
            raise EmptyBottlePop()
        return self._units.pop()

    def copy(self) -> Bottle:
        return Bottle(self._capacity, list(self._units))

    def snapshot(self) -> tuple[LiquidType, ...]:
        return tuple(self._units)


@dataclass
class Level:
    """
    An ordered collection of bottles - the unit of generation and evaluation.

    Units are conserved by pours: total_units stays equal to
    filled_bottle_count * capacity for the life of the level.
    """
    bottles: list[Bottle]
    capacity: int
    level_index: int = 1
    profile: DifficultyProfile | None = None

    # Raw single-unit moves applied during generation, in order
    shuffle_log: list[ShuffleMove] = field(default_factory=list)

    @classmethod
    def from_units(
        cls,
        layout: list[list[LiquidType]],
        capacity: int,
        **kwargs,
    ) -> Level:
        """Build a level from bottom-to-top unit lists."""
        return cls(
            bottles=[Bottle(capacity, units) for units in layout],
            capacity=capacity,
            **kwargs,
        )

    def __len__(self) -> int:
        return len(self.bottles)

    def __iter__(self) -> Iterator[Bottle]:
        return iter(self.bottles)

    def __getitem__(self, index: int) -> Bottle:
        return self.bottles[index]

    @property
    def total_units(self) -> int:
        return sum(len(b) for b in self.bottles)

    def snapshot(self) -> tuple[tuple[LiquidType, ...], ...]:
        return tuple(b.snapshot() for b in self.bottles)

    def copy(self) -> Level:
        return Level(
            bottles=[b.copy() for b in self.bottles],
            capacity=self.capacity,
            level_index=self.level_index,
            profile=self.profile,
            shuffle_log=list(self.shuffle_log),
        )
