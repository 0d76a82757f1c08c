"""
Engine errors.

InvalidPour is expected during normal play (the player picked an
incompatible bottle) and callers treat it as a no-op. The bottle errors
guard the stack invariant and should never surface past the pour engine.
"""

from __future__ import annotations


class PourSortError(Exception):
    """Base class for all engine errors."""


class InvalidPour(PourSortError):
    """Raised when a pour request breaks a legality rule."""

    SAME_BOTTLE = "same_bottle"
    SOURCE_EMPTY = "source_empty"
    TARGET_FULL = "target_full"
    COLOR_MISMATCH = "color_mismatch"
    NOTHING_TO_MOVE = "nothing_to_move"
    NO_SUCH_BOTTLE = "no_such_bottle"

    def __init__(self, reason: str, message: str | None = None):
        self.reason = reason
        super().__init__(message or f"Invalid pour: {reason}")


class BottleError(PourSortError):
    """Raised when a bottle primitive would break 0 <= len <= capacity."""


class EmptyBottlePop(BottleError):
    """Pop from an empty bottle."""

    def __init__(self):
        super().__init__("Cannot pop from an empty bottle")


class FullBottlePush(BottleError):
    """Push onto a full bottle."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Cannot push onto a full bottle (capacity {capacity})")
