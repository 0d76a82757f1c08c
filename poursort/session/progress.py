"""
Progress Store - Where the current level index lives between sessions.

Saving progress belongs to the host application; sessions only talk to
this interface. InMemoryProgressStore is enough for tests and the CLI.
"""

from __future__ import annotations
from abc import ABC, abstractmethod


class ProgressStore(ABC):
    """Reads and writes the player's current level index."""

    @abstractmethod
    def load_level(self) -> int:
        """Current level index (1-based)."""
        pass

    @abstractmethod
    def save_level(self, level_index: int) -> None:
        pass


class InMemoryProgressStore(ProgressStore):
    """Keeps the level index in memory only."""

    def __init__(self, level_index: int = 1):
        if level_index < 1:
            raise ValueError("level_index must be >= 1")
        self._level_index = level_index

    def load_level(self) -> int:
        return self._level_index

    def save_level(self, level_index: int) -> None:
        if level_index < 1:
            raise ValueError("level_index must be >= 1")
        self._level_index = level_index
