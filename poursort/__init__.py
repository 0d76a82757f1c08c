"""
PourSort - Liquid Sorting Puzzle Engine

A deterministic-when-seeded engine for the bottle sorting puzzle.
The engine provides:
- Bottle state management and pour rules
- Procedural generation of solvable levels
- Win / stuck evaluation
- Session orchestration for front-ends
"""

__version__ = "0.1.0"
