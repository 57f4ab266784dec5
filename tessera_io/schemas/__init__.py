"""
Puzzle document schemas.

Exports:
- PuzzleDefinition: Parsed puzzle file (counts or full-pieces form)
- PieceEntry: One positioned piece
- PuzzleForm, Anchor: Enums
"""

from .puzzle_file import Anchor, PieceEntry, PuzzleDefinition, PuzzleForm

__all__ = [
    "Anchor",
    "PieceEntry",
    "PuzzleDefinition",
    "PuzzleForm",
]
