"""
Tessera I/O
===========

Bounded Context: Puzzle and catalog documents at the host boundary.

Architecture:

    tessera_io/
    ├── schemas/           # Document structure (frozen dataclasses)
    │   └── puzzle_file.py # PuzzleDefinition, PieceEntry
    ├── loader.py          # load_puzzle, export_blueprint, dump_puzzle
    └── data/shapes.json   # Bundled default catalog
"""

from tessera_io.loader import (
    DEFAULT_PX_PER_MM,
    build_puzzle,
    default_catalog,
    dump_puzzle,
    export_blueprint,
    load_catalog,
    load_catalog_file,
    load_puzzle,
)
from tessera_io.schemas import Anchor, PieceEntry, PuzzleDefinition, PuzzleForm

__all__ = [
    "DEFAULT_PX_PER_MM",
    "Anchor",
    "PieceEntry",
    "PuzzleDefinition",
    "PuzzleForm",
    "build_puzzle",
    "default_catalog",
    "dump_puzzle",
    "export_blueprint",
    "load_catalog",
    "load_catalog_file",
    "load_puzzle",
]

__version__ = "1.0.0"
