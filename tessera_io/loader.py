"""
Puzzle Loader
=============

Bounded Context: Host boundary for puzzle and catalog documents.

Operations:
- load_puzzle(definition, catalog)   JSON text/bytes/mapping -> Puzzle
- export_blueprint(puzzle, ...)      Puzzle -> RasterDescription
- dump_puzzle(puzzle, catalog)       Puzzle -> full-pieces document
- load_catalog / load_catalog_file / default_catalog

Design:
- Every failure is a typed TesseraError, logged then re-raised
- A failed load builds nothing; previously loaded puzzles are untouched
- File access is limited to catalog files (the core never touches disk)
"""

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import numpy as np

from tessera_board import (
    EPSILON,
    Board,
    MalformedDefinition,
    Puzzle,
    RasterDescription,
    ShapeCatalog,
    ShapeDef,
    TesseraError,
    Transform,
    layout_blueprint,
    resolve,
    shape_def_from_dict,
)
from tessera_board.catalog import (
    CircleDef,
    EquilateralTriangleDef,
    PolygonDef,
    RectDef,
    RegularPolygonDef,
)
from tessera_board.logging import LogEvent, create_logger

from tessera_io.schemas import Anchor, PieceEntry, PuzzleDefinition, PuzzleForm

logger = create_logger("loader")

DEFAULT_PX_PER_MM = 4.0
DEFAULT_CATALOG = "shapes.json"

Document = Union[str, bytes, Mapping[str, Any]]

# Shapes whose "at" point is always their center
_CENTER_ANCHORED = (CircleDef, RegularPolygonDef)

# Shapes that honour anchor: "center"; the rest always read "at" as the
# bottom-left vertex
_ANCHOR_AWARE = (RectDef, EquilateralTriangleDef)


def _document(definition: Document, what: str) -> Mapping[str, Any]:
    if isinstance(definition, Mapping):
        return definition
    if isinstance(definition, bytes):
        try:
            definition = definition.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDefinition(f"{what} is not UTF-8: {e}") from e
    if not isinstance(definition, str):
        raise MalformedDefinition(f"{what} must be JSON text or an object, got {type(definition).__name__}")
    try:
        data = json.loads(definition)
    except json.JSONDecodeError as e:
        raise MalformedDefinition(f"{what} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedDefinition(f"{what} must be a JSON object")
    return data


# ============================================================================
# Catalogs
# ============================================================================

def load_catalog(definition: Document) -> ShapeCatalog:
    catalog = ShapeCatalog.from_dict(_document(definition, "Shape catalog"))
    logger.info(
        event=LogEvent.CATALOG_LOADED,
        message=f"Loaded catalog with {len(catalog)} shapes",
        metadata={'shapes': len(catalog)},
    )
    return catalog


def load_catalog_file(path: Union[str, Path]) -> ShapeCatalog:
    with open(path, encoding="utf-8") as f:
        return load_catalog(f.read())


def default_catalog() -> ShapeCatalog:
    """Catalog bundled with the package (tessera_io/data/shapes.json)."""
    text = resources.files("tessera_io").joinpath("data", DEFAULT_CATALOG).read_text(encoding="utf-8")
    return load_catalog(text)


# ============================================================================
# Puzzles
# ============================================================================

def _bottom_left_vertex(shape: ShapeDef) -> Tuple[float, float]:
    """Lowest vertex of the local outline, leftmost on ties."""
    vertices = resolve(shape).vertices
    low = vertices[vertices[:, 1] <= vertices[:, 1].min() + EPSILON]
    x, y = low[np.argmin(low[:, 0])]
    return float(x), float(y)


def _placement(entry: PieceEntry, shape: ShapeDef) -> Transform:
    """
    Anchor position for a piece entry.

    "position" is the anchor itself. The legacy "at" point is the center
    of circles and regular polygons, the center of rects and equilateral
    triangles with anchor "center", and the bottom-left vertex otherwise.
    Polygon points are absolute, so "at" does not move them.
    """
    if entry.position is not None:
        x, y = entry.position
    elif isinstance(shape, PolygonDef):
        x, y = (float(v) for v in shape.corner_mean)
    else:
        x, y = entry.at if entry.at is not None else (0.0, 0.0)
        centered = isinstance(shape, _CENTER_ANCHORED) or (
            isinstance(shape, _ANCHOR_AWARE) and entry.anchor is Anchor.CENTER
        )
        if not centered:
            corner_x, corner_y = _bottom_left_vertex(shape)
            x, y = x - corner_x, y - corner_y
    return Transform(x, y, entry.rotation, entry.flip)


def build_puzzle(definition: PuzzleDefinition, catalog: ShapeCatalog) -> Puzzle:
    """
    Materialize a parsed definition against a catalog.

    Raises:
        UnknownShapeReference, InvalidShapeKind, InvalidParameter,
        InvalidBoardKind
    """
    board = Board.from_dict(definition.board)

    if definition.form is PuzzleForm.COUNTS:
        counts = [(catalog.get(shape_id), count) for shape_id, count in definition.counts]
        return Puzzle.from_counts(board, counts, notes=definition.notes, shapes_file=definition.shapes_file)

    placements = []
    for entry in definition.pieces:
        if entry.inline_shape is not None:
            shape = shape_def_from_dict(entry.inline_shape)
        else:
            shape = catalog.get(entry.shape_id)
        placements.append((shape, _placement(entry, shape)))
    return Puzzle(board, placements, notes=definition.notes, shapes_file=definition.shapes_file)


def load_puzzle(definition: Document, catalog: Optional[ShapeCatalog] = None) -> Puzzle:
    """
    Parse and materialize a puzzle definition.

    Args:
        definition: JSON text, UTF-8 bytes or an already-parsed object
        catalog: Shape catalog (default: bundled catalog)

    Returns:
        Fresh Puzzle (pieces colored, positions resolved)

    Raises:
        MalformedDefinition, UnknownShapeReference, InvalidShapeKind,
        InvalidParameter, InvalidBoardKind
    """
    try:
        parsed = PuzzleDefinition.from_dict(_document(definition, "Puzzle definition"))
        if catalog is None:
            catalog = default_catalog()
        puzzle = build_puzzle(parsed, catalog)
    except TesseraError as e:
        logger.error(
            event=LogEvent.PUZZLE_LOAD_FAILED,
            message=f"Puzzle rejected: {e}",
            metadata={'kind': e.kind},
            exc_info=e,
        )
        raise

    if parsed.units != "mm":
        logger.warning(
            event=LogEvent.UNITS_COERCED,
            message=f"Units '{parsed.units}' are not supported; values treated as mm",
            metadata={'units': parsed.units},
        )

    logger.info(
        event=LogEvent.PUZZLE_LOADED,
        message=f"Loaded puzzle with {len(puzzle)} pieces",
        metadata={
            'pieces': len(puzzle),
            'form': parsed.form.value,
            'board': puzzle.board.kind.value,
            'groups': len(puzzle.groups()),
        },
    )
    return puzzle


def dump_puzzle(puzzle: Puzzle, catalog: Optional[ShapeCatalog] = None) -> Dict[str, Any]:
    """
    Full-pieces document for the puzzle's current state.

    Shapes that exist unchanged in the catalog are written by id, all others
    inline. Pieces keep load order so numbering and colors survive a reload.
    """
    if catalog is None:
        catalog = default_catalog()

    pieces = []
    for piece in puzzle.pieces:
        shape = piece.shape
        if shape.id in catalog and catalog.get(shape.id) == shape:
            entry: Dict[str, Any] = {"id": shape.id}
        else:
            entry = shape.to_dict()
        entry.update(piece.transform.to_dict())
        pieces.append(entry)

    data: Dict[str, Any] = {
        "units": "mm",
        "board": puzzle.board.to_dict(),
        "pieces": pieces,
    }
    data.update(puzzle.notes)
    if puzzle.shapes_file:
        data["shapes_file"] = puzzle.shapes_file
    return data


# ============================================================================
# Blueprint
# ============================================================================

def export_blueprint(
    puzzle: Puzzle,
    px_per_mm: float = DEFAULT_PX_PER_MM,
    language: str = "en",
) -> RasterDescription:
    """
    Blueprint layout of a loaded puzzle.

    Raises:
        EmptyPuzzle: No pieces
        ValueError: px_per_mm not positive
    """
    description = layout_blueprint(puzzle, px_per_mm, language)
    logger.info(
        event=LogEvent.BLUEPRINT_EXPORTED,
        message=f"Blueprint {description.width_px}x{description.height_px}px",
        metadata={
            'width_px': description.width_px,
            'height_px': description.height_px,
            'px_per_mm': description.px_per_mm,
            'rows': len(description.rows),
        },
    )
    return description
