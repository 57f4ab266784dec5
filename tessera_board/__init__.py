"""
Tessera Board Engine v1.0
=========================

Bounded Context: Geometric constraint engine for shape-board puzzles.

Design Philosophy:
- Separation of Concerns: Geometry, Catalog, Transform, Constraints,
  Blueprint and Rendering are separate layers
- Immutable geometry, one explicit owner for mutable state
- Pure core: no threads, no timers, no file or network I/O

Architecture:

    tessera_board/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── shapes.py      # Polygon, PointLocation, EPSILON
    │   └── kernel.py      # point-in-polygon, overlap, containment
    │
    ├── catalog/           # Shape definitions -> outlines
    │   ├── shapes.py      # ShapeDef variants, resolve()
    │   ├── rounding.py    # Rounded corner arcs
    │   ├── board.py       # Board kinds
    │   ├── labels.py      # Dimension labels
    │   └── registry.py    # ShapeCatalog
    │
    ├── transform/         # Rigid transforms (pure)
    │   └── engine.py      # Transform, apply_transform, advance
    │
    ├── constraints/       # Movement restriction (stateful)
    │   ├── engine.py      # ConstraintEngine, MovementMode
    │   └── validation.py  # validate_layout report
    │
    ├── coloring.py        # Deterministic palette assignment
    ├── puzzle.py          # Piece, Puzzle
    │
    ├── blueprint/         # Printable layout (pure)
    │   ├── description.py # RasterDescription + draw commands, SVG
    │   └── layout.py      # layout_blueprint
    │
    ├── rendering/         # Rasterization (supervision + OpenCV)
    │   └── rasterizer.py  # BlueprintRasterizer
    │
    └── logging/           # Structured JSON logging

Usage:

    # 1. Shapes and board (immutable)
    from tessera_board import Board, RectDef, CircleDef, Puzzle

    board = Board.from_dict({"type": "rect", "w": 113, "h": 123})
    puzzle = Puzzle.from_counts(board, [(CircleDef("circle_d30", 30), 2)])

    # 2. Constrained movement (stateful, one engine per puzzle)
    from tessera_board import ConstraintEngine

    engine = ConstraintEngine(puzzle)
    engine.toggle()                                   # RESTRICTED
    piece = puzzle.pieces[0]
    engine.try_commit(piece, piece.transform.moved_to(50, 50))

    # 3. Blueprint (pure) and rendering
    from tessera_board import layout_blueprint, BlueprintRasterizer

    description = layout_blueprint(puzzle, px_per_mm=4)
    png = BlueprintRasterizer().encode_png(description)
"""

# Errors
from tessera_board.errors import (
    EmptyPuzzle,
    InvalidBoardKind,
    InvalidParameter,
    InvalidShapeKind,
    MalformedDefinition,
    TesseraError,
    UnknownShapeReference,
)

# Geometry Layer (immutable, stateless)
from tessera_board.geometry import (
    EPSILON,
    PointLocation,
    Polygon,
    point_in_polygon,
    polygon_contains_polygon,
    polygons_overlap,
    segments_intersect,
)

# Catalog Layer
from tessera_board.catalog import (
    Board,
    BoardKind,
    CircleDef,
    EquilateralTriangleDef,
    IsoscelesTrapezoidDef,
    ParallelogramDef,
    PolygonDef,
    RectDef,
    RegularPolygonDef,
    RightTriangleDef,
    ShapeCatalog,
    ShapeDef,
    ShapeKind,
    dimension_label,
    resolve,
    shape_def_from_dict,
)

# Transform Layer (pure)
from tessera_board.transform import (
    RotationDirection,
    RotationSpeeds,
    SpeedMode,
    Transform,
    advance,
    apply_transform,
)

# Puzzle model and coloring
from tessera_board.coloring import PALETTE, assign_colors
from tessera_board.puzzle import Piece, Puzzle

# Constraint Layer (stateful)
from tessera_board.constraints import (
    CommitResult,
    ConstraintEngine,
    MovementMode,
    ValidationReport,
    validate_layout,
)

# Blueprint and Rendering
from tessera_board.blueprint import RasterDescription, layout_blueprint
from tessera_board.rendering import BlueprintRasterizer

__all__ = [
    # Errors
    "EmptyPuzzle",
    "InvalidBoardKind",
    "InvalidParameter",
    "InvalidShapeKind",
    "MalformedDefinition",
    "TesseraError",
    "UnknownShapeReference",
    # Geometry
    "EPSILON",
    "PointLocation",
    "Polygon",
    "point_in_polygon",
    "polygon_contains_polygon",
    "polygons_overlap",
    "segments_intersect",
    # Catalog
    "Board",
    "BoardKind",
    "CircleDef",
    "EquilateralTriangleDef",
    "IsoscelesTrapezoidDef",
    "ParallelogramDef",
    "PolygonDef",
    "RectDef",
    "RegularPolygonDef",
    "RightTriangleDef",
    "ShapeCatalog",
    "ShapeDef",
    "ShapeKind",
    "dimension_label",
    "resolve",
    "shape_def_from_dict",
    # Transform
    "RotationDirection",
    "RotationSpeeds",
    "SpeedMode",
    "Transform",
    "advance",
    "apply_transform",
    # Puzzle
    "PALETTE",
    "Piece",
    "Puzzle",
    "assign_colors",
    # Constraints
    "CommitResult",
    "ConstraintEngine",
    "MovementMode",
    "ValidationReport",
    "validate_layout",
    # Blueprint
    "BlueprintRasterizer",
    "RasterDescription",
    "layout_blueprint",
]

__version__ = "1.0.0"
