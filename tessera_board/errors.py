"""
Puzzle Definition Errors
========================

Bounded Context: Failure taxonomy for loading and laying out puzzles.

Design:
- Every error is a ValueError (bad input data, never a bug)
- `kind` is a stable string the host can map to its own messages
- Movement rejections are NOT errors (see constraints.engine.CommitResult)
"""

from typing import Optional


class TesseraError(ValueError):
    """Base class for all puzzle definition failures."""

    kind = "tessera_error"


class InvalidShapeKind(TesseraError):
    """Shape definition names a kind outside the closed set of shapes."""

    kind = "invalid_shape_kind"

    def __init__(self, shape_kind: object, shape_id: Optional[str] = None):
        self.shape_kind = shape_kind
        self.shape_id = shape_id
        where = f" (shape '{shape_id}')" if shape_id else ""
        super().__init__(f"Unknown shape kind: {shape_kind!r}{where}")


class InvalidParameter(TesseraError):
    """A numeric parameter is missing, non-numeric, non-finite or out of range."""

    kind = "invalid_parameter"

    def __init__(self, field: str, reason: str, owner: Optional[str] = None):
        self.field = field
        self.reason = reason
        self.owner = owner
        prefix = f"{owner}: " if owner else ""
        super().__init__(f"{prefix}invalid parameter '{field}': {reason}")


class UnknownShapeReference(TesseraError):
    """A puzzle references a shape id that the catalog does not define."""

    kind = "unknown_shape_reference"

    def __init__(self, shape_id: str):
        self.shape_id = shape_id
        super().__init__(f"Shape id '{shape_id}' is not defined in the catalog")


class InvalidBoardKind(TesseraError):
    """Board definition names an unsupported board kind."""

    kind = "invalid_board_kind"

    def __init__(self, board_kind: object):
        self.board_kind = board_kind
        super().__init__(f"Unknown board kind: {board_kind!r}")


class EmptyPuzzle(TesseraError):
    """Operation needs at least one piece and the puzzle has none."""

    kind = "empty_puzzle"

    def __init__(self, message: str = "Puzzle has no pieces"):
        super().__init__(message)


class MalformedDefinition(TesseraError):
    """Definition document is not valid JSON or lacks a required section."""

    kind = "malformed_definition"
