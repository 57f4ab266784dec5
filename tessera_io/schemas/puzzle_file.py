"""
Puzzle File Schema
==================

Bounded Context: Puzzle definition documents

Two forms are accepted:

Counts form (what to place, positions chosen on load):
    {
        "units": "mm",
        "board": {"type": "rect", "w": 113, "h": 123},
        "counts": {"circle_d30": 2, "square_30": 1},
        "note_en": "...", "note_zh": "...",
        "shapes_file": "shapes.json"
    }

Full-pieces form (every piece positioned, e.g. a saved session):
    {
        "units": "mm",
        "board": {...},
        "pieces": [
            {"id": "circle_d30", "position": [50, 50], "rotation": 0, "flip": false},
            {"type": "rect", "w": 20, "h": 40, "at": [10, 10], "anchor": "bottomleft"}
        ]
    }

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Structural validation here, geometric validation in tessera_board
- Serialization: to_dict() mirrors the accepted input
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from tessera_board.errors import InvalidParameter, MalformedDefinition

NOTE_KEYS = ("note_en", "note_zh")


class PuzzleForm(str, Enum):
    COUNTS = "counts"
    PIECES = "pieces"


class Anchor(str, Enum):
    """Meaning of a piece's "at" point."""

    BOTTOM_LEFT = "bottomleft"
    CENTER = "center"


def _finite(value: Any, field_name: str, owner: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidParameter(field_name, f"expected a finite number, got {value!r}", owner)
    return float(value)


def _pair(value: Any, field_name: str, owner: str) -> Tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise InvalidParameter(field_name, f"expected [x, y], got {value!r}", owner)
    return _finite(value[0], field_name, owner), _finite(value[1], field_name, owner)


@dataclass(frozen=True)
class PieceEntry:
    """
    One entry of the full-pieces form.

    Attributes:
        shape_id: Catalog reference (None for inline shapes)
        inline_shape: Inline shape definition ({"type", ...params})
        position: Anchor position in board space
        at: Alternative position, interpreted through `anchor`
        anchor: BOTTOM_LEFT (bottom-left vertex) or CENTER; only rects and
            equilateral triangles honour CENTER
        rotation: Degrees, counter-clockwise
        flip: Mirror before rotating
    """

    shape_id: Optional[str] = None
    inline_shape: Optional[Dict[str, Any]] = None
    position: Optional[Tuple[float, float]] = None
    at: Optional[Tuple[float, float]] = None
    anchor: Optional[Anchor] = None
    rotation: float = 0.0
    flip: bool = False

    def __post_init__(self):
        if self.shape_id is None and self.inline_shape is None:
            raise MalformedDefinition("Piece entry needs a shape id or an inline shape")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.inline_shape or {})
        if self.shape_id is not None:
            data["id"] = self.shape_id
        if self.position is not None:
            data["position"] = list(self.position)
        if self.at is not None:
            data["at"] = list(self.at)
        if self.anchor is not None:
            data["anchor"] = self.anchor.value
        data["rotation"] = self.rotation
        data["flip"] = self.flip
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], number: int) -> "PieceEntry":
        """
        Args:
            data: Piece object
            number: 1-based piece number (error messages)

        Raises:
            MalformedDefinition: Not an object, or no shape reference
            InvalidParameter: Bad position, rotation or flip
        """
        owner = f"piece {number}"
        if not isinstance(data, Mapping):
            raise MalformedDefinition(f"{owner} must be an object")

        inline = None
        shape_id = data.get("id", data.get("shape"))
        if "type" in data:
            inline = {
                k: v for k, v in data.items()
                if k not in ("position", "at", "anchor", "rotation", "flip", "shape")
            }
            shape_id = None
        elif shape_id is None:
            raise MalformedDefinition(f'{owner} needs "id" (catalog shape) or "type" (inline shape)')

        position = _pair(data["position"], "position", owner) if "position" in data else None
        at = _pair(data["at"], "at", owner) if "at" in data else None

        anchor = None
        if "anchor" in data:
            try:
                anchor = Anchor(data["anchor"])
            except ValueError:
                raise InvalidParameter("anchor", f"unknown anchor {data['anchor']!r}", owner) from None

        rotation = _finite(data.get("rotation", 0.0), "rotation", owner)
        flip = data.get("flip", False)
        if not isinstance(flip, bool):
            raise InvalidParameter("flip", f"expected true/false, got {flip!r}", owner)

        return cls(
            shape_id=str(shape_id) if shape_id is not None else None,
            inline_shape=inline,
            position=position,
            at=at,
            anchor=anchor,
            rotation=rotation,
            flip=flip,
        )


@dataclass(frozen=True)
class PuzzleDefinition:
    """
    Parsed puzzle document (structure only, shapes not yet resolved).

    Attributes:
        board: Board definition object
        form: COUNTS or PIECES
        counts: (shape id, count) in document order
        pieces: Piece entries in document order
        notes: note_en / note_zh
        shapes_file: Catalog file reference (resolved by the host)
        units: Declared units
    """

    board: Dict[str, Any]
    form: PuzzleForm
    counts: Tuple[Tuple[str, int], ...] = ()
    pieces: Tuple[PieceEntry, ...] = ()
    notes: Dict[str, str] = field(default_factory=dict)
    shapes_file: Optional[str] = None
    units: str = "mm"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"units": self.units, "board": dict(self.board)}
        if self.form is PuzzleForm.COUNTS:
            data["counts"] = {shape_id: count for shape_id, count in self.counts}
        else:
            data["pieces"] = [piece.to_dict() for piece in self.pieces]
        data.update(self.notes)
        if self.shapes_file:
            data["shapes_file"] = self.shapes_file
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PuzzleDefinition":
        """
        Raises:
            MalformedDefinition: Missing board, or neither counts nor pieces
            InvalidParameter: Count that is not a positive integer
        """
        if not isinstance(data, Mapping):
            raise MalformedDefinition("Puzzle definition must be a JSON object")
        if "board" not in data:
            raise MalformedDefinition('Puzzle definition has no "board"')
        if not isinstance(data["board"], Mapping):
            raise MalformedDefinition('"board" must be an object')

        notes = {k: str(data[k]) for k in NOTE_KEYS if data.get(k)}
        shapes_file = data.get("shapes_file")
        units = str(data.get("units") or "mm")

        if "counts" in data:
            raw = data["counts"]
            if not isinstance(raw, Mapping):
                raise MalformedDefinition('"counts" must be an object of shape id -> count')
            counts = []
            for shape_id, count in raw.items():
                if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
                    raise InvalidParameter("counts", f"count must be an integer > 0, got {count!r}", str(shape_id))
                counts.append((str(shape_id), count))
            return cls(dict(data["board"]), PuzzleForm.COUNTS, counts=tuple(counts),
                       notes=notes, shapes_file=shapes_file, units=units)

        if "pieces" in data:
            raw = data["pieces"]
            if not isinstance(raw, list):
                raise MalformedDefinition('"pieces" must be a list')
            pieces = tuple(PieceEntry.from_dict(entry, i + 1) for i, entry in enumerate(raw))
            return cls(dict(data["board"]), PuzzleForm.PIECES, pieces=pieces,
                       notes=notes, shapes_file=shapes_file, units=units)

        raise MalformedDefinition('Puzzle definition needs "counts" or "pieces"')
