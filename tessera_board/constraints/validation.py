"""
Layout validation report.

Checks the whole puzzle at once (independent of the movement mode): every
pair of overlapping pieces and every piece that leaves the board.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from tessera_board.geometry import polygons_overlap
from tessera_board.puzzle import Puzzle


class IssueKind(str, Enum):
    OVERLAP = "overlap"
    OUTSIDE_BOARD = "outside_board"


@dataclass(frozen=True)
class LayoutIssue:
    """
    One problem found in the layout.

    Attributes:
        kind: Issue kind
        piece: 1-based piece number
        other: 1-based number of the second piece (overlaps only)
    """

    kind: IssueKind
    piece: int
    other: Optional[int] = None

    @property
    def message(self) -> str:
        if self.kind is IssueKind.OVERLAP:
            return f"Piece {self.piece} overlaps piece {self.other}"
        return f"Piece {self.piece} is outside the border"

    def to_dict(self):
        data = {"kind": self.kind.value, "piece": self.piece, "message": self.message}
        if self.other is not None:
            data["other"] = self.other
        return data


@dataclass(frozen=True)
class ValidationReport:
    issues: Tuple[LayoutIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self.issues]

    def to_dict(self):
        return {"ok": self.ok, "issues": [issue.to_dict() for issue in self.issues]}


def validate_layout(puzzle: Puzzle) -> ValidationReport:
    """Overlaps first (ordered by piece pair), then pieces outside the board."""
    issues: List[LayoutIssue] = []
    pieces = puzzle.pieces

    for i, first in enumerate(pieces):
        for second in pieces[i + 1:]:
            if polygons_overlap(first.polygon, second.polygon):
                issues.append(LayoutIssue(IssueKind.OVERLAP, first.number, second.number))

    for piece in pieces:
        if not puzzle.board.contains(piece.polygon):
            issues.append(LayoutIssue(IssueKind.OUTSIDE_BOARD, piece.number))

    return ValidationReport(tuple(issues))
