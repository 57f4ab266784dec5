"""
Constraint Engine
=================

Bounded Context: Movement restriction state machine and commit validation.

States:
    FREE        any proposed transform is committed
    RESTRICTED  a proposal is committed only if the moved piece stays inside
                the board and overlaps no other piece

Transitions:
    toggle()    flips the base mode (latched lock)
    hold()      forces RESTRICTED while held (temporary lock)
    release()   ends the hold; the base mode applies again

Design:
- One engine per puzzle; engines share nothing
- try_commit is all-or-nothing: a rejected proposal leaves the piece as is
- sweep() subdivides a motion into small steps and stops at the last valid
  one, so a dragged or rotating piece never jumps through an obstacle
- Rejection is a normal outcome, never an exception
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tessera_board.geometry import polygons_overlap
from tessera_board.logging import LogEvent, create_logger
from tessera_board.puzzle import Piece, Puzzle
from tessera_board.transform import Transform

logger = create_logger("constraints")

# Default sweep granularity
DEFAULT_MAX_STEP_MM = 1.0
DEFAULT_MAX_STEP_DEG = 1.0


class MovementMode(str, Enum):
    FREE = "free"
    RESTRICTED = "restricted"

    def toggled(self) -> "MovementMode":
        return MovementMode.RESTRICTED if self is MovementMode.FREE else MovementMode.FREE


class CommitResult(str, Enum):
    COMMITTED = "committed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class SweepResult:
    """
    Outcome of a subdivided motion.

    Attributes:
        result: COMMITTED if the full motion was applied
        steps_committed: Number of sub-steps applied
        steps_total: Number of sub-steps the motion was split into
    """

    result: CommitResult
    steps_committed: int
    steps_total: int

    @property
    def moved(self) -> bool:
        return self.steps_committed > 0


def _angle_delta(start: float, end: float) -> float:
    """Shortest signed rotation from start to end, degrees in [-180, 180)."""
    return (end - start + 180.0) % 360.0 - 180.0


class ConstraintEngine:
    """
    Per-puzzle movement mode plus the commit checks.

    Example:
        engine = ConstraintEngine(puzzle)
        engine.toggle()                          # RESTRICTED
        result = engine.try_commit(piece, piece.transform.moved_to(50, 50))
    """

    def __init__(self, puzzle: Puzzle, mode: MovementMode = MovementMode.FREE):
        self.puzzle = puzzle
        self._base_mode = MovementMode(mode)
        self._held = False

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    @property
    def mode(self) -> MovementMode:
        """Effective mode (RESTRICTED while a hold is active)."""
        return MovementMode.RESTRICTED if self._held else self._base_mode

    @property
    def base_mode(self) -> MovementMode:
        return self._base_mode

    @property
    def is_held(self) -> bool:
        return self._held

    def toggle(self) -> MovementMode:
        before = self.mode
        self._base_mode = self._base_mode.toggled()
        self._log_change(before, "toggle")
        return self.mode

    def set_mode(self, mode: MovementMode) -> MovementMode:
        before = self.mode
        self._base_mode = MovementMode(mode)
        self._log_change(before, "set")
        return self.mode

    def hold(self) -> MovementMode:
        before = self.mode
        self._held = True
        self._log_change(before, "hold")
        return self.mode

    def release(self) -> MovementMode:
        before = self.mode
        self._held = False
        self._log_change(before, "release")
        return self.mode

    def _log_change(self, before: MovementMode, trigger: str) -> None:
        if self.mode is not before:
            logger.info(
                event=LogEvent.MODE_CHANGED,
                message=f"Movement {self.mode.value}",
                metadata={'mode': self.mode.value, 'trigger': trigger, 'held': self._held},
            )

    # ------------------------------------------------------------------
    # Commit checks
    # ------------------------------------------------------------------

    def is_valid(self, piece: Piece, proposed: Transform) -> bool:
        """Restricted-mode acceptance test for a proposed transform."""
        polygon = piece.polygon_for(proposed)
        if not self.puzzle.board.contains(polygon):
            return False
        return not any(polygons_overlap(polygon, other.polygon) for other in self.puzzle.others(piece))

    def try_commit(self, piece: Piece, proposed: Transform) -> CommitResult:
        """
        Apply a proposed transform if the current mode allows it.

        Returns:
            COMMITTED (piece updated) or REJECTED (piece unchanged)
        """
        if self.mode is MovementMode.RESTRICTED and not self.is_valid(piece, proposed):
            logger.debug(
                event=LogEvent.MOVE_REJECTED,
                message=f"Piece {piece.number} move rejected",
                metadata={'piece': piece.number, 'proposed': proposed.to_dict()},
            )
            return CommitResult.REJECTED

        piece.transform = proposed
        logger.debug(
            event=LogEvent.MOVE_COMMITTED,
            message=f"Piece {piece.number} moved",
            metadata={'piece': piece.number, 'mode': self.mode.value},
        )
        return CommitResult.COMMITTED

    def force_commit(self, piece: Piece, transform: Transform) -> None:
        """Unconditional placement (used to restore the initial layout)."""
        piece.transform = transform

    def sweep(
        self,
        piece: Piece,
        proposed: Transform,
        max_step_mm: float = DEFAULT_MAX_STEP_MM,
        max_step_deg: float = DEFAULT_MAX_STEP_DEG,
        rotate_by_deg: Optional[float] = None,
    ) -> SweepResult:
        """
        Move towards a proposed transform in small validated steps.

        Translation and rotation are interpolated together. Rotation follows
        rotate_by_deg when given (continuous rotation may turn 180 degrees or
        more in one call), otherwise the shorter arc. A flip change cannot be interpolated and is
        validated as a single step. The piece stops at the last step that
        passed.

        Args:
            piece: Piece to move
            proposed: Target transform
            max_step_mm: Largest translation per step
            max_step_deg: Largest rotation per step
            rotate_by_deg: Signed rotation to sweep through (positive is
                counter-clockwise); must agree with proposed.rotation mod 360

        Returns:
            SweepResult (COMMITTED only if the target was reached)
        """
        if max_step_mm <= 0 or max_step_deg <= 0:
            raise ValueError("sweep step sizes must be > 0")

        if self.mode is MovementMode.FREE:
            self.try_commit(piece, proposed)
            return SweepResult(CommitResult.COMMITTED, 1, 1)

        start = piece.transform
        if start.flip != proposed.flip:
            result = self.try_commit(piece, proposed)
            committed = 1 if result is CommitResult.COMMITTED else 0
            return SweepResult(result, committed, 1)

        dx = proposed.x - start.x
        dy = proposed.y - start.y
        dr = _angle_delta(start.rotation, proposed.rotation) if rotate_by_deg is None else rotate_by_deg
        steps = max(
            1,
            math.ceil(math.hypot(dx, dy) / max_step_mm - 1e-9),
            math.ceil(abs(dr) / max_step_deg - 1e-9),
        )

        for k in range(1, steps + 1):
            if k == steps:
                target = proposed
            else:
                f = k / steps
                target = Transform(start.x + dx * f, start.y + dy * f, start.rotation + dr * f, start.flip)
            if self.try_commit(piece, target) is CommitResult.REJECTED:
                return SweepResult(CommitResult.REJECTED, k - 1, steps)

        return SweepResult(CommitResult.COMMITTED, steps, steps)
