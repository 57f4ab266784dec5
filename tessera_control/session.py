"""
PuzzleSession - host-facing session context

Bounded Context: Interactive manipulation of one loaded puzzle
Responsibilities:
  - Own the per-puzzle state: constraint engine, speed mode, rotation
    direction, active piece, drag offset
  - Translate host gestures (pick, drag, rotate, flip, lock) into
    proposals for the constraint engine
  - Expose every operation through a CommandRegistry

Threading:
  - Single-threaded; the host calls tick(dt) from its frame loop
  - Stopping ticks stops rotation; nothing runs in the background

Key bindings (handle_key):
  q / e    hold to rotate counter-clockwise / clockwise
  s        toggle slow/fast rotation
  f        flip the active piece
  l        toggle the movement lock
  shift    hold for a temporary lock
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from tessera_board import (
    CommitResult,
    ConstraintEngine,
    MovementMode,
    Piece,
    Puzzle,
    RotationDirection,
    RotationSpeeds,
    SpeedMode,
    ValidationReport,
    advance,
    validate_layout,
)
from tessera_board.constraints import SweepResult
from tessera_board.logging import LogEvent, create_logger

from .config import SessionConfig
from .registry import CommandRegistry

logger = create_logger("session")


class LockState(str, Enum):
    UNLOCKED = "unlocked"
    LOCKED = "locked"
    TEMPORARY = "temporary"


@dataclass(frozen=True)
class SessionStatus:
    """Snapshot of the session modes (for a host status line)."""

    lock: LockState
    mode: MovementMode
    speed_mode: SpeedMode
    speed: float
    rotating: Optional[RotationDirection]
    active_piece: Optional[int]

    def describe(self) -> str:
        return f"Lock: {self.lock.value.capitalize()} | Speed: {self.speed_mode.value.capitalize()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lock": self.lock.value,
            "mode": self.mode.value,
            "speed_mode": self.speed_mode.value,
            "speed": self.speed,
            "rotating": self.rotating.name.lower() if self.rotating is not None else None,
            "active_piece": self.active_piece,
        }


class PuzzleSession:
    """
    Session context for one puzzle, owned by the host.

    Example:
        session = PuzzleSession(load_puzzle(text), SessionConfig.from_yaml("configs/session.yaml"))
        session.begin_drag((20.0, 20.0))
        session.drag((60.0, 40.0))
        session.end_drag()

        session.start_rotation(RotationDirection.CLOCKWISE)
        session.tick(1 / 60)
        session.stop_rotation()

        session.commands.execute("toggle_lock")
    """

    KEY_BINDINGS = {
        "q": ("rotate_ccw", "rotate_stop"),
        "e": ("rotate_cw", "rotate_stop"),
        "s": ("toggle_speed", None),
        "f": ("flip", None),
        "l": ("toggle_lock", None),
        "shift": ("hold_lock", "release_lock"),
    }

    def __init__(self, puzzle: Puzzle, config: Optional[SessionConfig] = None):
        self.puzzle = puzzle
        self.config = config or SessionConfig()
        logger.set_level(self.config.logging_level)
        self.speeds: RotationSpeeds = self.config.rotation.to_speeds()
        self.engine = ConstraintEngine(puzzle, self._initial_mode())
        self.speed_mode = self._initial_speed_mode()

        self._rotation: Optional[RotationDirection] = None
        self._active: Optional[Piece] = None
        self._drag_offset: Optional[Tuple[float, float]] = None

        self.commands = CommandRegistry()
        self._setup_command_handlers()

    def _initial_mode(self) -> MovementMode:
        return MovementMode.RESTRICTED if self.config.start_restricted else MovementMode.FREE

    def _initial_speed_mode(self) -> SpeedMode:
        return SpeedMode.SLOW if self.config.start_slow else SpeedMode.FAST

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def active_piece(self) -> Optional[Piece]:
        """Piece under manipulation; defaults to the front-most piece."""
        return self._active or self.puzzle.front_piece()

    def pick(self, point: Sequence[float]) -> Optional[Piece]:
        """Select the topmost piece under the point and bring it to the front."""
        piece = self.puzzle.topmost_at(point)
        if piece is not None:
            self.puzzle.bring_to_front(piece)
            self._active = piece
        return piece

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def begin_drag(self, point: Sequence[float]) -> bool:
        piece = self.pick(point)
        if piece is None:
            return False
        self._drag_offset = (point[0] - piece.transform.x, point[1] - piece.transform.y)
        return True

    @property
    def dragging(self) -> bool:
        return self._drag_offset is not None

    def drag(self, point: Sequence[float]) -> Optional[SweepResult]:
        """
        Move the dragged piece so the grab point follows the pointer.

        In restricted mode a blocked move slides along whichever axis is
        still free.
        """
        if self._drag_offset is None or self._active is None:
            return None
        x = point[0] - self._drag_offset[0]
        y = point[1] - self._drag_offset[1]
        return self._move_to(self._active, x, y)

    def end_drag(self) -> None:
        self._drag_offset = None

    def move_piece(self, index: int, dx: float, dy: float) -> SweepResult:
        piece = self.puzzle.piece(index)
        self._active = piece
        return self._move_to(piece, piece.transform.x + dx, piece.transform.y + dy)

    def _move_to(self, piece: Piece, x: float, y: float) -> SweepResult:
        result = self._sweep(piece, piece.transform.moved_to(x, y))
        if result.result is CommitResult.COMMITTED:
            return result

        # Slide: keep whichever axis can still make progress
        for axis in ("x", "y"):
            current = piece.transform
            if axis == "x" and abs(current.x - x) > 1e-9:
                self._sweep(piece, current.moved_to(x, current.y))
            elif axis == "y" and abs(current.y - y) > 1e-9:
                self._sweep(piece, current.moved_to(current.x, y))
        return result

    def _sweep(self, piece: Piece, proposed, rotate_by_deg: Optional[float] = None) -> SweepResult:
        return self.engine.sweep(
            piece,
            proposed,
            max_step_mm=self.config.drag_step_mm,
            max_step_deg=self.config.rotate_step_deg,
            rotate_by_deg=rotate_by_deg,
        )

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    def start_rotation(self, direction: RotationDirection) -> None:
        self._rotation = RotationDirection(direction)

    def stop_rotation(self) -> None:
        self._rotation = None

    @property
    def rotating(self) -> Optional[RotationDirection]:
        return self._rotation

    @property
    def angular_speed(self) -> float:
        return self.speeds.for_mode(self.speed_mode)

    def tick(self, dt: float) -> Optional[SweepResult]:
        """
        Advance continuous rotation of the active piece by dt seconds.

        Returns:
            SweepResult, or None when nothing is rotating
        """
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        piece = self.active_piece
        if self._rotation is None or piece is None or dt == 0:
            return None
        velocity = self.speeds.velocity(self.speed_mode, self._rotation)
        return self._sweep(piece, advance(piece.transform, velocity, dt), rotate_by_deg=velocity * dt)

    def toggle_speed(self) -> SpeedMode:
        self.speed_mode = self.speed_mode.toggled()
        self._log_speed("toggle")
        return self.speed_mode

    def set_speeds(self, fast: Optional[float] = None, slow: Optional[float] = None) -> RotationSpeeds:
        """
        Raises:
            ValueError: Speed outside [1, 180] deg/s
        """
        self.speeds = RotationSpeeds(
            fast=self.speeds.fast if fast is None else fast,
            slow=self.speeds.slow if slow is None else slow,
        )
        self._log_speed("set")
        return self.speeds

    def _log_speed(self, trigger: str) -> None:
        logger.info(
            event=LogEvent.SPEED_CHANGED,
            message=f"Rotation speed {self.speed_mode.value} ({self.angular_speed:g} deg/s)",
            metadata={
                'speed_mode': self.speed_mode.value,
                'fast': self.speeds.fast,
                'slow': self.speeds.slow,
                'trigger': trigger,
            },
        )

    # ------------------------------------------------------------------
    # Flip / lock
    # ------------------------------------------------------------------

    def flip(self) -> Optional[CommitResult]:
        piece = self.active_piece
        if piece is None:
            return None
        return self.engine.try_commit(piece, piece.transform.flipped())

    def toggle_lock(self) -> MovementMode:
        return self.engine.toggle()

    def hold_lock(self) -> MovementMode:
        return self.engine.hold()

    def release_lock(self) -> MovementMode:
        return self.engine.release()

    # ------------------------------------------------------------------
    # Whole-puzzle operations
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Restore the loaded layout and the configured starting modes."""
        for piece in self.puzzle.pieces:
            self.engine.force_commit(piece, piece.initial_transform)
            piece.z_order = piece.index
        self.engine.release()
        self.engine.set_mode(self._initial_mode())
        self.speed_mode = self._initial_speed_mode()
        self._rotation = None
        self._active = None
        self._drag_offset = None
        logger.info(
            event=LogEvent.PUZZLE_RESET,
            message="Puzzle reset to its initial layout",
            metadata={'pieces': len(self.puzzle)},
        )

    def validate(self) -> ValidationReport:
        return validate_layout(self.puzzle)

    def status(self) -> SessionStatus:
        if self.engine.is_held:
            lock = LockState.TEMPORARY
        elif self.engine.mode is MovementMode.RESTRICTED:
            lock = LockState.LOCKED
        else:
            lock = LockState.UNLOCKED
        active = self.active_piece
        return SessionStatus(
            lock=lock,
            mode=self.engine.mode,
            speed_mode=self.speed_mode,
            speed=self.angular_speed,
            rotating=self._rotation,
            active_piece=active.number if active is not None else None,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def handle_key(self, key: str, pressed: bool) -> Any:
        """
        Dispatch a key press/release through the key bindings.

        Returns:
            Command result, or None for unbound keys
        """
        binding = self.KEY_BINDINGS.get(key.lower())
        if binding is None:
            return None
        command = binding[0] if pressed else binding[1]
        if command is None:
            return None
        return self.commands.execute(command)

    def _setup_command_handlers(self):
        registry = self.commands

        registry.register("pick", self._handle_pick, "Select the topmost piece at {x, y}", data_keys=("x", "y"))
        registry.register("begin_drag", self._handle_begin_drag, "Grab the topmost piece at {x, y}", data_keys=("x", "y"))
        registry.register("drag", self._handle_drag, "Move the grabbed piece to follow {x, y}", data_keys=("x", "y"))
        registry.register("end_drag", self.end_drag, "Release the grabbed piece")
        registry.register("move", self._handle_move, "Move piece {index} by {dx, dy}", data_keys=("index",))

        registry.register("rotate_ccw", self._handle_rotate_ccw, "Start rotating counter-clockwise")
        registry.register("rotate_cw", self._handle_rotate_cw, "Start rotating clockwise")
        registry.register("rotate_stop", self.stop_rotation, "Stop rotating")
        registry.register("tick", self._handle_tick, "Advance rotation by {dt} seconds", data_keys=("dt",))
        registry.register("toggle_speed", self.toggle_speed, "Toggle slow/fast rotation")
        registry.register("set_speeds", self._handle_set_speeds, "Set {fast, slow} rotation speeds", data_keys=())

        registry.register("flip", self.flip, "Mirror the active piece")
        registry.register("toggle_lock", self.toggle_lock, "Toggle free/restricted movement")
        registry.register("hold_lock", self.hold_lock, "Restrict movement until released")
        registry.register("release_lock", self.release_lock, "End a temporary lock")

        registry.register("reset", self.reset, "Restore the initial layout")
        registry.register("validate", self.validate, "Report overlaps and pieces outside the board")
        registry.register("status", self.status, "Current lock and speed modes")

    def _handle_pick(self, data: Dict[str, Any]) -> Optional[Piece]:
        return self.pick((float(data["x"]), float(data["y"])))

    def _handle_begin_drag(self, data: Dict[str, Any]) -> bool:
        return self.begin_drag((float(data["x"]), float(data["y"])))

    def _handle_drag(self, data: Dict[str, Any]) -> Optional[SweepResult]:
        return self.drag((float(data["x"]), float(data["y"])))

    def _handle_move(self, data: Dict[str, Any]) -> SweepResult:
        return self.move_piece(int(data["index"]), float(data.get("dx", 0.0)), float(data.get("dy", 0.0)))

    def _handle_rotate_ccw(self) -> None:
        self.start_rotation(RotationDirection.COUNTER_CLOCKWISE)

    def _handle_rotate_cw(self) -> None:
        self.start_rotation(RotationDirection.CLOCKWISE)

    def _handle_tick(self, data: Dict[str, Any]) -> Optional[SweepResult]:
        return self.tick(float(data["dt"]))

    def _handle_set_speeds(self, data: Dict[str, Any]) -> RotationSpeeds:
        return self.set_speeds(fast=data.get("fast"), slow=data.get("slow"))
