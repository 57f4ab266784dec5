"""
Transform Engine
================

Bounded Context: Rigid placement of outlines on the board.

Design:
- Transform is an immutable value (position, rotation, flip)
- apply_transform order: mirror local x (flip) -> rotate CCW -> translate
- Rotation normalized into [0, 360) degrees on construction
- advance() is the per-tick rotation step; direction comes from the host
- Pure functions, no state
"""

import math
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Any, Dict, Tuple

import numpy as np

from tessera_board.geometry import Polygon

# Host-configurable angular speed bounds (degrees per second)
MIN_ROTATION_SPEED = 1.0
MAX_ROTATION_SPEED = 180.0


def normalize_degrees(value: float) -> float:
    wrapped = math.fmod(value, 360.0)
    if wrapped < 0:
        wrapped += 360.0
    # fmod of tiny negatives can land exactly on 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


@dataclass(frozen=True)
class Transform:
    """
    Placement of a piece's outline in board space.

    Attributes:
        x, y: Anchor position (mm)
        rotation: Counter-clockwise degrees in [0, 360)
        flip: Mirror local x before rotating
    """

    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    flip: bool = False

    def __post_init__(self):
        for name in ("x", "y", "rotation"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"Transform.{name} must be a finite number, got {value!r}")
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "rotation", normalize_degrees(float(self.rotation)))
        object.__setattr__(self, "flip", bool(self.flip))

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    def moved_to(self, x: float, y: float) -> "Transform":
        return replace(self, x=x, y=y)

    def moved_by(self, dx: float, dy: float) -> "Transform":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated_by(self, degrees: float) -> "Transform":
        return replace(self, rotation=self.rotation + degrees)

    def flipped(self) -> "Transform":
        return replace(self, flip=not self.flip)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": [self.x, self.y],
            "rotation": self.rotation,
            "flip": self.flip,
        }


def apply_transform(outline: Polygon, transform: Transform) -> Polygon:
    """
    Map a local outline into board space.

    Mirroring reverses the winding, so vertex order is reversed after the
    mirror to keep world polygons counter-clockwise.

    Args:
        outline: Local-frame polygon anchored at the origin
        transform: Placement

    Returns:
        World-space polygon
    """
    v = np.array(outline.vertices, dtype=np.float64)
    if transform.flip:
        v[:, 0] = -v[:, 0]
        v = v[::-1]

    if transform.rotation:
        theta = math.radians(transform.rotation)
        c, s = math.cos(theta), math.sin(theta)
        v = v @ np.array([[c, s], [-s, c]])

    return Polygon(v + np.array([transform.x, transform.y]))


def advance(transform: Transform, angular_velocity: float, dt: float) -> Transform:
    """
    Rotate by angular_velocity * dt degrees.

    Args:
        transform: Current placement
        angular_velocity: Signed degrees per second (positive = CCW)
        dt: Elapsed seconds since the previous tick

    Returns:
        New Transform with rotation wrapped into [0, 360)
    """
    if dt < 0:
        raise ValueError(f"dt must be >= 0, got {dt}")
    return transform.rotated_by(angular_velocity * dt)


class RotationDirection(IntEnum):
    COUNTER_CLOCKWISE = 1
    CLOCKWISE = -1


class SpeedMode(str, Enum):
    FAST = "fast"
    SLOW = "slow"

    def toggled(self) -> "SpeedMode":
        return SpeedMode.SLOW if self is SpeedMode.FAST else SpeedMode.FAST


@dataclass(frozen=True)
class RotationSpeeds:
    """
    Fast and slow angular speeds (degrees per second).

    Both must lie in [1, 180].
    """

    fast: float = 180.0
    slow: float = 15.0

    def __post_init__(self):
        for name in ("fast", "slow"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} speed must be a number, got {value!r}")
            if not MIN_ROTATION_SPEED <= value <= MAX_ROTATION_SPEED:
                raise ValueError(
                    f"{name} speed must be in [{MIN_ROTATION_SPEED:g}, {MAX_ROTATION_SPEED:g}], got {value}"
                )

    def for_mode(self, mode: SpeedMode) -> float:
        return self.slow if mode is SpeedMode.SLOW else self.fast

    def velocity(self, mode: SpeedMode, direction: RotationDirection) -> float:
        return self.for_mode(mode) * int(direction)
