"""Rigid transforms: placement values, outline mapping and rotation speeds."""

from .engine import (
    MAX_ROTATION_SPEED,
    MIN_ROTATION_SPEED,
    RotationDirection,
    RotationSpeeds,
    SpeedMode,
    Transform,
    advance,
    apply_transform,
    normalize_degrees,
)

__all__ = [
    "MAX_ROTATION_SPEED",
    "MIN_ROTATION_SPEED",
    "RotationDirection",
    "RotationSpeeds",
    "SpeedMode",
    "Transform",
    "advance",
    "apply_transform",
    "normalize_degrees",
]
