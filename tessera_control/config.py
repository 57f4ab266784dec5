"""
Configuration schema for puzzle sessions.

This module defines the host-side settings of a session: rotation speeds,
initial modes, drag/rotation step granularity, blueprint defaults and the
log level.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from tessera_board.transform import MAX_ROTATION_SPEED, MIN_ROTATION_SPEED, RotationSpeeds

LANGUAGES = {"en", "zh"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class RotationConfig:
    """Angular speeds in degrees per second."""

    fast: float = 180.0
    slow: float = 15.0

    def __post_init__(self):
        """Validate rotation speeds."""
        for name in ("fast", "slow"):
            value = getattr(self, name)
            if not MIN_ROTATION_SPEED <= value <= MAX_ROTATION_SPEED:
                raise ValueError(
                    f"rotation.{name} must be in [{MIN_ROTATION_SPEED:g}, {MAX_ROTATION_SPEED:g}], got {value}"
                )

    def to_speeds(self) -> RotationSpeeds:
        return RotationSpeeds(fast=self.fast, slow=self.slow)


@dataclass(frozen=True)
class BlueprintConfig:
    """Blueprint export defaults."""

    px_per_mm: float = 4.0
    language: str = "en"

    def __post_init__(self):
        """Validate blueprint configuration."""
        if self.px_per_mm <= 0:
            raise ValueError(f"blueprint.px_per_mm must be > 0, got {self.px_per_mm}")
        if self.language not in LANGUAGES:
            raise ValueError(
                f"Invalid blueprint.language: {self.language}. Must be one of {LANGUAGES}"
            )


@dataclass(frozen=True)
class SessionConfig:
    """
    Main configuration for a puzzle session.

    Loaded from YAML (or a dict) and validated at construction.
    Immutable after construction (frozen dataclass).
    """

    rotation: RotationConfig = field(default_factory=RotationConfig)
    start_slow: bool = False
    start_restricted: bool = False

    # Sweep granularity for constrained motion
    drag_step_mm: float = 1.0
    rotate_step_deg: float = 1.0

    blueprint: BlueprintConfig = field(default_factory=BlueprintConfig)
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate session configuration."""
        if self.drag_step_mm <= 0:
            raise ValueError(f"drag_step_mm must be > 0, got {self.drag_step_mm}")
        if self.rotate_step_deg <= 0:
            raise ValueError(f"rotate_step_deg must be > 0, got {self.rotate_step_deg}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {LOG_LEVELS}"
            )

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SessionConfig":
        data = data or {}
        return cls(
            rotation=RotationConfig(**(data.get("rotation") or {})),
            start_slow=bool(data.get("start_slow", False)),
            start_restricted=bool(data.get("start_restricted", False)),
            drag_step_mm=float(data.get("drag_step_mm", 1.0)),
            rotate_step_deg=float(data.get("rotate_step_deg", 1.0)),
            blueprint=BlueprintConfig(**(data.get("blueprint") or {})),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "SessionConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            rotation:
              fast: 180      # deg/s
              slow: 15       # deg/s
            start_slow: false
            start_restricted: false
            drag_step_mm: 1.0
            rotate_step_deg: 1.0
            blueprint:
              px_per_mm: 4
              language: "en"
            log_level: "INFO"
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data)
