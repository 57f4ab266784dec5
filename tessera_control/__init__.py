"""
Session control for hosts.

Exports:
- PuzzleSession: Session context (drag, rotate, flip, lock, tick)
- SessionStatus, LockState: Status snapshot
- CommandRegistry, CommandNotAvailableError, CommandDataError: Command dispatch
- SessionConfig: YAML configuration
"""

from .config import BlueprintConfig, RotationConfig, SessionConfig
from .registry import CommandDataError, CommandNotAvailableError, CommandRegistry
from .session import LockState, PuzzleSession, SessionStatus

__all__ = [
    "BlueprintConfig",
    "CommandDataError",
    "CommandNotAvailableError",
    "CommandRegistry",
    "LockState",
    "PuzzleSession",
    "RotationConfig",
    "SessionConfig",
    "SessionStatus",
]
