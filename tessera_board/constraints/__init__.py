"""Movement constraints: the free/restricted state machine and layout checks."""

from .engine import (
    DEFAULT_MAX_STEP_DEG,
    DEFAULT_MAX_STEP_MM,
    CommitResult,
    ConstraintEngine,
    MovementMode,
    SweepResult,
)
from .validation import IssueKind, LayoutIssue, ValidationReport, validate_layout

__all__ = [
    "DEFAULT_MAX_STEP_DEG",
    "DEFAULT_MAX_STEP_MM",
    "CommitResult",
    "ConstraintEngine",
    "IssueKind",
    "LayoutIssue",
    "MovementMode",
    "SweepResult",
    "ValidationReport",
    "validate_layout",
]
