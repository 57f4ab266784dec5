"""
Structured logging for the puzzle engine.

Exports:
- LogEvent: Typed event names
- StructuredLogger: JSON logger
- JSONFormatter: Pass-through formatter
- create_logger: Factory function
"""

from .events import LogEvent, DEFINITION_EVENTS, MOVEMENT_EVENTS, BLUEPRINT_EVENTS
from .structured import StructuredLogger, JSONFormatter, create_logger

__all__ = [
    "LogEvent",
    "DEFINITION_EVENTS",
    "MOVEMENT_EVENTS",
    "BLUEPRINT_EVENTS",
    "StructuredLogger",
    "JSONFormatter",
    "create_logger",
]
