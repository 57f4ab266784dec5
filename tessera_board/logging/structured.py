"""
Structured JSON Logger
======================

Bounded Context: Observability for the puzzle engine.

Every record is one JSON object:

    {"timestamp": "...+00:00", "level": "INFO", "component": "constraints",
     "event": "mode.changed", "message": "Movement restricted",
     "metadata": {"mode": "restricted"}}

Loggers are named tessera.<component> and still propagate, so hosts (and
pytest's caplog) see the records through the standard logging tree.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .events import LogEvent

Metadata = Optional[Dict[str, Any]]


class JSONFormatter(logging.Formatter):
    """Pass-through: the message is already a JSON document."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class StructuredLogger:
    """
    Per-component JSON logger over the standard logging module.

    Example:
        logger = create_logger("loader")
        logger.info(event=LogEvent.PUZZLE_LOADED, message="Loaded puzzle", metadata={'pieces': 11})
    """

    def __init__(self, component: str, level: int = logging.INFO):
        self.component = component
        self.logger = logging.getLogger(f"tessera.{component}")
        self.logger.setLevel(level)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Metadata = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        # Records below the threshold are never encoded
        if not self.logger.isEnabledFor(level):
            return

        entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': logging.getLevelName(level),
            'component': self.component,
            'event': LogEvent(event).value,
            'message': message,
        }
        if metadata:
            entry['metadata'] = metadata
        if exc_info is not None:
            entry['exception'] = {'type': type(exc_info).__name__, 'message': str(exc_info)}

        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def debug(self, event: LogEvent, message: str, metadata: Metadata = None) -> None:
        self.log(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Metadata = None) -> None:
        self.log(logging.INFO, event, message, metadata)

    def warning(self, event: LogEvent, message: str, metadata: Metadata = None) -> None:
        self.log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Metadata = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        """Log a failure; exc_info adds the exception type and text to the record."""
        self.log(logging.ERROR, event, message, metadata, exc_info)


def create_logger(component: str, level: int = logging.INFO) -> StructuredLogger:
    return StructuredLogger(component, level)
