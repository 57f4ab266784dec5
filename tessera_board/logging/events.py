"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (namespace.category.action)
- Searchable in log aggregators

Event Naming Convention:
    <component>.<category>.<action>

    component: puzzle, catalog, move, mode, blueprint, command
    category: load, export, committed
    action: failed, changed
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - puzzle.* / catalog.*: definition loading
    - move.* / mode.* / speed.*: constraint engine and session
    - blueprint.*: blueprint layout and export
    - command.*: host command dispatch
    """

    # ========== Definition Events ==========
    PUZZLE_LOADED = "puzzle.loaded"
    """Puzzle definition parsed and pieces materialized."""

    PUZZLE_LOAD_FAILED = "puzzle.load.failed"
    """Puzzle definition rejected (malformed, unknown shape, bad parameter)."""

    PUZZLE_RESET = "puzzle.reset"
    """All pieces restored to their initial transforms."""

    CATALOG_LOADED = "catalog.loaded"
    """Shape catalog parsed."""

    UNITS_COERCED = "puzzle.units.coerced"
    """Definition declared non-mm units; values treated as mm."""

    # ========== Movement Events ==========
    MOVE_COMMITTED = "move.committed"
    """Proposed transform committed to a piece."""

    MOVE_REJECTED = "move.rejected"
    """Proposed transform rejected by the restricted-mode checks."""

    MODE_CHANGED = "mode.changed"
    """Effective movement mode changed (free <-> restricted)."""

    SPEED_CHANGED = "speed.changed"
    """Rotation speed mode or speed values changed."""

    # ========== Blueprint Events ==========
    BLUEPRINT_EXPORTED = "blueprint.exported"
    """Blueprint layout produced."""

    BLUEPRINT_RENDERED = "blueprint.rendered"
    """Blueprint rasterized to an image."""

    # ========== Command Events ==========
    COMMAND_EXECUTED = "command.executed"
    """Host command dispatched."""

    COMMAND_UNAVAILABLE = "command.unavailable"
    """Host requested an unregistered command."""

    COMMAND_REJECTED = "command.rejected"
    """Command called without the command_data it needs."""


# Event categories for filtering
DEFINITION_EVENTS = {
    LogEvent.PUZZLE_LOADED,
    LogEvent.PUZZLE_LOAD_FAILED,
    LogEvent.PUZZLE_RESET,
    LogEvent.CATALOG_LOADED,
    LogEvent.UNITS_COERCED,
}

MOVEMENT_EVENTS = {
    LogEvent.MOVE_COMMITTED,
    LogEvent.MOVE_REJECTED,
    LogEvent.MODE_CHANGED,
    LogEvent.SPEED_CHANGED,
}

BLUEPRINT_EVENTS = {
    LogEvent.BLUEPRINT_EXPORTED,
    LogEvent.BLUEPRINT_RENDERED,
}
