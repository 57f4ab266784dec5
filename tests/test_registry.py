"""Tests for CommandRegistry."""

import pytest

from tessera_control import CommandDataError, CommandNotAvailableError, CommandRegistry


@pytest.fixture
def registry() -> CommandRegistry:
    return CommandRegistry()


def test_register_and_execute(registry: CommandRegistry) -> None:
    calls = []
    registry.register("flip", lambda: calls.append("flip") or "done", "Mirror the active piece")
    assert registry.execute("flip") == "done"
    assert calls == ["flip"]


def test_execute_passes_command_data(registry: CommandRegistry) -> None:
    registry.register("tick", lambda data: data["dt"] * 2, "Advance rotation")
    assert registry.execute("tick", {"dt": 0.5}) == 1.0


def test_missing_command_data_keys(registry: CommandRegistry) -> None:
    calls = []
    registry.register("move", calls.append, "Move a piece", data_keys=("index", "dx"))
    with pytest.raises(CommandDataError, match="needs command_data with keys: index, dx") as info:
        registry.execute("move")
    assert info.value.missing == ["index", "dx"]
    with pytest.raises(CommandDataError, match="keys: dx"):
        registry.execute("move", {"index": 0})
    assert calls == []


def test_declared_data_defaults_to_empty(registry: CommandRegistry) -> None:
    registry.register("set_speeds", lambda data: data.get("fast", 180), "Set speeds", data_keys=())
    assert registry.execute("set_speeds") == 180


def test_double_registration_rejected(registry: CommandRegistry) -> None:
    registry.register("reset", lambda: None, "Reset")
    with pytest.raises(ValueError, match="already registered"):
        registry.register("reset", lambda: None, "Reset again")


def test_unknown_command_lists_available(registry: CommandRegistry) -> None:
    registry.register("status", lambda: None, "Status")
    with pytest.raises(CommandNotAvailableError, match="Available commands: status"):
        registry.execute("stats")


def test_introspection(registry: CommandRegistry) -> None:
    registry.register("flip", lambda: None, "Mirror the active piece")
    registry.register("reset", lambda: None, "Restore the initial layout")
    assert registry.is_available("flip")
    assert not registry.is_available("explode")
    assert registry.available_commands == {"flip", "reset"}
    assert registry.get_help() == {"flip": "Mirror the active piece", "reset": "Restore the initial layout"}
    assert registry.count() == 2


def test_snapshots_are_copies(registry: CommandRegistry) -> None:
    registry.register("flip", lambda: None, "Mirror")
    registry.available_commands.add("hack")
    registry.get_help()["hack"] = "nope"
    assert registry.count() == 1
    assert not registry.is_available("hack")
