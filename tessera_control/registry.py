"""
CommandRegistry - Explicit command registration pattern

Bounded Context: Host command registration and dispatch
Responsibilities:
  - Register commands with handlers
  - Validate command existence before execution
  - Provide introspection (available_commands, get_help)

Design Motivation:
  Problem: A host (keyboard handler, web bridge, test script) needs to know
           which session operations exist without reaching into the session
  Solution: Explicit registration, dispatch by name

Threading: Single-threaded (the session is driven by one host loop)
Pattern: Registry with explicit registration
"""

from typing import Any, Callable, Dict, Optional, Sequence, Set, Tuple

from tessera_board.logging import LogEvent, create_logger

logger = create_logger("commands")


class CommandNotAvailableError(Exception):
    """Raised when attempting to execute an unregistered command"""
    pass


class CommandDataError(ValueError):
    """Raised when a command is executed without the command_data keys it needs"""

    def __init__(self, command: str, missing: Sequence[str]):
        self.command = command
        self.missing = list(missing)
        super().__init__(
            f"Command '{command}' needs command_data with keys: {', '.join(self.missing)}"
        )


class CommandRegistry:
    """
    Registry for session commands with explicit registration.

    Key Features:
      - Fail-fast: Invalid commands rejected immediately
      - Introspection: Can query available commands at runtime
      - Self-Documenting: Each command has a description

    Example:
        registry = CommandRegistry()
        registry.register('flip', session.flip, "Mirror the active piece")

        try:
            registry.execute('flip')
        except CommandNotAvailableError as e:
            print(f"Command not available: {e}")
    """

    def __init__(self):
        self._commands: Dict[str, Callable] = {}
        self._descriptions: Dict[str, str] = {}
        self._data_keys: Dict[str, Tuple[str, ...]] = {}

    def register(
        self,
        command: str,
        handler: Callable,
        description: str,
        data_keys: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Register a command with its handler function.

        Args:
            command: Command name (lowercase, no spaces)
            handler: Callable that executes the command
            description: Human-readable description for help text
            data_keys: Keys the handler reads from command_data. When given,
                the handler always receives command_data (empty if omitted)
                and missing keys are rejected before it runs

        Raises:
            ValueError: If command already registered (double registration)
        """
        if command in self._commands:
            raise ValueError(f"Command '{command}' already registered")

        self._commands[command] = handler
        self._descriptions[command] = description
        if data_keys is not None:
            self._data_keys[command] = tuple(data_keys)

    def execute(self, command: str, command_data: Optional[dict] = None) -> Any:
        """
        Execute a registered command.

        Args:
            command: Command name to execute
            command_data: Optional command arguments

        Returns:
            Whatever the handler returns

        Raises:
            CommandNotAvailableError: If command not registered
            CommandDataError: If declared command_data keys are missing
        """
        if command not in self._commands:
            logger.warning(
                event=LogEvent.COMMAND_UNAVAILABLE,
                message=f"Command '{command}' not available",
                metadata={'command': command},
            )
            raise CommandNotAvailableError(
                f"Command '{command}' not available. "
                f"Available commands: {', '.join(sorted(self.available_commands))}"
            )

        handler = self._commands[command]
        logger.debug(
            event=LogEvent.COMMAND_EXECUTED,
            message=f"Executing command '{command}'",
            metadata={'command': command, 'data': command_data},
        )

        if command in self._data_keys:
            command_data = {} if command_data is None else command_data
            missing = [key for key in self._data_keys[command] if key not in command_data]
            if missing:
                logger.warning(
                    event=LogEvent.COMMAND_REJECTED,
                    message=f"Command '{command}' missing command_data keys",
                    metadata={'command': command, 'missing': missing},
                )
                raise CommandDataError(command, missing)
            return handler(command_data)

        # Call handler with or without command_data
        if command_data is not None:
            return handler(command_data)
        return handler()

    def is_available(self, command: str) -> bool:
        return command in self._commands

    @property
    def available_commands(self) -> Set[str]:
        """Snapshot of registered command names."""
        return set(self._commands.keys())

    def get_help(self) -> Dict[str, str]:
        """Snapshot of command descriptions."""
        return dict(self._descriptions)

    def count(self) -> int:
        return len(self._commands)
