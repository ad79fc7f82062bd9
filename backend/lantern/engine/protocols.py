"""
Protocol definitions for the engine's external boundaries.

The engine consumes structured commands from a parser and produces plain
text through an output sink. Both sit outside the engine; these protocols
document the contract so hosts can supply their own implementations.

Component Flow:
    Player Input -> CommandParser -> Command
                                        |
                                        v
                               GameEngine.execute() -> OutputSink.emit(text)
                                        |
                                        v
                                  TurnResponse
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command, CommandKind
    from lantern.models.event import EngineEvent
    from lantern.models.validation import ValidationResult


@runtime_checkable
class OutputSink(Protocol):
    """Receives every line of player-visible text.

    Hooks, default verb handlers, and the turn driver all write here.
    Implementations decide how to render; the engine never formats beyond
    plain strings.
    """

    def emit(self, text: str) -> None:
        """Write one block of player-visible text."""
        ...


@runtime_checkable
class CommandParser(Protocol):
    """Turns raw player input into a structured Command.

    Parsers resolve nouns through World.find_visible(), World.get_entity(),
    and World.last_mentioned. Text that cannot be understood should become
    Command.unknown(message) rather than raising.
    """

    def parse(self, raw_input: str, world: "World") -> "Command":
        """Parse player input.

        Args:
            raw_input: The raw player input string
            world: The live world for entity resolution

        Returns:
            A Command, possibly of kind UNKNOWN
        """
        ...


@runtime_checkable
class VerbHandler(Protocol):
    """Default behavior for one family of command kinds.

    The turn driver calls validate() first. A refusal is reported by
    emitting its reason; otherwise execute() applies the change and writes
    the player-visible text, and create_event() records what happened.

    Attributes:
        kinds: Command kinds this handler serves
        checks_victory: Whether a successful command can satisfy the
            world's victory condition
    """

    kinds: "frozenset[CommandKind]"
    checks_victory: bool

    def validate(self, command: "Command", world: "World") -> "ValidationResult":
        """Check the command against world rules without changing anything."""
        ...

    def execute(self, command: "Command", result: "ValidationResult", world: "World") -> object:
        """Apply a validated command."""
        ...

    def create_event(self, command: "Command", result: "ValidationResult", world: "World") -> "EngineEvent":
        """Describe the outcome of an executed command."""
        ...


# Factory that builds a fresh world; used at startup and on restart.
WorldFactory = Callable[[], "World"]
