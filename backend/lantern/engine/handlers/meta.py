"""
Meta and fallback handlers.

Covers commands about the game rather than in it (description modes,
VERSION, HELP, QUIT, and the persistence verbs this engine doesn't
provide), plus WAIT and the defaults for custom and unknown commands.

RESTART and AGAIN need the engine itself and are handled there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent, EventType, RejectionCode
from lantern.models.game import DescriptionMode
from lantern.models.validation import ValidationResult, invalid_result, valid_result

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command

TIME_PASSES_MESSAGE = "Time passes."
FAREWELL_MESSAGE = "Thanks for playing!"
UNRECOGNIZED_MESSAGE = "That sentence isn't one I recognize."
DEFAULT_UNKNOWN_MESSAGE = "I don't understand that."

HELP_TEXT = """Available commands:
  look - Look around the current location
  north/south/east/west/up/down (n/s/e/w/u/d) - Move in a direction
  examine [object] - Look at something specific
  take [object] / drop [object] - Pick up or put down an object
  put [object] in/on [object] - Place an object somewhere
  open/close [object] - Open or close something
  inventory (i) - List what you're carrying
  wait (z) - Let time pass
  again (g) - Repeat the last command
  brief/verbose/superbrief - Change how rooms are described
  restart - Start over
  quit - Leave the game"""

MODE_MESSAGES = {
    DescriptionMode.BRIEF: "Brief descriptions.",
    DescriptionMode.VERBOSE: "Maximum verbosity.",
    DescriptionMode.SUPERBRIEF: "Superbrief descriptions.",
}

UNAVAILABLE_MESSAGES = {
    CommandKind.SAVE: "Saving isn't available in this game.",
    CommandKind.RESTORE: "Restoring isn't available in this game.",
    CommandKind.UNDO: "Undo isn't available in this game.",
    CommandKind.SCRIPT: "Transcripts aren't available in this game.",
    CommandKind.UNSCRIPT: "Transcripts aren't available in this game.",
}


class WaitHandler:
    """Handles WAIT. The turn advance does the real work."""

    kinds = frozenset({CommandKind.WAIT})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        world.emit(TIME_PASSES_MESSAGE)

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(type=EventType.NOTHING_HAPPENED)


class DescriptionModeHandler:
    """Handles BRIEF, VERBOSE and SUPERBRIEF."""

    kinds = frozenset({CommandKind.BRIEF, CommandKind.VERBOSE, CommandKind.SUPERBRIEF})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        return valid_result(mode=DescriptionMode(command.kind.value).value)

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        mode = DescriptionMode(result.context["mode"])
        world.description_mode = mode
        world.emit(MODE_MESSAGES[mode])

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(type=EventType.MODE_CHANGED, context={"mode": result.context["mode"]})


class InfoHandler:
    """Handles VERSION, HELP and QUIT.

    QUIT only says goodbye; stopping the loop is up to the engine.
    """

    kinds = frozenset({CommandKind.VERSION, CommandKind.HELP, CommandKind.QUIT})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        if command.kind == CommandKind.VERSION:
            world.emit(f"{world.title}\nRelease {world.version}\nLantern interactive fiction engine")
        elif command.kind == CommandKind.HELP:
            world.emit(HELP_TEXT)
        else:
            world.emit(FAREWELL_MESSAGE)

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(type=EventType.META_COMMAND, context={"verb": command.kind.value})


class UnavailableHandler:
    """Refuses the persistence and transcript verbs."""

    kinds = frozenset(UNAVAILABLE_MESSAGES)
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        return invalid_result(RejectionCode.UNAVAILABLE, UNAVAILABLE_MESSAGES[command.kind])

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        pass

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(type=EventType.META_COMMAND, context={"verb": command.kind.value})


class FallbackHandler:
    """Handles CUSTOM commands nobody claimed, and UNKNOWN commands.

    An UNKNOWN command carries the parser's message in Command.text.
    """

    kinds = frozenset({CommandKind.CUSTOM, CommandKind.UNKNOWN})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        if command.kind == CommandKind.UNKNOWN:
            world.emit(command.text or DEFAULT_UNKNOWN_MESSAGE)
        else:
            world.emit(UNRECOGNIZED_MESSAGE)

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.UNKNOWN_COMMAND,
            context={"verb": command.verb or command.kind.value},
        )
