"""
Movement handler.

This handler processes MOVE commands. Exit resolution itself lives in
Player.move(); the handler adds the refusal wording and describes the
destination after a successful move.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.engine.handlers.base import CANT_GO_MESSAGE, describe_location
from lantern.engine.player import MoveOutcome
from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent, EventType, RejectionCode
from lantern.models.validation import ValidationResult, invalid_result, valid_result

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command


class MovementHandler:
    """Handles MOVE commands.

    Validation only refuses what can be decided without side-effects: a
    missing direction, a missing exit, or a special exit whose condition
    currently fails. Everything else is left to Player.move().

    Attributes:
        kinds: Command kinds this handler serves
        checks_victory: True - arriving somewhere can trigger victory

    Example:
        >>> handler = MovementHandler()
        >>> result = handler.validate(Command.move("north"), world)
        >>> if result.valid:
        ...     handler.execute(Command.move("north"), result, world)
    """

    kinds = frozenset({CommandKind.MOVE})
    checks_victory: bool = True

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        """Check that there is somewhere to go.

        Args:
            command: The MOVE command
            world: The live world

        Returns:
            ValidationResult with the origin and direction in context if valid
        """
        direction = command.direction
        if direction is None:
            return invalid_result(RejectionCode.MISSING_OBJECT, "Which way do you want to go?")

        here = world.current_location
        special = here.get_special_exit(direction)
        if special is not None:
            if not special.is_passable(world):
                return invalid_result(
                    RejectionCode.EXIT_BLOCKED,
                    special.failure_message or CANT_GO_MESSAGE,
                    direction=direction.value,
                )
        elif here.get_exit(direction) is None:
            return invalid_result(
                RejectionCode.NO_EXIT, CANT_GO_MESSAGE, direction=direction.value
            )

        return valid_result(direction=direction.value, origin=here.name)

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> MoveOutcome:
        """Move the player, then describe where they ended up.

        Returns:
            The MoveOutcome reported by Player.move()
        """
        assert command.direction is not None
        outcome = world.player.move(command.direction)

        if outcome == MoveOutcome.NO_EXIT:
            world.emit(CANT_GO_MESSAGE)
        elif outcome == MoveOutcome.BLOCKED:
            special = world.current_location.get_special_exit(command.direction)
            if special is None or not special.failure_message:
                world.emit(CANT_GO_MESSAGE)
        elif outcome == MoveOutcome.MOVED and not world.is_game_over:
            describe_location(world)
        return outcome

    def create_event(
        self,
        command: "Command",
        result: ValidationResult,
        world: "World",
        outcome: MoveOutcome | None = None,
    ) -> EngineEvent:
        """Create the PLAYER_MOVED or MOVE_BLOCKED event.

        Args:
            command: The processed command
            result: The validation result
            world: The live world, after execution
            outcome: What Player.move() reported

        Returns:
            Event describing the move
        """
        moved = outcome in (MoveOutcome.MOVED, None)
        return EngineEvent(
            type=EventType.PLAYER_MOVED if moved else EventType.MOVE_BLOCKED,
            subject=world.current_location.name,
            target=str(result.context.get("origin")),
            context={
                "direction": result.context.get("direction"),
                "outcome": outcome.value if outcome is not None else MoveOutcome.MOVED.value,
            },
        )
