"""
Social handlers - GIVE, SHOW and TELL.

People react through their own command handlers. The defaults here cover
everyone who hasn't been given anything to say.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.engine.handlers.base import require_indirect, require_object, sentence_name
from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent, EventType, RejectionCode
from lantern.models.flags import Flag
from lantern.models.validation import ValidationResult, invalid_result, valid_result

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command

NO_REACTION_MESSAGE = "This provokes no reaction."


class OfferHandler:
    """Handles GIVE and SHOW commands.

    The item must be carried and the recipient must be a person. Without
    a custom handler on the recipient nothing changes hands.
    """

    kinds = frozenset({CommandKind.GIVE, CommandKind.SHOW})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        verb = command.kind.value
        missing = require_object(command, f"What do you want to {verb}?") or require_indirect(
            command, f"Who do you want to {verb} it to?"
        )
        if missing is not None:
            return missing

        item = command.direct_object
        recipient = command.indirect_object
        if not world.player.has(item):
            return invalid_result(RejectionCode.NOT_CARRIED, "You're not carrying that.")
        if not recipient.flags.has(Flag.PERSON):
            return invalid_result(
                RejectionCode.NOT_A_PERSON,
                f"You can't {verb} anything to {recipient.definite_name}.",
            )
        return valid_result(recipient=recipient.name)

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        world.last_mentioned = command.direct_object
        world.emit(f"{sentence_name(command.indirect_object)} doesn't seem interested.")

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.ITEM_GIVEN if command.kind == CommandKind.GIVE else EventType.ITEM_SHOWN,
            subject=command.direct_object.name,
            target=command.indirect_object.name,
            context={"accepted": False},
        )


class TellHandler:
    """Handles TELL commands. The topic travels in Command.text."""

    kinds = frozenset({CommandKind.TELL})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        missing = require_object(command, "Who do you want to talk to?")
        if missing is not None:
            return missing
        if not command.direct_object.flags.has(Flag.PERSON):
            return invalid_result(RejectionCode.NOT_A_PERSON, "You can't talk to that.")
        return valid_result(topic=command.text or "")

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        world.last_mentioned = command.direct_object
        world.emit(NO_REACTION_MESSAGE)

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.PERSON_TOLD,
            subject=command.direct_object.name,
            context={"topic": result.context.get("topic")},
        )
