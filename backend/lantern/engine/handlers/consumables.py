"""
Consumable handlers - EAT, DRINK, WEAR and REMOVE.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.engine.handlers.base import require_object
from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent, EventType, RejectionCode
from lantern.models.flags import Flag
from lantern.models.validation import ValidationResult, invalid_result, valid_result

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command


class ConsumeHandler:
    """Handles EAT and DRINK commands.

    A consumed entity is detached from the tree. Edible things must be
    carried first; drinks can be had wherever they are reachable.
    """

    kinds = frozenset({CommandKind.EAT, CommandKind.DRINK})
    checks_victory: bool = True

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        eating = command.kind == CommandKind.EAT
        missing = require_object(command, "What do you want to eat?" if eating else "What do you want to drink?")
        if missing is not None:
            return missing

        obj = command.direct_object
        if eating:
            if not obj.flags.has(Flag.EDIBLE):
                return invalid_result(RejectionCode.NOT_EDIBLE, "That's hardly food.")
            if not world.player.has(obj):
                return invalid_result(
                    RejectionCode.NOT_CARRIED,
                    f"You'd need to be holding {obj.definite_name} first.",
                )
        elif not obj.flags.has(Flag.DRINKABLE):
            return invalid_result(RejectionCode.NOT_DRINKABLE, "You can't drink that.")
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        obj = command.direct_object
        obj.move_to(None)
        if world.last_mentioned is obj:
            world.last_mentioned = None
        if command.kind == CommandKind.EAT:
            world.emit(f"You eat {obj.definite_name}. Delicious.")
        else:
            world.emit(f"You drink {obj.definite_name}. Refreshing.")

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.ITEM_CONSUMED,
            subject=command.direct_object.name,
            context={"verb": command.kind.value},
        )


class WearHandler:
    """Handles WEAR and UNWEAR commands.

    Wearing takes a carried wearable entity and tags it worn; removing it
    clears the tag and leaves it in the inventory.
    """

    kinds = frozenset({CommandKind.WEAR, CommandKind.UNWEAR})
    checks_victory: bool = True

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        wearing = command.kind == CommandKind.WEAR
        missing = require_object(
            command, "What do you want to wear?" if wearing else "What do you want to take off?"
        )
        if missing is not None:
            return missing

        obj = command.direct_object
        worn = obj.flags.has(Flag.WORN)
        if not wearing:
            if not worn or not world.player.is_carrying(obj):
                return invalid_result(RejectionCode.NOT_WORN, "You aren't wearing that.")
            return valid_result()

        if not obj.flags.has(Flag.WEARABLE):
            return invalid_result(RejectionCode.NOT_WEARABLE, "You can't wear that.")
        if worn:
            return invalid_result(RejectionCode.ALREADY_WORN, "You're already wearing that.")
        if not world.player.is_carrying(obj):
            return invalid_result(
                RejectionCode.NOT_CARRIED, f"You'd need to be holding {obj.definite_name} first."
            )
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        obj = command.direct_object
        world.last_mentioned = obj
        if command.kind == CommandKind.WEAR:
            obj.flags.set(Flag.WORN)
            world.emit(f"You put on {obj.definite_name}.")
        else:
            obj.flags.clear(Flag.WORN)
            world.emit(f"You take off {obj.definite_name}.")

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.ITEM_WORN if command.kind == CommandKind.WEAR else EventType.ITEM_REMOVED,
            subject=command.direct_object.name,
        )
