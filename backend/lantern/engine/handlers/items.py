"""
Item handlers - TAKE, DROP, PUT IN and PUT ON.

These are the commands that move entities through the ownership tree on
the player's behalf. All of them only ever relocate entities through
Entity.move_to() and its container helpers.
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

TAKEN_MESSAGE = "Taken."
DROPPED_MESSAGE = "Dropped."
NOT_CARRIED_MESSAGE = "You're not carrying that."


class TakeHandler:
    """Handles TAKE commands.

    Checks:
        1. There is something to take
        2. It isn't already in the inventory
        3. It carries the takeable tag
        4. The player has room for it

    Attributes:
        kinds: Command kinds this handler serves
        checks_victory: True - taking items can trigger victory
    """

    kinds = frozenset({CommandKind.TAKE})
    checks_victory: bool = True

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        """Validate the take command.

        Args:
            command: The TAKE command
            world: The live world

        Returns:
            ValidationResult with the item's previous holder in context if valid
        """
        missing = require_object(command, "What do you want to take?")
        if missing is not None:
            return missing

        item = command.direct_object
        player = world.player
        if item.location is player:
            return invalid_result(RejectionCode.ALREADY_HAVE, "You already have that.")
        if item is player or not item.is_takeable:
            return invalid_result(RejectionCode.ITEM_NOT_PORTABLE, "You can't take that.")
        if player.is_full:
            return invalid_result(
                RejectionCode.CONTAINER_FULL,
                "You're carrying too much already.",
                hint="Try dropping something first.",
            )

        source = item.location
        return valid_result(
            item_name=item.name,
            from_container=source.name if source is not None and source is not world.current_location else None,
        )

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        """Move the item into the inventory."""
        item = command.direct_object
        item.move_to(world.player)
        item.flags.set(Flag.TOUCHED)
        world.last_mentioned = item
        world.emit(TAKEN_MESSAGE)

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.ITEM_TAKEN,
            subject=command.direct_object.name,
            context={"from_container": result.context.get("from_container")},
        )


class DropHandler:
    """Handles DROP commands.

    Only direct inventory contents can be dropped. Dropping a worn item
    takes it off first.
    """

    kinds = frozenset({CommandKind.DROP})
    checks_victory: bool = True

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        missing = require_object(command, "What do you want to drop?")
        if missing is not None:
            return missing
        if not world.player.is_carrying(command.direct_object):
            return invalid_result(RejectionCode.NOT_CARRIED, NOT_CARRIED_MESSAGE)
        return valid_result(item_name=command.direct_object.name)

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        item = command.direct_object
        item.flags.clear(Flag.WORN)
        item.move_to(world.current_location)
        world.last_mentioned = item
        world.emit(DROPPED_MESSAGE)

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.ITEM_DROPPED,
            subject=command.direct_object.name,
            target=world.current_location.name,
        )


class PutHandler:
    """Handles PUT IN and PUT ON commands.

    The item must be carried. PUT IN needs an open (or transparent)
    container with room; PUT ON needs an entity with the surface tag.
    Putting something into itself, or into something it contains, is
    refused before the tree is touched.

    Example:
        >>> handler = PutHandler()
        >>> result = handler.validate(Command.put_in(coin, box), world)
        >>> result.valid
        True
    """

    kinds = frozenset({CommandKind.PUT_IN, CommandKind.PUT_ON})
    checks_victory: bool = True

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        """Validate the put command.

        Args:
            command: The PUT_IN or PUT_ON command
            world: The live world

        Returns:
            ValidationResult with the destination in context if valid
        """
        onto = command.kind == CommandKind.PUT_ON
        missing = require_object(command, "What do you want to put?") or require_indirect(
            command, "What do you want to put it on?" if onto else "What do you want to put it in?"
        )
        if missing is not None:
            return missing

        item = command.direct_object
        target = command.indirect_object
        if not world.player.has(item):
            return invalid_result(RejectionCode.NOT_CARRIED, NOT_CARRIED_MESSAGE)
        if target is item or target.is_in(item):
            return invalid_result(
                RejectionCode.CONTAINMENT_CYCLE, "You can't put something inside itself."
            )

        if onto:
            if not target.flags.has(Flag.SURFACE):
                return invalid_result(
                    RejectionCode.NOT_SURFACE, f"There's no good surface on {target.definite_name}."
                )
            if target.is_full:
                return invalid_result(
                    RejectionCode.CONTAINER_FULL, f"There's no more room on {target.definite_name}."
                )
            return valid_result(destination=target.name, relation="on")

        if not target.is_container:
            return invalid_result(
                RejectionCode.NOT_CONTAINER, f"You can't put anything in {target.definite_name}."
            )
        if not target.can_see_inside():
            return invalid_result(
                RejectionCode.CONTAINER_CLOSED, f"{sentence_name(target)} is closed."
            )
        if target.is_full:
            return invalid_result(
                RejectionCode.CONTAINER_FULL, f"There's no more room in {target.definite_name}."
            )
        return valid_result(destination=target.name, relation="in")

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        item = command.direct_object
        target = command.indirect_object
        item.flags.clear(Flag.WORN)
        if result.context.get("relation") == "on":
            target.add_to_surface(item)
            world.emit(f"You put {item.definite_name} on {target.definite_name}.")
        else:
            target.add_to_container(item)
            world.emit(f"You put {item.definite_name} in {target.definite_name}.")
        world.last_mentioned = item

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.ITEM_PLACED,
            subject=command.direct_object.name,
            target=command.indirect_object.name,
            context={"relation": result.context.get("relation")},
        )
