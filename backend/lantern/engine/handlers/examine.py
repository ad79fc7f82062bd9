"""
Observation handlers - LOOK, EXAMINE, READ and INVENTORY.

None of these change the world apart from visit counting and the
last-mentioned slot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.engine.handlers.base import describe_location, listed_contents, require_object
from lantern.engine.text import TextKey, contents_description, current_description
from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent, EventType, RejectionCode
from lantern.models.flags import Flag
from lantern.models.validation import ValidationResult, invalid_result, valid_result

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command

EMPTY_HANDED_MESSAGE = "You're not carrying anything."
INVENTORY_HEADING = "You are carrying:"
NOTHING_WRITTEN_MESSAGE = "There's nothing written on that."


class LookHandler:
    """Handles LOOK commands.

    An explicit LOOK always gives the full description, whatever the
    description mode. In the dark the room's dark text is shown instead.
    """

    kinds = frozenset({CommandKind.LOOK})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        describe_location(world, force_full=True)

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.LOCATION_DESCRIBED,
            subject=world.current_location.name,
            context={"lit": world.is_lit()},
        )


class ExamineHandler:
    """Handles EXAMINE commands.

    Prints the entity's current description, then its detail text, then
    what can be seen inside or on top of it.

    Attributes:
        kinds: Command kinds this handler serves
        checks_victory: False - looking never wins the game
    """

    kinds = frozenset({CommandKind.EXAMINE})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        missing = require_object(command, "What do you want to examine?")
        if missing is not None:
            return missing
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        """Describe the entity.

        Carried entities can always be seen; anything else depends on the
        lighting where the player is.
        """
        obj = command.direct_object
        lit = world.player.has(obj) or world.is_lit()
        world.emit(current_description(obj, lit=lit) or f"You see nothing special about {obj.definite_name}.")

        detail = obj.get_text(TextKey.DETAIL)
        if detail:
            world.emit(detail)

        if obj.is_container:
            world.emit(contents_description(obj))
        elif obj.flags.has(Flag.SURFACE):
            on_top = listed_contents(obj)
            if on_top:
                heading = obj.get_text(TextKey.ON) or f"On {obj.definite_name} you see:"
                world.emit("\n".join([heading, *(f"  {e.name}" for e in on_top)]))

        if obj.flags.has(Flag.DEVICE):
            state = "on" if obj.flags.has(Flag.ON) else "off"
            world.emit(f"It's switched {state}.")

        world.last_mentioned = obj

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(type=EventType.ITEM_EXAMINED, subject=command.direct_object.name)


class ReadHandler:
    """Handles READ commands."""

    kinds = frozenset({CommandKind.READ})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        missing = require_object(command, "What do you want to read?")
        if missing is not None:
            return missing
        obj = command.direct_object
        if not obj.flags.has(Flag.READABLE) and obj.get_text(TextKey.READ) is None:
            return invalid_result(RejectionCode.NOT_READABLE, NOTHING_WRITTEN_MESSAGE)
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        obj = command.direct_object
        world.emit(obj.get_text(TextKey.READ) or obj.description or NOTHING_WRITTEN_MESSAGE)
        world.last_mentioned = obj

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(type=EventType.ITEM_READ, subject=command.direct_object.name)


class InventoryHandler:
    """Handles INVENTORY commands.

    Worn items are marked, and the contents of open or transparent
    containers are listed beneath them.
    """

    kinds = frozenset({CommandKind.INVENTORY})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        carried = world.player.inventory
        if not carried:
            world.emit(EMPTY_HANDED_MESSAGE)
            return

        world.emit(INVENTORY_HEADING)
        for obj in carried:
            suffix = " (being worn)" if obj.flags.has(Flag.WORN) else ""
            world.emit(f"  {obj.name}{suffix}")
            if obj.can_see_inside():
                for inner in listed_contents(obj):
                    world.emit(f"    {inner.name}")

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.INVENTORY_LISTED,
            context={"count": len(world.player.inventory)},
        )
