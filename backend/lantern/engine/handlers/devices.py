"""
Device handler - TURN ON, TURN OFF and FLIP.

Light sources are devices too: switching one changes whether the player's
location is lit, and the handler reports that change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.engine.handlers.base import describe_location, require_object, sentence_name
from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent, EventType, RejectionCode
from lantern.models.flags import Flag
from lantern.models.validation import ValidationResult, invalid_result, valid_result

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command

PITCH_BLACK_MESSAGE = "It is now pitch black."


class DeviceHandler:
    """Handles TURN ON, TURN OFF and FLIP commands.

    Anything tagged device or light-source can be switched. FLIP toggles
    whatever state the device is in.

    Example:
        >>> lamp.make_light_source()
        >>> handler = DeviceHandler()
        >>> handler.validate(Command.turn_on(lamp), world).valid
        True
    """

    kinds = frozenset({CommandKind.TURN_ON, CommandKind.TURN_OFF, CommandKind.FLIP})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        verb = {
            CommandKind.TURN_ON: "turn on",
            CommandKind.TURN_OFF: "turn off",
            CommandKind.FLIP: "flip",
        }[command.kind]
        missing = require_object(command, f"What do you want to {verb}?")
        if missing is not None:
            return missing

        obj = command.direct_object
        if not obj.flags.has_any(Flag.DEVICE, Flag.LIGHT_SOURCE):
            return invalid_result(RejectionCode.NOT_A_DEVICE, f"You can't {verb} {obj.definite_name}.")

        is_on = obj.flags.has(Flag.ON)
        if command.kind == CommandKind.TURN_ON and is_on:
            return invalid_result(RejectionCode.ALREADY_ON, f"{sentence_name(obj)} is already on.")
        if command.kind == CommandKind.TURN_OFF and not is_on:
            return invalid_result(RejectionCode.ALREADY_OFF, f"{sentence_name(obj)} is already off.")

        switch_on = not is_on if command.kind == CommandKind.FLIP else command.kind == CommandKind.TURN_ON
        return valid_result(switch_on=switch_on)

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        """Switch the device and report any change in the lighting."""
        obj = command.direct_object
        was_lit = world.is_lit()

        if result.context["switch_on"]:
            obj.flags.set(Flag.ON)
        else:
            obj.flags.clear(Flag.ON)
        world.last_mentioned = obj

        state = "on" if result.context["switch_on"] else "off"
        world.emit(f"{sentence_name(obj)} is now {state}.")

        now_lit = world.is_lit()
        if now_lit and not was_lit:
            describe_location(world)
        elif was_lit and not now_lit:
            world.emit(PITCH_BLACK_MESSAGE)

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=EventType.DEVICE_ON if result.context["switch_on"] else EventType.DEVICE_OFF,
            subject=command.direct_object.name,
            context={"lit": world.is_lit()},
        )
