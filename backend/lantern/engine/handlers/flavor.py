"""
Flavor handler.

Flavor verbs (dance, sing, jump, ...) are atmospheric: they never change
state and always succeed with a fixed reply. Content that wants a verb to
do something registers a room or entity handler for it instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.models.command import FLAVOR_KINDS, CommandKind
from lantern.models.event import EngineEvent, EventType
from lantern.models.validation import ValidationResult, valid_result

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command

# {obj} is replaced with the direct object's definite name
FLAVOR_REPLIES: dict[CommandKind, tuple[str, str]] = {
    # kind: (reply without an object, reply with one)
    CommandKind.ATTACK: ("Violence isn't the answer to this one.", "Violence isn't the answer to this one."),
    CommandKind.BURN: ("You have nothing to burn.", "You have no way to set {obj} alight."),
    CommandKind.CLIMB: ("There's nothing here to climb.", "You can't climb {obj}."),
    CommandKind.DANCE: ("You dance a little jig. Nobody applauds.", "You dance with {obj}. It doesn't dance back."),
    CommandKind.EMPTY: ("There's nothing to empty.", "You can't empty {obj}."),
    CommandKind.FILL: ("There's nothing to fill.", "You have nothing to fill {obj} with."),
    CommandKind.JUMP: ("Wheeeeee!", "You can't jump over {obj}."),
    CommandKind.LOOK_UNDER: ("There's nothing there.", "There's nothing under {obj}."),
    CommandKind.NO: ("You sound rather negative.", "You sound rather negative."),
    CommandKind.PULL: ("Nothing happens.", "Pulling {obj} doesn't seem to do anything."),
    CommandKind.PUSH: ("Nothing happens.", "Pushing {obj} doesn't seem to do anything."),
    CommandKind.RUB: ("Nothing happens.", "Rubbing {obj} doesn't seem to do anything."),
    CommandKind.SEARCH: ("You find nothing of interest.", "You find nothing of interest in {obj}."),
    CommandKind.SING: ("You sing a little tune. Your voice is lovely.", "You sing to {obj}."),
    CommandKind.SMELL: ("You smell nothing unusual.", "It smells just like {obj}."),
    CommandKind.SWIM: ("There's nowhere to swim here.", "You can't swim in {obj}."),
    CommandKind.THINK_ABOUT: ("You think for a while.", "You contemplate {obj} for a while, but nothing comes of it."),
    CommandKind.THROW_AT: ("There's nothing to throw.", "You'd better hold on to {obj}."),
    CommandKind.WAKE: ("You're already wide awake.", "{obj} isn't asleep."),
    CommandKind.WAVE: ("You wave. Nobody waves back.", "You wave {obj}. Nothing happens."),
    CommandKind.WAVE_HANDS: ("You wave your hands.", "You wave your hands."),
    CommandKind.YES: ("You sound rather positive.", "You sound rather positive."),
}


class FlavorHandler:
    """Handles flavor verbs.

    Flavor actions are atmospheric - they don't change state.
    They always succeed, so validate() always returns valid.

    Attributes:
        checks_victory: False - flavor actions don't trigger victory

    Example:
        >>> handler = FlavorHandler()
        >>> result = handler.validate(Command.of(CommandKind.DANCE), world)  # Always valid
        >>> handler.execute(Command.of(CommandKind.DANCE), result, world)
    """

    kinds = FLAVOR_KINDS
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        bare, with_object = FLAVOR_REPLIES.get(command.kind, ("Nothing happens.", "Nothing happens."))
        obj = command.direct_object
        if obj is None:
            world.emit(bare)
            return
        reply = with_object.format(obj=obj.definite_name)
        world.emit(reply[:1].upper() + reply[1:])
        world.last_mentioned = obj

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        obj = command.direct_object
        return EngineEvent(
            type=EventType.FLAVOR_ACTION,
            subject=obj.name if obj is not None else None,
            context={"verb": command.kind.value},
        )
