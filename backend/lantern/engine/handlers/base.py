"""
Shared helpers for the default verb handlers.

Handlers talk to the player through world.emit() and report refusals as
ValidationResult objects. The helpers here keep message wording
consistent across handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.engine.hooks import HookPhase
from lantern.engine.text import full_room_description
from lantern.models.event import RejectionCode
from lantern.models.flags import Flag
from lantern.models.validation import ValidationResult, invalid_result

if TYPE_CHECKING:
    from lantern.engine.entity import Entity
    from lantern.engine.world import World
    from lantern.models.command import Command

CANT_GO_MESSAGE = "You can't go that way."


def sentence_name(entity: "Entity") -> str:
    """Definite name with a leading capital, for the start of a sentence."""
    name = entity.definite_name
    return name[:1].upper() + name[1:]


def require_object(command: "Command", prompt: str) -> ValidationResult | None:
    """Refuse a command that is missing its direct object.

    Args:
        command: The command being validated
        prompt: Question to ask, e.g. "What do you want to take?"

    Returns:
        An invalid result, or None when the object is present
    """
    if command.direct_object is None:
        return invalid_result(RejectionCode.MISSING_OBJECT, prompt)
    return None


def require_indirect(command: "Command", prompt: str) -> ValidationResult | None:
    if command.indirect_object is None:
        return invalid_result(RejectionCode.MISSING_OBJECT, prompt)
    return None


def listed_contents(entity: "Entity") -> list["Entity"]:
    return [e for e in entity.contents if not e.flags.has(Flag.INVISIBLE)]


def describe_location(world: "World", force_full: bool = False) -> None:
    """Print the current location the way LOOK does.

    A LOOK hook that returns True replaces the standard description. The
    FLASH hook runs afterwards either way, for details that must always be
    shown.
    """
    here = world.current_location
    if not here.run_hook(HookPhase.LOOK):
        world.emit(full_room_description(here, world, force_full=force_full))
    here.run_hook(HookPhase.FLASH)
