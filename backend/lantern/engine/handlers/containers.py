"""
Container handlers - OPEN, CLOSE, LOCK and UNLOCK.

Containers and doors share the same open/locked tags. Locking is keyed:
an entity accepts the tool recorded in its LockState extension, which
Entity.set_key() sets up.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.engine.entity import LockState
from lantern.engine.handlers.base import (
    listed_contents,
    require_indirect,
    require_object,
    sentence_name,
)
from lantern.engine.text import DEFAULT_INSIDE_TEXT, TextKey
from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent, EventType, RejectionCode
from lantern.models.flags import Flag
from lantern.models.validation import ValidationResult, invalid_result, valid_result

if TYPE_CHECKING:
    from lantern.engine.entity import Entity
    from lantern.engine.world import World
    from lantern.models.command import Command


def _can_open_at_all(entity: "Entity") -> bool:
    return entity.is_container or entity.flags.has(Flag.DOOR)


class OpenHandler:
    """Handles OPEN commands.

    Opening a container reveals what it holds, so the contents are listed
    straight away.
    """

    kinds = frozenset({CommandKind.OPEN})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        missing = require_object(command, "What do you want to open?")
        if missing is not None:
            return missing

        obj = command.direct_object
        if not _can_open_at_all(obj):
            return invalid_result(RejectionCode.NOT_OPENABLE, f"{sentence_name(obj)} cannot be opened.")
        if not obj.is_openable:
            return invalid_result(
                RejectionCode.NOT_OPENABLE, f"{sentence_name(obj)} isn't something you can open."
            )
        if obj.is_open:
            return invalid_result(
                RejectionCode.CONTAINER_ALREADY_OPEN, f"{sentence_name(obj)} is already open."
            )
        if obj.flags.has(Flag.LOCKED):
            return invalid_result(
                RejectionCode.CONTAINER_LOCKED,
                f"{sentence_name(obj)} is locked.",
                hint="Perhaps something you've seen would unlock it.",
            )
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        obj = command.direct_object
        obj.open()
        world.last_mentioned = obj
        world.emit(f"You open {obj.definite_name}.")

        contents = listed_contents(obj) if obj.is_container else []
        if contents:
            world.emit(obj.get_text(TextKey.INSIDE) or DEFAULT_INSIDE_TEXT)
            for item in contents:
                world.emit(f"  {item.name}")

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        obj = command.direct_object
        return EngineEvent(
            type=EventType.CONTAINER_OPENED,
            subject=obj.name,
            context={"revealed": ", ".join(e.name for e in listed_contents(obj))},
        )


class CloseHandler:
    """Handles CLOSE commands."""

    kinds = frozenset({CommandKind.CLOSE})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        missing = require_object(command, "What do you want to close?")
        if missing is not None:
            return missing

        obj = command.direct_object
        if not _can_open_at_all(obj):
            return invalid_result(RejectionCode.NOT_OPENABLE, f"{sentence_name(obj)} cannot be closed.")
        if not obj.is_openable:
            return invalid_result(
                RejectionCode.NOT_OPENABLE, f"{sentence_name(obj)} isn't something you can close."
            )
        if not obj.is_open:
            return invalid_result(
                RejectionCode.CONTAINER_ALREADY_CLOSED, f"{sentence_name(obj)} is already closed."
            )
        return valid_result()

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        obj = command.direct_object
        obj.close()
        world.last_mentioned = obj
        world.emit(f"You close {obj.definite_name}.")

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(type=EventType.CONTAINER_CLOSED, subject=command.direct_object.name)


class LockHandler:
    """Handles LOCK and UNLOCK commands.

    Checks:
        1. Both the target and the tool were named
        2. The target has a lock (a key was assigned, or it starts locked)
        3. The lock is in the opposite state, and a target being locked is closed
        4. The player is holding the tool
        5. The tool is the target's key

    Example:
        >>> chest.set_key(brass_key)
        >>> handler = LockHandler()
        >>> handler.validate(Command.unlock(chest, brass_key), world).valid
        True
    """

    kinds = frozenset({CommandKind.LOCK, CommandKind.UNLOCK})
    checks_victory: bool = False

    def validate(self, command: "Command", world: "World") -> ValidationResult:
        """Validate a lock or unlock command.

        Args:
            command: The LOCK or UNLOCK command
            world: The live world

        Returns:
            ValidationResult with the verb in context if valid
        """
        verb = "lock" if command.kind == CommandKind.LOCK else "unlock"
        missing = require_object(command, f"What do you want to {verb}?") or require_indirect(
            command, f"What do you want to {verb} it with?"
        )
        if missing is not None:
            return missing

        obj = command.direct_object
        tool = command.indirect_object
        locked = obj.flags.has(Flag.LOCKED)
        if not obj.has_extension(LockState) and not locked:
            return invalid_result(RejectionCode.NOT_LOCKABLE, f"You can't {verb} {obj.definite_name}.")

        if command.kind == CommandKind.LOCK:
            if locked:
                return invalid_result(
                    RejectionCode.ALREADY_LOCKED, f"{sentence_name(obj)} is already locked."
                )
            if obj.is_open:
                return invalid_result(
                    RejectionCode.CONTAINER_ALREADY_OPEN,
                    f"You'll have to close {obj.definite_name} first.",
                )
        elif not locked:
            return invalid_result(
                RejectionCode.ALREADY_UNLOCKED, f"{sentence_name(obj)} isn't locked."
            )

        if not world.player.has(tool):
            return invalid_result(
                RejectionCode.NOT_CARRIED, f"You aren't holding {tool.definite_name}."
            )
        if not obj.extension(LockState).accepts(tool):
            return invalid_result(
                RejectionCode.TOOL_INSUFFICIENT,
                f"{sentence_name(tool)} doesn't fit {obj.definite_name}.",
            )
        return valid_result(verb=verb, tool=tool.name)

    def execute(self, command: "Command", result: ValidationResult, world: "World") -> None:
        obj = command.direct_object
        if command.kind == CommandKind.LOCK:
            obj.flags.set(Flag.LOCKED)
        else:
            obj.flags.clear(Flag.LOCKED)
        world.last_mentioned = obj
        world.emit(f"You {result.context['verb']} {obj.definite_name}.")

    def create_event(self, command: "Command", result: ValidationResult, world: "World") -> EngineEvent:
        return EngineEvent(
            type=(
                EventType.CONTAINER_LOCKED
                if command.kind == CommandKind.LOCK
                else EventType.CONTAINER_UNLOCKED
            ),
            subject=command.direct_object.name,
            target=command.indirect_object.name,
        )
