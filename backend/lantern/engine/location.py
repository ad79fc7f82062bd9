"""
Locations - rooms with exits, special exits, and phase hooks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from lantern.engine.entity import Entity
from lantern.engine.exits import SpecialExit
from lantern.engine.hooks import HookHandler, HookPhase, HookPriority, HookRegistry
from lantern.models.direction import Direction
from lantern.models.flags import Flag

if TYPE_CHECKING:
    from lantern.models.command import Command

logger = logging.getLogger(__name__)


class Location(Entity):
    """A room the player can occupy.

    Exits map a Direction to another Location. Special exits for the same
    direction take precedence. Hooks are registered per phase; see
    HookPhase for what each phase means.

    Example:
        >>> hall = Location("Hall", "A long hall.", flags=[Flag.NATURALLY_LIT])
        >>> study = Location("Study", "Books everywhere.")
        >>> hall.set_exit(Direction.NORTH, study, bidirectional=True)
        >>> study.get_exit(Direction.SOUTH) is hall
        True
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        synonyms: Iterable[str] = (),
        flags: Iterable[str | Flag] = (),
    ):
        super().__init__(name, description, synonyms=synonyms, flags=flags)
        self.exits: dict[Direction, Location] = {}
        self.special_exits: dict[Direction, SpecialExit] = {}
        self.hooks = HookRegistry()
        self._local_globals: list[Entity] = []

    # Exits

    def set_exit(
        self, direction: Direction | str, destination: "Location", bidirectional: bool = False
    ) -> None:
        direction = Direction.parse(direction)
        self.exits[direction] = destination
        if bidirectional:
            destination.exits[direction.opposite] = self

    def get_exit(self, direction: Direction | str) -> "Location | None":
        return self.exits.get(Direction.parse(direction))

    def remove_exit(self, direction: Direction | str) -> None:
        self.exits.pop(Direction.parse(direction), None)

    def set_special_exit(self, direction: Direction | str, special_exit: SpecialExit) -> None:
        self.special_exits[Direction.parse(direction)] = special_exit

    def get_special_exit(self, direction: Direction | str) -> SpecialExit | None:
        return self.special_exits.get(Direction.parse(direction))

    def remove_special_exit(self, direction: Direction | str) -> None:
        self.special_exits.pop(Direction.parse(direction), None)

    def visible_exit_directions(self) -> list[Direction]:
        """Directions LOOK should list, in compass order."""
        return [
            direction
            for direction in Direction
            if direction in self.exits
            or (direction in self.special_exits and self.special_exits[direction].visible)
        ]

    # Hooks

    def add_hook(
        self, phase: HookPhase | str, handler: HookHandler, priority: int = HookPriority.NORMAL
    ) -> None:
        self.hooks.add(phase, handler, priority)

    def on_enter(self, handler: HookHandler, priority: int = HookPriority.NORMAL) -> None:
        self.hooks.add(HookPhase.ENTER, handler, priority)

    def on_look(self, handler: HookHandler, priority: int = HookPriority.NORMAL) -> None:
        self.hooks.add(HookPhase.LOOK, handler, priority)

    def on_begin_turn(self, handler: HookHandler, priority: int = HookPriority.NORMAL) -> None:
        self.hooks.add(HookPhase.BEGIN_TURN, handler, priority)

    def on_end_turn(self, handler: HookHandler, priority: int = HookPriority.NORMAL) -> None:
        self.hooks.add(HookPhase.END_TURN, handler, priority)

    def on_flash(self, handler: HookHandler, priority: int = HookPriority.NORMAL) -> None:
        self.hooks.add(HookPhase.FLASH, handler, priority)

    def on_begin_command(self, handler: HookHandler, priority: int = HookPriority.NORMAL) -> None:
        self.hooks.add(HookPhase.BEGIN_COMMAND, handler, priority)

    def run_hook(self, phase: HookPhase | str) -> bool:
        """Dispatch a phase that takes only the location."""
        return self.hooks.dispatch(phase, self)

    def run_begin_command(self, command: "Command") -> bool:
        return self.hooks.dispatch(HookPhase.BEGIN_COMMAND, self, command)

    # Local globals

    def add_local_global(self, entity: Entity) -> None:
        """Make an entity reachable from this location without placing it here.

        Registers the entity as local-global with the owning world when it
        isn't already. Entities registered as fully global are left alone.
        """
        if self.world is not None:
            if self.world.is_global(entity, local=False):
                logger.warning(
                    "'%s' is already global; not adding it as local to '%s'",
                    entity.name,
                    self.name,
                )
                return
            if not self.world.is_global(entity):
                self.world.register_global(entity, local=True)
        if not any(e is entity for e in self._local_globals):
            self._local_globals.append(entity)

    def remove_local_global(self, entity: Entity) -> bool:
        for index, existing in enumerate(self._local_globals):
            if existing is entity:
                del self._local_globals[index]
                return True
        return False

    def has_local_global(self, entity: Entity) -> bool:
        return any(e is entity for e in self._local_globals)

    def accessible_local_globals(self) -> list[Entity]:
        return list(self._local_globals)
