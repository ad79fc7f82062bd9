"""
The player entity and movement resolution.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from lantern.engine.entity import Entity
from lantern.engine.hooks import HookPhase
from lantern.models.direction import Direction

if TYPE_CHECKING:
    from lantern.engine.location import Location

logger = logging.getLogger(__name__)


class MoveOutcome(str, Enum):
    """Result of Player.move()."""

    MOVED = "moved"            # Player is in a new location
    BLOCKED = "blocked"        # A special exit's condition failed
    NO_EXIT = "no_exit"        # Nothing leads that way
    TERMINATED = "terminated"  # Exit ran its side-effect but leads nowhere, or ended the game


class Player(Entity):
    """The entity the commands act through.

    The player always stands in a Location. Its direct contents are the
    inventory.
    """

    def __init__(
        self,
        starting_location: "Location",
        name: str = "player",
        description: str = "As good-looking as ever.",
    ):
        super().__init__(name, description, synonyms=["me", "myself", "self"])
        self.move_to(starting_location)

    @property
    def current_location(self) -> "Location":
        return self.location  # type: ignore[return-value]

    @property
    def inventory(self) -> tuple[Entity, ...]:
        return self.contents

    def is_carrying(self, entity: Entity) -> bool:
        """Whether entity is directly in the inventory."""
        return entity.location is self

    def has(self, entity: Entity) -> bool:
        """Whether entity is anywhere inside the inventory, containers included."""
        return entity.is_in(self)

    def move(self, direction: Direction | str) -> MoveOutcome:
        """Try to leave the current location in a direction.

        Special exits are consulted first. A failing condition prints the
        exit's failure message (if any) and leaves everything unchanged. A
        passing one prints its success message, runs its side-effect, then
        relocates the player and fires the destination's enter hook. Plain
        exits relocate silently; a missing exit reports NO_EXIT and prints
        nothing.
        """
        direction = Direction.parse(direction)
        here = self.current_location
        world = self.world

        special = here.get_special_exit(direction)
        if special is not None:
            if world is None or not special.is_passable(world):
                if special.failure_message and world is not None:
                    world.emit(special.failure_message)
                logger.debug("Special exit %s from %s blocked", direction.value, here.name)
                return MoveOutcome.BLOCKED
            if special.success_message:
                world.emit(special.success_message)
            special.traverse(world)
            if special.destination is None or world.is_game_over:
                return MoveOutcome.TERMINATED
            self._arrive(special.destination)
            return MoveOutcome.MOVED

        destination = here.get_exit(direction)
        if destination is None:
            return MoveOutcome.NO_EXIT
        self._arrive(destination)
        return MoveOutcome.MOVED

    def _arrive(self, destination: "Location") -> None:
        self.move_to(destination)
        logger.debug("Player entered %s", destination.name)
        destination.run_hook(HookPhase.ENTER)
