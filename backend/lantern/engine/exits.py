"""
Special exits - conditional, message-bearing alternatives to plain exits.

A SpecialExit registered for a direction is consulted before the plain exit
map. Its condition decides whether the player may pass; on success the
optional traversal side-effect runs before the player is relocated.

Builders cover the common shapes:
    - hidden_exit: not advertised, passable once a condition holds
    - locked_exit: passable while the player carries a key
    - one_way_exit: plain passage with an optional message
    - scripted_exit: runs a callback on traversal
    - conditional_exit: passable while a condition holds
    - deadly_exit: ends the game in defeat
    - victory_exit: ends the game in victory

Example:
    >>> cellar.set_special_exit(
    ...     Direction.DOWN,
    ...     locked_exit(vault, key=iron_key),
    ... )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from lantern.engine.entity import Entity
    from lantern.engine.location import Location
    from lantern.engine.world import World

ExitCondition = Callable[["World"], bool]
ExitAction = Callable[["World"], None]

LOCKED_EXIT_MESSAGE = "That way seems to be locked."
UNLOCKED_EXIT_MESSAGE = "You unlock the passage with the key."
CONDITIONAL_EXIT_MESSAGE = "You can't go that way right now."


def _always(world: "World") -> bool:
    return True


@dataclass(frozen=True)
class SpecialExit:
    """A conditional exit.

    Attributes:
        destination: Where the player ends up; None for exits that end the game
        condition: Whether the exit is passable in the current world
        success_message: Printed before the player moves
        failure_message: Printed when the condition fails
        on_traverse: Side-effect run after the success message
        visible: Whether LOOK lists this direction
    """

    destination: "Location | None"
    condition: ExitCondition = _always
    success_message: str | None = None
    failure_message: str | None = None
    on_traverse: ExitAction | None = None
    visible: bool = True

    @property
    def terminal(self) -> bool:
        return self.destination is None

    def is_passable(self, world: "World") -> bool:
        return bool(self.condition(world))

    def traverse(self, world: "World") -> None:
        if self.on_traverse is not None:
            self.on_traverse(world)


def hidden_exit(
    destination: "Location",
    revealed: ExitCondition,
    failure_message: str | None = None,
    success_message: str | None = None,
) -> SpecialExit:
    """An exit that isn't listed and only works once revealed(world) holds."""
    return SpecialExit(
        destination=destination,
        condition=revealed,
        success_message=success_message,
        failure_message=failure_message,
        visible=False,
    )


def locked_exit(
    destination: "Location",
    key: "Entity",
    locked_message: str = LOCKED_EXIT_MESSAGE,
    unlocked_message: str = UNLOCKED_EXIT_MESSAGE,
) -> SpecialExit:
    """An exit that opens while the player carries key in their inventory."""

    def has_key(world: "World") -> bool:
        return key.location is world.player

    return SpecialExit(
        destination=destination,
        condition=has_key,
        success_message=unlocked_message,
        failure_message=locked_message,
    )


def one_way_exit(destination: "Location", message: str | None = None) -> SpecialExit:
    """A passage with no automatic way back."""
    return SpecialExit(destination=destination, success_message=message)


def scripted_exit(
    destination: "Location",
    script: ExitAction,
    condition: ExitCondition = _always,
    success_message: str | None = None,
    failure_message: str | None = None,
) -> SpecialExit:
    return SpecialExit(
        destination=destination,
        condition=condition,
        success_message=success_message,
        failure_message=failure_message,
        on_traverse=script,
    )


def conditional_exit(
    destination: "Location",
    condition: ExitCondition,
    failure_message: str = CONDITIONAL_EXIT_MESSAGE,
    success_message: str | None = None,
) -> SpecialExit:
    return SpecialExit(
        destination=destination,
        condition=condition,
        success_message=success_message,
        failure_message=failure_message,
    )


def deadly_exit(
    death_message: str,
    when: ExitCondition | None = None,
    destination: "Location | None" = None,
) -> SpecialExit:
    """An exit that kills the player.

    Args:
        death_message: Shown by the game-over transition
        when: Optional condition; while it is False the exit is harmless and
            leads to destination (or nowhere)
        destination: Where a harmless traversal leads
    """

    def kill(world: "World") -> None:
        if when is None or when(world):
            world.player_died(death_message)

    return SpecialExit(destination=destination, on_traverse=kill)


def victory_exit(
    victory_message: str,
    when: ExitCondition | None = None,
    destination: "Location | None" = None,
) -> SpecialExit:
    """An exit that wins the game."""

    def win(world: "World") -> None:
        if when is None or when(world):
            world.player_won(victory_message)

    return SpecialExit(destination=destination, on_traverse=win)
