"""
Room action patterns - ready-made location hooks for common situations.

Each factory returns plain hook callables; content attaches them with the
Location.on_* methods at whatever priority it needs.

Patterns:
    - dynamic_lighting: darkness driven by an arbitrary predicate
    - lighting_change_handler: react when a room becomes lit or dark
    - light_switch: a switch entity that controls a room's light
    - random_atmosphere: occasional flavor text at the end of a turn
    - visit_counter: different descriptions per visit
    - command_interceptor: per-verb handlers for one room
    - scheduled_events: callbacks keyed by how many turns the room has seen

Example:
    >>> enter, look = dynamic_lighting(lambda: generator.flags.has(Flag.ON))
    >>> basement.on_enter(enter)
    >>> basement.on_look(look)
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Mapping

from lantern.engine.lighting import LightingState, became_dark, became_lit, is_lit
from lantern.models.command import CommandKind
from lantern.models.flags import Flag

if TYPE_CHECKING:
    from lantern.engine.entity import Entity
    from lantern.engine.location import Location
    from lantern.models.command import Command

RoomHook = Callable[["Location"], bool]
CommandHook = Callable[["Location", "Command"], bool]

ENTER_DARK_MESSAGE = "You enter a pitch-black room."
DARK_ROOM_DESCRIPTION = "It's pitch black here. You can't see anything."


@dataclass
class VisitCounter:
    """Visits counted by the visit_counter pattern."""

    count: int = 0


@dataclass
class RoomTurnCounter:
    """Turns counted by the scheduled_events pattern."""

    count: int = 0


def _emit(location: "Location", text: str) -> None:
    if location.world is not None:
        location.world.emit(text)


# Lighting


def dynamic_lighting(
    light_available: Callable[[], bool],
    enter_dark_message: str | None = ENTER_DARK_MESSAGE,
    enter_lit_message: str | None = None,
    dark_description: str = DARK_ROOM_DESCRIPTION,
) -> tuple[RoomHook, RoomHook]:
    """Enter and look hooks for a room lit by something outside the graph.

    Args:
        light_available: Whether the room has light right now
        enter_dark_message: Printed on entering while dark
        enter_lit_message: Printed on entering lit after it was last dark
        dark_description: Replaces the LOOK description while dark

    Returns:
        (enter_hook, look_hook)
    """

    def on_enter(room: "Location") -> bool:
        state = room.extension(LightingState)
        lit = light_available()
        was_lit = state.was_lit
        state.was_lit = lit
        if not lit and enter_dark_message is not None:
            _emit(room, enter_dark_message)
            return True
        if lit and not was_lit and enter_lit_message is not None:
            _emit(room, enter_lit_message)
            return True
        return False

    def on_look(room: "Location") -> bool:
        if not light_available():
            _emit(room, dark_description)
            return True
        return False

    return on_enter, on_look


def lighting_change_handler(
    on_lit: RoomHook | None = None,
    on_dark: RoomHook | None = None,
) -> RoomHook:
    """A begin_turn hook that calls on_lit / on_dark when the lighting flips.

    The first call only records the current state, so a room that starts
    lit doesn't report becoming lit. A callback returning True claims the
    command that started the turn.
    """
    primed: set[int] = set()

    def on_begin_turn(room: "Location") -> bool:
        if id(room) not in primed:
            primed.add(id(room))
            room.extension(LightingState).was_lit = is_lit(room)
            return False

        # Each edge check updates the cached state, so only ask the one that can fire
        handled = False
        if is_lit(room):
            if became_lit(room) and on_lit is not None:
                handled = on_lit(room)
        elif became_dark(room) and on_dark is not None:
            handled = on_dark(room)
        return handled

    return on_begin_turn


def light_switch(
    switch: "Entity",
    initially_on: bool = True,
    on_message: str = "Click! The lights turn on.",
    off_message: str = "Click! The lights turn off.",
) -> tuple[CommandHook, Callable[[], bool]]:
    """Make switch control a room's lights.

    The switch entity carries the on tag while the lights are on, so its
    state shows up anywhere tags are inspected.

    Returns:
        (begin_command_hook, light_available) - pair the second with
        dynamic_lighting() or a content-defined condition
    """
    if initially_on:
        switch.flags.set(Flag.ON)
    else:
        switch.flags.clear(Flag.ON)

    def on_command(room: "Location", command: "Command") -> bool:
        if not command.mentions(switch):
            return False
        is_on = switch.flags.has(Flag.ON)

        if command.kind == CommandKind.EXAMINE:
            _emit(room, f"A standard light switch. It's currently {'on' if is_on else 'off'}.")
            return True

        wanted: bool | None = None
        if command.kind == CommandKind.TURN_ON:
            wanted = True
        elif command.kind == CommandKind.TURN_OFF:
            wanted = False
        elif command.kind == CommandKind.FLIP:
            wanted = not is_on
        if wanted is None:
            return False

        if wanted == is_on:
            _emit(room, f"The {switch.name} is already {'on' if is_on else 'off'}.")
        elif wanted:
            switch.flags.set(Flag.ON)
            _emit(room, on_message)
        else:
            switch.flags.clear(Flag.ON)
            _emit(room, off_message)
        return True

    return on_command, lambda: switch.flags.has(Flag.ON)


# Atmosphere


def random_atmosphere(
    messages: list[str],
    chance: float = 0.3,
    rng: random.Random | None = None,
) -> RoomHook:
    """An end_turn hook that sometimes prints one of messages.

    Pass a seeded random.Random for reproducible output.
    """
    rng = rng or random.Random()

    def on_end_turn(room: "Location") -> bool:
        if not messages or rng.random() >= chance:
            return False
        _emit(room, rng.choice(messages))
        return True

    return on_end_turn


# State tracking


def visit_counter(descriptions: Mapping[int, str]) -> tuple[RoomHook, RoomHook]:
    """Enter and look hooks that describe a room by visit number.

    Args:
        descriptions: Visit number to description. Key 0 is the fallback
            for visits without their own entry.

    Returns:
        (enter_hook, look_hook)
    """

    def on_enter(room: "Location") -> bool:
        room.extension(VisitCounter).count += 1
        return False

    def on_look(room: "Location") -> bool:
        visits = room.extension(VisitCounter).count or 1
        text = descriptions.get(visits, descriptions.get(0))
        if text is None:
            return False
        _emit(room, text)
        return True

    return on_enter, on_look


# Command interception


def command_interceptor(
    handlers: Mapping[CommandKind | str, Callable[["Command"], bool]],
) -> CommandHook:
    """A begin_command hook that routes by verb.

    Keys are CommandKind values or custom verb names.
    """
    routes = {
        (key.value if isinstance(key, CommandKind) else key.lower()): handler
        for key, handler in handlers.items()
    }

    def on_command(room: "Location", command: "Command") -> bool:
        if command.kind == CommandKind.CUSTOM and command.verb:
            verb = command.verb.lower()
        else:
            verb = command.kind.value
        handler = routes.get(verb)
        return handler(command) if handler is not None else False

    return on_command


# Time


def scheduled_events(schedule: Mapping[int, Callable[[], bool]]) -> RoomHook:
    """An end_turn hook that fires schedule[n] on the room's n-th end of turn.

    Counting starts at 0 and only advances while the player is in the room.
    """

    def on_end_turn(room: "Location") -> bool:
        counter = room.extension(RoomTurnCounter)
        turn = counter.count
        counter.count += 1
        action = schedule.get(turn)
        return action() if action is not None else False

    return on_end_turn
