"""
Lighting derivation.

Whether a location is lit is computed from the graph every time it is
asked, never stored. Only the previous answer is cached (in LightingState)
so content can react to the moment a room becomes lit or dark.

A location is lit when, checked in order:
    1. it carries the naturally-lit tag
    2. it is itself an active light source (light-source + on)
    3. something directly inside it is an active light source
    4. the player is there and carries an active light source
    5. an open or transparent container directly inside it holds one
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lantern.models.flags import Flag

if TYPE_CHECKING:
    from lantern.engine.entity import Entity
    from lantern.engine.location import Location
    from lantern.engine.player import Player

logger = logging.getLogger(__name__)


@dataclass
class LightingState:
    """Last observed lit state of a location."""

    was_lit: bool = False


def _player_for(location: "Location") -> "Player | None":
    world = location.world
    return world.player if world is not None else None


def is_lit(location: "Location", player: "Player | None" = None) -> bool:
    """Whether the player could see in this location right now."""
    if location.flags.has(Flag.NATURALLY_LIT):
        return True
    if location.is_active_light:
        return True
    if any(obj.is_active_light for obj in location.contents):
        return True

    player = player or _player_for(location)
    if player is not None and player.location is location:
        if any(obj.is_active_light for obj in player.contents):
            return True

    for container in location.contents:
        if container.can_see_inside():
            if any(obj.is_active_light for obj in container.contents):
                return True
    return False


def became_lit(location: "Location") -> bool:
    """True exactly once after a location turns from dark to lit.

    Updates the cached state, so a second call without an intervening
    change returns False.
    """
    state = location.extension(LightingState)
    now = is_lit(location)
    changed = now and not state.was_lit
    state.was_lit = now
    if changed:
        logger.debug("%s became lit", location.name)
    return changed


def became_dark(location: "Location") -> bool:
    """True exactly once after a location turns from lit to dark."""
    state = location.extension(LightingState)
    now = is_lit(location)
    changed = state.was_lit and not now
    state.was_lit = now
    if changed:
        logger.debug("%s became dark", location.name)
    return changed


def reset_lighting_state(location: "Location") -> None:
    location.extension(LightingState).was_lit = False


def available_light_sources(location: "Location", player: "Player | None" = None) -> list["Entity"]:
    """Light sources, lit or not, that could light this location."""
    sources: list[Entity] = []
    if location.is_light_source:
        sources.append(location)
    sources.extend(obj for obj in location.contents if obj.is_light_source)
    player = player or _player_for(location)
    if player is not None and player.location is location:
        sources.extend(obj for obj in player.contents if obj.is_light_source)
    return sources


def turn_on_all_player_lights(player: "Player") -> bool:
    """Switch on every carried light source. Returns whether any changed."""
    changed = False
    for obj in player.contents:
        changed = obj.turn_light_on() or changed
    return changed


def turn_off_all_player_lights(player: "Player") -> bool:
    changed = False
    for obj in player.contents:
        changed = obj.turn_light_off() or changed
    return changed
