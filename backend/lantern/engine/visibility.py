"""
Accessibility resolver.

Computes which entities the player can currently reach, for the default
verb handlers' accessibility check and for name resolution by parsers.

Reach rules:
    - Everything in the inventory, descending into open or transparent
      containers and onto surfaces
    - Everything in the current location, with the same descent
    - Local-global entities listed on the current location
    - Global entities, from anywhere

The overlay entities are not part of any contents list; they are only
found here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lantern.models.flags import Flag

if TYPE_CHECKING:
    from lantern.engine.entity import Entity
    from lantern.engine.world import World


def _reachable_contents(container: "Entity") -> list["Entity"]:
    found: list[Entity] = []
    for obj in container.contents:
        found.append(obj)
        if obj.can_see_inside() or obj.flags.has(Flag.SURFACE):
            found.extend(_reachable_contents(obj))
    return found


class DefaultAccessibilityResolver:
    """Determines what the player can reach.

    Example:
        >>> resolver = DefaultAccessibilityResolver()
        >>> resolver.is_accessible(lamp, world)
        True
    """

    def inventory_entities(self, world: "World") -> list["Entity"]:
        return _reachable_contents(world.player)

    def location_entities(self, world: "World") -> list["Entity"]:
        """Entities in the current location, excluding the player and inventory."""
        return [
            obj
            for obj in _reachable_contents(world.current_location)
            if obj is not world.player and not obj.is_in(world.player)
        ]

    def overlay_entities(self, world: "World") -> list["Entity"]:
        here = world.current_location
        return [
            entity
            for entity in world.global_entities()
            if world.is_global_accessible(entity, here)
        ]

    def reachable_entities(self, world: "World") -> list["Entity"]:
        """Everything the player can reach, inventory first."""
        seen: set[int] = set()
        ordered: list[Entity] = []
        for group in (
            self.inventory_entities(world),
            self.location_entities(world),
            self.overlay_entities(world),
        ):
            for entity in group:
                if id(entity) not in seen:
                    seen.add(id(entity))
                    ordered.append(entity)
        return ordered

    def visible_entities(self, world: "World") -> list["Entity"]:
        """Reachable entities the player can see given the current lighting.

        In the dark only the inventory, active light sources, and the overlay
        are visible.
        """
        if world.is_lit():
            return self.reachable_entities(world)
        lights = [e for e in self.location_entities(world) if e.is_active_light]
        seen = {id(e) for e in lights}
        ordered = [e for e in self.inventory_entities(world) if id(e) not in seen]
        ordered.extend(lights)
        ordered.extend(e for e in self.overlay_entities(world) if id(e) not in seen)
        return ordered

    def is_accessible(self, entity: "Entity", world: "World") -> bool:
        if entity is world.player:
            return True
        if world.is_global(entity):
            return world.is_global_accessible(entity, world.current_location)
        return any(entity is e for e in self.reachable_entities(world))

    def find(self, name: str, world: "World") -> "Entity | None":
        """First visible entity answering to name, or None."""
        for entity in self.visible_entities(world):
            if entity.matches(name) and not entity.flags.has(Flag.INVISIBLE):
                return entity
        return None
