"""
World loader - Load YAML world definitions and build live worlds

A world lives in its own directory:

    worlds/<world_id>/
        world.yaml       name, version, player setup, victory condition
        locations.yaml   location id -> LocationDefinition
        items.yaml       item id -> ItemDefinition

Ids double as synonyms, so hosts and parsers can look entities up by id
with World.get_location() / World.get_entity().
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from lantern.config import get_worlds_dir
from lantern.engine.entity import Entity
from lantern.engine.errors import WorldDefinitionError
from lantern.engine.exits import (
    CONDITIONAL_EXIT_MESSAGE,
    LOCKED_EXIT_MESSAGE,
    UNLOCKED_EXIT_MESSAGE,
    SpecialExit,
    conditional_exit,
    deadly_exit,
    hidden_exit,
    locked_exit,
    one_way_exit,
    victory_exit,
)
from lantern.engine.location import Location
from lantern.engine.player import Player
from lantern.engine.text import TextKey, set_visit_description
from lantern.engine.world import World
from lantern.models.world import (
    PLAYER_LOCATION,
    EntityTexts,
    ExitRequirement,
    SpecialExitDefinition,
    WorldData,
    WorldInfo,
)

if TYPE_CHECKING:
    from lantern.engine.exits import ExitCondition
    from lantern.engine.protocols import OutputSink, WorldFactory

logger = logging.getLogger(__name__)


class WorldLoader:
    """Loads game worlds from YAML files"""

    def __init__(self, worlds_dir: str | Path | None = None):
        """Initialize with worlds directory path"""
        if worlds_dir is None:
            worlds_dir = get_worlds_dir()
        self.worlds_dir = Path(worlds_dir)

    def list_worlds(self) -> list[dict]:
        """List available worlds with metadata"""
        worlds = []

        if not self.worlds_dir.exists():
            return worlds

        for world_path in sorted(self.worlds_dir.iterdir()):
            if world_path.is_dir():
                world_yaml = world_path / "world.yaml"
                if world_yaml.exists():
                    try:
                        with open(world_yaml) as f:
                            data = yaml.safe_load(f) or {}
                    except (OSError, yaml.YAMLError) as e:
                        logger.warning("Skipping world '%s': %s", world_path.name, e)
                        continue
                    description = data.get("description", "")
                    worlds.append({
                        "id": world_path.name,
                        "name": data.get("name", world_path.name),
                        "description": description[:200] + "..." if len(description) > 200 else description,
                    })

        return worlds

    def load_world_data(self, world_id: str, validate: bool = True) -> WorldData:
        """
        Load a world definition from YAML files.

        Args:
            world_id: The world identifier (folder name in the worlds directory)
            validate: Whether to validate the world on load (default True)

        Returns:
            WorldData with all world content

        Raises:
            FileNotFoundError: If world doesn't exist
            WorldDefinitionError: If validation fails and validate=True
        """
        world_path = self.worlds_dir / world_id

        if not world_path.exists():
            raise FileNotFoundError(f"World '{world_id}' not found at {world_path}")

        world_data = WorldData(
            world=WorldInfo.model_validate(self._read_yaml(world_path / "world.yaml", required=True)),
            locations=self._read_yaml(world_path / "locations.yaml"),
            items=self._read_yaml(world_path / "items.yaml"),
        )

        if validate:
            from lantern.engine.validator import WorldValidator

            validator = WorldValidator(world_data, world_id)
            result = validator.validate()
            for warning in result.warnings:
                logger.warning("World '%s': %s", world_id, warning)
            if not result.is_valid:
                raise WorldDefinitionError(world_id, result.errors)

        logger.info(
            "Loaded world '%s' (%d locations, %d items)",
            world_id,
            len(world_data.locations),
            len(world_data.items),
        )
        return world_data

    def load_world(
        self, world_id: str, output: "OutputSink | None" = None, validate: bool = True
    ) -> World:
        """Load a world definition and build a playable World from it."""
        return build_world(self.load_world_data(world_id, validate=validate), output=output)

    def world_factory(self, world_id: str, validate: bool = True) -> "WorldFactory":
        """A factory that builds a fresh World from one loaded definition.

        The YAML is read once; each call builds a new, independent World,
        which is what GameEngine needs for RESTART.
        """
        world_data = self.load_world_data(world_id, validate=validate)
        return lambda: build_world(world_data)

    def _read_yaml(self, path: Path, required: bool = False) -> dict:
        if not path.exists():
            if required:
                raise FileNotFoundError(f"Missing world file {path}")
            return {}
        with open(path) as f:
            return yaml.safe_load(f) or {}


# Building


def _apply_texts(entity: Entity, texts: EntityTexts) -> None:
    for key, value in texts.model_dump().items():
        if value is not None:
            entity.set_text(TextKey(key), value)


def _requirement(entities: dict[str, Entity], requires: ExitRequirement | None) -> "ExitCondition | None":
    if requires is None:
        return None
    entity = entities[requires.entity]

    def condition(world: World) -> bool:
        return entity.flags.has(requires.flag) != requires.absent

    return condition


def _special_exit(
    definition: SpecialExitDefinition,
    locations: dict[str, Location],
    items: dict[str, Entity],
) -> SpecialExit:
    destination = locations.get(definition.destination) if definition.destination else None
    condition = _requirement(items, definition.requires)
    kind = definition.kind

    if kind == "hidden":
        return hidden_exit(
            destination,  # type: ignore[arg-type]
            revealed=condition or (lambda world: True),
            failure_message=definition.failure_message,
            success_message=definition.success_message,
        )
    if kind == "locked":
        special = locked_exit(
            destination,  # type: ignore[arg-type]
            key=items[definition.key],  # type: ignore[index]
            locked_message=definition.failure_message or LOCKED_EXIT_MESSAGE,
            unlocked_message=definition.success_message or UNLOCKED_EXIT_MESSAGE,
        )
    elif kind == "one_way":
        special = one_way_exit(
            destination,  # type: ignore[arg-type]
            message=definition.success_message or definition.message,
        )
    elif kind == "deadly":
        special = deadly_exit(
            definition.message or "You have died!", when=condition, destination=destination
        )
    elif kind == "victory":
        special = victory_exit(
            definition.message or "Congratulations! You have won!",
            when=condition,
            destination=destination,
        )
    else:
        special = conditional_exit(
            destination,  # type: ignore[arg-type]
            condition=condition or (lambda world: True),
            failure_message=definition.failure_message or CONDITIONAL_EXIT_MESSAGE,
            success_message=definition.success_message,
        )

    if not definition.visible:
        special = dataclasses.replace(special, visible=False)
    return special


def build_world(world_data: WorldData, output: "OutputSink | None" = None) -> World:
    """
    Build a live World from a validated definition.

    Args:
        world_data: The loaded definition
        output: Sink the World writes to until an engine takes it over

    Returns:
        A World with the player at the starting location
    """
    info = world_data.world

    locations: dict[str, Location] = {}
    for loc_id, definition in world_data.locations.items():
        location = Location(
            definition.name,
            definition.description,
            synonyms=[loc_id, *definition.synonyms],
            flags=definition.flags,
        )
        _apply_texts(location, definition.texts)
        for visit, text in definition.visit_descriptions.items():
            set_visit_description(location, visit, text)
        locations[loc_id] = location

    items: dict[str, Entity] = {}
    for item_id, definition in world_data.items.items():
        item = Entity(
            definition.name,
            definition.description,
            synonyms=[item_id, *definition.synonyms],
            flags=definition.flags,
            capacity=definition.capacity,
        )
        _apply_texts(item, definition.texts)
        items[item_id] = item

    player = Player(locations[info.player.starting_location])
    world = World(player, output=output, title=info.name, version=info.version)
    world.victory = info.victory

    # Placement happens once everything exists, so items can hold items
    for item_id, definition in world_data.items.items():
        item = items[item_id]
        if definition.key:
            item.set_key(items[definition.key])
        if definition.location == PLAYER_LOCATION:
            item.move_to(player)
        elif definition.location in locations:
            item.move_to(locations[definition.location])
        elif definition.location in items:
            item.move_to(items[definition.location])
    for item_id in info.player.starting_inventory:
        items[item_id].move_to(player)

    for loc_id, definition in world_data.locations.items():
        location = locations[loc_id]
        for direction, dest_id in definition.exits.items():
            location.set_exit(direction, locations[dest_id])
        for direction, special in definition.special_exits.items():
            location.set_special_exit(direction, _special_exit(special, locations, items))
        world.register_location(location)

    for item_id, definition in world_data.items.items():
        if definition.scope == "global":
            world.register_global(items[item_id])
        elif definition.scope == "local-global":
            world.register_global(items[item_id], local=True)
        else:
            world.register_entity(items[item_id])

    for loc_id, definition in world_data.locations.items():
        for global_id in definition.local_globals:
            locations[loc_id].add_local_global(items[global_id])

    return world
