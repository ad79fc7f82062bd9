"""
World Validator - Validates consistency of YAML world definitions

Checks:
- Location references: exits, special exits, item locations, the starting
  location and the victory location point at real locations
- Item references: starting inventory, keys, exit requirements, local
  globals and the victory item point at real items
- Directions: exit keys name real directions
- Containment: items placed inside items never form a loop
- Special exits: each kind carries the fields it needs
- Flags and reachability: unknown tags and unreachable locations (warnings)
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path

from lantern.config import configure_logging
from lantern.models.direction import Direction
from lantern.models.flags import Flag, normalize_flag
from lantern.models.world import PLAYER_LOCATION, WorldData

KNOWN_FLAGS = {flag.value for flag in Flag}


@dataclass
class ValidationResult:
    """Result of world validation"""

    world_id: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """World is valid if there are no errors (warnings are OK)"""
        return len(self.errors) == 0

    def add_error(self, message: str):
        self.errors.append(message)

    def add_warning(self, message: str):
        self.warnings.append(message)


class WorldValidator:
    """Validates world definition consistency"""

    def __init__(self, world_data: WorldData, world_id: str):
        self.world_data = world_data
        self.world_id = world_id
        self.result = ValidationResult(world_id=world_id)

    def validate(self) -> ValidationResult:
        """Run all validation checks"""
        self._validate_directions()
        self._validate_location_references()
        self._validate_item_references()
        self._validate_special_exits()
        self._validate_containment()
        self._detect_unknown_flags()
        self._detect_unreachable_locations()

        return self.result

    def _validate_directions(self):
        """Check that every exit key names a direction"""
        for loc_id, location in self.world_data.locations.items():
            for direction in [*location.exits, *location.special_exits]:
                try:
                    Direction.parse(direction)
                except ValueError:
                    self.result.add_error(
                        f"Location '{loc_id}' has exit in unknown direction '{direction}'"
                    )

    def _validate_location_references(self):
        """Validate all location references are valid"""
        valid_locations = set(self.world_data.locations.keys())
        valid_items = set(self.world_data.items.keys())

        # Check exits
        for loc_id, location in self.world_data.locations.items():
            for direction, dest_id in location.exits.items():
                if dest_id not in valid_locations:
                    self.result.add_error(
                        f"Location '{loc_id}' exit '{direction}' points to invalid location '{dest_id}'"
                    )
            for direction, special in location.special_exits.items():
                if special.destination and special.destination not in valid_locations:
                    self.result.add_error(
                        f"Location '{loc_id}' special exit '{direction}' points to invalid location '{special.destination}'"
                    )

        # Check item locations: a location, another item, or the player
        for item_id, item in self.world_data.items.items():
            if item.location is None or item.location == PLAYER_LOCATION:
                continue
            if item.location not in valid_locations and item.location not in valid_items:
                self.result.add_error(
                    f"Item '{item_id}' has invalid location '{item.location}'"
                )

        # Check starting location
        starting_loc = self.world_data.world.player.starting_location
        if starting_loc not in valid_locations:
            self.result.add_error(
                f"Player starting_location '{starting_loc}' is invalid"
            )

        # Check victory location
        if self.world_data.world.victory and self.world_data.world.victory.location:
            if self.world_data.world.victory.location not in valid_locations:
                self.result.add_error(
                    f"Victory location '{self.world_data.world.victory.location}' is invalid"
                )

    def _validate_item_references(self):
        """Validate all item references are valid"""
        valid_items = set(self.world_data.items.keys())

        # Check starting inventory
        for item_id in self.world_data.world.player.starting_inventory:
            if item_id not in valid_items:
                self.result.add_error(
                    f"Starting inventory contains invalid item '{item_id}'"
                )

        # Check keys
        for item_id, item in self.world_data.items.items():
            if item.key and item.key not in valid_items:
                self.result.add_error(
                    f"Item '{item_id}' has invalid key '{item.key}'"
                )

        for loc_id, location in self.world_data.locations.items():
            # Check local globals
            for global_id in location.local_globals:
                if global_id not in valid_items:
                    self.result.add_error(
                        f"Location '{loc_id}' lists invalid local-global '{global_id}'"
                    )
                elif self.world_data.items[global_id].scope != "local-global":
                    self.result.add_warning(
                        f"Location '{loc_id}' lists '{global_id}' as local-global but the item's scope is not 'local-global'"
                    )

            # Check special exit keys and requirements
            for direction, special in location.special_exits.items():
                if special.key and special.key not in valid_items:
                    self.result.add_error(
                        f"Location '{loc_id}' special exit '{direction}' uses invalid key '{special.key}'"
                    )
                if special.requires and special.requires.entity not in valid_items:
                    self.result.add_error(
                        f"Location '{loc_id}' special exit '{direction}' requires invalid item '{special.requires.entity}'"
                    )

        # Check victory item
        if self.world_data.world.victory and self.world_data.world.victory.item:
            if self.world_data.world.victory.item not in valid_items:
                self.result.add_error(
                    f"Victory item '{self.world_data.world.victory.item}' is invalid"
                )

    def _validate_special_exits(self):
        """Check each special exit kind has what it needs"""
        for loc_id, location in self.world_data.locations.items():
            for direction, special in location.special_exits.items():
                label = f"Location '{loc_id}' special exit '{direction}'"
                if special.kind in ("hidden", "locked", "one_way", "conditional") and not special.destination:
                    self.result.add_error(f"{label} ({special.kind}) needs a destination")
                if special.kind == "locked" and not special.key:
                    self.result.add_error(f"{label} is locked but names no key")
                if special.kind in ("hidden", "conditional") and special.requires is None:
                    self.result.add_warning(f"{label} ({special.kind}) has no requirement and is always open")
                if special.kind in ("deadly", "victory") and not special.message:
                    self.result.add_warning(f"{label} ({special.kind}) has no ending message")

    def _validate_containment(self):
        """Items placed inside other items must not form a loop"""
        items = self.world_data.items
        for item_id in items:
            seen = {item_id}
            current = items[item_id].location
            while current in items:
                if current in seen:
                    self.result.add_error(
                        f"Item '{item_id}' is part of a containment loop"
                    )
                    break
                seen.add(current)
                current = items[current].location

    def _detect_unknown_flags(self):
        """Flags outside the standard set are allowed, but often typos (warnings only)"""
        entries = [
            *(("location", loc_id, loc.flags) for loc_id, loc in self.world_data.locations.items()),
            *(("item", item_id, item.flags) for item_id, item in self.world_data.items.items()),
        ]
        for kind, entry_id, flags in entries:
            for flag in flags:
                if normalize_flag(flag) not in KNOWN_FLAGS:
                    self.result.add_warning(
                        f"{kind.capitalize()} '{entry_id}' uses non-standard flag '{flag}'"
                    )

    def _detect_unreachable_locations(self):
        """Locations no exit leads to (warnings only)"""
        start = self.world_data.world.player.starting_location
        reachable = {start}
        frontier = [start]
        while frontier:
            location = self.world_data.locations.get(frontier.pop())
            if location is None:
                continue
            targets = list(location.exits.values())
            targets.extend(s.destination for s in location.special_exits.values() if s.destination)
            for dest_id in targets:
                if dest_id not in reachable:
                    reachable.add(dest_id)
                    frontier.append(dest_id)

        for loc_id in self.world_data.locations:
            if loc_id not in reachable:
                self.result.add_warning(
                    f"Location '{loc_id}' cannot be reached from the starting location"
                )


def validate_world(
    world_id: str, worlds_dir: str | Path | None = None
) -> ValidationResult:
    """
    Validate a world definition for consistency.

    Args:
        world_id: The world identifier (folder name in the worlds directory)
        worlds_dir: Optional path to worlds directory

    Returns:
        ValidationResult with errors and warnings
    """
    from lantern.engine.loader import WorldLoader

    loader = WorldLoader(worlds_dir)
    world_data = loader.load_world_data(world_id, validate=False)

    validator = WorldValidator(world_data, world_id)
    return validator.validate()


def main():
    """CLI entry point for world validation"""
    if len(sys.argv) < 2:
        print("Usage: python -m lantern.engine.validator <world_id>")
        print("Example: python -m lantern.engine.validator cloak-of-darkness")
        sys.exit(1)

    configure_logging()
    world_id = sys.argv[1]

    try:
        result = validate_world(world_id)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Print results
    print(f"\n{'='*60}")
    print(f"World Validation: {world_id}")
    print(f"{'='*60}\n")

    if result.errors:
        print(f"ERRORS ({len(result.errors)}):")
        for error in result.errors:
            print(f"  ❌ {error}")
        print()

    if result.warnings:
        print(f"WARNINGS ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  ⚠️  {warning}")
        print()

    if result.is_valid:
        print("✅ World is valid!")
        if result.warnings:
            print(f"   (but has {len(result.warnings)} warning(s))")
    else:
        print(f"❌ World has {len(result.errors)} error(s)")

    sys.exit(0 if result.is_valid else 1)


if __name__ == "__main__":
    main()
