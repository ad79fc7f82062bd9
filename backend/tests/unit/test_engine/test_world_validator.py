"""Unit tests for the world definition validator.

Tests cover:
- A consistent world validating cleanly
- Reference, direction, special-exit and containment errors
- Non-standard flag, local-global and reachability warnings
- The validator CLI
"""

import pytest

from lantern.engine.validator import ValidationResult, WorldValidator, main, validate_world
from lantern.models.world import (
    ItemDefinition,
    LocationDefinition,
    PlayerSetup,
    SpecialExitDefinition,
    WorldData,
    WorldInfo,
)


def make_world_data(**overrides) -> WorldData:
    """A two-room world; keyword overrides replace whole sections."""
    data = {
        "world": WorldInfo(name="Tiny", player=PlayerSetup(starting_location="kitchen")),
        "locations": {
            "kitchen": LocationDefinition(name="Kitchen", exits={"north": "pantry"}),
            "pantry": LocationDefinition(name="Pantry", exits={"south": "kitchen"}),
        },
        "items": {
            "jar": ItemDefinition(name="jar", flags=["container", "openable"], location="pantry"),
        },
    }
    data.update(overrides)
    return WorldData(**data)


def validate(data: WorldData) -> ValidationResult:
    return WorldValidator(data, "tiny").validate()


class TestValidWorlds:
    """Tests for worlds that pass."""

    def test_tiny_world(self) -> None:
        """A consistent world has no errors or warnings."""
        result = validate(make_world_data())

        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_fixture_worlds(self, worlds_dir) -> None:
        """The shipped fixture worlds validate cleanly."""
        for world_id in ("test-manor", "cloak-of-darkness"):
            result = validate_world(world_id, worlds_dir)
            assert result.is_valid, result.errors

    def test_warnings_do_not_invalidate(self) -> None:
        """Warnings alone leave a world valid."""
        result = ValidationResult(world_id="w")
        result.add_warning("odd")

        assert result.is_valid


class TestErrors:
    """Tests for validation errors."""

    def test_broken_fixture(self, worlds_dir) -> None:
        """Every problem in the broken fixture is reported."""
        result = validate_world("broken-world", worlds_dir)

        assert not result.is_valid
        for expected in [
            "Location 'room' has exit in unknown direction 'sideways'",
            "Location 'room' exit 'north' points to invalid location 'void'",
            "Item 'lamp' has invalid location 'attic'",
            "Player starting_location 'nowhere' is invalid",
            "Starting inventory contains invalid item 'ghost'",
            "Item 'lamp' has invalid key 'skeleton'",
            "Location 'room' lists invalid local-global 'phantom'",
            "Victory item 'grail' is invalid",
            "Location 'room' special exit 'east' is locked but names no key",
            "Item 'box' is part of a containment loop",
            "Item 'bag' is part of a containment loop",
        ]:
            assert expected in result.errors

    def test_special_exit_references(self) -> None:
        """Special exits must point at real locations and items."""
        kitchen = LocationDefinition(
            name="Kitchen",
            special_exits={
                "down": SpecialExitDefinition(kind="locked", destination="cellar", key="crowbar"),
                "up": SpecialExitDefinition(
                    kind="conditional",
                    destination="kitchen",
                    requires={"entity": "rope", "flag": "tied"},
                ),
            },
        )

        result = validate(make_world_data(locations={"kitchen": kitchen}))

        assert "Location 'kitchen' special exit 'down' points to invalid location 'cellar'" in result.errors
        assert "Location 'kitchen' special exit 'down' uses invalid key 'crowbar'" in result.errors
        assert "Location 'kitchen' special exit 'up' requires invalid item 'rope'" in result.errors

    def test_exit_needs_destination(self) -> None:
        """Passable exit kinds need somewhere to go."""
        kitchen = LocationDefinition(
            name="Kitchen", special_exits={"west": SpecialExitDefinition(kind="one_way")}
        )

        result = validate(make_world_data(locations={"kitchen": kitchen}))

        assert "Location 'kitchen' special exit 'west' (one_way) needs a destination" in result.errors

    def test_victory_location(self) -> None:
        """The victory location must exist."""
        info = WorldInfo(
            name="Tiny",
            player=PlayerSetup(starting_location="kitchen"),
            victory={"location": "throne-room"},
        )

        result = validate(make_world_data(world=info))

        assert result.errors == ["Victory location 'throne-room' is invalid"]


class TestWarnings:
    """Tests for validation warnings."""

    def test_non_standard_flag(self) -> None:
        """Unknown tags are warned about; ZIL aliases are not."""
        items = {
            "jar": ItemDefinition(name="jar", flags=["contBit", "sparkly"], location="pantry"),
        }

        result = validate(make_world_data(items=items))

        assert result.is_valid
        assert result.warnings == ["Item 'jar' uses non-standard flag 'sparkly'"]

    def test_unreachable_location(self) -> None:
        """Locations with no way in are reported."""
        locations = {
            "kitchen": LocationDefinition(name="Kitchen"),
            "attic": LocationDefinition(name="Attic", exits={"down": "kitchen"}),
        }

        result = validate(make_world_data(locations=locations, items={}))

        assert result.warnings == ["Location 'attic' cannot be reached from the starting location"]

    def test_special_exit_warnings(self) -> None:
        """Requirement-free conditional exits and silent endings are flagged."""
        kitchen = LocationDefinition(
            name="Kitchen",
            exits={"north": "pantry"},
            special_exits={
                "east": SpecialExitDefinition(kind="conditional", destination="pantry"),
                "down": SpecialExitDefinition(kind="deadly"),
            },
        )
        locations = {"kitchen": kitchen, "pantry": LocationDefinition(name="Pantry")}

        result = validate(make_world_data(locations=locations, items={}))

        assert result.is_valid
        assert "Location 'kitchen' special exit 'east' (conditional) has no requirement and is always open" in result.warnings
        assert "Location 'kitchen' special exit 'down' (deadly) has no ending message" in result.warnings

    def test_local_global_scope_mismatch(self) -> None:
        """Listing an item as local-global without that scope is suspicious."""
        locations = {
            "kitchen": LocationDefinition(name="Kitchen", local_globals=["window"]),
        }
        items = {"window": ItemDefinition(name="window")}

        result = validate(make_world_data(locations=locations, items=items))

        assert result.is_valid
        assert result.warnings == [
            "Location 'kitchen' lists 'window' as local-global but the item's scope is not 'local-global'"
        ]


class TestCli:
    """Tests for the lantern-validate entry point."""

    def test_valid_world_exits_zero(self, worlds_dir, monkeypatch, capsys) -> None:
        """A valid world prints a success line and exits 0."""
        monkeypatch.setenv("LANTERN_WORLDS_DIR", str(worlds_dir))
        monkeypatch.setattr("sys.argv", ["lantern-validate", "test-manor"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 0
        assert "World is valid!" in capsys.readouterr().out

    def test_invalid_world_exits_one(self, worlds_dir, monkeypatch, capsys) -> None:
        """An invalid world lists its errors and exits 1."""
        monkeypatch.setenv("LANTERN_WORLDS_DIR", str(worlds_dir))
        monkeypatch.setattr("sys.argv", ["lantern-validate", "broken-world"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        out = capsys.readouterr().out
        assert exc_info.value.code == 1
        assert "ERRORS" in out

    def test_missing_argument(self, monkeypatch) -> None:
        """Without a world id the usage is shown."""
        monkeypatch.setattr("sys.argv", ["lantern-validate"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
