"""Unit tests for descriptive text.

Tests cover:
- Special texts and current_description() precedence
- Visit counting and description modes
- Full room descriptions with contents and exits
- Container contents text
- Random text collections
"""

import random

import pytest

from lantern.engine.entity import Entity
from lantern.engine.location import Location
from lantern.engine.player import Player
from lantern.engine.text import (
    DEFAULT_CLOSED_TEXT,
    DEFAULT_DARK_DESCRIPTION,
    EMPTY_TEXT,
    NO_EXITS_TEXT,
    RandomTextCollection,
    TextKey,
    VisitState,
    add_random_text,
    contents_description,
    current_description,
    full_room_description,
    random_text,
    room_description,
    set_random_texts,
    set_visit_description,
)
from lantern.engine.world import World
from lantern.models.direction import Direction
from lantern.models.flags import Flag
from lantern.models.game import DescriptionMode


@pytest.fixture
def hall() -> Location:
    hall = Location("Hall", "A long hall.", flags=[Flag.NATURALLY_LIT])
    hall.set_text(TextKey.BRIEF, "The hall.")
    return hall


@pytest.fixture
def world(hall) -> World:
    return World(Player(hall))


class TestCurrentDescription:
    """Tests for current_description()."""

    def test_plain_description(self) -> None:
        """Without special texts the plain description is used."""
        assert current_description(Entity("rock", "A grey rock.")) == "A grey rock."

    def test_description_override(self) -> None:
        """The DESCRIPTION text overrides the constructor description."""
        rock = Entity("rock", "A grey rock.")
        rock.set_text(TextKey.DESCRIPTION, "A mossy rock.")

        assert current_description(rock) == "A mossy rock."

    def test_initial_on_first_visit(self) -> None:
        """INITIAL applies to the first visit only."""
        cave = Location("Cave", "A cave.")
        cave.set_text(TextKey.INITIAL, "You squeeze into a cave.")

        assert current_description(cave, visit_count=1) == "You squeeze into a cave."
        assert current_description(cave, visit_count=2) == "A cave."

    def test_visit_descriptions(self) -> None:
        """Visit-specific texts apply to their visit number."""
        cave = Location("Cave", "A cave.")
        set_visit_description(cave, 3, "The cave feels familiar.")

        assert current_description(cave, visit_count=3) == "The cave feels familiar."
        assert current_description(cave, visit_count=4) == "A cave."

    def test_darkness_wins(self) -> None:
        """Unlit, the DARK text (or the default) is shown."""
        cave = Location("Cave", "A cave.")
        assert current_description(cave, lit=False) == DEFAULT_DARK_DESCRIPTION

        cave.set_text(TextKey.DARK, "Something drips in the dark.")
        assert current_description(cave, lit=False) == "Something drips in the dark."


class TestRoomDescription:
    """Tests for room_description() and description modes."""

    def test_counts_visits(self, hall, world) -> None:
        """Each description counts as a visit."""
        room_description(hall, world)
        room_description(hall, world)

        assert hall.extension(VisitState).visits == 2

    def test_verbose_repeats_full_text(self, hall, world) -> None:
        """Verbose mode always gives the full description."""
        room_description(hall, world)

        assert room_description(hall, world) == "A long hall."

    def test_brief_uses_brief_text_on_revisit(self, hall, world) -> None:
        """Brief mode shows the BRIEF text after the first visit."""
        world.description_mode = DescriptionMode.BRIEF

        assert room_description(hall, world) == "A long hall."
        assert room_description(hall, world) == "The hall."

    def test_superbrief_shows_name_on_revisit(self, hall, world) -> None:
        """Superbrief mode shows just the name after the first visit."""
        world.description_mode = DescriptionMode.SUPERBRIEF
        room_description(hall, world)

        assert room_description(hall, world) == "Hall"

    def test_force_full_ignores_mode(self, hall, world) -> None:
        """force_full gives the full text whatever the mode."""
        world.description_mode = DescriptionMode.SUPERBRIEF
        room_description(hall, world)

        assert room_description(hall, world, force_full=True) == "A long hall."

    def test_force_brief(self, hall, world) -> None:
        """force_brief uses the BRIEF text in verbose mode."""
        room_description(hall, world)

        assert room_description(hall, world, force_brief=True) == "The hall."


class TestFullRoomDescription:
    """Tests for full_room_description()."""

    def test_lists_objects_and_exits(self, hall, world) -> None:
        """Visible objects and exits follow the description."""
        study = Location("Study")
        hall.set_exit(Direction.NORTH, study, bidirectional=True)
        hall.set_exit(Direction.EAST, study)
        box = Entity("box", flags=[Flag.CONTAINER, Flag.OPEN], location=hall)
        Entity("coin", location=box)
        Entity("dust", flags=[Flag.NO_DESCRIPTION], location=hall)

        text = full_room_description(hall, world)

        assert text == (
            "A long hall.\n"
            "\n"
            "You can see:\n"
            "  box\n"
            "    coin\n"
            "\n"
            "Exits: north, east"
        )

    def test_no_exits(self, hall, world) -> None:
        """A room without exits says so."""
        text = full_room_description(hall, world)

        assert text.endswith(NO_EXITS_TEXT)
        assert "You can see:" not in text

    def test_dark_room_hides_everything(self, world) -> None:
        """A dark room shows only its dark text."""
        cellar = Location("Cellar", "Barrels.")
        Entity("barrel", location=cellar)
        cellar.set_exit(Direction.UP, Location("Kitchen"))

        assert full_room_description(cellar, world) == DEFAULT_DARK_DESCRIPTION


class TestContentsDescription:
    """Tests for contents_description()."""

    def test_non_container(self) -> None:
        """Non-containers add nothing."""
        assert contents_description(Entity("rock")) == ""

    def test_closed_container(self) -> None:
        """A closed container says so, with its own text if set."""
        box = Entity("box", flags=[Flag.CONTAINER, Flag.OPENABLE])
        assert contents_description(box) == DEFAULT_CLOSED_TEXT

        box.set_text(TextKey.CLOSED, "The lid is shut tight.")
        assert contents_description(box) == "The lid is shut tight."

    def test_empty_and_full(self) -> None:
        """Open containers list their contents under the inside heading."""
        box = Entity("box", flags=[Flag.CONTAINER, Flag.OPEN])
        assert contents_description(box) == EMPTY_TEXT

        Entity("coin", location=box)
        box.set_text(TextKey.INSIDE, "The box holds:")
        assert contents_description(box) == "The box holds:\n  coin"


class TestRandomText:
    """Tests for random text collections."""

    def test_pick_from_options(self) -> None:
        """pick() returns one of the options."""
        collection = RandomTextCollection(["Drip.", "Plink."], rng=random.Random(7))

        for _ in range(10):
            assert collection.pick() in ("Drip.", "Plink.")

    def test_empty_collection(self) -> None:
        """An empty collection picks the empty string and is falsy."""
        collection = RandomTextCollection()

        assert collection.pick() == ""
        assert not collection

    def test_entity_random_texts(self) -> None:
        """Entities carry named collections."""
        cave = Location("Cave")
        set_random_texts(cave, "noise", ["Drip."], rng=random.Random(1))

        assert add_random_text(cave, "noise", "Plink.") is True
        assert add_random_text(cave, "smell", "Damp.") is False
        assert random_text(cave, "noise") in ("Drip.", "Plink.")
        assert random_text(cave, "smell") is None
