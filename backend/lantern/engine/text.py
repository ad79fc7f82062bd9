"""
Descriptive text - special texts, visit-based descriptions, random text,
and room description assembly.

Entities can carry alternative texts keyed by TextKey (an initial
description for the first visit, a brief description for revisits, a dark
description, and so on). Rooms additionally count visits so descriptions can
change over time.

Key concepts:
    - TextKey: Names of the special texts an entity can carry
    - EntityText: Extension state holding an entity's special texts
    - VisitState: Extension state counting how often a location was described
    - RandomTextCollection: Picks one of several strings at random
    - room_description() / full_room_description(): What LOOK prints
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from lantern.engine.entity import Entity
    from lantern.engine.location import Location
    from lantern.engine.world import World

DEFAULT_DARK_DESCRIPTION = "It's too dark to see."
DEFAULT_CLOSED_TEXT = "It's closed."
DEFAULT_INSIDE_TEXT = "Inside you see:"
EMPTY_TEXT = "It's empty."
NO_EXITS_TEXT = "There are no obvious exits."


class TextKey(str, Enum):
    """Special texts an entity may carry."""

    DESCRIPTION = "description"  # Overrides the constructor description
    BRIEF = "brief"              # Revisits in brief mode
    INITIAL = "initial"          # First visit / first sighting
    DARK = "dark"                # Shown instead of the description in darkness
    DETAIL = "detail"            # Extra text after EXAMINE
    READ = "read"                # Text printed by READ
    INSIDE = "inside"            # Heading for container contents
    ON = "on"                    # Heading for surface contents
    CLOSED = "closed"            # Container is closed
    OPEN = "open"                # Container is open
    DECORATION = "decoration"


class RandomTextCollection:
    """A set of strings to pick from at random.

    Pass a seeded random.Random for reproducible output in tests.

    Example:
        >>> drips = RandomTextCollection(["Drip.", "Plink."], rng=random.Random(7))
        >>> drips.pick() in ("Drip.", "Plink.")
        True
    """

    def __init__(self, options: Iterable[str] = (), rng: random.Random | None = None):
        self._options = list(options)
        self._rng = rng or random.Random()

    def pick(self) -> str:
        """One option at random, or an empty string when there are none."""
        if not self._options:
            return ""
        return self._rng.choice(self._options)

    def add(self, option: str) -> None:
        self._options.append(option)

    @property
    def options(self) -> list[str]:
        return list(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __bool__(self) -> bool:
        return bool(self._options)


@dataclass
class EntityText:
    """Special texts attached to one entity."""

    texts: dict[TextKey, str] = field(default_factory=dict)
    visit_descriptions: dict[int, str] = field(default_factory=dict)
    random_texts: dict[str, RandomTextCollection] = field(default_factory=dict)

    def set(self, key: TextKey, text: str) -> None:
        self.texts[TextKey(key)] = text

    def get(self, key: TextKey) -> str | None:
        return self.texts.get(TextKey(key))


@dataclass
class VisitState:
    """How many times a location has been described to the player."""

    visits: int = 0


# Random text helpers


def set_random_texts(
    entity: "Entity", key: str, options: Iterable[str], rng: random.Random | None = None
) -> RandomTextCollection:
    collection = RandomTextCollection(options, rng=rng)
    entity.extension(EntityText).random_texts[key] = collection
    return collection


def add_random_text(entity: "Entity", key: str, text: str) -> bool:
    """Append an option to an existing collection. Returns False if there is none."""
    collection = entity.extension(EntityText).random_texts.get(key)
    if collection is None:
        return False
    collection.add(text)
    return True


def random_text(entity: "Entity", key: str) -> str | None:
    collection = entity.extension(EntityText).random_texts.get(key)
    if collection is None:
        return None
    return collection.pick()


def set_visit_description(entity: "Entity", visit: int, text: str) -> None:
    entity.extension(EntityText).visit_descriptions[visit] = text


# Descriptions


def current_description(entity: "Entity", visit_count: int | None = None, lit: bool = True) -> str:
    """The description that applies right now.

    Darkness wins, then the initial text on a first visit, then a
    visit-specific text, then the DESCRIPTION override, then the plain
    description.
    """
    if not lit:
        return entity.get_text(TextKey.DARK) or DEFAULT_DARK_DESCRIPTION

    texts = entity.get_extension(EntityText)
    if visit_count is not None and texts is not None:
        if visit_count == 1 and texts.get(TextKey.INITIAL):
            return texts.get(TextKey.INITIAL)  # type: ignore[return-value]
        if visit_count in texts.visit_descriptions:
            return texts.visit_descriptions[visit_count]

    return entity.get_text(TextKey.DESCRIPTION) or entity.description


def contents_description(entity: "Entity") -> str:
    """What EXAMINE adds for a container, or an empty string for anything else."""
    if not entity.is_container:
        return ""
    if not entity.can_see_inside():
        return entity.get_text(TextKey.CLOSED) or DEFAULT_CLOSED_TEXT
    visible = [e for e in entity.contents if not e.flags.has("invisible")]
    if not visible:
        return EMPTY_TEXT
    prefix = entity.get_text(TextKey.INSIDE) or DEFAULT_INSIDE_TEXT
    return "\n".join([prefix, *(f"  {e.name}" for e in visible)])


def room_description(
    location: "Location",
    world: "World",
    force_brief: bool = False,
    force_full: bool = False,
) -> str:
    """Describe a location and count the visit.

    Brief mode (or force_brief) uses the BRIEF text on revisits when one is
    set. Superbrief mode shows only the room name on revisits. force_full
    ignores the description mode, as an explicit LOOK does.
    """
    from lantern.engine.lighting import is_lit
    from lantern.models.game import DescriptionMode

    lit = is_lit(location)
    visits = location.extension(VisitState)
    previous = visits.visits
    visits.visits += 1

    if lit and previous > 0 and not force_full:
        if world.description_mode == DescriptionMode.SUPERBRIEF:
            return location.name
        if force_brief or world.description_mode == DescriptionMode.BRIEF:
            brief = location.get_text(TextKey.BRIEF)
            if brief:
                return brief

    return current_description(location, visit_count=previous + 1, lit=lit)


def full_room_description(
    location: "Location",
    world: "World",
    force_brief: bool = False,
    force_full: bool = False,
) -> str:
    """Room description plus visible objects and exits. Dark rooms show neither."""
    from lantern.engine.lighting import is_lit

    result = room_description(location, world, force_brief=force_brief, force_full=force_full)
    if not is_lit(location):
        return result

    listed = [
        obj
        for obj in location.contents
        if obj is not world.player and not obj.flags.has_any("invisible", "no-description")
    ]
    if listed:
        lines = ["", "You can see:"]
        for obj in listed:
            lines.append(f"  {obj.name}")
            if obj.can_see_inside():
                lines.extend(f"    {inner.name}" for inner in obj.contents)
        result += "\n" + "\n".join(lines)

    directions = location.visible_exit_directions()
    if directions:
        result += "\n\nExits: " + ", ".join(d.value for d in directions)
    else:
        result += "\n\n" + NO_EXITS_TEXT
    return result
