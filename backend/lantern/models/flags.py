"""
Capability flags for world entities.

Entities carry a set of symbolic tags instead of a class hierarchy. The
default verb handlers decide what an entity can do purely by testing which
tags it holds, e.g. "eat" requires ``edible`` and "open" requires
``openable``.

Key concepts:
    - Flag: The canonical tag names used by the engine
    - FlagSet: The per-entity set of tags with a small membership API
    - normalize_flag(): Maps ZIL-style aliases (``contBit``) onto tag names

Example:
    >>> flags = FlagSet([Flag.CONTAINER, Flag.OPENABLE])
    >>> flags.has(Flag.CONTAINER)
    True
    >>> flags.has_all(Flag.CONTAINER, Flag.OPEN)
    False
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator


class Flag(str, Enum):
    """Canonical capability tags understood by the engine.

    Categories:
        Containers: CONTAINER, OPEN, OPENABLE, TRANSPARENT, SURFACE, LOCKED
        Items: TAKEABLE, EDIBLE, DRINKABLE, READABLE, WEARABLE, WORN, TOOL
        Devices: DEVICE, ON, LIGHT_SOURCE
        Locations: NATURALLY_LIT
        Characters: PERSON, FEMALE, ACTOR
        Presentation: INVISIBLE, PLURAL, VOWEL, NO_ARTICLE, NO_DESCRIPTION
    """

    # Containers
    CONTAINER = "container"
    OPEN = "open"
    OPENABLE = "openable"
    TRANSPARENT = "transparent"
    SURFACE = "surface"
    LOCKED = "locked"
    DOOR = "door"
    SEARCHABLE = "searchable"

    # Items
    TAKEABLE = "takeable"
    EDIBLE = "edible"
    DRINKABLE = "drinkable"
    READABLE = "readable"
    WEARABLE = "wearable"
    WORN = "worn"
    TOOL = "tool"
    WEAPON = "weapon"
    BURNABLE = "burnable"
    CLIMBABLE = "climbable"
    TURNABLE = "turnable"
    TRY_TAKE = "try-take"
    TOUCHED = "touched"

    # Devices and light
    DEVICE = "device"
    ON = "on"
    LIGHT_SOURCE = "light-source"

    # Locations
    NATURALLY_LIT = "naturally-lit"
    OUTSIDE = "outside"

    # Characters
    PERSON = "person"
    ACTOR = "actor"
    FEMALE = "female"
    ATTACKABLE = "attackable"

    # Presentation
    INVISIBLE = "invisible"
    PLURAL = "plural"
    VOWEL = "vowel"
    NO_ARTICLE = "no-article"
    NO_DESCRIPTION = "no-description"


# ZIL bit names as they appear in classic source, mapped onto our tags.
ZIL_FLAG_ALIASES: dict[str, str] = {
    "contBit": Flag.CONTAINER.value,
    "openBit": Flag.OPEN.value,
    "openableBit": Flag.OPENABLE.value,
    "transBit": Flag.TRANSPARENT.value,
    "surfaceBit": Flag.SURFACE.value,
    "lockedBit": Flag.LOCKED.value,
    "doorBit": Flag.DOOR.value,
    "searchBit": Flag.SEARCHABLE.value,
    "takeBit": Flag.TAKEABLE.value,
    "edibleBit": Flag.EDIBLE.value,
    "foodBit": Flag.EDIBLE.value,
    "drinkBit": Flag.DRINKABLE.value,
    "readBit": Flag.READABLE.value,
    "wearBit": Flag.WEARABLE.value,
    "wornBit": Flag.WORN.value,
    "toolBit": Flag.TOOL.value,
    "weaponBit": Flag.WEAPON.value,
    "burnBit": Flag.BURNABLE.value,
    "flameBit": Flag.BURNABLE.value,
    "climbBit": Flag.CLIMBABLE.value,
    "turnBit": Flag.TURNABLE.value,
    "trytakeBit": Flag.TRY_TAKE.value,
    "touchBit": Flag.TOUCHED.value,
    "deviceBit": Flag.DEVICE.value,
    "onBit": Flag.ON.value,
    "lit": Flag.ON.value,
    "lightBit": Flag.LIGHT_SOURCE.value,
    "outsideBit": Flag.OUTSIDE.value,
    "personBit": Flag.PERSON.value,
    "actorBit": Flag.ACTOR.value,
    "femaleBit": Flag.FEMALE.value,
    "attackBit": Flag.ATTACKABLE.value,
    "invisible": Flag.INVISIBLE.value,
    "pluralBit": Flag.PLURAL.value,
    "vowelBit": Flag.VOWEL.value,
    "narticleBit": Flag.NO_ARTICLE.value,
    "ndescBit": Flag.NO_DESCRIPTION.value,
}


def normalize_flag(flag: str | Flag) -> str:
    """Return the canonical tag string for a flag or ZIL alias.

    Unknown names are passed through unchanged so content can define its
    own tags.

    Args:
        flag: A Flag member, canonical tag string, or ZIL bit name

    Returns:
        The canonical tag string
    """
    if isinstance(flag, Flag):
        return flag.value
    return ZIL_FLAG_ALIASES.get(flag, flag)


class FlagSet:
    """Unordered, unique set of capability tags for one entity.

    Accepts Flag members, canonical strings, or ZIL aliases anywhere a tag
    is expected; everything is stored as the canonical string.
    """

    def __init__(self, flags: Iterable[str | Flag] = ()):
        self._flags: set[str] = {normalize_flag(f) for f in flags}

    def has(self, flag: str | Flag) -> bool:
        return normalize_flag(flag) in self._flags

    def set(self, *flags: str | Flag) -> None:
        for flag in flags:
            self._flags.add(normalize_flag(flag))

    def clear(self, *flags: str | Flag) -> None:
        for flag in flags:
            self._flags.discard(normalize_flag(flag))

    def has_all(self, *flags: str | Flag) -> bool:
        return all(self.has(flag) for flag in flags)

    def has_any(self, *flags: str | Flag) -> bool:
        return any(self.has(flag) for flag in flags)

    def __contains__(self, flag: object) -> bool:
        if not isinstance(flag, str):
            return False
        return self.has(flag)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._flags))

    def __len__(self) -> int:
        return len(self._flags)

    def __repr__(self) -> str:
        return f"FlagSet({sorted(self._flags)!r})"
