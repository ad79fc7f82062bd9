"""
Compass and relative directions used by exits and movement commands.
"""

from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Directions an exit can lead in."""

    NORTH = "north"
    NORTHEAST = "northeast"
    NORTHWEST = "northwest"
    SOUTH = "south"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"
    EAST = "east"
    WEST = "west"
    UP = "up"
    DOWN = "down"
    IN = "in"
    OUT = "out"

    @classmethod
    def parse(cls, value: "str | Direction") -> "Direction":
        """Parse a direction name or abbreviation.

        Args:
            value: e.g. "north", "n", "NE", "inward"

        Returns:
            The matching Direction

        Raises:
            ValueError: If the value does not name a direction
        """
        if isinstance(value, Direction):
            return value
        key = value.strip().lower()
        if key in _ABBREVIATIONS:
            return _ABBREVIATIONS[key]
        return cls(key)

    @property
    def opposite(self) -> "Direction":
        """The direction leading back."""
        return _OPPOSITES[self]


_ABBREVIATIONS: dict[str, Direction] = {
    "n": Direction.NORTH,
    "ne": Direction.NORTHEAST,
    "nw": Direction.NORTHWEST,
    "s": Direction.SOUTH,
    "se": Direction.SOUTHEAST,
    "sw": Direction.SOUTHWEST,
    "e": Direction.EAST,
    "w": Direction.WEST,
    "u": Direction.UP,
    "d": Direction.DOWN,
    "inward": Direction.IN,
    "outward": Direction.OUT,
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.NORTHEAST: Direction.SOUTHWEST,
    Direction.SOUTHWEST: Direction.NORTHEAST,
    Direction.NORTHWEST: Direction.SOUTHEAST,
    Direction.SOUTHEAST: Direction.NORTHWEST,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.IN: Direction.OUT,
    Direction.OUT: Direction.IN,
}
