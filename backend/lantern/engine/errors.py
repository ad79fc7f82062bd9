"""
Engine integrity errors.

Gameplay refusals are never exceptions; they are messages through the
output sink. These types cover host/content mistakes only.
"""

from __future__ import annotations


class LanternError(Exception):
    """Base class for engine integrity errors."""


class EntityNotFoundError(LanternError, LookupError):
    """No registered entity matches the requested name."""

    def __init__(self, name: str):
        super().__init__(f"No entity named '{name}' is registered")
        self.name = name


class LocationNotFoundError(LanternError, LookupError):
    """No registered location matches the requested name."""

    def __init__(self, name: str):
        super().__init__(f"No location named '{name}' is registered")
        self.name = name


class ContainmentError(LanternError, ValueError):
    """A move would make an entity its own ancestor."""


class WorldDefinitionError(LanternError, ValueError):
    """A loaded world definition failed validation.

    Attributes:
        world_id: The world that failed
        errors: Individual validation error messages
    """

    def __init__(self, world_id: str, errors: list[str]):
        error_list = "\n  - ".join(errors)
        super().__init__(
            f"World '{world_id}' validation failed with {len(errors)} error(s):\n  - {error_list}"
        )
        self.world_id = world_id
        self.errors = errors
