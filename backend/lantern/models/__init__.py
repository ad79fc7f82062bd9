"""Pydantic models and enums for Lantern"""

from lantern.models.flags import Flag, FlagSet, normalize_flag
from lantern.models.direction import Direction
from lantern.models.command import (
    Command,
    CommandKind,
    DARK_ALLOWED_KINDS,
    FLAVOR_KINDS,
    META_KINDS,
)
from lantern.models.event import EngineEvent, RejectionEvent, EventType, RejectionCode
from lantern.models.validation import ValidationResult, valid_result, invalid_result
from lantern.models.game import DescriptionMode, GameStatus, TurnResponse
from lantern.models.world import WorldData, WorldInfo, LocationDefinition, ItemDefinition

__all__ = [
    # Flags and directions
    "Flag",
    "FlagSet",
    "normalize_flag",
    "Direction",
    # Commands
    "Command",
    "CommandKind",
    "DARK_ALLOWED_KINDS",
    "FLAVOR_KINDS",
    "META_KINDS",
    # Events
    "EngineEvent",
    "RejectionEvent",
    "EventType",
    "RejectionCode",
    # Validation
    "ValidationResult",
    "valid_result",
    "invalid_result",
    # Game
    "DescriptionMode",
    "GameStatus",
    "TurnResponse",
    # World definitions
    "WorldData",
    "WorldInfo",
    "LocationDefinition",
    "ItemDefinition",
]
