"""
World schema models - Pydantic models for YAML world definitions
"""

from typing import Literal

from pydantic import BaseModel, Field


PLAYER_LOCATION = "player"  # Item location meaning "carried by the player"


class PlayerSetup(BaseModel):
    """Initial player configuration"""
    starting_location: str
    starting_inventory: list[str] = Field(default_factory=list)


class VictoryCondition(BaseModel):
    """Win condition checked at the end of every turn"""
    location: str | None = None  # Must be at this location to win
    item: str | None = None      # Must have this item in inventory to win
    narrative: str = ""          # Ending text when player wins


class WorldInfo(BaseModel):
    """Main world definition from world.yaml"""
    name: str
    description: str = ""
    version: str = "1.0"
    player: PlayerSetup
    victory: VictoryCondition | None = None


class ExitRequirement(BaseModel):
    """Entity flag that must be present for a conditional exit to open"""
    entity: str
    flag: str
    absent: bool = False  # Require the flag to be missing instead


class SpecialExitDefinition(BaseModel):
    """Conditional exit definition from locations.yaml"""
    kind: Literal[
        "hidden", "locked", "one_way", "conditional", "deadly", "victory"
    ] = "conditional"
    destination: str | None = None
    key: str | None = None                   # locked: item that must be carried
    requires: ExitRequirement | None = None  # hidden/conditional
    success_message: str | None = None
    failure_message: str | None = None
    message: str | None = None               # deadly/victory ending text
    visible: bool = True


class EntityTexts(BaseModel):
    """Optional special texts shared by items and locations"""
    initial: str | None = None
    brief: str | None = None
    dark: str | None = None
    detail: str | None = None
    read: str | None = None
    inside: str | None = None
    closed: str | None = None


class LocationDefinition(BaseModel):
    """Location definition from locations.yaml"""
    name: str
    description: str = ""
    synonyms: list[str] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list)
    exits: dict[str, str] = Field(default_factory=dict)
    special_exits: dict[str, SpecialExitDefinition] = Field(default_factory=dict)
    local_globals: list[str] = Field(default_factory=list)
    texts: EntityTexts = Field(default_factory=EntityTexts)
    visit_descriptions: dict[int, str] = Field(default_factory=dict)


class ItemDefinition(BaseModel):
    """Item definition from items.yaml"""
    name: str
    description: str = ""
    synonyms: list[str] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list)
    location: str | None = None     # Location id, item id, "player", or nowhere
    capacity: int | None = None
    key: str | None = None          # Item that locks/unlocks this one
    scope: Literal["global", "local-global"] | None = None
    texts: EntityTexts = Field(default_factory=EntityTexts)


class WorldData(BaseModel):
    """Complete world data loaded from YAML files"""
    world: WorldInfo
    locations: dict[str, LocationDefinition] = Field(default_factory=dict)
    items: dict[str, ItemDefinition] = Field(default_factory=dict)
