"""
Game state models - status, description mode, and per-turn responses
"""

from enum import Enum

from pydantic import BaseModel, Field

from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent


class GameStatus(str, Enum):
    """Whether the game is still running"""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class DescriptionMode(str, Enum):
    """How much room text to show on revisits"""
    VERBOSE = "verbose"        # Full description every time
    BRIEF = "brief"            # Full on first visit, brief afterwards
    SUPERBRIEF = "superbrief"  # Room name only, except when flashed


class TurnResponse(BaseModel):
    """Outcome of GameEngine.execute() for one command"""
    command: CommandKind
    output: list[str] = Field(default_factory=list)
    events: list[EngineEvent] = Field(default_factory=list)
    turn_advanced: bool = False
    events_produced_output: bool = False  # A scheduled event printed something
    turn: int = 0
    status: GameStatus = GameStatus.PLAYING

    @property
    def text(self) -> str:
        """All emitted output joined into one block"""
        return "\n".join(self.output)

    @property
    def game_over(self) -> bool:
        return self.status != GameStatus.PLAYING
