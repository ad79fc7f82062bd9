"""
World - the single owner of all mutable game state.

A World holds the location and entity registries, the global visibility
overlay, the player, the event scheduler, the output sink, and the
game-level state (turn counter, score, description mode, status).

Example:
    >>> foyer = Location("Foyer", "A grand foyer.", flags=[Flag.NATURALLY_LIT])
    >>> world = World(Player(foyer), output=RecordingOutput())
    >>> world.register_location(foyer)
    >>> world.get_location("foyer") is foyer
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lantern.engine.errors import EntityNotFoundError, LocationNotFoundError
from lantern.engine.lighting import is_lit
from lantern.engine.location import Location
from lantern.engine.scheduler import EventAction, EventScheduler, ScheduledEvent
from lantern.engine.visibility import DefaultAccessibilityResolver
from lantern.models.event import EngineEvent, EventType
from lantern.models.game import DescriptionMode, GameStatus
from lantern.models.world import VictoryCondition

if TYPE_CHECKING:
    from lantern.engine.entity import Entity
    from lantern.engine.player import Player
    from lantern.engine.protocols import OutputSink

logger = logging.getLogger(__name__)

GAME_OVER_BANNER = "*** GAME OVER ***"
VICTORY_BANNER = "*** VICTORY ***"
RESTART_PROMPT = "Would you like to RESTART or QUIT?"


@dataclass
class GlobalScope:
    """Marks an entity as part of the visibility overlay.

    Attributes:
        local: False for globals reachable everywhere, True for
            local-globals reachable only from locations that list them
    """

    local: bool = False


@dataclass
class _NullOutput:
    lines: list[str] = field(default_factory=list)

    def emit(self, text: str) -> None:
        self.lines.append(text)


class World:
    """Registries and game state for one play-through.

    Attributes:
        player: The player entity
        scheduler: Turn-indexed event queue
        output: Sink for player-visible text
        last_mentioned: Most recently referenced entity, for pronouns
        description_mode: Verbose, brief, or superbrief room descriptions
        turns: Completed turns
        score: Points earned
        status: Playing, won, or lost
        title: Game name shown by VERSION
        version: Game version shown by VERSION
        victory: Optional win condition checked after state-changing commands
    """

    def __init__(
        self,
        player: "Player",
        output: "OutputSink | None" = None,
        title: str = "Untitled",
        version: str = "1.0",
    ):
        self.player = player
        self.scheduler = EventScheduler()
        self.output: OutputSink = output if output is not None else _NullOutput()
        self.last_mentioned: Entity | None = None
        self.description_mode = DescriptionMode.VERBOSE
        self.turns = 0
        self.score = 0
        self.status = GameStatus.PLAYING
        self.ending_message: str | None = None
        self.title = title
        self.version = version
        self.resolver = DefaultAccessibilityResolver()
        self.victory: VictoryCondition | None = None

        self._locations: list[Location] = []
        self._entities: list[Entity] = []
        self._globals: list[Entity] = []
        self._events: list[EngineEvent] = []

        player.world = self
        if isinstance(player.location, Location):
            self.register_location(player.location)

    # Output and events

    def emit(self, text: str) -> None:
        self.output.emit(text)

    def record(self, event: EngineEvent) -> None:
        """Add an engine event to the current turn's log."""
        self._events.append(event)

    def drain_events(self) -> list[EngineEvent]:
        events, self._events = self._events, []
        return events

    # Registries

    def register_location(self, location: Location) -> Location:
        """Register a location and everything currently inside it."""
        if not any(existing is location for existing in self._locations):
            self._locations.append(location)
        location.world = self
        for entity in location.descendants():
            if entity is not self.player:
                self.register_entity(entity)
        for entity in location.accessible_local_globals():
            if not self.is_global(entity):
                self.register_global(entity, local=True)
        return location

    def register_entity(self, entity: "Entity") -> "Entity":
        if isinstance(entity, Location):
            return self.register_location(entity)
        if not any(existing is entity for existing in self._entities):
            self._entities.append(entity)
        entity.world = self
        for child in entity.descendants():
            if not any(existing is child for existing in self._entities):
                self._entities.append(child)
            child.world = self
        return entity

    def register(self, *entities: "Entity") -> None:
        for entity in entities:
            self.register_entity(entity)

    @property
    def locations(self) -> list[Location]:
        return list(self._locations)

    @property
    def entities(self) -> list["Entity"]:
        return list(self._entities)

    def find_location(self, name: str) -> Location | None:
        for location in self._locations:
            if location.matches(name):
                return location
        return None

    def get_location(self, name: str) -> Location:
        """Look up a location by name or synonym, case-insensitively.

        Raises:
            LocationNotFoundError: If nothing matches
        """
        location = self.find_location(name)
        if location is None:
            raise LocationNotFoundError(name)
        return location

    def find_entity(self, name: str) -> "Entity | None":
        for entity in [*self._entities, *self._globals]:
            if entity.matches(name):
                return entity
        return None

    def get_entity(self, name: str) -> "Entity":
        """Look up a registered entity by name or synonym, case-insensitively.

        Raises:
            EntityNotFoundError: If nothing matches
        """
        entity = self.find_entity(name)
        if entity is None:
            raise EntityNotFoundError(name)
        return entity

    # Visibility overlay

    def register_global(self, entity: "Entity", local: bool = False) -> None:
        """Add an entity to the overlay.

        Globals are reachable from every location. Local-globals are
        reachable only from locations that list them via
        Location.add_local_global().
        """
        entity.extension(GlobalScope).local = local
        entity.world = self
        if not any(existing is entity for existing in self._globals):
            self._globals.append(entity)
        logger.debug("Registered %s '%s'", "local-global" if local else "global", entity.name)

    def is_global(self, entity: "Entity", local: bool | None = None) -> bool:
        """Whether entity is in the overlay, optionally of a specific kind."""
        if not any(existing is entity for existing in self._globals):
            return False
        if local is None:
            return True
        return entity.extension(GlobalScope).local == local

    def global_entities(self, local: bool | None = None) -> list["Entity"]:
        return [e for e in self._globals if self.is_global(e, local)]

    def is_global_accessible(self, entity: "Entity", location: Location) -> bool:
        if not self.is_global(entity):
            return False
        if not entity.extension(GlobalScope).local:
            return True
        return location.has_local_global(entity)

    def accessible_locations(self, entity: "Entity") -> list[Location]:
        """Locations from which an overlay entity can be reached."""
        if not self.is_global(entity):
            return []
        if not entity.extension(GlobalScope).local:
            return self.locations
        return [loc for loc in self._locations if loc.has_local_global(entity)]

    # Player-relative queries

    @property
    def current_location(self) -> Location:
        return self.player.current_location

    def is_lit(self, location: Location | None = None) -> bool:
        return is_lit(location or self.current_location, self.player)

    def find_visible(self, name: str) -> "Entity | None":
        """Resolve a name against what the player can currently see."""
        return self.resolver.find(name, self)

    def is_accessible(self, entity: "Entity") -> bool:
        return self.resolver.is_accessible(entity, self)

    # Scheduler shortcuts

    def queue_event(
        self, name: str, turns: int, action: EventAction, priority: int = 0
    ) -> ScheduledEvent:
        return self.scheduler.schedule(name, turns, action, priority)

    def dequeue_event(self, name: str) -> bool:
        return self.scheduler.dequeue(name)

    def is_event_scheduled(self, name: str) -> bool:
        return self.scheduler.is_scheduled(name)

    def is_event_due(self, name: str) -> bool:
        return self.scheduler.is_due_this_turn(name)

    # Game state

    def add_score(self, points: int) -> None:
        self.score += points

    @property
    def is_game_over(self) -> bool:
        return self.status != GameStatus.PLAYING

    def game_over(self, message: str, victory: bool = False) -> None:
        """Enter the terminal state. Only RESTART and QUIT are accepted afterwards."""
        if self.is_game_over:
            return
        self.status = GameStatus.WON if victory else GameStatus.LOST
        self.ending_message = message
        logger.info("Game over (%s): %s", self.status.value, message)
        self.emit(message)
        self.emit(VICTORY_BANNER if victory else GAME_OVER_BANNER)
        self.emit(f"You scored {self.score} points in {self.turns} turns.")
        self.emit(RESTART_PROMPT)
        self.record(
            EngineEvent(
                type=EventType.GAME_OVER,
                context={"victory": victory, "message": message},
            )
        )

    def player_died(self, message: str = "You have died!") -> None:
        self.game_over(message, victory=False)

    def player_won(self, message: str = "Congratulations! You have won!") -> None:
        self.game_over(message, victory=True)

    def check_victory(self) -> tuple[bool, str]:
        """
        Check if the declared victory condition is met.

        Returns:
            tuple[bool, str]: (is_victory, ending_narrative)
        """
        victory = self.victory
        if victory is None or self.is_game_over:
            return False, ""

        if victory.location:
            if not self.current_location.matches(victory.location):
                return False, ""

        if victory.item:
            if not any(item.matches(victory.item) for item in self.player.inventory):
                return False, ""

        return True, victory.narrative or "Congratulations! You have won!"
