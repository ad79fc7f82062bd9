"""
Structured command models.

A Command is what the (external) parser hands to the engine: a verb kind
plus already-resolved target entities. The engine never sees raw text.

Key concepts:
    - CommandKind: Every verb the dispatcher knows how to route
    - Command: One resolved command; direct object first, indirect second
    - META_KINDS: Kinds that never consume a turn
    - DARK_ALLOWED_KINDS: Kinds permitted when the player's location is dark

Example:
    >>> Command.take(lamp).kind
    <CommandKind.TAKE: 'take'>
    >>> Command.move("n").direction
    <Direction.NORTH: 'north'>
    >>> Command.put_in(coin, box).indirect_object is box
    True
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lantern.models.direction import Direction


class CommandKind(str, Enum):
    """Verb kinds the dispatcher routes.

    Categories:
        Movement: MOVE
        Observation: LOOK, INVENTORY, EXAMINE, READ
        Items: TAKE, DROP, PUT_IN, PUT_ON, EAT, DRINK, WEAR, UNWEAR
        Containers: OPEN, CLOSE, LOCK, UNLOCK
        Devices: TURN_ON, TURN_OFF, FLIP
        People: GIVE, SHOW, TELL
        Time: WAIT, AGAIN
        Meta: SAVE, RESTORE, UNDO, BRIEF, VERBOSE, SUPERBRIEF, VERSION, HELP,
            QUIT, RESTART, SCRIPT, UNSCRIPT
        Flavor: ATTACK, BURN, CLIMB, DANCE, ... (fixed replies)
        Other: CUSTOM, UNKNOWN
    """

    # Movement
    MOVE = "move"

    # Observation
    LOOK = "look"
    INVENTORY = "inventory"
    EXAMINE = "examine"
    READ = "read"

    # Items
    TAKE = "take"
    DROP = "drop"
    PUT_IN = "put_in"
    PUT_ON = "put_on"
    EAT = "eat"
    DRINK = "drink"
    WEAR = "wear"
    UNWEAR = "unwear"

    # Containers
    OPEN = "open"
    CLOSE = "close"
    LOCK = "lock"
    UNLOCK = "unlock"

    # Devices
    TURN_ON = "turn_on"
    TURN_OFF = "turn_off"
    FLIP = "flip"

    # People
    GIVE = "give"
    SHOW = "show"
    TELL = "tell"

    # Time
    WAIT = "wait"
    AGAIN = "again"

    # Meta
    SAVE = "save"
    RESTORE = "restore"
    UNDO = "undo"
    BRIEF = "brief"
    VERBOSE = "verbose"
    SUPERBRIEF = "superbrief"
    VERSION = "version"
    HELP = "help"
    QUIT = "quit"
    RESTART = "restart"
    SCRIPT = "script"
    UNSCRIPT = "unscript"

    # Flavor
    ATTACK = "attack"
    BURN = "burn"
    CLIMB = "climb"
    DANCE = "dance"
    EMPTY = "empty"
    FILL = "fill"
    JUMP = "jump"
    LOOK_UNDER = "look_under"
    NO = "no"
    PULL = "pull"
    PUSH = "push"
    RUB = "rub"
    SEARCH = "search"
    SING = "sing"
    SMELL = "smell"
    SWIM = "swim"
    THINK_ABOUT = "think_about"
    THROW_AT = "throw_at"
    WAKE = "wake"
    WAVE = "wave"
    WAVE_HANDS = "wave_hands"
    YES = "yes"

    # Other
    CUSTOM = "custom"
    UNKNOWN = "unknown"


# Kinds that never advance the turn counter or fire end-of-turn processing.
META_KINDS: frozenset[CommandKind] = frozenset(
    {
        CommandKind.SAVE,
        CommandKind.RESTORE,
        CommandKind.VERSION,
        CommandKind.QUIT,
        CommandKind.UNDO,
        CommandKind.RESTART,
        CommandKind.BRIEF,
        CommandKind.VERBOSE,
        CommandKind.SUPERBRIEF,
        CommandKind.HELP,
        CommandKind.SCRIPT,
        CommandKind.UNSCRIPT,
    }
)

# Kinds that proceed in an unlit location when no hook claims them.
DARK_ALLOWED_KINDS: frozenset[CommandKind] = frozenset(
    {
        CommandKind.LOOK,
        CommandKind.INVENTORY,
        CommandKind.QUIT,
        CommandKind.TAKE,
        CommandKind.DROP,
        CommandKind.MOVE,
        CommandKind.WAIT,
        CommandKind.AGAIN,
        CommandKind.SAVE,
        CommandKind.RESTORE,
        CommandKind.UNDO,
        CommandKind.BRIEF,
        CommandKind.VERBOSE,
        CommandKind.SUPERBRIEF,
        CommandKind.VERSION,
        CommandKind.RESTART,
        CommandKind.HELP,
        CommandKind.SCRIPT,
        CommandKind.UNSCRIPT,
    }
)

FLAVOR_KINDS: frozenset[CommandKind] = frozenset(
    {
        CommandKind.ATTACK,
        CommandKind.BURN,
        CommandKind.CLIMB,
        CommandKind.DANCE,
        CommandKind.EMPTY,
        CommandKind.FILL,
        CommandKind.JUMP,
        CommandKind.LOOK_UNDER,
        CommandKind.NO,
        CommandKind.PULL,
        CommandKind.PUSH,
        CommandKind.RUB,
        CommandKind.SEARCH,
        CommandKind.SING,
        CommandKind.SMELL,
        CommandKind.SWIM,
        CommandKind.THINK_ABOUT,
        CommandKind.THROW_AT,
        CommandKind.WAKE,
        CommandKind.WAVE,
        CommandKind.WAVE_HANDS,
        CommandKind.YES,
    }
)


class Command(BaseModel):
    """A single structured command.

    Attributes:
        kind: What the player wants to do
        objects: Resolved entities; direct object first, indirect second
        direction: Target direction for MOVE
        verb: Verb name for CUSTOM commands
        text: Free data, e.g. a topic for TELL or the message for UNKNOWN

    Example:
        >>> cmd = Command.unlock(door, key)
        >>> cmd.direct_object is door, cmd.indirect_object is key
        (True, True)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: CommandKind
    objects: list[Any] = Field(default_factory=list)
    direction: Direction | None = None
    verb: str | None = None
    text: str | None = None

    @field_validator("direction", mode="before")
    @classmethod
    def parse_direction(cls, value: object) -> object:
        """Accept direction names and abbreviations."""
        if isinstance(value, str) and not isinstance(value, Direction):
            return Direction.parse(value)
        return value

    @property
    def direct_object(self) -> Any | None:
        return self.objects[0] if self.objects else None

    @property
    def indirect_object(self) -> Any | None:
        return self.objects[1] if len(self.objects) > 1 else None

    @property
    def is_meta(self) -> bool:
        return self.kind in META_KINDS

    @property
    def allowed_in_dark(self) -> bool:
        return self.kind in DARK_ALLOWED_KINDS

    @property
    def consumes_turn(self) -> bool:
        """Whether a successful dispatch of this command advances time."""
        return self.kind not in META_KINDS and self.kind != CommandKind.UNKNOWN

    def mentions(self, entity: object) -> bool:
        """Whether the entity is one of this command's objects."""
        return any(obj is entity for obj in self.objects)

    def __str__(self) -> str:
        if self.kind == CommandKind.MOVE and self.direction is not None:
            return f"move {self.direction.value}"
        if self.kind == CommandKind.CUSTOM:
            label = self.verb or "custom"
        else:
            label = self.kind.value.replace("_", " ")
        names = [getattr(obj, "name", str(obj)) for obj in self.objects]
        return " ".join([label, *names]).strip()

    # Factories

    @classmethod
    def of(cls, kind: CommandKind, *objects: Any, text: str | None = None) -> "Command":
        """Build a command of any kind with positional objects."""
        return cls(kind=kind, objects=list(objects), text=text)

    @classmethod
    def look(cls) -> "Command":
        return cls(kind=CommandKind.LOOK)

    @classmethod
    def inventory(cls) -> "Command":
        return cls(kind=CommandKind.INVENTORY)

    @classmethod
    def move(cls, direction: Direction | str) -> "Command":
        return cls(kind=CommandKind.MOVE, direction=direction)

    @classmethod
    def take(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.TAKE, obj)

    @classmethod
    def drop(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.DROP, obj)

    @classmethod
    def examine(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.EXAMINE, obj)

    @classmethod
    def read(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.READ, obj)

    @classmethod
    def open(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.OPEN, obj)

    @classmethod
    def close(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.CLOSE, obj)

    @classmethod
    def lock(cls, obj: Any, tool: Any) -> "Command":
        return cls.of(CommandKind.LOCK, obj, tool)

    @classmethod
    def unlock(cls, obj: Any, tool: Any) -> "Command":
        return cls.of(CommandKind.UNLOCK, obj, tool)

    @classmethod
    def eat(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.EAT, obj)

    @classmethod
    def drink(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.DRINK, obj)

    @classmethod
    def wear(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.WEAR, obj)

    @classmethod
    def unwear(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.UNWEAR, obj)

    @classmethod
    def turn_on(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.TURN_ON, obj)

    @classmethod
    def turn_off(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.TURN_OFF, obj)

    @classmethod
    def flip(cls, obj: Any) -> "Command":
        return cls.of(CommandKind.FLIP, obj)

    @classmethod
    def put_in(cls, obj: Any, container: Any) -> "Command":
        return cls.of(CommandKind.PUT_IN, obj, container)

    @classmethod
    def put_on(cls, obj: Any, surface: Any) -> "Command":
        return cls.of(CommandKind.PUT_ON, obj, surface)

    @classmethod
    def give(cls, obj: Any, recipient: Any) -> "Command":
        return cls.of(CommandKind.GIVE, obj, recipient)

    @classmethod
    def show(cls, obj: Any, recipient: Any) -> "Command":
        return cls.of(CommandKind.SHOW, obj, recipient)

    @classmethod
    def tell(cls, person: Any, topic: str) -> "Command":
        return cls.of(CommandKind.TELL, person, text=topic)

    @classmethod
    def wait(cls) -> "Command":
        return cls(kind=CommandKind.WAIT)

    @classmethod
    def again(cls) -> "Command":
        return cls(kind=CommandKind.AGAIN)

    @classmethod
    def meta(cls, kind: CommandKind) -> "Command":
        """Build a meta command such as SAVE or VERBOSE.

        Raises:
            ValueError: If the kind is not a meta kind
        """
        if kind not in META_KINDS:
            raise ValueError(f"{kind.value} is not a meta command")
        return cls(kind=kind)

    @classmethod
    def quit(cls) -> "Command":
        return cls(kind=CommandKind.QUIT)

    @classmethod
    def restart(cls) -> "Command":
        return cls(kind=CommandKind.RESTART)

    @classmethod
    def custom(cls, verb: str, *objects: Any, text: str | None = None) -> "Command":
        return cls(kind=CommandKind.CUSTOM, verb=verb, objects=list(objects), text=text)

    @classmethod
    def unknown(cls, message: str = "I don't understand that.") -> "Command":
        return cls(kind=CommandKind.UNKNOWN, text=message)
