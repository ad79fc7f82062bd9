"""
Entity graph - located, flaggable objects and their ownership tree.

Every item, location, and the player is an Entity. Each entity has at most
one owning container (its ``location``) and appears exactly once in that
container's ``contents``. The link is only ever changed through
``move_to()``, which keeps both sides consistent and refuses cycles.

Subsystems attach their own typed state to entities with
``entity.extension(StateClass)`` instead of an untyped key/value bag.

Example:
    >>> box = Entity("box", flags=[Flag.CONTAINER, Flag.OPENABLE, Flag.OPEN])
    >>> coin = Entity("coin", flags=[Flag.TAKEABLE])
    >>> box.add_to_container(coin)
    True
    >>> coin.location is box, box.contents
    (True, (Entity('coin'),))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, TypeVar

from lantern.engine.errors import ContainmentError
from lantern.models.command import CommandKind
from lantern.models.flags import Flag, FlagSet
from lantern.engine.text import EntityText, TextKey

if TYPE_CHECKING:
    from lantern.engine.world import World
    from lantern.models.command import Command

T = TypeVar("T")

# Custom command handler: (entity, command) -> handled
CommandHandler = Callable[["Entity", "Command"], bool]


@dataclass
class LockState:
    """Which entity acts as the key for a lockable entity."""

    key: "Entity | None" = None

    def accepts(self, tool: "Entity | None") -> bool:
        return tool is not None and self.key is tool


class Entity:
    """A node in the ownership tree.

    Attributes:
        name: Display name, also used for lookup
        description: Default description text
        synonyms: Extra lowercase names the entity answers to
        flags: Capability tags
        capacity: Maximum direct contents, or None for unlimited
        world: Owning World, set on registration
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        synonyms: Iterable[str] = (),
        flags: Iterable[str | Flag] = (),
        capacity: int | None = None,
        location: "Entity | None" = None,
    ):
        self.name = name
        self.description = description
        self.synonyms: set[str] = {s.lower() for s in synonyms}
        self.flags = FlagSet(flags)
        self.capacity = capacity
        self.world: "World | None" = None

        self._location: Entity | None = None
        self._contents: list[Entity] = []
        self._extensions: dict[type, Any] = {}
        self._command_handler: CommandHandler | None = None
        self._verb_handlers: dict[str, CommandHandler] = {}

        if location is not None:
            self.move_to(location)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    # Ownership tree

    @property
    def location(self) -> "Entity | None":
        return self._location

    @property
    def contents(self) -> tuple["Entity", ...]:
        return tuple(self._contents)

    def move_to(self, destination: "Entity | None") -> None:
        """Relocate this entity, keeping both sides of the link consistent.

        Moving to the current location is a no-op; moving to None detaches
        the entity from the tree.

        Raises:
            ContainmentError: If the destination is this entity or lies inside it
        """
        if destination is not None and (destination is self or destination.is_in(self)):
            raise ContainmentError(
                f"Cannot move '{self.name}' into '{destination.name}': it would contain itself"
            )
        if destination is self._location:
            return
        if self._location is not None:
            self._location._contents.remove(self)
        self._location = destination
        if destination is not None:
            destination._contents.append(self)

    def is_in(self, other: "Entity") -> bool:
        """Whether other appears anywhere in this entity's location chain."""
        current = self._location
        while current is not None:
            if current is other:
                return True
            current = current._location
        return False

    is_descendant_of = is_in

    def add_to_container(self, entity: "Entity") -> bool:
        """Put an entity inside this one if it is an accessible container.

        Requires the container tag, an open or transparent container, and
        room under the capacity limit.

        Returns:
            True if the entity is now inside this container

        Raises:
            ContainmentError: If the move would create a cycle
        """
        if not self.is_container or not (self.is_open or self.flags.has(Flag.TRANSPARENT)):
            return False
        return self._accept(entity)

    def add_to_surface(self, entity: "Entity") -> bool:
        """Put an entity on top of this one if it carries the surface tag."""
        if not self.flags.has(Flag.SURFACE):
            return False
        return self._accept(entity)

    def _accept(self, entity: "Entity") -> bool:
        if entity._location is self:
            return True
        if self.is_full:
            return False
        entity.move_to(self)
        return True

    def remove(self, entity: "Entity") -> bool:
        """Detach a direct content to nowhere. Returns False if it wasn't here."""
        if entity._location is not self:
            return False
        entity.move_to(None)
        return True

    def descendants(self) -> list["Entity"]:
        """Every entity inside this one, depth first."""
        found: list[Entity] = []
        for child in self._contents:
            found.append(child)
            found.extend(child.descendants())
        return found

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and len(self._contents) >= self.capacity

    # Tags

    @property
    def is_container(self) -> bool:
        return self.flags.has(Flag.CONTAINER)

    @property
    def is_open(self) -> bool:
        return self.flags.has(Flag.OPEN)

    @property
    def is_openable(self) -> bool:
        return self.flags.has(Flag.OPENABLE)

    @property
    def is_takeable(self) -> bool:
        return self.flags.has(Flag.TAKEABLE)

    def can_see_inside(self) -> bool:
        return self.is_container and (self.is_open or self.flags.has(Flag.TRANSPARENT))

    def open(self) -> bool:
        """Open an openable, closed, unlocked entity. Returns whether it changed."""
        if self.is_openable and not self.is_open and not self.flags.has(Flag.LOCKED):
            self.flags.set(Flag.OPEN)
            return True
        return False

    def close(self) -> bool:
        if self.is_openable and self.is_open:
            self.flags.clear(Flag.OPEN)
            return True
        return False

    def set_key(self, key: "Entity") -> None:
        """Make key the tool that locks and unlocks this entity."""
        self.extension(LockState).key = key

    # Light

    @property
    def is_light_source(self) -> bool:
        return self.flags.has(Flag.LIGHT_SOURCE)

    @property
    def is_active_light(self) -> bool:
        return self.flags.has_all(Flag.LIGHT_SOURCE, Flag.ON)

    def make_light_source(self, initially_on: bool = False) -> None:
        self.flags.set(Flag.LIGHT_SOURCE)
        if initially_on:
            self.flags.set(Flag.ON)
        else:
            self.flags.clear(Flag.ON)

    def turn_light_on(self) -> bool:
        if not self.is_light_source or self.flags.has(Flag.ON):
            return False
        self.flags.set(Flag.ON)
        return True

    def turn_light_off(self) -> bool:
        if not self.is_light_source or not self.flags.has(Flag.ON):
            return False
        self.flags.clear(Flag.ON)
        return True

    def toggle_light(self) -> bool:
        """Flip a light source. Returns the new on/off state."""
        if not self.turn_light_on():
            self.turn_light_off()
        return self.flags.has(Flag.ON)

    # Naming

    def matches(self, name: str) -> bool:
        key = name.strip().lower()
        return key == self.name.lower() or key in self.synonyms

    @property
    def definite_name(self) -> str:
        if self.flags.has_any(Flag.NO_ARTICLE, Flag.PERSON):
            return self.name
        return f"the {self.name}"

    @property
    def indefinite_name(self) -> str:
        if self.flags.has_any(Flag.NO_ARTICLE, Flag.PERSON):
            return self.name
        if self.flags.has(Flag.PLURAL):
            return f"some {self.name}"
        if self.flags.has(Flag.VOWEL) or self.name[:1].lower() in "aeiou":
            return f"an {self.name}"
        return f"a {self.name}"

    # Extension state

    def extension(self, state_type: type[T]) -> T:
        """The instance of state_type attached to this entity, created on first use."""
        state = self._extensions.get(state_type)
        if state is None:
            state = state_type()
            self._extensions[state_type] = state
        return state

    def has_extension(self, state_type: type) -> bool:
        return state_type in self._extensions

    def get_extension(self, state_type: type[T]) -> T | None:
        return self._extensions.get(state_type)

    # Special texts

    def set_text(self, key: TextKey, text: str) -> None:
        self.extension(EntityText).set(key, text)

    def get_text(self, key: TextKey) -> str | None:
        texts = self.get_extension(EntityText)
        return texts.get(key) if texts is not None else None

    # Custom command handling

    def set_command_handler(self, handler: CommandHandler | None) -> None:
        """Handler offered every command that names this entity."""
        self._command_handler = handler

    def set_verb_handlers(self, handlers: Mapping[CommandKind | str, CommandHandler]) -> None:
        """Register per-verb handlers, keyed by CommandKind or custom verb name."""
        for verb, handler in handlers.items():
            key = verb.value if isinstance(verb, CommandKind) else verb.lower()
            self._verb_handlers[key] = handler

    @property
    def has_handlers(self) -> bool:
        return self._command_handler is not None or bool(self._verb_handlers)

    def process_command(self, command: "Command") -> bool:
        """Offer a command to this entity's own handlers.

        The verb-specific handler runs first, then the general handler.

        Returns:
            True if a handler took care of the command
        """
        if command.kind == CommandKind.CUSTOM and command.verb:
            key = command.verb.lower()
        else:
            key = command.kind.value
        verb_handler = self._verb_handlers.get(key)
        if verb_handler is not None and verb_handler(self, command):
            return True
        if self._command_handler is not None:
            return self._command_handler(self, command)
        return False
