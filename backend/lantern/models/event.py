"""
Event models for the turn driver.

Engine events record what a command actually did. They are collected per
turn and returned in the TurnResponse, so hosts and tests can inspect
outcomes without scraping the emitted text.

Key concepts:
    - EngineEvent: Base representation of something that happened
    - RejectionEvent: Special event for refused commands
    - EventType: Enumeration of event categories
    - RejectionCode: Why a default verb handler refused a command

Example:
    >>> event = EngineEvent(
    ...     type=EventType.ITEM_TAKEN,
    ...     subject="brass lantern",
    ...     context={"from_container": "trophy case"},
    ... )
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Types of events the engine records.

    Categories:
        Movement: PLAYER_MOVED, MOVE_BLOCKED
        Items: ITEM_TAKEN, ITEM_DROPPED, ITEM_PLACED, ITEM_EXAMINED, ITEM_READ,
            ITEM_CONSUMED, ITEM_WORN, ITEM_REMOVED, ITEM_GIVEN, ITEM_SHOWN
        Containers: CONTAINER_OPENED, CONTAINER_CLOSED, CONTAINER_LOCKED,
            CONTAINER_UNLOCKED
        Devices: DEVICE_ON, DEVICE_OFF
        Dispatch: HOOK_HANDLED, CUSTOM_HANDLED, DARKNESS_BLOCKED
        Game State: GAME_OVER, GAME_RESTARTED, MODE_CHANGED
        Meta: ACTION_REJECTED, NOTHING_HAPPENED, FLAVOR_ACTION, UNKNOWN_COMMAND
    """

    # Movement
    PLAYER_MOVED = "player_moved"
    MOVE_BLOCKED = "move_blocked"
    LOCATION_DESCRIBED = "location_described"
    INVENTORY_LISTED = "inventory_listed"

    # Items
    ITEM_TAKEN = "item_taken"
    ITEM_DROPPED = "item_dropped"
    ITEM_PLACED = "item_placed"
    ITEM_EXAMINED = "item_examined"
    ITEM_READ = "item_read"
    ITEM_CONSUMED = "item_consumed"
    ITEM_WORN = "item_worn"
    ITEM_REMOVED = "item_removed"
    ITEM_GIVEN = "item_given"
    ITEM_SHOWN = "item_shown"
    PERSON_TOLD = "person_told"

    # Containers
    CONTAINER_OPENED = "container_opened"
    CONTAINER_CLOSED = "container_closed"
    CONTAINER_LOCKED = "container_locked"
    CONTAINER_UNLOCKED = "container_unlocked"

    # Devices
    DEVICE_ON = "device_on"
    DEVICE_OFF = "device_off"

    # Dispatch
    HOOK_HANDLED = "hook_handled"  # A location hook claimed the command
    CUSTOM_HANDLED = "custom_handled"  # An entity's own handler claimed it
    DARKNESS_BLOCKED = "darkness_blocked"

    # Game State
    GAME_OVER = "game_over"
    GAME_RESTARTED = "game_restarted"
    MODE_CHANGED = "mode_changed"

    # Meta
    ACTION_REJECTED = "action_rejected"
    NOTHING_HAPPENED = "nothing_happened"
    FLAVOR_ACTION = "flavor_action"
    UNKNOWN_COMMAND = "unknown_command"
    META_COMMAND = "meta_command"


class EngineEvent(BaseModel):
    """Represents something that happened in the game world.

    Attributes:
        type: The type of event that occurred
        subject: Name of the primary entity involved
        target: Name of the secondary entity (if applicable)
        context: Additional details about the outcome
    """

    type: EventType

    # What was involved
    subject: str | None = None
    target: str | None = None

    context: dict[str, object] = Field(default_factory=dict)


class RejectionCode(str, Enum):
    """Rejection codes for refused commands.

    These identify why a default verb handler declined to act. The
    accompanying reason is the text the player sees.
    """

    # Movement
    NO_EXIT = "no_exit"
    EXIT_BLOCKED = "exit_blocked"

    # Reach
    NOT_ACCESSIBLE = "not_accessible"
    NOT_CARRIED = "not_carried"
    MISSING_OBJECT = "missing_object"

    # Items
    ITEM_NOT_PORTABLE = "item_not_portable"
    ALREADY_HAVE = "already_have"
    NOT_EDIBLE = "not_edible"
    NOT_DRINKABLE = "not_drinkable"
    NOT_READABLE = "not_readable"
    NOT_WEARABLE = "not_wearable"
    ALREADY_WORN = "already_worn"
    NOT_WORN = "not_worn"
    NOT_A_DEVICE = "not_a_device"
    ALREADY_ON = "already_on"
    ALREADY_OFF = "already_off"

    # Containers
    NOT_CONTAINER = "not_container"
    NOT_SURFACE = "not_surface"
    NOT_OPENABLE = "not_openable"
    CONTAINER_CLOSED = "container_closed"
    CONTAINER_FULL = "container_full"
    CONTAINER_LOCKED = "container_locked"
    CONTAINER_ALREADY_OPEN = "container_already_open"
    CONTAINER_ALREADY_CLOSED = "container_already_closed"
    NOT_LOCKABLE = "not_lockable"
    ALREADY_LOCKED = "already_locked"
    ALREADY_UNLOCKED = "already_unlocked"
    CONTAINMENT_CYCLE = "containment_cycle"

    # Tools
    TOOL_INSUFFICIENT = "tool_insufficient"

    # People
    NOT_A_PERSON = "not_a_person"

    # Game
    GAME_OVER = "game_over"
    UNAVAILABLE = "unavailable"


class RejectionEvent(EngineEvent):
    """Event for refused commands.

    Attributes:
        rejection_code: Machine-readable rejection category
        rejection_reason: The message shown to the player
        hint: Optional nudge for the player
    """

    type: EventType = EventType.ACTION_REJECTED

    rejection_code: RejectionCode
    rejection_reason: str
    hint: str | None = None
