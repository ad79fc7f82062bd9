"""
Per-location hook registry.

Every location owns one HookRegistry with six independent phases. Each
phase keeps a list of (priority, handler) pairs and dispatches them in
priority order; the first handler that returns True wins and the rest are
skipped.

Key concepts:
    - HookPhase: The moments a location can react to
    - HookPriority: Named priority levels (any int is accepted)
    - HookRegistry: Registration and dispatch

Example:
    >>> registry = HookRegistry()
    >>> registry.add(HookPhase.ENTER, lambda room: False)
    >>> registry.add(HookPhase.ENTER, greet, priority=HookPriority.HIGH)
    >>> registry.dispatch(HookPhase.ENTER, room)  # greet runs first
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from itertools import count
from typing import Any, Callable

logger = logging.getLogger(__name__)


class HookPhase(str, Enum):
    """Moments a location can react to.

    ENTER: The player just arrived
    LOOK: The player looked; a True result replaces the default description
    BEGIN_TURN: Before a turn-consuming command is processed
    END_TURN: After a turn-consuming command, before scheduled events
    FLASH: Details shown even in abbreviated description modes
    BEGIN_COMMAND: First refusal on every command; receives the Command
    """

    ENTER = "enter"
    LOOK = "look"
    BEGIN_TURN = "begin_turn"
    END_TURN = "end_turn"
    FLASH = "flash"
    BEGIN_COMMAND = "begin_command"


class HookPriority(IntEnum):
    """Named priority levels. Higher runs first."""

    LOW = 0
    NORMAL = 50
    HIGH = 100
    CRITICAL = 200


# (location) -> bool for most phases, (location, command) -> bool for BEGIN_COMMAND
HookHandler = Callable[..., bool]


@dataclass(frozen=True)
class _Registration:
    priority: int
    sequence: int
    handler: HookHandler


class HookRegistry:
    """Priority-ordered handler lists, one per phase."""

    def __init__(self) -> None:
        self._hooks: dict[HookPhase, list[_Registration]] = {phase: [] for phase in HookPhase}
        self._sequence = count()

    def add(
        self,
        phase: HookPhase | str,
        handler: HookHandler,
        priority: int = HookPriority.NORMAL,
    ) -> None:
        """Register a handler for a phase.

        Args:
            phase: Which phase to attach to
            handler: Callable returning True when it handled the phase
            priority: Higher runs first; equal priorities keep insertion order
        """
        registrations = self._hooks[HookPhase(phase)]
        registrations.append(_Registration(int(priority), next(self._sequence), handler))
        # Stable descending sort keeps insertion order among equal priorities
        registrations.sort(key=lambda r: (-r.priority, r.sequence))

    def remove(self, phase: HookPhase | str, handler: HookHandler) -> bool:
        """Unregister the first registration of a handler. Returns whether one was found."""
        registrations = self._hooks[HookPhase(phase)]
        for index, registration in enumerate(registrations):
            if registration.handler is handler:
                del registrations[index]
                return True
        return False

    def clear(self, phase: HookPhase | str | None = None) -> None:
        if phase is None:
            for registrations in self._hooks.values():
                registrations.clear()
        else:
            self._hooks[HookPhase(phase)].clear()

    def handlers(self, phase: HookPhase | str) -> list[HookHandler]:
        """Handlers for a phase in dispatch order."""
        return [r.handler for r in self._hooks[HookPhase(phase)]]

    def has_handlers(self, phase: HookPhase | str) -> bool:
        return bool(self._hooks[HookPhase(phase)])

    def dispatch(self, phase: HookPhase | str, *args: Any) -> bool:
        """Invoke a phase's handlers until one returns True.

        The handler list is snapshotted first, so handlers registered during
        dispatch only take part in later dispatches.

        Returns:
            True if some handler claimed the phase, False if none did
        """
        phase = HookPhase(phase)
        for registration in list(self._hooks[phase]):
            if registration.handler(*args):
                logger.debug(
                    "%s hook %r handled at priority %d",
                    phase.value,
                    registration.handler,
                    registration.priority,
                )
                return True
        return False

    def __len__(self) -> int:
        return sum(len(registrations) for registrations in self._hooks.values())
