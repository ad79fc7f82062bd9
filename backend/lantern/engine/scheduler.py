"""
Turn-indexed event scheduler.

Content schedules named callbacks to fire after a number of turns, or on
every turn. The turn driver calls tick() once per turn-consuming command.

A tick runs in two phases:
    1. Fire: every active entry that is due this turn, highest priority
       first (ties keep scheduling order). Results are OR-ed together.
    2. Count down: every entry that was queued when the tick began has its
       positive counter decremented; entries that are inactive or just hit
       zero are dropped.

Entries scheduled while a tick is running are left untouched until the next
tick. Cancelling an entry mid-tick does not stop an entry that was already
selected to fire this tick.

Example:
    >>> scheduler = EventScheduler()
    >>> scheduler.schedule("bell", 3, lambda: print("Dong!") or True)
    >>> scheduler.tick(), scheduler.tick(), scheduler.tick()
    Dong!
    (False, False, True)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import count
from typing import Callable

logger = logging.getLogger(__name__)

RECURRING = -1

# Returns whether the action produced player-visible output
EventAction = Callable[[], bool]


@dataclass
class ScheduledEvent:
    """One queued callback.

    Attributes:
        name: Lookup key; several entries may share a name
        turns: -1 for recurring, otherwise turns until it fires
        priority: Higher fires first among entries due the same turn
        action: The callback
        active: False once dequeued; removed at the end of the next tick
    """

    name: str
    turns: int
    action: EventAction
    priority: int = 0
    active: bool = True
    sequence: int = field(default=0, compare=False)

    @property
    def recurring(self) -> bool:
        return self.turns == RECURRING

    def is_due(self) -> bool:
        return self.active and (self.turns == 1 or self.turns == RECURRING)

    def deactivate(self) -> None:
        self.active = False

    def count_down(self) -> bool:
        """Decrement a positive counter.

        Returns:
            True when the entry should leave the queue
        """
        if not self.active:
            return True
        if self.turns > 0:
            self.turns -= 1
            return self.turns == 0
        return False

    def describe(self) -> str:
        if self.recurring:
            return f"{self.name} - recurring"
        return f"{self.name} - in {self.turns} turns"


class EventScheduler:
    """Priority-ordered queue of turn-counted callbacks."""

    def __init__(self) -> None:
        self._queue: list[ScheduledEvent] = []
        self._sequence = count()

    def schedule(
        self,
        name: str,
        turns: int,
        action: EventAction,
        priority: int = 0,
    ) -> ScheduledEvent:
        """Queue an action.

        Args:
            name: Event name (not required to be unique)
            turns: -1 to fire every turn, or N > 0 to fire once on the Nth tick
            action: Callback returning whether it produced output
            priority: Higher fires first when several are due together

        Returns:
            The queued entry

        Raises:
            ValueError: If turns is 0 or below -1
        """
        if turns != RECURRING and turns <= 0:
            raise ValueError(
                f"Event '{name}' needs turns > 0 or -1 for recurring, got {turns}"
            )
        event = ScheduledEvent(
            name=name,
            turns=turns,
            action=action,
            priority=priority,
            sequence=next(self._sequence),
        )
        self._queue.append(event)
        self._queue.sort(key=lambda e: (-e.priority, e.sequence))
        logger.debug("Scheduled %s", event.describe())
        return event

    def dequeue(self, name: str) -> bool:
        """Deactivate the first active entry with this name.

        Returns:
            True if an entry was deactivated
        """
        for event in self._queue:
            if event.name == name and event.active:
                event.deactivate()
                logger.debug("Dequeued %s", name)
                return True
        return False

    def is_scheduled(self, name: str) -> bool:
        """Whether any active entry has this name, due now or later."""
        return any(e.name == name and e.active for e in self._queue)

    def is_due_this_turn(self, name: str) -> bool:
        return any(e.name == name and e.is_due() for e in self._queue)

    def tick(self) -> bool:
        """Fire due entries, then count everyone down.

        Returns:
            True if any fired action reported output
        """
        snapshot = list(self._queue)
        due = [e for e in snapshot if e.is_due()]

        produced_output = False
        for event in due:
            logger.debug("Firing %s (priority %d)", event.name, event.priority)
            produced_output = event.action() or produced_output

        ticked = {id(e) for e in snapshot}
        self._queue = [
            e for e in self._queue if id(e) not in ticked or not e.count_down()
        ]
        return produced_output

    def clear(self) -> None:
        self._queue.clear()

    def active_events(self) -> list[str]:
        """Human-readable listing of active entries, in firing order."""
        return [e.describe() for e in self._queue if e.active]

    def __len__(self) -> int:
        return sum(1 for e in self._queue if e.active)

    def __iter__(self):
        return iter([e for e in self._queue if e.active])
