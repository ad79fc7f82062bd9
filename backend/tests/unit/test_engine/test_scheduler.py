"""Unit tests for the event scheduler.

Tests cover:
- One-shot events firing exactly once on the Nth tick
- Recurring events firing every tick until dequeued
- Priority ordering among events due together
- Events scheduled or dequeued during a tick
- Counter validation and inspection helpers
"""

import pytest

from lantern.engine.scheduler import RECURRING, EventScheduler


class TestOneShotEvents:
    """Tests for countdown events."""

    def test_fires_on_nth_tick_only(self) -> None:
        """schedule(n) fires on tick n and never again."""
        fired: list[int] = []
        scheduler = EventScheduler()
        scheduler.schedule("bell", 3, lambda: fired.append(1) or True)

        results = [scheduler.tick() for _ in range(5)]

        assert results == [False, False, True, False, False]
        assert len(fired) == 1
        assert not scheduler.is_scheduled("bell")

    def test_due_this_turn(self) -> None:
        """is_due_this_turn is True only when the next tick fires it."""
        scheduler = EventScheduler()
        scheduler.schedule("bell", 2, lambda: False)

        assert not scheduler.is_due_this_turn("bell")
        scheduler.tick()
        assert scheduler.is_due_this_turn("bell")

    def test_action_result_is_reported(self) -> None:
        """tick() reports whether any fired action produced output."""
        scheduler = EventScheduler()
        scheduler.schedule("quiet", 1, lambda: False)

        assert scheduler.tick() is False


class TestRecurringEvents:
    """Tests for recurring events."""

    def test_fires_every_tick(self) -> None:
        """A recurring event fires on every tick."""
        fired: list[int] = []
        scheduler = EventScheduler()
        scheduler.schedule("drip", RECURRING, lambda: fired.append(1) or False)

        for _ in range(4):
            scheduler.tick()

        assert len(fired) == 4
        assert scheduler.is_scheduled("drip")

    def test_dequeue_stops_it(self) -> None:
        """A dequeued recurring event fires no more and leaves the queue."""
        fired: list[int] = []
        scheduler = EventScheduler()
        scheduler.schedule("drip", RECURRING, lambda: fired.append(1) or False)
        scheduler.tick()

        assert scheduler.dequeue("drip") is True
        scheduler.tick()
        scheduler.tick()

        assert len(fired) == 1
        assert len(scheduler) == 0
        assert scheduler.dequeue("drip") is False


class TestPriorityOrdering:
    """Tests for firing order."""

    def test_higher_priority_fires_first(self) -> None:
        """Events due together fire by descending priority."""
        order: list[str] = []
        scheduler = EventScheduler()
        scheduler.schedule("low", 1, lambda: order.append("low") or False, priority=0)
        scheduler.schedule("high", 1, lambda: order.append("high") or False, priority=10)
        scheduler.schedule("mid", 1, lambda: order.append("mid") or False, priority=5)

        scheduler.tick()

        assert order == ["high", "mid", "low"]

    def test_ties_keep_scheduling_order(self) -> None:
        """Equal priorities fire in the order they were scheduled."""
        order: list[str] = []
        scheduler = EventScheduler()
        for name in ("a", "b", "c"):
            scheduler.schedule(name, 1, lambda name=name: order.append(name) or False)

        scheduler.tick()

        assert order == ["a", "b", "c"]


class TestTickIsolation:
    """Tests for events changed while a tick runs."""

    def test_scheduled_during_tick_waits(self) -> None:
        """An event scheduled mid-tick is neither fired nor decremented."""
        fired: list[str] = []
        scheduler = EventScheduler()

        def spawn() -> bool:
            scheduler.schedule("child", 1, lambda: fired.append("child") or True)
            return False

        scheduler.schedule("parent", 1, spawn)
        scheduler.tick()
        assert fired == []
        assert scheduler.is_due_this_turn("child")

        assert scheduler.tick() is True
        assert fired == ["child"]

    def test_recurring_scheduled_during_tick(self) -> None:
        """A recurring event added mid-tick starts on the next tick."""
        fired: list[str] = []
        scheduler = EventScheduler()
        scheduler.schedule(
            "starter",
            1,
            lambda: scheduler.schedule("loop", RECURRING, lambda: fired.append("loop") or False) and False,
        )

        scheduler.tick()
        scheduler.tick()

        assert fired == ["loop"]

    def test_dequeue_during_tick_does_not_stop_selected(self) -> None:
        """Cancelling an already-selected event mid-tick doesn't stop it firing."""
        fired: list[str] = []
        scheduler = EventScheduler()
        scheduler.schedule(
            "first", 1, lambda: scheduler.dequeue("second") and False, priority=1
        )
        scheduler.schedule("second", 1, lambda: fired.append("second") or False)

        scheduler.tick()

        assert fired == ["second"]
        assert len(scheduler) == 0


class TestSchedulerValidation:
    """Tests for counter validation and inspection."""

    @pytest.mark.parametrize("turns", [0, -2, -10])
    def test_invalid_counter_raises(self, turns: int) -> None:
        """Counters must be positive or -1."""
        with pytest.raises(ValueError):
            EventScheduler().schedule("bad", turns, lambda: False)

    def test_active_events_listing(self) -> None:
        """active_events() describes what's queued, in firing order."""
        scheduler = EventScheduler()
        scheduler.schedule("bell", 3, lambda: False)
        scheduler.schedule("drip", RECURRING, lambda: False, priority=5)

        assert scheduler.active_events() == ["drip - recurring", "bell - in 3 turns"]

    def test_clear(self) -> None:
        """clear() empties the queue."""
        scheduler = EventScheduler()
        scheduler.schedule("bell", 3, lambda: False)
        scheduler.clear()

        assert len(scheduler) == 0
        assert list(scheduler) == []

    def test_duplicate_names_dequeue_one_at_a_time(self) -> None:
        """Names need not be unique; dequeue removes the first active one."""
        scheduler = EventScheduler()
        scheduler.schedule("bell", 2, lambda: False)
        scheduler.schedule("bell", 4, lambda: False)

        scheduler.dequeue("bell")

        assert scheduler.is_scheduled("bell")
        assert scheduler.active_events() == ["bell - in 4 turns"]
