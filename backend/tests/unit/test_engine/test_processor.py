"""Unit tests for GameEngine.

Tests cover:
- Turn advance for normal, meta and unknown commands
- The darkness gate and begin_command hooks
- Accessibility checks and custom entity handlers
- Victory and game-over gating
- RESTART, AGAIN and QUIT
- wait_turns(), process_input() and transcript logging
"""

import pytest

from lantern.engine.entity import Entity
from lantern.engine.processor import (
    DARKNESS_MESSAGE,
    GAME_OVER_REMINDER,
    NOT_ACCESSIBLE_MESSAGE,
    NOTHING_TO_REPEAT_MESSAGE,
    RESTART_MESSAGE,
    GameEngine,
)
from lantern.engine.world import VICTORY_BANNER
from lantern.models.command import Command, CommandKind
from lantern.models.event import EventType, RejectionCode
from lantern.models.flags import Flag
from lantern.models.game import GameStatus
from lantern.models.world import VictoryCondition


class TestTurnAdvance:
    """Tests for which commands advance time."""

    def test_normal_command_advances(self, engine) -> None:
        """A regular command advances the turn and ticks the scheduler."""
        engine.world.queue_event("bell", 1, lambda: engine.world.emit("A bell rings.") or True)

        response = engine.execute(Command.take(engine.world.get_entity("lamp")))

        assert response.turn_advanced is True
        assert response.turn == 1
        assert response.events_produced_output is True
        assert response.output == ["Taken.", "A bell rings."]

    def test_refused_command_still_advances(self, engine) -> None:
        """A handler refusal still uses up the turn."""
        response = engine.execute(Command.take(engine.world.get_entity("sign")))

        assert response.turn_advanced is True
        assert response.events[-1].rejection_code == RejectionCode.ITEM_NOT_PORTABLE

    def test_meta_command_does_not_advance(self, engine) -> None:
        """Meta commands leave the clock alone."""
        response = engine.execute(Command.meta(CommandKind.VERSION))

        assert response.turn_advanced is False
        assert engine.world.turns == 0

    def test_unknown_command_does_not_advance(self, engine) -> None:
        """Unparseable input prints the parser's message without using a turn."""
        response = engine.execute(Command.unknown("I don't know the word 'frob'."))

        assert response.output == ["I don't know the word 'frob'."]
        assert response.turn_advanced is False

    def test_end_turn_hook(self, engine) -> None:
        """The location's end_turn hook runs once per advanced turn."""
        calls: list[str] = []
        engine.world.current_location.on_end_turn(lambda room: calls.append(room.name) or False)

        engine.execute(Command.wait())
        engine.execute(Command.meta(CommandKind.HELP))

        assert calls == ["Foyer"]

    def test_movement(self, engine) -> None:
        """Moving changes location and records the move."""
        response = engine.execute(Command.move("north"))

        assert engine.world.current_location.name == "Study"
        assert response.events[-1].type == EventType.PLAYER_MOVED


class TestDarkness:
    """Tests for the darkness gate."""

    @pytest.fixture
    def in_cellar(self, engine) -> GameEngine:
        engine.world.player.move_to(engine.world.get_location("cellar"))
        return engine

    def test_refuses_in_dark(self, in_cellar) -> None:
        """Commands outside the dark allow-list are refused without a turn."""
        response = in_cellar.execute(Command.examine(in_cellar.world.player))

        assert response.output == [DARKNESS_MESSAGE]
        assert response.events[-1].type == EventType.DARKNESS_BLOCKED
        assert response.turn_advanced is False

    def test_allowed_in_dark(self, in_cellar) -> None:
        """Allow-listed commands such as INVENTORY still run."""
        response = in_cellar.execute(Command.inventory())

        assert response.output == ["You're not carrying anything."]
        assert response.turn_advanced is True

    def test_begin_command_claims_in_dark(self, in_cellar) -> None:
        """A begin_command hook may claim a command in the dark, once."""
        cellar = in_cellar.world.current_location
        calls: list[CommandKind] = []

        def grue(room, command) -> bool:
            calls.append(command.kind)
            room.world.emit("Something snuffles nearby.")
            return True

        cellar.on_begin_command(grue)
        response = in_cellar.execute(Command.examine(in_cellar.world.player))

        assert calls == [CommandKind.EXAMINE]
        assert response.output == ["Something snuffles nearby."]
        assert response.events[-1].type == EventType.HOOK_HANDLED
        assert response.turn_advanced is True

    def test_take_object_lying_in_dark_room(self, in_cellar) -> None:
        """An object in the dark room is within reach, so TAKE succeeds."""
        cellar = in_cellar.world.current_location
        pebble = Entity("pebble", flags=[Flag.TAKEABLE], location=cellar)

        response = in_cellar.execute(Command.take(pebble))

        assert response.output == ["Taken."]
        assert in_cellar.world.player.is_carrying(pebble)
        assert response.turn_advanced is True

    def test_out_of_reach_in_dark(self, in_cellar) -> None:
        """The dark uses the same reach rule as a lit room."""
        response = in_cellar.execute(Command.take(in_cellar.world.get_entity("coin")))

        assert response.output == [NOT_ACCESSIBLE_MESSAGE]
        assert response.events[-1].rejection_code == RejectionCode.NOT_ACCESSIBLE
        assert response.turn_advanced is True


class TestDispatch:
    """Tests for accessibility checks and custom handlers."""

    def test_inaccessible_object(self, engine) -> None:
        """Objects out of reach are refused."""
        response = engine.execute(Command.examine(engine.world.get_entity("coin")))

        assert response.output == [NOT_ACCESSIBLE_MESSAGE]
        assert response.events[-1].rejection_code == RejectionCode.NOT_ACCESSIBLE

    def test_begin_turn_claims_command(self, engine) -> None:
        """A begin_turn hook returning True ends the command before dispatch."""
        engine.world.current_location.on_begin_turn(
            lambda room: room.world.emit("A gust blows you back.") or True
        )

        response = engine.execute(Command.move("north"))

        assert engine.world.current_location.name == "Foyer"
        assert response.output == ["A gust blows you back."]
        assert response.events[-1].type == EventType.HOOK_HANDLED
        assert response.events[-1].subject == "Foyer"
        assert response.turn_advanced is True

    def test_begin_turn_declines(self, engine) -> None:
        """A begin_turn hook returning False lets the command run."""
        seen: list[str] = []
        engine.world.current_location.on_begin_turn(lambda room: seen.append(room.name) or False)

        engine.execute(Command.move("north"))

        assert seen == ["Foyer"]
        assert engine.world.current_location.name == "Study"

    def test_room_begin_command_claims(self, engine) -> None:
        """In a lit room begin_command runs before default dispatch."""
        engine.world.current_location.on_begin_command(
            lambda room, command: command.kind == CommandKind.JUMP and (room.world.emit("Mind the stairs!") or True)
        )

        assert engine.execute(Command.of(CommandKind.JUMP)).output == ["Mind the stairs!"]
        assert engine.execute(Command.of(CommandKind.SING)).output[0].startswith("You sing")

    def test_indirect_object_handler_first(self, engine) -> None:
        """The indirect object's handler gets the command before the direct object's."""
        world = engine.world
        calls: list[str] = []
        pebble = Entity("pebble", flags=[Flag.TAKEABLE], location=world.player)
        well = Entity("well", flags=[Flag.CONTAINER, Flag.OPEN], location=world.current_location)

        def pebble_handler(entity, command) -> bool:
            calls.append(entity.name)
            return False

        def well_handler(entity, command) -> bool:
            calls.append(entity.name)
            world.emit("The pebble vanishes into the darkness. Plop.")
            pebble.move_to(None)
            return True

        pebble.set_command_handler(pebble_handler)
        well.set_verb_handlers({CommandKind.PUT_IN: well_handler})
        response = engine.execute(Command.put_in(pebble, well))

        assert calls == ["well"]
        assert pebble.location is None
        assert response.events[-1].type == EventType.CUSTOM_HANDLED
        assert response.events[-1].subject == "well"

    def test_victory_after_take(self, engine) -> None:
        """Handlers that check victory end the game when the condition is met."""
        engine.world.victory = VictoryCondition(item="lamp", narrative="Light at last!")

        response = engine.execute(Command.take(engine.world.get_entity("lamp")))

        assert response.status == GameStatus.WON
        assert response.game_over
        assert "Light at last!" in response.output
        assert VICTORY_BANNER in response.output


class TestGameOver:
    """Tests for commands after the game has ended."""

    def test_reminder_after_game_over(self, engine) -> None:
        """Only RESTART and QUIT get through once the game is over."""
        engine.world.player_died("You fall down the stairs.")

        response = engine.execute(Command.look())

        assert response.output == [GAME_OVER_REMINDER]
        assert response.turn_advanced is False

    def test_quit_after_game_over(self, engine) -> None:
        """QUIT still works and stops the engine."""
        engine.world.player_died()

        engine.execute(Command.quit())

        assert engine.running is False


class TestEngineCommands:
    """Tests for RESTART, AGAIN and QUIT."""

    def test_restart_builds_fresh_world(self, engine) -> None:
        """RESTART swaps in a new world from the factory and describes it."""
        old_world = engine.world
        engine.execute(Command.take(old_world.get_entity("lamp")))

        response = engine.execute(Command.restart())

        assert engine.world is not old_world
        assert engine.world.get_entity("lamp").location is engine.world.current_location
        assert response.output[0] == RESTART_MESSAGE
        assert response.output[1].startswith("A grand foyer")
        assert response.events[0].type == EventType.GAME_RESTARTED
        assert response.turn_advanced is False
        assert engine.last_command is None

    def test_restart_after_game_over(self, engine) -> None:
        """A finished game can be restarted."""
        engine.world.player_died()

        response = engine.execute(Command.restart())

        assert response.status == GameStatus.PLAYING
        assert not engine.world.is_game_over

    def test_restart_without_factory(self, world, output) -> None:
        """An engine built around a ready World can't restart."""
        engine = GameEngine(world, output=output)

        response = engine.execute(Command.restart())

        assert engine.world is world
        assert response.output == ["This game can't be restarted."]

    def test_again_repeats_last_command(self, engine) -> None:
        """AGAIN runs the previous command once more."""
        engine.execute(Command.take(engine.world.get_entity("lamp")))

        response = engine.execute(Command.again())

        assert response.command == CommandKind.TAKE
        assert response.events[-1].rejection_code == RejectionCode.ALREADY_HAVE
        assert engine.world.turns == 2

    def test_again_with_nothing_to_repeat(self, engine) -> None:
        """AGAIN at the start of the game has nothing to repeat."""
        response = engine.execute(Command.again())

        assert response.output == [NOTHING_TO_REPEAT_MESSAGE]
        assert response.turn_advanced is False

    def test_quit_stops_engine(self, engine) -> None:
        """QUIT says goodbye and clears the running flag."""
        response = engine.execute(Command.quit())

        assert response.output == ["Thanks for playing!"]
        assert engine.running is False
        assert response.turn_advanced is False


class TestWaitTurns:
    """Tests for GameEngine.wait_turns()."""

    def test_stops_when_something_happens(self, engine) -> None:
        """Waiting stops on the turn a scheduled event prints something."""
        engine.world.queue_event("knock", 3, lambda: engine.world.emit("Someone knocks.") or True)

        passed = engine.wait_turns(10)

        assert passed == 3
        assert engine.world.turns == 3

    def test_runs_all_turns_when_quiet(self, engine) -> None:
        """Without events every turn passes."""
        assert engine.wait_turns(4) == 4

    def test_stops_on_game_over(self, engine) -> None:
        """A death during the wait stops it."""
        engine.world.queue_event("collapse", 2, lambda: engine.world.player_died("The ceiling falls.") or True)

        assert engine.wait_turns(5) == 2
        assert engine.world.status == GameStatus.LOST


class TestIntegrationPoints:
    """Tests for process_input() and transcript logging."""

    def test_process_input_uses_parser(self, engine) -> None:
        """Raw input is handed to the parser with the live world."""
        seen: list[str] = []

        class StubParser:
            def parse(self, raw_input, world):
                seen.append(raw_input)
                return Command.look() if raw_input == "look" else Command.unknown()

        response = engine.process_input("look", StubParser())

        assert seen == ["look"]
        assert response.command == CommandKind.LOOK

    def test_session_logger_receives_turns(self, output, build_house) -> None:
        """Every executed command is passed to the session logger."""
        logged: list[tuple] = []

        class StubLogger:
            def log_turn(self, command, response) -> None:
                logged.append((command.kind, response.turn))

        engine = GameEngine(build_house, output=output, session_logger=StubLogger())
        engine.execute(Command.wait())
        engine.execute(Command.meta(CommandKind.VERBOSE))

        assert logged == [(CommandKind.WAIT, 1), (CommandKind.VERBOSE, 1)]

    def test_output_forwarded_downstream(self, engine, output) -> None:
        """The engine's sink sees the text of every turn."""
        engine.execute(Command.wait())
        engine.execute(Command.wait())

        assert output.lines == ["Time passes.", "Time passes."]
