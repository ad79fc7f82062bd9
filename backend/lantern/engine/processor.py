"""
Turn driver for the Lantern engine.

GameEngine takes one structured Command at a time and runs it through the
dispatch pipeline:

    1. Game-over gating: only RESTART and QUIT get through
    2. AGAIN is replaced by the last executed command
    3. The location's begin_turn hook, which may claim the command
    4. Darkness gate: in a dark location begin_command may claim the
       command; otherwise only the dark allow-list proceeds
    5. In a lit location, begin_command may claim the command
    6. Default dispatch: accessibility, custom entity handlers (indirect
       object first), then the default verb handler
    7. Turn advance: end_turn hook, scheduler tick, turn counter

Example:
    >>> engine = GameEngine(build_world, output=ConsoleOutput())
    >>> response = engine.execute(Command.look())
    >>> response.turn_advanced
    True
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lantern.engine.entity import Entity
from lantern.engine.handlers import default_handlers
from lantern.engine.handlers.base import describe_location
from lantern.engine.handlers.movement import MovementHandler
from lantern.engine.hooks import HookPhase
from lantern.engine.output import RecordingOutput
from lantern.engine.world import World
from lantern.models.command import CommandKind
from lantern.models.event import EngineEvent, EventType, RejectionCode
from lantern.models.game import TurnResponse
from lantern.models.validation import ValidationResult, invalid_result

if TYPE_CHECKING:
    from lantern.engine.protocols import CommandParser, OutputSink, VerbHandler, WorldFactory
    from lantern.engine.session_logger import SessionLogger
    from lantern.models.command import Command

logger = logging.getLogger(__name__)

DARKNESS_MESSAGE = "It's too dark to see anything here."
NOT_ACCESSIBLE_MESSAGE = "You can't see any such thing."
GAME_OVER_REMINDER = "The game is over. Please type RESTART or QUIT."
NOTHING_TO_REPEAT_MESSAGE = "There's nothing to repeat."
RESTART_MESSAGE = "Restarting..."


class GameEngine:
    """Runs commands against a World, one turn at a time.

    The engine owns the output sink and hands every World it drives a
    recording wrapper around it, so each TurnResponse carries exactly the
    text that command produced.

    Attributes:
        world: The World currently being played
        output: Where player-visible text ends up
        handlers: Default verb handler per command kind
        running: False once the player has quit
        last_command: What AGAIN repeats
    """

    def __init__(
        self,
        world: "World | WorldFactory",
        output: "OutputSink | None" = None,
        handlers: "dict[CommandKind, VerbHandler] | None" = None,
        session_logger: "SessionLogger | None" = None,
    ):
        """Initialize the engine.

        Args:
            world: A ready World, or a factory that builds one. Only a
                factory makes RESTART possible.
            output: Sink for player-visible text. Defaults to the World's
                own sink.
            handlers: Replacement default handlers, keyed by kind
            session_logger: Optional transcript writer
        """
        if isinstance(world, World):
            self._factory: WorldFactory | None = None
            initial = world
        else:
            self._factory = world
            initial = world()

        self.output: OutputSink = output if output is not None else initial.output
        self._capture = RecordingOutput(downstream=self.output)
        self.handlers = handlers if handlers is not None else default_handlers()
        self.session_logger = session_logger
        self.running = True
        self.last_command: Command | None = None
        self.world = self._attach(initial)

    def _attach(self, world: World) -> World:
        world.output = self._capture
        return world

    # Public API

    def execute(self, command: "Command") -> TurnResponse:
        """Run one command through the full pipeline.

        Args:
            command: A structured command from the parser

        Returns:
            TurnResponse with the text, events and turn bookkeeping
        """
        self._capture.clear()
        self.world.drain_events()
        dispatched = command
        advanced = False
        produced_output = False

        if self.world.is_game_over and command.kind not in (CommandKind.RESTART, CommandKind.QUIT):
            self.world.emit(GAME_OVER_REMINDER)
        elif command.kind == CommandKind.AGAIN and self.last_command is None:
            self.world.emit(NOTHING_TO_REPEAT_MESSAGE)
        elif command.kind == CommandKind.RESTART:
            self.restart()
        else:
            if command.kind == CommandKind.AGAIN:
                dispatched = self.last_command  # type: ignore[assignment]
            else:
                self.last_command = command
            if self._run_command(dispatched):
                produced_output = self._advance_turn()
                advanced = True
            if dispatched.kind == CommandKind.QUIT:
                self.running = False

        response = TurnResponse(
            command=dispatched.kind,
            output=list(self._capture.lines),
            events=self.world.drain_events(),
            turn_advanced=advanced,
            events_produced_output=produced_output,
            turn=self.world.turns,
            status=self.world.status,
        )
        if self.session_logger is not None:
            self.session_logger.log_turn(dispatched, response)
        return response

    def process_input(self, raw_input: str, parser: "CommandParser") -> TurnResponse:
        """Parse raw player input and execute the resulting command."""
        return self.execute(parser.parse(raw_input, self.world))

    def wait_turns(self, turns: int) -> int:
        """Let up to turns turns pass, stopping early when something happens.

        A turn counts as eventful when a scheduled event produced output or
        the game ended.

        Returns:
            The number of turns that actually passed
        """
        passed = 0
        for _ in range(turns):
            if self.world.is_game_over:
                break
            produced = self._advance_turn()
            passed += 1
            if produced or self.world.is_game_over:
                break
        return passed

    def restart(self) -> World:
        """Replace the World with a fresh one from the factory.

        Without a factory the current World is kept and the player is told
        so.
        """
        if self._factory is None:
            self.world.emit("This game can't be restarted.")
            return self.world
        logger.info("Restarting '%s'", self.world.title)
        self.world = self._attach(self._factory())
        self.last_command = None
        self.running = True
        self.world.emit(RESTART_MESSAGE)
        self.world.record(EngineEvent(type=EventType.GAME_RESTARTED))
        describe_location(self.world)
        return self.world

    # Dispatch pipeline

    def _run_command(self, command: "Command") -> bool:
        """Dispatch a command. Returns whether the turn should advance."""
        world = self.world

        here = world.current_location
        if command.consumes_turn and here.run_hook(HookPhase.BEGIN_TURN):
            logger.debug("'%s' claimed by begin_turn at %s", command, here.name)
            world.record(EngineEvent(type=EventType.HOOK_HANDLED, subject=here.name))
            return self._should_advance(command)
        if world.is_game_over:
            return False

        here = world.current_location
        if not world.is_lit():
            if here.run_begin_command(command):
                world.record(EngineEvent(type=EventType.HOOK_HANDLED, subject=here.name))
                return self._should_advance(command)
            if not command.allowed_in_dark:
                logger.debug("'%s' refused in the dark at %s", command, here.name)
                world.emit(DARKNESS_MESSAGE)
                world.record(EngineEvent(type=EventType.DARKNESS_BLOCKED, subject=here.name))
                return False
        elif here.run_begin_command(command):
            world.record(EngineEvent(type=EventType.HOOK_HANDLED, subject=here.name))
            return self._should_advance(command)

        self._dispatch_default(command)
        return self._should_advance(command)

    def _should_advance(self, command: "Command") -> bool:
        return command.consumes_turn and not self.world.is_game_over

    def _dispatch_default(self, command: "Command") -> None:
        world = self.world

        access = self._check_access(command)
        if not access.valid:
            self._reject(command, access)
            return

        for obj in (command.indirect_object, command.direct_object):
            if isinstance(obj, Entity) and obj.process_command(command):
                logger.debug("'%s' handled by %s", command, obj.name)
                world.record(EngineEvent(type=EventType.CUSTOM_HANDLED, subject=obj.name))
                return

        handler = self.handlers.get(command.kind) or self.handlers[CommandKind.UNKNOWN]
        result = handler.validate(command, world)
        if not result.valid:
            self._reject(command, result)
            return

        outcome = handler.execute(command, result, world)
        if isinstance(handler, MovementHandler):
            event = handler.create_event(command, result, world, outcome=outcome)
        else:
            event = handler.create_event(command, result, world)
        world.record(event)

        if handler.checks_victory:
            is_victory, ending_narrative = world.check_victory()
            if is_victory:
                world.player_won(ending_narrative)

    def _check_access(self, command: "Command") -> ValidationResult:
        """Every entity a command names must be within the player's reach.

        Reach is the same lit or dark; the darkness gate has already decided
        which commands may run without light.
        """
        world = self.world
        for obj in command.objects:
            if not isinstance(obj, Entity):
                continue
            if obj is world.player or obj is world.current_location:
                continue
            if not world.is_accessible(obj):
                return invalid_result(RejectionCode.NOT_ACCESSIBLE, NOT_ACCESSIBLE_MESSAGE, entity=obj.name)
        return ValidationResult(valid=True)

    def _reject(self, command: "Command", result: ValidationResult) -> None:
        assert result.rejection_reason is not None
        self.world.emit(result.rejection_reason)
        subject = command.direct_object
        self.world.record(
            result.to_rejection_event(subject=getattr(subject, "name", None))
        )

    def _advance_turn(self) -> bool:
        """End-of-turn processing. Returns whether a scheduled event printed anything."""
        world = self.world
        world.current_location.run_hook(HookPhase.END_TURN)
        produced = world.scheduler.tick()
        world.turns += 1
        return produced
