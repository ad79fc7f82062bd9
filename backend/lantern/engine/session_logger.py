"""
Session transcript logger.

Creates human-readable log files for each game session with clearly
separated turns: the command, what the dispatcher did with it, the
engine events, and the text the player saw.

Transcripts land in <logs dir>/<world id>/. Whether the engine writes
them at all is controlled by LANTERN_SESSION_LOGS (see lantern.config).
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from lantern.config import get_logs_dir, session_logs_enabled

if TYPE_CHECKING:
    from lantern.models.command import Command
    from lantern.models.game import TurnResponse


class SessionLogger:
    """Logs the turns of one game session to a dedicated file."""

    def __init__(self, session_id: str, world_id: str, logs_dir: Path | None = None):
        self.session_id = session_id
        self.world_id = world_id
        self.logs_dir = logs_dir or get_logs_dir()
        self.turn_count = 0
        self.log_file: Path | None = None
        self._first_turn_timestamp: str | None = None

    def _ensure_log_file(self) -> Path:
        """Create the log file on the first logged turn."""
        if self.log_file is None:
            world_dir = self.logs_dir / self.world_id
            world_dir.mkdir(parents=True, exist_ok=True)

            # Use timestamp of first turn in filename
            self._first_turn_timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            filename = f"{self._first_turn_timestamp}_{self.session_id}.log"
            self.log_file = world_dir / filename

            with open(self.log_file, "w") as f:
                f.write("Lantern Session Log\n")
                f.write("===================\n")
                f.write(f"Session ID: {self.session_id}\n")
                f.write(f"World: {self.world_id}\n")
                f.write(f"Started: {datetime.now().isoformat()}\n")
                f.write("\n")

        return self.log_file

    def log_turn(self, command: "Command", response: "TurnResponse") -> None:
        """Append one turn to the session file.

        Args:
            command: The command as it was dispatched
            response: What GameEngine.execute() returned for it
        """
        log_file = self._ensure_log_file()
        self.turn_count += 1

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        with open(log_file, "a") as f:
            f.write("═" * 70 + "\n")
            f.write(f"TURN #{self.turn_count} | {timestamp} | game turn {response.turn}\n")
            f.write("═" * 70 + "\n\n")

            f.write("─── COMMAND ───\n")
            f.write(f"{command}\n")
            f.write(f"Kind: {response.command.value}\n\n")

            f.write("─── DISPATCH ───\n")
            f.write(f"Turn advanced: {'yes' if response.turn_advanced else 'no'}\n")
            if response.events_produced_output:
                f.write("Scheduled events produced output\n")
            f.write(f"Status: {response.status.value}\n\n")

            if response.events:
                f.write("─── EVENTS ───\n")
                for i, event in enumerate(response.events, 1):
                    f.write(f"{i}. {event.type.value}")
                    if event.subject:
                        f.write(f" ({event.subject})")
                    f.write("\n")

                    rejection_reason = getattr(event, "rejection_reason", None)
                    if rejection_reason:
                        f.write(f"   code: {event.rejection_code.value}\n")  # type: ignore[attr-defined]
                        f.write(f"   reason: {rejection_reason}\n")

                    for key, value in event.context.items():
                        if value is not None:
                            value_str = str(value)
                            if len(value_str) > 80:
                                value_str = value_str[:80] + "..."
                            f.write(f"   {key}: {value_str}\n")
                f.write("\n")

            f.write("─── OUTPUT ───\n")
            f.write(f"{response.text or '(none)'}\n\n")


# Store active loggers per session
_session_loggers: dict[str, SessionLogger] = {}


def get_session_logger(session_id: str, world_id: str) -> SessionLogger | None:
    """Get or create a session logger, or None when transcripts are disabled."""
    if not session_logs_enabled():
        return None
    if session_id not in _session_loggers:
        _session_loggers[session_id] = SessionLogger(session_id, world_id)
    return _session_loggers[session_id]
