"""
Output sinks for player-visible text.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from lantern.engine.protocols import OutputSink


class ConsoleOutput:
    """Writes each emitted block to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def emit(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()


class RecordingOutput:
    """Keeps emitted text in memory.

    Used by tests and by the turn driver to capture what a single command
    produced. An optional downstream sink receives every line as well.

    Example:
        >>> out = RecordingOutput()
        >>> out.emit("Taken.")
        >>> out.lines
        ['Taken.']
    """

    def __init__(self, downstream: "OutputSink | None" = None):
        self.lines: list[str] = []
        self.downstream = downstream

    def emit(self, text: str) -> None:
        self.lines.append(text)
        if self.downstream is not None:
            self.downstream.emit(text)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def mark(self) -> int:
        """Position to pass to since() later."""
        return len(self.lines)

    def since(self, mark: int) -> list[str]:
        return self.lines[mark:]

    def clear(self) -> None:
        self.lines.clear()
