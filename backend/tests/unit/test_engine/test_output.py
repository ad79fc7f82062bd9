"""Unit tests for output sinks.

Tests cover:
- RecordingOutput capture, marks and downstream forwarding
- ConsoleOutput writing to a stream
- Protocol conformance
"""

import io

from lantern.engine.output import ConsoleOutput, RecordingOutput
from lantern.engine.protocols import OutputSink


class TestRecordingOutput:
    """Tests for RecordingOutput."""

    def test_records_lines(self) -> None:
        """Every emitted block is kept in order."""
        out = RecordingOutput()
        out.emit("Taken.")
        out.emit("Dropped.")

        assert out.lines == ["Taken.", "Dropped."]
        assert out.text == "Taken.\nDropped."

    def test_mark_and_since(self) -> None:
        """since(mark) returns what was emitted after the mark."""
        out = RecordingOutput()
        out.emit("before")
        mark = out.mark()
        out.emit("after")

        assert out.since(mark) == ["after"]

    def test_forwards_downstream(self) -> None:
        """A downstream sink sees every line too."""
        downstream = RecordingOutput()
        out = RecordingOutput(downstream=downstream)
        out.emit("Hello.")
        out.clear()

        assert out.lines == []
        assert downstream.lines == ["Hello."]


class TestConsoleOutput:
    """Tests for ConsoleOutput."""

    def test_writes_lines(self) -> None:
        """Each block ends with a newline."""
        stream = io.StringIO()
        ConsoleOutput(stream).emit("You are in a maze.")

        assert stream.getvalue() == "You are in a maze.\n"

    def test_protocol(self) -> None:
        """Both sinks satisfy the OutputSink protocol."""
        assert isinstance(ConsoleOutput(io.StringIO()), OutputSink)
        assert isinstance(RecordingOutput(), OutputSink)
