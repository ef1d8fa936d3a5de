"""Tests for output sinks."""

from io import StringIO
import json
import logging

import pytest

from stackdriver_logger.handlers import SeverityRoutedHandler, create_console_formatter
from stackdriver_logger.services import StackdriverFormatter


def _record(level: int, msg: str = "message", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="/srv/app/main.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSeverityRoutedHandler:
    """Tests for stdout/stderr routing."""

    @pytest.fixture
    def streams(self) -> tuple[StringIO, StringIO]:
        return StringIO(), StringIO()

    @pytest.fixture
    def handler(self, streams: tuple[StringIO, StringIO]) -> SeverityRoutedHandler:
        stdout, stderr = streams
        handler = SeverityRoutedHandler(stdout=stdout, stderr=stderr)
        handler.setFormatter(StackdriverFormatter())
        return handler

    @pytest.mark.parametrize("level", [5, logging.DEBUG, logging.INFO, logging.WARNING])
    def test_informational_levels_go_to_stdout(
        self, level: int, handler: SeverityRoutedHandler, streams: tuple[StringIO, StringIO]
    ) -> None:
        """Test that everything below ERROR is written to stdout."""
        stdout, stderr = streams
        handler.handle(_record(level))
        assert stderr.getvalue() == ""
        assert json.loads(stdout.getvalue())["message"] == "message"

    @pytest.mark.parametrize("level", [logging.ERROR, logging.CRITICAL])
    def test_error_levels_go_to_stderr(
        self, level: int, handler: SeverityRoutedHandler, streams: tuple[StringIO, StringIO]
    ) -> None:
        """Test that ERROR and above are written to stderr."""
        stdout, stderr = streams
        handler.handle(_record(level))
        assert stdout.getvalue() == ""
        assert json.loads(stderr.getvalue())["severity"] == "ERROR"

    def test_one_line_per_record(
        self, handler: SeverityRoutedHandler, streams: tuple[StringIO, StringIO]
    ) -> None:
        """Test newline-delimited output."""
        stdout, _ = streams
        handler.handle(_record(logging.INFO, "first"))
        handler.handle(_record(logging.INFO, "second"))
        lines = stdout.getvalue().splitlines()
        assert [json.loads(line)["message"] for line in lines] == ["first", "second"]

    def test_defaults_to_process_streams(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that sys.stdout / sys.stderr are looked up at emit time."""
        handler = SeverityRoutedHandler()
        handler.setFormatter(StackdriverFormatter())
        handler.handle(_record(logging.INFO, "to stdout"))
        handler.handle(_record(logging.ERROR, "to stderr"))
        captured = capsys.readouterr()
        assert json.loads(captured.out)["message"] == "to stdout"
        assert json.loads(captured.err)["message"].startswith("to stderr \n at ")


class TestConsoleFormatter:
    """Tests for the developer console formatter."""

    def test_human_readable_output(self) -> None:
        """Test that development output is not JSON and shows extras."""
        formatter = create_console_formatter()
        output = formatter.format(_record(logging.INFO, "Hello dev", request_id="abc-123"))
        with pytest.raises(json.JSONDecodeError):
            json.loads(output)
        assert "Hello dev" in output
        assert "request_id" in output
        assert "abc-123" in output
        assert "test.logger" in output
