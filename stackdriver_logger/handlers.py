"""Output sinks: the severity-routed JSON handler and the developer console formatter."""

import logging
import sys
from typing import TextIO

import structlog


class SeverityRoutedHandler(logging.Handler):
    """Write ERROR (and above) to stderr, everything else to stdout.

    Streams default to whatever ``sys.stdout`` / ``sys.stderr`` are at emit
    time, so redirections made after installation are honoured.
    """

    terminator = "\n"

    def __init__(
        self,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        self._stdout = stdout
        self._stderr = stderr

    def stream_for(self, record: logging.LogRecord) -> TextIO:
        if record.levelno >= logging.ERROR:
            return self._stderr if self._stderr is not None else sys.stderr
        return self._stdout if self._stdout is not None else sys.stdout

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
            stream = self.stream_for(record)
            stream.write(line + self.terminator)
            stream.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def create_console_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Human-readable formatter for local development.

    Stdlib records go through structlog's pre-chain and are rendered by
    ``ConsoleRenderer``; ``extra={...}`` fields show up as ``key=value`` pairs.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
    ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(),
        ],
    )


__all__ = ["SeverityRoutedHandler", "create_console_formatter"]
