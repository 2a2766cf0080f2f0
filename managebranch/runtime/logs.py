"""Logging setup for runner and local execution."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

# Workflow command used for each level, checked from the highest level down.
_LEVEL_COMMANDS = (
    (logging.ERROR, "error"),
    (logging.WARNING, "warning"),
    (logging.INFO, "notice"),
    (logging.DEBUG, "debug"),
)


def escape_data(value: str) -> str:
    """Escape a value for use in a workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandHandler(logging.Handler):
    """Render log records as GitHub Actions workflow commands (``::notice::msg``)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream

    def command_for(self, levelno: int) -> str:
        for level, command in _LEVEL_COMMANDS:
            if levelno >= level:
                return command
        return "debug"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            stream = self.stream or sys.stdout
            stream.write(f"::{self.command_for(record.levelno)}::{escape_data(message)}\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def setup_logging(debug: bool = False, on_runner: bool = False) -> logging.Logger:
    """Configure the package logger.

    On a runner records become workflow commands; locally they go through rich.
    """
    logger = logging.getLogger("managebranch")
    logger.handlers.clear()
    logger.propagate = False

    handler: logging.Handler
    if on_runner:
        handler = WorkflowCommandHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)

    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
