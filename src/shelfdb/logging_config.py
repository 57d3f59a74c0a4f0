"""
Structured logging for shelfdb.

Loggers returned here accept an event name plus keyword fields and render
them as one JSON line, so store events stay greppable:

    logger = get_logger(__name__)
    logger.warning("encode_failed", table="Person", code=1001)

The library never installs handlers on the root logger. `configure_logging`
is for applications and the CLI.
"""

import json
import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "shelfdb"


class StructuredLogger:
    """
    Wraps a stdlib logger so calls take an event name plus keyword fields.

    The JSON line is only rendered when the wrapped logger is enabled for
    the call's level.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def log(self, level: int, event: str, **fields: object) -> None:
        """Emit event at level if the logger would handle it."""
        if self._logger.isEnabledFor(level):
            self._logger.log(level, format_event(event, fields))

    def debug(self, event: str, **fields: object) -> None:
        self.log(logging.DEBUG, event, **fields)

    def info(self, event: str, **fields: object) -> None:
        self.log(logging.INFO, event, **fields)

    def warning(self, event: str, **fields: object) -> None:
        self.log(logging.WARNING, event, **fields)

    def error(self, event: str, **fields: object) -> None:
        self.log(logging.ERROR, event, **fields)


def format_event(event: str, fields: dict[str, object]) -> str:
    """
    Render a structured event line.

    Args:
        event: Event name.
        fields: Event fields.

    Returns:
        The bare event name, or a JSON object when fields are present.
    """
    if not fields:
        return event
    payload = {"event": event, **fields}
    return json.dumps(payload, sort_keys=True, default=str)


def get_logger(name: str) -> StructuredLogger:
    """Return a structured logger, usually called with __name__."""
    return StructuredLogger(logging.getLogger(name))


def configure_logging(level: str | int = logging.WARNING) -> None:
    """
    Attach a Rich handler (stderr) to the package logger and set its level.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
