"""Structured JSON logging for the launcher.

Every record is one JSON object per line on stderr; stdout is reserved for
the MCP stdio transport. Resolution steps attach a ``data`` dict through
:func:`log_with_data` so download URLs, versions and paths stay machine
readable.
"""

import json
import logging
import sys
from typing import Any, Dict, IO, Optional, Union

APP_LOGGER = "ltex_launcher"

# stdout belongs to the MCP transport
root = logging.getLogger()
root.handlers = []


class ColorCodes:
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    BOLD = "\033[1m"


LEVEL_COLORS = {
    "DEBUG": ColorCodes.BLUE,
    "INFO": ColorCodes.GREEN,
    "WARNING": ColorCodes.YELLOW,
    "ERROR": ColorCodes.RED + ColorCodes.BOLD,
    "CRITICAL": ColorCodes.MAGENTA + ColorCodes.BOLD,
}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Colour escapes wrap the line only when ``use_color`` is set, so log
    files and editor consoles receive plain JSON.
    """

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        output = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        data = getattr(record, "data", None)
        if data is not None:
            output["data"] = data

        if record.exc_info:
            output["exc"] = self.formatException(record.exc_info)

        line = json.dumps(output, default=str)
        if not self.use_color:
            return line
        color = LEVEL_COLORS.get(record.levelname, "")
        return f"{color}{line}{ColorCodes.RESET}"


def parse_level(level: Union[int, str, None]) -> int:
    """Accept a level number, a level name such as ``"debug"``, or None."""
    if level is None or level == "":
        return logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {level}")
    return value


def configure_logging(
    level: Union[int, str, None] = logging.INFO,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Install the JSON handler on the launcher logger.

    Calling this again only adjusts the level of the existing handler.
    """
    app_logger = logging.getLogger(APP_LOGGER)
    numeric = parse_level(level)

    if not app_logger.handlers:
        stream = stream or sys.stderr
        handler = logging.StreamHandler(stream)
        is_tty = getattr(stream, "isatty", None)
        handler.setFormatter(JsonFormatter(use_color=bool(is_tty and is_tty())))
        app_logger.addHandler(handler)
        app_logger.propagate = False

    app_logger.setLevel(numeric)
    for handler in app_logger.handlers:
        handler.setLevel(numeric)
    return app_logger


def get_logger(name: str) -> logging.Logger:
    if name == APP_LOGGER or name.startswith(f"{APP_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER}.{name}")


def log_with_data(
    logger: logging.Logger,
    level: int,
    msg: str,
    data: Optional[Dict[str, Any]] = None,
) -> None:
    """Log ``msg`` with a structured ``data`` payload attached."""
    extra = {"data": data} if data else None
    logger.log(level, msg, extra=extra)
