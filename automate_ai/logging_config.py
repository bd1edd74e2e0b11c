"""Logging setup for the automate-ai CLI.

Records go to stderr so they never mix with the rich output on stdout.
The delete command also writes them to a file, since it normally runs
over SSH from Home Assistant with nobody watching the terminal.
"""

import logging
import sys
from pathlib import Path
from typing import Literal

from automate_ai.settings import get_settings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

# Third-party loggers kept at WARNING regardless of the app level
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "urllib3",
    "asyncio",
    "grpc",
    "google",
    "google_genai",
    "langchain",
    "langchain_core",
    "langchain_google_genai",
)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def suppress_noisy_loggers() -> None:
    """Cap chatty library loggers at WARNING and drop handlers they installed."""
    for name in NOISY_LOGGERS:
        library_logger = logging.getLogger(name)
        library_logger.setLevel(logging.WARNING)
        library_logger.handlers.clear()


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def configure_logging(level: LogLevel | None = None, log_file: Path | str | None = None) -> None:
    """Replace the root logger's handlers with ours.

    Args:
        level: Level for automate_ai records; LOG_LEVEL from settings when omitted
        log_file: Also append every record to this file
    """
    numeric_level = getattr(logging, level or get_settings().log_level)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)  # handlers do the filtering
    root.addHandler(_handler(logging.StreamHandler(sys.stderr), numeric_level))
    if log_file:
        root.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), numeric_level))

    logging.getLogger("automate_ai").setLevel(numeric_level)
    suppress_noisy_loggers()
