"""
logger_helper.py - Logging Helpers

get_logger(name): named module logger that propagates to the root logger
configure_logging(verbose): one console handler on the root logger, used by
the CLI and GUI entry points
"""

import logging
import os
import re
import sys
from typing import Optional

LOG_LEVEL_ENV = "RENAMER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_ASCII_REPLACEMENTS = {
    "→": "->",
    "…": "...",
}


def safe_text(text: str) -> str:
    """Replace arrows and ellipses that some consoles cannot encode."""
    pattern = re.compile("|".join(map(re.escape, _ASCII_REPLACEMENTS)))
    return pattern.sub(lambda m: _ASCII_REPLACEMENTS[m.group(0)], text)


class SafeConsoleHandler(logging.StreamHandler):
    """Stream handler that falls back to ASCII-safe text on encoding errors."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            try:
                self.stream.write(msg + self.terminator)
            except UnicodeEncodeError:
                self.stream.write(safe_text(msg).encode("ascii", "replace").decode("ascii") + self.terminator)
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the logger for a module

    Args:
        name: Logger name, usually __name__

    Returns:
        Logger that leaves output to the root logger's handlers
    """
    logger = logging.getLogger(name or "renamer")
    logger.propagate = True
    return logger


def resolve_level(verbose: bool = False) -> int:
    """Pick the root level from --verbose, then RENAMER_LOG_LEVEL, then INFO."""
    if verbose:
        return logging.DEBUG

    env_level = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if env_level:
        level = logging.getLevelName(env_level)
        if isinstance(level, int):
            return level

    return logging.INFO


def configure_logging(verbose: bool = False, stream=None) -> logging.Logger:
    """
    Install a single console handler on the root logger

    Calling it again replaces the handler instead of stacking a new one.

    Args:
        verbose: Log DEBUG messages (per-file evaluation details)
        stream: Output stream, stderr by default

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(verbose))

    for handler in list(root.handlers):
        if getattr(handler, "_renamer_console", False):
            root.removeHandler(handler)

    handler = SafeConsoleHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    handler._renamer_console = True
    root.addHandler(handler)

    return root
