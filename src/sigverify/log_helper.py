"""
Logging setup. Records go to stderr; stdout carries only the JSON report.
"""
import logging
import sys

_FORMAT = logging.Formatter('[%(asctime)s] %(levelname)s %(name)s - %(message)s')
_handler: logging.StreamHandler | None = None


def configure(level: str = "WARNING") -> None:
    """
    Set the package log level and bind a handler to the current sys.stderr.

    Calling it again replaces the previous handler instead of stacking another.
    """
    global _handler
    root = logging.getLogger("sigverify")
    numeric = logging.getLevelName(level)
    root.setLevel(numeric if isinstance(numeric, int) else logging.WARNING)
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(_FORMAT)
    root.addHandler(_handler)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger."""
    return logging.getLogger(f"sigverify.{name}")
