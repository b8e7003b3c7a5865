"""
Logging setup for hosts that want to see what the binder does.

The package logs through logging.getLogger(__name__) in every module and only
carries a NullHandler by default. setup_logger() attaches a rich handler on
stderr, once, to the package logger (or any other named logger).
"""
import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(level="DEBUG", /, *, name="cmdbind"):
    """
    Attach a RichHandler to the named logger and set its level.

    Parameters
    - level: str | int
      Logging level name ("DEBUG", "info", ...) or number.
    - name: str
      Logger to configure; the package logger by default.

    Returns
    - logging.Logger: the configured logger.
    """
    if isinstance(level, str):
        try:
            level = logging.getLevelNamesMapping()[level.upper()]
        except KeyError:
            raise ValueError(f"unknown logging level {level!r}") from None
    logger = logging.getLogger(name)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = (
    "setup_logger",
)
