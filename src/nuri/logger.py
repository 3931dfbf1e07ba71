"""nuri.logger
Package logging: one base logger named "nuri", a console handler, and child loggers per module.
"""

import logging
import os


class LoggingManager:
    """Interface for configuring logging in nuri.

    nuri only logs at level "DEBUG": parse failures and the outcome of each
    reference in a batch resolution. The console handler defaults to
    "WARNING", so nothing is shown unless the level is lowered.

    All submodule loggers are child loggers of the base logger.
    """

    _console_formatter = logging.Formatter("{name: <14} {levelname: >8} \t{message}", style="{")

    _console_handler = logging.StreamHandler()
    _console_handler.setFormatter(_console_formatter)
    _console_handler.setLevel(logging.WARNING)

    _root_logger = logging.getLogger("nuri")
    _root_logger.setLevel(logging.DEBUG)
    _root_logger.addHandler(_console_handler)

    @classmethod
    def get_child(cls, name: str) -> logging.Logger:
        """Return a logger with the given name that is a child of the base logger."""
        return cls._root_logger.getChild(name)

    @classmethod
    def set_level(cls, level: int) -> None:
        """Set the level of the console handler, e.g. logging.DEBUG"""
        cls._console_handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the given name that is a child of nuri's base logger."""
    return LoggingManager.get_child(name)


def set_log_level(level: str | int) -> None:
    """Set the log level for all parts of nuri.
    level is either a level from the logging module (e.g. logging.DEBUG) or its name (e.g. "DEBUG").
    """
    if isinstance(level, str):
        name: str = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"unknown log level {name!r}")
    LoggingManager.set_level(level)


def apply_environment() -> None:
    """NURI_DEBUG=1 lowers the console level to DEBUG. Runs once at import."""
    if os.getenv("NURI_DEBUG") == "1":
        LoggingManager.set_level(logging.DEBUG)


apply_environment()
