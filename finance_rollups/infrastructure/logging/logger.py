"""Application logging helpers.

Loggers are built once per name and write to
``<project root>/logs/<subdir>/<YYYYMMDD>_<prefix>.log``, optionally
mirrored to the console.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from finance_rollups.utils.utils import get_project_root


class LoggerBuilder:
    """Fluent builder for configured ``logging.Logger`` instances."""

    def __init__(self) -> None:
        """Initialize the builder with the default app logger settings."""
        self._name = "app"
        self._subdir = "app"
        self._prefix = "app_logs"
        self._console = False
        self._level = logging.INFO
        self._formatter_factory: Callable[[], logging.Formatter] = (
            self._default_formatter
        )
        self._file_handler_factory: Callable[
            [Path, logging.Formatter], logging.Handler
        ] = self._default_file_handler
        self._console_handler_factory: Callable[
            [logging.Formatter], logging.Handler
        ] = self._default_console_handler

    def name(self, name: str) -> "LoggerBuilder":
        """Set the name passed to ``logging.getLogger``."""
        self._name = name
        return self

    def subdir(self, subdir: str) -> "LoggerBuilder":
        """Set the directory under ``logs/`` holding the log file."""
        self._subdir = subdir
        return self

    def prefix(self, prefix: str) -> "LoggerBuilder":
        """Set the file name suffix after the date stamp."""
        self._prefix = prefix
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        """Enable or disable mirroring records to the console."""
        self._console = enabled
        return self

    def level(self, level: int) -> "LoggerBuilder":
        """Set the logger level."""
        self._level = level
        return self

    def formatter(
        self,
        factory: Callable[[], logging.Formatter],
    ) -> "LoggerBuilder":
        """Set the factory building the shared formatter."""
        self._formatter_factory = factory
        return self

    def file_handler(
        self,
        factory: Callable[[Path, logging.Formatter], logging.Handler],
    ) -> "LoggerBuilder":
        """Set the factory building the file handler.

        Args:
            factory: Callable receiving the log path and the formatter.

        Returns:
            LoggerBuilder: The builder, for chaining.
        """
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: Callable[[logging.Formatter], logging.Handler],
    ) -> "LoggerBuilder":
        """Set the factory building the console handler."""
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Build the logger, reusing it when it already has handlers.

        Returns:
            logging.Logger: Configured logger instance.
        """
        logger = logging.getLogger(self._name)
        if logger.handlers:
            return logger

        logger.setLevel(self._level)
        logger.propagate = False
        fmt = self._formatter_factory()

        log_dir = get_project_root() / "logs" / self._subdir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"
        logger.addHandler(self._file_handler_factory(log_path, fmt))
        if self._console:
            logger.addHandler(self._console_handler_factory(fmt))
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return datetime.now().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(
            "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
        )

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Singleton wrapper delegating to a built ``logging.Logger``."""

    _instance = None
    _subdir = "app"
    _prefix = "app_logs"

    def __new__(cls, name: str = "app"):
        """Return the class singleton, building its logger on first use.

        Args:
            name: Logger name used on first construction only.

        Returns:
            Logger: Shared instance of the class.
        """
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.logger = (
                LoggerBuilder()
                .name(name)
                .subdir(cls._subdir)
                .prefix(cls._prefix)
                .console(True)
                .build()
            )
            cls._instance = instance
        return cls._instance

    def info(self, message: str) -> None:
        """Log ``message`` at INFO level."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log ``message`` at WARNING level."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log ``message`` at ERROR level."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log ``message`` at DEBUG level."""
        self.logger.debug(message)

    def critical(self, message: str) -> None:
        """Log ``message`` at CRITICAL level."""
        self.logger.critical(message)


class AppLogger(Logger):
    """Logger used by use cases and domain services."""

    _instance = None
    _subdir = "rollups"
    _prefix = "rollups_logs"


def get_app_logger() -> AppLogger:
    """Return the application logger singleton."""
    return AppLogger("finance_rollups")


__all__ = ["LoggerBuilder", "Logger", "AppLogger", "get_app_logger"]
