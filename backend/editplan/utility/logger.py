"""Process-wide logging setup: colored console output plus an optional log file."""

import logging
import os
from logging import Logger
from typing import Optional

from editplan.utility.path_finder import Finder

RESET_COLOR = "\033[0m"
CONSOLE_FORMAT = "%(colored_levelname)s %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s"


class ColorFormatter(logging.Formatter):
    """Console formatter exposing ``colored_levelname`` to the format string."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = f"{record.levelname + ':':<9}"
        color = self.COLORS.get(record.levelno)
        record.colored_levelname = f"{color}{label}{RESET_COLOR}" if color else label
        return super().format(record)


class AppLogger:
    """
    Logging entry point for the backend.

    ``init`` runs once from the app bootstrap; modules then call
    ``AppLogger.get_logger(__name__)``.
    """

    _configured: bool = False

    @staticmethod
    def file_logging_enabled() -> bool:
        """LOG_TO_FILE=1/true/yes turns the warning log file on."""
        return os.getenv("LOG_TO_FILE", "").strip().lower() in ("1", "true", "yes")

    @staticmethod
    def _console_handler(level: int) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(ColorFormatter(CONSOLE_FORMAT))
        return handler

    @staticmethod
    def _file_handler(filename: str) -> logging.Handler:
        path = Finder().get_directory("logs") / filename
        handler = logging.FileHandler(path, encoding="utf-8")
        # provider failures and rejected model output only
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        return handler

    @classmethod
    def init(
        cls,
        level: int = logging.INFO,
        log_to_file: Optional[bool] = None,
        filename: str = "editplan_server.log",
    ) -> None:
        """Replace the root handlers with ours; later calls are no-ops."""
        if cls._configured:
            return
        cls._configured = True

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()
        root_logger.addHandler(cls._console_handler(level))

        if log_to_file if log_to_file is not None else cls.file_logging_enabled():
            root_logger.addHandler(cls._file_handler(filename))

    @staticmethod
    def get_logger(name: Optional[str] = None) -> Logger:
        return logging.getLogger(name if name is not None else __name__)
