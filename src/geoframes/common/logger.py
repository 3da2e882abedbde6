"""Defines the :class:`.Logger` class and the package-level logging helpers."""

from __future__ import annotations

# Standard Library Imports
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Local Imports
from . import pathSafeTime
from .behavioral_config import BehavioralConfig

PACKAGE_LOGGER_NAME: str = "geoframes"
"""``str``: name of the top-level logger that the one-liner helpers publish to."""

LOG_FORMAT: str = "%(asctime)s - %(module)s - %(levelname)s - %(message)s"
"""``str``: record format shared by stdout and file handlers."""


class Logger:
    """Thin wrapper around :class:`logging.Logger` configured from :class:`.BehavioralConfig`.

    Log files get a time-stamped name of the form ``<name>_<timestamp>.log`` and rotate once they
    reach the configured size.
    """

    def __init__(self, name, level=None, path=None, allow_multiple_handlers=None):
        """Attach a handler to the named logger, unless it already has one.

        Args:
            name (``str``): name of the logger instance.
            level (``int``, optional): minimum level published. Defaults to the config value.
            path (``str``, optional): directory for the log file, or ``"stdout"``. Defaults to
                the config value.
            allow_multiple_handlers (``bool``, optional): attach a new handler even if the logger
                already has one. Defaults to the config value.
        """
        log_config = BehavioralConfig.getConfig().logging
        level = level or log_config.Level
        path = path or log_config.OutputLocation
        if allow_multiple_handlers is None:
            allow_multiple_handlers = log_config.AllowMultipleHandlers

        self.logger = logging.getLogger(name)
        self.filename = None
        if self.logger.handlers and not allow_multiple_handlers:
            return

        handler = self._buildHandler(name, path)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.setLevel(level)
        self.logger.addHandler(handler)

    def _buildHandler(self, name: str, path: str) -> logging.Handler:
        """Create a stdout handler, or a rotating file handler inside `path`."""
        if path == "stdout":
            self.filename = "stdout"
            return logging.StreamHandler(sys.stdout)

        log_dir = Path(path)
        if not log_dir.exists():
            self.logger.info(f"Log directory did not exist, creating: {path!r}")
            log_dir.mkdir(parents=True)

        self.filename = str(log_dir / f"{name}_{pathSafeTime()}.log")
        log_config = BehavioralConfig.getConfig().logging
        return RotatingFileHandler(
            self.filename,
            maxBytes=log_config.MaxFileSize,
            backupCount=log_config.MaxFileCount,
        )

    def __getattr__(self, name):
        """Delegate everything else to the wrapped :class:`logging.Logger`."""
        return getattr(self.logger, name)


def _geoframesLog(message: str, level: int):
    """Publish `message` on the top-level ``geoframes`` logger.

    Used by plain functions that have no :class:`.Logger` of their own.

    Args:
        message (``str``): message to record.
        level (``int``): ``logging`` level of the record.
    """
    logging.getLogger(PACKAGE_LOGGER_NAME).log(level, message)


def geoframesLogCritical(message: str):
    """Log a CRITICAL message to the top-level log record."""
    _geoframesLog(message, logging.CRITICAL)


def geoframesLogError(message: str):
    """Log an ERROR message to the top-level log record."""
    _geoframesLog(message, logging.ERROR)


def geoframesLogWarning(message: str):
    """Log a WARNING message to the top-level log record."""
    _geoframesLog(message, logging.WARNING)


def geoframesLogInfo(message: str):
    """Log an INFO message to the top-level log record."""
    _geoframesLog(message, logging.INFO)


def geoframesLogDebug(message: str):
    """Log a DEBUG message to the top-level log record."""
    _geoframesLog(message, logging.DEBUG)
