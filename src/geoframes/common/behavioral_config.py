"""Defines a global set of configurations that control logging and EOP retrieval."""

from __future__ import annotations

# Standard Library Imports
import os
from configparser import ConfigParser
from configparser import Error as ConfigError
from importlib import resources
from logging import CRITICAL, DEBUG, ERROR, INFO, NOTSET, WARNING
from pathlib import Path
from typing import TYPE_CHECKING

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Callable
    from typing import Any, Final


CONFIG_ENV_VARIABLE: str = "GEOFRAMES_BEHAVIOR_CONFIG"
"""``str``: environment variable that may point at a custom behavior config file."""


class SubConfig:
    """One section of the configuration, exposed as attributes.

    Lets callers write ``BehavioralConfig.getConfig().eop.LoaderName`` instead of indexing
    ``["eop"]["LoaderName"]``.
    """

    def __init__(self, section: str):
        """Instantiate an empty section.

        Args:
            section (``str``): name of the section this object represents
        """
        if not isinstance(section, str):
            raise TypeError("Config section must be a string")
        self.section = section

    def setonce(self, name: str, value: Any):
        """Set a field, refusing to overwrite one that is already set.

        Args:
            name (``str``): name of field to set
            value (``any``): value to set the field to
        """
        if (already_set := getattr(self, name, None)) is not None:
            raise AttributeError(
                f"SubConfig {self.section!r} already has a value set for {name!r}:{already_set!r}",
            )
        setattr(self, name, value)


class CustomConfigParser(ConfigParser):
    """Adds the value types used by the behavior config on top of :class:`ConfigParser`."""

    LOGGING_LEVELS: Final[dict[str, int]] = {
        "CRITICAL": CRITICAL,
        "ERROR": ERROR,
        "WARNING": WARNING,
        "INFO": INFO,
        "DEBUG": DEBUG,
        "NOTSET": NOTSET,
    }

    def getlogginglevel(self, section: str, option: str) -> int:
        """Return the ``logging`` level named by this option."""
        return self.LOGGING_LEVELS.get(self.get(section, option).upper(), NOTSET)


class BehavioralConfig:
    """Singleton, config settings class."""

    DEFAULT_CONFIG_FILE: Final[str] = "default_behavior.config"

    DEFAULT_SECTIONS: Final[dict[str, dict[str, Any]]] = {
        "logging": {
            "OutputLocation": "stdout",
            "Level": DEBUG,
            "MaxFileSize": 1048576,
            "MaxFileCount": 50,
            "AllowMultipleHandlers": False,
        },
        "eop": {
            "LoaderName": "RemoteDotDatEOPLoader",
            "LoaderLocation": "https://celestrak.org/SpaceData/EOP-All.txt",
            "Interpolate": True,
        },
    }

    LOGGING_LEVEL_ITEMS: Final[dict[str, tuple[str, ...]]] = {"logging": ("Level",)}

    STR_ITEMS: Final[dict[str, tuple[str, ...]]] = {
        "logging": ("OutputLocation",),
        "eop": ("LoaderName", "LoaderLocation"),
    }

    INT_ITEMS: Final[dict[str, tuple[str, ...]]] = {
        "logging": ("MaxFileSize", "MaxFileCount"),
    }

    BOOL_ITEMS: Final[dict[str, tuple[str, ...]]] = {
        "logging": ("AllowMultipleHandlers",),
        "eop": ("Interpolate",),
    }

    __shared_inst: BehavioralConfig | None = None

    def __init__(self, config_file_path: str | None = None):
        """Initialize the configuration object.

        Args:
            config_file_path (``str``, optional): custom config file. Defaults to ``None``, which
                reads the packaged :attr:`.DEFAULT_CONFIG_FILE`. Missing options fall back to
                :attr:`.DEFAULT_SECTIONS`.
        """
        self._parser = CustomConfigParser()

        if config_file_path is None:
            res = resources.files("geoframes.common").joinpath(self.DEFAULT_CONFIG_FILE)
            with resources.as_file(res) as res_filepath, open(res_filepath, encoding="utf-8") as cfg:
                self._parser.read_file(cfg)

        elif Path(config_file_path).exists():
            with open(config_file_path, encoding="utf-8") as cfg:
                self._parser.read_file(cfg)

        for section, section_config in self.DEFAULT_SECTIONS.items():
            sub = SubConfig(section)
            for key, default in section_config.items():
                getter = self._getterFor(section, key)
                try:
                    value = getter(section, key)
                except (ConfigError, ValueError):
                    value = default
                sub.setonce(key, value)

            setattr(self, section, sub)

        BehavioralConfig.__shared_inst = self

    def _getterFor(self, section: str, key: str) -> Callable[[str, str], Any]:
        """Return the typed parser getter for the option ``section::key``."""
        if key in self.STR_ITEMS.get(section, ()):
            return self._parser.get
        if key in self.INT_ITEMS.get(section, ()):
            return self._parser.getint
        if key in self.BOOL_ITEMS.get(section, ()):
            return self._parser.getboolean
        if key in self.LOGGING_LEVEL_ITEMS.get(section, ()):
            return self._parser.getlogginglevel

        raise KeyError(f"Configuration item '{section}::{key}' lacks a type classification.")

    @classmethod
    def getConfig(cls, config_file_path: str | None = None) -> BehavioralConfig:
        """Return a reference to the singleton shared config.

        The first call reads `config_file_path` if given, else the file named by the
        ``GEOFRAMES_BEHAVIOR_CONFIG`` environment variable, else the packaged defaults.
        """
        if cls.__shared_inst is None:
            config_file_path = config_file_path or os.environ.get(CONFIG_ENV_VARIABLE)
            cls.__shared_inst = BehavioralConfig(config_file_path=config_file_path)

        return cls.__shared_inst

    @classmethod
    def resetConfig(cls) -> None:
        """Drop the shared instance so the next :meth:`.getConfig` re-reads its source."""
        cls.__shared_inst = None
