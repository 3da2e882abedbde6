"""Module-level access to the EOP provider named by the ``[eop]`` config section."""

from __future__ import annotations

# Standard Library Imports
from collections import namedtuple
from typing import TYPE_CHECKING

# Local Imports
from ....common.behavioral_config import BehavioralConfig
from .loaders import LocalDotDatEOPLoader, RemoteDotDatEOPLoader

if TYPE_CHECKING:
    # Standard Library Imports
    import datetime

    # Local Imports
    from . import EarthOrientationParameter
    from .loaders import EOPLoader


LoaderTag = namedtuple("LoaderTag", ("loader_name", "loader_location"))
"""NamedTuple: ``(name, location)`` key identifying one configured :class:`.EOPLoader`."""

_LOADER_MAP: dict[str, type[EOPLoader]] = {
    loader_class.__name__: loader_class
    for loader_class in (LocalDotDatEOPLoader, RemoteDotDatEOPLoader)
}
"""dict[str, type[EOPLoader]]: Loader classes selectable via ``eop.LoaderName``."""

_EOP_LOADERS: dict[LoaderTag, EOPLoader] = {}
"""dict[LoaderTag, EOPLoader]: Loaders created so far, one per tag."""


def getLoader(loader_name: str | None = None, loader_location: str | None = None) -> EOPLoader:
    """Return the :class:`.EOPLoader` for a name & location, creating it on first use.

    Since loaders are kept per tag, a data source is only read once per process.

    Args:
        loader_name (str, optional): class name of the loader, one of :data:`._LOADER_MAP`.
            Defaults to the ``eop.LoaderName`` config value.
        loader_location (str, optional): file path or URL handed to the loader. Defaults to the
            ``eop.LoaderLocation`` config value.

    Returns:
        EOPLoader: the shared loader instance for the tag.

    Raises:
        ValueError: If `loader_name` isn't a known loader.
    """
    eop_config = BehavioralConfig.getConfig().eop
    tag = LoaderTag(
        loader_name if loader_name is not None else eop_config.LoaderName,
        loader_location if loader_location is not None else eop_config.LoaderLocation,
    )

    if tag not in _EOP_LOADERS:
        loader_class = _LOADER_MAP.get(tag.loader_name)
        if loader_class is None:
            err = f"Specified loader '{tag.loader_name}' is undefined"
            raise ValueError(err)
        _EOP_LOADERS[tag] = loader_class(tag.loader_location)

    return _EOP_LOADERS[tag]


def clearLoaders() -> None:
    """Forget every configured loader, forcing data to be re-read on next use."""
    _EOP_LOADERS.clear()


def getEarthOrientationParameters(
    eop_date: datetime.date,
    loader_name: str | None = None,
    loader_location: str | None = None,
) -> EarthOrientationParameter:
    """Return the tabulated EOP row for a calendar date from the configured loader.

    See Also:
        :func:`.getLoader` for `loader_name` & `loader_location`,
        :meth:`.EOPLoader.getEarthOrientationParameters`

    Raises:
        MissingEOP: If the loaded data has no row for `eop_date`.
    """
    return getLoader(loader_name, loader_location).getEarthOrientationParameters(eop_date)


def lookupEarthOrientationParameters(
    utc1: float,
    utc2: float,
    loader_name: str | None = None,
    loader_location: str | None = None,
) -> EarthOrientationParameter:
    """Return the EOPs valid at a two-part UTC Julian date from the configured loader.

    See Also:
        :func:`.getLoader`, :meth:`.EOPLoader.lookup`
    """
    return getLoader(loader_name, loader_location).lookup(utc1, utc2)


def setEarthOrientationParameters(
    eop_date: datetime.date,
    eop_data: EarthOrientationParameter,
    loader_name: str | None = None,
    loader_location: str | None = None,
):
    """Replace (or add) the row for `eop_date` in the configured loader.

    See Also:
        :func:`.getLoader`, :meth:`.EOPLoader.setEOPData`
    """
    getLoader(loader_name, loader_location).setEOPData(eop_date, eop_data)
