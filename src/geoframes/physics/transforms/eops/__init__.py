"""Earth orientation parameters package.

Two record types live here:

* :class:`.EarthOrientationParameter` is one tabulated (daily) row of an EOP data source, with
  UT1 and leap seconds expressed relative to UTC the way IERS/Celestrak publish them.
* :class:`.ResolvedEOP` is the complete set consumed by the frame reduction, with the time
  offset already expressed as TT - UT1. It is built per call by
  :func:`.resolveEarthOrientationParameters` and never cached.
"""

from __future__ import annotations

# Standard Library Imports
import datetime
from dataclasses import dataclass, field

# Local Imports
from ....common.exceptions import EOPLookupError
from ...constants import TT_TAI


@dataclass(frozen=True)
class EarthOrientationParameter:
    """Data class to define one row of tabulated EOP data."""

    date: datetime.date
    """datetime.date: Defines the year, month, & date associated with the given data."""

    x_p: float
    """float: Polar motion x coordinate (radians)."""

    y_p: float
    """float: Polar motion y coordinate (radians)."""

    d_x: float
    """float: Celestial pole offset dX w.r.t. the IAU 2006/2000A model (radians)."""

    d_y: float
    """float: Celestial pole offset dY w.r.t. the IAU 2006/2000A model (radians)."""

    delta_ut1: float
    """float: UT1 - UTC (seconds)."""

    length_of_day: float
    """float: Excess length of day, LOD (seconds)."""

    delta_atomic_time: int
    """int: TAI - UTC, the accumulated leap seconds (seconds)."""

    @property
    def delta_tt_ut1(self) -> float:
        """float: TT - UT1 (seconds), i.e. ``32.184 + (TAI - UTC) - (UT1 - UTC)``."""
        return TT_TAI + self.delta_atomic_time - self.delta_ut1


@dataclass(frozen=True)
class ResolvedEOP:
    """Complete set of EOPs used to build one set of :class:`.ReductionParams`."""

    x_p: float
    """float: Polar motion x coordinate (radians)."""

    y_p: float
    """float: Polar motion y coordinate (radians)."""

    d_x: float
    """float: Celestial pole offset dX (radians)."""

    d_y: float
    """float: Celestial pole offset dY (radians)."""

    delta_tt_ut1: float
    """float: TT - UT1 (seconds)."""

    length_of_day: float
    """float: Excess length of day, LOD (seconds)."""

    source: str = field(default="override", compare=False)
    """str: Where the values came from: ``"override"`` or the provider's class name."""


class MissingEOP(EOPLookupError):  # noqa: N818
    """Error thrown when an EOP can't be found for a specified date."""


# Local Imports
# forward-facing API import
from .getter import (  # noqa: E402, F401
    getEarthOrientationParameters,
    lookupEarthOrientationParameters,
    setEarthOrientationParameters,
)
from .resolution import EOPOverrides, resolveEarthOrientationParameters  # noqa: E402, F401
