"""Defines :class:`.TerrestrialEpoch`, the two-part Terrestrial Time Julian date.

Julian dates near the present are ~2.46e6 days, so a single ``float`` only resolves about 40
microseconds. Following the SOFA convention, an epoch is carried as two ``float`` parts whose
sum is the Julian date; it does not matter how the date is split, although the most precise
splits put the integer (or half-integer) part in :attr:`.jd1`.

.. code-block:: python

    epoch = TerrestrialEpoch(2400000.5, 54195.500754444444444)
    same = TerrestrialEpoch(2454195.5, 0.000754444444444)

    float(epoch)  # 2454196.000754444
    epoch.mjd  # 54195.500754444
"""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import isfinite

# Local Imports
from ...common.exceptions import DateError
from .. import constants as const
from .conversions import calendarToUTC, utcToTerrestrialTime

if TYPE_CHECKING:
    # Standard Library Imports
    from datetime import datetime


@dataclass(frozen=True)
class TerrestrialEpoch:
    """Two-part Julian date in Terrestrial Time (TT)."""

    jd1: float
    """``float``: first part of the Julian date, (days)."""

    jd2: float
    """``float``: second part of the Julian date, (days)."""

    def __post_init__(self):
        """Coerce both parts to ``float`` and reject non-finite values."""
        jd1, jd2 = float(self.jd1), float(self.jd2)
        if not (isfinite(jd1) and isfinite(jd2)):
            raise DateError(f"Epoch parts must be finite, got ({jd1}, {jd2})")
        object.__setattr__(self, "jd1", jd1)
        object.__setattr__(self, "jd2", jd2)

    def __float__(self) -> float:
        """Single-``float`` Julian date; loses precision, use only for display or coarse math."""
        return self.jd1 + self.jd2

    def __iter__(self):
        """Unpack as ``tt1, tt2 = epoch``."""
        yield self.jd1
        yield self.jd2

    @property
    def mjd(self) -> float:
        """``float``: Modified Julian date of the epoch (TT), (days)."""
        return (self.jd1 - const.MJD_ZERO) + self.jd2

    @property
    def julian_centuries(self) -> float:
        """``float``: Julian centuries of TT elapsed since J2000.0."""
        return ((self.jd1 - const.J2000_JD) + self.jd2) / 36525.0

    @classmethod
    def fromDatetime(cls, utc_date: datetime) -> TerrestrialEpoch:
        """Build the TT epoch corresponding to a UTC calendar date and time.

        Args:
            utc_date (``datetime``): UTC date and time. Must be naive or UTC.

        Returns:
            :class:`.TerrestrialEpoch`: equivalent two-part TT Julian date.
        """
        seconds = utc_date.second + utc_date.microsecond * 1e-6
        utc1, utc2 = calendarToUTC(
            utc_date.year,
            utc_date.month,
            utc_date.day,
            utc_date.hour,
            utc_date.minute,
            seconds,
        )
        return cls(*utcToTerrestrialTime(utc1, utc2))

    @classmethod
    def fromMJD(cls, mjd: float) -> TerrestrialEpoch:
        """Build an epoch from a TT Modified Julian date, keeping the MJD origin in :attr:`.jd1`."""
        return cls(const.MJD_ZERO, mjd)
