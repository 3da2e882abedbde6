"""Helper functions that convert two-part Julian dates between TT, TAI, UTC & UT1.

The arithmetic is delegated to the ERFA (SOFA) time scale routines; this module adds the
package's error handling on top: ERFA's "dubious year" status becomes a :class:`.DateWarning`
and its "unacceptable date" status becomes a :class:`.DateError`.
"""

from __future__ import annotations

# Standard Library Imports
import warnings
from contextlib import contextmanager

# Third Party Imports
import erfa

# Local Imports
from ...common.exceptions import DateError, DateWarning
from ...common.logger import geoframesLogError, geoframesLogWarning


@contextmanager
def _erfaStatusAsDateErrors(operation: str):
    """Translate ERFA status warnings/errors raised inside the block into package types.

    Args:
        operation (``str``): human readable name of the conversion, used in messages.

    Raises:
        DateError: if ERFA rejects the date outright.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            yield
        except erfa.ErfaError as err:
            msg = f"Unacceptable date entered for {operation}: {err}"
            geoframesLogError(msg)
            raise DateError(msg) from err

    for record in caught:
        if issubclass(record.category, erfa.ErfaWarning):
            msg = f"Dubious date entered for {operation}: {record.message}"
            geoframesLogWarning(msg)
            warnings.warn(msg, DateWarning, stacklevel=4)
        else:
            warnings.warn(record.message, record.category, stacklevel=4)


def terrestrialToAtomicTime(tt1: float, tt2: float) -> tuple[float, float]:
    """Convert a two-part TT Julian date to TAI.

    Args:
        tt1 (``float``): first part of the TT Julian date, (days).
        tt2 (``float``): second part of the TT Julian date, (days).

    Returns:
        ``tuple``: two-part TAI Julian date, (days).
    """
    with _erfaStatusAsDateErrors("TT -> TAI"):
        tai1, tai2 = erfa.tttai(tt1, tt2)
    return float(tai1), float(tai2)


def atomicToUTC(tai1: float, tai2: float) -> tuple[float, float]:
    """Convert a two-part TAI Julian date to UTC, applying leap seconds.

    Warns:
        DateWarning: the date precedes the UTC leap second table or is far enough in the future
            that the leap second count is uncertain. The best-effort UTC is still returned.

    Raises:
        DateError: the date cannot be converted at all.

    Returns:
        ``tuple``: two-part UTC quasi-Julian date, (days).
    """
    with _erfaStatusAsDateErrors("TAI -> UTC"):
        utc1, utc2 = erfa.taiutc(tai1, tai2)
    return float(utc1), float(utc2)


def terrestrialToUTC(tt1: float, tt2: float) -> tuple[float, float]:
    """Convert a two-part TT Julian date to UTC by way of TAI.

    See Also:
        :func:`.terrestrialToAtomicTime`, :func:`.atomicToUTC`
    """
    return atomicToUTC(*terrestrialToAtomicTime(tt1, tt2))


def terrestrialToUT1(tt1: float, tt2: float, delta_tt_ut1: float) -> tuple[float, float]:
    """Convert a two-part TT Julian date to UT1 given the offset TT - UT1.

    Args:
        tt1 (``float``): first part of the TT Julian date, (days).
        tt2 (``float``): second part of the TT Julian date, (days).
        delta_tt_ut1 (``float``): TT - UT1, (seconds).

    Returns:
        ``tuple``: two-part UT1 Julian date, split the same way as the input, (days).
    """
    ut11, ut12 = erfa.ttut1(tt1, tt2, delta_tt_ut1)
    return float(ut11), float(ut12)


def utcToTerrestrialTime(utc1: float, utc2: float) -> tuple[float, float]:
    """Convert a two-part UTC quasi-Julian date to TT by way of TAI.

    Raises:
        DateError: the date cannot be converted at all.
    """
    with _erfaStatusAsDateErrors("UTC -> TT"):
        tai1, tai2 = erfa.utctai(utc1, utc2)
        tt1, tt2 = erfa.taitt(tai1, tai2)
    return float(tt1), float(tt2)


def calendarToUTC(year, month, day, hour, minute, second) -> tuple[float, float]:
    """Convert a UTC calendar date & time of day to a two-part UTC quasi-Julian date.

    Args:
        year (``int``): calendar year
        month (``int``): month of the year
        day (``int``): day of the month
        hour (``int``): hour of the day
        minute (``int``): minute of the hour
        second (``float``): seconds of the minute, may be 60.x during a leap second

    Raises:
        DateError: a field is out of range.
    """
    with _erfaStatusAsDateErrors("calendar -> UTC"):
        utc1, utc2 = erfa.dtf2d("UTC", year, month, day, hour, minute, second)
    return float(utc1), float(utc2)
