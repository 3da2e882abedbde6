"""Global math, time & Earth rotation constants.

This module holds all constants that are used in various places across the codebase, allowing
for a consistent place to store them. Constants specific to objects and classes remain in those
files.

References:
    #. IERS Conventions (2010), IERS Technical Note No. 36, Chapter 1 & 5
    #. :cite:t:`vallado_2013_astro`
"""

from __future__ import annotations

# Third Party Imports
from numpy import pi

# Conversion constants
PI = pi
TWOPI = 2.0 * pi
DAYS2SEC = 24.0 * 3600
DEG2RAD = pi / 180.0
ARCSEC2DEG = 1.0 / 3600.0
ARCSEC2RAD = ARCSEC2DEG * DEG2RAD
RAD2ARCSEC = 1.0 / ARCSEC2RAD
MILLIARCSEC2RAD = ARCSEC2RAD / 1000.0

# Julian date offsets
MJD_ZERO: float = 2400000.5
"""``float``: Julian date of the Modified Julian Date origin, (days)."""

J2000_JD: float = 2451545.0
"""``float``: Julian date of the J2000.0 epoch, (days)."""

# Time scale constants
TT_TAI: float = 32.184
"""``float``: fixed offset TT - TAI, (seconds)."""

# Earth rotation
IERS_MEAN_EARTH_ROTATION_RATE: float = 7.292115146706979e-5
"""``float``: nominal mean angular velocity of the Earth, IERS Conventions, (rad/sec)."""
