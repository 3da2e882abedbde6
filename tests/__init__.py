"""Configure importable things that aren't pytest fixtures."""

from __future__ import annotations

# Standard Library Imports
from pathlib import Path

# Third Party Imports
from numpy import array

# GEOFRAMES Imports
import geoframes.physics.constants as const

# Common file paths
FIXTURE_DATA_DIR = Path(__file__).parent / "datafiles"
EOP_FIXTURE_FILE = FIXTURE_DATA_DIR / "dat" / "eops.dat"
MALFORMED_EOP_FIXTURE_FILE = FIXTURE_DATA_DIR / "dat" / "malformed_eops.dat"

# IERS/SOFA reference epoch: 2007-04-05 12:00:00 UTC
REFERENCE_TT = (2400000.5, 54195.500754444444444)
REFERENCE_UT1_MJD = 54195.499999165813831
REFERENCE_DELTA_TT_UT1 = 32.184 + 33.0 + 0.072073685
REFERENCE_POLAR_MOTION = (0.0349282 * const.ARCSEC2RAD, 0.4833163 * const.ARCSEC2RAD)
REFERENCE_POLE_OFFSETS = (0.1750 * const.MILLIARCSEC2RAD, -0.2259 * const.MILLIARCSEC2RAD)
REFERENCE_ERA_DEG = 13.318492966097

# SOFA Tools for Earth Attitude, Section 5.5, IAU 2006/2000A CIO based, using X, Y series
REFERENCE_GCRS2CIRS = array(
    [
        [0.999999746339445, -0.000000005138822, -0.000712264729525],
        [-0.000000026475227, 0.999999999014975, -0.000044385242827],
        [0.000712264729599, 0.000044385250426, 0.999999745354420],
    ],
)
REFERENCE_GCRS2TIRS = array(
    [
        [0.973104317573127, 0.230363826247709, -0.000703332818845],
        [-0.230363798804182, 0.973104570735574, 0.000120888549586],
        [0.000712264729599, 0.000044385250426, 0.999999745354420],
    ],
)
REFERENCE_GCRS2ITRS = array(
    [
        [0.973104317697535, 0.230363826239128, -0.000703163482198],
        [-0.230363800456037, 0.973104570632801, 0.000118545366625],
        [0.000711560162668, 0.000046626403995, 0.999999745754024],
    ],
)

# Representative LEO & GEO states in the GCRS, (m; m/sec)
LEO_STATE = array([6678137.0, 0.0, 0.0, 0.0, 6789.5303, 3686.4141])
GEO_STATE = array([42164172.0, 0.0, 0.0, 0.0, 3074.6600, 0.0])
