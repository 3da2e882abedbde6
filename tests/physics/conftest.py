from __future__ import annotations

# Standard Library Imports
import datetime

# Third Party Imports
import pytest

# GEOFRAMES Imports
import geoframes.physics.constants as const
from geoframes.physics.transforms.eops import EarthOrientationParameter
from geoframes.physics.transforms.eops.loaders import EOPLoader


class ConstantEOPLoader(EOPLoader):
    """EOP loader that hands back the same record for every epoch, counting lookups."""

    def __init__(self, record):
        """Store the record to return."""
        super().__init__("memory")
        self.record = record
        self.lookups = 0

    def load(self):
        """Nothing to load."""
        self._is_loaded = True

    def lookup(self, utc1, utc2, interpolate=None):
        """Return :attr:`.record`, whatever the epoch."""
        self.lookups += 1
        return self.record


@pytest.fixture(name="eop_record")
def getEOPRecord() -> EarthOrientationParameter:
    """EOP record matching the 2007-04-05 reference epoch."""
    return EarthOrientationParameter(
        date=datetime.date(2007, 4, 5),
        x_p=0.0349282 * const.ARCSEC2RAD,
        y_p=0.4833163 * const.ARCSEC2RAD,
        d_x=0.1750 * const.MILLIARCSEC2RAD,
        d_y=-0.2259 * const.MILLIARCSEC2RAD,
        delta_ut1=-0.072073685,
        length_of_day=0.0013,
        delta_atomic_time=33,
    )


@pytest.fixture(name="constant_loader")
def getConstantLoader(eop_record: EarthOrientationParameter) -> ConstantEOPLoader:
    """Return a :class:`.ConstantEOPLoader` around :func:`.getEOPRecord`."""
    return ConstantEOPLoader(eop_record)
