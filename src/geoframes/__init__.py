"""Main Module Documentation.

``geoframes`` converts position and velocity state vectors between the Geocentric Celestial
Reference System (GCRS) and the International Terrestrial Reference System (ITRS) using the IAU
2006/2000A CIO-based reduction and tabulated Earth orientation parameters.

Example:
    .. code-block:: python

        from geoframes import gcrs2itrs

        states_itrs, rot_gcrs2itrs = gcrs2itrs(states_gcrs, 2400000.5, 54195.500754444)
"""

from __future__ import annotations

__version__ = "1.0.0"

# Local Imports
# forward-facing API import
from .common.exceptions import (  # noqa: E402, F401
    DateError,
    DateWarning,
    EOPLookupError,
    ValidationError,
)
from .physics.time.stardate import TerrestrialEpoch  # noqa: E402, F401
from .physics.transforms.eops import EOPOverrides  # noqa: E402, F401
from .physics.transforms.methods import (  # noqa: E402, F401
    gcrs2itrs,
    getReductionParams,
    itrs2gcrs,
)
from .physics.transforms.reductions import ReductionParams  # noqa: E402, F401
