"""Defines the IAU 2006/2000A CIO-based reduction between the GCRS and ITRS.

The GCRS -> ITRS rotation is composed from three independent pieces:

* GCRS -> CIRS [C]: precession-nutation, from the CIP coordinates X, Y (plus the observed
  celestial pole offsets dX, dY) and the CIO locator s.
* CIRS -> TIRS [R]: Earth rotation through the Earth Rotation Angle (ERA), a function of UT1.
* TIRS -> ITRS [W]: polar motion, from the pole coordinates x_p, y_p and the TIO locator s'.

so that ``r_itrs = W @ R @ C @ r_gcrs``. The GCRS -> TIRS product ``R @ C`` is kept as well,
since the TIRS is the frame in which the Earth's spin is a pure rotation about the z-axis and the
velocity correction is applied there.

The individual model evaluations are delegated to ERFA, the BSD licensed implementation of the
IAU SOFA library.

References:
    #. IERS Conventions (2010), IERS Technical Note No. 36, Chapter 5
    #. SOFA Tools for Earth Attitude, Section 5.5
"""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from typing import TYPE_CHECKING

# Third Party Imports
import erfa
from numpy import array, array_equal

# Local Imports
from ...common.logger import geoframesLogDebug, geoframesLogError
from ...common.utilities import checkTypes
from .. import constants as const
from ..maths import isProperRotation, rot3
from ..time.conversions import terrestrialToUT1
from ..time.stardate import TerrestrialEpoch
from .eops import ResolvedEOP

if TYPE_CHECKING:
    # Third Party Imports
    from numpy import ndarray


def _readOnly(matrix: ndarray) -> ndarray:
    """Flag `matrix` as non-writeable so a shared bundle can't be mutated, and return it."""
    matrix.setflags(write=False)
    return matrix


class PrecessionNutation:
    """Object encapsulating the celestial (precession-nutation) part of the reduction.

    Attributes:
        x (float): CIP X coordinate including the dX offset, (radians).
        y (float): CIP Y coordinate including the dY offset, (radians).
        s (float): CIO locator, (radians).
        rot_c2i (ndarray): Rotation matrix to go from GCRS to CIRS (a.k.a. matrix [C]).
    """

    def __init__(self, epoch: TerrestrialEpoch, d_x: float, d_y: float):
        """Evaluate the IAU 2006/2000A model at `epoch` and apply the pole offsets.

        Args:
            epoch (TerrestrialEpoch): TT epoch.
            d_x (float): celestial pole offset dX, (radians).
            d_y (float): celestial pole offset dY, (radians).
        """
        x, y, self.s = erfa.xys06a(epoch.jd1, epoch.jd2)

        # The observed offsets are added directly to the modelled CIP coordinates
        self.x = x + d_x
        self.y = y + d_y

        self.rot_c2i = erfa.c2ixys(self.x, self.y, self.s)


class PolarMotion:
    """Object encapsulating values associated with the polar motion of the Earth.

    Attributes:
        s_prime (float): TIO locator s', (radians).
        rot_w (ndarray): Rotation matrix to go from TIRS to ITRS (a.k.a. matrix [W]).
    """

    def __init__(self, epoch: TerrestrialEpoch, x_p: float, y_p: float):
        """Construct the polar motion matrix.

        Args:
            epoch (TerrestrialEpoch): TT epoch, used for the TIO locator.
            x_p (float): Polar motion x coordinate (radians).
            y_p (float): Polar motion y coordinate (radians).
        """
        self.s_prime = erfa.sp00(epoch.jd1, epoch.jd2)
        self.rot_w = erfa.pom00(x_p, y_p, self.s_prime)


def getEarthRotationRate(length_of_day: float) -> float:
    """Instantaneous angular speed of the Earth, adjusted for the excess length of day.

    Args:
        length_of_day (float): excess length of day, LOD (seconds).

    Returns:
        float: :math:`\\omega = \\Omega_{IERS}(1 - LOD / 86400)`, (rad/sec).
    """
    return const.IERS_MEAN_EARTH_ROTATION_RATE * (1.0 - length_of_day / const.DAYS2SEC)


@dataclass(frozen=True, eq=False)
class ReductionParams:
    """A set of GCRS <-> ITRS transformation data valid at a single epoch.

    Built once per call and shared read-only by every vector transformed at that epoch; all
    matrices are flagged non-writeable.
    """

    rot_gcrs2itrs: ndarray
    """Rotation matrix to go from GCRS -> CIRS -> TIRS -> ITRS, i.e. ``W @ R @ C``."""

    rot_gcrs2tirs: ndarray
    """Rotation matrix to go from GCRS -> CIRS -> TIRS, i.e. ``R @ C`` (no polar motion)."""

    rot_w: ndarray
    """Polar motion matrix.

    TIRS -> ITRS [W]: Corrects for polar motion based on empirical EOP data.
    """

    rot_c2i: ndarray
    """Rotation matrix to go from GCRS -> CIRS [C]."""

    omega: ndarray
    """Angular velocity of the TIRS w.r.t. the GCRS, expressed in the TIRS: ``[0, 0, w]``."""

    era: float
    """Earth Rotation Angle (radians)."""

    s_prime: float
    """TIO locator s' (radians)."""

    epoch: TerrestrialEpoch
    """The TT epoch these reduction parameters are valid for."""

    eops: ResolvedEOP
    """The Earth orientation parameters these reduction parameters were built from."""

    def __eq__(self, value: object) -> bool:
        """Define equality conditions between two instances of :class:`.ReductionParams`."""
        if not isinstance(value, ReductionParams):
            return NotImplemented

        return all(
            [
                array_equal(self.rot_gcrs2itrs, value.rot_gcrs2itrs),
                array_equal(self.rot_gcrs2tirs, value.rot_gcrs2tirs),
                array_equal(self.rot_w, value.rot_w),
                array_equal(self.rot_c2i, value.rot_c2i),
                array_equal(self.omega, value.omega),
                self.era == value.era,
                self.s_prime == value.s_prime,
                self.epoch == value.epoch,
                self.eops == value.eops,
            ],
        )

    @property
    def rot_itrs2gcrs(self) -> ndarray:
        """Rotation matrix to go from ITRS -> GCRS, the transpose of :attr:`.rot_gcrs2itrs`."""
        return self.rot_gcrs2itrs.T

    @classmethod
    def build(cls, epoch: TerrestrialEpoch, eops: ResolvedEOP) -> ReductionParams:
        """Factory method evaluating every model needed to rotate between GCRS and ITRS.

        Args:
            epoch (:class:`.TerrestrialEpoch`): TT epoch to build the reduction for.
            eops (:class:`.ResolvedEOP`): complete set of Earth orientation parameters, see
                :func:`.resolveEarthOrientationParameters`.

        Returns:
            :class:`.ReductionParams`: Populated reduction parameters valid at `epoch`.

        Raises:
            TypeError: If `epoch` or `eops` has the wrong type.
            ValueError: If a composed matrix is not a proper rotation.
        """
        checkTypes(locals(), {"epoch": TerrestrialEpoch, "eops": ResolvedEOP})

        ut11, ut12 = terrestrialToUT1(epoch.jd1, epoch.jd2, eops.delta_tt_ut1)

        prec_nut = PrecessionNutation(epoch, eops.d_x, eops.d_y)
        era = erfa.era00(ut11, ut12)
        polar_motion = PolarMotion(epoch, eops.x_p, eops.y_p)

        rot_gcrs2itrs = erfa.c2tcio(prec_nut.rot_c2i, era, polar_motion.rot_w)
        rot_gcrs2tirs = rot3(era) @ prec_nut.rot_c2i

        for name, matrix in (("GCRS -> ITRS", rot_gcrs2itrs), ("GCRS -> TIRS", rot_gcrs2tirs)):
            if not isProperRotation(matrix):
                msg = f"{name} matrix at TT JD {float(epoch):.9f} is not a proper rotation"
                geoframesLogError(msg)
                raise ValueError(msg)

        omega = array([0.0, 0.0, getEarthRotationRate(eops.length_of_day)])

        geoframesLogDebug(f"Built GCRS/ITRS reduction for TT JD {float(epoch):.9f}")
        return cls(
            rot_gcrs2itrs=_readOnly(rot_gcrs2itrs),
            rot_gcrs2tirs=_readOnly(rot_gcrs2tirs),
            rot_w=_readOnly(polar_motion.rot_w),
            rot_c2i=_readOnly(prec_nut.rot_c2i),
            omega=_readOnly(omega),
            era=float(era),
            s_prime=float(polar_motion.s_prime),
            epoch=epoch,
            eops=eops,
        )
