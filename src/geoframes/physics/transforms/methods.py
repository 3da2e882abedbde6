"""Defines the GCRS <-> ITRS state vector conversion functions.

Both directions share a single :class:`.ReductionParams` per call, so the model evaluations happen
once no matter how many vectors are transformed. Vectors are stored one per row: a batch is an
``(N, 3)`` array of positions (m) or an ``(N, 6)`` array of positions and velocities (m; m/sec).

The velocity correction follows the transport theorem in the TIRS, where the Earth's spin is a
pure rotation about the z-axis. The motion of the CIP within the GCRS and the rate of change of
polar motion are both neglected.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import asarray, concatenate, ndim

# Local Imports
from ...common.exceptions import ValidationError
from ...common.logger import geoframesLogDebug, geoframesLogError
from ..maths import skewSymmetric
from ..time.stardate import TerrestrialEpoch
from .eops import EOPOverrides, resolveEarthOrientationParameters
from .reductions import ReductionParams

if TYPE_CHECKING:
    # Third Party Imports
    from numpy import ndarray
    from numpy.typing import ArrayLike

    # Local Imports
    from .eops.loaders import EOPLoader

VALID_STATE_DIMENSIONS: tuple[int, ...] = (3, 6)
"""tuple: Allowed number of components per state vector: position, or position & velocity."""


def validateStateBatch(vectors: ArrayLike) -> ndarray:
    """Check that `vectors` is a homogeneous batch of 3 or 6 dimensional state vectors.

    A single 1-D state vector is accepted too, and is returned as a one row batch.

    Args:
        vectors (``ArrayLike``): ``(N, 3)``/``(N, 6)`` batch or a single ``(3,)``/``(6,)`` vector.

    Returns:
        ``ndarray``: `vectors` as a 2-D ``float`` array.

    Raises:
        ValidationError: If the dimension of the state vectors isn't 3 or 6.
    """
    try:
        batch = asarray(vectors, dtype=float)
    except ValueError as err:
        msg = "State vectors must form a rectangular numeric array"
        geoframesLogError(msg)
        raise ValidationError(msg) from err

    if batch.ndim == 1:
        batch = batch.reshape(1, -1)

    if batch.ndim != 2 or batch.shape[1] not in VALID_STATE_DIMENSIONS:
        msg = f"State vectors must be 3 or 6 dimensional, got an array of shape {batch.shape}"
        geoframesLogError(msg)
        raise ValidationError(msg)

    return batch


def getReductionParams(
    epoch_tt1: float,
    epoch_tt2: float,
    delta_tt_ut1: float | None = None,
    polar_motion: ArrayLike | None = None,
    pole_offsets: ArrayLike | None = None,
    length_of_day: float | None = None,
    eop_loader: EOPLoader | None = None,
) -> ReductionParams:
    """Build the GCRS <-> ITRS reduction for a two-part TT Julian date.

    Any EOP argument left as ``None`` (or empty) is looked up from `eop_loader`, or the configured
    loader if that isn't given either. Supplying all four skips the lookup.

    Args:
        epoch_tt1 (``float``): first part of the TT Julian date, (days).
        epoch_tt2 (``float``): second part of the TT Julian date, (days).
        delta_tt_ut1 (``float``, optional): TT - UT1, (seconds).
        polar_motion (``ArrayLike``, optional): ``(x_p, y_p)`` polar motion, (radians).
        pole_offsets (``ArrayLike``, optional): ``(dX, dY)`` celestial pole offsets, (radians).
        length_of_day (``float``, optional): excess length of day, (seconds).
        eop_loader (:class:`.EOPLoader`, optional): EOP provider to query for missing values.

    Returns:
        :class:`.ReductionParams`: rotation matrices & Earth angular velocity at the epoch.

    Raises:
        ValidationError: If an EOP argument is malformed.
        DateError: If the epoch can't be converted between time scales.
        EOPLookupError: If the EOP provider has no usable data for the epoch.
    """
    overrides = EOPOverrides(
        delta_tt_ut1=delta_tt_ut1,
        polar_motion=polar_motion,
        pole_offsets=pole_offsets,
        length_of_day=length_of_day,
    )
    epoch = TerrestrialEpoch(epoch_tt1, epoch_tt2)
    eops = resolveEarthOrientationParameters(epoch, overrides, eop_loader=eop_loader)
    return ReductionParams.build(epoch, eops)


def gcrs2itrs(
    vectors: ArrayLike,
    epoch_tt1: float,
    epoch_tt2: float,
    delta_tt_ut1: float | None = None,
    polar_motion: ArrayLike | None = None,
    pole_offsets: ArrayLike | None = None,
    length_of_day: float | None = None,
    eop_loader: EOPLoader | None = None,
) -> tuple[ndarray, ndarray]:
    r"""Convert GCRS state vectors into ITRS state vectors.

    Positions are rotated directly, :math:`r_{ITRS} = W R C \, r_{GCRS}`. Velocities are rotated
    into the TIRS, corrected for the Earth's spin there, and then rotated through polar motion:

    .. math::

        v_{ITRS} = W \left( R C \, v_{GCRS} - \omega \times R C \, r_{GCRS} \right)

    References:
        #. IERS Conventions (2010), IERS Technical Note No. 36, Chapter 5
        #. Vallado, Fundamentals of Astrodynamics and Applications (2013), Sections 3.7 - 3.7.2

    Args:
        vectors (``ArrayLike``): ``(N, 3)`` or ``(N, 6)`` GCRS batch, or a single vector, (m; m/sec).
        epoch_tt1 (``float``): first part of the TT Julian date, (days).
        epoch_tt2 (``float``): second part of the TT Julian date, (days).
        delta_tt_ut1 (``float``, optional): TT - UT1, (seconds).
        polar_motion (``ArrayLike``, optional): ``(x_p, y_p)`` polar motion, (radians).
        pole_offsets (``ArrayLike``, optional): ``(dX, dY)`` celestial pole offsets, (radians).
        length_of_day (``float``, optional): excess length of day, (seconds). Only affects
            velocities.
        eop_loader (:class:`.EOPLoader`, optional): EOP provider to query for missing values.

    Returns:
        ``tuple``: ITRS vectors shaped like `vectors`, and the 3x3 GCRS -> ITRS rotation matrix.

    Raises:
        ValidationError: If the state vector batch or an EOP argument is malformed.
        DateError: If the epoch can't be converted between time scales.
        EOPLookupError: If the EOP provider has no usable data for the epoch.
    """
    batch = validateStateBatch(vectors)
    out_shape = batch.shape[1:] if ndim(vectors) == 1 else batch.shape
    reduction = getReductionParams(
        epoch_tt1,
        epoch_tt2,
        delta_tt_ut1=delta_tt_ut1,
        polar_motion=polar_motion,
        pole_offsets=pole_offsets,
        length_of_day=length_of_day,
        eop_loader=eop_loader,
    )

    # Row vectors, so `r @ M.T` is `M @ r` for every row
    r_itrs = batch[:, :3] @ reduction.rot_gcrs2itrs.T
    if batch.shape[1] == 3:
        geoframesLogDebug(f"Rotated {batch.shape[0]} GCRS position(s) into the ITRS")
        return r_itrs.reshape(out_shape), reduction.rot_gcrs2itrs

    r_tirs = batch[:, :3] @ reduction.rot_gcrs2tirs.T
    v_tirs = batch[:, 3:] @ reduction.rot_gcrs2tirs.T
    v_tirs -= r_tirs @ skewSymmetric(reduction.omega).T
    v_itrs = v_tirs @ reduction.rot_w.T

    geoframesLogDebug(f"Transformed {batch.shape[0]} GCRS state vector(s) into the ITRS")
    return concatenate((r_itrs, v_itrs), axis=1).reshape(out_shape), reduction.rot_gcrs2itrs


def itrs2gcrs(
    vectors: ArrayLike,
    epoch_tt1: float,
    epoch_tt2: float,
    delta_tt_ut1: float | None = None,
    polar_motion: ArrayLike | None = None,
    pole_offsets: ArrayLike | None = None,
    length_of_day: float | None = None,
    eop_loader: EOPLoader | None = None,
) -> tuple[ndarray, ndarray]:
    r"""Convert ITRS state vectors into GCRS state vectors.

    Exact inverse of :func:`.gcrs2itrs` for the same epoch and EOPs:

    .. math::

        r_{TIRS} = W^T r_{ITRS}, \quad
        v_{GCRS} = (R C)^T \left( W^T v_{ITRS} + \omega \times r_{TIRS} \right)

    Args:
        vectors (``ArrayLike``): ``(N, 3)`` or ``(N, 6)`` ITRS batch, or a single vector, (m; m/sec).
        epoch_tt1 (``float``): first part of the TT Julian date, (days).
        epoch_tt2 (``float``): second part of the TT Julian date, (days).
        delta_tt_ut1 (``float``, optional): TT - UT1, (seconds).
        polar_motion (``ArrayLike``, optional): ``(x_p, y_p)`` polar motion, (radians).
        pole_offsets (``ArrayLike``, optional): ``(dX, dY)`` celestial pole offsets, (radians).
        length_of_day (``float``, optional): excess length of day, (seconds). Only affects
            velocities.
        eop_loader (:class:`.EOPLoader`, optional): EOP provider to query for missing values.

    Returns:
        ``tuple``: GCRS vectors shaped like `vectors`, and the 3x3 ITRS -> GCRS rotation matrix.

    Raises:
        ValidationError: If the state vector batch or an EOP argument is malformed.
        DateError: If the epoch can't be converted between time scales.
        EOPLookupError: If the EOP provider has no usable data for the epoch.
    """
    batch = validateStateBatch(vectors)
    out_shape = batch.shape[1:] if ndim(vectors) == 1 else batch.shape
    reduction = getReductionParams(
        epoch_tt1,
        epoch_tt2,
        delta_tt_ut1=delta_tt_ut1,
        polar_motion=polar_motion,
        pole_offsets=pole_offsets,
        length_of_day=length_of_day,
        eop_loader=eop_loader,
    )

    # Transpose of a row-vector product is the plain product
    r_gcrs = batch[:, :3] @ reduction.rot_gcrs2itrs
    if batch.shape[1] == 3:
        geoframesLogDebug(f"Rotated {batch.shape[0]} ITRS position(s) into the GCRS")
        return r_gcrs.reshape(out_shape), reduction.rot_itrs2gcrs

    r_tirs = batch[:, :3] @ reduction.rot_w
    v_tirs = batch[:, 3:] @ reduction.rot_w
    v_tirs += r_tirs @ skewSymmetric(reduction.omega).T
    v_gcrs = v_tirs @ reduction.rot_gcrs2tirs

    geoframesLogDebug(f"Transformed {batch.shape[0]} ITRS state vector(s) into the GCRS")
    return concatenate((r_gcrs, v_gcrs), axis=1).reshape(out_shape), reduction.rot_itrs2gcrs
