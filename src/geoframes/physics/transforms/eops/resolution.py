"""Resolve a complete set of EOPs from explicit overrides and the configured provider.

Every EOP group may be given explicitly by the caller. Whatever is missing is looked up from an
:class:`.EOPLoader` at the UTC instant corresponding to the TT epoch, and the explicit values then
take precedence field-by-field. When every group is given, the time scale conversion and the
provider are skipped entirely.
"""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import isfinite, ndim

# Local Imports
from ....common.exceptions import EOPLookupError
from ....common.logger import geoframesLogDebug, geoframesLogError
from ....common.utilities import checkPair, checkScalar, isEmpty
from ...time.conversions import terrestrialToUTC
from . import EarthOrientationParameter, ResolvedEOP
from .getter import getLoader

if TYPE_CHECKING:
    # Local Imports
    from ...time.stardate import TerrestrialEpoch
    from .loaders import EOPLoader


@dataclass(frozen=True)
class EOPOverrides:
    """Explicit EOP values supplied by a caller; ``None`` (or an empty sequence) means "look up"."""

    delta_tt_ut1: float | None = None
    """float: TT - UT1 (seconds)."""

    polar_motion: tuple[float, float] | None = None
    """tuple: ``(x_p, y_p)`` polar motion coordinates (radians)."""

    pole_offsets: tuple[float, float] | None = None
    """tuple: ``(dX, dY)`` celestial pole offsets (radians)."""

    length_of_day: float | None = None
    """float: Excess length of day (seconds)."""

    def __post_init__(self):
        """Normalize empty values to ``None`` and check shapes.

        Raises:
            ValidationError: If a pair isn't two elements or a scalar isn't a scalar.
        """
        validators = {
            "delta_tt_ut1": checkScalar,
            "polar_motion": checkPair,
            "pole_offsets": checkPair,
            "length_of_day": checkScalar,
        }
        for name, validator in validators.items():
            value = getattr(self, name)
            normalized = None if isEmpty(value) else validator(name, value)
            object.__setattr__(self, name, normalized)

    @property
    def complete(self) -> bool:
        """bool: Whether every EOP group was supplied, so no lookup is needed."""
        return all(getattr(self, item.name) is not None for item in fields(self))


def _checkRecord(record: EarthOrientationParameter, loader: EOPLoader) -> None:
    """Raise :class:`.EOPLookupError` if a provider handed back something unusable."""
    if not isinstance(record, EarthOrientationParameter):
        msg = f"{type(loader).__name__} returned {type(record).__name__}, not an EOP record"
        geoframesLogError(msg)
        raise EOPLookupError(msg)

    for item in fields(record):
        if item.name == "date":
            continue
        value = getattr(record, item.name)
        if ndim(value) != 0 or not isfinite(value):
            msg = f"{type(loader).__name__} returned a malformed '{item.name}': {value!r}"
            geoframesLogError(msg)
            raise EOPLookupError(msg)


def resolveEarthOrientationParameters(
    epoch: TerrestrialEpoch,
    overrides: EOPOverrides | None = None,
    eop_loader: EOPLoader | None = None,
) -> ResolvedEOP:
    """Produce the complete set of EOPs for `epoch`.

    Args:
        epoch (:class:`.TerrestrialEpoch`): TT epoch of the transformation.
        overrides (:class:`.EOPOverrides`, optional): explicitly supplied values.
        eop_loader (:class:`.EOPLoader`, optional): provider to query instead of the configured
            one.

    Warns:
        DateWarning: If the UTC conversion reports a dubious date.

    Raises:
        DateError: If the epoch can't be converted to UTC.
        MissingEOP: If the provider has no data for the epoch.
        EOPLookupError: If the provider returns malformed data.

    Returns:
        :class:`.ResolvedEOP`: the merged parameters.
    """
    if overrides is None:
        overrides = EOPOverrides()

    if overrides.complete:
        geoframesLogDebug("All EOP groups supplied explicitly, skipping EOP lookup")
        return ResolvedEOP(
            x_p=overrides.polar_motion[0],
            y_p=overrides.polar_motion[1],
            d_x=overrides.pole_offsets[0],
            d_y=overrides.pole_offsets[1],
            delta_tt_ut1=overrides.delta_tt_ut1,
            length_of_day=overrides.length_of_day,
        )

    utc1, utc2 = terrestrialToUTC(epoch.jd1, epoch.jd2)
    if eop_loader is None:
        eop_loader = getLoader()

    record = eop_loader.lookup(utc1, utc2)
    _checkRecord(record, eop_loader)
    geoframesLogDebug(f"Looked up EOPs for UTC {utc1 + utc2:.6f} from {type(eop_loader).__name__}")

    x_p, y_p = overrides.polar_motion or (record.x_p, record.y_p)
    d_x, d_y = overrides.pole_offsets or (record.d_x, record.d_y)
    delta_tt_ut1 = overrides.delta_tt_ut1
    if delta_tt_ut1 is None:
        delta_tt_ut1 = record.delta_tt_ut1
    length_of_day = overrides.length_of_day
    if length_of_day is None:
        length_of_day = record.length_of_day

    return ResolvedEOP(
        x_p=float(x_p),
        y_p=float(y_p),
        d_x=float(d_x),
        d_y=float(d_y),
        delta_tt_ut1=float(delta_tt_ut1),
        length_of_day=float(length_of_day),
        source=type(eop_loader).__name__,
    )
