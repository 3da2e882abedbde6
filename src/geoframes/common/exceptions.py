"""Contains all the custom-defined exceptions used in geoframes."""

from __future__ import annotations


class ShapeError(Exception):
    """Exception indicating an improperly shaped matrix was created."""


class ValidationError(ValueError):
    """Exception indicating malformed input, detected before any model evaluation.

    Raised for state vector batches that are not 3 or 6 dimensional and for EOP overrides with
    the wrong number of elements.
    """


class DateError(ValueError):
    """Exception indicating an epoch outside any acceptable range for time scale conversion."""


class DateWarning(UserWarning):
    """Warning issued when a UTC conversion lands on a dubious date (uncertain leap seconds)."""


class EOPLookupError(LookupError):
    """Exception indicating that an EOP provider returned unusable data."""
