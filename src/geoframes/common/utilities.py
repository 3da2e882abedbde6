"""Various helper functions that are used across multiple modules."""

from __future__ import annotations

# Standard Library Imports
from collections.abc import Sequence

# Third Party Imports
import numpy as np

# Local Imports
from .exceptions import ValidationError
from .logger import geoframesLogError


def loadDatFile(file_name, delim=None):
    """Load a whitespace (or `delim`) separated table of numbers.

    Note:
        Assumes all data is representable by ``float``. Blank lines are skipped.

    Args:
        file_name (``str`` | ``Path``): name of dat file to load
        delim (``str``, optional): delimiter between values on the same line. Defaults to
            ``None``, which splits on any whitespace.

    Raises:
        ``FileNotFoundError``: helps with debugging bad filenames
        ``ValueError``: a value on some line isn't convertible to ``float``
        ``IOError``: valid dat file is empty

    Returns:
        ``list``: nested list of float values of each row
    """
    try:
        with open(file_name, encoding="utf-8") as data_file:
            data = [[float(x) for x in line.split(sep=delim)] for line in data_file if line.strip()]
    except FileNotFoundError:
        geoframesLogError(f"Could not find DAT file: {file_name}")
        raise
    except ValueError as err:
        msg = f"Parsing error reading DAT file: {file_name}"
        geoframesLogError(msg)
        raise ValueError(msg) from err

    if not data:
        msg = f"Empty DAT file: {file_name}"
        geoframesLogError(msg)
        raise OSError(msg)

    return data


def isEmpty(value) -> bool:
    """Whether an optional argument should be treated as "not supplied".

    ``None`` and zero-length sequences/arrays both count as empty, so ``[]`` can be passed to
    request the provider value just like leaving the argument out.
    """
    if value is None:
        return True
    if isinstance(value, np.ndarray):
        return value.size == 0
    if isinstance(value, Sequence) and not isinstance(value, str):
        return len(value) == 0
    return False


def _asFiniteArray(name: str, value) -> np.ndarray:
    """Return `value` as a ``float`` array, raising :class:`.ValidationError` unless all finite."""
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as err:
        msg = f"'{name}' must be numeric, got {value!r}"
        geoframesLogError(msg)
        raise ValidationError(msg) from err

    if not np.all(np.isfinite(arr)):
        msg = f"'{name}' must be finite, got {value!r}"
        geoframesLogError(msg)
        raise ValidationError(msg)
    return arr


def checkScalar(name: str, value) -> float:
    """Return `value` as a ``float``, raising :class:`.ValidationError` if it isn't a finite scalar."""
    arr = _asFiniteArray(name, value)
    if arr.size != 1:
        msg = f"'{name}' must be a scalar, got shape {arr.shape}"
        geoframesLogError(msg)
        raise ValidationError(msg)
    return float(arr.reshape(()))


def checkPair(name: str, value) -> tuple[float, float]:
    """Return `value` as a ``(float, float)`` pair, raising :class:`.ValidationError` otherwise.

    Accepts any 2-element sequence of finite numbers, including 2x1 and 1x2 arrays.
    """
    arr = _asFiniteArray(name, value)
    if arr.size != 2 or (arr.ndim == 2 and 1 not in arr.shape) or arr.ndim > 2:
        msg = f"'{name}' must have exactly two elements, got shape {arr.shape}"
        geoframesLogError(msg)
        raise ValidationError(msg)
    first, second = arr.ravel()
    return float(first), float(second)


def checkTypes(_locals, _types):
    """Throw a ``TypeError`` if `_locals` doesn't match `_types`.

    Args:
        _locals (dict): Dictionary of local variables.
        _types (dict): Dictionary where keys are names of variables and values are the expected types.

    Raises:
        TypeError: If `_locals` doesn't match `_types`.
    """
    for var, _type in _types.items():
        val = _locals.get(var)
        if not isinstance(val, _type):
            err = f"Incorrect type for {var} param"
            raise TypeError(err)
