"""Small 3-vector / 3x3 matrix helpers that extend `numpy` and `scipy`.

* `scipy docs <https://docs.scipy.org/doc/scipy/index.html>`_
* `numpy docs <https://numpy.org/doc/stable/>`_
"""

from __future__ import annotations

# Third Party Imports
from numpy import array, cos, eye, ndarray, sin
from scipy.linalg import det, norm

# Local Imports
from ..common.exceptions import ShapeError

_ORTHO_ATOL = 1e-10
"""``float``: absolute tolerance for orthonormality checks."""


def rot3(angle: float) -> ndarray:
    r"""Calculate the third-axis rotation matrix, in radians.

    This is a *frame* rotation, so ``rot3(era) @ r_cirs`` expresses a CIRS vector in the TIRS.

    Args:
        angle (``float``): angle rotated through, (radians).

    Returns:
        ``ndarray``: 3x3 rotation matrix.
    """
    return array(
        [
            [cos(angle), sin(angle), 0],
            [-sin(angle), cos(angle), 0],
            [0, 0, 1],
        ],
    )


def skewSymmetric(w: ndarray) -> ndarray:
    r"""Return the cross product matrix :math:`[w]_{\times}` of a 3-vector.

    :math:`[w]_{\times} v = w \times v` for any 3-vector :math:`v`.

    Args:
        w (``ndarray``): 3x1 vector.

    Returns:
        ``ndarray``: 3x3 skew-symmetric matrix.
    """
    if w.shape != (3,):
        raise ShapeError(f"skewSymmetric() expects a 3-vector, got shape {w.shape}")

    return array(
        [
            [0.0, -w[2], w[1]],
            [w[2], 0.0, -w[0]],
            [-w[1], w[0], 0.0],
        ],
    )


def isProperRotation(matrix: ndarray, atol: float = _ORTHO_ATOL) -> bool:
    """Whether `matrix` is a proper rotation: orthonormal with determinant +1.

    Args:
        matrix (``ndarray``): 3x3 matrix to check.
        atol (``float``, optional): absolute tolerance on both checks.

    Returns:
        ``bool``: ``True`` if :math:`M^T M = I` and :math:`det(M) = 1` to within `atol`.
    """
    if matrix.shape != (3, 3):
        return False

    orthonormal = norm(matrix.T @ matrix - eye(3), ord=2) <= atol
    return bool(orthonormal and abs(det(matrix) - 1.0) <= atol)

