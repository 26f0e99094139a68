"""
===============================================================================
SPATIAL - Floating-Point Precision Helpers
===============================================================================
Tolerance-based comparisons of double-precision values. Exact equality is
rarely meaningful after normalization or transcendental evaluation, so the
quaternion type relies on these helpers for predicates such as
``Quaternion.is_unit_quaternion``.

Rules shared by every comparison:
    - If either value is infinite, the values are equal only if both are
      the same infinity.
    - If either value is NaN, the values are never equal.
    - Otherwise the difference is tested against a maximum error.
===============================================================================
"""

import numpy as np

from spatial.constants import DEFAULT_DOUBLE_ACCURACY


def _special_case(a: float, b: float):
    """Return the verdict for non-finite operands, or None if both are finite."""
    if np.isinf(a) or np.isinf(b):
        return bool(a == b)
    if np.isnan(a) or np.isnan(b):
        return False
    return None


def almost_equal_norm(a: float, b: float, diff: float,
                      maximum_error: float = DEFAULT_DOUBLE_ACCURACY) -> bool:
    """
    Compare two values given a precomputed norm of their difference.

    Parameters
    ----------
    a, b : float
        Values being compared (only used for the non-finite checks).
    diff : float
        Norm of the difference between ``a`` and ``b``.
    maximum_error : float
        Absolute tolerance.

    Returns
    -------
    bool
        True if ``|diff| < maximum_error``.
    """
    verdict = _special_case(a, b)
    if verdict is not None:
        return verdict
    return bool(np.abs(diff) < maximum_error)


def almost_equal(a: float, b: float,
                 maximum_error: float = DEFAULT_DOUBLE_ACCURACY) -> bool:
    """
    Absolute-epsilon comparison of two doubles.

    The default tolerance is ten units of double roundoff, tight enough that
    only values which differ by accumulated rounding compare equal.
    """
    return almost_equal_norm(a, b, a - b, maximum_error)
