"""
===============================================================================
SPATIAL - Precision Helper Test Suite
===============================================================================
Tests for the absolute almost-equal comparisons, including the
non-finite rules (infinities compare exactly, NaN never compares equal).
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from spatial.constants import DEFAULT_DOUBLE_ACCURACY, DOUBLE_PRECISION
from spatial.precision import almost_equal, almost_equal_norm


# =============================================================================
# Test: Absolute comparison
# =============================================================================

class TestAlmostEqual:
    """Tests for the absolute-epsilon comparison."""

    def test_default_accuracy(self):
        """The default tolerance is ten units of double roundoff."""
        assert DEFAULT_DOUBLE_ACCURACY == 10.0 * DOUBLE_PRECISION

    def test_equal_values(self):
        assert almost_equal(1.0, 1.0)
        assert almost_equal(0.0, -0.0)

    def test_rounding_noise(self):
        assert almost_equal(0.1 + 0.2, 0.3)
        assert almost_equal(1.0, np.nextafter(1.0, 2.0))

    def test_distinct_values(self):
        assert not almost_equal(1.0, 1.0 + 1e-10)
        assert not almost_equal(1.0, 2.0)

    def test_custom_tolerance(self):
        assert almost_equal(1.0, 1.05, maximum_error=0.1)
        assert not almost_equal(1.0, 1.05, maximum_error=0.01)

    @pytest.mark.parametrize("a,b,expected", [
        (np.inf, np.inf, True),
        (-np.inf, -np.inf, True),
        (np.inf, -np.inf, False),
        (np.inf, 1e308, False),
        (np.nan, np.nan, False),
        (np.nan, 1.0, False),
        (1.0, np.nan, False),
    ])
    def test_non_finite(self, a, b, expected):
        assert almost_equal(a, b) is expected

    def test_norm_uses_given_difference(self):
        """Only the supplied difference decides for finite operands."""
        assert almost_equal_norm(1.0, 5.0, 1e-16)
        assert not almost_equal_norm(1.0, 1.0, 1.0)

    def test_tolerance_is_absolute(self):
        """Adjacent doubles near 1e10 differ by ~2e-6, far above the tolerance."""
        a = 1e10
        assert not almost_equal(a, np.nextafter(a, np.inf))
