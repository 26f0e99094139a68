"""
===============================================================================
SPATIAL - Mathematical Constants and Tolerances
===============================================================================
Central repository for the constants shared by the quaternion type, the
precision helpers and the configuration loader.

Tolerances follow IEEE-754 double precision: machine epsilon for doubles
is 2^-53 (half the spacing of floats around 1.0).
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
LN10 = np.log(10.0)                    # Natural logarithm of 10 (for lg)

# =============================================================================
# FLOATING-POINT PRECISION
# =============================================================================
DOUBLE_PRECISION = 2.0 ** -53          # Unit roundoff for float64
DEFAULT_DOUBLE_ACCURACY = DOUBLE_PRECISION * 10.0   # ~1.11e-15

# =============================================================================
# CONFIGURATION DEFAULTS
# =============================================================================
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
