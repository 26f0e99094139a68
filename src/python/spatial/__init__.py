"""
===============================================================================
SPATIAL - Hypercomplex Number Library
===============================================================================
Quaternion value type for 3D rotation and hypercomplex algebra.

Submodules:
    quaternion -- Immutable Quaternion with cached polar decomposition
    precision  -- Tolerance-based floating-point comparisons
    constants  -- Mathematical constants and default tolerances
    config     -- YAML configuration loading and logging setup
===============================================================================
"""

from spatial.quaternion import Quaternion

__all__ = ["Quaternion"]
