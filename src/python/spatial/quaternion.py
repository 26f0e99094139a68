"""
===============================================================================
SPATIAL - Quaternion Number
===============================================================================

Immutable hypercomplex number with one real and three imaginary components:

    q = w + x*i + y*j + z*k

with Hamilton's multiplication rules i^2 = j^2 = k^2 = ijk = -1. The type
supports the full algebra (addition, Hamilton product, right division,
inverse, conjugate) and the transcendental functions defined through the
polar decomposition.

Polar Form
----------
Every quaternion with a non-zero vector part can be written as

    q = r * (cos(phi) + u * sin(phi)) = r * exp(phi * u)

where
    r   = |q| = sqrt(w^2 + x^2 + y^2 + z^2)   (absolute value)
    phi = arccos(w / r)  in [0, pi]          (argument)
    u   = [0, x, y, z] / |[x, y, z]|         (unit vector, the axis)

The norm ||q|| = |q|^2, the absolute value and the argument are computed
once at construction and cached. Operations that know the polar form of
their result analytically (negation, conjugation, normalization) pass the
derived values straight to a private constructor instead of recomputing
them.

Degenerate Inputs
-----------------
No operation raises for numeric input. A zero quaternion has an undefined
argument (NaN), a zero vector part has an undefined unit vector (NaN), and
these values propagate through later arithmetic following IEEE-754 rules.
Callers that need strict validation must check ``abs`` / ``norm`` before
dividing, inverting, taking logarithms or powers. numpy evaluates every
floating-point primitive so that division by zero and out-of-domain
arguments yield NaN / Inf rather than Python exceptions.

References
----------
    [1] Hamilton, "On Quaternions", Philosophical Magazine, 1844.
    [2] Kuipers, "Quaternions and Rotation Sequences", Princeton, 1999.
    [3] http://en.wikipedia.org/wiki/Quaternion

===============================================================================
"""

import logging
import numbers
from typing import Iterator, Union

import numpy as np

from spatial.constants import DEFAULT_DOUBLE_ACCURACY, LN10, PI
from spatial.precision import almost_equal

logger = logging.getLogger(__name__)

# Division by zero, arccos/log/sqrt outside their domain and exp overflow
# all produce NaN or Inf silently.
_IEEE_SILENT = dict(divide='ignore', invalid='ignore', over='ignore')


def _is_scalar(value: object) -> bool:
    """True for real numbers (int, float, numpy floating/integer scalars)."""
    return isinstance(value, numbers.Real)


class Quaternion:
    """
    Immutable quaternion number with cached polar decomposition.

    Attributes
    ----------
    real : float
        Real part w.
    imag_x, imag_y, imag_z : float
        Coefficients of the imaginary units i, j and k.
    norm : float
        Sum of the squares of the four components, ||q||.
    abs : float
        Euclidean length |q| = sqrt(||q||).
    arg : float
        Argument phi = arccos(w / |q|) in [0, pi]; NaN when |q| = 0.

    Examples
    --------
    >>> i = Quaternion(0.0, 1.0, 0.0, 0.0)
    >>> j = Quaternion(0.0, 0.0, 1.0, 0.0)
    >>> i * j
    Quaternion(real=0.0, imag_x=0.0, imag_y=0.0, imag_z=1.0)
    >>> (2.0 + i).real
    2.0
    """

    __slots__ = ('_q', '_abs', '_norm', '_arg')

    def __init__(self, real: float, imag_x: float = 0.0, imag_y: float = 0.0,
                 imag_z: float = 0.0) -> None:
        """
        Initialize a quaternion and compute its polar decomposition.

        Parameters
        ----------
        real : float
            Real part w.
        imag_x : float, optional
            Coefficient of i.
        imag_y : float, optional
            Coefficient of j.
        imag_z : float, optional
            Coefficient of k.

        Notes
        -----
        The zero quaternion is accepted; its argument is NaN.
        """
        q = np.array([real, imag_x, imag_y, imag_z], dtype=np.float64)
        w, x, y, z = q

        with np.errstate(**_IEEE_SILENT):
            norm = x * x + y * y + z * z + w * w
            abs_ = np.sqrt(norm)
            arg = np.arccos(w / abs_)

        if norm == 0.0:
            logger.debug("Zero quaternion constructed: argument is undefined")

        self._assign(q, abs_, norm, arg)

    def _assign(self, q: np.ndarray, abs_: float, norm: float, arg: float) -> None:
        """Freeze the component array and store the polar values."""
        q.setflags(write=False)
        self._q = q
        self._abs = np.float64(abs_)
        self._norm = np.float64(norm)
        self._arg = np.float64(arg)

    # =========================================================================
    # PRIVATE CONSTRUCTORS
    # =========================================================================

    @classmethod
    def _from_derived(cls, real: float, imag_x: float, imag_y: float,
                      imag_z: float, abs_: float, norm: float,
                      arg: float) -> 'Quaternion':
        """
        Build a quaternion from components and precomputed polar values.

        The derived values are trusted verbatim. Only operations that can
        state the polar form of their result exactly may use this path.
        """
        q = cls.__new__(cls)
        q._assign(np.array([real, imag_x, imag_y, imag_z], dtype=np.float64),
                  abs_, norm, arg)
        return q

    @classmethod
    def _unit_quaternion(cls, real: float, imag_x: float, imag_y: float,
                         imag_z: float) -> 'Quaternion':
        """
        Normalize the four components to unit length.

        The result has |q| = ||q|| = 1 by construction; its argument is
        taken from the original components.
        """
        q = np.array([real, imag_x, imag_y, imag_z], dtype=np.float64)
        w, x, y, z = q

        with np.errstate(**_IEEE_SILENT):
            abs_ = np.sqrt(x * x + y * y + z * z + w * w)
            unit = q / abs_
            arg = np.arccos(w / abs_)

        return cls._from_derived(unit[0], unit[1], unit[2], unit[3],
                                 1.0, 1.0, arg)

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def from_scalar(cls, value: float) -> 'Quaternion':
        """
        Promote a real number to the quaternion (value, 0, 0, 0).

        This is the only implicit conversion the operators perform.
        """
        return cls(value, 0.0, 0.0, 0.0)

    @classmethod
    def zero(cls) -> 'Quaternion':
        """The additive identity (0, 0, 0, 0)."""
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def identity(cls) -> 'Quaternion':
        """The multiplicative identity (1, 0, 0, 0)."""
        return cls._from_derived(1.0, 0.0, 0.0, 0.0, 1.0, 1.0, 0.0)

    @classmethod
    def _coerce(cls, value: object) -> 'Quaternion':
        """Return ``value`` as a Quaternion, promoting real numbers."""
        if isinstance(value, Quaternion):
            return value
        if _is_scalar(value):
            return cls.from_scalar(value)
        raise TypeError(
            f"Expected a Quaternion or a real number, got {type(value).__name__}"
        )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def real(self) -> float:
        """Real part w."""
        return float(self._q[0])

    @property
    def imag_x(self) -> float:
        """Imaginary coefficient of i."""
        return float(self._q[1])

    @property
    def imag_y(self) -> float:
        """Imaginary coefficient of j."""
        return float(self._q[2])

    @property
    def imag_z(self) -> float:
        """Imaginary coefficient of k."""
        return float(self._q[3])

    @property
    def abs(self) -> float:
        """
        Euclidean length |q| = sqrt(||q||).

        With the argument and the unit vector, q = |q| * exp(arg * u).
        """
        return float(self._abs)

    @property
    def norm(self) -> float:
        """Norm ||q|| = |q|^2, the sum of the squares of the four components."""
        return float(self._norm)

    @property
    def arg(self) -> float:
        """
        Argument phi of the polar form q = r * (cos(phi) + u * sin(phi)).

        Returns
        -------
        float
            Angle in [0, pi], or NaN for the zero quaternion.
        """
        return float(self._arg)

    @property
    def is_unit_quaternion(self) -> bool:
        """
        True if |q| is almost equal to 1.

        Unit quaternions form the 3-sphere; use ``sign()`` to project a
        quaternion onto it.
        """
        return almost_equal(self._abs, 1.0)

    @property
    def components(self) -> np.ndarray:
        """Copy of the components as a numpy array [w, x, y, z]."""
        return self._q.copy()

    # =========================================================================
    # DECOMPOSITION
    # =========================================================================

    def scalar_part(self) -> 'Quaternion':
        """Return (w, 0, 0, 0). Use ``real`` for the plain float."""
        return Quaternion(self._q[0], 0.0, 0.0, 0.0)

    def vector_part(self) -> 'Quaternion':
        """Return (0, x, y, z)."""
        return Quaternion(0.0, self._q[1], self._q[2], self._q[3])

    def unit_vector(self) -> 'Quaternion':
        """
        Normalized vector part u, with ||u|| = 1.

        This is the axis of the polar form q = r * exp(phi * u). It is NaN
        when the vector part is zero.
        """
        return Quaternion._unit_quaternion(0.0, self._q[1], self._q[2], self._q[3])

    def sign(self) -> 'Quaternion':
        """Normalized quaternion with the direction of this one."""
        return Quaternion._unit_quaternion(*self._q)

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def negate(self) -> 'Quaternion':
        """
        Return -q.

        Negation keeps |q| and ||q|| and reflects the argument: phi -> pi - phi.
        """
        w, x, y, z = self._q
        return Quaternion._from_derived(-w, -x, -y, -z, self._abs, self._norm,
                                        PI - self._arg)

    def add(self, other: Union['Quaternion', float]) -> 'Quaternion':
        """
        Add a quaternion (component-wise) or a real number (to ``real`` only).

        Raises
        ------
        TypeError
            If ``other`` is neither a Quaternion nor a real number.
        """
        if isinstance(other, Quaternion):
            with np.errstate(**_IEEE_SILENT):
                return Quaternion(*(self._q + other._q))
        if _is_scalar(other):
            w, x, y, z = self._q
            with np.errstate(**_IEEE_SILENT):
                return Quaternion(w + np.float64(other), x, y, z)
        raise TypeError(f"Cannot add {type(other).__name__} to a Quaternion")

    def subtract(self, other: Union['Quaternion', float]) -> 'Quaternion':
        """
        Subtract a quaternion (component-wise) or a real number (from ``real``).

        Raises
        ------
        TypeError
            If ``other`` is neither a Quaternion nor a real number.
        """
        if isinstance(other, Quaternion):
            with np.errstate(**_IEEE_SILENT):
                return Quaternion(*(self._q - other._q))
        if _is_scalar(other):
            w, x, y, z = self._q
            with np.errstate(**_IEEE_SILENT):
                return Quaternion(w - np.float64(other), x, y, z)
        raise TypeError(f"Cannot subtract {type(other).__name__} from a Quaternion")

    def multiply(self, other: Union['Quaternion', float]) -> 'Quaternion':
        """
        Multiply this quaternion by another (Hamilton product) or by a scalar.

        Quaternion multiplication is NOT commutative: i*j = k but j*i = -k.
        The Hamilton product self * other is

            ci = x*w' + y*z' - z*y' + w*x'
            cj = -x*z' + y*w' + z*x' + w*y'
            ck = x*y' - y*x' + z*w' + w*z'
            cr = -x*x' - y*y' - z*z' + w*w'

        Parameters
        ----------
        other : Quaternion or float
            Right-hand operand. A real number scales all four components.

        Returns
        -------
        Quaternion
            The product self * other.

        Raises
        ------
        TypeError
            If ``other`` is neither a Quaternion nor a real number.
        """
        if isinstance(other, Quaternion):
            w, x, y, z = self._q
            w2, x2, y2, z2 = other._q

            with np.errstate(**_IEEE_SILENT):
                ci = (x * w2) + (y * z2) - (z * y2) + (w * x2)
                cj = -(x * z2) + (y * w2) + (z * x2) + (w * y2)
                ck = (x * y2) - (y * x2) + (z * w2) + (w * z2)
                cr = -(x * x2) - (y * y2) - (z * z2) + (w * w2)

            return Quaternion(cr, ci, cj, ck)

        if _is_scalar(other):
            with np.errstate(**_IEEE_SILENT):
                return Quaternion(*(np.float64(other) * self._q))

        raise TypeError(f"Cannot multiply a Quaternion by {type(other).__name__}")

    def divide(self, other: Union['Quaternion', float]) -> 'Quaternion':
        """
        Right division: self * other^-1, or component-wise division by a scalar.

        Quaternion division is directional. q * p^-1 is in general not the
        same as p^-1 * q; to divide from the left, write
        ``other.inverse().multiply(self)``.

        Raises
        ------
        TypeError
            If ``other`` is neither a Quaternion nor a real number.
        """
        if isinstance(other, Quaternion):
            return self.multiply(other.inverse())
        if _is_scalar(other):
            with np.errstate(**_IEEE_SILENT):
                return Quaternion(*(self._q / np.float64(other)))
        raise TypeError(f"Cannot divide a Quaternion by {type(other).__name__}")

    def inverse(self) -> 'Quaternion':
        """
        Multiplicative inverse q^-1 = q* / ||q||, such that q * q^-1 = 1.

        A unit quaternion is inverted by its conjugate without dividing.
        """
        w, x, y, z = self._q

        if almost_equal(self._abs, 1.0):
            return Quaternion(w, -x, -y, -z)

        with np.errstate(**_IEEE_SILENT):
            n = self._norm
            return Quaternion(w / n, -x / n, -y / n, -z / n)

    def conjugate(self) -> 'Quaternion':
        """Return q* = (w, -x, -y, -z); |q|, ||q|| and arg are unchanged."""
        w, x, y, z = self._q
        return Quaternion._from_derived(w, -x, -y, -z, self._abs, self._norm,
                                        self._arg)

    @staticmethod
    def distance(a: Union['Quaternion', float], b: Union['Quaternion', float]) -> float:
        """
        Euclidean distance |a - b| between two quaternions.

        Quaternions form a metric space under this distance.
        """
        return Quaternion._coerce(a).subtract(Quaternion._coerce(b)).abs

    # =========================================================================
    # TRANSCENDENTAL FUNCTIONS
    # =========================================================================

    def ln(self) -> 'Quaternion':
        """
        Natural logarithm.

        From the polar form q = r * exp(phi * u):

            ln(q) = u * phi + ln(r)

        Returns
        -------
        Quaternion
            ln(q). NaN for the zero quaternion and for quaternions with a
            zero vector part, whose unit vector is undefined.
        """
        with np.errstate(**_IEEE_SILENT):
            return self.unit_vector().multiply(self._arg).add(np.log(self._abs))

    def log(self, base: float) -> 'Quaternion':
        """Logarithm to the given base: ln(q) / ln(base)."""
        with np.errstate(**_IEEE_SILENT):
            return self.ln().divide(np.log(np.float64(base)))

    def lg(self) -> 'Quaternion':
        """Common logarithm to base 10."""
        return self.ln().divide(LN10)

    def exp(self) -> 'Quaternion':
        """
        Exponential function.

        Defined from the real part and the vector part alone, independent of
        the cached polar values:

            exp(q) = exp(w) * (cos(|v|) + u * sin(|v|)),   v = (x, y, z)
        """
        w, x, y, z = self._q

        with np.errstate(**_IEEE_SILENT):
            vabs = np.sqrt(x * x + y * y + z * z)
            return (self.unit_vector()
                    .multiply(np.sin(vabs))
                    .add(np.cos(vabs))
                    .multiply(np.exp(w)))

    def pow(self, power: Union['Quaternion', float]) -> 'Quaternion':
        """
        Raise the quaternion to a real or quaternion power.

        Parameters
        ----------
        power : float or Quaternion
            Exponent p.

        Returns
        -------
        Quaternion
            For a real exponent, the De Moivre form

                (u * sin(p*phi) + cos(p*phi)) * w^p

            scaled by the real part w raised to p. For a quaternion exponent,
            exp(p * ln(q)).

        Raises
        ------
        TypeError
            If ``power`` is neither a Quaternion nor a real number.

        Notes
        -----
        The scale factor is w^p, not |q|^p. The two agree only when the
        vector part is zero; the w-based form is kept for compatibility with
        existing results.
        """
        if isinstance(power, Quaternion):
            return power.multiply(self.ln()).exp()

        if _is_scalar(power):
            with np.errstate(**_IEEE_SILENT):
                arg = np.float64(power) * self._arg
                return (self.unit_vector()
                        .multiply(np.sin(arg))
                        .add(np.cos(arg))
                        .multiply(np.power(self._q[0], np.float64(power))))

        raise TypeError(
            f"Cannot raise a Quaternion to a {type(power).__name__} power"
        )

    def sqr(self) -> 'Quaternion':
        """Square, ``pow(2)`` specialized: (u*sin(2*phi) + cos(2*phi)) * w^2."""
        w = self._q[0]
        arg = self._arg * 2.0

        with np.errstate(**_IEEE_SILENT):
            return (self.unit_vector()
                    .multiply(np.sin(arg))
                    .add(np.cos(arg))
                    .multiply(w * w))

    def sqrt(self) -> 'Quaternion':
        """Square root, ``pow(0.5)`` specialized: (u*sin(phi/2) + cos(phi/2)) * sqrt(w)."""
        w = self._q[0]
        arg = self._arg * 0.5

        with np.errstate(**_IEEE_SILENT):
            return (self.unit_vector()
                    .multiply(np.sin(arg))
                    .add(np.cos(arg))
                    .multiply(np.sqrt(w)))

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def almost_equal(self, other: Union['Quaternion', float],
                     maximum_error: float = DEFAULT_DOUBLE_ACCURACY) -> bool:
        """
        Component-wise tolerance comparison.

        Parameters
        ----------
        other : Quaternion or float
            Value to compare against; a real number is promoted first.
        maximum_error : float, optional
            Absolute tolerance applied to each component.

        Returns
        -------
        bool
            True if every component pair is almost equal.
        """
        other = Quaternion._coerce(other)
        return all(almost_equal(a, b, maximum_error)
                   for a, b in zip(self._q, other._q))

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    def __pos__(self) -> 'Quaternion':
        return self

    def __neg__(self) -> 'Quaternion':
        return self.negate()

    def __add__(self, other):
        if isinstance(other, Quaternion) or _is_scalar(other):
            return self.add(other)
        return NotImplemented

    def __radd__(self, other):
        if _is_scalar(other):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Quaternion) or _is_scalar(other):
            return self.subtract(other)
        return NotImplemented

    def __rsub__(self, other):
        if _is_scalar(other):
            return Quaternion.from_scalar(other).subtract(self)
        return NotImplemented

    def __mul__(self, other):
        """
        Multiplication operator.

        - Quaternion * Quaternion -> Hamilton product (non-commutative)
        - Quaternion * scalar -> component-wise scaling
        """
        if isinstance(other, Quaternion) or _is_scalar(other):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        """scalar * Quaternion; real scalars commute with every quaternion."""
        if _is_scalar(other):
            return self.multiply(other)
        return NotImplemented

    def __truediv__(self, other):
        """Right division: ``q / p == q * p.inverse()``."""
        if isinstance(other, Quaternion) or _is_scalar(other):
            return self.divide(other)
        return NotImplemented

    def __rtruediv__(self, other):
        if _is_scalar(other):
            return Quaternion.from_scalar(other).divide(self)
        return NotImplemented

    def __pow__(self, power):
        if isinstance(power, Quaternion) or _is_scalar(power):
            return self.pow(power)
        return NotImplemented

    def __rpow__(self, other):
        if _is_scalar(other):
            return Quaternion.from_scalar(other).pow(self)
        return NotImplemented

    def __abs__(self) -> float:
        return float(self._abs)

    def __eq__(self, other: object) -> bool:
        """
        Exact component-wise equality.

        A real number compares equal to the quaternion (number, 0, 0, 0).
        Use ``almost_equal`` for tolerance-based comparison.
        """
        if _is_scalar(other):
            other = Quaternion.from_scalar(other)
        if not isinstance(other, Quaternion):
            return NotImplemented
        return bool(np.array_equal(self._q, other._q))

    def __hash__(self) -> int:
        w, x, y, z = (float(c) for c in self._q)
        # Real-valued quaternions hash like the float they equal
        if x == 0.0 and y == 0.0 and z == 0.0:
            return hash(w)
        return hash((w, x, y, z))

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._q)

    def __repr__(self) -> str:
        return (f"Quaternion(real={self.real!r}, imag_x={self.imag_x!r}, "
                f"imag_y={self.imag_y!r}, imag_z={self.imag_z!r})")

    def __str__(self) -> str:
        """Algebraic form, e.g. ``1 + 2i - 3j + 0.5k``."""
        w, x, y, z = self
        return f"{w:g} {_signed(x)}i {_signed(y)}j {_signed(z)}k"


def _signed(value: float) -> str:
    sign = '-' if np.signbit(value) else '+'
    return f"{sign} {abs(value):g}"
