"""
Echelon Field: Scalar capabilities the elimination engine relies on.

The reducer and classifier are written once against a small interface:
a zero, a one, a coercion into the element type, and zero/one tests.
Arithmetic is whatever the element type's Python operators do
(+, unary -, *, /), so any field-like type can be plugged in.

Provided fields:
  - RationalField  exact arithmetic on fractions.Fraction (default)
  - RealField      float arithmetic with an absolute zero tolerance
  - PrimeField     integers modulo a prime p (ModInt elements)

Usage:
    from echelon.field import RATIONAL, REAL, PrimeField
    gf7 = PrimeField(7)
    x = gf7.coerce(3)
    x / gf7.coerce(5)   # ModInt(2, 7)
"""

from fractions import Fraction
import numbers

import numpy as np


class Field:
    """Capability interface for scalar types used in a Matrix.

    Subclasses set ``zero`` and ``one`` and override ``coerce``; the
    default zero/one tests use ``==``.
    """

    name = "field"
    zero = 0
    one = 1

    def coerce(self, value):
        """Convert ``value`` into an element of this field."""
        return value

    def is_zero(self, value):
        return value == self.zero

    def is_one(self, value):
        return value == self.one

    def equal(self, a, b):
        return self.is_zero(a - b)

    def cancelled(self, before, addend):
        """
        Mask of cells where ``before + addend`` is only rounding residue.

        Exact fields never leave residue, so nothing is masked.
        """
        return np.zeros(len(before), dtype=bool)

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))


class RationalField(Field):
    """Exact rationals. Accepts ints, floats, strings like '3/4' and Fractions."""

    name = "rational"
    zero = Fraction(0)
    one = Fraction(1)

    def coerce(self, value):
        if isinstance(value, Fraction):
            return value
        if isinstance(value, numbers.Integral):
            return Fraction(int(value))
        if isinstance(value, ModInt):
            raise ValueError(f"Cannot coerce {value!r} into the rationals")
        return Fraction(value)


class RealField(Field):
    """
    Floating-point reals.

    Parameters
    ----------
    tolerance : float
        Absolute tolerance for zero/one tests. 0.0 means exact comparison.
    rtol : float
        Relative tolerance for row updates: a sum that cancels down to
        within ``rtol`` of the magnitude of its terms is stored as zero.

    Notes
    -----
    Row updates compare each result against the size of the values that
    produced it (``np.isclose`` semantics), so residue is dropped at any
    coefficient scale, not only near 1.
    """

    name = "real"
    zero = 0.0
    one = 1.0

    def __init__(self, tolerance=1e-12, rtol=1e-9):
        if tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {tolerance}")
        if rtol < 0:
            raise ValueError(f"rtol must be non-negative, got {rtol}")
        self.tolerance = tolerance
        self.rtol = rtol

    def cancelled(self, before, addend):
        return np.isclose(
            before.astype(float), -addend.astype(float),
            rtol=self.rtol, atol=self.tolerance,
        )

    def coerce(self, value):
        return float(value)

    def is_zero(self, value):
        return abs(value) <= self.tolerance

    def is_one(self, value):
        return abs(value - 1.0) <= self.tolerance

    def __repr__(self):
        return f"RealField(tolerance={self.tolerance}, rtol={self.rtol})"

    def __eq__(self, other):
        return (
            isinstance(other, RealField)
            and other.tolerance == self.tolerance
            and other.rtol == self.rtol
        )

    def __hash__(self):
        return hash((RealField, self.tolerance, self.rtol))


def _is_prime(n):
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    d = 3
    while d * d <= n:
        if n % d == 0:
            return False
        d += 2
    return True


class ModInt:
    """An integer modulo a prime. Immutable.

    Plain ints take part in arithmetic but never compare equal to a
    ModInt; compare against ``ModInt(n, p)`` instead.
    """

    __slots__ = ("value", "modulus")

    def __init__(self, value, modulus):
        object.__setattr__(self, "modulus", modulus)
        object.__setattr__(self, "value", value % modulus)

    def __setattr__(self, name, value):
        raise AttributeError("ModInt is immutable")

    def _other(self, other):
        if isinstance(other, ModInt):
            if other.modulus != self.modulus:
                raise ValueError(
                    f"Cannot mix moduli {self.modulus} and {other.modulus}"
                )
            return other.value
        if isinstance(other, numbers.Integral):
            return int(other)
        return NotImplemented

    def __add__(self, other):
        o = self._other(other)
        if o is NotImplemented:
            return o
        return ModInt(self.value + o, self.modulus)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._other(other)
        if o is NotImplemented:
            return o
        return ModInt(self.value - o, self.modulus)

    def __rsub__(self, other):
        o = self._other(other)
        if o is NotImplemented:
            return o
        return ModInt(o - self.value, self.modulus)

    def __mul__(self, other):
        o = self._other(other)
        if o is NotImplemented:
            return o
        return ModInt(self.value * o, self.modulus)

    __rmul__ = __mul__

    def __neg__(self):
        return ModInt(-self.value, self.modulus)

    def inverse(self):
        if self.value == 0:
            raise ZeroDivisionError(f"0 has no inverse modulo {self.modulus}")
        return ModInt(pow(self.value, -1, self.modulus), self.modulus)

    def __truediv__(self, other):
        o = self._other(other)
        if o is NotImplemented:
            return o
        return self * ModInt(o, self.modulus).inverse()

    def __rtruediv__(self, other):
        o = self._other(other)
        if o is NotImplemented:
            return o
        return ModInt(o, self.modulus) * self.inverse()

    def __eq__(self, other):
        if isinstance(other, ModInt):
            return self.modulus == other.modulus and self.value == other.value
        return NotImplemented

    def __hash__(self):
        return hash((self.value, self.modulus))

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"ModInt({self.value}, {self.modulus})"


class PrimeField(Field):
    """
    Integers modulo a prime.

    Parameters
    ----------
    modulus : int
        A prime p.

    Examples
    --------
    >>> gf5 = PrimeField(5)
    >>> gf5.coerce(7)
    ModInt(2, 5)
    >>> gf5.coerce(Fraction(1, 2))
    ModInt(3, 5)
    """

    name = "prime"

    def __init__(self, modulus):
        modulus = int(modulus)
        if not _is_prime(modulus):
            raise ValueError(f"PrimeField modulus must be prime, got {modulus}")
        self.modulus = modulus
        self.zero = ModInt(0, modulus)
        self.one = ModInt(1, modulus)

    def coerce(self, value):
        if isinstance(value, ModInt):
            if value.modulus != self.modulus:
                raise ValueError(
                    f"Cannot coerce {value!r} into GF({self.modulus})"
                )
            return value
        if isinstance(value, numbers.Integral):
            return ModInt(int(value), self.modulus)
        if isinstance(value, Fraction):
            if value.denominator % self.modulus == 0:
                raise ValueError(f"Cannot coerce {value!r} into GF({self.modulus})")
            return ModInt(value.numerator, self.modulus) / value.denominator
        raise ValueError(f"Cannot coerce {value!r} into GF({self.modulus})")

    def __repr__(self):
        return f"PrimeField({self.modulus})"

    def __eq__(self, other):
        return isinstance(other, PrimeField) and other.modulus == self.modulus

    def __hash__(self):
        return hash((PrimeField, self.modulus))


RATIONAL = RationalField()
REAL = RealField()
