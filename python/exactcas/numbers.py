# ExactCAS - Numeric Tower
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Exact and arbitrary-precision numbers as expression leaves.

The tower is Integer < Rational < Real < Complex: every Integer is a Rational,
every Rational a Real, every Real a Complex. Arithmetic promotes both operands
to the wider of the two variants. When downcasting is enabled (the default),
results are narrowed back to the most specific exact variant:

    >>> Real.create(Decimal('10.0'))
    10
    >>> Real.create(Decimal('0.5'))
    1/2
    >>> Integer.create(1) / Integer.create(3)
    1/3

Reals carry NaN and signed infinity. NaN is never equal to anything,
including itself, so `Real.nan() == Real.nan()` is False.

Reals are computed with `decimal` in a local context whose precision is
`Settings.decimal_precision`; no arithmetic signal ever raises.
"""

from __future__ import annotations
import math
import operator
import re
from abc import abstractmethod
from decimal import Context, Decimal, ROUND_FLOOR
from fractions import Fraction
from typing import Any, Callable, Optional, Tuple, Union

from .config import Settings, resolve
from .entity import Entity, Priority
from .exceptions import DomainError, ParseError, conversion_error
from .rational import find_rational, fraction_to_decimal


# Promotion levels of the tower
_INTEGER, _RATIONAL, _REAL, _COMPLEX = range(4)

_INTEGER_PATTERN = re.compile(r'[+-]?\d+')
_REAL_PATTERN = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')

# Text forms of the special reals
_NAN_TEXT = 'NaN'
_POSITIVE_INFINITY_TEXT = '+oo'
_NEGATIVE_INFINITY_TEXT = '-oo'


def _context(settings: Optional[Settings] = None) -> Context:
    """Decimal context for real arithmetic; every trap disabled."""
    return Context(prec=resolve(settings).decimal_precision, traps=[])


class Number(Entity):
    """
    A numeric leaf. Immutable; create instances with the `create` factories.
    """

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _init_direct_children(self) -> Tuple[Entity, ...]:
        return ()

    # Classification

    @property
    def is_nan(self) -> bool:
        return False

    @property
    @abstractmethod
    def is_zero(self) -> bool:
        ...

    @property
    def is_real(self) -> bool:
        """Whether the imaginary part is zero."""
        return True

    @property
    def is_negative(self) -> bool:
        """Whether this is a real number below zero (negative infinity included)."""
        return False

    @property
    def is_positive(self) -> bool:
        """Whether this is a real number above zero (positive infinity included)."""
        return self.is_real and not (self.is_nan or self.is_zero or self.is_negative)

    @property
    def is_integer(self) -> bool:
        return False

    @property
    def is_one(self) -> bool:
        return self.is_real and not self.is_nan and _real_key(self) == 1

    @property
    @abstractmethod
    def is_exact(self) -> bool:
        """Whether the value is stored without rounding."""
        ...

    # Arithmetic: both operands numeric computes, anything else builds a tree

    def __add__(self, other):
        num = _coerce(other)
        return super().__add__(other) if num is None else add(self, num)

    def __radd__(self, other):
        num = _coerce(other)
        return super().__radd__(other) if num is None else add(num, self)

    def __sub__(self, other):
        num = _coerce(other)
        return super().__sub__(other) if num is None else subtract(self, num)

    def __rsub__(self, other):
        num = _coerce(other)
        return super().__rsub__(other) if num is None else subtract(num, self)

    def __mul__(self, other):
        num = _coerce(other)
        return super().__mul__(other) if num is None else multiply(self, num)

    def __rmul__(self, other):
        num = _coerce(other)
        return super().__rmul__(other) if num is None else multiply(num, self)

    def __truediv__(self, other):
        num = _coerce(other)
        return super().__truediv__(other) if num is None else divide(self, num)

    def __rtruediv__(self, other):
        num = _coerce(other)
        return super().__rtruediv__(other) if num is None else divide(num, self)

    def __pow__(self, other):
        num = _coerce(other)
        if isinstance(num, Integer):
            return power(self, num.value)
        return super().__pow__(other)

    def __rpow__(self, other):
        num = _coerce(other)
        if num is not None and isinstance(self, Integer):
            return power(num, self.value)
        return super().__rpow__(other)

    def __neg__(self) -> Number:
        return negate(self)

    def __abs__(self) -> Number:
        return absolute(self)

    # Ordering is defined on real values only

    def _compare(self, other: Any, op: Callable[[Any, Any], bool]):
        num = _coerce(other)
        if num is None:
            return NotImplemented
        left, right = _real_key(self), _real_key(num)
        if left is None or right is None:
            return False
        return op(left, right)

    def __lt__(self, other):
        return self._compare(other, operator.lt)

    def __le__(self, other):
        return self._compare(other, operator.le)

    def __gt__(self, other):
        return self._compare(other, operator.gt)

    def __ge__(self, other):
        return self._compare(other, operator.ge)


class Complex(Number):
    """A complex number whose parts are real numbers of the tower."""

    def __init__(self, real: Real, imaginary: Real):
        object.__setattr__(self, '_real', real)
        object.__setattr__(self, '_imaginary', imaginary)

    @classmethod
    def create(cls, real: Any, imaginary: Any = 0, settings: Optional[Settings] = None) -> Complex:
        """
        Build a complex number, narrowing to its real part if the
        imaginary part is zero and downcasting is enabled.
        """
        real, imaginary = _real_number(real), _real_number(imaginary)
        if resolve(settings).downcasting_enabled and imaginary.is_zero:
            return real
        return Complex(real, imaginary)

    @property
    def real_part(self) -> Real:
        return self._real

    @property
    def imaginary_part(self) -> Real:
        return self._imaginary

    @property
    def is_nan(self) -> bool:
        return self._real.is_nan or self._imaginary.is_nan

    @property
    def is_zero(self) -> bool:
        return self._real.is_zero and self._imaginary.is_zero

    @property
    def is_real(self) -> bool:
        return self._imaginary.is_zero

    @property
    def is_exact(self) -> bool:
        return self._real.is_exact and self._imaginary.is_exact

    def _this_is_finite(self) -> bool:
        return self._real.is_finite and self._imaginary.is_finite

    def conjugate(self) -> Complex:
        return Complex.create(self.real_part, negate(self.imaginary_part))

    @property
    def priority(self) -> Priority:
        return Priority.MUL if self._real.is_zero else Priority.SUM

    def _imaginary_text(self, value: Real, latex: bool) -> str:
        text = value.latexise() if latex else value.stringize()
        if isinstance(value, Rational) and not isinstance(value, Integer):
            text = rf"\left({text}\right)" if latex else f"({text})"
        return f"{text}i"

    def _render(self, latex: bool) -> str:
        if self._real.is_zero:
            return self._imaginary_text(self._imaginary, latex)
        real = self._real.latexise() if latex else self._real.stringize()
        if self._imaginary.is_negative:
            return f"{real} - {self._imaginary_text(negate(self._imaginary), latex)}"
        return f"{real} + {self._imaginary_text(self._imaginary, latex)}"

    def stringize(self) -> str:
        return self._render(latex=False)

    def latexise(self) -> str:
        return self._render(latex=True)

    def __eq__(self, other: object) -> bool:
        if type(other) is not Complex:
            return NotImplemented
        return self._real == other._real and self._imaginary == other._imaginary

    def __hash__(self) -> int:
        return hash(('Complex', self._real, self._imaginary))


class Real(Complex):
    """
    An arbitrary-precision decimal, possibly NaN or signed infinity.

    Use `Real.create` to build one; it downcasts to Rational or Integer
    when the value allows and downcasting is enabled.
    """

    def __init__(self, value: Decimal):
        object.__setattr__(self, '_value', value)

    @classmethod
    def create(cls, value: Union[Decimal, int, float, str], settings: Optional[Settings] = None) -> Real:
        """
        Build a real number from a decimal value.

        Downcasting rules, with epsilon = settings.precision_error_zero_range:
        - a value within epsilon above an integer becomes that Integer
        - a value within epsilon below an integer becomes that Integer
        - a value reproduced by a rational with numerator and denominator
          both bounded by max_abs_numerator_or_denominator becomes a Rational
        - otherwise it stays a Real

        Args:
            value: Decimal (or anything `Decimal` accepts; floats use their
                   shortest repr).
            settings: Settings to use instead of the current default.

        Returns:
            The narrowest number representing `value`.
        """
        settings = resolve(settings)
        value = _to_decimal(value)
        if value.is_nan():
            return _NAN
        if value.is_infinite():
            return _NEGATIVE_INFINITY if value.is_signed() else _POSITIVE_INFINITY
        if not settings.downcasting_enabled:
            return Real(value)
        return _downcast(value, settings)

    @classmethod
    def nan(cls) -> Real:
        return _NAN

    @classmethod
    def positive_infinity(cls) -> Real:
        return _POSITIVE_INFINITY

    @classmethod
    def negative_infinity(cls) -> Real:
        return _NEGATIVE_INFINITY

    @classmethod
    def try_parse(cls, text: str) -> Tuple[bool, Optional[Real]]:
        """
        Parse a decimal literal such as '-1.5e3', or one of 'NaN', '+oo', '-oo'.

        The result is downcast like `create`, so '2.0' parses to Integer 2.

        Returns:
            (True, number) on success, (False, None) otherwise.
        """
        if not isinstance(text, str):
            return False, None
        stripped = text.strip()
        if stripped == _NAN_TEXT:
            return True, _NAN
        if stripped == _POSITIVE_INFINITY_TEXT:
            return True, _POSITIVE_INFINITY
        if stripped == _NEGATIVE_INFINITY_TEXT:
            return True, _NEGATIVE_INFINITY
        if not _REAL_PATTERN.fullmatch(stripped):
            return False, None
        return True, cls.create(Decimal(stripped))

    @classmethod
    def parse(cls, text: str) -> Real:
        ok, value = cls.try_parse(text)
        if not ok:
            raise ParseError(f"Invalid real literal: {text!r}", text=text)
        return value

    @property
    def value(self) -> Decimal:
        return self._value

    @property
    def real_part(self) -> Real:
        return self

    @property
    def imaginary_part(self) -> Real:
        return _ZERO

    @property
    def is_nan(self) -> bool:
        return self._value.is_nan()

    @property
    def is_zero(self) -> bool:
        return self._value.is_finite() and self._value.is_zero()

    @property
    def is_real(self) -> bool:
        return True

    @property
    def is_negative(self) -> bool:
        value = self._value
        return not value.is_nan() and value.is_signed() and not value.is_zero()

    @property
    def is_integer(self) -> bool:
        return self._value.is_finite() and self._value == self._value.to_integral_value()

    @property
    def is_exact(self) -> bool:
        # Only the special values are exact, a finite decimal may be rounded
        return not self._value.is_finite()

    def _this_is_finite(self) -> bool:
        return self._value.is_finite()

    def as_fraction(self) -> Fraction:
        """Exact rational value. Raises DomainError for NaN and infinities."""
        if not self._value.is_finite():
            raise DomainError(f"{self.stringize()} has no rational value")
        return Fraction(self._value)

    def as_decimal(self, context: Optional[Context] = None) -> Decimal:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    @property
    def priority(self) -> Priority:
        return Priority.MUL if self.is_negative else Priority.LEAF

    def stringize(self) -> str:
        value = self._value
        if value.is_nan():
            return _NAN_TEXT
        if value.is_infinite():
            return _NEGATIVE_INFINITY_TEXT if value.is_signed() else _POSITIVE_INFINITY_TEXT
        return str(value)

    def latexise(self) -> str:
        value = self._value
        if value.is_nan():
            return r'\mathrm{undefined}'
        if value.is_infinite():
            return r'-\infty' if value.is_signed() else r'\infty'
        return str(value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not Real:
            return NotImplemented
        if self._value.is_nan() or other._value.is_nan():
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        if self._value.is_nan():
            return hash(('Real', _NAN_TEXT))
        return hash(self._value)


class Rational(Real):
    """An exact fraction p/q. Use `Rational.create`, which narrows q == 1 to Integer."""

    def __init__(self, value: Fraction):
        object.__setattr__(self, '_value', value)

    @classmethod
    def create(
        cls,
        value: Union[Fraction, int],
        denominator: Optional[int] = None,
        settings: Optional[Settings] = None,
    ) -> Rational:
        """
        Build a rational from a Fraction, an int, or a numerator/denominator pair.

        Raises:
            ZeroDivisionError: If the denominator is zero.
        """
        fraction = Fraction(value) if denominator is None else Fraction(value, denominator)
        if fraction.denominator == 1 and resolve(settings).downcasting_enabled:
            return Integer(fraction.numerator)
        return Rational(fraction)

    @property
    def value(self) -> Fraction:
        return self._value

    @property
    def numerator(self) -> int:
        return self._value.numerator

    @property
    def denominator(self) -> int:
        return self._value.denominator

    @property
    def is_nan(self) -> bool:
        return False

    @property
    def is_zero(self) -> bool:
        return self._value == 0

    @property
    def is_negative(self) -> bool:
        return self._value < 0

    @property
    def is_integer(self) -> bool:
        return self._value.denominator == 1

    @property
    def is_exact(self) -> bool:
        return True

    def _this_is_finite(self) -> bool:
        return True

    def as_fraction(self) -> Fraction:
        return Fraction(self._value)

    def as_decimal(self, context: Optional[Context] = None) -> Decimal:
        return fraction_to_decimal(self.as_fraction(), context or _context())

    def __float__(self) -> float:
        return float(self._value)

    @property
    def priority(self) -> Priority:
        return Priority.MUL

    def stringize(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def latexise(self) -> str:
        sign = '-' if self.is_negative else ''
        return rf"{sign}\frac{{{abs(self.numerator)}}}{{{self.denominator}}}"

    def __eq__(self, other: object) -> bool:
        if type(other) is not Rational:
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


class Integer(Rational):
    """An arbitrary-size integer."""

    def __init__(self, value: int):
        object.__setattr__(self, '_value', value)

    @classmethod
    def create(cls, value: Any, denominator: Optional[int] = None,
               settings: Optional[Settings] = None) -> Integer:
        if denominator is not None:
            raise TypeError("Integer.create takes a single value")
        return Integer(int(value))

    @classmethod
    def zero(cls) -> Integer:
        return _ZERO

    @classmethod
    def one(cls) -> Integer:
        return _ONE

    @classmethod
    def minus_one(cls) -> Integer:
        return _MINUS_ONE

    @classmethod
    def try_parse(cls, text: str) -> Tuple[bool, Optional[Integer]]:
        """
        Parse an optionally signed run of decimal digits.

        Returns:
            (True, integer) on success, (False, None) otherwise.
        """
        if not isinstance(text, str):
            return False, None
        stripped = text.strip()
        if not _INTEGER_PATTERN.fullmatch(stripped):
            return False, None
        return True, Integer(int(stripped))

    @classmethod
    def parse(cls, text: str) -> Integer:
        ok, value = cls.try_parse(text)
        if not ok:
            raise ParseError(f"Invalid integer literal: {text!r}", text=text)
        return value

    @property
    def value(self) -> int:
        return self._value

    @property
    def numerator(self) -> int:
        return self._value

    @property
    def denominator(self) -> int:
        return 1

    @property
    def is_integer(self) -> bool:
        return True

    def as_fraction(self) -> Fraction:
        return Fraction(self._value)

    def as_decimal(self, context: Optional[Context] = None) -> Decimal:
        return Decimal(self._value)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    @property
    def priority(self) -> Priority:
        return Priority.MUL if self._value < 0 else Priority.LEAF

    def stringize(self) -> str:
        return str(self._value)

    def latexise(self) -> str:
        return str(self._value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not Integer:
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


_ZERO = Integer(0)
_ONE = Integer(1)
_MINUS_ONE = Integer(-1)
_NAN = Real(Decimal('NaN'))
_POSITIVE_INFINITY = Real(Decimal('Infinity'))
_NEGATIVE_INFINITY = Real(Decimal('-Infinity'))


def _downcast(value: Decimal, settings: Settings) -> Real:
    epsilon = settings.precision_error_zero_range
    limit = settings.max_abs_numerator_or_denominator
    if value.adjusted() >= settings.decimal_precision:
        # More integer digits than the precision holds, nothing to recover
        return Real(value)
    floor = value.to_integral_value(rounding=ROUND_FLOOR)
    rest = _context(settings).subtract(value, floor)
    if rest < epsilon:
        return Integer(int(floor))
    if rest > 1 - epsilon:
        return Integer(int(floor) + 1)
    attempt = find_rational(value, max_denominator=limit, tolerance=epsilon)
    if attempt is None or abs(attempt.numerator) > limit:
        return Real(value)
    return Rational.create(attempt, settings=settings)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        return Decimal(value)
    raise conversion_error(value)


def number(value: Any) -> Number:
    """
    Convert a Python number to the matching variant of the tower.

    int -> Integer, Fraction -> Rational, Decimal and float -> Real,
    complex -> Complex; each downcast according to the current settings.
    """
    if isinstance(value, Number):
        return value
    if isinstance(value, bool):
        raise conversion_error(value)
    if isinstance(value, int):
        return Integer.create(value)
    if isinstance(value, Fraction):
        return Rational.create(value)
    if isinstance(value, (Decimal, float)):
        return Real.create(value)
    if isinstance(value, complex):
        return Complex.create(number(value.real), number(value.imag))
    raise conversion_error(value)


def _coerce(value: Any) -> Optional[Number]:
    """Number for numeric operands, None for anything that should build a tree."""
    if isinstance(value, Number):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, Fraction, Decimal, complex)):
        return None
    return number(value)


def _real_number(value: Any) -> Real:
    num = number(value)
    if not isinstance(num, Real):
        if not num.is_real:
            raise DomainError(f"Expected a real number, got {num.stringize()}")
        return num.real_part
    return num


def _level(value: Number) -> int:
    if isinstance(value, Integer):
        return _INTEGER
    if isinstance(value, Rational):
        return _RATIONAL
    if isinstance(value, Real):
        return _REAL
    return _COMPLEX


def _real_key(value: Number):
    """
    Sort key of a real-valued number: a Fraction, or a float for infinities.

    Returns None for NaN.

    Raises:
        DomainError: If the number has a nonzero imaginary part.
    """
    if not value.is_real:
        raise DomainError(f"Complex number {value.stringize()} cannot be ordered")
    value = value.real_part
    if isinstance(value, Rational):
        return value.as_fraction()
    decimal = value.value
    if decimal.is_nan():
        return None
    if decimal.is_infinite():
        return -math.inf if decimal.is_signed() else math.inf
    return Fraction(decimal)


# Arithmetic

def add(a: Number, b: Number) -> Number:
    level = max(_level(a), _level(b))
    if level == _INTEGER:
        return Integer(a.value + b.value)
    if level == _RATIONAL:
        return Rational.create(a.as_fraction() + b.as_fraction())
    if level == _REAL:
        context = _context()
        return Real.create(context.add(a.as_decimal(context), b.as_decimal(context)))
    return Complex.create(
        add(a.real_part, b.real_part),
        add(a.imaginary_part, b.imaginary_part),
    )


def negate(a: Number) -> Number:
    level = _level(a)
    if level == _INTEGER:
        return Integer(-a.value)
    if level == _RATIONAL:
        return Rational.create(-a.value)
    if level == _REAL:
        return Real.create(a.value.copy_negate())
    return Complex.create(negate(a.real_part), negate(a.imaginary_part))


def subtract(a: Number, b: Number) -> Number:
    return add(a, negate(b))


def multiply(a: Number, b: Number) -> Number:
    level = max(_level(a), _level(b))
    if level == _INTEGER:
        return Integer(a.value * b.value)
    if level == _RATIONAL:
        return Rational.create(a.as_fraction() * b.as_fraction())
    if level == _REAL:
        context = _context()
        return Real.create(context.multiply(a.as_decimal(context), b.as_decimal(context)))
    ar, ai, br, bi = a.real_part, a.imaginary_part, b.real_part, b.imaginary_part
    return Complex.create(
        subtract(multiply(ar, br), multiply(ai, bi)),
        add(multiply(ar, bi), multiply(ai, br)),
    )


def divide(a: Number, b: Number) -> Number:
    """Quotient of two numbers. Division by zero gives NaN."""
    if b.is_zero or a.is_nan or b.is_nan:
        return _NAN
    level = max(_level(a), _level(b))
    if level <= _RATIONAL:
        return Rational.create(a.as_fraction() / b.as_fraction())
    if level == _REAL:
        context = _context()
        return Real.create(context.divide(a.as_decimal(context), b.as_decimal(context)))
    ar, ai, br, bi = a.real_part, a.imaginary_part, b.real_part, b.imaginary_part
    denominator = add(multiply(br, br), multiply(bi, bi))
    return Complex.create(
        divide(add(multiply(ar, br), multiply(ai, bi)), denominator),
        divide(subtract(multiply(ai, br), multiply(ar, bi)), denominator),
    )


def power(base: Number, exponent: int) -> Number:
    """
    Raise a number to an integer power.

    x ^ 0 is 1 for every finite x; zero to a negative power is NaN.
    """
    if not base.is_finite:
        if exponent == 1:
            return base
        if base.is_nan or exponent == 0:
            return _NAN
    if exponent == 0:
        return _ONE
    if exponent < 0:
        return divide(_ONE, power(base, -exponent))
    level = _level(base)
    if level == _INTEGER:
        return Integer(base.value ** exponent)
    if level == _RATIONAL:
        return Rational.create(base.value ** exponent)
    if level == _REAL:
        context = _context()
        return Real.create(context.power(base.value, Decimal(exponent)))
    result: Number = _ONE
    factor = base
    while exponent:
        if exponent & 1:
            result = multiply(result, factor)
        factor = multiply(factor, factor)
        exponent >>= 1
    return result


def absolute(a: Number) -> Number:
    """Absolute value; the modulus for complex numbers."""
    level = _level(a)
    if level == _INTEGER:
        return Integer(abs(a.value))
    if level == _RATIONAL:
        return Rational.create(abs(a.value))
    if level == _REAL:
        return Real.create(a.value.copy_abs())
    squared = add(multiply(a.real_part, a.real_part), multiply(a.imaginary_part, a.imaginary_part))
    exact = exact_root(squared, 2)
    if exact is not None:
        return exact
    context = _context()
    return Real.create(context.sqrt(squared.as_decimal(context)))


def integer_root(value: int, degree: int) -> Optional[int]:
    """The exact `degree`-th root of a non-negative integer, or None."""
    if value < 0 or degree < 1:
        return None
    if value < 2 or degree == 1:
        return value
    if degree == 2:
        root = math.isqrt(value)
    else:
        # Newton iteration from above converges to the floor of the root
        root = 1 << ((value.bit_length() + degree - 1) // degree)
        while True:
            better = ((degree - 1) * root + value // root ** (degree - 1)) // degree
            if better >= root:
                break
            root = better
    return root if root ** degree == value else None


def exact_root(value: Number, degree: int) -> Optional[Rational]:
    """
    The exact non-negative `degree`-th root of a non-negative rational, or None.

    Examples:
        >>> exact_root(Rational.create(4, 9), 2)
        2/3
        >>> exact_root(Integer.create(2), 2) is None
        True
    """
    if not isinstance(value, Rational) or value.is_negative:
        return None
    fraction = value.as_fraction()
    numerator = integer_root(fraction.numerator, degree)
    denominator = integer_root(fraction.denominator, degree)
    if numerator is None or denominator is None:
        return None
    return Rational.create(numerator, denominator)


def signum(a: Number) -> Number:
    """-1, 0 or 1 for real numbers; NaN stays NaN."""
    if a.is_nan:
        return _NAN
    key = _real_key(a)
    if key > 0:
        return _ONE
    if key < 0:
        return _MINUS_ONE
    return _ZERO
