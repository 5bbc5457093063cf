# ExactCAS - Rational Reconstruction
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Utilities for recovering exact rationals from decimal values.

A decimal such as 0.3333333333333333333333333333 is almost always the
result of dividing small integers. Downcasting tries to recover that
rational so later arithmetic stays exact.

The Problem:
    >>> from fractions import Fraction
    >>> Fraction(Decimal(1) / Decimal(3))
    Fraction(3333333333333333333333333333, 10000000000000000000000000000)

The Solution:
    >>> from exactcas.rational import find_rational
    >>> find_rational(Decimal(1) / Decimal(3))
    Fraction(1, 3)
"""

from decimal import Decimal
from fractions import Fraction
from typing import Optional


def find_rational(
    value: Decimal,
    max_denominator: int = 100_000_000,
    tolerance: Decimal = Decimal('1e-16'),
) -> Optional[Fraction]:
    """
    Find a small rational that reproduces `value` within `tolerance`.

    Strategy:
    1. Take the exact rational value of the decimal
    2. Find the closest fraction with denominator <= max_denominator
       (continued fraction convergents via Fraction.limit_denominator)
    3. Accept it only if it is within tolerance of the original

    Args:
        value: A finite decimal.
        max_denominator: Largest denominator to consider.
        tolerance: Largest accepted absolute error.

    Returns:
        The reconstructed Fraction, or None if no candidate is close enough.

    Examples:
        >>> find_rational(Decimal('0.5'))
        Fraction(1, 2)
        >>> find_rational(Decimal('0.123456789'), max_denominator=100) is None
        True
    """
    if not value.is_finite():
        return None
    exact = Fraction(value)
    if exact.denominator <= max_denominator:
        return exact
    candidate = exact.limit_denominator(max_denominator)
    if abs(candidate - exact) < Fraction(tolerance):
        return candidate
    return None


def fraction_to_decimal(value: Fraction, context) -> Decimal:
    """Divide numerator by denominator in the given decimal context."""
    return context.divide(Decimal(value.numerator), Decimal(value.denominator))
