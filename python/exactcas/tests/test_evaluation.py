# ExactCAS - Constant Evaluation Tests
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Tests for exact constant folding.
"""

import pytest

from exactcas import (
    Add, Complex, Div, Integer, Mul, Pow, Rational, Real, Settings, acos, abs, cos,
    evaluate, factorial, log, signum, simplify, sin, sqrt, using, var,
)


class TestArithmeticFolding:
    """Test folding of arithmetic on numbers."""

    def test_nested_folding(self):
        """Test constants fold bottom-up around unknowns."""
        x = var('x')
        result = evaluate((x + 2 * 3) * sqrt(Integer.create(9)))
        assert result == Mul(x + 6, Integer.create(3))
        assert str(result) == '(x + 6) * 3'

    def test_exact_division(self):
        result = evaluate(Add(Div(Integer.one(), Integer.create(3)), Rational.create(2, 3)))
        assert result == Integer.one()

    def test_division_by_zero(self):
        assert evaluate(Div(Integer.one(), Integer.zero())).is_nan

    def test_integer_powers(self):
        assert evaluate(Pow(Integer.create(2), Integer.create(10))) == Integer.create(1024)
        assert evaluate(Pow(Integer.create(2), Integer.create(-1))) == Rational.create(1, 2)

    def test_exact_roots(self):
        """Test rational exponents fold only for perfect powers."""
        assert evaluate(Pow(Integer.create(4), Rational.create(-1, 2))) == Rational.create(1, 2)
        assert evaluate(Pow(Integer.create(8), Rational.create(2, 3))) == Integer.create(4)
        irrational = sqrt(Integer.create(2))
        assert evaluate(irrational) is irrational

    def test_complex_product(self):
        product = Mul(Complex.create(1, 1), Complex.create(1, -1))
        assert evaluate(product) == Integer.create(2)

    def test_unknowns_unchanged(self):
        """Test a tree with nothing to fold comes back as is."""
        x = var('x')
        expr = x + 1
        assert evaluate(expr) is expr

    def test_result_cached(self):
        expr = Add(Integer.create(2), Integer.create(3))
        assert evaluate(expr) is evaluate(expr)
        assert expr.evaled is evaluate(expr)

    def test_cache_follows_settings(self):
        """Test a result folded under other settings is not reused."""
        half = Rational.create(1, 2)
        expr = Add(half, half)
        assert type(evaluate(expr)) is Integer
        with using(downcasting_enabled=False):
            assert type(evaluate(expr)) is Rational
        assert type(simplify(expr, settings=Settings.exact())) is Rational
        assert type(evaluate(expr)) is Integer

    def test_huge_exponent_unfolded(self):
        """Test exponents past the power limit leave the node as is."""
        expr = Pow(Integer.create(2), Integer.create(10 ** 12))
        assert evaluate(expr) is expr
        root = Pow(Integer.create(4), Rational.create(1, 10 ** 12))
        assert evaluate(root) is root


class TestFunctionFolding:
    """Test folding of functions at exact points."""

    def test_special_points(self):
        zero = Integer.zero()
        assert evaluate(sin(zero)) == Integer.zero()
        assert evaluate(cos(zero)) == Integer.one()
        assert evaluate(acos(Integer.one())) == Integer.zero()

    def test_inexact_points_stay(self):
        """Test functions with irrational values are not folded."""
        expr = sin(Integer.one())
        assert evaluate(expr) is expr

    def test_abs_and_signum(self):
        assert evaluate(abs(Integer.create(-3))) == Integer.create(3)
        assert evaluate(abs(Complex.create(3, 4))) == Integer.create(5)
        assert evaluate(signum(Rational.create(-1, 2))) == Integer.minus_one()
        assert evaluate(signum(Integer.zero())) == Integer.zero()

    def test_nan_argument(self):
        assert evaluate(sin(Real.nan())).is_nan

    def test_factorial(self):
        assert evaluate(factorial(5)) == Integer.create(120)
        assert evaluate(factorial(0)) == Integer.one()
        assert evaluate(factorial(-1)).is_nan
        large = factorial(1001)
        assert evaluate(large) is large

    @pytest.mark.parametrize('argument, base, expected', [
        (8, 2, Integer.create(3)),
        (1, 2, Integer.zero()),
        (7, 7, Integer.one()),
        (Rational.create(1, 2), Rational.create(1, 2), Integer.one()),
    ])
    def test_exact_logarithms(self, argument, base, expected):
        assert evaluate(log(argument, base)) == expected

    def test_logarithm_domain(self):
        """Test non-positive arguments and bases give NaN."""
        assert evaluate(log(-1, 2)).is_nan
        assert evaluate(log(2, 1)).is_nan
        assert evaluate(log(2, 0)).is_nan

    def test_inexact_logarithm_stays(self):
        expr = log(3, 2)
        assert evaluate(expr) is expr
