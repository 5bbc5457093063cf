# ExactCAS - Statement Tests
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Tests for truth values, connectives, comparisons and set membership,
including propositional simplification.
"""

import pytest

from exactcas import (
    And, Boolean, Implies, In, Integer, Not, Or, SpecialSet, FALSE, TRUE,
    COMPLEXES, INTEGERS, RATIONALS, REALS, Complex, Rational, Real,
    ParseError, element_of, equals, evaluate, greater, less, simplify, using,
    var,
)


@pytest.fixture
def a():
    return var('a')


@pytest.fixture
def b():
    return var('b')


class TestBoolean:
    """Test truth value literals."""

    def test_create_returns_constants(self):
        assert Boolean.create(True) is TRUE
        assert Boolean.create(False) is FALSE

    def test_truthiness(self):
        assert bool(TRUE)
        assert not FALSE

    def test_try_parse(self):
        """Test parsing ignores case and whitespace."""
        assert Boolean.try_parse(' TRUE ') == (True, TRUE)
        assert Boolean.try_parse('false') == (True, FALSE)
        assert Boolean.try_parse('yes') == (False, None)
        assert Boolean.try_parse(None) == (False, None)

    def test_parse_raises(self):
        with pytest.raises(ParseError) as exc_info:
            Boolean.parse('maybe')
        assert exc_info.value.text == 'maybe'

    def test_rendering(self):
        assert str(TRUE) == 'true'
        assert FALSE.latexise() == r'\bot'


class TestRendering:
    """Test statement rendering."""

    def test_connectives(self, a, b):
        """Test precedence of not, and, or."""
        assert str(~(a & b) | TRUE) == 'not (a and b) or true'
        assert str(~a & b) == 'not a and b'
        assert str((a | b) & a) == '(a or b) and a'

    def test_implication(self, a, b):
        assert str(a.implies(b)) == 'a implies b'
        assert str((a | b).implies(a)) == 'a or b implies a'

    def test_comparisons_and_sets(self):
        x = var('x')
        assert str(greater(x + 1, 2)) == 'x + 1 > 2'
        assert str(element_of(x, REALS)) == 'x in RR'
        assert REALS.latexise() == r'\mathbb{R}'

    def test_unknown_special_set(self):
        with pytest.raises(ValueError):
            SpecialSet('N')


class TestBooleanSimplification:
    """Test propositional identities applied by simplify."""

    def test_de_morgan(self, a, b):
        """Test not (not a and not b) = a or b."""
        assert simplify(~(~a & ~b)) == Or(a, b)

    def test_excluded_middle(self, a):
        assert simplify(a | ~a) is TRUE
        assert simplify(~a | a) is TRUE

    def test_contradiction(self, a):
        assert simplify(a & ~a) is FALSE

    def test_implies_self(self, a):
        assert simplify(a.implies(a)) is TRUE

    def test_or_not_becomes_implication(self, a, b):
        assert simplify(~a | b) == Implies(a, b)

    def test_unit_laws(self, a):
        """Test true and false as operands."""
        assert simplify(a & TRUE) == a
        assert simplify(a | FALSE) == a
        assert simplify(a | TRUE) is TRUE
        assert simplify(a & FALSE) is FALSE
        assert simplify(FALSE.implies(a)) is TRUE

    def test_idempotence(self, a):
        assert simplify(a & a) == a
        assert simplify(a ^ a) is FALSE

    def test_absorption(self, a, b):
        assert simplify(a | (a & b)) == a
        assert simplify(a & (a | b)) == a

    def test_absorption_of_negation(self, a, b):
        assert simplify(a | (~a & b)) == Or(a, b)
        assert simplify((b & ~a) | a) == Or(a, b)

    def test_factoring(self, a, b):
        """Test (a and b) or (a and c) = a and (b or c)."""
        c = var('c')
        assert simplify((a & b) | (a & c)) == And(a, Or(b, c))

    def test_constant_folding(self):
        assert simplify(TRUE & FALSE) is FALSE
        assert simplify(Not(FALSE)) is TRUE

    def test_non_logical_operands_untouched(self):
        """Test propositional rules need statements or variables."""
        two = Integer.create(2)
        expr = And(two, two)
        assert simplify(expr) == expr

    def test_result_is_stable(self, a, b):
        """Test simplifying a simplified statement changes nothing."""
        once = simplify(~(~a & ~b) | (a & b))
        assert simplify(once) == once


class TestEvaluation:
    """Test folding of comparisons and membership."""

    def test_numeric_comparisons(self):
        assert evaluate(equals(1, 1)) is TRUE
        assert evaluate(less(1, Rational.create(3, 2))) is TRUE
        assert evaluate(greater(1, 2)) is FALSE

    def test_equality_across_variants(self):
        """Test equal values in different variants compare equal."""
        with using(downcasting_enabled=False):
            one = Rational.create(1, 1)
        assert evaluate(equals(one, 1)) is TRUE

    def test_symbolic_comparisons(self):
        """Test comparisons with unknowns stay as they are."""
        x = var('x')
        expr = greater(x, 1)
        assert evaluate(expr) is expr
        assert evaluate(equals(x, x)) is TRUE

    def test_nan_equality_unknown(self):
        """Test NaN = NaN is not folded."""
        expr = evaluate(equals(Real.nan(), Real.nan()))
        assert not isinstance(expr, Boolean)

    def test_connectives(self):
        assert evaluate(TRUE.implies(FALSE)) is FALSE
        assert evaluate(TRUE ^ FALSE) is TRUE

    @pytest.mark.parametrize('element, superset, expected', [
        (Integer.create(3), INTEGERS, True),
        (Rational.create(1, 2), INTEGERS, False),
        (Rational.create(1, 2), RATIONALS, True),
        (Complex.create(1, 1), REALS, False),
        (Complex.create(1, 1), COMPLEXES, True),
        (Real.positive_infinity(), REALS, False),
    ])
    def test_membership(self, element, superset, expected):
        """Test membership follows the numeric tower."""
        assert evaluate(In(element, superset)) is Boolean.create(expected)
