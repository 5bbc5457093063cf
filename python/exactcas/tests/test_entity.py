# ExactCAS - Expression Tree Tests
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Tests for the expression tree model: construction, equality, traversal,
transformation and rendering.
"""

import pytest

from exactcas import (
    Add, And, Div, Implies, Integer, Mul, Not, Or, Pow, Rational, Real, Sin,
    Sub, TRUE, Xor, E, PI, ExpressionError,
    var, sin, cos, ln, log, sqrt, exp, derivative, factorial, abs,
)


@pytest.fixture
def x():
    return var('x')


@pytest.fixture
def y():
    return var('y')


class TestConstruction:
    """Test building expressions from Python syntax."""

    def test_var_validation(self):
        """Test variable names are checked."""
        with pytest.raises(ValueError):
            var('')
        with pytest.raises(TypeError):
            var(1)

    def test_arithmetic_operators(self, x, y):
        """Test operators build the matching nodes."""
        assert x + y == Add(x, y)
        assert x - y == Sub(x, y)
        assert x * y == Mul(x, y)
        assert x / y == Div(x, y)
        assert x ** y == Pow(x, y)

    def test_reflected_operators_convert_numbers(self, x):
        """Test Python numbers on the left are converted."""
        assert 2 + x == Add(Integer.create(2), x)
        assert 1 - x == Sub(Integer.one(), x)
        assert 2 ** x == Pow(Integer.create(2), x)
        assert 0.5 * x == Mul(Rational.create(1, 2), x)

    def test_negation(self, x):
        """Test unary minus multiplies by -1."""
        assert -x == Mul(Integer.minus_one(), x)
        assert +x is x

    def test_logical_operators(self, x, y):
        """Test &, |, ^ and ~ build statements."""
        assert x & y == And(x, y)
        assert x | y == Or(x, y)
        assert x ^ y == Xor(x, y)
        assert ~x == Not(x)
        assert x.implies(y) == Implies(x, y)
        assert x | True == Or(x, TRUE)

    def test_function_constructors(self, x):
        """Test the named constructors."""
        assert sin(x) == Sin(x)
        assert sqrt(x) == Pow(x, Rational.create(1, 2))
        assert exp(x) == Pow(E, x)
        assert ln(x) == log(x)
        assert log(x, 2).base == Integer.create(2)
        assert derivative(x ** 2, 'x').var == x

    def test_unconvertible_operand(self, x):
        """Test non-numeric operands raise ExpressionError."""
        with pytest.raises(ExpressionError) as exc_info:
            x + 'y'
        assert exc_info.value.value_type == 'str'
        assert 'var(' in str(exc_info.value)

    def test_expression_error_is_type_error(self, x):
        """Test ExpressionError is also a TypeError."""
        with pytest.raises(TypeError):
            x * None

    def test_nodes_are_immutable(self, x):
        """Test fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            x.name = 'y'


class TestEquality:
    """Test structural equality and hashing."""

    def test_equal_trees(self, x):
        """Test separately built equal trees are equal and hash equal."""
        a = sin(x) + 1
        b = sin(var('x')) + 1
        assert a is not b
        assert a == b
        assert hash(a) == hash(b)

    def test_order_matters(self, x):
        """Test equality is structural, not mathematical."""
        assert x + 1 != 1 + x

    def test_kinds_differ(self, x, y):
        """Test different kinds with equal operands are not equal."""
        assert Add(x, y) != Mul(x, y)
        assert x != Integer.one()

    def test_usable_as_dict_keys(self, x):
        """Test trees work as dictionary keys."""
        table = {x ** 2: 'square'}
        assert table[var('x') ** 2] == 'square'


class TestTraversal:
    """Test children, nodes and derived properties."""

    def test_direct_children(self, x):
        """Test operands in field order."""
        assert (x + 1).direct_children == (x, Integer.one())
        assert x.direct_children == ()
        assert Integer.one().direct_children == ()

    def test_nodes_pre_order(self, x):
        """Test pre-order traversal."""
        expr = x ** 2 + sin(x)
        assert list(expr.nodes()) == [expr, x ** 2, x, Integer.create(2), sin(x), x]

    def test_nodes_fresh_generator(self, x):
        """Test each call restarts the traversal."""
        expr = x + 1
        assert list(expr.nodes()) == list(expr.nodes())

    def test_complexity(self, x):
        """Test complexity counts nodes."""
        assert x.complexity == 1
        assert (x ** 2 + sin(x)).complexity == 6

    def test_vars_exclude_constants(self):
        """Test vars drops e and pi, vars_and_consts keeps them."""
        x, goose = var('x'), var('goose')
        expr = (x + 2 * goose) - PI * x
        assert expr.vars_and_consts == {x, goose, PI}
        assert expr.vars == {x, goose}
        assert expr.free_vars() == {'x', 'goose'}

    def test_constants(self):
        """Test e and pi are constants."""
        assert E.is_constant
        assert PI.is_constant
        assert not var('x').is_constant

    def test_contains_node(self, x, y):
        """Test sub-tree containment."""
        expr = x + sin(y)
        assert expr.contains_node(y)
        assert expr.contains_node(sin(y))
        assert not expr.contains_node(var('z'))
        assert (x + 2).contains_node(2)

    def test_is_finite(self, x):
        """Test NaN and infinity anywhere make a tree non-finite."""
        assert (x + 1).is_finite
        assert not (x + Real.nan()).is_finite
        assert not sin(x * Real.positive_infinity()).is_finite

    def test_simplified_rate(self, x):
        """Test the score uses the complexity criteria weights."""
        assert x.simplified_rate == 1
        assert (x - 1).simplified_rate == 4


class TestTransformation:
    """Test replace and substitute."""

    def test_replace_identity(self, x):
        """Test replacing nothing returns the same instance."""
        expr = sin(x) + x * 2
        assert expr.replace(lambda node: node) is expr

    def test_replace_is_bottom_up(self, x, y):
        """Test the function sees rebuilt parents after their children."""
        seen = []

        def visit(node):
            seen.append(node)
            return y if node == x else node

        result = (x + 1).replace(visit)
        assert result == y + 1
        assert seen == [x, Integer.one(), y + 1]

    def test_replace_keeps_unchanged_subtrees(self, x, y):
        """Test untouched branches are shared with the original."""
        left = sin(y)
        expr = left + x
        result = expr.replace(lambda node: Integer.one() if node == x else node)
        assert result.left is left

    def test_substitute(self, x):
        """Test every occurrence is replaced."""
        expr = x + sin(x)
        assert expr.substitute(x, 2) == Add(Integer.create(2), Sin(Integer.create(2)))

    def test_substitute_subtree(self, x, y):
        """Test substituting a compound sub-tree."""
        expr = sin(x + 1) * (x + 1)
        assert expr.substitute(x + 1, y) == sin(y) * y

    def test_substitute_without_match(self, x):
        """Test the original instance comes back when nothing matches."""
        expr = x + 1
        assert expr.substitute(var('z'), 3) is expr

    def test_substitute_leaf_keeps_complexity(self, x, y):
        """Test swapping one leaf for another never grows the complexity."""
        expr = x * x + y
        assert expr.substitute(x, y).complexity <= expr.complexity
        assert expr.substitute(y, x).complexity <= expr.complexity

    def test_substitute_is_top_down(self, x, y):
        """Test a replaced sub-tree is not searched again."""
        expr = x + 1
        assert expr.substitute(x, x + 1) == (x + 1) + 1

    def test_substitute_all_is_sequential(self, x, y):
        """Test later substitutions see earlier results."""
        result = (x + y).substitute_all({x: y, y: 3})
        assert result == Add(Integer.create(3), Integer.create(3))


class TestRendering:
    """Test plain text and LaTeX output."""

    def test_precedence(self, x, y):
        """Test parentheses appear only where needed."""
        assert str(x ** 2 + sin(x)) == 'x ^ 2 + sin(x)'
        assert str((x + 1) * y) == '(x + 1) * y'
        assert str(x * y + 1) == 'x * y + 1'

    def test_right_operand_of_non_commutative(self, x, y):
        """Test x - (y - z) keeps its parentheses, x - y - z does not."""
        z = var('z')
        assert str(x - (y - z)) == 'x - (y - z)'
        assert str(x - y - z) == 'x - y - z'
        assert str(x / (y * z)) == 'x / (y * z)'

    def test_negative_and_rational_operands(self, x):
        """Test negative and fractional numbers bind like products."""
        assert str(-x) == '-1 * x'
        assert str(x ** Rational.create(1, 2)) == 'x ^ (1/2)'

    def test_functions(self, x):
        """Test function call syntax."""
        assert str(ln(x)) == 'ln(x)'
        assert str(log(x, 2)) == 'log(2, x)'
        assert str(factorial(x + 1)) == '(x + 1)!'
        assert str(abs(x)) == 'abs(x)'

    def test_repr_matches_str(self, x):
        """Test repr renders the expression."""
        assert repr(cos(x)) == 'cos(x)'

    def test_latex(self, x, y):
        """Test LaTeX forms."""
        assert sin(x).latexise() == r'\sin\left(x\right)'
        assert (x / y).latexise() == r'\frac{x}{y}'
        assert ((x + 1) * y).latexise() == r'\left(x + 1\right) \cdot y'
        assert PI.latexise() == r'\pi'
        assert abs(x).latexise() == r'\left|x\right|'
