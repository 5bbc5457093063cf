# ExactCAS - Constant Evaluation
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Exact constant folding.

`evaluate` replaces every sub-expression whose operands are concrete
(numbers, truth values, special sets) with its value. Folding is exact:
operations whose result is not representable in the tower without
rounding are left as they are, so `sqrt(4)` folds to 2 but `sqrt(2)`
and `sin(1)` stay symbolic.

Example:
    >>> evaluate((x + 2 * 3) * sqrt(Integer.create(9)))
    (x + 6) * 3
"""

from __future__ import annotations
import math
from typing import Optional

from .cache import caches
from .config import get_settings
from .entity import Entity
from .expr import (
    Abs, Acos, Acot, Add, Asin, Atan, Cos, Cot, Div, Factorial, Log, Mul, Pow,
    Signum, Sin, Sub, Tan,
)
from .numbers import (
    Integer, Number, Rational, Real, absolute, add, divide, exact_root,
    multiply, power, signum, subtract,
)
from .statements import (
    And, Boolean, Equals, Greater, GreaterOrEqual, Implies, In, Less,
    LessOrEqual, Not, Or, SpecialSet, Xor,
)


# Largest argument folded by Factorial
FACTORIAL_LIMIT = 1000

# Largest exponent numerator or denominator folded by Pow
POWER_LIMIT = 10_000

ZERO = Integer.zero()
ONE = Integer.one()


def _is_real_number(node: Entity) -> bool:
    return isinstance(node, Number) and node.is_real and not node.is_nan


def _fold_arithmetic(node: Entity) -> Entity:
    left, right = node.direct_children
    if not (isinstance(left, Number) and isinstance(right, Number)):
        return node
    if isinstance(node, Add):
        return add(left, right)
    if isinstance(node, Sub):
        return subtract(left, right)
    if isinstance(node, Mul):
        return multiply(left, right)
    return divide(left, right)


def _fold_power(node: Pow) -> Entity:
    base, exponent = node.base, node.exponent
    if not (isinstance(base, Number) and isinstance(exponent, Number)):
        return node
    if isinstance(exponent, Integer):
        if abs(exponent.value) > POWER_LIMIT:
            return node
        return power(base, exponent.value)
    if isinstance(exponent, Rational) and isinstance(base, Rational):
        if max(abs(exponent.numerator), exponent.denominator) > POWER_LIMIT:
            return node
        # base ^ (p/q) is exact when base is a perfect q-th power
        root = exact_root(base, exponent.denominator)
        if root is not None:
            return power(root, exponent.numerator)
    if base.is_nan or exponent.is_nan:
        return Real.nan()
    return node


def _fold_function(node: Entity) -> Entity:
    argument = node.argument
    if not isinstance(argument, Number):
        return node
    if argument.is_nan:
        return Real.nan()
    if isinstance(node, Abs):
        return absolute(argument)
    if not argument.is_real:
        return node
    if isinstance(node, Signum):
        return signum(argument)
    if argument.is_zero:
        if isinstance(node, (Sin, Tan, Asin, Atan)):
            return ZERO
        if isinstance(node, Cos):
            return ONE
    if argument.is_one and isinstance(node, Acos):
        return ZERO
    return node


def _fold_factorial(node: Factorial) -> Entity:
    argument = node.argument
    if not isinstance(argument, Integer):
        return node
    if argument.value < 0:
        return Real.nan()
    if argument.value > FACTORIAL_LIMIT:
        return node
    return Integer.create(math.factorial(argument.value))


def _exact_log(base: Rational, argument: Rational) -> Optional[Integer]:
    """k such that base ^ k == argument, for positive integers; None otherwise."""
    if not (isinstance(base, Integer) and isinstance(argument, Integer)):
        return None
    b, n = base.value, argument.value
    if b < 2 or n < 1:
        return None
    k = 0
    while n % b == 0:
        n //= b
        k += 1
    return Integer.create(k) if n == 1 else None


def _fold_log(node: Log) -> Entity:
    base, argument = node.base, node.argument
    if not (isinstance(base, Number) and isinstance(argument, Number)):
        return node
    if base.is_nan or argument.is_nan:
        return Real.nan()
    if not (_is_real_number(base) and _is_real_number(argument)):
        return node
    if not (base.is_finite and argument.is_finite):
        return node
    if base <= 0 or base.is_one or argument <= 0:
        return Real.nan()
    if argument.is_one:
        return ZERO
    if base == argument:
        return ONE
    exact = _exact_log(base, argument)
    if exact is not None:
        return exact
    return node


def _fold_connective(node: Entity) -> Entity:
    if isinstance(node, Not):
        if isinstance(node.argument, Boolean):
            return Boolean.create(not node.argument.value)
        return node
    left, right = node.direct_children
    if not (isinstance(left, Boolean) and isinstance(right, Boolean)):
        return node
    if isinstance(node, And):
        return Boolean.create(left.value and right.value)
    if isinstance(node, Or):
        return Boolean.create(left.value or right.value)
    if isinstance(node, Xor):
        return Boolean.create(left.value != right.value)
    return Boolean.create(not left.value or right.value)


_ORDERINGS = {
    Greater: lambda a, b: a > b,
    GreaterOrEqual: lambda a, b: a >= b,
    Less: lambda a, b: a < b,
    LessOrEqual: lambda a, b: a <= b,
}


def _fold_comparison(node: Entity) -> Entity:
    left, right = node.direct_children
    if isinstance(node, Equals):
        if isinstance(left, Number) and isinstance(right, Number):
            if left.is_nan or right.is_nan:
                return node
            return Boolean.create(_numeric_equal(left, right))
        if isinstance(left, Boolean) and isinstance(right, Boolean):
            return Boolean.create(left == right)
        if left == right and left.is_finite:
            return Boolean.create(True)
        return node
    if _is_real_number(left) and _is_real_number(right):
        return Boolean.create(_ORDERINGS[type(node)](left, right))
    return node


def _numeric_equal(a: Number, b: Number) -> bool:
    """Value equality across variants, so 1 == 1.0 even without downcasting."""
    if a.is_real and b.is_real:
        return a <= b and a >= b
    return (
        _numeric_equal(a.real_part, b.real_part)
        and _numeric_equal(a.imaginary_part, b.imaginary_part)
    )


_MEMBERSHIP = {
    'Z': lambda n: n.is_real and n.real_part.is_integer,
    'Q': lambda n: n.is_real and isinstance(n.real_part, Rational),
    'R': lambda n: n.is_real,
    'C': lambda n: True,
}


def _fold_membership(node: In) -> Entity:
    element, superset = node.element, node.superset
    if not (isinstance(superset, SpecialSet) and isinstance(element, Number)):
        return node
    if not element.is_finite:
        return Boolean.create(False)
    return Boolean.create(_MEMBERSHIP[superset.name](element))


def inner_eval(node: Entity) -> Entity:
    """
    Fold `node` if its direct operands are concrete.

    Operands are expected to be folded already; this looks one level deep.

    Returns:
        The folded value, or `node` itself if nothing could be folded.
    """
    cached = caches.peek(node, 'evaled')
    if cached is not None and cached[0] == get_settings():
        return cached[1]
    if not node.direct_children:
        return node
    if isinstance(node, (Add, Sub, Mul, Div)):
        return _fold_arithmetic(node)
    if isinstance(node, Pow):
        return _fold_power(node)
    if isinstance(node, (Sin, Cos, Tan, Cot, Asin, Acos, Atan, Acot, Abs, Signum)):
        return _fold_function(node)
    if isinstance(node, Factorial):
        return _fold_factorial(node)
    if isinstance(node, Log):
        return _fold_log(node)
    if isinstance(node, (Not, And, Or, Xor, Implies)):
        return _fold_connective(node)
    if isinstance(node, (Equals, Greater, GreaterOrEqual, Less, LessOrEqual)):
        return _fold_comparison(node)
    if isinstance(node, In):
        return _fold_membership(node)
    return node


def evaluate(expr: Entity) -> Entity:
    """
    Fold every constant sub-expression of `expr`, bottom-up.

    The result is cached on `expr` together with the settings it was
    computed under, and reused only while those settings are active.
    Evaluating an already evaluated tree returns it unchanged.
    """
    active = get_settings()
    cached = caches.peek(expr, 'evaled')
    if cached is not None:
        if cached[0] == active:
            return cached[1]
        # The slot holds another configuration's result
        return expr.replace(inner_eval)
    result = expr.replace(inner_eval)
    caches.get_value(expr, 'evaled', lambda: (active, result))
    return result
