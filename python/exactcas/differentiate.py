# ExactCAS - Symbolic Differentiation
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Symbolic differentiation with respect to a variable.

The result is not simplified: d/dx (2 * x) is built as 0 * x + 2 * 1.
Pass it through `simplify` for a readable form.

Kinds without a closed-form rule (signum, factorial, statements, nested
derivatives) produce an unevaluated `Derivative` node. A tree containing
NaN or an infinity differentiates to NaN.

Example:
    >>> x = var('x')
    >>> simplify(differentiate(x**2 + 2*x + 1, x))
    2 * x + 2
"""

from __future__ import annotations
import logging
from typing import Union

from .entity import Entity
from .exceptions import ExpressionError
from .expr import (
    Abs, Acos, Acot, Add, Asin, Atan, Cos, Cot, Derivative, Div, E, Log, Mul,
    Pow, Signum, Sin, Sub, Tan, Variable, sqrt,
)
from .numbers import Integer, Real


logger = logging.getLogger(__name__)

ZERO = Integer.zero()
ONE = Integer.one()
MINUS_ONE = Integer.minus_one()
TWO = Integer.create(2)


def differentiate(expr: Entity, var: Union[str, Variable]) -> Entity:
    """
    Derivative of `expr` with respect to `var`.

    Args:
        expr: Expression to differentiate.
        var: Variable, or its name.

    Returns:
        The unsimplified derivative; NaN if `expr` is not finite.

    Raises:
        ExpressionError: If `var` is not a variable.
    """
    if isinstance(var, str):
        var = Variable(var)
    if not isinstance(var, Variable):
        raise ExpressionError(
            f"Can only differentiate with respect to a variable, got {type(var).__name__}",
            value_type=type(var).__name__,
        )
    if not expr.is_finite:
        return Real.nan()
    return _derive(expr, var)


def _ln(e: Entity) -> Log:
    return Log(E, e)


def _opaque(e: Entity, x: Variable) -> Derivative:
    logger.debug("No closed-form derivative of %s, keeping d/d%s", type(e).__name__, x.name)
    return Derivative(e, x)


def _derive(e: Entity, x: Variable) -> Entity:
    if isinstance(e, Variable):
        return ONE if e == x else ZERO
    if not e.direct_children:
        return ZERO

    if isinstance(e, Add):
        return Add(_derive(e.left, x), _derive(e.right, x))
    if isinstance(e, Sub):
        return Sub(_derive(e.left, x), _derive(e.right, x))
    if isinstance(e, Mul):
        # (uv)' = u'v + uv'
        return Add(
            Mul(_derive(e.left, x), e.right),
            Mul(e.left, _derive(e.right, x)),
        )
    if isinstance(e, Div):
        # (u/v)' = (u'v - uv') / v^2
        return Div(
            Sub(Mul(_derive(e.left, x), e.right), Mul(e.left, _derive(e.right, x))),
            Pow(e.right, TWO),
        )
    if isinstance(e, Pow):
        return _derive_power(e, x)
    if isinstance(e, Log):
        return _derive_log(e, x)

    if isinstance(e, (Sin, Cos, Tan, Cot, Asin, Acos, Atan, Acot, Abs)):
        u = e.argument
        du = _derive(u, x)
        if isinstance(e, Sin):
            return Mul(Cos(u), du)
        if isinstance(e, Cos):
            return Mul(Mul(MINUS_ONE, Sin(u)), du)
        if isinstance(e, Tan):
            return Div(du, Pow(Cos(u), TWO))
        if isinstance(e, Cot):
            return Div(Mul(MINUS_ONE, du), Pow(Sin(u), TWO))
        if isinstance(e, Asin):
            return Div(du, sqrt(Sub(ONE, Pow(u, TWO))))
        if isinstance(e, Acos):
            return Div(Mul(MINUS_ONE, du), sqrt(Sub(ONE, Pow(u, TWO))))
        if isinstance(e, Atan):
            return Div(du, Add(ONE, Pow(u, TWO)))
        if isinstance(e, Acot):
            return Div(Mul(MINUS_ONE, du), Add(ONE, Pow(u, TWO)))
        return Mul(Signum(u), du)

    # Signum, Factorial, Derivative, statements
    return _opaque(e, x)


def _derive_power(e: Pow, x: Variable) -> Entity:
    base, exponent = e.base, e.exponent
    if not exponent.contains_node(x):
        # (u^c)' = c * u^(c-1) * u'
        return Mul(Mul(exponent, Pow(base, Sub(exponent, ONE))), _derive(base, x))
    if not base.contains_node(x):
        # (c^v)' = c^v * ln(c) * v'
        return Mul(Mul(e, _ln(base)), _derive(exponent, x))
    # (u^v)' = u^v * (v' ln(u) + v u' / u)
    return Mul(e, Add(
        Mul(_derive(exponent, x), _ln(base)),
        Div(Mul(exponent, _derive(base, x)), base),
    ))


def _derive_log(e: Log, x: Variable) -> Entity:
    base, argument = e.base, e.argument
    if not base.contains_node(x):
        # (log_c u)' = u' / (u ln c)
        return Div(_derive(argument, x), Mul(argument, _ln(base)))
    # log_v u = ln u / ln v
    return _derive(Div(_ln(argument), _ln(base)), x)
