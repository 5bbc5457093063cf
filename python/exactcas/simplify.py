# ExactCAS - Symbolic Simplification
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Rule-based simplification of expressions.

A simplification pass walks the tree bottom-up. At each node it tries, in
order:
1. Constant folding (2 + 3 -> 5)
2. The first matching rewrite rule (x * 1 -> x, not not a -> a, ...)
3. For arithmetic, the polynomial normal form: like terms collected
   (2*x + 3*x -> 5 * x), small powers of sums expanded, terms sorted by
   degree. It replaces the rule result when it scores no worse.

Passes repeat until the tree stops changing or the pass ceiling is
reached. The simplest tree seen along the way, as scored by the
complexity criteria, is returned.

Example:
    >>> x = var('x')
    >>> simplify((x * 100 + 5) - (x * 100))
    5
    >>> simplify(x * x + x * x)
    2 * x ^ 2
    >>> expand((x + 1) ** 2)
    x ^ 2 + 2 * x + 1
"""

from __future__ import annotations
import logging
from fractions import Fraction
from typing import Dict, FrozenSet, Optional, Tuple

from .config import Settings, using
from .criteria import score
from .entity import Entity
from .evaluation import POWER_LIMIT, inner_eval
from .expr import Add, Div, Mul, Pow, Sub, Variable
from .numbers import (
    Integer, Number, Rational, add, divide, multiply, negate, power,
)
from .patterns import RuleSet
from .rules import DEFAULT_RULES


logger = logging.getLogger(__name__)

ZERO = Integer.zero()
ONE = Integer.one()
MINUS_ONE = Integer.minus_one()

# Largest power of a sum that is multiplied out
EXPANSION_LIMIT = 8

_POLYNOMIAL_KINDS = (Add, Sub, Mul, Div, Pow)


def simplify(
    expr: Entity,
    level: Optional[int] = None,
    rules: Optional[RuleSet] = None,
    settings: Optional[Settings] = None,
) -> Entity:
    """
    Simplify an expression.

    Args:
        expr: Expression to simplify
        level: Maximum number of passes; defaults to `Settings.simplify_passes`
        rules: Rule set to use instead of the default one
        settings: Settings to use instead of the current default

    Returns:
        The simplest equivalent expression found. Simplifying the result
        again returns it unchanged.
    """
    rules = DEFAULT_RULES if rules is None else rules
    with using(settings) as active:
        passes = active.simplify_passes if level is None else level
        if passes < 1:
            raise ValueError(f"level must be positive, got {passes}")

        # Sub-trees that survive a pass unchanged are not simplified again
        memo: Dict[int, Tuple[Entity, Entity]] = {}

        def step(node: Entity) -> Entity:
            hit = memo.get(id(node))
            if hit is not None and hit[0] is node:
                return hit[1]
            result = inner_simplify(node, rules)
            memo[id(node)] = (node, result)
            return result

        best = current = expr
        best_score = score(expr)
        for number in range(1, passes + 1):
            following = current.replace(step)
            if following is current or following == current:
                logger.debug("Simplified to a fixpoint in %d passes", number - 1)
                break
            current = following
            current_score = score(current)
            if current_score <= best_score:
                best, best_score = current, current_score
        else:
            logger.debug("Stopped after %d passes at %s", passes, current)
        return best


def inner_simplify(node: Entity, rules: RuleSet = DEFAULT_RULES) -> Entity:
    """
    Simplify a single node whose children are already simplified.

    Returns:
        The replacement, or `node` itself when nothing simpler was found.
    """
    folded = inner_eval(node)
    if folded is not node:
        return folded
    rewritten = rules.apply(node)
    normal = normal_form(node)
    candidate = rewritten
    if normal is not None and score(normal) <= score(rewritten):
        candidate = normal
    return node if candidate == node else candidate


def normal_form(expr: Entity) -> Optional[Entity]:
    """
    Polynomial normal form of an arithmetic expression.

    Returns None for expressions that are not arithmetic or not finite.
    """
    if not isinstance(expr, _POLYNOMIAL_KINDS) or not expr.is_finite:
        return None
    poly = to_polynomial(expr)
    if poly is None:
        return None
    return from_polynomial(poly)


def expand(expr: Entity) -> Entity:
    """
    Expand an expression (distribute multiplication over addition).

    This is useful when you want to expose all terms for cancellation.
    """
    if not expr.is_finite:
        return expr
    poly = to_polynomial(expr)
    if poly is None:
        return expr
    return from_polynomial(poly)


# Polynomial representation for better simplification
# A polynomial is a dict mapping monomials to coefficients
# A monomial is a frozenset of (factor, exponent) tuples; a factor is a
# variable or any non-polynomial sub-expression (sin(x), e ^ x, ...)

Monomial = FrozenSet[Tuple[Entity, Rational]]
Polynomial = Dict[Monomial, Number]


def to_polynomial(expr: Entity) -> Polynomial | None:
    """
    Convert expression to polynomial form.

    Returns None where no polynomial exists: non-finite numbers and
    division by zero.
    """
    if isinstance(expr, Number):
        if not expr.is_finite:
            return None
        return {} if expr.is_zero else {frozenset(): expr}

    if isinstance(expr, (Add, Sub, Mul, Div)):
        p1 = to_polynomial(expr.left)
        p2 = to_polynomial(expr.right)
        if p1 is None or p2 is None:
            return None
        if isinstance(expr, Add):
            return _add_poly(p1, p2)
        if isinstance(expr, Sub):
            return _add_poly(p1, _negate_poly(p2))
        if isinstance(expr, Mul):
            return _mul_poly(p1, p2)
        if not p2:
            return None
        if len(p2) == 1:
            mono, coef = next(iter(p2.items()))
            return _mul_poly(p1, {_scale(mono, MINUS_ONE): divide(ONE, coef)})
        return _mul_poly(p1, _factor(from_polynomial(p2), MINUS_ONE))

    if isinstance(expr, Pow):
        return _power_to_polynomial(expr)

    return _factor(expr, ONE)


def _power_to_polynomial(expr: Pow) -> Polynomial | None:
    exponent = expr.exponent
    if not isinstance(exponent, Rational):
        return _factor(expr, ONE)
    base = to_polynomial(expr.base)
    if base is None:
        return None

    if not isinstance(exponent, Integer):
        # Fractional powers are never distributed over the base
        if not base:
            return {} if not exponent.is_negative else None
        return _factor(from_polynomial(base), exponent)

    n = exponent.value
    if n == 0:
        return {frozenset(): ONE}
    if not base:
        return {} if n > 0 else None
    if len(base) == 1:
        mono, coef = next(iter(base.items()))
        if abs(n) > POWER_LIMIT and not (coef.is_one or coef == MINUS_ONE):
            return _factor(from_polynomial(base), exponent)
        return {_scale(mono, exponent): power(coef, n)}
    if 0 < n <= EXPANSION_LIMIT:
        result: Polynomial = {frozenset(): ONE}
        for _ in range(n):
            result = _mul_poly(result, base)
        return result
    return _factor(from_polynomial(base), exponent)


def _factor(atom: Entity, exponent: Rational) -> Polynomial:
    return {frozenset({(atom, exponent)}): ONE}


def _negate_poly(p: Polynomial) -> Polynomial:
    return {m: negate(c) for m, c in p.items()}


def _scale(mono: Monomial, k: Rational) -> Monomial:
    """Multiply every exponent of a monomial by k."""
    return frozenset((atom, multiply(e, k)) for atom, e in mono)


def _add_poly(p1: Polynomial, p2: Polynomial) -> Polynomial:
    """Add two polynomials."""
    result = dict(p1)
    for m, c in p2.items():
        result[m] = add(result[m], c) if m in result else c
    # Remove zero coefficients
    return {m: c for m, c in result.items() if not c.is_zero}


def _mul_poly(p1: Polynomial, p2: Polynomial) -> Polynomial:
    """Multiply two polynomials."""
    result: Polynomial = {}
    for m1, c1 in p1.items():
        for m2, c2 in p2.items():
            new_mono = _mul_monomial(m1, m2)
            new_coef = multiply(c1, c2)
            result[new_mono] = add(result[new_mono], new_coef) if new_mono in result else new_coef
    # Remove zero coefficients
    return {m: c for m, c in result.items() if not c.is_zero}


def _mul_monomial(m1: Monomial, m2: Monomial) -> Monomial:
    """Multiply two monomials by adding exponents."""
    powers: Dict[Entity, Rational] = {}
    for atom, exp in m1:
        powers[atom] = exp
    for atom, exp in m2:
        powers[atom] = add(powers[atom], exp) if atom in powers else exp
    # Remove zero exponents
    return frozenset((a, e) for a, e in powers.items() if not e.is_zero)


def _factor_key(factor: Tuple[Entity, Rational]) -> Tuple[int, str, Fraction]:
    # Composite factors come before variables: 3 * sin(x) * x ^ 2
    atom, exp = factor
    return (1 if isinstance(atom, Variable) else 0, atom.stringize(), exp.as_fraction())


def _term_key(term: Tuple[Monomial, Number]):
    # Highest degree first, then by factors
    mono, _ = term
    degree = sum((exp.as_fraction() for _, exp in mono), Fraction(0))
    return (-degree, sorted(_factor_key(f) for f in mono))


def from_polynomial(poly: Polynomial) -> Entity:
    """Convert polynomial back to expression."""
    if not poly:
        return ZERO

    terms = sorted(poly.items(), key=_term_key)
    # Lead with a term that can be written without a minus sign
    lead = next((i for i, (_, c) in enumerate(terms) if not c.is_negative), 0)
    terms.insert(0, terms.pop(lead))

    mono, coef = terms[0]
    result = _mono_to_expr(mono, coef)
    for mono, coef in terms[1:]:
        if coef.is_negative:
            result = Sub(result, _mono_to_expr(mono, negate(coef)))
        else:
            result = Add(result, _mono_to_expr(mono, coef))
    return result


def _product(factors) -> Entity:
    result = factors[0]
    for f in factors[1:]:
        result = Mul(result, f)
    return result


def _mono_to_expr(mono: Monomial, coef: Number) -> Entity:
    """Convert a monomial with its coefficient to an expression."""
    factors = sorted(mono, key=_factor_key)
    numerator = [a if e.is_one else Pow(a, e) for a, e in factors if not e.is_negative]
    denominator = []
    for a, e in factors:
        if e.is_negative:
            e = negate(e)
            denominator.append(a if e.is_one else Pow(a, e))

    if not numerator:
        top = coef
    elif coef.is_one:
        top = _product(numerator)
    else:
        top = _product([coef] + numerator)

    if denominator:
        return Div(top, _product(denominator))
    return top
