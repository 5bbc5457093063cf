# ExactCAS - Rewrite Rule Sets
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
The rule sets used by the simplifier.

- BOOLEAN_RULES: propositional identities (De Morgan, absorption,
  excluded middle, ...). Operands must be statements or variables.
- ARITHMETIC_RULES: identities with 0 and 1, NaN propagation, logarithm
  identities.
- TRIGONOMETRIC_RULES: inverse cancellation, the Pythagorean identity and
  the double angle formula.
- DERIVATIVE_RULES: collapse an unevaluated derivative once it has a
  closed form.

Rules that cancel an operand (x - x = 0, 0 * x = 0, ...) only fire when the
cancelled operand is finite, since NaN - NaN is not 0.
"""

from __future__ import annotations
from typing import Callable

from .differentiate import differentiate
from .entity import Entity
from .expr import (
    Acos, Acot, Add, Asin, Atan, Cos, Cot, Derivative, Div, Function, Log, Mul,
    Pow, Sin, Sub, Tan, Variable,
)
from .numbers import Integer, Number, Real
from .patterns import ANY, Bind, Bindings, Kind, Literal, Node, Rule, RuleSet
from .statements import And, FALSE, Implies, Not, Or, TRUE, Xor, is_logic


a, b, c = Bind('a'), Bind('b'), Bind('c')

ZERO = Integer.zero()
ONE = Integer.one()
TWO = Integer.create(2)


def _logic(*names: str) -> Callable[[Bindings], bool]:
    """Guard: every named binding is a statement or a variable."""
    return lambda bs: all(is_logic(bs[name]) for name in names)


def _finite(*names: str) -> Callable[[Bindings], bool]:
    """Guard: every named binding is free of NaN and infinities."""
    return lambda bs: all(bs[name].is_finite for name in names)


def _bound(name: str) -> Callable[[Bindings], Entity]:
    return lambda bs: bs[name]


def _constant(value: Entity) -> Callable[[Bindings], Entity]:
    return lambda bs: value


# Boolean rules

_ABSORPTION_OF_NEGATION = [
    # a or (not a and b) = a or b, in every operand order
    Rule(f'or-absorb-negation-{i}', pattern, lambda bs: Or(bs['a'], bs['b']), _logic('a', 'b'))
    for i, pattern in enumerate([
        Node(Or, a, Node(And, Node(Not, a), b)),
        Node(Or, a, Node(And, b, Node(Not, a))),
        Node(Or, Node(And, Node(Not, a), b), a),
        Node(Or, Node(And, b, Node(Not, a)), a),
    ])
] + [
    # a and (not a or b) = a and b, in every operand order
    Rule(f'and-absorb-negation-{i}', pattern, lambda bs: And(bs['a'], bs['b']), _logic('a', 'b'))
    for i, pattern in enumerate([
        Node(And, a, Node(Or, Node(Not, a), b)),
        Node(And, a, Node(Or, b, Node(Not, a))),
        Node(And, Node(Or, Node(Not, a), b), a),
        Node(And, Node(Or, b, Node(Not, a)), a),
    ])
]

_FACTORING = [
    # (a and b) or (a and c) = a and (b or c)
    Rule(f'or-factor-{i}', pattern, lambda bs: And(bs['a'], Or(bs['b'], bs['c'])), _logic('a', 'b', 'c'))
    for i, pattern in enumerate([
        Node(Or, Node(And, a, b), Node(And, a, c)),
        Node(Or, Node(And, b, a), Node(And, a, c)),
        Node(Or, Node(And, a, b), Node(And, c, a)),
        Node(Or, Node(And, b, a), Node(And, c, a)),
    ])
] + [
    # (a or b) and (a or c) = a or (b and c)
    Rule(f'and-factor-{i}', pattern, lambda bs: Or(bs['a'], And(bs['b'], bs['c'])), _logic('a', 'b', 'c'))
    for i, pattern in enumerate([
        Node(And, Node(Or, a, b), Node(Or, a, c)),
        Node(And, Node(Or, b, a), Node(Or, a, c)),
        Node(And, Node(Or, a, b), Node(Or, c, a)),
        Node(And, Node(Or, b, a), Node(Or, c, a)),
    ])
]

BOOLEAN_RULES = RuleSet([
    Rule('implies-from-false', Node(Implies, Literal(FALSE), ANY), _constant(TRUE)),
    Rule('implies-from-true', Node(Implies, Literal(TRUE), a), _bound('a'), _logic('a')),
    Rule('implies-to-true', Node(Implies, ANY, Literal(TRUE)), _constant(TRUE)),
    Rule('or-true', Node(Or, a, b), _constant(TRUE),
         lambda bs: _logic('a', 'b')(bs) and TRUE in (bs['a'], bs['b'])),
    Rule('and-false', Node(And, a, b), _constant(FALSE),
         lambda bs: _logic('a', 'b')(bs) and FALSE in (bs['a'], bs['b'])),
    Rule('and-true-left', Node(And, Literal(TRUE), a), _bound('a'), _logic('a')),
    Rule('and-true-right', Node(And, a, Literal(TRUE)), _bound('a'), _logic('a')),
    Rule('or-false-left', Node(Or, Literal(FALSE), a), _bound('a'), _logic('a')),
    Rule('or-false-right', Node(Or, a, Literal(FALSE)), _bound('a'), _logic('a')),

    Rule('de-morgan-and', Node(And, Node(Not, a), Node(Not, b)),
         lambda bs: Not(Or(bs['a'], bs['b'])), _logic('a', 'b')),
    Rule('de-morgan-or', Node(Or, Node(Not, a), Node(Not, b)),
         lambda bs: Not(And(bs['a'], bs['b'])), _logic('a', 'b')),

    Rule('excluded-middle', Node(Or, Node(Not, a), a), _constant(TRUE), _logic('a')),
    Rule('excluded-middle-commuted', Node(Or, a, Node(Not, a)), _constant(TRUE), _logic('a')),
    Rule('contradiction', Node(And, Node(Not, a), a), _constant(FALSE), _logic('a')),
    Rule('contradiction-commuted', Node(And, a, Node(Not, a)), _constant(FALSE), _logic('a')),

    Rule('or-not-to-implies', Node(Or, Node(Not, a), b),
         lambda bs: Implies(bs['a'], bs['b']), _logic('a', 'b')),

    Rule('and-idempotent', Node(And, a, a), _bound('a'), _logic('a')),
    Rule('or-idempotent', Node(Or, a, a), _bound('a'), _logic('a')),
    Rule('implies-self', Node(Implies, a, a), _constant(TRUE), _logic('a')),
    Rule('xor-self', Node(Xor, a, a), _constant(FALSE), _logic('a')),
    Rule('double-negation', Node(Not, Node(Not, a)), _bound('a'), _logic('a')),

    *_FACTORING,

    Rule('or-absorb', Node(Or, a, Node(And, a, ANY)), _bound('a'), _logic('a')),
    Rule('and-absorb', Node(And, a, Node(Or, a, ANY)), _bound('a'), _logic('a')),

    *_ABSORPTION_OF_NEGATION,

    Rule('contraposition', Node(Implies, Node(Not, a), Node(Not, b)),
         lambda bs: Implies(bs['b'], bs['a']), _logic('a', 'b')),
], name='boolean')


# Arithmetic rules

_ARITHMETIC_KINDS = (Add, Sub, Mul, Div, Pow, Function, Log)


def _has_nan_operand(bs: Bindings) -> bool:
    return any(isinstance(child, Number) and child.is_nan for child in bs['node'].direct_children)


ARITHMETIC_RULES = RuleSet([
    Rule('nan-propagation', Kind(_ARITHMETIC_KINDS), _constant(Real.nan()), _has_nan_operand,
         priority=10, description='An operation on NaN is NaN'),

    Rule('add-zero-left', Node(Add, Literal(ZERO), a), _bound('a')),
    Rule('add-zero-right', Node(Add, a, Literal(ZERO)), _bound('a')),
    Rule('sub-zero', Node(Sub, a, Literal(ZERO)), _bound('a')),
    Rule('sub-self', Node(Sub, a, a), _constant(ZERO), _finite('a')),
    Rule('mul-one-left', Node(Mul, Literal(ONE), a), _bound('a')),
    Rule('mul-one-right', Node(Mul, a, Literal(ONE)), _bound('a')),
    Rule('mul-zero-left', Node(Mul, Literal(ZERO), a), _constant(ZERO), _finite('a')),
    Rule('mul-zero-right', Node(Mul, a, Literal(ZERO)), _constant(ZERO), _finite('a')),
    Rule('div-one', Node(Div, a, Literal(ONE)), _bound('a')),
    Rule('div-zero-numerator', Node(Div, Literal(ZERO), a), _constant(ZERO),
         lambda bs: bs['a'].is_finite and not (isinstance(bs['a'], Number) and bs['a'].is_zero)),
    Rule('div-self', Node(Div, a, a), _constant(ONE), _finite('a')),
    Rule('pow-zero', Node(Pow, a, Literal(ZERO)), _constant(ONE), _finite('a')),
    Rule('pow-one', Node(Pow, a, Literal(ONE)), _bound('a')),
    Rule('one-pow', Node(Pow, Literal(ONE), a), _constant(ONE), _finite('a')),

    Rule('log-self', Node(Log, a, a), _constant(ONE), _finite('a')),
    Rule('log-one', Node(Log, a, Literal(ONE)), _constant(ZERO), _finite('a')),
    Rule('log-of-power', Node(Log, a, Node(Pow, a, b)), _bound('b'), _finite('a')),
    Rule('power-of-log', Node(Pow, a, Node(Log, a, b)), _bound('b'), _finite('a')),
], name='arithmetic')


# Trigonometric rules

def _pythagorean(first, second) -> Node:
    return Node(Add, Node(Pow, Node(first, a), Literal(TWO)), Node(Pow, Node(second, a), Literal(TWO)))


def _double_angle(first, second) -> Node:
    return Node(Mul, Node(Mul, Literal(TWO), Node(first, a)), Node(second, a))


TRIGONOMETRIC_RULES = RuleSet([
    Rule('sin-arcsin', Node(Sin, Node(Asin, a)), _bound('a')),
    Rule('cos-arccos', Node(Cos, Node(Acos, a)), _bound('a')),
    Rule('tan-arctan', Node(Tan, Node(Atan, a)), _bound('a')),
    Rule('cot-arccot', Node(Cot, Node(Acot, a)), _bound('a')),
    Rule('pythagorean', _pythagorean(Sin, Cos), _constant(ONE), _finite('a')),
    Rule('pythagorean-commuted', _pythagorean(Cos, Sin), _constant(ONE), _finite('a')),
    Rule('double-angle', _double_angle(Sin, Cos), lambda bs: Sin(Mul(TWO, bs['a']))),
    Rule('double-angle-commuted', _double_angle(Cos, Sin), lambda bs: Sin(Mul(TWO, bs['a']))),
], name='trigonometric')


# Derivative rules

def _has_closed_form(bs: Bindings) -> bool:
    if not isinstance(bs['v'], Variable):
        return False
    result = differentiate(bs['f'], bs['v'])
    return not any(isinstance(node, Derivative) for node in result.nodes())


DERIVATIVE_RULES = RuleSet([
    Rule('derivative-closed-form', Node(Derivative, Bind('f'), Bind('v')),
         lambda bs: differentiate(bs['f'], bs['v']), _has_closed_form),
], name='derivative')


DEFAULT_RULES = BOOLEAN_RULES + ARITHMETIC_RULES + TRIGONOMETRIC_RULES + DERIVATIVE_RULES
