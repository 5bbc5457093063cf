# ExactCAS - Simplicity Criteria
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Scoring of expressions for the simplifier; lower scores are simpler.

The default criterion is a weighted node count. Operators that read worse
than their alternatives (subtraction, division, powers, named functions)
weigh more, and so do negative and non-integer numbers.

A custom criterion is any callable from Entity to int, installed through
`Settings.complexity_criteria`.
"""

from __future__ import annotations
from typing import Callable

from .config import get_settings
from .entity import Entity
from .expr import Add, Derivative, Div, Function, Log, Mul, Pow, Sub, Variable
from .numbers import Number


Criteria = Callable[[Entity], int]


def _weight(node: Entity) -> int:
    if isinstance(node, Number):
        weight = 1
        if node.is_negative:
            weight += 1
        if not node.is_integer:
            weight += 1
        return weight
    if isinstance(node, (Variable, Add, Mul)):
        return 1
    if isinstance(node, (Sub, Div, Pow, Function, Log, Derivative)):
        return 2
    return 1


def default_complexity_criteria(expr: Entity) -> int:
    """Weighted node count of `expr`."""
    return sum(_weight(node) for node in expr.nodes())


def score(expr: Entity) -> int:
    """Score `expr` with the configured criteria."""
    criteria = get_settings().complexity_criteria or default_complexity_criteria
    return criteria(expr)
