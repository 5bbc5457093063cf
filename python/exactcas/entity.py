# ExactCAS - Expression Tree Model
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Base class of every expression node.

Every node, expression, or number is an `Entity`. Nodes are immutable; all
transformations (simplification, differentiation, substitution) build new
trees and reuse unchanged sub-trees.

Derived properties (children, size, free variables, ...) are computed on
first access and stored in the identity-keyed side table of `cache.py`.

Example:
    >>> x = var('x')
    >>> expr = x**2 + sin(x)
    >>> expr.complexity
    6
    >>> [str(n) for n in expr.nodes()][:2]
    ['x ^ 2 + sin(x)', 'x ^ 2']
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import fields
from decimal import Decimal
from enum import IntEnum
from fractions import Fraction
from typing import (
    Any, Callable, FrozenSet, Iterator, Mapping, Tuple, Union, TYPE_CHECKING,
)

from .cache import caches
from .exceptions import conversion_error

if TYPE_CHECKING:
    from .expr import Variable


class Priority(IntEnum):
    """Binding strength of a node kind, used for parenthesisation."""
    BOOLEAN_OPERATION = 0x0000
    IMPLICATION = 10 | BOOLEAN_OPERATION
    DISJUNCTION = 30 | BOOLEAN_OPERATION
    CONJUNCTION = 50 | BOOLEAN_OPERATION
    NEGATION = 70 | BOOLEAN_OPERATION

    EQUALITY_SIGNS_OPERATION = 0x1000
    EQUAL = 10 | EQUALITY_SIGNS_OPERATION
    COMPARISON = 20 | EQUALITY_SIGNS_OPERATION

    SET_OPERATION = 0x2000
    CONTAINS_IN = 10 | SET_OPERATION

    NUMERICAL_OPERATION = 0x3000
    SUM = 20 | NUMERICAL_OPERATION
    MUL = 40 | NUMERICAL_OPERATION
    POW = 60 | NUMERICAL_OPERATION
    FACTORIAL = 70 | NUMERICAL_OPERATION
    FUNC = 80 | NUMERICAL_OPERATION
    LEAF = 100 | NUMERICAL_OPERATION


# Type alias for things that can be converted to expressions
EntityLike = Union['Entity', int, bool, float, Fraction, Decimal, complex]


class Entity(ABC):
    """
    Base class for expression nodes.

    Subclasses are frozen dataclasses whose fields are their operands, so
    structural equality and hashing are derived from the fields. A subclass
    with non-entity fields (a leaf) overrides `_init_direct_children`.
    """

    @property
    @abstractmethod
    def priority(self) -> Priority:
        """Binding strength used when rendering."""
        ...

    @abstractmethod
    def stringize(self) -> str:
        """Render as plain text."""
        ...

    @abstractmethod
    def latexise(self) -> str:
        """Render as LaTeX markup."""
        ...

    # Tree structure

    def _init_direct_children(self) -> Tuple[Entity, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    def _rebuild(self, children: Tuple[Entity, ...]) -> Entity:
        """Construct a node of the same kind with new operands."""
        return type(self)(*children)

    @property
    def direct_children(self) -> Tuple[Entity, ...]:
        """Immediate operands in a fixed, kind-defined order (empty for leaves)."""
        return caches.get_value(self, 'direct_children', self._init_direct_children)

    def nodes(self) -> Iterator[Entity]:
        """
        Depth-first pre-order traversal: this node, then each child's nodes.

        Each call returns a fresh generator.
        """
        yield self
        for child in self.direct_children:
            yield from child.nodes()

    def replace(self, func: Callable[[Entity], Entity]) -> Entity:
        """
        Apply `func` to every node starting from the leaves.

        Children are transformed first; this node is rebuilt only if some
        child came back as a different instance, and `func` then receives the
        (possibly rebuilt) node.

        Args:
            func: Takes a node whose children are already transformed and
                  returns its replacement.

        Returns:
            Processed expression
        """
        children = self.direct_children
        if not children:
            return func(self)
        new_children = tuple(child.replace(func) for child in children)
        if all(new is old for new, old in zip(new_children, children)):
            return func(self)
        return func(self._rebuild(new_children))

    def substitute(self, x: EntityLike, value: EntityLike) -> Entity:
        """Replace every sub-tree structurally equal to `x` with `value`."""
        x = _to_entity(x)
        value = _to_entity(value)
        return self._substitute(x, value)

    def _substitute(self, x: Entity, value: Entity) -> Entity:
        if self == x:
            return value
        children = self.direct_children
        if not children:
            return self
        new_children = tuple(child._substitute(x, value) for child in children)
        if all(new is old for new, old in zip(new_children, children)):
            return self
        return self._rebuild(new_children)

    def substitute_all(self, replacements: Mapping[EntityLike, EntityLike]) -> Entity:
        """
        Apply several substitutions one after another, in mapping order.

        Each substitution sees the result of the previous one.
        """
        result: Entity = self
        for x, value in replacements.items():
            result = result.substitute(x, value)
        return result

    # Derived properties

    def _this_is_finite(self) -> bool:
        """Not NaN and not infinity, ignoring children."""
        return True

    @property
    def is_finite(self) -> bool:
        """Whether no NaN or infinity occurs anywhere in this tree."""
        return caches.get_value(
            self, 'is_finite',
            lambda: self._this_is_finite() and all(c.is_finite for c in self.direct_children),
        )

    @property
    def complexity(self) -> int:
        """Number of nodes in the tree."""
        return caches.get_value(
            self, 'complexity',
            lambda: 1 + sum(c.complexity for c in self.direct_children),
        )

    def _init_vars_and_consts(self) -> FrozenSet[Variable]:
        result: FrozenSet[Variable] = frozenset()
        for child in self.direct_children:
            result = result | child.vars_and_consts
        return result

    @property
    def vars_and_consts(self) -> FrozenSet[Variable]:
        """
        Unique variables, including mathematical constants such as pi and e.

        For (x + 2 * goose) - pi * x this is {x, goose, pi}.
        """
        return caches.get_value(self, 'vars_and_consts', self._init_vars_and_consts)

    @property
    def vars(self) -> FrozenSet[Variable]:
        """Unique variables, excluding mathematical constants."""
        return frozenset(v for v in self.vars_and_consts if not v.is_constant)

    def free_vars(self) -> FrozenSet[str]:
        """Return all variable names used in this expression."""
        return frozenset(v.name for v in self.vars)

    def contains_node(self, x: EntityLike) -> bool:
        """Check if `x` is a sub-tree of this expression. Fast for variables."""
        from .expr import Variable

        x = _to_entity(x)
        if isinstance(x, Variable):
            return x in self.vars_and_consts
        return any(node == x for node in self.nodes())

    @property
    def simplified_rate(self) -> int:
        """
        How convenient the expression is to read; lower is simpler.

        Unlike `complexity`, which counts nodes, this is scored by the
        configurable `Settings.complexity_criteria`.
        """
        from .criteria import score

        return caches.get_value(self, 'simplified_rate', lambda: score(self))

    # Engine entry points

    @property
    def evaled(self) -> Entity:
        """This expression with every constant sub-expression folded."""
        from .evaluation import evaluate

        return evaluate(self)

    def simplify(self, level: int | None = None) -> Entity:
        """Simplify, running at most `level` rewrite passes."""
        from .simplify import simplify

        return simplify(self, level=level)

    def differentiate(self, var: Union[str, Variable]) -> Entity:
        """Derivative with respect to `var`, not yet simplified."""
        from .differentiate import differentiate

        return differentiate(self, var)

    # Rendering

    def _wrap(self, child: Entity, strict: bool = False) -> str:
        """Child text, parenthesised when it binds weaker than this node."""
        text = child.stringize()
        if child.priority < self.priority or (strict and child.priority == self.priority):
            return f"({text})"
        return text

    def _wrap_latex(self, child: Entity, strict: bool = False) -> str:
        text = child.latexise()
        if child.priority < self.priority or (strict and child.priority == self.priority):
            return rf"\left({text}\right)"
        return text

    def __str__(self) -> str:
        return self.stringize()

    def __repr__(self) -> str:
        return self.stringize()

    # Operator overloading for natural math syntax

    def __neg__(self) -> Entity:
        from .expr import Mul
        from .numbers import Integer

        return Mul(Integer.minus_one(), self)

    def __pos__(self) -> Entity:
        return self

    def __add__(self, other: EntityLike) -> Entity:
        from .expr import Add
        return Add(self, _to_entity(other))

    def __radd__(self, other: EntityLike) -> Entity:
        from .expr import Add
        return Add(_to_entity(other), self)

    def __sub__(self, other: EntityLike) -> Entity:
        from .expr import Sub
        return Sub(self, _to_entity(other))

    def __rsub__(self, other: EntityLike) -> Entity:
        from .expr import Sub
        return Sub(_to_entity(other), self)

    def __mul__(self, other: EntityLike) -> Entity:
        from .expr import Mul
        return Mul(self, _to_entity(other))

    def __rmul__(self, other: EntityLike) -> Entity:
        from .expr import Mul
        return Mul(_to_entity(other), self)

    def __truediv__(self, other: EntityLike) -> Entity:
        from .expr import Div
        return Div(self, _to_entity(other))

    def __rtruediv__(self, other: EntityLike) -> Entity:
        from .expr import Div
        return Div(_to_entity(other), self)

    def __pow__(self, other: EntityLike) -> Entity:
        from .expr import Pow
        return Pow(self, _to_entity(other))

    def __rpow__(self, other: EntityLike) -> Entity:
        from .expr import Pow
        return Pow(_to_entity(other), self)

    def __invert__(self) -> Entity:
        from .statements import Not
        return Not(self)

    def __and__(self, other: EntityLike) -> Entity:
        from .statements import And
        return And(self, _to_entity(other))

    def __rand__(self, other: EntityLike) -> Entity:
        from .statements import And
        return And(_to_entity(other), self)

    def __or__(self, other: EntityLike) -> Entity:
        from .statements import Or
        return Or(self, _to_entity(other))

    def __ror__(self, other: EntityLike) -> Entity:
        from .statements import Or
        return Or(_to_entity(other), self)

    def __xor__(self, other: EntityLike) -> Entity:
        from .statements import Xor
        return Xor(self, _to_entity(other))

    def __rxor__(self, other: EntityLike) -> Entity:
        from .statements import Xor
        return Xor(_to_entity(other), self)

    def implies(self, other: EntityLike) -> Entity:
        """Build `self -> other`."""
        from .statements import Implies
        return Implies(self, _to_entity(other))


def _to_entity(x: Any) -> Entity:
    """Convert a value to an Entity."""
    if isinstance(x, Entity):
        return x
    if isinstance(x, bool):
        from .statements import Boolean
        return Boolean.create(x)
    if isinstance(x, (int, float, Fraction, Decimal, complex)):
        from .numbers import number
        return number(x)
    raise conversion_error(x)
