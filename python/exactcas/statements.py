# ExactCAS - Statements
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Boolean statements: truth values, logical connectives, comparisons and
set membership.

Example:
    >>> a, b = var('a'), var('b')
    >>> print(~(a & b) | TRUE)
    not (a and b) or true
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from .entity import Entity, EntityLike, Priority, _to_entity
from .exceptions import ParseError


class Statement(Entity):
    """Base class of every node whose value is a truth value."""
    pass


@dataclass(frozen=True, repr=False)
class Boolean(Statement):
    """The truth values. Use `Boolean.create`, `TRUE` or `FALSE`."""
    value: bool

    priority = Priority.LEAF

    @classmethod
    def create(cls, value: bool) -> Boolean:
        return TRUE if value else FALSE

    @classmethod
    def try_parse(cls, text: str) -> Tuple[bool, Optional[Boolean]]:
        """
        Parse 'true' or 'false', ignoring case and surrounding whitespace.

        Returns:
            (True, boolean) on success, (False, None) otherwise.
        """
        if not isinstance(text, str):
            return False, None
        lowered = text.strip().lower()
        if lowered == 'true':
            return True, TRUE
        if lowered == 'false':
            return True, FALSE
        return False, None

    @classmethod
    def parse(cls, text: str) -> Boolean:
        ok, value = cls.try_parse(text)
        if not ok:
            raise ParseError(f"Invalid boolean literal: {text!r}", text=text)
        return value

    def _init_direct_children(self) -> Tuple[Entity, ...]:
        return ()

    def __bool__(self) -> bool:
        return self.value

    def stringize(self) -> str:
        return 'true' if self.value else 'false'

    def latexise(self) -> str:
        return r'\top' if self.value else r'\bot'


TRUE = Boolean(True)
FALSE = Boolean(False)


# Connectives

@dataclass(frozen=True, repr=False)
class Not(Statement):
    """Negation: not argument."""
    argument: Entity

    priority = Priority.NEGATION

    def stringize(self) -> str:
        return f"not {self._wrap(self.argument, strict=True)}"

    def latexise(self) -> str:
        return rf"\neg{{{self._wrap_latex(self.argument, strict=True)}}}"


class _Binary(Statement):
    """Infix statement rendered as `left op right`."""

    symbol = ''
    latex_symbol = ''

    def stringize(self) -> str:
        return f"{self._wrap(self.left)} {self.symbol} {self._wrap(self.right, strict=True)}"

    def latexise(self) -> str:
        return (
            f"{self._wrap_latex(self.left)} {self.latex_symbol} "
            f"{self._wrap_latex(self.right, strict=True)}"
        )


@dataclass(frozen=True, repr=False)
class And(_Binary):
    """Conjunction."""
    left: Entity
    right: Entity

    priority = Priority.CONJUNCTION
    symbol = 'and'
    latex_symbol = r'\land'


@dataclass(frozen=True, repr=False)
class Or(_Binary):
    """Disjunction."""
    left: Entity
    right: Entity

    priority = Priority.DISJUNCTION
    symbol = 'or'
    latex_symbol = r'\lor'


@dataclass(frozen=True, repr=False)
class Xor(_Binary):
    """Exclusive disjunction."""
    left: Entity
    right: Entity

    priority = Priority.DISJUNCTION
    symbol = 'xor'
    latex_symbol = r'\oplus'


@dataclass(frozen=True, repr=False)
class Implies(Statement):
    """Material implication: assumption -> conclusion."""
    assumption: Entity
    conclusion: Entity

    priority = Priority.IMPLICATION

    def stringize(self) -> str:
        return (
            f"{self._wrap(self.assumption, strict=True)} implies "
            f"{self._wrap(self.conclusion)}"
        )

    def latexise(self) -> str:
        return (
            rf"{self._wrap_latex(self.assumption, strict=True)} \implies "
            f"{self._wrap_latex(self.conclusion)}"
        )


# Comparisons

@dataclass(frozen=True, repr=False)
class Equals(_Binary):
    left: Entity
    right: Entity

    priority = Priority.EQUAL
    symbol = '='
    latex_symbol = '='


@dataclass(frozen=True, repr=False)
class Greater(_Binary):
    left: Entity
    right: Entity

    priority = Priority.COMPARISON
    symbol = '>'
    latex_symbol = '>'


@dataclass(frozen=True, repr=False)
class GreaterOrEqual(_Binary):
    left: Entity
    right: Entity

    priority = Priority.COMPARISON
    symbol = '>='
    latex_symbol = r'\geq'


@dataclass(frozen=True, repr=False)
class Less(_Binary):
    left: Entity
    right: Entity

    priority = Priority.COMPARISON
    symbol = '<'
    latex_symbol = '<'


@dataclass(frozen=True, repr=False)
class LessOrEqual(_Binary):
    left: Entity
    right: Entity

    priority = Priority.COMPARISON
    symbol = '<='
    latex_symbol = r'\leq'


# Sets

@dataclass(frozen=True, repr=False)
class SpecialSet(Entity):
    """
    One of the number sets Z, Q, R, C.

    Membership follows the numeric tower: an Integer is in all four, a
    Rational in Q, R and C, a Real in R and C, a Complex in C.
    """
    name: str

    priority = Priority.LEAF

    _LATEX = {'Z': r'\mathbb{Z}', 'Q': r'\mathbb{Q}', 'R': r'\mathbb{R}', 'C': r'\mathbb{C}'}

    def __post_init__(self):
        if self.name not in self._LATEX:
            raise ValueError(f"Unknown special set {self.name!r}, expected one of Z, Q, R, C")

    def _init_direct_children(self) -> Tuple[Entity, ...]:
        return ()

    def stringize(self) -> str:
        return self.name * 2

    def latexise(self) -> str:
        return self._LATEX[self.name]


INTEGERS = SpecialSet('Z')
RATIONALS = SpecialSet('Q')
REALS = SpecialSet('R')
COMPLEXES = SpecialSet('C')


@dataclass(frozen=True, repr=False)
class In(Statement):
    """Set membership: element in superset."""
    element: Entity
    superset: Entity

    priority = Priority.CONTAINS_IN

    def stringize(self) -> str:
        return f"{self._wrap(self.element, strict=True)} in {self._wrap(self.superset, strict=True)}"

    def latexise(self) -> str:
        return (
            rf"{self._wrap_latex(self.element, strict=True)} \in "
            f"{self._wrap_latex(self.superset, strict=True)}"
        )


# Public constructors

def boolean(value: bool) -> Boolean:
    return Boolean.create(value)


def equals(a: EntityLike, b: EntityLike) -> Equals:
    """Equation a = b."""
    return Equals(_to_entity(a), _to_entity(b))


def greater(a: EntityLike, b: EntityLike) -> Greater:
    return Greater(_to_entity(a), _to_entity(b))


def greater_or_equal(a: EntityLike, b: EntityLike) -> GreaterOrEqual:
    return GreaterOrEqual(_to_entity(a), _to_entity(b))


def less(a: EntityLike, b: EntityLike) -> Less:
    return Less(_to_entity(a), _to_entity(b))


def less_or_equal(a: EntityLike, b: EntityLike) -> LessOrEqual:
    return LessOrEqual(_to_entity(a), _to_entity(b))


def element_of(element: EntityLike, superset: Entity) -> In:
    """Membership statement `element in superset`."""
    return In(_to_entity(element), superset)


def is_logic(entity: Entity) -> bool:
    """Whether `entity` can stand where a truth value is expected."""
    from .expr import Variable

    return isinstance(entity, (Statement, Variable))
