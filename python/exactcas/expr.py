# ExactCAS - Expression Nodes
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Symbolic expression nodes: variables, arithmetic, functions and derivatives.

Nodes are frozen dataclasses whose fields are their operands, in the order
they are listed by `direct_children`. Expressions support natural Python
math syntax; numeric operands are converted to numbers of the tower.

Example:
    >>> x = var('x')
    >>> y = var('y')
    >>> expr = x**2 + sin(y)
    >>> expr.free_vars()
    frozenset({'x', 'y'})
    >>> print(expr.latexise())
    {x}^{2} + \\sin\\left(y\\right)
"""

from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import FrozenSet, Tuple, Union

from .entity import Entity, EntityLike, Priority, _to_entity
from .numbers import Integer, Number, Rational, number


# Names that denote mathematical constants rather than unknowns
CONSTANT_NAMES = frozenset({'e', 'pi'})


@dataclass(frozen=True, repr=False)
class Variable(Entity):
    """A symbolic variable with a name. The names 'e' and 'pi' are constants."""
    name: str

    priority = Priority.LEAF

    def _init_direct_children(self) -> Tuple[Entity, ...]:
        return ()

    def _init_vars_and_consts(self) -> FrozenSet[Variable]:
        return frozenset({self})

    @property
    def is_constant(self) -> bool:
        return self.name in CONSTANT_NAMES

    def stringize(self) -> str:
        return self.name

    def latexise(self) -> str:
        if self.name == 'pi':
            return r'\pi'
        return self.name


E = Variable('e')
PI = Variable('pi')


# Binary operations

@dataclass(frozen=True, repr=False)
class Add(Entity):
    """Addition: left + right."""
    left: Entity
    right: Entity

    priority = Priority.SUM

    def stringize(self) -> str:
        return f"{self._wrap(self.left)} + {self._wrap(self.right)}"

    def latexise(self) -> str:
        return f"{self._wrap_latex(self.left)} + {self._wrap_latex(self.right)}"


@dataclass(frozen=True, repr=False)
class Sub(Entity):
    """Subtraction: left - right."""
    left: Entity
    right: Entity

    priority = Priority.SUM

    def stringize(self) -> str:
        return f"{self._wrap(self.left)} - {self._wrap(self.right, strict=True)}"

    def latexise(self) -> str:
        return f"{self._wrap_latex(self.left)} - {self._wrap_latex(self.right, strict=True)}"


@dataclass(frozen=True, repr=False)
class Mul(Entity):
    """Multiplication: left * right."""
    left: Entity
    right: Entity

    priority = Priority.MUL

    def stringize(self) -> str:
        return f"{self._wrap(self.left)} * {self._wrap(self.right)}"

    def latexise(self) -> str:
        return rf"{self._wrap_latex(self.left)} \cdot {self._wrap_latex(self.right)}"


@dataclass(frozen=True, repr=False)
class Div(Entity):
    """Division: left / right."""
    left: Entity
    right: Entity

    priority = Priority.MUL

    def stringize(self) -> str:
        return f"{self._wrap(self.left)} / {self._wrap(self.right, strict=True)}"

    def latexise(self) -> str:
        return rf"\frac{{{self.left.latexise()}}}{{{self.right.latexise()}}}"


@dataclass(frozen=True, repr=False)
class Pow(Entity):
    """Power: base ^ exponent."""
    base: Entity
    exponent: Entity

    priority = Priority.POW

    def stringize(self) -> str:
        return f"{self._wrap(self.base, strict=True)} ^ {self._wrap(self.exponent)}"

    def latexise(self) -> str:
        return f"{{{self._wrap_latex(self.base, strict=True)}}}^{{{self.exponent.latexise()}}}"


# Functions

class Function(Entity):
    """A named function of a single argument, rendered as name(argument)."""

    label = ''
    latex_label = ''
    priority = Priority.FUNC

    def stringize(self) -> str:
        return f"{self.label}({self.argument.stringize()})"

    def latexise(self) -> str:
        return rf"{self.latex_label}\left({self.argument.latexise()}\right)"


@dataclass(frozen=True, repr=False)
class Sin(Function):
    """Sine."""
    argument: Entity

    label = 'sin'
    latex_label = r'\sin'


@dataclass(frozen=True, repr=False)
class Cos(Function):
    """Cosine."""
    argument: Entity

    label = 'cos'
    latex_label = r'\cos'


@dataclass(frozen=True, repr=False)
class Tan(Function):
    """Tangent."""
    argument: Entity

    label = 'tan'
    latex_label = r'\tan'


@dataclass(frozen=True, repr=False)
class Cot(Function):
    """Cotangent."""
    argument: Entity

    label = 'cot'
    latex_label = r'\cot'


@dataclass(frozen=True, repr=False)
class Asin(Function):
    """Arcsine."""
    argument: Entity

    label = 'arcsin'
    latex_label = r'\arcsin'


@dataclass(frozen=True, repr=False)
class Acos(Function):
    """Arccosine."""
    argument: Entity

    label = 'arccos'
    latex_label = r'\arccos'


@dataclass(frozen=True, repr=False)
class Atan(Function):
    """Arctangent."""
    argument: Entity

    label = 'arctan'
    latex_label = r'\arctan'


@dataclass(frozen=True, repr=False)
class Acot(Function):
    """Arccotangent."""
    argument: Entity

    label = 'arccot'
    latex_label = r'\operatorname{arccot}'


@dataclass(frozen=True, repr=False)
class Abs(Function):
    """Absolute value: |argument|."""
    argument: Entity

    label = 'abs'

    def latexise(self) -> str:
        return rf"\left|{self.argument.latexise()}\right|"


@dataclass(frozen=True, repr=False)
class Signum(Function):
    """Sign of a real argument: -1, 0 or 1."""
    argument: Entity

    label = 'sgn'
    latex_label = r'\operatorname{sgn}'


@dataclass(frozen=True, repr=False)
class Log(Entity):
    """
    Logarithm of `argument` to `base`.

    The natural logarithm is Log(e, argument), rendered as ln(argument).
    """
    base: Entity
    argument: Entity

    priority = Priority.FUNC

    def stringize(self) -> str:
        if self.base == E:
            return f"ln({self.argument.stringize()})"
        return f"log({self.base.stringize()}, {self.argument.stringize()})"

    def latexise(self) -> str:
        if self.base == E:
            return rf"\ln\left({self.argument.latexise()}\right)"
        return rf"\log_{{{self.base.latexise()}}}\left({self.argument.latexise()}\right)"


@dataclass(frozen=True, repr=False)
class Factorial(Entity):
    """Factorial: argument!"""
    argument: Entity

    priority = Priority.FACTORIAL

    def stringize(self) -> str:
        return f"{self._wrap(self.argument, strict=True)}!"

    def latexise(self) -> str:
        return f"{self._wrap_latex(self.argument, strict=True)}!"


@dataclass(frozen=True, repr=False)
class Derivative(Entity):
    """
    Unevaluated derivative of `expression` with respect to `var`.

    Produced by differentiation where no closed-form rule applies, and
    collapsed by simplification once one does.
    """
    expression: Entity
    var: Entity

    priority = Priority.FUNC

    def stringize(self) -> str:
        return f"derivative({self.expression.stringize()}, {self.var.stringize()})"

    def latexise(self) -> str:
        return rf"\frac{{d}}{{d{self.var.latexise()}}}\left[{self.expression.latexise()}\right]"


# Public constructors

def var(name: str) -> Variable:
    """Create a symbolic variable with the given name."""
    if not isinstance(name, str):
        raise TypeError(f"Variable name must be a string, got {type(name).__name__}")
    if not name:
        raise ValueError("Variable name cannot be empty")
    return Variable(name)


def const(value: Union[int, float, Fraction, complex]) -> Number:
    """Create a number of the tower from a Python number."""
    return number(value)


# Function constructors

def sin(e: EntityLike) -> Sin:
    """Sine function."""
    return Sin(_to_entity(e))


def cos(e: EntityLike) -> Cos:
    """Cosine function."""
    return Cos(_to_entity(e))


def tan(e: EntityLike) -> Tan:
    """Tangent function."""
    return Tan(_to_entity(e))


def cot(e: EntityLike) -> Cot:
    """Cotangent function."""
    return Cot(_to_entity(e))


def asin(e: EntityLike) -> Asin:
    return Asin(_to_entity(e))


def acos(e: EntityLike) -> Acos:
    return Acos(_to_entity(e))


def atan(e: EntityLike) -> Atan:
    return Atan(_to_entity(e))


def acot(e: EntityLike) -> Acot:
    return Acot(_to_entity(e))


def log(e: EntityLike, base: EntityLike = E) -> Log:
    """Logarithm to `base`, natural by default."""
    return Log(_to_entity(base), _to_entity(e))


def ln(e: EntityLike) -> Log:
    """Natural logarithm."""
    return Log(E, _to_entity(e))


def exp(e: EntityLike) -> Pow:
    """Exponential function, e ^ e."""
    return Pow(E, _to_entity(e))


def sqrt(e: EntityLike) -> Pow:
    """Square root, as a power with exponent 1/2."""
    return Pow(_to_entity(e), Rational.create(1, 2))


def sqr(e: EntityLike) -> Pow:
    """Square, as a power with exponent 2."""
    return Pow(_to_entity(e), Integer.create(2))


def abs_(e: EntityLike) -> Abs:
    """Absolute value."""
    return Abs(_to_entity(e))


# Alias for abs to avoid shadowing builtin
abs = abs_


def signum(e: EntityLike) -> Signum:
    """Sign function."""
    return Signum(_to_entity(e))


def factorial(e: EntityLike) -> Factorial:
    return Factorial(_to_entity(e))


def derivative(e: EntityLike, variable: Union[str, Variable]) -> Derivative:
    """Unevaluated derivative node; see `Entity.differentiate` to compute one."""
    if isinstance(variable, str):
        variable = var(variable)
    return Derivative(_to_entity(e), variable)
