# ExactCAS
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
ExactCAS - Exact Symbolic Mathematics.

This package provides immutable expression trees over an exact numeric
tower, a rule-based simplifier and symbolic differentiation.

Example:
    >>> import exactcas as ec
    >>> x = ec.var('x')
    >>> ec.simplify((x ** 2 + 2 * x + 1).differentiate(x))
    2 * x + 2
    >>> ec.Integer.create(1) / ec.Integer.create(3)
    1/3

Key Features:
    - Integer, Rational, Real (arbitrary precision) and Complex numbers
      with automatic narrowing to the most exact variant
    - Structural equality and cached tree properties
    - Boolean statements simplified with propositional identities
    - Derivatives of elementary functions
"""

__version__ = "0.1.0"

# Core expression types
from .entity import Entity, Priority

# Numeric tower
from .numbers import (
    Number,
    Complex,
    Real,
    Rational,
    Integer,
    number,
)

# Expression nodes and constructors
from .expr import (
    Variable,
    Add,
    Sub,
    Mul,
    Div,
    Pow,
    Function,
    Sin,
    Cos,
    Tan,
    Cot,
    Asin,
    Acos,
    Atan,
    Acot,
    Log,
    Abs,
    Signum,
    Factorial,
    Derivative,
    E,
    PI,
    var,
    const,
    sin,
    cos,
    tan,
    cot,
    asin,
    acos,
    atan,
    acot,
    log,
    ln,
    exp,
    sqrt,
    sqr,
    abs,
    signum,
    factorial,
    derivative,
)

# Statements
from .statements import (
    Statement,
    Boolean,
    Not,
    And,
    Or,
    Xor,
    Implies,
    Equals,
    Greater,
    GreaterOrEqual,
    Less,
    LessOrEqual,
    In,
    SpecialSet,
    TRUE,
    FALSE,
    INTEGERS,
    RATIONALS,
    REALS,
    COMPLEXES,
    boolean,
    equals,
    greater,
    greater_or_equal,
    less,
    less_or_equal,
    element_of,
)

# Configuration
from .config import Settings, get_settings, set_settings, using

# Engines
from .evaluation import evaluate
from .simplify import simplify, expand
from .differentiate import differentiate
from .patterns import Rule, RuleSet, Bindings, NoMatch
from .rules import (
    BOOLEAN_RULES,
    ARITHMETIC_RULES,
    TRIGONOMETRIC_RULES,
    DERIVATIVE_RULES,
    DEFAULT_RULES,
)
from .criteria import default_complexity_criteria

# Exceptions
from .exceptions import (
    ExactCasError,
    ParseError,
    InvariantError,
    DomainError,
    ExpressionError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Entity",
    "Priority",
    # Numbers
    "Number",
    "Complex",
    "Real",
    "Rational",
    "Integer",
    "number",
    # Nodes
    "Variable",
    "Add",
    "Sub",
    "Mul",
    "Div",
    "Pow",
    "Function",
    "Sin",
    "Cos",
    "Tan",
    "Cot",
    "Asin",
    "Acos",
    "Atan",
    "Acot",
    "Log",
    "Abs",
    "Signum",
    "Factorial",
    "Derivative",
    "E",
    "PI",
    # Constructors
    "var",
    "const",
    "sin",
    "cos",
    "tan",
    "cot",
    "asin",
    "acos",
    "atan",
    "acot",
    "log",
    "ln",
    "exp",
    "sqrt",
    "sqr",
    "abs",
    "signum",
    "factorial",
    "derivative",
    # Statements
    "Statement",
    "Boolean",
    "Not",
    "And",
    "Or",
    "Xor",
    "Implies",
    "Equals",
    "Greater",
    "GreaterOrEqual",
    "Less",
    "LessOrEqual",
    "In",
    "SpecialSet",
    "TRUE",
    "FALSE",
    "INTEGERS",
    "RATIONALS",
    "REALS",
    "COMPLEXES",
    "boolean",
    "equals",
    "greater",
    "greater_or_equal",
    "less",
    "less_or_equal",
    "element_of",
    # Configuration
    "Settings",
    "get_settings",
    "set_settings",
    "using",
    # Engines
    "evaluate",
    "simplify",
    "expand",
    "differentiate",
    "Rule",
    "RuleSet",
    "Bindings",
    "NoMatch",
    "BOOLEAN_RULES",
    "ARITHMETIC_RULES",
    "TRIGONOMETRIC_RULES",
    "DERIVATIVE_RULES",
    "DEFAULT_RULES",
    "default_complexity_criteria",
    # Exceptions
    "ExactCasError",
    "ParseError",
    "InvariantError",
    "DomainError",
    "ExpressionError",
]
