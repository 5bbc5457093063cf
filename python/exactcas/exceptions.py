# ExactCAS - Exceptions
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""Exception hierarchy for ExactCAS."""

from __future__ import annotations
from typing import Optional


# Python types that convert implicitly to expression nodes
CONVERTIBLE_TYPES = ['int', 'bool', 'Fraction', 'Decimal', 'float', 'complex']


class ExactCasError(Exception):
    """Base class for all ExactCAS exceptions."""
    pass


class ParseError(ExactCasError):
    """Raised when a literal cannot be parsed and the caller asked for a hard failure."""

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text


class InvariantError(ExactCasError):
    """
    Raised when the engine reaches an internally inconsistent state.

    This always indicates a bug in ExactCAS itself, never bad user input.
    """
    pass


class DomainError(ExactCasError):
    """Raised when an operation is used outside of its mathematical domain."""
    pass


class ExpressionError(ExactCasError, TypeError):
    """Raised when a value cannot be used as an expression."""

    def __init__(
        self,
        message: str,
        value_type: Optional[str] = None,
        suggestion: Optional[str] = None,
    ):
        full_message = message
        if suggestion:
            full_message += f"\n  Suggestion: {suggestion}"
        super().__init__(full_message)
        self.value_type = value_type
        self.suggestion = suggestion


def _get_suggestion_for_type(type_name: str) -> Optional[str]:
    """Get a helpful suggestion for a value that is not convertible."""
    suggestions = {
        'str': "Text is not parsed by the core. Use var('x') for variables "
               "or Integer.try_parse / Real.try_parse for numerals.",
        'list': "Expressions are trees, not sequences. Combine nodes with operators.",
        'tuple': "Expressions are trees, not sequences. Combine nodes with operators.",
        'NoneType': "None is not a value. Did a function return nothing?",
    }
    return suggestions.get(type_name)


def conversion_error(value: object) -> ExpressionError:
    """Build the error raised when `value` cannot become an expression node."""
    type_name = type(value).__name__
    return ExpressionError(
        f"Cannot convert {type_name} to Entity "
        f"(supported: {', '.join(CONVERTIBLE_TYPES)})",
        value_type=type_name,
        suggestion=_get_suggestion_for_type(type_name),
    )
