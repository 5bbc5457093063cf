# ExactCAS - Configuration
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Configuration settings for ExactCAS.

Settings are read by the numeric tower (downcasting) and by the rewrite
engine (pass ceiling, simplicity scoring). There is one process-wide default,
which can be replaced with `set_settings` or overridden for a block:

    >>> from exactcas.config import using
    >>> with using(downcasting_enabled=False):
    ...     Real.create(Decimal('10.0'))   # stays a Real

Entry points that accept a ``settings=`` argument use it instead of the
current default. Changing settings while a simplification is running in
another thread is the caller's responsibility.
"""

from __future__ import annotations
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Iterator, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .entity import Entity


@dataclass(frozen=True)
class Settings:
    """
    Configuration for the numeric tower and the rewrite engine.

    Attributes:
        downcasting_enabled: Narrow numbers to the most specific exact type
                             (Real -> Rational -> Integer) on construction.
        precision_error_zero_range: Distance to an integer below which a Real
                                    is considered to be that integer. Also the
                                    tolerance of rational reconstruction.
        max_abs_numerator_or_denominator: Largest numerator or denominator a
                                          reconstructed Rational may have.
        decimal_precision: Significant digits of Real arithmetic.
        simplify_passes: Default ceiling of bottom-up simplification passes.
        complexity_criteria: Scores an expression, lower is simpler. None
                             selects the built-in weighted node count.
    """
    downcasting_enabled: bool = True
    precision_error_zero_range: Decimal = Decimal('1e-16')
    max_abs_numerator_or_denominator: int = 100_000_000
    decimal_precision: int = 100
    simplify_passes: int = 10
    complexity_criteria: Optional[Callable[['Entity'], int]] = None

    def __post_init__(self):
        # Convert epsilon to Decimal if given as float or str
        if not isinstance(self.precision_error_zero_range, Decimal):
            object.__setattr__(
                self, 'precision_error_zero_range',
                Decimal(str(self.precision_error_zero_range)),
            )
        if self.decimal_precision < 1:
            raise ValueError(f"decimal_precision must be positive, got {self.decimal_precision}")
        if self.simplify_passes < 1:
            raise ValueError(f"simplify_passes must be positive, got {self.simplify_passes}")
        if self.max_abs_numerator_or_denominator < 1:
            raise ValueError(
                "max_abs_numerator_or_denominator must be positive, "
                f"got {self.max_abs_numerator_or_denominator}"
            )

    @classmethod
    def default(cls) -> Settings:
        """Downcasting on, 100 digit reals."""
        return cls()

    @classmethod
    def exact(cls) -> Settings:
        """Keep every number in the variant it was requested as."""
        return cls(downcasting_enabled=False)

    @classmethod
    def thorough(cls) -> Settings:
        """More simplification passes and wider real precision."""
        return cls(decimal_precision=200, simplify_passes=30)

    def with_changes(self, **changes) -> Settings:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def __repr__(self) -> str:
        return (
            f"Settings(downcasting_enabled={self.downcasting_enabled}, "
            f"precision_error_zero_range={self.precision_error_zero_range}, "
            f"max_abs_numerator_or_denominator={self.max_abs_numerator_or_denominator}, "
            f"decimal_precision={self.decimal_precision}, "
            f"simplify_passes={self.simplify_passes})"
        )


_default = Settings()

# Block-scoped overrides installed by `using`; None means the process default
_current: ContextVar[Optional[Settings]] = ContextVar('exactcas_settings', default=None)


def get_settings() -> Settings:
    """Return the settings in effect for the current context."""
    scoped = _current.get()
    return scoped if scoped is not None else _default


def set_settings(settings: Settings) -> None:
    """Replace the process-wide default settings."""
    global _default
    if not isinstance(settings, Settings):
        raise TypeError(f"Expected Settings, got {type(settings).__name__}")
    _default = settings


def resolve(settings: Optional[Settings]) -> Settings:
    """Return `settings` if given, otherwise the current default."""
    return settings if settings is not None else get_settings()


@contextmanager
def using(settings: Optional[Settings] = None, **overrides) -> Iterator[Settings]:
    """
    Temporarily change the settings for the enclosed block.

    Args:
        settings: Settings to install. Defaults to the current settings.
        **overrides: Individual fields to replace.

    Yields:
        The settings in effect inside the block.
    """
    base = resolve(settings)
    active = base.with_changes(**overrides) if overrides else base
    token = _current.set(active)
    try:
        yield active
    finally:
        _current.reset(token)
