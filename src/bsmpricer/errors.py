"""Typed failures raised by the pricer.

Callers can catch ``PricingError`` for either kind, or the builtin bases
(``ValueError`` / ``ArithmeticError``) when they do not care about the
package types.
"""

from __future__ import annotations

__all__ = ["PricingError", "ValidationError", "DomainError"]


class PricingError(Exception):
    """Base class for everything the pricer raises on purpose."""

    def __init__(self, field: str, value, message: str):
        super().__init__(message)
        self.field = field
        self.value = value


class ValidationError(PricingError, ValueError):
    """An input field is outside its domain (e.g. ``spot <= 0``)."""

    def __init__(self, field: str, value, constraint: str):
        super().__init__(field, value, f"{field} must be {constraint}, got {value!r}")
        self.constraint = constraint


class DomainError(PricingError, ArithmeticError):
    """A non-finite number showed up in an intermediate computation."""

    def __init__(self, field: str, value):
        super().__init__(field, value, f"{field} is not finite ({value!r})")
