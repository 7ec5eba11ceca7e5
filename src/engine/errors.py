"""Error taxonomy for the credit engine.

Every calculation either returns a complete result or raises one of these.
"""

from typing import Any


class CreditEngineError(Exception):
    """Base class for credit engine failures.

    Attributes:
        message: Human-readable description
        context: Values that explain the failure (parameter names, rates, ...)
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidParameterError(CreditEngineError, ValueError):
    """Loan parameters that cannot produce a meaningful schedule."""


class NumericalDegeneracyError(CreditEngineError, ArithmeticError):
    """A computation hit a zero divisor, overflowed or produced a non-finite value."""


class NonConvergenceError(CreditEngineError):
    """The IRR solver ran out of iterations. Only raised in strict mode."""

    def __init__(self, message: str, estimate, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, context)
        self.estimate = estimate
