"""Module for all polyexpr exceptions."""


class PolyExprError(Exception):
    """Superclass for all polyexpr exceptions."""

    pass


class InvalidExpressionError(PolyExprError, ValueError):
    """Raised when text cannot be parsed as an expression."""

    pass


class InvalidVariableError(InvalidExpressionError):
    """Raised when a differentiation variable is not a valid name."""

    pass


class InternalRepresentationError(PolyExprError, RuntimeError):
    """Raised when an expanded tree is not a sum of products."""

    pass


class ExpansionLimitError(PolyExprError):
    """Raised when an expression would expand to too many terms."""

    pass


class CoefficientOverflowError(PolyExprError, OverflowError):
    """Raised when a coefficient is too large to represent as a float."""

    pass
