"""Simplification and differentiation of polynomial expressions."""
from __future__ import annotations

from .core.exceptions import (
    CoefficientOverflowError,
    ExpansionLimitError,
    InternalRepresentationError,
    InvalidExpressionError,
    InvalidVariableError,
    PolyExprError,
)
from .core.expand import count_expanded_terms, expand
from .core.expression import (
    Addition,
    Constant,
    Expression,
    Multiplication,
    Variable,
    depth,
)
from .core.term import PolynomialTerm, combine, render
from .expressions import (
    differentiate,
    differentiate_expression,
    extract_terms,
    simplify,
    simplify_expression,
    to_terms,
)

__all__ = [
    "simplify",
    "differentiate",
    "simplify_expression",
    "differentiate_expression",
    "extract_terms",
    "to_terms",
    "Expression",
    "Constant",
    "Variable",
    "Addition",
    "Multiplication",
    "depth",
    "expand",
    "count_expanded_terms",
    "PolynomialTerm",
    "combine",
    "render",
    "PolyExprError",
    "InvalidExpressionError",
    "InvalidVariableError",
    "InternalRepresentationError",
    "ExpansionLimitError",
    "CoefficientOverflowError",
]
