"""Simplify and differentiate expressions given as text.

These are the main entry points of the package:

>>> from polyexpr import simplify, differentiate
>>> simplify('4*(x*y + y*x + x*x*x)')
'4.0*x*x*x+8.0*x*y'
>>> differentiate('4*(x*y + y*x + x*x*x)', 'x')
'12.0*x*x+8.0*y'

Results are sums of monomials with like terms combined, largest powers first
and constants last.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING as _TYPE_CHECKING

from polyexpr.core.exceptions import ExpansionLimitError
from polyexpr.core.exceptions import InvalidVariableError
from polyexpr.core.expand import count_expanded_terms
from polyexpr.core.expand import expand
from polyexpr.core.expression import Addition
from polyexpr.core.expression import Expression
from polyexpr.core.expression import VARIABLE_NAME
from polyexpr.core.parser import parse
from polyexpr.core.term import combine
from polyexpr.core.term import PolynomialTerm
from polyexpr.core.term import render

if _TYPE_CHECKING:
    from typing import Optional


__all__ = [
    "simplify",
    "differentiate",
    "simplify_expression",
    "differentiate_expression",
    "extract_terms",
    "to_terms",
]


logger = logging.getLogger(__name__)


def extract_terms(expansion: Expression) -> list[PolynomialTerm]:
    """List the monomials of an expanded expression.

    >>> from polyexpr.core.expression import Expression
    >>> from polyexpr.expressions import extract_terms
    >>> extract_terms(Expression.parse('x*y + 2*x + y*x'))
    [PolynomialTerm(1.0, {'x': 1, 'y': 1}), PolynomialTerm(2.0, {'x': 1}), PolynomialTerm(1.0, {'y': 1, 'x': 1})]

    The expression must already be a sum of products (see
    :func:`~polyexpr.core.expand.expand`). Terms are listed left to right and
    are not combined.
    """
    terms: list[PolynomialTerm] = []
    stack = [expansion]
    while stack:
        node = stack.pop()
        if isinstance(node, Addition):
            stack.append(node.right)
            stack.append(node.left)
        else:
            terms.append(PolynomialTerm.from_expression(node))
    return terms


def to_terms(expression: Expression) -> list[PolynomialTerm]:
    """Expand an expression and list its monomials."""
    expansion = expand(expression)
    terms = extract_terms(expansion)
    logger.debug("expanded %s into %d terms", expression, len(terms))
    return terms


def simplify_expression(expression: Expression) -> str:
    """Canonical form of a parsed expression."""
    terms = combine(to_terms(expression))
    logger.debug("combined into %d terms", len(terms))
    return render(terms)


def differentiate_expression(expression: Expression, variable: str) -> str:
    """Canonical form of the derivative of a parsed expression."""
    _check_variable(variable)
    # Like terms are merged before differentiating so each monomial is
    # differentiated once, and merged again afterwards because distinct
    # monomials can have the same derivative.
    terms = combine(to_terms(expression))
    derivatives = combine(term.differentiate(variable) for term in terms)
    logger.debug("derivative wrt %s has %d terms", variable, len(derivatives))
    return render(derivatives)


def simplify(text: str, *, max_terms: Optional[int] = None) -> str:
    """Simplify an expression given as text.

    >>> from polyexpr import simplify
    >>> simplify('0.0*x + 1.0')
    '1.0'
    >>> simplify('4.2 + foo')
    'foo+4.2'

    Raises :class:`~polyexpr.core.exceptions.InvalidExpressionError` if the
    text is not a valid expression. If *max_terms* is given then
    :class:`~polyexpr.core.exceptions.ExpansionLimitError` is raised for
    expressions that would expand to more than that many products.
    """
    expression = _parse_checked(text, max_terms)
    return simplify_expression(expression)


def differentiate(text: str, variable: str, *, max_terms: Optional[int] = None) -> str:
    """Differentiate an expression given as text with respect to *variable*.

    >>> from polyexpr import differentiate
    >>> differentiate('foo*foo', 'foo')
    '2.0*foo'
    >>> differentiate('foo*foo', 'bar')
    '0.0'

    Raises :class:`~polyexpr.core.exceptions.InvalidVariableError` if
    *variable* is not a valid variable name and otherwise behaves like
    :func:`simplify`.
    """
    _check_variable(variable)
    expression = _parse_checked(text, max_terms)
    return differentiate_expression(expression, variable)


def _check_variable(variable: str) -> None:
    if not isinstance(variable, str) or not VARIABLE_NAME.fullmatch(variable):
        raise InvalidVariableError(f"Invalid variable: {variable!r}")


def _parse_checked(text: str, max_terms: Optional[int]) -> Expression:
    expression = parse(text)
    logger.debug("parsed %r as %s", text, expression)
    if max_terms is not None:
        count = count_expanded_terms(expression)
        if count > max_terms:
            logger.warning("expression expands to %d terms (limit %d)", count, max_terms)
            raise ExpansionLimitError(
                f"Expression expands to {count} terms which exceeds {max_terms}"
            )
    return expression
