"""polyexpr.core.term module.

This module defines :class:`PolynomialTerm` which represents a single monomial
such as ``3.0*x*x*y`` along with the functions :func:`combine` and
:func:`render` that turn a list of terms into canonical form.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING as _TYPE_CHECKING

from polyexpr.core.exceptions import CoefficientOverflowError
from polyexpr.core.exceptions import InternalRepresentationError
from polyexpr.core.expression import Constant
from polyexpr.core.expression import format_constant
from polyexpr.core.expression import Multiplication
from polyexpr.core.expression import Variable
from polyexpr.core.expression import VARIABLE_NAME

if _TYPE_CHECKING:
    from typing import Iterable, Mapping
    from polyexpr.core.expression import Expression


__all__ = [
    "PolynomialTerm",
    "combine",
    "render",
    "ADDITIVE_IDENTITY",
]


ADDITIVE_IDENTITY = "0.0"


class PolynomialTerm:
    """A non-negative coefficient times a product of variable powers.

    :ivar coefficient: The ``float`` multiplying the variables.
    :ivar variables: Mapping from variable name to positive exponent.

    >>> from polyexpr.core.term import PolynomialTerm
    >>> term = PolynomialTerm(4.25, {'x': 2, 'y': 1})
    >>> term
    PolynomialTerm(4.25, {'x': 2, 'y': 1})
    >>> print(term)
    4.25*x*x*y

    Equality is *mathematical* rather than structural. Two terms are equal if
    they have the same variables raised to the same powers regardless of their
    coefficients or of the order in which the variables were collected:

    >>> PolynomialTerm(1, {'x': 1, 'y': 1}) == PolynomialTerm(2, {'y': 1, 'x': 1})
    True
    >>> PolynomialTerm(1, {'x': 1}) == PolynomialTerm(1, {'x': 2})
    False

    This makes it possible to find like terms with a ``dict`` or ``set``. A
    term with a zero coefficient has no variables so every zero term is the
    same:

    >>> PolynomialTerm(0, {'x': 3}).variables
    {}
    >>> PolynomialTerm(0, {'x': 3}) == PolynomialTerm(0)
    True

    See Also
    --------
    combine: Merge like terms and sort them.
    render: Format a list of terms as a sum.
    """

    __slots__ = (
        "_coefficient",
        "_variables",
        "_key",
    )

    _coefficient: float
    _variables: dict[str, int]
    _key: tuple[tuple[str, int], ...]

    def __init__(self, coefficient: float = 1.0, variables: Mapping[str, int] | None = None):
        """Create a term from a coefficient and a mapping of exponents."""
        if isinstance(coefficient, bool) or not isinstance(coefficient, (int, float)):
            raise TypeError("The coefficient should be a real number.")
        coefficient = float(coefficient)
        if not (math.isfinite(coefficient) and coefficient >= 0):
            raise ValueError("The coefficient should be finite and non-negative.")

        new_variables: dict[str, int] = {}
        if variables is not None:
            for name, exponent in variables.items():
                if not isinstance(name, str) or not VARIABLE_NAME.fullmatch(name):
                    raise ValueError(f"Invalid variable name: {name!r}")
                if isinstance(exponent, bool) or not isinstance(exponent, int):
                    raise TypeError("Exponents should be integers.")
                if exponent < 1:
                    raise ValueError("Exponents should be positive.")
                new_variables[name] = exponent

        # Multiplying by zero gives the same zero whatever the variables were.
        if coefficient == 0:
            new_variables.clear()

        self._coefficient = coefficient
        self._variables = new_variables
        self._key = tuple(sorted(new_variables.items()))

    @classmethod
    def from_expression(cls, expression: Expression) -> PolynomialTerm:
        """Build a term from a product of literals.

        >>> from polyexpr.core.expression import Expression
        >>> from polyexpr.core.term import PolynomialTerm
        >>> print(PolynomialTerm.from_expression(Expression.parse('2*x*y*x*3')))
        6.0*x*x*y

        The expression should contain only :class:`Multiplication`,
        :class:`Variable` and :class:`Constant` nodes. Anything else means that
        it was not properly expanded and is an internal error:

        >>> PolynomialTerm.from_expression(Expression.parse('x + y'))
        Traceback (most recent call last):
        ...
        polyexpr.core.exceptions.InternalRepresentationError: Cannot convert x + y to a polynomial term

        A product of constants that overflows a float raises
        :class:`~polyexpr.core.exceptions.CoefficientOverflowError`.
        """
        coefficient = 1.0
        variables: dict[str, int] = {}

        # Factors are visited left to right which fixes the variable order.
        stack = [expression]
        while stack:
            node = stack.pop()
            if isinstance(node, Multiplication):
                stack.append(node.right)
                stack.append(node.left)
            elif isinstance(node, Variable):
                variables[node.name] = variables.get(node.name, 0) + 1
            elif isinstance(node, Constant):
                coefficient *= node.value
            else:
                msg = f"Cannot convert {expression} to a polynomial term"
                raise InternalRepresentationError(msg)

        return cls(_checked(coefficient, expression), variables)

    @property
    def coefficient(self) -> float:
        """The numeric coefficient of the term."""
        return self._coefficient

    @property
    def variables(self) -> dict[str, int]:
        """A copy of the variable exponents in insertion order."""
        return dict(self._variables)

    @property
    def key(self) -> tuple[tuple[str, int], ...]:
        """Sorted ``(name, exponent)`` pairs identifying like terms."""
        return self._key

    @property
    def max_exponent(self) -> int:
        """The largest exponent of any variable (0 for a constant)."""
        return max(self._variables.values(), default=0)

    @property
    def is_constant(self) -> bool:
        """True if the term has no variables."""
        return not self._variables

    @property
    def is_zero(self) -> bool:
        """True if this is the additive identity."""
        return self._coefficient == 0

    def differentiate(self, variable: str) -> PolynomialTerm:
        """Differentiate with respect to *variable* using the power rule.

        >>> from polyexpr.core.term import PolynomialTerm
        >>> term = PolynomialTerm(2, {'x': 3, 'y': 1})
        >>> print(term.differentiate('x'))
        6.0*x*x*y
        >>> print(term.differentiate('y'))
        2.0*x*x*x
        >>> print(term.differentiate('z'))
        0.0
        """
        exponent = self._variables.get(variable)
        if exponent is None:
            return PolynomialTerm(0)

        variables = dict(self._variables)
        if exponent > 1:
            variables[variable] = exponent - 1
        else:
            del variables[variable]

        coefficient = _checked(self._coefficient * exponent, self)
        return PolynomialTerm(coefficient, variables)

    def __eq__(self, other: object) -> bool:
        """Mathematical equality: same variables with the same exponents."""
        if not isinstance(other, PolynomialTerm):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"PolynomialTerm({self._coefficient!r}, {self._variables!r})"

    def __str__(self) -> str:
        """Canonical form e.g. ``'x*y'``, ``'2.5*x*x'`` or ``'3.0'``."""
        if self._coefficient == 0:
            return ADDITIVE_IDENTITY
        if not self._variables:
            return format_constant(self._coefficient)

        factors = []
        if self._coefficient != 1:
            factors.append(format_constant(self._coefficient))
        for name, exponent in self._variables.items():
            factors.extend([name] * exponent)
        return "*".join(factors)


def _checked(coefficient: float, source: object) -> float:
    if not math.isfinite(coefficient):
        raise CoefficientOverflowError(f"Coefficient overflow in {source}")
    return coefficient


def _canonical_order(term: PolynomialTerm) -> tuple[bool, int]:
    # Constants last, otherwise largest power first.
    return (term.is_constant, -term.max_exponent)


def combine(terms: Iterable[PolynomialTerm]) -> list[PolynomialTerm]:
    """Add up like terms and sort into canonical order.

    >>> from polyexpr.core.term import PolynomialTerm, combine
    >>> terms = [
    ...     PolynomialTerm(2, {'x': 1}),
    ...     PolynomialTerm(2, {'y': 1}),
    ...     PolynomialTerm(5),
    ...     PolynomialTerm(4, {'x': 2}),
    ...     PolynomialTerm(3, {'x': 1}),
    ... ]
    >>> for term in combine(terms):
    ...     print(term)
    4.0*x*x
    5.0*x
    2.0*y
    5.0

    Terms with the largest exponent come first and constants come last. Terms
    whose largest exponents are the same keep the order in which they first
    appeared. Where like terms are merged the variable order of the first one
    is kept.

    :class:`~polyexpr.core.exceptions.CoefficientOverflowError` is raised if
    a merged coefficient overflows.
    """
    groups: dict[tuple[tuple[str, int], ...], PolynomialTerm] = {}

    for term in terms:
        previous = groups.get(term.key)
        if previous is None:
            groups[term.key] = term
        else:
            coefficient = _checked(previous.coefficient + term.coefficient, term)
            groups[term.key] = PolynomialTerm(coefficient, previous.variables)

    # sorted is stable so ties keep their first appearance order.
    return sorted(groups.values(), key=_canonical_order)


def render(terms: Iterable[PolynomialTerm]) -> str:
    """Format combined terms as a sum without spaces.

    >>> from polyexpr.core.term import PolynomialTerm, render
    >>> render([PolynomialTerm(1, {'x': 2}), PolynomialTerm(0), PolynomialTerm(4)])
    'x*x+4.0'
    >>> render([])
    '0.0'
    """
    parts = [str(term) for term in terms if not term.is_zero]
    if not parts:
        return ADDITIVE_IDENTITY
    return "+".join(parts)
