"""Conversions from polyexpr expressions to SymPy expressions.

These are defined in their own module so that SymPy will not be imported if it
is not needed.
"""
from __future__ import annotations

from typing import Any

import sympy

from polyexpr.core.expression import Addition
from polyexpr.core.expression import Constant
from polyexpr.core.expression import Expression
from polyexpr.core.expression import Multiplication
from polyexpr.core.expression import Variable
from polyexpr.core.term import PolynomialTerm


__all__ = [
    "to_sympy",
    "term_to_sympy",
]


def to_sympy(expression: Expression) -> Any:
    """Convert an :class:`Expression` to a SymPy expression.

    >>> # xdoctest: +REQUIRES(module:sympy)
    >>> from polyexpr.core.expression import Expression
    >>> from polyexpr.sympy_conversions import to_sympy
    >>> to_sympy(Expression.parse('x*(y + z)'))
    x*(y + z)
    """
    results: list[Any] = []
    stack: list[tuple[Expression, bool]] = [(expression, False)]

    while stack:
        node, visited = stack.pop()
        if isinstance(node, Constant):
            results.append(sympy.Float(node.value))
        elif isinstance(node, Variable):
            results.append(sympy.Symbol(node.name))
        elif not visited:
            left, right = node.children
            stack.append((node, True))
            stack.append((right, False))
            stack.append((left, False))
        else:
            right_value = results.pop()
            left_value = results.pop()
            if isinstance(node, Multiplication):
                results.append(sympy.Mul(left_value, right_value))
            elif isinstance(node, Addition):
                results.append(sympy.Add(left_value, right_value))
            else:
                raise TypeError(f"Unknown expression type: {type(node)}")

    [result] = results
    return result


def term_to_sympy(term: PolynomialTerm) -> Any:
    """Convert a :class:`PolynomialTerm` to a SymPy expression."""
    factors = [sympy.Float(term.coefficient)]
    for name, exponent in term.variables.items():
        factors.append(sympy.Symbol(name) ** exponent)
    return sympy.Mul(*factors)
