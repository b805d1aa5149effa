"""polyexpr.core.expression module.

This module defines the :class:`Expression` tree and its four node types
:class:`Constant`, :class:`Variable`, :class:`Addition` and
:class:`Multiplication`.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING as _TYPE_CHECKING

if _TYPE_CHECKING:
    from typing import ClassVar


__all__ = [
    "Expression",
    "Constant",
    "Variable",
    "Addition",
    "Multiplication",
    "depth",
    "format_constant",
    "VARIABLE_NAME",
]


VARIABLE_NAME = re.compile(r"[A-Za-z]+")


def format_constant(value: float) -> str:
    """Decimal form of a float with an explicit fractional part.

    >>> from polyexpr.core.expression import format_constant
    >>> format_constant(13.0)
    '13.0'
    >>> format_constant(1e-05)
    '0.00001'
    >>> format_constant(1e22)
    '10000000000000000000000.0'
    """
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


class Expression:
    """Base class for expression trees.

    Every :class:`Expression` is either a literal (:class:`Constant` or
    :class:`Variable`) or a binary operation (:class:`Addition` or
    :class:`Multiplication`) whose two children are themselves expressions.

    >>> from polyexpr.core.expression import Constant, Variable, Multiplication
    >>> x = Variable('x')
    >>> expr = Multiplication(Constant(2), x)
    >>> expr
    Multiplication(left=Constant(value=2.0), right=Variable(name='x'))
    >>> print(expr)
    2.0*x

    Expressions are immutable and compare structurally. The order of the
    children matters so mathematically equal expressions need not be equal:

    >>> y = Variable('y')
    >>> Multiplication(x, y) == Multiplication(x, y)
    True
    >>> Multiplication(x, y) == Multiplication(y, x)
    False

    The class flags mirror the vocabulary used by the algorithms:
    ``is_literal`` marks the leaves, ``is_parameterizable`` marks the nodes
    that can be differentiated against and ``is_distributable`` marks the
    nodes that expansion acts on.

    >>> [x.is_literal, x.is_parameterizable, x.is_distributable]
    [True, True, False]
    >>> [expr.is_literal, expr.is_parameterizable, expr.is_distributable]
    [False, False, True]

    See Also
    --------
    polyexpr.core.expand.expand: Rewrite as a sum of products.
    polyexpr.core.parser.parse: Build an expression from text.
    """

    is_literal: ClassVar[bool] = False
    is_parameterizable: ClassVar[bool] = False
    is_distributable: ClassVar[bool] = False

    @property
    def children(self) -> tuple[Expression, ...]:
        """The subexpressions of this node (empty for literals)."""
        return ()

    @staticmethod
    def parse(text: str) -> Expression:
        """Parse *text* into an :class:`Expression`.

        >>> from polyexpr.core.expression import Expression
        >>> print(Expression.parse('x * (y + 2)'))
        x*(y + 2.0)

        Raises :class:`~polyexpr.core.exceptions.InvalidExpressionError` if the
        text is not a valid expression.
        """
        from polyexpr.core.parser import parse

        return parse(text)


@dataclass(frozen=True)
class Constant(Expression):
    """A non-negative real constant."""

    value: float

    is_literal = True

    def __post_init__(self) -> None:
        """Store the value as a float and check that it is non-negative."""
        value = self.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError("Constant value should be a real number.")
        value = float(value)
        if not (math.isfinite(value) and value >= 0):
            raise ValueError("Constant value should be finite and non-negative.")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return format_constant(self.value)


@dataclass(frozen=True)
class Variable(Expression):
    """A named variable such as ``x`` or ``foo``."""

    name: str

    is_literal = True
    is_parameterizable = True

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError("Variable name should be a str.")
        if not VARIABLE_NAME.fullmatch(self.name):
            raise ValueError(f"Invalid variable name: {self.name!r}")

    def __str__(self) -> str:
        return self.name


def _parenthesize(child: Expression) -> str:
    """Wrap a non-literal child in parentheses."""
    if child.is_literal:
        return str(child)
    else:
        return f"({child})"


@dataclass(frozen=True)
class Addition(Expression):
    """The sum of two expressions."""

    left: Expression
    right: Expression

    def __post_init__(self) -> None:
        _check_children(self.left, self.right)

    @property
    def children(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"{_parenthesize(self.left)} + {_parenthesize(self.right)}"


@dataclass(frozen=True)
class Multiplication(Expression):
    """The product of two expressions."""

    left: Expression
    right: Expression

    is_distributable = True

    def __post_init__(self) -> None:
        _check_children(self.left, self.right)

    @property
    def children(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"{_parenthesize(self.left)}*{_parenthesize(self.right)}"


def _check_children(left: object, right: object) -> None:
    if not (isinstance(left, Expression) and isinstance(right, Expression)):
        raise TypeError("Both children should be Expression.")


def depth(expression: Expression) -> int:
    """Height of an expression tree.

    >>> from polyexpr.core.expression import Expression, depth
    >>> depth(Expression.parse('x'))
    1
    >>> depth(Expression.parse('x*(y + z)'))
    3
    """
    # Explicit stack so that very deep trees do not hit the recursion limit.
    deepest = 0
    stack = [(expression, 1)]
    while stack:
        node, level = stack.pop()
        deepest = max(deepest, level)
        for child in node.children:
            stack.append((child, level + 1))
    return deepest
