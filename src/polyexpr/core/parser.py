"""Parser turning text into an :class:`Expression`.

The grammar is written for ``lark`` and is right associative for both
operators so that ``x*y*z`` is read as ``x*(y*z)`` and ``x + y + z`` as
``x + (y + z)``. Multiplication binds more tightly than addition and
whitespace is ignored.
"""
from __future__ import annotations

import math

from lark import Lark
from lark import Transformer
from lark import v_args
from lark.exceptions import LarkError

from polyexpr.core.exceptions import InvalidExpressionError
from polyexpr.core.expression import Addition
from polyexpr.core.expression import Constant
from polyexpr.core.expression import Expression
from polyexpr.core.expression import Multiplication
from polyexpr.core.expression import Variable


__all__ = [
    "GRAMMAR",
    "parse",
]


GRAMMAR = r"""
    ?start: sum

    ?sum: product
        | product "+" sum   -> addition

    ?product: atom
        | atom "*" product  -> multiplication

    ?atom: CONSTANT         -> constant
        | VARIABLE          -> variable
        | "(" sum ")"

    CONSTANT: /[0-9]+(?:\.[0-9]*)?|\.[0-9]+/
    VARIABLE: /[A-Za-z]+/

    %import common.WS
    %ignore WS
"""


@v_args(inline=True)
class ExpressionBuilder(Transformer):
    """Build :class:`Expression` nodes from the lark parse tree."""

    def constant(self, token: str) -> Expression:
        value = float(token)
        if not math.isfinite(value):
            raise InvalidExpressionError(f"Constant out of range: {token}")
        return Constant(value)

    def variable(self, token: str) -> Expression:
        return Variable(str(token))

    def addition(self, left: Expression, right: Expression) -> Expression:
        return Addition(left, right)

    def multiplication(self, left: Expression, right: Expression) -> Expression:
        return Multiplication(left, right)


_parser = Lark(GRAMMAR, parser="lalr", transformer=ExpressionBuilder())


def parse(text: str) -> Expression:
    """Parse *text* into an :class:`Expression`.

    >>> from polyexpr.core.parser import parse
    >>> parse('x*y')
    Multiplication(left=Variable(name='x'), right=Variable(name='y'))
    >>> print(parse(' 4*(x + 2.5) '))
    4.0*(x + 2.5)

    Text that does not match the grammar raises
    :class:`~polyexpr.core.exceptions.InvalidExpressionError`:

    >>> parse('3 x')
    Traceback (most recent call last):
    ...
    polyexpr.core.exceptions.InvalidExpressionError: Invalid expression: '3 x'

    Constants too large for a float are also invalid.
    """
    if not isinstance(text, str):
        raise TypeError("Expected a str to parse.")
    try:
        expression = _parser.parse(text)
    except LarkError as exc:
        raise InvalidExpressionError(f"Invalid expression: {text!r}") from exc
    return expression  # type: ignore[no-any-return]
