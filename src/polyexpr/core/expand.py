"""Expansion of expressions into a sum of products.

The :func:`expand` function distributes multiplication over addition until no
:class:`Multiplication` has an :class:`Addition` below it. The result can be
exponentially larger than the input so :func:`count_expanded_terms` is provided
to measure the size of an expansion before doing it.
"""
from __future__ import annotations

from polyexpr.core.expression import Addition
from polyexpr.core.expression import Expression
from polyexpr.core.expression import Multiplication


__all__ = [
    "expand",
    "count_expanded_terms",
]


# Marker placed on the work stack to join the two most recent results.
_JOIN = object()


def expand(expression: Expression) -> Expression:
    """Rewrite *expression* as an equivalent sum of products.

    >>> from polyexpr.core.expression import Expression
    >>> from polyexpr.core.expand import expand
    >>> print(expand(Expression.parse('x*(y + z)')))
    (x*y) + (x*z)

    Sums are left alone and products of literals are unchanged:

    >>> print(expand(Expression.parse('x + y*z')))
    x + (y*z)

    When both factors are sums the right hand sum is distributed first and
    then the left hand sum is distributed over each of the new products. The
    factor being distributed over a left hand sum ends up on the left:

    >>> print(expand(Expression.parse('(a + b)*(c + d)')))
    ((c*a) + (c*b)) + ((d*a) + (d*b))

    Notes
    -----
    The worst case cost is exponential in the nesting depth of the expression.
    Callers handling untrusted input should check :func:`count_expanded_terms`
    first.
    """
    #
    # Post-order walk with an explicit stack rather than recursion so that the
    # depth of the tree is not limited by the interpreter recursion limit. Each
    # node is pushed once to schedule its children and once more (with the
    # visited flag set) to combine their expanded forms.
    #
    results: list[Expression] = []
    stack: list[tuple[Expression, bool]] = [(expression, False)]

    while stack:
        node, visited = stack.pop()
        if node.is_literal:
            results.append(node)
        elif not visited:
            left, right = node.children
            stack.append((node, True))
            stack.append((right, False))
            stack.append((left, False))
        else:
            right = results.pop()
            left = results.pop()
            if node.is_distributable:
                results.append(_distribute(left, right))
            else:
                results.append(Addition(left, right))

    [expanded] = results
    return expanded


def _distribute(left: Expression, right: Expression) -> Expression:
    """Multiply two expanded expressions giving an expanded expression."""
    results: list[Expression] = []
    stack: list[object] = [(left, right)]

    while stack:
        item = stack.pop()
        if item is _JOIN:
            second = results.pop()
            first = results.pop()
            results.append(Addition(first, second))
            continue

        multiplicand, multiplier = item  # type: ignore
        if isinstance(multiplier, Addition):
            stack.append(_JOIN)
            stack.append((multiplicand, multiplier.right))
            stack.append((multiplicand, multiplier.left))
        elif isinstance(multiplicand, Addition):
            # The other factor becomes the left operand of each product.
            stack.append(_JOIN)
            stack.append((multiplier, multiplicand.right))
            stack.append((multiplier, multiplicand.left))
        else:
            results.append(Multiplication(multiplicand, multiplier))

    [product] = results
    return product


def count_expanded_terms(expression: Expression) -> int:
    """Number of products in the expansion of *expression*.

    This is computed without expanding so it is cheap even when the expansion
    itself would be enormous.

    >>> from polyexpr.core.expression import Expression
    >>> from polyexpr.core.expand import count_expanded_terms
    >>> count_expanded_terms(Expression.parse('x*(y + z)'))
    2
    >>> count_expanded_terms(Expression.parse('(a + b)*(c + d)*(e + f)'))
    8
    """
    counts: list[int] = []
    stack: list[tuple[Expression, bool]] = [(expression, False)]

    while stack:
        node, visited = stack.pop()
        if node.is_literal:
            counts.append(1)
        elif not visited:
            left, right = node.children
            stack.append((node, True))
            stack.append((right, False))
            stack.append((left, False))
        else:
            right_count = counts.pop()
            left_count = counts.pop()
            if node.is_distributable:
                counts.append(left_count * right_count)
            else:
                counts.append(left_count + right_count)

    [count] = counts
    return count
