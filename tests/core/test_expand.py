from polyexpr.core.expand import count_expanded_terms, expand
from polyexpr.core.expression import (
    Addition,
    Constant,
    Expression,
    Multiplication,
    Variable,
)
from polyexpr.core.parser import parse

a, b, c, d = [Variable(name) for name in "abcd"]
x = Variable("x")


def is_sum_of_products(expr: Expression) -> bool:
    """Check that no Multiplication has an Addition beneath it."""
    stack = [(expr, False)]
    while stack:
        node, in_product = stack.pop()
        if isinstance(node, Addition) and in_product:
            return False
        below = in_product or isinstance(node, Multiplication)
        stack.extend((child, below) for child in node.children)
    return True


def test_expand_unchanged() -> None:
    """Expressions with nothing to distribute are returned as is."""
    for text in ["x", "4", "x + y", "x*y*z", "2*x + y*z", "(x*y)*z"]:
        expr = parse(text)
        assert expand(expr) == expr


def test_expand_distribute_right() -> None:
    """A product with a sum on the right."""
    assert expand(parse("x*(a + b)")) == Addition(
        Multiplication(x, a), Multiplication(x, b)
    )


def test_expand_distribute_left() -> None:
    """A product with a sum on the left puts the other factor first."""
    assert expand(parse("(a + b)*x")) == Addition(
        Multiplication(x, a), Multiplication(x, b)
    )


def test_expand_both_sums() -> None:
    """The right hand sum is distributed before the left hand sum."""
    assert expand(parse("(a + b)*(c + d)")) == Addition(
        Addition(Multiplication(c, a), Multiplication(c, b)),
        Addition(Multiplication(d, a), Multiplication(d, b)),
    )


def test_expand_nested() -> None:
    """Products nested inside products are expanded from the bottom up."""
    two = Constant(2)
    expr = parse("2*(x*(a + b))")
    assert expand(expr) == Addition(
        Multiplication(two, Multiplication(x, a)),
        Multiplication(two, Multiplication(x, b)),
    )
    assert is_sum_of_products(expand(parse("2.0*(x*y + x*(y*x + x*x*x))")))
    assert is_sum_of_products(expand(parse("((a + b)*(c + d) + x)*(a + (b + c)*d)")))


def test_expand_idempotent() -> None:
    """Expanding an expanded expression changes nothing."""
    for text in ["(a + b)*(c + d)", "x*(x*y + y*x + x*x*x)", "(a+b)*(a+b)*(a+b)"]:
        once = expand(parse(text))
        assert expand(once) == once


def test_count_expanded_terms() -> None:
    """The count matches the number of products in the expansion."""
    for text, count in [
        ("x", 1),
        ("x + y", 2),
        ("x*y", 1),
        ("x*(a + b)", 2),
        ("(a + b)*(c + d)", 4),
        ("(a + b)*(a + b)*(a + b) + 1", 9),
    ]:
        expr = parse(text)
        assert count_expanded_terms(expr) == count
        assert count_expanded_terms(expand(expr)) == count


def test_expand_deep() -> None:
    """Deep trees do not hit the recursion limit."""
    expr: Expression = x
    for _ in range(5000):
        expr = Multiplication(x, expr)
    assert expand(expr) is not None

    expr = Multiplication(x, Addition(a, b))
    for _ in range(3000):
        expr = Addition(a, expr)
    assert count_expanded_terms(expand(expr)) == 3002
