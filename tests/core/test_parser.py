from polyexpr.core.exceptions import InvalidExpressionError, PolyExprError
from polyexpr.core.expression import Addition, Constant, Multiplication, Variable
from polyexpr.core.parser import parse
from pytest import raises

x = Variable("x")
y = Variable("y")
z = Variable("z")


def test_parse_literals() -> None:
    """Test parsing single constants and variables."""
    assert parse("3") == Constant(3)
    assert parse("2.4030") == Constant(2.403)
    assert parse("9.") == Constant(9)
    assert parse(".5") == Constant(0.5)
    assert parse("abc") == Variable("abc")
    assert parse("Foo") == Variable("Foo")
    assert parse("((x))") == x


def test_parse_operations() -> None:
    """Test parsing of sums and products."""
    assert parse("3 + 2.4") == Addition(Constant(3), Constant(2.4))
    assert parse("3 * x + 2.4") == Addition(Multiplication(Constant(3), x), Constant(2.4))
    assert parse("3 * (x + 2.4)") == Multiplication(Constant(3), Addition(x, Constant(2.4)))
    assert parse("x*y + z") == Addition(Multiplication(x, y), z)
    assert parse("x*(y + z)") == Multiplication(x, Addition(y, z))


def test_parse_right_associative() -> None:
    """Test that chains of the same operator group to the right."""
    assert parse("x*y*z") == Multiplication(x, Multiplication(y, z))
    assert parse("x + y + z") == Addition(x, Addition(y, z))
    assert parse("(x*y)*z") == Multiplication(Multiplication(x, y), z)
    assert parse("(x*y)*z") != parse("x*y*z")


def test_parse_whitespace() -> None:
    """Test that whitespace is ignored."""
    assert parse("(2*x    )+    (    y*x    )") == parse("2*x+y*x")
    assert parse("x + y + z") == parse("x+y+z")
    assert parse("\tx *\n y ") == Multiplication(x, y)


def test_parse_equality_examples() -> None:
    """Structural equality of parsed expressions."""
    assert parse("(x + y + z)") == parse("x + y + z")
    assert parse("(x) + (y) + (z)") == parse("x + y + z")
    assert parse("x+1") == parse("x + 1.00000")
    assert parse("4.0*2.0 + 3.4") != parse("3.4 + 4.0*   2.0")
    assert parse("x + y + z") != parse("x*y+z")


def test_parse_larger() -> None:
    """Parse some larger valid expressions."""
    for text in [
        "((3 + 4) * x * x)",
        "foo + bar+baz",
        "(3+5*6)*4*3",
        "(3+5*6)*4*3+3",
        "4 + 3 * x + 2 * x * x + 1 * x * x * (((x)))",
    ]:
        str(parse(text))


def test_parse_invalid() -> None:
    """Test that bad input raises InvalidExpressionError."""
    invalid = [
        "",
        "   ",
        "3 *",
        "( 3",
        "x + y)",
        "3 x",
        "2x",
        "x1",
        "x - y",
        "x / y",
        "-3",
        "x^2",
        "()",
        "x + + y",
    ]
    for text in invalid:
        with raises(InvalidExpressionError):
            parse(text)

    assert issubclass(InvalidExpressionError, ValueError)
    assert issubclass(InvalidExpressionError, PolyExprError)
    raises(TypeError, lambda: parse(None))  # type: ignore


def test_parse_error_chaining() -> None:
    """The lark error is kept as the cause."""
    with raises(InvalidExpressionError) as excinfo:
        parse("3 *")
    assert excinfo.value.__cause__ is not None
    assert "3 *" in str(excinfo.value)


def test_parse_constant_out_of_range() -> None:
    """Constants that overflow a float are invalid expressions."""
    too_big = "1" + "0" * 400
    raises(InvalidExpressionError, lambda: parse(too_big))
    raises(InvalidExpressionError, lambda: parse(f"x + 2*{too_big}"))
    assert parse("1" + "0" * 300) == Constant(1e300)
