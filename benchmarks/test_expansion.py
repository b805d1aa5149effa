"""Benchmarks for simplification and differentiation using polyexpr.

Simplifying and differentiating with polyexpr is benchmarked against SymPy's
``expand`` and ``diff``.

"""
from typing import Callable, TypeVar

import pytest
import sympy

import polyexpr
from polyexpr.core.parser import parse
from polyexpr.sympy_conversions import to_sympy

ExprType = TypeVar("ExprType")
Fixture = Callable[..., ExprType]

# (x + y + 1)**6 written as a product of sums.
POWER_OF_SUM = "*".join(["(x + y + 1)"] * 6)


@pytest.mark.benchmark(group="simplify product of sums")
class TestSimplifyProductOfSums:
    """Simplify ``(x + y + 1)*(x + y + 1)*...`` with six factors."""

    @staticmethod
    def test_polyexpr(benchmark: Fixture[str]) -> None:
        """Simplify using polyexpr."""
        result = benchmark(polyexpr.simplify, POWER_OF_SUM)
        assert result.startswith("x*x*x*x*x*x+")

    @staticmethod
    def test_sympy(benchmark: Fixture[sympy.Expr]) -> None:
        """Expand using SymPy."""
        expr = to_sympy(parse(POWER_OF_SUM))
        result = benchmark(sympy.expand, expr)
        assert len(result.args) == 28


@pytest.mark.benchmark(group="differentiate product of sums")
class TestDifferentiateProductOfSums:
    """Differentiate ``(x + y + 1)*(x + y + 1)*...`` w.r.t. ``x``."""

    @staticmethod
    def test_polyexpr(benchmark: Fixture[str]) -> None:
        """Differentiate using polyexpr."""
        result = benchmark(polyexpr.differentiate, POWER_OF_SUM, "x")
        assert result.startswith("6.0*x*x*x*x*x+")

    @staticmethod
    def test_sympy(benchmark: Fixture[sympy.Expr]) -> None:
        """Differentiate using SymPy."""
        x = sympy.Symbol("x")
        expr = to_sympy(parse(POWER_OF_SUM))
        result = benchmark(lambda: sympy.expand(sympy.diff(expr, x)))
        assert len(result.args) == 21
