"""Interactive console for simplifying and differentiating expressions.

Each line is either an expression, which becomes the current expression, or a
command starting with ``!``:

>>> from polyexpr.console import Console
>>> console = Console()
>>> console.handle('x * x + 2*x')
'x*x+2*x'
>>> console.handle('!simplify')
'x*x+2.0*x'
>>> console.handle('!d/dx')
'2.0*x+2.0'

Differentiating replaces the current expression with the derivative so
commands can be chained:

>>> console.handle('!d/dx')
'2.0'
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING as _TYPE_CHECKING

from polyexpr.core.exceptions import CoefficientOverflowError
from polyexpr.core.exceptions import ExpansionLimitError
from polyexpr.core.exceptions import InvalidExpressionError
from polyexpr.core.expression import VARIABLE_NAME
from polyexpr.core.parser import parse
from polyexpr.expressions import differentiate
from polyexpr.expressions import simplify

if _TYPE_CHECKING:
    from typing import Optional, TextIO


__all__ = [
    "Console",
    "ConsoleConfig",
]


logger = logging.getLogger(__name__)


COMMAND_PREFIX = "!"
DERIVATIVE_PREFIX = "d/d"
SIMPLIFY = "simplify"

NO_EXPRESSION = "ParseError: no stored current expression"
INVALID_EXPRESSION = "ParseError: Invalid expression"
MISSING_VARIABLE = "ParseError: missing variable in derivative command"
INVALID_VARIABLE = "ParseError: must differentiate with respect to a valid variable"
TOO_LARGE = "ParseError: expression too large to expand"
COEFFICIENT_OVERFLOW = "ParseError: coefficient too large"

_WHITESPACE = re.compile(r"\s+")


@dataclass
class ConsoleConfig:
    """Settings for a :class:`Console`.

    :ivar prompt: Printed before reading each line.
    :ivar max_terms: Largest number of expanded products a command may
        produce, or ``None`` for no limit.
    """

    prompt: str = "> "
    max_terms: Optional[int] = 10000


class Console:
    """Read-eval loop holding the current expression."""

    def __init__(self, config: Optional[ConsoleConfig] = None):
        """Create a console with no current expression."""
        self.config = config if config is not None else ConsoleConfig()
        self.current: Optional[str] = None

    def handle(self, line: str) -> str:
        """Process one line of input and return the text to show."""
        text = line.strip()
        try:
            if text.startswith(COMMAND_PREFIX):
                return self._handle_command(text[len(COMMAND_PREFIX) :])
            else:
                return self._handle_expression(text)
        except ExpansionLimitError:
            return TOO_LARGE
        except CoefficientOverflowError:
            logger.debug("coefficient overflow for %r", line)
            return COEFFICIENT_OVERFLOW
        except InvalidExpressionError:
            logger.debug("invalid input %r", line)
            return INVALID_EXPRESSION

    def _handle_expression(self, text: str) -> str:
        # Parse only to validate; the text is stored as typed.
        parse(text)
        self.current = _WHITESPACE.sub("", text)
        return self.current

    def _handle_command(self, command: str) -> str:
        if self.current is None:
            return NO_EXPRESSION

        max_terms = self.config.max_terms

        if command.startswith(DERIVATIVE_PREFIX):
            variable = command[len(DERIVATIVE_PREFIX) :]
            if not variable:
                return MISSING_VARIABLE
            elif not VARIABLE_NAME.fullmatch(variable):
                return INVALID_VARIABLE
            self.current = differentiate(self.current, variable, max_terms=max_terms)
            return self.current
        elif command == SIMPLIFY:
            return simplify(self.current, max_terms=max_terms)
        else:
            return f'ParseError: unknown command "{command}"\nCurrentExpression: {self.current}'

    def run(self, stdin: TextIO, stdout: TextIO) -> None:
        """Loop until an empty line or the end of the input.

        A line holding only spaces is not empty and is reported as an invalid
        expression.
        """
        while True:
            stdout.write(self.config.prompt)
            stdout.flush()
            line = stdin.readline()
            if not line.rstrip("\r\n"):
                return
            stdout.write(self.handle(line) + "\n")
