import sys
from dataclasses import dataclass
from typing import Any

from lox.tokens import Token, TokenType


LEXICAL = 'lexical'
SYNTAX = 'syntax'
RESOLUTION = 'resolution'
RUNTIME = 'runtime'

STATIC_PHASES = (LEXICAL, SYNTAX, RESOLUTION)

# host frames available to the recursive parser, resolver and evaluator;
# one Lox call costs about seven of them
RECURSION_LIMIT = 20000


@dataclass(frozen=True)
class Diagnostic:
    """A problem found by one of the pipeline phases.

    `where` is the location suffix shown after "Error", e.g. " at 'x'" or
    " at end". Runtime diagnostics do not use it.
    """
    phase: str
    line: int
    message: str
    where: str = ''

    @property
    def is_static(self) -> bool:
        return self.phase in STATIC_PHASES

    def __str__(self) -> str:
        if self.phase == RUNTIME:
            return f"{self.message}\n[line {self.line}]"
        return f"[line {self.line}] Error{self.where}: {self.message}"


def token_location(token: Token) -> str:
    if token.type == TokenType.EOF:
        return ' at end'
    return f" at '{token.lexeme}'"


class LoxError(Exception):
    """Base class for errors raised by the Lox toolchain."""


class LoxRuntimeError(LoxError):
    """Exception type used to abort evaluation on a Lox runtime error."""
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    @property
    def line(self) -> int:
        return self.token.line

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(RUNTIME, self.line, self.message)


class LoxStackOverflow(LoxRuntimeError):
    """Raised when a Lox program exhausts the host call stack."""
    def __init__(self, token: Token):
        super().__init__(token, 'Stack overflow.')


def raise_recursion_limit(limit: int = RECURSION_LIMIT):
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)


@dataclass
class ReturnSignal:
    """Outcome of executing a `return` statement.

    Statement execution hands this value back up to the enclosing call
    instead of raising it.
    """
    value: Any
