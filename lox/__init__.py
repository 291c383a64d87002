# Lox language package
# This package provides a scanner, parser, resolver and tree-walking interpreter for Lox.
from .errors import Diagnostic, LoxError, LoxRuntimeError
from .interpreter import Interpreter
from .parser import parse_program
from .session import Session, run_program

__all__ = [
    'run_program',
    'parse_program',
    'Session',
    'Interpreter',
    'Diagnostic',
    'LoxError',
    'LoxRuntimeError',
]
