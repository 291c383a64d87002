"""Session control for Lox: runs source text through every phase.

A `Session` owns one interpreter, so globals defined by one `run` call
stay visible to the next. The REPL relies on that; running a script is
a single `run` call.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import Stmt
from .errors import Diagnostic
from .interpreter import Interpreter
from .parser import Parser
from .resolver import Resolver
from .scanner import tokenize


class Session:
    """Governs a Lox session: scan, parse, resolve, then interpret."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.interpreter = Interpreter(debug_level=debug_level, debug_file=debug_file)
        self.diagnostics: List[Diagnostic] = []  # diagnostics of the last run

    @property
    def had_error(self) -> bool:
        return any(d.is_static for d in self.diagnostics)

    @property
    def had_runtime_error(self) -> bool:
        return any(not d.is_static for d in self.diagnostics)

    def compile(self, source: str) -> List[Stmt]:
        """Scan, parse and resolve `source` without running it.

        Static diagnostics end up in `self.diagnostics`. Resolution still
        runs when parsing reported errors so that every independent
        problem is listed.
        """
        tokens, diagnostics = tokenize(source)
        self.interpreter.debug(f"scanned {len(tokens)} tokens")
        parser = Parser(tokens)
        statements = parser.parse()
        diagnostics.extend(parser.diagnostics)
        self.interpreter.debug(f"parsed {len(statements)} statements")

        resolver = Resolver()
        table = resolver.resolve(statements)
        diagnostics.extend(resolver.diagnostics)
        self.interpreter.debug(f"resolved {len(table)} local references")

        self.diagnostics = diagnostics
        if not self.had_error:
            self.interpreter.add_resolutions(table)
        return statements

    def execute(self, statements: List[Stmt]) -> List[Diagnostic]:
        """Resolve and run an already parsed program (e.g. loaded from JSON)."""
        resolver = Resolver()
        table = resolver.resolve(statements)
        self.diagnostics = list(resolver.diagnostics)
        if self.had_error:
            return self.diagnostics
        self.interpreter.add_resolutions(table)
        self.diagnostics = self.interpreter.interpret(statements)
        return self.diagnostics

    def run(self, source: str) -> List[Diagnostic]:
        statements = self.compile(source)
        if self.had_error:
            for diagnostic in self.diagnostics:
                self.interpreter.debug(str(diagnostic))
            return self.diagnostics
        self.diagnostics = self.interpreter.interpret(statements)
        return self.diagnostics

    def close(self):
        self.interpreter.close()


def run_program(source: str, debug_level: int = 0) -> List[Diagnostic]:
    """Run a complete Lox program and return its diagnostics (empty on success)."""
    session = Session(debug_level=debug_level)
    try:
        return session.run(source)
    finally:
        session.close()
