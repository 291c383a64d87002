"""Static scope resolution for Lox programs.

The resolver walks the AST once before anything runs. For every
variable reference (and every assignment and `this`) it records how
many scopes lie between the reference and the scope that declares the
name. The interpreter uses that hop count to go straight to the right
environment. References it cannot find in any local scope are left out
of the table and are looked up in the global environment at runtime.

It also reports misuse that can be detected statically: reading a
local in its own initializer, redeclaring a name in the same block,
`return` outside a function, returning a value from `init`, and `this`
outside a class. Every problem is recorded and the walk continues.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Dict, List

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable,
    Assign, Call, Get, Set, This, Expression, Print, Var, Block, If,
    While, Function, Return, Class,
)
from .errors import Diagnostic, RESOLUTION, raise_recursion_limit, token_location
from .tokens import Token


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    METHOD = auto()
    INITIALIZER = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()


class Resolver:
    def __init__(self):
        # each scope maps name -> defined?  (False while the initializer runs)
        self.scopes: List[Dict[str, bool]] = []
        self.locals: Dict[Expr, int] = {}
        self.diagnostics: List[Diagnostic] = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        # line of the last token seen, for errors that have no token of their own
        self.line = 1
        raise_recursion_limit()

    def resolve(self, statements: List[Stmt]) -> Dict[Expr, int]:
        for stmt in statements:
            depth = len(self.scopes)
            function, klass = self.current_function, self.current_class
            try:
                self.resolve_stmt(stmt)
            except RecursionError:
                # drop whatever the abandoned walk left behind and go on
                del self.scopes[depth:]
                self.current_function, self.current_class = function, klass
                self.diagnostics.append(Diagnostic(RESOLUTION, self.line, 'Expression nested too deeply.'))
        return self.locals

    def resolve_stmt(self, node: Stmt):
        if isinstance(node, Block):
            self.begin_scope()
            self.resolve(node.statements)
            self.end_scope()
            return
        if isinstance(node, Var):
            self.declare(node.name)
            if node.initializer is not None:
                self.resolve_expr(node.initializer)
            self.define(node.name)
            return
        if isinstance(node, Function):
            # defined before the body so the function can call itself
            self.declare(node.name)
            self.define(node.name)
            self.resolve_function(node, FunctionType.FUNCTION)
            return
        if isinstance(node, Class):
            enclosing_class = self.current_class
            self.current_class = ClassType.CLASS
            self.declare(node.name)
            self.define(node.name)
            self.begin_scope()
            self.scopes[-1]['this'] = True
            for method in node.methods:
                kind = FunctionType.INITIALIZER if method.name.lexeme == 'init' else FunctionType.METHOD
                self.resolve_function(method, kind)
            self.end_scope()
            self.current_class = enclosing_class
            return
        if isinstance(node, Expression):
            self.resolve_expr(node.expression)
            return
        if isinstance(node, Print):
            self.resolve_expr(node.expression)
            return
        if isinstance(node, If):
            self.resolve_expr(node.condition)
            self.resolve_stmt(node.then_branch)
            if node.else_branch is not None:
                self.resolve_stmt(node.else_branch)
            return
        if isinstance(node, While):
            self.resolve_expr(node.condition)
            self.resolve_stmt(node.body)
            return
        if isinstance(node, Return):
            self.line = node.keyword.line
            if self.current_function == FunctionType.NONE:
                self.error(node.keyword, "Can't return from top-level code.")
            if node.value is not None:
                if self.current_function == FunctionType.INITIALIZER:
                    self.error(node.keyword, "Can't return a value from an initializer.")
                self.resolve_expr(node.value)
            return
        raise NotImplementedError(f"resolve: unexpected node type {type(node)}")

    def resolve_expr(self, node: Expr):
        if isinstance(node, Variable):
            if self.scopes and self.scopes[-1].get(node.name.lexeme) is False:
                self.error(node.name, "Can't read local variable in its own initializer.")
            self.resolve_local(node, node.name)
            return
        if isinstance(node, Assign):
            self.resolve_expr(node.value)
            self.resolve_local(node, node.name)
            return
        if isinstance(node, This):
            if self.current_class == ClassType.NONE:
                self.error(node.keyword, "Can't use 'this' outside of a class.")
                return
            self.resolve_local(node, node.keyword)
            return
        if isinstance(node, (Binary, Logical)):
            self.resolve_expr(node.left)
            self.resolve_expr(node.right)
            return
        if isinstance(node, Unary):
            self.resolve_expr(node.right)
            return
        if isinstance(node, Grouping):
            self.resolve_expr(node.expression)
            return
        if isinstance(node, Call):
            self.resolve_expr(node.callee)
            for argument in node.arguments:
                self.resolve_expr(argument)
            return
        if isinstance(node, Get):
            self.resolve_expr(node.object)
            return
        if isinstance(node, Set):
            self.resolve_expr(node.value)
            self.resolve_expr(node.object)
            return
        if isinstance(node, Literal):
            return
        raise NotImplementedError(f"resolve: unexpected node type {type(node)}")

    def resolve_function(self, function: Function, kind: FunctionType):
        enclosing_function = self.current_function
        self.current_function = kind
        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve(function.body)
        self.end_scope()
        self.current_function = enclosing_function

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name: Token):
        self.line = name.line
        # globals are not tracked
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.error(name, 'Already a variable with this name in this scope.')
        scope[name.lexeme] = False

    def define(self, name: Token):
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr: Expr, name: Token):
        self.line = name.line
        for hops, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.locals[expr] = hops
                return

    def error(self, token: Token, message: str):
        self.diagnostics.append(Diagnostic(RESOLUTION, token.line, message, token_location(token)))


def resolve_program(statements: List[Stmt]):
    """Resolve `statements`, returning the hop-count table and diagnostics."""
    resolver = Resolver()
    table = resolver.resolve(statements)
    return table, resolver.diagnostics
