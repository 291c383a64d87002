"""Tree-walking interpreter for Lox.

The interpreter executes a resolved list of statements. It keeps one
"current environment" cursor that blocks and calls swap out and always
restore on the way back, also when a runtime error unwinds through
them. Local variables are looked up with the hop counts computed by the
resolver; anything without a hop count lives in the global environment.

Statement execution returns ``None`` to continue normally or a
`ReturnSignal` carrying the returned value. Every routine that runs
nested statements passes that outcome upward until it reaches the
function call that started the body.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable,
    Assign, Call, Get, Set, This, Expression, Print, Var, Block, If,
    While, Function, Return, Class,
)
from .builtin_function import populate_globals
from .environment import Environment
from .errors import Diagnostic, LoxRuntimeError, LoxStackOverflow, ReturnSignal, raise_recursion_limit
from .tokens import Token, TokenType
from .types import (
    LoxCallable, LoxClass, LoxFunction, LoxInstance,
    divide, is_equal, is_number, is_truthy, stringify, type_name,
)


class Interpreter:
    """Core interpreter that executes Lox ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.globals = populate_globals(Environment())
        self.environment = self.globals
        self.locals: Dict[Expr, int] = {}
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None
        raise_recursion_limit()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def add_resolutions(self, table: Dict[Expr, int]):
        self.locals.update(table)

    def interpret(self, statements: List[Stmt]) -> List[Diagnostic]:
        """Run `statements` until they finish or the first runtime error.

        Returns an empty list on success, otherwise a single runtime
        diagnostic. Output printed before the error is kept.
        """
        try:
            for stmt in statements:
                self.execute(stmt)
        except LoxRuntimeError as ex:
            self.debug(f"runtime error at line {ex.line}: {ex.message}")
            return [ex.to_diagnostic()]
        return []

    def execute_block(self, statements: List[Stmt], environment: Environment) -> Optional[ReturnSignal]:
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                result = self.execute(stmt)
                if isinstance(result, ReturnSignal):
                    return result
            return None
        finally:
            self.environment = previous

    def execute(self, node: Stmt) -> Optional[ReturnSignal]:
        if isinstance(node, Expression):
            self.evaluate(node.expression)
            return None
        if isinstance(node, Print):
            value = self.evaluate(node.expression)
            print(stringify(value))
            return None
        if isinstance(node, Var):
            value = self.evaluate(node.initializer) if node.initializer is not None else None
            self.environment.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {stringify(value)}")
            return None
        if isinstance(node, Block):
            return self.execute_block(node.statements, Environment(self.environment))
        if isinstance(node, If):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {stringify(cond)} -> {truthy}")
            if truthy:
                return self.execute(node.then_branch)
            if node.else_branch is not None:
                return self.execute(node.else_branch)
            return None
        if isinstance(node, While):
            while True:
                cond = self.evaluate(node.condition)
                if self.debug_level >= 3:
                    self.debug(f"while condition {stringify(cond)}")
                if not is_truthy(cond):
                    break
                res = self.execute(node.body)
                if isinstance(res, ReturnSignal):
                    return res
            return None
        if isinstance(node, Function):
            # the closure is the scope that now holds the function's own name
            function = LoxFunction(node, self.environment)
            self.environment.define(node.name.lexeme, function)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name.lexeme}")
            return None
        if isinstance(node, Return):
            value = self.evaluate(node.value) if node.value is not None else None
            return ReturnSignal(value)
        if isinstance(node, Class):
            self.environment.define(node.name.lexeme, None)
            methods = {
                method.name.lexeme: LoxFunction(method, self.environment, method.name.lexeme == 'init')
                for method in node.methods
            }
            klass = LoxClass(node.name.lexeme, methods)
            self.environment.assign(node.name, klass)
            if self.debug_level >= 2:
                self.debug(f"define class {klass.name} with methods {sorted(methods)}")
            return None
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Variable):
            return self.look_up_variable(node.name, node)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            distance = self.locals.get(node)
            if distance is not None:
                self.environment.assign_at(distance, node.name, value)
            else:
                self.globals.assign(node.name, value)
            return value
        if isinstance(node, Unary):
            right = self.evaluate(node.right)
            if node.operator.type == TokenType.MINUS:
                self.check_number_operand(node.operator, right)
                return -right
            if node.operator.type == TokenType.BANG:
                return not is_truthy(right)
            raise LoxRuntimeError(node.operator, f"Unsupported unary operator {node.operator.lexeme}.")
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            if node.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right)
        if isinstance(node, Binary):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee)
            arguments = [self.evaluate(argument) for argument in node.arguments]
            try:
                return self.call_function(callee, arguments, node.paren)
            except RecursionError:
                raise LoxStackOverflow(node.paren) from None
        if isinstance(node, Get):
            obj = self.evaluate(node.object)
            if isinstance(obj, LoxInstance):
                return obj.get(node.name)
            raise LoxRuntimeError(node.name, 'Only instances have properties.')
        if isinstance(node, Set):
            obj = self.evaluate(node.object)
            if not isinstance(obj, LoxInstance):
                raise LoxRuntimeError(node.name, 'Only instances have fields.')
            value = self.evaluate(node.value)
            obj.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"set {obj!r}.{node.name.lexeme} = {stringify(value)}")
            return value
        if isinstance(node, This):
            return self.look_up_variable(node.keyword, node)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def look_up_variable(self, name: Token, expr: Expr) -> Any:
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def call_function(self, callee: Any, arguments: List[Any], paren: Token) -> Any:
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(paren, 'Can only call functions and classes.')
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        if self.debug_level >= 1:
            self.debug(f"call {callee!r} with {len(arguments)} arguments (line {paren.line})")
        result = callee.call(self, arguments)
        if self.debug_level >= 1:
            self.debug(f"return from {callee!r}: {stringify(result)}")
        return result

    def check_number_operand(self, operator: Token, operand: Any):
        if is_number(operand):
            return
        raise LoxRuntimeError(operator, 'Operand must be a number.')

    def check_number_operands(self, operator: Token, left: Any, right: Any):
        if is_number(left) and is_number(right):
            return
        raise LoxRuntimeError(operator, 'Operands must be numbers.')

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not is_equal(a, b)
        if op == TokenType.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise LoxRuntimeError(operator, 'Operands must be two numbers or two strings.')
        self.check_number_operands(operator, a, b)
        if op == TokenType.MINUS:
            return a - b
        if op == TokenType.STAR:
            return a * b
        if op == TokenType.SLASH:
            return divide(a, b)
        if op == TokenType.GREATER:
            return a > b
        if op == TokenType.GREATER_EQUAL:
            return a >= b
        if op == TokenType.LESS:
            return a < b
        if op == TokenType.LESS_EQUAL:
            return a <= b
        raise LoxRuntimeError(operator, f"Unsupported binary operator {operator.lexeme}.")
