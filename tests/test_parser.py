from lox import run_program
from lox.ast import (
    Assign, Binary, Block, Call, Class, Expression, Function, Get, Grouping,
    If, Literal, Logical, Print, Return, Set, This, Unary, Var, Variable, While,
)
from lox.errors import SYNTAX
from lox.parser import parse_program
from lox.tokens import TokenType


def parse_ok(source):
    statements, diagnostics = parse_program(source)
    assert diagnostics == []
    return statements


def parse_expr(source):
    (stmt,) = parse_ok(source + ';')
    assert isinstance(stmt, Expression)
    return stmt.expression


def test_precedence():
    expr = parse_expr('1 + 2 * 3 == 7 or false and !nil')
    assert isinstance(expr, Logical) and expr.operator.type == TokenType.OR
    equality = expr.left
    assert isinstance(equality, Binary) and equality.operator.type == TokenType.EQUAL_EQUAL
    addition = equality.left
    assert addition.operator.type == TokenType.PLUS
    assert isinstance(addition.right, Binary) and addition.right.operator.type == TokenType.STAR
    conjunction = expr.right
    assert isinstance(conjunction, Logical) and conjunction.operator.type == TokenType.AND
    assert isinstance(conjunction.right, Unary)


def test_binary_operators_are_left_associative():
    expr = parse_expr('1 - 2 - 3')
    assert isinstance(expr.left, Binary)
    assert expr.right.value == 3.0


def test_assignment_is_right_associative():
    expr = parse_expr('a = b = 1')
    assert isinstance(expr, Assign) and expr.name.lexeme == 'a'
    assert isinstance(expr.value, Assign) and expr.value.name.lexeme == 'b'


def test_property_assignment_becomes_set():
    expr = parse_expr('a.b.c = 3')
    assert isinstance(expr, Set)
    assert expr.name.lexeme == 'c'
    assert isinstance(expr.object, Get) and expr.object.name.lexeme == 'b'


def test_chained_calls_and_gets():
    expr = parse_expr('f(1)(2).g(x, y)')
    assert isinstance(expr, Call) and len(expr.arguments) == 2
    assert isinstance(expr.callee, Get) and expr.callee.name.lexeme == 'g'
    inner = expr.callee.object
    assert isinstance(inner, Call) and isinstance(inner.callee, Call)


def test_grouping_and_literals():
    expr = parse_expr('("a")')
    assert isinstance(expr, Grouping)
    assert expr.expression.value == 'a'
    assert parse_expr('nil').value is None
    assert parse_expr('true').value is True


def test_invalid_assignment_target_is_reported_but_parsing_continues():
    statements, diagnostics = parse_program('1 + 2 = 3; print 4;')
    assert [str(d) for d in diagnostics] == ["[line 1] Error at '=': Invalid assignment target."]
    assert len(statements) == 2
    assert isinstance(statements[1], Print)


def test_for_loop_is_lowered_to_while_in_blocks():
    (stmt,) = parse_ok('for (var i = 0; i < 3; i = i + 1) print i;')
    assert isinstance(stmt, Block)
    initializer, loop = stmt.statements
    assert isinstance(initializer, Var)
    assert isinstance(loop, While)
    assert isinstance(loop.body, Block)
    body, increment = loop.body.statements
    assert isinstance(body, Print)
    assert isinstance(increment, Expression) and isinstance(increment.expression, Assign)


def test_for_loop_without_clauses():
    (stmt,) = parse_ok('for (;;) print 1;')
    assert isinstance(stmt, While)
    assert isinstance(stmt.condition, Literal) and stmt.condition.value is True
    assert isinstance(stmt.body, Print)


def test_declarations():
    statements = parse_ok(
        'var a; var b = 1;'
        'fun f() { return; } fun g(x, y) { return x; }'
        'class C { init(v) { this.v = v; } get() { return this.v; } }'
        'if (a) print 1; else { print 2; }'
    )
    var_a, var_b, f, g, klass, branch = statements
    assert var_a.initializer is None
    assert isinstance(var_b.initializer, Literal)
    assert isinstance(f, Function) and f.params == []
    assert isinstance(f.body[0], Return) and f.body[0].value is None
    assert [p.lexeme for p in g.params] == ['x', 'y']
    assert isinstance(klass, Class)
    assert [m.name.lexeme for m in klass.methods] == ['init', 'get']
    get_body = klass.methods[1].body[0]
    assert isinstance(get_body.value, Get) and isinstance(get_body.value.object, This)
    assert isinstance(branch, If) and isinstance(branch.else_branch, Block)


def test_too_many_arguments_is_reported():
    args = ', '.join(str(i) for i in range(256))
    statements, diagnostics = parse_program(f'f({args});')
    assert [d.message for d in diagnostics] == ["Can't have more than 255 arguments."]
    assert len(statements[0].expression.arguments) == 256


def test_too_many_parameters_is_reported():
    params = ', '.join(f'p{i}' for i in range(256))
    _, diagnostics = parse_program(f'fun f({params}) {{}}')
    assert [d.message for d in diagnostics] == ["Can't have more than 255 parameters."]


def test_recovers_at_statement_boundaries():
    statements, diagnostics = parse_program('var 1;\nprint (;\nprint "ok";\nfun (){}\nclass A {}')
    assert all(d.phase == SYNTAX for d in diagnostics)
    assert [d.line for d in diagnostics] == [1, 2, 4]
    assert [type(s) for s in statements] == [Print, Class]


def test_error_at_end_of_input():
    _, diagnostics = parse_program('print 1')
    assert [str(d) for d in diagnostics] == ["[line 1] Error at end: Expect ';' after value."]


def test_lexical_and_syntax_errors_are_reported_together():
    _, diagnostics = parse_program('var a = @;')
    assert [d.message for d in diagnostics] == ['Unexpected character.', 'Expect expression.']


def test_deeply_nested_grouping_parses(capsys):
    assert run_program('print ' + '(' * 70 + '1' + ')' * 70 + ';') == []
    assert capsys.readouterr().out == '1\n'
    (stmt,) = parse_ok('print ' + '(' * 500 + '1' + ')' * 500 + ';')
    assert isinstance(stmt.expression, Grouping)


def test_nesting_beyond_the_host_stack_is_a_syntax_error():
    source = 'print "a";\nprint ' + '(' * 5000 + '1' + ')' * 5000 + ';\nprint "after";'
    statements, diagnostics = parse_program(source)
    assert [(d.phase, d.line, d.message) for d in diagnostics] == [
        (SYNTAX, 2, 'Expression nested too deeply.'),
    ]
    assert [type(s) for s in statements] == [Print, Print]
    assert statements[1].expression.value == 'after'
