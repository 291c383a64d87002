from pathlib import Path

from lox.parser import parse_program
from lox.resolver import resolve_program
from lox.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1(capsys):
    with open(EXAMPLES / 'program_1.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    statements, diagnostics = parse_program(source)
    assert diagnostics == []
    table, diagnostics = resolve_program(statements)
    assert diagnostics == []
    interp = Interpreter()
    interp.add_resolutions(table)
    assert interp.interpret(statements) == []
    out = capsys.readouterr().out.strip()
    assert out == 'Hello, world!'
