from pathlib import Path

from lox import run_program
from lox.errors import RUNTIME

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_type_error_stops_run(capsys):
    with open(EXAMPLES / 'program_8.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    diagnostics = run_program(source)
    out = capsys.readouterr().out.strip()
    # output before the error stays, nothing after it runs
    assert out == 'before'
    assert len(diagnostics) == 1
    assert diagnostics[0].phase == RUNTIME
    assert diagnostics[0].line == 2
    assert diagnostics[0].message == 'Operands must be two numbers or two strings.'
