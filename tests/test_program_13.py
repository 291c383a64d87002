from pathlib import Path

from lox import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_13_reports_every_syntax_error(capsys):
    with open(EXAMPLES / 'program_13.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    diagnostics = run_program(source)
    assert capsys.readouterr().out == ''
    assert [str(d) for d in diagnostics] == [
        "[line 1] Error at '=': Expect variable name.",
        "[line 3] Error at 'var': Expect ';' after value.",
        "[line 4] Error at '{': Expect parameter name.",
    ]
