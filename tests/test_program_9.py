from pathlib import Path

from lox import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_9_arity_mismatch(capsys):
    with open(EXAMPLES / 'program_9.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    diagnostics = run_program(source)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # the failing call never enters the body
    assert out_lines == ['body ran', '3']
    assert [str(d) for d in diagnostics] == ['Expected 2 arguments but got 1.\n[line 7]']
