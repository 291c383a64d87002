from pathlib import Path

from lox import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_static_closure_binding(capsys):
    with open(EXAMPLES / 'program_6.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    diagnostics = run_program(source)
    assert diagnostics == []
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['global', 'global', 'block']
