from pathlib import Path

from lox import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_10_bound_methods_and_initializers(capsys):
    with open(EXAMPLES / 'program_10.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    assert run_program(source) == []
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['12', 'off origin', 'true', '5', 'Point', 'Point instance', '0']
