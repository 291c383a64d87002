from pathlib import Path

from lox import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_recursive_fibonacci(capsys):
    with open(EXAMPLES / 'program_5.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    diagnostics = run_program(source)
    assert diagnostics == []
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['0', '1', '1', '2', '3', '5', '8', '13', '21', '34']
