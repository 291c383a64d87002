from lox import Session
from lox.shell import Shell


def make_shell():
    return Shell(Session(), color=False)


def test_globals_persist_across_lines(capsys):
    shell = make_shell()
    assert not shell.onecmd('var greeting = "hi";')
    assert not shell.onecmd('fun shout(s) { return s + "!"; }')
    assert not shell.onecmd('print shout(greeting);')
    assert capsys.readouterr().out == 'hi!\n'


def test_errors_do_not_end_the_loop(capsys):
    shell = make_shell()
    assert not shell.onecmd('print nope;')
    assert not shell.onecmd('print 1 +;')
    assert not shell.onecmd('print "still here";')
    captured = capsys.readouterr()
    assert captured.out == 'still here\n'
    assert "Undefined variable 'nope'.\n[line 1]" in captured.err
    assert "[line 1] Error at ';': Expect expression." in captured.err


def test_lines_named_like_commands_are_lox(capsys):
    shell = make_shell()
    assert not shell.onecmd('var help = 1;')
    assert not shell.onecmd('help = help + 1;')
    assert not shell.onecmd('var exit_code = help;')
    assert not shell.onecmd('print exit_code;')
    assert capsys.readouterr().out == '2\n'


def test_exit_and_end_of_input_stop_the_loop(capsys):
    shell = make_shell()
    assert not shell.onecmd('')
    assert shell.onecmd('exit')
    assert shell.onecmd('  exit  ')
    assert shell.onecmd('EOF')
    assert capsys.readouterr().out == '\n'
