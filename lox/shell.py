"""Interactive mode for the Lox interpreter. Uses cmd as backend."""

import cmd

from .report import report


class Shell(cmd.Cmd):
    """Lox read-eval-print loop.

    Every line is run through the same session, so variables, functions
    and classes defined on one line can be used on the next. Errors are
    reported and the loop carries on.
    """
    intro = "Lox interpreter :: Python backend\nType 'exit' or press Ctrl-D to quit."
    prompt = "> "

    def __init__(self, session, color=True, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self.color = color

    def onecmd(self, line):
        """Only a bare `exit` (or end of input) is a shell command; any
        other line is Lox source, even one starting with `help` or `exit`."""
        command = line.strip()
        if not command:
            return self.emptyline()
        if command == 'EOF':
            return self.do_EOF('')
        if command == 'exit':
            return self.do_exit('')
        return self.default(line)

    def default(self, line):
        """Runs arbitrary Lox source."""
        diagnostics = self.session.run(line)
        report(diagnostics, color=self.color)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
