"""Printing of diagnostics for the command-line driver.

Static errors are shown in red, runtime errors in magenta. Both go to
stderr so that a program's own output on stdout stays clean.
"""

import sys
from typing import Iterable

from termcolor import colored

from .errors import Diagnostic

ERROR = "red"
RUNTIME_ERROR = "magenta"


def format_diagnostic(diagnostic: Diagnostic, color: bool = True) -> str:
    text = str(diagnostic)
    if not color:
        return text
    hue = ERROR if diagnostic.is_static else RUNTIME_ERROR
    return colored(text, hue, attrs=["bold"])


def report(diagnostics: Iterable[Diagnostic], color: bool = True, stream=None):
    stream = stream if stream is not None else sys.stderr
    for diagnostic in diagnostics:
        print(format_diagnostic(diagnostic, color=color), file=stream)
