"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [script]
    python -m lox [-v...] --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --no-color    Print diagnostics without colours

Without a script the interpreter starts an interactive prompt. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit codes follow sysexits: 64 for usage errors, 65 when the program has
static (lexical, syntax or resolution) errors, 66 when the input file
cannot be read and 70 for runtime errors.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj
from .report import report
from .session import Session
from .shell import Shell

EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def read_file(path: Path) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError:
        print(f"Error: file {path} could not be read", file=sys.stderr)
        sys.exit(EX_NOINPUT)


def exit_code(session: Session) -> int:
    if session.had_error:
        return EX_DATAERR
    if session.had_runtime_error:
        return EX_SOFTWARE
    return 0


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--no-color', action='store_true', help='print diagnostics without colours')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='Lox script (.lox) to execute')
    args = parser.parse_args(argv)
    color = not args.no_color

    if (args.emit_ast or args.ast) and args.script:
        parser.print_usage(sys.stderr)
        sys.exit(EX_USAGE)

    session = Session(debug_level=args.v)
    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            statements = session.compile(read_file(program_file))
            if session.had_error:
                report(session.diagnostics, color=color)
                sys.exit(EX_DATAERR)
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Execute from AST JSON
        if args.ast:
            try:
                statements = program_from_obj(json.loads(read_file(Path(args.ast))))
            except (ValueError, KeyError, TypeError, RecursionError) as e:
                print(f"Error: invalid AST file {args.ast}: {e}", file=sys.stderr)
                sys.exit(EX_DATAERR)
            report(session.execute(statements), color=color)
            sys.exit(exit_code(session))

        # Default: execute script, or start the prompt
        if args.script:
            report(session.run(read_file(Path(args.script))), color=color)
            sys.exit(exit_code(session))

        Shell(session, color=color).cmdloop()
    finally:
        session.close()


if __name__ == '__main__':
    main()
