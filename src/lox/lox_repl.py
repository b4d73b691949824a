"""
Interactive Lox prompt.

Reads one line at a time and runs it as an independent program: every line
gets a fresh environment and a fresh error reporter, so a variable declared on
one line is gone on the next. Diagnostics are printed but never end the
session. An empty line or end of input leaves the REPL.
"""

import io
import traceback

from lox.lox_cli import EXIT_OK, run_source

PROMPT = "> "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[internal error] >>>")
    print(buf.getvalue())


def start_repl(print_ast: bool = False, ast_style: str = "lisp") -> int:
    print("Lox REPL. Enter an empty line to leave.")
    while True:
        try:
            line = input(PROMPT)
        except (KeyboardInterrupt, EOFError):
            print()
            break
        if not line.strip():
            break
        try:
            run_source(line, print_ast=print_ast, ast_style=ast_style)
        except NotImplementedError:
            print_traceback()
    print("Exiting Lox REPL.")
    return EXIT_OK


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
