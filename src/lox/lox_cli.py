"""
Lox CLI Entrypoint.

This module provides the command-line interface for running Lox programs.

Features:
    - Run a script file once, or start the interactive REPL when no script is given.
    - Optionally print the parsed program before running it.
    - Map pipeline results to conventional exit codes.

Example usage:
    lox hello.lox
    lox hello.lox --ast --ast-style source
    lox --verbose

Exit codes:
    0   success
    64  wrong command-line usage
    65  a scan, parse or runtime error was reported
    66  the script file does not exist
    74  any other I/O failure while reading the script

Functions:
    run_source(source, ...) -> int:
        Executes the full pipeline (scan → parse → interpret) and returns the exit code.

    run_file(path, ...) -> int:
        Reads a script and hands it to run_source.

    main(argv=None) -> int:
        Parses CLI arguments and dispatches to the REPL or run_file.
"""

import argparse
import logging
import sys
from typing import TextIO

from lox.lox_environment import Environment
from lox.lox_errors import ErrorReporter
from lox.lox_interpreter import Interpreter
from lox.lox_lexer import CharacterStream, Lexer
from lox.lox_parser import Parser
from lox.lox_printer import RENDERERS, AstPrinter

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_DATAERR = 65
EXIT_NOINPUT = 66
EXIT_IOERR = 74

logger = logging.getLogger("lox.cli")
logger.addHandler(logging.NullHandler())


def run_source(
    source: str,
    out: TextIO | None = None,
    err: TextIO | None = None,
    print_ast: bool = False,
    ast_style: str = "lisp",
    environment: Environment | None = None,
) -> int:
    """
    Run the Lox pipeline on ``source``.

    Each stage runs only if the previous one reported nothing, so a program with
    scan or parse errors is never evaluated.

    Args:
        source (str): Lox source code.
        out (TextIO | None): Destination for ``print`` and the AST dump. Defaults to stdout.
        err (TextIO | None): Destination for diagnostics. Defaults to stderr.
        print_ast (bool): If True, prints the parsed program before running it.
        ast_style (str): Printer style for the AST dump ('lisp' or 'source').
        environment (Environment | None): Scopes to run against; a fresh one by default.

    Returns:
        int: ``EXIT_OK`` or ``EXIT_DATAERR``.
    """
    reporter = ErrorReporter(err)

    # 1. Scanning
    tokens = Lexer(CharacterStream(source), reporter).scan_tokens()
    if reporter.had_error:
        return EXIT_DATAERR

    # 2. Parsing
    program = Parser(tokens, reporter).parse()
    if reporter.had_error:
        return EXIT_DATAERR

    # 3. Optional AST dump
    if print_ast:
        print(
            AstPrinter(ast_style).print_program(program),
            file=out if out is not None else sys.stdout,
        )

    # 4. Interpretation
    Interpreter(reporter, environment, out).interpret(program)
    if reporter.had_error:
        return EXIT_DATAERR
    return EXIT_OK


def run_file(
    path: str,
    out: TextIO | None = None,
    err: TextIO | None = None,
    print_ast: bool = False,
    ast_style: str = "lisp",
) -> int:
    """Read the script at ``path`` and run it once."""
    err_stream = err if err is not None else sys.stderr
    try:
        with open(path, encoding="utf-8") as f:
            source = f.read()
    except FileNotFoundError:
        print(f"Error: File '{path}' not found", file=err_stream)
        return EXIT_NOINPUT
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file '{path}': {e}", file=err_stream)
        return EXIT_IOERR

    logger.debug("read %d characters from %s", len(source), path)
    return run_source(source, out, err, print_ast=print_ast, ast_style=ast_style)


class LoxArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 64."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = LoxArgumentParser(prog="lox", description="Run a Lox script or start a REPL.")
    parser.add_argument("script", nargs="*", help="Script to run (omit for the REPL)")
    parser.add_argument(
        "--ast", action="store_true", help="Print the parsed program before running it"
    )
    parser.add_argument(
        "--ast-style",
        choices=tuple(RENDERERS),
        default="lisp",
        help="Style for --ast (default: lisp)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log pipeline stages to stderr"
    )
    return parser


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="[%(name)s] %(message)s",
        )


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Lox CLI.

    - No script: launches the REPL.
    - One script: runs it and returns the pipeline's exit code.
    - More than one script: prints usage and returns 64.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if len(args.script) > 1:
        print("Usage: lox [script]", file=sys.stderr)
        return EXIT_USAGE

    if not args.script:
        from lox.lox_repl import start_repl

        return start_repl(print_ast=args.ast, ast_style=args.ast_style)

    return run_file(args.script[0], print_ast=args.ast, ast_style=args.ast_style)


if __name__ == "__main__":
    sys.exit(main())
