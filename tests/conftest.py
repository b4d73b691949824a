import io
import os
from collections.abc import Callable

import pytest

from lox.lox_errors import ErrorReporter
from lox.lox_interpreter import Interpreter
from lox.lox_lexer import scan
from lox.lox_parser import Parser

# Subprocess runs of the CLI report into the same coverage data.
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

RunResult = tuple[str, ErrorReporter]


@pytest.fixture  # type: ignore[misc]
def reporter() -> ErrorReporter:
    """A reporter that writes into a buffer instead of stderr."""
    return ErrorReporter(io.StringIO())


@pytest.fixture  # type: ignore[misc]
def run_lox() -> Callable[[str], RunResult]:
    """Scan, parse and interpret a snippet; returns (stdout text, reporter)."""

    def _run(source: str) -> RunResult:
        reporter = ErrorReporter(io.StringIO())
        program = Parser(scan(source, reporter), reporter).parse()
        assert not reporter.had_error, reporter.messages()
        out = io.StringIO()
        Interpreter(reporter, out=out).interpret(program)
        return out.getvalue(), reporter

    return _run
