"""
Diagnostics and error types for the Lox pipeline.

Two disjoint exception hierarchies share the ``LoxError`` base:

    LoxSyntaxError
        ParseError                  (kind: ParseErrorKind)
    LoxRuntimeError
        UndefinedVariableError
        UninitializedVariableError
        ScopePopError
        OperandTypeError

Syntax errors are recovered by the parser (synchronize) and runtime errors by
the interpreter (substitute ``nil``). Neither ever escapes the stage that
raised it: both are handed to an ``ErrorReporter``, which prints one line per
diagnostic and remembers that something went wrong.

Example:
    >>> reporter = ErrorReporter(sys.stdout)
    >>> _ = reporter.error(1, 5, "Unexpected character '@'.")
    [Line 1, Column 5] Error: Unexpected character '@'.
    >>> reporter.had_error
    True
"""

import enum
import sys
from typing import TextIO


class LoxError(Exception):
    """Base class for every diagnosable Lox error.

    Attributes:
        message (str): Human-readable description.
        line (int): 1-based source line (0 when unknown).
        col (int): 1-based source column (0 when unknown).
    """

    def __init__(self, message: str, line: int = 0, col: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.col = col


class LoxSyntaxError(LoxError):
    """Errors raised while scanning or parsing."""


class ParseErrorKind(enum.Enum):
    UNEXPECTED_TOKEN = "unexpected token"
    MISSING_TOKEN = "missing token"
    UNEXPECTED_EOF = "unexpected end of input"


class ParseError(LoxSyntaxError):
    """A syntax error tied to the token where parsing failed."""

    def __init__(
        self, kind: ParseErrorKind, message: str, line: int = 0, col: int = 0
    ) -> None:
        super().__init__(message, line, col)
        self.kind = kind


class LoxRuntimeError(LoxError):
    """Errors raised while evaluating a program."""


class UndefinedVariableError(LoxRuntimeError):
    def __init__(self, name: str, line: int = 0, col: int = 0) -> None:
        super().__init__(f"Undefined variable '{name}'.", line, col)
        self.name = name


class UninitializedVariableError(LoxRuntimeError):
    def __init__(self, name: str, line: int = 0, col: int = 0) -> None:
        super().__init__(f"Uninitialized variable '{name}'.", line, col)
        self.name = name


class ScopePopError(LoxRuntimeError):
    def __init__(self, line: int = 0, col: int = 0) -> None:
        super().__init__("Cannot pop the global scope.", line, col)


class OperandTypeError(LoxRuntimeError):
    """An operator was applied to values of the wrong type."""


class Diagnostic:
    """A single reported error with its source position."""

    def __init__(self, line: int, col: int, message: str) -> None:
        self.line = line
        self.col = col
        self.message = message

    def __str__(self) -> str:
        return f"[Line {self.line}, Column {self.col}] Error: {self.message}"

    def __repr__(self) -> str:
        return f"Diagnostic({self.line}, {self.col}, {self.message!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Diagnostic)
            and self.line == other.line
            and self.col == other.col
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((self.line, self.col, self.message))


class ErrorReporter:
    """Collects diagnostics for one pipeline run and prints them as they arrive.

    The reporter never raises. Each stage consults ``had_error`` afterwards to
    decide whether the next stage should run.

    Attributes:
        stream (TextIO | None): Where diagnostics are written. ``None`` means
            ``sys.stderr`` at the time of reporting.
        diagnostics (list[Diagnostic]): Everything reported so far, in order.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.diagnostics: list[Diagnostic] = []

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    def error(self, line: int, col: int, message: str) -> Diagnostic:
        """Record and print a diagnostic at ``line``/``col``."""
        diagnostic = Diagnostic(line, col, message)
        self.diagnostics.append(diagnostic)
        print(diagnostic, file=self.stream if self.stream is not None else sys.stderr)
        return diagnostic

    def report(self, exc: LoxError) -> Diagnostic:
        """Record a raised ``LoxError`` using its own position and message."""
        return self.error(exc.line, exc.col, exc.message)

    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def reset(self) -> None:
        self.diagnostics.clear()


__all__ = [
    "Diagnostic",
    "ErrorReporter",
    "LoxError",
    "LoxRuntimeError",
    "LoxSyntaxError",
    "OperandTypeError",
    "ParseError",
    "ParseErrorKind",
    "ScopePopError",
    "UndefinedVariableError",
    "UninitializedVariableError",
]
