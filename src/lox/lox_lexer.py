"""
Lexical analyzer for the Lox language.

This module converts raw source text into a token stream:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with kind, lexeme, optional literal payload and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace, line comments (``//``) and block comments (``/* ... */``)
    - Maximal munch for ``!=``, ``==``, ``>=`` and ``<=``
    - Recognizes:
        * Identifiers and keywords
        * Numbers (integer and decimal, always read as floats)
        * Strings (single-line, no escape sequences)
        * Operators and punctuation

Lexical errors (unexpected characters, unterminated strings or block comments)
are reported to an ``ErrorReporter`` and scanning continues, so one pass finds
every lexical error in the input.

Example:
    >>> tokens = scan("print 42;")
    >>> tokens[1]
    Token(NUMBER, 42)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - scan
"""

import logging
from typing import Any

from lox.lox_constants import (
    EOF,
    IDENT,
    NUMBER,
    STRING,
    compound_tokens,
    keywords,
    single_char_tokens,
)
from lox.lox_errors import ErrorReporter
from lox.lox_values import FALSE_VALUE, NIL_VALUE, TRUE_VALUE, Value

logger = logging.getLogger("lox.lexer")
logger.addHandler(logging.NullHandler())

keyword_literals: dict[str, Value] = {
    "TRUE": TRUE_VALUE,
    "FALSE": FALSE_VALUE,
    "NIL": NIL_VALUE,
}


def is_digit(ch: str) -> bool:
    return len(ch) == 1 and "0" <= ch <= "9"


def is_alpha(ch: str) -> bool:
    return len(ch) == 1 and ("a" <= ch <= "z" or "A" <= ch <= "Z" or ch == "_")


def is_alnum(ch: str) -> bool:
    return is_alpha(ch) or is_digit(ch)


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character ``offset`` places ahead, or ``""`` when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Lox language.

    Attributes:
        type (str): The token kind (e.g. 'IDENT', 'NUMBER', 'BANG_EQUAL', 'EOF').
        value (str): The lexeme. For strings this is the content between the quotes.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
        literal (Value | None): Payload for number, string, true, false and nil tokens.
    """

    __slots__ = ("type", "value", "line", "col", "literal")

    def __init__(
        self,
        type_: str,
        value: str,
        line: int = 0,
        col: int = 0,
        literal: Value | None = None,
    ):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col
        self.literal = literal

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.literal == other.literal
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Lox language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        reporter (ErrorReporter): Receives lexical diagnostics.
    """

    def __init__(
        self, stream: CharacterStream, reporter: ErrorReporter | None = None
    ) -> None:
        self.stream = stream
        self.reporter = reporter if reporter is not None else ErrorReporter()

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips whitespace and both comment forms."""
        while not self.stream.end_of_file():
            ch = self.peek()
            if ch in " \t\r\n":
                self.advance()
            elif ch == "/" and self.peek(1) == "/":
                self.skip_comment()
            elif ch == "/" and self.peek(1) == "*":
                self.skip_block_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances through the stream until the end of a comment line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def skip_block_comment(self) -> None:
        line, col = self.stream.line, self.stream.column
        self.advance()
        self.advance()
        while not self.stream.end_of_file():
            if self.peek() == "*" and self.peek(1) == "/":
                self.advance()
                self.advance()
                return
            self.advance()
        self.reporter.error(line, col, "Unterminated block comment.")

    def match_operator(self) -> Token | None:
        """Matches punctuation and operators, preferring the two-character forms."""
        line, col = self.stream.line, self.stream.column
        ch = self.peek()

        if ch in compound_tokens:
            self.advance()
            single, double = compound_tokens[ch]
            if self.peek() == "=":
                self.advance()
                return Token(double, ch + "=", line, col)
            return Token(single, ch, line, col)

        if ch in single_char_tokens:
            self.advance()
            return Token(single_char_tokens[ch], ch, line, col)

        return None

    def identifier(self, line: int, col: int) -> Token:
        ident = ""
        while is_alnum(self.peek()):
            ident += self.advance()
        if ident in keywords:
            kind = keywords[ident]
            return Token(kind, ident, line, col, keyword_literals.get(kind))
        return Token(IDENT, ident, line, col)

    def number(self, line: int, col: int) -> Token:
        num = ""
        while is_digit(self.peek()):
            num += self.advance()
        # A trailing dot is left for the DOT token unless a digit follows it.
        if self.peek() == "." and is_digit(self.peek(1)):
            num += self.advance()
            while is_digit(self.peek()):
                num += self.advance()
        return Token(NUMBER, num, line, col, Value.number(float(num)))

    def string(self, line: int, col: int) -> Token | None:
        self.advance()
        val = ""
        while not self.stream.end_of_file() and self.peek() not in ('"', "\n"):
            val += self.advance()
        if self.peek() == '"':
            self.advance()
            return Token(STRING, val, line, col, Value.string(val))

        self.reporter.error(line, col, "Unterminated string.")
        if self.peek() == "\n":
            self.advance()
        return None

    def scan_token(self) -> Token | None:
        """Scans one token at the current position, or returns None after an error."""
        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        if is_alpha(ch):
            return self.identifier(line, col)

        if is_digit(ch):
            return self.number(line, col)

        if ch == '"':
            return self.string(line, col)

        token = self.match_operator()
        if token:
            return token

        self.advance()
        self.reporter.error(line, col, f"Unexpected character '{ch}'.")
        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token, or EOF once the input is exhausted."""
        while True:
            self.skip_whitespace()
            if self.stream.end_of_file():
                return Token(EOF, "", self.stream.line, self.stream.column)
            token = self.scan_token()
            if token is not None:
                return token

    def scan_tokens(self) -> list[Token]:
        """Scans the whole stream; the result always ends with exactly one EOF token."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == EOF:
                break
        logger.debug(
            "scanned %d tokens with %d diagnostics",
            len(tokens),
            len(self.reporter.diagnostics),
        )
        return tokens


def scan(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """Convenience wrapper: tokenize ``source`` in one call."""
    return Lexer(CharacterStream(source), reporter).scan_tokens()


__all__ = ["CharacterStream", "Lexer", "Token", "is_alpha", "is_digit", "scan"]
