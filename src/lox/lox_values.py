"""
Runtime and literal values for the Lox language.

A single ``Value`` type is used both for literal payloads produced by the lexer
and for values computed by the interpreter. It is a tagged union over four
tags:

    - ``number``: a Python ``float``
    - ``string``: a Python ``str``
    - ``boolean``: a Python ``bool``
    - ``nil``: no payload

Equality is structural and tag-sensitive, so ``Value.number(1.0)`` never equals
``Value.boolean(True)`` even though ``1.0 == True`` in Python.

Example:
    >>> str(Value.number(7.0))
    '7'
    >>> Value.string("a") == Value.string("a")
    True
"""

import math
from decimal import Decimal
from typing import Any

NUMBER = "number"
STRING = "string"
BOOLEAN = "boolean"
NIL = "nil"

VALUE_TAGS = (NUMBER, STRING, BOOLEAN, NIL)


def format_number(n: float) -> str:
    """Render a float the way Lox prints it.

    Integral values drop the trailing ``.0`` and nothing is ever printed in
    exponent form, so the output can always be lexed back as a number literal.
    """
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    text = format(Decimal(repr(n)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Value:
    """A tagged Lox value.

    Attributes:
        tag (str): One of ``number``, ``string``, ``boolean`` or ``nil``.
        payload (float | str | bool | None): The Python value for the tag.
    """

    __slots__ = ("tag", "payload")

    def __init__(self, tag: str, payload: float | str | bool | None = None) -> None:
        if tag not in VALUE_TAGS:
            raise ValueError(f"Unknown value tag: {tag!r}")
        self.tag = tag
        self.payload = payload

    @classmethod
    def number(cls, n: float) -> "Value":
        return cls(NUMBER, float(n))

    @classmethod
    def string(cls, s: str) -> "Value":
        return cls(STRING, s)

    @classmethod
    def boolean(cls, b: bool) -> "Value":
        return cls(BOOLEAN, bool(b))

    @classmethod
    def nil(cls) -> "Value":
        return cls(NIL)

    @property
    def is_number(self) -> bool:
        return self.tag == NUMBER

    @property
    def is_string(self) -> bool:
        return self.tag == STRING

    @property
    def is_nil(self) -> bool:
        return self.tag == NIL

    def is_truthy(self) -> bool:
        """``nil`` and ``false`` are falsy; every other value is truthy."""
        if self.tag == NIL:
            return False
        if self.tag == BOOLEAN:
            return bool(self.payload)
        return True

    def to_source(self) -> str:
        """Render the value as a literal that the lexer reads back unchanged."""
        if self.tag == STRING:
            return f'"{self.payload}"'
        return str(self)

    def __str__(self) -> str:
        if self.tag == NUMBER:
            assert isinstance(self.payload, float)  # for mypy
            return format_number(self.payload)
        if self.tag == BOOLEAN:
            return "true" if self.payload else "false"
        if self.tag == NIL:
            return "nil"
        return str(self.payload)

    def __repr__(self) -> str:
        if self.tag == NIL:
            return "Value(nil)"
        return f"Value({self.tag}, {self.payload!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return False
        if self.tag != other.tag:
            return False
        # NaN is never equal to itself, matching IEEE-754
        return bool(self.payload == other.payload)

    def __hash__(self) -> int:
        return hash((self.tag, self.payload))


NIL_VALUE = Value.nil()
TRUE_VALUE = Value.boolean(True)
FALSE_VALUE = Value.boolean(False)

__all__ = [
    "BOOLEAN",
    "FALSE_VALUE",
    "NIL",
    "NIL_VALUE",
    "NUMBER",
    "STRING",
    "TRUE_VALUE",
    "VALUE_TAGS",
    "Value",
    "format_number",
]
