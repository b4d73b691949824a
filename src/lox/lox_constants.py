"""
Token vocabulary shared by the Lox lexer, parser and interpreter.

Token kinds are plain upper-case strings (``"NUMBER"``, ``"BANG_EQUAL"``,
``"WHILE"``). The tables below are the single source of truth for which
lexemes produce which kinds.

Exports:
    - single_char_tokens: one-character punctuation and operators
    - compound_tokens: operators that may take a trailing ``=``
    - keywords: reserved words
    - operator_tokens: token kind to operator symbol
    - statement_starters: kinds the parser resynchronizes on
"""

EOF = "EOF"
IDENT = "IDENT"
NUMBER = "NUMBER"
STRING = "STRING"

single_char_tokens: dict[str, str] = {
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    ",": "COMMA",
    ".": "DOT",
    ";": "SEMICOLON",
    "-": "MINUS",
    "+": "PLUS",
    "*": "STAR",
    "/": "SLASH",
}

# "!" alone is BANG, "!=" is BANG_EQUAL, and so on.
compound_tokens: dict[str, tuple[str, str]] = {
    "!": ("BANG", "BANG_EQUAL"),
    "=": ("EQUAL", "EQUAL_EQUAL"),
    ">": ("GREATER", "GREATER_EQUAL"),
    "<": ("LESS", "LESS_EQUAL"),
}

keywords: dict[str, str] = {
    "and": "AND",
    "class": "CLASS",
    "else": "ELSE",
    "false": "FALSE",
    "fun": "FUN",
    "for": "FOR",
    "if": "IF",
    "nil": "NIL",
    "or": "OR",
    "print": "PRINT",
    "return": "RETURN",
    "super": "SUPER",
    "this": "THIS",
    "true": "TRUE",
    "var": "VAR",
    "while": "WHILE",
}

operator_tokens: dict[str, str] = {
    "MINUS": "-",
    "PLUS": "+",
    "SLASH": "/",
    "STAR": "*",
    "BANG": "!",
    "BANG_EQUAL": "!=",
    "EQUAL": "=",
    "EQUAL_EQUAL": "==",
    "GREATER": ">",
    "GREATER_EQUAL": ">=",
    "LESS": "<",
    "LESS_EQUAL": "<=",
}

ARITHMETIC_OPS: frozenset[str] = frozenset({"-", "+", "/", "*"})
COMPARISON_OPS: frozenset[str] = frozenset({">", ">=", "<", "<="})
EQUALITY_OPS: frozenset[str] = frozenset({"==", "!="})
UNARY_OPS: frozenset[str] = frozenset({"!", "-"})

statement_starters: frozenset[str] = frozenset(
    {"CLASS", "FUN", "VAR", "FOR", "IF", "WHILE", "PRINT", "LBRACE", "RETURN"}
)

__all__ = [
    "ARITHMETIC_OPS",
    "COMPARISON_OPS",
    "EOF",
    "EQUALITY_OPS",
    "IDENT",
    "NUMBER",
    "STRING",
    "UNARY_OPS",
    "compound_tokens",
    "keywords",
    "operator_tokens",
    "single_char_tokens",
    "statement_starters",
]
