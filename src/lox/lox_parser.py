"""
Lox Language Parser

Parses the token list produced by ``lox.lox_lexer`` into a program: an ordered
list of declaration ``ASTNode`` objects.

Grammar
-------
::

    program     → declaration* EOF
    declaration → "var" IDENT ( "=" expression )? ";" | statement
    statement   → exprStmt | printStmt | block | ifStmt | whileStmt | forStmt
    forStmt     → "for" "(" ( varDecl | exprStmt | ";" ) expression? ";" expression? ")" statement
    ifStmt      → "if" "(" expression ")" statement ( "else" statement )?
    whileStmt   → "while" "(" expression ")" statement
    block       → "{" declaration* "}"
    expression  → assignment
    assignment  → IDENT "=" assignment | logic_or
    logic_or    → logic_and ( "or" logic_and )*
    logic_and   → equality ( "and" equality )*
    equality    → comparison ( ( "!=" | "==" ) comparison )*
    comparison  → term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        → factor ( ( "-" | "+" ) factor )*
    factor      → unary ( ( "/" | "*" ) unary )*
    unary       → ( "!" | "-" ) unary | primary
    primary     → NUMBER | STRING | "true" | "false" | "nil" | IDENT | "(" expression ")"

Parser Behavior
---------------
- One token of lookahead; every binary level is left-associative, assignment
  is right-associative.
- ``else`` binds to the nearest ``if``.
- ``for`` is kept as its own node rather than desugared into ``while``.
- Syntax errors are reported through the ``ErrorReporter`` and raised as
  ``ParseError``; the innermost declaration catches it and synchronizes, so
  each broken statement yields one diagnostic and parsing carries on.
- An invalid assignment target is reported without unwinding.

Entry Points
------------
- ``parse()``: Parse a full program.
- ``parse_declaration()``, ``parse_statement()``, ``parse_expression()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from lox.lox_ast import ASTNode, empty
from lox.lox_constants import EOF, IDENT, operator_tokens, statement_starters
from lox.lox_errors import ErrorReporter, ParseError, ParseErrorKind
from lox.lox_lexer import Token

logger = logging.getLogger("lox.parser")
logger.addHandler(logging.NullHandler())

LITERAL_TOKENS = ("NUMBER", "STRING", "TRUE", "FALSE", "NIL")


class Parser:
    """
    Lox Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The input token stream, expected to end with an EOF token.
    position : int
        Current index into the token stream.
    reporter : ErrorReporter
        Receives every syntax diagnostic.
    """

    equality_ops = ("BANG_EQUAL", "EQUAL_EQUAL")
    comparison_ops = ("GREATER", "GREATER_EQUAL", "LESS", "LESS_EQUAL")
    term_ops = ("MINUS", "PLUS")
    factor_ops = ("SLASH", "STAR")
    unary_ops = ("BANG", "MINUS")

    def __init__(self, tokens: list[Token], reporter: ErrorReporter | None = None) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.reporter = reporter if reporter is not None else ErrorReporter()

    def current(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        last = self.tokens[-1] if self.tokens else None
        return Token(EOF, "", last.line if last else 0, last.col if last else 0)

    def advance(self) -> Token:
        if not self.at_end():
            self.position += 1
        return self.current()

    def at_end(self) -> bool:
        return self.current().type == EOF

    def check(self, *types: str) -> bool:
        return self.current().type in types

    def match(self, *types: str) -> Token | None:
        """Consume and return the current token if its type is one of ``types``."""
        tok = self.current()
        if tok.type in types:
            self.advance()
            return tok
        return None

    def expect(self, type_: str, message: str) -> Token:
        """Consume a token of ``type_`` or raise a reported ParseError."""
        tok = self.current()
        if tok.type == type_:
            self.advance()
            return tok
        if tok.type == EOF:
            raise self.error(
                tok, ParseErrorKind.UNEXPECTED_EOF, f"{message} Reached end of input."
            )
        raise self.error(tok, ParseErrorKind.MISSING_TOKEN, message)

    def error(self, tok: Token, kind: ParseErrorKind, message: str) -> ParseError:
        """Report a syntax error at ``tok`` and return the exception to raise."""
        self.reporter.error(tok.line, tok.col, message)
        return ParseError(kind, message, tok.line, tok.col)

    def synchronize(self, start: int) -> None:
        """Discard tokens until a ';' is consumed or a statement keyword comes up.

        ``start`` is where the failed declaration began; a statement keyword at
        that very position is skipped so recovery always moves forward.
        """
        while not self.at_end():
            tok = self.current()
            if tok.type == "SEMICOLON":
                self.advance()
                return
            if tok.type in statement_starters and self.position != start:
                return
            self.advance()

    def parse(self) -> list[ASTNode]:
        """Parse a full Lox program and return its declarations in order."""
        program: list[ASTNode] = []
        try:
            while not self.at_end():
                node = self.parse_declaration()
                if node is not None:
                    program.append(node)
        except RecursionError:
            tok = self.current()
            self.reporter.error(tok.line, tok.col, "Nesting too deep.")
        logger.debug("parsed %d declarations", len(program))
        return program

    def parse_declaration(self) -> ASTNode | None:
        """Parse one declaration; on a syntax error, resynchronize and return None."""
        start = self.position
        try:
            var_tok = self.match("VAR")
            if var_tok is not None:
                return self.parse_var_decl(var_tok)
            return self.parse_statement()
        except ParseError:
            self.synchronize(start)
            return None

    def parse_var_decl(self, var_tok: Token) -> ASTNode:
        name = self.expect(IDENT, "Expect variable name.")
        children: list[ASTNode] = []
        if self.match("EQUAL") is not None:
            children.append(self.parse_expression())
        self.expect("SEMICOLON", "Expect ';' after variable declaration.")
        return ASTNode(
            "var_decl", name.value, children, line=var_tok.line, col=var_tok.col
        )

    def parse_statement(self) -> ASTNode:
        tok = self.current()
        if tok.type == "PRINT":
            return self.parse_print()
        if tok.type == "LBRACE":
            return self.parse_block()
        if tok.type == "IF":
            return self.parse_if()
        if tok.type == "WHILE":
            return self.parse_while()
        if tok.type == "FOR":
            return self.parse_for()
        return self.parse_expression_statement()

    def parse_print(self) -> ASTNode:
        print_tok = self.current()
        self.advance()
        expr = self.parse_expression()
        self.expect("SEMICOLON", "Expect ';' after value.")
        return ASTNode("print", children=[expr], line=print_tok.line, col=print_tok.col)

    def parse_expression_statement(self) -> ASTNode:
        start = self.current()
        expr = self.parse_expression()
        self.expect("SEMICOLON", "Expect ';' after expression.")
        return ASTNode("expr_stmt", children=[expr], line=start.line, col=start.col)

    def parse_block(self) -> ASTNode:
        """Parse a `{}`-enclosed block of declarations."""
        brace = self.current()
        self.advance()
        declarations: list[ASTNode] = []
        while not self.check("RBRACE") and not self.at_end():
            node = self.parse_declaration()
            if node is not None:
                declarations.append(node)
        self.expect("RBRACE", "Expect '}' after block.")
        return ASTNode("block", children=declarations, line=brace.line, col=brace.col)

    def parse_if(self) -> ASTNode:
        if_tok = self.current()
        self.advance()
        self.expect("LPAREN", "Expect '(' after 'if'.")
        condition = self.parse_expression()
        self.expect("RPAREN", "Expect ')' after if condition.")
        then_branch = self.parse_statement()
        else_children: list[ASTNode] = []
        # Checked right after the nearest then-branch, so else binds to the innermost if.
        if self.match("ELSE") is not None:
            else_children.append(self.parse_statement())
        return ASTNode(
            "if",
            children=[condition, then_branch],
            else_children=else_children,
            line=if_tok.line,
            col=if_tok.col,
        )

    def parse_while(self) -> ASTNode:
        while_tok = self.current()
        self.advance()
        self.expect("LPAREN", "Expect '(' after 'while'.")
        condition = self.parse_expression()
        self.expect("RPAREN", "Expect ')' after condition.")
        body = self.parse_statement()
        return ASTNode(
            "while", children=[condition, body], line=while_tok.line, col=while_tok.col
        )

    def parse_for(self) -> ASTNode:
        """Parse ``for (init; cond; update) body``; omitted clauses become empty nodes."""
        for_tok = self.current()
        self.advance()
        self.expect("LPAREN", "Expect '(' after 'for'.")

        if self.match("SEMICOLON") is not None:
            initializer = empty()
        else:
            var_tok = self.match("VAR")
            if var_tok is not None:
                initializer = self.parse_var_decl(var_tok)
            else:
                initializer = self.parse_expression_statement()

        condition = empty() if self.check("SEMICOLON") else self.parse_expression()
        self.expect("SEMICOLON", "Expect ';' after loop condition.")

        update = empty() if self.check("RPAREN") else self.parse_expression()
        self.expect("RPAREN", "Expect ')' after for clauses.")

        body = self.parse_statement()
        return ASTNode(
            "for",
            children=[initializer, condition, update, body],
            line=for_tok.line,
            col=for_tok.col,
        )

    def parse_expression(self) -> ASTNode:
        return self.parse_assignment()

    def parse_assignment(self) -> ASTNode:
        expr = self.parse_or()
        equals = self.match("EQUAL")
        if equals is not None:
            value = self.parse_assignment()
            if expr.kind == "variable":
                return ASTNode("assign", expr.value, [value], line=expr.line, col=expr.col)
            self.reporter.error(equals.line, equals.col, "Invalid assignment target.")
        return expr

    def parse_or(self) -> ASTNode:
        return self.parse_logical("OR", self.parse_and)

    def parse_and(self) -> ASTNode:
        return self.parse_logical("AND", self.parse_equality)

    def parse_logical(self, kind: str, operand: Callable[[], ASTNode]) -> ASTNode:
        left = operand()
        op = self.match(kind)
        while op is not None:
            right = operand()
            left = ASTNode("logical", kind, [left, right], line=op.line, col=op.col)
            op = self.match(kind)
        return left

    def parse_binary(
        self, types: tuple[str, ...], operand: Callable[[], ASTNode]
    ) -> ASTNode:
        """Parse one left-associative precedence level."""
        left = operand()
        op = self.match(*types)
        while op is not None:
            right = operand()
            left = ASTNode(
                "binary",
                operator_tokens[op.type],
                [left, right],
                line=op.line,
                col=op.col,
            )
            op = self.match(*types)
        return left

    def parse_equality(self) -> ASTNode:
        return self.parse_binary(self.equality_ops, self.parse_comparison)

    def parse_comparison(self) -> ASTNode:
        return self.parse_binary(self.comparison_ops, self.parse_term)

    def parse_term(self) -> ASTNode:
        return self.parse_binary(self.term_ops, self.parse_factor)

    def parse_factor(self) -> ASTNode:
        return self.parse_binary(self.factor_ops, self.parse_unary)

    def parse_unary(self) -> ASTNode:
        op = self.match(*self.unary_ops)
        if op is not None:
            operand = self.parse_unary()
            return ASTNode(
                "unary", operator_tokens[op.type], [operand], line=op.line, col=op.col
            )
        return self.parse_primary()

    def parse_primary(self) -> ASTNode:
        tok = self.current()

        if tok.type in LITERAL_TOKENS:
            self.advance()
            assert tok.literal is not None  # for mypy
            return ASTNode("literal", tok.literal, line=tok.line, col=tok.col)

        if tok.type == IDENT:
            self.advance()
            return ASTNode("variable", tok.value, line=tok.line, col=tok.col)

        if tok.type == "LPAREN":
            self.advance()
            expr = self.parse_expression()
            self.expect("RPAREN", "Expect ')' after expression.")
            return ASTNode("grouping", children=[expr], line=tok.line, col=tok.col)

        if tok.type == EOF:
            raise self.error(
                tok, ParseErrorKind.UNEXPECTED_EOF, "Expect expression, reached end of input."
            )
        raise self.error(
            tok, ParseErrorKind.UNEXPECTED_TOKEN, f"Expect expression, got '{tok.value}'."
        )


def parse(tokens: list[Token], reporter: ErrorReporter | None = None) -> list[ASTNode]:
    return Parser(tokens, reporter).parse()


__all__ = ["Parser", "parse"]
