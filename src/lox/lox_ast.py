"""
Defines the abstract syntax tree (AST) node structure for the Lox language.

Classes:
    ASTNode:
        A node in the syntax tree, produced by the parser and consumed by the
        interpreter and the pretty-printer.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Node kinds form three closed sets:

    expressions:  literal, variable, grouping, unary, binary, logical, assign
    statements:   expr_stmt, print, block, if, while, for
    declarations: var_decl, plus every statement kind

``empty`` marks an omitted clause of a ``for`` statement so the node always has
four children.

Each ASTNode tracks:
    kind (str): The syntactic construct (e.g., "binary", "while", "var_decl").
    value: Operator symbol, variable name, literal ``Value`` or logical token kind.
    children (list[ASTNode]): Sub-expressions / sub-statements, owned by this node.
    else_children (list[ASTNode]): The else branch of an ``if`` (empty otherwise).
    line (int): Source line number for error messages.
    col (int): Source column number for error messages.

Example:
    ASTNode("binary", "+", [ASTNode("literal", Value.number(1)), ASTNode("literal", Value.number(2))])
"""

from typing import Any, TypedDict

from lox.lox_values import Value

EXPRESSION_KINDS: frozenset[str] = frozenset(
    {"literal", "variable", "grouping", "unary", "binary", "logical", "assign"}
)
STATEMENT_KINDS: frozenset[str] = frozenset(
    {"expr_stmt", "print", "block", "if", "while", "for"}
)
DECLARATION_KINDS: frozenset[str] = STATEMENT_KINDS | {"var_decl"}
EMPTY = "empty"


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The type of AST node (e.g., "binary", "if").
        value (Any): Operator, name, or a serialized literal value.
        line (int): Line number in the source code where the node originates.
        col (int): Column number in the source code where the node originates.
        children (List[ASTDict]): Primary child nodes.
        else_children (List[ASTDict]): Else branch of an ``if``.
    """

    kind: str
    value: Any
    line: int
    col: int
    children: list["ASTDict"]
    else_children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the abstract syntax tree (AST) for the Lox language.

    Args:
        kind (str): The type of node (e.g., "literal", "binary", "block").
        value (Value | str, optional): Literal value, operator, or identifier name.
        children (list[ASTNode], optional): Child nodes in the syntax tree.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).
        else_children (list[ASTNode], optional): Else branch for ``if`` nodes.
    """

    def __init__(
        self,
        kind: str,
        value: Value | str | None = None,
        children: list["ASTNode"] | None = None,
        line: int = 0,
        col: int = 0,
        else_children: list["ASTNode"] | None = None,
    ):
        self.kind = kind
        self.value = value
        self.children: list["ASTNode"] = children or []
        self.line = line
        self.col = col
        self.else_children: list["ASTNode"] = else_children or []

    @property
    def is_expression(self) -> bool:
        return self.kind in EXPRESSION_KINDS

    @property
    def is_empty(self) -> bool:
        return self.kind == EMPTY

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={repr(self.value)}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        if self.else_children:
            preview = ", ".join(repr(c) for c in self.else_children[:3])
            parts.append(f"else_children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.children == other.children
            and self.else_children == other.else_children
        )

    __hash__ = None  # type: ignore[assignment]

    def same_shape(self, other: "ASTNode") -> bool:
        """Structural equality that ignores source positions."""
        return self.to_dict(positions=False) == other.to_dict(positions=False)

    def to_dict(self, positions: bool = True) -> ASTDict:
        val: Any = self.value
        if isinstance(val, Value):
            val = {"tag": val.tag, "payload": val.payload}

        result: ASTDict = {
            "kind": self.kind,
            "value": val,
            "children": [c.to_dict(positions) for c in self.children],
            "else_children": [c.to_dict(positions) for c in self.else_children],
        }
        if positions:
            result["line"] = self.line
            result["col"] = self.col
        return result


def literal(value: Value, line: int = 0, col: int = 0) -> ASTNode:
    return ASTNode("literal", value, line=line, col=col)


def empty() -> ASTNode:
    return ASTNode(EMPTY)


__all__ = [
    "ASTDict",
    "ASTNode",
    "DECLARATION_KINDS",
    "EMPTY",
    "EXPRESSION_KINDS",
    "STATEMENT_KINDS",
    "empty",
    "literal",
]
