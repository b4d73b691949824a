import hypothesis.strategies as st
from hypothesis import given

from lox.lox_ast import (
    DECLARATION_KINDS,
    EXPRESSION_KINDS,
    STATEMENT_KINDS,
    ASTNode,
    empty,
    literal,
)
from lox.lox_values import Value


def test_astnode_repr() -> None:
    node = ASTNode("variable", "x", [])
    assert repr(node) == "ASTNode(variable, value='x')"


def test_astnode_repr_with_literal_and_children() -> None:
    node = ASTNode("print", children=[literal(Value.number(1))])
    assert repr(node) == "ASTNode(print, children=[ASTNode(literal, value=Value(number, 1.0))])"


def test_astnode_repr_truncates_children() -> None:
    node = ASTNode("block", children=[empty() for _ in range(5)])
    assert repr(node).endswith(", ...])")


def test_astnode_eq_equal() -> None:
    n1 = ASTNode("assign", "x", [literal(Value.number(1))])
    n2 = ASTNode("assign", "x", [literal(Value.number(1))])
    assert n1 == n2


def test_astnode_eq_not_equal_kind() -> None:
    assert ASTNode("variable", "x") != ASTNode("assign", "x")


def test_astnode_eq_not_equal_children() -> None:
    n1 = ASTNode("grouping", children=[ASTNode("variable", "x")])
    n2 = ASTNode("grouping", children=[ASTNode("variable", "y")])
    assert n1 != n2


def test_astnode_eq_compares_else_branch() -> None:
    cond = literal(Value.boolean(True))
    then = ASTNode("print", children=[cond])
    with_else = ASTNode("if", children=[cond, then], else_children=[then])
    without_else = ASTNode("if", children=[cond, then])
    assert with_else != without_else


def test_astnode_eq_includes_positions() -> None:
    assert ASTNode("variable", "x", line=1, col=1) != ASTNode("variable", "x", line=1, col=2)


def test_astnode_eq_non_astnode() -> None:
    assert ASTNode("variable", "x") != "not an ast"


def test_astnode_is_unhashable() -> None:
    assert ASTNode.__hash__ is None


def test_same_shape_ignores_positions() -> None:
    a = ASTNode("binary", "+", [literal(Value.number(1), 1, 1)], line=1, col=3)
    b = ASTNode("binary", "+", [literal(Value.number(1), 4, 9)], line=7, col=2)
    assert a.same_shape(b)
    assert a != b


def test_same_shape_respects_value_tags() -> None:
    assert not literal(Value.number(1)).same_shape(literal(Value.boolean(True)))


def test_astnode_to_dict_basic() -> None:
    node = ASTNode("assign", "x", [literal(Value.number(1))], line=1, col=2)
    d = node.to_dict()
    assert d["kind"] == "assign"
    assert d["value"] == "x"
    assert d["line"] == 1
    assert d["col"] == 2
    assert d["children"][0]["kind"] == "literal"
    assert d["children"][0]["value"] == {"tag": "number", "payload": 1.0}
    assert d["else_children"] == []


def test_astnode_to_dict_without_positions() -> None:
    d = ASTNode("variable", "x", line=3, col=4).to_dict(positions=False)
    assert "line" not in d
    assert "col" not in d


def test_empty_node() -> None:
    node = empty()
    assert node.is_empty
    assert not node.is_expression
    assert node.value is None
    assert node.children == []


def test_kind_sets() -> None:
    assert "var_decl" in DECLARATION_KINDS
    assert STATEMENT_KINDS < DECLARATION_KINDS
    assert not EXPRESSION_KINDS & DECLARATION_KINDS
    assert ASTNode("logical", "AND").is_expression
    assert not ASTNode("print").is_expression


@given(st.text(min_size=1), st.text(min_size=1))  # type: ignore[misc]
def test_astnode_eq_same_kind_value(kind: str, value: str) -> None:
    assert ASTNode(kind, value) == ASTNode(kind, value)


@given(st.text(min_size=1), st.text(min_size=1))  # type: ignore[misc]
def test_astnode_eq_different_kind_value(kind: str, value: str) -> None:
    assert ASTNode(kind, value) != ASTNode(kind + "x", value + "x")


@given(st.floats(allow_nan=False), st.integers(0, 100), st.integers(0, 100))  # type: ignore[misc]
def test_literal_same_shape_at_any_position(n: float, line: int, col: int) -> None:
    assert literal(Value.number(n), line, col).same_shape(literal(Value.number(n)))
