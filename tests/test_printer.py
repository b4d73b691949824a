import io

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lox.lox_ast import ASTNode
from lox.lox_errors import ErrorReporter
from lox.lox_lexer import scan
from lox.lox_parser import Parser
from lox.lox_printer import RENDERERS, AstPrinter, LispRenderer, SourceRenderer


def parse(source: str) -> list[ASTNode]:
    reporter = ErrorReporter(io.StringIO())
    program = Parser(scan(source, reporter), reporter).parse()
    assert not reporter.had_error, (source, reporter.messages())
    return program


def lisp(source: str) -> str:
    return AstPrinter().print_program(parse(source))


def source_form(source: str) -> str:
    return AstPrinter("source").print_program(parse(source))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("print 1 + 2 * 3;", "(print (+ 1 (* 2 3)))"),
        ("(1 + 2) * 3;", "(expr (* (group (+ 1 2)) 3))"),
        ('print "hi";', '(print "hi")'),
        ("print -x;", "(print (- x))"),
        ("print !true;", "(print (! true))"),
        ("print nil;", "(print nil)"),
        ("print 2.5;", "(print 2.5)"),
        ("a or b and c;", "(expr (or a (and b c)))"),
        ("a = b = 1;", "(expr (= a (= b 1)))"),
        ("var x;", "(var x)"),
        ("var x = 1;", "(var x 1)"),
        ("{ var a = 1; print a; }", "(block (var a 1) (print a))"),
        ("{ }", "(block)"),
        ("if (a) print 1;", "(if a (print 1))"),
        ("if (a) print 1; else print 2;", "(if a (print 1) (print 2))"),
        ("while (a) print 1;", "(while a (print 1))"),
        (
            "for (var i = 0; i < 3; i = i + 1) print i;",
            "(for (var i 0) (< i 3) (= i (+ i 1)) (print i))",
        ),
        ("for (;;) print 1;", "(for _ _ _ (print 1))"),
    ],
)  # type: ignore[misc]
def test_lisp_style(source: str, expected: str) -> None:
    assert lisp(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("print 1+2*3;", "print 1 + 2 * 3;"),
        ("print (1+2)*3;", "print (1 + 2) * 3;"),
        ("print -  -x;", "print --x;"),
        ("a or b and c;", "a or b and c;"),
        ("var x;", "var x;"),
        ("var s = \"hi\";", 'var s = "hi";'),
        ("{}", "{ }"),
        ("{ print 1; print 2; }", "{ print 1; print 2; }"),
        ("if (a) print 1; else print 2;", "if (a) print 1; else print 2;"),
        ("while (i < 3) i = i + 1;", "while (i < 3) i = i + 1;"),
        ("for (;;) {}", "for (; ; ) { }"),
        ("for (i = 0; i < 3;) print i;", "for (i = 0; i < 3; ) print i;"),
    ],
)  # type: ignore[misc]
def test_source_style(source: str, expected: str) -> None:
    assert source_form(source) == expected


def test_program_prints_one_line_per_declaration() -> None:
    assert lisp("var a = 1;\nprint a;") == "(var a 1)\n(print a)"
    assert AstPrinter().print_program([]) == ""


def test_print_node() -> None:
    (stmt,) = parse("print 1 + 2;")
    assert AstPrinter().print_node(stmt.children[0]) == "(+ 1 2)"
    assert AstPrinter("source").print_node(stmt.children[0]) == "1 + 2"


def test_style_names() -> None:
    assert set(RENDERERS) == {"lisp", "source"}
    assert isinstance(AstPrinter("LISP").renderer, LispRenderer)
    assert isinstance(AstPrinter("source").renderer, SourceRenderer)


def test_unknown_style() -> None:
    with pytest.raises(ValueError, match="Unknown printer style"):
        AstPrinter("json")


def test_unknown_node_kind() -> None:
    with pytest.raises(NotImplementedError, match="No render method for node kind 'call'"):
        AstPrinter().print_node(ASTNode("call", line=2, col=4))


def test_program_items_must_be_nodes() -> None:
    with pytest.raises(TypeError):
        AstPrinter().print_program(["print 1;"])  # type: ignore[list-item]


names = st.sampled_from(["a", "b", "count", "_x"])
atoms = st.one_of(
    st.integers(min_value=0, max_value=999).map(str),
    st.sampled_from(["1.5", "0.25", "true", "false", "nil"]),
    st.text(alphabet="abc xyz", max_size=5).map(lambda s: f'"{s}"'),
    names,
)


def extend_expr(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    binary_ops = st.sampled_from(
        ["+", "-", "*", "/", "<", "<=", ">", ">=", "==", "!=", "and", "or"]
    )
    return st.one_of(
        st.tuples(children, binary_ops, children).map(lambda t: f"{t[0]} {t[1]} {t[2]}"),
        st.tuples(st.sampled_from(["-", "!"]), children).map(lambda t: t[0] + t[1]),
        children.map(lambda e: f"({e})"),
        st.tuples(names, children).map(lambda t: f"({t[0]} = {t[1]})"),
    )


expressions = st.recursive(atoms, extend_expr, max_leaves=12)

simple_statements = st.one_of(
    expressions.map(lambda e: f"print {e};"),
    expressions.map(lambda e: f"{e};"),
    st.tuples(names, expressions).map(lambda t: f"var {t[0]} = {t[1]};"),
    names.map(lambda n: f"var {n};"),
)


def extend_stmt(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    optional = st.one_of(st.just(""), expressions)
    return st.one_of(
        st.lists(children, max_size=3).map(lambda body: "{ " + " ".join(body) + " }"),
        st.tuples(expressions, children).map(lambda t: f"if ({t[0]}) {t[1]}"),
        st.tuples(expressions, children, children).map(
            lambda t: f"if ({t[0]}) {t[1]} else {t[2]}"
        ),
        st.tuples(expressions, children).map(lambda t: f"while ({t[0]}) {t[1]}"),
        st.tuples(
            st.one_of(st.just(";"), simple_statements.filter(lambda s: not s.startswith("print"))),
            optional,
            optional,
            children,
        ).map(lambda t: f"for ({t[0]} {t[1]}; {t[2]}) {t[3]}"),
    )


statements = st.recursive(simple_statements, extend_stmt, max_leaves=6)


@settings(max_examples=200)
@given(st.lists(statements, min_size=1, max_size=4))  # type: ignore[misc]
def test_source_style_parses_back_to_same_tree(program_parts: list[str]) -> None:
    original = parse("\n".join(program_parts))
    printed = AstPrinter("source").print_program(original)
    reparsed = parse(printed)
    assert len(reparsed) == len(original)
    assert all(a.same_shape(b) for a, b in zip(original, reparsed))
    assert AstPrinter("source").print_program(reparsed) == printed
