"""
Renders Lox ASTs back to text for debugging.

Classes and Features:
    - Renderer: Base class that dispatches a node to ``render_<kind>``.
    - LispRenderer: Parenthesized prefix form, e.g. ``(+ 1 (* 2 3))``.
    - SourceRenderer: Lox source that parses back to the same tree.
    - AstPrinter: Picks a renderer by style name and prints programs or single nodes.

The printer never affects evaluation; it only reads the tree.

Example:
    >>> program = parse(scan("print 1 + 2 * 3;"))
    >>> AstPrinter().print_program(program)
    '(print (+ 1 (* 2 3)))'
    >>> AstPrinter("source").print_program(program)
    'print 1 + 2 * 3;'

Raises:
    ValueError: If the style is not supported.
    NotImplementedError: If a node kind has no ``render_*`` method.
"""

from lox.lox_ast import ASTNode
from lox.lox_values import Value

ABSENT = "_"


class Renderer:
    """Dispatches AST nodes to ``render_<kind>`` methods."""

    def render(self, node: ASTNode) -> str:
        method_name = f"render_{node.kind}"
        if not hasattr(self, method_name):
            raise NotImplementedError(
                f"No render method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
        result: str = getattr(self, method_name)(node)
        return result

    def render_literal(self, node: ASTNode) -> str:
        assert isinstance(node.value, Value)  # for mypy
        return node.value.to_source()

    def render_variable(self, node: ASTNode) -> str:
        return str(node.value)


class LispRenderer(Renderer):
    """Fully parenthesized prefix rendering: ``(op left right)``."""

    def parenthesize(self, name: str, *nodes: ASTNode) -> str:
        parts = [name] + [self.render(n) for n in nodes]
        return f"({' '.join(parts)})"

    def render_empty(self, node: ASTNode) -> str:
        return ABSENT

    def render_grouping(self, node: ASTNode) -> str:
        return self.parenthesize("group", *node.children)

    def render_unary(self, node: ASTNode) -> str:
        return self.parenthesize(str(node.value), *node.children)

    def render_binary(self, node: ASTNode) -> str:
        return self.parenthesize(str(node.value), *node.children)

    def render_logical(self, node: ASTNode) -> str:
        return self.parenthesize(str(node.value).lower(), *node.children)

    def render_assign(self, node: ASTNode) -> str:
        return f"(= {node.value} {self.render(node.children[0])})"

    def render_expr_stmt(self, node: ASTNode) -> str:
        return self.parenthesize("expr", *node.children)

    def render_print(self, node: ASTNode) -> str:
        return self.parenthesize("print", *node.children)

    def render_var_decl(self, node: ASTNode) -> str:
        return self.parenthesize(f"var {node.value}", *node.children)

    def render_block(self, node: ASTNode) -> str:
        return self.parenthesize("block", *node.children)

    def render_if(self, node: ASTNode) -> str:
        return self.parenthesize("if", *node.children, *node.else_children)

    def render_while(self, node: ASTNode) -> str:
        return self.parenthesize("while", *node.children)

    def render_for(self, node: ASTNode) -> str:
        return self.parenthesize("for", *node.children)


class SourceRenderer(Renderer):
    """Renders Lox source text. Parentheses appear only for grouping nodes."""

    def render_grouping(self, node: ASTNode) -> str:
        return f"({self.render(node.children[0])})"

    def render_unary(self, node: ASTNode) -> str:
        return f"{node.value}{self.render(node.children[0])}"

    def render_binary(self, node: ASTNode) -> str:
        left, right = node.children
        return f"{self.render(left)} {node.value} {self.render(right)}"

    def render_logical(self, node: ASTNode) -> str:
        left, right = node.children
        return f"{self.render(left)} {str(node.value).lower()} {self.render(right)}"

    def render_assign(self, node: ASTNode) -> str:
        return f"{node.value} = {self.render(node.children[0])}"

    def render_expr_stmt(self, node: ASTNode) -> str:
        return f"{self.render(node.children[0])};"

    def render_print(self, node: ASTNode) -> str:
        return f"print {self.render(node.children[0])};"

    def render_var_decl(self, node: ASTNode) -> str:
        if node.children:
            return f"var {node.value} = {self.render(node.children[0])};"
        return f"var {node.value};"

    def render_block(self, node: ASTNode) -> str:
        if not node.children:
            return "{ }"
        inner = " ".join(self.render(child) for child in node.children)
        return f"{{ {inner} }}"

    def render_if(self, node: ASTNode) -> str:
        condition, then_branch = node.children
        text = f"if ({self.render(condition)}) {self.render(then_branch)}"
        if node.else_children:
            text += f" else {self.render(node.else_children[0])}"
        return text

    def render_while(self, node: ASTNode) -> str:
        condition, body = node.children
        return f"while ({self.render(condition)}) {self.render(body)}"

    def render_for(self, node: ASTNode) -> str:
        initializer, condition, update, body = node.children
        init = ";" if initializer.is_empty else self.render(initializer)
        cond = "" if condition.is_empty else self.render(condition)
        upd = "" if update.is_empty else self.render(update)
        return f"for ({init} {cond}; {upd}) {self.render(body)}"


RENDERERS: dict[str, type[Renderer]] = {
    "lisp": LispRenderer,
    "source": SourceRenderer,
}


class AstPrinter:
    """Prints Lox programs and nodes in the selected style.

    Attributes:
        renderer (Renderer): The renderer instance for the style.
    """

    def __init__(self, style: str = "lisp") -> None:
        style = style.lower()
        if style not in RENDERERS:
            raise ValueError(f"Unknown printer style: {style!r}")
        self.style = style
        self.renderer: Renderer = RENDERERS[style]()

    def print_node(self, node: ASTNode) -> str:
        return self.renderer.render(node)

    def print_program(self, program: list[ASTNode]) -> str:
        """One line per top-level declaration."""
        if not all(isinstance(node, ASTNode) for node in program):
            raise TypeError("All items in a program must be ASTNode instances.")
        return "\n".join(self.print_node(node) for node in program)


__all__ = ["RENDERERS", "AstPrinter", "LispRenderer", "Renderer", "SourceRenderer"]
