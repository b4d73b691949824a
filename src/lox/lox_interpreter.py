"""
Tree-walking interpreter for the Lox language.

The interpreter executes a parsed program declaration by declaration against an
``Environment``. ``print`` statements write to the interpreter's output stream.

Runtime errors never stop the program: the failing sub-expression evaluates to
``nil``, a diagnostic is sent to the ``ErrorReporter``, and evaluation carries on
with the enclosing expression.

Semantics:
    - ``nil`` and ``false`` are falsy, everything else is truthy
    - ``- * /`` need two numbers; ``+`` takes two numbers or two strings
    - ``> >= < <=`` need two numbers
    - ``== !=`` compare any two values (different tags are never equal)
    - ``and`` / ``or`` short-circuit and return the deciding operand
    - blocks and ``for`` loops get their own scope frame
    - a ``for`` loop without a condition runs until something else stops it

Dispatch follows the node kind: ``exec_<kind>`` for declarations and statements,
``eval_<kind>`` for expressions.
"""

import logging
import math
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from lox.lox_ast import DECLARATION_KINDS, EXPRESSION_KINDS, ASTNode
from lox.lox_constants import ARITHMETIC_OPS, COMPARISON_OPS, EQUALITY_OPS, UNARY_OPS
from lox.lox_environment import Environment
from lox.lox_errors import ErrorReporter, LoxRuntimeError, OperandTypeError, ScopePopError
from lox.lox_values import NIL_VALUE, Value

logger = logging.getLogger("lox.interpreter")
logger.addHandler(logging.NullHandler())


def divide(left: float, right: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity and 0/0 is NaN."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class Interpreter:
    """Evaluates Lox programs.

    Attributes:
        reporter (ErrorReporter): Receives runtime diagnostics.
        environment (Environment): Variable scopes; survives across ``interpret`` calls.
        out (TextIO | None): Destination of ``print``; ``None`` means ``sys.stdout``.
    """

    def __init__(
        self,
        reporter: ErrorReporter | None = None,
        environment: Environment | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.environment = environment if environment is not None else Environment()
        self.out = out

    def interpret(self, program: list[ASTNode]) -> None:
        """Execute every declaration of ``program`` in order."""
        for declaration in program:
            depth = self.environment.depth
            try:
                self.execute(declaration)
            except RecursionError:
                # A pop can fail too once the stack is exhausted.
                self.environment.unwind_to(depth)
                self.reporter.error(declaration.line, declaration.col, "Nesting too deep.")
        logger.debug(
            "executed %d declarations, %d diagnostics",
            len(program),
            len(self.reporter.diagnostics),
        )

    def execute(self, node: ASTNode) -> None:
        if node.kind not in DECLARATION_KINDS:
            raise NotImplementedError(
                f"Cannot execute node kind '{node.kind}' (line {node.line}, col {node.col})"
            )
        getattr(self, f"exec_{node.kind}")(node)

    def evaluate(self, node: ASTNode) -> Value:
        """Evaluate an expression; a runtime error is reported and yields ``nil``."""
        if node.kind not in EXPRESSION_KINDS:
            raise NotImplementedError(
                f"Cannot evaluate node kind '{node.kind}' (line {node.line}, col {node.col})"
            )
        try:
            result: Value = getattr(self, f"eval_{node.kind}")(node)
        except LoxRuntimeError as exc:
            self.report_at(exc, node)
            return NIL_VALUE
        return result

    def report_at(self, exc: LoxRuntimeError, node: ASTNode) -> None:
        if not exc.line:
            exc.line, exc.col = node.line, node.col
        self.reporter.report(exc)

    @contextmanager
    def scoped(self, node: ASTNode) -> Iterator[None]:
        """Run the body in a fresh frame; a failed pop is reported, never raised."""
        try:
            with self.environment.scope():
                yield
        except ScopePopError as exc:
            self.report_at(exc, node)

    # Declarations and statements

    def exec_var_decl(self, node: ASTNode) -> None:
        value = self.evaluate(node.children[0]) if node.children else None
        self.environment.define(str(node.value), value)

    def exec_expr_stmt(self, node: ASTNode) -> None:
        self.evaluate(node.children[0])

    def exec_print(self, node: ASTNode) -> None:
        value = self.evaluate(node.children[0])
        print(value, file=self.out if self.out is not None else sys.stdout)

    def exec_block(self, node: ASTNode) -> None:
        with self.scoped(node):
            for declaration in node.children:
                self.execute(declaration)

    def exec_if(self, node: ASTNode) -> None:
        condition, then_branch = node.children
        if self.evaluate(condition).is_truthy():
            self.execute(then_branch)
        elif node.else_children:
            self.execute(node.else_children[0])

    def exec_while(self, node: ASTNode) -> None:
        condition, body = node.children
        while self.evaluate(condition).is_truthy():
            self.execute(body)

    def exec_for(self, node: ASTNode) -> None:
        initializer, condition, update, body = node.children
        with self.scoped(node):
            if not initializer.is_empty:
                self.execute(initializer)
            # No condition clause means the loop condition is always true.
            while condition.is_empty or self.evaluate(condition).is_truthy():
                self.execute(body)
                if not update.is_empty:
                    self.evaluate(update)

    # Expressions

    def eval_literal(self, node: ASTNode) -> Value:
        assert isinstance(node.value, Value)  # for mypy
        return node.value

    def eval_variable(self, node: ASTNode) -> Value:
        return self.environment.get(str(node.value))

    def eval_grouping(self, node: ASTNode) -> Value:
        return self.evaluate(node.children[0])

    def eval_assign(self, node: ASTNode) -> Value:
        value = self.evaluate(node.children[0])
        self.environment.assign(str(node.value), value)
        return value

    def eval_logical(self, node: ASTNode) -> Value:
        left = self.evaluate(node.children[0])
        if node.value == "OR":
            if left.is_truthy():
                return left
        elif not left.is_truthy():
            return left
        return self.evaluate(node.children[1])

    def eval_unary(self, node: ASTNode) -> Value:
        if node.value not in UNARY_OPS:
            raise OperandTypeError(f"'{node.value}' is not a unary operator.")
        operand = self.evaluate(node.children[0])
        if node.value == "!":
            return Value.boolean(not operand.is_truthy())
        if not operand.is_number:
            raise OperandTypeError(f"Operand of '-' must be a number, got {operand.tag}.")
        assert isinstance(operand.payload, float)  # for mypy
        return Value.number(-operand.payload)

    def eval_binary(self, node: ASTNode) -> Value:
        left = self.evaluate(node.children[0])
        right = self.evaluate(node.children[1])
        op = str(node.value)

        if op in EQUALITY_OPS:
            equal = left == right
            return Value.boolean(equal if op == "==" else not equal)

        if op in COMPARISON_OPS:
            if not (left.is_number and right.is_number):
                raise OperandTypeError(
                    f"Operands of '{op}' must be numbers, got {left.tag} and {right.tag}."
                )
            return Value.boolean(compare(op, left.payload, right.payload))  # type: ignore[arg-type]

        if op in ARITHMETIC_OPS:
            if left.is_number and right.is_number:
                return Value.number(arithmetic(op, left.payload, right.payload))  # type: ignore[arg-type]
            if op == "+" and left.is_string and right.is_string:
                return Value.string(f"{left.payload}{right.payload}")
            if op == "+":
                raise OperandTypeError(
                    f"Operands of '+' must be two numbers or two strings, got {left.tag} and {right.tag}."
                )
            raise OperandTypeError(
                f"Operands of '{op}' must be numbers, got {left.tag} and {right.tag}."
            )

        raise OperandTypeError(f"'{op}' is not a binary operator.")


def arithmetic(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    return divide(left, right)


def compare(op: str, left: float, right: float) -> bool:
    if op == ">":
        return left > right
    if op == ">=":
        return left >= right
    if op == "<":
        return left < right
    return left <= right


__all__ = ["Interpreter", "arithmetic", "compare", "divide"]
