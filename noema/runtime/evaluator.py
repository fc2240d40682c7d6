"""Tree-walking evaluator for Noema programs."""

from __future__ import annotations

import logging
import sys
from typing import Iterable, List, Optional, TextIO

from noema.ast import (
    Assign,
    Binary,
    Expression,
    If,
    Import,
    Literal,
    LiteralKind,
    PrintCall,
    Program,
    Statement,
    Unary,
    Variable,
)
from noema.errors import DEFAULT_PATH, NoemaRuntimeError

from .environment import DEFAULT_MAX_VARIABLES, StoreCapacityError, VariableStore
from .values import FALSE, NULL, TRUE, Value, ValueKind, render

__all__ = ["Evaluator"]

logger = logging.getLogger(__name__)


def _truncating_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _truncating_mod(left: int, right: int) -> int:
    return left - right * _truncating_div(left, right)


class Evaluator:
    """Execute statements against a :class:`VariableStore`.

    The first runtime error raises :class:`NoemaRuntimeError` and stops the
    run; effects of statements already executed remain.
    """

    def __init__(
        self,
        store: Optional[VariableStore] = None,
        *,
        output: Optional[TextIO] = None,
        path: str = DEFAULT_PATH,
        max_variables: int = DEFAULT_MAX_VARIABLES,
    ):
        self.store = store if store is not None else VariableStore(max_variables)
        self.output = output
        self.path = path or DEFAULT_PATH

    def error(self, message: str, node) -> NoemaRuntimeError:
        return NoemaRuntimeError(message, path=self.path, line=node.line, column=node.column)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def run(self, program: Program) -> None:
        self.exec_block(program.statements)

    def exec_block(self, statements: Iterable[Statement]) -> None:
        for statement in statements:
            self.exec_statement(statement)

    def exec_statement(self, stmt: Statement) -> None:
        logger.debug("exec %s at %d:%d", type(stmt).__name__.lower(), stmt.line, stmt.column)

        if isinstance(stmt, Import):
            # Module resolution is not implemented; imports are recorded only.
            logger.debug("import of '%s' ignored", stmt.module)
            return

        if isinstance(stmt, Assign):
            value = self.eval(stmt.value)
            try:
                self.store.set(stmt.target, value)
            except StoreCapacityError:
                raise self.error("too many variables", stmt) from None
            return

        if isinstance(stmt, PrintCall):
            value = self.eval(stmt.argument)
            print(render(value), file=self.output or sys.stdout)
            return

        if isinstance(stmt, If):
            for branch in stmt.branches:
                if branch.condition is None or self.eval(branch.condition).truthy():
                    self.exec_block(branch.body)
                    return
            return

        raise self.error("unknown statement kind", stmt)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval(self, expr: Expression) -> Value:
        if isinstance(expr, Literal):
            return self._eval_literal(expr)

        if isinstance(expr, Variable):
            value = self.store.get(expr.name)
            if value is None:
                raise self.error(f"undefined variable '{expr.name}'", expr)
            return value

        if isinstance(expr, Unary):
            return self._eval_unary(expr)

        if isinstance(expr, Binary):
            return self._eval_binary(expr)

        raise self.error("unsupported expression", expr)

    def _eval_literal(self, expr: Literal) -> Value:
        if expr.kind is LiteralKind.INT:
            return Value.integer(expr.value)
        if expr.kind is LiteralKind.STRING:
            return Value.string(expr.value)
        if expr.kind is LiteralKind.BOOL:
            return Value.boolean(expr.value)
        return NULL

    def _eval_unary(self, expr: Unary) -> Value:
        operand = self.eval(expr.operand)
        if expr.op == "non":
            return FALSE if operand.truthy() else TRUE
        if expr.op == "-":
            if not operand.is_int:
                raise self.error(
                    f"unary '-' requires integer operand, got {operand.kind}", expr
                )
            return Value.integer(-operand.payload)
        raise self.error(f"unknown unary operator '{expr.op}'", expr)

    def _eval_binary(self, expr: Binary) -> Value:
        # Operator chains nest along ``left``; walk that spine in a loop.
        spine: List[Binary] = []
        node: Expression = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left

        value = self.eval(node)
        for binary in reversed(spine):
            value = self._apply_binary(binary, value)
        return value

    def _apply_binary(self, expr: Binary, left: Value) -> Value:
        op = expr.op

        # Short-circuit forms always yield a boolean.
        if op == "et":
            if not left.truthy():
                return FALSE
            return Value.boolean(self.eval(expr.right).truthy())
        if op == "aut":
            if left.truthy():
                return TRUE
            return Value.boolean(self.eval(expr.right).truthy())

        right = self.eval(expr.right)

        if op == "==":
            return Value.boolean(left.equals(right))
        if op == "!=":
            return Value.boolean(not left.equals(right))

        if op == "+":
            if left.is_int and right.is_int:
                return Value.integer(left.payload + right.payload)
            if left.is_string and right.is_string:
                return Value.string(left.payload + right.payload)
            raise self.error(
                f"unsupported operand types for '+': {left.kind} and {right.kind}", expr
            )

        if op in ("-", "*", "/", "%"):
            if not (left.is_int and right.is_int):
                raise self.error(f"operator '{op}' requires integer operands", expr)
            a, b = left.payload, right.payload
            if op == "-":
                return Value.integer(a - b)
            if op == "*":
                return Value.integer(a * b)
            if b == 0:
                raise self.error("division by zero" if op == "/" else "modulo by zero", expr)
            if op == "/":
                return Value.integer(_truncating_div(a, b))
            return Value.integer(_truncating_mod(a, b))

        if op in ("<", "<=", ">", ">="):
            if not (left.is_int and right.is_int):
                raise self.error(f"comparison '{op}' requires integer operands", expr)
            a, b = left.payload, right.payload
            if op == "<":
                return Value.boolean(a < b)
            if op == "<=":
                return Value.boolean(a <= b)
            if op == ">":
                return Value.boolean(a > b)
            return Value.boolean(a >= b)

        raise self.error(f"unknown operator '{op}'", expr)
