"""Debug renderings of the token stream and the AST.

Both dumpers are line oriented and return the rendered text; the CLI
decides where it goes.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .ast import (
    PRINT_BUILTIN,
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
from .lang.lexer import Lexer, Token, TokenKind

__all__ = ["format_token", "dump_tokens", "format_expression", "dump_ast"]


def format_token(token: Token) -> str:
    """``line:col  KIND         value``"""
    return f"{token.line}:{token.column}  {token.kind.name:<11}  {token.value}"


def dump_tokens(lexer: Lexer) -> List[str]:
    """Drain ``lexer`` and render one line per token.

    Stops after EOF or as soon as the lexer latched an error; the caller
    reads ``lexer.error`` for the diagnostic.
    """
    lines: List[str] = []
    while True:
        token = lexer.next_token()
        lines.append(format_token(token))
        if token.kind is TokenKind.EOF or lexer.has_error:
            return lines


def format_expression(expr: Optional[Expression]) -> str:
    if expr is None:
        return "<null-expr>"

    if isinstance(expr, Literal):
        if expr.kind is LiteralKind.INT:
            return str(expr.value)
        if expr.kind is LiteralKind.BOOL:
            return "verum" if expr.value else "falsum"
        if expr.kind is LiteralKind.STRING:
            return f'"{expr.value}"'
        return "nulla"

    if isinstance(expr, Variable):
        return expr.name

    if isinstance(expr, Unary):
        if expr.op == "non":
            return f"non {format_expression(expr.operand)}"
        return f"(-{format_expression(expr.operand)})"

    if isinstance(expr, Binary):
        spine: List[Binary] = []
        node: Expression = expr
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left
        text = format_expression(node)
        for binary in reversed(spine):
            text = f"({text} {binary.op} {format_expression(binary.right)})"
        return text

    return "<expr?>"


def _dump_statements(statements: Iterable[Statement], indent: int, out: List[str]) -> None:
    pad = " " * indent
    for stmt in statements:
        if isinstance(stmt, Import):
            out.append(f"{pad}IMPORT {stmt.module}")
        elif isinstance(stmt, Assign):
            out.append(f"{pad}ASSIGN {stmt.target} = {format_expression(stmt.value)}")
        elif isinstance(stmt, PrintCall):
            out.append(f"{pad}CALL {PRINT_BUILTIN}({format_expression(stmt.argument)})")
        elif isinstance(stmt, If):
            for index, branch in enumerate(stmt.branches):
                if index == 0:
                    out.append(f"{pad}SI {format_expression(branch.condition)}:")
                elif branch.condition is not None:
                    out.append(f"{pad}ALIOSI {format_expression(branch.condition)}:")
                else:
                    out.append(f"{pad}ALIO:")
                _dump_statements(branch.body, indent + 2, out)
        else:
            out.append(f"{pad}UNKNOWN_STMT")


def dump_ast(program: Program | Sequence[Statement]) -> List[str]:
    """Render a program as indented text, one statement header per line."""
    statements = program.statements if isinstance(program, Program) else program
    lines: List[str] = []
    _dump_statements(statements, 0, lines)
    return lines
