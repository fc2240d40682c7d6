"""Expression AST nodes for Noema."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

__all__ = [
    "LiteralKind",
    "Expression",
    "Literal",
    "Variable",
    "Unary",
    "Binary",
    "UNARY_OPERATORS",
    "BINARY_OPERATORS",
]


class LiteralKind(str, Enum):
    INT = "int"
    STRING = "string"
    BOOL = "bool"
    NULL = "null"

    def __str__(self) -> str:
        return self.value


# Operator spellings as they appear in source. Unary minus is "-" on a
# Unary node and never collides with the binary form.
UNARY_OPERATORS = frozenset({"non", "-"})
BINARY_OPERATORS = frozenset({
    "+", "-", "*", "/", "%",
    "==", "!=", "<", "<=", ">", ">=",
    "et", "aut",
})


@dataclass
class Expression:
    """Base class for all expression nodes."""

    line: int = field(default=0, kw_only=True)
    column: int = field(default=0, kw_only=True)


@dataclass
class Literal(Expression):
    """Literal value: integer, string, verum/falsum or nulla."""

    kind: LiteralKind
    value: Optional[Union[int, str, bool]] = None


@dataclass
class Variable(Expression):
    """Variable reference: x"""

    name: str


@dataclass
class Unary(Expression):
    """Prefix operation: non x, -x"""

    op: str
    operand: Expression


@dataclass
class Binary(Expression):
    """Binary operation: left op right"""

    op: str
    left: Expression
    right: Expression
