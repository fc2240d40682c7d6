"""AST node definitions for Noema programs."""

from .expressions import (
    BINARY_OPERATORS,
    UNARY_OPERATORS,
    Binary,
    Expression,
    Literal,
    LiteralKind,
    Unary,
    Variable,
)
from .statements import (
    PRINT_BUILTIN,
    Assign,
    Branch,
    If,
    Import,
    PrintCall,
    Program,
    Statement,
)

__all__ = [
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "Binary",
    "Expression",
    "Literal",
    "LiteralKind",
    "Unary",
    "Variable",
    "PRINT_BUILTIN",
    "Assign",
    "Branch",
    "If",
    "Import",
    "PrintCall",
    "Program",
    "Statement",
]
