"""Statement AST nodes and the program container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .expressions import Expression

__all__ = [
    "PRINT_BUILTIN",
    "Statement",
    "Import",
    "Assign",
    "PrintCall",
    "Branch",
    "If",
    "Program",
]

PRINT_BUILTIN = "sonus.dic"


@dataclass
class Statement:
    """Base class for all statements."""

    line: int = field(default=0, kw_only=True)
    column: int = field(default=0, kw_only=True)


@dataclass
class Import(Statement):
    """import <module> (recorded, not resolved)."""

    module: str


@dataclass
class Assign(Statement):
    target: str
    value: Expression


@dataclass
class PrintCall(Statement):
    """sonus.dic(<argument>)"""

    argument: Expression


@dataclass
class Branch:
    """One arm of a conditional. ``condition is None`` marks ``alio``."""

    condition: Optional[Expression]
    body: List[Statement] = field(default_factory=list)

    @property
    def is_else(self) -> bool:
        return self.condition is None


@dataclass
class If(Statement):
    """si / aliosi / alio chain."""

    branches: List[Branch] = field(default_factory=list)


@dataclass
class Program:
    """Ordered top-level statement list of a source file."""

    statements: List[Statement] = field(default_factory=list)
    path: Optional[str] = None

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)
