"""Unified error model for Noema.

Every stage of the pipeline reports problems through a subclass of
:class:`NoemaError`. The formatted diagnostic is a single line:

    path:line:col: kind: message
"""

from __future__ import annotations

from typing import Optional

DEFAULT_PATH = "<stdin>"
MAX_MESSAGE_LENGTH = 511

LEXER_ERROR = "lexer error"
PARSER_ERROR = "parser error"
RUNTIME_ERROR = "runtime error"


def format_diagnostic(
    path: Optional[str],
    line: Optional[int],
    column: Optional[int],
    kind: Optional[str],
    message: Optional[str],
    *,
    limit: int = MAX_MESSAGE_LENGTH,
) -> str:
    """Render a diagnostic line.

    Line and column are only printed when positive, so callers may pass
    ``0`` or ``None`` for unknown positions.
    """
    path = path or DEFAULT_PATH
    kind = kind or "error"
    message = message or "unknown"

    if line and line > 0 and column and column > 0:
        text = f"{path}:{line}:{column}: {kind}: {message}"
    elif line and line > 0:
        text = f"{path}:{line}: {kind}: {message}"
    else:
        text = f"{path}: {kind}: {message}"
    return text[:limit]


class NoemaError(Exception):
    """Base class for all errors surfaced to users."""

    kind: str = "error"

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        kind: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line
        self.column = column
        if kind is not None:
            self.kind = kind

    def format(self, limit: int = MAX_MESSAGE_LENGTH) -> str:
        return format_diagnostic(
            self.path, self.line, self.column, self.kind, self.message, limit=limit
        )

    def __str__(self) -> str:
        return self.format()


class LexerError(NoemaError):
    """Raised (or latched) when the tokenizer meets invalid input."""

    kind = LEXER_ERROR


class ParseError(NoemaError):
    """Raised when the parser encounters invalid syntax."""

    kind = PARSER_ERROR


class NoemaRuntimeError(NoemaError):
    """Raised when evaluation fails."""

    kind = RUNTIME_ERROR


class ConfigError(NoemaError):
    """Raised when a configuration file holds invalid values."""

    kind = "config error"


__all__ = [
    "DEFAULT_PATH",
    "MAX_MESSAGE_LENGTH",
    "LEXER_ERROR",
    "PARSER_ERROR",
    "RUNTIME_ERROR",
    "format_diagnostic",
    "NoemaError",
    "LexerError",
    "ParseError",
    "NoemaRuntimeError",
    "ConfigError",
]
