"""Recursive descent parser for the Noema language.

The parser pulls tokens from a :class:`~noema.lang.lexer.Lexer` one at a
time and never backtracks. Errors are sticky: the first one is kept, the
parser resynchronizes at the next NEWLINE, DEDENT or end of input and
keeps scanning, but the result is reported as failed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from noema.ast import Program
from noema.errors import MAX_MESSAGE_LENGTH, NoemaError, ParseError

from ..lexer import Lexer, Token, TokenKind
from .expressions import MAX_EXPRESSION_DEPTH, ExpressionParsingMixin
from .statements import StatementParsingMixin

logger = logging.getLogger(__name__)

_SYNTHETIC_NAMES = {
    TokenKind.NEWLINE: "end of line",
    TokenKind.INDENT: "indent",
    TokenKind.DEDENT: "dedent",
    TokenKind.EOF: "end of input",
}


@dataclass
class ParseResult:
    """Outcome of parsing a whole program."""

    ok: bool
    message: str = ""
    program: Program = field(default_factory=Program)
    error: Optional[NoemaError] = None


class NoemaParser(StatementParsingMixin, ExpressionParsingMixin):
    """Parser producing a :class:`~noema.ast.Program` from a token stream."""

    def __init__(
        self,
        lexer: Lexer,
        *,
        max_message_length: int = MAX_MESSAGE_LENGTH,
        max_expression_depth: int = MAX_EXPRESSION_DEPTH,
    ):
        self.lexer = lexer
        self.path = lexer.path
        self.max_message_length = max_message_length
        self.max_expression_depth = max_expression_depth
        self.expression_depth = 0
        self.error_state: Optional[ParseError] = None

    # ====================================================================
    # Token Management
    # ====================================================================

    def current(self) -> Token:
        return self.lexer.peek_token()

    def advance(self) -> Token:
        return self.lexer.next_token()

    def match(self, kind: TokenKind, *values: str) -> bool:
        """Check the lookahead kind and, when given, its text."""
        token = self.current()
        if token.kind is not kind:
            return False
        return not values or token.value in values

    def consume_if(self, kind: TokenKind, *values: str) -> Optional[Token]:
        if self.match(kind, *values):
            return self.advance()
        return None

    def expect(self, kind: TokenKind, value: Optional[str] = None, *, message: str) -> Token:
        """Consume a token of ``kind`` (and ``value``) or raise ``message``."""
        token = self.current()
        if token.kind is not kind or (value is not None and token.value != value):
            raise self.error(message, token)
        return self.advance()

    def skip_newlines(self) -> None:
        while self.consume_if(TokenKind.NEWLINE):
            pass

    @staticmethod
    def describe(token: Token) -> str:
        name = _SYNTHETIC_NAMES.get(token.kind)
        if name:
            return name
        return f"token '{token.value}'"

    def error(self, message: str, token: Optional[Token] = None) -> ParseError:
        """Create a syntax error located at ``token`` (or the lookahead)."""
        token = token or self.current()
        return ParseError(message, path=self.path, line=token.line, column=token.column)

    # ====================================================================
    # Error state
    # ====================================================================

    @property
    def has_error(self) -> bool:
        return self.error_state is not None

    def _latch(self, exc: ParseError) -> None:
        if self.error_state is None:
            self.error_state = exc
            logger.debug("Parser error latched: %s", exc.format(self.max_message_length))
        else:
            logger.debug("Suppressed follow-up parser error: %s", exc.message)

    def synchronize(self) -> None:
        """Skip to the next statement boundary after an error."""
        while True:
            token = self.current()
            if token.kind is TokenKind.EOF:
                return
            self.advance()
            if token.kind in (TokenKind.NEWLINE, TokenKind.DEDENT):
                return

    # ====================================================================
    # Program
    # ====================================================================

    def parse_program(self) -> ParseResult:
        program = Program(path=self.path)

        while True:
            token = self.current()
            if token.kind is TokenKind.EOF:
                break
            if token.kind is TokenKind.NEWLINE:
                self.advance()
                continue
            try:
                if token.kind is TokenKind.INDENT:
                    raise self.error("unexpected indent", token)
                if token.kind is TokenKind.DEDENT:
                    raise self.error("unexpected dedent", token)
                program.statements.append(self.parse_statement())
            except ParseError as exc:
                self._latch(exc)
                self.synchronize()

        # A lexer failure explains whatever the parser derived from it.
        if self.lexer.error is not None:
            return ParseResult(
                ok=False,
                message=self.lexer.error.format(self.max_message_length),
                program=program,
                error=self.lexer.error,
            )
        if self.error_state is not None:
            return ParseResult(
                ok=False,
                message=self.error_state.format(self.max_message_length),
                program=program,
                error=self.error_state,
            )
        return ParseResult(ok=True, program=program)


__all__ = ["NoemaParser", "ParseResult"]
