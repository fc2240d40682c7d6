"""Lexical analyzer (tokenizer) for the Noema language.

Reads source one physical line at a time and produces tokens on demand.
Block structure is reconstructed from leading whitespace: the lexer emits
synthetic NEWLINE, INDENT and DEDENT tokens following the off-side rule.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, TextIO, Union

from ..errors import DEFAULT_PATH, MAX_MESSAGE_LENGTH, LexerError

logger = logging.getLogger(__name__)

INDENT_SPACES = 4
INDENT_STACK_MAX = 256
TOKEN_VALUE_MAX = 255


class TokenKind(Enum):
    """Token kinds produced by the lexer."""

    EOF = auto()

    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    KEYWORD = auto()

    OPERATOR = auto()
    COMPARATOR = auto()
    ASSIGN = auto()

    PAREN = auto()
    BRACKET = auto()
    COLON = auto()
    COMMA = auto()

    NEWLINE = auto()
    INDENT = auto()
    DEDENT = auto()

    INVALID = auto()


@dataclass(frozen=True)
class Token:
    """A single token with position information."""

    kind: TokenKind
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, {self.line}:{self.column})"


KEYWORDS = frozenset({
    "si", "aliosi", "alio",
    "pro", "dum", "frange", "perge",
    "munus", "redit",
    "conare", "nisi", "denique", "iacta",
    "import",
    "verum", "falsum", "nulla",
    "et", "aut", "non",
    "in",
})

COMPARATORS = ("==", "!=", "<=", ">=")
OPERATORS = "+-*/%"

SourceInput = Union[str, TextIO]


def _is_digit(char: str) -> bool:
    return len(char) == 1 and "0" <= char <= "9"


def _is_blank_or_comment(line: str) -> bool:
    stripped = line.lstrip(" ")
    return stripped in ("", "\n") or stripped.startswith("#")


class Lexer:
    """Pull-based tokenizer for Noema source code.

    ``next_token`` consumes a token, ``peek_token`` looks one token ahead.
    The first lexical error is latched in :attr:`error`; from then on the
    lexer only returns EOF tokens.
    """

    def __init__(
        self,
        source: SourceInput,
        path: str = DEFAULT_PATH,
        *,
        max_token_length: int = TOKEN_VALUE_MAX,
        max_indent_depth: int = INDENT_STACK_MAX,
        max_message_length: int = MAX_MESSAGE_LENGTH,
    ):
        if isinstance(source, str):
            source = io.StringIO(source)
        self.stream = source
        self.path = path or DEFAULT_PATH
        self.max_token_length = max_token_length
        self.max_indent_depth = max_indent_depth
        self.max_message_length = max_message_length

        self.line_text = ""
        self.pos = 0
        self.line = 0

        # Indentation levels in units of INDENT_SPACES. A jump of several
        # levels is one stack entry but one INDENT token per level.
        self.indent_stack: List[int] = [0]
        self.pending_indents = 0
        self.pending_dedents = 0

        self.paren_depth = 0

        self._peeked: Optional[Token] = None
        self.error: Optional[LexerError] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def error_message(self) -> str:
        return self.error.format(self.max_message_length) if self.error else ""

    def next_token(self) -> Token:
        """Consume and return the next token."""
        if self._peeked is not None:
            token, self._peeked = self._peeked, None
            return token
        return self._scan()

    def peek_token(self) -> Token:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self._scan()
        return self._peeked

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _make(self, kind: TokenKind, value: str, line: int, column: int) -> Token:
        if len(value) > self.max_token_length:
            logger.debug("Truncating %s token at %d:%d", kind.name, line, column)
            value = value[: self.max_token_length]
        return Token(kind, value, line, column)

    def _eof(self, column: int = 1) -> Token:
        return Token(TokenKind.EOF, "", self.line, column)

    def _set_error(self, line: int, column: int, message: str) -> None:
        if self.error is not None:
            return
        self.error = LexerError(message, path=self.path, line=line, column=column)
        logger.debug("Lexer error latched: %s", self.error_message)

    def _read_line(self) -> bool:
        try:
            raw = self.stream.readline()
        except UnicodeDecodeError:
            self._set_error(self.line + 1, 1, "invalid UTF-8 in source")
            raw = ""
        if not raw:
            self.line_text = ""
            self.pos = 0
            return False
        if raw.endswith("\r\n"):
            raw = raw[:-2] + "\n"
        self.line += 1
        self.line_text = raw
        self.pos = 0
        return True

    def _peek_char(self, offset: int = 0) -> str:
        index = self.pos + offset
        if index < len(self.line_text):
            return self.line_text[index]
        return ""

    def _skip_inline_whitespace(self) -> None:
        while True:
            char = self._peek_char()
            if char == "\t":
                self._set_error(self.line, self.pos + 1, "tab character is not allowed (use 4 spaces)")
                return
            if char != " ":
                return
            self.pos += 1

    def _count_indent(self) -> int:
        count = 0
        while True:
            char = self._peek_char()
            if char == " ":
                count += 1
                self.pos += 1
            elif char == "\t":
                self._set_error(self.line, self.pos + 1, "tab character is not allowed (use 4 spaces)")
                return 0
            else:
                return count

    def _handle_indentation(self) -> Optional[Token]:
        """Compare the current line's indentation with the stack top.

        Returns the structural token to emit now, ``None`` when the level is
        unchanged, or an EOF token after latching an error.
        """
        spaces = self._count_indent()
        if self.error:
            return self._eof()

        if spaces % INDENT_SPACES != 0:
            self._set_error(self.line, 1, "indentation must be multiple of 4 spaces")
            return self._eof()

        new_level = spaces // INDENT_SPACES
        current = self.indent_stack[-1]

        if new_level > current:
            if len(self.indent_stack) >= self.max_indent_depth:
                self._set_error(self.line, 1, "indent stack overflow")
                return self._eof()
            self.indent_stack.append(new_level)
            self.pending_indents = new_level - current - 1
            return Token(TokenKind.INDENT, "INDENT", self.line, 1)

        if new_level < current:
            while len(self.indent_stack) > 1 and self.indent_stack[-1] > new_level:
                self.indent_stack.pop()
            if self.indent_stack[-1] != new_level:
                self._set_error(self.line, 1, "inconsistent dedent")
                return self._eof()
            self.pending_dedents = current - new_level - 1
            return Token(TokenKind.DEDENT, "DEDENT", self.line, 1)

        return None

    # ------------------------------------------------------------------
    # Scanner
    # ------------------------------------------------------------------

    def _scan(self) -> Token:
        while True:
            if self.error:
                return self._eof(self.pos + 1)

            if self.pending_indents > 0:
                self.pending_indents -= 1
                return Token(TokenKind.INDENT, "INDENT", self.line, 1)
            if self.pending_dedents > 0:
                self.pending_dedents -= 1
                return Token(TokenKind.DEDENT, "DEDENT", self.line, 1)

            if self.pos >= len(self.line_text):
                if not self._read_line():
                    if self.error:
                        return self._eof()
                    if len(self.indent_stack) > 1:
                        self.pending_dedents = self.indent_stack[-1] - 1
                        del self.indent_stack[1:]
                        return Token(TokenKind.DEDENT, "DEDENT", self.line, 1)
                    return self._eof()

                if _is_blank_or_comment(self.line_text):
                    self.pos = len(self.line_text)
                    continue

                if self.paren_depth == 0:
                    structural = self._handle_indentation()
                    if structural is not None:
                        return structural

            self._skip_inline_whitespace()
            if self.error:
                return self._eof(self.pos + 1)

            char = self._peek_char()
            column = self.pos + 1

            if char == "#":
                self.pos = len(self.line_text)
                if self.paren_depth == 0:
                    return Token(TokenKind.NEWLINE, "NEWLINE", self.line, column)
                continue

            if char in ("\n", ""):
                self.pos = len(self.line_text)
                if self.paren_depth == 0:
                    return Token(TokenKind.NEWLINE, "NEWLINE", self.line, column)
                continue

            if char == '"':
                return self._lex_string(column)
            if _is_digit(char):
                return self._lex_number(column)
            if char.isascii() and (char.isalpha() or char == "_"):
                return self._lex_identifier(column)
            return self._lex_punctuation(column)

    def _lex_number(self, column: int) -> Token:
        start = self.pos
        while _is_digit(self._peek_char()):
            self.pos += 1
        return self._make(TokenKind.NUMBER, self.line_text[start:self.pos], self.line, column)

    def _lex_identifier(self, column: int) -> Token:
        start = self.pos
        while True:
            char = self._peek_char()
            if char and char.isascii() and (char.isalnum() or char in "_."):
                self.pos += 1
            else:
                break
        text = self.line_text[start:self.pos]
        kind = TokenKind.KEYWORD if text in KEYWORDS else TokenKind.IDENTIFIER
        return self._make(kind, text, self.line, column)

    def _lex_string(self, column: int) -> Token:
        self.pos += 1  # opening quote
        start = self.pos
        while True:
            char = self._peek_char()
            if char in ("", "\n"):
                self._set_error(self.line, column, "unterminated string literal")
                return Token(TokenKind.STRING, "", self.line, column)
            if char == '"':
                text = self.line_text[start:self.pos]
                self.pos += 1  # closing quote
                return self._make(TokenKind.STRING, text, self.line, column)
            self.pos += 1

    def _lex_punctuation(self, column: int) -> Token:
        char = self._peek_char()
        pair = char + self._peek_char(1)

        if pair in COMPARATORS:
            self.pos += 2
            return Token(TokenKind.COMPARATOR, pair, self.line, column)

        self.pos += 1

        if char == "=":
            return Token(TokenKind.ASSIGN, "=", self.line, column)
        if char in ("<", ">"):
            return Token(TokenKind.COMPARATOR, char, self.line, column)
        if char in OPERATORS:
            return Token(TokenKind.OPERATOR, char, self.line, column)
        if char == "(":
            self.paren_depth += 1
            return Token(TokenKind.PAREN, char, self.line, column)
        if char == ")":
            if self.paren_depth > 0:
                self.paren_depth -= 1
            return Token(TokenKind.PAREN, char, self.line, column)
        if char in "[]":
            return Token(TokenKind.BRACKET, char, self.line, column)
        if char == ":":
            return Token(TokenKind.COLON, ":", self.line, column)
        if char == ",":
            return Token(TokenKind.COMMA, ",", self.line, column)

        if char == "!":
            self._set_error(self.line, column, "unexpected '!'")
        else:
            self._set_error(self.line, column, f"unexpected character '{char}'")
        return Token(TokenKind.INVALID, char, self.line, column)


def tokenize(source: SourceInput, path: str = DEFAULT_PATH) -> List[Token]:
    """Tokenize Noema source code eagerly, including the final EOF token."""
    return list(Lexer(source, path))


__all__ = [
    "TokenKind",
    "Token",
    "Lexer",
    "KEYWORDS",
    "INDENT_SPACES",
    "tokenize",
]
