"""Noema language front end: lexer and parser."""

from .lexer import KEYWORDS, Lexer, Token, TokenKind, tokenize
from .parser import NoemaParser, ParseResult, parse_source

# Version of the Noema language accepted by this package.
LANGUAGE_VERSION = "0.1"

__all__ = [
    "LANGUAGE_VERSION",
    "KEYWORDS",
    "Lexer",
    "Token",
    "TokenKind",
    "tokenize",
    "NoemaParser",
    "ParseResult",
    "parse_source",
]
