"""Noema parser package.

Public API:
    parse_source(source, path) -> ParseResult
    NoemaParser - the parser class
    ParseResult - ok flag, first diagnostic and the parsed Program
"""

from noema.errors import DEFAULT_PATH

from ..lexer import Lexer, SourceInput
from .parse import NoemaParser, ParseResult


def parse_source(source: SourceInput, path: str = DEFAULT_PATH) -> ParseResult:
    """
    Parse Noema source into a :class:`~noema.ast.Program`.

    Never raises for lexical or syntax errors; inspect ``result.ok`` and
    ``result.message`` instead.

    Example:
        ```python
        result = parse_source('x = 1 + 2\\n')
        assert result.ok
        print(result.program.statements[0].target)  # "x"
        ```
    """
    parser = NoemaParser(Lexer(source, path))
    return parser.parse_program()


__all__ = ["parse_source", "NoemaParser", "ParseResult"]
