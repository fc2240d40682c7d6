"""Expression parsing methods for NoemaParser.

Precedence climbing, lowest to highest:

    aut → et → == != → < <= > >= → + - → * / % → non, unary - → primary
"""

from __future__ import annotations

from typing import Tuple

from noema.ast import Binary, Expression, Literal, LiteralKind, Unary, Variable

from ..lexer import Token, TokenKind

EQUALITY_OPERATORS = ("==", "!=")
RELATIONAL_OPERATORS = ("<", "<=", ">", ">=")
ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/", "%")

# Maximum combined nesting of parentheses and prefix operators.
MAX_EXPRESSION_DEPTH = 32

_KEYWORD_LITERALS = {
    "verum": (LiteralKind.BOOL, True),
    "falsum": (LiteralKind.BOOL, False),
    "nulla": (LiteralKind.NULL, None),
}


class ExpressionParsingMixin:
    """Mixin with expression parsing methods."""

    def parse_expression(self) -> Expression:
        return self.parse_logical_or()

    def _enter_nesting(self, token: Token) -> None:
        """Count one parenthesis or prefix operator against the depth limit."""
        if self.expression_depth >= self.max_expression_depth:
            raise self.error("expression nested too deeply", token)
        self.expression_depth += 1

    def _binary_level(self, kind: TokenKind, operators: Tuple[str, ...], operand) -> Expression:
        """Parse a left-associative run of ``operand (op operand)*``."""
        left = operand()
        while self.match(kind, *operators):
            op_token = self.advance()
            right = operand()
            left = Binary(
                op_token.value,
                left,
                right,
                line=op_token.line,
                column=op_token.column,
            )
        return left

    def parse_logical_or(self) -> Expression:
        return self._binary_level(TokenKind.KEYWORD, ("aut",), self.parse_logical_and)

    def parse_logical_and(self) -> Expression:
        return self._binary_level(TokenKind.KEYWORD, ("et",), self.parse_equality)

    def parse_equality(self) -> Expression:
        return self._binary_level(TokenKind.COMPARATOR, EQUALITY_OPERATORS, self.parse_relational)

    def parse_relational(self) -> Expression:
        return self._binary_level(TokenKind.COMPARATOR, RELATIONAL_OPERATORS, self.parse_additive)

    def parse_additive(self) -> Expression:
        return self._binary_level(TokenKind.OPERATOR, ADDITIVE_OPERATORS, self.parse_multiplicative)

    def parse_multiplicative(self) -> Expression:
        return self._binary_level(TokenKind.OPERATOR, MULTIPLICATIVE_OPERATORS, self.parse_unary)

    def parse_unary(self) -> Expression:
        """Parse prefix ``non`` and ``-``; both may be chained."""
        if self.match(TokenKind.KEYWORD, "non") or self.match(TokenKind.OPERATOR, "-"):
            op_token = self.advance()
            self._enter_nesting(op_token)
            try:
                operand = self.parse_unary()
            finally:
                self.expression_depth -= 1
            return Unary(op_token.value, operand, line=op_token.line, column=op_token.column)
        return self.parse_primary()

    def parse_primary(self) -> Expression:
        token: Token = self.current()

        if token.kind is TokenKind.NUMBER:
            self.advance()
            return Literal(LiteralKind.INT, int(token.value), line=token.line, column=token.column)

        if token.kind is TokenKind.STRING:
            self.advance()
            return Literal(LiteralKind.STRING, token.value, line=token.line, column=token.column)

        if token.kind is TokenKind.KEYWORD and token.value in _KEYWORD_LITERALS:
            self.advance()
            kind, value = _KEYWORD_LITERALS[token.value]
            return Literal(kind, value, line=token.line, column=token.column)

        if token.kind is TokenKind.IDENTIFIER:
            self.advance()
            return Variable(token.value, line=token.line, column=token.column)

        if self.match(TokenKind.PAREN, "("):
            self._enter_nesting(self.advance())
            try:
                expr = self.parse_expression()
            finally:
                self.expression_depth -= 1
            self.expect(TokenKind.PAREN, ")", message="expected ')' after expression")
            return expr

        raise self.error(
            "expected expression (number, string, identifier, verum/falsum/nulla)",
            token,
        )


__all__ = ["ExpressionParsingMixin", "MAX_EXPRESSION_DEPTH"]
