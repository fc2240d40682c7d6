"""Statement parsing methods for NoemaParser."""

from __future__ import annotations

from typing import List

from noema.ast import PRINT_BUILTIN, Assign, Branch, If, Import, PrintCall, Statement

from ..lexer import Token, TokenKind


class StatementParsingMixin:
    """Mixin with statement and block parsing methods.

    Grammar:
        Statement  = Import | Assign | PrintCall | IfChain ;
        Import     = "import" , Identifier , EndOfStmt ;
        Assign     = Identifier , "=" , Expression , EndOfStmt ;
        PrintCall  = "sonus.dic" , "(" , Expression , ")" , EndOfStmt ;
        IfChain    = "si" , Expression , ":" , Block ,
                     { "aliosi" , Expression , ":" , Block } ,
                     [ "alio" , ":" , Block ] ;
        Block      = NEWLINE , INDENT , { Statement | NEWLINE } , DEDENT ;
    """

    def parse_statement(self) -> Statement:
        token = self.current()

        if token.kind is TokenKind.KEYWORD:
            if token.value == "import":
                return self.parse_import()
            if token.value == "si":
                return self.parse_if()
            if token.value in ("aliosi", "alio"):
                raise self.error(f"'{token.value}' without matching 'si'", token)
            raise self.error(f"unexpected keyword '{token.value}'", token)

        if token.kind is TokenKind.IDENTIFIER:
            ident = self.advance()
            if ident.value == PRINT_BUILTIN:
                return self.parse_print_call(ident)
            if self.match(TokenKind.ASSIGN):
                return self.parse_assignment(ident)
            raise self.error("expected assignment or call", self.current())

        raise self.error(f"unexpected {self.describe(token)}", token)

    def end_statement(self) -> None:
        """Require the end of a simple statement.

        A NEWLINE is consumed; DEDENT and EOF are left for the enclosing
        block or program loop.
        """
        if self.consume_if(TokenKind.NEWLINE):
            return
        if self.match(TokenKind.DEDENT) or self.match(TokenKind.EOF):
            return
        token = self.current()
        raise self.error(f"expected end of statement, found {self.describe(token)}", token)

    def parse_import(self) -> Import:
        keyword = self.advance()
        module = self.expect(TokenKind.IDENTIFIER, message="expected module name after 'import'")
        self.end_statement()
        return Import(module.value, line=keyword.line, column=keyword.column)

    def parse_assignment(self, ident: Token) -> Assign:
        self.expect(TokenKind.ASSIGN, message="expected '=' after identifier")
        value = self.parse_expression()
        self.end_statement()
        return Assign(ident.value, value, line=ident.line, column=ident.column)

    def parse_print_call(self, ident: Token) -> PrintCall:
        self.expect(TokenKind.PAREN, "(", message=f"expected '(' after {PRINT_BUILTIN}")
        argument = self.parse_expression()
        self.expect(TokenKind.PAREN, ")", message="expected ')' after argument")
        self.end_statement()
        return PrintCall(argument, line=ident.line, column=ident.column)

    def parse_if(self) -> If:
        keyword = self.advance()
        branches: List[Branch] = []

        condition = self.parse_expression()
        self.expect(TokenKind.COLON, message="expected ':' after condition")
        branches.append(Branch(condition, self.parse_block()))

        while self.match(TokenKind.KEYWORD, "aliosi"):
            self.advance()
            condition = self.parse_expression()
            self.expect(TokenKind.COLON, message="expected ':' after condition")
            branches.append(Branch(condition, self.parse_block()))

        if self.match(TokenKind.KEYWORD, "alio"):
            self.advance()
            self.expect(TokenKind.COLON, message="expected ':' after 'alio'")
            branches.append(Branch(None, self.parse_block()))

        return If(branches, line=keyword.line, column=keyword.column)

    def parse_block(self) -> List[Statement]:
        self.expect(TokenKind.NEWLINE, message="expected newline after ':'")
        self.skip_newlines()
        self.expect(TokenKind.INDENT, message="expected indented block")

        body: List[Statement] = []
        while True:
            token = self.current()
            if token.kind is TokenKind.NEWLINE:
                self.advance()
                continue
            if token.kind is TokenKind.DEDENT:
                self.advance()
                return body
            if token.kind is TokenKind.EOF:
                raise self.error("unexpected end of input inside block", token)
            if token.kind is TokenKind.INDENT:
                raise self.error("unexpected indent", token)
            body.append(self.parse_statement())


__all__ = ["StatementParsingMixin"]
