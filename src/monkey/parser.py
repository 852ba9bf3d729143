"""Parser for the Monkey programming language.

Pulls tokens from a Lexer through a two-token lookahead window and builds an
AST: recursive descent for statements and blocks, a Pratt parser for
expressions.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from enum import IntEnum

from monkey.ast_nodes import (
    BlockStatement,
    BooleanLiteral,
    Expression,
    ExpressionStatement,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.errors import CompileError, Diagnostic, DiagnosticLabel, Severity
from monkey.lexer import Lexer
from monkey.source import Span
from monkey.tokens import Token, TokenKind

# ── Precedence for the Pratt parser ─────────────────────────────


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2
    LESS_GREATER = 3
    SUM = 4
    PRODUCT = 5
    PREFIX = 6
    CALL = 7


_PRECEDENCES: dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESS_GREATER,
    TokenKind.GT: Precedence.LESS_GREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.STAR: Precedence.PRODUCT,
}


def precedence_of(kind: TokenKind) -> Precedence:
    """Binding strength of a token used as an infix operator."""
    return _PRECEDENCES.get(kind, Precedence.LOWEST)


class Parser:
    """Parses the token stream of a Lexer into a Monkey AST."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.diagnostics: list[Diagnostic] = []
        self.current_token = lexer.next_token()
        self.peek_token = lexer.next_token()

        self._prefix_parsers: dict[TokenKind, Callable[[], Expression]] = {
            TokenKind.IDENT: self._parse_identifier,
            TokenKind.INT: self._parse_integer_literal,
            TokenKind.TRUE: self._parse_boolean_literal,
            TokenKind.FALSE: self._parse_boolean_literal,
            TokenKind.BANG: self._parse_prefix_expression,
            TokenKind.MINUS: self._parse_prefix_expression,
            TokenKind.LEFT_PAREN: self._parse_grouped_expression,
            TokenKind.IF: self._parse_if_expression,
        }

    # ── Token window ─────────────────────────────────────────────

    def bump(self) -> None:
        """Shift the lookahead window forward by one token."""
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def expect_peek(self, kind: TokenKind) -> None:
        """Bump if the next token is ``kind``, otherwise fail without advancing."""
        if self.peek_token.kind == kind:
            self.bump()
            return
        self._expected(kind, self.peek_token)

    def _current_is(self, *kinds: TokenKind) -> bool:
        return self.current_token.kind in kinds

    def _peek_is(self, *kinds: TokenKind) -> bool:
        return self.peek_token.kind in kinds

    def _error(self, message: str, span: Span, code: str = "E200") -> None:
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.ERROR,
                code=code,
                message=message,
                labels=[DiagnosticLabel(span=span)],
            )
        )

    def _expected(self, kind: TokenKind, actual: Token) -> None:
        self._error(f"Expected next token to be: {kind} got: {actual}", actual.span)
        raise _ParseError

    def _synchronize(self) -> None:
        """Skip to the last token of the broken statement."""
        while not (self._current_is(TokenKind.SEMICOLON, TokenKind.RIGHT_BRACE, TokenKind.EOF)
                   or self._peek_is(TokenKind.RIGHT_BRACE, TokenKind.EOF)):
            self.bump()

    # ── Program and statements ───────────────────────────────────

    def parse_program(self) -> Program:
        """Parse the whole input. Raises CompileError if anything failed."""
        statements: list[Statement] = []
        while not self._current_is(TokenKind.EOF):
            try:
                statements.append(self.parse_statement())
            except _ParseError:
                self._synchronize()
            self.bump()

        if self.diagnostics:
            raise CompileError(list(self.diagnostics))

        if statements:
            span = Span(statements[0].span.start, statements[-1].span.end)
        else:
            span = Span(0, 0)
        return Program(statements=statements, span=span)

    def parse_statement(self) -> Statement:
        match self.current_token.kind:
            case TokenKind.LET:
                return self.parse_let_statement()
            case TokenKind.RETURN:
                return self.parse_return_statement()
            case _:
                return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        start = self.current_token.span
        self.bump()

        identifier = self.current_token
        if identifier.kind != TokenKind.IDENT:
            self._error(
                f"Expected identifier after let got: {identifier}",
                identifier.span, code="E202",
            )
            raise _ParseError

        self.expect_peek(TokenKind.ASSIGN)
        # The right-hand side is not parsed yet, only skipped
        self._skip_to_semicolon()
        return LetStatement(identifier, None, Span(start.start, self.current_token.span.end))

    def parse_return_statement(self) -> ReturnStatement:
        start = self.current_token.span
        self.bump()
        self._skip_to_semicolon()
        return ReturnStatement(None, Span(start.start, self.current_token.span.end))

    def _skip_to_semicolon(self) -> None:
        while not self._current_is(TokenKind.SEMICOLON):
            if self._current_is(TokenKind.EOF):
                self._expected(TokenKind.SEMICOLON, self.current_token)
            self.bump()

    def parse_expression_statement(self) -> ExpressionStatement:
        expression = self.parse_expression(Precedence.LOWEST)
        end = expression.span.end
        if self._peek_is(TokenKind.SEMICOLON):
            self.bump()
            end = self.current_token.span.end
        return ExpressionStatement(expression, Span(expression.span.start, end))

    def _parse_block_statement(self) -> BlockStatement:
        start = self.current_token.span
        self.bump()  # '{'

        statements: list[Statement] = []
        while not self._current_is(TokenKind.RIGHT_BRACE, TokenKind.EOF):
            try:
                statements.append(self.parse_statement())
            except _ParseError:
                self._synchronize()
                if self._current_is(TokenKind.RIGHT_BRACE):
                    break
            self.bump()

        if self._current_is(TokenKind.EOF):
            self._expected(TokenKind.RIGHT_BRACE, self.current_token)
        return BlockStatement(statements, Span(start.start, self.current_token.span.end))

    # ── Pratt expression parser ──────────────────────────────────

    def parse_expression(self, min_precedence: Precedence) -> Expression:
        """Parse an expression whose operators bind tighter than ``min_precedence``."""
        tok = self.current_token
        prefix = self._prefix_parsers.get(tok.kind)
        if prefix is None:
            self._error(f"no prefix parse rule for token {tok}", tok.span, code="E201")
            raise _ParseError
        left = prefix()

        while (not self._peek_is(TokenKind.SEMICOLON)
               and min_precedence < precedence_of(self.peek_token.kind)):
            self.bump()
            left = self._parse_infix_expression(left)

        return left

    def _parse_infix_expression(self, left: Expression) -> InfixExpression:
        operator = self.current_token
        self.bump()
        # Parsing the right side at the operator's own precedence keeps
        # equal-precedence chains left-associative
        right = self.parse_expression(precedence_of(operator.kind))
        return InfixExpression(left, operator, right, Span(left.span.start, right.span.end))

    def _parse_identifier(self) -> Identifier:
        tok = self.current_token
        return Identifier(str(tok.value), tok.span)

    def _parse_integer_literal(self) -> IntegerLiteral:
        tok = self.current_token
        return IntegerLiteral(int(tok.value), tok.span)

    def _parse_boolean_literal(self) -> BooleanLiteral:
        tok = self.current_token
        return BooleanLiteral(tok.kind == TokenKind.TRUE, tok.span)

    def _parse_prefix_expression(self) -> PrefixExpression:
        operator = self.current_token
        self.bump()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(operator, right, Span(operator.span.start, right.span.end))

    def _parse_grouped_expression(self) -> Expression:
        start = self.current_token.span
        self.bump()
        expr = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RIGHT_PAREN)
        # No node for the parentheses, the inner node absorbs their extent
        return dataclasses.replace(expr, span=Span(start.start, self.current_token.span.end))

    def _parse_if_expression(self) -> IfExpression:
        start = self.current_token.span
        self.expect_peek(TokenKind.LEFT_PAREN)
        self.bump()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RIGHT_PAREN)

        self.expect_peek(TokenKind.LEFT_BRACE)
        consequence = self._parse_block_statement()

        alternative = None
        if self._peek_is(TokenKind.ELSE):
            self.bump()
            self.expect_peek(TokenKind.LEFT_BRACE)
            alternative = self._parse_block_statement()

        return IfExpression(
            condition, consequence, alternative,
            Span(start.start, self.current_token.span.end),
        )


class _ParseError(Exception):
    """Internal exception for parser error recovery."""


def parse(source: str, filename: str = "<stdin>") -> Program:
    """Lex and parse ``source``. Raises CompileError on any parse diagnostic."""
    return Parser(Lexer(source, filename)).parse_program()
