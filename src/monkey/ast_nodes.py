"""AST node definitions for the Monkey language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from monkey.source import Span
from monkey.tokens import Token, TokenKind

# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Identifier:
    name: str
    span: Span


@dataclass(frozen=True)
class IntegerLiteral:
    value: int
    span: Span


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool
    span: Span


Literal = Union[IntegerLiteral, BooleanLiteral]


@dataclass(frozen=True)
class PrefixExpression:
    operator: Token
    right: Expression
    span: Span


@dataclass(frozen=True)
class InfixExpression:
    left: Expression
    operator: Token
    right: Expression
    span: Span


@dataclass(frozen=True)
class IfExpression:
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None
    span: Span


Expression = Union[
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
]


# ── Statements ───────────────────────────────────────────────────


@dataclass(frozen=True)
class LetStatement:
    identifier: Token
    value: Expression | None
    span: Span

    def __post_init__(self) -> None:
        if self.identifier.kind != TokenKind.IDENT:
            raise ValueError(
                f"let statement needs an identifier token, got {self.identifier.kind.name}"
            )

    @property
    def name(self) -> str:
        return str(self.identifier.value)


@dataclass(frozen=True)
class ReturnStatement:
    value: Expression | None
    span: Span


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression
    span: Span


Statement = Union[LetStatement, ReturnStatement, ExpressionStatement]


@dataclass(frozen=True)
class BlockStatement:
    statements: list[Statement]
    span: Span


# ── Program ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Program:
    statements: list[Statement]
    span: Span


Node = Union[Program, Statement, BlockStatement, Expression]
