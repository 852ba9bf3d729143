"""Token kinds and token representation for the Monkey lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monkey.source import Span


class TokenKind(Enum):
    EOF = auto()
    ILLEGAL = auto()

    # Identifiers and literals
    IDENT = auto()
    INT = auto()
    STRING = auto()

    # Operators
    ASSIGN = auto()
    PLUS = auto()
    BANG = auto()
    MINUS = auto()
    SLASH = auto()
    STAR = auto()
    LT = auto()
    GT = auto()
    EQ = auto()
    NOT_EQ = auto()

    # Delimiters
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    SEMICOLON = auto()

    # Keywords
    LET = auto()
    FN = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()

    def __str__(self) -> str:
        return _DISPLAY.get(self, self.name)


_DISPLAY: dict[TokenKind, str] = {
    TokenKind.ASSIGN: "=",
    TokenKind.PLUS: "+",
    TokenKind.BANG: "!",
    TokenKind.MINUS: "-",
    TokenKind.SLASH: "/",
    TokenKind.STAR: "*",
    TokenKind.LT: "<",
    TokenKind.GT: ">",
    TokenKind.EQ: "==",
    TokenKind.NOT_EQ: "!=",
    TokenKind.LEFT_PAREN: "(",
    TokenKind.RIGHT_PAREN: ")",
    TokenKind.LEFT_BRACE: "{",
    TokenKind.RIGHT_BRACE: "}",
    TokenKind.COMMA: ",",
    TokenKind.SEMICOLON: ";",
    TokenKind.LET: "let",
    TokenKind.FN: "fn",
    TokenKind.TRUE: "true",
    TokenKind.FALSE: "false",
    TokenKind.IF: "if",
    TokenKind.ELSE: "else",
    TokenKind.RETURN: "return",
}

# Kinds whose display is the token's own value rather than a fixed string
_VALUE_DISPLAYED = frozenset({TokenKind.IDENT, TokenKind.INT, TokenKind.STRING})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str | int
    span: Span

    def __str__(self) -> str:
        if self.kind in _VALUE_DISPLAYED:
            return str(self.value)
        return str(self.kind)


KEYWORDS: dict[str, TokenKind] = {
    "let": TokenKind.LET,
    "fn": TokenKind.FN,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "return": TokenKind.RETURN,
}

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
}


def lookup_identifier(word: str) -> TokenKind:
    """Resolve a scanned word to its keyword kind, or IDENT."""
    return KEYWORDS.get(word, TokenKind.IDENT)
