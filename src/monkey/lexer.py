"""Lexer for the Monkey programming language.

A pull-based scanner: every call to ``next_token`` yields exactly one token,
and once the end of input is reached it keeps yielding EOF. Spans use an
inclusive end offset, so ``source[span.start:span.end + 1]`` is the lexeme.
"""

from __future__ import annotations

from collections.abc import Iterator

from monkey.errors import Diagnostic, DiagnosticLabel, Severity
from monkey.source import Span
from monkey.tokens import SINGLE_CHAR_TOKENS, Token, TokenKind, lookup_identifier

_INT64_MAX = 2**63 - 1


def _is_letter(ch: str) -> bool:
    return (ch.isascii() and ch.isalpha()) or ch == '_'


def _is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


def _is_whitespace(ch: str) -> bool:
    return ch in ' \t\n\r\f\v'


class Lexer:
    """Tokenizes Monkey source code one token at a time."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.next_pos = 0
        self.ch = '\0'
        self.diagnostics: list[Diagnostic] = []
        self._read_char()

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace()

        if self._at_end():
            end = len(self.source)
            return Token(TokenKind.EOF, "", Span(end, end))

        start = self.pos
        ch = self.ch

        match ch:
            case '=' | '!':
                if self._peek_char() == '=':
                    self._read_char()
                    kind = TokenKind.EQ if ch == '=' else TokenKind.NOT_EQ
                    token = Token(kind, ch + '=', Span(start, self.pos))
                elif ch == '=':
                    token = Token(TokenKind.ASSIGN, ch, Span(start, start))
                else:
                    token = Token(TokenKind.BANG, ch, Span(start, start))
            case _ if ch in SINGLE_CHAR_TOKENS:
                token = Token(SINGLE_CHAR_TOKENS[ch], ch, Span(start, start))
            case _ if _is_letter(ch):
                token = self._lex_identifier()
            case _ if _is_digit(ch):
                token = self._lex_integer()
            case _:
                self._error(f"unexpected character: {ch!r}", start)
                token = Token(TokenKind.ILLEGAL, ch, Span(start, start))

        self._read_char()
        return token

    def tokens(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    # ── Helpers ───────────────────────────────────────────────────

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _read_char(self) -> None:
        if self.next_pos >= len(self.source):
            self.ch = '\0'
            self.pos = len(self.source)
            self.next_pos = self.pos
        else:
            self.ch = self.source[self.next_pos]
            self.pos = self.next_pos
        self.next_pos += 1

    def _peek_char(self) -> str:
        if self.next_pos >= len(self.source):
            return '\0'
        return self.source[self.next_pos]

    def _skip_whitespace(self) -> None:
        while not self._at_end() and _is_whitespace(self.ch):
            self._read_char()

    def _error(self, message: str, offset: int, severity: Severity = Severity.ERROR,
               code: str = "E100") -> None:
        self.diagnostics.append(
            Diagnostic(
                severity=severity,
                code=code,
                message=message,
                labels=[DiagnosticLabel(span=Span(offset, offset))],
            )
        )

    # ── Identifiers and integers ─────────────────────────────────

    def _lex_identifier(self) -> Token:
        start = self.pos
        while _is_letter(self.ch) and _is_letter(self._peek_char()):
            self._read_char()
        word = self.source[start:self.pos + 1]
        kind = lookup_identifier(word)
        return Token(kind, word, Span(start, self.pos))

    def _lex_integer(self) -> Token:
        start = self.pos
        while _is_digit(self.ch) and _is_digit(self._peek_char()):
            self._read_char()
        text = self.source[start:self.pos + 1]
        value = int(text)
        if value > _INT64_MAX:
            self._error(
                f"integer literal {text} does not fit in 64 bits, using 0",
                start, Severity.WARNING, "W101",
            )
            value = 0
        return Token(TokenKind.INT, value, Span(start, self.pos))
