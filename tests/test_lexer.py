"""Tests for the Monkey lexer."""

from __future__ import annotations

import pytest

from monkey.errors import Severity
from monkey.lexer import Lexer
from monkey.tokens import TokenKind


def lex(source: str) -> list[tuple[TokenKind, str | int]]:
    """Helper: lex source and return (kind, value) pairs, excluding EOF."""
    tokens = Lexer(source).tokens()
    return [(t.kind, t.value) for t in tokens if t.kind != TokenKind.EOF]


def kinds(source: str) -> list[TokenKind]:
    """Helper: lex source and return the token kinds, including EOF."""
    return [t.kind for t in Lexer(source).tokens()]


class TestLexerBasic:
    def test_empty_source(self):
        assert kinds("") == [TokenKind.EOF]

    def test_whitespace_only(self):
        assert kinds("  \n\t\r\n ") == [TokenKind.EOF]

    def test_basic_symbols(self):
        assert kinds("=+(){},;") == [
            TokenKind.ASSIGN,
            TokenKind.PLUS,
            TokenKind.LEFT_PAREN,
            TokenKind.RIGHT_PAREN,
            TokenKind.LEFT_BRACE,
            TokenKind.RIGHT_BRACE,
            TokenKind.COMMA,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]

    def test_eof_is_steady(self):
        lexer = Lexer("=+(){},;")
        for _ in range(8):
            lexer.next_token()
        first = lexer.next_token()
        assert first.kind == TokenKind.EOF
        for _ in range(5):
            tok = lexer.next_token()
            assert tok.kind == TokenKind.EOF
            assert tok.span == first.span

    def test_operators(self):
        assert kinds("!-/*<>") == [
            TokenKind.BANG,
            TokenKind.MINUS,
            TokenKind.SLASH,
            TokenKind.STAR,
            TokenKind.LT,
            TokenKind.GT,
            TokenKind.EOF,
        ]


class TestTwoCharOperators:
    def test_eq(self):
        assert kinds("==") == [TokenKind.EQ, TokenKind.EOF]

    def test_not_eq(self):
        assert kinds("!=") == [TokenKind.NOT_EQ, TokenKind.EOF]

    def test_assign_then_bang(self):
        assert kinds("= !") == [TokenKind.ASSIGN, TokenKind.BANG, TokenKind.EOF]

    def test_triple_equals(self):
        assert kinds("===") == [TokenKind.EQ, TokenKind.ASSIGN, TokenKind.EOF]

    def test_two_char_span(self):
        tok = Lexer("a != b").tokens()
        tokens = list(tok)
        assert tokens[1].kind == TokenKind.NOT_EQ
        assert (tokens[1].span.start, tokens[1].span.end) == (2, 3)


class TestIdentifiersAndKeywords:
    def test_identifier(self):
        assert lex("foobar") == [(TokenKind.IDENT, "foobar")]

    def test_underscore_identifier(self):
        assert lex("_my_var") == [(TokenKind.IDENT, "_my_var")]

    def test_single_letter_at_end(self):
        assert lex("x") == [(TokenKind.IDENT, "x")]

    @pytest.mark.parametrize("word,kind", [
        ("let", TokenKind.LET),
        ("fn", TokenKind.FN),
        ("true", TokenKind.TRUE),
        ("false", TokenKind.FALSE),
        ("if", TokenKind.IF),
        ("else", TokenKind.ELSE),
        ("return", TokenKind.RETURN),
    ])
    def test_keywords(self, word, kind):
        assert kinds(word) == [kind, TokenKind.EOF]

    def test_keyword_prefix_is_identifier(self):
        assert lex("letter") == [(TokenKind.IDENT, "letter")]

    def test_digits_end_identifier(self):
        assert lex("x1") == [(TokenKind.IDENT, "x"), (TokenKind.INT, 1)]


class TestIntegers:
    def test_integer(self):
        assert lex("838383") == [(TokenKind.INT, 838383)]

    def test_single_digit_at_end(self):
        assert lex("5") == [(TokenKind.INT, 5)]

    def test_largest_int64(self):
        assert lex("9223372036854775807") == [(TokenKind.INT, 2**63 - 1)]

    def test_overflow_degrades_to_zero(self):
        lexer = Lexer("9223372036854775808")
        tok = lexer.next_token()
        assert tok.kind == TokenKind.INT
        assert tok.value == 0
        assert [d.code for d in lexer.diagnostics] == ["W101"]
        assert lexer.diagnostics[0].severity == Severity.WARNING


class TestIllegal:
    def test_illegal_character(self):
        lexer = Lexer("a @ b")
        tokens = list(lexer.tokens())
        assert [t.kind for t in tokens] == [
            TokenKind.IDENT, TokenKind.ILLEGAL, TokenKind.IDENT, TokenKind.EOF,
        ]
        assert tokens[1].value == "@"
        assert len(lexer.diagnostics) == 1
        assert lexer.diagnostics[0].code == "E100"
        assert lexer.diagnostics[0].span.start == 2

    def test_non_ascii_is_illegal(self):
        assert kinds("é") == [TokenKind.ILLEGAL, TokenKind.EOF]

    def test_nul_character_is_not_eof(self):
        assert kinds("a\0b") == [
            TokenKind.IDENT, TokenKind.ILLEGAL, TokenKind.IDENT, TokenKind.EOF,
        ]

    def test_string_quote_is_illegal(self):
        assert TokenKind.ILLEGAL in kinds('"hi"')


class TestMonkeyProgram:
    def test_full_program(self):
        source = """
            let five = 5;
            let ten = 10;

            let add = fn(x,y) {
                x + y;
            };

            let result = add(five, ten);
            !-/*5;
            5 < 10 > 5;
            if (5 < 10) {
              return true;
            } else {
              return false;
            }

            10 == 10;
            10 != 9;
        """
        K = TokenKind
        expected = [
            (K.LET, "let"), (K.IDENT, "five"), (K.ASSIGN, "="), (K.INT, 5), (K.SEMICOLON, ";"),
            (K.LET, "let"), (K.IDENT, "ten"), (K.ASSIGN, "="), (K.INT, 10), (K.SEMICOLON, ";"),
            (K.LET, "let"), (K.IDENT, "add"), (K.ASSIGN, "="), (K.FN, "fn"),
            (K.LEFT_PAREN, "("), (K.IDENT, "x"), (K.COMMA, ","), (K.IDENT, "y"),
            (K.RIGHT_PAREN, ")"), (K.LEFT_BRACE, "{"), (K.IDENT, "x"), (K.PLUS, "+"),
            (K.IDENT, "y"), (K.SEMICOLON, ";"), (K.RIGHT_BRACE, "}"), (K.SEMICOLON, ";"),
            (K.LET, "let"), (K.IDENT, "result"), (K.ASSIGN, "="), (K.IDENT, "add"),
            (K.LEFT_PAREN, "("), (K.IDENT, "five"), (K.COMMA, ","), (K.IDENT, "ten"),
            (K.RIGHT_PAREN, ")"), (K.SEMICOLON, ";"),
            (K.BANG, "!"), (K.MINUS, "-"), (K.SLASH, "/"), (K.STAR, "*"), (K.INT, 5),
            (K.SEMICOLON, ";"),
            (K.INT, 5), (K.LT, "<"), (K.INT, 10), (K.GT, ">"), (K.INT, 5), (K.SEMICOLON, ";"),
            (K.IF, "if"), (K.LEFT_PAREN, "("), (K.INT, 5), (K.LT, "<"), (K.INT, 10),
            (K.RIGHT_PAREN, ")"), (K.LEFT_BRACE, "{"), (K.RETURN, "return"), (K.TRUE, "true"),
            (K.SEMICOLON, ";"), (K.RIGHT_BRACE, "}"), (K.ELSE, "else"), (K.LEFT_BRACE, "{"),
            (K.RETURN, "return"), (K.FALSE, "false"), (K.SEMICOLON, ";"), (K.RIGHT_BRACE, "}"),
            (K.INT, 10), (K.EQ, "=="), (K.INT, 10), (K.SEMICOLON, ";"),
            (K.INT, 10), (K.NOT_EQ, "!="), (K.INT, 9), (K.SEMICOLON, ";"),
        ]
        assert lex(source) == expected


class TestSpans:
    SOURCE = "let add = fn(x, y) { x + y; };\nif (a != b) { return 10 == 10; }"

    def test_span_reconstructs_lexeme(self):
        for tok in Lexer(self.SOURCE).tokens():
            if tok.kind == TokenKind.EOF:
                continue
            lexeme = self.SOURCE[tok.span.start:tok.span.end + 1]
            if tok.kind == TokenKind.INT:
                assert int(lexeme) == tok.value
            else:
                assert lexeme == tok.value

    def test_spans_are_monotonic(self):
        tokens = list(Lexer(self.SOURCE).tokens())
        for prev, cur in zip(tokens, tokens[1:]):
            assert prev.span.start <= prev.span.end
            assert prev.span.end <= cur.span.start

    def test_eof_span(self):
        tokens = list(Lexer("abc  ").tokens())
        assert tokens[-1].span.start == tokens[-1].span.end == 5
        assert tokens[-1].span.text("abc  ") == ""


class TestTokenDisplay:
    def test_kind_display(self):
        assert str(TokenKind.EQ) == "=="
        assert str(TokenKind.LEFT_BRACE) == "{"
        assert str(TokenKind.LET) == "let"
        assert str(TokenKind.EOF) == "EOF"
        assert str(TokenKind.ILLEGAL) == "ILLEGAL"

    def test_token_display(self):
        ident, num, eof = Lexer("abc 42").tokens()
        assert str(ident) == "abc"
        assert str(num) == "42"
        assert str(eof) == "EOF"
