"""Tests for the Pygments lexer."""

from __future__ import annotations

from pygments.token import Error, Keyword, Name, Number, Operator, Punctuation

from monkey.highlight import MonkeyLexer


def significant(source: str) -> list[tuple[object, str]]:
    """Helper: Pygments tokens without whitespace."""
    return [(t, v) for t, v in MonkeyLexer().get_tokens(source) if v.strip()]


class TestMonkeyLexer:
    def test_let_statement(self):
        assert significant("let x = 5;") == [
            (Keyword.Declaration, "let"),
            (Name, "x"),
            (Operator, "="),
            (Number.Integer, "5"),
            (Punctuation, ";"),
        ]

    def test_keywords_and_booleans(self):
        tokens = significant("if (true) { return false; } else { 1 }")
        assert (Keyword, "if") in tokens
        assert (Keyword, "else") in tokens
        assert (Keyword, "return") in tokens
        assert (Keyword.Constant, "true") in tokens
        assert (Keyword.Constant, "false") in tokens

    def test_two_char_operators(self):
        tokens = significant("a == b != c")
        assert (Operator, "==") in tokens
        assert (Operator, "!=") in tokens

    def test_keyword_prefix_is_name(self):
        assert significant("letter") == [(Name, "letter")]

    def test_illegal(self):
        assert (Error, "@") in significant("@")

    def test_metadata(self):
        assert MonkeyLexer.aliases == ["monkey"]
        assert "*.mk" in MonkeyLexer.filenames
