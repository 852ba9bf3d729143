"""Pygments lexer for the Monkey programming language."""

from pygments.lexer import RegexLexer, words
from pygments.token import (
    Error,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    Text,
)


class MonkeyLexer(RegexLexer):
    """Pygments lexer for the Monkey programming language."""

    name = "Monkey"
    aliases = ["monkey"]
    filenames = ["*.mk", "*.monkey"]
    mimetypes = ["text/x-monkey"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Declarations
            (words(("let", "fn"), suffix=r"\b"), Keyword.Declaration),
            # Control flow
            (words(("if", "else", "return"), suffix=r"\b"), Keyword),
            # Booleans
            (words(("true", "false"), suffix=r"\b"), Keyword.Constant),
            # Integers
            (r"[0-9]+", Number.Integer),
            # Identifiers (letters and underscores only)
            (r"[A-Za-z_]+", Name),
            # Two-character operators before their one-character prefixes
            (r"==|!=", Operator),
            (r"[=+\-*/<>!]", Operator),
            (r"[(){},;]", Punctuation),
            # Anything else is illegal in Monkey
            (r".", Error),
        ],
    }
