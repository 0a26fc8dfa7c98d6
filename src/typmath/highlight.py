"""Pygments lexer for prose with embedded ``$``-delimited math."""

from pygments.lexer import RegexLexer, words
from pygments.token import (
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)

from typmath.tokens import RELATION_KEYWORDS, RELATION_OPERATORS


class TypstMathLexer(RegexLexer):
    """Pygments lexer for documents mixing prose and math."""

    name = "Typst math"
    aliases = ["typmath"]
    filenames = ["*.typmath"]
    mimetypes = ["text/x-typmath"]

    tokens = {
        "root": [
            # Escaped delimiter stays prose
            (r"\\.", String.Escape),
            (r"\$", String.Delimiter, "math"),
            (r"[^$\\]+", Text),
        ],
        "math": [
            (r"\\.", String.Escape),
            (r"\$", String.Delimiter, "#pop"),
            (r"\s+", Text),
            # Relation keywords, dotted variants first
            (
                words(
                    sorted(RELATION_KEYWORDS, key=len, reverse=True),
                    prefix=r"\b",
                    suffix=r"\b(?!\.)",
                ),
                Operator.Word,
            ),
            (words(RELATION_OPERATORS), Operator),
            (r"[\^_]", Operator),
            (r"[+*-]", Operator),
            (r"[0-9]+(\.[0-9]+)?", Number),
            # Function-style calls: name glued to its paren
            (r"[^\W\d_][^\W_]*(?=\()", Name.Function),
            (r"[^\W\d_][^\W_]*(\.[^\W_]+)+", Name.Constant),
            (r"[^\W\d_][^\W_]*", Name),
            (r"[(),]", Punctuation),
            (r".", Text),
        ],
    }
