"""Token kinds and token representation for the math lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typmath.source import Span


class TokenKind(Enum):
    # Names
    IDENTIFIER = auto()
    DOT_CHAIN = auto()

    # Literals
    NUMBER = auto()

    # Operators
    CARET = auto()
    UNDERSCORE = auto()
    RELATION = auto()
    SIGN = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # Layout
    WHITESPACE = auto()

    # Special
    EOF = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span


# Relation keywords. Dotted variants are matched as whole names, so
# ``in.not`` is one relation rather than ``in`` followed by junk.
RELATION_KEYWORDS: frozenset[str] = frozenset({
    "in",
    "in.not",
    "subset",
    "subset.eq",
    "supset",
    "supset.eq",
})

# Symbolic relations, longest first so the lexer matches greedily.
RELATION_OPERATORS: tuple[str, ...] = (
    "<==>",
    "<-->",
    "|->",
    "<=>",
    "<->",
    "==>",
    "<==",
    "-->",
    "<--",
    "::=",
    "<<<",
    ">>>",
    "<=",
    ">=",
    "!=",
    ":=",
    "->",
    "=>",
    "<-",
    "<<",
    ">>",
    "=",
    "<",
    ">",
)

# Signs only valid as a script, as in ``RR_+`` or ``RR^*``.
SIGNS: frozenset[str] = frozenset({"+", "-", "*"})

SCRIPT_OPERATORS: dict[TokenKind, str] = {
    TokenKind.CARET: "sup",
    TokenKind.UNDERSCORE: "sub",
}
