"""Lexer for math-mode source.

Produces a flat token stream. Runs of whitespace become a single
WHITESPACE token so the parser can tell ``f(x)`` (a call) from ``f (x)``
(a symbol followed by a group).
"""

from __future__ import annotations

from collections.abc import Iterable

from typmath.errors import InvalidSymbolName, UnexpectedToken
from typmath.source import Span
from typmath.tokens import RELATION_KEYWORDS, RELATION_OPERATORS, SIGNS, Token, TokenKind

_PUNCT: dict[str, TokenKind] = {
    "^": TokenKind.CARET,
    "_": TokenKind.UNDERSCORE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    **{sign: TokenKind.SIGN for sign in SIGNS},
}


class Lexer:
    """Tokenizes the body of one math span.

    Raises on the first malformed token; no partial token list is returned.
    """

    def __init__(self, source: str, relations: Iterable[str] | None = None) -> None:
        self.source = source
        self.pos = 0
        self.tokens: list[Token] = []
        self.relations = RELATION_KEYWORDS | frozenset(relations or ())

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch.isspace():
                self._lex_whitespace()
            elif ch.isdigit():
                self._lex_number()
            elif ch.isalpha():
                self._lex_identifier()
            elif ch == ".":
                raise InvalidSymbolName("symbol name cannot start with '.'", self.pos)
            else:
                self._lex_operator_or_punct()

        self._emit(TokenKind.EOF, "", self.pos)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return "\0"

    def _emit(self, kind: TokenKind, value: str, start: int) -> Token:
        tok = Token(kind, value, Span(start, self.pos))
        self.tokens.append(tok)
        return tok

    # ── Whitespace ───────────────────────────────────────────────

    def _lex_whitespace(self) -> None:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self.pos += 1
        self._emit(TokenKind.WHITESPACE, self.source[start:self.pos], start)

    # ── Numbers ──────────────────────────────────────────────────

    def _lex_number(self) -> None:
        start = self.pos
        while self._peek().isdigit():
            self.pos += 1
        if self._peek() == "." and self._peek(1).isdigit():
            self.pos += 1
            while self._peek().isdigit():
                self.pos += 1
        self._emit(TokenKind.NUMBER, self.source[start:self.pos], start)

    # ── Identifiers and dotted names ─────────────────────────────

    def _lex_identifier(self) -> None:
        start = self.pos
        self._consume_name_part()
        while self._peek() == ".":
            if not self._peek(1).isalnum():
                word = self.source[start:self.pos]
                raise InvalidSymbolName(
                    f"invalid symbol name {word + '.'!r}: '.' must be followed by a name",
                    self.pos,
                )
            self.pos += 1  # .
            self._consume_name_part()
        word = self.source[start:self.pos]

        if word in self.relations:
            self._emit(TokenKind.RELATION, word, start)
        elif "." in word:
            self._emit(TokenKind.DOT_CHAIN, word, start)
        else:
            self._emit(TokenKind.IDENTIFIER, word, start)

    def _consume_name_part(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos].isalnum():
            self.pos += 1

    # ── Operators and punctuation ────────────────────────────────

    def _lex_operator_or_punct(self) -> None:
        start = self.pos
        for op in RELATION_OPERATORS:
            if self.source.startswith(op, self.pos):
                self.pos += len(op)
                self._emit(TokenKind.RELATION, op, start)
                return

        ch = self.source[self.pos]
        kind = _PUNCT.get(ch)
        if kind is None:
            raise UnexpectedToken("CHARACTER", start, value=ch)
        self.pos += 1
        self._emit(kind, ch, start)
