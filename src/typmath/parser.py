"""Parser for math-mode source.

Single-pass recursive descent over the lexer's token stream. Each rule
consumes tokens left to right and either returns a complete subtree or
raises; there is no backtracking and no error recovery.

Grammar, highest precedence first::

    atom       := IDENTIFIER "(" args ")" | IDENTIFIER | DOT_CHAIN
                | NUMBER | "(" expression ")"
    script     := atom (("^" | "_") (atom | SIGN))*   # at most one of each
    binary     := script (RELATION script)*          # left-associative
    expression := binary+                            # juxtaposition
"""

from __future__ import annotations

from collections.abc import Iterable

from typmath.ast_nodes import (
    BinOp,
    Call,
    Group,
    MathNode,
    Number,
    Script,
    Sequence,
    Symbol,
)
from typmath.errors import (
    DuplicateScript,
    MathError,
    NestingTooDeep,
    UnbalancedParens,
    UnexpectedToken,
)
from typmath.lexer import Lexer
from typmath.source import Span
from typmath.tokens import SCRIPT_OPERATORS, Token, TokenKind

# Tokens that end an expression without being consumed by it.
_EXPRESSION_END = frozenset({TokenKind.EOF, TokenKind.RPAREN, TokenKind.COMMA})

# Deepest run of nested groups and calls accepted by the parser.
MAX_NESTING = 100


class Parser:
    """Parses a list of math tokens into a single ``MathNode``."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    # ── Token access ─────────────────────────────────────────────

    def _current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]  # EOF

    def _at(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _at_any(self, kinds: frozenset[TokenKind]) -> bool:
        return self._current().kind in kinds

    def _advance(self) -> Token:
        tok = self._current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def _skip_whitespace(self) -> None:
        while self._at(TokenKind.WHITESPACE):
            self._advance()

    def _peek_past_whitespace(self) -> Token:
        idx = self.pos
        while idx < len(self.tokens) - 1 and self.tokens[idx].kind == TokenKind.WHITESPACE:
            idx += 1
        return self.tokens[idx]

    def _enter(self, lparen: Token) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise NestingTooDeep(
                f"parentheses nested deeper than {MAX_NESTING} levels", lparen.span.start,
            )

    def _span(self, start: Span, end: Span) -> Span:
        return Span(start.start, end.end)

    def _unexpected(self, tok: Token) -> UnexpectedToken:
        if tok.kind == TokenKind.EOF:
            return UnexpectedToken("EOF", tok.span.start, value="")
        return UnexpectedToken(
            tok.kind.name, tok.span.start, len(tok.value), tok.value,
        )

    # ── Entry point ──────────────────────────────────────────────

    def parse(self) -> MathNode:
        """Parse the whole token stream into one node."""
        node = self._parse_expression()
        tok = self._current()
        if tok.kind == TokenKind.RPAREN:
            raise UnbalancedParens("unmatched ')'", tok.span.start)
        if tok.kind != TokenKind.EOF:
            raise self._unexpected(tok)
        return node

    # ── Expressions ──────────────────────────────────────────────

    def _parse_expression(self) -> MathNode:
        """Parse juxtaposed terms up to EOF, ')' or ','."""
        start = self._current().span
        terms: list[MathNode] = []
        self._skip_whitespace()
        while not self._at_any(_EXPRESSION_END):
            terms.append(self._parse_binary())
            self._skip_whitespace()

        if len(terms) == 1:
            return terms[0]
        if not terms:
            return Sequence([], Span(start.start, start.start))
        return Sequence(terms, self._span(terms[0].span, terms[-1].span))

    def _parse_binary(self) -> MathNode:
        left = self._parse_script()
        while self._peek_past_whitespace().kind == TokenKind.RELATION:
            self._skip_whitespace()
            op_tok = self._advance()
            self._skip_whitespace()
            right = self._parse_script()
            left = BinOp(op_tok.value, left, right, self._span(left.span, right.span))
        return left

    def _parse_script(self) -> MathNode:
        base = self._parse_atom()
        sub: MathNode | None = None
        sup: MathNode | None = None
        end = base.span

        while self._peek_past_whitespace().kind in SCRIPT_OPERATORS:
            self._skip_whitespace()
            op_tok = self._advance()
            which = SCRIPT_OPERATORS[op_tok.kind]
            if (which == "sub" and sub is not None) or (which == "sup" and sup is not None):
                raise DuplicateScript(
                    f"duplicate {which}script on the same base", op_tok.span.start,
                )
            self._skip_whitespace()
            value = self._parse_script_value()
            if which == "sub":
                sub = value
            else:
                sup = value
            end = value.span

        if sub is None and sup is None:
            return base
        return Script(base, sub, sup, self._span(base.span, end))

    # ── Atoms ────────────────────────────────────────────────────

    def _parse_atom(self) -> MathNode:
        tok = self._current()

        if tok.kind == TokenKind.IDENTIFIER:
            self._advance()
            # A call needs the paren glued to the name.
            if self._at(TokenKind.LPAREN):
                return self._parse_call(tok)
            return Symbol(tok.value, tok.span)

        if tok.kind == TokenKind.DOT_CHAIN:
            self._advance()
            return Symbol(tok.value, tok.span)

        if tok.kind == TokenKind.NUMBER:
            self._advance()
            return Number(tok.value, tok.span)

        if tok.kind == TokenKind.LPAREN:
            return self._parse_group()

        raise self._unexpected(tok)

    def _parse_call(self, callee: Token) -> Call:
        """Parse ``callee(arg, ...)``; the current token is the '('."""
        lparen = self._advance()
        self._enter(lparen)
        args: list[MathNode] = []
        self._skip_whitespace()
        while not self._at(TokenKind.RPAREN):
            if self._at(TokenKind.EOF):
                raise UnbalancedParens(f"unclosed '(' in call to {callee.value!r}", lparen.span.start)
            if self._at(TokenKind.COMMA):
                raise self._unexpected(self._current())
            args.append(self._parse_expression())
            if self._at(TokenKind.COMMA):
                self._advance()
                self._skip_whitespace()
        rparen = self._advance()
        self.depth -= 1
        return Call(callee.value, args, self._span(callee.span, rparen.span))

    def _parse_group(self) -> Group:
        lparen = self._advance()
        self._enter(lparen)
        body = self._parse_expression()
        if self._at(TokenKind.EOF):
            raise UnbalancedParens("unclosed '('", lparen.span.start)
        if not self._at(TokenKind.RPAREN):
            raise self._unexpected(self._current())
        rparen = self._advance()
        self.depth -= 1
        return Group(body, self._span(lparen.span, rparen.span))


def parse_math(content: str, *, relations: Iterable[str] | None = None) -> MathNode:
    """Lex and parse one math body.

    ``relations`` adds relation keywords on top of the built-in ones.
    """
    try:
        tokens = Lexer(content, relations).lex()
        return Parser(tokens).parse()
    except MathError as e:
        e.measured(content)
        raise
