"""Tests for the math lexer."""

from __future__ import annotations

import pytest

from typmath.errors import InvalidSymbolName, UnexpectedToken
from typmath.lexer import Lexer
from typmath.source import Span
from typmath.tokens import TokenKind


def lex(source: str) -> list[tuple[TokenKind, str]]:
    """Helper: lex source and return (kind, value) pairs, excluding EOF."""
    tokens = Lexer(source).lex()
    return [(t.kind, t.value) for t in tokens if t.kind != TokenKind.EOF]


def kinds(source: str) -> list[TokenKind]:
    """Helper: lex source and return just the token kinds, excluding EOF."""
    tokens = Lexer(source).lex()
    return [t.kind for t in tokens if t.kind != TokenKind.EOF]


class TestLexerBasic:
    def test_empty_source(self):
        tokens = Lexer("").lex()
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF

    def test_identifier(self):
        assert lex("alpha") == [(TokenKind.IDENTIFIER, "alpha")]

    def test_identifier_case_preserved(self):
        assert lex("RR") == [(TokenKind.IDENTIFIER, "RR")]

    def test_identifier_with_digits(self):
        assert lex("x2") == [(TokenKind.IDENTIFIER, "x2")]

    def test_unicode_identifier(self):
        assert lex("é") == [(TokenKind.IDENTIFIER, "é")]

    def test_dot_chain(self):
        assert lex("angle.l") == [(TokenKind.DOT_CHAIN, "angle.l")]

    def test_long_dot_chain(self):
        assert lex("arrow.r.double") == [(TokenKind.DOT_CHAIN, "arrow.r.double")]

    def test_number(self):
        assert lex("42") == [(TokenKind.NUMBER, "42")]

    def test_decimal(self):
        assert lex("3.14") == [(TokenKind.NUMBER, "3.14")]

    def test_number_then_identifier(self):
        assert lex("2x") == [(TokenKind.NUMBER, "2"), (TokenKind.IDENTIFIER, "x")]


class TestLexerRelations:
    def test_in_keyword(self):
        assert lex("in") == [(TokenKind.RELATION, "in")]

    def test_dotted_relation_keyword(self):
        assert lex("in.not") == [(TokenKind.RELATION, "in.not")]

    def test_keyword_prefix_is_identifier(self):
        assert lex("inf") == [(TokenKind.IDENTIFIER, "inf")]

    def test_symbolic_relations(self):
        for op in ["=", "!=", "<", ">", "<=", ">=", ":=", "->", "=>", "<=>", "|->"]:
            assert lex(op) == [(TokenKind.RELATION, op)], op

    def test_longest_operator_wins(self):
        assert lex("<==>") == [(TokenKind.RELATION, "<==>")]
        assert lex("<->") == [(TokenKind.RELATION, "<->")]

    def test_long_arrows_and_comparisons(self):
        for op in ["<<", ">>", "<<<", ">>>", "::=", "<==", "<--", "<-->"]:
            assert lex(op) == [(TokenKind.RELATION, op)], op

    def test_double_arrow_not_split(self):
        assert lex("a<-->b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.RELATION, "<-->"),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_extra_relation_keyword(self):
        tokens = Lexer("a divides b", relations=["divides"]).lex()
        assert tokens[2].kind == TokenKind.RELATION
        assert tokens[2].value == "divides"

    def test_extra_relation_not_global(self):
        assert lex("divides") == [(TokenKind.IDENTIFIER, "divides")]


class TestLexerPunctuation:
    def test_scripts(self):
        assert kinds("a^b_c") == [
            TokenKind.IDENTIFIER, TokenKind.CARET, TokenKind.IDENTIFIER,
            TokenKind.UNDERSCORE, TokenKind.IDENTIFIER,
        ]

    def test_call_tokens(self):
        assert kinds("f(a, b)") == [
            TokenKind.IDENTIFIER, TokenKind.LPAREN, TokenKind.IDENTIFIER,
            TokenKind.COMMA, TokenKind.WHITESPACE, TokenKind.IDENTIFIER,
            TokenKind.RPAREN,
        ]

    def test_signs(self):
        assert lex("RR_+^*") == [
            (TokenKind.IDENTIFIER, "RR"),
            (TokenKind.UNDERSCORE, "_"),
            (TokenKind.SIGN, "+"),
            (TokenKind.CARET, "^"),
            (TokenKind.SIGN, "*"),
        ]

    def test_minus_before_arrow_is_relation(self):
        assert lex("->") == [(TokenKind.RELATION, "->")]
        assert lex("-") == [(TokenKind.SIGN, "-")]

    def test_whitespace_run_is_one_token(self):
        assert lex("a \t\n b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.WHITESPACE, " \t\n "),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_spans(self):
        tokens = Lexer("a in RR").lex()
        assert [t.span for t in tokens] == [
            Span(0, 1), Span(1, 2), Span(2, 4), Span(4, 5), Span(5, 7), Span(7, 7),
        ]


class TestLexerErrors:
    def test_trailing_dot(self):
        with pytest.raises(InvalidSymbolName) as exc:
            Lexer("angle.").lex()
        assert exc.value.offset == 5

    def test_dot_before_space(self):
        with pytest.raises(InvalidSymbolName) as exc:
            Lexer("a. b").lex()
        assert exc.value.offset == 1

    def test_leading_dot(self):
        with pytest.raises(InvalidSymbolName) as exc:
            Lexer(" .l").lex()
        assert exc.value.offset == 1

    def test_number_trailing_dot(self):
        with pytest.raises(InvalidSymbolName):
            Lexer("2.").lex()

    def test_unknown_character(self):
        with pytest.raises(UnexpectedToken) as exc:
            Lexer("a & b").lex()
        assert exc.value.kind == "CHARACTER"
        assert exc.value.offset == 2
        assert exc.value.value == "&"
