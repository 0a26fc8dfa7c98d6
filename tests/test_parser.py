"""Tests for the math parser."""

from __future__ import annotations

import pytest

from typmath.ast_nodes import (
    BinOp,
    Call,
    Group,
    Number,
    Script,
    Sequence,
    Symbol,
    dump,
    walk,
)
from typmath.errors import (
    DuplicateScript,
    InvalidSymbolName,
    NestingTooDeep,
    UnbalancedParens,
    UnexpectedToken,
)
from typmath.parser import MAX_NESTING, parse_math
from typmath.source import Span


class TestParserAtoms:
    def test_symbol(self):
        assert parse_math("RR") == Symbol("RR")

    def test_dotted_symbol(self):
        assert parse_math("angle.l") == Symbol("angle.l")

    def test_number(self):
        assert parse_math("3.14") == Number("3.14")

    def test_call(self):
        assert parse_math("tilde(beta)") == Call("tilde", [Symbol("beta")])

    def test_call_multiple_args(self):
        assert parse_math("f(a, b in RR)") == Call(
            "f", [Symbol("a"), BinOp("in", Symbol("b"), Symbol("RR"))],
        )

    def test_call_empty_args(self):
        assert parse_math("f()") == Call("f", [])

    def test_call_trailing_comma(self):
        assert parse_math("f(a,)") == Call("f", [Symbol("a")])

    def test_call_juxtaposed_argument(self):
        assert parse_math("f(a b)") == Call("f", [Sequence([Symbol("a"), Symbol("b")])])

    def test_nested_call(self):
        assert parse_math("hat(tilde(x))") == Call("hat", [Call("tilde", [Symbol("x")])])

    def test_space_before_paren_is_not_a_call(self):
        assert parse_math("f (x)") == Sequence([Symbol("f"), Group(Symbol("x"))])

    def test_dotted_name_is_not_callable(self):
        assert parse_math("arrow.r(x)") == Sequence([Symbol("arrow.r"), Group(Symbol("x"))])

    def test_group(self):
        assert parse_math("(a in b)") == Group(BinOp("in", Symbol("a"), Symbol("b")))

    def test_names_not_normalized(self):
        assert parse_math("Alpha") == Symbol("Alpha")
        assert parse_math("Alpha") != Symbol("alpha")


class TestParserScripts:
    def test_superscript(self):
        assert parse_math("beta^angle.l") == Script(
            Symbol("beta"), sub=None, sup=Symbol("angle.l"),
        )

    def test_subscript(self):
        assert parse_math("a_0") == Script(Symbol("a"), sub=Number("0"))

    def test_both_scripts_sub_first(self):
        assert parse_math("x_i^2") == Script(Symbol("x"), Symbol("i"), Number("2"))

    def test_both_scripts_sup_first(self):
        assert parse_math("x^2_i") == Script(Symbol("x"), Symbol("i"), Number("2"))

    def test_script_with_spaces(self):
        assert parse_math("x ^ 2") == Script(Symbol("x"), sup=Number("2"))

    def test_grouped_script(self):
        assert parse_math("x^(a b)") == Script(
            Symbol("x"), sup=Group(Sequence([Symbol("a"), Symbol("b")])),
        )

    def test_script_on_call(self):
        assert parse_math("f(x)^2") == Script(Call("f", [Symbol("x")]), sup=Number("2"))

    def test_script_binds_one_atom(self):
        assert parse_math("a^b c") == Sequence([
            Script(Symbol("a"), sup=Symbol("b")), Symbol("c"),
        ])

    def test_signed_set(self):
        assert parse_math("RR_+") == Script(Symbol("RR"), sub=Symbol("+"))
        assert parse_math("RR_-") == Script(Symbol("RR"), sub=Symbol("-"))

    def test_nonzero_set(self):
        assert parse_math("RR^*") == Script(Symbol("RR"), sup=Symbol("*"))

    def test_signed_nonzero_set(self):
        assert parse_math("RR_+^*") == Script(Symbol("RR"), Symbol("+"), Symbol("*"))

    def test_sign_outside_script(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse_math("a + b")
        assert exc.value.kind == "SIGN"
        assert exc.value.offset == 2

    def test_duplicate_superscript(self):
        with pytest.raises(DuplicateScript) as exc:
            parse_math("a^b^c")
        assert exc.value.offset == 3

    def test_duplicate_subscript(self):
        with pytest.raises(DuplicateScript) as exc:
            parse_math("a_b^c_d")
        assert exc.value.offset == 5


class TestParserRelations:
    def test_in(self):
        assert parse_math("a in RR") == BinOp("in", Symbol("a"), Symbol("RR"))

    def test_symbolic_relation(self):
        assert parse_math("x <= y") == BinOp("<=", Symbol("x"), Symbol("y"))

    def test_relation_without_spaces(self):
        assert parse_math("x<=y") == BinOp("<=", Symbol("x"), Symbol("y"))

    def test_left_associative_chain(self):
        assert parse_math("a in b in c") == BinOp(
            "in", BinOp("in", Symbol("a"), Symbol("b")), Symbol("c"),
        )

    def test_relation_binds_scripts(self):
        assert parse_math("x^2 in NN") == BinOp(
            "in", Script(Symbol("x"), sup=Number("2")), Symbol("NN"),
        )

    def test_relation_inside_sequence(self):
        assert parse_math("forall x in RR") == Sequence([
            Symbol("forall"), BinOp("in", Symbol("x"), Symbol("RR")),
        ])

    def test_long_arrows_and_comparisons(self):
        for op in ["<-->", "<==", "<--", "<<", ">>", "<<<", ">>>", "::="]:
            assert parse_math(f"a {op} b") == BinOp(op, Symbol("a"), Symbol("b")), op

    def test_custom_relation(self):
        assert parse_math("a divides b", relations=["divides"]) == BinOp(
            "divides", Symbol("a"), Symbol("b"),
        )


class TestParserSequences:
    def test_sample_sequence(self):
        assert parse_math("wc alpha tilde(beta) beta^angle.l") == Sequence([
            Symbol("wc"),
            Symbol("alpha"),
            Call("tilde", [Symbol("beta")]),
            Script(Symbol("beta"), sup=Symbol("angle.l")),
        ])

    def test_single_term_not_wrapped(self):
        assert parse_math("  alpha  ") == Symbol("alpha")

    def test_empty(self):
        assert parse_math("") == Sequence([])

    def test_whitespace_only(self):
        assert parse_math("   ") == Sequence([])

    def test_adjacent_without_space(self):
        assert parse_math("2x") == Sequence([Number("2"), Symbol("x")])

    def test_deterministic(self):
        source = "wc alpha tilde(beta) beta^angle.l"
        assert parse_math(source) == parse_math(source)


class TestParserSpans:
    def test_symbol_span(self):
        tree = parse_math("a in RR")
        assert tree.lhs.span == Span(0, 1)
        assert tree.rhs.span == Span(5, 7)
        assert tree.span == Span(0, 7)

    def test_call_span(self):
        assert parse_math(" tilde(beta)").span == Span(1, 12)

    def test_spans_ignored_by_equality(self):
        assert Symbol("a", Span(0, 1)) == Symbol("a", Span(5, 6))

    def test_every_node_has_span(self):
        tree = parse_math("wc alpha tilde(beta) beta^angle.l")
        assert all(node.span is not None for node in walk(tree))


class TestParserErrors:
    def test_unclosed_call(self):
        with pytest.raises(UnbalancedParens) as exc:
            parse_math("tilde(beta")
        assert exc.value.offset == 5

    def test_unclosed_group(self):
        with pytest.raises(UnbalancedParens) as exc:
            parse_math("a (b")
        assert exc.value.offset == 2

    def test_stray_rparen(self):
        with pytest.raises(UnbalancedParens) as exc:
            parse_math("a)")
        assert exc.value.offset == 1

    def test_leading_caret(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse_math("^x")
        assert exc.value.kind == "CARET"
        assert exc.value.offset == 0

    def test_leading_relation(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse_math("in RR")
        assert exc.value.kind == "RELATION"

    def test_missing_relation_operand(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse_math("a in")
        assert exc.value.kind == "EOF"
        assert exc.value.offset == 4

    def test_missing_script_operand(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse_math("f(a^)")
        assert exc.value.kind == "RPAREN"

    def test_top_level_comma(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse_math("a, b")
        assert exc.value.kind == "COMMA"

    def test_empty_argument(self):
        with pytest.raises(UnexpectedToken):
            parse_math("f(a,,b)")

    def test_comma_in_group(self):
        with pytest.raises(UnexpectedToken):
            parse_math("(a, b)")

    def test_invalid_symbol_name(self):
        with pytest.raises(InvalidSymbolName):
            parse_math("beta^angle.")

    def test_nesting_at_limit(self):
        depth = MAX_NESTING
        tree = parse_math("(" * depth + "x" + ")" * depth)
        assert isinstance(tree, Group)

    def test_nested_groups_too_deep(self):
        depth = MAX_NESTING + 1
        with pytest.raises(NestingTooDeep) as exc:
            parse_math("(" * depth + "x" + ")" * depth)
        assert exc.value.code == "E203"
        assert exc.value.offset == MAX_NESTING

    def test_nested_calls_too_deep(self):
        with pytest.raises(NestingTooDeep):
            parse_math("f(" * 300 + "x" + ")" * 300)

    def test_depth_resets_between_siblings(self):
        half = "(" * MAX_NESTING + "x" + ")" * MAX_NESTING
        assert isinstance(parse_math(f"{half} {half}"), Sequence)

    def test_byte_offset(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse_math("é in")
        assert exc.value.offset == 4
        assert exc.value.byte_offset == 5


class TestDump:
    def test_dump_sample(self):
        text = dump(parse_math("tilde(beta) in RR"))
        assert text.splitlines() == [
            "BinOp in",
            "  Call tilde",
            "    Symbol beta",
            "  Symbol RR",
        ]

    def test_dump_script(self):
        assert dump(parse_math("x_1")).splitlines() == [
            "Script",
            "  base:",
            "    Symbol x",
            "  sub:",
            "    Number 1",
        ]
