"""AST node definitions for math-mode expressions.

Spans are carried for diagnostics and editor features but excluded from
equality, so two trees compare equal when their structure matches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from typmath.source import Span


@dataclass(frozen=True)
class Symbol:
    name: str
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Number:
    value: str
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Call:
    callee: str
    args: list[MathNode]
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Script:
    base: MathNode
    sub: MathNode | None = None
    sup: MathNode | None = None
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True)
class BinOp:
    op: str
    lhs: MathNode
    rhs: MathNode
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Group:
    body: MathNode
    span: Span | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Sequence:
    items: list[MathNode]
    span: Span | None = field(default=None, compare=False)


MathNode = Union[Symbol, Number, Call, Script, BinOp, Group, Sequence]


def children(node: MathNode) -> list[MathNode]:
    """Return the direct children of a node in source order."""
    match node:
        case Symbol() | Number():
            return []
        case Call(args=args):
            return list(args)
        case Script(base=base, sub=sub, sup=sup):
            return [n for n in (base, sub, sup) if n is not None]
        case BinOp(lhs=lhs, rhs=rhs):
            return [lhs, rhs]
        case Group(body=body):
            return [body]
        case Sequence(items=items):
            return list(items)
    raise TypeError(f"not a math node: {node!r}")


def walk(node: MathNode):
    """Yield ``node`` and all of its descendants, depth first."""
    yield node
    for child in children(node):
        yield from walk(child)


def dump(node: MathNode, indent: int = 0) -> str:
    """Indented one-node-per-line view of a tree, for debugging and the CLI."""
    pad = "  " * indent
    match node:
        case Symbol(name=name):
            return f"{pad}Symbol {name}"
        case Number(value=value):
            return f"{pad}Number {value}"
        case Call(callee=callee, args=args):
            lines = [f"{pad}Call {callee}"]
            lines.extend(dump(a, indent + 1) for a in args)
            return "\n".join(lines)
        case Script(base=base, sub=sub, sup=sup):
            lines = [f"{pad}Script", f"{pad}  base:", dump(base, indent + 2)]
            if sub is not None:
                lines.extend([f"{pad}  sub:", dump(sub, indent + 2)])
            if sup is not None:
                lines.extend([f"{pad}  sup:", dump(sup, indent + 2)])
            return "\n".join(lines)
        case BinOp(op=op, lhs=lhs, rhs=rhs):
            return "\n".join([
                f"{pad}BinOp {op}", dump(lhs, indent + 1), dump(rhs, indent + 1),
            ])
        case Group(body=body):
            return "\n".join([f"{pad}Group", dump(body, indent + 1)])
        case Sequence(items=items):
            lines = [f"{pad}Sequence"]
            lines.extend(dump(item, indent + 1) for item in items)
            return "\n".join(lines)
    raise TypeError(f"not a math node: {node!r}")
