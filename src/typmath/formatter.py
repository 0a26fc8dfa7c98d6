"""AST-walking pretty-printer for math source.

Produces canonical spacing: one space between juxtaposed terms and around
relations, none inside calls or scripts, subscripts before superscripts.
Formatting a parsed tree and parsing the result yields the same tree.
"""

from __future__ import annotations

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


class MathFormatter:
    """Format a ``MathNode`` back to canonical math source."""

    def format(self, node: MathNode) -> str:
        match node:
            case Symbol(name=name):
                return name
            case Number(value=value):
                return value
            case Call(callee=callee, args=args):
                return f"{callee}({', '.join(self.format(a) for a in args)})"
            case Script(base=base, sub=sub, sup=sup):
                text = self._format_atom(base)
                if sub is not None:
                    text += f"_{self._format_atom(sub)}"
                if sup is not None:
                    text += f"^{self._format_atom(sup)}"
                return text
            case BinOp(op=op, lhs=lhs, rhs=rhs):
                left = self.format(lhs) if isinstance(lhs, BinOp) else self._format_term(lhs)
                return f"{left} {op} {self._format_term(rhs)}"
            case Group(body=body):
                return f"({self.format(body)})"
            case Sequence(items=items):
                return " ".join(self._format_item(item) for item in items)
        raise TypeError(f"not a math node: {node!r}")

    def _format_atom(self, node: MathNode) -> str:
        """Scripts bind to a single atom; anything wider needs parentheses."""
        if isinstance(node, (Symbol, Number, Call, Group)):
            return self.format(node)
        return f"({self.format(node)})"

    def _format_term(self, node: MathNode) -> str:
        if isinstance(node, (BinOp, Sequence)):
            return f"({self.format(node)})"
        return self.format(node)

    def _format_item(self, node: MathNode) -> str:
        if isinstance(node, Sequence):
            return f"({self.format(node)})"
        return self.format(node)
