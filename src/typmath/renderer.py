"""Unicode preview of math trees and documents.

Produces the same substitutions an editor decoration pass would show:
``RR`` becomes ``ℝ``, ``tilde(beta)`` becomes ``β̃``, ``x^2`` becomes
``x²``. Anything without a Unicode rendering falls back to its source form.
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
from typmath.glyphs import GlyphTable
from typmath.scanner import Segment

# Calls rendered as a pair of delimiters around their single argument
_FENCES: dict[str, tuple[str, str]] = {
    "abs": ("|", "|"),
    "norm": ("‖", "‖"),
    "floor": ("⌊", "⌋"),
    "ceil": ("⌈", "⌉"),
}


class UnicodeRenderer:
    """Render a ``MathNode`` to a display string."""

    def __init__(self, glyphs: GlyphTable | None = None) -> None:
        self.glyphs = glyphs or GlyphTable()

    def render(self, node: MathNode) -> str:
        match node:
            case Symbol(name=name):
                return self.glyphs.lookup(name) or name
            case Number(value=value):
                return value
            case Call():
                return self._render_call(node)
            case Script():
                return self._render_script(node)
            case BinOp(op=op, lhs=lhs, rhs=rhs):
                op_text = self.glyphs.lookup(op) or op
                return f"{self.render(lhs)} {op_text} {self.render(rhs)}"
            case Group(body=body):
                return f"({self.render(body)})"
            case Sequence(items=items):
                return " ".join(self.render(item) for item in items)
        raise TypeError(f"not a math node: {node!r}")

    def render_document(self, segments: Iterable[Segment]) -> str:
        """Rebuild a document with each parsed math span replaced by its preview."""
        parts: list[str] = []
        for seg in segments:
            if seg.is_math and seg.tree is not None:
                parts.append(self.render(seg.tree))
            else:
                parts.append(seg.content)
        return "".join(parts)

    # ── Calls ────────────────────────────────────────────────────

    def _render_call(self, node: Call) -> str:
        if len(node.args) == 1:
            arg = node.args[0]
            inner = self.render(arg)

            mark = self.glyphs.accent(node.callee)
            if mark is not None and len(inner) == 1:
                return inner + mark

            if isinstance(arg, Symbol):
                styled = self.glyphs.styled(node.callee, arg.name)
                if styled is not None:
                    return styled
            if isinstance(arg, Number):
                styled = self.glyphs.styled(node.callee, arg.value)
                if styled is not None:
                    return styled

            if node.callee in _FENCES:
                left, right = _FENCES[node.callee]
                return f"{left}{inner}{right}"
            if node.callee == "sqrt":
                return f"√{inner}" if len(inner) == 1 else f"√({inner})"

        args = ", ".join(self.render(a) for a in node.args)
        return f"{node.callee}({args})"

    # ── Scripts ──────────────────────────────────────────────────

    def _render_script(self, node: Script) -> str:
        text = self.render(node.base)
        if node.sub is not None:
            text += self._attach(node.sub, self.glyphs.subscript, "_")
        if node.sup is not None:
            text += self._attach(node.sup, self.glyphs.superscript, "^")
        return text

    def _attach(self, value: MathNode, convert, marker: str) -> str:
        raw = _script_source(value)
        if raw is not None:
            converted = convert(raw)
            if converted is not None:
                return converted
        inner = self.render(value)
        if isinstance(value, Group) or len(inner) == 1:
            return f"{marker}{inner}"
        return f"{marker}({inner})"


def _script_source(node: MathNode) -> str | None:
    """Plain text of a script that may be convertible to small characters."""
    match node:
        case Number(value=value):
            return value
        case Symbol(name=name) if len(name) == 1:
            return name
        case Group(body=body):
            return _script_source(body)
    return None
