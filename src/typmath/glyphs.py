"""Glyph table: symbol names to their Unicode display strings.

Consumed by the renderer and the language server. The parser never looks
anything up here; names in the AST stay exactly as written.
"""

from __future__ import annotations

import string
from collections.abc import Mapping

GREEK: dict[str, str] = {
    "alpha": "α", "beta": "β", "gamma": "γ", "delta": "δ",
    "epsilon": "ε", "epsilon.alt": "ϵ", "zeta": "ζ", "eta": "η",
    "theta": "θ", "theta.alt": "ϑ", "iota": "ι", "kappa": "κ",
    "lambda": "λ", "mu": "μ", "nu": "ν", "xi": "ξ", "omicron": "ο",
    "pi": "π", "pi.alt": "ϖ", "rho": "ρ", "rho.alt": "ϱ",
    "sigma": "σ", "sigma.alt": "ς", "tau": "τ", "upsilon": "υ",
    "phi": "φ", "phi.alt": "ϕ", "chi": "χ", "psi": "ψ", "omega": "ω",
    "Alpha": "Α", "Beta": "Β", "Gamma": "Γ", "Delta": "Δ",
    "Epsilon": "Ε", "Zeta": "Ζ", "Eta": "Η", "Theta": "Θ",
    "Iota": "Ι", "Kappa": "Κ", "Lambda": "Λ", "Mu": "Μ", "Nu": "Ν",
    "Xi": "Ξ", "Omicron": "Ο", "Pi": "Π", "Rho": "Ρ", "Sigma": "Σ",
    "Tau": "Τ", "Upsilon": "Υ", "Phi": "Φ", "Chi": "Χ", "Psi": "Ψ",
    "Omega": "Ω",
}

SETS: dict[str, str] = {
    "NN": "ℕ", "ZZ": "ℤ", "QQ": "ℚ", "RR": "ℝ", "CC": "ℂ",
    "HH": "ℍ", "PP": "ℙ", "KK": "𝕂",
    "emptyset": "∅", "nothing": "∅",
}

RELATIONS: dict[str, str] = {
    "in": "∈", "in.not": "∉",
    "subset": "⊂", "subset.eq": "⊆", "supset": "⊃", "supset.eq": "⊇",
    "=": "=", "!=": "≠", "<": "<", ">": ">", "<=": "≤", ">=": "≥",
    ":=": "≔", "<-": "←", "->": "→", "-->": "⟶", "=>": "⇒", "==>": "⟹",
    "<=>": "⇔", "<==>": "⟺", "<->": "↔", "|->": "↦",
    "<<": "≪", ">>": "≫", "<<<": "⋘", ">>>": "⋙", "::=": "⩴",
    "<==": "⟸", "<--": "⟵", "<-->": "⟷",
}

SYMBOLS: dict[str, str] = {
    "angle.l": "⟨", "angle.r": "⟩",
    "arrow.r": "→", "arrow.l": "←", "arrow.t": "↑", "arrow.b": "↓",
    "arrow.r.double": "⇒", "arrow.l.r": "↔",
    "forall": "∀", "exists": "∃", "exists.not": "∄",
    "and": "∧", "or": "∨", "not": "¬",
    "infinity": "∞", "oo": "∞", "nabla": "∇", "diff": "∂", "qed": "∎",
    "sum": "∑", "product": "∏", "integral": "∫",
    "times": "×", "div": "÷", "dot": "⋅", "plus.minus": "±",
    "minus.plus": "∓", "dots": "…", "dots.c": "⋯", "compose": "∘",
    "union": "∪", "sect": "∩", "without": "∖",
    "wc": "≀", "top": "⊤", "bot": "⊥", "perp": "⟂",
    "approx": "≈", "equiv": "≡", "prop": "∝", "tilde.op": "∼",
}

# Combining marks applied by accent calls, e.g. tilde(beta)
ACCENTS: dict[str, str] = {
    "tilde": "\u0303",
    "hat": "\u0302",
    "macron": "\u0304",
    "bar": "\u0305",
    "dot": "\u0307",
    "dot.double": "\u0308",
    "acute": "\u0301",
    "grave": "\u0300",
    "breve": "\u0306",
    "caron": "\u030c",
    "circle": "\u030a",
    "arrow": "\u20d7",
}

# Alphabet variants for cal(A), frak(A), bb(A)
_CAL = "𝒜ℬ𝒞𝒟ℰℱ𝒢ℋℐ𝒥𝒦ℒℳ𝒩𝒪𝒫𝒬ℛ𝒮𝒯𝒰𝒱𝒲𝒳𝒴𝒵" "𝒶𝒷𝒸𝒹ℯ𝒻ℊ𝒽𝒾𝒿𝓀𝓁𝓂𝓃ℴ𝓅𝓆𝓇𝓈𝓉𝓊𝓋𝓌𝓍𝓎𝓏"
_FRAK = "𝔄𝔅ℭ𝔇𝔈𝔉𝔊ℌℑ𝔍𝔎𝔏𝔐𝔑𝔒𝔓𝔔ℜ𝔖𝔗𝔘𝔙𝔚𝔛𝔜ℨ" "𝔞𝔟𝔠𝔡𝔢𝔣𝔤𝔥𝔦𝔧𝔨𝔩𝔪𝔫𝔬𝔭𝔮𝔯𝔰𝔱𝔲𝔳𝔴𝔵𝔶𝔷"
_BB = "𝔸𝔹ℂ𝔻𝔼𝔽𝔾ℍ𝕀𝕁𝕂𝕃𝕄ℕ𝕆ℙℚℝ𝕊𝕋𝕌𝕍𝕎𝕏𝕐ℤ" "𝕒𝕓𝕔𝕕𝕖𝕗𝕘𝕙𝕚𝕛𝕜𝕝𝕞𝕟𝕠𝕡𝕢𝕣𝕤𝕥𝕦𝕧𝕨𝕩𝕪𝕫" "𝟘𝟙𝟚𝟛𝟜𝟝𝟞𝟟𝟠𝟡"

_LETTERS = string.ascii_uppercase + string.ascii_lowercase

STYLES: dict[str, dict[str, str]] = {
    "cal": dict(zip(_LETTERS, _CAL)),
    "frak": dict(zip(_LETTERS, _FRAK)),
    "bb": dict(zip(_LETTERS + string.digits, _BB)),
}

# Unicode has no superscript asterisk; the plain one already sits high.
SUPERSCRIPTS: dict[str, str] = dict(zip("0123456789+-=()ni*", "⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻⁼⁽⁾ⁿⁱ*"))
SUBSCRIPTS: dict[str, str] = dict(zip("0123456789+-=()", "₀₁₂₃₄₅₆₇₈₉₊₋₌₍₎"))


class GlyphTable:
    """Name to glyph lookups, optionally extended with user symbols."""

    def __init__(self, extra: Mapping[str, str] | None = None) -> None:
        self._symbols: dict[str, str] = {}
        for table in (GREEK, SETS, RELATIONS, SYMBOLS):
            self._symbols.update(table)
        if extra:
            self._symbols.update(extra)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def lookup(self, name: str) -> str | None:
        return self._symbols.get(name)

    def accent(self, name: str) -> str | None:
        return ACCENTS.get(name)

    def styled(self, style: str, letter: str) -> str | None:
        table = STYLES.get(style)
        if table is None:
            return None
        return table.get(letter)

    def superscript(self, text: str) -> str | None:
        """Return ``text`` in superscript characters, or None if any is unmapped."""
        return _translate(text, SUPERSCRIPTS)

    def subscript(self, text: str) -> str | None:
        return _translate(text, SUBSCRIPTS)


def _translate(text: str, table: Mapping[str, str]) -> str | None:
    if not text:
        return None
    out = []
    for ch in text:
        mapped = table.get(ch)
        if mapped is None:
            return None
        out.append(mapped)
    return "".join(out)
