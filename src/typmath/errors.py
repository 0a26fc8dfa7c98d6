"""Parse errors and Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from typmath.source import Span

if TYPE_CHECKING:
    from typmath.source import SourceText


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str
    style: str = "primary"  # "primary" or "secondary"


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and notes."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic, source: SourceText) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E201]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            start_line, start_col = source.position(label.span.start)
            end_line, end_col = source.position(max(label.span.start, label.span.end - 1))
            lines.append(
                f"  {self._c(_BLUE)}-->{self._c(_RESET)} "
                f"{source.filename}:{start_line}:{start_col}"
            )
            gutter = f"{start_line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")
            lines.append(
                f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} "
                f"{source.line_at(start_line)}"
            )

            # Carets only when the label fits on one line
            if start_line == end_line:
                caret_len = max(1, end_col - start_col + 1)
                padding = " " * (start_col - 1)
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                    f"{padding}{self._c(color)}{'^' * caret_len}{self._c(_RESET)}"
                )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


# ── Errors ───────────────────────────────────────────────────────


class MathError(Exception):
    """Base class for scanner, lexer and parser failures.

    ``offset`` is the code point offset of the offending input, relative to
    whatever string was handed to the failing component. ``byte_offset`` is
    the same position in UTF-8 bytes, filled in by ``measured`` once that
    string is known.
    """

    code = "E000"

    def __init__(self, message: str, offset: int, length: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.length = length
        self.byte_offset: int | None = None

    def __str__(self) -> str:
        return f"{self.message} (at offset {self.offset})"

    @property
    def span(self) -> Span:
        return Span(self.offset, self.offset + max(1, self.length))

    def relocated(self, base: int) -> MathError:
        """Return a copy of this error with its offset moved by ``base``."""
        cls = type(self)
        moved = cls.__new__(cls)
        moved.__dict__.update(self.__dict__)
        moved.args = self.args
        moved.offset = self.offset + base
        moved.byte_offset = None
        return moved

    def measured(self, text: str) -> MathError:
        """Set ``byte_offset`` from ``offset`` within ``text`` and return self."""
        self.byte_offset = len(text[:self.offset].encode("utf-8"))
        return self

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=self.message,
            labels=[DiagnosticLabel(span=self.span, message="")],
        )


class MalformedMath(MathError):
    """A ``$`` opened math mode and was never closed."""

    code = "E100"

    def to_diagnostic(self) -> Diagnostic:
        diag = super().to_diagnostic()
        diag.notes.append("add a closing `$`, or escape the dollar sign as `\\$`")
        return diag


class InvalidSymbolName(MathError):
    code = "E101"


class UnexpectedToken(MathError):
    code = "E200"

    def __init__(self, kind: str, offset: int, length: int = 1, value: str = "") -> None:
        detail = f" ({value!r})" if value else ""
        super().__init__(f"unexpected {kind}{detail}", offset, length)
        self.kind = kind
        self.value = value


class UnbalancedParens(MathError):
    code = "E201"


class DuplicateScript(MathError):
    code = "E202"


class NestingTooDeep(MathError):
    code = "E203"
