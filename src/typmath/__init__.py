"""Parser for prose with embedded ``$``-delimited math."""

__version__ = "0.1.0"

from typmath.document import parse_document  # noqa: E402
from typmath.parser import parse_math  # noqa: E402
from typmath.scanner import scan  # noqa: E402

__all__ = ["__version__", "parse_document", "parse_math", "scan"]
