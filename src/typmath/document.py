"""Whole-document parsing: scan, then parse every math segment."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable

from typmath.errors import MathError
from typmath.parser import parse_math
from typmath.scanner import Segment, scan

logger = logging.getLogger(__name__)


def parse_document(
    text: str,
    *,
    strict: bool = True,
    relations: Iterable[str] | None = None,
) -> list[Segment]:
    """Scan ``text`` and attach a parsed tree to each math segment.

    Error offsets are reported relative to ``text``. With ``strict`` the
    first math error is raised; otherwise the failing segment keeps
    ``tree=None`` and records the error. Scanning errors always raise.
    """
    relations = tuple(relations or ())
    segments = scan(text)
    logger.debug("scanned %d segment(s)", len(segments))

    result: list[Segment] = []
    for seg in segments:
        if not seg.is_math:
            result.append(seg)
            continue
        try:
            tree = parse_math(seg.body, relations=relations)
        except MathError as e:
            err = e.relocated(seg.body_start).measured(text)
            logger.debug("math segment at %s failed: %s", seg.span, err)
            if strict:
                raise err from None
            result.append(dataclasses.replace(seg, error=err))
            continue
        result.append(dataclasses.replace(seg, tree=tree))
    return result


def math_errors(segments: Iterable[Segment]) -> list[MathError]:
    """Collect the errors recorded by a lenient ``parse_document`` run."""
    return [seg.error for seg in segments if seg.error is not None]
