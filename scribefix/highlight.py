"""
Correction highlighting.

Marks every correction in both renditions of a text: the matched `original`
in the original text ("removed") and the `corrected` value in the corrected
text ("added").

Spans are resolved by offset rather than by repeated global substitution:
all candidate spans are collected first, overlaps go to the earlier
correction, and each text is cut exactly once. Output is a list of
structured spans; `render_html()` turns spans into markup and escapes every
piece of text, so document content can never inject HTML.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping, Sequence

from scribefix.exceptions import ensure_text
from scribefix.models import Correction, HighlightResult, HighlightSpan

logger = logging.getLogger(__name__)

REMOVED = "removed"
ADDED = "added"

DEFAULT_CLASSES = {
    REMOVED: "correction-removed",
    ADDED: "correction-added",
}


def boundary_pattern(needle: str) -> re.Pattern[str]:
    """Literal pattern for needle that only matches outside other words."""
    return re.compile(rf"(?<!\w){re.escape(needle)}(?!\w)")


def _occurrences(text: str, needle: str) -> list[tuple[int, int]]:
    if not needle.strip():
        return []
    return [m.span() for m in boundary_pattern(needle).finditer(text)]


def _claim(
    taken: list[tuple[int, int, int]],
    start: int,
    end: int,
    index: int,
) -> None:
    if start == end:
        return
    for other_start, other_end, _ in taken:
        if start < other_end and other_start < end:
            return
    taken.append((start, end, index))


def _shift(corrections: Sequence[Correction], index: int) -> int:
    """Length change from positioned corrections that precede corrections[index]."""
    target = corrections[index].offset
    shift = 0
    for other, correction in enumerate(corrections):
        if other == index or correction.offset is None:
            continue
        # Insertions at the same offset keep their list order
        before = correction.end < target or (
            correction.end == target and (correction.original or other < index)
        )
        if before:
            shift += len(correction.corrected) - len(correction.original)
    return shift


def _cut(text: str, taken: list[tuple[int, int, int]], kind: str) -> list[HighlightSpan]:
    spans: list[HighlightSpan] = []
    cursor = 0
    for start, end, index in sorted(taken):
        if start > cursor:
            spans.append(HighlightSpan(text=text[cursor:start]))
        spans.append(HighlightSpan(text=text[start:end], kind=kind, correction=index))
        cursor = end
    if cursor < len(text):
        spans.append(HighlightSpan(text=text[cursor:]))
    return spans


def highlight_spans(
    text: str,
    corrections: Sequence[Correction],
    kind: str,
    use_offsets: bool = False,
) -> list[HighlightSpan]:
    """
    Highlight one side of a correction.

    Args:
        text: Text to mark
        corrections: Corrections to mark, in priority order
        kind: REMOVED marks each `original`, ADDED marks each `corrected`
        use_offsets: Trust correction offsets where they line up. Offsets
            refer to the original text; for ADDED they are shifted by the
            length changes of the corrections before them.

    Returns:
        Spans whose texts concatenate back to `text`
    """
    ensure_text(text)
    taken: list[tuple[int, int, int]] = []

    for index, correction in enumerate(corrections):
        needle = correction.original if kind == REMOVED else correction.corrected
        if use_offsets and correction.offset is not None and needle:
            start = correction.offset
            if kind == ADDED:
                start += _shift(corrections, index)
            if start >= 0 and text[start : start + len(needle)] == needle:
                _claim(taken, start, start + len(needle), index)
                continue
        for start, end in _occurrences(text, needle):
            _claim(taken, start, end, index)

    return _cut(text, taken, kind)


def highlight(
    original: str,
    corrected: str,
    corrections: Sequence[Correction],
) -> HighlightResult:
    """
    Highlight corrections in the original and corrected text.

    Both sides are marked at the positions the correction offsets give, so
    insertions such as an added period are marked too.
    Corrections whose position does not line up (unpositioned records, or
    text rewritten by several rules) fall back to a literal search at word
    boundaries.

    Args:
        original: Text before correction
        corrected: Text after correction
        corrections: Corrections produced for `original`

    Returns:
        HighlightResult with span lists for both texts
    """
    ensure_text(original, "original")
    ensure_text(corrected, "corrected")
    result = HighlightResult(
        original=highlight_spans(original, corrections, REMOVED, use_offsets=True),
        corrected=highlight_spans(corrected, corrections, ADDED, use_offsets=True),
    )
    logger.debug(
        "Highlighted %d/%d spans for %d corrections",
        sum(span.is_highlighted for span in result.original),
        sum(span.is_highlighted for span in result.corrected),
        len(corrections),
    )
    return result


def render_html(
    spans: Sequence[HighlightSpan],
    classes: Mapping[str, str] | None = None,
) -> str:
    """
    Render spans as HTML with every text piece escaped.

    Args:
        spans: Spans from `highlight()`
        classes: CSS class per kind (defaults to DEFAULT_CLASSES)

    Returns:
        HTML string safe to insert into a page
    """
    classes = {**DEFAULT_CLASSES, **(classes or {})}
    parts = []
    for span in spans:
        escaped = html.escape(span.text)
        if span.kind is None:
            parts.append(escaped)
        else:
            css = html.escape(classes.get(span.kind, span.kind), quote=True)
            parts.append(f'<span class="{css}" data-correction="{span.correction}">{escaped}</span>')
    return "".join(parts)
