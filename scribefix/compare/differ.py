"""
Document differ.

Computes an ordered list of unchanged/added/removed segments between two
texts at character, word or line granularity.

The edit script comes from diff-match-patch (Myers' O(ND) bisection, linear
space). Word and line diffs reuse it by encoding every distinct token as a
single code point, diffing the encoded strings, and decoding the result;
this is the same trick diff-match-patch uses for its own line mode.

Whatever the mode, segments satisfy the reconstruction invariant:
unchanged+removed values concatenate to `a`, unchanged+added to `b`.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterable, Sequence

from diff_match_patch import diff_match_patch

from scribefix.config import DiffConfig
from scribefix.exceptions import ConfigurationError, ensure_text
from scribefix.models import DiffKind, DiffMode, DiffSegment

logger = logging.getLogger(__name__)

# Word tokens carry their trailing whitespace; only leading whitespace
# stands alone. Line tokens carry their newline.
WORD_TOKEN = re.compile(r"\S+\s*|\s+")
LINE_TOKEN = re.compile(r"[^\n]*\n|[^\n]+")

_KINDS = {
    diff_match_patch.DIFF_EQUAL: DiffKind.UNCHANGED,
    diff_match_patch.DIFF_INSERT: DiffKind.ADDED,
    diff_match_patch.DIFF_DELETE: DiffKind.REMOVED,
}


class _TokenSpaceExhausted(Exception):
    """More distinct tokens than code points to encode them with."""


def tokenize(text: str, mode: DiffMode | str) -> list[str]:
    """
    Split text into the comparison units for mode.

    Tokens always concatenate back to `text`.
    """
    mode = _coerce_mode(mode)
    if mode is DiffMode.CHARS:
        return list(text)
    pattern = WORD_TOKEN if mode is DiffMode.WORDS else LINE_TOKEN
    return pattern.findall(text)


def coalesce(segments: Iterable[DiffSegment]) -> list[DiffSegment]:
    """Merge adjacent segments of the same kind and drop empty ones."""
    merged: list[DiffSegment] = []
    for segment in segments:
        if not segment.value:
            continue
        if merged and merged[-1].kind is segment.kind:
            merged[-1] = DiffSegment(value=merged[-1].value + segment.value, kind=segment.kind)
        else:
            merged.append(segment)
    return merged


def _coerce_mode(mode: DiffMode | str) -> DiffMode:
    try:
        return DiffMode(mode)
    except ValueError as e:
        valid = [m.value for m in DiffMode]
        raise ConfigurationError(f"mode must be one of {valid}, got {mode!r}") from e


def _engine(config: DiffConfig) -> diff_match_patch:
    dmp = diff_match_patch()
    dmp.Diff_Timeout = config.timeout
    return dmp


def _encode(
    tokens_a: Sequence[str], tokens_b: Sequence[str]
) -> tuple[str, str, list[str]]:
    vocabulary: list[str] = [""]  # code point 0 is never handed out
    codes: dict[str, int] = {}

    def encode(tokens: Sequence[str]) -> str:
        chars = []
        for token in tokens:
            code = codes.get(token)
            if code is None:
                code = len(vocabulary)
                if code > sys.maxunicode:
                    raise _TokenSpaceExhausted
                codes[token] = code
                vocabulary.append(token)
            chars.append(chr(code))
        return "".join(chars)

    return encode(tokens_a), encode(tokens_b), vocabulary


def _diff_chars(a: str, b: str, config: DiffConfig) -> list[tuple[int, str]]:
    dmp = _engine(config)
    diffs = dmp.diff_main(a, b, False)
    if config.cleanup == "semantic":
        dmp.diff_cleanupSemantic(diffs)
    elif config.cleanup == "efficiency":
        dmp.diff_cleanupEfficiency(diffs)
    return diffs


def _diff_tokens(a: str, b: str, mode: DiffMode, config: DiffConfig) -> list[tuple[int, str]]:
    try:
        encoded_a, encoded_b, vocabulary = _encode(tokenize(a, mode), tokenize(b, mode))
    except _TokenSpaceExhausted:
        logger.warning("Too many distinct %s to encode; falling back to a character diff", mode.value)
        return _diff_chars(a, b, config)

    diffs = _engine(config).diff_main(encoded_a, encoded_b, False)
    return [(op, "".join(vocabulary[ord(ch)] for ch in chars)) for op, chars in diffs]


def diff(
    a: str,
    b: str,
    mode: DiffMode | str = DiffMode.WORDS,
    config: DiffConfig | None = None,
) -> list[DiffSegment]:
    """
    Compare two texts.

    Args:
        a: Original document text
        b: New document text
        mode: DiffMode or its value ("chars", "words", "lines")
        config: Optional DiffConfig (timeout, cleanup)

    Returns:
        Coalesced segments in document order. Identical non-empty inputs
        give one unchanged segment; two empty inputs give an empty list.

    Example:
        >>> [(s.kind.value, s.value) for s in diff("hello world", "hello there world")]
        [('unchanged', 'hello '), ('added', 'there '), ('unchanged', 'world')]
    """
    ensure_text(a, "a")
    ensure_text(b, "b")
    mode = _coerce_mode(mode)
    config = config or DiffConfig()

    if mode is DiffMode.CHARS:
        diffs = _diff_chars(a, b, config)
    else:
        diffs = _diff_tokens(a, b, mode, config)

    segments = coalesce(DiffSegment(value=text, kind=_KINDS[op]) for op, text in diffs)
    logger.debug(
        "Diffed %d vs %d chars by %s: %d segments", len(a), len(b), mode.value, len(segments)
    )
    return segments


def diff_chars(a: str, b: str, config: DiffConfig | None = None) -> list[DiffSegment]:
    """Character-level diff."""
    return diff(a, b, DiffMode.CHARS, config)


def diff_words(a: str, b: str, config: DiffConfig | None = None) -> list[DiffSegment]:
    """Word-level diff; whitespace travels with the preceding word."""
    return diff(a, b, DiffMode.WORDS, config)


def diff_lines(a: str, b: str, config: DiffConfig | None = None) -> list[DiffSegment]:
    """Line-level diff; newlines travel with their line."""
    return diff(a, b, DiffMode.LINES, config)
