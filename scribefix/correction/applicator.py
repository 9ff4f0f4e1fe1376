"""
Rule application.

Two passes share one discipline: matches (and therefore correction
records) are always found in the ORIGINAL input, so records are stable and
carry offsets into the text the user supplied. Substitutions are applied
separately to a running copy of the text, so the final text reflects the
rules composing in order.

- apply_rules: the base pass, run against the input itself
- apply_contextual_rules: the second pass; substitutes into the
  base-corrected text and supersedes base records for the tokens it claims
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from scribefix.correction.rules import ContextualRule, CorrectionRule
from scribefix.exceptions import InvalidInputError, ensure_text
from scribefix.models import Correction, CorrectionResult

logger = logging.getLogger(__name__)


def apply_rules(text: str, rules: Sequence[CorrectionRule]) -> CorrectionResult:
    """
    Apply an ordered rule table to text.

    For each rule in order, every match in the original text whose
    replacement differs from the matched text yields a Correction. The same
    rule is then substituted over the running corrected text.

    Args:
        text: Text to correct (any Unicode)
        rules: Ordered rule table

    Returns:
        CorrectionResult with the final text and records in evaluation order

    Raises:
        InvalidInputError: If text is not a str
    """
    ensure_text(text)
    corrections: list[Correction] = []
    corrected = text

    if not text:
        return CorrectionResult(text="", corrections=[], original_text="")

    for rule in rules:
        for match in rule.pattern.finditer(text):
            original = match.group(0)
            replacement = rule.replace(match)
            if replacement != original:
                corrections.append(
                    Correction(
                        original=original,
                        corrected=replacement,
                        message=rule.message,
                        category=rule.category,
                        offset=match.start(),
                        rule=rule.name,
                    )
                )
        corrected = rule.sub(corrected)

    logger.debug("Base pass: %d rules, %d corrections", len(rules), len(corrections))
    return CorrectionResult(text=corrected, corrections=corrections, original_text=text)


def _rewrite_targets(
    text: str,
    rule: ContextualRule,
    rewritten: list[tuple[int, int]],
) -> tuple[str, list[tuple[int, int]]]:
    """
    Rewrite rule's targets in text, leaving spans in `rewritten` alone.

    Returns the new text and all rewritten spans, moved to the new text's
    coordinates.
    """
    edits: list[tuple[int, int, str]] = []
    for match in rule.pattern.finditer(text):
        start, end = rule.target_span(match)
        if start < 0:
            continue
        if any(start < done_end and done_start < end for done_start, done_end in rewritten):
            continue
        replacement = rule.render_target(match)
        if replacement != match.group(rule.target):
            edits.append((start, end, replacement))

    if not edits:
        return text, rewritten

    def moved(position: int) -> int:
        return position + sum(
            len(replacement) - (end - start)
            for start, end, replacement in edits
            if end <= position
        )

    spans = [(moved(start), moved(end)) for start, end in rewritten]
    pieces = []
    cursor = 0
    delta = 0
    for start, end, replacement in edits:
        pieces.append(text[cursor:start])
        pieces.append(replacement)
        spans.append((start + delta, start + delta + len(replacement)))
        delta += len(replacement) - (end - start)
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces), spans


def apply_contextual_rules(
    text: str,
    rules: Sequence[ContextualRule],
    base: CorrectionResult | None = None,
) -> CorrectionResult:
    """
    Apply contextual rules after a base pass.

    Contextual matches are detected in the original text and recorded for
    their target token only. Substitution happens on the base-corrected
    text, so a contextual rule cannot bring back an error the base pass
    already fixed. A base record overlapping a contextual target is dropped
    in favour of the contextual one; among contextual matches the earlier
    one wins, both in the records and in the text: a later rule never
    rewrites a token an earlier contextual rule already rewrote.

    Args:
        text: The original text (what base records' offsets refer to)
        rules: Contextual rules, each with a target group
        base: Result of the base pass; None means no base pass ran

    Returns:
        CorrectionResult combining surviving base records and contextual ones
    """
    ensure_text(text)
    if base is None:
        base = CorrectionResult(text=text, corrections=[], original_text=text)
    if base.original_text != text:
        raise InvalidInputError("base result was computed for a different text")

    claimed: list[Correction] = []
    corrected = base.text
    rewritten: list[tuple[int, int]] = []

    for rule in rules:
        if not isinstance(rule, ContextualRule):
            raise InvalidInputError(
                f"contextual rules must be ContextualRule, got {type(rule).__name__}"
            )
        for match in rule.pattern.finditer(text):
            start, end = rule.target_span(match)
            if start < 0:
                continue
            original = match.group(rule.target)
            replacement = rule.render_target(match)
            if replacement == original:
                continue
            if any(c.overlaps(start, end) for c in claimed):
                continue
            claimed.append(
                Correction(
                    original=original,
                    corrected=replacement,
                    message=rule.message,
                    category=rule.category,
                    offset=start,
                    rule=rule.name,
                )
            )
        corrected, rewritten = _rewrite_targets(corrected, rule, rewritten)

    superseded = [
        c
        for c in base.corrections
        if any(c.overlaps(claim.offset, claim.end) for claim in claimed)
    ]
    superseded_ids = {id(c) for c in superseded}
    if superseded:
        logger.debug(
            "Contextual pass superseded %d base corrections: %s",
            len(superseded),
            [c.original for c in superseded],
        )

    survivors = [c for c in base.corrections if id(c) not in superseded_ids]
    return CorrectionResult(
        text=corrected,
        corrections=survivors + claimed,
        original_text=text,
    )
