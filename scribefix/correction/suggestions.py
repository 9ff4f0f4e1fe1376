"""
Offset-based suggestion application.

Grammar services (LanguageTool and the like) report matches as an offset, a
length and candidate replacements rather than as patterns. Applying them
from the highest offset to the lowest keeps every earlier offset valid.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from scribefix.exceptions import InvalidInputError, ensure_text
from scribefix.models import Correction, CorrectionResult, Suggestion

logger = logging.getLogger(__name__)


def apply_suggestions(text: str, suggestions: Iterable[Suggestion]) -> CorrectionResult:
    """
    Apply the first replacement of each suggestion.

    Suggestions without replacements, or whose span overlaps one already
    applied (higher offsets are applied first), are skipped.

    Args:
        text: Text the suggestion offsets refer to
        suggestions: Suggestions in any order

    Returns:
        CorrectionResult with corrections in text order

    Raises:
        InvalidInputError: If a suggestion points outside the text
    """
    ensure_text(text)
    suggestions = list(suggestions)
    for suggestion in suggestions:
        if (
            suggestion.offset < 0
            or suggestion.length < 0
            or suggestion.offset + suggestion.length > len(text)
        ):
            raise InvalidInputError(
                f"Suggestion at offset {suggestion.offset} (length {suggestion.length}) "
                f"is outside text of length {len(text)}"
            )

    result = text
    applied: list[Correction] = []
    lowest_applied = len(text) + 1

    for suggestion in sorted(suggestions, key=lambda s: s.offset, reverse=True):
        if not suggestion.replacements:
            logger.debug("Skipping suggestion at %d: no replacements", suggestion.offset)
            continue
        end = suggestion.offset + suggestion.length
        if end > lowest_applied:
            logger.debug("Skipping suggestion at %d: overlaps an applied one", suggestion.offset)
            continue

        original = text[suggestion.offset : end]
        replacement = suggestion.replacements[0]
        if replacement == original:
            continue

        result = result[: suggestion.offset] + replacement + result[end:]
        lowest_applied = suggestion.offset
        applied.append(
            Correction(
                original=original,
                corrected=replacement,
                message=suggestion.message,
                category=suggestion.category,
                offset=suggestion.offset,
                rule=suggestion.rule_id,
            )
        )

    applied.reverse()
    return CorrectionResult(text=result, corrections=applied, original_text=text)
