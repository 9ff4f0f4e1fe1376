"""
Correction orchestrator.

TextCorrector wires the passes together in their fixed order:

1. Base rules (apply_rules)
2. Contextual rules (apply_contextual_rules)
3. Fallback suggestions, only if enabled and nothing was found

Rule tables default to the shipped English tables and can be swapped for
any other ordered table (e.g. per-language rule sets) without touching the
engine.

Example:
    >>> from scribefix.correction import TextCorrector
    >>> result = TextCorrector().correct("teh cat sat")
    >>> result.text
    'the cat sat.'
    >>> [(c.original, c.corrected) for c in result.corrections]
    [('teh', 'the'), ('', '.')]
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence

from scribefix.config import CorrectionConfig
from scribefix.correction.applicator import apply_contextual_rules, apply_rules
from scribefix.correction.fallback import synthesize_fallback
from scribefix.correction.rules import (
    ContextualRule,
    CorrectionRule,
    default_contextual_rules,
    default_rules,
)
from scribefix.exceptions import ensure_text
from scribefix.models import Correction, CorrectionResult

logger = logging.getLogger(__name__)


def group_by_category(corrections: Iterable[Correction]) -> dict[str, list[Correction]]:
    """
    Group corrections by category label.

    Categories keep first-seen order and corrections keep their order within
    a category. Every correction lands in exactly one bucket.
    """
    groups: dict[str, list[Correction]] = {}
    for correction in corrections:
        groups.setdefault(correction.category, []).append(correction)
    return groups


def sort_by_offset(corrections: Iterable[Correction]) -> list[Correction]:
    """Order corrections top to bottom; unpositioned ones go last, in order."""
    corrections = list(corrections)
    positioned = [c for c in corrections if c.offset is not None]
    unpositioned = [c for c in corrections if c.offset is None]
    return sorted(positioned, key=lambda c: c.offset) + unpositioned


class TextCorrector:
    """
    Runs the correction passes over text.

    A corrector holds no per-call state: each `correct()` call produces a
    fresh result, so one instance may be shared.
    """

    def __init__(
        self,
        config: CorrectionConfig | None = None,
        rules: Sequence[CorrectionRule] | None = None,
        contextual_rules: Sequence[ContextualRule] | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the corrector.

        Args:
            config: Correction settings (defaults to CorrectionConfig())
            rules: Base rule table (defaults to the shipped English table)
            contextual_rules: Contextual table (defaults to the shipped one)
            rng: Random source for fallback suggestions; built from
                config.seed when omitted
        """
        self.config = config or CorrectionConfig()
        self.rules = tuple(default_rules() if rules is None else rules)
        self.contextual_rules = tuple(
            default_contextual_rules() if contextual_rules is None else contextual_rules
        )
        self.rng = rng

    def correct(self, text: str) -> CorrectionResult:
        """
        Correct text.

        Args:
            text: Text to correct

        Returns:
            CorrectionResult whose offsets refer to `text`
        """
        ensure_text(text)

        base = apply_rules(text, self.rules)
        result = apply_contextual_rules(text, self.contextual_rules, base=base)

        if not result.corrections and self.config.always_suggest:
            fallback = synthesize_fallback(
                result.text,
                rng=self.rng or self.config.make_rng(),
                min_tokens=self.config.min_fallback_tokens,
                min_word_length=self.config.min_fallback_word_length,
            )
            result = CorrectionResult(
                text=fallback.text,
                corrections=fallback.corrections,
                original_text=text,
            )

        if self.config.order == "offset":
            result.corrections = sort_by_offset(result.corrections)

        logger.debug(
            "Corrected %d chars: %d corrections in %s",
            len(text),
            result.change_count,
            result.categories,
        )
        return result


def correct_text(text: str, config: CorrectionConfig | None = None) -> CorrectionResult:
    """
    Correct text with the shipped English rule tables.

    Args:
        text: Text to correct
        config: Optional correction settings

    Returns:
        CorrectionResult with the corrected text and its corrections
    """
    return TextCorrector(config=config).correct(text)
