"""
Fallback suggestion policy.

When a run finds nothing, a demo UI may still want something to show. This
module manufactures at most two illustrative suggestions:

1. STYLE: capitalize one randomly picked longer word, if the text has
   enough words.
2. PUNCTUATION: append a period if the text does not end in . ! or ?

It is product policy, not correction logic: TextCorrector only calls it when
CorrectionConfig.always_suggest is on. The random source is injected so runs
are reproducible under a seed.
"""

from __future__ import annotations

import logging
import random
import re
from collections.abc import Sequence

from scribefix.correction.rules import PUNCTUATION, STYLE
from scribefix.exceptions import ensure_text
from scribefix.models import Correction, CorrectionResult

logger = logging.getLogger(__name__)

TERMINAL_PUNCTUATION = (".", "!", "?")
STYLE_MESSAGE = "Consider capitalizing this word for emphasis"
PERIOD_MESSAGE = "Missing period at end of sentence"


def synthesize_fallback(
    text: str,
    corrections: Sequence[Correction] = (),
    rng: random.Random | None = None,
    min_tokens: int = 5,
    min_word_length: int = 3,
) -> CorrectionResult:
    """
    Produce illustrative suggestions for text that had no corrections.

    Args:
        text: The (already corrected) text
        corrections: Corrections found so far; any present disables the fallback
        rng: Random source for the word pick (a fresh unseeded one if None)
        min_tokens: The text needs more than this many whitespace tokens
            before a word is picked
        min_word_length: The picked word needs more than this many characters

    Returns:
        CorrectionResult; unchanged when corrections were supplied. Offsets
        refer to `text`.
    """
    ensure_text(text)
    if corrections:
        return CorrectionResult(text=text, corrections=list(corrections), original_text=text)

    rng = rng or random.Random()
    result = text
    synthesized: list[Correction] = []

    tokens = text.split()
    if len(tokens) > min_tokens:
        word = tokens[rng.randrange(len(tokens))]
        capitalized = word[:1].upper() + word[1:]
        if len(word) > min_word_length and capitalized != word:
            match = re.search(rf"(?<!\S){re.escape(word)}(?!\S)", result)
            if match:
                synthesized.append(
                    Correction(
                        original=word,
                        corrected=capitalized,
                        message=STYLE_MESSAGE,
                        category=STYLE,
                        offset=match.start(),
                        rule="fallback-capitalize",
                    )
                )
                result = result[: match.start()] + capitalized + result[match.end() :]

    stripped = result.rstrip()
    if stripped and not stripped.endswith(TERMINAL_PUNCTUATION):
        last = stripped.split()[-1]
        # Offset in the input; capitalizing may change lengths (e.g. "ß")
        source_end = len(text.rstrip())
        offset = source_end - len(text.rstrip().split()[-1])
        synthesized.append(
            Correction(
                original=last,
                corrected=last + ".",
                message=PERIOD_MESSAGE,
                category=PUNCTUATION,
                offset=offset,
                rule="fallback-period",
            )
        )
        result = stripped + "." + result[len(stripped) :]

    if synthesized:
        logger.debug("Fallback synthesized %d suggestions", len(synthesized))
    return CorrectionResult(text=result, corrections=synthesized, original_text=text)
