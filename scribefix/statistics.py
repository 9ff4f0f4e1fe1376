"""
Document statistics.

Counts that work on multilingual OCR output: words are whitespace tokens,
and sentence ends include Devanagari, Arabic, Ethiopic and Urdu marks.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from scribefix.exceptions import ensure_text

# Reading speed used for the estimate
WORDS_PER_MINUTE = 200

# Words shorter than this are ignored in counts
MIN_WORD_LENGTH = 2

SENTENCE_END = re.compile(r"[.!?।॥؟፨።۔]")
PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
WHITESPACE = re.compile(r"\s")


@dataclass
class DocumentStatistics:
    """Statistics for one document's text."""

    char_count: int = 0
    char_count_no_spaces: int = 0
    word_count: int = 0
    line_count: int = 0
    paragraph_count: int = 0
    sentence_count: int = 0
    unique_word_count: int = 0
    reading_time_minutes: int = 0
    space_count: int = 0
    punctuation_count: int = 0
    word_frequency: dict[str, int] = field(default_factory=dict)
    word_length_distribution: dict[int, int] = field(default_factory=dict)

    @property
    def unique_word_percentage(self) -> int:
        """Unique words as a rounded percentage of all words."""
        if self.word_count == 0:
            return 0
        return round(self.unique_word_count / self.word_count * 100)

    def most_frequent(self, n: int = 10) -> list[tuple[str, int]]:
        """The n most frequent normalized words."""
        return Counter(self.word_frequency).most_common(n)

    def composition(self) -> list[dict[str, Any]]:
        """Share of words, spaces and punctuation relative to the char count."""
        items = [
            ("Words", self.word_count),
            ("Spaces", self.space_count),
            ("Punctuation", self.punctuation_count),
        ]
        return [
            {
                "name": name,
                "value": value,
                "percentage": round(value / self.char_count * 100) if self.char_count else 0,
            }
            for name, value in items
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "char_count": self.char_count,
            "char_count_no_spaces": self.char_count_no_spaces,
            "word_count": self.word_count,
            "line_count": self.line_count,
            "paragraph_count": self.paragraph_count,
            "sentence_count": self.sentence_count,
            "unique_word_count": self.unique_word_count,
            "unique_word_percentage": self.unique_word_percentage,
            "reading_time_minutes": self.reading_time_minutes,
            "word_length_distribution": self.word_length_distribution,
            "composition": self.composition(),
        }


def normalize_word(word: str) -> str:
    """Lowercase and strip punctuation for frequency counting."""
    return PUNCTUATION.sub("", word.lower())


def compute_statistics(text: str) -> DocumentStatistics:
    """
    Compute statistics for text.

    Args:
        text: Document text

    Returns:
        DocumentStatistics; empty text gives all-zero counts
    """
    ensure_text(text)
    if not text:
        return DocumentStatistics()

    words = [w for w in text.split() if len(w) >= MIN_WORD_LENGTH]

    frequency: Counter[str] = Counter()
    lengths: Counter[int] = Counter()
    for word in words:
        lengths[len(word)] += 1
        normalized = normalize_word(word)
        if len(normalized) >= MIN_WORD_LENGTH:
            frequency[normalized] += 1

    paragraphs = [p for p in PARAGRAPH_BREAK.split(text) if p]

    return DocumentStatistics(
        char_count=len(text),
        char_count_no_spaces=len(WHITESPACE.sub("", text)),
        word_count=len(words),
        line_count=text.count("\n") + 1,
        paragraph_count=len(paragraphs) or 1,
        sentence_count=len(SENTENCE_END.findall(text)) or 1,
        unique_word_count=len(frequency),
        reading_time_minutes=max(1, math.ceil(len(words) / WORDS_PER_MINUTE)),
        space_count=len(WHITESPACE.findall(text)),
        punctuation_count=len(PUNCTUATION.findall(text)),
        word_frequency=dict(frequency),
        word_length_distribution=dict(sorted(lengths.items())),
    )
