"""
Data models for scribefix.

These are transient value objects: every correction or comparison call
creates fresh ones and nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# CORRECTION
# =============================================================================


@dataclass
class Correction:
    """
    A single detected and resolved text issue.

    `offset` is the start of `original` in the text the rule was matched
    against. Synthesized suggestions that have no single position carry None.
    """

    original: str
    corrected: str
    message: str
    category: str
    offset: int | None = None
    rule: str | None = None

    @property
    def end(self) -> int | None:
        """End offset of `original`, if the correction is positioned."""
        if self.offset is None:
            return None
        return self.offset + len(self.original)

    def overlaps(self, start: int, end: int) -> bool:
        """Whether this correction's span intersects [start, end)."""
        if self.offset is None:
            return False
        # Insertions only conflict when they land strictly inside the span
        if self.offset == self.end:
            return start < self.offset < end
        return self.offset < end and start < self.end

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "original": self.original,
            "corrected": self.corrected,
            "message": self.message,
            "category": self.category,
            "offset": self.offset,
            "rule": self.rule,
        }


@dataclass
class CorrectionResult:
    """Result of a correction run."""

    text: str
    corrections: list[Correction] = field(default_factory=list)
    original_text: str = ""

    @property
    def change_count(self) -> int:
        """Number of corrections recorded."""
        return len(self.corrections)

    @property
    def was_modified(self) -> bool:
        """Whether the text changed."""
        return self.original_text != self.text

    @property
    def categories(self) -> list[str]:
        """Categories present, in first-seen order."""
        return list(dict.fromkeys(c.category for c in self.corrections))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "text": self.text,
            "original_text": self.original_text,
            "corrections": [c.to_dict() for c in self.corrections],
        }


@dataclass
class Suggestion:
    """
    An offset-based replacement proposal, shaped like a LanguageTool match.

    Only the first entry of `replacements` is ever applied.
    """

    offset: int
    length: int
    replacements: list[str] = field(default_factory=list)
    message: str = ""
    category: str = "TYPOS"
    rule_id: str | None = None


# =============================================================================
# HIGHLIGHTING
# =============================================================================


@dataclass
class HighlightSpan:
    """A run of text, optionally marked as removed or added."""

    text: str
    kind: str | None = None  # None, "removed" or "added"
    correction: int | None = None  # Index into the corrections list

    @property
    def is_highlighted(self) -> bool:
        """Whether this span carries a mark."""
        return self.kind is not None


@dataclass
class HighlightResult:
    """Highlighted renditions of the original and corrected text."""

    original: list[HighlightSpan] = field(default_factory=list)
    corrected: list[HighlightSpan] = field(default_factory=list)

    @property
    def original_text(self) -> str:
        return "".join(span.text for span in self.original)

    @property
    def corrected_text(self) -> str:
        return "".join(span.text for span in self.corrected)


# =============================================================================
# COMPARISON
# =============================================================================


class DiffMode(Enum):
    """Atomic unit of comparison."""

    CHARS = "chars"
    WORDS = "words"
    LINES = "lines"


class DiffKind(Enum):
    """Classification of a diff segment."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


@dataclass
class DiffSegment:
    """A contiguous run of text classified between two versions."""

    value: str
    kind: DiffKind

    @property
    def added(self) -> bool:
        return self.kind is DiffKind.ADDED

    @property
    def removed(self) -> bool:
        return self.kind is DiffKind.REMOVED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"value": self.value, "kind": self.kind.value}
