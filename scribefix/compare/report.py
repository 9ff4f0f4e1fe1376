"""Comparison reports.

This module provides:
1. format_report() - The downloadable plain-text diff report
2. diff_stats() - Character and segment counts plus a similarity score
3. format_stats_table() - Terminal-friendly table of the stats
4. side_by_side() - Line pairs for a two-column view
5. report_to_dict() - JSON-serializable report
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from rapidfuzz import fuzz
from tabulate import tabulate

from scribefix.models import DiffKind, DiffMode, DiffSegment

PREFIXES = {
    DiffKind.ADDED: "+ ",
    DiffKind.REMOVED: "- ",
    DiffKind.UNCHANGED: "  ",
}


@dataclass
class DiffStats:
    """Summary of a comparison."""

    added_chars: int = 0
    removed_chars: int = 0
    unchanged_chars: int = 0
    added_segments: int = 0
    removed_segments: int = 0
    unchanged_segments: int = 0
    similarity: float = 100.0  # 0-100

    @property
    def changed_chars(self) -> int:
        """Characters added or removed."""
        return self.added_chars + self.removed_chars

    @property
    def is_identical(self) -> bool:
        """Whether the documents did not differ at all."""
        return self.changed_chars == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "added_chars": self.added_chars,
            "removed_chars": self.removed_chars,
            "unchanged_chars": self.unchanged_chars,
            "added_segments": self.added_segments,
            "removed_segments": self.removed_segments,
            "unchanged_segments": self.unchanged_segments,
            "similarity": round(self.similarity, 2),
        }


def diff_stats(a: str, b: str, segments: Sequence[DiffSegment]) -> DiffStats:
    """Count what changed between a and b.

    Args:
        a: Original document text
        b: New document text
        segments: Result of diff(a, b, ...)

    Returns:
        DiffStats; similarity is rapidfuzz's normalized Indel ratio (0-100)
    """
    stats = DiffStats(similarity=100.0 if a == b else fuzz.ratio(a, b))
    for segment in segments:
        if segment.kind is DiffKind.ADDED:
            stats.added_chars += len(segment.value)
            stats.added_segments += 1
        elif segment.kind is DiffKind.REMOVED:
            stats.removed_chars += len(segment.value)
            stats.removed_segments += 1
        else:
            stats.unchanged_chars += len(segment.value)
            stats.unchanged_segments += 1
    return stats


def format_report(
    segments: Sequence[DiffSegment],
    mode: DiffMode | str,
    name_a: str | None = None,
    name_b: str | None = None,
) -> str:
    """Render a diff as the plain-text report offered for download.

    Every line of a segment is prefixed with "+ ", "- " or two spaces.

    Args:
        segments: Diff segments
        mode: Mode the diff was computed with
        name_a: Name of the first document ("Unknown" if None)
        name_b: Name of the second document ("Unknown" if None)

    Returns:
        Report text
    """
    mode_value = DiffMode(mode).value
    lines = [
        "Document Comparison Results",
        "=========================",
        "",
        f"Document 1: {name_a or 'Unknown'}",
        f"Document 2: {name_b or 'Unknown'}",
        "",
        f"Comparison Mode: {mode_value}",
        "",
        "Differences:",
        "------------",
        "",
    ]
    report = "\n".join(lines) + "\n"
    for segment in segments:
        prefix = PREFIXES[segment.kind]
        report += prefix + segment.value.replace("\n", "\n" + prefix) + "\n"
    return report


def format_stats_table(
    stats: DiffStats,
    title: str = "Document Comparison",
) -> str:
    """Generate a CLI-friendly summary table.

    Args:
        stats: Comparison statistics
        title: Report title

    Returns:
        Formatted string for terminal output
    """
    lines = []
    lines.append("=" * 60)
    lines.append(title)
    lines.append("=" * 60)
    lines.append("")

    headers = ["Kind", "Segments", "Characters"]
    rows = [
        ["unchanged", stats.unchanged_segments, stats.unchanged_chars],
        ["added", stats.added_segments, stats.added_chars],
        ["removed", stats.removed_segments, stats.removed_chars],
    ]
    lines.append(tabulate(rows, headers=headers, tablefmt="simple"))
    lines.append("")
    lines.append("-" * 40)
    lines.append(f"Similarity: {stats.similarity:.1f}%")
    lines.append("")
    return "\n".join(lines)


def side_by_side(a: str, b: str) -> list[tuple[str, str]]:
    """Pair the lines of a and b by index.

    The shorter document is padded with empty strings, so no line of either
    document is dropped.
    """
    lines_a = a.split("\n")
    lines_b = b.split("\n")
    width = max(len(lines_a), len(lines_b))
    lines_a += [""] * (width - len(lines_a))
    lines_b += [""] * (width - len(lines_b))
    return list(zip(lines_a, lines_b))


def report_to_dict(
    segments: Sequence[DiffSegment],
    mode: DiffMode | str,
    stats: DiffStats | None = None,
    name_a: str | None = None,
    name_b: str | None = None,
) -> dict[str, Any]:
    """Generate a JSON-serializable comparison report."""
    return {
        "version": "1.0.0",
        "timestamp": datetime.now().isoformat(),
        "documents": {"a": name_a, "b": name_b},
        "mode": DiffMode(mode).value,
        "segments": [segment.to_dict() for segment in segments],
        "stats": stats.to_dict() if stats else None,
    }
