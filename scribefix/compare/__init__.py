"""
Document comparison.

Modules:
    differ: Segment diffs at char/word/line granularity
    report: Plain-text and JSON reports, stats, side-by-side pairing
"""

from scribefix.compare.differ import (
    coalesce,
    diff,
    diff_chars,
    diff_lines,
    diff_words,
    tokenize,
)
from scribefix.compare.report import (
    DiffStats,
    diff_stats,
    format_report,
    format_stats_table,
    report_to_dict,
    side_by_side,
)

__all__ = [
    # differ
    "diff",
    "diff_chars",
    "diff_words",
    "diff_lines",
    "tokenize",
    "coalesce",
    # report
    "DiffStats",
    "diff_stats",
    "format_report",
    "format_stats_table",
    "report_to_dict",
    "side_by_side",
]
