"""
ScribeFix: Rule-based correction and comparison for OCR'd text.

Corrects common typos, punctuation, casing and OCR garbles with ordered
regex rule tables, highlights what changed, and diffs two documents at
character, word or line granularity.

Example:
    >>> import scribefix
    >>> result = scribefix.correct_text("teh cat sat")
    >>> result.text
    'the cat sat.'

    >>> segments = scribefix.diff("hello world", "hello there world")
    >>> [s.value for s in segments if s.added]
    ['there ']
"""

from scribefix.compare import (
    DiffStats,
    diff,
    diff_chars,
    diff_lines,
    diff_stats,
    diff_words,
    format_report,
    side_by_side,
)
from scribefix.config import CorrectionConfig, DiffConfig
from scribefix.correction import (
    ContextualRule,
    CorrectionRule,
    TextCorrector,
    apply_contextual_rules,
    apply_rules,
    apply_suggestions,
    correct_text,
    default_contextual_rules,
    default_rules,
    group_by_category,
    load_rule_table,
    synthesize_fallback,
)
from scribefix.exceptions import (
    ConfigurationError,
    InvalidInputError,
    RuleTableError,
    ScribeFixError,
)
from scribefix.highlight import highlight, render_html
from scribefix.models import (
    # Correction
    Correction,
    CorrectionResult,
    # Comparison
    DiffKind,
    DiffMode,
    DiffSegment,
    # Highlighting
    HighlightResult,
    HighlightSpan,
    Suggestion,
)
from scribefix.statistics import DocumentStatistics, compute_statistics

__version__ = "0.1.0"
__all__ = [
    # Main API
    "correct_text",
    "TextCorrector",
    "highlight",
    "render_html",
    "diff",
    "diff_chars",
    "diff_words",
    "diff_lines",
    "compute_statistics",
    # Passes
    "apply_rules",
    "apply_contextual_rules",
    "synthesize_fallback",
    "apply_suggestions",
    "group_by_category",
    # Rules
    "CorrectionRule",
    "ContextualRule",
    "load_rule_table",
    "default_rules",
    "default_contextual_rules",
    # Configuration
    "CorrectionConfig",
    "DiffConfig",
    # Models
    "Correction",
    "CorrectionResult",
    "Suggestion",
    "HighlightSpan",
    "HighlightResult",
    "DiffMode",
    "DiffKind",
    "DiffSegment",
    "DiffStats",
    "DocumentStatistics",
    # Reports
    "diff_stats",
    "format_report",
    "side_by_side",
    # Exceptions
    "ScribeFixError",
    "InvalidInputError",
    "RuleTableError",
    "ConfigurationError",
]
