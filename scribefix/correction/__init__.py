"""
Rule-based text correction.

- rules: CorrectionRule / ContextualRule and the shipped YAML tables
- applicator: base and contextual passes
- fallback: optional demo suggestions
- engine: TextCorrector orchestrating the passes, category grouping
- suggestions: applying offset-based suggestions from grammar services
"""

from scribefix.correction.applicator import apply_contextual_rules, apply_rules
from scribefix.correction.engine import (
    TextCorrector,
    correct_text,
    group_by_category,
    sort_by_offset,
)
from scribefix.correction.fallback import synthesize_fallback
from scribefix.correction.rules import (
    CASING,
    CATEGORIES,
    CONTEXTUAL,
    PUNCTUATION,
    STYLE,
    TYPOGRAPHY,
    TYPOS,
    ContextualRule,
    CorrectionRule,
    default_contextual_rules,
    default_rules,
    load_rule_table,
    rules_from_data,
)
from scribefix.correction.suggestions import apply_suggestions

__all__ = [
    # Rules
    "CorrectionRule",
    "ContextualRule",
    "load_rule_table",
    "rules_from_data",
    "default_rules",
    "default_contextual_rules",
    # Categories
    "CATEGORIES",
    "TYPOS",
    "PUNCTUATION",
    "CASING",
    "TYPOGRAPHY",
    "CONTEXTUAL",
    "STYLE",
    # Passes
    "apply_rules",
    "apply_contextual_rules",
    "synthesize_fallback",
    "apply_suggestions",
    # Orchestration
    "TextCorrector",
    "correct_text",
    "group_by_category",
    "sort_by_offset",
]
