"""
Correction rule tables.

A rule pairs a regular expression with a replacement, a human-readable
message and a category label. Tables are ordered: the applicator runs rules
in sequence, so a later rule may re-match text an earlier rule rewrote
(e.g. an apostrophe fix after a spelling fix).

The shipped English tables live in `data/*.yaml` and are loaded once.
Custom tables can be loaded from YAML with `load_rule_table()` or built
directly in Python, which also allows callable replacements:

Example:
    >>> rule = CorrectionRule(
    ...     pattern=re.compile(r"\\bi ([a-z])"),
    ...     replacement=lambda m: f"I {m.group(1)}",
    ...     message="Capitalize 'I'",
    ...     category=CASING,
    ... )
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml

from scribefix.exceptions import RuleTableError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_RULES_PATH = DATA_DIR / "english.yaml"
DEFAULT_CONTEXTUAL_RULES_PATH = DATA_DIR / "english_contextual.yaml"

# Category labels used by the shipped tables. Consumers group by the string
# value, so tables may introduce new labels freely.
TYPOS = "TYPOS"
PUNCTUATION = "PUNCTUATION"
CASING = "CASING"
TYPOGRAPHY = "TYPOGRAPHY"
CONTEXTUAL = "CONTEXTUAL"
STYLE = "STYLE"

CATEGORIES = (TYPOS, PUNCTUATION, CASING, TYPOGRAPHY, CONTEXTUAL, STYLE)

Replacement = Union[str, Callable[["re.Match[str]"], str]]

REQUIRED_KEYS = ("pattern", "replacement", "message", "category")


def match_case(source: str, replacement: str) -> str:
    """Re-case replacement to follow the casing of source."""
    if not source or not replacement:
        return replacement
    if len(source) > 1 and source.isupper():
        return replacement.upper()
    if source[0].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


# =============================================================================
# RULE TYPES
# =============================================================================


@dataclass(frozen=True)
class CorrectionRule:
    """
    A single pattern-based correction.

    Attributes:
        pattern: Compiled expression; every non-overlapping match is used.
            A string is compiled on construction.
        replacement: Template string (group references like `\\1` are
            expanded) or a callable taking the match and returning text.
        message: Explanation shown next to the correction.
        category: Grouping label (TYPOS, PUNCTUATION, ...).
        preserve_case: Re-case the replacement to follow the matched text.
        name: Optional identifier copied onto produced corrections.
    """

    pattern: re.Pattern[str]
    replacement: Replacement
    message: str
    category: str
    preserve_case: bool = False
    name: str | None = None

    def __post_init__(self):
        if isinstance(self.pattern, str):
            try:
                object.__setattr__(self, "pattern", re.compile(self.pattern))
            except re.error as e:
                raise RuleTableError(f"Invalid pattern {self.pattern!r}: {e}") from e
        if isinstance(self.replacement, str):
            # Templates are compiled up front, even when nothing matches
            try:
                self.pattern.sub(self.replacement, "")
            except (re.error, IndexError) as e:
                raise RuleTableError(
                    f"Invalid replacement {self.replacement!r} for pattern "
                    f"{self.pattern.pattern!r}: {e}"
                ) from e

    def render(self, match: re.Match[str], source: str | None = None) -> str:
        """Compute the replacement text for match."""
        if callable(self.replacement):
            value = self.replacement(match)
        else:
            try:
                value = match.expand(self.replacement)
            except (re.error, IndexError) as e:
                raise RuleTableError(f"Invalid replacement {self.replacement!r}: {e}") from e
        if self.preserve_case:
            value = match_case(match.group(0) if source is None else source, value)
        return value

    def replace(self, match: re.Match[str]) -> str:
        """Replacement for the whole match (used with `re.sub`)."""
        return self.render(match)

    def sub(self, text: str) -> str:
        """Apply this rule to every match in text."""
        return self.pattern.sub(self.replace, text)


@dataclass(frozen=True)
class ContextualRule(CorrectionRule):
    """
    A rule whose pattern spans a context window around one target token.

    Only the named `target` group is rewritten; the rest of the match is
    context and is preserved verbatim. Template replacements are expanded
    against the full match, so they may refer to context groups too.
    """

    target: str = "target"

    def __post_init__(self):
        super().__post_init__()
        if self.target not in self.pattern.groupindex:
            raise RuleTableError(
                f"Contextual pattern {self.pattern.pattern!r} has no group named {self.target!r}"
            )

    def target_span(self, match: re.Match[str]) -> tuple[int, int]:
        """Absolute span of the target group."""
        return match.span(self.target)

    def render_target(self, match: re.Match[str]) -> str:
        """Replacement text for the target group alone."""
        return self.render(match, source=match.group(self.target))

    def replace(self, match: re.Match[str]) -> str:
        start, end = match.span()
        target_start, target_end = self.target_span(match)
        whole = match.group(0)
        if target_start < 0:
            return whole
        return (
            whole[: target_start - start]
            + self.render_target(match)
            + whole[target_end - start :]
        )


# =============================================================================
# LOADING
# =============================================================================


def _compile_flags(names: Iterable[str] | None) -> int:
    flags = 0
    for flag_name in names or ():
        flag = getattr(re, str(flag_name).upper(), None)
        if not isinstance(flag, re.RegexFlag):
            raise RuleTableError(f"Unknown regex flag: {flag_name!r}")
        flags |= flag
    return flags


def rule_from_mapping(entry: Mapping[str, Any], contextual: bool = False) -> CorrectionRule:
    """
    Build one rule from a YAML/JSON style mapping.

    Args:
        entry: Mapping with pattern, replacement, message and category, plus
            optional flags, preserve_case, name and (contextual only) target
        contextual: Build a ContextualRule instead of a CorrectionRule

    Returns:
        The compiled rule

    Raises:
        RuleTableError: If keys are missing or the pattern does not compile
    """
    if not isinstance(entry, Mapping):
        raise RuleTableError(f"Rule entries must be mappings, got {type(entry).__name__}")
    missing = [key for key in REQUIRED_KEYS if key not in entry]
    if missing:
        raise RuleTableError(f"Rule {entry.get('name', entry)!r} is missing keys: {missing}")

    try:
        pattern = re.compile(str(entry["pattern"]), _compile_flags(entry.get("flags")))
    except re.error as e:
        raise RuleTableError(f"Invalid pattern {entry['pattern']!r}: {e}") from e

    kwargs: dict[str, Any] = {
        "pattern": pattern,
        "replacement": str(entry["replacement"]),
        "message": str(entry["message"]),
        "category": str(entry["category"]),
        "preserve_case": bool(entry.get("preserve_case", False)),
        "name": entry.get("name"),
    }
    if contextual:
        return ContextualRule(target=str(entry.get("target", "target")), **kwargs)
    return CorrectionRule(**kwargs)


def rules_from_data(data: Any, contextual: bool = False) -> tuple[CorrectionRule, ...]:
    """Build a rule table from parsed YAML (a list, or a mapping with `rules`)."""
    if isinstance(data, Mapping):
        data = data.get("rules")
    if not isinstance(data, list):
        raise RuleTableError("Rule table must be a list or a mapping with a 'rules' list")
    return tuple(rule_from_mapping(entry, contextual=contextual) for entry in data)


def load_rule_table(path: str | Path, contextual: bool = False) -> tuple[CorrectionRule, ...]:
    """
    Load an ordered rule table from a YAML file.

    Args:
        path: YAML file to read
        contextual: Whether entries are contextual rules

    Returns:
        Tuple of rules in file order

    Raises:
        RuleTableError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise RuleTableError(f"Cannot read rule table {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RuleTableError(f"Cannot parse rule table {path}: {e}") from e

    rules = rules_from_data(data, contextual=contextual)
    logger.debug("Loaded %d %srules from %s", len(rules), "contextual " if contextual else "", path)
    return rules


@functools.lru_cache(maxsize=None)
def default_rules() -> tuple[CorrectionRule, ...]:
    """The shipped English base rule table (loaded once)."""
    return load_rule_table(DEFAULT_RULES_PATH)


@functools.lru_cache(maxsize=None)
def default_contextual_rules() -> tuple[CorrectionRule, ...]:
    """The shipped English contextual rule table (loaded once)."""
    return load_rule_table(DEFAULT_CONTEXTUAL_RULES_PATH, contextual=True)
