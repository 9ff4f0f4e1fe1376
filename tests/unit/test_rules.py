"""
Tests for rule types and rule table loading.
"""

import re

import pytest

from scribefix.correction import (
    CATEGORIES,
    ContextualRule,
    CorrectionRule,
    default_contextual_rules,
    default_rules,
    load_rule_table,
    rules_from_data,
)
from scribefix.correction.rules import match_case
from scribefix.exceptions import RuleTableError


class TestMatchCase:
    """Tests for re-casing replacements."""

    def test_lowercase_source(self):
        assert match_case("teh", "the") == "the"

    def test_capitalized_source(self):
        assert match_case("Teh", "the") == "The"

    def test_uppercase_source(self):
        assert match_case("TEH", "the") == "THE"

    def test_single_capital_letter_is_not_all_caps(self):
        """A one-letter capital only capitalizes the first letter."""
        assert match_case("A", "alot") == "Alot"

    def test_empty_values(self):
        assert match_case("", "the") == "the"
        assert match_case("Teh", "") == ""


class TestCorrectionRule:
    """Tests for CorrectionRule."""

    def test_string_pattern_is_compiled(self):
        rule = CorrectionRule(r"\bteh\b", "the", "Spelling mistake", "TYPOS")
        assert isinstance(rule.pattern, re.Pattern)
        assert rule.sub("teh cat") == "the cat"

    def test_invalid_pattern(self):
        with pytest.raises(RuleTableError, match="Invalid pattern"):
            CorrectionRule("(unclosed", "x", "msg", "TYPOS")

    def test_missing_group_in_template(self):
        """A template referring to a group the pattern lacks is rejected up front."""
        with pytest.raises(RuleTableError, match="Invalid replacement"):
            CorrectionRule(r"\b(foo)\b", r"\2", "msg", "TYPOS")

    def test_bad_escape_in_template(self):
        with pytest.raises(RuleTableError, match="Invalid replacement"):
            CorrectionRule(r"\bfoo\b", r"C:\path\2", "msg", "TYPOS")

    def test_unknown_group_name_in_template(self):
        with pytest.raises(RuleTableError, match="Invalid replacement"):
            CorrectionRule(r"(?P<word>foo)", r"\g<other>", "msg", "TYPOS")

    def test_template_replacement_expands_groups(self):
        rule = CorrectionRule(re.compile(r"\bi ([a-z])"), r"I \1", "Capitalize", "CASING")
        assert rule.sub("so i went") == "so I went"

    def test_callable_replacement(self):
        rule = CorrectionRule(
            pattern=re.compile(r"\d+"),
            replacement=lambda m: str(int(m.group(0)) * 2),
            message="Double",
            category="STYLE",
        )
        assert rule.sub("3 and 4") == "6 and 8"

    def test_preserve_case(self):
        rule = CorrectionRule(
            re.compile(r"\bteh\b", re.IGNORECASE), "the", "Spelling", "TYPOS", preserve_case=True
        )
        assert rule.sub("Teh cat and teh dog") == "The cat and the dog"

    def test_rule_is_frozen(self):
        rule = CorrectionRule(r"a", "b", "msg", "TYPOS")
        with pytest.raises(AttributeError):
            rule.message = "other"


class TestContextualRule:
    """Tests for ContextualRule."""

    def test_requires_target_group(self):
        with pytest.raises(RuleTableError, match="target"):
            ContextualRule(r"\bon the highwanz\b", "highway", "Contextual", "CONTEXTUAL")

    def test_only_target_is_rewritten(self):
        rule = ContextualRule(r"\bon the (?P<target>highwanz)\b", "highway", "Contextual", "CONTEXTUAL")
        assert rule.sub("bus on the highwanz today") == "bus on the highway today"

    def test_custom_target_name(self):
        rule = ContextualRule(
            r"(?P<word>tbe) cat", "the", "Contextual", "CONTEXTUAL", target="word"
        )
        match = rule.pattern.search("saw tbe cat")
        assert rule.target_span(match) == (4, 7)
        assert rule.render_target(match) == "the"

    def test_preserve_case_uses_target_text(self):
        rule = ContextualRule(
            re.compile(r"\bto (?P<target>tbe)\b", re.IGNORECASE),
            "the",
            "Contextual",
            "CONTEXTUAL",
            preserve_case=True,
        )
        assert rule.sub("TO Tbe store") == "TO The store"


class TestLoading:
    """Tests for building rule tables from data and YAML."""

    def test_rules_from_list(self):
        rules = rules_from_data(
            [{"pattern": "teh", "replacement": "the", "message": "m", "category": "TYPOS"}]
        )
        assert len(rules) == 1
        assert rules[0].sub("teh") == "the"

    def test_rules_from_mapping(self):
        rules = rules_from_data(
            {"rules": [{"pattern": "teh", "replacement": "the", "message": "m", "category": "TYPOS"}]}
        )
        assert len(rules) == 1

    def test_flags(self):
        rules = rules_from_data(
            [
                {
                    "pattern": "teh",
                    "replacement": "the",
                    "message": "m",
                    "category": "TYPOS",
                    "flags": ["IGNORECASE"],
                }
            ]
        )
        assert rules[0].pattern.flags & re.IGNORECASE

    def test_unknown_flag(self):
        with pytest.raises(RuleTableError, match="Unknown regex flag"):
            rules_from_data(
                [{"pattern": "a", "replacement": "b", "message": "m", "category": "T", "flags": ["FAST"]}]
            )

    def test_missing_keys(self):
        with pytest.raises(RuleTableError, match="missing keys"):
            rules_from_data([{"pattern": "teh", "replacement": "the"}])

    def test_not_a_list(self):
        with pytest.raises(RuleTableError):
            rules_from_data("rules")

    def test_contextual_entries(self):
        rules = rules_from_data(
            [
                {
                    "pattern": r"of (?P<target>tbe)",
                    "replacement": "the",
                    "message": "m",
                    "category": "CONTEXTUAL",
                }
            ],
            contextual=True,
        )
        assert isinstance(rules[0], ContextualRule)

    def test_load_rule_table(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text(
            "rules:\n"
            "  - pattern: '\\bcolour\\b'\n"
            "    replacement: color\n"
            "    message: American spelling\n"
            "    category: STYLE\n"
            "    name: colour\n",
            encoding="utf-8",
        )
        rules = load_rule_table(path)
        assert rules[0].name == "colour"
        assert rules[0].sub("the colour red") == "the color red"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(RuleTableError, match="Cannot read"):
            load_rule_table(tmp_path / "missing.yaml")

    def test_invalid_template_in_table(self):
        with pytest.raises(RuleTableError, match="Invalid replacement"):
            rules_from_data(
                {
                    "rules": [
                        {
                            "pattern": r"\bfoo\b",
                            "replacement": r"C:\path\2",
                            "message": "m",
                            "category": "TYPOS",
                        }
                    ]
                }
            )

    def test_load_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("rules: [unclosed\n", encoding="utf-8")
        with pytest.raises(RuleTableError, match="Cannot parse"):
            load_rule_table(path)


class TestShippedTables:
    """Tests for the shipped English tables."""

    def test_default_rules_load(self):
        rules = default_rules()
        assert len(rules) > 40
        assert all(isinstance(rule, CorrectionRule) for rule in rules)

    def test_default_rules_are_cached(self):
        assert default_rules() is default_rules()

    def test_default_categories_are_known(self):
        for rule in default_rules() + default_contextual_rules():
            assert rule.category in CATEGORIES

    def test_contextual_rules_have_targets(self):
        for rule in default_contextual_rules():
            assert isinstance(rule, ContextualRule)
            assert rule.target in rule.pattern.groupindex

    def test_rule_names_unique(self):
        names = [rule.name for rule in default_rules()]
        assert len(names) == len(set(names))
