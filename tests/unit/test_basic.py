"""
Basic tests for scribefix package structure.

These tests verify the public API is importable and
basic configuration works correctly.
"""

import pytest


class TestImports:
    """Test that the public API is importable."""

    def test_import_package(self):
        """Can import the main package."""
        import scribefix

        assert scribefix.__version__ == "0.1.0"

    def test_import_main_functions(self):
        """Can import the main entry points."""
        from scribefix import compute_statistics, correct_text, diff, highlight

        assert callable(correct_text)
        assert callable(diff)
        assert callable(highlight)
        assert callable(compute_statistics)

    def test_all_names_exist(self):
        """Everything in __all__ is importable."""
        import scribefix

        for name in scribefix.__all__:
            assert hasattr(scribefix, name), name

    def test_import_exceptions(self):
        """Exceptions share a common base."""
        from scribefix import (
            ConfigurationError,
            InvalidInputError,
            RuleTableError,
            ScribeFixError,
        )

        assert issubclass(InvalidInputError, ScribeFixError)
        assert issubclass(InvalidInputError, TypeError)
        assert issubclass(RuleTableError, ScribeFixError)
        assert issubclass(ConfigurationError, ValueError)


class TestCorrectionConfig:
    """Test CorrectionConfig."""

    def test_defaults(self):
        """Fallback is off and evaluation order is kept by default."""
        from scribefix import CorrectionConfig

        config = CorrectionConfig()
        assert config.always_suggest is False
        assert config.order == "rule"

    def test_presets(self):
        """Presets set the expected switches."""
        from scribefix import CorrectionConfig

        assert CorrectionConfig.demo().always_suggest is True
        assert CorrectionConfig.strict().order == "offset"
        assert CorrectionConfig.default() == CorrectionConfig()

    def test_invalid_order(self):
        """Unknown order is rejected."""
        from scribefix import ConfigurationError, CorrectionConfig

        with pytest.raises(ConfigurationError, match="order"):
            CorrectionConfig(order="alphabetical")

    def test_invalid_thresholds(self):
        """Negative fallback thresholds are rejected."""
        from scribefix import ConfigurationError, CorrectionConfig

        with pytest.raises(ConfigurationError, match="min_fallback_tokens"):
            CorrectionConfig(min_fallback_tokens=-1)

    def test_seeded_rng_is_reproducible(self):
        """The same seed gives the same random sequence."""
        from scribefix import CorrectionConfig

        config = CorrectionConfig(seed=42)
        assert config.make_rng().random() == config.make_rng().random()


class TestDiffConfig:
    """Test DiffConfig."""

    def test_defaults(self):
        from scribefix import DiffConfig

        config = DiffConfig()
        assert config.timeout == 2.0
        assert config.cleanup == "none"

    def test_invalid_cleanup(self):
        from scribefix import ConfigurationError, DiffConfig

        with pytest.raises(ConfigurationError, match="cleanup"):
            DiffConfig(cleanup="aggressive")

    def test_negative_timeout(self):
        from scribefix import ConfigurationError, DiffConfig

        with pytest.raises(ValueError, match="timeout"):
            DiffConfig(timeout=-1)
        with pytest.raises(ConfigurationError):
            DiffConfig(timeout=-0.5)


class TestInputValidation:
    """Public entry points reject non-text input."""

    def test_correct_text_rejects_bytes(self):
        from scribefix import InvalidInputError, correct_text

        with pytest.raises(InvalidInputError, match="bytes"):
            correct_text(b"teh cat")

    def test_diff_rejects_none(self):
        from scribefix import diff

        with pytest.raises(TypeError):
            diff(None, "text")
