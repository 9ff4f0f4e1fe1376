"""
Configuration for scribefix correction and comparison.

Both configs are plain dataclasses validated on construction. Create one
only if you need to change the defaults.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Literal

from scribefix.exceptions import ConfigurationError

VALID_ORDERS = ("rule", "offset")
VALID_CLEANUPS = ("none", "semantic", "efficiency")


@dataclass
class CorrectionConfig:
    """
    Configuration for a correction run.

    The fallback suggestion is DISABLED by default. It exists so a demo UI
    always has something to show; enable it with `always_suggest=True` or
    the `demo()` preset.

    Example:
        >>> config = CorrectionConfig.demo()
        >>> result = scribefix.correct_text("a perfectly clean sentence of words", config)
        >>> result.change_count > 0
        True
    """

    # Fallback policy
    always_suggest: bool = False
    min_fallback_tokens: int = 5  # Text needs MORE than this many tokens
    min_fallback_word_length: int = 3  # Picked word needs MORE than this many chars
    seed: int | None = None  # Seed for the fallback's word pick

    # Record ordering: evaluation order or position in the text
    order: Literal["rule", "offset"] = "rule"

    def __post_init__(self):
        """Validate configuration."""
        self.validate()

    @classmethod
    def strict(cls) -> CorrectionConfig:
        """Only report what the rule tables find, sorted top to bottom."""
        return cls(always_suggest=False, order="offset")

    @classmethod
    def default(cls) -> CorrectionConfig:
        """Default settings."""
        return cls()

    @classmethod
    def demo(cls, seed: int | None = None) -> CorrectionConfig:
        """Always produce at least one suggestion for non-trivial text."""
        return cls(always_suggest=True, seed=seed)

    def make_rng(self) -> random.Random:
        """Build the random source used by the fallback synthesizer."""
        return random.Random(self.seed)

    def validate(self) -> None:
        """Validate configuration values."""
        if self.order not in VALID_ORDERS:
            raise ConfigurationError(
                f"order must be one of {VALID_ORDERS}, got {self.order!r}"
            )
        if self.min_fallback_tokens < 0:
            raise ConfigurationError(
                f"min_fallback_tokens must be >= 0, got {self.min_fallback_tokens}"
            )
        if self.min_fallback_word_length < 0:
            raise ConfigurationError(
                f"min_fallback_word_length must be >= 0, got {self.min_fallback_word_length}"
            )


@dataclass
class DiffConfig:
    """
    Configuration for document comparison.

    Attributes:
        timeout: Seconds the Myers search may run before settling for a
            valid but possibly non-minimal diff. 0 disables the limit.
        cleanup: Post-processing for character diffs. "semantic" merges
            tiny coincidental equalities into readable chunks, "efficiency"
            trades a few characters for fewer segments. Ignored for word
            and line diffs.
    """

    timeout: float = 2.0
    cleanup: Literal["none", "semantic", "efficiency"] = "none"

    def __post_init__(self):
        """Validate configuration."""
        if self.timeout < 0:
            raise ConfigurationError(f"timeout must be >= 0, got {self.timeout}")
        if self.cleanup not in VALID_CLEANUPS:
            raise ConfigurationError(
                f"cleanup must be one of {VALID_CLEANUPS}, got {self.cleanup!r}"
            )


DEFAULT_CORRECTION_CONFIG = CorrectionConfig()
DEFAULT_DIFF_CONFIG = DiffConfig()
