"""
Tests for document statistics.
"""

import pytest

from scribefix import InvalidInputError, compute_statistics
from scribefix.statistics import normalize_word

TEXT = "Hello world. This is a test.\n\nSecond paragraph here!"


class TestComputeStatistics:
    """Tests for compute_statistics."""

    def test_counts(self):
        stats = compute_statistics(TEXT)

        assert stats.char_count == 52
        assert stats.char_count_no_spaces == 43
        assert stats.word_count == 8  # "a" is too short to count
        assert stats.line_count == 3
        assert stats.paragraph_count == 2
        assert stats.sentence_count == 3
        assert stats.unique_word_count == 8
        assert stats.unique_word_percentage == 100
        assert stats.reading_time_minutes == 1

    def test_empty_text(self):
        stats = compute_statistics("")
        assert stats.char_count == 0
        assert stats.word_count == 0
        assert stats.unique_word_percentage == 0
        assert all(item["percentage"] == 0 for item in stats.composition())

    def test_minimums(self):
        """Non-empty text has at least one paragraph and sentence."""
        stats = compute_statistics("no punctuation at all")
        assert stats.paragraph_count == 1
        assert stats.sentence_count == 1

    def test_non_latin_sentence_marks(self):
        stats = compute_statistics("पहला वाक्य। दूसरा वाक्य॥ سؤال؟")
        assert stats.sentence_count == 3

    def test_word_frequency(self):
        stats = compute_statistics("The cat and the hat, the end.")
        assert stats.most_frequent(1) == [("the", 3)]
        assert stats.word_frequency["hat"] == 1

    def test_word_length_distribution(self):
        stats = compute_statistics("aa bbb cc dddd")
        assert stats.word_length_distribution == {2: 2, 3: 1, 4: 1}

    def test_reading_time(self):
        stats = compute_statistics(" ".join(["word"] * 401))
        assert stats.reading_time_minutes == 3

    def test_composition(self):
        stats = compute_statistics(TEXT)
        composition = {item["name"]: item for item in stats.composition()}
        assert composition["Spaces"]["value"] == 9
        assert composition["Punctuation"]["value"] == 3
        assert composition["Words"]["percentage"] == round(8 / 52 * 100)

    def test_to_dict(self):
        data = compute_statistics(TEXT).to_dict()
        assert data["word_count"] == 8
        assert len(data["composition"]) == 3

    def test_rejects_non_text(self):
        with pytest.raises(InvalidInputError):
            compute_statistics(42)


class TestNormalizeWord:
    def test_strips_punctuation_and_case(self):
        assert normalize_word("(Hello),") == "hello"
        assert normalize_word("well-known") == "wellknown"
