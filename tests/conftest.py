"""
Pytest configuration and fixtures for scribefix tests.
"""

import random
from pathlib import Path

import pytest


class FixedRandom(random.Random):
    """Random source whose randrange always returns the same index."""

    def __init__(self, index: int):
        super().__init__(0)
        self.index = index

    def randrange(self, *args, **kwargs):
        return self.index


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom instances."""
    return FixedRandom


@pytest.fixture(scope="session")
def data_dir() -> Path:
    """Return path to the shipped rule tables."""
    return Path(__file__).parent.parent / "scribefix" / "correction" / "data"


@pytest.fixture
def scanned_page() -> str:
    """OCR output with a contextual garble."""
    return "almost overflowing. As we waited for a bus on the highwanz"


@pytest.fixture
def write_text(tmp_path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
