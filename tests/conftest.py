"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

PROGRAMS_DIR = Path(__file__).resolve().parent.parent / "programs"


class FixedSequence:
    """Randomness source that replays a fixed list of values, cycling."""

    def __init__(self, *values: float) -> None:
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_rng():
    """Factory for fixed-sequence randomness sources."""
    return FixedSequence


@pytest.fixture
def programs_dir():
    """Directory holding the sample QASM programs."""
    return PROGRAMS_DIR
