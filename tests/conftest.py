"""pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import sys

import numpy as np
import pytest

# Ensure tests/ dir is on path so test_base imports work
sys.path.insert(0, os.path.dirname(__file__))


# ---------------------------------------------------------------------------
# Small hand-checked tables
# ---------------------------------------------------------------------------


@pytest.fixture
def example_rows() -> list[list[int]]:
    """Four transactions over three items, each item seen three times."""
    return [[1, 2, 3], [1, 2], [2, 3], [1, 3]]


@pytest.fixture
def gap_rows() -> list[list[int]]:
    """Table where {1, 2, 4} is frequent but never reached by the traversal."""
    return [[1, 2, 4], [1, 2, 4], [1, 3], [2, 3], [3, 4]]


@pytest.fixture
def boundary_rows() -> list[list[int]]:
    """Table with an itemset and an item whose support equals the threshold 2."""
    return [[1, 2, 9], [1, 2, 9], [1, 3], [1, 3], [1, 2, 3], [2, 3]]


@pytest.fixture
def random_rows() -> list[list[int]]:
    """Reproducible 60×12 table with roughly 35% density."""
    rng = np.random.default_rng(42)
    mask = rng.random((60, 12)) < 0.35
    return [np.flatnonzero(row).tolist() for row in mask]
