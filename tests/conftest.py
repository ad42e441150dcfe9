"""
Test configuration and fixtures for pytest.

This file contains fixtures and configuration that will be available to all tests.
"""
import numpy as np
import pytest

from tnacompare.core import from_matrix, tna


SAMPLE_SEQUENCES = [
    ["A", "B", "C", "A", "B"],
    ["B", "C", "A", "B", "C"],
    ["A", "C", "B", "A", "C"],
    ["C", "A", "B", "C", "A"],
    ["A", "B", "A", "C", "B"],
    ["B", "A", "C", "B", "A"],
    ["C", "B", "A", "C", "B"],
    ["A", "C", "A", "B", "C"],
    ["B", "C", "B", "A", "C"],
    ["C", "A", "C", "B", "A"],
]

SAMPLE_SEQUENCES_2 = [
    ["A", "A", "B", "C", "C"],
    ["B", "B", "A", "C", "C"],
    ["A", "A", "A", "B", "C"],
    ["C", "C", "B", "A", "A"],
    ["B", "B", "B", "A", "C"],
]

MATRIX_A = [[0, 0.6, 0.4], [0.3, 0, 0.7], [0.5, 0.5, 0]]
MATRIX_B = [[0, 0.4, 0.6], [0.5, 0, 0.5], [0.3, 0.7, 0]]


@pytest.fixture
def sample_sequences():
    """Ten sequences of length 5 over the states A, B, C."""
    return [list(seq) for seq in SAMPLE_SEQUENCES]


@pytest.fixture
def sample_sequences_2():
    """Five sequences with more self-loops than ``sample_sequences``."""
    return [list(seq) for seq in SAMPLE_SEQUENCES_2]


@pytest.fixture
def sample_model(sample_sequences):
    """Relative transition network built from ``sample_sequences``."""
    return tna(sample_sequences)


@pytest.fixture
def sample_model_2(sample_sequences_2):
    """Relative transition network built from ``sample_sequences_2``."""
    return tna(sample_sequences_2)


@pytest.fixture
def reference_matrices():
    """Pair of 3x3 weight matrices with known comparison metrics."""
    return np.array(MATRIX_A), np.array(MATRIX_B)


@pytest.fixture
def reference_networks(reference_matrices):
    """``reference_matrices`` wrapped as networks over A, B, C."""
    a, b = reference_matrices
    return from_matrix(a, labels=["A", "B", "C"]), from_matrix(b, labels=["A", "B", "C"])


@pytest.fixture
def reference_groups():
    """Three groups with known ANOVA and Kruskal-Wallis results."""
    return {
        "A": [2.1, 3.4, 2.8, 3.1, 2.5],
        "B": [5.2, 4.8, 5.5, 4.9, 5.1],
        "C": [3.5, 3.8, 4.1, 3.2, 3.9],
    }
