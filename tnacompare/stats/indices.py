"""Per-sequence indices (entropy, complexity, turbulence) and their summaries."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from ..core.transition import SequenceInput, as_sequence_array
from .group_tests import GroupSample


@dataclass(frozen=True)
class SequenceIndex:
    """Indices of one sequence; missing positions are ignored."""

    id: int
    length: int
    n_unique_states: int
    entropy: float
    normalized_entropy: float
    complexity: int
    turbulence: float
    self_loop_rate: float


# Index key -> display label, in summary order
INDEX_LABELS: Dict[str, str] = {
    "length": "Sequence Length",
    "n_unique_states": "Unique States",
    "entropy": "Shannon Entropy",
    "normalized_entropy": "Normalized Entropy",
    "complexity": "Transitions (Changes)",
    "turbulence": "Turbulence",
    "self_loop_rate": "Self-Loop Rate",
}


def _index_of(i: int, seq: List[str]) -> SequenceIndex:
    n = len(seq)
    if n == 0:
        return SequenceIndex(i, 0, 0, 0.0, 0.0, 0, 0.0, 0.0)

    counts = Counter(seq)
    n_unique = len(counts)
    entropy = -sum((c / n) * math.log2(c / n) for c in counts.values())
    # -0.0 for single-state sequences
    entropy = abs(entropy)
    normalized = entropy / math.log2(n_unique) if n_unique > 1 else 0.0

    changes = sum(1 for prev, cur in zip(seq, seq[1:]) if prev != cur)
    self_loops = (n - 1) - changes
    max_changes = n - 1
    return SequenceIndex(
        id=i,
        length=n,
        n_unique_states=n_unique,
        entropy=entropy,
        normalized_entropy=normalized,
        complexity=changes,
        turbulence=changes / max_changes if max_changes > 0 else 0.0,
        self_loop_rate=self_loops / max_changes if max_changes > 0 else 0.0,
    )


def compute_sequence_indices(data: SequenceInput) -> List[SequenceIndex]:
    """
    Compute per-sequence indices.

    Parameters
    ----------
    data : DataFrame, ndarray or sequence of sequences
        One sequence per row.

    Returns
    -------
    list of SequenceIndex
        One record per sequence, in input order. Sequences with no
        observed state get all-zero indices.

    Examples
    --------
    >>> idx = compute_sequence_indices([["A", "A", "B"]])
    >>> idx[0].complexity
    1
    """
    seq = as_sequence_array(data)
    return [
        _index_of(i, [s for s in row if s is not None])
        for i, row in enumerate(seq)
    ]


def indices_frame(indices: Sequence[SequenceIndex]) -> pd.DataFrame:
    """Per-sequence indices as a DataFrame."""
    return pd.DataFrame([asdict(idx) for idx in indices])


def summarize_indices(indices: Sequence[SequenceIndex]) -> pd.DataFrame:
    """
    Mean, standard deviation, min, max and median of every index.

    The standard deviation uses ``n - 1`` (``1`` for a single sequence).
    """
    rows = []
    for key, label in INDEX_LABELS.items():
        vals = np.array([getattr(idx, key) for idx in indices], dtype=np.float64)
        n = vals.size
        if n == 0:
            nan = float("nan")
            rows.append({"metric": label, "mean": nan, "sd": nan, "min": nan, "max": nan, "median": nan})
            continue
        mean = float(vals.mean())
        sd = math.sqrt(float(np.sum((vals - mean) ** 2)) / ((n - 1) or 1))
        rows.append(
            {
                "metric": label,
                "mean": mean,
                "sd": sd,
                "min": float(vals.min()),
                "max": float(vals.max()),
                "median": float(np.median(vals)),
            }
        )
    return pd.DataFrame(rows, columns=["metric", "mean", "sd", "min", "max", "median"])


def index_groups(
    indices: Sequence[SequenceIndex],
    group_labels: Sequence[str],
    index: str = "entropy",
) -> List[GroupSample]:
    """
    Split one index into groups for ``one_way_anova``/``kruskal_wallis``.

    Parameters
    ----------
    indices : sequence of SequenceIndex
    group_labels : sequence of str
        Group of each sequence, aligned with ``indices``.
    index : str, default "entropy"
        Index key, see ``INDEX_LABELS``.

    Returns
    -------
    list of GroupSample
        Groups in order of first appearance.
    """
    if index not in INDEX_LABELS:
        raise ValueError(f"Unknown index: {index}. Must be one of {list(INDEX_LABELS)}")
    if len(group_labels) != len(indices):
        raise ValueError(
            f"group_labels has {len(group_labels)} entries for {len(indices)} sequences"
        )
    grouped: Dict[str, List[float]] = {}
    for idx, label in zip(indices, group_labels):
        grouped.setdefault(str(label), []).append(float(getattr(idx, index)))
    return [GroupSample(label, values) for label, values in grouped.items()]
