"""
Permutation test for edge-wise differences between two transition networks.

Both networks must be built from sequence data over the same state labels.
Sequences of the two samples are pooled, reshuffled into groups of the
original sizes and re-aggregated each iteration; the per-edge absolute
differences form the empirical null distribution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..core.rng import SeededRNG
from ..core.transition import TransitionNetwork, compute_transitions_3d, compute_weights_from_3d
from .multiple_testing import ADJUST_METHODS, p_adjust

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeStat:
    """Per-edge result of the permutation test."""

    from_: str
    to: str
    diff_true: float
    effect_size: float
    p_value: float

    @property
    def edge_name(self) -> str:
        return f"{self.from_} -> {self.to}"


@dataclass
class PermutationResult:
    """
    Results from a two-sample permutation test.

    Attributes
    ----------
    edge_stats : list of EdgeStat
        One record per ordered state pair (diagonal included), column-major.
    diff_true : ndarray (n, n)
        Observed differences ``x.weights - y.weights``.
    diff_sig : ndarray (n, n)
        ``diff_true`` where the adjusted p-value is below ``level``, else 0.
    p_values : ndarray (n, n)
        Adjusted empirical p-values.
    effect_sizes : ndarray (n, n)
        ``diff_true / sd(permuted differences)``; NaN where that sd is 0.
    labels : list of str
    level : float
    iter : int
    adjust : str
    paired : bool
    """

    edge_stats: List[EdgeStat]
    diff_true: NDArray[np.float64]
    diff_sig: NDArray[np.float64]
    p_values: NDArray[np.float64]
    effect_sizes: NDArray[np.float64]
    labels: List[str] = field(default_factory=list)
    level: float = 0.05
    iter: int = 0
    adjust: str = "none"
    paired: bool = False

    @property
    def n_states(self) -> int:
        return len(self.labels)

    @property
    def significant_edges(self) -> List[EdgeStat]:
        return [e for e in self.edge_stats if e.p_value < self.level]

    def __str__(self) -> str:
        return (
            f"Permutation test (iter={self.iter}, adjust={self.adjust}): "
            f"{len(self.significant_edges)}/{len(self.edge_stats)} edges differ at {self.level}"
        )

    def summary(self) -> pd.DataFrame:
        """Edge table (edge name, observed difference, effect size, p-value)."""
        return pd.DataFrame(
            [[e.edge_name, e.diff_true, e.effect_size, e.p_value] for e in self.edge_stats],
            columns=["edge_name", "diff_true", "effect_size", "p_value"],
        )


def _empty_result(level: float, iter: int, adjust: str, paired: bool) -> PermutationResult:
    empty = np.zeros((0, 0), dtype=np.float64)
    return PermutationResult(
        edge_stats=[],
        diff_true=empty,
        diff_sig=empty.copy(),
        p_values=empty.copy(),
        effect_sizes=empty.copy(),
        labels=[],
        level=level,
        iter=iter,
        adjust=adjust,
        paired=paired,
    )


def _pad_columns(data: np.ndarray, width: int) -> np.ndarray:
    if data.shape[1] == width:
        return data
    out = np.full((data.shape[0], width), None, dtype=object)
    out[:, : data.shape[1]] = data
    return out


def permutation_test(
    x: TransitionNetwork,
    y: TransitionNetwork,
    iter: int = 1000,
    adjust: str = "none",
    level: float = 0.05,
    paired: bool = False,
    seed: Optional[int] = 42,
) -> PermutationResult:
    """
    Edge-wise permutation test between two networks.

    Parameters
    ----------
    x, y : TransitionNetwork
        Networks built from sequence data, with identical labels.
    iter : int, default 1000
        Number of permutations.
    adjust : str, default "none"
        Multiple-comparison adjustment over the n^2 edge p-values
        (column-major), see ``p_adjust``.
    level : float, default 0.05
        Significance level for ``diff_sig``.
    paired : bool, default False
        Swap sequence ``i`` of ``x`` with sequence ``i`` of ``y`` with
        probability 0.5 instead of reshuffling the pooled sample.
    seed : int, optional
        Seed for ``SeededRNG``.

    Returns
    -------
    PermutationResult
        Empty (no edges, 0x0 matrices) when the label sets differ.

    Raises
    ------
    ValueError
        If either network lacks sequence data, ``adjust`` is unknown, or
        ``paired`` is requested for samples of different sizes.
    """
    if x.data is None or y.data is None:
        raise ValueError("Both networks must have sequence data for the permutation test")
    if adjust not in ADJUST_METHODS:
        raise ValueError(f"Unknown adjustment method: {adjust}. Must be one of {list(ADJUST_METHODS)}")
    if iter < 1:
        raise ValueError(f"iter must be >= 1, got {iter}")

    if list(x.labels) != list(y.labels):
        logger.warning(
            f"Permutation test skipped: label sets differ ({x.labels} vs {y.labels})"
        )
        return _empty_result(level, iter, adjust, paired)

    labels = list(x.labels)
    a = len(labels)
    n_x = x.data.shape[0]
    n_y = y.data.shape[0]
    if paired and n_x != n_y:
        raise ValueError(
            f"Paired permutation test requires equal group sizes, got {n_x} and {n_y}"
        )

    width = max(x.data.shape[1], y.data.shape[1])
    combined = np.vstack([_pad_columns(x.data, width), _pad_columns(y.data, width)])
    n_xy = n_x + n_y
    scaling = x.scaling or None
    trans = compute_transitions_3d(combined, labels, type_=x.type_, beta=x.beta)

    diff_true = x.weights - y.weights
    abs_true = np.abs(diff_true)

    logger.debug(
        f"Permutation test: iter={iter}, n_x={n_x}, n_y={n_y}, states={a}, "
        f"paired={paired}, seed={seed}"
    )

    rng = SeededRNG(seed)
    counts = np.zeros((a, a), dtype=np.int64)
    perm_sum = np.zeros((a, a), dtype=np.float64)
    perm_sq_sum = np.zeros((a, a), dtype=np.float64)
    for _ in range(iter):
        if paired:
            perm = np.arange(n_xy)
            for p in range(n_x):
                if rng.random() < 0.5:
                    perm[p], perm[n_x + p] = perm[n_x + p], perm[p]
        else:
            perm = rng.permutation(n_xy)
        w_x = compute_weights_from_3d(trans[perm[:n_x]], type_=x.type_, scaling=scaling)
        w_y = compute_weights_from_3d(trans[perm[n_x:]], type_=x.type_, scaling=scaling)
        diff = w_x - w_y
        perm_sum += diff
        perm_sq_sum += diff * diff
        counts += np.abs(diff) >= abs_true

    raw_p = (counts + 1) / (iter + 1)
    # adjustment runs over the column-major flattening
    p_values = p_adjust(raw_p.flatten(order="F"), method=adjust).reshape((a, a), order="F")

    mean = perm_sum / iter
    if iter > 1:
        variance = np.maximum(perm_sq_sum / iter - mean * mean, 0.0) * iter / (iter - 1)
        sd = np.sqrt(variance)
    else:
        sd = np.zeros((a, a))
    with np.errstate(divide="ignore", invalid="ignore"):
        effect_sizes = np.where(sd > 0, diff_true / np.where(sd > 0, sd, 1.0), np.nan)

    diff_sig = np.where(p_values < level, diff_true, 0.0)

    edge_stats = [
        EdgeStat(
            from_=labels[i],
            to=labels[j],
            diff_true=float(diff_true[i, j]),
            effect_size=float(effect_sizes[i, j]),
            p_value=float(p_values[i, j]),
        )
        for j in range(a)
        for i in range(a)
    ]

    return PermutationResult(
        edge_stats=edge_stats,
        diff_true=diff_true,
        diff_sig=diff_sig,
        p_values=p_values,
        effect_sizes=effect_sizes,
        labels=labels,
        level=level,
        iter=iter,
        adjust=adjust,
        paired=paired,
    )
