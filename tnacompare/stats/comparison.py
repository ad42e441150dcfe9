"""
Weighted-matrix comparison suite.

Twenty-two similarity and difference metrics between two equally sized
weight matrices, in five categories. Vector metrics work on the full
column-major flattening of each matrix (diagonal included); Rank Agreement
works on row-to-row differences and the RV coefficient on the
column-centred matrices. Distance correlation and RV use the biased
estimators, so distance correlation can be negative.

Any denominator below ``1e-14`` in magnitude makes that metric NaN; a
dimension mismatch makes every metric NaN.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from scipy.stats import rankdata

from ..core.transition import TransitionNetwork


EPS = 1e-14

CATEGORIES = ("Deviations", "Correlations", "Dissimilarities", "Similarities", "Pattern")


@dataclass(frozen=True)
class MetricRecord:
    """Catalog entry: stable key, display label and category."""

    key: str
    label: str
    category: str


# Row order for every downstream table
METRIC_CATALOG: Tuple[MetricRecord, ...] = (
    # Deviations (lower = more similar)
    MetricRecord("mad", "Mean Abs. Diff.", "Deviations"),
    MetricRecord("median_ad", "Median Abs. Diff.", "Deviations"),
    MetricRecord("rmsd", "RMS Diff.", "Deviations"),
    MetricRecord("max_ad", "Max Abs. Diff.", "Deviations"),
    MetricRecord("rel_mad", "Rel. MAD", "Deviations"),
    MetricRecord("cv_ratio", "CV Ratio", "Deviations"),
    # Correlations (higher = more similar)
    MetricRecord("pearson", "Pearson", "Correlations"),
    MetricRecord("spearman", "Spearman", "Correlations"),
    MetricRecord("kendall", "Kendall", "Correlations"),
    MetricRecord("dcor", "Distance Corr.", "Correlations"),
    # Dissimilarities (lower = more similar)
    MetricRecord("euclidean", "Euclidean", "Dissimilarities"),
    MetricRecord("manhattan", "Manhattan", "Dissimilarities"),
    MetricRecord("canberra", "Canberra", "Dissimilarities"),
    MetricRecord("braycurtis", "Bray-Curtis", "Dissimilarities"),
    MetricRecord("frobenius", "Frobenius", "Dissimilarities"),
    # Similarities (higher = more similar)
    MetricRecord("cosine", "Cosine", "Similarities"),
    MetricRecord("jaccard", "Jaccard", "Similarities"),
    MetricRecord("dice", "Dice", "Similarities"),
    MetricRecord("overlap", "Overlap", "Similarities"),
    MetricRecord("rv", "RV", "Similarities"),
    # Pattern
    MetricRecord("rank_agree", "Rank Agreement", "Pattern"),
    MetricRecord("sign_agree", "Sign Agreement", "Pattern"),
)

METRIC_KEYS: Tuple[str, ...] = tuple(m.key for m in METRIC_CATALOG)

MatrixLike = Union[TransitionNetwork, NDArray[np.float64], List[List[float]]]


def metrics_by_category(category: str) -> List[MetricRecord]:
    """Catalog entries of one category, in catalog order."""
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category}. Must be one of {list(CATEGORIES)}")
    return [m for m in METRIC_CATALOG if m.category == category]


def nan_result() -> Dict[str, float]:
    """All-NaN comparison result."""
    return {key: float("nan") for key in METRIC_KEYS}


def _ratio(num: float, den: float) -> float:
    return float(num / den) if abs(den) >= EPS else float("nan")


def _as_matrix(x: MatrixLike) -> NDArray[np.float64]:
    if isinstance(x, TransitionNetwork):
        return x.weights
    W = np.asarray(x, dtype=np.float64)
    if W.ndim != 2 or W.shape[0] != W.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {W.shape}")
    return W


def pearson_corr(x: NDArray[np.float64], y: NDArray[np.float64]) -> float:
    """Pearson correlation; NaN for fewer than 2 points or zero variance."""
    if x.size < 2:
        return float("nan")
    dx = x - x.mean()
    dy = y - y.mean()
    return _ratio(np.sum(dx * dy), np.sqrt(np.sum(dx * dx) * np.sum(dy * dy)))


def spearman_corr(x: NDArray[np.float64], y: NDArray[np.float64]) -> float:
    """Pearson correlation of mid-ranks."""
    if x.size < 2:
        return float("nan")
    return pearson_corr(rankdata(x, method="average"), rankdata(y, method="average"))


def kendall_tau_b(x: NDArray[np.float64], y: NDArray[np.float64]) -> float:
    """Kendall's tau-b: (C - D) / sqrt((n0 - Tx)(n0 - Ty))."""
    m = x.size
    if m < 2:
        return float("nan")
    i, j = np.triu_indices(m, k=1)
    sx = np.sign(x[i] - x[j])
    sy = np.sign(y[i] - y[j])
    concordant = np.count_nonzero((sx == sy) & (sx != 0))
    discordant = np.count_nonzero((sx != sy) & (sx != 0) & (sy != 0))
    tx = np.count_nonzero(sx == 0)
    ty = np.count_nonzero(sy == 0)
    n0 = m * (m - 1) / 2.0
    return _ratio(concordant - discordant, np.sqrt((n0 - tx) * (n0 - ty)))


def _double_centre(v: NDArray[np.float64]) -> NDArray[np.float64]:
    d = np.abs(v[:, None] - v[None, :])
    row_means = d.mean(axis=1)
    return d - row_means[:, None] - row_means[None, :] + row_means.mean()


def distance_corr(x: NDArray[np.float64], y: NDArray[np.float64]) -> float:
    """Biased distance correlation ``v_xy / sqrt(v_x * v_y)`` (not square-rooted)."""
    if x.size < 2:
        return float("nan")
    A = _double_centre(x)
    B = _double_centre(y)
    v_xy = np.mean(A * B)
    v_x = np.mean(A * A)
    v_y = np.mean(B * B)
    return _ratio(v_xy, np.sqrt(v_x * v_y))


def rv_coefficient(X: NDArray[np.float64], Y: NDArray[np.float64]) -> float:
    """RV coefficient on column-centred matrices via ``X X^T`` and ``Y Y^T``."""
    xc = X - X.mean(axis=0, keepdims=True)
    yc = Y - Y.mean(axis=0, keepdims=True)
    xx = xc @ xc.T
    yy = yc @ yc.T
    # trace(P @ Q) without forming the product
    tr_xy = np.sum(xx * yy.T)
    tr_xx = np.sum(xx * xx.T)
    tr_yy = np.sum(yy * yy.T)
    return _ratio(tr_xy, np.sqrt(tr_xx * tr_yy))


def compare_weight_matrices(a: MatrixLike, b: MatrixLike) -> Dict[str, float]:
    """
    Compare two weight matrices across all 22 catalog metrics.

    Parameters
    ----------
    a, b : TransitionNetwork or array-like (n, n)
        Networks or raw weight matrices.

    Returns
    -------
    dict
        Metric key -> value, in catalog order. Metrics with an undefined
        denominator are NaN; all metrics are NaN when the two matrices do
        not share ``n`` (or ``n == 0``).

    Examples
    --------
    >>> A = [[0, .6, .4], [.3, 0, .7], [.5, .5, 0]]
    >>> B = [[0, .4, .6], [.5, 0, .5], [.3, .7, 0]]
    >>> round(compare_weight_matrices(A, B)["pearson"], 6)
    0.8
    """
    X = _as_matrix(a)
    Y = _as_matrix(b)
    n = X.shape[0]
    if Y.shape[0] != n or n == 0:
        return nan_result()

    # column-major, diagonal included
    x = X.flatten(order="F")
    y = Y.flatten(order="F")
    abs_x = np.abs(x)
    abs_y = np.abs(y)
    abs_diff = np.abs(x - y)

    mean_x = float(x.mean())
    mean_y = float(y.mean())
    std_x = float(np.std(x, ddof=1)) if x.size > 1 else float("nan")
    std_y = float(np.std(y, ddof=1)) if y.size > 1 else float("nan")

    out: Dict[str, float] = {}

    # Deviations
    out["mad"] = float(abs_diff.mean())
    out["median_ad"] = float(np.median(abs_diff))
    out["rmsd"] = float(np.sqrt(np.mean(abs_diff ** 2)))
    out["max_ad"] = float(abs_diff.max())
    out["rel_mad"] = _ratio(out["mad"], abs_y.mean())
    if abs(mean_x) >= EPS and abs(std_y) >= EPS:
        out["cv_ratio"] = float((std_x * mean_y) / (mean_x * std_y))
    else:
        out["cv_ratio"] = float("nan")

    # Correlations
    out["pearson"] = pearson_corr(x, y)
    out["spearman"] = spearman_corr(x, y)
    out["kendall"] = kendall_tau_b(x, y)
    out["dcor"] = distance_corr(x, y)

    # Dissimilarities
    euclidean = float(np.sqrt(np.sum(abs_diff ** 2)))
    manhattan = float(abs_diff.sum())
    both = (abs_x > 0) & (abs_y > 0)
    out["euclidean"] = euclidean
    out["manhattan"] = manhattan
    out["canberra"] = float(np.sum(abs_diff[both] / (abs_x[both] + abs_y[both])))
    out["braycurtis"] = _ratio(manhattan, np.sum(abs_x + abs_y))
    out["frobenius"] = _ratio(euclidean, np.sqrt(n / 2.0))

    # Similarities
    out["cosine"] = _ratio(np.sum(x * y), np.sqrt(np.sum(x * x) * np.sum(y * y)))
    min_sum = np.sum(np.minimum(abs_x, abs_y))
    max_sum = np.sum(np.maximum(abs_x, abs_y))
    sum_abs_x = np.sum(abs_x)
    sum_abs_y = np.sum(abs_y)
    out["jaccard"] = _ratio(min_sum, max_sum)
    out["dice"] = _ratio(2.0 * min_sum, sum_abs_x + sum_abs_y)
    out["overlap"] = _ratio(min_sum, min(sum_abs_x, sum_abs_y))
    out["rv"] = rv_coefficient(X, Y)

    # Pattern
    if n > 1:
        row_diff_x = np.sign(np.diff(X, axis=0))
        row_diff_y = np.sign(np.diff(Y, axis=0))
        out["rank_agree"] = float(np.mean(row_diff_x == row_diff_y))
    else:
        out["rank_agree"] = float("nan")
    out["sign_agree"] = float(np.mean(np.sign(x) == np.sign(y)))

    return {key: out[key] for key in METRIC_KEYS}


def comparison_table(result: Dict[str, float]) -> pd.DataFrame:
    """Comparison result as a DataFrame (key, metric, category, value) in catalog order."""
    return pd.DataFrame(
        [
            {"key": m.key, "metric": m.label, "category": m.category, "value": result.get(m.key, float("nan"))}
            for m in METRIC_CATALOG
        ],
        columns=["key", "metric", "category", "value"],
    )
