"""
Split-half reliability of transition networks.

Each iteration splits the sequences into two random halves, builds one
network per half and compares the pair with the full metric suite of
``comparison.compare_weight_matrices``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..core.rng import SeededRNG
from ..core.transition import (
    BUILDERS,
    SequenceInput,
    TransitionNetwork,
    as_sequence_array,
    resolve_model_type,
)
from .comparison import METRIC_CATALOG, METRIC_KEYS, compare_weight_matrices

logger = logging.getLogger(__name__)

Builder = Callable[[NDArray], TransitionNetwork]


@dataclass(frozen=True)
class ReliabilityMetricSummary:
    """Descriptive statistics of one metric over the finite iterations."""

    key: str
    metric: str
    category: str
    mean: float
    sd: float
    median: float
    min: float
    max: float
    q25: float
    q75: float
    n_finite: int


@dataclass
class ReliabilityResult:
    """
    Results from split-half reliability analysis.

    Attributes
    ----------
    iterations : dict
        Metric key -> ndarray of per-iteration values (NaN for iterations
        where a half failed to build).
    summary : list of ReliabilityMetricSummary
        One record per metric, in catalog order.
    iter : int
    split : float
    model_type : str
    n_failed : int
        Number of iterations where a half failed to build.
    """

    iterations: Dict[str, NDArray[np.float64]]
    summary: List[ReliabilityMetricSummary]
    iter: int
    split: float
    model_type: str
    n_failed: int = 0

    def __str__(self) -> str:
        return (
            f"Split-half reliability ({self.model_type}, iter={self.iter}, "
            f"split={self.split}, failed={self.n_failed})"
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Summary table in catalog order."""
        return pd.DataFrame(
            [
                {
                    "key": s.key,
                    "metric": s.metric,
                    "category": s.category,
                    "mean": s.mean,
                    "sd": s.sd,
                    "median": s.median,
                    "min": s.min,
                    "max": s.max,
                    "q25": s.q25,
                    "q75": s.q75,
                }
                for s in self.summary
            ]
        )

    def iterations_frame(self) -> pd.DataFrame:
        """Per-iteration values, one column per metric."""
        return pd.DataFrame({key: self.iterations[key] for key in METRIC_KEYS})


def _summarize(values: NDArray[np.float64]) -> Dict[str, float]:
    vals = values[np.isfinite(values)]
    if vals.size == 0:
        nan = float("nan")
        return dict(mean=nan, sd=nan, median=nan, min=nan, max=nan, q25=nan, q75=nan)
    return dict(
        mean=float(vals.mean()),
        sd=float(vals.std(ddof=1)) if vals.size > 1 else float("nan"),
        median=float(np.median(vals)),
        min=float(vals.min()),
        max=float(vals.max()),
        q25=float(np.quantile(vals, 0.25)),
        q75=float(np.quantile(vals, 0.75)),
    )


def reliability_analysis(
    data: Union[SequenceInput, TransitionNetwork],
    model_type: str = "relative",
    iter: int = 100,
    split: float = 0.5,
    beta: float = 0.1,
    seed: Optional[int] = 42,
    builder: Optional[Builder] = None,
) -> ReliabilityResult:
    """
    Split-half reliability analysis.

    Parameters
    ----------
    data : sequence data or TransitionNetwork
        Sequences (list of sequences, 2-D array or wide DataFrame), or a
        network carrying its sequence data.
    model_type : str, default "relative"
        Network type or alias (``tna``, ``ftna``, ``ctna``, ``atna``).
    iter : int, default 100
        Number of random splits.
    split : float, default 0.5
        Fraction of sequences in the first half.
    beta : float, default 0.1
        Decay rate, used for attention networks only.
    seed : int, optional
        Seed for ``SeededRNG``.
    builder : callable, optional
        Overrides the builder chosen by ``model_type``; called with the
        sequence array of one half. A ``ValueError`` from it marks the
        iteration as failed.

    Returns
    -------
    ReliabilityResult

    Raises
    ------
    ValueError
        If there are fewer than 4 sequences, or either half would hold
        fewer than 2 sequences.

    Examples
    --------
    >>> rel = reliability_analysis(sequences, model_type="tna", iter=50)
    >>> rel.to_dataframe()[["metric", "mean"]]
    """
    if isinstance(data, TransitionNetwork):
        if data.data is None:
            raise ValueError("Network must have sequence data for reliability analysis")
        seq = data.data
    else:
        seq = as_sequence_array(data)

    n = seq.shape[0]
    if n < 4:
        raise ValueError(f"Need at least 4 sequences for reliability analysis, got {n}")
    n_a = int(math.floor(n * split))
    if n_a < 2 or n - n_a < 2:
        raise ValueError(
            f"Each split half must have at least 2 sequences (split={split}, n={n})"
        )

    model_type = resolve_model_type(model_type)
    if builder is None:
        build = BUILDERS[model_type]
        if model_type == "attention":
            builder = lambda d: build(d, beta=beta)  # noqa: E731
        else:
            builder = build

    logger.debug(
        f"Reliability: model_type={model_type}, iter={iter}, split={split}, "
        f"sequences={n}, seed={seed}"
    )

    rng = SeededRNG(seed)
    values = {key: np.full(iter, np.nan) for key in METRIC_KEYS}
    n_failed = 0
    all_idx = np.arange(n)
    for it in range(iter):
        idx_a = rng.choice_without_replacement(n, n_a)
        mask = np.ones(n, dtype=bool)
        mask[idx_a] = False
        idx_b = all_idx[mask]
        try:
            model_a = builder(seq[idx_a])
            model_b = builder(seq[idx_b])
        except ValueError as exc:
            n_failed += 1
            logger.debug(f"Reliability iteration {it} failed to build: {exc}")
            continue
        metrics = compare_weight_matrices(model_a, model_b)
        for key in METRIC_KEYS:
            values[key][it] = metrics[key]

    if n_failed:
        logger.warning(f"Reliability: {n_failed}/{iter} iterations failed to build a half")

    summary = [
        ReliabilityMetricSummary(
            key=m.key,
            metric=m.label,
            category=m.category,
            n_finite=int(np.isfinite(values[m.key]).sum()),
            **_summarize(values[m.key]),
        )
        for m in METRIC_CATALOG
    ]

    return ReliabilityResult(
        iterations=values,
        summary=summary,
        iter=iter,
        split=split,
        model_type=model_type,
        n_failed=n_failed,
    )
