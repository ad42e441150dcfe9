"""
Bootstrap edge-stability for transition networks.

Per-sequence transition contributions are computed once; each iteration
resamples sequences with replacement and re-aggregates the contributions,
so the network is never rebuilt from raw data inside the loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..core.rng import SeededRNG
from ..core.transition import TransitionNetwork, compute_transitions_3d, compute_weights_from_3d

logger = logging.getLogger(__name__)

BootstrapMethod = Literal["stability", "threshold"]
BOOTSTRAP_METHODS = ("stability", "threshold")


@dataclass(frozen=True)
class BootstrapEdge:
    """One structurally non-zero edge of the bootstrapped network."""

    from_: str
    to: str
    weight: float
    mean_weight: float
    p_value: float
    significant: bool
    cr_lower: float
    cr_upper: float
    ci_lower: float
    ci_upper: float


@dataclass
class BootstrapResult:
    """
    Results from bootstrap edge-stability testing.

    Attributes
    ----------
    edges : list of BootstrapEdge
        Non-zero edges of the original network, column-major order.
    model : TransitionNetwork
        Copy of the original network with non-significant edges zeroed.
    weights : ndarray (n, n)
        Original weights recomputed from the sequence data.
    weights_mean, weights_sd : ndarray (n, n)
        Mean and standard deviation of the bootstrap weights.
    p_values : ndarray (n, n)
        Empirical p-values ``(count + 1) / (iter + 1)``.
    cr_lower, cr_upper : ndarray (n, n)
        Consistency range, original weight times the low/high multipliers.
    ci_lower, ci_upper : ndarray (n, n)
        Percentile confidence interval at ``level/2`` and ``1 - level/2``.
    labels : list of str
    method : str
    iter : int
    level : float
    threshold : float
        Weight threshold used by the ``threshold`` method.
    """

    edges: List[BootstrapEdge]
    model: TransitionNetwork
    weights: NDArray[np.float64]
    weights_mean: NDArray[np.float64]
    weights_sd: NDArray[np.float64]
    p_values: NDArray[np.float64]
    cr_lower: NDArray[np.float64]
    cr_upper: NDArray[np.float64]
    ci_lower: NDArray[np.float64]
    ci_upper: NDArray[np.float64]
    labels: List[str]
    method: str
    iter: int
    level: float
    threshold: float

    @property
    def weights_sig(self) -> NDArray[np.float64]:
        """Weights with non-significant edges zeroed."""
        return self.model.weights

    @property
    def significant_edges(self) -> List[BootstrapEdge]:
        return [e for e in self.edges if e.significant]

    def __str__(self) -> str:
        return (
            f"Bootstrap ({self.method}, iter={self.iter}): "
            f"{len(self.significant_edges)}/{len(self.edges)} edges significant at {self.level}"
        )

    def summary(self) -> pd.DataFrame:
        """Edge table in column-major order."""
        columns = [
            "from", "to", "weight", "mean_weight", "p_value", "significant",
            "cr_lower", "cr_upper", "ci_lower", "ci_upper",
        ]
        rows = [
            [
                e.from_, e.to, e.weight, e.mean_weight, e.p_value, e.significant,
                e.cr_lower, e.cr_upper, e.ci_lower, e.ci_upper,
            ]
            for e in self.edges
        ]
        return pd.DataFrame(rows, columns=columns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "iter": self.iter,
            "level": self.level,
            "threshold": self.threshold,
            "n_edges": len(self.edges),
            "n_significant": len(self.significant_edges),
        }


def bootstrap_tna(
    model: TransitionNetwork,
    iter: int = 1000,
    level: float = 0.05,
    method: BootstrapMethod = "stability",
    threshold: Optional[float] = None,
    consistency_range: Tuple[float, float] = (0.75, 1.25),
    seed: Optional[int] = 42,
) -> BootstrapResult:
    """
    Bootstrap a transition network to assess edge stability.

    Parameters
    ----------
    model : TransitionNetwork
        Network built from sequence data (``model.data`` must be set).
    iter : int, default 1000
        Number of bootstrap samples.
    level : float, default 0.05
        Significance level; also sets the confidence interval width.
    method : {"stability", "threshold"}, default "stability"
        ``stability`` counts bootstrap weights outside the consistency
        range; ``threshold`` counts bootstrap weights below ``threshold``.
    threshold : float, optional
        Weight threshold for the ``threshold`` method. Defaults to the 10th
        percentile of the original weights.
    consistency_range : (float, float), default (0.75, 1.25)
        Low/high multipliers of the original weight.
    seed : int, optional
        Seed for ``SeededRNG``.

    Returns
    -------
    BootstrapResult

    Raises
    ------
    ValueError
        If the network has no sequence data, ``iter < 1`` or ``method`` is
        unknown.

    Examples
    --------
    >>> net = tna(sequences)
    >>> boot = bootstrap_tna(net, iter=200, seed=1)
    >>> boot.summary().head()
    """
    if model.data is None:
        raise ValueError("Network must have sequence data for bootstrap")
    if method not in BOOTSTRAP_METHODS:
        raise ValueError(f"Unknown bootstrap method: {method}. Must be one of {list(BOOTSTRAP_METHODS)}")
    if iter < 1:
        raise ValueError(f"iter must be >= 1, got {iter}")
    if not 0 < level < 1:
        raise ValueError(f"level must be in (0, 1), got {level}")
    lo_mult, hi_mult = consistency_range

    labels = list(model.labels)
    a = len(labels)
    scaling = model.scaling or None

    trans = compute_transitions_3d(model.data, labels, type_=model.type_, beta=model.beta)
    n = trans.shape[0]
    weights = compute_weights_from_3d(trans, type_=model.type_, scaling=scaling)

    if threshold is None:
        threshold = float(np.quantile(weights, 0.1)) if weights.size else 0.0

    logger.debug(
        f"Bootstrap: method={method}, iter={iter}, sequences={n}, states={a}, seed={seed}"
    )

    rng = SeededRNG(seed)
    boot = np.empty((iter, a, a), dtype=np.float64)
    counts = np.zeros((a, a), dtype=np.int64)
    for it in range(iter):
        idx = rng.choice(n, n)
        wb = compute_weights_from_3d(trans[idx], type_=model.type_, scaling=scaling)
        boot[it] = wb
        if method == "stability":
            counts += (wb <= weights * lo_mult) | (wb >= weights * hi_mult)
        else:
            counts += wb < threshold

    p_values = (counts + 1) / (iter + 1)
    weights_mean = boot.mean(axis=0)
    weights_sd = boot.std(axis=0, ddof=1) if iter > 1 else np.zeros((a, a))
    ci_lower = np.quantile(boot, level / 2, axis=0)
    ci_upper = np.quantile(boot, 1 - level / 2, axis=0)
    cr_lower = weights * lo_mult
    cr_upper = weights * hi_mult

    significant = p_values < level
    pruned = model.with_weights(np.where(significant, weights, 0.0))

    edges = []
    # column-major
    for j in range(a):
        for i in range(a):
            if weights[i, j] <= 0:
                continue
            edges.append(
                BootstrapEdge(
                    from_=labels[i],
                    to=labels[j],
                    weight=float(weights[i, j]),
                    mean_weight=float(weights_mean[i, j]),
                    p_value=float(p_values[i, j]),
                    significant=bool(significant[i, j]),
                    cr_lower=float(cr_lower[i, j]),
                    cr_upper=float(cr_upper[i, j]),
                    ci_lower=float(ci_lower[i, j]),
                    ci_upper=float(ci_upper[i, j]),
                )
            )

    logger.debug(f"Bootstrap: {int(significant[weights > 0].sum())}/{len(edges)} edges significant")

    return BootstrapResult(
        edges=edges,
        model=pruned,
        weights=weights,
        weights_mean=weights_mean,
        weights_sd=weights_sd,
        p_values=p_values,
        cr_lower=cr_lower,
        cr_upper=cr_upper,
        ci_lower=ci_lower,
        ci_upper=ci_upper,
        labels=labels,
        method=method,
        iter=iter,
        level=level,
        threshold=float(threshold),
    )
