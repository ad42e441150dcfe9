"""
Centrality stability via case-dropping subsampling.

For each drop proportion, a share of the sequences is removed at random,
the network is re-aggregated from the remaining per-sequence contributions
and its centralities are correlated with the original ones. The CS
coefficient of a measure is the largest drop proportion at which at least
``certainty`` of those correlations reach ``threshold``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..core.rng import SeededRNG
from ..core.transition import TransitionNetwork, compute_transitions_3d, compute_weights_from_3d
from ..networks.centrality import centralities
from .comparison import EPS, pearson_corr

logger = logging.getLogger(__name__)

DEFAULT_MEASURES = ("InStrength", "OutStrength", "Betweenness")
DEFAULT_DROP_PROPS = (0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9)


@dataclass
class StabilityResult:
    """
    Results from centrality stability estimation.

    Attributes
    ----------
    cs_coefficients : dict
        Measure -> CS coefficient (0 when never stable).
    mean_correlations : dict
        Measure -> ndarray of mean correlation per drop proportion (NaN
        where no subsample was drawn).
    drop_props : list of float
    threshold : float
    certainty : float
    iter : int
    """

    cs_coefficients: Dict[str, float]
    mean_correlations: Dict[str, NDArray[np.float64]]
    drop_props: List[float]
    threshold: float
    certainty: float
    iter: int

    def __str__(self) -> str:
        parts = ", ".join(f"{m}={cs:.2f}" for m, cs in self.cs_coefficients.items())
        return f"CS coefficients: {parts}"

    def summary(self) -> pd.DataFrame:
        """Mean correlation per drop proportion (rows) and measure (columns)."""
        return pd.DataFrame(self.mean_correlations, index=pd.Index(self.drop_props, name="drop_prop"))


def estimate_cs(
    model: TransitionNetwork,
    measures: Sequence[str] = DEFAULT_MEASURES,
    iter: int = 500,
    drop_props: Sequence[float] = DEFAULT_DROP_PROPS,
    threshold: float = 0.7,
    certainty: float = 0.95,
    seed: Optional[int] = 42,
) -> StabilityResult:
    """
    Estimate the centrality stability (CS) coefficient of each measure.

    Parameters
    ----------
    model : TransitionNetwork
        Network built from sequence data.
    measures : sequence of str
        Centrality measures, see ``networks.AVAILABLE_MEASURES``.
    iter : int, default 500
        Subsamples per drop proportion.
    drop_props : sequence of float
        Proportions of sequences to drop.
    threshold : float, default 0.7
        Correlation a subsample must reach to count as stable.
    certainty : float, default 0.95
        Required share of stable subsamples.
    seed : int, optional
        Seed for ``SeededRNG``.

    Returns
    -------
    StabilityResult
        Measures with zero variance in the original network get CS 0 and
        NaN mean correlations.
    """
    if model.data is None:
        raise ValueError("Network must have sequence data for centrality stability")
    measures = list(measures)
    drop_props = [float(p) for p in drop_props]

    labels = list(model.labels)
    scaling = model.scaling or None
    trans = compute_transitions_3d(model.data, labels, type_=model.type_, beta=model.beta)
    n = trans.shape[0]

    original = centralities(model, measures)
    valid = [m for m in measures if np.var(original[m]) > EPS]
    for m in measures:
        if m not in valid:
            logger.debug(f"Centrality stability: {m} has zero variance, CS set to 0")

    logger.debug(
        f"Centrality stability: measures={measures}, iter={iter}, sequences={n}, seed={seed}"
    )

    rng = SeededRNG(seed)
    corrs: Dict[str, List[List[float]]] = {m: [[] for _ in drop_props] for m in valid}
    if valid:
        for j, dp in enumerate(drop_props):
            n_drop = int(math.floor(n * dp))
            n_keep = n - n_drop
            if n_drop == 0 or n_keep < 2:
                continue
            for _ in range(iter):
                keep = rng.choice_without_replacement(n, n_keep)
                w_sub = compute_weights_from_3d(trans[keep], type_=model.type_, scaling=scaling)
                sub = centralities(model.with_weights(w_sub), valid)
                for m in valid:
                    r = pearson_corr(original[m], sub[m])
                    corrs[m][j].append(0.0 if math.isnan(r) else r)

    cs_coefficients: Dict[str, float] = {}
    mean_correlations: Dict[str, NDArray[np.float64]] = {}
    for m in measures:
        if m not in valid:
            cs_coefficients[m] = 0.0
            mean_correlations[m] = np.full(len(drop_props), np.nan)
            continue
        means = np.full(len(drop_props), np.nan)
        cs = 0.0
        for j, values in enumerate(corrs[m]):
            if not values:
                continue
            arr = np.asarray(values)
            means[j] = arr.mean()
            if np.mean(arr >= threshold) >= certainty:
                cs = drop_props[j]
        cs_coefficients[m] = cs
        mean_correlations[m] = means

    return StabilityResult(
        cs_coefficients=cs_coefficients,
        mean_correlations=mean_correlations,
        drop_props=drop_props,
        threshold=threshold,
        certainty=certainty,
        iter=iter,
    )
