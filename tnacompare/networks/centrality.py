"""
Node centralities of transition networks.

Strengths are read directly off the weight matrix; path-based measures go
through networkx with edge distance ``1 / weight``.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

import networkx as nx
import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..core.transition import TransitionNetwork


AVAILABLE_MEASURES = ("InStrength", "OutStrength", "Betweenness")


def _with_distance(G: nx.DiGraph) -> nx.DiGraph:
    for _, _, d in G.edges(data=True):
        d["distance"] = 1.0 / d["weight"]
    return G


def compute_betweenness(network: TransitionNetwork, loops: bool = False) -> NDArray[np.float64]:
    """
    Unnormalised weighted betweenness, in label order.

    Only positive weights become edges; shortest paths use ``1 / weight``.
    """
    W = np.where(network.weights > 0, network.weights, 0.0)
    G = _with_distance(network.with_weights(W).as_networkx(loops=loops))
    if G.number_of_edges() == 0:
        return np.zeros(network.n_states)
    bc = nx.betweenness_centrality(G, weight="distance", normalized=False)
    return np.array([bc[label] for label in network.labels], dtype=np.float64)


def centralities(
    network: TransitionNetwork,
    measures: Optional[Sequence[str]] = None,
    loops: bool = False,
) -> Dict[str, NDArray[np.float64]]:
    """
    Compute node centralities.

    Parameters
    ----------
    network : TransitionNetwork
    measures : sequence of str, optional
        Subset of ``AVAILABLE_MEASURES``; all of them by default.
    loops : bool, default False
        Count self-loop weights.

    Returns
    -------
    dict
        Measure name -> ndarray of length ``n_states`` in label order.
    """
    measures = list(measures) if measures is not None else list(AVAILABLE_MEASURES)
    unknown = [m for m in measures if m not in AVAILABLE_MEASURES]
    if unknown:
        raise ValueError(f"Unknown centrality measure(s): {unknown}. Must be in {list(AVAILABLE_MEASURES)}")

    W = network.weights.copy()
    if not loops:
        np.fill_diagonal(W, 0.0)

    out: Dict[str, NDArray[np.float64]] = {}
    for m in measures:
        if m == "InStrength":
            out[m] = W.sum(axis=0)
        elif m == "OutStrength":
            out[m] = W.sum(axis=1)
        else:
            out[m] = compute_betweenness(network, loops=loops)
    return out


def centrality_frame(network: TransitionNetwork, measures: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Centralities as a DataFrame indexed by state label."""
    return pd.DataFrame(centralities(network, measures), index=network.labels)
