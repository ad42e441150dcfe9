"""Transition network construction from categorical sequence data."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Sequence, Union

import networkx as nx
import numpy as np
import pandas as pd
from numpy.typing import NDArray
from scipy.stats import rankdata


MODEL_TYPES = ("relative", "frequency", "co-occurrence", "attention")
SCALINGS = ("minmax", "max", "rank")

SequenceInput = Union[pd.DataFrame, NDArray, Sequence[Sequence[object]]]


@dataclass(eq=False)
class TransitionNetwork:
    """A weighted transition network over a fixed set of state labels.

    The network is treated as read-only input by every estimator; pruned or
    resampled variants are always new instances.

    Attributes
    ----------
    weights : ndarray (n, n)
        Transition weights, rows are the source state.
    inits : ndarray (n,)
        Initial-state probabilities.
    labels : list of str
        State labels, in matrix order.
    data : ndarray (s, p) of object, optional
        Sequence data the network was built from (``None`` marks missing
        positions). ``None`` when the network was built from a matrix.
    type_ : str
        Model type, one of ``relative``, ``frequency``, ``co-occurrence``,
        ``attention``.
    scaling : list of str
        Scaling steps applied after the weights were aggregated.
    beta : float
        Decay rate used by the attention model.
    """

    weights: NDArray[np.float64]
    inits: NDArray[np.float64]
    labels: List[str]
    data: Optional[NDArray] = None
    type_: str = "relative"
    scaling: List[str] = field(default_factory=list)
    beta: float = 0.1

    def __post_init__(self):
        self.weights = np.asarray(self.weights, dtype=np.float64)
        self.inits = np.asarray(self.inits, dtype=np.float64)
        self.labels = [str(lab) for lab in self.labels]
        n = len(self.labels)
        if self.weights.shape != (n, n):
            raise ValueError(
                f"weights must be {n}x{n} to match {n} labels, got {self.weights.shape}"
            )
        if self.inits.shape != (n,):
            raise ValueError(f"inits must have length {n}, got {self.inits.shape}")

    @property
    def n_states(self) -> int:
        """Number of states"""
        return len(self.labels)

    @property
    def n_sequences(self) -> int:
        """Number of sequences the network was built from (0 without data)."""
        return 0 if self.data is None else int(self.data.shape[0])

    def with_weights(self, weights: NDArray[np.float64]) -> "TransitionNetwork":
        """Copy of this network with a different weight matrix."""
        return replace(self, weights=np.array(weights, dtype=np.float64))

    def as_networkx(self, loops: bool = True) -> nx.DiGraph:
        """
        Weighted directed graph over the state labels.

        Parameters
        ----------
        loops : bool
            Keep self-loop edges (diagonal weights).

        Returns
        -------
        nx.DiGraph
            One edge per non-zero weight, with ``weight`` attribute.
        """
        G = nx.DiGraph()
        G.add_nodes_from(self.labels)
        rows, cols = np.nonzero(self.weights)
        for i, j in zip(rows, cols):
            if i == j and not loops:
                continue
            G.add_edge(self.labels[i], self.labels[j], weight=float(self.weights[i, j]))
        return G

    def to_dataframe(self) -> pd.DataFrame:
        """Weight matrix as a labelled DataFrame (rows = from, columns = to)."""
        return pd.DataFrame(self.weights, index=self.labels, columns=self.labels)

    def __repr__(self) -> str:
        return (
            f"TransitionNetwork(type_={self.type_!r}, n_states={self.n_states}, "
            f"n_sequences={self.n_sequences})"
        )


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def as_sequence_array(data: SequenceInput) -> NDArray:
    """
    Normalise sequence data to a rectangular object array.

    Parameters
    ----------
    data : DataFrame, ndarray or sequence of sequences
        One sequence per row. Ragged input is right-padded; NaN and
        ``None`` cells are treated as missing.

    Returns
    -------
    ndarray (s, p) of object
        State labels as ``str``, ``None`` for missing positions.
    """
    if isinstance(data, pd.DataFrame):
        rows: Iterable = data.to_numpy(dtype=object).tolist()
    elif isinstance(data, np.ndarray) and data.ndim == 2:
        rows = data.tolist()
    else:
        rows = [list(seq) for seq in data]
    rows = list(rows)

    max_len = max((len(r) for r in rows), default=0)
    out = np.full((len(rows), max_len), None, dtype=object)
    for i, row in enumerate(rows):
        for j, value in enumerate(row):
            out[i, j] = None if _is_missing(value) else str(value)
    return out


def observed_labels(data: NDArray) -> List[str]:
    """Sorted distinct non-missing states in ``data``."""
    return sorted({v for v in data.ravel() if v is not None})


def _encode(data: NDArray, labels: Sequence[str]) -> NDArray[np.int64]:
    index = {lab: i for i, lab in enumerate(labels)}
    codes = np.full(data.shape, -1, dtype=np.int64)
    for (i, j), value in np.ndenumerate(data):
        if value is not None:
            codes[i, j] = index.get(value, -1)
    return codes


def compute_transitions_3d(
    data: NDArray,
    labels: Sequence[str],
    type_: str = "relative",
    beta: float = 0.1,
) -> NDArray[np.float64]:
    """
    Per-sequence transition contributions.

    Parameters
    ----------
    data : ndarray (s, p) of object
        Sequence array from ``as_sequence_array``.
    labels : sequence of str
        State labels; states outside this set are treated as missing.
    type_ : str
        Model type, see ``MODEL_TYPES``.
    beta : float
        Decay rate for the attention model.

    Returns
    -------
    ndarray (s, n, n)
        One contribution matrix per sequence.
    """
    if type_ not in MODEL_TYPES:
        raise ValueError(f"Unknown model type: {type_}. Must be one of {list(MODEL_TYPES)}")

    codes = _encode(data, labels)
    s, p = codes.shape
    a = len(labels)
    trans = np.zeros((s, a, a), dtype=np.float64)
    seq_idx = np.arange(s)

    def _add(i: int, j: int, value: float, symmetric: bool = False) -> None:
        frm = codes[:, i]
        to = codes[:, j]
        ok = (frm >= 0) & (to >= 0)
        np.add.at(trans, (seq_idx[ok], frm[ok], to[ok]), value)
        if symmetric:
            np.add.at(trans, (seq_idx[ok], to[ok], frm[ok]), value)

    if type_ in ("relative", "frequency"):
        for i in range(p - 1):
            _add(i, i + 1, 1.0)
    elif type_ == "co-occurrence":
        for i in range(p - 1):
            for j in range(i + 1, p):
                _add(i, j, 1.0, symmetric=True)
    else:
        for i in range(p - 1):
            for j in range(i + 1, p):
                _add(i, j, float(np.exp(-beta * (j - i))))
    return trans


def _scale(weights: NDArray[np.float64], method: str) -> NDArray[np.float64]:
    if method == "minmax":
        lo, hi = weights.min(), weights.max()
        return (weights - lo) / (hi - lo) if hi > lo else weights
    if method == "max":
        hi = weights.max()
        return weights / hi if hi > 0 else weights
    if method == "rank":
        out = np.zeros_like(weights)
        pos = weights > 0
        if pos.any():
            out[pos] = rankdata(weights[pos], method="average")
        return out
    raise ValueError(f"Unknown scaling: {method}. Must be one of {list(SCALINGS)}")


def compute_weights_from_3d(
    trans: NDArray[np.float64],
    type_: str = "relative",
    scaling: Optional[Sequence[str]] = None,
) -> NDArray[np.float64]:
    """
    Aggregate per-sequence contributions into a weight matrix.

    ``relative`` networks are row-normalised (all-zero rows stay zero);
    scaling steps run afterwards in the given order.
    """
    if trans.ndim != 3:
        raise ValueError(f"Expected a 3-D transition array, got shape {trans.shape}")
    weights = trans.sum(axis=0)
    if type_ == "relative":
        row_sums = weights.sum(axis=1, keepdims=True)
        weights = np.divide(
            weights, row_sums, out=np.zeros_like(weights), where=row_sums > 0
        )
    for method in scaling or []:
        weights = _scale(weights, method)
    return weights


def _initial_probabilities(codes: NDArray[np.int64], a: int) -> NDArray[np.float64]:
    inits = np.zeros(a, dtype=np.float64)
    if codes.shape[1] == 0:
        return inits
    first = codes[:, 0]
    first = first[first >= 0]
    if first.size:
        inits = np.bincount(first, minlength=a).astype(np.float64) / first.size
    return inits


def build_network(
    data: SequenceInput,
    type_: str = "relative",
    scaling: Optional[Union[str, Sequence[str]]] = None,
    labels: Optional[Sequence[str]] = None,
    beta: float = 0.1,
) -> TransitionNetwork:
    """
    Build a transition network from sequence data.

    Parameters
    ----------
    data : DataFrame, ndarray or sequence of sequences
        Categorical sequences, one per row.
    type_ : str, default "relative"
        ``relative`` (row-normalised transition probabilities),
        ``frequency`` (raw transition counts), ``co-occurrence`` or
        ``attention`` (exponentially decayed forward co-occurrence).
    scaling : str or list of str, optional
        ``minmax``, ``max`` and/or ``rank``.
    labels : sequence of str, optional
        Explicit state set. Defaults to the sorted observed states.
    beta : float, default 0.1
        Decay rate for ``attention``.

    Returns
    -------
    TransitionNetwork

    Raises
    ------
    ValueError
        If no state is observed, or ``type_``/``scaling`` is unknown.

    Examples
    --------
    >>> net = build_network([["A", "B", "A"], ["B", "B", "A"]])
    >>> net.labels
    ['A', 'B']
    """
    if type_ not in MODEL_TYPES:
        raise ValueError(f"Unknown model type: {type_}. Must be one of {list(MODEL_TYPES)}")
    if isinstance(scaling, str):
        scaling = [scaling]
    scaling = list(scaling or [])

    seq = as_sequence_array(data)
    labels = [str(lab) for lab in labels] if labels is not None else observed_labels(seq)
    if len(labels) == 0:
        raise ValueError("Cannot build a network: no observed states in the sequence data")

    trans = compute_transitions_3d(seq, labels, type_=type_, beta=beta)
    weights = compute_weights_from_3d(trans, type_=type_, scaling=scaling)
    inits = _initial_probabilities(_encode(seq, labels), len(labels))

    return TransitionNetwork(
        weights=weights,
        inits=inits,
        labels=labels,
        data=seq,
        type_=type_,
        scaling=scaling,
        beta=beta,
    )


def tna(data: SequenceInput, **kwargs) -> TransitionNetwork:
    """Relative-frequency transition network."""
    return build_network(data, type_="relative", **kwargs)


def ftna(data: SequenceInput, **kwargs) -> TransitionNetwork:
    """Raw-frequency transition network."""
    return build_network(data, type_="frequency", **kwargs)


def ctna(data: SequenceInput, **kwargs) -> TransitionNetwork:
    """Co-occurrence network."""
    return build_network(data, type_="co-occurrence", **kwargs)


def atna(data: SequenceInput, beta: float = 0.1, **kwargs) -> TransitionNetwork:
    """Attention-weighted network."""
    return build_network(data, type_="attention", beta=beta, **kwargs)


def from_matrix(
    weights: Union[NDArray, Sequence[Sequence[float]]],
    labels: Optional[Sequence[str]] = None,
    inits: Optional[Sequence[float]] = None,
    type_: str = "relative",
) -> TransitionNetwork:
    """
    Wrap a pre-built weight matrix as a network without sequence data.

    Labels default to ``S1..Sn`` and inits to the uniform distribution.
    """
    W = np.asarray(weights, dtype=np.float64)
    if W.ndim != 2 or W.shape[0] != W.shape[1]:
        raise ValueError(f"weights must be a square matrix, got shape {W.shape}")
    n = W.shape[0]
    if labels is None:
        labels = [f"S{i + 1}" for i in range(n)]
    if inits is None:
        inits = np.full(n, 1.0 / n) if n else np.zeros(0)
    return TransitionNetwork(weights=W, inits=np.asarray(inits), labels=list(labels), type_=type_)


# Model type -> builder, used by the resampling estimators
BUILDERS = {
    "relative": tna,
    "frequency": ftna,
    "co-occurrence": ctna,
    "attention": atna,
}

# Short aliases accepted wherever a model type is selected
MODEL_ALIASES = {
    "tna": "relative",
    "ftna": "frequency",
    "ctna": "co-occurrence",
    "atna": "attention",
}


def resolve_model_type(name: str) -> str:
    """Map a model type or alias (``tna``, ``ftna``, ...) to its canonical name."""
    canonical = MODEL_ALIASES.get(name, name)
    if canonical not in MODEL_TYPES:
        raise ValueError(
            f"Unknown model type: {name}. Must be one of "
            f"{list(MODEL_TYPES) + list(MODEL_ALIASES)}"
        )
    return canonical
