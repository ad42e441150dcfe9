"""Multiple-comparison adjustment of p-values."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray


ADJUST_METHODS = ("none", "bonferroni", "holm", "fdr", "BH")


def p_adjust(
    p_values: Union[Sequence[float], NDArray[np.float64]],
    method: str = "bonferroni",
) -> NDArray[np.float64]:
    """
    Adjust p-values for multiple comparisons.

    Parameters
    ----------
    p_values : array-like
        Raw p-values. NaN entries stay NaN and do not count towards the
        number of comparisons.
    method : str, default "bonferroni"
        ``none``, ``bonferroni``, ``holm`` (step-down) or ``fdr``/``BH``
        (Benjamini-Hochberg step-up).

    Returns
    -------
    ndarray
        Adjusted p-values in the input order, capped at 1.

    Examples
    --------
    >>> p_adjust([0.01, 0.02, 0.03], method="holm")
    array([0.03, 0.04, 0.04])
    """
    if method not in ADJUST_METHODS:
        raise ValueError(f"Unknown adjustment method: {method}. Must be one of {list(ADJUST_METHODS)}")

    p = np.asarray(p_values, dtype=np.float64).ravel()
    out = p.copy()
    finite = ~np.isnan(p)
    m = int(finite.sum())
    if method == "none" or m == 0:
        return out

    q = p[finite]
    if method == "bonferroni":
        adjusted = np.minimum(q * m, 1.0)
    else:
        order = np.argsort(q, kind="stable")
        ranked = q[order]
        if method == "holm":
            scaled = ranked * (m - np.arange(m))
            adjusted_sorted = np.minimum(np.maximum.accumulate(scaled), 1.0)
        else:
            scaled = ranked * m / np.arange(1, m + 1)
            adjusted_sorted = np.minimum(np.minimum.accumulate(scaled[::-1])[::-1], 1.0)
        adjusted = np.empty(m, dtype=np.float64)
        adjusted[order] = adjusted_sorted

    out[finite] = adjusted
    return out
