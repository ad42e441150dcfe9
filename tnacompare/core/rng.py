"""
Seeded random source shared by the resampling estimators.

Every estimator creates its own ``SeededRNG`` from the caller's seed and
threads it through the resampling loop, so two calls with the same seed,
inputs and iteration count draw exactly the same indices.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray


class SeededRNG:
    """
    Deterministic random source backed by ``numpy.random.default_rng``.

    Parameters
    ----------
    seed : int, optional
        Integer seed. ``None`` draws fresh OS entropy (non-reproducible).

    Examples
    --------
    >>> rng = SeededRNG(42)
    >>> idx = rng.choice(10, 10)
    >>> half = rng.choice_without_replacement(10, 5)
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._gen = np.random.default_rng(seed)

    def random(self) -> float:
        """Uniform draw from [0, 1)."""
        return float(self._gen.random())

    def choice(self, n: int, k: int) -> NDArray[np.int64]:
        """Draw ``k`` indices from ``[0, n)`` with replacement."""
        if n <= 0:
            raise ValueError(f"Cannot sample from an empty range (n={n})")
        return self._gen.integers(0, n, size=k, dtype=np.int64)

    def choice_without_replacement(self, n: int, k: int) -> NDArray[np.int64]:
        """
        Draw ``k`` distinct indices from ``[0, n)``.

        Partial Fisher-Yates: only the first ``k`` positions of ``range(n)``
        are shuffled, one uniform integer draw per position.
        """
        if k > n:
            raise ValueError(f"Cannot draw {k} distinct indices from {n}")
        pool = np.arange(n, dtype=np.int64)
        for i in range(k):
            j = int(self._gen.integers(i, n))
            pool[i], pool[j] = pool[j], pool[i]
        return pool[:k].copy()

    def permutation(self, n: int) -> NDArray[np.int64]:
        """Random permutation of ``range(n)``."""
        return self._gen.permutation(n).astype(np.int64)

    def __repr__(self) -> str:
        return f"SeededRNG(seed={self.seed!r})"
