"""
Tests for centrality stability estimation.
"""

import math

import numpy as np
import pytest

from tnacompare.core import from_matrix, ftna
from tnacompare.stats.stability import StabilityResult, estimate_cs


class TestEstimateCS:
    """Test estimate_cs."""

    def test_zero_variance_measure(self, sample_model):
        """Out-strength of a row-normalised network is constant, so CS is 0."""
        res = estimate_cs(sample_model, measures=["OutStrength"], iter=10, seed=1)
        assert isinstance(res, StabilityResult)
        assert res.cs_coefficients["OutStrength"] == 0
        assert np.all(np.isnan(res.mean_correlations["OutStrength"]))

    def test_cs_is_a_drop_proportion(self, sample_sequences):
        """CS coefficients are 0 or one of the drop proportions."""
        model = ftna(sample_sequences)
        res = estimate_cs(model, iter=20, seed=2)
        for m, cs in res.cs_coefficients.items():
            assert cs == 0 or cs in res.drop_props
        for m, means in res.mean_correlations.items():
            finite = means[np.isfinite(means)]
            assert np.all(finite <= 1 + 1e-12)

    def test_deterministic(self, sample_sequences):
        """Same seed gives identical correlations."""
        model = ftna(sample_sequences)
        r1 = estimate_cs(model, measures=["InStrength"], iter=15, seed=3)
        r2 = estimate_cs(model, measures=["InStrength"], iter=15, seed=3)
        np.testing.assert_array_equal(r1.mean_correlations["InStrength"], r2.mean_correlations["InStrength"])
        assert r1.cs_coefficients == r2.cs_coefficients

    def test_skipped_drop_proportions(self, sample_sequences):
        """Proportions that drop nothing or keep fewer than 2 sequences are skipped."""
        model = ftna(sample_sequences)
        res = estimate_cs(model, measures=["InStrength"], iter=5, drop_props=[0.05, 0.5, 0.95], seed=4)
        means = res.mean_correlations["InStrength"]
        assert math.isnan(means[0])
        assert math.isnan(means[2])

    def test_summary(self, sample_sequences):
        """summary() is indexed by drop proportion."""
        res = estimate_cs(ftna(sample_sequences), iter=5, drop_props=[0.2, 0.4], seed=5)
        df = res.summary()
        assert list(df.index) == [0.2, 0.4]
        assert list(df.columns) == ["InStrength", "OutStrength", "Betweenness"]

    def test_requires_sequence_data(self):
        """A network without sequence data is rejected."""
        with pytest.raises(ValueError, match="sequence data"):
            estimate_cs(from_matrix([[0, 1], [1, 0]]))
