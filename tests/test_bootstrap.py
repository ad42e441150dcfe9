"""
Tests for bootstrap edge-stability.
"""

import numpy as np
import pytest

from tnacompare.core import from_matrix, ftna
from tnacompare.stats.bootstrap import BootstrapResult, bootstrap_tna


class TestBootstrapTna:
    """Test bootstrap_tna."""

    def test_result_structure(self, sample_model):
        """Result matrices match the network and edges are non-zero."""
        res = bootstrap_tna(sample_model, iter=50, seed=1)
        assert isinstance(res, BootstrapResult)
        n = sample_model.n_states
        for mat in (res.p_values, res.weights_mean, res.weights_sd, res.ci_lower, res.ci_upper):
            assert mat.shape == (n, n)
        np.testing.assert_allclose(res.weights, sample_model.weights)
        assert len(res.edges) == int(np.count_nonzero(sample_model.weights > 0))
        assert all(e.weight > 0 for e in res.edges)

    def test_deterministic(self, sample_model):
        """Same seed gives bit-identical results."""
        r1 = bootstrap_tna(sample_model, iter=40, seed=11)
        r2 = bootstrap_tna(sample_model, iter=40, seed=11)
        np.testing.assert_array_equal(r1.p_values, r2.p_values)
        np.testing.assert_array_equal(r1.weights_mean, r2.weights_mean)
        np.testing.assert_array_equal(r1.ci_lower, r2.ci_lower)

    def test_p_values_smoothed(self, sample_model):
        """Empirical p-values lie in [1/(iter+1), 1]."""
        iters = 30
        res = bootstrap_tna(sample_model, iter=iters, seed=2)
        assert np.all(res.p_values >= 1 / (iters + 1))
        assert np.all(res.p_values <= 1)

    def test_edges_column_major(self, sample_model):
        """Edges are listed column by column."""
        res = bootstrap_tna(sample_model, iter=20, seed=3)
        labels = sample_model.labels
        order = [(labels.index(e.to), labels.index(e.from_)) for e in res.edges]
        assert order == sorted(order)

    def test_consistency_range_and_ci(self, sample_model):
        """Consistency range scales the weight; CI bounds are ordered."""
        res = bootstrap_tna(sample_model, iter=50, consistency_range=(0.5, 1.5), seed=4)
        for e in res.edges:
            assert e.cr_lower == pytest.approx(0.5 * e.weight)
            assert e.cr_upper == pytest.approx(1.5 * e.weight)
            assert e.ci_lower <= e.ci_upper

    def test_pruned_model(self, sample_model):
        """Non-significant edges are zeroed in the pruned network."""
        res = bootstrap_tna(sample_model, iter=50, seed=5)
        sig = res.p_values < res.level
        np.testing.assert_array_equal(res.weights_sig[~sig], 0.0)
        np.testing.assert_allclose(res.weights_sig[sig], sample_model.weights[sig])
        assert res.model.labels == sample_model.labels
        assert len(res.significant_edges) == sum(e.significant for e in res.edges)

    def test_threshold_method(self, sample_sequences):
        """Threshold method defaults to the 10th percentile of the weights."""
        model = ftna(sample_sequences)
        res = bootstrap_tna(model, iter=30, method="threshold", seed=6)
        assert res.threshold == pytest.approx(np.quantile(model.weights, 0.1))
        assert res.method == "threshold"
        assert np.all((res.p_values > 0) & (res.p_values <= 1))

    def test_strong_edges_stable_under_threshold(self, sample_sequences):
        """Edges far above a tiny threshold are never counted."""
        model = ftna(sample_sequences * 5)
        res = bootstrap_tna(model, iter=30, method="threshold", threshold=1e-9, seed=7)
        for e in res.edges:
            assert e.p_value == pytest.approx(1 / 31)

    def test_summary(self, sample_model):
        """summary() has one row per edge."""
        res = bootstrap_tna(sample_model, iter=20, seed=8)
        df = res.summary()
        assert len(df) == len(res.edges)
        assert {"from", "to", "weight", "p_value", "significant"} <= set(df.columns)

    def test_requires_sequence_data(self):
        """A network without sequence data is rejected."""
        with pytest.raises(ValueError, match="sequence data"):
            bootstrap_tna(from_matrix([[0, 1], [1, 0]]))

    def test_unknown_method(self, sample_model):
        """Unknown method raises before resampling."""
        with pytest.raises(ValueError, match="Unknown bootstrap method"):
            bootstrap_tna(sample_model, method="jackknife")
