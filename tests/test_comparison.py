"""
Tests for the weighted-matrix comparison suite.

Reference values from R: tna:::compare_(A, B, scaling = "none").
"""

import math

import numpy as np
import pytest

from tnacompare.core import from_matrix, tna
from tnacompare.stats.comparison import (
    CATEGORIES,
    METRIC_CATALOG,
    METRIC_KEYS,
    compare_weight_matrices,
    comparison_table,
    metrics_by_category,
)


R_REFERENCE = {
    "mad": 0.1333333333,
    "median_ad": 0.2,
    "rmsd": 0.1632993162,
    "max_ad": 0.2,
    "rel_mad": 0.4,
    "cv_ratio": 1.0,
    "pearson": 0.8,
    "spearman": 0.6260869565,
    "kendall": 0.53125,
    "dcor": 0.7834224599,
    "euclidean": 0.4898979486,
    "manhattan": 1.2,
    "canberra": 1.2333333333,
    "braycurtis": 0.2,
    "frobenius": 0.4,
    "cosine": 0.925,
    "jaccard": 0.6666666667,
    "dice": 0.8,
    "overlap": 0.8,
    "rv": 0.9748163694,
    "rank_agree": 0.6666666667,
    "sign_agree": 1.0,
}


class TestCatalog:
    """Test the metric catalog."""

    def test_size_and_order(self):
        """22 metrics, deviations first, pattern last."""
        assert len(METRIC_CATALOG) == 22
        assert METRIC_KEYS[0] == "mad"
        assert METRIC_KEYS[-1] == "sign_agree"
        assert list(METRIC_KEYS) == list(R_REFERENCE)

    def test_categories_contiguous(self):
        """Categories appear as contiguous blocks in category order."""
        seen = []
        for m in METRIC_CATALOG:
            if not seen or seen[-1] != m.category:
                seen.append(m.category)
        assert tuple(seen) == CATEGORIES

    def test_by_category(self):
        """Filtering keeps catalog order."""
        keys = [m.key for m in metrics_by_category("Correlations")]
        assert keys == ["pearson", "spearman", "kendall", "dcor"]
        with pytest.raises(ValueError, match="Unknown category"):
            metrics_by_category("Other")


class TestCompareWeightMatrices:
    """Test compare_weight_matrices."""

    @pytest.mark.parametrize("key", list(R_REFERENCE))
    def test_matches_reference(self, reference_matrices, key):
        """Every metric matches R within 1e-6."""
        a, b = reference_matrices
        result = compare_weight_matrices(a, b)
        assert result[key] == pytest.approx(R_REFERENCE[key], abs=1e-6)

    def test_accepts_networks(self, reference_networks, reference_matrices):
        """Networks and raw matrices give the same result."""
        from_nets = compare_weight_matrices(*reference_networks)
        from_arrays = compare_weight_matrices(*reference_matrices)
        assert from_nets == pytest.approx(from_arrays)

    def test_result_in_catalog_order(self, reference_matrices):
        """Result keys follow the catalog."""
        assert list(compare_weight_matrices(*reference_matrices)) == list(METRIC_KEYS)

    def test_self_comparison(self, sample_model):
        """A network compared with itself is maximally similar."""
        result = compare_weight_matrices(sample_model, sample_model)
        for key in ("mad", "median_ad", "rmsd", "max_ad", "rel_mad", "euclidean",
                    "manhattan", "canberra", "braycurtis", "frobenius"):
            assert result[key] == pytest.approx(0.0, abs=1e-10)
        for key in ("cv_ratio", "pearson", "spearman", "kendall", "dcor", "cosine",
                    "jaccard", "dice", "overlap", "rv", "rank_agree", "sign_agree"):
            assert result[key] == pytest.approx(1.0, abs=1e-10)

    def test_different_sizes_all_nan(self):
        """Different numbers of states give NaN for every metric."""
        small = tna([["A", "B"]])
        large = tna([["A", "B", "C"]])
        result = compare_weight_matrices(small, large)
        assert len(result) == 22
        assert all(math.isnan(v) for v in result.values())

    def test_empty_all_nan(self):
        """Zero-state matrices give NaN for every metric."""
        empty = from_matrix(np.zeros((0, 0)))
        assert all(math.isnan(v) for v in compare_weight_matrices(empty, empty).values())

    def test_zero_matrix_degenerate(self):
        """All-zero matrices give NaN where a denominator vanishes."""
        z = np.zeros((3, 3))
        result = compare_weight_matrices(z, z)
        assert result["mad"] == 0
        assert result["euclidean"] == 0
        for key in ("rel_mad", "cv_ratio", "pearson", "spearman", "kendall", "dcor",
                    "braycurtis", "cosine", "jaccard", "dice", "overlap", "rv"):
            assert math.isnan(result[key]), key
        assert result["sign_agree"] == 1.0
        assert result["canberra"] == 0

    def test_canberra_skips_zero_entries(self):
        """Canberra only sums entries that are non-zero in both matrices."""
        a = np.array([[0.0, 1.0], [2.0, 0.0]])
        b = np.array([[1.0, 1.0], [1.0, 0.0]])
        # only (0,1) and (1,0) count: 0/2 + 1/3
        assert compare_weight_matrices(a, b)["canberra"] == pytest.approx(1 / 3)

    def test_dcor_bounded(self):
        """Distance correlation stays within [-1, 1]."""
        rng = np.random.default_rng(0)
        a, b = rng.random((4, 4)), rng.random((4, 4))
        assert -1 <= compare_weight_matrices(a, b)["dcor"] <= 1

    def test_non_square_raises(self):
        """Non-square input is rejected."""
        with pytest.raises(ValueError, match="square"):
            compare_weight_matrices(np.zeros((2, 3)), np.zeros((2, 3)))


def test_comparison_table(reference_matrices):
    """comparison_table has one row per metric in catalog order."""
    df = comparison_table(compare_weight_matrices(*reference_matrices))
    assert list(df.columns) == ["key", "metric", "category", "value"]
    assert list(df["key"]) == list(METRIC_KEYS)
    assert df.loc[df["key"] == "cosine", "value"].iloc[0] == pytest.approx(0.925)
