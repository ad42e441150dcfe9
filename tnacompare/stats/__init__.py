"""
Statistical inference for transition networks.

Distribution primitives, omnibus and post-hoc group tests, p-value
adjustment, the weighted-matrix comparison suite and the resampling
estimators (bootstrap, permutation, split-half reliability, centrality
stability).
"""

from .distributions import (
    log_gamma,
    regularized_gamma_p,
    regularized_beta,
    f_cdf,
    t_cdf,
    normal_cdf,
    chi2_cdf,
)
from .multiple_testing import ADJUST_METHODS, p_adjust
from .group_tests import (
    GroupSample,
    OmnibusResult,
    PairwiseResult,
    GroupComparisonResult,
    one_way_anova,
    kruskal_wallis,
    welch_t_test,
    mann_whitney_u,
    post_hoc_pairwise,
    compare_groups,
)
from .comparison import (
    CATEGORIES,
    METRIC_CATALOG,
    METRIC_KEYS,
    MetricRecord,
    compare_weight_matrices,
    comparison_table,
    metrics_by_category,
)
from .bootstrap import BootstrapEdge, BootstrapResult, bootstrap_tna
from .permutation import EdgeStat, PermutationResult, permutation_test
from .reliability import ReliabilityMetricSummary, ReliabilityResult, reliability_analysis
from .indices import (
    SequenceIndex,
    compute_sequence_indices,
    index_groups,
    indices_frame,
    summarize_indices,
)
from .stability import StabilityResult, estimate_cs

__all__ = [
    'log_gamma',
    'regularized_gamma_p',
    'regularized_beta',
    'f_cdf',
    't_cdf',
    'normal_cdf',
    'chi2_cdf',
    'ADJUST_METHODS',
    'p_adjust',
    'GroupSample',
    'OmnibusResult',
    'PairwiseResult',
    'GroupComparisonResult',
    'one_way_anova',
    'kruskal_wallis',
    'welch_t_test',
    'mann_whitney_u',
    'post_hoc_pairwise',
    'compare_groups',
    'CATEGORIES',
    'METRIC_CATALOG',
    'METRIC_KEYS',
    'MetricRecord',
    'compare_weight_matrices',
    'comparison_table',
    'metrics_by_category',
    'BootstrapEdge',
    'BootstrapResult',
    'bootstrap_tna',
    'EdgeStat',
    'PermutationResult',
    'permutation_test',
    'ReliabilityMetricSummary',
    'ReliabilityResult',
    'reliability_analysis',
    'SequenceIndex',
    'compute_sequence_indices',
    'index_groups',
    'indices_frame',
    'summarize_indices',
    'StabilityResult',
    'estimate_cs',
]
