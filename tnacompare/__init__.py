"""
tnacompare: statistical inference for transition networks

Compare, bootstrap, permute and split-half test weighted transition
networks built from categorical sequence data.
"""

from .core import SeededRNG, TransitionNetwork, atna, build_network, ctna, from_matrix, ftna, tna
from .stats import (
    METRIC_CATALOG,
    bootstrap_tna,
    compare_groups,
    compare_weight_matrices,
    comparison_table,
    compute_sequence_indices,
    estimate_cs,
    kruskal_wallis,
    one_way_anova,
    p_adjust,
    permutation_test,
    post_hoc_pairwise,
    reliability_analysis,
)
from .config import AnalysisConfig, configure_logging
from .factory import run_analysis

__version__ = "0.1.0"

__all__ = [
    'SeededRNG',
    'TransitionNetwork',
    'build_network',
    'tna',
    'ftna',
    'ctna',
    'atna',
    'from_matrix',
    'METRIC_CATALOG',
    'compare_weight_matrices',
    'comparison_table',
    'bootstrap_tna',
    'permutation_test',
    'reliability_analysis',
    'estimate_cs',
    'one_way_anova',
    'kruskal_wallis',
    'post_hoc_pairwise',
    'compare_groups',
    'p_adjust',
    'compute_sequence_indices',
    'AnalysisConfig',
    'configure_logging',
    'run_analysis',
]
