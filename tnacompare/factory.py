"""
Analysis factory for running estimators from configuration.

Uses dispatch dictionary pattern to map an analysis name to its estimator
and the matching config section.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from .config import (
    AnalysisConfig,
    BootstrapConfig,
    GroupComparisonConfig,
    PermutationConfig,
    ReliabilityConfig,
    StabilityConfig,
)
from .core.transition import SequenceInput, TransitionNetwork
from .stats.bootstrap import BootstrapResult, bootstrap_tna
from .stats.group_tests import GroupComparisonResult, GroupsInput, compare_groups
from .stats.permutation import PermutationResult, permutation_test
from .stats.reliability import ReliabilityResult, reliability_analysis
from .stats.stability import StabilityResult, estimate_cs


def run_bootstrap(config: BootstrapConfig, model: TransitionNetwork) -> BootstrapResult:
    """Run bootstrap edge-stability from configuration."""
    return bootstrap_tna(
        model,
        iter=config.iter,
        level=config.level,
        method=config.method,
        threshold=config.threshold,
        consistency_range=config.consistency_range,
        seed=config.seed,
    )


def run_permutation(
    config: PermutationConfig, x: TransitionNetwork, y: TransitionNetwork
) -> PermutationResult:
    """Run the permutation test from configuration."""
    return permutation_test(
        x,
        y,
        iter=config.iter,
        adjust=config.adjust,
        level=config.level,
        paired=config.paired,
        seed=config.seed,
    )


def run_reliability(
    config: ReliabilityConfig, data: SequenceInput | TransitionNetwork
) -> ReliabilityResult:
    """Run split-half reliability from configuration."""
    return reliability_analysis(
        data,
        model_type=config.model_type,
        iter=config.iter,
        split=config.split,
        beta=config.beta,
        seed=config.seed,
    )


def run_stability(config: StabilityConfig, model: TransitionNetwork) -> StabilityResult:
    """Run centrality stability from configuration."""
    return estimate_cs(
        model,
        measures=config.measures,
        iter=config.iter,
        drop_props=config.drop_props,
        threshold=config.threshold,
        certainty=config.certainty,
        seed=config.seed,
    )


def run_groups(
    config: GroupComparisonConfig, groups: GroupsInput, metric: str = "value"
) -> GroupComparisonResult:
    """Run omnibus and post-hoc group tests from configuration."""
    return compare_groups(
        groups,
        metric=metric,
        parametric=config.parametric,
        adjust=config.adjust,
        level=config.level,
    )


# Dispatch dictionary for analysis name -> (runner, config section)
_ANALYSIS_RUNNERS: Dict[str, tuple[Callable[..., Any], str]] = {
    'bootstrap': (run_bootstrap, 'bootstrap'),
    'permutation': (run_permutation, 'permutation'),
    'reliability': (run_reliability, 'reliability'),
    'stability': (run_stability, 'stability'),
    'groups': (run_groups, 'groups'),
}


def run_analysis(name: str, config: AnalysisConfig | None, *inputs: Any, **kwargs: Any) -> Any:
    """
    Run a named analysis with its section of an ``AnalysisConfig``.

    Parameters
    ----------
    name : str
        ``bootstrap``, ``permutation``, ``reliability``, ``stability`` or
        ``groups``.
    config : AnalysisConfig, optional
        Full configuration; defaults are used when ``None``.
    *inputs
        Positional inputs of the estimator (a network, two networks,
        sequence data or groups).
    **kwargs
        Extra keyword arguments for the runner (e.g. ``metric`` for groups).

    Returns
    -------
    Result object of the estimator.

    Raises
    ------
    ValueError
        If the analysis name is unknown.

    Examples
    --------
    >>> cfg = AnalysisConfig.from_yaml("analysis.yaml")
    >>> boot = run_analysis("bootstrap", cfg, tna(sequences))
    """
    entry = _ANALYSIS_RUNNERS.get(name.lower())
    if entry is None:
        raise ValueError(f"Unknown analysis: {name}. Must be one of {list(_ANALYSIS_RUNNERS.keys())}")
    runner, section = entry
    config = config if config is not None else AnalysisConfig()
    return runner(getattr(config, section), *inputs, **kwargs)
