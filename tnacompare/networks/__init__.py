"""Graph-level measures of transition networks."""

from .centrality import AVAILABLE_MEASURES, centralities, centrality_frame, compute_betweenness

__all__ = ["AVAILABLE_MEASURES", "centralities", "centrality_frame", "compute_betweenness"]
