"""
Core data structures: the transition network model, its builder and the
seeded random source used by the resampling estimators.
"""

from .rng import SeededRNG
from .transition import (
    BUILDERS,
    MODEL_TYPES,
    TransitionNetwork,
    as_sequence_array,
    atna,
    build_network,
    compute_transitions_3d,
    compute_weights_from_3d,
    ctna,
    from_matrix,
    ftna,
    resolve_model_type,
    tna,
)

__all__ = [
    'SeededRNG',
    'BUILDERS',
    'MODEL_TYPES',
    'TransitionNetwork',
    'as_sequence_array',
    'atna',
    'build_network',
    'compute_transitions_3d',
    'compute_weights_from_3d',
    'ctna',
    'from_matrix',
    'ftna',
    'resolve_model_type',
    'tna',
]
