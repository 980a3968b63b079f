"""
Core components of the dining actors simulation
"""
from .cancellation import CancellationToken, Cancelled
from .resource import Resource, OwnershipError
from .timing import (
    DurationSource, SeededDurations, SequenceDurations,
    DEFAULT_MAX_DURATION, DEFAULT_TIMEOUT
)
from .interaction import Interaction
from .state import ActorStats
from .actor import Actor, Phase
from .constraints import (
    C_excl, C_dup, C_cycle, C_release,
    evaluate_all_constraints
)

__all__ = [
    'CancellationToken',
    'Cancelled',
    'Resource',
    'OwnershipError',
    'DurationSource',
    'SeededDurations',
    'SequenceDurations',
    'DEFAULT_MAX_DURATION',
    'DEFAULT_TIMEOUT',
    'Interaction',
    'ActorStats',
    'Actor',
    'Phase',
    'C_excl',
    'C_dup',
    'C_cycle',
    'C_release',
    'evaluate_all_constraints'
]
