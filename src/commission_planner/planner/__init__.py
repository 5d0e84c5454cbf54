"""Combination planning: enumeration, verification, scoring and sorting.

Usage:
    from commission_planner.planner import CombinationScheduler

    scheduler = CombinationScheduler()
    result = scheduler.schedule(subjects, selections, priorities)
    best = result.best
"""

from .config import BuildingConfig, ConfigLoader, PlannerConfig
from .enumerator import EnumerationStats, count_leaves, search_combinations
from .geometry import constant_travel_time, default_travel_time, overlap_degree
from .scheduler import (
    CombinationScheduler,
    ScheduleResult,
    ScheduleStatistics,
    resolve_subjects,
    schedule,
)
from .scorer import (
    TRANSFORMS,
    compute_weight,
    get_transform,
    identity,
    linear_transform,
    weight_algorithm,
)
from .sorting import SortMode, comparator_sort, quicksort, sort_combinations
from .verifier import PriorityVerifier, verify

__all__ = [
    # Main scheduler
    "CombinationScheduler",
    "ScheduleResult",
    "ScheduleStatistics",
    "resolve_subjects",
    "schedule",
    # Configuration
    "BuildingConfig",
    "ConfigLoader",
    "PlannerConfig",
    # Enumeration
    "EnumerationStats",
    "count_leaves",
    "search_combinations",
    # Geometry
    "constant_travel_time",
    "default_travel_time",
    "overlap_degree",
    # Verification
    "PriorityVerifier",
    "verify",
    # Scoring
    "TRANSFORMS",
    "compute_weight",
    "get_transform",
    "identity",
    "linear_transform",
    "weight_algorithm",
    # Sorting
    "SortMode",
    "comparator_sort",
    "quicksort",
    "sort_combinations",
]
