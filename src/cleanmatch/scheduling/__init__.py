"""Interval computation and job placement."""

from cleanmatch.scheduling.free_intervals import compute_free_intervals
from cleanmatch.scheduling.multi_day import (
    build_date_availability,
    find_best_placement_across_dates,
    group_slots_by_date,
)
from cleanmatch.scheduling.placement import (
    PlacementCandidate,
    find_optimal_placement,
    is_better_placement,
)

__all__ = [
    "PlacementCandidate",
    "build_date_availability",
    "compute_free_intervals",
    "find_best_placement_across_dates",
    "find_optimal_placement",
    "group_slots_by_date",
    "is_better_placement",
]
