"""Greedy roster assignment.

Walks the options from highest to lowest score and keeps every option that
does not conflict with what has already been chosen. Fast and
deterministic, used on its own or as the fallback for CP-SAT.
"""

from collections import defaultdict
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Optional

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.models import AssignmentOption, RosterResult

CleanerDay = tuple[str, date]


def remaining_capacity(
    key: CleanerDay,
    existing_counts: Mapping[CleanerDay, int],
    config: MatchConfig,
) -> Optional[int]:
    """Jobs still assignable to a cleaner on a date, or None when uncapped."""
    if config.max_jobs_per_day <= 0:
        return None
    return max(0, config.max_jobs_per_day - existing_counts.get(key, 0))


def unassigned_bookings(
    options: Sequence[AssignmentOption],
    assignments: Mapping[str, AssignmentOption],
) -> list[str]:
    """Booking IDs with options but no assignment, in first-seen order."""
    seen = []
    for option in options:
        if option.booking_id not in assignments and option.booking_id not in seen:
            seen.append(option.booking_id)
    return seen


class GreedyAssigner:
    """Assigns bookings to cleaners by descending match score."""

    def __init__(self, config: Optional[MatchConfig] = None):
        self.config = config or MatchConfig()

    def solve(
        self,
        options: Sequence[AssignmentOption],
        existing_counts: Optional[Mapping[CleanerDay, int]] = None,
    ) -> RosterResult:
        """Assign as many bookings as possible, best score first.

        Args:
            options: Candidate (booking, cleaner, placement) pairings.
            existing_counts: Bookings each cleaner already has per date.

        Returns:
            RosterResult with status "GREEDY".
        """
        existing_counts = existing_counts or {}
        buffer = self.config.buffer_micros

        assignments: dict[str, AssignmentOption] = {}
        chosen_by_day: dict[CleanerDay, list[AssignmentOption]] = defaultdict(list)

        for option in sorted(options, key=lambda o: o.score, reverse=True):
            if option.booking_id in assignments:
                continue

            key = (option.cleaner_id, option.date)
            capacity = remaining_capacity(key, existing_counts, self.config)
            if capacity is not None and len(chosen_by_day[key]) >= capacity:
                continue

            if any(option.overlaps(other, buffer) for other in chosen_by_day[key]):
                continue

            assignments[option.booking_id] = option
            chosen_by_day[key].append(option)

        return RosterResult(
            assignments=assignments,
            unassigned=unassigned_bookings(options, assignments),
            status="GREEDY",
            objective_value=sum(o.score for o in assignments.values()),
        )
