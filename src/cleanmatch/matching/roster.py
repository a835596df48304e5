"""Roster auto-assignment interface.

Turns per-booking rankings into a conflict-free set of cleaner
assignments using the configured solver.
"""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Optional

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.models import AssignmentOption, MatchRanking, RosterResult
from cleanmatch.matching.cpsat_assigner import CPSATAssigner, SolverConfig
from cleanmatch.matching.heuristic_assigner import CleanerDay, GreedyAssigner

logger = logging.getLogger(__name__)


class SolverType(Enum):
    """Type of solver to use."""

    HEURISTIC = "heuristic"  # Fast greedy heuristic
    CPSAT = "cpsat"  # OR-Tools CP-SAT (optimal but slower)
    HYBRID = "hybrid"  # Try CP-SAT, fall back to heuristic


def options_from_rankings(
    rankings: Mapping[str, MatchRanking],
) -> list[AssignmentOption]:
    """Collect assignment options from each booking's ranking.

    Suggestions without a placement are skipped.
    """
    options = []
    for booking_id, ranking in rankings.items():
        for suggestion in ranking.suggestions:
            if suggestion.is_available:
                options.append(AssignmentOption.from_suggestion(booking_id, suggestion))
    return options


class RosterAssigner:
    """Assigns several bookings across a roster of cleaners.

    Example:
        >>> assigner = RosterAssigner(config, solver_type=SolverType.HYBRID)
        >>> result = assigner.assign(options, existing_counts)
        >>> for booking_id, option in result.assignments.items():
        ...     print(booking_id, option.cleaner_id, option.date)
    """

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        solver_type: SolverType = SolverType.HYBRID,
        solver_config: Optional[SolverConfig] = None,
    ):
        self.config = config or MatchConfig()
        self.solver_type = solver_type
        self.heuristic_solver = GreedyAssigner(self.config)
        self.cpsat_solver = CPSATAssigner(self.config, solver_config)

    def assign(
        self,
        options: Sequence[AssignmentOption],
        existing_counts: Optional[Mapping[CleanerDay, int]] = None,
    ) -> RosterResult:
        """Pick at most one cleaner per booking without conflicts.

        Args:
            options: Candidate pairings, e.g. from ``options_from_rankings``.
            existing_counts: Bookings each cleaner already has per date.

        Returns:
            RosterResult from the configured solver.
        """
        if self.solver_type == SolverType.HEURISTIC:
            return self.heuristic_solver.solve(options, existing_counts)

        result = self.cpsat_solver.solve(options, existing_counts)
        if self.solver_type == SolverType.CPSAT or result.is_feasible:
            return result

        logger.warning(
            "Falling back to greedy roster assignment | cpsat_status=%s",
            result.status,
        )
        return self.heuristic_solver.solve(options, existing_counts)

    def assign_rankings(
        self,
        rankings: Mapping[str, MatchRanking],
        existing_counts: Optional[Mapping[CleanerDay, int]] = None,
    ) -> RosterResult:
        """Assign bookings straight from their rankings."""
        return self.assign(options_from_rankings(rankings), existing_counts)
