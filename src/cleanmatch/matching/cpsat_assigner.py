"""OR-Tools CP-SAT solver for roster assignment.

Chooses, for several pending bookings at once, which cleaner takes each
one. The model maximises the number of assigned bookings first and the
total match score second, while never double-booking a cleaner and never
exceeding the daily job cap.
"""

import logging
from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from itertools import combinations
from typing import Optional

from ortools.sat.python import cp_model

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.models import AssignmentOption, RosterResult
from cleanmatch.matching.heuristic_assigner import (
    CleanerDay,
    remaining_capacity,
    unassigned_bookings,
)

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the CP-SAT solver.

    Attributes:
        time_limit_seconds: Maximum solver runtime.
        num_workers: Number of parallel workers (0 = auto).
        score_scale: Multiplier turning float scores into integer
            objective coefficients.
    """

    time_limit_seconds: float = 10.0
    num_workers: int = 0
    score_scale: int = 100


class CPSATAssigner:
    """Constraint programming roster assignment."""

    def __init__(
        self,
        config: Optional[MatchConfig] = None,
        solver_config: Optional[SolverConfig] = None,
    ):
        self.config = config or MatchConfig()
        self.solver_config = solver_config or SolverConfig()

    def solve(
        self,
        options: Sequence[AssignmentOption],
        existing_counts: Optional[Mapping[CleanerDay, int]] = None,
    ) -> RosterResult:
        """Solve the assignment problem.

        Args:
            options: Candidate (booking, cleaner, placement) pairings.
            existing_counts: Bookings each cleaner already has per date.

        Returns:
            RosterResult carrying the CP-SAT status name. Assignments are
            empty when the status is neither OPTIMAL nor FEASIBLE.
        """
        if not options:
            return RosterResult(status="OPTIMAL")

        existing_counts = existing_counts or {}
        buffer = self.config.buffer_micros
        model = cp_model.CpModel()

        # x[i] = 1 if options[i] is chosen
        x = [model.NewBoolVar(f"x_{i}") for i in range(len(options))]

        by_booking: dict[str, list[int]] = defaultdict(list)
        by_cleaner_day: dict[CleanerDay, list[int]] = defaultdict(list)
        for i, option in enumerate(options):
            by_booking[option.booking_id].append(i)
            by_cleaner_day[(option.cleaner_id, option.date)].append(i)

        # Each booking goes to at most one cleaner
        for indices in by_booking.values():
            model.AddAtMostOne([x[i] for i in indices])

        for key, indices in by_cleaner_day.items():
            # No two chosen jobs closer than the buffer
            for i, j in combinations(indices, 2):
                if options[i].overlaps(options[j], buffer):
                    model.AddAtMostOne([x[i], x[j]])

            capacity = remaining_capacity(key, existing_counts, self.config)
            if capacity is not None:
                model.Add(sum(x[i] for i in indices) <= capacity)

        coefficients = [
            int(round(option.score * self.solver_config.score_scale))
            for option in options
        ]
        # Any extra assignment outweighs every possible score difference.
        assignment_weight = sum(coefficients) + 1
        model.Maximize(
            sum((assignment_weight + c) * var for c, var in zip(coefficients, x))
        )

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.solver_config.time_limit_seconds
        if self.solver_config.num_workers > 0:
            solver.parameters.num_workers = self.solver_config.num_workers

        status = solver.Solve(model)
        status_name = solver.StatusName(status)

        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            logger.warning("Roster solve failed | status=%s", status_name)
            return RosterResult(
                unassigned=unassigned_bookings(options, {}),
                status=status_name,
            )

        assignments = {
            option.booking_id: option
            for option, var in zip(options, x)
            if solver.Value(var) == 1
        }
        result = RosterResult(
            assignments=assignments,
            unassigned=unassigned_bookings(options, assignments),
            status=status_name,
            objective_value=sum(o.score for o in assignments.values()),
        )
        logger.info(
            "Roster solve completed | status=%s | assigned=%s | unassigned=%s | "
            "total_score=%.2f | wall_time=%.3fs",
            status_name,
            len(result.assignments),
            len(result.unassigned),
            result.objective_value,
            solver.WallTime(),
        )
        return result
