"""Candidate ranking and roster assignment."""

from cleanmatch.matching.cpsat_assigner import CPSATAssigner, SolverConfig
from cleanmatch.matching.heuristic_assigner import GreedyAssigner
from cleanmatch.matching.ranking import evaluate_candidate, rank_candidates
from cleanmatch.matching.roster import (
    RosterAssigner,
    SolverType,
    options_from_rankings,
)

__all__ = [
    # Ranking
    "evaluate_candidate",
    "rank_candidates",
    # Roster assignment
    "RosterAssigner",
    "options_from_rankings",
    # Solvers
    "CPSATAssigner",
    "GreedyAssigner",
    # Solver configuration
    "SolverConfig",
    "SolverType",
]
