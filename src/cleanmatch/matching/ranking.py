"""Candidate ranking for a new booking.

Runs the full matching pipeline for every cleaner on the roster: free
intervals per date, best placement across dates, then the match score.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.models import (
    CleanerCandidate,
    DateAvailability,
    DatedTimeSlot,
    MatchRanking,
    MatchSuggestion,
    ScoreInput,
)
from cleanmatch.scheduling.multi_day import (
    build_date_availability,
    find_best_placement_across_dates,
)
from cleanmatch.scoring.scorer import score_breakdown

logger = logging.getLogger(__name__)


def build_candidate_availabilities(
    candidate: CleanerCandidate,
    config: MatchConfig,
) -> list[DateAvailability]:
    """Build per-date scheduler input for a cleaner, in date order."""
    availabilities = []
    for day in sorted(candidate.availability):
        window = candidate.availability[day]
        availabilities.append(
            build_date_availability(
                day,
                window.start,
                window.end,
                candidate.get_bookings(day),
                config,
            )
        )
    return availabilities


def evaluate_candidate(
    candidate: CleanerCandidate,
    dated_slots: Sequence[DatedTimeSlot],
    job_duration: int,
    config: MatchConfig,
) -> MatchSuggestion:
    """Place and score a single cleaner."""
    availabilities = build_candidate_availabilities(candidate, config)
    placement = find_best_placement_across_dates(
        availabilities, dated_slots, job_duration, config
    )

    day_count = candidate.booking_count(placement.date) if placement.found else 0
    breakdown = score_breakdown(
        ScoreInput(
            rating_avg=candidate.rating_avg,
            total_jobs_done=candidate.total_jobs_done,
            is_area_match=candidate.is_area_match,
            placement_found=placement.found,
            gap_score_h=placement.gap_score_h,
            day_booking_count=day_count,
            week_booking_count=candidate.week_booking_count,
            config=config,
        )
    )

    logger.debug(
        "Candidate evaluated | cleaner_id=%s | placement=%r | score=%.2f",
        candidate.id,
        placement,
        breakdown.total,
    )
    return MatchSuggestion(
        cleaner_id=candidate.id,
        placement=placement,
        score=breakdown.total,
        breakdown=breakdown,
    )


def rank_candidates(
    candidates: Sequence[CleanerCandidate],
    dated_slots: Sequence[DatedTimeSlot],
    job_duration: int,
    config: Optional[MatchConfig] = None,
) -> MatchRanking:
    """Rank cleaners for a booking.

    Args:
        candidates: Cleaners to consider, in roster order.
        dated_slots: Client preferred windows across the requested dates.
        job_duration: Estimated job length.
        config: Matchmaking parameters (defaults when None).

    Returns:
        MatchRanking sorted by descending score. Equal scores keep roster
        order. The list is cut to ``config.max_results`` when that is set.
    """
    config = config or MatchConfig()

    suggestions = [
        evaluate_candidate(candidate, dated_slots, job_duration, config)
        for candidate in candidates
    ]
    suggestions.sort(key=lambda s: s.score, reverse=True)

    available_count = sum(1 for s in suggestions if s.is_available)
    if config.max_results > 0:
        suggestions = suggestions[: config.max_results]

    ranking = MatchRanking(
        suggestions=suggestions,
        total_candidates=len(candidates),
        available_count=available_count,
        needs_wider_search=available_count < config.min_available_count,
    )

    logger.info(
        "Ranking completed | candidates=%s | available=%s | returned=%s | "
        "needs_wider_search=%s",
        ranking.total_candidates,
        ranking.available_count,
        len(ranking.suggestions),
        ranking.needs_wider_search,
    )
    return ranking
