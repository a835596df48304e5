"""Match scoring for candidate cleaners.

The score starts at a neutral 50 and moves with quality signals (rating,
experience, service area, tight packing) and workload penalties. The result
is always clamped to [0, 100].
"""

from cleanmatch.domain.models import ScoreBreakdown, ScoreInput

BASE_SCORE = 50.0
RATING_WEIGHT = 5.0  # up to +25 for a 5.0 rating
EXPERIENCE_MAX_BONUS = 15.0  # reached at 100 completed jobs
EXPERIENCE_FULL_JOBS = 100
AREA_MATCH_BONUS = 10.0
EXACT_FIT_BONUS = 5.0
UNAVAILABLE_PENALTY = 40.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0


def score_breakdown(score_input: ScoreInput) -> ScoreBreakdown:
    """Compute every term of the match score."""
    rating = score_input.rating_avg * RATING_WEIGHT
    experience = min(
        score_input.total_jobs_done / EXPERIENCE_FULL_JOBS * EXPERIENCE_MAX_BONUS,
        EXPERIENCE_MAX_BONUS,
    )
    area = AREA_MATCH_BONUS if score_input.is_area_match else 0.0

    packing = 0.0
    if score_input.placement_found and score_input.gap_score_h == 0:
        packing = EXACT_FIT_BONUS
    unavailable = 0.0 if score_input.placement_found else UNAVAILABLE_PENALTY

    weight = score_input.config.load_balance_weight
    day_load = 0.0
    week_load = 0.0
    if weight > 0:
        day_load = score_input.day_booking_count * weight / 2
        week_load = score_input.week_booking_count * weight / 10

    raw_total = BASE_SCORE
    raw_total += rating
    raw_total += experience
    raw_total += area
    raw_total += packing
    raw_total -= unavailable
    raw_total -= day_load
    raw_total -= week_load

    return ScoreBreakdown(
        base=BASE_SCORE,
        rating=rating,
        experience=experience,
        area=area,
        packing=packing,
        unavailable_penalty=unavailable,
        day_load_penalty=day_load,
        week_load_penalty=week_load,
        raw_total=raw_total,
        total=max(MIN_SCORE, min(MAX_SCORE, raw_total)),
    )


def compute_match_score(score_input: ScoreInput) -> float:
    """Compute a 0-100 suitability score for a cleaner.

    Example:
        >>> compute_match_score(ScoreInput(
        ...     rating_avg=4.5, total_jobs_done=50, is_area_match=True,
        ...     placement_found=True, gap_score_h=0.0,
        ... ))
        95.0
    """
    return score_breakdown(score_input).total
