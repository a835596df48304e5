"""Best placement across a range of candidate dates.

Each date is solved independently with the single-day optimizer, then the
dates are compared by packing quality and existing load.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.models import (
    BookingSlot,
    DateAvailability,
    DatedPlacementResult,
    DatedTimeSlot,
)
from cleanmatch.scheduling.free_intervals import compute_free_intervals
from cleanmatch.scheduling.placement import find_optimal_placement

# Penalty per existing booking when comparing dates.
DATE_LOAD_PENALTY = 0.5


def build_date_availability(
    day: date,
    avail_start: int,
    avail_end: int,
    bookings: Iterable[BookingSlot],
    config: MatchConfig,
) -> DateAvailability:
    """Compute the scheduler input for one date from raw bookings."""
    bookings = list(bookings)
    free_intervals = compute_free_intervals(
        avail_start, avail_end, bookings, config.buffer_micros
    )
    return DateAvailability(
        date=day,
        avail_start=avail_start,
        avail_end=avail_end,
        free_intervals=tuple(free_intervals),
        booking_count=len(bookings),
    )


def group_slots_by_date(
    dated_slots: Iterable[DatedTimeSlot],
) -> dict[date, list[DatedTimeSlot]]:
    """Group slots by date, keeping caller order within each date."""
    grouped: dict[date, list[DatedTimeSlot]] = defaultdict(list)
    for slot in dated_slots:
        grouped[slot.date].append(slot)
    return dict(grouped)


def is_date_at_capacity(availability: DateAvailability, config: MatchConfig) -> bool:
    """Check if the date already holds the maximum number of jobs."""
    return (
        config.max_jobs_per_day > 0
        and availability.booking_count >= config.max_jobs_per_day
    )


def date_score(gap_score_h: float, booking_count: int) -> float:
    """Score a date's placement; higher is better."""
    return 100.0 - gap_score_h - DATE_LOAD_PENALTY * booking_count


def find_best_placement_across_dates(
    date_availabilities: Sequence[DateAvailability],
    dated_slots: Sequence[DatedTimeSlot],
    job_duration: int,
    config: MatchConfig,
) -> DatedPlacementResult:
    """Select the single best date and time for a job.

    Dates at the daily job cap or without client slots are skipped. The
    remaining dates are compared with ``date_score``; on equal scores the
    first date in ``date_availabilities`` wins.

    Args:
        date_availabilities: Per-date free time and existing load.
        dated_slots: Client windows, each carrying its original slot index.
        job_duration: Job length.
        config: Matchmaking parameters.

    Returns:
        DatedPlacementResult with ``slot_index`` mapped back to the
        caller's original index; ``found`` is False when no date fits.
    """
    slots_by_date = group_slots_by_date(dated_slots)

    best: Optional[DatedPlacementResult] = None
    best_score = 0.0

    for availability in date_availabilities:
        if is_date_at_capacity(availability, config):
            continue

        day_slots = slots_by_date.get(availability.date)
        if not day_slots:
            continue

        placement = find_optimal_placement(
            availability.free_intervals,
            [slot.to_time_slot() for slot in day_slots],
            job_duration,
        )
        if not placement.found:
            continue

        score = date_score(placement.gap_score_h, availability.booking_count)
        if best is None or score > best_score:
            best_score = score
            best = DatedPlacementResult(
                date=availability.date,
                start=placement.start,
                end=placement.end,
                slot_index=day_slots[placement.slot_index].slot_index,
                gap_score_h=placement.gap_score_h,
                found=True,
            )

    if best is None:
        return DatedPlacementResult.not_found()
    return best
