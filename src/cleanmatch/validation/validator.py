"""Validation of matching results.

Checks free intervals, placements, scores and roster assignments against
the invariants the engine guarantees. Used in tests and by callers that
want to verify results before committing a booking.
"""

from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.models import (
    BookingSlot,
    FreeInterval,
    PlacementResult,
    RosterResult,
    TimeSlot,
)
from cleanmatch.domain.timecodec import micros_to_hhmm


class ValidationErrorType(Enum):
    """Types of validation errors."""

    INTERVAL_OUTSIDE_WINDOW = "interval_outside_window"
    INTERVAL_EMPTY = "interval_empty"
    INTERVALS_UNORDERED = "intervals_unordered"
    INTERVALS_OVERLAP = "intervals_overlap"
    COVERAGE_GAP = "coverage_gap"
    COVERAGE_OVERLAP = "coverage_overlap"
    PLACEMENT_WRONG_DURATION = "placement_wrong_duration"
    PLACEMENT_OUTSIDE_SLOT = "placement_outside_slot"
    PLACEMENT_OUTSIDE_FREE_TIME = "placement_outside_free_time"
    PLACEMENT_UNKNOWN_SLOT = "placement_unknown_slot"
    SCORE_OUT_OF_RANGE = "score_out_of_range"
    ROSTER_DOUBLE_BOOKING = "roster_double_booking"
    ROSTER_CAP_EXCEEDED = "roster_cap_exceeded"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    cleaner_id: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.cleaner_id:
            parts.append(f"Cleaner {self.cleaner_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of a validation pass."""

    is_valid: bool = True
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def error_types(self) -> set[ValidationErrorType]:
        return {error.error_type for error in self.errors}


def _span(start: int, end: int) -> str:
    return f"{micros_to_hhmm(start)}-{micros_to_hhmm(end)}"


class PlacementValidator:
    """Validates engine output against its invariants.

    Example:
        >>> validator = PlacementValidator(config)
        >>> result = validator.validate_free_intervals(intervals, start, end)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, config: Optional[MatchConfig] = None):
        self.config = config or MatchConfig()

    def validate_free_intervals(
        self,
        intervals: Sequence[FreeInterval],
        avail_start: int,
        avail_end: int,
        bookings: Optional[Sequence[BookingSlot]] = None,
    ) -> ValidationResult:
        """Validate a free-interval computation.

        Intervals must be non-empty, inside the window, ordered and
        disjoint. When ``bookings`` is given, the free intervals together
        with the padded bookings must cover the window exactly.
        """
        result = ValidationResult()

        previous: Optional[FreeInterval] = None
        for interval in intervals:
            if interval.start >= interval.end:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.INTERVAL_EMPTY,
                        message=f"Empty interval {_span(interval.start, interval.end)}",
                    )
                )
            if interval.start < avail_start or interval.end > avail_end:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.INTERVAL_OUTSIDE_WINDOW,
                        message=(
                            f"Interval {_span(interval.start, interval.end)} outside "
                            f"window {_span(avail_start, avail_end)}"
                        ),
                    )
                )
            if previous is not None:
                if interval.start < previous.start:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.INTERVALS_UNORDERED,
                            message=f"Interval {_span(interval.start, interval.end)} out of order",
                        )
                    )
                elif interval.start < previous.end:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.INTERVALS_OVERLAP,
                            message=(
                                f"Intervals {_span(previous.start, previous.end)} and "
                                f"{_span(interval.start, interval.end)} overlap"
                            ),
                        )
                    )
            previous = interval

        if bookings is not None and avail_start < avail_end:
            self._validate_coverage(result, intervals, avail_start, avail_end, bookings)

        return result

    def _validate_coverage(
        self,
        result: ValidationResult,
        intervals: Sequence[FreeInterval],
        avail_start: int,
        avail_end: int,
        bookings: Sequence[BookingSlot],
    ) -> None:
        """Check that free time and padded busy time tile the window."""
        buffer = self.config.buffer_micros

        # Sweep line over +1/-1 events: free spans may not overlap anything,
        # and every point of the window must be covered.
        free_events: list[tuple[int, int]] = []
        for interval in intervals:
            free_events.append((interval.start, 1))
            free_events.append((interval.end, -1))

        busy_events: list[tuple[int, int]] = []
        for booking in bookings:
            busy_start = min(max(booking.start - buffer, avail_start), avail_end)
            busy_end = max(min(booking.end + buffer, avail_end), avail_start)
            if busy_start < busy_end:
                busy_events.append((busy_start, 1))
                busy_events.append((busy_end, -1))

        points = sorted(
            {avail_start, avail_end}
            | {t for t, _ in free_events}
            | {t for t, _ in busy_events}
        )
        for left, right in zip(points, points[1:]):
            if left < avail_start or right > avail_end:
                continue
            free_depth = sum(d for t, d in free_events if t <= left)
            busy_depth = sum(d for t, d in busy_events if t <= left)
            if free_depth == 0 and busy_depth == 0:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.COVERAGE_GAP,
                        message=f"Span {_span(left, right)} is neither free nor busy",
                    )
                )
            elif free_depth > 0 and (busy_depth > 0 or free_depth > 1):
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.COVERAGE_OVERLAP,
                        message=f"Span {_span(left, right)} is covered twice",
                    )
                )

    def validate_placement(
        self,
        placement: PlacementResult,
        free_intervals: Sequence[FreeInterval],
        client_slots: Sequence[TimeSlot],
        job_duration: int,
    ) -> ValidationResult:
        """Validate a found placement.

        The job must last exactly ``job_duration`` and lie inside both its
        client slot and a single free interval. Not-found results are valid.
        """
        result = ValidationResult()
        if not placement.found:
            return result

        span = _span(placement.start, placement.end)
        if placement.end - placement.start != job_duration:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.PLACEMENT_WRONG_DURATION,
                    message=f"Placement {span} does not match the job duration",
                )
            )

        if not 0 <= placement.slot_index < len(client_slots):
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.PLACEMENT_UNKNOWN_SLOT,
                    message=f"Slot index {placement.slot_index} does not exist",
                )
            )
        else:
            slot = client_slots[placement.slot_index]
            if placement.start < slot.start or placement.end > slot.end:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.PLACEMENT_OUTSIDE_SLOT,
                        message=f"Placement {span} outside client slot {_span(slot.start, slot.end)}",
                    )
                )

        if not any(free.contains(placement.start, placement.end) for free in free_intervals):
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.PLACEMENT_OUTSIDE_FREE_TIME,
                    message=f"Placement {span} is not inside any free interval",
                )
            )

        return result

    def validate_score(self, score: float, cleaner_id: Optional[str] = None) -> ValidationResult:
        result = ValidationResult()
        if not 0.0 <= score <= 100.0:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.SCORE_OUT_OF_RANGE,
                    message=f"Score {score} outside [0, 100]",
                    cleaner_id=cleaner_id,
                )
            )
        return result

    def validate_roster(
        self,
        roster: RosterResult,
        existing_counts: Optional[Mapping[tuple, int]] = None,
    ) -> ValidationResult:
        """Validate that a roster never double-books or over-fills a cleaner."""
        existing_counts = existing_counts or {}
        buffer = self.config.buffer_micros
        result = ValidationResult()

        by_cleaner_day = defaultdict(list)
        for option in roster.assignments.values():
            by_cleaner_day[(option.cleaner_id, option.date)].append(option)

        for (cleaner_id, day), chosen in by_cleaner_day.items():
            for i, first in enumerate(chosen):
                for second in chosen[i + 1:]:
                    if first.overlaps(second, buffer):
                        result.add_error(
                            ValidationError(
                                error_type=ValidationErrorType.ROSTER_DOUBLE_BOOKING,
                                message=(
                                    f"Bookings {first.booking_id} and {second.booking_id} "
                                    f"collide on {day}"
                                ),
                                cleaner_id=cleaner_id,
                            )
                        )

            cap = self.config.max_jobs_per_day
            total = len(chosen) + existing_counts.get((cleaner_id, day), 0)
            if cap > 0 and total > cap:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.ROSTER_CAP_EXCEEDED,
                        message=f"{total} jobs on {day} exceeds cap of {cap}",
                        cleaner_id=cleaner_id,
                        details={"total": total, "cap": cap},
                    )
                )

        return result
