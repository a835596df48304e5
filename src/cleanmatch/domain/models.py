"""Domain models for the matchmaking engine.

This module contains the value objects passed between the placement,
scheduling, scoring and ranking layers. All times are integer microseconds
since midnight (see ``cleanmatch.domain.timecodec``).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.timecodec import HOUR_MICROS, micros_to_hhmm


@dataclass(frozen=True)
class TimeSlot:
    """A client's preferred time window on a given day.

    Attributes:
        start: Window start (inclusive).
        end: Window end (exclusive).
    """

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"TimeSlot({micros_to_hhmm(self.start)}-{micros_to_hhmm(self.end)})"


@dataclass(frozen=True)
class BookingSlot:
    """An existing, committed job occupying part of a cleaner's day."""

    start: int
    end: int

    def __repr__(self) -> str:
        return f"BookingSlot({micros_to_hhmm(self.start)}-{micros_to_hhmm(self.end)})"


@dataclass(frozen=True)
class FreeInterval:
    """A maximal idle block within a cleaner's availability window."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def contains(self, start: int, end: int) -> bool:
        """Check if ``[start, end)`` lies entirely inside this interval."""
        return self.start <= start and end <= self.end

    def __repr__(self) -> str:
        return f"FreeInterval({micros_to_hhmm(self.start)}-{micros_to_hhmm(self.end)})"


@dataclass(frozen=True)
class PlacementResult:
    """The chosen single-day placement for a job.

    Attributes:
        start: Job start.
        end: Job end.
        slot_index: Which client time slot was used (0-based).
        gap_score_h: Total idle time in hours flanking the job inside its
            containing free interval (lower = tighter packing).
        found: False when no viable placement exists; other fields are
            then meaningless.
    """

    start: int = 0
    end: int = 0
    slot_index: int = 0
    gap_score_h: float = 0.0
    found: bool = False

    @classmethod
    def not_found(cls) -> "PlacementResult":
        return cls(found=False)


@dataclass(frozen=True)
class DatedTimeSlot:
    """A client time window tied to a specific date.

    Attributes:
        date: Calendar date of the window.
        day_of_week: 0 = Sunday ... 6 = Saturday.
        start: Window start.
        end: Window end.
        slot_index: The caller's original index for this slot.
    """

    date: date
    day_of_week: int
    start: int
    end: int
    slot_index: int

    def to_time_slot(self) -> TimeSlot:
        """Drop the date, keeping only the intra-day window."""
        return TimeSlot(start=self.start, end=self.end)


@dataclass(frozen=True)
class DateAvailability:
    """Pre-computed scheduling input for one candidate date.

    Attributes:
        date: Calendar date.
        avail_start: Start of the cleaner's working window.
        avail_end: End of the cleaner's working window.
        free_intervals: Free blocks left after existing bookings.
        booking_count: Bookings the cleaner already has that day.
    """

    date: date
    avail_start: int
    avail_end: int
    free_intervals: tuple[FreeInterval, ...] = ()
    booking_count: int = 0


@dataclass(frozen=True)
class DatedPlacementResult:
    """The best placement found across a range of dates."""

    date: Optional[date] = None
    start: int = 0
    end: int = 0
    slot_index: int = 0
    gap_score_h: float = 0.0
    found: bool = False

    @classmethod
    def not_found(cls) -> "DatedPlacementResult":
        return cls(found=False)

    def __repr__(self) -> str:
        if not self.found:
            return "DatedPlacementResult(not found)"
        return (
            f"DatedPlacementResult({self.date}: "
            f"{micros_to_hhmm(self.start)}-{micros_to_hhmm(self.end)}, "
            f"slot={self.slot_index}, gap={self.gap_score_h:.2f}h)"
        )


@dataclass(frozen=True)
class ScoreInput:
    """Everything the match scorer needs about one candidate cleaner."""

    rating_avg: float = 0.0
    total_jobs_done: int = 0
    is_area_match: bool = False
    placement_found: bool = False
    gap_score_h: float = 0.0
    day_booking_count: int = 0
    week_booking_count: int = 0
    config: MatchConfig = field(default_factory=MatchConfig)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Individual terms of a match score.

    ``raw_total`` is the unclamped sum; ``total`` is clamped to [0, 100].
    """

    base: float
    rating: float
    experience: float
    area: float
    packing: float
    unavailable_penalty: float
    day_load_penalty: float
    week_load_penalty: float
    raw_total: float
    total: float

    def as_dict(self) -> dict[str, float]:
        return {
            "base": self.base,
            "rating": self.rating,
            "experience": self.experience,
            "area": self.area,
            "packing": self.packing,
            "unavailable_penalty": self.unavailable_penalty,
            "day_load_penalty": self.day_load_penalty,
            "week_load_penalty": self.week_load_penalty,
            "raw_total": self.raw_total,
            "total": self.total,
        }


@dataclass(frozen=True)
class Availability:
    """A cleaner's working window on one date.

    Attributes:
        start: First moment the cleaner can work.
        end: Moment the cleaner stops working (exclusive).
    """

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end


@dataclass
class CleanerCandidate:
    """A cleaner being considered for a booking.

    Attributes:
        id: Cleaner identifier.
        rating_avg: Average client rating (0-5).
        total_jobs_done: Lifetime completed jobs.
        is_area_match: Whether the cleaner serves the booking's area.
        availability: Working window per date. Dates missing here are
            treated as days off.
        bookings: Existing bookings per date, in any order.
        week_booking_count: Bookings in the week of the requested dates.
    """

    id: str
    rating_avg: float = 0.0
    total_jobs_done: int = 0
    is_area_match: bool = False
    availability: dict[date, Availability] = field(default_factory=dict)
    bookings: dict[date, list[BookingSlot]] = field(default_factory=dict)
    week_booking_count: int = 0

    def get_bookings(self, day: date) -> list[BookingSlot]:
        return self.bookings.get(day, [])

    def booking_count(self, day: date) -> int:
        return len(self.get_bookings(day))


@dataclass(frozen=True)
class MatchSuggestion:
    """Ranking outcome for one cleaner."""

    cleaner_id: str
    placement: DatedPlacementResult
    score: float
    breakdown: ScoreBreakdown

    @property
    def is_available(self) -> bool:
        return self.placement.found


@dataclass
class MatchRanking:
    """Ranked suggestions for a booking.

    Attributes:
        suggestions: Suggestions ordered by descending score, truncated to
            ``MatchConfig.max_results``.
        total_candidates: Number of cleaners evaluated.
        available_count: Cleaners with a viable placement.
        needs_wider_search: True when fewer than
            ``MatchConfig.min_available_count`` cleaners are available.
    """

    suggestions: list[MatchSuggestion] = field(default_factory=list)
    total_candidates: int = 0
    available_count: int = 0
    needs_wider_search: bool = False

    def best_available(self) -> Optional[MatchSuggestion]:
        """Return the top suggestion that has a placement, if any."""
        for suggestion in self.suggestions:
            if suggestion.is_available:
                return suggestion
        return None


@dataclass(frozen=True)
class AssignmentOption:
    """A possible (booking, cleaner) pairing for roster assignment.

    Usually built from a ``MatchSuggestion`` of each booking's ranking.
    """

    booking_id: str
    cleaner_id: str
    date: date
    start: int
    end: int
    score: float

    @classmethod
    def from_suggestion(
        cls, booking_id: str, suggestion: MatchSuggestion
    ) -> "AssignmentOption":
        placement = suggestion.placement
        return cls(
            booking_id=booking_id,
            cleaner_id=suggestion.cleaner_id,
            date=placement.date,
            start=placement.start,
            end=placement.end,
            score=suggestion.score,
        )

    def overlaps(self, other: "AssignmentOption", buffer: int = 0) -> bool:
        """Check if two options collide for the same cleaner and date.

        Jobs must be at least ``buffer`` apart.
        """
        if self.cleaner_id != other.cleaner_id or self.date != other.date:
            return False
        return self.start < other.end + buffer and other.start < self.end + buffer

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start) / HOUR_MICROS


@dataclass
class RosterResult:
    """Result of assigning several bookings across a roster.

    Attributes:
        assignments: Booking ID to the chosen option.
        unassigned: Booking IDs left without a cleaner.
        status: Solver status ("GREEDY", "OPTIMAL", "FEASIBLE", ...).
        objective_value: Total score of the chosen options.
    """

    assignments: dict[str, AssignmentOption] = field(default_factory=dict)
    unassigned: list[str] = field(default_factory=list)
    status: str = "UNKNOWN"
    objective_value: float = 0.0

    @property
    def is_feasible(self) -> bool:
        return self.status in ("OPTIMAL", "FEASIBLE", "GREEDY")
