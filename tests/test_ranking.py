"""Tests for candidate ranking."""

from datetime import date

import pytest

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.models import (
    Availability,
    BookingSlot,
    CleanerCandidate,
    DatedTimeSlot,
)
from cleanmatch.domain.timecodec import hours as h
from cleanmatch.matching.ranking import (
    build_candidate_availabilities,
    evaluate_candidate,
    rank_candidates,
)

MON = date(2026, 3, 2)
TUE = date(2026, 3, 3)


def make_cleaner(cleaner_id, rating=4.0, jobs=20, area=True, bookings=None, days=(MON,)):
    return CleanerCandidate(
        id=cleaner_id,
        rating_avg=rating,
        total_jobs_done=jobs,
        is_area_match=area,
        availability={day: Availability(h(8), h(17)) for day in days},
        bookings=bookings or {},
    )


class TestEvaluateCandidate:
    """Tests for evaluate_candidate."""

    @pytest.fixture
    def slots(self):
        return [DatedTimeSlot(MON, 1, h(8), h(17), 0)]

    def test_free_cleaner_placed_and_scored(self, slots):
        suggestion = evaluate_candidate(make_cleaner("C1"), slots, h(3), MatchConfig())

        assert suggestion.is_available
        assert suggestion.placement.date == MON
        assert (suggestion.placement.start, suggestion.placement.end) == (h(8), h(11))
        assert suggestion.score == suggestion.breakdown.total

    def test_day_load_uses_winning_date(self, slots):
        cleaner = make_cleaner(
            "C1", bookings={MON: [BookingSlot(h(8), h(10)), BookingSlot(h(14), h(17))]}
        )
        suggestion = evaluate_candidate(cleaner, slots, h(2), MatchConfig())

        assert suggestion.is_available
        assert suggestion.breakdown.day_load_penalty == pytest.approx(2 * 10.0 / 2)

    def test_fully_booked_cleaner_penalised(self, slots):
        cleaner = make_cleaner("C1", bookings={MON: [BookingSlot(h(8), h(17))]})
        suggestion = evaluate_candidate(cleaner, slots, h(2), MatchConfig())

        assert not suggestion.is_available
        assert suggestion.breakdown.unavailable_penalty == 40.0
        assert suggestion.breakdown.day_load_penalty == 0.0

    def test_dates_without_availability_are_days_off(self):
        cleaner = make_cleaner("C1", days=(TUE,))
        slots = [DatedTimeSlot(MON, 1, h(8), h(17), 0)]
        assert not evaluate_candidate(cleaner, slots, h(2), MatchConfig()).is_available

    def test_availabilities_sorted_by_date(self):
        cleaner = make_cleaner("C1", days=(TUE, MON))
        availabilities = build_candidate_availabilities(cleaner, MatchConfig())
        assert [a.date for a in availabilities] == [MON, TUE]


class TestRankCandidates:
    """Tests for rank_candidates."""

    @pytest.fixture
    def slots(self):
        return [DatedTimeSlot(MON, 1, h(8), h(17), 0)]

    def test_sorted_by_descending_score(self, slots):
        cleaners = [
            make_cleaner("low", rating=2.0),
            make_cleaner("high", rating=5.0),
            make_cleaner("mid", rating=3.5),
        ]
        ranking = rank_candidates(cleaners, slots, h(2), MatchConfig())

        assert [s.cleaner_id for s in ranking.suggestions] == ["high", "mid", "low"]

    def test_ties_keep_roster_order(self, slots):
        cleaners = [make_cleaner("first"), make_cleaner("second")]
        ranking = rank_candidates(cleaners, slots, h(2), MatchConfig())

        assert [s.cleaner_id for s in ranking.suggestions] == ["first", "second"]

    def test_truncated_to_max_results(self, slots):
        cleaners = [make_cleaner(f"C{i}") for i in range(8)]
        ranking = rank_candidates(cleaners, slots, h(2), MatchConfig(max_results=3))

        assert len(ranking.suggestions) == 3
        assert ranking.total_candidates == 8
        assert ranking.available_count == 8

    def test_zero_max_results_returns_all(self, slots):
        cleaners = [make_cleaner(f"C{i}") for i in range(8)]
        ranking = rank_candidates(cleaners, slots, h(2), MatchConfig(max_results=0))

        assert len(ranking.suggestions) == 8

    def test_needs_wider_search_when_few_available(self, slots):
        cleaners = [
            make_cleaner("free"),
            make_cleaner("busy", bookings={MON: [BookingSlot(h(8), h(17))]}),
        ]
        ranking = rank_candidates(cleaners, slots, h(2), MatchConfig(min_available_count=2))

        assert ranking.available_count == 1
        assert ranking.needs_wider_search

    def test_enough_available(self, slots):
        cleaners = [make_cleaner("a"), make_cleaner("b")]
        ranking = rank_candidates(cleaners, slots, h(2), MatchConfig(min_available_count=2))

        assert not ranking.needs_wider_search

    def test_best_available_skips_unplaced(self, slots):
        """A top-ranked but fully booked cleaner is passed over."""
        cleaners = [
            make_cleaner("busy", rating=5.0, jobs=500, bookings={MON: [BookingSlot(h(8), h(17))]}),
            make_cleaner("free", rating=1.0, jobs=0, area=False),
        ]
        ranking = rank_candidates(cleaners, slots, h(2), MatchConfig())

        best = ranking.best_available()
        assert best is not None
        assert best.cleaner_id == "free"

    def test_best_available_none_when_nobody_fits(self, slots):
        cleaners = [make_cleaner("busy", bookings={MON: [BookingSlot(h(8), h(17))]})]
        ranking = rank_candidates(cleaners, slots, h(2), MatchConfig())

        assert ranking.best_available() is None
        assert ranking.needs_wider_search

    def test_empty_roster(self, slots):
        ranking = rank_candidates([], slots, h(2))

        assert ranking.suggestions == []
        assert ranking.available_count == 0
        assert ranking.needs_wider_search

    def test_load_balancing_prefers_idle_cleaner(self, slots):
        busy = make_cleaner("busy", bookings={MON: [BookingSlot(h(15), h(17))]})
        busy.week_booking_count = 8
        idle = make_cleaner("idle")
        ranking = rank_candidates([busy, idle], slots, h(2), MatchConfig())

        assert ranking.suggestions[0].cleaner_id == "idle"
