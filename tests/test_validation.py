"""Tests for result validation."""

from datetime import date

import pytest

from cleanmatch.domain.config import MatchConfig
from cleanmatch.domain.models import (
    AssignmentOption,
    BookingSlot,
    FreeInterval,
    PlacementResult,
    RosterResult,
    TimeSlot,
)
from cleanmatch.domain.timecodec import hours as h
from cleanmatch.domain.timecodec import hours_minutes as hm
from cleanmatch.validation.validator import (
    PlacementValidator,
    ValidationError,
    ValidationErrorType,
)

MON = date(2026, 3, 2)


class TestPlacementValidator:
    """Tests for PlacementValidator."""

    @pytest.fixture
    def validator(self):
        """Create a validator with the default config."""
        return PlacementValidator()

    def test_valid_free_intervals(self, validator):
        intervals = [FreeInterval(h(8), hm(9, 45)), FreeInterval(hm(12, 15), h(17))]
        result = validator.validate_free_intervals(
            intervals, h(8), h(17), [BookingSlot(h(10), h(12))]
        )
        assert result.is_valid, [str(e) for e in result.errors]

    def test_interval_outside_window(self, validator):
        result = validator.validate_free_intervals([FreeInterval(h(7), h(9))], h(8), h(17))

        assert not result.is_valid
        assert ValidationErrorType.INTERVAL_OUTSIDE_WINDOW in result.error_types()

    def test_empty_interval(self, validator):
        result = validator.validate_free_intervals([FreeInterval(h(9), h(9))], h(8), h(17))
        assert ValidationErrorType.INTERVAL_EMPTY in result.error_types()

    def test_overlapping_intervals(self, validator):
        intervals = [FreeInterval(h(8), h(11)), FreeInterval(h(10), h(12))]
        result = validator.validate_free_intervals(intervals, h(8), h(17))
        assert ValidationErrorType.INTERVALS_OVERLAP in result.error_types()

    def test_unordered_intervals(self, validator):
        intervals = [FreeInterval(h(12), h(13)), FreeInterval(h(8), h(9))]
        result = validator.validate_free_intervals(intervals, h(8), h(17))
        assert ValidationErrorType.INTERVALS_UNORDERED in result.error_types()

    def test_coverage_gap(self, validator):
        """Free time is missing for 12:15-13:00."""
        intervals = [FreeInterval(h(8), hm(9, 45)), FreeInterval(h(13), h(17))]
        result = validator.validate_free_intervals(
            intervals, h(8), h(17), [BookingSlot(h(10), h(12))]
        )
        assert result.error_types() == {ValidationErrorType.COVERAGE_GAP}

    def test_coverage_overlap(self, validator):
        """Free time runs into the buffer before the booking."""
        intervals = [FreeInterval(h(8), h(10)), FreeInterval(hm(12, 15), h(17))]
        result = validator.validate_free_intervals(
            intervals, h(8), h(17), [BookingSlot(h(10), h(12))]
        )
        assert result.error_types() == {ValidationErrorType.COVERAGE_OVERLAP}

    def test_valid_placement(self, validator):
        placement = PlacementResult(hm(10, 15), hm(12, 15), 0, 1.5, True)
        result = validator.validate_placement(
            placement, [FreeInterval(hm(10, 15), hm(13, 45))], [TimeSlot(h(10), h(13))], h(2)
        )
        assert result.is_valid

    def test_not_found_placement_is_valid(self, validator):
        result = validator.validate_placement(PlacementResult.not_found(), [], [], h(2))
        assert result.is_valid

    def test_placement_wrong_duration(self, validator):
        placement = PlacementResult(h(10), h(11), 0, 0.0, True)
        result = validator.validate_placement(
            placement, [FreeInterval(h(10), h(12))], [TimeSlot(h(10), h(12))], h(2)
        )
        assert result.error_types() == {ValidationErrorType.PLACEMENT_WRONG_DURATION}

    def test_placement_outside_slot(self, validator):
        placement = PlacementResult(h(9), h(11), 0, 0.0, True)
        result = validator.validate_placement(
            placement, [FreeInterval(h(8), h(12))], [TimeSlot(h(10), h(12))], h(2)
        )
        assert result.error_types() == {ValidationErrorType.PLACEMENT_OUTSIDE_SLOT}

    def test_placement_outside_free_time(self, validator):
        placement = PlacementResult(h(10), h(12), 0, 0.0, True)
        result = validator.validate_placement(
            placement, [FreeInterval(h(11), h(13))], [TimeSlot(h(10), h(12))], h(2)
        )
        assert result.error_types() == {ValidationErrorType.PLACEMENT_OUTSIDE_FREE_TIME}

    def test_placement_unknown_slot(self, validator):
        placement = PlacementResult(h(10), h(12), 4, 0.0, True)
        result = validator.validate_placement(
            placement, [FreeInterval(h(10), h(12))], [TimeSlot(h(10), h(12))], h(2)
        )
        assert result.error_types() == {ValidationErrorType.PLACEMENT_UNKNOWN_SLOT}

    @pytest.mark.parametrize("score", [0.0, 55.5, 100.0])
    def test_score_in_range(self, validator, score):
        assert validator.validate_score(score).is_valid

    @pytest.mark.parametrize("score", [-0.1, 100.5])
    def test_score_out_of_range(self, validator, score):
        result = validator.validate_score(score, cleaner_id="C1")
        assert result.error_types() == {ValidationErrorType.SCORE_OUT_OF_RANGE}
        assert result.errors[0].cleaner_id == "C1"

    def test_roster_double_booking(self, validator):
        roster = RosterResult(
            assignments={
                "B1": AssignmentOption("B1", "A", MON, h(9), h(11), 80.0),
                "B2": AssignmentOption("B2", "A", MON, hm(11, 5), hm(13, 5), 70.0),
            },
            status="GREEDY",
        )
        result = validator.validate_roster(roster)
        assert result.error_types() == {ValidationErrorType.ROSTER_DOUBLE_BOOKING}

    def test_roster_cap_exceeded(self):
        validator = PlacementValidator(MatchConfig(max_jobs_per_day=2))
        roster = RosterResult(
            assignments={"B1": AssignmentOption("B1", "A", MON, h(9), h(11), 80.0)},
            status="GREEDY",
        )

        assert validator.validate_roster(roster, {("A", MON): 1}).is_valid
        result = validator.validate_roster(roster, {("A", MON): 2})
        assert result.error_types() == {ValidationErrorType.ROSTER_CAP_EXCEEDED}
        assert result.errors[0].details == {"total": 3, "cap": 2}


class TestValidationError:
    """Tests for ValidationError formatting."""

    def test_str_with_cleaner(self):
        error = ValidationError(
            error_type=ValidationErrorType.SCORE_OUT_OF_RANGE,
            message="Score 120 outside [0, 100]",
            cleaner_id="C7",
        )
        assert str(error) == "[score_out_of_range] Cleaner C7: Score 120 outside [0, 100]"

    def test_str_without_cleaner(self):
        error = ValidationError(
            error_type=ValidationErrorType.INTERVAL_EMPTY,
            message="Empty interval 09:00-09:00",
        )
        assert str(error) == "[interval_empty] Empty interval 09:00-09:00"
