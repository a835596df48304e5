"""Domain models, time codec and configuration for matchmaking."""

from cleanmatch.domain.config import (
    DictSettingsSource,
    EnvSettingsSource,
    MatchConfig,
    SettingsSource,
    load_match_config,
)
from cleanmatch.domain.models import (
    AssignmentOption,
    Availability,
    BookingSlot,
    CleanerCandidate,
    DateAvailability,
    DatedPlacementResult,
    DatedTimeSlot,
    FreeInterval,
    MatchRanking,
    MatchSuggestion,
    PlacementResult,
    RosterResult,
    ScoreBreakdown,
    ScoreInput,
    TimeSlot,
)
from cleanmatch.domain.timecodec import (
    HOUR_MICROS,
    MINUTE_MICROS,
    hhmm_to_micros,
    micros_to_hhmm,
)

__all__ = [
    # Models
    "AssignmentOption",
    "Availability",
    "BookingSlot",
    "CleanerCandidate",
    "DateAvailability",
    "DatedPlacementResult",
    "DatedTimeSlot",
    "FreeInterval",
    "MatchRanking",
    "MatchSuggestion",
    "PlacementResult",
    "RosterResult",
    "ScoreBreakdown",
    "ScoreInput",
    "TimeSlot",
    # Configuration
    "DictSettingsSource",
    "EnvSettingsSource",
    "MatchConfig",
    "SettingsSource",
    "load_match_config",
    # Time codec
    "HOUR_MICROS",
    "MINUTE_MICROS",
    "hhmm_to_micros",
    "micros_to_hhmm",
]
