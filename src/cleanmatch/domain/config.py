"""Matchmaking configuration and settings loading.

``MatchConfig`` holds the admin-tunable parameters used by every stage of
matching. It is immutable for the duration of a matching run. Values are
read from an external key-value settings store through the
``SettingsSource`` interface, falling back to the defaults for any key
that is missing or holds an unusable value.
"""

import logging
import math
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Optional

from cleanmatch.domain.timecodec import MINUTE_MICROS

logger = logging.getLogger(__name__)

BUFFER_MINUTES_KEY = "matchmaking_buffer_minutes"
MAX_JOBS_PER_DAY_KEY = "matchmaking_max_jobs_per_day"
LOAD_BALANCE_WEIGHT_KEY = "matchmaking_load_balance_weight"
MAX_RESULTS_KEY = "matchmaking_max_results"
MIN_AVAILABLE_COUNT_KEY = "matchmaking_min_available_count"


@dataclass(frozen=True)
class MatchConfig:
    """Tunable matchmaking parameters.

    Attributes:
        buffer_minutes: Idle time required before and after every booking.
        max_jobs_per_day: Daily job cap per cleaner (0 disables the cap).
        load_balance_weight: Strength of the workload penalty in scoring
            (0 disables load balancing).
        max_results: Maximum suggestions returned by a ranking
            (0 returns all).
        min_available_count: Below this many available cleaners the
            ranking asks the caller to widen its search.
    """

    buffer_minutes: int = 15
    max_jobs_per_day: int = 6
    load_balance_weight: float = 10.0
    max_results: int = 5
    min_available_count: int = 5

    def __post_init__(self):
        validate_match_config(self)

    @property
    def buffer_micros(self) -> int:
        """Buffer between jobs in microseconds."""
        return self.buffer_minutes * MINUTE_MICROS


def validate_match_config(config: MatchConfig) -> None:
    if config.buffer_minutes < 0:
        raise ValueError("buffer_minutes must be >= 0")
    if config.max_jobs_per_day < 0:
        raise ValueError("max_jobs_per_day must be >= 0")
    if config.load_balance_weight < 0:
        raise ValueError("load_balance_weight must be >= 0")
    if config.max_results < 0:
        raise ValueError("max_results must be >= 0")
    if config.min_available_count < 0:
        raise ValueError("min_available_count must be >= 0")


class SettingsSource(ABC):
    """Read-only view of the admin key-value settings store."""

    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Return the raw stored value for ``key``, or None if absent."""
        pass


class DictSettingsSource(SettingsSource):
    """Settings backed by an in-memory mapping.

    Typically built from the rows of the platform settings table.
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values = dict(values or {})

    def get_setting(self, key: str) -> Optional[str]:
        value = self._values.get(key)
        return None if value is None else str(value)


class EnvSettingsSource(SettingsSource):
    """Settings read from environment variables.

    The key is upper-cased and prefixed, so ``matchmaking_buffer_minutes``
    is read from ``MATCHMAKING_BUFFER_MINUTES`` by default.
    """

    def __init__(self, prefix: str = "", environ: Optional[Mapping[str, str]] = None):
        self.prefix = prefix
        self._environ = os.environ if environ is None else environ

    def get_setting(self, key: str) -> Optional[str]:
        return self._environ.get(f"{self.prefix}{key}".upper())


def _read(
    source: SettingsSource,
    key: str,
    parse: Callable[[str], float],
    accept: Callable[[float], bool],
    default,
):
    raw = source.get_setting(key)
    if raw is None:
        return default
    try:
        value = parse(raw.strip())
    except ValueError:
        logger.warning("Ignoring unparseable setting | key=%s | value=%r", key, raw)
        return default
    if not accept(value):
        logger.warning("Ignoring out-of-range setting | key=%s | value=%r", key, raw)
        return default
    return value


def load_match_config(source: Optional[SettingsSource] = None) -> MatchConfig:
    """Build a MatchConfig from a settings source.

    Args:
        source: Settings store to read. None yields the defaults.

    Returns:
        MatchConfig with stored overrides applied.
    """
    defaults = MatchConfig()
    if source is None:
        return defaults

    config = MatchConfig(
        buffer_minutes=_read(
            source, BUFFER_MINUTES_KEY, int, lambda n: n > 0, defaults.buffer_minutes
        ),
        max_jobs_per_day=_read(
            source, MAX_JOBS_PER_DAY_KEY, int, lambda n: n > 0, defaults.max_jobs_per_day
        ),
        load_balance_weight=_read(
            source,
            LOAD_BALANCE_WEIGHT_KEY,
            float,
            lambda f: math.isfinite(f) and f >= 0,
            defaults.load_balance_weight,
        ),
        max_results=_read(
            source, MAX_RESULTS_KEY, int, lambda n: n > 0, defaults.max_results
        ),
        min_available_count=_read(
            source,
            MIN_AVAILABLE_COUNT_KEY,
            int,
            lambda n: n >= 0,
            defaults.min_available_count,
        ),
    )

    logger.info(
        "Match config loaded | buffer=%smin | max_jobs=%s | load_weight=%.1f | "
        "max_results=%s | min_available=%s",
        config.buffer_minutes,
        config.max_jobs_per_day,
        config.load_balance_weight,
        config.max_results,
        config.min_available_count,
    )
    return config
