"""Single-day placement of a job inside a cleaner's free time.

For each intersection of a client time slot with a free interval, the job
is tried flush against the start (left-pack) and flush against the end
(right-pack) of the intersection. The winner is the candidate that leaves
the least fragmented idle time in its free interval, so later bookings
still find usable blocks.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from cleanmatch.domain.models import FreeInterval, PlacementResult, TimeSlot
from cleanmatch.domain.timecodec import HOUR_MICROS, micros_to_hhmm


@dataclass(frozen=True)
class PlacementCandidate:
    """A concrete start/end evaluated against its containing free interval.

    Attributes:
        start: Job start.
        end: Job end.
        slot_index: Client slot the candidate came from.
        min_gap: Smaller of the idle gaps to the interval edges.
        total_gap: Sum of both idle gaps.
    """

    start: int
    end: int
    slot_index: int
    min_gap: int
    total_gap: int

    @classmethod
    def evaluate(
        cls, free: FreeInterval, start: int, end: int, slot_index: int
    ) -> "PlacementCandidate":
        gap_before = start - free.start
        gap_after = free.end - end
        return cls(
            start=start,
            end=end,
            slot_index=slot_index,
            min_gap=min(gap_before, gap_after),
            total_gap=gap_before + gap_after,
        )

    def __repr__(self) -> str:
        return (
            f"PlacementCandidate({micros_to_hhmm(self.start)}-{micros_to_hhmm(self.end)}, "
            f"slot={self.slot_index}, min_gap={self.min_gap}, total_gap={self.total_gap})"
        )


def is_better_placement(a: PlacementCandidate, b: PlacementCandidate) -> bool:
    """Return True if ``a`` is strictly preferred over ``b``.

    Priority: 1) smaller min gap (flush with an edge), 2) smaller total gap
    (tighter interval), 3) earlier client slot.
    """
    if a.min_gap != b.min_gap:
        return a.min_gap < b.min_gap
    if a.total_gap != b.total_gap:
        return a.total_gap < b.total_gap
    return a.slot_index < b.slot_index


def generate_candidates(
    free_intervals: Sequence[FreeInterval],
    client_slots: Sequence[TimeSlot],
    job_duration: int,
) -> list[PlacementCandidate]:
    """Generate every left/right-packed candidate in slot order.

    Args:
        free_intervals: The cleaner's free blocks for the day.
        client_slots: Client preferred windows; list position is the slot index.
        job_duration: Job length.

    Returns:
        Candidates ordered by slot, then free interval, left-pack first.
    """
    candidates = []
    for slot_index, slot in enumerate(client_slots):
        for free in free_intervals:
            int_start = max(slot.start, free.start)
            int_end = min(slot.end, free.end)

            if int_end - int_start < job_duration:
                continue

            candidates.append(
                PlacementCandidate.evaluate(
                    free, int_start, int_start + job_duration, slot_index
                )
            )

            right_start = int_end - job_duration
            if right_start != int_start:
                candidates.append(
                    PlacementCandidate.evaluate(free, right_start, int_end, slot_index)
                )
    return candidates


def find_optimal_placement(
    free_intervals: Sequence[FreeInterval],
    client_slots: Sequence[TimeSlot],
    job_duration: int,
) -> PlacementResult:
    """Find the best start/end for a job within one day.

    Args:
        free_intervals: The cleaner's free blocks for the day.
        client_slots: Client preferred windows in preference order.
        job_duration: Job length.

    Returns:
        PlacementResult; ``found`` is False when nothing fits.
    """
    best: Optional[PlacementCandidate] = None
    for candidate in generate_candidates(free_intervals, client_slots, job_duration):
        if best is None or is_better_placement(candidate, best):
            best = candidate

    if best is None:
        return PlacementResult.not_found()

    return PlacementResult(
        start=best.start,
        end=best.end,
        slot_index=best.slot_index,
        gap_score_h=best.total_gap / HOUR_MICROS,
        found=True,
    )
