"""Free-interval computation for a cleaner's day.

Subtracts existing bookings, each padded by a buffer on both sides, from a
daily availability window.
"""

from collections.abc import Iterable

from cleanmatch.domain.models import BookingSlot, FreeInterval


def compute_free_intervals(
    avail_start: int,
    avail_end: int,
    bookings: Iterable[BookingSlot],
    buffer: int,
) -> list[FreeInterval]:
    """Calculate the free blocks inside an availability window.

    Args:
        avail_start: Start of the working window.
        avail_end: End of the working window.
        bookings: Existing bookings, in any order and possibly overlapping.
        buffer: Idle time kept before and after each booking (0 disables).

    Returns:
        Free intervals ordered by start and pairwise disjoint. Empty when
        the window is inverted or fully booked.
    """
    if avail_start >= avail_end:
        return []

    intervals = []
    cursor = avail_start

    # The sweep below needs bookings in start order.
    for booking in sorted(bookings, key=lambda b: b.start):
        # Clamp the padded booking into the window, so bookings lying
        # entirely outside it collapse to an empty span at the nearest edge.
        busy_start = min(max(booking.start - buffer, avail_start), avail_end)
        busy_end = max(min(booking.end + buffer, avail_end), avail_start)

        if cursor < busy_start:
            intervals.append(FreeInterval(start=cursor, end=busy_start))

        cursor = max(cursor, busy_end)

    if cursor < avail_end:
        intervals.append(FreeInterval(start=cursor, end=avail_end))

    return intervals
