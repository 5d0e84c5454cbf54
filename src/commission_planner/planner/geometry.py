"""Time overlap and travel time between timeblocks."""

from typing import TYPE_CHECKING, Callable

from ..constants import DEFAULT_TRAVEL_TIME
from ..utils import minutes_of_day

if TYPE_CHECKING:
    from ..models import Timeblock

TravelTimeFunction = Callable[["Timeblock", "Timeblock"], float]


def overlap_degree(first: "Timeblock", second: "Timeblock") -> float:
    """Get how many hours two timeblocks share.

    Blocks on different days never overlap. Blocks that only touch
    (one ends when the other starts) have an overlap of 0.

    Args:
        first: First timeblock
        second: Second timeblock

    Returns:
        Length of the intersection in hours (0.0 if none)
    """
    if first.day != second.day:
        return 0.0

    start = max(minutes_of_day(first.start), minutes_of_day(second.start))
    end = min(minutes_of_day(first.end), minutes_of_day(second.end))
    if end <= start:
        return 0.0
    return (end - start) / 60


def constant_travel_time(hours: float = DEFAULT_TRAVEL_TIME) -> TravelTimeFunction:
    """Build a travel time function returning a fixed estimate.

    The estimate applies to blocks on the same day in different buildings;
    blocks on different days or in the same building need no travel.
    """

    def travel_time(first: "Timeblock", second: "Timeblock") -> float:
        if first.day != second.day or first.building == second.building:
            return 0.0
        return hours

    return travel_time


default_travel_time = constant_travel_time()
