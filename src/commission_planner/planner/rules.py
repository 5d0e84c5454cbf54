"""Satisfaction rules for each priority type.

Every rule is a pure function ``(combination, priority, travel_time) -> bool``
telling whether a combination satisfies a priority. Rules never modify the
combination; recording satisfied priorities and rejecting combinations is
the verifier's job.
"""

from collections import defaultdict
from itertools import combinations as pairs
from typing import Callable, Iterator

from ..models import (
    BusyTimePriority,
    Combination,
    CommissionPriority,
    FreeDayPriority,
    LocationPriority,
    Priority,
    PriorityType,
    ProfessorPriority,
    SuperpositionPriority,
    Timeblock,
    TravelPriority,
    Weekday,
)
from .geometry import TravelTimeFunction, overlap_degree

RuleFunction = Callable[[Combination, Priority, TravelTimeFunction], bool]


def _cross_subject_timeblocks(combination: Combination) -> Iterator[tuple[Timeblock, Timeblock]]:
    """Yield every pair of timeblocks belonging to two different subjects."""
    for first, second in pairs(combination.subjects, 2):
        for first_block in first.commission_times:
            for second_block in second.commission_times:
                yield first_block, second_block


def check_superposition(
    combination: Combination,
    priority: SuperpositionPriority,
    travel_time: TravelTimeFunction,
) -> bool:
    """No two subjects overlap by more than ``priority.max_overlap`` hours."""
    for first, second in _cross_subject_timeblocks(combination):
        if overlap_degree(first, second) > priority.max_overlap:
            return False
    return True


def check_commission(
    combination: Combination,
    priority: CommissionPriority,
    travel_time: TravelTimeFunction,
) -> bool:
    """The related subject was chosen in the requested commission."""
    subject = combination.get_subject(priority.related_subject_code)
    return subject is not None and subject.commission_name == priority.label


def check_professor(
    combination: Combination,
    priority: ProfessorPriority,
    travel_time: TravelTimeFunction,
) -> bool:
    """The related subject's commission is taught by the requested professor."""
    subject = combination.get_subject(priority.related_subject_code)
    if subject is None or not subject.has_professors():
        return False
    return priority.professor in subject.professors


def check_free_day(
    combination: Combination,
    priority: FreeDayPriority,
    travel_time: TravelTimeFunction,
) -> bool:
    """The requested day (or, for ANY, some weekday) has no classes."""
    if priority.day == Weekday.ANY:
        return len(combination.get_free_days()) > 0
    return not combination.get_timeblocks_by_day(priority.day)


def check_busy_time(
    combination: Combination,
    priority: BusyTimePriority,
    travel_time: TravelTimeFunction,
) -> bool:
    """No class touches any blackout block."""
    for block in combination.timeblocks():
        for busy in priority.blocks:
            if overlap_degree(block, busy) > 0:
                return False
    return True


def check_location(
    combination: Combination,
    priority: LocationPriority,
    travel_time: TravelTimeFunction,
) -> bool:
    """Every day's classes share a single building."""
    buildings_by_day: dict[Weekday, set[str]] = defaultdict(set)
    for block in combination.timeblocks():
        buildings_by_day[block.day].add(block.building)
        if len(buildings_by_day[block.day]) > 1:
            return False
    return True


def check_travel(
    combination: Combination,
    priority: TravelPriority,
    travel_time: TravelTimeFunction,
) -> bool:
    """Moving between buildings never takes longer than ``priority.max_travel``."""
    for first, second in _cross_subject_timeblocks(combination):
        if first.building == second.building:
            continue
        if travel_time(first, second) > priority.max_travel:
            return False
    return True


RULES: dict[PriorityType, RuleFunction] = {
    PriorityType.SUPERPOSITION: check_superposition,
    PriorityType.COMMISSION: check_commission,
    PriorityType.PROFESSOR: check_professor,
    PriorityType.FREEDAY: check_free_day,
    PriorityType.BUSYTIME: check_busy_time,
    PriorityType.LOCATION: check_location,
    PriorityType.TRAVEL: check_travel,
}


def is_decided(partial: Combination, priority: Priority) -> bool:
    """Check if a violation found on a partial combination is final.

    Adding subjects only adds timeblocks, so once an overlap, a busy
    class, a mixed-building day, a long trip or a lost free day shows up
    it stays. COMMISSION and PROFESSOR priorities can only be judged once
    their related subject has been chosen.
    """
    if priority.kind in (PriorityType.COMMISSION, PriorityType.PROFESSOR):
        return partial.get_subject(priority.related_subject_code) is not None
    return True
