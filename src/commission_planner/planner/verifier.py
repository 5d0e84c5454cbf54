"""Priority verification of combinations."""

import logging

from ..exceptions import UnknownPriorityKindError
from ..models import Combination, Priority, PriorityType
from .geometry import TravelTimeFunction, default_travel_time
from .rules import RULES, is_decided

logger = logging.getLogger(__name__)


class PriorityVerifier:
    """
    Evaluates a list of priorities against complete combinations.

    Priorities are checked in list order. A satisfied priority records its
    index in ``combination.priorities``; a violated exclusive priority
    rejects the combination at once, leaving later priorities unevaluated;
    a violated non-exclusive priority is just not recorded.

    Instances are callable, so they can be handed to the enumerator as its
    acceptance predicate.
    """

    def __init__(
        self,
        priorities: list[Priority],
        travel_time: TravelTimeFunction | None = None,
    ):
        """
        Initialize the verifier.

        Args:
            priorities: Ordered priorities; indices refer to this order.
            travel_time: Travel time estimate between two timeblocks.
                         Defaults to a constant estimate per building change.

        Raises:
            UnknownPriorityKindError: If a priority has no matching rule.
        """
        for priority in priorities:
            if getattr(priority, "kind", None) not in RULES:
                raise UnknownPriorityKindError(
                    str(getattr(priority, "kind", type(priority).__name__)),
                    [k.value for k in PriorityType],
                )

        self.priorities = list(priorities)
        self.travel_time = travel_time or default_travel_time

    def __call__(self, combination: Combination) -> bool:
        return self.verify(combination)

    def is_satisfied(self, combination: Combination, priority: Priority) -> bool:
        """Check a single priority without recording anything."""
        return RULES[priority.kind](combination, priority, self.travel_time)

    def verify(self, combination: Combination) -> bool:
        """
        Verify a complete combination.

        Args:
            combination: Combination to check; satisfied priority indices
                         are appended to its ``priorities`` list.

        Returns:
            False if an exclusive priority is violated, True otherwise.
        """
        for index, priority in enumerate(self.priorities):
            if self.is_satisfied(combination, priority):
                if index not in combination.priorities:
                    combination.priorities.append(index)
            elif priority.exclusive:
                logger.debug(
                    f"Combination rejected by exclusive {priority.kind.value} priority #{index}"
                )
                return False
        return True

    def can_extend(self, partial: Combination) -> bool:
        """
        Check if a partial combination may still lead to an accepted one.

        Only exclusive priorities whose violation is already final are
        considered. The partial combination is not modified.
        """
        for priority in self.priorities:
            if not priority.exclusive or not is_decided(partial, priority):
                continue
            if not self.is_satisfied(partial, priority):
                return False
        return True


def verify(
    combination: Combination,
    priorities: list[Priority],
    travel_time: TravelTimeFunction | None = None,
) -> bool:
    """Verify a combination against priorities (see PriorityVerifier.verify)."""
    return PriorityVerifier(priorities, travel_time).verify(combination)
