"""Weight scoring of verified combinations."""

import logging
from typing import Callable

from ..constants import DEFAULT_TRANSFORM_SLOPE
from ..models import Combination, Priority, SubjectSelection

logger = logging.getLogger(__name__)

Transform = Callable[[float], float]


def identity(value: float) -> float:
    """Leave values unchanged."""
    return value


def linear_transform(slope: float = DEFAULT_TRANSFORM_SLOPE) -> Transform:
    """Build a transform scaling every magnitude by ``slope``."""

    def transform(value: float) -> float:
        return value * slope

    return transform


# Transforms selectable by name from configuration or the CLI
TRANSFORMS: dict[str, Callable[..., Transform]] = {
    "identity": lambda slope=None: identity,
    "linear": lambda slope=DEFAULT_TRANSFORM_SLOPE: linear_transform(slope),
}


def get_transform(name: str, slope: float | None = None) -> Transform:
    """Get a transform by name.

    Raises:
        ValueError: If the transform name is not supported
    """
    if name not in TRANSFORMS:
        raise ValueError(
            f"Unsupported transform: {name}. Supported: {', '.join(TRANSFORMS.keys())}"
        )
    if slope is None:
        return TRANSFORMS[name]()
    return TRANSFORMS[name](slope)


def weight_algorithm(
    priorities: list[Priority],
    combination_priorities: list[int],
    subjects: list[SubjectSelection],
    transform: Transform = identity,
) -> float:
    """
    Calculate the weight of a combination.

    The weight has two parts. A coarse tier rewards every satisfied
    priority with the same base amount, so a combination satisfying more
    priorities always outranks one satisfying fewer. The fine part adds
    each satisfied priority's own weight, multiplied by its subject's
    weight when the priority refers to a subject, and breaks ties within
    a tier.

    Args:
        priorities: All priorities set by the user
        combination_priorities: Indices of the priorities the combination satisfied
        subjects: Subject selections with their weights
        transform: Applied to every magnitude before combining

    Returns:
        The combination's weight
    """
    # 1. Base value for each satisfied priority
    base = len(priorities) * transform(len(priorities)) * transform(len(subjects))

    # 2. Tier given by the amount of satisfied priorities
    weight = base * len(combination_priorities)

    # 3. Position inside the tier
    subject_weights: dict[str, float] = {}
    for s in subjects:
        subject_weights.setdefault(s.code, s.weight)
    indexed_weight = 0.0
    for index in combination_priorities:
        priority = priorities[index]
        if priority.has_subject_related() and priority.related_subject_code in subject_weights:
            indexed_weight += transform(priority.weight) * transform(
                subject_weights[priority.related_subject_code]
            )
        else:
            if priority.has_subject_related():
                logger.debug(
                    f"Subject '{priority.related_subject_code}' of priority #{index} "
                    "is not selected; scoring without subject weight"
                )
            indexed_weight += transform(priority.weight)

    return weight + indexed_weight


def compute_weight(
    combination: Combination,
    priorities: list[Priority],
    selected_subjects: list[SubjectSelection],
    transform: Transform = identity,
) -> float:
    """Score a combination, store the result in ``combination.weight`` and return it."""
    combination.weight = weight_algorithm(
        priorities, combination.priorities, selected_subjects, transform
    )
    return combination.weight
