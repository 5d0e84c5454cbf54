"""Backtracking enumeration of commission combinations."""

import logging
from dataclasses import dataclass
from typing import Callable

from ..models import Combination, CombinationSubject, Subject

logger = logging.getLogger(__name__)

VerifierFunction = Callable[[Combination], bool]


@dataclass
class EnumerationStats:
    """Counters collected while searching combinations."""

    leaves_visited: int = 0
    branches_pruned: int = 0
    accepted: int = 0

    @property
    def rejected(self) -> int:
        """Leaves the verifier did not accept."""
        return self.leaves_visited - self.accepted


def count_leaves(subjects: list[Subject]) -> int:
    """Get the number of complete combinations (product of commission counts)."""
    total = 1
    for subject in subjects:
        total *= len(subject.commissions)
    return total


def search_combinations(
    subjects: list[Subject],
    verifier: VerifierFunction,
    prune: VerifierFunction | None = None,
    stats: EnumerationStats | None = None,
) -> list[Combination]:
    """
    Generate every combination of one commission per subject.

    The search takes the first remaining subject and branches once per
    commission, appending a snapshot of that commission to a copy of the
    partial combination. Complete combinations are handed to ``verifier``
    exactly once and kept only if it returns True.

    Without ``prune`` every leaf of the search tree is built and verified.
    When ``prune`` is given, partial combinations for which it returns
    False are discarded together with all their descendants.

    The search uses an explicit stack, so the number of subjects is not
    bounded by the interpreter's recursion limit. Results come out in
    depth-first order: first commission of the first subject first.

    Args:
        subjects: Subjects to combine, in processing order.
        verifier: Acceptance predicate for complete combinations.
        prune: Optional predicate over partial combinations.
        stats: Optional counters to fill in.

    Returns:
        Accepted combinations.
    """
    if stats is None:
        stats = EnumerationStats()

    accepted: list[Combination] = []
    # Each entry: (index of next subject, partial combination owned by the entry)
    stack: list[tuple[int, Combination]] = [(0, Combination())]

    while stack:
        depth, combination = stack.pop()

        if depth == len(subjects):
            stats.leaves_visited += 1
            if verifier(combination):
                stats.accepted += 1
                accepted.append(combination)
            continue

        subject = subjects[depth]
        children: list[tuple[int, Combination]] = []
        for commission in subject.commissions:
            branch = combination.copy()
            branch.subjects.append(CombinationSubject.from_commission(subject, commission))

            if prune is not None and not prune(branch):
                stats.branches_pruned += 1
                continue
            children.append((depth + 1, branch))

        # Reversed so the first commission is explored first
        stack.extend(reversed(children))

    logger.debug(
        f"Visited {stats.leaves_visited} leaves, accepted {stats.accepted}, "
        f"pruned {stats.branches_pruned} branches"
    )
    return accepted
