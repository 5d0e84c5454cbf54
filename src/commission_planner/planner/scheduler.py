"""Main scheduler wiring enumeration, verification, scoring and sorting."""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from ..exceptions import SubjectNotFoundError
from ..models import Combination, Priority, Subject, SubjectSelection
from .config import ConfigLoader, PlannerConfig
from .enumerator import EnumerationStats, count_leaves, search_combinations
from .geometry import TravelTimeFunction
from .scorer import Transform, compute_weight
from .sorting import SortMode, sort_combinations
from .verifier import PriorityVerifier

logger = logging.getLogger(__name__)


@dataclass
class ScheduleStatistics:
    """Statistics about a scheduling run."""

    total_selected: int = 0
    total_resolved: int = 0
    search_space: int = 0
    leaves_visited: int = 0
    branches_pruned: int = 0
    total_accepted: int = 0
    total_rejected: int = 0
    satisfied_by_priority: dict[int, int] = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_selected": self.total_selected,
            "total_resolved": self.total_resolved,
            "search_space": self.search_space,
            "leaves_visited": self.leaves_visited,
            "branches_pruned": self.branches_pruned,
            "total_accepted": self.total_accepted,
            "total_rejected": self.total_rejected,
            "acceptance_rate": (
                self.total_accepted / self.leaves_visited
                if self.leaves_visited > 0
                else 0.0
            ),
            "satisfied_by_priority": {
                str(k): v for k, v in sorted(self.satisfied_by_priority.items())
            },
            "elapsed_seconds": self.elapsed_seconds,
        }


@dataclass
class ScheduleResult:
    """Result of the scheduling process."""

    combinations: list[Combination] = field(default_factory=list)
    unresolved_codes: list[str] = field(default_factory=list)
    priorities: list[Priority] = field(default_factory=list)
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    sort_mode: SortMode = SortMode.COMPARATOR
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_combinations(self) -> int:
        """Total number of ranked combinations."""
        return len(self.combinations)

    @property
    def best(self) -> Combination | None:
        """Highest ranked combination, if any."""
        return self.combinations[0] if self.combinations else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "sort_mode": self.sort_mode.value,
            "total_combinations": self.total_combinations,
            "unresolved_codes": self.unresolved_codes,
            "priorities": [p.to_dict() for p in self.priorities],
            "combinations": [
                {"rank": rank, **c.to_dict()}
                for rank, c in enumerate(self.combinations, start=1)
            ],
            "statistics": self.statistics.to_dict(),
        }


def resolve_subjects(
    subjects: list[Subject],
    selected_subjects: list[SubjectSelection],
) -> tuple[list[Subject], list[str]]:
    """
    Match selections to catalog subjects.

    Returns:
        Tuple of (resolved subjects in selection order, unresolved codes).
    """
    by_code = {s.code: s for s in subjects}
    resolved: list[Subject] = []
    unresolved: list[str] = []
    for selection in selected_subjects:
        subject = by_code.get(selection.code)
        if subject is None:
            unresolved.append(selection.code)
        else:
            resolved.append(subject)
    return resolved, unresolved


class CombinationScheduler:
    """
    Ranks every combination of commissions for a student's selection.

    This is the entry point for collaborators: it resolves the selected
    subjects, enumerates combinations, discards those violating exclusive
    priorities, scores the rest and sorts them best first. It performs no
    I/O and keeps no state between calls.
    """

    def __init__(
        self,
        config: PlannerConfig | None = None,
        travel_time: TravelTimeFunction | None = None,
        transform: Transform | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            config: Planner settings. Defaults to PlannerConfig().
            travel_time: Travel time function for TRAVEL priorities.
                         Defaults to the verifier's constant estimate.
            transform: Weight transform overriding the configured one.
        """
        self.config = config or PlannerConfig()
        self.travel_time = travel_time
        self.transform = transform or self.config.get_transform()

    @classmethod
    def from_config_dir(cls, config_dir: Path | None = None) -> "CombinationScheduler":
        """Create a scheduler from a configuration directory."""
        loader = ConfigLoader(config_dir)
        return cls(config=loader.planner, travel_time=loader.buildings.travel_time)

    def schedule(
        self,
        subjects: list[Subject],
        selected_subjects: list[SubjectSelection],
        priorities: list[Priority],
        sort_mode: SortMode | str | None = None,
    ) -> ScheduleResult:
        """
        Generate the ranked combinations.

        Args:
            subjects: Catalog of subjects.
            selected_subjects: Student's chosen subjects with their weights.
            priorities: Ordered priorities; indices in results refer to this order.
            sort_mode: Sort strategy; defaults to the configured one.

        Returns:
            ScheduleResult with combinations sorted by descending weight.

        Raises:
            SubjectNotFoundError: If strict mode is on and a selection is not
                                  in the catalog.
        """
        started = time.perf_counter()
        mode = SortMode(sort_mode) if sort_mode is not None else self.config.sort_mode

        # 1. Resolve selected codes to catalog subjects
        chosen, unresolved = resolve_subjects(subjects, selected_subjects)
        if unresolved:
            if self.config.strict:
                raise SubjectNotFoundError(unresolved[0], sorted(s.code for s in subjects))
            logger.warning(f"Selected subjects not in catalog: {', '.join(unresolved)}")

        search_space = count_leaves(chosen)
        logger.info(
            f"Combining {len(chosen)} subjects ({search_space} possible combinations) "
            f"with {len(priorities)} priorities"
        )

        # 2. Enumerate combinations accepted by the priorities
        verifier = PriorityVerifier(priorities, self.travel_time)
        stats = EnumerationStats()
        combinations = search_combinations(
            chosen,
            verifier,
            prune=verifier.can_extend if self.config.prune else None,
            stats=stats,
        )

        # 3. Score every accepted combination
        for combination in combinations:
            compute_weight(combination, priorities, selected_subjects, self.transform)

        # 4. Rank by weight
        ranked = sort_combinations(combinations, mode)

        satisfied: dict[int, int] = {}
        for combination in ranked:
            for index in combination.priorities:
                satisfied[index] = satisfied.get(index, 0) + 1

        statistics = ScheduleStatistics(
            total_selected=len(selected_subjects),
            total_resolved=len(chosen),
            search_space=search_space,
            leaves_visited=stats.leaves_visited,
            branches_pruned=stats.branches_pruned,
            total_accepted=stats.accepted,
            total_rejected=stats.rejected,
            satisfied_by_priority=satisfied,
            elapsed_seconds=time.perf_counter() - started,
        )

        logger.info(
            f"Accepted {stats.accepted} of {stats.leaves_visited} combinations "
            f"in {statistics.elapsed_seconds:.3f}s"
        )

        return ScheduleResult(
            combinations=ranked,
            unresolved_codes=unresolved,
            priorities=list(priorities),
            statistics=statistics,
            sort_mode=mode,
        )


def schedule(
    subjects: list[Subject],
    selected_subjects: list[SubjectSelection],
    priorities: list[Priority],
    sort_mode: SortMode | str = SortMode.COMPARATOR,
) -> list[Combination]:
    """Rank combinations with default settings and return them best first."""
    scheduler = CombinationScheduler()
    return scheduler.schedule(subjects, selected_subjects, priorities, sort_mode).combinations
