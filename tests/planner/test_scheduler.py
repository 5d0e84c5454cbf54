"""Tests for the combination scheduler."""

import json

import pytest

from commission_planner.exceptions import SubjectNotFoundError
from commission_planner.models import (
    FreeDayPriority,
    Priority,
    Subject,
    SubjectSelection,
    SuperpositionPriority,
    Weekday,
)
from commission_planner.planner.config import PlannerConfig
from commission_planner.planner.scheduler import (
    CombinationScheduler,
    ScheduleResult,
    resolve_subjects,
    schedule,
)
from commission_planner.planner.scorer import linear_transform
from commission_planner.planner.sorting import SortMode


@pytest.fixture
def catalog(catalog_data):
    return [Subject.from_dict(s) for s in catalog_data]


@pytest.fixture
def selections(request_data):
    return SubjectSelection.from_codes(request_data["selections"])


@pytest.fixture
def priorities(request_data):
    return [Priority.from_dict(p) for p in request_data["priorities"]]


def commission_labels(combination):
    return tuple(s.commission_name for s in combination.subjects)


class TestBasicScenarios:
    """Small end-to-end scenarios."""

    def test_no_priorities(self, two_subjects):
        selections = SubjectSelection.from_codes(["A", "B"])
        result = schedule(two_subjects, selections, [])
        assert len(result) == 2
        assert all(c.weight == 0.0 for c in result)
        assert all(c.priorities == [] for c in result)

    def test_identical_blocks_rejected_by_exclusive_superposition(self, make_block, make_subject):
        block = make_block(Weekday.MONDAY, "09:00", "12:00")
        subjects = [make_subject("X", {"1": [block]}), make_subject("Y", {"1": [block]})]
        result = schedule(
            subjects,
            SubjectSelection.from_codes(["X", "Y"]),
            [SuperpositionPriority(max_overlap=0, exclusive=True)],
        )
        assert result == []

    def test_non_exclusive_free_day(self, two_subjects):
        selections = SubjectSelection.from_codes(["A", "B"])
        result = schedule(two_subjects, selections, [FreeDayPriority(day=Weekday.THURSDAY)])

        assert len(result) == 2
        best, other = result
        assert commission_labels(best) == ("A1", "B1")
        assert best.priorities == [0]
        assert commission_labels(other) == ("A2", "B1")
        assert other.priorities == []
        assert best.weight > other.weight

    def test_empty_selection(self, two_subjects):
        result = schedule(two_subjects, [], [FreeDayPriority()])
        assert len(result) == 1
        assert result[0].subjects == []
        assert result[0].priorities == [0]


class TestCombinationScheduler:
    """Tests for CombinationScheduler.schedule."""

    def test_ranking(self, catalog, selections, priorities):
        result = CombinationScheduler().schedule(catalog, selections, priorities)

        assert isinstance(result, ScheduleResult)
        assert result.total_combinations == 3
        assert commission_labels(result.best) == ("A", "K2")
        assert result.best.priorities == [0, 1, 2]
        # base = 3 * 3 * 2 = 18; 54 + 1 + 2 + (1 * 2)
        assert result.best.weight == 59.0
        assert [c.weight for c in result.combinations[1:]] == [19.0, 19.0]

    def test_rejected_combination_absent(self, catalog, selections, priorities):
        result = CombinationScheduler().schedule(catalog, selections, priorities)
        assert ("A", "K1") not in {commission_labels(c) for c in result.combinations}

    def test_statistics(self, catalog, selections, priorities):
        stats = CombinationScheduler().schedule(catalog, selections, priorities).statistics
        assert stats.total_selected == 2
        assert stats.total_resolved == 2
        assert stats.search_space == 4
        assert stats.leaves_visited == 4
        assert stats.branches_pruned == 0
        assert stats.total_accepted == 3
        assert stats.total_rejected == 1
        assert stats.satisfied_by_priority == {0: 3, 1: 1, 2: 1}

    @pytest.mark.parametrize("mode", list(SortMode))
    def test_sort_modes_agree(self, catalog, selections, priorities, mode):
        result = CombinationScheduler().schedule(catalog, selections, priorities, mode)
        assert result.sort_mode == mode
        assert [c.weight for c in result.combinations] == [59.0, 19.0, 19.0]

    def test_prune_gives_same_result(self, catalog, selections, priorities):
        plain = CombinationScheduler().schedule(catalog, selections, priorities)
        pruned = CombinationScheduler(config=PlannerConfig(prune=True)).schedule(
            catalog, selections, priorities
        )
        assert [commission_labels(c) for c in pruned.combinations] == [
            commission_labels(c) for c in plain.combinations
        ]
        assert pruned.statistics.branches_pruned == 1
        assert pruned.statistics.leaves_visited == 3

    def test_transform_override(self, catalog, selections, priorities):
        result = CombinationScheduler(transform=linear_transform(10)).schedule(
            catalog, selections, priorities
        )
        # base = 3 * 30 * 20 = 1800; 5400 + 10 + 20 + (10 * 20)
        assert result.best.weight == 5630.0

    def test_configured_transform(self, catalog, selections, priorities):
        scheduler = CombinationScheduler(config=PlannerConfig(transform="linear"))
        result = scheduler.schedule(catalog, selections, priorities)
        assert result.best.weight == 5630.0

    def test_unresolved_codes_reported(self, catalog, priorities):
        selections = SubjectSelection.from_codes(["93.43", "99.99"])
        result = CombinationScheduler().schedule(catalog, selections, priorities)
        assert result.unresolved_codes == ["99.99"]
        assert result.statistics.total_resolved == 1
        assert result.total_combinations == 2

    def test_strict_mode_raises(self, catalog, priorities):
        scheduler = CombinationScheduler(config=PlannerConfig(strict=True))
        with pytest.raises(SubjectNotFoundError) as exc_info:
            scheduler.schedule(catalog, SubjectSelection.from_codes(["99.99"]), priorities)
        assert exc_info.value.code == "99.99"
        assert "93.43" in exc_info.value.available_codes

    def test_inputs_not_mutated(self, catalog, selections, priorities):
        catalog_before = list(catalog)
        priorities_before = list(priorities)
        CombinationScheduler().schedule(catalog, selections, priorities)
        assert catalog == catalog_before
        assert priorities == priorities_before

    def test_result_to_dict_is_json_serializable(self, catalog, selections, priorities):
        result = CombinationScheduler().schedule(catalog, selections, priorities)
        data = json.loads(json.dumps(result.to_dict()))
        assert data["total_combinations"] == 3
        assert data["combinations"][0]["rank"] == 1
        assert data["combinations"][0]["weight"] == 59.0
        assert data["statistics"]["acceptance_rate"] == 0.75
        assert data["priorities"][1]["value"] == "thursday"

    def test_from_config_dir(self, tmp_path, catalog, selections, priorities):
        (tmp_path / "planner.json").write_text(json.dumps({"sort_mode": "quicksort"}))
        scheduler = CombinationScheduler.from_config_dir(tmp_path)
        result = scheduler.schedule(catalog, selections, priorities)
        assert result.sort_mode == SortMode.QUICKSORT


class TestResolveSubjects:
    """Tests for resolve_subjects."""

    def test_selection_order_kept(self, catalog):
        resolved, unresolved = resolve_subjects(
            catalog, SubjectSelection.from_codes(["22.02", "93.43"])
        )
        assert [s.code for s in resolved] == ["22.02", "93.43"]
        assert unresolved == []

    def test_unknown_codes(self, catalog):
        resolved, unresolved = resolve_subjects(catalog, SubjectSelection.from_codes(["X", "93.43"]))
        assert [s.code for s in resolved] == ["93.43"]
        assert unresolved == ["X"]
