"""Tests for combination scoring."""

import pytest

from commission_planner.models import (
    Combination,
    CommissionPriority,
    FreeDayPriority,
    LocationPriority,
    SubjectSelection,
    Weekday,
)
from commission_planner.planner.scorer import (
    compute_weight,
    get_transform,
    identity,
    linear_transform,
    weight_algorithm,
)


@pytest.fixture
def priorities():
    return [
        FreeDayPriority(day=Weekday.FRIDAY),
        LocationPriority(weight=3),
        CommissionPriority(label="K1", related_subject_code="X", weight=1),
    ]


@pytest.fixture
def selections():
    return [SubjectSelection(code="X", weight=2), SubjectSelection(code="Y", weight=1)]


class TestTransforms:
    """Tests for weight transforms."""

    def test_identity(self):
        assert identity(4.5) == 4.5

    def test_linear_default_slope(self):
        assert linear_transform()(2) == 20

    def test_linear_custom_slope(self):
        assert linear_transform(3)(2) == 6

    def test_get_transform_by_name(self):
        assert get_transform("identity") is identity
        assert get_transform("linear")(1) == 10
        assert get_transform("linear", 2)(5) == 10

    def test_get_transform_unknown(self):
        with pytest.raises(ValueError, match="Unsupported transform"):
            get_transform("cubic")


class TestWeightAlgorithm:
    """Tests for weight_algorithm."""

    def test_nothing_satisfied(self, priorities, selections):
        assert weight_algorithm(priorities, [], selections) == 0.0

    def test_tier_plus_indexed_weight(self, priorities, selections):
        # base = 3 * 3 * 2 = 18; two satisfied: 36 + 1 + (1 * 2)
        assert weight_algorithm(priorities, [0, 2], selections) == 39.0

    def test_priority_weight_without_subject(self, priorities, selections):
        # 18 + 3
        assert weight_algorithm(priorities, [1], selections) == 21.0

    def test_more_satisfied_always_ranks_higher(self, priorities, selections):
        heavy_single = weight_algorithm(priorities, [1], selections)
        light_pair = weight_algorithm(priorities, [0, 2], selections)
        assert light_pair > heavy_single

    def test_linear_transform(self, priorities, selections):
        # base = 3 * 30 * 20 = 1800; 3600 + 10 + (10 * 20)
        assert weight_algorithm(priorities, [0, 2], selections, linear_transform()) == 3810.0

    def test_related_subject_not_selected(self, selections):
        priorities = [CommissionPriority(label="K1", related_subject_code="Q", weight=4)]
        # base = 1 * 1 * 2 = 2; then priority weight alone
        assert weight_algorithm(priorities, [0], selections) == 6.0

    def test_no_priorities(self, selections):
        assert weight_algorithm([], [], selections) == 0.0

    def test_duplicate_selection_first_weight_wins(self):
        priorities = [CommissionPriority(label="K1", related_subject_code="X", weight=1)]
        selections = [SubjectSelection(code="X", weight=5), SubjectSelection(code="X", weight=1)]
        # base = 1 * 1 * 2 = 2; then 1 * 5 from the first selection
        assert weight_algorithm(priorities, [0], selections) == 7.0


class TestComputeWeight:
    """Tests for compute_weight."""

    def test_stores_weight(self, priorities, selections):
        combination = Combination(priorities=[1])
        assert compute_weight(combination, priorities, selections) == 21.0
        assert combination.weight == 21.0

    def test_deterministic(self, priorities, selections):
        first = Combination(priorities=[0, 1, 2])
        second = Combination(priorities=[0, 1, 2])
        assert compute_weight(first, priorities, selections) == compute_weight(
            second, priorities, selections
        )
