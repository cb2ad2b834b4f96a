"""Tests for per-cohort weighted aggregation."""

import pytest
from tests.conftest import vote

from hackvote.models import Category, Cohort
from hackvote.scoring.aggregate import DEFAULT_CATEGORY_WEIGHTS, accumulate, aggregate


def by_project(scores):
    return {score.project: score for score in scores}


class TestAccumulate:
    def test_groups_points_by_project_and_category(self, all_categories_records):
        scores = accumulate(all_categories_records)
        assert set(scores) == {"A", "B"}
        assert scores["A"][Category.READINESS].values == [2, 2]
        assert scores["B"][Category.PRESENTATION].values == [2, 2]

    def test_every_category_present(self):
        scores = accumulate([vote("A", 3, category=Category.PRESENTATION)])
        assert set(scores["A"]) == set(Category)
        assert scores["A"][Category.IMPACT].values == []


class TestAggregate:
    def test_default_weights(self):
        assert DEFAULT_CATEGORY_WEIGHTS == {
            Category.IMPACT: 0.4,
            Category.READINESS: 0.4,
            Category.PRESENTATION: 0.2,
        }

    def test_worked_example(self, worked_example_records):
        scores = by_project(aggregate(worked_example_records))
        assert scores["A"].total == pytest.approx(0.6)
        assert scores["B"].total == pytest.approx(0.8)
        assert scores["C"].total == pytest.approx(0.4)

    def test_all_categories(self, all_categories_records):
        scores = by_project(aggregate(all_categories_records))
        assert scores["A"].total == pytest.approx(1.6)
        assert scores["B"].total == pytest.approx(1.4)
        assert scores["A"].per_category_contribution == {
            Category.IMPACT: pytest.approx(0.6),
            Category.READINESS: pytest.approx(0.8),
            Category.PRESENTATION: pytest.approx(0.2),
        }

    def test_zero_fill_for_unvoted_category(self, worked_example_records):
        scores = by_project(aggregate(worked_example_records))
        contributions = scores["A"].per_category_contribution
        assert contributions[Category.READINESS] == 0.0
        assert contributions[Category.PRESENTATION] == 0.0

    def test_only_projects_with_votes(self):
        scores = aggregate([vote("A", 1)])
        assert [s.project for s in scores] == ["A"]

    def test_empty(self):
        assert aggregate([]) == []

    def test_sorted_by_project_name(self):
        scores = aggregate([vote("C", 1), vote("A", 2), vote("B", 3)])
        assert [s.project for s in scores] == ["A", "B", "C"]

    def test_custom_weights(self, all_categories_records):
        weights = {Category.IMPACT: 1.0}
        scores = by_project(aggregate(all_categories_records, weights))
        assert scores["A"].total == pytest.approx(1.5)
        assert scores["A"].per_category_contribution[Category.PRESENTATION] == 0.0

    def test_mixed_cohorts_rejected(self):
        with pytest.raises(ValueError, match="several cohorts"):
            aggregate([vote("A", 1), vote("A", 1, cohort=Cohort.JUDGES)])

    def test_idempotent(self, all_categories_records):
        assert aggregate(all_categories_records) == aggregate(all_categories_records)
