"""Tests for merging cohort scores into the final ranking."""

import pytest
from tests.conftest import make_plan, ranking_names, vote

from hackvote.models import Category, Cohort, WeightedScore
from hackvote.scoring.aggregate import aggregate
from hackvote.scoring.merge import (
    DEFAULT_COHORT_WEIGHTS,
    DEFAULT_SCALE_FACTORS,
    merge,
    scale_factor,
    scale_factors_for_plan,
)


def weighted(project, total):
    return WeightedScore(project=project, per_category_contribution={}, total=total)


class TestDefaults:
    def test_weights(self):
        assert DEFAULT_COHORT_WEIGHTS == {
            Cohort.PARTICIPANTS: 0.4,
            Cohort.JUDGES: 0.4,
            Cohort.PUBLIC: 0.2,
        }

    def test_scale_factors(self):
        assert DEFAULT_SCALE_FACTORS == {
            Cohort.PARTICIPANTS: 1.0,
            Cohort.JUDGES: 0.8,
            Cohort.PUBLIC: 0.8,
        }


class TestMerge:
    def test_worked_example_participants_only(self, worked_example_records):
        final = merge(
            {Cohort.PARTICIPANTS: aggregate(worked_example_records)},
            {Cohort.PARTICIPANTS: 1.0},
            {Cohort.PARTICIPANTS: 1.0},
        )
        assert ranking_names(final) == ["B", "A", "C"]
        assert [s.total for s in final] == [
            pytest.approx(0.8), pytest.approx(0.6), pytest.approx(0.4),
        ]

    def test_default_weighting(self):
        final = merge({
            Cohort.PARTICIPANTS: [weighted("A", 2.0), weighted("B", 1.0)],
            Cohort.JUDGES: [weighted("A", 1.0), weighted("B", 2.5)],
            Cohort.PUBLIC: [weighted("A", 1.0), weighted("B", 1.0)],
        })
        scores = {s.project: s for s in final}
        # A: 0.4*1.0*2.0 + 0.4*0.8*1.0 + 0.2*0.8*1.0 = 0.8 + 0.32 + 0.16
        assert scores["A"].total == pytest.approx(1.28)
        # B: 0.4 + 0.4*0.8*2.5 + 0.16 = 0.4 + 0.8 + 0.16
        assert scores["B"].total == pytest.approx(1.36)
        assert scores["A"].per_cohort_contribution[Cohort.JUDGES] == pytest.approx(0.32)
        assert ranking_names(final) == ["B", "A"]

    def test_absent_project_contributes_zero(self):
        final = merge({
            Cohort.PARTICIPANTS: [weighted("A", 1.0)],
            Cohort.JUDGES: [weighted("B", 1.0)],
        })
        scores = {s.project: s for s in final}
        assert scores["A"].per_cohort_contribution[Cohort.JUDGES] == 0.0
        assert scores["B"].per_cohort_contribution[Cohort.PARTICIPANTS] == 0.0
        assert scores["A"].total == pytest.approx(0.4)
        assert scores["B"].total == pytest.approx(0.32)

    def test_missing_cohort_weight_contributes_zero(self):
        final = merge(
            {Cohort.PARTICIPANTS: [weighted("A", 1.0)], Cohort.PUBLIC: [weighted("A", 5.0)]},
            {Cohort.PARTICIPANTS: 0.4},
            DEFAULT_SCALE_FACTORS,
        )
        assert final[0].per_cohort_contribution[Cohort.PUBLIC] == 0.0
        assert final[0].total == pytest.approx(0.4)

    def test_missing_scale_not_rescaled(self):
        final = merge({Cohort.JUDGES: [weighted("A", 1.0)]}, {Cohort.JUDGES: 0.5}, {})
        assert final[0].total == pytest.approx(0.5)

    def test_ties_broken_by_name(self):
        final = merge({Cohort.PARTICIPANTS: [
            weighted("Zeta", 1.0), weighted("Alpha", 1.0), weighted("Mid", 2.0),
        ]})
        assert ranking_names(final) == ["Mid", "Alpha", "Zeta"]

    def test_empty(self):
        assert merge({}) == []
        assert merge({Cohort.PARTICIPANTS: []}) == []

    def test_idempotent(self, all_categories_records):
        judges = [
            vote(r.project, r.points, category=r.category, cohort=Cohort.JUDGES)
            for r in all_categories_records
        ]
        runs = [
            merge({
                Cohort.PARTICIPANTS: aggregate(all_categories_records),
                Cohort.JUDGES: aggregate(judges),
            })
            for _ in range(2)
        ]
        assert [(s.project, s.total) for s in runs[0]] == [(s.project, s.total) for s in runs[1]]

    def test_contributions_listed_in_cohort_order(self):
        final = merge({
            Cohort.PUBLIC: [weighted("A", 1.0)],
            Cohort.PARTICIPANTS: [weighted("A", 1.0)],
        })
        assert list(final[0].per_cohort_contribution) == [
            Cohort.PARTICIPANTS, Cohort.JUDGES, Cohort.PUBLIC,
        ]


class TestScaleFactors:
    def test_scale_factor(self):
        assert scale_factor(4, 5) == pytest.approx(0.8)
        assert scale_factor(4, 4) == 1.0

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            scale_factor(0, 5)

    def test_from_plan_with_five_teams(self):
        plan = make_plan({name: [f"{name}1"] for name in "ABCDE"})
        assert scale_factors_for_plan(plan) == {
            Cohort.PARTICIPANTS: 1.0,
            Cohort.JUDGES: pytest.approx(0.8),
            Cohort.PUBLIC: pytest.approx(0.8),
        }

    def test_from_plan_matches_worked_example(self, worked_example_plan):
        factors = scale_factors_for_plan(worked_example_plan)
        assert factors[Cohort.JUDGES] == pytest.approx(2 / 3)
        assert factors[Cohort.PARTICIPANTS] == 1.0
