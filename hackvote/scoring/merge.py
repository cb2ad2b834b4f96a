"""Combine cohort scores on different point scales into one final ranking."""

from typing import Mapping, Sequence

from hackvote.models import BallotPlan, Cohort, FinalScore, WeightedScore

DEFAULT_COHORT_WEIGHTS: dict[Cohort, float] = {
    Cohort.PARTICIPANTS: 0.4,
    Cohort.JUDGES: 0.4,
    Cohort.PUBLIC: 0.2,
}

# Judges and public rank one more project than participants (4/5 with 5 teams)
DEFAULT_SCALE_FACTORS: dict[Cohort, float] = {
    Cohort.PARTICIPANTS: 1.0,
    Cohort.JUDGES: 0.8,
    Cohort.PUBLIC: 0.8,
}


def scale_factor(reference_max: int, cohort_max: int) -> float:
    """Factor that maps a cohort's point range onto the reference range."""
    if reference_max < 1 or cohort_max < 1:
        raise ValueError("Point ranges must be at least 1")
    return reference_max / cohort_max


def scale_factors_for_plan(
    plan: BallotPlan, reference: Cohort = Cohort.PARTICIPANTS
) -> dict[Cohort, float]:
    """Derive scale factors from the ballot sizes of a plan.

    A cohort's maximum points is the largest option count among its ballots.
    With 5 teams, participant ballots offer 4 options and the judges and
    public ballots offer 5, giving 1.0, 0.8 and 0.8.
    """
    maxima = {
        cohort: max((b.num_options for b in plan.ballots_in_cohort(cohort)), default=0)
        for cohort in Cohort
    }
    if maxima[reference] == 0:
        raise ValueError(f"Plan has no {reference.value} ballots to scale against")
    return {
        cohort: scale_factor(maxima[reference], cohort_max)
        for cohort, cohort_max in maxima.items()
        if cohort_max > 0
    }


def merge(
    per_cohort: Mapping[Cohort, Sequence[WeightedScore]],
    cohort_weights: Mapping[Cohort, float] | None = None,
    cohort_scale_factors: Mapping[Cohort, float] | None = None,
) -> list[FinalScore]:
    """Merge per-cohort weighted scores into the final ranking.

    Each cohort contributes weight * scale * (its total for the project),
    and a project the cohort never voted on contributes 0. A cohort without
    a configured weight also contributes 0; the remaining weights are not
    renormalized. A cohort without a configured scale is not rescaled.

    Args:
        per_cohort: Weighted scores for each cohort, from aggregate()
        cohort_weights: Share of the final score per cohort
        cohort_scale_factors: Multiplier bringing each cohort's points onto
            the reference scale

    Returns:
        FinalScores sorted by total (highest first), ties by project name.
    """
    if cohort_weights is None:
        cohort_weights = DEFAULT_COHORT_WEIGHTS
    if cohort_scale_factors is None:
        cohort_scale_factors = DEFAULT_SCALE_FACTORS

    # Fixed cohort order keeps float sums identical between runs
    cohorts = [c for c in Cohort if c in per_cohort or c in cohort_weights]
    totals_by_cohort = {
        cohort: {score.project: score.total for score in per_cohort.get(cohort, [])}
        for cohort in cohorts
    }
    projects = set()
    for totals in totals_by_cohort.values():
        projects.update(totals)

    results = []
    for project in projects:
        contributions = {
            cohort: (
                cohort_weights.get(cohort, 0.0)
                * cohort_scale_factors.get(cohort, 1.0)
                * totals_by_cohort[cohort].get(project, 0.0)
            )
            for cohort in cohorts
        }
        results.append(FinalScore(
            project=project,
            per_cohort_contribution=contributions,
            total=sum(contributions.values()),
        ))

    results.sort(key=lambda r: (-r.total, r.project))
    return results
