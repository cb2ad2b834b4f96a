"""Weighted category scores for one cohort."""

from typing import Mapping, Sequence

from hackvote.models import Category, ProjectCategoryScore, VoteRecord, WeightedScore

DEFAULT_CATEGORY_WEIGHTS: dict[Category, float] = {
    Category.IMPACT: 0.4,
    Category.READINESS: 0.4,
    Category.PRESENTATION: 0.2,
}


def accumulate(
    records: Sequence[VoteRecord],
) -> dict[str, dict[Category, ProjectCategoryScore]]:
    """Collect the points each project received, per category.

    Every project that appears in a record gets an accumulator for every
    category, so a category nobody ranked shows up as an empty one.
    """
    scores: dict[str, dict[Category, ProjectCategoryScore]] = {}
    for record in records:
        if record.project not in scores:
            scores[record.project] = {
                category: ProjectCategoryScore(project=record.project, category=category)
                for category in Category
            }
        scores[record.project][record.category].values.append(record.points)
    return scores


def aggregate(
    records: Sequence[VoteRecord],
    category_weights: Mapping[Category, float] | None = None,
) -> list[WeightedScore]:
    """Reduce one cohort's records to a weighted score per project.

    For each project, the mean points in each category (0 if nobody ranked
    it there) is multiplied by the category weight, and the products are
    summed into the total.

    Args:
        records: Vote records, all from the same cohort
        category_weights: Weight per category; defaults to impact 0.4,
            readiness 0.4, presentation 0.2. A missing category weighs 0.

    Returns:
        One WeightedScore per project that received at least one vote,
        ordered by project name.

    Raises:
        ValueError: If the records come from more than one cohort.
    """
    cohorts = {record.cohort for record in records}
    if len(cohorts) > 1:
        names = ", ".join(sorted(c.value for c in cohorts))
        raise ValueError(f"Records from several cohorts passed together: {names}")

    if category_weights is None:
        category_weights = DEFAULT_CATEGORY_WEIGHTS

    results = []
    for project, by_category in sorted(accumulate(records).items()):
        contributions = {
            category: by_category[category].mean * category_weights.get(category, 0.0)
            for category in Category
        }
        results.append(WeightedScore(
            project=project,
            per_category_contribution=contributions,
            total=sum(contributions.values()),
        ))
    return results
