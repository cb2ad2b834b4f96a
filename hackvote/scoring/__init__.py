"""Per-cohort aggregation and cross-cohort merging of vote records."""

from .aggregate import DEFAULT_CATEGORY_WEIGHTS, accumulate, aggregate
from .merge import DEFAULT_COHORT_WEIGHTS, DEFAULT_SCALE_FACTORS, merge

__all__ = [
    "DEFAULT_CATEGORY_WEIGHTS",
    "DEFAULT_COHORT_WEIGHTS",
    "DEFAULT_SCALE_FACTORS",
    "accumulate",
    "aggregate",
    "merge",
]
