"""Orchestrator: parse submitted responses and score a voting round."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from hackvote.models import (
    BallotPlan,
    Category,
    Cohort,
    FinalScore,
    SkippedAnswer,
    VoteRecord,
    WeightedScore,
)
from hackvote.parsers import detect_parser, detect_parser_by_content, get_supported_sources
from hackvote.records import DecodeOutcome, decode_answers, partition_by_cohort
from hackvote.scoring import aggregate, merge
from hackvote.scoring.merge import scale_factors_for_plan
from hackvote.settings import ScoringSettings, get_settings

# Import parsers to register them
from hackvote.parsers import forms_api  # noqa: F401
from hackvote.parsers import sheet_csv  # noqa: F401
from hackvote.parsers import sheet_html  # noqa: F401

logger = logging.getLogger(__name__)

VOTES_HEADER = ["Timestamp", "Email", "Ballot", "Category", "Project", "Rank", "Points"]


class TallyError(Exception):
    """Error while reading the responses of a voting round."""
    pass


@dataclass
class Submission:
    """Responses collected on one ballot.

    Attributes:
        ballot_id: Id of the ballot the responses were given on
        source: URL or filename the content came from (used to pick a parser)
        content: Raw bytes of the export
    """
    ballot_id: str
    source: str
    content: bytes


@dataclass
class TallyResult:
    """Everything computed for one voting round."""
    records: dict[Cohort, list[VoteRecord]]
    weighted: dict[Cohort, list[WeightedScore]]
    final: list[FinalScore]
    skipped: list[SkippedAnswer] = field(default_factory=list)
    settings: ScoringSettings = field(default_factory=get_settings)

    @property
    def summary(self) -> dict[str, Any]:
        return {
            "votes": {cohort.value: len(records) for cohort, records in self.records.items()},
            "projects": len(self.final),
            "skipped": len(self.skipped),
        }

    def votes_table(self, cohort: Cohort) -> list[list[Any]]:
        """Raw votes of one cohort, with a header row."""
        return [VOTES_HEADER] + [record.to_row() for record in self.records[cohort]]

    def weighted_table(self, cohort: Cohort) -> list[list[Any]]:
        """Weighted results of one cohort, highest total first, with a header row."""
        header = ["Project"] + [
            f"{c.display_name} ({_percent(w)})"
            for c, w in self.settings.category_weights().items()
        ] + ["Total Score"]
        scores = sorted(self.weighted[cohort], key=lambda s: (-s.total, s.project))
        rows = [
            [s.project]
            + [round(s.per_category_contribution[c], 2) for c in Category]
            + [round(s.total, 2)]
            for s in scores
        ]
        return [header] + rows

    def final_table(self) -> list[list[Any]]:
        """Final results with a header row, values rounded to 2 decimals."""
        cohorts = list(self.final[0].per_cohort_contribution) if self.final else list(Cohort)
        header = ["Project"] + [c.display_name for c in cohorts] + ["Final Score"]
        rows = [
            [score.project]
            + [round(score.per_cohort_contribution[c], 2) for c in cohorts]
            + [round(score.total, 2)]
            for score in self.final
        ]
        return [header] + rows

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "summary": self.summary,
            "final": [score.to_dict() for score in self.final],
            "weighted": {
                cohort.value: [score.to_dict() for score in scores]
                for cohort, scores in self.weighted.items()
            },
            "skipped": [skipped.to_dict() for skipped in self.skipped],
        }


def _percent(weight: float) -> str:
    return f"{weight * 100:g}%"


def score_records(
    records: Iterable[VoteRecord],
    settings: ScoringSettings | None = None,
    scale_factors: Mapping[Cohort, float] | None = None,
) -> tuple[dict[Cohort, list[WeightedScore]], list[FinalScore]]:
    """Aggregate each cohort's records and merge them into the final ranking.

    Scale factors default to the settings' fixed ones; pass
    scale_factors_for_plan(plan) to use the ratios of the actual ballots.

    Safe to call repeatedly: the result depends only on the records, settings
    and scale factors given.
    """
    if settings is None:
        settings = get_settings()
    partitioned = partition_by_cohort(records)
    weighted = {
        cohort: aggregate(cohort_records, settings.category_weights())
        for cohort, cohort_records in partitioned.items()
    }
    if scale_factors is None:
        scale_factors = settings.cohort_scale_factors()
    final = merge(weighted, settings.cohort_weights(), scale_factors)
    return weighted, final


def read_submission(plan: BallotPlan, submission: Submission) -> DecodeOutcome:
    """Parse one submission and decode its answers against its ballot.

    Raises:
        TallyError: If the ballot is unknown, no parser recognizes the
            content, or the parser fails
    """
    ballot = plan.ballots.get(submission.ballot_id)
    if ballot is None:
        raise TallyError(f"Unknown ballot {submission.ballot_id!r}")

    # Find appropriate parser: try source matching first, then content detection
    parser = detect_parser(submission.source)
    if parser is None:
        parser = detect_parser_by_content(submission.content, submission.source)
    if parser is None:
        raise TallyError(
            f"We couldn't determine the format of the responses for "
            f"{ballot.owner_label}.\n\n{get_supported_sources()}"
        )

    try:
        answers = parser.parse(submission.content)
    except ValueError as e:
        raise TallyError(
            f"Failed to parse responses for {ballot.owner_label}: {e}"
        ) from e

    outcome = decode_answers(answers, ballot)
    logger.info(
        "%s: %d votes, %d skipped", ballot.id, len(outcome.records), len(outcome.skipped)
    )
    return outcome


def tally_round(
    plan: BallotPlan,
    submissions: Sequence[Submission],
    settings: ScoringSettings | None = None,
    derive_scales: bool = False,
) -> TallyResult:
    """Read every submission of a round and compute the results.

    Args:
        plan: Ballots of the round, from build_ballots()
        submissions: Response exports, at most one per ballot is typical but
            several are combined
        settings: Weights and scale factors; defaults to get_settings()
        derive_scales: Scale judges and public points by the ballot sizes of
            the plan (e.g. 3/4 with 4 teams) instead of the settings' fixed
            factors

    Returns:
        TallyResult with votes per cohort, weighted scores, final ranking and
        the answers that had to be skipped

    Raises:
        TallyError: If a submission cannot be read at all
    """
    if settings is None:
        settings = get_settings()
    outcome = DecodeOutcome()
    for submission in submissions:
        outcome.extend(read_submission(plan, submission))

    scale_factors = scale_factors_for_plan(plan) if derive_scales else None
    weighted, final = score_records(outcome.records, settings, scale_factors)
    if outcome.skipped:
        logger.warning("Skipped %d answers in total", len(outcome.skipped))

    return TallyResult(
        records=partition_by_cohort(outcome.records),
        weighted=weighted,
        final=final,
        skipped=outcome.skipped,
        settings=settings,
    )
