"""Shared test helpers."""

from hackvote.ballots import build_ballots
from hackvote.models import BallotPlan, Category, Cohort, SubmittedAnswer, VoteRecord, teams_from_roster


def make_plan(roster: dict[str, list[str]]) -> BallotPlan:
    """Build a BallotPlan from a compact {team: [members]} roster."""
    return build_ballots(teams_from_roster(roster))


def vote(
    project: str,
    points: int,
    category: Category = Category.IMPACT,
    cohort: Cohort = Cohort.PARTICIPANTS,
    rank: int | None = None,
    voter: str = "",
) -> VoteRecord:
    """Build a VoteRecord with just the fields scoring cares about."""
    return VoteRecord(
        timestamp="2026-03-01T16:00:00Z",
        voter_email=voter,
        cohort=cohort,
        category=category,
        project=project,
        rank=rank if rank is not None else 1,
        points=points,
    )


def answer(project: str, label: str, category: str = "Business Impact",
           email: str = "voter@example.com") -> SubmittedAnswer:
    return SubmittedAnswer(
        timestamp="2026-03-01T16:00:00Z",
        voter_email=email,
        category=category,
        project=project,
        label=label,
    )


def ranking_names(final_scores) -> list[str]:
    """Extract project names in final order."""
    return [score.project for score in final_scores]
