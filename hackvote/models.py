"""Core data models for teams, ballots, votes and scores."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Self, Sequence

from hackvote import rank_codec
from hackvote.errors import UnknownCategoryError


class Cohort(str, Enum):
    """A class of voters sharing one ballot shape and one weighting."""
    PARTICIPANTS = "participants"
    JUDGES = "judges"
    PUBLIC = "public"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class Category(str, Enum):
    """The three questions every ballot asks voters to rank projects on."""
    IMPACT = "impact"
    READINESS = "readiness"
    PRESENTATION = "presentation"

    @property
    def display_name(self) -> str:
        return _CATEGORY_TITLES[self]

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse a category from its value or display title.

        Case and surrounding/inner whitespace are ignored, so
        " business  IMPACT" and "impact" both give Category.IMPACT.

        Raises:
            UnknownCategoryError: If the text names no known category.
        """
        key = " ".join(str(text).split()).lower()
        for category in cls:
            if key in (category.value, category.display_name.lower()):
                return category
        raise UnknownCategoryError(f"Unknown category: {text!r}")


_CATEGORY_TITLES = {
    Category.IMPACT: "Business Impact",
    Category.READINESS: "Production Readiness",
    Category.PRESENTATION: "Presentation",
}


@dataclass(frozen=True)
class Team:
    """A team from the draw.

    Attributes:
        name: Team (and project) name, unique within a round
        members: Member display names, in draw order
    """
    name: str
    members: tuple[str, ...]

    def __post_init__(self):
        name = self.name.strip()
        members = tuple(m.strip() for m in self.members if m and m.strip())
        if not name:
            raise ValueError("Team name must not be empty")
        if not members:
            raise ValueError(f"Team {name!r} has no members")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "members", members)


def teams_from_roster(roster: Mapping[str, Sequence[str]]) -> list[Team]:
    """Build teams from a {team name: [member, ...]} mapping.

    Teams whose members are all blank are left out, as the draw leaves
    unfilled groups empty.

    Raises:
        ValueError: If a team's members are not a list of names.
    """
    teams = []
    for name, members in roster.items():
        if not isinstance(members, (list, tuple)) or not all(
            isinstance(m, str) for m in members
        ):
            raise ValueError(f"Members of team {name!r} must be a list of names")
        if any(m and m.strip() for m in members):
            teams.append(Team(name=name, members=tuple(members)))
    return teams


@dataclass(frozen=True)
class Ballot:
    """The options and exclusion rule presented to one group of voters.

    Attributes:
        id: Unique ballot identifier (e.g. "form_Team_Rocket")
        owner_label: Human-readable owner, the team name or the cohort title
        cohort: Which cohort's votes this ballot collects
        excluded_team: The team that may not be voted for, or None
        voting_options: Project names that can be ranked, in team order
        assigned_voters: Voter names, or the cohort marker for unrestricted
            ballots
    """
    id: str
    owner_label: str
    cohort: Cohort
    excluded_team: str | None
    voting_options: tuple[str, ...]
    assigned_voters: tuple[str, ...]

    def __post_init__(self):
        if not self.voting_options:
            raise ValueError(f"Ballot {self.id!r} has no voting options")
        if len(set(self.voting_options)) != len(self.voting_options):
            raise ValueError(f"Ballot {self.id!r} lists an option twice")
        if self.excluded_team is not None and self.excluded_team in self.voting_options:
            raise ValueError(
                f"Ballot {self.id!r} offers its excluded team {self.excluded_team!r}"
            )

    @property
    def num_options(self) -> int:
        return len(self.voting_options)

    @property
    def is_unrestricted(self) -> bool:
        return self.excluded_team is None

    def rank_labels(self) -> list[str]:
        """Column labels for the ranking grid, best rank first."""
        return [label.text for label in rank_codec.labels(self.num_options)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner_label": self.owner_label,
            "cohort": self.cohort.value,
            "excluded_team": self.excluded_team,
            "voting_options": list(self.voting_options),
            "assigned_voters": list(self.assigned_voters),
            "rank_labels": self.rank_labels(),
        }


@dataclass
class BallotPlan:
    """All ballots for one voting round and who votes on which.

    Attributes:
        teams: Teams the ballots were built from
        ballots: Ballot id -> Ballot, per-team ballots first
        assignments: Voter name -> ids of every ballot they are assigned to
    """
    teams: list[Team]
    ballots: dict[str, Ballot]
    assignments: dict[str, frozenset[str]]

    @property
    def team_names(self) -> list[str]:
        return [team.name for team in self.teams]

    @property
    def summary(self) -> dict[str, int]:
        return {
            "total_teams": len(self.teams),
            "total_participants": len(self.assignments),
            "total_ballots": len(self.ballots),
        }

    def ballot_for_team(self, team_name: str) -> Ballot | None:
        """Get the ballot whose voters are the members of the given team."""
        for ballot in self.ballots.values():
            if ballot.excluded_team == team_name:
                return ballot
        return None

    def ballots_for_voter(self, voter: str) -> list[Ballot]:
        ids = self.assignments.get(voter, frozenset())
        return [b for b in self.ballots.values() if b.id in ids]

    def ballots_in_cohort(self, cohort: Cohort) -> list[Ballot]:
        return [b for b in self.ballots.values() if b.cohort == cohort]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "teams": {team.name: list(team.members) for team in self.teams},
            "ballots": {ballot_id: b.to_dict() for ballot_id, b in self.ballots.items()},
            "assignments": {
                voter: sorted(ids) for voter, ids in self.assignments.items()
            },
            "summary": self.summary,
        }


@dataclass(frozen=True)
class SubmittedAnswer:
    """One raw answer read from a response export, before decoding.

    All fields are the strings found in the export.
    """
    timestamp: str
    voter_email: str
    category: str
    project: str
    label: str


@dataclass(frozen=True)
class VoteRecord:
    """A single voter's rank for one project in one category."""
    timestamp: str
    voter_email: str
    cohort: Cohort
    category: Category
    project: str
    rank: int
    points: int
    ballot_id: str = ""

    def to_row(self) -> list[Any]:
        """Row for a raw votes table (Timestamp, Email, Ballot, Category, ...)."""
        return [
            self.timestamp,
            self.voter_email,
            self.ballot_id,
            self.category.display_name,
            self.project,
            self.rank,
            self.points,
        ]


@dataclass(frozen=True)
class SkippedAnswer:
    """An answer dropped while decoding, with the reason it was dropped."""
    answer: SubmittedAnswer
    ballot_id: str
    reason: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "ballot_id": self.ballot_id,
            "project": self.answer.project,
            "category": self.answer.category,
            "label": self.answer.label,
            "error": self.error,
            "reason": self.reason,
        }


@dataclass
class ProjectCategoryScore:
    """Points collected for one project in one category of one cohort."""
    project: str
    category: Category
    values: list[int] = field(default_factory=list)

    @property
    def mean(self) -> float:
        # Zero-fill: a category nobody ranked still scores
        if not self.values:
            return 0.0
        return sum(self.values) / len(self.values)


@dataclass
class WeightedScore:
    """A project's category-weighted score within one cohort."""
    project: str
    per_category_contribution: dict[Category, float]
    total: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": self.project,
            "categories": {c.value: v for c, v in self.per_category_contribution.items()},
            "total": self.total,
        }


@dataclass
class FinalScore:
    """A project's cross-cohort score, the reported result."""
    project: str
    per_cohort_contribution: dict[Cohort, float]
    total: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": self.project,
            "cohorts": {c.value: v for c, v in self.per_cohort_contribution.items()},
            "total": self.total,
        }
