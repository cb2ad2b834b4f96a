"""Build one ballot per team plus the unrestricted judges and public ballots."""

import logging
import re
from typing import Sequence

from hackvote.errors import DegenerateBallotError, DuplicateTeamError, EmptyDrawError
from hackvote.models import Ballot, BallotPlan, Cohort, Team

logger = logging.getLogger(__name__)

JUDGES_BALLOT_ID = "form_Judges"
PUBLIC_BALLOT_ID = "form_Public"

# Unrestricted ballots stand for a cohort, not a list of people
UNRESTRICTED_COHORTS = {
    Cohort.JUDGES: JUDGES_BALLOT_ID,
    Cohort.PUBLIC: PUBLIC_BALLOT_ID,
}


def ballot_id_for_team(team_name: str) -> str:
    return "form_" + re.sub(r"\s+", "_", team_name.strip())


def _check_draw(teams: Sequence[Team]) -> None:
    if not teams:
        raise EmptyDrawError("No teams found in the draw.")
    seen = set()
    for team in teams:
        if team.name in seen:
            raise DuplicateTeamError(f"Team name {team.name!r} appears more than once")
        seen.add(team.name)


def build_unrestricted_ballots(teams: Sequence[Team]) -> list[Ballot]:
    """Build the judges and public ballots, which offer every team.

    Works with a single team, unlike build_ballots().
    """
    _check_draw(teams)
    team_names = tuple(team.name for team in teams)
    return [
        Ballot(
            id=ballot_id,
            owner_label=cohort.display_name,
            cohort=cohort,
            excluded_team=None,
            voting_options=team_names,
            assigned_voters=(cohort.display_name,),
        )
        for cohort, ballot_id in UNRESTRICTED_COHORTS.items()
    ]


def build_ballots(teams: Sequence[Team]) -> BallotPlan:
    """Build every ballot for a voting round.

    Each team gets a ballot listing all other teams, assigned to its members.
    The judges and public ballots list all teams and are always included.

    Args:
        teams: Teams from the draw, in display order

    Returns:
        BallotPlan with per-team ballots first, then judges, then public.

    Raises:
        EmptyDrawError: If there are no teams
        DuplicateTeamError: If two teams share a name
        DegenerateBallotError: If there is only one team, so its ballot would
            have nothing to vote for
    """
    _check_draw(teams)
    if len(teams) < 2:
        raise DegenerateBallotError(
            f"Team {teams[0].name!r} would have nobody to vote for; "
            f"voting needs at least 2 teams."
        )

    team_names = [team.name for team in teams]
    unrestricted = build_unrestricted_ballots(teams)
    taken = {ballot.id for ballot in unrestricted}

    ballots: dict[str, Ballot] = {}
    assignments: dict[str, set[str]] = {}

    for team in teams:
        ballot_id = _unique_id(ballot_id_for_team(team.name), taken)
        taken.add(ballot_id)
        ballots[ballot_id] = Ballot(
            id=ballot_id,
            owner_label=team.name,
            cohort=Cohort.PARTICIPANTS,
            excluded_team=team.name,
            voting_options=tuple(name for name in team_names if name != team.name),
            assigned_voters=team.members,
        )
        for member in team.members:
            if member in assignments and ballot_id not in assignments[member]:
                logger.warning(
                    "%s is a member of more than one team; assigning %s as well",
                    member, ballot_id,
                )
            assignments.setdefault(member, set()).add(ballot_id)

    for ballot in unrestricted:
        ballots[ballot.id] = ballot

    logger.info(
        "Built %d ballots for %d teams and %d participants",
        len(ballots), len(teams), len(assignments),
    )
    return BallotPlan(
        teams=list(teams),
        ballots=ballots,
        assignments={voter: frozenset(ids) for voter, ids in assignments.items()},
    )


def _unique_id(ballot_id: str, taken: set[str]) -> str:
    if ballot_id not in taken:
        return ballot_id
    suffix = 2
    while f"{ballot_id}_{suffix}" in taken:
        suffix += 1
    return f"{ballot_id}_{suffix}"
