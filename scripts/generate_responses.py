"""Generate random response sheets for every ballot of a roster.

Builds the ballots for the teams in a roster JSON file and writes one CSV
response sheet per ballot, in the same layout as a form's linked sheet
export, filled with random rankings from fake voters. Useful for trying
out the tally end to end before a real round.

The roster file maps team names to members:
    {"Team Rocket": ["Ann", "Bo"], "Blue Team": ["Cy"], ...}

Usage:
    python scripts/generate_responses.py roster.json
    python scripts/generate_responses.py roster.json -o responses/ --participants 3 --judges 5
"""

import argparse
import csv
import json
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from hackvote import rank_codec
from hackvote.ballots import build_ballots
from hackvote.models import Ballot, Category, Cohort, teams_from_roster

DEFAULT_OUTPUT = Path("responses")

SEED = 20260301


def header_for(ballot: Ballot) -> list[str]:
    header = ["Timestamp", "Email Address"]
    for category in Category:
        for project in ballot.voting_options:
            header.append(f"{category.display_name} [{project}]")
    return header


def generate_rows(
    ballot: Ballot, num_responses: int, fake: Faker, rng: random.Random
) -> list[list[str]]:
    """Random responses for a ballot, one row each, header first.

    Every response ranks every option once per category.
    """
    n = ballot.num_options
    start = datetime(2026, 3, 1, 16, 0, tzinfo=timezone.utc)
    rows = [header_for(ballot)]
    for _ in range(num_responses):
        timestamp = (start + timedelta(minutes=rng.randint(0, 90))).isoformat()
        row = [timestamp, fake.unique.email()]
        for _category in Category:
            ranks = list(range(1, n + 1))
            rng.shuffle(ranks)
            row.extend(rank_codec.encode(rank, n).text for rank in ranks)
        rows.append(row)
    return rows


def main():
    parser = argparse.ArgumentParser(
        description="Generate random response sheets for a roster")
    parser.add_argument("roster", help="Path to the roster JSON file")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output directory (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--participants", type=int, default=5,
                        help="Responses per team ballot (default: 5)")
    parser.add_argument("--judges", type=int, default=5,
                        help="Responses on the judges ballot (default: 5)")
    parser.add_argument("--public", type=int, default=5,
                        help="Responses on the public ballot (default: 5)")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Random seed (default: {SEED})")
    args = parser.parse_args()

    roster = json.loads(Path(args.roster).read_text(encoding="utf-8"))
    plan = build_ballots(teams_from_roster(roster))
    print(f"Built {len(plan.ballots)} ballots for {len(plan.teams)} teams")

    fake = Faker()
    Faker.seed(args.seed)
    rng = random.Random(args.seed)
    counts = {
        Cohort.PARTICIPANTS: args.participants,
        Cohort.JUDGES: args.judges,
        Cohort.PUBLIC: args.public,
    }

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    for ballot in plan.ballots.values():
        rows = generate_rows(ballot, counts[ballot.cohort], fake, rng)
        path = output_dir / f"{ballot.id}.csv"
        with path.open("w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(rows)
        print(f"  {ballot.owner_label}: {len(rows) - 1} responses -> {path}")


if __name__ == "__main__":
    main()
