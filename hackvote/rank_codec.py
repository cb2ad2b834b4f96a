"""Rank labels of the form "1st (4 pts)" and their inverse parser.

A ballot with N options shows N rank columns. Rank 1 is best and earns N
points, rank N earns 1 point:

    points = N - rank + 1

The label carries both numbers so an answer can be scored without knowing
the ballot it came from, which matters when N changed between the time a
form was filled in and the time it is counted.
"""

import re
from dataclasses import dataclass

from hackvote.errors import UnparsableLabelError

RANK_PATTERN = re.compile(r"^\s*(\d+)")
POINTS_PATTERN = re.compile(r"\(\s*(\d+)\s*pts?\s*\)", re.IGNORECASE)


@dataclass(frozen=True)
class RankLabel:
    """A rank and the points it is worth."""
    rank: int
    points: int

    @property
    def text(self) -> str:
        return f"{ordinal(self.rank)} ({self.points} pts)"

    def __str__(self) -> str:
        return self.text


def ordinal(n: int) -> str:
    """English ordinal for a positive integer: 1st, 2nd, 3rd, 4th, 11th, 21st."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def points_for_rank(rank: int, n: int) -> int:
    """Points earned by a rank on a ballot with n options."""
    if not 1 <= rank <= n:
        raise ValueError(f"Rank {rank} is outside 1..{n}")
    return n - rank + 1


def encode(rank: int, n: int) -> RankLabel:
    """Build the label for a rank on a ballot with n options."""
    return RankLabel(rank=rank, points=points_for_rank(rank, n))


def labels(n: int) -> list[RankLabel]:
    """All n labels of a ballot, rank 1 first."""
    return [encode(rank, n) for rank in range(1, n + 1)]


def decode(label: str, n: int | None = None) -> RankLabel:
    """Recover the rank and points from a label.

    The leading integer is the rank. A "(K pts)" annotation, if present, is
    taken as the points even when it disagrees with n, since it is the value
    the voter actually saw. Without one, points are computed from n.

    Args:
        label: Free-text label, e.g. "2nd (3 pts)" or just "2"
        n: Number of options on the ballot the answer came from

    Raises:
        UnparsableLabelError: If there is no leading positive integer, the
            annotated points are not positive, or the points cannot be
            worked out from n.
    """
    rank_match = RANK_PATTERN.match(label or "")
    if rank_match is None:
        raise UnparsableLabelError(f"No rank found in label {label!r}")
    rank = int(rank_match.group(1))
    if rank < 1:
        raise UnparsableLabelError(f"Rank must be positive in label {label!r}")

    points_match = POINTS_PATTERN.search(label)
    if points_match is not None:
        points = int(points_match.group(1))
        if points < 1:
            raise UnparsableLabelError(f"Points must be positive in label {label!r}")
        return RankLabel(rank=rank, points=points)

    if n is None:
        raise UnparsableLabelError(
            f"Label {label!r} has no points and the ballot size is unknown"
        )
    if rank > n:
        raise UnparsableLabelError(
            f"Rank {rank} in label {label!r} exceeds the {n} ballot options"
        )
    return RankLabel(rank=rank, points=n - rank + 1)
