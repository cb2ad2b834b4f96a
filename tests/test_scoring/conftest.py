"""Shared fixtures for scoring tests."""

import pytest
from tests.conftest import make_plan, vote

from hackvote.models import Category


@pytest.fixture
def worked_example_plan():
    """Three teams: A has two members, B and C one each.

    Every participant ballot offers 2 options, so 1st = 2 pts, 2nd = 1 pt.
    """
    return make_plan({"A": ["Ann", "Al"], "B": ["Bo"], "C": ["Cy"]})


@pytest.fixture
def worked_example_records():
    """Impact votes of the worked example, one voter per team ballot.

    A-ballot: B 1st (2), C 2nd (1)
    B-ballot: A 1st (2), C 2nd (1)
    C-ballot: B 1st (2), A 2nd (1)

    Impact means: A = 1.5, B = 2.0, C = 1.0
    Weighted (x0.4): A = 0.6, B = 0.8, C = 0.4
    """
    return [
        vote("B", 2, rank=1, voter="ann@a.test"),
        vote("C", 1, rank=2, voter="ann@a.test"),
        vote("A", 2, rank=1, voter="bo@b.test"),
        vote("C", 1, rank=2, voter="bo@b.test"),
        vote("B", 2, rank=1, voter="cy@c.test"),
        vote("A", 1, rank=2, voter="cy@c.test"),
    ]


@pytest.fixture
def all_categories_records():
    """Two projects voted on in every category by two voters.

              impact  readiness  presentation
    A          2, 1      2, 2        1, 1
    B          1, 2      1, 1        2, 2

    A: 1.5*0.4 + 2.0*0.4 + 1.0*0.2 = 1.6
    B: 1.5*0.4 + 1.0*0.4 + 2.0*0.2 = 1.4
    """
    table = {
        Category.IMPACT: {"A": [2, 1], "B": [1, 2]},
        Category.READINESS: {"A": [2, 2], "B": [1, 1]},
        Category.PRESENTATION: {"A": [1, 1], "B": [2, 2]},
    }
    return [
        vote(project, points, category=category)
        for category, by_project in table.items()
        for project, points_list in by_project.items()
        for points in points_list
    ]
