"""Shared fixtures for parser tests."""

from pathlib import Path

import pytest
from tests.conftest import make_plan

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ROSTER = {
    "Rocket": ["Ann", "Bo"],
    "Blue": ["Cy"],
    "Green": ["Di", "Ed"],
    "Red": ["Flo"],
}


@pytest.fixture
def plan():
    return make_plan(ROSTER)


@pytest.fixture
def responses_csv():
    """Two responses on the Rocket ballot (options Blue, Green, Red).

    The second response left Production Readiness [Green] blank.
    """
    return (FIXTURES_DIR / "responses.csv").read_bytes()


@pytest.fixture
def published_html():
    """Published judges sheet: impact only, two responses and an empty row.

    The second judge typed "best" instead of picking a rank for Green.
    """
    return (FIXTURES_DIR / "published.html").read_bytes()


@pytest.fixture
def forms_api_json():
    """Public ballot bundle: one titled impact grid, one untitled grid
    (taken as Production Readiness) and a free-text question."""
    return (FIXTURES_DIR / "forms-api.json").read_bytes()
