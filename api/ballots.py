"""Vercel serverless function for building the ballots of a round."""

import json
import logging
import sys
from pathlib import Path

# Add the project root to the path so we can import hackvote modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from hackvote.ballots import build_ballots
from hackvote.directory import ballot_addresses, resolve_addresses
from hackvote.models import teams_from_roster

from api.tally import create_response

logger = logging.getLogger(__name__)


def handler(request):
    """Handle incoming requests to build ballots.

    Accepts POST with JSON body:
        {
            "teams": {"Team A": ["Ann", "Bo"], ...},
            "directory": {"Ann": "ann@example.com", ...}   (optional)
        }

    Returns JSON with the ballots, voter assignments and, when a directory
    is given, each ballot's addresses and the voters left unresolved.
    """
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        data = json.loads(request.body.decode("utf-8"))
        if not isinstance(data, dict):
            return create_response(
                {"error": "Request body must be a JSON object"},
                status=400,
            )
        roster = data.get("teams")
        if not isinstance(roster, dict):
            return create_response(
                {"error": "Missing 'teams' in request body"},
                status=400,
            )

        plan = build_ballots(teams_from_roster(roster))
        body = plan.to_dict()

        directory = data.get("directory")
        if isinstance(directory, dict):
            book = resolve_addresses(plan.assignments, directory)
            body["addresses"] = ballot_addresses(plan, book)
            body["missing_addresses"] = book.missing

        return create_response(body)

    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except ValueError as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except Exception as e:
        logger.exception("Building ballots failed")
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )
