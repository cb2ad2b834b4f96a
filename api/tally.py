"""Vercel serverless function for tallying a voting round."""

import json
import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so we can import hackvote modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from hackvote.ballots import build_ballots
from hackvote.models import teams_from_roster
from hackvote.tally import Submission, TallyError, tally_round

logger = logging.getLogger(__name__)


def handler(request):
    """Handle incoming requests to tally a round.

    Accepts POST with JSON body:
        {
            "teams": {"Team A": ["Ann", "Bo"], ...},
            "submissions": [{"ballot_id": "form_Team_A", "url": "https://..."}, ...],
            "derive_scales": true   (optional)
        }

    The ballots are rebuilt from the teams, so the ballot ids are the ones
    returned by the ballots endpoint for the same teams. With
    "derive_scales", judges and public points are scaled by the actual ballot
    sizes rather than the configured factors.

    Returns JSON with the final ranking, per-cohort scores and skipped answers.
    """
    # Handle CORS preflight
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
        entries = data.get("submissions")
        if not isinstance(roster, dict) or not isinstance(entries, list):
            return create_response(
                {"error": "Request body needs 'teams' and 'submissions'"},
                status=400,
            )

        plan = build_ballots(teams_from_roster(roster))

        submissions = []
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("ballot_id") or not entry.get("url"):
                return create_response(
                    {"error": "Each submission needs 'ballot_id' and 'url'"},
                    status=400,
                )
            ballot_id, url = entry["ballot_id"], entry["url"]
            source, content = fetch_url(url)
            submissions.append(Submission(ballot_id=ballot_id, source=source, content=content))

        result = tally_round(plan, submissions, derive_scales=data.get("derive_scales") is True)
        return create_response(result.to_dict())

    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except (ValueError, TallyError) as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except Exception as e:
        logger.exception("Tally failed")
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def fetch_url(url: str) -> tuple[str, bytes]:
    """Fetch content from a URL.

    Returns (source_identifier, content_bytes).
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise TallyError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(follow_redirects=True, timeout=30.0) as client:
            response = client.get(url)
            response.raise_for_status()
            return url, response.content
    except httpx.HTTPStatusError as e:
        raise TallyError(f"HTTP error fetching URL: {e.response.status_code}")
    except httpx.RequestError as e:
        raise TallyError(f"Error fetching URL: {e}")


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
