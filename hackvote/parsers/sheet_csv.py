"""Parser for response sheets exported as CSV."""

import csv
import io
import re

from hackvote.models import SubmittedAnswer
from hackvote.parsers import register_parser
from hackvote.parsers.base import GRID_HEADER_PATTERN, ResponseParser, answers_from_rows


@register_parser
class SheetCsvParser(ResponseParser):
    """Parser for a form's linked response sheet downloaded as CSV.

    One row per response: Timestamp, optionally Email Address, then one
    "Category [Project]" column per grid cell holding a rank label such as
    "2nd (3 pts)".

    Expected sources:
        responses.csv
        https://docs.google.com/spreadsheets/d/<id>/export?format=csv
        https://docs.google.com/spreadsheets/d/e/<id>/pub?output=csv
    """

    EXPORT_URL_PATTERN = re.compile(
        r"^https?://docs\.google\.com/spreadsheets/d/"
        r"(e/)?[a-zA-Z0-9_-]+/(export|pub)\?.*\b(format|output)=csv\b"
    )

    EXAMPLE_URL = "https://docs.google.com/spreadsheets/d/<id>/export?format=csv"

    def can_parse(self, source: str) -> bool:
        """Check for a .csv filename or a sheet CSV export URL."""
        return source.lower().endswith(".csv") or bool(self.EXPORT_URL_PATTERN.match(source))

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if the first line is a CSV header with grid columns."""
        text = content.decode("utf-8-sig", errors="replace").lstrip()
        if not text or text[0] in "<{[":
            return False
        first_line = text.splitlines()[0]
        try:
            header = next(csv.reader([first_line]))
        except (csv.Error, StopIteration):
            return False
        return any(GRID_HEADER_PATTERN.match(cell.strip()) for cell in header)

    def parse(self, content: bytes) -> list[SubmittedAnswer]:
        text = content.decode("utf-8-sig", errors="replace")
        try:
            rows = list(csv.reader(io.StringIO(text)))
        except csv.Error as e:
            raise ValueError(f"Malformed CSV: {e}") from e
        return answers_from_rows(rows)
