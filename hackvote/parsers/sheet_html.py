"""Parser for response sheets published to the web as HTML."""

import re
from bs4 import BeautifulSoup

from hackvote.models import SubmittedAnswer
from hackvote.parsers import register_parser
from hackvote.parsers.base import ResponseParser, answers_from_rows


@register_parser
class PublishedSheetParser(ResponseParser):
    """Parser for a response sheet published as a web page.

    Published sheets render as a single <table class="waffle">. The first
    row holds column letters in <th> cells and every body row starts with a
    <th> row number. Only <td> cells carry data, so reading <td> cells alone
    skips both. The first row with data is the sheet's own header.

    Expected URL format:
        https://docs.google.com/spreadsheets/d/e/<id>/pubhtml
    """

    URL_PATTERN = re.compile(
        r"^https?://docs\.google\.com/spreadsheets/d/e/[a-zA-Z0-9_-]+"
        r"/pub(html|\?.*\boutput=html\b)"
    )

    EXAMPLE_URL = "https://docs.google.com/spreadsheets/d/e/<id>/pubhtml"

    def can_parse(self, source: str) -> bool:
        """Check if this is a published sheet URL."""
        return bool(self.URL_PATTERN.match(source))

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if this looks like a published sheet.

        Tell-tale sign: a table with the "waffle" class.
        """
        html = content.decode("utf-8", errors="replace")
        return "<table" in html and "waffle" in html

    def parse(self, content: bytes) -> list[SubmittedAnswer]:
        html = content.decode("utf-8", errors="replace")
        soup = BeautifulSoup(html, "lxml")

        table = soup.find("table", class_="waffle") or soup.find("table")
        if table is None:
            raise ValueError("No table found in published sheet")

        rows = []
        for tr in table.find_all("tr"):
            cells = [td.get_text(strip=True) for td in tr.find_all("td")]
            if any(cells):
                rows.append(cells)

        return answers_from_rows(rows)
