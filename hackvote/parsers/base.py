"""Abstract base class for response export parsers."""

import re
from abc import ABC, abstractmethod
from typing import Sequence

from hackvote.models import SubmittedAnswer

# Sheet exports title each grid cell "Category [Project]"
GRID_HEADER_PATTERN = re.compile(r"^(.+?)\s*\[(.+)\]\s*$")

EMAIL_HEADERS = ("email address", "email", "respondent email")


class ResponseParser(ABC):
    """Abstract base class for parsing exported ballot responses.

    Each parser implementation handles one export format. Parsers are
    registered via the @register_parser decorator in
    hackvote/parsers/__init__.py.
    """

    @abstractmethod
    def can_parse(self, source: str) -> bool:
        """Check if this parser can handle the given source.

        Args:
            source: URL or filename to check

        Returns:
            True if this parser can handle the source, False otherwise
        """
        pass

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if this parser can handle the given file content.

        Used when the source name gives nothing away. Subclasses should
        override this to inspect the content for tell-tale signs of their
        format.
        """
        return False

    @abstractmethod
    def parse(self, content: bytes) -> list[SubmittedAnswer]:
        """Parse the content into raw answers.

        Args:
            content: Raw bytes of the export

        Returns:
            One SubmittedAnswer per filled-in (category, project) cell

        Raises:
            ValueError: If the content cannot be parsed
        """
        pass


def answers_from_rows(rows: Sequence[Sequence[str]]) -> list[SubmittedAnswer]:
    """Read answers from a response sheet laid out as a table.

    The first row is the header: a Timestamp column, optionally an email
    column, then one "Category [Project]" column per grid cell. Each later
    row is one response. Columns whose header doesn't look like a grid cell
    are ignored.

    Raises:
        ValueError: If there is no header or no grid column in it.
    """
    if not rows:
        raise ValueError("Response sheet is empty")

    header = [(cell or "").strip() for cell in rows[0]]
    timestamp_col = email_col = None
    grid_cols: list[tuple[int, str, str]] = []

    for index, title in enumerate(header):
        title_lower = title.lower()
        match = GRID_HEADER_PATTERN.match(title)
        if match:
            grid_cols.append((index, match.group(1).strip(), match.group(2).strip()))
        elif timestamp_col is None and title_lower == "timestamp":
            timestamp_col = index
        elif email_col is None and title_lower in EMAIL_HEADERS:
            email_col = index

    if not grid_cols:
        raise ValueError("No 'Category [Project]' columns found in response sheet header")

    def cell(row: Sequence[str], index: int | None) -> str:
        if index is None or index >= len(row):
            return ""
        return (row[index] or "").strip()

    answers = []
    for row in rows[1:]:
        if not any((value or "").strip() for value in row):
            continue
        timestamp = cell(row, timestamp_col)
        email = cell(row, email_col)
        for index, category, project in grid_cols:
            answers.append(SubmittedAnswer(
                timestamp=timestamp,
                voter_email=email,
                category=category,
                project=project,
                label=cell(row, index),
            ))
    return answers
