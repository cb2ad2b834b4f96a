"""Match voter names to contact addresses from an already-resolved directory.

Lookup only tries a few spellings of the same name (case, surrounding
whitespace, a leading "@" from chat handles). It never guesses between
different names; partial matching belongs to whatever builds the directory.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from hackvote.errors import MissingAddressError
from hackvote.models import BallotPlan

logger = logging.getLogger(__name__)

NAME_HEADERS = ("name", "participant", "person")
EMAIL_HEADERS = ("email", "mail")


def name_variants(name: str) -> list[str]:
    """Spellings to try for a name, most exact first, without duplicates."""
    stripped = name.strip()
    bare = stripped[1:] if stripped.startswith("@") else stripped
    candidates = [
        name,
        stripped,
        stripped.lower(),
        f"@{stripped}",
        bare,
        bare.lower(),
    ]
    variants = []
    for candidate in candidates:
        if candidate and candidate not in variants:
            variants.append(candidate)
    return variants


@dataclass
class AddressBook:
    """Addresses resolved for one voting round.

    Attributes:
        addresses: Voter name -> address, for every name that was found
        missing: Names with no address, in lookup order
    """
    addresses: dict[str, str] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)

    def address_for(self, name: str) -> str | None:
        return self.addresses.get(name)

    def require_all(self) -> None:
        """Raise MissingAddressError if any name was not resolved."""
        if self.missing:
            raise MissingAddressError(list(self.missing))


def resolve_addresses(names: Iterable[str], directory: Mapping[str, str]) -> AddressBook:
    """Look up each name in the directory.

    Args:
        names: Voter names, e.g. every key of BallotPlan.assignments
        directory: Name -> address map supplied by the caller

    Returns:
        AddressBook with found addresses and the names that were not found.
    """
    # Case-insensitive view of the directory, first entry wins
    folded: dict[str, str] = {}
    for key, address in directory.items():
        folded.setdefault(key.strip().lower(), address)

    book = AddressBook()
    for name in names:
        if name in book.addresses or name in book.missing:
            continue
        address = None
        for variant in name_variants(name):
            address = directory.get(variant) or folded.get(variant.lower())
            if address:
                break
        if address:
            book.addresses[name] = address
        else:
            book.missing.append(name)

    if book.missing:
        logger.warning(
            "No address for %d voter(s): %s", len(book.missing), ", ".join(book.missing)
        )
    return book


def ballot_addresses(plan: BallotPlan, book: AddressBook) -> dict[str, list[str]]:
    """Resolved addresses of each ballot's assigned voters.

    Unrestricted ballots are assigned to a cohort marker rather than people,
    so they get an empty list.
    """
    result = {}
    for ballot_id, ballot in plan.ballots.items():
        if ballot.is_unrestricted:
            result[ballot_id] = []
            continue
        result[ballot_id] = [
            book.addresses[voter]
            for voter in ballot.assigned_voters
            if voter in book.addresses
        ]
    return result


def directory_from_rows(rows: Sequence[Sequence[str]]) -> dict[str, str]:
    """Build a name -> address directory from a table with a header row.

    The header needs a name-like column (name, participant, person) and an
    email-like column (email, mail). Rows without an "@" in the address are
    ignored. Names are stored both with and without a leading "@".

    Raises:
        ValueError: If the header has no name or no email column.
    """
    if not rows:
        raise ValueError("Directory table is empty")

    name_col = email_col = None
    for index, header in enumerate(rows[0]):
        header_lower = (header or "").strip().lower()
        if email_col is None and any(h in header_lower for h in EMAIL_HEADERS):
            email_col = index
        elif name_col is None and any(h in header_lower for h in NAME_HEADERS):
            name_col = index
    if name_col is None or email_col is None:
        raise ValueError("Directory table needs a Name column and an Email column")

    directory = {}
    for row in rows[1:]:
        if len(row) <= max(name_col, email_col):
            continue
        name = (row[name_col] or "").strip()
        email = (row[email_col] or "").strip()
        if not name or "@" not in email:
            continue
        bare = name[1:] if name.startswith("@") else name
        directory[name] = email
        directory[bare] = email
    return directory


def load_directory_csv(content: bytes) -> dict[str, str]:
    """Read a directory from CSV bytes (see directory_from_rows)."""
    text = content.decode("utf-8-sig", errors="replace")
    return directory_from_rows(list(csv.reader(io.StringIO(text))))
