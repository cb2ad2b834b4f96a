"""Turn submitted answers into vote records, dropping the ones that don't fit."""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from hackvote import rank_codec
from hackvote.errors import RecordError, UnknownProjectError
from hackvote.models import (
    Ballot,
    Category,
    Cohort,
    SkippedAnswer,
    SubmittedAnswer,
    VoteRecord,
)

logger = logging.getLogger(__name__)


@dataclass
class DecodeOutcome:
    """Vote records decoded from a batch of answers, and what was skipped."""
    records: list[VoteRecord] = field(default_factory=list)
    skipped: list[SkippedAnswer] = field(default_factory=list)

    def extend(self, other: "DecodeOutcome") -> None:
        self.records.extend(other.records)
        self.skipped.extend(other.skipped)


def decode_answer(answer: SubmittedAnswer, ballot: Ballot) -> VoteRecord:
    """Decode one answer against the ballot it was submitted on.

    Raises:
        UnknownCategoryError: If the category is not one of the three
        UnknownProjectError: If the project is not an option on the ballot
        UnparsableLabelError: If the rank label cannot be read
    """
    category = Category.parse(answer.category)
    project = answer.project.strip()
    if project not in ballot.voting_options:
        raise UnknownProjectError(
            f"Project {project!r} is not an option on ballot {ballot.id!r}"
        )
    label = rank_codec.decode(answer.label, ballot.num_options)
    return VoteRecord(
        timestamp=answer.timestamp,
        voter_email=answer.voter_email.strip(),
        cohort=ballot.cohort,
        category=category,
        project=project,
        rank=label.rank,
        points=label.points,
        ballot_id=ballot.id,
    )


def decode_answers(answers: Iterable[SubmittedAnswer], ballot: Ballot) -> DecodeOutcome:
    """Decode a batch of answers from one ballot.

    Blank labels are grid rows the voter left empty and are ignored. Any
    other answer that fails to decode is logged and reported in
    DecodeOutcome.skipped; the rest of the batch is still decoded.
    """
    outcome = DecodeOutcome()
    for answer in answers:
        if not answer.label or not answer.label.strip():
            continue
        try:
            outcome.records.append(decode_answer(answer, ballot))
        except RecordError as e:
            logger.warning("Skipping answer on %s: %s", ballot.id, e)
            outcome.skipped.append(SkippedAnswer(
                answer=answer,
                ballot_id=ballot.id,
                reason=str(e),
                error=type(e).__name__,
            ))
    return outcome


def partition_by_cohort(records: Iterable[VoteRecord]) -> dict[Cohort, list[VoteRecord]]:
    """Group records by cohort. Every cohort is present, possibly empty."""
    partitioned: dict[Cohort, list[VoteRecord]] = {cohort: [] for cohort in Cohort}
    for record in records:
        partitioned[record.cohort].append(record)
    return partitioned
