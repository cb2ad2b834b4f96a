"""Exceptions raised while building ballots and decoding votes."""


class DrawError(ValueError):
    """The team draw has a shape that cannot produce ballots.

    These are fatal: they are raised before any ballot is returned.
    """
    pass


class EmptyDrawError(DrawError):
    """No teams were supplied."""
    pass


class DegenerateBallotError(DrawError):
    """A per-team ballot would have no voting options (only one team exists)."""
    pass


class DuplicateTeamError(DrawError):
    """Two teams share the same name."""
    pass


class RecordError(ValueError):
    """A single submitted answer could not be turned into a vote record.

    The answer is dropped and the rest of the batch is still counted.
    """
    pass


class UnparsableLabelError(RecordError):
    """A rank label does not start with a positive integer."""
    pass


class UnknownProjectError(RecordError):
    """An answer names a project that is not an option on its ballot."""
    pass


class UnknownCategoryError(RecordError):
    """An answer names a category outside impact/readiness/presentation."""
    pass


class MissingAddressError(LookupError):
    """One or more voters have no resolved contact address.

    Informational: an unresolved voter can still vote.
    """

    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(
            f"No address found for {len(names)} voter(s): {', '.join(names)}"
        )
