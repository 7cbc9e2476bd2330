"""Exception hierarchy for clipsense."""


class ClipsenseError(Exception):
    """Base exception for analysis errors."""

    pass


class InvalidInputError(ClipsenseError, ValueError):
    """Raised for empty, unordered or out-of-range analysis input."""

    pass
