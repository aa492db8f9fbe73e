"""Domain-level exceptions.

Line entry rejections are returned as values (see ``rejection.py``), not
raised. These exceptions cover the remaining cases: callers breaking an
invariant of the line set, unknown catalog entries, and stock lookups that
could not be completed. The CLI layer catches DomainException uniformly and
displays a user-friendly message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StockFetchError(DomainException):
    """The stock oracle could not produce a snapshot (network, timeout, bad payload)."""
