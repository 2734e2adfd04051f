"""Domain-level exceptions.

Expected outcomes (form validation errors, basket lookup misses) are never
raised; they come back as return values and events.  What is raised here
derives from DomainException so the CLI layer can catch it uniformly and
display a user-friendly message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class InvariantViolationError(DomainException):
    """A caller broke a contract the domain relies on (a programming fault)."""


class RemoteServiceError(DomainException):
    """The remote shop service rejected a request or could not be reached."""

    def __init__(self, error: str) -> None:
        super().__init__(error)
        self.error = error
