"""Domain error taxonomy.

Services raise these; the HTTP layer maps them onto status codes. Anything
that is not a ``MirrorError`` is treated as a generic internal failure.
"""


class MirrorError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Conflict(MirrorError):
    """A record with the same domain id already exists."""


class NotFound(MirrorError):
    """A lookup by domain id matched nothing."""


class BadRequest(MirrorError):
    """The request could not be understood: bad body, bad id, missing field."""


class UpstreamFailure(MirrorError):
    """The placeholder API or the document store failed."""
