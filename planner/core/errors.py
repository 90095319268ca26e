"""Exception hierarchy for the planner core."""


class FetchError(Exception):
    """A provider fetch did not produce a usable response."""

    def __init__(self, message: str, *, source: str | None = None, url: str | None = None):
        super().__init__(message)
        self.source = source
        self.url = url


class NetworkError(FetchError):
    """Provider unreachable, timed out, or answered with an HTTP error."""


class ParseError(FetchError):
    """Provider answered with a body we cannot interpret."""


class PersistenceError(Exception):
    """Persisted state is missing pieces or malformed."""
