"""Exception hierarchy for the fetch engine.

Every error carries the ``stage`` it came from so callers can tell a
construction problem from a failed fetch, a failed page in an aggregation,
or a rejected login.
"""


class FetchEngineError(Exception):
    """Base exception for all fetch engine errors."""

    stage: str = "engine"


class ConfigurationError(FetchEngineError):
    """Raised when a selector or pattern cannot be compiled."""

    stage = "configuration"


class ClientConstructionError(FetchEngineError):
    """Raised when the underlying HTTP transport cannot be built."""

    stage = "construction"


class FetchError(FetchEngineError):
    """Base class for failures of a single logical page request."""

    stage = "fetch"

    def __init__(self, url: str, message: str | None = None):
        self.url = url
        super().__init__(message or f"Fetching {url} failed")


class FatalStatusError(FetchError):
    """The server answered with a status the engine does not know how to handle."""

    def __init__(self, url: str, status: int):
        self.status = status
        super().__init__(url, f"Unknown status {status} for {url}")


class RedirectResolutionError(FetchError):
    """A redirect response had a missing or malformed Location header."""

    def __init__(self, url: str, status: int, location: str | None = None):
        self.status = status
        self.location = location
        if location is None:
            message = f"Redirect ({status}) from {url} has no Location header"
        else:
            message = f"Redirect ({status}) from {url} has an invalid Location: {location!r}"
        super().__init__(url, message)


class LoginRedirectError(FetchError):
    """A redirect pointed into the login flow and was not followed."""

    def __init__(self, url: str, location: str, status: int):
        self.location = location
        self.status = status
        super().__init__(url, f"Redirect ({status}) from {url} into login flow: {location}")


class RetryLimitExceeded(FetchError):
    """Transient failures continued past the configured retry ceiling."""

    def __init__(self, url: str, attempts: int, reason: str):
        self.attempts = attempts
        self.reason = reason
        super().__init__(url, f"Gave up on {url} after {attempts} attempts ({reason})")


class RedirectLimitExceeded(FetchError):
    """A redirect chain was longer than the configured ceiling."""

    def __init__(self, url: str, redirects: int):
        self.redirects = redirects
        super().__init__(url, f"Too many redirects ({redirects}) starting at {url}")


class FetchTimeoutError(FetchError):
    """A whole document fetch ran past its deadline."""

    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, f"Fetching {url} did not finish within {timeout}s")


class PaginationError(FetchEngineError):
    """Pagination markup was present but could not be interpreted."""

    stage = "pagination"


class AggregationError(FetchEngineError):
    """A page of a multi-page document could not be fetched."""

    stage = "aggregation"

    def __init__(self, page_number: int, url: str, cause: Exception):
        self.page_number = page_number
        self.url = url
        self.cause = cause
        super().__init__(f"Page {page_number} ({url}) failed: {cause}")


class AuthenticationError(FetchEngineError):
    """Login could not be completed."""

    stage = "authentication"


class CredentialsError(AuthenticationError):
    """The login file is missing or malformed."""
