"""Per-attempt fetch outcomes and request state."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    """The page was served."""

    body: str
    status: int = 200


@dataclass(frozen=True)
class RedirectTo:
    """Follow the redirect to ``url``."""

    url: str


@dataclass(frozen=True)
class LoginRedirect:
    """The redirect leads into the login flow; not followed."""

    url: str
    status: int


@dataclass(frozen=True)
class Retryable:
    """Temporary failure; retry the same URL after ``wait`` seconds."""

    reason: str
    wait: float
    status: int | None = None
    body: str = ""


@dataclass(frozen=True)
class Fatal:
    """Unrecognized status; abort."""

    status: int


FetchOutcome = Success | RedirectTo | LoginRedirect | Retryable | Fatal


@dataclass
class PageRequest:
    """A URL and the counters owned by one fetch loop."""

    url: str
    attempt: int = 0
    redirects: int = 0

    def redirect(self, url: str) -> None:
        self.url = url
        self.attempt = 0
        self.redirects += 1
