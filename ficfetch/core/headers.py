"""Default HTTP headers sent with every request."""

from config.settings import settings


class HeaderGenerator:
    """Builds request headers around a fixed identifying User-Agent label."""

    ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    ACCEPT_LANGUAGE = "en-US,en;q=0.9"

    def __init__(self, label: str | None = None):
        self.label = label or settings.user_agent

    def generate(
        self,
        referer: str | None = None,
        accept: str | None = None,
        extra_headers: dict[str, str] | None = None,
    ) -> dict[str, str]:
        """Generate the headers for one request."""
        headers = {
            "User-Agent": self.label,
            "Accept": accept or self.ACCEPT_HTML,
            "Accept-Language": self.ACCEPT_LANGUAGE,
        }

        if referer:
            headers["Referer"] = referer

        if extra_headers:
            headers.update(extra_headers)

        return headers

    def generate_for_form(self, referer: str | None = None) -> dict[str, str]:
        """Generate headers for a form POST."""
        return self.generate(
            referer=referer,
            extra_headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
