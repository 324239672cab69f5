"""Session login through the shared HTTP client."""

from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from config.settings import settings
from ficfetch.auth.credentials import LoginInfo, Token, load_login_info
from ficfetch.core.delays import DelayManager
from ficfetch.core.errors import AuthenticationError
from ficfetch.core.page_fetcher import PageFetcher


class SessionAuthenticator:
    """
    Logs the shared session in.

    The session cookie the site sets ends up in the client's cookie jar,
    so every later fetch through the same client is authenticated.
    """

    TOKEN_PATH = "/token_dispenser.json"
    LOGIN_PATH = "/users/login"

    def __init__(self, fetcher: PageFetcher, delay_manager: DelayManager | None = None):
        self.fetcher = fetcher
        self.delay_manager = delay_manager or fetcher.delay_manager

    @property
    def login_url(self) -> str:
        return self.fetcher.resolve(self.LOGIN_PATH)

    async def get_token(self) -> str:
        """Fetch an authenticity token for the current session."""
        body = await self.fetcher.fetch(self.TOKEN_PATH)
        try:
            token = Token.model_validate_json(body)
        except ValidationError as e:
            raise AuthenticationError(f"Unexpected token dispenser response: {e}") from e

        logger.debug(f"Token is: {token.token}")
        return token.token

    async def login(self, login_file: str | Path | None = None) -> None:
        """Log in with the credentials stored in ``login_file``."""
        token = await self.get_token()
        await self.delay_manager.around_login()

        info = load_login_info(login_file or settings.login_file)
        await self.submit(token, info)

        await self.delay_manager.around_login()
        logger.info(f"Logged in as {info.username}")

    async def submit(self, token: str, info: LoginInfo) -> None:
        """POST the login form."""
        form = {
            "authenticity_token": token,
            "user[login]": info.username,
            "user[password]": info.password.get_secret_value(),
            "commit": "Log In",
        }
        response = await self.fetcher.client.post_form(self.login_url, form, referer=self.login_url)

        if response.status_code >= 400:
            raise AuthenticationError(f"Login rejected with status {response.status_code}")

        location = response.headers.get("location", "")
        if response.is_redirect and PageFetcher.is_login_url(location):
            raise AuthenticationError(f"Login rejected, redirected back to {location}")
