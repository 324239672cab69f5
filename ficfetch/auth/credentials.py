"""Login credentials and session tokens."""

from pathlib import Path

from pydantic import BaseModel, Field, SecretStr

from ficfetch.core.errors import CredentialsError


class LoginInfo(BaseModel):
    """Username and password for the site."""

    username: str = Field(..., min_length=1)
    password: SecretStr


class Token(BaseModel):
    """Authenticity token handed out by the site's token dispenser."""

    token: str = Field(..., min_length=1)


def load_login_info(path: str | Path) -> LoginInfo:
    """
    Read credentials from a text file.

    The file holds the username on the first line and the password on the
    second.
    """
    path = Path(path)

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise CredentialsError(f"Cannot read login file {path}: {e}") from e

    if len(lines) < 2 or not lines[0].strip() or not lines[1]:
        raise CredentialsError(f"Login file {path} must contain a username and a password line")

    return LoginInfo(username=lines[0].strip(), password=lines[1])
