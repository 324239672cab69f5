"""Session authentication helpers."""

from ficfetch.auth.credentials import LoginInfo, Token, load_login_info
from ficfetch.auth.session import SessionAuthenticator

__all__ = [
    "LoginInfo",
    "SessionAuthenticator",
    "Token",
    "load_login_info",
]
