from .auth import (
    build_oauth_authorize_url,
    exchange_code_for_token,
    fetch_user_profile,
    get_redirect_uri,
    GoogleAuthError,
    GoogleToken,
)

__all__ = [
    "build_oauth_authorize_url",
    "exchange_code_for_token",
    "fetch_user_profile",
    "get_redirect_uri",
    "GoogleAuthError",
    "GoogleToken",
]
