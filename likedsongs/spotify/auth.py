import time
from typing import Dict
from urllib.parse import urlencode

import requests

from likedsongs import config
from likedsongs.core import (
    ConfigurationError,
    ExternalServiceFailure,
    SpotifyTokenMissing,
    log_step,
    read_json,
    write_json,
)


def _require_client_credentials() -> None:
    if not (config.SPOTIFY_CLIENT_ID and config.SPOTIFY_CLIENT_SECRET):
        raise ConfigurationError(
            "Please set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET in the .env file."
        )


def build_spotify_auth_url() -> str:
    auth_query_parameters = {
        "response_type": "code",
        "redirect_uri": config.SPOTIFY_REDIRECT_URI,
        "scope": " ".join(config.SCOPES),
        "client_id": config.SPOTIFY_CLIENT_ID,
    }
    return f"{config.SPOTIFY_AUTH_URL}?{urlencode(auth_query_parameters)}"


def _post_token_request(token_data: Dict) -> Dict:
    _require_client_credentials()
    payload = dict(token_data)
    payload["client_id"] = config.SPOTIFY_CLIENT_ID
    payload["client_secret"] = config.SPOTIFY_CLIENT_SECRET

    try:
        r = requests.post(
            config.SPOTIFY_TOKEN_URL,
            data=payload,
            timeout=config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise ExternalServiceFailure("spotify", f"token request failed: {e}") from e

    if not r.ok:
        raise ExternalServiceFailure(
            "spotify", f"token endpoint refused the request: {r.text}", r.status_code
        )

    token_info = r.json()
    token_info["timestamp"] = int(time.time())
    return token_info


def exchange_code_for_token(code: str) -> Dict:
    """
    Trade an authorization code from the redirect for access + refresh tokens
    and persist them to the token cache.
    """
    token_info = _post_token_request(
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": config.SPOTIFY_REDIRECT_URI,
        }
    )
    write_json(config.SPOTIFY_TOKEN_FILE, token_info)
    return token_info


def refresh_spotify_token(refresh_token: str) -> Dict:
    token_info = _post_token_request(
        {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        }
    )
    # Spotify only returns a new refresh token when it rotates it
    token_info.setdefault("refresh_token", refresh_token)
    write_json(config.SPOTIFY_TOKEN_FILE, token_info)
    return token_info


def load_spotify_token() -> Dict:
    """
    Return a fresh access token.

    Order of preference:
      1. SPOTIFY_REFRESH_TOKEN from the environment, refreshed once per run
      2. the cached token file, refreshed when it is about to expire
    Raises SpotifyTokenMissing when neither is available.
    """
    if config.SPOTIFY_REFRESH_TOKEN:
        log_step("Refreshing Spotify access token...")
        return refresh_spotify_token(config.SPOTIFY_REFRESH_TOKEN)

    token_info = read_json(config.SPOTIFY_TOKEN_FILE, default=None)
    if not isinstance(token_info, dict) or "access_token" not in token_info:
        raise SpotifyTokenMissing(
            "no refresh token configured; run scripts/get_tokens.py first"
        )

    now = int(time.time())
    expires_in = token_info.get("expires_in", 3600)
    if now - token_info.get("timestamp", 0) > expires_in - 60:
        if not token_info.get("refresh_token"):
            raise SpotifyTokenMissing("cached token expired and has no refresh token")
        log_step("Cached Spotify token expired, refreshing...")
        token_info = refresh_spotify_token(token_info["refresh_token"])
    return token_info


def spotify_headers(token_info: Dict) -> Dict:
    return {"Authorization": f"Bearer {token_info['access_token']}"}
