from typing import Any, Dict

import requests

from likedsongs.config import REQUEST_TIMEOUT
from likedsongs.core import ExternalServiceFailure

from .auth import spotify_headers


def spotify_request(
    token_info: Dict,
    method: str,
    url: str,
    **kwargs: Any,
) -> requests.Response:
    """
    Issue an authenticated Web API call.

    Transport errors and non-2xx answers are turned into
    ExternalServiceFailure so callers only handle one error type.
    """
    headers = spotify_headers(token_info)
    headers.update(kwargs.pop("headers", None) or {})
    kwargs.setdefault("timeout", REQUEST_TIMEOUT)

    try:
        r = requests.request(method, url, headers=headers, **kwargs)
    except requests.RequestException as e:
        raise ExternalServiceFailure("spotify", f"{method} {url}: {e}") from e

    if not r.ok:
        raise ExternalServiceFailure(
            "spotify", f"{method} {url}: {r.text}", r.status_code
        )
    return r


def spotify_json(
    token_info: Dict,
    method: str,
    url: str,
    **kwargs: Any,
) -> Any:
    """spotify_request() plus body decoding; an undecodable body is an ExternalServiceFailure."""
    r = spotify_request(token_info, method, url, **kwargs)
    try:
        return r.json()
    except ValueError as e:
        raise ExternalServiceFailure(
            "spotify", f"{method} {url}: response body is not JSON", r.status_code
        ) from e
