from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from likedsongs.core import (
    ExternalServiceFailure,
    SpotifyTokenMissing,
    log_info,
    log_success,
)
from likedsongs.spotify import (
    build_spotify_auth_url,
    exchange_code_for_token,
    load_spotify_token,
)

router = APIRouter()


@router.get("/login")
def login() -> RedirectResponse:
    """
    Send the browser to Spotify's consent page.
    """
    return RedirectResponse(build_spotify_auth_url())


@router.get("/url")
def get_auth_url() -> dict:
    return {"auth_url": build_spotify_auth_url()}


@router.get("/status")
def auth_status() -> dict:
    """
    Whether a usable Spotify token is available.
    """
    try:
        token_info = load_spotify_token()
    except SpotifyTokenMissing:
        return {"authenticated": False, "reason": "missing_or_invalid_token", "expires_at": None}
    except ExternalServiceFailure as e:
        return {"authenticated": False, "reason": e.reason, "expires_at": None}

    expires_at = None
    if "timestamp" in token_info:
        expires_at = token_info["timestamp"] + token_info.get("expires_in", 3600)
    return {"authenticated": True, "reason": None, "expires_at": expires_at}


@router.get("/callback", response_class=HTMLResponse)
def auth_callback(
    code: str | None = Query(default=None),
    error: str | None = Query(default=None),
):
    """
    Spotify redirect target: exchange the code, persist the token and print
    the refresh token line to copy into .env.
    """
    if error:
        raise HTTPException(
            status_code=400,
            detail=f"Spotify authorization failed: {error}",
        )

    if code is None:
        raise HTTPException(status_code=400, detail="Missing 'code' parameter.")

    try:
        token_info = exchange_code_for_token(code)
    except ExternalServiceFailure as e:
        raise HTTPException(status_code=502, detail=str(e))

    log_success("Spotify authorization complete.")
    log_info("Add this line to your .env file:")
    log_info(f"SPOTIFY_REFRESH_TOKEN={token_info.get('refresh_token', '')}")

    return """
    <html>
      <body>
        <h1>Spotify authorization complete ✅</h1>
        <p>Check your terminal for the refresh token. You can close this window.</p>
      </body>
    </html>
    """
