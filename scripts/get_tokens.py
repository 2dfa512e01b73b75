#!/usr/bin/env python3
"""
Mint a Spotify refresh token for the organizer.

Starts the token helper API on the host/port of SPOTIFY_REDIRECT_URI and
opens /auth/login in the browser. After you approve access, the callback
logs a line like:

    SPOTIFY_REFRESH_TOKEN=...

Copy it into your .env file, then stop the server with Ctrl+C.

Run with:
    python scripts/get_tokens.py
"""

import sys
import threading
import webbrowser
from urllib.parse import urlparse

import uvicorn

from likedsongs import config
from likedsongs.core import configure_logging, log_error, log_step


def main() -> int:
    configure_logging()

    if not (config.SPOTIFY_CLIENT_ID and config.SPOTIFY_CLIENT_SECRET):
        log_error("Please set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET in the .env file.")
        return 1

    parsed = urlparse(config.SPOTIFY_REDIRECT_URI)
    host = parsed.hostname or "127.0.0.1"
    port = parsed.port or 8888
    login_url = f"http://{host}:{port}/auth/login"

    log_step("Starting authentication process...")
    log_step(f"If your browser does not open automatically, visit {login_url}")
    threading.Timer(1.0, webbrowser.open, args=(login_url,)).start()

    uvicorn.run("likedsongs.api.fastapi_app:app", host=host, port=port, log_level="warning")
    return 0


if __name__ == "__main__":
    sys.exit(main())
