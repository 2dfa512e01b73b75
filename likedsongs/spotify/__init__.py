"""Public façade for the likedsongs.spotify package.

This module exposes the Spotify Web API integration: authentication, saved
track retrieval, per-track metadata and playlist helpers, plus the
SpotifyLibrary handle the pipeline works with. Callers should import these
symbols from this façade instead of the internal modules.
"""

from .auth import (
    build_spotify_auth_url,
    exchange_code_for_token,
    load_spotify_token,
    refresh_spotify_token,
    spotify_headers,
)
from .http import spotify_json, spotify_request
from .library import SpotifyLibrary
from .playlists import add_tracks_to_playlist, create_playlist
from .tracks import (
    entry_from_saved_item,
    get_all_liked_tracks,
    get_track_details,
    parse_added_at,
    remove_saved_tracks,
)

__all__ = [
    "build_spotify_auth_url",
    "exchange_code_for_token",
    "refresh_spotify_token",
    "load_spotify_token",
    "spotify_headers",
    "spotify_request",
    "spotify_json",
    "SpotifyLibrary",
    "get_all_liked_tracks",
    "get_track_details",
    "remove_saved_tracks",
    "entry_from_saved_item",
    "parse_added_at",
    "create_playlist",
    "add_tracks_to_playlist",
]
