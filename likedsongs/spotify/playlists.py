from typing import Dict, List

from likedsongs.config import PLAYLIST_ADD_CHUNK, SPOTIFY_API_BASE
from likedsongs.core import ExternalServiceFailure, log_info

from .http import spotify_json, spotify_request


def create_playlist(token_info: Dict, name: str, description: str) -> str:
    """Create a private playlist for the current user and return its id."""
    data = spotify_json(
        token_info,
        "POST",
        f"{SPOTIFY_API_BASE}/me/playlists",
        json={"name": name, "description": description, "public": False},
    )
    playlist_id = data.get("id") if isinstance(data, dict) else None
    if not playlist_id:
        raise ExternalServiceFailure(
            "spotify", f"playlist '{name}' was created without an id in the response"
        )
    return playlist_id


def add_tracks_to_playlist(
    token_info: Dict, playlist_id: str, track_uris: List[str]
) -> None:
    # Spotify accepts at most 100 URIs per request
    url = f"{SPOTIFY_API_BASE}/playlists/{playlist_id}/tracks"
    total = len(track_uris)
    for i in range(0, total, PLAYLIST_ADD_CHUNK):
        chunk = track_uris[i : i + PLAYLIST_ADD_CHUNK]
        spotify_request(token_info, "POST", url, json={"uris": chunk})
        log_info(f"Added {i + len(chunk)}/{total} tracks to playlist")
