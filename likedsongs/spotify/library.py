"""Spotify library collaborator handle.

SpotifyLibrary binds one access token to the track and playlist helpers so
the pipeline receives a single explicitly constructed object per run instead
of reaching for module-level clients.
"""

from typing import Dict, List, Optional

from likedsongs.core import LibraryEntry, TrackDetails

from .auth import load_spotify_token
from .playlists import add_tracks_to_playlist, create_playlist
from .tracks import get_all_liked_tracks, get_track_details, remove_saved_tracks


class SpotifyLibrary:
    def __init__(self, token_info: Dict):
        self.token_info = token_info

    @classmethod
    def from_environment(cls) -> "SpotifyLibrary":
        return cls(load_spotify_token())

    def fetch_all_saved_entries(self) -> List[LibraryEntry]:
        return get_all_liked_tracks(self.token_info)

    def fetch_track_metadata(self, track_id: str) -> TrackDetails:
        return get_track_details(self.token_info, track_id)

    def create_playlist(self, name: str, description: Optional[str] = None) -> str:
        return create_playlist(self.token_info, name, description or "")

    def add_tracks_to_playlist(self, playlist_id: str, track_uris: List[str]) -> None:
        add_tracks_to_playlist(self.token_info, playlist_id, track_uris)

    def remove_saved_tracks(self, track_ids: List[str]) -> None:
        remove_saved_tracks(self.token_info, track_ids)
