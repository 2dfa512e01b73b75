from datetime import datetime
from typing import Any, Dict, List

from likedsongs.config import (
    SAVED_TRACKS_PAGE_SIZE,
    SAVED_TRACKS_REMOVE_CHUNK,
    SPOTIFY_API_BASE,
)
from likedsongs.core import (
    ExternalServiceFailure,
    LibraryEntry,
    TrackDetails,
    log_info,
    log_progress,
    log_step,
)

from .http import spotify_json, spotify_request


def parse_added_at(value: str) -> datetime:
    """Parse Spotify's `added_at` ("2023-03-05T12:00:00Z") into an aware datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def entry_from_saved_item(item: Dict[str, Any]) -> LibraryEntry:
    t = item["track"]
    return LibraryEntry(
        uri=t["uri"],
        id=t["id"],
        title=t["name"],
        artists=tuple(a["name"] for a in t.get("artists", [])),
        date_liked=parse_added_at(item["added_at"]),
    )


def get_all_liked_tracks(token_info: Dict) -> List[LibraryEntry]:
    log_step("Fetching liked tracks from Spotify...")
    entries: List[LibraryEntry] = []
    url = f"{SPOTIFY_API_BASE}/me/tracks"
    params = {"limit": SAVED_TRACKS_PAGE_SIZE}

    page = 0
    total = None

    while url:
        page += 1
        data = spotify_json(token_info, "GET", url, params=params)
        if total is None:
            total = data.get("total", 0)

        for item in data.get("items", []):
            # Local files and unavailable tracks come back without an id
            if not item.get("track") or not item["track"].get("id"):
                continue
            try:
                entries.append(entry_from_saved_item(item))
            except (KeyError, TypeError, ValueError) as e:
                raise ExternalServiceFailure(
                    "spotify", f"malformed saved-track item {item['track']['id']}: {e!r}"
                ) from e

        url = data.get("next")
        params = None  # next URL already includes params

        if total:
            estimated_pages = (total + SAVED_TRACKS_PAGE_SIZE - 1) // SAVED_TRACKS_PAGE_SIZE
            log_progress(page, estimated_pages, prefix="  Fetching pages")

    log_info(f"{len(entries)} liked tracks fetched.")
    return entries


def get_track_details(token_info: Dict, track_id: str) -> TrackDetails:
    data = spotify_json(token_info, "GET", f"{SPOTIFY_API_BASE}/tracks/{track_id}")
    try:
        return TrackDetails(
            id=data.get("id") or track_id,
            name=data.get("name", ""),
            artists=tuple(a["name"] for a in data.get("artists", [])),
            popularity=int(data.get("popularity", 0)),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ExternalServiceFailure(
            "spotify", f"malformed details for track {track_id}: {e!r}"
        ) from e


def remove_saved_tracks(token_info: Dict, track_ids: List[str]) -> None:
    """Unlike tracks in batches of SAVED_TRACKS_REMOVE_CHUNK ids."""
    url = f"{SPOTIFY_API_BASE}/me/tracks"
    total = len(track_ids)
    for i in range(0, total, SAVED_TRACKS_REMOVE_CHUNK):
        chunk = track_ids[i : i + SAVED_TRACKS_REMOVE_CHUNK]
        spotify_request(token_info, "DELETE", url, json={"ids": chunk})
        log_info(f"Removed {i + len(chunk)}/{total} tracks")
