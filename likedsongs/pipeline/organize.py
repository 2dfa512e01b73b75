"""Organize mode (one playlist per year) and clear mode (unlike everything)."""

from typing import Dict, Optional, Sequence

from likedsongs.config import PLAYLIST_PREFIX_YEAR
from likedsongs.core import (
    LibraryEntry,
    log_failure,
    log_info,
    log_section,
    log_step,
    log_success,
    log_warning,
)

from .grouping import filter_by_year_range, group_by_year


def playlist_name_for_year(year: int) -> str:
    return f"{PLAYLIST_PREFIX_YEAR}{year}"


def organize_tracks(
    entries: Sequence[LibraryEntry],
    library,
    year: Optional[int] = None,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
) -> Dict[int, str]:
    """
    Create one private playlist per liked year.

    A year that fails is logged and skipped. Returns {year: playlist_id}
    for the years that were completed.
    """
    filtered = filter_by_year_range(
        group_by_year(entries), year=year, start_year=start_year, end_year=end_year
    )

    log_section("Year Summary")
    for y in sorted(filtered):
        log_info(f"{y}: {len(filtered[y])} tracks")

    if not filtered:
        log_warning("No liked tracks in the requested year range; nothing to organize.")
        return {}

    created: Dict[int, str] = {}
    for y in sorted(filtered):
        tracks = filtered[y]
        name = playlist_name_for_year(y)
        log_step(f"Creating playlist '{name}' with {len(tracks)} tracks")
        try:
            playlist_id = library.create_playlist(name, f"Liked songs from {y}")
            library.add_tracks_to_playlist(playlist_id, [t.uri for t in tracks])
        except Exception as e:  # noqa: BLE001
            log_failure(f"Year {y}", e, hint="skipping to next year")
            continue

        created[y] = playlist_id
        log_success(f"Completed playlist: {name}")

    return created


def clear_liked_tracks(entries: Sequence[LibraryEntry], library) -> int:
    """Remove every entry from the saved-tracks library. Returns the count."""
    track_ids = [e.id for e in entries]
    log_step(f"Clearing {len(track_ids)} liked songs...")
    library.remove_saved_tracks(track_ids)
    log_success("Liked songs cleared")
    return len(track_ids)
