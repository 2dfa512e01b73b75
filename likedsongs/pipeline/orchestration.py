"""Orchestration helpers for the CLI entrypoint.

run_pipeline() builds the run's collaborators (Spotify library handle,
classifier) once, fetches the saved-track library and dispatches to one of
three modes, checked in this order:

  - analyze:  sentiment/popularity report per year and month
  - clear:    unlike every saved track
  - organize: one playlist per liked year (default)

Failing to obtain a token or to fetch the library is fatal and propagates;
everything after that is contained per month or per year by the modes.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from likedsongs.core import log_info, log_section, log_success
from likedsongs.llm import OpenAITrackClassifier, TrackClassifier
from likedsongs.spotify import SpotifyLibrary

from .analysis import run_analysis
from .organize import clear_liked_tracks, organize_tracks


@dataclass
class PipelineOptions:
    year: Optional[int] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    clear_likes: bool = False
    analyze: bool = False
    output_dir: Optional[str] = None


def resolve_mode(opts: PipelineOptions) -> str:
    if opts.analyze:
        return "analyze"
    if opts.clear_likes:
        return "clear"
    return "organize"


def run_pipeline(
    opts: PipelineOptions,
    library: Optional[Any] = None,
    classifier: Optional[TrackClassifier] = None,
) -> Dict[str, Any]:
    mode = resolve_mode(opts)
    log_section(f"Liked songs ({mode})")

    if library is None:
        library = SpotifyLibrary.from_environment()

    entries = library.fetch_all_saved_entries()
    log_info(f"Found {len(entries)} saved tracks total")

    result: Dict[str, Any] = {"mode": mode, "total_tracks": len(entries)}

    if mode == "analyze":
        if classifier is None:
            classifier = OpenAITrackClassifier()
        analyses = run_analysis(
            entries,
            classifier,
            library,
            year=opts.year,
            start_year=opts.start_year,
            end_year=opts.end_year,
            output_dir=opts.output_dir,
        )
        result["years"] = sorted(analyses)
        result["failed_buckets"] = [
            f"{y}/{key}"
            for y, buckets in analyses.items()
            for key, bucket in buckets.items()
            if bucket.error
        ]
        log_success("Analysis complete!")
    elif mode == "clear":
        result["removed"] = clear_liked_tracks(entries, library)
    else:
        playlists = organize_tracks(
            entries,
            library,
            year=opts.year,
            start_year=opts.start_year,
            end_year=opts.end_year,
        )
        result["playlists"] = playlists
        log_success("All specified playlists processed.")

    return result
