import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from likedsongs import config
from likedsongs.core import (
    BucketTrack,
    Category,
    ClassifiedTrack,
    LibraryEntry,
    MonthAnalysis,
    MonthBucket,
    MonthBuckets,
    log_warning,
    read_json,
    write_json,
)


def report_path(year: int, output_dir: Optional[str] = None) -> str:
    return os.path.join(output_dir or config.ANALYSIS_DIR, f"analysis_{year}.json")


# ---------- Serialisation ----------


def _serialize_track(track: BucketTrack) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "uri": track.uri,
        "id": track.id,
        "title": track.title,
        "artists": list(track.artists),
        "date_liked": track.date_liked.isoformat(),
    }
    if isinstance(track, ClassifiedTrack):
        data["category"] = track.category.value
        data["positivity"] = track.positivity
        data["popularity"] = track.popularity
    return data


def _serialize_optional_track(track: Optional[ClassifiedTrack]) -> Optional[Dict[str, Any]]:
    return _serialize_track(track) if track is not None else None


def _serialize_analysis(analysis: MonthAnalysis) -> Dict[str, Any]:
    # Tracks live on the bucket; averages are written for human readers only
    return {
        "sentiment": analysis.sentiment.value if analysis.sentiment else None,
        "typical_track": _serialize_optional_track(analysis.typical_track),
        "most_popular": _serialize_optional_track(analysis.most_popular),
        "least_popular": _serialize_optional_track(analysis.least_popular),
        "popularity": analysis.popularity,
        "positivity": analysis.positivity,
        "track_count": analysis.track_count,
        "has_data": analysis.has_data,
        "average_popularity": analysis.average_popularity,
        "average_positivity": analysis.average_positivity,
    }


def serialize_buckets(buckets: MonthBuckets) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for key, bucket in buckets.items():
        tracks = bucket.analysis.tracks if bucket.analysis else bucket.tracks
        payload[key] = {
            "tracks": [_serialize_track(t) for t in tracks],
            "analysis": _serialize_analysis(bucket.analysis) if bucket.analysis else None,
            "error": bucket.error,
        }
    return payload


# ---------- Deserialisation ----------


def _deserialize_track(data: Dict[str, Any]) -> BucketTrack:
    common = {
        "uri": data["uri"],
        "id": data["id"],
        "title": data["title"],
        "artists": tuple(data.get("artists", [])),
        "date_liked": datetime.fromisoformat(data["date_liked"]),
    }
    if "category" in data:
        return ClassifiedTrack(
            category=Category(data["category"]),
            positivity=data["positivity"],
            popularity=data["popularity"],
            **common,
        )
    return LibraryEntry(**common)


def _deserialize_optional_track(data: Optional[Dict[str, Any]]) -> Optional[ClassifiedTrack]:
    return _deserialize_track(data) if data else None


def _deserialize_bucket(data: Dict[str, Any]) -> MonthBucket:
    tracks = [_deserialize_track(t) for t in data.get("tracks", [])]
    raw_analysis = data.get("analysis")

    analysis = None
    if raw_analysis is not None:
        sentiment = raw_analysis.get("sentiment")
        analysis = MonthAnalysis(
            tracks=tuple(tracks),
            sentiment=Category(sentiment) if sentiment else None,
            typical_track=_deserialize_optional_track(raw_analysis.get("typical_track")),
            most_popular=_deserialize_optional_track(raw_analysis.get("most_popular")),
            least_popular=_deserialize_optional_track(raw_analysis.get("least_popular")),
            popularity=raw_analysis.get("popularity", 0),
            positivity=raw_analysis.get("positivity", 0),
        )

    return MonthBucket(tracks=tracks, analysis=analysis, error=data.get("error"))


def deserialize_buckets(payload: Dict[str, Any]) -> MonthBuckets:
    buckets: MonthBuckets = {}
    for key, data in payload.items():
        if not isinstance(data, dict):
            log_warning(f"Ignoring malformed bucket '{key}' in analysis report.")
            continue
        try:
            buckets[key] = _deserialize_bucket(data)
        except (KeyError, TypeError, ValueError) as e:
            log_warning(f"Ignoring malformed bucket '{key}' in analysis report: {e}")
    return buckets


# ---------- Files ----------


def save_year_analysis(
    year: int,
    buckets: MonthBuckets,
    output_dir: Optional[str] = None,
) -> Path:
    """
    Persist one year of analysed buckets to `analysis_<year>.json`.

    The output directory is created if needed. Returns the file path.
    """
    path = Path(report_path(year, output_dir))
    write_json(path, serialize_buckets(buckets))
    return path


def load_year_analysis(path: Union[str, Path]) -> MonthBuckets:
    """
    Load a report written by save_year_analysis().

    Returns an empty mapping when the file is missing or corrupted.
    """

    def _on_error(e: Exception) -> None:
        log_warning(f"Analysis report {path} is corrupted; ignoring it.")

    data = read_json(path, default={}, on_error=_on_error)
    if not isinstance(data, dict):
        log_warning(f"Analysis report {path} has invalid structure; ignoring it.")
        return {}
    return deserialize_buckets(data)
