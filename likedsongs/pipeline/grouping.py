"""Time-bucketing of library entries.

group_by_year() and group_by_month() partition a flat list of saved tracks
into calendar buckets, and filter_by_year_range() narrows the year mapping
to what the user asked for. All three are pure: they never mutate their
input and keep the source order of entries inside every bucket.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from likedsongs.core import (
    ALL_KEY,
    MONTH_NAMES,
    LibraryEntry,
    MonthBucket,
    MonthBuckets,
    YearBuckets,
)


def _local(dt: datetime) -> datetime:
    # Naive datetimes are taken as already local
    return dt.astimezone() if dt.tzinfo is not None else dt


def year_key(dt: datetime) -> int:
    return _local(dt).year


def month_key(dt: datetime) -> str:
    """Canonical English month name of `dt` in local time."""
    return MONTH_NAMES[_local(dt).month - 1]


def group_by_year(entries: Iterable[LibraryEntry]) -> YearBuckets:
    tracks_by_year: YearBuckets = {}
    for entry in entries:
        tracks_by_year.setdefault(year_key(entry.date_liked), []).append(entry)
    return tracks_by_year


def group_by_month(tracks_by_year: YearBuckets) -> Dict[int, MonthBuckets]:
    """
    Split every year into month buckets.

    The full year list is stored under ALL_KEY (first key); months follow
    in order of first appearance. Every entry lands in exactly one month
    bucket and in ALL_KEY.
    """
    result: Dict[int, MonthBuckets] = {}
    for year, entries in tracks_by_year.items():
        buckets: MonthBuckets = {ALL_KEY: MonthBucket(tracks=list(entries))}
        for entry in entries:
            month = month_key(entry.date_liked)
            buckets.setdefault(month, MonthBucket()).tracks.append(entry)
        result[year] = buckets
    return result


def filter_by_year_range(
    tracks_by_year: YearBuckets,
    year: Optional[int] = None,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
) -> YearBuckets:
    """
    Narrow the year mapping.

    - `year` set: only that year, or an empty mapping when it is absent
    - `start_year` and/or `end_year` set: every present year in the
      inclusive range; a missing bound falls back to the min/max present
    - nothing set: the input mapping itself
    """
    if year is not None:
        if year in tracks_by_year:
            return {year: tracks_by_year[year]}
        return {}

    if start_year is None and end_year is None:
        return tracks_by_year

    years: List[int] = sorted(tracks_by_year)
    if not years:
        return {}

    lower = start_year if start_year is not None else years[0]
    upper = end_year if end_year is not None else years[-1]
    return {y: tracks_by_year[y] for y in years if lower <= y <= upper}
