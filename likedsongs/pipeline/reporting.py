from typing import Iterable, List, Optional

from likedsongs.core import (
    ALL_KEY,
    MONTH_NAMES,
    ClassifiedTrack,
    MonthBucket,
    MonthBuckets,
    log_info,
    log_section,
)

_MONTH_INDEX = {name: i for i, name in enumerate(MONTH_NAMES)}


def sort_months(keys: Iterable[str]) -> List[str]:
    """
    Calendar order for month keys, ignoring ALL_KEY.

    Unknown keys go last, in their original order.
    """
    months = [k for k in keys if k != ALL_KEY]
    return sorted(months, key=lambda k: _MONTH_INDEX.get(k, len(MONTH_NAMES)))


def _describe_track(track: Optional[ClassifiedTrack]) -> str:
    if track is None:
        return "n/a"
    return f"{track.title} - {', '.join(track.artists)} ({track.popularity}/100)"


def format_bucket_summary(bucket: MonthBucket) -> List[str]:
    analysis = bucket.analysis
    if analysis is None:
        lines = [f"- Number of liked songs: {len(bucket.tracks)}"]
        reason = f": {bucket.error}" if bucket.error else ""
        lines.append(f"- Analysis unavailable{reason}")
        return lines

    lines = [f"- Number of liked songs: {analysis.track_count}"]
    if not analysis.has_data:
        lines.append("- No data")
        return lines

    sentiment = analysis.sentiment.value if analysis.sentiment else "n/a"
    lines.extend(
        [
            f"- Overall sentiment: {sentiment}",
            f"- Typical song: {_describe_track(analysis.typical_track)}",
            f"- Average positivity score: {analysis.average_positivity:.2f}",
            f"- Average popularity score: {analysis.average_popularity:.2f}",
            f"- Most popular song: {_describe_track(analysis.most_popular)}",
            f"- Least popular song: {_describe_track(analysis.least_popular)}",
        ]
    )
    return lines


def format_year_summary(year: int, buckets: MonthBuckets) -> List[str]:
    """
    Summary lines for a year: "Overall" (the ALL_KEY bucket) first, then the
    months in calendar order.
    """
    lines = [f"Analysis Summary for {year}:"]

    overall = buckets.get(ALL_KEY)
    if overall is not None:
        lines.append("Overall:")
        lines.extend(format_bucket_summary(overall))

    months = sort_months(buckets.keys())
    if months:
        lines.append("")
        lines.append("Monthly Breakdown:")
        for month in months:
            lines.append(month)
            lines.extend(format_bucket_summary(buckets[month]))

    return lines


def print_year_summary(year: int, buckets: MonthBuckets) -> None:
    log_section(f"Analysis {year}")
    for line in format_year_summary(year, buckets):
        log_info(line)
