"""Analyze mode: group → filter → per-bucket classification → report.

Years and months are processed one at a time. Any failure inside a month
is logged with its year and month and recorded on the bucket; the loop then
moves on to the next month. Saving a year's report is contained the same way per year.
"""

from typing import Dict, Optional, Sequence

from likedsongs.core import (
    ALL_KEY,
    LibraryEntry,
    MonthBucket,
    MonthBuckets,
    log_failure,
    log_info,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from likedsongs.data import save_year_analysis
from likedsongs.llm import TrackClassifier

from .classifier import classify_bucket
from .grouping import filter_by_year_range, group_by_month, group_by_year
from .reporting import print_year_summary, sort_months


def analyze_year(
    year: int,
    buckets: MonthBuckets,
    classifier: TrackClassifier,
    library,
    max_workers: Optional[int] = None,
    max_batch_size: Optional[int] = None,
) -> MonthBuckets:
    """
    Analyse every bucket of one year and return new buckets.

    Failed buckets keep their original tracks, have no analysis and carry
    the error message.
    """
    analysed: MonthBuckets = {}
    keys = sort_months(buckets.keys())
    if ALL_KEY in buckets:
        keys.insert(0, ALL_KEY)

    for key in keys:
        bucket = buckets[key]
        context = f"{year} / {key}"
        log_step(f"Analysing {context} ({len(bucket.tracks)} tracks)...")

        try:
            analysis = classify_bucket(
                bucket.tracks,
                classifier,
                library,
                max_workers=max_workers,
                max_batch_size=max_batch_size,
                context=context,
            )
        except Exception as e:  # noqa: BLE001
            log_failure(context, e, hint="skipping to next month")
            analysed[key] = MonthBucket(tracks=list(bucket.tracks), error=str(e))
            continue

        analysed[key] = MonthBucket(tracks=list(analysis.tracks), analysis=analysis)

    return analysed


def run_analysis(
    entries: Sequence[LibraryEntry],
    classifier: TrackClassifier,
    library,
    year: Optional[int] = None,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    output_dir: Optional[str] = None,
    max_workers: Optional[int] = None,
    max_batch_size: Optional[int] = None,
) -> Dict[int, MonthBuckets]:
    tracks_by_year = group_by_year(entries)
    filtered = filter_by_year_range(
        tracks_by_year, year=year, start_year=start_year, end_year=end_year
    )
    if not filtered:
        log_warning("No liked tracks in the requested year range; nothing to analyse.")
        return {}

    by_month = group_by_month(filtered)

    results: Dict[int, MonthBuckets] = {}
    for y in sorted(by_month):
        log_section(f"Processing {y}")
        results[y] = analyze_year(
            y,
            by_month[y],
            classifier,
            library,
            max_workers=max_workers,
            max_batch_size=max_batch_size,
        )

    for y, buckets in results.items():
        try:
            path = save_year_analysis(y, buckets, output_dir=output_dir)
        except OSError as e:
            log_failure(str(y), e, hint="report not saved, skipping to next year")
            continue
        log_success(f"Saved analysis for {y} to {path}")
        print_year_summary(y, buckets)

    failed = sum(1 for b in results.values() for bucket in b.values() if bucket.error)
    if failed:
        log_warning(f"{failed} bucket(s) could not be analysed; see errors above.")
    log_info(f"Analysed {len(results)} year(s).")
    return results
