"""Public façade for the likedsongs.pipeline package.

This module exposes the grouping, classification, aggregation, reporting
and orchestration API. Other packages should import pipeline behaviour from
this façade instead of the internal pipeline submodules.
"""

from .aggregation import aggregate
from .analysis import analyze_year, run_analysis
from .classifier import (
    MergeOutcome,
    classify_bucket,
    fetch_track_details,
    merge_classifications,
    validate_classification,
)
from .grouping import (
    filter_by_year_range,
    group_by_month,
    group_by_year,
    month_key,
    year_key,
)
from .orchestration import PipelineOptions, resolve_mode, run_pipeline
from .organize import clear_liked_tracks, organize_tracks, playlist_name_for_year
from .reporting import (
    format_bucket_summary,
    format_year_summary,
    print_year_summary,
    sort_months,
)

__all__ = [
    "PipelineOptions",
    "resolve_mode",
    "run_pipeline",
    "run_analysis",
    "analyze_year",
    "group_by_year",
    "group_by_month",
    "filter_by_year_range",
    "month_key",
    "year_key",
    "classify_bucket",
    "validate_classification",
    "fetch_track_details",
    "merge_classifications",
    "MergeOutcome",
    "aggregate",
    "sort_months",
    "format_bucket_summary",
    "format_year_summary",
    "print_year_summary",
    "organize_tracks",
    "clear_liked_tracks",
    "playlist_name_for_year",
]
