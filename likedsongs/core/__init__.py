"""Public façade for the likedsongs.core package.

This module exposes logging helpers, filesystem utilities, the exception
hierarchy and the base models that are safe to import from other packages.
Callers should import these cross-cutting concerns from this façade instead
of the internal submodules.
"""

from .exceptions import (
    BatchTooLarge,
    ClassificationError,
    ConfigurationError,
    ExternalServiceFailure,
    LikedSongsError,
    MergeMismatch,
    SchemaViolation,
    SpotifyTokenMissing,
)
from .fs_utils import ensure_dir, ensure_parent_dir, read_json, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_debug,
    log_error,
    log_failure,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    ALL_KEY,
    CATEGORY_DESCRIPTIONS,
    MONTH_NAMES,
    BucketTrack,
    Category,
    ClassifiedTrack,
    LibraryEntry,
    MonthAnalysis,
    MonthBucket,
    MonthBuckets,
    TrackDetails,
    YearBuckets,
)

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_debug",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_failure",
    "log_progress",
    "ensure_parent_dir",
    "ensure_dir",
    "write_json",
    "read_json",
    "LikedSongsError",
    "ConfigurationError",
    "ExternalServiceFailure",
    "SpotifyTokenMissing",
    "ClassificationError",
    "SchemaViolation",
    "MergeMismatch",
    "BatchTooLarge",
    "ALL_KEY",
    "MONTH_NAMES",
    "Category",
    "CATEGORY_DESCRIPTIONS",
    "LibraryEntry",
    "TrackDetails",
    "ClassifiedTrack",
    "MonthAnalysis",
    "MonthBucket",
    "BucketTrack",
    "YearBuckets",
    "MonthBuckets",
]
