"""Public façade for the likedsongs.data package.

This module exposes the analysis report persistence helpers. Callers should
use this façade instead of importing from the internal modules directly.
"""

from .reports import (
    deserialize_buckets,
    load_year_analysis,
    report_path,
    save_year_analysis,
    serialize_buckets,
)

__all__ = [
    "report_path",
    "save_year_analysis",
    "load_year_analysis",
    "serialize_buckets",
    "deserialize_buckets",
]
