"""Per-bucket statistics over classified tracks.

aggregate() folds a bucket's tracks into a MonthAnalysis. Every fold step
returns a new frozen value, so the analysis never shares mutable state with
the track list it summarises. Extremes start out as None ("no value yet")
and are taken from the first track; ties keep the track seen first.
"""

from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, Optional

from likedsongs.core import Category, ClassifiedTrack, MonthAnalysis


@dataclass(frozen=True)
class _PopularityFold:
    total: float = 0
    most_popular: Optional[ClassifiedTrack] = None
    least_popular: Optional[ClassifiedTrack] = None


def _fold_popularity(acc: _PopularityFold, track: ClassifiedTrack) -> _PopularityFold:
    most = acc.most_popular
    least = acc.least_popular
    if most is None or track.popularity > most.popularity:
        most = track
    if least is None or track.popularity < least.popularity:
        least = track
    return replace(
        acc,
        total=acc.total + track.popularity,
        most_popular=most,
        least_popular=least,
    )


def _fold_positivity(total: float, track: ClassifiedTrack) -> float:
    return total + track.positivity


def aggregate(
    tracks: Iterable[ClassifiedTrack],
    sentiment: Optional[Category] = None,
    typical_track: Optional[ClassifiedTrack] = None,
) -> MonthAnalysis:
    """
    Build the MonthAnalysis for one bucket.

    `popularity` and `positivity` on the result are sums; use
    MonthAnalysis.average_popularity / average_positivity to read averages.
    An empty bucket yields has_data=False, no extremes and averages of 0.
    """
    track_tuple = tuple(tracks)

    popularity = reduce(_fold_popularity, track_tuple, _PopularityFold())
    positivity = reduce(_fold_positivity, track_tuple, 0)

    return MonthAnalysis(
        tracks=track_tuple,
        sentiment=sentiment,
        typical_track=typical_track,
        most_popular=popularity.most_popular,
        least_popular=popularity.least_popular,
        popularity=popularity.total,
        positivity=positivity,
    )
