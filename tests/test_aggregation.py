from datetime import datetime, timezone

import pytest

from likedsongs.core import Category, ClassifiedTrack
from likedsongs.pipeline import aggregate


def _track(track_id: str, popularity: int, positivity: float = 0.0) -> ClassifiedTrack:
    return ClassifiedTrack(
        uri=f"spotify:track:{track_id}",
        id=track_id,
        title=f"Song {track_id}",
        artists=("Artist",),
        date_liked=datetime(2023, 3, 15, 12, 0, tzinfo=timezone.utc),
        category=Category.HAPPY,
        positivity=positivity,
        popularity=popularity,
    )


def test_aggregate_popularity_extremes_and_average() -> None:
    tracks = [_track("a", 10), _track("b", 90), _track("c", 50)]

    analysis = aggregate(tracks)

    assert analysis.has_data is True
    assert analysis.track_count == 3
    assert analysis.most_popular.id == "b"
    assert analysis.least_popular.id == "a"
    assert analysis.popularity == 150
    assert analysis.average_popularity == pytest.approx(50.0)


def test_aggregate_ties_keep_first_seen_track() -> None:
    tracks = [_track("first", 50), _track("second", 50)]

    analysis = aggregate(tracks)

    assert analysis.most_popular.id == "first"
    assert analysis.least_popular.id == "first"


def test_aggregate_single_track_is_both_extremes() -> None:
    only = _track("solo", 0)

    analysis = aggregate([only])

    assert analysis.most_popular is only
    assert analysis.least_popular is only
    assert analysis.average_popularity == 0.0


def test_aggregate_positivity_is_summed_and_averaged_on_read() -> None:
    tracks = [_track("a", 10, 20.0), _track("b", 10, -40.0), _track("c", 10, 50.0)]

    analysis = aggregate(tracks)

    assert analysis.positivity == pytest.approx(30.0)
    assert analysis.average_positivity == pytest.approx(10.0)


def test_aggregate_empty_bucket_has_no_data() -> None:
    analysis = aggregate([])

    assert analysis.has_data is False
    assert analysis.track_count == 0
    assert analysis.most_popular is None
    assert analysis.least_popular is None
    assert analysis.average_popularity == 0.0
    assert analysis.average_positivity == 0.0


def test_aggregate_carries_sentiment_and_typical_track() -> None:
    tracks = [_track("a", 30), _track("b", 60)]

    analysis = aggregate(tracks, sentiment=Category.MELLOW, typical_track=tracks[1])

    assert analysis.sentiment is Category.MELLOW
    assert analysis.typical_track.id == "b"
    assert analysis.tracks == tuple(tracks)


def test_aggregate_does_not_touch_input_list() -> None:
    tracks = [_track("a", 30)]

    aggregate(tracks)

    assert len(tracks) == 1
    assert tracks[0].popularity == 30
