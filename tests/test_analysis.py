from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

import pytest

from likedsongs.core import (
    ALL_KEY,
    LibraryEntry,
    TrackDetails,
)
from likedsongs.data import load_year_analysis
from likedsongs.llm import TrackClassifier
from likedsongs.pipeline import analyze_year, group_by_month, run_analysis


def _entry(track_id: str, year: int, month: int) -> LibraryEntry:
    return LibraryEntry(
        uri=f"spotify:track:{track_id}",
        id=track_id,
        title=f"Song {track_id}",
        artists=("Artist",),
        date_liked=datetime(year, month, 15, 12, 0, tzinfo=timezone.utc),
    )


class StaticLibrary:
    def __init__(self, popularity: Dict[str, int]):
        self.popularity = popularity

    def fetch_track_metadata(self, track_id: str) -> TrackDetails:
        return TrackDetails(
            id=track_id,
            name=f"Song {track_id}",
            artists=("Artist",),
            popularity=self.popularity[track_id],
        )


class EchoClassifier(TrackClassifier):
    """Classifies every submitted track; batches listed in `broken` get garbage back."""

    def __init__(self, broken: List[List[str]] = ()):
        self.broken = [list(ids) for ids in broken]
        self.batches: List[List[str]] = []

    def classify(self, entries: List[LibraryEntry]) -> Dict:
        ids = [e.id for e in entries]
        self.batches.append(ids)
        if ids in self.broken:
            return {"tracks": "not a list"}
        verdicts = [
            {
                "title": e.title,
                "artist": ", ".join(e.artists),
                "id": e.id,
                "category": "Energetic",
                "positivity": 40,
            }
            for e in entries
        ]
        return {"tracks": verdicts, "sentiment": "Energetic", "typicalTrack": verdicts[0]}


@pytest.fixture
def library_2023():
    entries = [
        _entry("jan", 2023, 1),
        _entry("mar1", 2023, 3),
        _entry("mar2", 2023, 3),
        _entry("old", 2022, 6),
    ]
    library = StaticLibrary({"jan": 20, "mar1": 80, "mar2": 40, "old": 100})
    return entries, library


def test_run_analysis_end_to_end(tmp_path: Path, library_2023) -> None:
    entries, library = library_2023
    classifier = EchoClassifier()

    results = run_analysis(entries, classifier, library, year=2023, output_dir=str(tmp_path))

    assert list(results) == [2023]
    buckets = results[2023]
    assert buckets[ALL_KEY].analysis.track_count == 3
    assert buckets["January"].analysis.track_count == 1
    assert buckets["March"].analysis.track_count == 2
    assert buckets["March"].analysis.average_popularity == pytest.approx(60.0)
    assert buckets["March"].analysis.most_popular.id == "mar1"
    assert buckets[ALL_KEY].analysis.average_popularity == pytest.approx(140 / 3)

    # One batch per bucket, whole year first, then calendar months
    assert classifier.batches == [["jan", "mar1", "mar2"], ["jan"], ["mar1", "mar2"]]

    assert (tmp_path / "analysis_2023.json").exists()
    assert not (tmp_path / "analysis_2022.json").exists()

    reloaded = load_year_analysis(str(tmp_path / "analysis_2023.json"))
    assert reloaded["March"].analysis.average_popularity == pytest.approx(60.0)


def test_run_analysis_processes_years_in_order(tmp_path: Path, library_2023) -> None:
    entries, library = library_2023
    classifier = EchoClassifier()

    results = run_analysis(entries, classifier, library, output_dir=str(tmp_path))

    assert list(results) == [2022, 2023]
    assert classifier.batches[0] == ["old"]
    assert (tmp_path / "analysis_2022.json").exists()


def test_failed_month_does_not_abort_siblings(tmp_path: Path, library_2023) -> None:
    entries, library = library_2023
    classifier = EchoClassifier(broken=[["jan"]])

    results = run_analysis(entries, classifier, library, year=2023, output_dir=str(tmp_path))

    buckets = results[2023]
    assert buckets["January"].analysis is None
    assert "song_sentiment" in buckets["January"].error
    assert [e.id for e in buckets["January"].tracks] == ["jan"]
    assert buckets["March"].analysis.track_count == 2
    assert buckets[ALL_KEY].analysis.track_count == 3

    reloaded = load_year_analysis(str(tmp_path / "analysis_2023.json"))
    assert reloaded["January"].error == buckets["January"].error


def test_unexpected_classifier_error_is_contained(tmp_path: Path, library_2023) -> None:
    entries, library = library_2023

    class FlakyClassifier(EchoClassifier):
        def classify(self, entries: List[LibraryEntry]) -> Dict:
            if [e.id for e in entries] == ["jan"]:
                raise RuntimeError("connection pool exhausted")
            return super().classify(entries)

    results = run_analysis(
        entries, FlakyClassifier(), library, year=2023, output_dir=str(tmp_path)
    )

    buckets = results[2023]
    assert buckets["January"].error == "connection pool exhausted"
    assert buckets["March"].analysis.track_count == 2
    assert (tmp_path / "analysis_2023.json").exists()


def test_run_analysis_empty_range_does_nothing(tmp_path: Path, library_2023) -> None:
    entries, library = library_2023
    classifier = EchoClassifier()

    results = run_analysis(entries, classifier, library, year=1999, output_dir=str(tmp_path))

    assert results == {}
    assert classifier.batches == []
    assert list(tmp_path.iterdir()) == []


def test_save_failure_is_contained_per_year(tmp_path: Path, monkeypatch, library_2023) -> None:
    entries, library = library_2023

    def _fail(year, buckets, output_dir=None):
        raise OSError("disk full")

    monkeypatch.setattr("likedsongs.pipeline.analysis.save_year_analysis", _fail)

    results = run_analysis(entries, EchoClassifier(), library, output_dir=str(tmp_path))

    assert sorted(results) == [2022, 2023]


def test_analyze_year_returns_new_buckets(library_2023) -> None:
    entries, library = library_2023
    buckets = group_by_month({2023: entries[:3]})[2023]

    analysed = analyze_year(2023, buckets, EchoClassifier(), library)

    assert list(analysed) == [ALL_KEY, "January", "March"]
    assert buckets["March"].analysis is None
    assert analysed["March"].analysis is not None
    assert analysed["March"].tracks[0].category.value == "Energetic"
