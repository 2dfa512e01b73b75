from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest
import requests

from likedsongs.core import ExternalServiceFailure
from likedsongs.spotify import (
    SpotifyLibrary,
    add_tracks_to_playlist,
    create_playlist,
    get_all_liked_tracks,
    get_track_details,
    parse_added_at,
    remove_saved_tracks,
)

TOKEN = {"access_token": "test-access-token"}


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: str = ""):
        self._payload = payload
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return self._payload


class RecordingTransport:
    def __init__(self, responses: List[FakeResponse] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.responses:
            return self.responses.pop(0)
        return FakeResponse({})


def _saved_item(track_id: str, added_at: str = "2023-03-05T12:00:00Z") -> Dict:
    return {
        "added_at": added_at,
        "track": {
            "id": track_id,
            "uri": f"spotify:track:{track_id}",
            "name": f"Song {track_id}",
            "artists": [{"name": "Artist"}, {"name": "Guest"}],
        },
    }


@pytest.fixture
def transport(monkeypatch) -> RecordingTransport:
    fake = RecordingTransport()
    monkeypatch.setattr("likedsongs.spotify.http.requests.request", fake)
    return fake


def test_parse_added_at_handles_zulu_suffix() -> None:
    assert parse_added_at("2023-03-05T12:00:00Z") == datetime(
        2023, 3, 5, 12, 0, tzinfo=timezone.utc
    )


def test_get_all_liked_tracks_follows_next_pages(transport: RecordingTransport) -> None:
    transport.responses = [
        FakeResponse(
            {
                "total": 3,
                "items": [_saved_item("a"), {"added_at": "2023-03-05T12:00:00Z", "track": {"id": None}}],
                "next": "https://api.spotify.com/v1/me/tracks?offset=50&limit=50",
            }
        ),
        FakeResponse({"total": 3, "items": [_saved_item("b", "2021-12-31T23:00:00Z")], "next": None}),
    ]

    entries = get_all_liked_tracks(TOKEN)

    assert [e.id for e in entries] == ["a", "b"]
    assert entries[0].artists == ("Artist", "Guest")
    assert entries[0].title == "Song a"
    assert entries[1].date_liked == datetime(2021, 12, 31, 23, 0, tzinfo=timezone.utc)

    first, second = transport.calls
    assert first["params"] == {"limit": 50}
    assert first["headers"]["Authorization"] == "Bearer test-access-token"
    assert second["url"].endswith("offset=50&limit=50")
    assert second["params"] is None


def test_get_track_details_reads_popularity(transport: RecordingTransport) -> None:
    transport.responses = [
        FakeResponse({"id": "a", "name": "Song a", "artists": [{"name": "Artist"}], "popularity": 73})
    ]

    details = get_track_details(TOKEN, "a")

    assert details.popularity == 73
    assert transport.calls[0]["url"].endswith("/tracks/a")


def test_remove_saved_tracks_in_chunks_of_fifty(transport: RecordingTransport) -> None:
    ids = [f"t{i}" for i in range(120)]

    remove_saved_tracks(TOKEN, ids)

    assert [c["method"] for c in transport.calls] == ["DELETE"] * 3
    assert [len(c["json"]["ids"]) for c in transport.calls] == [50, 50, 20]
    assert transport.calls[2]["json"]["ids"][-1] == "t119"


def test_add_tracks_to_playlist_in_chunks_of_hundred(transport: RecordingTransport) -> None:
    uris = [f"spotify:track:{i}" for i in range(250)]

    add_tracks_to_playlist(TOKEN, "pl1", uris)

    assert [len(c["json"]["uris"]) for c in transport.calls] == [100, 100, 50]
    assert all(c["url"].endswith("/playlists/pl1/tracks") for c in transport.calls)


def test_create_playlist_is_private(transport: RecordingTransport) -> None:
    transport.responses = [FakeResponse({"id": "new-playlist"}, status_code=201)]

    playlist_id = create_playlist(TOKEN, "Liked Songs 2023", "Liked songs from 2023")

    assert playlist_id == "new-playlist"
    body = transport.calls[0]["json"]
    assert body == {
        "name": "Liked Songs 2023",
        "description": "Liked songs from 2023",
        "public": False,
    }


def test_create_playlist_without_id_is_external_service_failure(
    transport: RecordingTransport,
) -> None:
    transport.responses = [FakeResponse({"name": "Liked Songs 2023"}, status_code=201)]

    with pytest.raises(ExternalServiceFailure) as exc_info:
        create_playlist(TOKEN, "Liked Songs 2023", "Liked songs from 2023")

    assert "without an id" in exc_info.value.reason


def test_undecodable_body_is_external_service_failure(transport: RecordingTransport) -> None:
    class HtmlResponse(FakeResponse):
        def json(self) -> Any:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")

    transport.responses = [HtmlResponse(status_code=200, text="<html>upstream error</html>")]

    with pytest.raises(ExternalServiceFailure) as exc_info:
        create_playlist(TOKEN, "Liked Songs 2023", "Liked songs from 2023")

    assert "not JSON" in exc_info.value.reason


def test_malformed_track_details_is_external_service_failure(
    transport: RecordingTransport,
) -> None:
    transport.responses = [FakeResponse({"id": "a", "popularity": "very"})]

    with pytest.raises(ExternalServiceFailure):
        get_track_details(TOKEN, "a")


def test_http_error_status_is_external_service_failure(transport: RecordingTransport) -> None:
    transport.responses = [FakeResponse(status_code=429, text="rate limited")]

    with pytest.raises(ExternalServiceFailure) as exc_info:
        get_track_details(TOKEN, "a")

    assert exc_info.value.status_code == 429
    assert "rate limited" in exc_info.value.reason


def test_transport_error_is_external_service_failure(monkeypatch) -> None:
    def _boom(method, url, **kwargs):
        raise requests.ConnectionError("connection reset")

    monkeypatch.setattr("likedsongs.spotify.http.requests.request", _boom)

    with pytest.raises(ExternalServiceFailure) as exc_info:
        get_track_details(TOKEN, "a")

    assert exc_info.value.status_code is None


def test_spotify_library_binds_token(transport: RecordingTransport) -> None:
    transport.responses = [FakeResponse({"id": "pl9"})]
    library = SpotifyLibrary(TOKEN)

    assert library.create_playlist("Liked Songs 2020") == "pl9"
    assert transport.calls[0]["json"]["description"] == ""
