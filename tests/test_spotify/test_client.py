"""Tests for SpotifyClient."""

import json

import httpx
import pytest
import respx

from wrapped_common.spotify import (
    SpotifyAuthError,
    SpotifyClient,
    SpotifyRateLimitError,
    SpotifyRequestError,
    SpotifyServerError,
)

API = "https://api.spotify.com/v1"


def _track(i: int) -> dict[str, object]:
    return {
        "id": f"track{i}",
        "name": f"Track {i}",
        "uri": f"spotify:track:track{i}",
        "duration_ms": 180_000,
        "artists": [{"id": f"artist{i}", "name": f"Artist {i}"}],
        "album": {"id": f"album{i}", "name": f"Album {i}"},
    }


@respx.mock
async def test_get_me() -> None:
    route = respx.get(f"{API}/me").mock(
        return_value=httpx.Response(200, json={"id": "alice", "display_name": "Alice", "images": []})
    )
    profile = await SpotifyClient("test-token", max_retries=0).get_me()
    assert profile.id == "alice"
    assert route.calls[0].request.headers["authorization"] == "Bearer test-token"


@respx.mock
async def test_currently_playing_204_is_none() -> None:
    respx.get(f"{API}/me/player/currently-playing").mock(return_value=httpx.Response(204))
    assert await SpotifyClient("t", max_retries=0).get_currently_playing() is None


@respx.mock
async def test_currently_playing_parses_item() -> None:
    respx.get(f"{API}/me/player/currently-playing").mock(
        return_value=httpx.Response(200, json={"is_playing": True, "progress_ms": 1000, "item": _track(1)})
    )
    playing = await SpotifyClient("t", max_retries=0).get_currently_playing()
    assert playing is not None
    assert playing.is_playing is True
    assert playing.item is not None
    assert playing.item.name == "Track 1"


@respx.mock
async def test_recently_played_passes_after_cursor() -> None:
    route = respx.get(f"{API}/me/player/recently-played").mock(
        return_value=httpx.Response(200, json={"items": [{"track": _track(0), "played_at": "2024-01-15T10:00:00Z"}]})
    )
    result = await SpotifyClient("t", max_retries=0).get_recently_played(after=1705312200000)
    assert len(result.items) == 1
    params = route.calls[0].request.url.params
    assert params["after"] == "1705312200000"
    assert params["limit"] == "50"


@respx.mock
async def test_top_tracks_sends_time_range() -> None:
    route = respx.get(f"{API}/me/top/tracks").mock(return_value=httpx.Response(200, json={"items": [_track(1)]}))
    result = await SpotifyClient("t", max_retries=0).get_top_tracks(time_range="short_term", limit=10)
    assert result.items[0].id == "track1"
    assert route.calls[0].request.url.params["time_range"] == "short_term"
    assert route.calls[0].request.url.params["limit"] == "10"


@respx.mock
async def test_recommendations_caps_seeds() -> None:
    route = respx.get(f"{API}/recommendations").mock(return_value=httpx.Response(200, json={"tracks": [_track(1)]}))
    await SpotifyClient("t", max_retries=0).get_recommendations(
        seed_tracks=["t1", "t2", "t3", "t4"],
        seed_artists=["a1", "a2", "a3"],
    )
    params = route.calls[0].request.url.params
    assert params["seed_tracks"] == "t1,t2,t3"
    assert params["seed_artists"] == "a1,a2"
    assert params["min_popularity"] == "30"


@respx.mock
async def test_create_playlist_and_add_tracks() -> None:
    create = respx.post(f"{API}/me/playlists").mock(
        return_value=httpx.Response(
            201,
            json={"id": "pl1", "name": "Mix", "external_urls": {"spotify": "https://open.spotify.com/playlist/pl1"}},
        )
    )
    add = respx.post(f"{API}/playlists/pl1/items").mock(return_value=httpx.Response(201, json={"snapshot_id": "s1"}))

    client = SpotifyClient("t", max_retries=0)
    playlist = await client.create_playlist("Mix", description="d")
    snapshot = await client.add_tracks_to_playlist(playlist.id, ["spotify:track:a"])

    assert json.loads(create.calls[0].request.content) == {"name": "Mix", "description": "d", "public": False}
    assert json.loads(add.calls[0].request.content) == {"uris": ["spotify:track:a"]}
    assert snapshot.snapshot_id == "s1"


@respx.mock
async def test_401_without_callback_raises() -> None:
    respx.get(f"{API}/me").mock(return_value=httpx.Response(401, json={"error": {"message": "expired"}}))
    with pytest.raises(SpotifyAuthError):
        await SpotifyClient("t", max_retries=0).get_me()


@respx.mock
async def test_401_refreshes_only_once() -> None:
    route = respx.get(f"{API}/me").mock(return_value=httpx.Response(401))
    calls = 0

    async def refresh() -> str:
        nonlocal calls
        calls += 1
        return "new-token"

    with pytest.raises(SpotifyAuthError):
        await SpotifyClient("t", on_token_expired=refresh, max_retries=3).get_me()
    assert calls == 1
    assert route.call_count == 2


@respx.mock
async def test_429_retries_then_succeeds() -> None:
    route = respx.get(f"{API}/me").mock(
        side_effect=[
            httpx.Response(429, headers={"Retry-After": "0"}),
            httpx.Response(200, json={"id": "alice"}),
        ]
    )
    profile = await SpotifyClient("t", max_retries=2, retry_base_delay=0).get_me()
    assert profile.id == "alice"
    assert route.call_count == 2


@respx.mock
async def test_429_exhausted_raises_rate_limit() -> None:
    respx.get(f"{API}/me").mock(return_value=httpx.Response(429, headers={"Retry-After": "0"}))
    with pytest.raises(SpotifyRateLimitError) as exc_info:
        await SpotifyClient("t", max_retries=1, retry_base_delay=0).get_me()
    assert exc_info.value.retry_after == 0.0


@respx.mock
async def test_5xx_exhausted_raises_server_error() -> None:
    route = respx.get(f"{API}/me").mock(return_value=httpx.Response(503))
    with pytest.raises(SpotifyServerError) as exc_info:
        await SpotifyClient("t", max_retries=2, retry_base_delay=0).get_me()
    assert exc_info.value.status_code == 503
    assert route.call_count == 3


@respx.mock
async def test_4xx_is_not_retried() -> None:
    route = respx.get(f"{API}/recommendations").mock(
        return_value=httpx.Response(404, json={"error": {"status": 404, "message": "Service not found"}})
    )
    with pytest.raises(SpotifyRequestError, match="Service not found") as exc_info:
        await SpotifyClient("t", max_retries=3, retry_base_delay=0).get_recommendations(
            seed_tracks=["t1"], seed_artists=["a1"]
        )
    assert exc_info.value.status_code == 404
    assert route.call_count == 1
