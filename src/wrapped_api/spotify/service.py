"""Spotify proxy service: playback, recommendations, playlists and wrapped stats."""

import logging
from datetime import UTC, datetime

from wrapped_api.spotify.schemas import CreatePlaylistResponse, TimeRange, WrappedResponse
from wrapped_api.spotify.wrapped import artist_hours, derive_albums, estimate_minutes
from wrapped_common.history_import.batching import iter_chunks
from wrapped_common.history_import.constants import PLAYLIST_ADD_CHUNK_SIZE
from wrapped_common.spotify import SpotifyClient
from wrapped_common.spotify.constants import MAX_SEED_ARTISTS, MAX_SEED_TRACKS
from wrapped_common.spotify.models import CurrentlyPlayingResponse, RecentlyPlayedResponse, RecommendationsResponse

logger = logging.getLogger(__name__)

WRAPPED_TOP_LIMIT = 50
PLAYLIST_DESCRIPTION = "Generated from your recent listening"


def default_playlist_name(today: datetime | None = None) -> str:
    today = today or datetime.now(UTC)
    return f"Wrapped Picks - {today:%d/%m/%Y}"


class SpotifyService:
    """Stateless service; every call takes a client bound to the signed-in user."""

    async def now_playing(self, client: SpotifyClient) -> CurrentlyPlayingResponse:
        playing = await client.get_currently_playing()
        return playing or CurrentlyPlayingResponse(is_playing=False, item=None)

    async def recently_played(self, client: SpotifyClient, limit: int = 50) -> RecentlyPlayedResponse:
        return await client.get_recently_played(limit=limit)

    async def recommendations(
        self,
        client: SpotifyClient,
        seed_tracks: list[str] | None = None,
        seed_artists: list[str] | None = None,
    ) -> RecommendationsResponse:
        """Recommendations from explicit seeds, or from short-term top items.

        Explicit seeds are only used when both tracks and artists are given.
        """
        if not (seed_tracks and seed_artists):
            top_tracks = await client.get_top_tracks(time_range=TimeRange.SHORT_TERM, limit=10)
            top_artists = await client.get_top_artists(time_range=TimeRange.SHORT_TERM, limit=5)
            seed_tracks = [t.id for t in top_tracks.items if t.id][:MAX_SEED_TRACKS]
            seed_artists = [a.id for a in top_artists.items if a.id][:MAX_SEED_ARTISTS]
        return await client.get_recommendations(seed_tracks=seed_tracks, seed_artists=seed_artists)

    async def create_playlist(
        self,
        client: SpotifyClient,
        track_uris: list[str],
        name: str | None = None,
    ) -> CreatePlaylistResponse:
        """Create a private playlist and add tracks in batches Spotify accepts."""
        playlist_name = name or default_playlist_name()
        playlist = await client.create_playlist(playlist_name, description=PLAYLIST_DESCRIPTION, public=False)
        for chunk in iter_chunks(track_uris, PLAYLIST_ADD_CHUNK_SIZE):
            await client.add_tracks_to_playlist(playlist.id, chunk)
        logger.info("Created playlist %s with %d tracks", playlist.id, len(track_uris))
        return CreatePlaylistResponse(
            id=playlist.id,
            url=playlist.external_urls.get("spotify"),
            name=playlist_name,
        )

    async def wrapped(self, client: SpotifyClient, time_range: TimeRange) -> WrappedResponse:
        tracks = (await client.get_top_tracks(time_range=time_range, limit=WRAPPED_TOP_LIMIT)).items
        artists = (await client.get_top_artists(time_range=time_range, limit=WRAPPED_TOP_LIMIT)).items
        minutes = estimate_minutes(tracks)
        return WrappedResponse(
            time_range=time_range,
            top_tracks=tracks,
            top_artists=artists,
            albums=derive_albums(tracks),
            artist_hours=artist_hours(artists, tracks),
            estimated_minutes=minutes,
            estimated_hours=round(minutes / 60),
        )
