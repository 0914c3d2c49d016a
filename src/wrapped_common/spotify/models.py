"""Pydantic models for the subset of Spotify Web API responses used here.

Only fields the API routes or wrapped derivations read are declared; the
rest of each payload is ignored.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class SpotifyImage(BaseModel):
    url: str
    height: int | None = None
    width: int | None = None


class SpotifyArtistSimplified(BaseModel):
    """Artist as embedded in tracks and albums."""

    id: str | None = None
    name: str
    uri: str | None = None
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifyArtistFull(SpotifyArtistSimplified):
    """Artist from the top-artists endpoint."""

    genres: list[str] = Field(default_factory=list)
    popularity: int | None = None
    images: list[SpotifyImage] = Field(default_factory=list)


class SpotifyAlbumSimplified(BaseModel):
    id: str | None = None
    name: str
    uri: str | None = None
    album_type: str | None = None
    release_date: str | None = None
    images: list[SpotifyImage] = Field(default_factory=list)
    artists: list[SpotifyArtistSimplified] = Field(default_factory=list)


class SpotifyTrack(BaseModel):
    id: str | None = None
    name: str
    uri: str | None = None
    duration_ms: int | None = None
    explicit: bool | None = None
    popularity: int | None = None
    is_local: bool = False
    preview_url: str | None = None
    artists: list[SpotifyArtistSimplified] = Field(default_factory=list)
    album: SpotifyAlbumSimplified | None = None
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifyContext(BaseModel):
    """Playback context (playlist, album, artist, ...)."""

    type: str | None = None
    uri: str | None = None


class SpotifyPlayHistoryItem(BaseModel):
    """Single item from /me/player/recently-played."""

    track: SpotifyTrack
    played_at: datetime
    context: SpotifyContext | None = None


class SpotifyCursors(BaseModel):
    after: str | None = None
    before: str | None = None


class RecentlyPlayedResponse(BaseModel):
    items: list[SpotifyPlayHistoryItem] = Field(default_factory=list)
    next: str | None = None
    cursors: SpotifyCursors | None = None
    limit: int | None = None


class CurrentlyPlayingResponse(BaseModel):
    """Response from GET /me/player/currently-playing when something is playing."""

    is_playing: bool = False
    progress_ms: int | None = None
    currently_playing_type: str | None = None
    item: SpotifyTrack | None = None
    context: SpotifyContext | None = None


class TopArtistsResponse(BaseModel):
    items: list[SpotifyArtistFull] = Field(default_factory=list)
    total: int | None = None
    limit: int | None = None
    offset: int | None = None


class TopTracksResponse(BaseModel):
    items: list[SpotifyTrack] = Field(default_factory=list)
    total: int | None = None
    limit: int | None = None
    offset: int | None = None


class RecommendationSeed(BaseModel):
    id: str
    type: str
    href: str | None = None


class RecommendationsResponse(BaseModel):
    tracks: list[SpotifyTrack] = Field(default_factory=list)
    seeds: list[RecommendationSeed] = Field(default_factory=list)


class SpotifyUserProfile(BaseModel):
    """Response from GET /me."""

    id: str
    display_name: str | None = None
    email: str | None = None
    country: str | None = None
    product: str | None = None
    images: list[SpotifyImage] = Field(default_factory=list)


class SpotifyPlaylist(BaseModel):
    """Playlist as returned by POST /me/playlists."""

    id: str
    name: str
    description: str | None = None
    public: bool | None = None
    snapshot_id: str | None = None
    uri: str | None = None
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifySnapshotResponse(BaseModel):
    """Response from add-items."""

    snapshot_id: str
