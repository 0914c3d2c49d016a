"""Request and response models for Spotify proxy endpoints."""

import enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wrapped_common.spotify.models import SpotifyArtistFull, SpotifyTrack


class TimeRange(enum.StrEnum):
    SHORT_TERM = "short_term"  # ~4 weeks
    MEDIUM_TERM = "medium_term"  # ~6 months
    LONG_TERM = "long_term"  # all time


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatePlaylistRequest(_CamelModel):
    track_uris: list[str] = Field(default_factory=list)
    name: str | None = None


class CreatePlaylistResponse(BaseModel):
    id: str
    url: str | None
    name: str


class AlbumStat(_CamelModel):
    id: str
    name: str
    artist_name: str
    image_url: str
    track_count: int
    estimated_minutes: int


class ArtistHours(_CamelModel):
    artist_id: str | None
    artist_name: str
    image_url: str | None = None
    minutes: int
    hours: int


class WrappedResponse(_CamelModel):
    time_range: TimeRange
    top_tracks: list[SpotifyTrack]
    top_artists: list[SpotifyArtistFull]
    albums: list[AlbumStat]
    artist_hours: list[ArtistHours]
    estimated_minutes: int
    estimated_hours: int
