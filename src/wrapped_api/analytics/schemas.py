"""Pydantic response models for the analytics endpoint."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DailyListening(BaseModel):
    date: str  # YYYY-MM-DD (UTC)
    minutes: int


class HourlyListening(BaseModel):
    hour: int  # 0-23 (UTC)
    count: int


class ArtistPlayCount(BaseModel):
    artist_name: str
    play_count: int


class ListeningSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_hours: int
    total_tracks: int
    average_per_day: int


class AnalyticsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    daily: list[DailyListening]
    hourly: list[HourlyListening]
    top_artists: list[ArtistPlayCount]
    summary: ListeningSummary
