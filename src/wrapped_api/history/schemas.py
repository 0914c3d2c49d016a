"""Pydantic response models for history endpoints."""

from datetime import datetime

from pydantic import BaseModel


class ScrobbleResult(BaseModel):
    fetched: int
    inserted: int
    last_scrobble_at: datetime | None = None
