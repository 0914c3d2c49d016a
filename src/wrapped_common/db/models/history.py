"""Streaming history: one row per counted play."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wrapped_common.db.base import Base, enum_values, utc_now
from wrapped_common.db.enums import HistorySource

if TYPE_CHECKING:
    from wrapped_common.db.models.user import SpotifyUser


class StreamingHistory(Base):
    """Play events, unique on (spotify_user_id, ts, spotify_track_uri).

    Rows are only ever inserted; a repeated key is ignored, never merged.
    """

    __tablename__ = "streaming_history"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    spotify_user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("spotify_users.spotify_user_id", ondelete="CASCADE"), nullable=False
    )
    ts: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ms_played: Mapped[int] = mapped_column(Integer, nullable=False)
    track_name: Mapped[str | None] = mapped_column(Text)
    artist_name: Mapped[str | None] = mapped_column(Text)
    album_name: Mapped[str | None] = mapped_column(Text)
    spotify_track_uri: Mapped[str] = mapped_column(String(255), nullable=False)
    skipped: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    source: Mapped[HistorySource] = mapped_column(
        SQLEnum(HistorySource, values_callable=enum_values), nullable=False, default=HistorySource.IMPORT
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)

    user: Mapped[SpotifyUser] = relationship("SpotifyUser", back_populates="history")

    __table_args__ = (
        UniqueConstraint("spotify_user_id", "ts", "spotify_track_uri", name="uq_streaming_history_user_ts_track"),
        Index("ix_streaming_history_user_ts", "spotify_user_id", "ts"),
    )
