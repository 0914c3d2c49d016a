"""Initial schema: spotify_users and streaming_history

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create account and history tables."""

    op.create_table(
        "spotify_users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("spotify_user_id", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("encrypted_refresh_token", sa.Text(), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=True),
        sa.Column("token_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_scrobble_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_spotify_users_spotify_user_id", "spotify_users", ["spotify_user_id"], unique=True)

    # Dedup key doubles as the conflict target for ON CONFLICT DO NOTHING
    op.create_table(
        "streaming_history",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("spotify_user_id", sa.String(255), nullable=False),
        sa.Column("ts", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ms_played", sa.Integer(), nullable=False),
        sa.Column("track_name", sa.Text(), nullable=True),
        sa.Column("artist_name", sa.Text(), nullable=True),
        sa.Column("album_name", sa.Text(), nullable=True),
        sa.Column("spotify_track_uri", sa.String(255), nullable=False),
        sa.Column("skipped", sa.Boolean(), nullable=False),
        sa.Column("source", sa.Enum("import", "scrobble", name="historysource"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["spotify_user_id"], ["spotify_users.spotify_user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("spotify_user_id", "ts", "spotify_track_uri", name="uq_streaming_history_user_ts_track"),
    )
    op.create_index("ix_streaming_history_user_ts", "streaming_history", ["spotify_user_id", "ts"])


def downgrade() -> None:
    """Drop all tables and enums."""
    op.drop_index("ix_streaming_history_user_ts", table_name="streaming_history")
    op.drop_table("streaming_history")
    op.drop_index("ix_spotify_users_spotify_user_id", table_name="spotify_users")
    op.drop_table("spotify_users")
    op.execute("DROP TYPE IF EXISTS historysource")
