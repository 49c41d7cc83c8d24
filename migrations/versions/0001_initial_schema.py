"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

Ids are 24-hex time-ordered strings generated by the application.
mood_entry_id columns are indexed but deliberately carry no foreign key.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- mood_entries ---
    op.create_table(
        "mood_entries",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("emoji", sa.Text(), nullable=False),
        sa.Column("quick_mood", sa.Text(), nullable=False),
        sa.Column("energy", sa.Float(), nullable=False),
        sa.Column("valence", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_mood_entries_created_at", "mood_entries", ["created_at"])

    # --- ai_reflections ---
    op.create_table(
        "ai_reflections",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("mood_entry_id", sa.String(24), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ai_reflections_mood_entry_id", "ai_reflections", ["mood_entry_id"])

    # --- spotify_recommendations ---
    op.create_table(
        "spotify_recommendations",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("mood_entry_id", sa.String(24), nullable=False),
        sa.Column("spotify_track_id", sa.String(64), nullable=False),
        sa.Column("track_name", sa.Text(), nullable=False),
        sa.Column("artist_name", sa.Text(), nullable=False),
        sa.Column("album_image_url", sa.Text(), nullable=True),
        sa.Column("preview_url", sa.Text(), nullable=True),
        sa.Column("energy", sa.Float(), nullable=False),
        sa.Column("valence", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_spotify_recommendations_mood_entry_id", "spotify_recommendations", ["mood_entry_id"]
    )

    # --- saved_playlists ---
    op.create_table(
        "saved_playlists",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("mood_entry_ids", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("saved_playlists")
    op.drop_index("ix_spotify_recommendations_mood_entry_id", table_name="spotify_recommendations")
    op.drop_table("spotify_recommendations")
    op.drop_index("ix_ai_reflections_mood_entry_id", table_name="ai_reflections")
    op.drop_table("ai_reflections")
    op.drop_index("ix_mood_entries_created_at", table_name="mood_entries")
    op.drop_table("mood_entries")
