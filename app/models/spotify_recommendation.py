from datetime import datetime
from sqlalchemy import Float, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import EntityId
from app.db.base import Base


class SpotifyRecommendation(Base):
    """
    One recommended track for a mood entry.

    Rows are written in batches (one per analysis or refresh) and accumulate;
    a refresh never deletes the previous batch.
    energy / valence are Spotify audio features on the 0.0–1.0 scale.
    """

    __tablename__ = "spotify_recommendations"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=EntityId.generate)
    mood_entry_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    spotify_track_id: Mapped[str] = mapped_column(String(64), nullable=False)
    track_name: Mapped[str] = mapped_column(Text, nullable=False)
    artist_name: Mapped[str] = mapped_column(Text, nullable=False)
    album_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    preview_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    energy: Mapped[float] = mapped_column(Float, nullable=False)
    valence: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
