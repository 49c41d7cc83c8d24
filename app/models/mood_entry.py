from datetime import datetime
from sqlalchemy import Float, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import EntityId
from app.db.base import Base


class MoodEntry(Base):
    """
    A user's mood check-in. Immutable once created.

    energy / valence are on the 1–10 input scale.
    """

    __tablename__ = "mood_entries"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=EntityId.generate)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    emoji: Mapped[str] = mapped_column(Text, nullable=False)
    quick_mood: Mapped[str] = mapped_column(Text, nullable=False)
    energy: Mapped[float] = mapped_column(Float, nullable=False)
    valence: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
