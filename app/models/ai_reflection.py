from datetime import datetime
from sqlalchemy import String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import EntityId
from app.db.base import Base


class AiReflection(Base):
    """AI-written commentary on one mood entry. Written once, never updated."""

    __tablename__ = "ai_reflections"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=EntityId.generate)
    # No foreign key: ids are validated at the API boundary instead.
    mood_entry_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
