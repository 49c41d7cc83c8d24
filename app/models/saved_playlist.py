"""
SavedPlaylist — a named, ordered selection of mood entries.

Rules:
- Append-only: no UPDATE or DELETE path.
- mood_entry_ids is a JSON-encoded Text list (stdlib json, no new deps).
"""
import json
from datetime import datetime
from sqlalchemy import String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import EntityId
from app.db.base import Base


class SavedPlaylist(Base):
    __tablename__ = "saved_playlists"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=EntityId.generate)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    mood_entry_ids_json: Mapped[str] = mapped_column(
        "mood_entry_ids", Text, nullable=False, default="[]",
        comment="JSON array of mood entry ids, in playlist order",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def mood_entry_ids(self) -> list[str]:
        return json.loads(self.mood_entry_ids_json or "[]")

    @mood_entry_ids.setter
    def mood_entry_ids(self, ids: list[str]) -> None:
        self.mood_entry_ids_json = json.dumps([str(i) for i in ids])
