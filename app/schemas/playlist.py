"""
Saved playlist schemas.

POST /playlists/save  → SavedPlaylistCreate → SavedPlaylistOut
GET  /playlists       → list[SavedPlaylistOut]
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, Field, field_validator

from app.core.ids import EntityId, coerce_entity_id
from app.schemas.common import CamelModel

MoodEntryRef = Annotated[str, AfterValidator(coerce_entity_id)]


class SavedPlaylistCreate(CamelModel):
    name: Annotated[str, Field(min_length=1, examples=["Rainy Sunday"])]
    description: Optional[str] = None
    mood_entry_ids: list[MoodEntryRef] = Field(
        description="Mood entry ids, in playlist order.",
        examples=[["65f1c0ffee0000000000a1b2"]],
    )

    @field_validator("name")
    @classmethod
    def reject_blank_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    def entity_ids(self) -> list[EntityId]:
        return [EntityId(i) for i in self.mood_entry_ids]


class SavedPlaylistOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    mood_entry_ids: list[str]
    created_at: datetime
