"""
Mood entry request / response schemas.

POST /mood-entries          → MoodEntryCreate → MoodEntryCreateResponse
GET  /mood-entries[/recent] → list[MoodEntryOut]
GET  /mood-entries/{id}     → MoodEntryDetailOut
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel
from app.schemas.recommendation import SpotifyRecommendationOut

AffectScore = Annotated[float, Field(ge=1, le=10, description="Self-reported score on a 1–10 scale.")]
UnitScore = Annotated[float, Field(ge=0, le=1)]


class MoodEntryCreate(CamelModel):
    """A mood check-in submitted by the user."""

    text: Annotated[str, Field(
        min_length=1,
        description="Free-text note about how the user feels.",
        examples=["Long day, but the walk home cleared my head."],
    )]
    emoji: Annotated[str, Field(min_length=1, examples=["😌"])]
    quick_mood: Annotated[str, Field(
        min_length=1,
        description="Categorical quick-pick label.",
        examples=["calm", "anxious", "happy"],
    )]
    energy: AffectScore
    valence: AffectScore

    @field_validator("text", "emoji", "quick_mood")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class MoodEntryOut(CamelModel):
    id: str
    text: str
    emoji: str
    quick_mood: str
    energy: float
    valence: float
    created_at: datetime


class AiReflectionOut(CamelModel):
    id: str
    mood_entry_id: str
    content: str
    created_at: datetime


class MoodEntryDetailOut(MoodEntryOut):
    """A mood entry joined with its reflection (null when none was stored)."""
    ai_reflection: Optional[AiReflectionOut] = None


class MoodAnalysisOut(CamelModel):
    """What the analysis model returned for an entry (0–1 affect scale)."""
    reflection: str
    energy: UnitScore
    valence: UnitScore
    suggested_genres: list[str] = Field(default_factory=list)


class MoodEntryCreateResponse(CamelModel):
    mood_entry: MoodEntryOut
    ai_reflection: AiReflectionOut
    recommendations: list[SpotifyRecommendationOut]
    analysis: MoodAnalysisOut


class AffirmationResponse(CamelModel):
    affirmation: str
