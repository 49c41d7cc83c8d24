"""
Mood entries router.

POST /mood-entries
GET  /mood-entries
GET  /mood-entries/recent
GET  /mood-entries/{id}
GET  /mood-entries/{id}/recommendations
POST /mood-entries/{id}/refresh-recommendations
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.errors import failure_boundary
from app.core.ids import EntityId
from app.db.base import get_db
from app.dependencies import get_analyzer, get_spotify
from app.schemas.mood import (
    AiReflectionOut,
    MoodAnalysisOut,
    MoodEntryCreate,
    MoodEntryCreateResponse,
    MoodEntryDetailOut,
    MoodEntryOut,
)
from app.schemas.common import ErrorResponse
from app.schemas.recommendation import SpotifyRecommendationOut
from app.services import moods as mood_service
from app.services import storage
from app.services.mood_analysis import MoodAnalyzer
from app.services.spotify import SpotifyClient
from app.services.storage import NewMoodEntry

router = APIRouter(prefix="/mood-entries", tags=["mood-entries"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Validation error or malformed id."},
    500: {"model": ErrorResponse, "description": "Storage or upstream (OpenAI / Spotify) failure."},
}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Mood entry not found."}}


@router.post(
    "",
    response_model=MoodEntryCreateResponse,
    summary="Record a mood entry with AI reflection and Spotify recommendations",
    responses=_ERRORS,
)
def create_mood_entry(
    payload: MoodEntryCreate,
    db: Session = Depends(get_db),
    analyzer: MoodAnalyzer = Depends(get_analyzer),
    spotify: SpotifyClient = Depends(get_spotify),
):
    """
    Persist the entry, ask the analysis model for a reflection and refined
    energy/valence/genres, then store one recommendation per returned track.

    Not atomic: if a later step fails the entry is still saved.
    """
    with failure_boundary("Failed to create mood entry and generate recommendations"):
        result = mood_service.create_mood_entry(
            db,
            analyzer,
            spotify,
            NewMoodEntry(
                text=payload.text,
                emoji=payload.emoji,
                quick_mood=payload.quick_mood,
                energy=payload.energy,
                valence=payload.valence,
            ),
        )
    return MoodEntryCreateResponse(
        mood_entry=MoodEntryOut.model_validate(result.entry),
        ai_reflection=AiReflectionOut.model_validate(result.reflection),
        recommendations=[SpotifyRecommendationOut.model_validate(r) for r in result.recommendations],
        analysis=MoodAnalysisOut.model_validate(result.analysis),
    )


@router.get("", response_model=list[MoodEntryOut], summary="All mood entries, newest first")
def list_mood_entries(db: Session = Depends(get_db)):
    with failure_boundary("Failed to retrieve mood entries"):
        return storage.list_mood_entries(db)


@router.get("/recent", response_model=list[MoodEntryOut], summary="Most recent mood entries")
def list_recent_mood_entries(
    limit: int = Query(default=10, ge=1, le=100, description="How many entries to return."),
    db: Session = Depends(get_db),
):
    with failure_boundary("Failed to retrieve recent mood entries"):
        return storage.list_recent_mood_entries(db, limit)


@router.get(
    "/{entry_id}",
    response_model=MoodEntryDetailOut,
    summary="A mood entry with its AI reflection",
    responses={**_ERRORS, **_NOT_FOUND},
)
def get_mood_entry(entry_id: str, db: Session = Depends(get_db)):
    eid = EntityId.parse(entry_id)
    with failure_boundary("Failed to retrieve mood entry"):
        entry, reflection = mood_service.get_mood_entry_detail(db, eid)
    detail = MoodEntryDetailOut.model_validate(entry)
    detail.ai_reflection = AiReflectionOut.model_validate(reflection) if reflection else None
    return detail


@router.get(
    "/{entry_id}/recommendations",
    response_model=list[SpotifyRecommendationOut],
    summary="Every stored recommendation for a mood entry",
    responses=_ERRORS,
)
def get_recommendations(entry_id: str, db: Session = Depends(get_db)):
    eid = EntityId.parse(entry_id)
    with failure_boundary("Failed to retrieve recommendations"):
        return storage.list_spotify_recommendations(db, eid)


@router.post(
    "/{entry_id}/refresh-recommendations",
    response_model=list[SpotifyRecommendationOut],
    summary="Fetch and store a new recommendation batch",
    responses={**_ERRORS, **_NOT_FOUND},
)
def refresh_recommendations(
    entry_id: str,
    db: Session = Depends(get_db),
    spotify: SpotifyClient = Depends(get_spotify),
):
    """Uses the entry's stored energy/valence; the entry text is not re-analysed."""
    eid = EntityId.parse(entry_id)
    with failure_boundary("Failed to refresh recommendations"):
        return mood_service.refresh_recommendations(db, spotify, eid)
