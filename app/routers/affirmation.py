from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import failure_boundary
from app.db.base import get_db
from app.dependencies import get_analyzer
from app.schemas.mood import AffirmationResponse
from app.services import moods as mood_service
from app.services.mood_analysis import MoodAnalyzer

router = APIRouter(tags=["affirmation"])


@router.get("/affirmation", response_model=AffirmationResponse, summary="Daily affirmation")
def get_affirmation(
    db: Session = Depends(get_db),
    analyzer: MoodAnalyzer = Depends(get_analyzer),
):
    """Written from the first 50 characters of the 5 most recent entries."""
    with failure_boundary("Failed to generate affirmation"):
        text = mood_service.daily_affirmation(db, analyzer)
    return AffirmationResponse(affirmation=text)
