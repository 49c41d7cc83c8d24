"""
Playlists router.

POST /playlists/save
GET  /playlists
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import failure_boundary
from app.db.base import get_db
from app.schemas.playlist import SavedPlaylistCreate, SavedPlaylistOut
from app.services import moods as mood_service
from app.services import storage

router = APIRouter(prefix="/playlists", tags=["playlists"])


@router.post("/save", response_model=SavedPlaylistOut, summary="Save a playlist of mood entries")
def save_playlist(payload: SavedPlaylistCreate, db: Session = Depends(get_db)):
    with failure_boundary("Failed to save playlist"):
        return mood_service.save_playlist(
            db, payload.name, payload.description, payload.entity_ids()
        )


@router.get("", response_model=list[SavedPlaylistOut], summary="Saved playlists, newest first")
def list_playlists(db: Session = Depends(get_db)):
    with failure_boundary("Failed to retrieve playlists"):
        return storage.list_saved_playlists(db)
