"""
Persistence gateway for the four record kinds.

Rules:
- Every create commits immediately, so a created record's id is readable
  at once and survives a later failure in the same request.
- Ids arrive as validated `EntityId` values; this module never parses raw
  request strings.

Public API
----------
create_mood_entry(db, data)                      -> MoodEntry
get_mood_entry(db, entry_id)                     -> MoodEntry | None
list_mood_entries(db)                            -> list[MoodEntry]
list_recent_mood_entries(db, limit)              -> list[MoodEntry]
create_ai_reflection(db, entry_id, content)      -> AiReflection
get_ai_reflection(db, entry_id)                  -> AiReflection | None
create_spotify_recommendations(db, rows)         -> list[SpotifyRecommendation]
list_spotify_recommendations(db, entry_id)       -> list[SpotifyRecommendation]
create_saved_playlist(db, name, desc, ids)       -> SavedPlaylist
list_saved_playlists(db)                         -> list[SavedPlaylist]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.core.ids import EntityId
from app.models.ai_reflection import AiReflection
from app.models.mood_entry import MoodEntry
from app.models.saved_playlist import SavedPlaylist
from app.models.spotify_recommendation import SpotifyRecommendation


@dataclass
class NewMoodEntry:
    """Lightweight DTO so the gateway stays schema-agnostic."""
    text: str
    emoji: str
    quick_mood: str
    energy: float
    valence: float


@dataclass
class NewRecommendation:
    mood_entry_id: EntityId
    spotify_track_id: str
    track_name: str
    artist_name: str
    album_image_url: Optional[str]
    preview_url: Optional[str]
    energy: float
    valence: float


def _commit(db: Session, *objs) -> None:
    db.add_all(objs)
    db.commit()
    for obj in objs:
        db.refresh(obj)


# ---------------------------------------------------------------------------
# Mood entries
# ---------------------------------------------------------------------------

def create_mood_entry(db: Session, data: NewMoodEntry) -> MoodEntry:
    entry = MoodEntry(
        text=data.text,
        emoji=data.emoji,
        quick_mood=data.quick_mood,
        energy=data.energy,
        valence=data.valence,
    )
    _commit(db, entry)
    return entry


def get_mood_entry(db: Session, entry_id: EntityId) -> Optional[MoodEntry]:
    return db.get(MoodEntry, str(entry_id))


def _newest_first(db: Session):
    # Ids are time-ordered, so they break ties between rows created in the same second.
    return db.query(MoodEntry).order_by(MoodEntry.created_at.desc(), MoodEntry.id.desc())


def list_mood_entries(db: Session) -> list[MoodEntry]:
    return _newest_first(db).all()


def list_recent_mood_entries(db: Session, limit: int = 10) -> list[MoodEntry]:
    return _newest_first(db).limit(limit).all()


# ---------------------------------------------------------------------------
# AI reflections
# ---------------------------------------------------------------------------

def create_ai_reflection(db: Session, entry_id: EntityId, content: str) -> AiReflection:
    reflection = AiReflection(mood_entry_id=str(entry_id), content=content)
    _commit(db, reflection)
    return reflection


def get_ai_reflection(db: Session, entry_id: EntityId) -> Optional[AiReflection]:
    return (
        db.query(AiReflection)
        .filter(AiReflection.mood_entry_id == str(entry_id))
        .order_by(AiReflection.id.asc())
        .first()
    )


# ---------------------------------------------------------------------------
# Spotify recommendations
# ---------------------------------------------------------------------------

def create_spotify_recommendations(
    db: Session, rows: list[NewRecommendation]
) -> list[SpotifyRecommendation]:
    """Persist one batch. Existing rows for the entry are left in place."""
    recs = [
        SpotifyRecommendation(
            mood_entry_id=str(r.mood_entry_id),
            spotify_track_id=r.spotify_track_id,
            track_name=r.track_name,
            artist_name=r.artist_name,
            album_image_url=r.album_image_url,
            preview_url=r.preview_url,
            energy=r.energy,
            valence=r.valence,
        )
        for r in rows
    ]
    if recs:
        _commit(db, *recs)
    return recs


def list_spotify_recommendations(db: Session, entry_id: EntityId) -> list[SpotifyRecommendation]:
    return (
        db.query(SpotifyRecommendation)
        .filter(SpotifyRecommendation.mood_entry_id == str(entry_id))
        .order_by(SpotifyRecommendation.id.asc())
        .all()
    )


# ---------------------------------------------------------------------------
# Saved playlists
# ---------------------------------------------------------------------------

def create_saved_playlist(
    db: Session,
    name: str,
    description: Optional[str],
    mood_entry_ids: list[EntityId],
) -> SavedPlaylist:
    playlist = SavedPlaylist(name=name, description=description)
    playlist.mood_entry_ids = mood_entry_ids
    _commit(db, playlist)
    return playlist


def list_saved_playlists(db: Session) -> list[SavedPlaylist]:
    return (
        db.query(SavedPlaylist)
        .order_by(SavedPlaylist.created_at.desc(), SavedPlaylist.id.desc())
        .all()
    )
