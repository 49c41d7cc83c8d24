"""
Mood orchestration service: sequences storage, analysis and Spotify calls.

Rules:
- Calls run strictly in order; each step feeds the next.
- No transaction spans the writes of one call. If analysis or Spotify fails
  after the entry was created, the entry (and reflection) stay committed.
- Ids arrive already validated as `EntityId`.

Public API
----------
create_mood_entry(db, analyzer, spotify, data)  -> MoodEntryResult
get_mood_entry_detail(db, entry_id)             -> (MoodEntry, AiReflection | None)
refresh_recommendations(db, spotify, entry_id)  -> list[SpotifyRecommendation]
save_playlist(db, name, description, ids)       -> SavedPlaylist
daily_affirmation(db, analyzer)                 -> str
build_recommendations(entry_id, tracks, feats)  -> list[NewRecommendation]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import (
    AFFIRMATION_HISTORY,
    AFFIRMATION_SNIPPET_CHARS,
    DEFAULT_TRACK_ENERGY,
    DEFAULT_TRACK_VALENCE,
    UNKNOWN_ARTIST,
    settings,
)
from app.core.errors import NotFoundError
from app.core.ids import EntityId
from app.models.ai_reflection import AiReflection
from app.models.mood_entry import MoodEntry
from app.models.saved_playlist import SavedPlaylist
from app.models.spotify_recommendation import SpotifyRecommendation
from app.services import storage
from app.services.mood_analysis import MoodAnalysis, MoodAnalyzer
from app.services.spotify import SpotifyClient
from app.services.storage import NewMoodEntry, NewRecommendation

logger = logging.getLogger(__name__)


@dataclass
class MoodEntryResult:
    entry: MoodEntry
    reflection: AiReflection
    recommendations: list[SpotifyRecommendation]
    analysis: MoodAnalysis


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _feature(features: list[Optional[dict]], index: int, axis: str, default: float) -> float:
    feature = features[index] if index < len(features) else None
    if not feature or feature.get(axis) is None:
        return default
    return float(feature[axis])


def build_recommendations(
    entry_id: EntityId,
    tracks: list[dict],
    features: list[Optional[dict]],
) -> list[NewRecommendation]:
    """
    Pair each track with the audio feature at the same position.
    A missing feature (or a missing axis) falls back to the named defaults.
    """
    rows = []
    for i, track in enumerate(tracks):
        artists = track.get("artists") or []
        images = (track.get("album") or {}).get("images") or []
        rows.append(NewRecommendation(
            mood_entry_id=entry_id,
            spotify_track_id=track["id"],
            track_name=track.get("name") or "",
            artist_name=(artists[0].get("name") if artists else None) or UNKNOWN_ARTIST,
            album_image_url=images[0].get("url") if images else None,
            preview_url=track.get("preview_url"),
            energy=_feature(features, i, "energy", DEFAULT_TRACK_ENERGY),
            valence=_feature(features, i, "valence", DEFAULT_TRACK_VALENCE),
        ))
    return rows


def _recommend_and_store(
    db: Session,
    spotify: SpotifyClient,
    entry_id: EntityId,
    energy: float,
    valence: float,
    genres: Optional[list[str]] = None,
) -> list[SpotifyRecommendation]:
    tracks = spotify.recommend(energy, valence, genres, limit=settings.RECOMMENDATION_LIMIT)
    features = spotify.audio_features([t["id"] for t in tracks])
    rows = build_recommendations(entry_id, tracks, features)
    recs = storage.create_spotify_recommendations(db, rows)
    logger.info("Stored %d recommendations for mood entry %s", len(recs), entry_id)
    return recs


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def create_mood_entry(
    db: Session,
    analyzer: MoodAnalyzer,
    spotify: SpotifyClient,
    data: NewMoodEntry,
) -> MoodEntryResult:
    """Create → analyse → store reflection → recommend → store batch."""
    entry = storage.create_mood_entry(db, data)
    entry_id = EntityId(entry.id)
    logger.info("Created mood entry %s (%s)", entry_id, entry.quick_mood)

    analysis = analyzer.analyze(data.text, data.energy, data.valence)
    reflection = storage.create_ai_reflection(db, entry_id, analysis.reflection)

    recs = _recommend_and_store(
        db, spotify, entry_id, analysis.energy, analysis.valence, analysis.suggested_genres,
    )
    return MoodEntryResult(entry=entry, reflection=reflection, recommendations=recs, analysis=analysis)


def get_mood_entry_detail(
    db: Session, entry_id: EntityId
) -> tuple[MoodEntry, Optional[AiReflection]]:
    entry = storage.get_mood_entry(db, entry_id)
    if entry is None:
        raise NotFoundError("Mood entry", entry_id)
    return entry, storage.get_ai_reflection(db, entry_id)


def refresh_recommendations(
    db: Session, spotify: SpotifyClient, entry_id: EntityId
) -> list[SpotifyRecommendation]:
    """
    Fetch a new batch from the entry's stored self-ratings (no re-analysis).
    The new batch is appended; earlier batches remain.
    """
    entry = storage.get_mood_entry(db, entry_id)
    if entry is None:
        raise NotFoundError("Mood entry", entry_id)
    # Stored ratings are 1–10; Spotify targets are 0–1.
    return _recommend_and_store(db, spotify, entry_id, entry.energy / 10.0, entry.valence / 10.0)


def save_playlist(
    db: Session,
    name: str,
    description: Optional[str],
    mood_entry_ids: list[EntityId],
) -> SavedPlaylist:
    return storage.create_saved_playlist(db, name, description, mood_entry_ids)


def recent_mood_snippets(db: Session) -> list[str]:
    entries = storage.list_recent_mood_entries(db, AFFIRMATION_HISTORY)
    return [e.text[:AFFIRMATION_SNIPPET_CHARS] for e in entries]


def daily_affirmation(db: Session, analyzer: MoodAnalyzer) -> str:
    return analyzer.daily_affirmation(recent_mood_snippets(db))
