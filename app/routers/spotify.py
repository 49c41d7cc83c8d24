"""
Spotify proxy router.

GET /spotify/search?q=&limit=
GET /spotify/genres
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.errors import MissingQueryError, failure_boundary
from app.dependencies import get_spotify
from app.schemas.common import ErrorResponse
from app.services.spotify import SpotifyClient

router = APIRouter(prefix="/spotify", tags=["spotify"])


@router.get(
    "/search",
    summary="Search Spotify tracks (raw track objects)",
    responses={400: {"model": ErrorResponse, "description": "Missing search query."}},
)
def search_tracks(
    q: Optional[str] = Query(default=None, description="Free-text search query."),
    limit: int = Query(default=10, ge=1, le=50),
    spotify: SpotifyClient = Depends(get_spotify),
) -> list[dict]:
    if not q or not q.strip():
        raise MissingQueryError()
    with failure_boundary("Failed to search tracks"):
        return spotify.search(q.strip(), limit)


@router.get("/genres", summary="Genre seeds usable for recommendations")
def list_genres(spotify: SpotifyClient = Depends(get_spotify)) -> list[str]:
    with failure_boundary("Failed to retrieve genres"):
        return spotify.genres()
