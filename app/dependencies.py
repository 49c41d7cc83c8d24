"""
Request-scoped access to the clients built in the app lifespan.

Tests swap these out through `app.dependency_overrides`.
"""
from fastapi import Request

from app.services.mood_analysis import MoodAnalyzer
from app.services.spotify import SpotifyClient


def get_analyzer(request: Request) -> MoodAnalyzer:
    return request.app.state.analyzer


def get_spotify(request: Request) -> SpotifyClient:
    return request.app.state.spotify
