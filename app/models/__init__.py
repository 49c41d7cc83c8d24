from .mood_entry import MoodEntry
from .ai_reflection import AiReflection
from .spotify_recommendation import SpotifyRecommendation
from .saved_playlist import SavedPlaylist

__all__ = [
    "MoodEntry",
    "AiReflection",
    "SpotifyRecommendation",
    "SavedPlaylist",
]
