from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel


class SpotifyRecommendationOut(CamelModel):
    id: str
    mood_entry_id: str
    spotify_track_id: str
    track_name: str
    artist_name: str
    album_image_url: Optional[str] = None
    preview_url: Optional[str] = None
    energy: float
    valence: float
    created_at: datetime
