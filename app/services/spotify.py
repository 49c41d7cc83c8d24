"""
Spotify Web API client (client-credentials flow).

recommend(energy, valence, genres, limit) -> list[track]
audio_features(track_ids)                 -> list[feature | None]   (input order)
search(query, limit)                      -> list[track]
genres()                                  -> list[str]              (static catalog)
"""
from __future__ import annotations

import base64
import logging
import threading
import time
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE = "https://api.spotify.com/v1"

# Seeds the recommendations endpoint accepts.
GENRE_SEEDS = [
    "acoustic", "afrobeat", "alt-rock", "ambient", "blues", "chill", "classical",
    "country", "dance", "deep-house", "disco", "drum-and-bass", "dubstep", "edm",
    "electronic", "emo", "folk", "funk", "gospel", "grunge", "happy", "hip-hop",
    "house", "indie", "indie-pop", "jazz", "k-pop", "latin", "metal", "piano",
    "pop", "punk", "r-n-b", "rainy-day", "reggae", "rock", "sad", "sleep",
    "soul", "study", "techno", "trance",
]
MAX_SEEDS = 5
# Audio-features lookups accept up to 100 ids per call.
AUDIO_FEATURES_BATCH = 100


class SpotifyError(RuntimeError):
    """Spotify answered with an HTTP error status."""

    def __init__(self, method: str, url: str, status_code: int, body: str):
        self.status_code = status_code
        super().__init__(f"{method} {url} -> {status_code}: {body}")


def default_seed_genres(energy: float, valence: float) -> list[str]:
    """Pick seeds from the energy/valence quadrant (0–1 scale)."""
    if energy >= 0.5 and valence >= 0.5:
        return ["pop", "dance", "happy"]
    if energy >= 0.5:
        return ["rock", "metal", "electronic"]
    if valence >= 0.5:
        return ["acoustic", "chill", "indie-pop"]
    return ["sad", "piano", "ambient"]


def pick_seed_genres(genres: Optional[list[str]], energy: float, valence: float) -> list[str]:
    known = set(GENRE_SEEDS)
    seeds = [g.strip().lower() for g in (genres or []) if g and g.strip().lower() in known]
    seeds = list(dict.fromkeys(seeds))[:MAX_SEEDS]
    return seeds or default_seed_genres(energy, valence)


def _clamp(x: float) -> float:
    return max(0.0, min(1.0, x))


class SpotifyClient:
    """Thin `requests` wrapper; built once at startup and injected."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        market: str = "US",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._market = market
        self._timeout = timeout
        self._session = session or requests.Session()
        self._token: Optional[str] = None
        self._token_expires_at = 0.0
        # Handlers run in a threadpool; one refresh at a time.
        self._token_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "SpotifyClient":
        return cls(
            client_id=settings.SPOTIFY_CLIENT_ID,
            client_secret=settings.SPOTIFY_CLIENT_SECRET,
            market=settings.SPOTIFY_MARKET,
            timeout=settings.SPOTIFY_TIMEOUT_SECONDS,
        )

    # ------------------------------------------------------------------
    # Auth / transport
    # ------------------------------------------------------------------
    def _basic_auth_header(self) -> dict[str, str]:
        creds = f"{self._client_id}:{self._client_secret}".encode()
        return {"Authorization": "Basic " + base64.b64encode(creds).decode()}

    def _access_token(self) -> str:
        with self._token_lock:
            if self._token and time.monotonic() < self._token_expires_at:
                return self._token
            r = self._session.post(
                TOKEN_URL,
                data={"grant_type": "client_credentials"},
                headers=self._basic_auth_header(),
                timeout=self._timeout,
            )
            if r.status_code >= 400:
                raise SpotifyError("POST", TOKEN_URL, r.status_code, r.text)
            tok = r.json()
            self._token = tok["access_token"]
            # Refresh a minute early.
            self._token_expires_at = time.monotonic() + max(0, int(tok.get("expires_in", 3600)) - 60)
            return self._token

    def _get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> dict:
        url = API_BASE + endpoint
        r = self._session.get(
            url,
            headers={"Authorization": "Bearer " + self._access_token()},
            params=params or {},
            timeout=self._timeout,
        )
        if r.status_code >= 400:
            raise SpotifyError("GET", url, r.status_code, r.text)
        return r.json()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def recommend(
        self,
        energy: float,
        valence: float,
        genres: Optional[list[str]] = None,
        limit: int = 20,
    ) -> list[dict]:
        seeds = pick_seed_genres(genres, energy, valence)
        params = {
            "limit": limit,
            "market": self._market,
            "seed_genres": ",".join(seeds),
            "target_energy": round(_clamp(energy), 3),
            "target_valence": round(_clamp(valence), 3),
        }
        logger.info("Requesting %d recommendations (seeds=%s)", limit, params["seed_genres"])
        return self._get("/recommendations", params).get("tracks", [])

    def audio_features(self, track_ids: list[str]) -> list[Optional[dict]]:
        if not track_ids:
            return []
        features: list[Optional[dict]] = []
        for start in range(0, len(track_ids), AUDIO_FEATURES_BATCH):
            chunk = track_ids[start:start + AUDIO_FEATURES_BATCH]
            got = self._get("/audio-features", {"ids": ",".join(chunk)}).get("audio_features") or []
            # Keep positions aligned with the request even if Spotify returns short.
            features.extend(got + [None] * (len(chunk) - len(got)))
        return features

    def search(self, query: str, limit: int = 10) -> list[dict]:
        res = self._get("/search", {
            "q": query, "type": "track", "limit": limit, "market": self._market,
        })
        return res.get("tracks", {}).get("items", [])

    def genres(self) -> list[str]:
        return sorted(GENRE_SEEDS)
