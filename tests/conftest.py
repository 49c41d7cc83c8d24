"""
Shared pytest fixtures.

Uses a SQLite file database so no Postgres is required for tests, and
in-process fakes for the OpenAI and Spotify clients so nothing leaves the box.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_moodtune.db")
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app import models as _models  # noqa: F401
from app.db.base import Base, get_db
from app.dependencies import get_analyzer, get_spotify
from app.main import app
from app.services.mood_analysis import MoodAnalysis

SQLITE_URL = "sqlite:///./test_moodtune.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_track(i: int, artists=True, image=True) -> dict:
    return {
        "id": f"track{i}",
        "name": f"Song {i}",
        "artists": [{"name": f"Artist {i}"}] if artists else [],
        "album": {"images": [{"url": f"https://img.example/{i}.jpg"}] if image else []},
        "preview_url": f"https://preview.example/{i}.mp3" if i % 2 == 0 else None,
    }


class FakeAnalyzer:
    def __init__(self):
        self.calls = []
        self.affirmation_calls = []
        self.fail_with = None
        self.analysis = MoodAnalysis(
            reflection="It sounds like today asked a lot of you.",
            energy=0.3,
            valence=0.4,
            suggested_genres=["acoustic", "indie"],
        )

    def analyze(self, text, energy, valence):
        self.calls.append((text, energy, valence))
        if self.fail_with:
            raise self.fail_with
        return self.analysis

    def daily_affirmation(self, recent_moods):
        self.affirmation_calls.append(list(recent_moods))
        return "You are allowed to take up space."


class FakeSpotify:
    def __init__(self):
        self.tracks = [make_track(i) for i in range(3)]
        self.features = [{"energy": 0.8, "valence": 0.2} for _ in range(3)]
        self.recommend_calls = []
        self.search_calls = []
        self.fail_with = None

    def recommend(self, energy, valence, genres=None, limit=20):
        self.recommend_calls.append((energy, valence, genres))
        if self.fail_with:
            raise self.fail_with
        return list(self.tracks)

    def audio_features(self, track_ids):
        return list(self.features)

    def search(self, query, limit=10):
        self.search_calls.append((query, limit))
        if self.fail_with:
            raise self.fail_with
        return [make_track(0)]

    def genres(self):
        if self.fail_with:
            raise self.fail_with
        return ["acoustic", "pop", "rock"]


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def analyzer():
    return FakeAnalyzer()


@pytest.fixture()
def spotify():
    return FakeSpotify()


@pytest.fixture()
def client(db, analyzer, spotify):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    app.dependency_overrides[get_spotify] = lambda: spotify
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def entry_payload():
    return {
        "text": "Slow morning, but I finished the report and felt proud.",
        "emoji": "🙂",
        "quickMood": "content",
        "energy": 4,
        "valence": 7,
    }
