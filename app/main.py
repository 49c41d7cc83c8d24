from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.db.base import get_db
from app.core.config import settings
from app.core.logging import configure_logging
from app.routers import mood_entries as mood_entries_router
from app.routers import playlists as playlists_router
from app.routers import affirmation as affirmation_router
from app.routers import spotify as spotify_router
from app.services.mood_analysis import MoodAnalyzer
from app.services.spotify import SpotifyClient
from app.core.errors import (
    MoodtuneException,
    moodtune_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # External clients are built once here and reached through app.dependencies.
    app.state.analyzer = MoodAnalyzer.from_settings(settings)
    app.state.spotify = SpotifyClient.from_settings(settings)
    yield


app = FastAPI(
    title="Moodtune API",
    description=(
        "**Mood journal with AI reflections and Spotify recommendations**\n\n"
        "Each mood entry is stored, reflected on by an OpenAI model, and paired "
        "with tracks from Spotify that match its energy and valence.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(MoodtuneException, moodtune_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(mood_entries_router.router, prefix=settings.API_PREFIX)
app.include_router(playlists_router.router, prefix=settings.API_PREFIX)
app.include_router(affirmation_router.router, prefix=settings.API_PREFIX)
app.include_router(spotify_router.router, prefix=settings.API_PREFIX)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception:
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
