"""
Gunicorn settings for the Moodtune API.

PORT, WORKERS and LOG_LEVEL come from the environment.
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"
workers = int(os.environ.get("WORKERS", "2"))
worker_class = "uvicorn.workers.UvicornWorker"

# One mood entry waits on OpenAI and then Spotify.
timeout = 120
graceful_timeout = 30
keepalive = 5

loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
