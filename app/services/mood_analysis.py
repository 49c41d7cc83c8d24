"""
Mood-analysis client backed by an OpenAI chat model.

Two calls:
  analyze(text, energy, valence)   -> MoodAnalysis
  daily_affirmation(recent_moods)  -> str

No retry policy: SDK errors propagate to the caller unchanged.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from openai import OpenAI

logger = logging.getLogger(__name__)

# Spotify accepts at most five seeds per recommendation request.
MAX_SUGGESTED_GENRES = 5

FALLBACK_AFFIRMATION = (
    "Every feeling you notice is information, not a verdict. "
    "Be gentle with yourself today."
)

_ANALYSIS_SYSTEM_PROMPT = (
    "You are a warm, perceptive wellbeing companion and music curator. "
    "Given a short mood journal entry and the writer's self-rated energy and "
    "valence (1-10), reply with a JSON object with exactly these keys:\n"
    '  "reflection": 2-3 supportive sentences reflecting the entry back,\n'
    '  "energy": number 0.0-1.0, the musical energy that suits this mood,\n'
    '  "valence": number 0.0-1.0, the musical positivity that suits this mood,\n'
    '  "suggestedGenres": up to 5 Spotify genre seeds (lowercase, e.g. "indie", "lo-fi", "acoustic").'
)

_AFFIRMATION_SYSTEM_PROMPT = (
    "You write one short, sincere daily affirmation (max 2 sentences) for a "
    "person, informed by snippets of their recent mood journal. Reply with "
    "the affirmation text only."
)


@dataclass
class MoodAnalysis:
    reflection: str
    energy: float
    valence: float
    suggested_genres: list[str] = field(default_factory=list)


def _clamp_unit(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return min(1.0, max(0.0, number))


def parse_analysis(payload: dict, energy: float, valence: float) -> MoodAnalysis:
    """
    Normalise the model's JSON reply.

    energy / valence fall back to the 1–10 inputs rescaled to 0–1 when the
    model omits them or returns something non-numeric.
    """
    genres = payload.get("suggestedGenres") or payload.get("suggested_genres") or []
    if isinstance(genres, str):
        genres = [g for g in genres.split(",")]
    cleaned = [str(g).strip().lower() for g in genres if str(g).strip()]
    return MoodAnalysis(
        reflection=str(payload.get("reflection") or "").strip(),
        energy=_clamp_unit(payload.get("energy"), _clamp_unit(energy / 10.0, 0.5)),
        valence=_clamp_unit(payload.get("valence"), _clamp_unit(valence / 10.0, 0.5)),
        suggested_genres=list(dict.fromkeys(cleaned))[:MAX_SUGGESTED_GENRES],
    )


class MoodAnalyzer:
    """Wraps an `OpenAI` client; built once at startup and injected."""

    def __init__(self, client: OpenAI, model: str):
        self._client = client
        self._model = model

    @classmethod
    def from_settings(cls, settings) -> "MoodAnalyzer":
        client = OpenAI(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
        )
        return cls(client, settings.OPENAI_MODEL)

    def _complete(self, system: str, user: str, json_mode: bool = False) -> Optional[str]:
        kwargs: dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            **kwargs,
        )
        return response.choices[0].message.content

    def analyze(self, text: str, energy: float, valence: float) -> MoodAnalysis:
        logger.info("Analysing mood entry (%d chars, energy=%s, valence=%s)", len(text), energy, valence)
        content = self._complete(
            _ANALYSIS_SYSTEM_PROMPT,
            f"Entry: {text}\nEnergy: {energy}/10\nValence: {valence}/10",
            json_mode=True,
        )
        try:
            payload = json.loads(content or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError(f"Mood analysis returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError("Mood analysis returned a non-object JSON payload")
        return parse_analysis(payload, energy, valence)

    def daily_affirmation(self, recent_moods: list[str]) -> str:
        if recent_moods:
            notes = "\n".join(f"- {m}" for m in recent_moods)
            prompt = f"Recent mood notes:\n{notes}"
        else:
            prompt = "No recent mood notes yet."
        content = self._complete(_AFFIRMATION_SYSTEM_PROMPT, prompt)
        return (content or "").strip() or FALLBACK_AFFIRMATION
