"""
Unit tests for the OpenAI-backed mood analyzer with a stubbed SDK client.
"""
import json
from types import SimpleNamespace

import pytest

from app.services.mood_analysis import (
    FALLBACK_AFFIRMATION,
    MoodAnalyzer,
    parse_analysis,
)


class StubCompletions:
    def __init__(self, content):
        self.content = content
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _analyzer(content):
    completions = StubCompletions(content)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return MoodAnalyzer(client, "gpt-test"), completions


class TestParseAnalysis:
    def test_full_payload(self):
        a = parse_analysis(
            {"reflection": " Nice. ", "energy": 0.7, "valence": 0.2, "suggestedGenres": ["Jazz", "soul"]},
            5, 5,
        )
        assert a.reflection == "Nice."
        assert (a.energy, a.valence) == (0.7, 0.2)
        assert a.suggested_genres == ["jazz", "soul"]

    def test_missing_signals_fall_back_to_inputs(self):
        a = parse_analysis({"reflection": "ok"}, 8, 3)
        assert (a.energy, a.valence) == (0.8, 0.3)
        assert a.suggested_genres == []

    def test_out_of_range_clamped(self):
        a = parse_analysis({"reflection": "ok", "energy": 7, "valence": -1}, 5, 5)
        assert (a.energy, a.valence) == (1.0, 0.0)

    def test_genres_deduped_and_capped(self):
        genres = ["pop", "POP", "rock", "jazz", "folk", "soul", "blues"]
        a = parse_analysis({"reflection": "ok", "suggestedGenres": genres}, 5, 5)
        assert a.suggested_genres == ["pop", "rock", "jazz", "folk", "soul"]


class TestAnalyze:
    def test_requests_json_and_parses(self):
        content = json.dumps({"reflection": "Take it slow.", "energy": 0.2, "valence": 0.6,
                              "suggestedGenres": ["acoustic"]})
        analyzer, completions = _analyzer(content)
        result = analyzer.analyze("tired but okay", 3, 6)
        assert result.reflection == "Take it slow."
        call = completions.calls[0]
        assert call["model"] == "gpt-test"
        assert call["response_format"] == {"type": "json_object"}
        assert "tired but okay" in call["messages"][1]["content"]

    def test_invalid_json_raises(self):
        analyzer, _ = _analyzer("not json")
        with pytest.raises(ValueError):
            analyzer.analyze("x", 5, 5)


class TestDailyAffirmation:
    def test_returns_model_text(self):
        analyzer, completions = _analyzer("  You showed up today.  ")
        assert analyzer.daily_affirmation(["rough start", "better evening"]) == "You showed up today."
        prompt = completions.calls[0]["messages"][1]["content"]
        assert "- rough start" in prompt
        assert "response_format" not in completions.calls[0]

    def test_empty_reply_uses_fallback(self):
        analyzer, _ = _analyzer(None)
        assert analyzer.daily_affirmation([]) == FALLBACK_AFFIRMATION
