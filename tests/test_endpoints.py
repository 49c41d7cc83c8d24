"""
Integration tests for API endpoints using a SQLite DB and fake clients.
"""
import pytest
from sqlalchemy.exc import OperationalError

from app.db.base import get_db
from app.main import app
from app.models.mood_entry import MoodEntry
from app.services import moods as mood_service

UNKNOWN_ID = "0123456789abcdef01234567"


def _create(client, payload):
    r = client.post("/api/mood-entries", json=payload)
    assert r.status_code == 200, r.text
    return r.json()


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_health_db_down(self, client):
        class _DeadSession:
            def execute(self, *args, **kwargs):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        app.dependency_overrides[get_db] = lambda: _DeadSession()
        r = client.get("/health")
        assert r.status_code == 503
        assert r.json() == {"status": "error", "db": "unreachable"}


class TestCreateMoodEntry:
    def test_returns_composite(self, client, entry_payload):
        body = _create(client, entry_payload)
        assert set(body) == {"moodEntry", "aiReflection", "recommendations", "analysis"}
        entry = body["moodEntry"]
        assert len(entry["id"]) == 24
        assert entry["quickMood"] == "content"
        assert entry["energy"] == 4
        assert body["aiReflection"]["moodEntryId"] == entry["id"]
        assert body["aiReflection"]["content"].startswith("It sounds like")
        assert body["analysis"]["suggestedGenres"] == ["acoustic", "indie"]

    def test_analyzer_gets_text_and_ratings(self, client, analyzer, entry_payload):
        _create(client, entry_payload)
        assert analyzer.calls == [(entry_payload["text"], 4.0, 7.0)]

    def test_spotify_gets_refined_signals(self, client, spotify, entry_payload):
        _create(client, entry_payload)
        assert spotify.recommend_calls == [(0.3, 0.4, ["acoustic", "indie"])]

    def test_one_recommendation_per_track(self, client, spotify, entry_payload):
        body = _create(client, entry_payload)
        recs = body["recommendations"]
        assert len(recs) == len(spotify.tracks)
        assert [r["spotifyTrackId"] for r in recs] == ["track0", "track1", "track2"]
        assert all(r["energy"] == 0.8 and r["valence"] == 0.2 for r in recs)
        assert recs[0]["previewUrl"] == "https://preview.example/0.mp3"
        assert recs[1]["previewUrl"] is None

    def test_missing_features_default_to_half(self, client, spotify, entry_payload):
        spotify.features = [{"energy": 0.9, "valence": 0.1}, None]
        body = _create(client, entry_payload)
        recs = body["recommendations"]
        assert (recs[0]["energy"], recs[0]["valence"]) == (0.9, 0.1)
        assert (recs[1]["energy"], recs[1]["valence"]) == (0.5, 0.5)
        assert (recs[2]["energy"], recs[2]["valence"]) == (0.5, 0.5)

    def test_no_tracks_gives_empty_list(self, client, spotify, entry_payload):
        spotify.tracks = []
        spotify.features = []
        body = _create(client, entry_payload)
        assert body["recommendations"] == []

    @pytest.mark.parametrize("field,value", [
        ("energy", 0), ("energy", 11), ("valence", 0.5), ("valence", 10.5),
    ])
    def test_out_of_range_rejected_before_persistence(
        self, client, db, analyzer, entry_payload, field, value
    ):
        before = db.query(MoodEntry).count()
        entry_payload[field] = value
        r = client.post("/api/mood-entries", json=entry_payload)
        assert r.status_code == 400
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert any(field in e["field"] for e in body["details"]["errors"])
        assert db.query(MoodEntry).count() == before
        assert analyzer.calls == []

    @pytest.mark.parametrize("field", ["text", "emoji", "quickMood", "energy", "valence"])
    def test_missing_field_rejected(self, client, entry_payload, field):
        del entry_payload[field]
        r = client.post("/api/mood-entries", json=entry_payload)
        assert r.status_code == 400
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_blank_text_rejected(self, client, entry_payload):
        entry_payload["text"] = "   "
        r = client.post("/api/mood-entries", json=entry_payload)
        assert r.status_code == 400

    def test_non_numeric_energy_rejected(self, client, entry_payload):
        entry_payload["energy"] = "loud"
        r = client.post("/api/mood-entries", json=entry_payload)
        assert r.status_code == 400

    def test_long_text_accepted(self, client, entry_payload):
        entry_payload["text"] = "a" * 6000
        body = _create(client, entry_payload)
        assert body["moodEntry"]["text"] == "a" * 6000

    def test_long_labels_accepted(self, client, entry_payload):
        entry_payload["quickMood"] = "q" * 80
        entry_payload["emoji"] = "🌧" * 40
        body = _create(client, entry_payload)
        assert body["moodEntry"]["quickMood"] == "q" * 80
        assert body["moodEntry"]["emoji"] == "🌧" * 40

    def test_text_stored_as_written(self, client, entry_payload):
        entry_payload["text"] = "  padded note  "
        entry_id = _create(client, entry_payload)["moodEntry"]["id"]
        r = client.get(f"/api/mood-entries/{entry_id}")
        assert r.json()["text"] == "  padded note  "


class TestListMoodEntries:
    def test_list_all_newest_first(self, client, entry_payload):
        first = _create(client, {**entry_payload, "text": "older entry"})["moodEntry"]
        second = _create(client, {**entry_payload, "text": "newer entry"})["moodEntry"]
        r = client.get("/api/mood-entries")
        assert r.status_code == 200
        ids = [e["id"] for e in r.json()]
        assert ids.index(second["id"]) < ids.index(first["id"])

    def test_recent_defaults_to_ten(self, client, entry_payload):
        for i in range(11):
            _create(client, {**entry_payload, "text": f"bulk entry {i}"})
        r = client.get("/api/mood-entries/recent")
        assert r.status_code == 200
        body = r.json()
        assert len(body) == 10
        assert body[0]["text"] == "bulk entry 10"

    def test_recent_respects_limit(self, client, entry_payload):
        for i in range(3):
            _create(client, {**entry_payload, "text": f"limited {i}"})
        r = client.get("/api/mood-entries/recent", params={"limit": 2})
        assert r.status_code == 200
        assert [e["text"] for e in r.json()] == ["limited 2", "limited 1"]

    def test_recent_rejects_bad_limit(self, client):
        r = client.get("/api/mood-entries/recent", params={"limit": 0})
        assert r.status_code == 400


class TestMoodEntryDetail:
    def test_detail_includes_reflection(self, client, entry_payload):
        created = _create(client, entry_payload)
        entry_id = created["moodEntry"]["id"]
        r = client.get(f"/api/mood-entries/{entry_id}")
        assert r.status_code == 200
        body = r.json()
        assert body["id"] == entry_id
        assert body["aiReflection"]["id"] == created["aiReflection"]["id"]

    def test_invalid_id_is_400_before_lookup(self, client, monkeypatch):
        def _boom(*args, **kwargs):
            raise AssertionError("lookup must not happen")

        monkeypatch.setattr(mood_service, "get_mood_entry_detail", _boom)
        r = client.get("/api/mood-entries/not-an-id")
        assert r.status_code == 400
        assert r.json()["code"] == "INVALID_ID"
        assert r.json()["message"] == "Invalid mood entry ID"

    def test_unknown_id_is_404(self, client):
        r = client.get(f"/api/mood-entries/{UNKNOWN_ID}")
        assert r.status_code == 404
        assert r.json()["code"] == "NOT_FOUND"

    def test_uppercase_id_is_accepted(self, client, entry_payload):
        entry_id = _create(client, entry_payload)["moodEntry"]["id"]
        r = client.get(f"/api/mood-entries/{entry_id.upper()}")
        assert r.status_code == 200
        assert r.json()["id"] == entry_id


class TestRecommendations:
    def test_lists_stored_batch(self, client, entry_payload):
        created = _create(client, entry_payload)
        entry_id = created["moodEntry"]["id"]
        r = client.get(f"/api/mood-entries/{entry_id}/recommendations")
        assert r.status_code == 200
        assert [x["id"] for x in r.json()] == [x["id"] for x in created["recommendations"]]

    def test_unknown_entry_gives_empty_list(self, client):
        r = client.get(f"/api/mood-entries/{UNKNOWN_ID}/recommendations")
        assert r.status_code == 200
        assert r.json() == []

    def test_invalid_id(self, client):
        r = client.get("/api/mood-entries/xyz/recommendations")
        assert r.status_code == 400

    def test_refresh_appends_new_batch(self, client, spotify, entry_payload):
        created = _create(client, entry_payload)
        entry_id = created["moodEntry"]["id"]
        r = client.post(f"/api/mood-entries/{entry_id}/refresh-recommendations")
        assert r.status_code == 200
        fresh = r.json()
        assert len(fresh) == 3
        all_recs = client.get(f"/api/mood-entries/{entry_id}/recommendations").json()
        assert len(all_recs) == 6

    def test_refresh_uses_stored_ratings(self, client, analyzer, spotify, entry_payload):
        entry_id = _create(client, entry_payload)["moodEntry"]["id"]
        client.post(f"/api/mood-entries/{entry_id}/refresh-recommendations")
        assert spotify.recommend_calls[-1] == (0.4, 0.7, None)
        assert len(analyzer.calls) == 1

    def test_refresh_unknown_entry(self, client):
        r = client.post(f"/api/mood-entries/{UNKNOWN_ID}/refresh-recommendations")
        assert r.status_code == 404

    def test_refresh_invalid_id(self, client):
        r = client.post("/api/mood-entries/123/refresh-recommendations")
        assert r.status_code == 400


class TestPlaylists:
    def test_save_and_list(self, client, entry_payload):
        ids = [_create(client, entry_payload)["moodEntry"]["id"] for _ in range(2)]
        r = client.post("/api/playlists/save", json={
            "name": "Rainy Sunday",
            "description": "slow songs",
            "moodEntryIds": ids,
        })
        assert r.status_code == 200
        playlist = r.json()
        assert playlist["moodEntryIds"] == ids
        assert playlist["description"] == "slow songs"

        listed = client.get("/api/playlists").json()
        assert listed[0]["id"] == playlist["id"]

    def test_description_optional(self, client):
        r = client.post("/api/playlists/save", json={"name": "Empty", "moodEntryIds": []})
        assert r.status_code == 200
        assert r.json()["description"] is None

    def test_long_name_kept_as_written(self, client):
        name = " " + "n" * 300 + " "
        r = client.post("/api/playlists/save", json={
            "name": name, "description": "d" * 3000, "moodEntryIds": [],
        })
        assert r.status_code == 200
        assert r.json()["name"] == name

    def test_blank_name_rejected(self, client):
        r = client.post("/api/playlists/save", json={"name": "   ", "moodEntryIds": []})
        assert r.status_code == 400

    def test_name_required(self, client):
        r = client.post("/api/playlists/save", json={"moodEntryIds": []})
        assert r.status_code == 400

    def test_malformed_entry_id_rejected(self, client):
        r = client.post("/api/playlists/save", json={"name": "Bad", "moodEntryIds": ["nope"]})
        assert r.status_code == 400
        assert r.json()["code"] == "VALIDATION_ERROR"


class TestAffirmation:
    def test_sends_truncated_recent_texts(self, client, analyzer, entry_payload):
        long_text = "x" * 80
        for _ in range(5):
            _create(client, {**entry_payload, "text": long_text})
        r = client.get("/api/affirmation")
        assert r.status_code == 200
        assert r.json() == {"affirmation": "You are allowed to take up space."}
        sent = analyzer.affirmation_calls[-1]
        assert sent == ["x" * 50] * 5


class TestSpotifyProxy:
    @pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
    def test_search_requires_query(self, client, spotify, params):
        r = client.get("/api/spotify/search", params=params)
        assert r.status_code == 400
        assert r.json()["code"] == "MISSING_QUERY"
        assert spotify.search_calls == []

    def test_search_default_limit(self, client, spotify):
        r = client.get("/api/spotify/search", params={"q": "bon iver"})
        assert r.status_code == 200
        assert r.json()[0]["id"] == "track0"
        assert spotify.search_calls == [("bon iver", 10)]

    def test_search_custom_limit(self, client, spotify):
        client.get("/api/spotify/search", params={"q": "lofi", "limit": 5})
        assert spotify.search_calls == [("lofi", 5)]

    def test_genres(self, client):
        r = client.get("/api/spotify/genres")
        assert r.status_code == 200
        assert r.json() == ["acoustic", "pop", "rock"]

    def test_search_failure_is_500(self, client, spotify):
        spotify.fail_with = RuntimeError("spotify unreachable")
        r = client.get("/api/spotify/search", params={"q": "bon iver"})
        assert r.status_code == 500
        body = r.json()
        assert body["code"] == "OPERATION_FAILED"
        assert body["message"] == "Failed to search tracks"
        assert body["details"]["error"] == "spotify unreachable"

    def test_genres_failure_is_500(self, client, spotify):
        spotify.fail_with = RuntimeError("spotify unreachable")
        r = client.get("/api/spotify/genres")
        assert r.status_code == 500
        body = r.json()
        assert body["message"] == "Failed to retrieve genres"
        assert body["details"]["error"] == "spotify unreachable"
