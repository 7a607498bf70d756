"""Tests for the HTTP surface (api.py) using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from api import create_app


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


class TestInteractions:
    def test_post_interaction_updates_context(self, client):
        resp = client.post("/api/sessions/s1/interactions", json={
            "user_message": "I want to book a hotel in Dubai",
            "ai_response": "Sure.",
            "language": "en",
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["total_interactions"] == 1
        assert body["context"]["conversation_flow"] == "booking"
        assert body["context"]["current_topic"] == "accommodation"
        assert body["interaction"]["destinations"] == ["Gulf Countries"]
        assert body["interaction"]["travel_type"] == "leisure"
        assert body["language_notice"] == ""

    def test_inferred_travel_type(self, client):
        body = client.post("/api/sessions/s1/interactions", json={"user_message": "Umrah trip to Mecca"}).json()
        assert body["interaction"]["travel_type"] == "religious"
        assert body["interaction"]["destinations"] == ["Saudi Arabia"]

    def test_caller_fields_win(self, client):
        body = client.post("/api/sessions/s1/interactions", json={
            "user_message": "Umrah trip to Mecca",
            "travel_type": "family",
            "destinations": ["Medina"],
        }).json()
        assert body["interaction"]["travel_type"] == "family"
        assert body["interaction"]["destinations"] == ["Medina"]

    def test_language_switch_notice(self, client):
        client.post("/api/sessions/s1/interactions", json={"user_message": "hello"})
        body = client.post("/api/sessions/s1/interactions", json={
            "user_message": "مرحبا", "language": "ar",
        }).json()
        assert "Arabic" in body["language_notice"]
        assert body["context"]["has_language_mixed"] is True

    def test_missing_message_is_rejected(self, client):
        assert client.post("/api/sessions/s1/interactions", json={}).status_code == 422

    def test_recent_interactions(self, client):
        for i in range(3):
            client.post("/api/sessions/s1/interactions", json={"user_message": f"m{i}"})
        resp = client.get("/api/sessions/s1/interactions", params={"count": 2})
        assert [i["user_message"] for i in resp.json()["interactions"]] == ["m1", "m2"]
        assert client.get("/api/sessions/s1/interactions", params={"count": -1}).status_code == 422


class TestSessions:
    def test_get_creates_with_locale_defaults(self, client):
        body = client.get("/api/sessions/s-ar", params={"locale": "ar"}).json()
        assert body["preferred_language"] == "ar"
        assert body["cultural_preferences"]["gender_separation"] is True
        assert body["total_interactions"] == 0

    def test_greeting_and_suggestions(self, client):
        assert client.get("/api/sessions/s1/greeting").json()["greeting"] == "Welcome to your AI travel assistant!"

        client.post("/api/sessions/s1/interactions", json={"user_message": "hotel please"})
        client.patch("/api/sessions/s1/preferences/personal", json={"name": "Layla"})
        assert client.get("/api/sessions/s1/greeting").json()["greeting"].startswith("Welcome back Layla")

        body = client.get("/api/sessions/s1/suggestions").json()
        assert body["suggestions"] == ["Recommend family-friendly hotels"]
        assert body["starters"] == []

    def test_starters_when_nothing_to_suggest(self, client):
        body = client.get("/api/sessions/fresh/suggestions", params={"locale": "ar"}).json()
        assert body["suggestions"] == []
        assert len(body["starters"]) == 5

    def test_patch_preferences(self, client):
        personal = client.patch("/api/sessions/s1/preferences/personal", json={"interests": ["culture"]}).json()
        assert personal["interests"] == ["culture"]
        cultural = client.patch("/api/sessions/s1/preferences/cultural", json={"alcohol_free": False}).json()
        assert cultural["alcohol_free"] is False

    def test_patch_context(self, client):
        body = client.patch("/api/sessions/s1/context", json={"user_mood": "curious"}).json()
        assert body["user_mood"] == "curious"

    def test_delete(self, client):
        client.post("/api/sessions/s1/interactions", json={"user_message": "hi"})
        assert client.delete("/api/sessions/s1").json() == {"cleared": True}
        assert client.delete("/api/sessions/s1").json() == {"cleared": False}

    def test_export_and_import(self, client):
        assert client.get("/api/sessions/nobody/export").status_code == 404

        client.post("/api/sessions/s1/interactions", json={"user_message": "hotel"})
        exported = client.get("/api/sessions/s1/export").json()
        exported["session_id"] = "s2"
        assert client.post("/api/sessions/import", json=exported).json() == {"imported": "s2"}
        assert client.get("/api/sessions/s2/export").json()["conversation_context"]["current_topic"] == "accommodation"

    def test_import_rejects_malformed_record(self, client):
        assert client.post("/api/sessions/import", json={"nope": 1}).status_code == 422


class TestCulturalContext:
    def test_for_date(self, client):
        body = client.get("/api/cultural-context", params={"locale": "en", "date": "2026-09-20"}).json()
        assert body["active_season"]["id"] == "autumn"
        assert body["active_holidays"][0]["id"] == "saudi-national-day"

    def test_bad_date(self, client):
        assert client.get("/api/cultural-context", params={"date": "soon"}).status_code == 422


class TestRegions:
    def test_list_regions(self, client):
        body = client.get("/api/regions", params={"locale": "ar"}).json()
        assert [r["id"] for r in body["regions"]] == ["riyadh", "mecca"]
        assert body["regions"][1]["name"] == "منطقة مكة المكرمة"

    def test_filter_by_id(self, client):
        body = client.get("/api/regions", params={"id": "riyadh"}).json()
        assert [r["name"] for r in body["regions"]] == ["Riyadh Region"]
        assert client.get("/api/regions", params={"id": "nowhere"}).json() == {"regions": []}
