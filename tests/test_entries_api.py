from uuid import UUID

from journal_coach.analysis.strategies import analyze_coping_strategies
from journal_coach.journals.models import Entry


class TestEntries:
    def test_create_and_list_newest_first(self, client, auth_headers):
        first = client.post(
            "/api/entries",
            json={"content": "First entry", "mood": "😊 Happy", "tags": ["morning"]},
            headers=auth_headers,
        )
        assert first.status_code == 201
        body = first.json()
        assert body["mood"] == "😊 Happy"
        assert body["tags"] == ["morning"]
        assert body["aiInsight"] is None
        assert body["moodFollowUp"] is None

        client.post("/api/entries", json={"content": "Second entry"}, headers=auth_headers)
        listed = client.get("/api/entries", headers=auth_headers).json()
        assert [e["content"] for e in listed] == ["Second entry", "First entry"]

    def test_rejects_blank_content(self, client, auth_headers):
        response = client.post("/api/entries", json={"content": "   "}, headers=auth_headers)
        assert response.status_code == 422

    def test_rejects_unknown_mood(self, client, auth_headers):
        response = client.post(
            "/api/entries", json={"content": "Hi", "mood": "🤖 Robotic"}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_mood_label_without_emoji_is_accepted(self, client, auth_headers):
        response = client.post(
            "/api/entries", json={"content": "Hi", "mood": "Anxious"}, headers=auth_headers
        )
        assert response.status_code == 201

    def test_tags_are_deduplicated(self, client, auth_headers):
        response = client.post(
            "/api/entries",
            json={"content": "Hi", "tags": ["Work", "work ", "", "sleep"]},
            headers=auth_headers,
        )
        assert response.json()["tags"] == ["Work", "sleep"]

    def test_get_and_delete(self, client, auth_headers):
        entry_id = client.post("/api/entries", json={"content": "To delete"}, headers=auth_headers).json()["id"]
        assert client.get(f"/api/entries/{entry_id}", headers=auth_headers).status_code == 200

        deleted = client.delete(f"/api/entries/{entry_id}", headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.json()["success"] is True
        assert client.get(f"/api/entries/{entry_id}", headers=auth_headers).status_code == 404
        assert client.delete(f"/api/entries/{entry_id}", headers=auth_headers).status_code == 404

    def test_entries_are_private(self, client, auth_headers, login_user):
        entry_id = client.post("/api/entries", json={"content": "Mine"}, headers=auth_headers).json()["id"]
        other = {"Authorization": f"Bearer {login_user('+44 7700 900123')['token']}"}

        assert client.get("/api/entries", headers=other).json() == []
        assert client.get(f"/api/entries/{entry_id}", headers=other).status_code == 404
        assert client.delete(f"/api/entries/{entry_id}", headers=other).status_code == 404
        assert client.post(
            f"/api/mood-followup/{entry_id}",
            json={"question": "feeling_better", "answer": "yes"},
            headers=other,
        ).status_code == 404


class TestMoodFollowUp:
    def test_answers_are_merged(self, client, auth_headers):
        entry_id = client.post("/api/entries", json={"content": "Long day"}, headers=auth_headers).json()["id"]
        client.post(
            f"/api/mood-followup/{entry_id}",
            json={"question": "feeling_better", "answer": "no"},
            headers=auth_headers,
        )
        client.post(
            f"/api/mood-followup/{entry_id}",
            json={"question": "what_helped", "answer": "a walk"},
            headers=auth_headers,
        )
        response = client.post(
            f"/api/mood-followup/{entry_id}",
            json={"question": "feeling_better", "answer": "yes"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["moodFollowUp"] == {"feeling_better": "yes", "what_helped": "a walk"}

        entry = client.get(f"/api/entries/{entry_id}", headers=auth_headers).json()
        assert entry["moodFollowUp"] == {"feeling_better": "yes", "what_helped": "a walk"}

    def test_blank_question_is_rejected(self, client, auth_headers):
        entry_id = client.post("/api/entries", json={"content": "Long day"}, headers=auth_headers).json()["id"]
        response = client.post(
            f"/api/mood-followup/{entry_id}",
            json={"question": "   ", "answer": "yes"},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert client.get(f"/api/entries/{entry_id}", headers=auth_headers).json()["moodFollowUp"] is None

    def test_stored_follow_up_feeds_strategy_extraction(self, client, auth_headers, db):
        entry_id = client.post(
            "/api/entries",
            json={"content": "I tried going for a long run after work."},
            headers=auth_headers,
        ).json()["id"]
        response = client.post(
            f"/api/mood-followup/{entry_id}",
            json={"question": "feeling_better", "answer": "yes"},
            headers=auth_headers,
        )
        assert response.status_code == 200

        db.expire_all()
        entry = db.get(Entry, UUID(entry_id))
        stats = analyze_coping_strategies([entry])
        assert list(stats) == ["Physical Activity"]
        assert (stats["Physical Activity"].attempts, stats["Physical Activity"].successes) == (1, 1)

    def test_unknown_entry(self, client, auth_headers):
        response = client.post(
            "/api/mood-followup/00000000-0000-0000-0000-000000000000",
            json={"question": "feeling_better", "answer": "yes"},
            headers=auth_headers,
        )
        assert response.status_code == 404


class TestAnalytics:
    def test_mood_counts(self, client, auth_headers):
        for mood in ["😊 Happy", "😊 Happy", "😔 Sad", None]:
            client.post("/api/entries", json={"content": "x", "mood": mood}, headers=auth_headers)
        response = client.get("/api/analytics/mood", headers=auth_headers)
        assert response.json() == {"😊 Happy": 2, "😔 Sad": 1}

    def test_insights_only_include_entries_with_insight(self, client, auth_headers):
        ids = [
            client.post("/api/entries", json={"content": f"Work deadline {i}"}, headers=auth_headers).json()["id"]
            for i in range(7)
        ]
        assert client.get("/api/insights", headers=auth_headers).json() == []

        for entry_id in ids[:6]:
            client.post(f"/api/coaching/{entry_id}", headers=auth_headers)
        insights = client.get("/api/insights", headers=auth_headers).json()
        assert len(insights) == 5
        assert all(e["aiInsight"] for e in insights)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["databaseUrl"] == "Set"
    assert "uptime" in data and "timestamp" in data
    assert "database_url" not in data

    operation = client.get("/openapi.json").json()["paths"]["/health"]["get"]
    assert operation["summary"] == "Service status"
