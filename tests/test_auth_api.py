from datetime import timedelta
from uuid import uuid4

import pytest

import journal_coach.auth.service as auth_service
from journal_coach.auth.db import create_user, get_phone_candidates
from journal_coach.auth.models import User
from journal_coach.auth.service import create_token
from journal_coach.journals.models import Entry


class TestOTPLogin:
    def test_send_otp_returns_demo_code(self, client, otp_store):
        response = client.post("/api/auth/send-otp", json={"phoneNumber": "+1 555 010 9999"})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["demoOTP"] == otp_store.get("15550109999").code

    def test_send_otp_rejects_bad_phone(self, client):
        response = client.post("/api/auth/send-otp", json={"phoneNumber": "12ab"})
        assert response.status_code == 400

    def test_verify_creates_user_with_canonical_phone(self, login_user, db):
        data = login_user("+1 (555) 010-9999")
        assert data["success"] is True
        assert data["token"]
        assert data["user"]["phoneNumber"] == "15550109999"
        assert db.query(User).count() == 1

    def test_second_login_reuses_user(self, login_user, db):
        first = login_user("+1 (555) 010-9999")
        second = login_user("15550109999")
        assert first["user"]["id"] == second["user"]["id"]
        assert db.query(User).count() == 1

    def test_wrong_code(self, client):
        client.post("/api/auth/send-otp", json={"phoneNumber": "15550109999"})
        response = client.post(
            "/api/auth/verify-otp", json={"phoneNumber": "15550109999", "otp": "000000x"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid OTP"

    def test_code_without_send(self, client):
        response = client.post(
            "/api/auth/verify-otp", json={"phoneNumber": "15550109999", "otp": "123456"}
        )
        assert response.status_code == 400

    def test_expired_code_is_removed(self, client, otp_store):
        otp_store.ttl = timedelta(seconds=-1)
        code = client.post("/api/auth/send-otp", json={"phoneNumber": "15550109999"}).json()["demoOTP"]
        response = client.post(
            "/api/auth/verify-otp", json={"phoneNumber": "15550109999", "otp": code}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "OTP expired"
        assert otp_store.get("15550109999") is None

    def test_code_is_single_use(self, client):
        code = client.post("/api/auth/send-otp", json={"phoneNumber": "15550109999"}).json()["demoOTP"]
        payload = {"phoneNumber": "15550109999", "otp": code}
        assert client.post("/api/auth/verify-otp", json=payload).status_code == 200
        assert client.post("/api/auth/verify-otp", json=payload).status_code == 400

    def test_duplicate_users_are_merged(self, client, login_user, db, days_ago):
        older = create_user(db, phone_number="+1 555 010 9999", created_at=days_ago(30))
        newer = create_user(db, phone_number="1-555-010-9999", created_at=days_ago(2))
        db.add(Entry(user_id=newer.id, content="Kept after merge", tags=[]))
        db.commit()

        data = login_user("15550109999")

        assert data["user"]["id"] == str(older.id)
        assert data["user"]["phoneNumber"] == "15550109999"
        assert db.query(User).count() == 1
        assert db.query(Entry).one().user_id == older.id

    def test_numbers_with_trailing_formatting_are_merged(self, login_user, db, days_ago):
        older = create_user(db, phone_number="+1 555 010 9999 ", created_at=days_ago(30))
        newer = create_user(db, phone_number="1 (555) 010-9999)", created_at=days_ago(2))
        other = create_user(db, phone_number="+1 555 010 9990", created_at=days_ago(40))

        candidates = {u.id for u in get_phone_candidates(db, "15550109999")}
        assert {older.id, newer.id} <= candidates
        assert other.id not in candidates

        data = login_user("15550109999")
        assert data["user"]["id"] == str(older.id)
        assert db.query(User).count() == 2


class TestGoogleLogin:
    def test_trusts_client_profile_without_client_id(self, client, db):
        payload = {
            "googleToken": "ignored",
            "userInfo": {"googleId": "g-123", "email": "Ada@Example.com", "name": "Ada"},
        }
        first = client.post("/api/auth/google", json=payload)
        second = client.post("/api/auth/google", json=payload)
        assert first.status_code == 200
        assert first.json()["user"]["email"] == "ada@example.com"
        assert first.json()["user"]["id"] == second.json()["user"]["id"]
        assert db.query(User).count() == 1

    def test_requires_google_id(self, client):
        response = client.post("/api/auth/google", json={"userInfo": {"email": "x@example.com"}})
        assert response.status_code == 400

    def test_verified_token_claims_win(self, client, monkeypatch):
        monkeypatch.setattr(auth_service, "GOOGLE_CLIENT_ID", "client-1")
        monkeypatch.setattr(
            auth_service,
            "verify_google_token",
            lambda token: {"sub": "g-verified", "email": "real@example.com", "aud": "client-1"},
        )
        response = client.post(
            "/api/auth/google",
            json={"googleToken": "tok", "userInfo": {"googleId": "spoofed"}},
        )
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "real@example.com"

    def test_missing_token_when_verification_enabled(self, client, monkeypatch):
        monkeypatch.setattr(auth_service, "GOOGLE_CLIENT_ID", "client-1")
        response = client.post("/api/auth/google", json={"userInfo": {"googleId": "g-1"}})
        assert response.status_code == 400


class TestBearerAuth:
    def test_missing_token_is_401(self, client):
        assert client.get("/api/auth/me").status_code == 401
        assert client.get("/api/entries").status_code == 401

    def test_invalid_token_is_403(self, client):
        headers = {"Authorization": "Bearer not-a-jwt"}
        assert client.get("/api/auth/me", headers=headers).status_code == 403

    def test_expired_token_is_403(self, client, db):
        user = create_user(db, phone_number="15550109999")
        token = create_token(user.id, expires_delta=timedelta(seconds=-10))
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_token_for_deleted_user_is_404(self, client):
        token = create_token(uuid4())
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404

    def test_me(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["phoneNumber"] == "15551234567"

    def test_logout_needs_no_token(self, client):
        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json()["success"] is True


class TestProfile:
    def test_update_changes_only_provided_fields(self, client, auth_headers):
        client.put("/api/auth/profile", json={"name": "Sam", "location": "Lisbon"}, headers=auth_headers)
        response = client.put(
            "/api/auth/profile", json={"occupation": "Nurse", "name": ""}, headers=auth_headers
        )
        assert response.status_code == 200
        profile = client.get("/api/auth/profile", headers=auth_headers).json()
        assert profile["name"] == "Sam"
        assert profile["location"] == "Lisbon"
        assert profile["occupation"] == "Nurse"
        assert profile["dateOfBirth"] is None

    def test_delete_account_removes_entries(self, client, auth_headers, db):
        client.post("/api/entries", json={"content": "Something to remember"}, headers=auth_headers)
        response = client.delete("/api/auth/account", headers=auth_headers)
        assert response.status_code == 200
        assert db.query(User).count() == 0
        assert db.query(Entry).count() == 0
        assert client.get("/api/auth/me", headers=auth_headers).status_code == 404


@pytest.mark.parametrize("path", ["/api/auth/profile", "/api/insights", "/api/analytics/mood"])
def test_user_scoped_endpoints_require_token(client, path):
    assert client.get(path).status_code == 401
