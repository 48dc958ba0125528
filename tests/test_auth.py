# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# Tests for login/logout, the signed session cookie and key rotation.
# =============================================================================

import base64
import json

import itsdangerous
import pytest

from app.auth.dependencies import read_session_user
from app.auth.models import SessionUser


def _signed_cookie(session: dict, key: str) -> str:
    """Build a session cookie the way the middleware does, with a chosen key."""
    payload = base64.b64encode(json.dumps(session).encode("utf-8"))
    return itsdangerous.TimestampSigner(key).sign(payload).decode("utf-8")


# =============================================================================
# read_session_user Tests
# =============================================================================

class TestReadSessionUser:
    """Tests for turning raw session data into a SessionUser."""

    def test_valid_session(self):
        assert read_session_user({"name": "alice", "user_id": 3}) == SessionUser(user_id=3, name="alice")

    @pytest.mark.parametrize(
        "session",
        [
            {},
            {"name": "alice"},
            {"user_id": 3},
            {"name": "", "user_id": 3},
            {"name": "alice", "user_id": "not-a-number"},
        ],
    )
    def test_incomplete_sessions_are_anonymous(self, session):
        assert read_session_user(session) is None


# =============================================================================
# Login / Logout Tests
# =============================================================================

class TestLogin:
    """Tests for POST /auth/login and GET /auth/me."""

    async def test_login_page_renders(self, client):
        response = await client.get("/auth/login")

        assert response.status_code == 200
        assert 'name="username"' in response.text

    async def test_login_sets_session(self, client, seed):
        user_id = await seed.user("alice", super_seller=True)

        response = await client.post("/auth/login", data={"username": "alice"})

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert "session" in response.cookies

        me = await client.get("/auth/me")
        assert me.status_code == 200
        assert me.json() == {
            "user_id": user_id,
            "username": "alice",
            "email": "alice@example.com",
            "super_seller": True,
        }

    async def test_unknown_user_rejected(self, client):
        response = await client.post("/auth/login", data={"username": "nobody"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_LOGIN"

    async def test_injection_username_is_just_unknown(self, client, seed):
        await seed.user("alice")

        response = await client.post("/auth/login", data={"username": "' OR '1'='1"})

        assert response.status_code == 401
        assert (await client.get("/auth/me")).status_code == 401

    async def test_empty_username_is_validation_error(self, client):
        response = await client.post("/auth/login", data={"username": ""})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_me_requires_login(self, client):
        response = await client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["code"] == "NOT_AUTHENTICATED"

    async def test_me_for_deleted_user(self, client, seed, login, db):
        user_id = await seed.user("alice")
        await login("alice")
        await db.query("DELETE FROM users WHERE id = :id", {"id": user_id})

        response = await client.get("/auth/me")

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    async def test_logout_clears_session(self, client, seed, login):
        await seed.user("alice")
        await login("alice")

        response = await client.post("/auth/logout")

        assert response.status_code == 303
        assert (await client.get("/auth/me")).status_code == 401

    async def test_logout_link_does_not_end_session(self, client, seed, login):
        """Logging out changes state, so only POST is accepted."""
        await seed.user("alice")
        await login("alice")

        response = await client.get("/auth/logout")

        assert response.status_code == 405
        assert (await client.get("/auth/me")).status_code == 200


# =============================================================================
# Session Cookie Tests
# =============================================================================

class TestSessionCookie:
    """Tests for cookie signing and key rotation."""

    async def test_cookie_signed_with_current_key(self, client, seed, login):
        await seed.user("alice")
        response = await login("alice")

        cookie = response.cookies["session"]
        signer = itsdangerous.TimestampSigner("test-signing-key-0001")
        payload = json.loads(base64.b64decode(signer.unsign(cookie)))
        assert payload["name"] == "alice"

    async def test_cookie_signed_with_previous_key_is_accepted(self, client, seed):
        user_id = await seed.user("alice")
        client.cookies.set(
            "session",
            _signed_cookie({"name": "alice", "user_id": user_id}, "test-previous-key-0002"),
        )

        response = await client.get("/auth/me")

        assert response.status_code == 200
        assert response.json()["username"] == "alice"

    async def test_cookie_signed_with_unknown_key_is_ignored(self, client, seed):
        user_id = await seed.user("alice")
        client.cookies.set(
            "session",
            _signed_cookie({"name": "alice", "user_id": user_id}, "some-attacker-chosen-key"),
        )

        response = await client.get("/auth/me")

        assert response.status_code == 401

    async def test_tampered_cookie_is_ignored(self, client, seed, login):
        await seed.user("alice")
        response = await login("alice")
        cookie = response.cookies["session"]

        forged = base64.b64encode(json.dumps({"name": "mallory", "user_id": 1}).encode()).decode()
        client.cookies.clear()
        client.cookies.set("session", forged + cookie[cookie.index("."):])

        assert (await client.get("/auth/me")).status_code == 401
