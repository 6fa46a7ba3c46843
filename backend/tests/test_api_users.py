"""
Postboard Backend — User Endpoint Tests
=========================================

What:  Registration, login and myPosts through the HTTP API.
How:   Real app + SQLite via the `test_client` fixture.

What we test:
    ✅ Register returns the public user (no password hash)
    ✅ Same e-mail twice → 409 duplicate_user (case/whitespace-insensitive)
    ✅ Wrong password / unknown e-mail → 401 invalid_credentials
    ✅ Correct credentials → token usable on /api/user/myPosts
    ✅ Missing, garbage, expired and orphaned tokens → 401
    ✅ Form-encoded bodies accepted like JSON
    ✅ A failed commit is a 500, never a 201
"""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.security import create_access_token


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_public_user(self, test_client):
        response = await test_client.post(
            "/api/user/",
            json={"email": "Ada@Example.com", "password": "secret-pw", "name": "Ada"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "ada@example.com"
        assert body["name"] == "Ada"
        uuid.UUID(body["id"])
        assert "password" not in body
        assert "hashed_password" not in body

    @pytest.mark.asyncio
    async def test_register_twice_is_duplicate(self, test_client):
        payload = {"email": "ada@example.com", "password": "secret-pw"}
        first = await test_client.post("/api/user/", json=payload)
        second = await test_client.post("/api/user/", json=payload)

        assert first.status_code == 201
        assert second.status_code == 409
        body = second.json()
        assert body["error"] == "duplicate_user"
        assert body["status_code"] == 409
        assert "ada@example.com" in body["message"]

    @pytest.mark.asyncio
    async def test_failed_commit_is_reported(self, test_client, monkeypatch):
        credentials = {"email": "ada@example.com", "password": "secret-pw"}

        async def failing_commit(self):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        with monkeypatch.context() as patch:
            patch.setattr(AsyncSession, "commit", failing_commit)
            response = await test_client.post("/api/user/", json=credentials)

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"

        login = await test_client.post("/api/user/login", json=credentials)
        assert login.status_code == 401

    @pytest.mark.asyncio
    async def test_register_and_login_with_form_fields(self, test_client):
        credentials = {"email": "ada@example.com", "password": "secret-pw"}
        registered = await test_client.post("/api/user/", data=credentials)
        login = await test_client.post("/api/user/login", data=credentials)

        assert registered.status_code == 201
        assert login.status_code == 200
        assert login.json()["user"]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_register_malformed_json(self, test_client):
        response = await test_client.post(
            "/api/user/", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_register_duplicate_ignores_case_and_spaces(self, test_client):
        await test_client.post(
            "/api/user/", json={"email": "ada@example.com", "password": "secret-pw"}
        )
        response = await test_client.post(
            "/api/user/", json={"email": "  ADA@example.COM ", "password": "other-pw"}
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_register_short_password_rejected(self, test_client):
        response = await test_client.post(
            "/api/user/", json={"email": "ada@example.com", "password": "123"}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        fields = [e["field"] for e in body["details"]["errors"]]
        assert "body.password" in fields

    @pytest.mark.asyncio
    async def test_register_bad_email_rejected(self, test_client):
        response = await test_client.post(
            "/api/user/", json={"email": "not-an-email", "password": "secret-pw"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_token(self, test_client):
        await test_client.post(
            "/api/user/", json={"email": "ada@example.com", "password": "secret-pw"}
        )
        response = await test_client.post(
            "/api/user/login", json={"email": "ada@example.com", "password": "secret-pw"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["access_token"]
        assert body["expires_in"] > 0
        assert body["user"]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_client):
        await test_client.post(
            "/api/user/", json={"email": "ada@example.com", "password": "secret-pw"}
        )
        response = await test_client.post(
            "/api/user/login", json={"email": "ada@example.com", "password": "wrong-pw"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_login_unknown_email_same_as_wrong_password(self, test_client):
        await test_client.post(
            "/api/user/", json={"email": "ada@example.com", "password": "secret-pw"}
        )
        wrong_pw = await test_client.post(
            "/api/user/login", json={"email": "ada@example.com", "password": "wrong-pw"}
        )
        unknown = await test_client.post(
            "/api/user/login", json={"email": "bob@example.com", "password": "secret-pw"}
        )

        assert unknown.status_code == 401
        assert unknown.json()["message"] == wrong_pw.json()["message"]


class TestMyPosts:

    @pytest.mark.asyncio
    async def test_token_from_login_is_usable(self, test_client, register_and_login):
        headers = await register_and_login("ada@example.com")
        response = await test_client.get("/api/user/myPosts", headers=headers)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_missing_token(self, test_client):
        response = await test_client.get("/api/user/myPosts")

        assert response.status_code == 401
        body = response.json()
        assert body["error"] == "unauthorized"
        assert body["message"] == "Missing bearer token"

    @pytest.mark.asyncio
    async def test_garbage_token(self, test_client):
        response = await test_client.get(
            "/api/user/myPosts", headers={"Authorization": "Bearer not.a.jwt"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_expired_token(self, test_client, test_settings):
        token = create_access_token(
            uuid.uuid4(), test_settings, expires_delta=timedelta(seconds=-30)
        )
        response = await test_client.get(
            "/api/user/myPosts", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401
        assert "expired" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_token_for_unknown_user(self, test_client, test_settings):
        token = create_access_token(uuid.uuid4(), test_settings)
        response = await test_client.get(
            "/api/user/myPosts", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_lists_newest_first(self, test_client, register_and_login):
        headers = await register_and_login("ada@example.com")
        for title in ("first", "second", "third"):
            response = await test_client.post(
                "/api/post/create", json={"title": title, "body": "text"}, headers=headers
            )
            assert response.status_code == 201

        response = await test_client.get("/api/user/myPosts", headers=headers)
        titles = [post["title"] for post in response.json()]
        assert titles == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_posts_are_scoped_to_caller(self, test_client, register_and_login):
        ada = await register_and_login("ada@example.com")
        bob = await register_and_login("bob@example.com")

        await test_client.post(
            "/api/post/create", json={"title": "Ada's", "body": "mine"}, headers=ada
        )

        ada_posts = (await test_client.get("/api/user/myPosts", headers=ada)).json()
        bob_posts = (await test_client.get("/api/user/myPosts", headers=bob)).json()
        assert [p["title"] for p in ada_posts] == ["Ada's"]
        assert bob_posts == []
